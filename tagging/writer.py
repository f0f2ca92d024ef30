"""
Writers for tag output files.

Sorting and pseudo-tag headers are applied here; the extractor and serializer
always work in source order.
"""

import json
import logging
import os
import sys
from typing import Iterable, List, Sequence

from tagging.config import PROGRAM_NAME
from tagging.models import Tag
from tagging.serializer import tag_to_string

logger = logging.getLogger(__name__)


def _sort_key(tag: Tag):
    # Byte order, as binary-searching readers expect
    return (tag.name.encode("utf-8"), tag.file.encode("utf-8"), tag.line)


def header_lines(sorted_output: bool) -> List[str]:
    """ctags pseudo-tags describing the file."""
    return [
        "!_TAG_FILE_FORMAT\t2\t//",
        f"!_TAG_FILE_SORTED\t{1 if sorted_output else 0}\t//",
        f"!_TAG_PROGRAM_NAME\t{PROGRAM_NAME}\t//",
    ]


def format_tags_file(
    tags: Sequence[Tag],
    sort: bool = True,
    header: bool = True,
) -> List[str]:
    """Build the lines of a tags file.

    Args:
        tags: Tags in source order.
        sort: Sort by name, file and line. The sort is stable.
        header: Prepend ctags pseudo-tag lines.

    Returns:
        Lines without terminators.
    """
    ordered = sorted(tags, key=_sort_key) if sort else list(tags)
    lines = header_lines(sort) if header else []
    lines.extend(tag_to_string(tag) for tag in ordered)
    return lines


def write_tags(lines: Iterable[str], output: str) -> int:
    """Write lines to ``output``; ``-`` means stdout.

    Returns:
        Number of lines written.
    """
    if output == "-":
        count = 0
        for line in lines:
            sys.stdout.write(line + "\n")
            count += 1
        sys.stdout.flush()
        return count

    parent = os.path.dirname(os.path.abspath(output))
    os.makedirs(parent, exist_ok=True)
    count = 0
    with open(output, "w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(line + "\n")
            count += 1
    logger.info("Wrote %d lines to %s", count, output)
    return count


def write_jsonl(tags: Iterable[Tag], output: str) -> int:
    """Write one JSON object per tag."""
    return write_tags(
        (json.dumps(tag.to_dict(), ensure_ascii=False) for tag in tags),
        output,
    )
