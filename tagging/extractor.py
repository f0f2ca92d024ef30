"""
High-level orchestrator for Haskell tag generation.

This module provides the main entry points for tagging single files or
entire directory trees. Every module is parsed and tagged independently and
the results are concatenated in input order.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from core.structured_logging import file_scope
from core.tags_config import TagsConfig
from tagging.errors import TaggingError
from tagging.models import Tag
from tagging.parser import count_error_nodes, lower_tree, parse_file, split_lines
from tagging.serializer import tag_to_string
from tagging.traversal import create_tags

logger = logging.getLogger(__name__)


@dataclass
class FileTaggingDiagnostics:
    """Per-file tagging diagnostics."""

    tags: List[Tag]
    parse_error_count: int


class TaggingStats:
    """Statistics for a tagging run."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.tags_emitted = 0
        self.parse_errors = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "tags_emitted": self.tags_emitted,
            "parse_errors": self.parse_errors,
        }

    def __str__(self) -> str:
        return (
            f"TaggingStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, tags={self.tags_emitted}, "
            f"parse_errors={self.parse_errors})"
        )


def _tag_file_with_diagnostics(
    file_path: str,
    extensions: Sequence[str],
) -> FileTaggingDiagnostics:
    """Tag a single file, keeping its parse diagnostics."""
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    ext = os.path.splitext(file_path)[1]
    if ext not in extensions:
        raise ValueError(
            f"File {file_path} is not a Haskell source file. "
            f"Expected one of: {sorted(extensions)}"
        )

    with file_scope(file_path):
        tree, source_bytes = parse_file(file_path)
        parse_error_count = count_error_nodes(tree)

        if tree.root_node.has_error:
            logger.warning(
                "File %s contains syntax errors (%d error nodes)",
                file_path,
                parse_error_count,
            )

        module = lower_tree(tree, source_bytes, file_path)
        file_lines = split_lines(source_bytes.decode("utf-8", errors="replace"))
        tags = create_tags(module, file_lines)
        logger.info("Created %d tags from %s", len(tags), file_path)

    return FileTaggingDiagnostics(tags=tags, parse_error_count=parse_error_count)


def tag_file(file_path: str, config: Optional[TagsConfig] = None) -> List[Tag]:
    """Create all tags of a single Haskell source file.

    Args:
        file_path: Path to the .hs file. Recorded verbatim in every tag.
        config: Tagging configuration. Defaults to ``TagsConfig()``.

    Returns:
        Tags of the module in source order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a Haskell source file.
        UnsupportedModuleError: If the module form cannot be tagged.

    Example:
        >>> tags = tag_file("src/Data/Tree.hs")
        >>> tags[0].kind.value
        'module'
    """
    config = config or TagsConfig()
    try:
        return _tag_file_with_diagnostics(file_path, config.extensions).tags
    except Exception as e:
        logger.error("Error tagging %s: %s", file_path, e)
        raise


def discover_haskell_files(
    directory: str,
    extensions: Iterable[str],
    exclude_dirs: Iterable[str] = (),
) -> List[str]:
    """Recursively discover all Haskell source files in a directory.

    Args:
        directory: Root directory to search.
        extensions: File extensions to accept, with leading dot.
        exclude_dirs: Directory names never descended into.

    Returns:
        Sorted list of file paths rooted at ``directory``.
    """
    extensions = set(extensions)
    excluded = set(exclude_dirs)
    haskell_files = []

    logger.info("Discovering Haskell files in %s", directory)

    for root, dirs, files in os.walk(directory):
        # Skip hidden directories and build output
        dirs[:] = [d for d in dirs if not d.startswith(".") and d not in excluded]

        for file in files:
            ext = os.path.splitext(file)[1]
            if ext in extensions:
                haskell_files.append(os.path.join(root, file))

    logger.info("Found %d Haskell files", len(haskell_files))
    return sorted(haskell_files)


def _expand_paths(paths: Iterable[str], config: TagsConfig) -> List[str]:
    files: List[str] = []
    for path in paths:
        if os.path.isdir(path):
            files.extend(
                discover_haskell_files(path, config.extensions, config.exclude_dirs)
            )
        else:
            files.append(path)
    return files


def iter_file_tags(
    paths: Iterable[str],
    config: Optional[TagsConfig] = None,
    stats: Optional[TaggingStats] = None,
) -> Iterator[Tuple[str, List[Tag]]]:
    """Yield ``(file_path, tags)`` per module, in input order.

    Args:
        paths: Files and directories to tag.
        config: Tagging configuration.
        stats: Updated in place when given.

    Raises:
        FileNotFoundError, ValueError, TaggingError: For a failing module,
            unless ``config.continue_on_error`` is set.
    """
    config = config or TagsConfig()
    stats = stats if stats is not None else TaggingStats()

    for file_path in _expand_paths(paths, config):
        try:
            diagnostics = _tag_file_with_diagnostics(file_path, config.extensions)
        except FileNotFoundError as e:
            logger.error("File not found: %s", e)
            stats.files_failed += 1
            if not config.continue_on_error:
                raise
            continue
        except ValueError as e:
            logger.error("Invalid file: %s", e)
            stats.files_failed += 1
            if not config.continue_on_error:
                raise
            continue
        except TaggingError as e:
            logger.error("Cannot tag %s: %s", file_path, e)
            stats.files_failed += 1
            if not config.continue_on_error:
                raise
            continue
        except OSError as e:
            logger.error("Error reading %s: %s", file_path, e)
            stats.files_failed += 1
            if not config.continue_on_error:
                raise
            continue

        stats.files_processed += 1
        stats.tags_emitted += len(diagnostics.tags)
        stats.parse_errors += diagnostics.parse_error_count
        yield file_path, diagnostics.tags

    logger.info("Tagging complete: %s", stats)


def tag_paths(
    paths: Iterable[str],
    config: Optional[TagsConfig] = None,
) -> Tuple[List[Tag], TaggingStats]:
    """Tag every Haskell file under the given paths.

    Args:
        paths: Files and directories to process.
        config: Tagging configuration.

    Returns:
        A tuple of (tags, stats) where tags are concatenated per module in
        input order.
    """
    stats = TaggingStats()
    all_tags: List[Tag] = []
    for _, tags in iter_file_tags(paths, config, stats):
        all_tags.extend(tags)
    return all_tags, stats


def iter_tag_lines(
    paths: Iterable[str],
    config: Optional[TagsConfig] = None,
) -> Iterator[str]:
    """Stream serialized tag lines, one module at a time, without sorting."""
    for _, tags in iter_file_tags(paths, config):
        for tag in tags:
            yield tag_to_string(tag)
