#!/usr/bin/env python3
"""
Generate a ctags file for Haskell sources.

Each module is parsed and tagged independently; the combined tags are
optionally sorted and written as a ctags file or as JSONL.

Usage:
    python run_tags.py src/
    python run_tags.py src/ app/Main.hs -o tags
    python run_tags.py src/ --format jsonl -o out/tags.jsonl
    python run_tags.py Foo.hs --no-sort --no-header -o -
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from core.structured_logging import configure_structured_logging, set_run_id
from core.tags_config import (
    OUTPUT_FORMATS,
    ConfigValidationError,
    TagsConfig,
    load_tags_config,
    resolve_strict_config_validation,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Haskell ctags generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_tags.py src/ -o tags\n"
            "  python run_tags.py src/ --format jsonl -o out/tags.jsonl\n"
        ),
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="Haskell files or directories to tag.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="tags",
        help="Output file, or '-' for stdout. Default: tags",
    )
    parser.add_argument(
        "--format",
        choices=sorted(OUTPUT_FORMATS),
        default=None,
        help="Output format. Default: ctags",
    )
    parser.add_argument(
        "--no-sort",
        action="store_true",
        default=False,
        help="Keep source order instead of sorting by name.",
    )
    parser.add_argument(
        "--no-header",
        action="store_true",
        default=False,
        help="Omit the !_TAG_ pseudo-tag lines.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML or JSON configuration file.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on config errors and on the first module that cannot be tagged.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr diagnostics. Default: WARNING",
    )

    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> TagsConfig:
    """Merge config file, environment and command-line flags."""
    strict = args.strict if args.strict is not None else resolve_strict_config_validation()
    config = load_tags_config(args.config, strict=strict)

    overrides = {}
    if args.format is not None:
        overrides["output_format"] = args.format
    if args.no_sort:
        overrides["sort_output"] = False
    if args.no_header:
        overrides["emit_header"] = False
    if strict:
        overrides["continue_on_error"] = False
    return replace(config, **overrides)


def run(args: argparse.Namespace) -> int:
    """Tag the requested paths and write the output.

    Returns:
        Process exit code.
    """
    from tagging.errors import TaggingError
    from tagging.extractor import tag_paths
    from tagging.writer import format_tags_file, write_jsonl, write_tags

    try:
        config = resolve_config(args)
    except ConfigValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    try:
        tags, stats = tag_paths(args.paths, config)
    except (OSError, ValueError) as e:
        logger.error("File error: %s", e)
        return 1
    except TaggingError as e:
        logger.error("Cannot tag module: %s", e)
        return 1
    except Exception as e:
        logger.error("Tagging failed: %s", e, exc_info=True)
        return 1

    if stats.files_processed == 0:
        logger.error("No Haskell modules could be tagged: %s", stats)
        return 1

    if config.output_format == "jsonl":
        write_jsonl(tags, args.output)
    else:
        lines = format_tags_file(
            tags,
            sort=config.sort_output,
            header=config.emit_header,
        )
        write_tags(lines, args.output)

    logger.info("Final stats: %s", stats)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the tag generator."""
    args = parse_args(argv)
    configure_structured_logging(getattr(logging, args.log_level))
    run_id = set_run_id()
    logger.info("Starting tag run %s", run_id)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
