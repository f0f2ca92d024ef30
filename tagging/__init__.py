"""
Haskell tag generation.

Turns parsed Haskell modules into ctags records for editor navigation:
modules, imports, type synonyms, data types, newtypes, constructors and
type signatures.
"""

from tagging.errors import TaggingError, UnsupportedModuleError
from tagging.models import Tag, TagAccess, TagKind
from tagging.rendering import render_type
from tagging.serializer import tag_to_string, tags_to_strings
from tagging.traversal import create_tags, import_access
from tagging.parser import create_parser, parse_bytes, parse_file, parse_module, lower_tree
from tagging.extractor import (
    tag_file,
    tag_paths,
    iter_file_tags,
    iter_tag_lines,
    discover_haskell_files,
    TaggingStats,
)
from tagging.writer import format_tags_file, write_jsonl, write_tags

__all__ = [
    # Data models
    "Tag",
    "TagAccess",
    "TagKind",
    "TaggingStats",
    # Errors
    "TaggingError",
    "UnsupportedModuleError",
    # Core extraction and serialization
    "create_tags",
    "import_access",
    "render_type",
    "tag_to_string",
    "tags_to_strings",
    # Parsing
    "create_parser",
    "parse_bytes",
    "parse_file",
    "parse_module",
    "lower_tree",
    # High-level orchestration
    "tag_file",
    "tag_paths",
    "iter_file_tags",
    "iter_tag_lines",
    "discover_haskell_files",
    # Output
    "format_tags_file",
    "write_jsonl",
    "write_tags",
]
