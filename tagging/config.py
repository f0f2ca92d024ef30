"""
Configuration constants for Haskell tag extraction.

Defines the tree-sitter-haskell node type strings used when lowering a
concrete syntax tree into the tagging syntax model.
"""

from typing import Set

# Root node of a parsed Haskell file
ROOT_NODE: str = "haskell"

# Module header (``module Foo.Bar (...) where``)
HEADER_NODE: str = "header"

# Container of import declarations
IMPORTS_NODE: str = "imports"

# A single import declaration
IMPORT_NODE: str = "import"

# Container of top-level declarations
DECLARATIONS_NODE: str = "declarations"

# Type synonym declarations (the grammar spells the node ``type_synomym``)
TYPE_SYNONYM_NODES: Set[str] = {
    "type_synomym",
    "type_synonym",
}

# Data declaration node type
DATA_NODE: str = "data_type"

# Newtype declaration node type
NEWTYPE_NODE: str = "newtype"

# Type signature node type
SIGNATURE_NODE: str = "signature"

# Constructor declarations inside a data or newtype body
CONSTRUCTOR_DECL_NODES: Set[str] = {
    "data_constructor",
    "gadt_constructor",
    "newtype_constructor",
}

# Nodes carrying a constructor's defining identifier
CONSTRUCTOR_NAME_NODES: Set[str] = {
    "constructor",
    "constructor_operator",
}

# Nodes carrying a type head's defining identifier
TYPE_NAME_NODES: Set[str] = {
    "name",
    "operator",
    "constructor_operator",
}

# Nodes carrying a signature's bound identifiers
VARIABLE_NAME_NODES: Set[str] = {
    "variable",
    "operator",
}

# Parenthesized operator wrapper, e.g. ``(<+>)``
PREFIX_OPERATOR_NODES: Set[str] = {
    "prefix_id",
}

# Node types that are symbolic rather than alphanumeric
SYMBOLIC_NAME_NODES: Set[str] = {
    "operator",
    "constructor_operator",
}

# Comment nodes dropped from rendered type text
COMMENT_NODES: Set[str] = {
    "comment",
    "haddock",
    "pragma",
}

# Keyword tokens read off import declarations
QUALIFIED_KEYWORD: str = "qualified"
HIDING_KEYWORD: str = "hiding"

PROGRAM_NAME: str = "hstags"
