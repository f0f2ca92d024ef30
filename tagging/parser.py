"""
Tree-sitter parser initialization and lowering into the tagging syntax model.

This module parses Haskell source with tree-sitter-haskell and converts the
concrete syntax tree into the small, position-annotated model the tag
extractor consumes.
"""

import logging
from typing import Iterator, List, Optional, Set, Tuple

import tree_sitter_haskell as tshaskell
from tree_sitter import Language, Node, Parser, Tree

from tagging.config import (
    COMMENT_NODES,
    CONSTRUCTOR_DECL_NODES,
    CONSTRUCTOR_NAME_NODES,
    DATA_NODE,
    DECLARATIONS_NODE,
    HEADER_NODE,
    HIDING_KEYWORD,
    IMPORT_NODE,
    IMPORTS_NODE,
    NEWTYPE_NODE,
    PREFIX_OPERATOR_NODES,
    QUALIFIED_KEYWORD,
    ROOT_NODE,
    SIGNATURE_NODE,
    SYMBOLIC_NAME_NODES,
    TYPE_NAME_NODES,
    TYPE_SYNONYM_NODES,
    VARIABLE_NAME_NODES,
)
from tagging.syntax import (
    ConDecl,
    DataDecl,
    DataOrNew,
    Decl,
    ImportDecl,
    ImportSpecList,
    Module,
    ModuleHead,
    ModuleName,
    Name,
    OtherDecl,
    SrcSpan,
    TypeDecl,
    TypeExpr,
    TypeSig,
)

logger = logging.getLogger(__name__)

# Module-level language constant
HASKELL_LANGUAGE = Language(tshaskell.language())

# Tokens that end a declaration head
_HEAD_TERMINATORS: Set[str] = {"=", "where", "::"}


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Haskell.

    Returns:
        A Parser instance configured with the Haskell language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"main = pure ()")
    """
    parser = Parser(HASKELL_LANGUAGE)
    logger.debug("Created tree-sitter Haskell parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of Haskell source code.

    Args:
        source: UTF-8 encoded bytes of Haskell source code.

    Returns:
        A Tree object representing the parsed syntax tree.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"module Main where")
        >>> tree.root_node.type
        'haskell'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    if tree.root_node.has_error:
        logger.warning("Parsed tree contains syntax errors")

    logger.debug("Parsed %d bytes of Haskell code", len(source))
    return tree


def parse_file(file_path: str) -> Tuple[Tree, bytes]:
    """Parse a Haskell source file from disk.

    Args:
        file_path: Path to the .hs file.

    Returns:
        A tuple of (Tree, source_bytes).

    Raises:
        FileNotFoundError: If the file does not exist.
        IOError: If the file cannot be read.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except FileNotFoundError:
        logger.error("File not found: %s", file_path)
        raise
    except IOError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise

    tree = parse_bytes(source_bytes)
    logger.info("Successfully parsed file: %s", file_path)
    return tree, source_bytes


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and missing nodes in a parsed tree."""
    count = 0
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        stack.extend(node.children)
    return count


def split_lines(text: str) -> List[str]:
    """Split source text into lines matching tree-sitter rows.

    Only ``\\n`` ends a line; a trailing ``\\r`` is dropped from each line.
    """
    lines = text.split("\n")
    return [line[:-1] if line.endswith("\r") else line for line in lines]


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------


def _node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _span(node: Node, file_path: str) -> SrcSpan:
    return SrcSpan(
        file=file_path,
        start_line=node.start_point.row + 1,
        start_column=node.start_point.column + 1,
        end_line=node.end_point.row + 1,
        end_column=node.end_point.column + 1,
    )


def _iter_descendants(node: Node, types: Set[str]) -> Iterator[Node]:
    """Yield descendants whose type is in ``types``, in source order.

    Matching nodes are not descended into.
    """
    for child in node.children:
        if child.type in types:
            yield child
        else:
            yield from _iter_descendants(child, types)


def _first_descendant(node: Node, types: Set[str]) -> Optional[Node]:
    return next(_iter_descendants(node, types), None)


def _has_token(node: Optional[Node], token: str) -> bool:
    if node is None:
        return False
    return any(child.type == token for child in node.children)


def _text_without_comments(node: Node, start: int, end: int, source: bytes) -> str:
    pieces: List[bytes] = []
    cursor = start
    for comment in _iter_descendants(node, COMMENT_NODES):
        if comment.end_byte <= start or comment.start_byte >= end:
            continue
        pieces.append(source[cursor:comment.start_byte])
        cursor = comment.end_byte
    pieces.append(source[cursor:end])
    return b" ".join(pieces).decode("utf-8", errors="replace")


def type_text(node: Node, source: bytes) -> str:
    """Source text of a type node with comments and haddocks removed."""
    return _text_without_comments(node, node.start_byte, node.end_byte, source)


def _lower_name(node: Node, source: bytes, file_path: str) -> Name:
    """Build a Name from an identifier node.

    Parenthesized operators such as ``(<+>)`` keep only the symbol.
    """
    if node.type in PREFIX_OPERATOR_NODES and node.named_children:
        node = node.named_children[0]
    return Name(
        text=_node_text(node, source),
        span=_span(node, file_path),
        symbolic=node.type in SYMBOLIC_NAME_NODES,
    )


def _head_children(node: Node) -> Iterator[Node]:
    for child in node.children:
        if child.type in _HEAD_TERMINATORS:
            return
        yield child


# ---------------------------------------------------------------------------
# Lowering
# ---------------------------------------------------------------------------


def _lower_header(node: Node, source: bytes, file_path: str) -> Optional[ModuleHead]:
    module_node = node.child_by_field_name("module")
    if module_node is None:
        module_node = _first_descendant(node, {"module", "module_id"})
    if module_node is None:
        logger.warning("Module header without a name in %s", file_path)
        return None
    return ModuleHead(
        name=ModuleName(
            text=_node_text(module_node, source),
            span=_span(module_node, file_path),
        )
    )


def _lower_import(node: Node, source: bytes, file_path: str) -> Optional[ImportDecl]:
    module_node = node.child_by_field_name("module")
    if module_node is None:
        logger.warning(
            "Import without a module name at %s:%d",
            file_path,
            node.start_point.row + 1,
        )
        return None

    alias_node = node.child_by_field_name("alias")
    alias = None
    if alias_node is not None:
        alias = ModuleName(
            text=_node_text(alias_node, source),
            span=_span(alias_node, file_path),
        )

    names_node = node.child_by_field_name("names")
    specs = None
    if names_node is not None:
        hiding = _has_token(node, HIDING_KEYWORD) or _has_token(
            names_node, HIDING_KEYWORD
        )
        specs = ImportSpecList(
            hiding=hiding,
            names=tuple(
                _node_text(child, source)
                for child in names_node.named_children
                if child.type not in COMMENT_NODES
            ),
        )

    return ImportDecl(
        span=_span(node, file_path),
        module=ModuleName(
            text=_node_text(module_node, source),
            span=_span(module_node, file_path),
        ),
        qualified=_has_token(node, QUALIFIED_KEYWORD),
        alias=alias,
        specs=specs,
    )


def _find_type_head_name(node: Node) -> Optional[Node]:
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        return name_node
    for child in _head_children(node):
        if child.type in TYPE_NAME_NODES or child.type in PREFIX_OPERATOR_NODES:
            return child
        if child.type == "infix":
            operator = child.child_by_field_name("operator")
            if operator is not None:
                return operator
        found = _first_descendant(child, TYPE_NAME_NODES)
        if found is not None:
            return found
    return None


def _constructor_names(node: Node) -> List[Node]:
    """Defining identifiers of one constructor declaration.

    GADT constructors may declare several names before ``::``; all other
    forms declare exactly one.
    """
    name_types = CONSTRUCTOR_NAME_NODES | PREFIX_OPERATOR_NODES
    if node.type == "gadt_constructor":
        names: List[Node] = []
        for child in _head_children(node):
            if child.type in name_types:
                names.append(child)
            else:
                names.extend(_iter_descendants(child, name_types))
        return names

    name_node = node.child_by_field_name("name")
    if name_node is None:
        name_node = _first_descendant(node, name_types)
    return [name_node] if name_node is not None else []


def _lower_data(
    node: Node, data_or_new: DataOrNew, source: bytes, file_path: str
) -> Decl:
    head = _find_type_head_name(node)
    if head is None:
        logger.warning(
            "%s declaration without a name at %s:%d",
            data_or_new.value,
            file_path,
            node.start_point.row + 1,
        )
        return OtherDecl(span=_span(node, file_path), form=node.type)

    constructors: List[ConDecl] = []
    for con_node in _iter_descendants(node, CONSTRUCTOR_DECL_NODES):
        for name_node in _constructor_names(con_node):
            constructors.append(
                ConDecl(
                    span=_span(con_node, file_path),
                    name=_lower_name(name_node, source, file_path),
                )
            )

    return DataDecl(
        span=_span(node, file_path),
        data_or_new=data_or_new,
        head=_lower_name(head, source, file_path),
        constructors=tuple(constructors),
    )


def _lower_signature(node: Node, source: bytes, file_path: str) -> Decl:
    name_types = VARIABLE_NAME_NODES | PREFIX_OPERATOR_NODES
    names_node = node.child_by_field_name("names")
    if names_node is not None:
        name_nodes = [c for c in names_node.named_children if c.type in name_types]
    else:
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            name_nodes = [name_node]
        else:
            name_nodes = []
            for child in _head_children(node):
                if child.type in name_types:
                    name_nodes.append(child)
                else:
                    name_nodes.extend(_iter_descendants(child, name_types))

    type_node = node.child_by_field_name("type")
    if type_node is not None:
        text = type_text(type_node, source)
        type_span = _span(type_node, file_path)
    else:
        colons = next((c for c in node.children if c.type == "::"), None)
        start = colons.end_byte if colons is not None else node.start_byte
        text = _text_without_comments(node, start, node.end_byte, source)
        type_span = None

    if not name_nodes:
        logger.warning(
            "Signature without names at %s:%d", file_path, node.start_point.row + 1
        )
        return OtherDecl(span=_span(node, file_path), form=node.type)

    return TypeSig(
        span=_span(node, file_path),
        names=tuple(_lower_name(n, source, file_path) for n in name_nodes),
        type=TypeExpr(text=text, span=type_span),
    )


def lower_decl(node: Node, source: bytes, file_path: str) -> Decl:
    """Lower one top-level declaration node.

    Args:
        node: Declaration node from a tree-sitter-haskell tree.
        source: The raw source bytes.
        file_path: Path recorded in every span.

    Returns:
        The matching declaration model. Forms that produce no tags become
        ``OtherDecl``.
    """
    if node.type in TYPE_SYNONYM_NODES:
        head = _find_type_head_name(node)
        if head is not None:
            return TypeDecl(
                span=_span(node, file_path),
                head=_lower_name(head, source, file_path),
            )
    elif node.type == DATA_NODE:
        return _lower_data(node, DataOrNew.DATA, source, file_path)
    elif node.type == NEWTYPE_NODE:
        return _lower_data(node, DataOrNew.NEWTYPE, source, file_path)
    elif node.type == SIGNATURE_NODE:
        return _lower_signature(node, source, file_path)
    return OtherDecl(span=_span(node, file_path), form=node.type)


def lower_tree(tree: Tree, source: bytes, file_path: str) -> Module:
    """Convert a tree-sitter-haskell tree into the tagging syntax model.

    Args:
        tree: Parsed tree.
        source: The raw source bytes the tree was parsed from.
        file_path: Path recorded in every span.

    Returns:
        A Module with its header, imports and declarations in source order.
    """
    root = tree.root_node
    if root.type != ROOT_NODE:
        logger.warning("Unexpected root node '%s' in %s", root.type, file_path)

    head: Optional[ModuleHead] = None
    imports: List[ImportDecl] = []
    decls: List[Decl] = []

    def add_import(node: Node) -> None:
        import_decl = _lower_import(node, source, file_path)
        if import_decl is not None:
            imports.append(import_decl)

    for child in root.named_children:
        if child.type in COMMENT_NODES:
            continue
        if child.type == HEADER_NODE:
            head = _lower_header(child, source, file_path)
        elif child.type == IMPORTS_NODE:
            for import_node in child.named_children:
                if import_node.type == IMPORT_NODE:
                    add_import(import_node)
        elif child.type == IMPORT_NODE:
            add_import(child)
        elif child.type == DECLARATIONS_NODE:
            for decl_node in child.named_children:
                if decl_node.type not in COMMENT_NODES:
                    decls.append(lower_decl(decl_node, source, file_path))
        else:
            decls.append(lower_decl(child, source, file_path))

    return Module(head=head, imports=tuple(imports), decls=tuple(decls))


def parse_module(source: bytes, file_path: str) -> Tuple[Module, List[str]]:
    """Parse Haskell source into a syntax-model Module and its source lines.

    Args:
        source: Raw source bytes. Decoded as UTF-8 with replacement.
        file_path: Path recorded in every span.

    Returns:
        A tuple of (Module, file_lines) ready for ``create_tags``.

    Example:
        >>> module, lines = parse_module(b"module Foo.Bar where\\n", "Foo/Bar.hs")
        >>> module.head.name.text
        'Foo.Bar'
    """
    tree = parse_bytes(source)
    module = lower_tree(tree, source, file_path)
    file_lines = split_lines(source.decode("utf-8", errors="replace"))
    return module, file_lines
