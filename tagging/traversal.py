"""
Syntax-model traversal and tag extraction logic.

This module walks one parsed Haskell module and produces its tags in source
order: the module tag, then one tag per import, then the tags of each
top-level declaration. Data and newtype tags are followed directly by the
tags of their constructors.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from tagging.errors import UnsupportedModuleError
from tagging.models import Tag, TagAccess, TagKind
from tagging.rendering import render_type as render_type_one_line
from tagging.syntax import (
    ConDecl,
    DataDecl,
    DataOrNew,
    Decl,
    ImportDecl,
    Module,
    Name,
    OtherDecl,
    SrcSpan,
    TypeDecl,
    TypeExpr,
    TypeSig,
)

logger = logging.getLogger(__name__)

FileLines = Sequence[str]
TypeRenderer = Callable[[TypeExpr], str]


def create_tag(
    name: str,
    kind: TagKind,
    span: SrcSpan,
    file_lines: FileLines,
    parent: Optional[Tuple[TagKind, str]] = None,
    signature: Optional[str] = None,
    access: Optional[TagAccess] = None,
) -> Tag:
    """Build one tag, reading its pattern from the defining source line.

    Args:
        name: Identifier text.
        kind: Tag kind.
        span: Position of the defining token.
        file_lines: Module source split into lines, 0-indexed.
        parent: Enclosing (kind, name), constructors only.
        signature: Signature or alias payload.
        access: Access marker.

    Returns:
        A Tag whose pattern is the unmodified line ``span.start_line``.
    """
    return Tag(
        name=name,
        file=span.file,
        pattern=file_lines[span.start_line - 1],
        kind=kind,
        line=span.start_line,
        parent=parent,
        signature=signature,
        access=access,
    )


def import_access(import_decl: ImportDecl) -> Optional[TagAccess]:
    """Grade an import by qualification and import list.

    Qualified imports are always protected. Unqualified imports are public
    when unrestricted, private with a ``hiding`` list and unmarked with an
    explicit import list.
    """
    specs = import_decl.specs
    if specs is not None and not specs.hiding:
        return TagAccess.PROTECTED if import_decl.qualified else None
    if specs is not None and specs.hiding:
        return TagAccess.PROTECTED if import_decl.qualified else TagAccess.PRIVATE
    return TagAccess.PROTECTED if import_decl.qualified else TagAccess.PUBLIC


def create_import_tag(import_decl: ImportDecl, file_lines: FileLines) -> Tag:
    alias = import_decl.alias.text if import_decl.alias is not None else None
    return create_tag(
        import_decl.module.text,
        TagKind.IMPORT,
        import_decl.span,
        file_lines,
        signature=alias,
        access=import_access(import_decl),
    )


def create_constructor_tag(
    parent: Tuple[TagKind, str],
    con_decl: ConDecl,
    file_lines: FileLines,
) -> Tag:
    name, span = con_decl.name.extract()
    return create_tag(name, TagKind.CONSTRUCTOR, span, file_lines, parent=parent)


def create_decl_tags(
    decl: Decl,
    file_lines: FileLines,
    render_type: TypeRenderer = render_type_one_line,
) -> List[Tag]:
    """Create the tags of one top-level declaration.

    Args:
        decl: Declaration from the syntax model.
        file_lines: Module source split into lines.
        render_type: Renders a signature's type as single-line text.

    Returns:
        Tags in declaration order. Unsupported declaration forms give an
        empty list.
    """
    if isinstance(decl, TypeDecl):
        name, span = decl.head.extract()
        return [create_tag(name, TagKind.TYPE, span, file_lines)]

    if isinstance(decl, DataDecl):
        name, span = decl.head.extract()
        kind = TagKind.NEWTYPE if decl.data_or_new is DataOrNew.NEWTYPE else TagKind.DATA
        tags = [create_tag(name, kind, span, file_lines)]
        tags.extend(
            create_constructor_tag((kind, name), con, file_lines)
            for con in decl.constructors
        )
        return tags

    if isinstance(decl, TypeSig):
        signature = render_type(decl.type)
        return [
            _create_function_tag(name, signature, file_lines) for name in decl.names
        ]

    if isinstance(decl, OtherDecl):
        logger.debug(
            "Skipping %s declaration at %s:%d",
            decl.form,
            decl.span.file,
            decl.span.start_line,
        )
    return []


def _create_function_tag(name: Name, signature: str, file_lines: FileLines) -> Tag:
    text, span = name.extract()
    return create_tag(text, TagKind.FUNCTION, span, file_lines, signature=signature)


def create_tags(
    module: object,
    file_lines: FileLines,
    render_type: TypeRenderer = render_type_one_line,
) -> List[Tag]:
    """Extract all tags of one module.

    Args:
        module: Parsed module. Only ``Module`` is supported.
        file_lines: The module's source split into lines, without terminators.
        render_type: Renders signature types as single-line text.

    Returns:
        Tags in source order.

    Raises:
        UnsupportedModuleError: If the module is an XML page, an XML hybrid or
            any other form this extractor does not handle.

    Example:
        >>> tags = create_tags(module, source.split("\\n"))
        >>> [t.kind.value for t in tags]
        ['module', 'import', 'function']
    """
    if not isinstance(module, Module):
        span = getattr(module, "span", None)
        raise UnsupportedModuleError(
            type(module).__name__,
            file=span.file if span is not None else None,
        )

    tags: List[Tag] = []

    if module.head is not None:
        module_name = module.head.name
        tags.append(
            create_tag(module_name.text, TagKind.MODULE, module_name.span, file_lines)
        )

    tags.extend(create_import_tag(imp, file_lines) for imp in module.imports)

    for decl in module.decls:
        tags.extend(create_decl_tags(decl, file_lines, render_type))

    logger.debug("Created %d tags from %d declarations", len(tags), len(module.decls))
    return tags
