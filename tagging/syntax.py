"""
Syntax model consumed by the tag extractor.

A small, position-annotated view of one Haskell module: an optional header,
its imports and its top-level declarations. Parsers produce it (see
``tagging.parser``); the extractor only reads it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class SrcSpan:
    """Source extent of a syntax element. Lines and columns are 1-indexed."""

    file: str
    start_line: int
    start_column: int = 1
    end_line: int = 0
    end_column: int = 0


@dataclass(frozen=True)
class Name:
    """A defining identifier, either alphanumeric (``foo``) or symbolic (``<+>``)."""

    text: str
    span: SrcSpan
    symbolic: bool = False

    def extract(self) -> Tuple[str, SrcSpan]:
        return self.text, self.span


@dataclass(frozen=True)
class ModuleName:
    text: str
    span: SrcSpan


@dataclass(frozen=True)
class ModuleHead:
    name: ModuleName


@dataclass(frozen=True)
class ImportSpecList:
    """Explicit import list. ``hiding`` marks an exclusion list."""

    hiding: bool
    names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ImportDecl:
    span: SrcSpan
    module: ModuleName
    qualified: bool = False
    alias: Optional[ModuleName] = None
    specs: Optional[ImportSpecList] = None


@dataclass(frozen=True)
class TypeExpr:
    """Opaque type expression; only type renderers look inside."""

    text: str
    span: Optional[SrcSpan] = None


class DataOrNew(str, Enum):
    DATA = "data"
    NEWTYPE = "newtype"


@dataclass(frozen=True)
class TypeDecl:
    span: SrcSpan
    head: Name


@dataclass(frozen=True)
class ConDecl:
    span: SrcSpan
    name: Name


@dataclass(frozen=True)
class DataDecl:
    span: SrcSpan
    data_or_new: DataOrNew
    head: Name
    constructors: Tuple[ConDecl, ...] = ()


@dataclass(frozen=True)
class TypeSig:
    span: SrcSpan
    names: Tuple[Name, ...]
    type: TypeExpr


@dataclass(frozen=True)
class OtherDecl:
    """Any declaration form that produces no tags (bindings, instances, ...)."""

    span: SrcSpan
    form: str


Decl = Union[TypeDecl, DataDecl, TypeSig, OtherDecl]


@dataclass(frozen=True)
class Module:
    head: Optional[ModuleHead] = None
    imports: Tuple[ImportDecl, ...] = ()
    decls: Tuple[Decl, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class XmlPage:
    """Embedded-markup module form; not taggable."""

    span: SrcSpan


@dataclass(frozen=True)
class XmlHybrid:
    """Module mixing Haskell declarations with embedded markup; not taggable."""

    span: SrcSpan


ModuleForm = Union[Module, XmlPage, XmlHybrid]
