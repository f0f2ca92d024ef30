"""
Data models for Haskell navigation tags.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class TagKind(str, Enum):
    """Closed set of tagged entity kinds, in declaration-site order.

    The value is the kind's display name. The single-letter kind code is the
    first character of that name, so first letters must be unique.
    """

    MODULE = "module"
    IMPORT = "import"
    TYPE = "type"
    DATA = "data"
    NEWTYPE = "newtype"
    CONSTRUCTOR = "constructor"
    FUNCTION = "function"

    @property
    def letter(self) -> str:
        return self.value[0]


class TagAccess(str, Enum):
    """Visibility markers borrowed from ctags.

    Haskell has no access modifiers. These are used to grade imports:
    qualified imports are protected, unrestricted unqualified imports are
    public and unqualified ``hiding`` imports are private.
    """

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"


def _check_unique_kind_letters() -> None:
    seen: Dict[str, TagKind] = {}
    for kind in TagKind:
        other = seen.get(kind.letter)
        if other is not None:
            raise ValueError(
                f"Tag kinds '{other.value}' and '{kind.value}' share "
                f"kind letter '{kind.letter}'"
            )
        seen[kind.letter] = kind


_check_unique_kind_letters()


@dataclass(frozen=True)
class Tag:
    """One named, locatable entity of a Haskell module.

    Attributes:
        name: Identifier text as written in source
        file: Source file path, copied from the entity's position
        pattern: Exact text of the source line the defining token starts on
        kind: Entity kind
        line: 1-indexed line of the defining token
        parent: (kind, name) of the enclosing data/newtype, constructors only
        signature: Rendered type for functions, alias for imports
        access: Import qualification marker, imports only
    """

    name: str
    file: str
    pattern: str
    kind: TagKind
    line: int
    parent: Optional[Tuple[TagKind, str]] = None
    signature: Optional[str] = None
    access: Optional[TagAccess] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the tag to a dictionary suitable for JSON serialization.

        Returns:
            Dictionary representation of the tag with enums as plain strings.
        """
        return {
            "name": self.name,
            "file": self.file,
            "pattern": self.pattern,
            "kind": self.kind.value,
            "line": self.line,
            "parent": (
                {"kind": self.parent[0].value, "name": self.parent[1]}
                if self.parent is not None
                else None
            ),
            "signature": self.signature,
            "access": self.access.value if self.access is not None else None,
        }
