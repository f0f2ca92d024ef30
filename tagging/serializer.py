"""
Serialization of tags into ctags lines.

Each tag becomes one tab-separated line::

    name<TAB>file<TAB>/^pattern$/;"<TAB>k<TAB>line:N[<TAB>data:Parent][<TAB>signature:(sig)][<TAB>access:word]

The pattern is the raw source line and is not escaped, so a line holding a
literal ``/`` produces a locator that ``/^...$/`` readers may misparse.
"""

from typing import Iterable, List

from tagging.models import Tag


def tag_to_string(tag: Tag) -> str:
    """Render one tag as a single ctags line.

    Optional fields are appended in a fixed order (parent, signature, access)
    and contribute nothing when unset.

    Example:
        >>> tag_to_string(Tag("f", "A.hs", "f :: Int", TagKind.FUNCTION, 3))
        'f\\tA.hs\\t/^f :: Int$/;"\\tf\\tline:3'
    """
    parent_str = ""
    if tag.parent is not None:
        parent_kind, parent_name = tag.parent
        parent_str = f"\t{parent_kind.value}:{parent_name}"

    signature_str = ""
    if tag.signature is not None:
        signature_str = f"\tsignature:({tag.signature})"

    access_str = ""
    if tag.access is not None:
        access_str = f"\taccess:{tag.access.value}"

    return (
        f"{tag.name}\t{tag.file}\t/^{tag.pattern}$/;\"\t"
        f"{tag.kind.letter}\tline:{tag.line}"
        f"{parent_str}{signature_str}{access_str}"
    )


def tags_to_strings(tags: Iterable[Tag]) -> List[str]:
    """Serialize tags in the order given."""
    return [tag_to_string(tag) for tag in tags]
