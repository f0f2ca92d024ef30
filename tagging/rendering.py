"""Single-line rendering of type expressions."""

import re

from tagging.syntax import TypeExpr

_SPACE_RE = re.compile(r"\s+")


def render_type(type_expr: TypeExpr) -> str:
    """Render a type expression as compact single-line text.

    Every run of whitespace, newlines included, collapses to one space.

    Example:
        >>> render_type(TypeExpr("Int\\n  -> Int"))
        'Int -> Int'
    """
    return _SPACE_RE.sub(" ", type_expr.text).strip()
