"""Exceptions raised while building tags."""


class TaggingError(Exception):
    """Base class for tagging failures."""


class UnsupportedModuleError(TaggingError):
    """Raised when a module is in a form the extractor cannot tag.

    Embedded-markup module forms (XML pages and hybrids) are the known case.
    No tags are produced for such a module.
    """

    def __init__(self, form: str, file: str | None = None):
        self.form = form
        self.file = file
        location = f" in {file}" if file else ""
        super().__init__(f"Unsupported module form '{form}'{location}")
