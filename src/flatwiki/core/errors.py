"""Exceptions raised by the FlatWiki core."""


class WikiError(Exception):
    """Base class for all FlatWiki errors."""


class StorageError(WikiError):
    """A page could not be read, written, deleted or enumerated.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, message: str, title: str | None = None):
        super().__init__(message)
        self.message = message
        self.title = title


class InvalidTitleError(WikiError, ValueError):
    """A title does not match the canonical title pattern."""

    def __init__(self, title: str):
        super().__init__(f"Invalid page title: {title!r}")
        self.title = title
