"""Data models for FlatWiki."""

import re

from pydantic import BaseModel

# Letters, digits and spaces. Rules out "/", "." and "#", so a valid title
# can never name a path outside the data directory.
TITLE_PATTERN = r"[a-zA-Z0-9 ]+"

_TITLE_RE = re.compile(TITLE_PATTERN)


def is_valid_title(title: object) -> bool:
    """Check whether ``title`` matches the canonical title pattern in full."""
    return isinstance(title, str) and _TITLE_RE.fullmatch(title) is not None


class Page(BaseModel):
    """Represents a wiki page.

    The body is stored and returned byte for byte. ``exists`` is False only
    for the blank page handed to the editor when no record exists yet.
    """

    title: str
    body: bytes = b""
    exists: bool = True

    @property
    def text(self) -> str:
        """Body decoded for display; undecodable bytes become U+FFFD."""
        return self.body.decode("utf-8", errors="replace")
