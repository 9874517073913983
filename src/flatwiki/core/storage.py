"""Storage abstraction for wiki pages."""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from flatwiki.core.errors import InvalidTitleError, StorageError
from flatwiki.core.models import Page, is_valid_title


class Storage(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    def get_page(self, title: str) -> Page | None:
        """Get a page by title. Returns None if not found."""
        ...

    @abstractmethod
    def save_page(self, title: str, body: bytes) -> Page:
        """Save a page. Creates if doesn't exist, overwrites otherwise."""
        ...

    @abstractmethod
    def delete_page(self, title: str) -> bool:
        """Delete a page. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    def list_pages_with_content(self) -> list[Page]:
        """List all pages with their bodies loaded."""
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Each page is a single file holding the raw body bytes.
    File naming: {title}.txt directly under ``base_path``.

    Any ``OSError`` other than a missing page is raised as ``StorageError``.
    Nothing is logged here; reporting is left to the caller.
    """

    SUFFIX = ".txt"
    # Placeholder that keeps an empty data directory under version control.
    RESERVED_ENTRY = ".gitkeep"

    def __init__(self, base_path: Path, create: bool = True):
        self.base_path = Path(base_path)
        if create:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _title_to_filename(self, title: str) -> str:
        """Convert page title to filename."""
        return title + self.SUFFIX

    def _filename_to_title(self, filename: str) -> str:
        """Convert filename to page title."""
        return filename.removesuffix(self.SUFFIX)

    def _get_path(self, title: str) -> Path:
        """Get full path for a page, rejecting non-canonical titles."""
        if not is_valid_title(title):
            raise InvalidTitleError(title)
        return self.base_path / self._title_to_filename(title)

    def _is_page_entry(self, entry: os.DirEntry) -> bool:
        if entry.name == self.RESERVED_ENTRY or entry.name.startswith("."):
            return False
        if not entry.name.endswith(self.SUFFIX):
            return False
        if not is_valid_title(self._filename_to_title(entry.name)):
            return False
        return entry.is_file()

    def _scan(self) -> list[os.DirEntry]:
        try:
            with os.scandir(self.base_path) as it:
                return [entry for entry in it if self._is_page_entry(entry)]
        except OSError as e:
            raise StorageError(
                f"Could not list pages: {e.strerror or e}"
            ) from e

    def get_page(self, title: str) -> Page | None:
        """Get a page by title."""
        path = self._get_path(title)
        try:
            body = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(
                f"Could not read page {title!r}: {e.strerror or e}", title
            ) from e
        return Page(title=title, body=body)

    def save_page(self, title: str, body: bytes) -> Page:
        """Save a page.

        The body goes to a hidden temporary file in the same directory which
        is then renamed over the page file, so a reader sees either the old
        body or the new one. Concurrent saves of one title: last rename wins.
        """
        path = self._get_path(title)
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=self.base_path,
                prefix=f".{title}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(body)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(
                f"Could not save page {title!r}: {e.strerror or e}", title
            ) from e
        return Page(title=title, body=body)

    def delete_page(self, title: str) -> bool:
        """Delete a page."""
        path = self._get_path(title)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(
                f"Could not delete page {title!r}: {e.strerror or e}", title
            ) from e
        return True

    def list_pages_with_content(self) -> list[Page]:
        """List all pages with their bodies loaded.

        Bodies are read through the directory-qualified entry path. A page
        removed between the scan and the read is skipped.
        """
        pages = []
        for entry in self._scan():
            title = self._filename_to_title(entry.name)
            try:
                body = Path(entry.path).read_bytes()
            except FileNotFoundError:
                continue
            except OSError as e:
                raise StorageError(
                    f"Could not read page {title!r}: {e.strerror or e}", title
                ) from e
            pages.append(Page(title=title, body=body))
        return sorted(pages, key=lambda p: p.title.lower())
