"""Content sources: where post files are enumerated and loaded from.

The assembler only talks to a ``ContentSource``. ``DirectorySource`` reads a
flat directory of ``.md`` files; ``MemorySource`` holds the same data in a
dict so the pipeline can run without touching the filesystem.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from folio.errors import EntryUnreadableError, SourceUnavailableError

logger = logging.getLogger(__name__)

POST_SUFFIX = ".md"


class ContentSource(ABC):
    """Enumerates candidate post files and loads their text."""

    @abstractmethod
    def list_entries(self) -> list[str]:
        """Return identifiers of candidate post files.

        Raises:
            SourceUnavailableError: If the source cannot be enumerated.
        """
        ...

    @abstractmethod
    def read(self, name: str) -> str:
        """Return the UTF-8 text of one entry.

        Raises:
            EntryUnreadableError: If the entry cannot be read or decoded.
        """
        ...

    def describe(self) -> str:
        return type(self).__name__


class DirectorySource(ContentSource):
    """Flat directory of markdown files. Subdirectories are not traversed."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def list_entries(self) -> list[str]:
        try:
            names = [
                entry.name
                for entry in self.directory.iterdir()
                if entry.suffix == POST_SUFFIX and entry.is_file()
            ]
        except OSError as exc:
            raise SourceUnavailableError(
                f"Cannot read blog directory: {exc.strerror or exc}",
                source=str(self.directory),
            ) from exc

        logger.debug("Found %d post file(s) in %s", len(names), self.directory)
        return sorted(names)

    def read(self, name: str) -> str:
        path = self.directory / name
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise EntryUnreadableError(f"Not valid UTF-8: {exc.reason}", source=name) from exc
        except OSError as exc:
            raise EntryUnreadableError(
                f"Cannot read file: {exc.strerror or exc}", source=name
            ) from exc

    def describe(self) -> str:
        return str(self.directory)


class MemorySource(ContentSource):
    """In-memory stand-in for a content directory.

    Values may be ``str`` or raw ``bytes``; bytes are decoded as UTF-8 on
    read, the same way files are.
    """

    def __init__(self, files: Mapping[str, str | bytes] | None = None) -> None:
        self.files: dict[str, str | bytes] = dict(files or {})

    def list_entries(self) -> list[str]:
        return sorted(name for name in self.files if name.endswith(POST_SUFFIX))

    def read(self, name: str) -> str:
        try:
            raw = self.files[name]
        except KeyError:
            raise EntryUnreadableError("No such entry", source=name) from None
        if isinstance(raw, bytes):
            try:
                return raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise EntryUnreadableError(
                    f"Not valid UTF-8: {exc.reason}", source=name
                ) from exc
        return raw

    def describe(self) -> str:
        return f"<memory: {len(self.files)} file(s)>"
