"""File-backed source registry.

SourceRegistry owns the sources document.  Every operation is a full
read-modify-write transaction against disk, serialized by a lock shared by
all registry instances pointing at the same file, so the CLI, the agent's
``manage_sources`` tool, and any other in-process caller cannot clobber one
another.  Writes go to a temporary sibling first and are swapped in with
``os.replace``.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from pydantic import ValidationError

from newsbrief.exceptions import (
    DuplicateSourceError,
    InvalidArgumentError,
    SourceNotFoundError,
    SourceRegistryError,
)
from newsbrief.models.actions import (
    AddSource,
    RemoveSource,
    SetActiveSource,
    ToggleSource,
    parse_action,
)
from newsbrief.models.config import DEFAULT_SOURCES_PATH
from newsbrief.models.sources import Source, SourcesFile

if TYPE_CHECKING:
    from collections.abc import Iterator

    from newsbrief.models.actions import SourceAction

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Ordered, unique-by-URL collection of sources persisted as JSON.

    Usage::

        registry = SourceRegistry("sources.json")
        registry.add("Verge", "https://theverge.com")
        registry.toggle(url="https://theverge.com")
        for source in registry.list():
            print(source.name, source.active)
    """

    _locks: ClassVar[dict[Path, threading.RLock]] = {}
    _locks_guard: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, path: str | Path = DEFAULT_SOURCES_PATH) -> None:
        self.path = Path(path)
        key = self.path.absolute()
        with SourceRegistry._locks_guard:
            self._lock = SourceRegistry._locks.setdefault(key, threading.RLock())

    # ------------------------------------------------------------------
    # Raw document access
    # ------------------------------------------------------------------

    def read(self) -> SourcesFile:
        """Load the document from disk.

        A missing file is an empty registry.  An unreadable or malformed
        file raises SourceRegistryError.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return SourcesFile()
        except OSError as exc:
            raise SourceRegistryError(f"Cannot read {self.path}: {exc}") from exc

        try:
            return SourcesFile.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise SourceRegistryError(f"Malformed sources document {self.path}: {exc}") from exc

    def write(self, data: SourcesFile) -> None:
        """Persist the document atomically."""
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with self._lock:
            tmp_path.write_text(
                json.dumps(data.model_dump(mode="json"), indent=2), encoding="utf-8"
            )
            os.replace(tmp_path, self.path)

    @contextmanager
    def transaction(self) -> Iterator[SourcesFile]:
        """Read-modify-write under the registry lock.

        The yielded document is written back only if the block exits
        without raising; a failed validation leaves the file untouched.
        """
        with self._lock:
            data = self.read()
            yield data
            self.write(data)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list(self) -> list[Source]:
        """Return every source in stored order."""
        with self._lock:
            return list(self.read().sources)

    def active(self) -> list[Source]:
        """Return only active sources, in stored order."""
        with self._lock:
            return self.read().active

    def add(self, name: str, url: str, active: bool = True) -> Source:
        """Append a new source.

        Arguments are validated exactly as the ``manage_sources`` tool
        validates an ``add`` action.

        Raises:
            MissingFieldError: If ``name`` or ``url`` is absent or empty.
            InvalidArgumentError: If a value has the wrong type.
            DuplicateSourceError: If a source with ``url`` already exists.
        """
        entry = parse_action({"action": "add", "name": name, "url": url, "active": active})
        with self.transaction() as data:
            if data.has_url(entry.url):
                raise DuplicateSourceError(entry.url)
            source = Source(name=entry.name, url=entry.url, active=entry.active)
            data.sources.append(source)
        logger.info("Added source %s (%s)", name, url)
        return source

    def remove(self, *, url: str | None = None, name: str | None = None) -> Source:
        """Remove the first source matching ``url`` (or ``name`` if no url).

        Raises:
            SourceNotFoundError: If nothing matches.
        """
        with self.transaction() as data:
            idx = _locate(data, url=url, name=name)
            removed = data.sources.pop(idx)
        logger.info("Removed source %s (%s)", removed.name, removed.url)
        return removed

    def toggle(self, *, url: str | None = None, name: str | None = None) -> Source:
        """Flip the ``active`` flag of the matching source."""
        with self.transaction() as data:
            idx = _locate(data, url=url, name=name)
            source = data.sources[idx]
            source.active = not source.active
        logger.info("Toggled source %s -> %s", source.name, source.active)
        return source

    def set_active(
        self,
        active: bool,
        *,
        url: str | None = None,
        name: str | None = None,
    ) -> Source:
        """Set the ``active`` flag of the matching source explicitly.

        Raises:
            InvalidArgumentError: If ``active`` is not a bool.
            SourceNotFoundError: If nothing matches.
        """
        _require_bool(active, "set_active")
        with self.transaction() as data:
            idx = _locate(data, url=url, name=name)
            source = data.sources[idx]
            source.active = active
        logger.info("Updated source %s -> %s", source.name, source.active)
        return source

    def apply(self, action: SourceAction) -> Source:
        """Run a decoded ``manage_sources`` action against the registry."""
        if isinstance(action, AddSource):
            return self.add(action.name, action.url, action.active)
        if isinstance(action, RemoveSource):
            return self.remove(url=action.url, name=action.name)
        if isinstance(action, ToggleSource):
            return self.toggle(url=action.url, name=action.name)
        if isinstance(action, SetActiveSource):
            return self.set_active(action.active, url=action.url, name=action.name)
        raise InvalidArgumentError(f"Unsupported action: {action!r}")


def _locate(data: SourcesFile, *, url: str | None, name: str | None) -> int:
    if not url and not name:
        raise InvalidArgumentError("A url or name is required to select a source")
    idx = data.find_index(url=url, name=name)
    if idx == -1:
        raise SourceNotFoundError(url or name or "")
    return idx


def _require_bool(value: object, action: str) -> None:
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"{action} requires active boolean")
