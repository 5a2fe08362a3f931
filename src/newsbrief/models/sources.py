"""Source registry models.

``Source`` is one configured feed; ``SourcesFile`` is the durable document
shape ``{"sources": [{name, url, active}, ...]}`` stored on disk.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Source(BaseModel):
    """A single configured news source.

    The URL is the registry key: no two entries in a ``SourcesFile`` share it.
    """

    name: str
    url: str
    active: bool = True

    def matches(self, *, url: str | None = None, name: str | None = None) -> bool:
        """Match by URL when given, otherwise by name."""
        if url:
            return self.url == url
        return name is not None and self.name == name


class SourcesFile(BaseModel):
    """The persisted registry document."""

    sources: list[Source] = Field(default_factory=list)

    def find_index(self, *, url: str | None = None, name: str | None = None) -> int:
        """Return the index of the first matching source, or -1."""
        for idx, source in enumerate(self.sources):
            if source.matches(url=url, name=name):
                return idx
        return -1

    def has_url(self, url: str) -> bool:
        return any(s.url == url for s in self.sources)

    @property
    def active(self) -> list[Source]:
        """Sources whose ``active`` flag is set, in stored order."""
        return [s for s in self.sources if s.active]
