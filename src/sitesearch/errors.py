"""Exceptions raised by the SiteSearch build."""

from __future__ import annotations

from pathlib import Path


class SiteSearchError(Exception):
    """Base class for fatal build errors."""


class FilesystemError(SiteSearchError, OSError):
    """A path could not be read, listed or written."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = Path(path)


class DuplicateSlugError(SiteSearchError, ValueError):
    """Two source files map to the same slug."""

    def __init__(self, slug: str, first: str, second: str) -> None:
        super().__init__(f"Duplicate slug {slug!r} for {first} and {second}")
        self.slug = slug
        self.first = first
        self.second = second


class QuerySyntaxError(SiteSearchError, ValueError):
    """A search query could not be parsed."""

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Invalid query {query!r}: {reason}")
        self.query = query
