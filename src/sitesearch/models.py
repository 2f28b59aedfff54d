"""Core SiteSearch data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List


@dataclass(slots=True)
class SourceFile:
    """Raw documentation file read from the docs tree."""

    rel_path: str
    text: str


@dataclass(slots=True)
class Document:
    """Normalized document ready to be indexed."""

    slug: str
    title: str
    body: str
    category: str
    source: str = ""


@dataclass(slots=True)
class MetadataEntry:
    """Per-document record used by the client to render a search hit."""

    slug: str
    title: str
    category: str
    snippet: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(slots=True)
class DuplicateSlug:
    slug: str
    kept: str
    skipped: str


@dataclass(slots=True)
class BuildStats:
    collected: int = 0
    indexed: int = 0
    skipped: int = 0
    terms: int = 0
    duplicates: List[DuplicateSlug] = field(default_factory=list)
    artifacts: Dict[Path, str] = field(default_factory=dict)

    def record_duplicate(self, slug: str, kept: str, skipped: str) -> None:
        self.duplicates.append(DuplicateSlug(slug=slug, kept=kept, skipped=skipped))
        self.skipped += 1
