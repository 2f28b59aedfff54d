"""Build configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Literal, Tuple

import yaml

DEFAULT_FIELD_BOOSTS: Dict[str, float] = {"title": 10, "category": 5, "body": 1}

DuplicatePolicy = Literal["warn", "error"]


@dataclass(slots=True)
class BuildConfig:
    docs_dir: Path = Path("src/content/docs")
    output_dir: Path = Path("public")
    index_filename: str = "search-index.json"
    docs_filename: str = "search-docs.json"
    extensions: Tuple[str, ...] = (".md", ".mdx")
    field_boosts: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_FIELD_BOOSTS))
    snippet_chars: int = 200
    default_category: str = "General"
    untitled: str = "Untitled"
    on_duplicate: DuplicatePolicy = "warn"

    def __post_init__(self) -> None:
        self.docs_dir = Path(self.docs_dir)
        self.output_dir = Path(self.output_dir)
        self.extensions = tuple(ext.lower() for ext in self.extensions)
        if self.snippet_chars < 0:
            raise ValueError("snippet_chars must be non-negative")
        if self.on_duplicate not in ("warn", "error"):
            raise ValueError(f"Unknown duplicate policy: {self.on_duplicate}")
        unknown = set(self.field_boosts) - set(DEFAULT_FIELD_BOOSTS)
        if unknown:
            raise ValueError(f"Unknown indexed fields: {', '.join(sorted(unknown))}")

    def resolve_docs_dir(self, base_dir: Path | None = None) -> Path:
        if self.docs_dir.is_absolute() or base_dir is None:
            return self.docs_dir
        return base_dir / self.docs_dir

    def resolve_output_dir(self, base_dir: Path | None = None) -> Path:
        if self.output_dir.is_absolute() or base_dir is None:
            return self.output_dir
        return base_dir / self.output_dir


def load_config(path: Path, **overrides: Any) -> BuildConfig:
    """Load a YAML config file; keyword overrides that are not None win."""
    with Path(path).open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    known = {item.name for item in fields(BuildConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    if "extensions" in data:
        data["extensions"] = tuple(data["extensions"])
    if "field_boosts" in data:
        data["field_boosts"] = {**DEFAULT_FIELD_BOOSTS, **data["field_boosts"]}
    data.update({key: value for key, value in overrides.items() if value is not None})
    return BuildConfig(**data)
