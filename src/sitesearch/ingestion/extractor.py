"""Derive slug, category and title for documentation sources."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Any, Mapping

from sitesearch.config import BuildConfig
from sitesearch.ingestion.markdown import split_front_matter, strip_code_blocks, strip_markdown
from sitesearch.models import Document, SourceFile

_HEADING_RE = re.compile(r"^[ \t]{0,3}#[ \t]+(?P<title>.+?)(?:[ \t]+#+)?[ \t]*$", re.M)


def _parts(rel_path: str) -> tuple[str, ...]:
    return PurePosixPath(rel_path.replace("\\", "/")).parts


def to_slug(rel_path: str) -> str:
    """Map a relative source path to its URL slug.

    ``guides/setup.md`` becomes ``guides/setup/``, ``guides/index.md`` becomes
    ``guides/`` and the root ``index.md`` becomes ``/``.
    """
    parts = list(_parts(rel_path))
    if not parts:
        return "/"
    stem = PurePosixPath(parts[-1]).stem
    if stem == "index":
        parts.pop()
    else:
        parts[-1] = stem
    if not parts:
        return "/"
    return "/".join(parts) + "/"


def get_category(rel_path: str, default: str = "General") -> str:
    parts = _parts(rel_path)
    if len(parts) > 1 and parts[0]:
        return parts[0][0].upper() + parts[0][1:]
    return default


def extract_title(meta: Mapping[str, Any], content: str, placeholder: str = "Untitled") -> str:
    """Pick the header ``title``, else the first ``#`` heading, else the placeholder.

    Header values arrive unquoted from the front matter parser. Headings inside
    fenced code blocks are not considered.
    """
    value = meta.get("title")
    if value is not None:
        title = str(value).strip()
        if title:
            return title

    match = _HEADING_RE.search(strip_code_blocks(content))
    if match:
        return match.group("title").strip()
    return placeholder


def extract_document(source: SourceFile, config: BuildConfig | None = None) -> Document:
    config = config or BuildConfig()
    meta, content = split_front_matter(source.text)
    return Document(
        slug=to_slug(source.rel_path),
        title=extract_title(meta, content, config.untitled),
        body=strip_markdown(content),
        category=get_category(source.rel_path, config.default_category),
        source=source.rel_path,
    )
