"""Text helpers shared by the normalizer, the index builder and the writer."""

from __future__ import annotations

import re
from typing import Iterable

_TOKEN_RE = re.compile(r"[^\W_]+")
_NEWLINES_RE = re.compile(r"\n+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def tokenize(text: str) -> list[str]:
    """Case-fold text and split it on non-alphanumeric boundaries."""
    if not text:
        return []
    return _TOKEN_RE.findall(text.casefold())


def make_snippet(body: str, max_chars: int = 200) -> str:
    """Return the first ``max_chars`` characters of body on a single line.

    The cut is a hard prefix and may fall mid-word.
    """
    return _NEWLINES_RE.sub(" ", body[:max_chars])


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse whitespace inside lines and keep at most one blank line in a row."""
    text = "\n".join(" ".join(line.split()) for line in lines)
    return _BLANK_RUN_RE.sub("\n\n", text).strip()
