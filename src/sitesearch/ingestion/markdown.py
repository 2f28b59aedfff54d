"""Front matter and markdown stripping.

The stripping is a lexical best-effort transform built from regular
expressions, not a markdown parser. It never raises: malformed or nested
constructs it cannot recognise are left behind as plain text, which is
good enough for tokenizing but not for rendering.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Tuple

import yaml

from sitesearch.utils.text import normalize_whitespace

LOGGER = logging.getLogger(__name__)

_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\n(?P<meta>.*?)^---[ \t]*$\n*", re.M | re.S)
_META_LINE_RE = re.compile(r"^\s*(?P<key>[A-Za-z0-9_-]+)\s*:\s*(?P<value>.*?)\s*$")

QUOTES = "'\""

_BLOCKQUOTE_RE = re.compile(r"^[ \t]*(?:>[ \t]?)+", re.M)
_TAG_RE = re.compile(r"</?[A-Za-z][^<>]*>")

Rules = List[Tuple[re.Pattern[str], str]]

# fenced code, then an unclosed fence swallowing the rest
_CODE_RULES: Rules = [
    (re.compile(r"^[ \t]*(`{3,}|~{3,})[^\n]*\n.*?^[ \t]*\1[ \t]*$", re.M | re.S), ""),
    (re.compile(r"^[ \t]*(?:`{3,}|~{3,}).*\Z", re.M | re.S), ""),
]

_INLINE_RULES: Rules = [
    (re.compile(r"<!--.*?-->", re.S), ""),
    # mdx directives
    (re.compile(r"^[ \t]*import\s+(?:[^\n]*?\bfrom\s+)?['\"][^'\"\n]*['\"];?[ \t]*$", re.M), ""),
    (re.compile(r"^[ \t]*export\s+(?:const|default|function|let)\b[^\n]*$", re.M), ""),
    (re.compile(r"`[^`\n]+`"), ""),
    (re.compile(r"`+"), ""),
    (re.compile(r"!\[[^\]\n]*\](?:\([^)\n]*\)|\[[^\]\n]*\])"), ""),
    (re.compile(r"^[ \t]*\[[^\]\n]+\]:[ \t]*\S+.*$", re.M), ""),
    (re.compile(r"\[([^\]\n]+)\](?:\([^)\n]*\)|\[[^\]\n]*\])"), r"\1"),
]

# Line markers. List bullets go before headings so "- ## item" loses both.
_LINE_RULES: Rules = [
    # horizontal rules
    (re.compile(r"^[ \t]*([-*_])(?:[ \t]*\1){2,}[ \t]*$", re.M), ""),
    # table separator rows and cell delimiters
    (re.compile(r"^[ \t]*\|?[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)+\|?[ \t]*$", re.M), ""),
    (re.compile(r"[ \t]*\|[ \t]*"), " "),
    (re.compile(r"^[ \t]*(?:[-*+]|\d+[.)])[ \t]+(?:\[[ xX]\][ \t]+)?", re.M), ""),
    (re.compile(r"^[ \t]{0,3}#{1,6}[ \t]+(.*?)(?:[ \t]+#+)?[ \t]*$", re.M), r"\1"),
    (re.compile(r"^[ \t]{0,3}#{1,6}[ \t]*$", re.M), ""),
    # emphasis and strikethrough; underscores inside words survive
    (re.compile(r"[*~]+"), ""),
    (re.compile(r"(?<!\w)_+|_+(?!\w)"), ""),
]


def _strip_quotes(value: str) -> str:
    return value.strip().lstrip(QUOTES).rstrip(QUOTES).strip()


def _parse_meta_lines(block: str) -> Dict[str, Any]:
    meta: Dict[str, Any] = {}
    for line in block.splitlines():
        match = _META_LINE_RE.match(line)
        if match:
            meta[match.group("key")] = _strip_quotes(match.group("value"))
    return meta


def parse_front_matter(block: str) -> Dict[str, Any]:
    """Parse a header block as YAML, falling back to ``key: value`` lines."""
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        LOGGER.debug("Malformed front matter, parsing line by line: %s", exc)
        return _parse_meta_lines(block)
    if data is None:
        return {}
    if not isinstance(data, dict):
        LOGGER.debug("Front matter is not a mapping, parsing line by line")
        return _parse_meta_lines(block)
    return {str(key): value for key, value in data.items()}


def split_front_matter(raw: str) -> Tuple[Dict[str, Any], str]:
    """Split raw text into its header metadata and the remaining content."""
    text = raw.replace("\r\n", "\n")
    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        return {}, text
    return parse_front_matter(match.group("meta")), text[match.end() :]


def strip_front_matter(raw: str) -> str:
    return split_front_matter(raw)[1]


def _apply(rules: Rules, text: str) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text


def strip_code_blocks(text: str) -> str:
    """Remove fenced code blocks; an unclosed fence drops the rest of the text."""
    return _apply(_CODE_RULES, text.replace("\r\n", "\n"))


def strip_tags(text: str) -> str:
    # removing a tag can join its neighbours into a new one, e.g. "<<b>b>"
    count = 1
    while count:
        text, count = _TAG_RE.subn("", text)
    return text


def strip_markdown(text: str) -> str:
    """Reduce markdown/MDX content to plain prose suitable for indexing.

    Blockquote markers go first so quoted fences and headings are seen as such.
    """
    text = _BLOCKQUOTE_RE.sub("", text.replace("\r\n", "\n"))
    text = strip_tags(_apply(_INLINE_RULES, strip_code_blocks(text)))
    text = _apply(_LINE_RULES, text)
    return normalize_whitespace(text.split("\n"))
