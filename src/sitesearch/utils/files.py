"""Utility helpers for working with files."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator

from sitesearch.errors import FilesystemError
from sitesearch.models import SourceFile

LOGGER = logging.getLogger(__name__)


def iter_doc_paths(root: Path, extensions: Iterable[str] = (".md", ".mdx")) -> Iterator[str]:
    """Yield POSIX paths, relative to root, of documentation sources.

    Walks the tree with an explicit stack of directories and sorts every
    level, so the order is stable across platforms. Hidden files and
    directories are skipped, and symlinked directories are not descended
    into so a link back to an ancestor cannot repeat the tree.
    """
    root = Path(root)
    if not root.is_dir():
        raise FilesystemError("Docs directory not found", root)

    suffixes = {ext.lower() for ext in extensions}
    stack: list[PurePosixPath] = [PurePosixPath()]
    while stack:
        rel_dir = stack.pop()
        try:
            entries = sorted((root / rel_dir).iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise FilesystemError(f"Cannot list directory ({exc.strerror or exc})", root / rel_dir) from exc

        subdirs: list[PurePosixPath] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            rel = rel_dir / entry.name
            if entry.is_dir():
                if entry.is_symlink():
                    LOGGER.debug("Not following symlinked directory %s", rel)
                    continue
                subdirs.append(rel)
            elif entry.is_file() and entry.suffix.lower() in suffixes:
                yield rel.as_posix()
        # Reversed so the smallest name is popped first.
        stack.extend(reversed(subdirs))


def collect_doc_paths(root: Path, extensions: Iterable[str] = (".md", ".mdx")) -> list[str]:
    """Return all documentation sources under root, sorted by relative path."""
    return sorted(iter_doc_paths(root, extensions))


def read_source(root: Path, rel_path: str) -> SourceFile:
    path = Path(root) / rel_path
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FilesystemError("File is not valid UTF-8", path) from exc
    except OSError as exc:
        raise FilesystemError(f"Cannot read file ({exc.strerror or exc})", path) from exc
    return SourceFile(rel_path=rel_path, text=text)


def compute_sha256(path: Path) -> str:
    """Compute SHA256 hash for a file."""
    sha = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1 << 20), b""):
            sha.update(chunk)
    return sha.hexdigest()
