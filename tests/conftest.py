"""Shared fixtures for SiteSearch tests."""

from __future__ import annotations

from pathlib import Path

import pytest

DOCS = {
    "index.md": "---\ntitle: Welcome\n---\n# Home\n\nWelcome to the **docs**.\n",
    "guides/setup.md": (
        "# Setup Guide\n\nInstall the `cli` tool first.\n\n"
        "```bash\nnpm install\n```\n\nThen run the installer.\n"
    ),
    "guides/index.md": "Guides overview without a heading.\n",
    "reference/api.mdx": (
        "import Note from '../../components/Note.astro';\n\n"
        "# API\n\n<Note />\nThe API reference lists every endpoint.\n"
    ),
    "notes.txt": "Not a documentation source.\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """A small documentation tree."""
    return write_tree(tmp_path / "docs", DOCS)
