"""Tests for file utility functions."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitesearch.errors import FilesystemError
from sitesearch.utils.files import collect_doc_paths, compute_sha256, iter_doc_paths, read_source


class TestCollectDocPaths:
    """Test collect_doc_paths and iter_doc_paths."""

    def test_nested_directories(self, docs_dir: Path) -> None:
        """Should find sources at any depth, sorted by relative path."""
        (docs_dir / "guides" / "deep" / "er").mkdir(parents=True)
        (docs_dir / "guides" / "deep" / "er" / "page.md").write_text("deep")

        paths = collect_doc_paths(docs_dir)

        assert paths == [
            "guides/deep/er/page.md",
            "guides/index.md",
            "guides/setup.md",
            "index.md",
            "reference/api.mdx",
        ]

    def test_skips_other_extensions(self, docs_dir: Path) -> None:
        """Should ignore files without a documentation extension."""
        assert "notes.txt" not in collect_doc_paths(docs_dir)

    def test_skips_hidden_entries(self, tmp_path: Path) -> None:
        """Should skip hidden files and hidden directories."""
        (tmp_path / ".drafts").mkdir()
        (tmp_path / ".drafts" / "draft.md").write_text("draft")
        (tmp_path / ".hidden.md").write_text("hidden")
        (tmp_path / "visible.md").write_text("visible")

        assert collect_doc_paths(tmp_path) == ["visible.md"]

    def test_case_insensitive_extension(self, tmp_path: Path) -> None:
        """Should match extensions regardless of case."""
        (tmp_path / "UPPER.MD").write_text("x")

        assert collect_doc_paths(tmp_path) == ["UPPER.MD"]

    def test_custom_extensions(self, tmp_path: Path) -> None:
        """Should honour a custom extension set."""
        (tmp_path / "page.md").write_text("x")
        (tmp_path / "page.markdown").write_text("x")

        assert collect_doc_paths(tmp_path, [".markdown"]) == ["page.markdown"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        """Should handle an empty directory."""
        assert collect_doc_paths(tmp_path) == []

    def test_order_is_stable(self, docs_dir: Path) -> None:
        """Should return the same order on every call."""
        assert list(iter_doc_paths(docs_dir)) == list(iter_doc_paths(docs_dir))

    def test_symlinked_directory_not_followed(self, tmp_path: Path) -> None:
        """A link back to an ancestor should not repeat the tree."""
        docs = tmp_path / "docs"
        (docs / "a").mkdir(parents=True)
        (docs / "a" / "page.md").write_text("page")
        (docs / "a" / "up").symlink_to(docs, target_is_directory=True)

        assert collect_doc_paths(docs) == ["a/page.md"]

    def test_symlink_outside_root_not_followed(self, tmp_path: Path) -> None:
        shared = tmp_path / "shared"
        shared.mkdir()
        (shared / "other.md").write_text("other")
        docs = tmp_path / "docs"
        docs.mkdir()
        (docs / "page.md").write_text("page")
        (docs / "shared").symlink_to(shared, target_is_directory=True)

        assert collect_doc_paths(docs) == ["page.md"]

    def test_missing_root(self, tmp_path: Path) -> None:
        """Should raise FilesystemError naming the missing root."""
        missing = tmp_path / "missing"

        with pytest.raises(FilesystemError) as excinfo:
            collect_doc_paths(missing)

        assert excinfo.value.path == missing
        assert str(missing) in str(excinfo.value)
        assert isinstance(excinfo.value, OSError)

    def test_root_is_file(self, tmp_path: Path) -> None:
        """Should reject a root that is not a directory."""
        root = tmp_path / "file.md"
        root.write_text("x")

        with pytest.raises(FilesystemError):
            collect_doc_paths(root)


class TestReadSource:
    """Test read_source function."""

    def test_reads_utf8(self, tmp_path: Path) -> None:
        (tmp_path / "page.md").write_text("Café", encoding="utf-8")

        source = read_source(tmp_path, "page.md")

        assert source.rel_path == "page.md"
        assert source.text == "Café"

    def test_drops_bom(self, tmp_path: Path) -> None:
        (tmp_path / "page.md").write_bytes("\ufeff# Title".encode("utf-8"))

        assert read_source(tmp_path, "page.md").text == "# Title"

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Should raise FilesystemError for undecodable files."""
        (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(FilesystemError) as excinfo:
            read_source(tmp_path, "bad.md")

        assert excinfo.value.path == tmp_path / "bad.md"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FilesystemError):
            read_source(tmp_path, "gone.md")


class TestComputeSha256:
    """Test compute_sha256 function."""

    def test_compute_hash_simple(self, tmp_path: Path) -> None:
        """Should compute SHA256 for file."""
        test_file = tmp_path / "test.txt"
        test_file.write_text("Hello, World!")

        expected = "dffd6021bb2bd5b0af676290809ec3a53191dd81c7f70a4b28688a362182986f"
        assert compute_sha256(test_file) == expected

    def test_compute_hash_empty_file(self, tmp_path: Path) -> None:
        """Should compute hash for empty file."""
        test_file = tmp_path / "empty.txt"
        test_file.write_text("")

        expected = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        assert compute_sha256(test_file) == expected
