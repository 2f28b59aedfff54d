"""JSON artifact store for the search index and its metadata table."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Sequence, Tuple

from lunr.exceptions import BaseLunrException
from lunr.index import Index

from sitesearch.errors import FilesystemError
from sitesearch.models import Document, MetadataEntry
from sitesearch.utils.files import compute_sha256
from sitesearch.utils.text import make_snippet

LOGGER = logging.getLogger(__name__)


def dumps(payload: Any) -> str:
    """Serialize deterministically: sorted keys, compact separators, UTF-8 kept."""
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def build_metadata(documents: Iterable[Document], *, snippet_chars: int = 200) -> List[MetadataEntry]:
    return [
        MetadataEntry(
            slug=doc.slug,
            title=doc.title,
            category=doc.category,
            snippet=make_snippet(doc.body, snippet_chars),
        )
        for doc in documents
    ]


class ArtifactStore:
    """Persistence layer for ``search-index.json`` and ``search-docs.json``."""

    def __init__(
        self,
        output_dir: Path,
        *,
        index_filename: str = "search-index.json",
        docs_filename: str = "search-docs.json",
    ) -> None:
        self.output_dir = Path(output_dir)
        self.index_path = self.output_dir / index_filename
        self.docs_path = self.output_dir / docs_filename

    @contextmanager
    def transaction(self) -> Iterator[Dict[Path, Path]]:
        """Stage files and move them into place only if the block succeeds.

        Callers map each final path to a staged temporary file in the yielded
        dict. On error every staged file is removed and nothing is replaced.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Cannot create output directory ({exc.strerror or exc})", self.output_dir) from exc

        staged: Dict[Path, Path] = {}
        try:
            yield staged
            for target, temp in staged.items():
                os.replace(temp, target)
        except OSError as exc:
            self._discard(staged.values())
            if isinstance(exc, FilesystemError):
                raise
            raise FilesystemError(f"Cannot write artifact ({exc.strerror or exc})", exc.filename or self.output_dir) from exc
        except BaseException:
            self._discard(staged.values())
            raise

    def _stage(self, staged: Dict[Path, Path], target: Path, content: str) -> None:
        handle = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.output_dir,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        )
        staged[target] = Path(handle.name)
        with handle:
            handle.write(content)
        # mkstemp creates the file with mode 0600
        os.chmod(handle.name, 0o644)

    @staticmethod
    def _discard(paths: Iterable[Path]) -> None:
        for path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                LOGGER.warning("Failed to remove staged file %s: %s", path, exc)

    def save(self, index: Index, entries: Sequence[MetadataEntry]) -> Dict[Path, str]:
        """Write both artifacts and return the SHA256 digest of each."""
        with self.transaction() as staged:
            self._stage(staged, self.index_path, dumps(index.serialize()))
            self._stage(staged, self.docs_path, dumps([entry.to_dict() for entry in entries]))

        digests = {path: compute_sha256(path) for path in (self.index_path, self.docs_path)}
        for path, digest in digests.items():
            LOGGER.debug("Wrote %s (sha256 %s)", path, digest)
        return digests

    def load(self) -> Tuple[Index, List[MetadataEntry]]:
        try:
            index_data = json.loads(self.index_path.read_text(encoding="utf-8"))
            docs_data = json.loads(self.docs_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise FilesystemError(f"Cannot read artifact ({exc.strerror or exc})", exc.filename or self.output_dir) from exc
        try:
            index = Index.load(index_data)
        except (BaseLunrException, KeyError, TypeError) as exc:
            raise ValueError(f"Malformed search index {self.index_path}: {exc}") from exc
        return index, [MetadataEntry(**item) for item in docs_data]
