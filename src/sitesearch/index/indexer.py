"""Search index build pipeline."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from sitesearch.config import BuildConfig
from sitesearch.errors import DuplicateSlugError
from sitesearch.index.builder import IndexBuilder
from sitesearch.index.storage import ArtifactStore, build_metadata
from sitesearch.ingestion.extractor import extract_document
from sitesearch.models import BuildStats, Document
from sitesearch.utils.files import collect_doc_paths, read_source

LOGGER = logging.getLogger(__name__)


class SiteIndexer:
    """Coordinates collection, extraction, indexing and artifact writing."""

    def __init__(self, config: BuildConfig, *, base_dir: Path | None = None) -> None:
        self.config = config
        self.docs_dir = config.resolve_docs_dir(base_dir)
        self.store = ArtifactStore(
            config.resolve_output_dir(base_dir),
            index_filename=config.index_filename,
            docs_filename=config.docs_filename,
        )

    def load_documents(self, stats: BuildStats) -> List[Document]:
        rel_paths = collect_doc_paths(self.docs_dir, self.config.extensions)
        stats.collected = len(rel_paths)
        LOGGER.debug("Collected %d source files under %s", len(rel_paths), self.docs_dir)

        documents = []
        for rel_path in rel_paths:
            source = read_source(self.docs_dir, rel_path)
            document = extract_document(source, self.config)
            LOGGER.debug("Extracted %s -> %s (%s)", rel_path, document.slug, document.title)
            documents.append(document)
        return documents

    def build(self) -> BuildStats:
        """Rebuild both artifacts from the current docs tree."""
        stats = BuildStats()
        documents = self.load_documents(stats)

        builder = IndexBuilder(field_boosts=dict(self.config.field_boosts))
        indexed: List[Document] = []
        for document in documents:
            try:
                builder.add(document)
            except DuplicateSlugError as exc:
                if self.config.on_duplicate == "error":
                    raise
                LOGGER.warning("%s; keeping %s", exc, exc.first)
                stats.record_duplicate(exc.slug, kept=exc.first, skipped=exc.second)
                continue
            indexed.append(document)

        index = builder.build()
        entries = build_metadata(indexed, snippet_chars=self.config.snippet_chars)
        stats.artifacts = self.store.save(index, entries)
        stats.indexed = len(indexed)
        stats.terms = len(index.inverted_index)

        LOGGER.info("Indexed %d documents → %s", stats.indexed, self.store.index_path)
        return stats


def build_site_index(config: BuildConfig | None = None, *, base_dir: Path | None = None) -> BuildStats:
    return SiteIndexer(config or BuildConfig(), base_dir=base_dir).build()
