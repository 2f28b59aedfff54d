"""Search index construction with lunr.py.

The index is a :class:`lunr.index.Index`, serialized in the lunr.js 2.x
schema so the browser loads ``search-index.json`` with ``lunr.Index.load``.
Field boosts are folded into the field vectors at build time, as lunr does.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping

from lunr import get_default_builder
from lunr.builder import Builder
from lunr.index import Index
from lunr.token_set import TokenSet

from sitesearch.config import DEFAULT_FIELD_BOOSTS
from sitesearch.errors import DuplicateSlugError
from sitesearch.models import Document
from sitesearch.utils.text import tokenize

LOGGER = logging.getLogger(__name__)

REF_FIELD = "slug"


@dataclass
class IndexBuilder:
    """Accumulates documents into a lunr index keyed by slug.

    Terms are split with :func:`tokenize` and then run through lunr's default
    pipeline (trimmer, stop word filter, stemmer). lunr itself overwrites a
    document added twice under the same ref, so slugs are checked here first.
    """

    field_boosts: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_FIELD_BOOSTS))
    _builder: Builder = field(init=False, repr=False)
    _sources: Dict[str, str] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self._builder = get_default_builder()
        self._builder.ref(REF_FIELD)
        for name, boost in self.field_boosts.items():
            self._builder.field(name, boost=boost)

    def __contains__(self, slug: str) -> bool:
        return slug in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def add(self, document: Document) -> None:
        if document.slug in self._sources:
            raise DuplicateSlugError(document.slug, self._sources[document.slug], document.source)

        self._sources[document.slug] = document.source
        # lunr takes a list as already tokenized and only lower-cases it
        record = {name: tokenize(getattr(document, name)) for name in self.field_boosts}
        record[REF_FIELD] = document.slug
        self._builder.add(record)

    def build(self) -> Index:
        if not self._sources:
            # lunr averages field lengths over the documents and cannot build from none
            return Index(
                inverted_index={},
                field_vectors={},
                token_set=TokenSet.from_list([]),
                fields=list(self.field_boosts),
                pipeline=self._builder.search_pipeline,
            )
        index = self._builder.build()
        LOGGER.debug("Built index: %d documents, %d terms", len(self), len(index.inverted_index))
        return index


def build_index(
    documents: Iterable[Document], field_boosts: Mapping[str, float] | None = None
) -> Index:
    builder = IndexBuilder(field_boosts=dict(field_boosts or DEFAULT_FIELD_BOOSTS))
    for document in documents:
        builder.add(document)
    return builder.build()
