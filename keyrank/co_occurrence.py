from __future__ import annotations

import logging
from collections import Counter
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence, Union

import numpy as np

from .config import WINDOW_SIZE
from .parallel import Mapper, get_mapper
from .utils import get_window_range

_logger = logging.getLogger(__name__)

# A document is either a cleaned, whitespace-delimited string or its tokens.
Document = Union[str, Sequence[str]]


def _create_word_indexes(words: Iterable[str]) -> dict[str, int]:
    indexes: dict[str, int] = {}
    for word in words:
        indexes.setdefault(word, len(indexes))
    return indexes


def _document_tokens(document: Document) -> list[str]:
    if isinstance(document, str):
        return document.split()
    return list(document)


def _count_document(
    tokens: Sequence[str],
    word_indexes: Mapping[str, int],
    window_size: int,
) -> Counter[tuple[int, int]]:
    """Label-pair counts for one document, seen from each in-vocabulary centre."""
    counts: Counter[tuple[int, int]] = Counter()
    for i, word in enumerate(tokens):
        first = word_indexes.get(word)
        if first is None:
            continue
        for j in get_window_range(window_size, i, len(tokens)):
            if i == j:
                continue
            other = word_indexes.get(tokens[j])
            if other is not None:
                counts[first, other] += 1
    return counts


def _build_matrix(
    documents: Sequence[Document],
    word_indexes: Mapping[str, int],
    window_size: int,
    mapper: Mapper,
) -> np.ndarray:
    size = len(word_indexes)
    partials = mapper.map(
        lambda doc: _count_document(_document_tokens(doc), word_indexes, window_size),
        documents,
    )

    # Single writer: partial tables are folded in document order.
    matrix = np.zeros((size, size), dtype=np.float64)
    max_value = 0.0
    for counts in partials:
        for (first, other), count in counts.items():
            matrix[first, other] += count
            if matrix[first, other] > max_value:
                max_value = float(matrix[first, other])

    if max_value > 0.0:
        matrix /= max_value
    else:
        _logger.debug("No co-occurrences found; matrix left at zero")
    return matrix


class CoOccurrence:
    """Window-normalised co-occurrence strengths between vocabulary terms.

    Every vocabulary term gets a dense integer label in insertion order
    (a repeated term keeps its first label). The matrix counts, for every
    in-vocabulary token, the in-vocabulary tokens within *window_size*
    positions on either side, then scales all cells by the largest count so
    the strongest relation is 1.0. The result is read-only.

    Lookups for terms outside the vocabulary return ``None``.
    """

    def __init__(
        self,
        documents: Sequence[Document],
        words: Sequence[str],
        window_size: int = WINDOW_SIZE,
        mapper: Mapper | None = None,
    ) -> None:
        if window_size < 0:
            raise ValueError(f"window_size must be >= 0, got {window_size}")
        mapper = mapper or get_mapper()

        self._word_indexes = _create_word_indexes(words)
        self._words = list(self._word_indexes)
        with mapper:
            self._matrix = _build_matrix(documents, self._word_indexes, window_size, mapper)
        self._matrix.setflags(write=False)
        _logger.debug(
            "Built %dx%d co-occurrence matrix from %d documents (window=%d)",
            len(self._words), len(self._words), len(documents), window_size,
        )

    @classmethod
    def from_documents(
        cls,
        documents: Sequence[str],
        words: Sequence[str],
        window_size: int = WINDOW_SIZE,
        stopwords: Iterable[str] | None = None,
        punctuation: Iterable[str] | None = None,
        mapper: Mapper | None = None,
    ) -> "CoOccurrence":
        """Cleans raw *documents* with :class:`DocumentProcessor` before counting."""
        from .extractor import DocumentProcessor

        mapper = mapper or get_mapper()
        processed = DocumentProcessor(documents, stopwords, punctuation).process_documents()
        return cls(processed, words, window_size, mapper)

    # ------------------------------ lookups --------------------------------
    def get_label(self, word: str) -> int | None:
        return self._word_indexes.get(word)

    def get_word(self, label: int) -> str | None:
        if 0 <= label < len(self._words):
            return self._words[label]
        return None

    def get_labels(self) -> Mapping[str, int]:
        return MappingProxyType(self._word_indexes)

    def get_matrix(self) -> np.ndarray:
        return self._matrix

    # ------------------------------ queries --------------------------------
    def get_relation(self, word1: str, word2: str) -> float | None:
        """Normalised strength between two terms, or ``None`` if either is unknown."""
        label1 = self.get_label(word1)
        label2 = self.get_label(word2)
        if label1 is None or label2 is None:
            return None
        return float(self._matrix[label1, label2])

    def get_matrix_row(self, word: str) -> np.ndarray | None:
        label = self.get_label(word)
        if label is None:
            return None
        return self._matrix[label].copy()

    def get_relations(self, word: str) -> list[tuple[str, float]] | None:
        """Every term related to *word* with a non-zero strength, in label order."""
        label = self.get_label(word)
        if label is None:
            return None
        row = self._matrix[label]
        return [(self._words[i], float(row[i])) for i in np.flatnonzero(row > 0.0)]

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"CoOccurrence(words={len(self._words)})"
