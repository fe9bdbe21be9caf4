from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple, Sequence

import numpy as np

from .config import DAMPING, MAX_ITERATIONS, TOLERANCE, WINDOW_SIZE
from .parallel import Mapper, get_mapper
from .utils import get_ranked_scores, get_ranked_strings

_logger = logging.getLogger(__name__)

Graph = dict[str, dict[str, float]]


class WordRank(NamedTuple):
    scores: dict[str, float]
    iterations: int
    converged: bool


def _validate(window_size: int, damping: float, tol: float, max_iterations: int | None) -> None:
    if window_size < 0:
        raise ValueError(f"window_size must be >= 0, got {window_size}")
    if not 0.0 < damping < 1.0:
        raise ValueError(f"damping must be in (0, 1), got {damping}")
    if not tol > 0.0:
        raise ValueError(f"tol must be > 0, got {tol}")
    if max_iterations is not None and max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")


# ──────────────────────────────── graph ──────────────────────────────────── #
def _add_edge(graph: Graph, word1: str, word2: str) -> None:
    edges = graph.setdefault(word1, {})
    edges[word2] = edges.get(word2, 0.0) + 1.0


def create_graph(words: Sequence[str], window_size: int) -> Graph:
    """Undirected co-occurrence graph over *words*.

    Each word is paired with the *window_size* words that follow it; every
    pair of distinct words adds 1.0 to the edge in both directions.
    """
    graph: Graph = {}
    for i, word1 in enumerate(words):
        for word2 in words[i + 1:i + 1 + window_size]:
            if word1 == word2:
                continue
            _add_edge(graph, word1, word2)
            _add_edge(graph, word2, word1)
    return graph


# ─────────────────────────────── scoring ─────────────────────────────────── #
def _score_word(
    edges: Mapping[str, float],
    node_indexes: Mapping[str, int],
    outgoing_weight_sums: Mapping[str, float],
    prev_scores: np.ndarray,
    damping: float,
) -> float:
    total = 0.0
    for neighbor, weight in edges.items():
        outgoing = outgoing_weight_sums[neighbor]
        if outgoing:
            total += weight / outgoing * prev_scores[node_indexes[neighbor]]
    return (1.0 - damping) + damping * total


def rank_words(
    graph: Graph,
    damping: float = DAMPING,
    tol: float = TOLERANCE,
    max_iterations: int | None = MAX_ITERATIONS,
    mapper: Mapper | None = None,
) -> WordRank:
    """Weighted PageRank over *graph*, starting every node at 1.0.

    Iterates until no node moves by ``tol`` or more. Without *max_iterations*
    there is no upper bound on the number of iterations; with it, the loop
    stops after that many and the result is flagged as not converged.
    """
    mapper = mapper or get_mapper()
    with mapper:
        return _power_iteration(graph, damping, tol, max_iterations, mapper)


def _power_iteration(
    graph: Graph,
    damping: float,
    tol: float,
    max_iterations: int | None,
    mapper: Mapper,
) -> WordRank:
    nodes = list(graph)
    edge_maps = list(graph.values())
    node_indexes = {node: i for i, node in enumerate(nodes)}
    outgoing_weight_sums = dict(
        zip(nodes, mapper.map(lambda edges: sum(edges.values()), edge_maps))
    )

    scores = np.ones(len(nodes), dtype=np.float64)
    iterations = 0
    converged = False
    while True:
        prev_scores = scores
        scores = np.array(
            mapper.map(
                lambda edges: _score_word(
                    edges, node_indexes, outgoing_weight_sums, prev_scores, damping
                ),
                edge_maps,
            ),
            dtype=np.float64,
        ).reshape(len(nodes))
        iterations += 1

        if np.all(np.abs(scores - prev_scores) < tol):
            converged = True
            break
        if max_iterations is not None and iterations >= max_iterations:
            _logger.warning(
                "TextRank stopped after %d iterations without converging (tol=%g)",
                iterations, tol,
            )
            break

    _logger.debug("TextRank scored %d nodes in %d iterations", len(nodes), iterations)
    return WordRank(
        scores={node: float(scores[i]) for i, node in enumerate(nodes)},
        iterations=iterations,
        converged=converged,
    )


def _score_phrase(phrase: str, word_scores: Mapping[str, float]) -> float:
    words = phrase.split()
    if not words:
        return 0.0
    return sum(word_scores.get(w, 0.0) for w in words) / len(words)


def rank_phrases(
    phrases: Iterable[str],
    word_scores: Mapping[str, float],
    mapper: Mapper | None = None,
) -> dict[str, float]:
    """Mean word score of each phrase; unscored words count as 0."""
    mapper = mapper or get_mapper()
    phrases = list(phrases)
    return dict(zip(phrases, mapper.map(lambda p: _score_phrase(p, word_scores), phrases)))


def build_text_rank(
    words: Sequence[str],
    phrases: Iterable[str],
    window_size: int = WINDOW_SIZE,
    damping: float = DAMPING,
    tol: float = TOLERANCE,
    max_iterations: int | None = MAX_ITERATIONS,
    mapper: Mapper | None = None,
) -> tuple[dict[str, float], dict[str, float]]:
    """Word scores and phrase scores for one run of TextRank."""
    _validate(window_size, damping, tol, max_iterations)
    mapper = mapper or get_mapper()
    with mapper:
        word_rank = rank_words(create_graph(words, window_size), damping, tol, max_iterations, mapper)
        return word_rank.scores, rank_phrases(phrases, word_rank.scores, mapper)


class TextRank:
    """Keyword and key-phrase ranking for one cleaned text.

    The whole computation happens in the constructor; the resulting score
    maps are read-only.
    """

    def __init__(
        self,
        words: Sequence[str],
        phrases: Iterable[str] = (),
        window_size: int = WINDOW_SIZE,
        damping: float = DAMPING,
        tol: float = TOLERANCE,
        max_iterations: int | None = MAX_ITERATIONS,
        mapper: Mapper | None = None,
    ) -> None:
        _validate(window_size, damping, tol, max_iterations)
        mapper = mapper or get_mapper()

        graph = create_graph(words, window_size)
        with mapper:
            word_rank = rank_words(graph, damping, tol, max_iterations, mapper)
            phrase_scores = rank_phrases(phrases, word_rank.scores, mapper)
        self.iterations = word_rank.iterations
        self.converged = word_rank.converged
        self._word_scores = MappingProxyType(word_rank.scores)
        self._phrase_scores = MappingProxyType(phrase_scores)

    @classmethod
    def from_text(
        cls,
        text: str,
        stopwords: Iterable[str] | None = None,
        punctuation: Iterable[str] | None = None,
        phrase_length: int | None = None,
        **kwargs,
    ) -> "TextRank":
        """Tokenizes raw *text* and ranks its words and phrases."""
        from .extractor import Tokenizer

        tokenizer = Tokenizer(text, stopwords, punctuation)
        return cls(
            tokenizer.split_into_words(),
            tokenizer.split_into_phrases(phrase_length),
            **kwargs,
        )

    # ------------------------------ public API -------------------------------
    def get_word_scores(self) -> Mapping[str, float]:
        return self._word_scores

    def get_phrase_scores(self) -> Mapping[str, float]:
        return self._phrase_scores

    def get_ranked_words(self, n: int) -> list[str]:
        return get_ranked_strings(self._word_scores, n)

    def get_ranked_word_scores(self, n: int) -> list[tuple[str, float]]:
        return get_ranked_scores(self._word_scores, n)

    def get_ranked_phrases(self, n: int) -> list[str]:
        return get_ranked_strings(self._phrase_scores, n)

    def get_ranked_phrase_scores(self, n: int) -> list[tuple[str, float]]:
        return get_ranked_scores(self._phrase_scores, n)
