from __future__ import annotations

from functools import cmp_to_key
from typing import Mapping

import pandas as pd


# ──────────────────────────────── windowing ──────────────────────────────── #
def get_window_range(window_size: int, index: int, length: int) -> range:
    """Positions within *window_size* of *index*, clamped to ``[0, length)``."""
    start = max(0, index - window_size)
    end = min(length, index + window_size + 1)
    return range(start, end)


# ──────────────────────────────── ranking ────────────────────────────────── #
def _compare(a: tuple[str, float], b: tuple[str, float]) -> int:
    # Higher score first; NaN compares as equal and falls through to the term.
    if a[1] > b[1]:
        return -1
    if a[1] < b[1]:
        return 1
    if a[0] < b[0]:
        return -1
    if a[0] > b[0]:
        return 1
    return 0


def sort_ranked_map(scores: Mapping[str, float]) -> list[tuple[str, float]]:
    """Orders *scores* by score descending, breaking ties by term ascending."""
    return sorted(scores.items(), key=cmp_to_key(_compare))


def get_ranked_scores(scores: Mapping[str, float], n: int) -> list[tuple[str, float]]:
    """The top *n* ``(term, score)`` pairs of *scores*."""
    return sort_ranked_map(scores)[:max(0, n)]


def get_ranked_strings(scores: Mapping[str, float], n: int) -> list[str]:
    """The top *n* terms of *scores*, without their scores."""
    return [term for term, _ in get_ranked_scores(scores, n)]


# ─────────────────────────────── tabulation ──────────────────────────────── #
def keywords_frame(scores: Mapping[str, float], n: int) -> pd.DataFrame:
    """Top *n* entries of *scores* as a table with ``rank``, ``word`` and ``relevance``."""
    ranked = get_ranked_scores(scores, n)
    df = pd.DataFrame(
        {
            "word": [term for term, _ in ranked],
            "relevance": [score for _, score in ranked],
        },
        columns=["word", "relevance"],
    )
    df.insert(0, "rank", range(1, len(df) + 1))
    return df
