"""Keyword and key-phrase ranking.

This package provides:
- Windowed co-occurrence matrices over a fixed vocabulary
- TextRank word scores and mean-of-words phrase scores
- Deterministic top-N ranking of score maps
- A spaCy-based tokenizer that prepares raw text for both
"""
from .co_occurrence import CoOccurrence
from .extractor import DocumentProcessor, Tokenizer
from .parallel import SerialMapper, ThreadPoolMapper, get_mapper
from .text_rank import TextRank, build_text_rank
from .utils import (
    get_ranked_scores,
    get_ranked_strings,
    get_window_range,
    keywords_frame,
    sort_ranked_map,
)

__all__ = [
    "CoOccurrence",
    "DocumentProcessor",
    "SerialMapper",
    "TextRank",
    "ThreadPoolMapper",
    "Tokenizer",
    "build_text_rank",
    "get_mapper",
    "get_ranked_scores",
    "get_ranked_strings",
    "get_window_range",
    "keywords_frame",
    "sort_ranked_map",
]
