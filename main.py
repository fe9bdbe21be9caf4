#!/usr/bin/env python3
"""
Command-line entry point: rank the keywords and key phrases of a text.

Usage:
    python main.py "some text to analyse" --top 10
    cat article.txt | python main.py --parallel
"""
from __future__ import annotations

import argparse
import logging
import sys

from keyrank.config import DAMPING, LOG_LEVEL, MAX_ITERATIONS, TOLERANCE, WINDOW_SIZE
from keyrank.parallel import get_mapper
from keyrank.text_rank import TextRank
from keyrank.utils import keywords_frame


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("text", nargs="?", help="text to analyse (default: stdin)")
    parser.add_argument("--top", type=int, default=10, help="rows to print per table")
    parser.add_argument("--window", type=int, default=WINDOW_SIZE)
    parser.add_argument("--damping", type=float, default=DAMPING)
    parser.add_argument("--tol", type=float, default=TOLERANCE)
    parser.add_argument("--max-iterations", type=int, default=MAX_ITERATIONS)
    parser.add_argument("--phrase-length", type=int, default=None)
    parser.add_argument("--parallel", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    text = args.text if args.text is not None else sys.stdin.read()
    if not text.strip():
        print("[!] No text given. Nothing to rank.")
        return 1

    try:
        rank = TextRank.from_text(
            text,
            phrase_length=args.phrase_length,
            window_size=args.window,
            damping=args.damping,
            tol=args.tol,
            max_iterations=args.max_iterations,
            mapper=get_mapper(args.parallel or None),
        )
    except ValueError as exc:
        print(f"[!] {exc}")
        return 2

    print(f"━━ Keywords ({rank.iterations} iterations)")
    print(keywords_frame(rank.get_word_scores(), args.top).to_string(index=False))
    print("\n━━ Key phrases")
    print(keywords_frame(rank.get_phrase_scores(), args.top).to_string(index=False))
    return 0


# ──────────────────────────────── main ───────────────────────────────────── #
if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(main())
