from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar, Union

from .config import PARALLEL, WORKERS

_logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class SerialMapper:
    """Runs every unit of work in the calling thread, in order."""

    parallel = False

    def __enter__(self) -> "SerialMapper":
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> list[R]:
        return [fn(item) for item in items]

    def __repr__(self) -> str:
        return "SerialMapper()"


class ThreadPoolMapper:
    """Fans work out over a thread pool and gathers results in input order.

    Used as a context manager, the mapper keeps one executor alive for the
    whole block (nested blocks share it); outside a block each call gets a
    short-lived executor. Work items must only read shared inputs and return
    their result; writing shared state from ``fn`` is not safe.
    """

    parallel = True

    def __init__(self, max_workers: int | None = None) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None
        self._depth = 0

    def __enter__(self) -> "ThreadPoolMapper":
        if self._depth == 0:
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers)
        self._depth += 1
        return self

    def __exit__(self, *exc_info) -> None:
        self._depth -= 1
        if self._depth == 0:
            self._executor.shutdown()
            self._executor = None

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> list[R]:
        items = list(items)
        if len(items) < 2:
            return [fn(item) for item in items]
        if self._executor is not None:
            return list(self._executor.map(fn, items))
        with ThreadPoolExecutor(max_workers=self.max_workers) as ex:
            return list(ex.map(fn, items))

    def __repr__(self) -> str:
        return f"ThreadPoolMapper(max_workers={self.max_workers})"


Mapper = Union[SerialMapper, ThreadPoolMapper]


def get_mapper(parallel: bool | None = None, max_workers: int | None = None) -> Mapper:
    """Returns the mapper selected by the arguments or, failing that, by config."""
    parallel = PARALLEL if parallel is None else parallel
    if not parallel:
        return SerialMapper()
    mapper = ThreadPoolMapper(max_workers if max_workers is not None else WORKERS)
    _logger.debug("Using %r", mapper)
    return mapper
