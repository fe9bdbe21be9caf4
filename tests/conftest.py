"""Shared fixtures for the keyrank test-suite."""

import pytest

from keyrank.parallel import SerialMapper, ThreadPoolMapper


@pytest.fixture(params=["serial", "threads"])
def mapper(request):
    """Every engine test runs once per execution strategy."""
    if request.param == "serial":
        return SerialMapper()
    return ThreadPoolMapper(max_workers=4)


@pytest.fixture
def path_words() -> list[str]:
    """a - b - c: the middle word links the other two."""
    return ["a", "b", "c"]
