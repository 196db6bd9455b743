"""
Shared fixtures for the token-studio test suite.

Provides test fixtures for:
- Deterministic clocks and id factories
- Token stores (empty and with generated primitives)
- Theme registries
- Logger isolation between tests
"""

import itertools
import logging
from collections.abc import Iterator

import pytest

from token_studio.generators.palette import generate_palette
from token_studio.store import TokenStore
from token_studio.themes import ThemeRegistry
from token_studio.token_logging import ROOT_LOGGER_NAME


class FakeClock:
    """Millisecond clock that advances by one on every call."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


@pytest.fixture(autouse=True)
def isolate_logging() -> Iterator[None]:
    """Undo any setup_logging() call so caplog sees package records."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def clock() -> FakeClock:
    """A deterministic millisecond clock."""
    return FakeClock()


@pytest.fixture()
def id_factory():
    """Sequential token ids: tok-1, tok-2, ..."""
    counter = itertools.count(1)
    return lambda _now: f"tok-{next(counter)}"


@pytest.fixture()
def store(clock, id_factory) -> TokenStore:
    """An empty store with deterministic ids and timestamps."""
    return TokenStore(clock=clock, id_factory=id_factory)


@pytest.fixture()
def registry(clock) -> ThemeRegistry:
    """A theme registry holding only the system theme."""
    return ThemeRegistry(clock=clock)


@pytest.fixture()
def primitives_store(store) -> TokenStore:
    """A store with the default color palettes generated."""
    generate_palette(store)
    return store
