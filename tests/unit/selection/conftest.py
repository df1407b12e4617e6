from typing import Callable, Tuple

import pytest

from whowon.core.parser import Entry, parse_entries


@pytest.fixture
def entries_from() -> Callable[[str], Tuple[Entry, ...]]:
    """Parse raw text into entries. Every line in the text must carry a number."""
    def _parse(text: str) -> Tuple[Entry, ...]:
        return parse_entries(text).entries
    return _parse


@pytest.fixture
def scenario_entries(entries_from) -> Tuple[Entry, ...]:
    """Alice 10, Bob 12, Carol 8 at positions 0, 1, 2."""
    return entries_from("Alice 10\nBob 12\nCarol 8")


@pytest.fixture
def tied_entries(entries_from) -> Tuple[Entry, ...]:
    """Alice 8 and Carol 8 tie at distance 2 from target 10; Bob 12 too."""
    return entries_from("Alice 8\nBob 12\nCarol 8")
