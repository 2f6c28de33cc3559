"""
Shared pytest fixtures for Markov chain tests.
"""
import random
from typing import Callable, List, Sequence

import pytest


class ScriptedRandom(random.Random):
    """Random source that replays a fixed sequence of draws.

    Once the script runs out, the last draw repeats.
    """

    def __new__(cls, draws: Sequence[float]):
        return super().__new__(cls)

    def __init__(self, draws: Sequence[float]):
        super().__init__(0)
        self._draws = list(draws)
        self._index = 0

    def random(self) -> float:
        value = self._draws[min(self._index, len(self._draws) - 1)]
        self._index += 1
        return value

    @property
    def calls(self) -> int:
        return self._index


@pytest.fixture
def scripted_rng() -> Callable[[Sequence[float]], ScriptedRandom]:
    """Factory for random sources with scripted draws."""
    return ScriptedRandom


@pytest.fixture
def sample_corpus() -> List[str]:
    """Sample text corpus for training."""
    return [
        "The quick brown fox jumps over the lazy dog.",
        "A quick brown dog jumps over the lazy fox.",
        "The lazy dog sleeps under the warm sun.",
        "Brown foxes are quick and clever animals!",
        "Dogs and foxes are both mammals that live in many places.",
        "The sun shines brightly on a warm summer day.",
        "Do foxes sleep under the warm sun?",
    ]


@pytest.fixture
def multiline_text() -> str:
    """A single text with blank and whitespace-only lines."""
    return (
        "The quick brown fox jumps over the lazy dog.\n"
        "\n"
        "   \n"
        "A quick brown fox jumps over a lazy dog.\n"
        "The lazy dog watches the quick brown fox jump.\n"
        "The fox jumps quickly over the lazy dog.\n"
    )


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)
