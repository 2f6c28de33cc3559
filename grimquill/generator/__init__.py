from typing import FrozenSet, Optional
import random

from grimquill.chain_table.chain_table import ChainTable
from grimquill.generator.engine import Generator, SENTENCE_SEPARATOR
from grimquill.generator.formatter import TextFormatter
from grimquill.generator.types import (
    GenerationRequest,
    GenerationResult,
    StopReason,
)
from grimquill.tokenizer.base import TokenizerBase


def create_generator(
    table: ChainTable,
    tokenizer: TokenizerBase,
    stop_tokens: FrozenSet[str] = frozenset({".", "!", "?"}),
    seed: Optional[int] = None,
) -> Generator:
    """
    Factory function to create a Generator instance.

    Args:
        table: ChainTable to generate from
        tokenizer: Tokenizer matching the table's token type
        stop_tokens: Tokens that may end generation
        seed: Seed for the random source (None for nondeterministic)

    Returns:
        Initialized Generator instance
    """
    return Generator(
        table=table,
        tokenizer=tokenizer,
        stop_tokens=stop_tokens,
        rng=random.Random(seed),
    )


__all__ = [
    "create_generator",
    "Generator",
    "TextFormatter",
    "GenerationRequest",
    "GenerationResult",
    "StopReason",
    "SENTENCE_SEPARATOR",
]
