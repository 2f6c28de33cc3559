from enum import Enum
from typing import FrozenSet


class TokenType(str, Enum):
    """Enumeration for tokenization granularity."""

    WORD = "word"
    CHAR = "char"


# Marks emitted as standalone tokens in word mode
PUNCTUATION_MARKS: FrozenSet[str] = frozenset('.,!?;:"()[]{}')

# No space is placed before these when detokenizing
CLOSING_PUNCTUATION: FrozenSet[str] = frozenset(".,!?;:)]}")

# No space is placed after these when detokenizing
OPENING_PUNCTUATION: FrozenSet[str] = frozenset("([{")
