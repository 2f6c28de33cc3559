"""
Tokenizer Component for the Markov chain text generator.

This module provides word-level and character-level tokenization together
with the matching detokenization used to turn generated token sequences back
into readable text.
"""

from typing import Union

from grimquill.tokenizer.base import TokenizerBase
from grimquill.tokenizer.character_tokenizer import CharacterTokenizer
from grimquill.tokenizer.word_tokenizer import WordTokenizer
from grimquill.tokenizer.types import TokenType


def create_tokenizer(
    token_type: Union[TokenType, str] = TokenType.WORD, lowercase: bool = False
) -> TokenizerBase:
    """
    Factory function to create a tokenizer instance.

    Args:
        token_type: Tokenization granularity ('word' or 'char')
        lowercase: Whether to convert text to lowercase for word tokenization

    Returns:
        Configured tokenizer instance

    Raises:
        ValueError: If token_type is not a known tokenization mode

    Examples:
        >>> tokenizer = create_tokenizer("char")
        >>> isinstance(tokenizer, CharacterTokenizer)
        True
    """
    token_type = TokenType(token_type)

    if token_type == TokenType.CHAR:
        return CharacterTokenizer()
    return WordTokenizer(lowercase=lowercase)


__all__ = [
    "create_tokenizer",
    "TokenizerBase",
    "WordTokenizer",
    "CharacterTokenizer",
    "TokenType",
]
