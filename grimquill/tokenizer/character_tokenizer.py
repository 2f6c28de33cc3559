from grimquill.tokenizer.base import TokenizerBase
from grimquill.tokenizer.types import TokenType
from typing import List, Sequence, Tuple
import logging

# Configure logging
logger = logging.getLogger(__name__)


class CharacterTokenizer(TokenizerBase):
    """Tokenizer for character-level tokenization."""

    token_type = TokenType.CHAR
    context_separator = ""

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text at character level.

        Args:
            text: Input text string

        Returns:
            List of individual characters including spaces

        Raises:
            ValueError: If text is not a string

        Examples:
            >>> tokenizer = CharacterTokenizer()
            >>> tokenizer.tokenize("Hello")
            ['H', 'e', 'l', 'l', 'o']
        """
        if not isinstance(text, str):
            raise ValueError("Input must be a string")

        logger.debug(f"Tokenizing {len(text)} characters")
        return list(text)

    def detokenize(self, tokens: Sequence[str]) -> str:
        """Concatenate character tokens with no separator."""
        return "".join(tokens)

    def split_context(self, key: str) -> Tuple[str, ...]:
        # Every character token is exactly one character long
        return tuple(key)
