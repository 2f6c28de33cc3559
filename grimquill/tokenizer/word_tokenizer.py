from grimquill.tokenizer.base import TokenizerBase
from grimquill.tokenizer.types import (
    TokenType,
    CLOSING_PUNCTUATION,
    OPENING_PUNCTUATION,
)
from typing import List, Sequence
import re
import logging

# Configure logging
logger = logging.getLogger(__name__)


class WordTokenizer(TokenizerBase):
    """Tokenizer for word-level tokenization."""

    token_type = TokenType.WORD
    context_separator = " "

    def __init__(self, lowercase: bool = False):
        """
        Initialize word tokenizer.

        Args:
            lowercase: Whether to convert text to lowercase
        """
        self._word_pattern = re.compile(r"\b[\w']+\b|[.,!?;:\"()\[\]{}]")
        self._lowercase = lowercase
        logger.debug(f"Initialized WordTokenizer with lowercase={lowercase}")

    @property
    def lowercase(self) -> bool:
        return self._lowercase

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text at word level, preserving punctuation.

        Args:
            text: Input text string

        Returns:
            List of words and punctuation marks

        Raises:
            ValueError: If text is not a string

        Examples:
            >>> tokenizer = WordTokenizer()
            >>> tokenizer.tokenize("Hello, world!")
            ['Hello', ',', 'world', '!']
        """
        if not isinstance(text, str):
            raise ValueError("Input must be a string")

        if self._lowercase:
            text = text.lower()

        tokens = self._word_pattern.findall(text)
        logger.debug(f"Tokenized into {len(tokens)} words")
        return tokens

    def detokenize(self, tokens: Sequence[str]) -> str:
        """
        Join word tokens back into text with punctuation-aware spacing.

        Args:
            tokens: Sequence of word and punctuation tokens

        Returns:
            Reconstructed text

        Examples:
            >>> WordTokenizer().detokenize(["(", "Hello", ",", "world", ")", "!"])
            '(Hello, world)!'
        """
        parts: List[str] = []

        for i, token in enumerate(tokens):
            parts.append(token)

            if i + 1 < len(tokens):
                next_token = tokens[i + 1]
                if next_token in CLOSING_PUNCTUATION:
                    continue
                if token in OPENING_PUNCTUATION:
                    continue
                parts.append(" ")

        return "".join(parts)
