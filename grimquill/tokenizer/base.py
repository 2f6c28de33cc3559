from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from grimquill.tokenizer.types import TokenType


class TokenizerBase(ABC):
    """Abstract base class for tokenizers."""

    token_type: TokenType
    context_separator: str

    @abstractmethod
    def tokenize(self, text: str) -> List[str]:
        """
        Abstract method for tokenization.

        Args:
            text: Input text to tokenize

        Returns:
            List of tokens
        """
        pass

    @abstractmethod
    def detokenize(self, tokens: Sequence[str]) -> str:
        """
        Abstract method for reconstructing text from tokens.

        Args:
            tokens: Sequence of tokens

        Returns:
            Reconstructed text
        """
        pass

    def join_context(self, context: Sequence[str]) -> str:
        """Render a context tuple as its flat string key."""
        return self.context_separator.join(context)

    def split_context(self, key: str) -> Tuple[str, ...]:
        """Parse a flat context key back into a context tuple."""
        return tuple(key.split(self.context_separator))
