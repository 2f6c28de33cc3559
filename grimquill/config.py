from typing import Any, Dict, FrozenSet, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from grimquill.errors import ValidationError
from grimquill.tokenizer.types import TokenType

DEFAULT_STOP_TOKENS: FrozenSet[str] = frozenset({".", "!", "?"})


class ModelConfig(BaseModel):
    """Immutable configuration of a Markov model."""

    model_config = ConfigDict(frozen=True)

    order: int = Field(2, ge=1, description="Number of preceding tokens used as context")
    token_type: TokenType = Field(TokenType.WORD, description="Tokenization granularity")
    stop_tokens: FrozenSet[str] = Field(
        default=DEFAULT_STOP_TOKENS,
        description="Tokens that may end a generated sentence",
    )

    @field_validator("stop_tokens")
    @classmethod
    def validate_stop_tokens(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        """Validate that stop tokens are non-empty strings."""
        if any(not token for token in v):
            raise ValueError("Stop tokens cannot be empty strings")
        return v


def build_model_config(
    order: int = 2,
    token_type: Union[TokenType, str] = TokenType.WORD,
    stop_tokens: Optional[Iterable[str]] = None,
) -> ModelConfig:
    """
    Build a ModelConfig, translating pydantic failures into ValidationError.

    Args:
        order: Markov chain order (positive integer)
        token_type: 'word' or 'char'
        stop_tokens: Tokens that may end generation (default: . ! ?)

    Returns:
        Validated ModelConfig

    Raises:
        ValidationError: If any value is invalid
    """
    values: Dict[str, Any] = {"order": order, "token_type": token_type}
    if stop_tokens is not None:
        if isinstance(stop_tokens, str):
            raise ValidationError("stop_tokens must be a collection of strings")
        values["stop_tokens"] = frozenset(stop_tokens)

    try:
        return ModelConfig(**values)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid model configuration: {e}") from e
