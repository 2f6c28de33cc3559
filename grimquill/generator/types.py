from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from grimquill.errors import ValidationError


class StopReason(str, Enum):
    """Enumeration for why generation ended."""
    DEAD_END = "dead_end"
    SENTENCE_END = "sentence_end"
    MAX_LENGTH = "max_length"


class GenerationRequest(BaseModel):
    """Parameters for a single generation run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_length: int = Field(
        100, ge=1, description="Total token budget, including seed/initial context"
    )
    temperature: float = Field(0.8, gt=0.0, description="Controls randomness")
    stop_probability: float = Field(
        0.7, ge=0.0, le=1.0, description="Chance of stopping at a stop token"
    )
    seed: Optional[str] = Field(None, description="Text to start generation from")
    multiple_sentence_probability: float = Field(
        0.0,
        ge=0.0,
        lt=1.0,
        description="Chance of continuing with another sentence instead of stopping",
    )

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty seed as no seed."""
        return v or None

    @classmethod
    def build(cls, **kwargs: Any) -> "GenerationRequest":
        """
        Create a request, translating pydantic failures into ValidationError.

        Raises:
            ValidationError: If any parameter is out of range
        """
        try:
            return cls(**kwargs)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid generation request: {e}") from e


class GenerationResult(BaseModel):
    """Outcome of a generation run."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Formatted generated text")
    tokens: List[str] = Field(default_factory=list, description="Raw generated tokens")
    stop_reason: StopReason = Field(..., description="Why generation ended")
    seeded: bool = Field(False, description="Whether generation started from a seed")
