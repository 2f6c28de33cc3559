from typing import Annotated, List, Tuple
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

from grimquill.tokenizer.types import TokenType

Count = Annotated[StrictInt, Field(gt=0)]


class ModelSnapshot(BaseModel):
    """
    Complete persisted state of a Markov model.

    Field aliases match the JSON layout written to disk:
    {"order", "tokenType", "stopTokens", "model"}.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    order: Annotated[StrictInt, Field(ge=1)] = Field(
        ..., description="Markov chain order"
    )
    token_type: TokenType = Field(..., alias="tokenType", description="Tokenization mode")
    stop_tokens: List[StrictStr] = Field(
        ..., alias="stopTokens", description="Tokens that may end generation"
    )
    model: List[Tuple[StrictStr, List[Tuple[StrictStr, Count]]]] = Field(
        ..., description="[context_key, [[successor, count], ...]] records"
    )

    @field_validator("model")
    @classmethod
    def validate_unique_contexts(
        cls, v: List[Tuple[str, List[Tuple[str, int]]]]
    ) -> List[Tuple[str, List[Tuple[str, int]]]]:
        """Validate that every context appears once with at least one successor."""
        seen = set()
        for key, successors in v:
            if key in seen:
                raise ValueError(f"Duplicate context key {key!r}")
            if not successors:
                raise ValueError(f"Context {key!r} has no successors")
            seen.add(key)
        return v
