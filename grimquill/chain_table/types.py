from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Tuple

# Flat record form shared by chunk workers and persisted snapshots:
# [context_key, [[successor, count], ...]]
SuccessorRecord = Tuple[str, int]
ChainRecord = Tuple[str, List[SuccessorRecord]]


class ChainTableStatistics(BaseModel):
    """Model for chain table statistics."""

    model_config = ConfigDict(frozen=True)

    order: int = Field(..., description="Number of tokens in every context")
    unique_contexts: int = Field(..., description="Number of distinct contexts")
    total_transitions: int = Field(
        ..., description="Sum of all successor counts across the table"
    )
    unique_successors: int = Field(
        ..., description="Number of distinct successor tokens across the table"
    )

    @field_validator("unique_contexts", "total_transitions", "unique_successors")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate that counts are non-negative."""
        if v < 0:
            raise ValueError("Count values must be non-negative")
        return v
