from pydantic import BaseModel, Field, ConfigDict


class TrainingReport(BaseModel):
    """Model for the outcome of a training pass."""

    model_config = ConfigDict(frozen=True)

    texts_processed: int = Field(0, ge=0, description="Number of input texts")
    lines_processed: int = Field(
        0, ge=0, description="Number of non-empty lines tokenized"
    )
    windows_added: int = Field(
        0, ge=0, description="Number of (context, successor) observations recorded"
    )
    chunks: int = Field(1, ge=0, description="Number of chunks trained independently")
