from pathlib import Path
from typing import Union
import logging

from pydantic import ValidationError as PydanticValidationError

from grimquill.errors import MalformedSnapshotError
from grimquill.persistence.types import ModelSnapshot

# Configure logging
logger = logging.getLogger(__name__)


def serialize_snapshot(snapshot: ModelSnapshot) -> bytes:
    """
    Encode a snapshot as UTF-8 JSON.

    Args:
        snapshot: Snapshot to encode

    Returns:
        JSON document as bytes
    """
    return snapshot.model_dump_json(by_alias=True, indent=2).encode("utf-8")


def deserialize_snapshot(data: Union[bytes, str]) -> ModelSnapshot:
    """
    Decode and validate a JSON snapshot.

    Args:
        data: JSON document as bytes or text

    Returns:
        Validated ModelSnapshot

    Raises:
        MalformedSnapshotError: If the document is not valid JSON or fails
            structural validation
    """
    try:
        return ModelSnapshot.model_validate_json(data)
    except PydanticValidationError as e:
        raise MalformedSnapshotError(f"Invalid model snapshot: {e}") from e


def save_snapshot(snapshot: ModelSnapshot, filepath: Union[str, Path]) -> None:
    """
    Save a snapshot to file.

    Args:
        snapshot: Snapshot to save
        filepath: Path to save file

    Raises:
        IOError: If file cannot be written
    """
    filepath = Path(filepath)

    # Ensure parent directory exists
    filepath.parent.mkdir(parents=True, exist_ok=True)

    try:
        filepath.write_bytes(serialize_snapshot(snapshot))
    except OSError as e:
        logger.error(f"Failed to save model snapshot: {str(e)}")
        raise IOError(f"Could not save model snapshot: {str(e)}") from e

    logger.info(f"Saved model snapshot to {filepath}")


def load_snapshot(filepath: Union[str, Path]) -> ModelSnapshot:
    """
    Load a snapshot from file.

    Args:
        filepath: Path to load file

    Returns:
        Validated ModelSnapshot

    Raises:
        FileNotFoundError: If the file does not exist
        MalformedSnapshotError: If the file contents are invalid
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    snapshot = deserialize_snapshot(filepath.read_bytes())
    logger.info(f"Loaded model snapshot from {filepath}")
    return snapshot
