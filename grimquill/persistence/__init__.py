"""
Persistence of Markov models as JSON snapshots.
"""

from grimquill.persistence.snapshot import (
    deserialize_snapshot,
    load_snapshot,
    save_snapshot,
    serialize_snapshot,
)
from grimquill.persistence.types import ModelSnapshot

__all__ = [
    "ModelSnapshot",
    "serialize_snapshot",
    "deserialize_snapshot",
    "save_snapshot",
    "load_snapshot",
]
