from typing import Optional

from grimquill.trainer.trainer import Trainer, iter_lines, train_chunk
from grimquill.trainer.types import TrainingReport


def create_trainer(max_workers: Optional[int] = None) -> Trainer:
    """
    Factory function to create a Trainer instance.

    Args:
        max_workers: Maximum number of workers for chunked training

    Returns:
        Configured Trainer instance
    """
    return Trainer(max_workers=max_workers)


__all__ = [
    "create_trainer",
    "Trainer",
    "TrainingReport",
    "iter_lines",
    "train_chunk",
]
