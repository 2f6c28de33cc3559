"""
grimquill: higher-order Markov chain text generation.

Train a model on a corpus, then sample novel text that statistically
resembles it:

    >>> model = MarkovModel(order=2)
    >>> report = model.train("The quick brown fox jumps over the lazy dog.")
    >>> model.generate(seed="The quick", temperature=0.8)
"""

from grimquill.chain_table import ChainTable, merge_tables
from grimquill.config import ModelConfig
from grimquill.errors import (
    EmptyModelError,
    MalformedSnapshotError,
    MarkovError,
    ValidationError,
)
from grimquill.generator import (
    GenerationRequest,
    GenerationResult,
    Generator,
    StopReason,
    TextFormatter,
)
from grimquill.model import MarkovModel
from grimquill.persistence import ModelSnapshot
from grimquill.sampler import Sampler
from grimquill.tokenizer import TokenType, create_tokenizer
from grimquill.trainer import Trainer, train_chunk

__version__ = "0.1.0"

__all__ = [
    "MarkovModel",
    "ModelConfig",
    "ChainTable",
    "merge_tables",
    "Trainer",
    "train_chunk",
    "Sampler",
    "Generator",
    "GenerationRequest",
    "GenerationResult",
    "StopReason",
    "TextFormatter",
    "ModelSnapshot",
    "TokenType",
    "create_tokenizer",
    "MarkovError",
    "ValidationError",
    "EmptyModelError",
    "MalformedSnapshotError",
]
