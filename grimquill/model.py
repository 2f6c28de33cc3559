"""
Main Markov chain text generator.
Integrates tokenizer, chain table, trainer and generator into one model.
"""

from typing import FrozenSet, Iterable, Optional, Union
from pathlib import Path
import logging
import random

from grimquill.chain_table.chain_table import ChainTable
from grimquill.chain_table.types import ChainRecord, ChainTableStatistics
from grimquill.config import ModelConfig, build_model_config
from grimquill.errors import MalformedSnapshotError
from grimquill.generator.engine import Generator
from grimquill.generator.types import GenerationRequest, GenerationResult
from grimquill.persistence.snapshot import (
    deserialize_snapshot,
    load_snapshot,
    save_snapshot,
    serialize_snapshot,
)
from grimquill.persistence.types import ModelSnapshot
from grimquill.tokenizer import create_tokenizer
from grimquill.tokenizer.base import TokenizerBase
from grimquill.tokenizer.types import TokenType
from grimquill.trainer.trainer import Corpus, Trainer
from grimquill.trainer.types import TrainingReport

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class MarkovModel:
    """
    Higher-order Markov chain text model.

    Owns one ModelConfig and one ChainTable for its lifetime. Training is
    cumulative; generation never modifies the table.
    """

    def __init__(
        self,
        order: int = 2,
        token_type: Union[TokenType, str] = TokenType.WORD,
        stop_tokens: Optional[Iterable[str]] = None,
        rng: Optional[random.Random] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize an untrained model.

        Args:
            order: Number of preceding tokens used as context
            token_type: 'word' or 'char'
            stop_tokens: Tokens that may end generation (default: . ! ?)
            rng: Random source for generation (seed it for reproducible output)
            max_workers: Maximum number of workers for chunked training

        Raises:
            ValidationError: If the configuration is invalid
        """
        self._config = build_model_config(order, token_type, stop_tokens)
        self._table = ChainTable(self._config.order)
        self._tokenizer = create_tokenizer(self._config.token_type)
        self._trainer = Trainer(max_workers=max_workers)
        self._generator = Generator(
            table=self._table,
            tokenizer=self._tokenizer,
            stop_tokens=self._config.stop_tokens,
            rng=rng,
        )

        logger.info(
            f"Initialized MarkovModel with order={self.order}, "
            f"token_type={self.token_type.value}"
        )

    @property
    def config(self) -> ModelConfig:
        return self._config

    @property
    def order(self) -> int:
        return self._config.order

    @property
    def token_type(self) -> TokenType:
        return self._config.token_type

    @property
    def stop_tokens(self) -> FrozenSet[str]:
        return self._config.stop_tokens

    @property
    def table(self) -> ChainTable:
        return self._table

    @property
    def tokenizer(self) -> TokenizerBase:
        return self._tokenizer

    @property
    def rng(self) -> random.Random:
        return self._generator.rng

    def train(self, corpus: Corpus) -> TrainingReport:
        """
        Train the model on one or more texts.

        Args:
            corpus: Text or list of texts; each is split into lines

        Returns:
            TrainingReport with line and window totals
        """
        report = self._trainer.train(self._table, self._tokenizer, corpus)
        logger.info(
            f"Trained on {report.lines_processed} lines: "
            f"{report.windows_added} windows, {len(self._table)} contexts"
        )
        return report

    def train_parallel(
        self,
        corpus: Corpus,
        chunk_size: Optional[int] = None,
        use_processes: bool = False,
    ) -> TrainingReport:
        """
        Train on independent corpus chunks in a worker pool and merge them.

        Produces the same table as `train` on the same corpus.

        Args:
            corpus: Text or list of texts
            chunk_size: Lines per chunk (None for automatic)
            use_processes: Use worker processes instead of threads

        Returns:
            TrainingReport with line, window and chunk totals
        """
        return self._trainer.train_parallel(
            self._table,
            corpus,
            self.token_type,
            chunk_size=chunk_size,
            use_processes=use_processes,
        )

    def merge_records(self, records: Iterable[ChainRecord]) -> None:
        """
        Merge chunk-worker output into this model.

        Args:
            records: [context_key, [[successor, count], ...]] records

        Raises:
            ValueError: If the records are malformed
        """
        partial = ChainTable.from_records(records, self.order, self._tokenizer)
        self._table.merge(partial)
        logger.info(f"Merged {len(partial)} contexts from records")

    def merge(self, other: "MarkovModel") -> None:
        """
        Merge another model's counts into this one.

        Args:
            other: Model with the same order and token type

        Raises:
            ValueError: If the models are not compatible
        """
        if other.token_type != self.token_type:
            raise ValueError("Cannot merge: token types don't match")
        self._table.merge(other.table)

    def generate(
        self,
        request: Optional[GenerationRequest] = None,
        **options,
    ) -> str:
        """
        Generate text from the trained model.

        Args:
            request: Complete GenerationRequest; alternatively pass its fields
                as keyword arguments (max_length, temperature,
                stop_probability, seed, multiple_sentence_probability)

        Returns:
            Generated, formatted text

        Raises:
            ValidationError: If the parameters or seed are invalid
            EmptyModelError: If there is no seed and the model is untrained
        """
        return self.generate_result(request, **options).text

    def generate_result(
        self,
        request: Optional[GenerationRequest] = None,
        **options,
    ) -> GenerationResult:
        """
        Generate text and report the raw tokens and stop reason.

        Args:
            request: Complete GenerationRequest, or keyword fields

        Returns:
            GenerationResult
        """
        if request is None:
            request = GenerationRequest.build(**options)
        elif options:
            raise TypeError("Pass either a GenerationRequest or keyword options, not both")

        return self._generator.generate(request)

    def get_stats(self) -> ChainTableStatistics:
        """Get current chain table statistics."""
        return self._table.get_statistics()

    def to_snapshot(self) -> ModelSnapshot:
        """
        Capture the complete model state.

        Returns:
            ModelSnapshot with configuration and all chain records
        """
        return ModelSnapshot(
            order=self.order,
            token_type=self.token_type,
            stop_tokens=sorted(self.stop_tokens),
            model=self._table.to_records(self._tokenizer),
        )

    @classmethod
    def from_snapshot(
        cls, snapshot: ModelSnapshot, rng: Optional[random.Random] = None
    ) -> "MarkovModel":
        """
        Rebuild a model from a snapshot.

        Args:
            snapshot: Validated ModelSnapshot
            rng: Random source for generation

        Returns:
            New MarkovModel

        Raises:
            MalformedSnapshotError: If the snapshot contents are inconsistent
        """
        try:
            config = build_model_config(
                snapshot.order, snapshot.token_type, snapshot.stop_tokens
            )
            tokenizer = create_tokenizer(config.token_type)
            table = ChainTable.from_records(snapshot.model, config.order, tokenizer)
        except ValueError as e:
            raise MalformedSnapshotError(f"Invalid model snapshot: {e}") from e

        model = cls(
            order=config.order,
            token_type=config.token_type,
            stop_tokens=config.stop_tokens,
            rng=rng,
        )
        model.table.merge(table)
        return model

    def dumps(self) -> bytes:
        """Serialize the model to JSON bytes."""
        return serialize_snapshot(self.to_snapshot())

    @classmethod
    def loads(
        cls, data: Union[bytes, str], rng: Optional[random.Random] = None
    ) -> "MarkovModel":
        """
        Deserialize a model from JSON.

        Raises:
            MalformedSnapshotError: If the data is not a valid snapshot
        """
        return cls.from_snapshot(deserialize_snapshot(data), rng=rng)

    def save(self, filepath: Union[str, Path]) -> None:
        """
        Save the model to a JSON file, creating parent directories.

        Args:
            filepath: Path to save the model
        """
        save_snapshot(self.to_snapshot(), filepath)

    @classmethod
    def load(
        cls, filepath: Union[str, Path], rng: Optional[random.Random] = None
    ) -> "MarkovModel":
        """
        Load a model from a JSON file.

        Args:
            filepath: Path to the saved model
            rng: Random source for generation

        Returns:
            Loaded MarkovModel

        Raises:
            FileNotFoundError: If the file does not exist
            MalformedSnapshotError: If the file contents are invalid
        """
        model = cls.from_snapshot(load_snapshot(filepath), rng=rng)
        logger.info(f"Model loaded from {filepath}")
        return model
