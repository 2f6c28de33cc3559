from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from typing import List, Optional, Sequence, Union
import multiprocessing
import logging

from grimquill.chain_table.chain_table import ChainTable
from grimquill.chain_table.types import ChainRecord
from grimquill.tokenizer import create_tokenizer
from grimquill.tokenizer.base import TokenizerBase
from grimquill.tokenizer.types import TokenType
from grimquill.trainer.types import TrainingReport

# Configure logging
logger = logging.getLogger(__name__)

Corpus = Union[str, Sequence[str]]


def iter_lines(texts: Corpus) -> List[str]:
    """
    Split a corpus into its non-empty lines.

    Args:
        texts: A single text or a sequence of texts

    Returns:
        Lines in corpus order, whitespace-only lines removed
    """
    if isinstance(texts, str):
        texts = [texts]

    lines = []
    for text in texts:
        if not isinstance(text, str):
            raise ValueError("Corpus texts must be strings")
        lines.extend(line for line in text.split("\n") if line.strip())
    return lines


def train_chunk(
    chunk: Corpus, order: int, token_type: Union[TokenType, str]
) -> List[ChainRecord]:
    """
    Train an independent table on a chunk of corpus text.

    This is the worker contract for chunked training: it shares no state
    with the caller and returns the flat record form, which merges the same
    way a loaded snapshot does.

    Args:
        chunk: Text or texts to train on
        order: Markov chain order
        token_type: 'word' or 'char'

    Returns:
        List of [context_key, [[successor, count], ...]] records
    """
    tokenizer = create_tokenizer(token_type)
    table = ChainTable(order)
    Trainer().train(table, tokenizer, chunk)
    return table.to_records(tokenizer)


class Trainer:
    """
    Builds chain tables by sliding a window of `order` tokens over every
    line of the training corpus.
    """

    def __init__(self, max_workers: Optional[int] = None):
        """
        Initialize the trainer.

        Args:
            max_workers: Maximum number of workers for chunked training
                (None for CPU count)
        """
        self._max_workers = max_workers or multiprocessing.cpu_count()

    def train(
        self, table: ChainTable, tokenizer: TokenizerBase, texts: Corpus
    ) -> TrainingReport:
        """
        Add every window of the corpus to the table.

        Counts accumulate across calls; nothing is reset.

        Args:
            table: Table to update
            tokenizer: Tokenizer matching the table's token type
            texts: A single text or a sequence of texts

        Returns:
            TrainingReport with line and window totals

        Examples:
            >>> table = ChainTable(1)
            >>> Trainer().train(table, create_tokenizer("word"), "a b a").windows_added
            2
        """
        text_count = 1 if isinstance(texts, str) else len(texts)
        lines = iter_lines(texts)
        if not lines:
            logger.warning("No non-empty lines provided for training")
            return TrainingReport(texts_processed=text_count)

        order = table.order
        windows = 0

        for line in lines:
            tokens = tokenizer.tokenize(line)
            for i in range(len(tokens) - order):
                table.increment(tokens[i:i + order], tokens[i + order])
                windows += 1

        logger.debug(f"Added {windows} windows from {len(lines)} lines")

        return TrainingReport(
            texts_processed=text_count,
            lines_processed=len(lines),
            windows_added=windows,
        )

    def train_parallel(
        self,
        table: ChainTable,
        texts: Corpus,
        token_type: Union[TokenType, str],
        chunk_size: Optional[int] = None,
        use_processes: bool = False,
    ) -> TrainingReport:
        """
        Train on independent chunks of the corpus and merge the results.

        Each chunk is trained into its own table by `train_chunk`; the
        records are merged into `table` once all workers finish, giving the
        same counts as sequential training.

        Args:
            table: Table to merge results into
            texts: A single text or a sequence of texts
            token_type: 'word' or 'char'
            chunk_size: Lines per chunk (None for automatic)
            use_processes: Use ProcessPoolExecutor instead of ThreadPoolExecutor

        Returns:
            TrainingReport with line, window and chunk totals

        Raises:
            Exception: Whatever a failing worker raised
        """
        text_count = 1 if isinstance(texts, str) else len(texts)
        lines = iter_lines(texts)
        if not lines:
            logger.warning("No non-empty lines provided for training")
            return TrainingReport(texts_processed=text_count, chunks=0)

        # Calculate chunk size if not provided
        if chunk_size is None:
            chunk_size = max(1, len(lines) // (self._max_workers * 4))
        if chunk_size < 1:
            raise ValueError("chunk_size must be a positive integer")

        chunks = [lines[i:i + chunk_size] for i in range(0, len(lines), chunk_size)]
        logger.info(
            f"Starting chunked training of {len(lines)} lines in {len(chunks)} chunks"
        )

        # Choose executor type
        executor_class = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
        tokenizer = create_tokenizer(token_type)
        partials: List[ChainTable] = []

        with executor_class(max_workers=self._max_workers) as executor:
            futures = [
                executor.submit(train_chunk, chunk, table.order, token_type)
                for chunk in chunks
            ]

            for future in as_completed(futures):
                records = future.result()
                partials.append(
                    ChainTable.from_records(records, table.order, tokenizer)
                )

        windows = 0
        for partial in partials:
            windows += partial.get_statistics().total_transitions
            table.merge(partial)

        logger.info(f"Chunked training complete: merged {len(partials)} chunk tables")

        return TrainingReport(
            texts_processed=text_count,
            lines_processed=len(lines),
            windows_added=windows,
            chunks=len(chunks),
        )
