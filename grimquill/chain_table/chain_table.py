from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple
import logging

from grimquill.chain_table.types import ChainRecord, ChainTableStatistics
from grimquill.tokenizer.base import TokenizerBase


# Configure logging
logger = logging.getLogger(__name__)

Context = Tuple[str, ...]


class ChainTable:
    """
    Maps fixed-length contexts to the successor tokens observed after them,
    with occurrence counts. Supports incremental updates and merging of
    independently built tables.
    """

    def __init__(self, order: int):
        """
        Initialize an empty chain table.

        Args:
            order: Number of tokens in every context

        Raises:
            ValueError: If order is not a positive integer
        """
        if not isinstance(order, int) or isinstance(order, bool) or order < 1:
            raise ValueError("order must be a positive integer")

        self.order = order
        self._table: Dict[Context, Counter] = {}

        logger.debug(f"Initialized ChainTable with order={order}")

    def increment(self, context: Sequence[str], successor: str, count: int = 1) -> None:
        """
        Record `count` more occurrences of `successor` after `context`.

        Args:
            context: Exactly `order` tokens
            successor: Token observed after the context
            count: Number of occurrences to add (must be positive)

        Raises:
            ValueError: If the context has the wrong length or count < 1
        """
        if count < 1:
            raise ValueError("Count must be positive")

        key = tuple(context)
        if len(key) != self.order:
            raise ValueError(
                f"Context size {len(key)} doesn't match order {self.order}"
            )

        counter = self._table.get(key)
        if counter is None:
            counter = self._table[key] = Counter()
        counter[successor] += count

    def successors(self, context: Sequence[str]) -> Optional[Counter]:
        """
        Get successor counts for a context.

        Args:
            context: Context tokens

        Returns:
            Counter with successor frequencies, or None if the context was
            never observed
        """
        counter = self._table.get(tuple(context))
        if counter is None:
            return None
        return Counter(counter)

    def contexts(self) -> List[Context]:
        """Return every context present in the table."""
        return list(self._table.keys())

    def items(self) -> Iterator[Tuple[Context, Counter]]:
        for context, counter in self._table.items():
            yield context, Counter(counter)

    def as_dict(self) -> Dict[Context, Dict[str, int]]:
        """Plain nested-dict copy of the table."""
        return {context: dict(counter) for context, counter in self._table.items()}

    def __contains__(self, context: object) -> bool:
        if not isinstance(context, (tuple, list)):
            return False
        return tuple(context) in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[Context]:
        return iter(list(self._table))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainTable):
            return NotImplemented
        return self.order == other.order and self._table == other._table

    def __repr__(self) -> str:
        return f"ChainTable(order={self.order}, contexts={len(self._table)})"

    def merge(self, other: "ChainTable") -> None:
        """
        Merge another chain table into this one.

        Successor sets are unioned and counts summed where both tables saw
        the same (context, successor) pair.

        Args:
            other: Another ChainTable instance

        Raises:
            ValueError: If the orders don't match
        """
        if self.order != other.order:
            raise ValueError(
                f"Cannot merge: orders don't match ({self.order} != {other.order})"
            )

        for context, counter in other._table.items():
            target = self._table.get(context)
            if target is None:
                self._table[context] = Counter(counter)
            else:
                target.update(counter)

        logger.debug(f"Merged {len(other)} contexts into table")

    def to_records(self, tokenizer: TokenizerBase) -> List[ChainRecord]:
        """
        Flatten the table into the record form used by workers and snapshots.

        Args:
            tokenizer: Tokenizer that renders contexts as string keys

        Returns:
            List of [context_key, [[successor, count], ...]] pairs
        """
        return [
            (tokenizer.join_context(context), list(counter.items()))
            for context, counter in self._table.items()
        ]

    @classmethod
    def from_records(
        cls,
        records: Iterable[ChainRecord],
        order: int,
        tokenizer: TokenizerBase,
    ) -> "ChainTable":
        """
        Rebuild a table from its record form.

        Records repeating a context are merged into it.

        Args:
            records: Iterable of [context_key, [[successor, count], ...]]
            order: Order of the table
            tokenizer: Tokenizer that parses string keys into contexts

        Returns:
            New ChainTable

        Raises:
            ValueError: If a record is malformed
        """
        table = cls(order)

        for record in records:
            try:
                key, successor_records = record
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid chain record: {record!r}") from e

            if not isinstance(key, str):
                raise ValueError(f"Context key must be a string, got {key!r}")

            context = tokenizer.split_context(key)
            for successor_record in successor_records:
                try:
                    successor, count = successor_record
                except (TypeError, ValueError) as e:
                    raise ValueError(
                        f"Invalid successor record for {key!r}: {successor_record!r}"
                    ) from e
                if (
                    not isinstance(successor, str)
                    or not isinstance(count, int)
                    or isinstance(count, bool)
                ):
                    raise ValueError(
                        f"Invalid successor record for {key!r}: {successor_record!r}"
                    )
                table.increment(context, successor, count)

        return table

    def get_statistics(self) -> ChainTableStatistics:
        """
        Get chain table statistics.

        Returns:
            ChainTableStatistics with context and transition totals
        """
        successors = set()
        total = 0
        for counter in self._table.values():
            successors.update(counter)
            total += sum(counter.values())

        return ChainTableStatistics(
            order=self.order,
            unique_contexts=len(self._table),
            total_transitions=total,
            unique_successors=len(successors),
        )

    def clear(self) -> None:
        """Clear all data from the chain table."""
        self._table.clear()
        logger.info("Cleared all data from chain table")


def merge_tables(*tables: ChainTable) -> ChainTable:
    """
    Merge tables into a new one without modifying the inputs.

    Args:
        tables: One or more ChainTable instances of the same order

    Returns:
        New ChainTable holding the summed counts

    Raises:
        ValueError: If no tables are given or their orders differ
    """
    if not tables:
        raise ValueError("At least one table is required")

    merged = ChainTable(tables[0].order)
    for table in tables:
        merged.merge(table)
    return merged
