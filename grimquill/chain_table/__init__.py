from grimquill.chain_table.chain_table import ChainTable, Context, merge_tables
from grimquill.chain_table.types import (
    ChainRecord,
    ChainTableStatistics,
    SuccessorRecord,
)


def create_chain_table(order: int = 2) -> ChainTable:
    """
    Factory function to create a chain table instance.

    Args:
        order: Number of tokens in every context (default: 2)

    Returns:
        Empty ChainTable

    Examples:
        >>> table = create_chain_table()
        >>> len(table)
        0
    """
    return ChainTable(order)


__all__ = [
    "create_chain_table",
    "merge_tables",
    "ChainTable",
    "ChainTableStatistics",
    "ChainRecord",
    "SuccessorRecord",
    "Context",
]
