"""Query plan nodes that perform sorting of data.

``arrange()`` works similarly to ``filter()`` except that instead
of selecting rows, it changes their order. It takes a set of
column names to order by and if more than one column name is
provided, each additional column will be used to break ties
in the values of preceding columns.

This module implements the sorting capabilities.
"""

from typing import Iterator

import pyarrow as pa

from .base import QueryPlanNode


class SortNode(QueryPlanNode):
    """Sort data in-memory based on one or more columns.

    The node expects a list of columns and a list of
    sort directions. The data will be sorted based on
    the columns in the order they are provided.

    Missing values are always sorted at the end,
    whatever the direction of the sorting is.

    >>> import pyarrow as pa
    >>> from tidyground.compute import PyArrowTableDataSource
    >>> data = pa.record_batch({"dep_delay": [2, None, 4, -1]})
    >>> # Sort the data in descending order
    >>> sort = SortNode(["dep_delay"], [True], PyArrowTableDataSource(data))
    >>> next(sort.batches())
    pyarrow.RecordBatch
    dep_delay: int64
    ----
    dep_delay: [4,2,-1,null]
    """

    def __init__(
        self, keys: list[str], descending: list[bool], child: QueryPlanNode
    ) -> None:
        """
        :param keys: The columns to sort by in the order they should be sorted.
        :param descending: If each columns should be sorted in a descending order.
        :param child: The node emitting the data to be sorted.
        """
        if len(keys) != len(descending):
            raise ValueError("Keys and descending must have the same length")

        self.sorting = [
            (key, "descending" if desc else "ascending", "at_end")
            for key, desc in zip(keys, descending)
        ]
        self.child = child

    def __str__(self) -> str:
        return f"SortNode(sorting={self.sorting}, {self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """The sorting to the child node.

        Batches provided by child node are accumulated
        until they are all loaded in memory, than they
        are merged and sorted as an unique table.

        Sorting is stable, rows with equal keys
        keep the order they had in the input.
        """
        batches = list(self.child.batches())
        if len(batches) == 1:
            yield batches[0].sort_by(self.sorting)
            return

        # The process converts the batches to tables
        # as converting to and from tables is a zero-copy
        # operation and tables can be concatenated at no cost
        # when promote_options is set to none as they are based on ChunkedArrays.
        table = pa.concat_tables(
            [pa.table(batch) for batch in batches], promote_options="none"
        )
        table = table.sort_by(self.sorting)
        # to_batches is a zero-copy operation when maximum chunk size is None
        yield from table.to_batches() or [
            pa.RecordBatch.from_pylist([], schema=table.schema)
        ]
