"""Query plan nodes that implement filtering of rows.

Picking observations by their values is the first verb
of the transformation chapter, ``filter(flights, month == 1, day == 1)``.

This module implements the basic filtering capabilities.
"""

from .base import QueryPlanNode
from .expressions import Expression


class FilterNode(QueryPlanNode):
    """Filter data based on a predicate expression.

    The filter expects an expression that when applied
    to the batch of data being filtered returns ``true``
    or ``false`` for each row in the data to mark which
    rows have to be preserved and which rows have to be discarded.

    Rows for which the predicate is missing (``null``)
    are discarded too, ``dep_delay > 0`` never keeps
    the cancelled flights.

    >>> import pyarrow as pa
    >>> from tidyground.compute import col, PyArrowTableDataSource
    >>> data = pa.record_batch({"month": [1, 2, None, 1]})
    >>> next(FilterNode(col("month") == 1, PyArrowTableDataSource(data)).batches())
    pyarrow.RecordBatch
    month: int64
    ----
    month: [1,1]
    """

    def __init__(self, expression: Expression, child: QueryPlanNode) -> None:
        """
        :param expression: The predicate expression to filter with.
        :param child: The node emitting the data to be filtered.
        """
        self.expression = expression
        self.child = child

    def __str__(self) -> str:
        return f"FilterNode(filter={self.expression}, child={self.child})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Apply the filtering to the child node.

        For each recordbatch yielded by the child node,
        apply the expression and get back a mask
        (an array of only true/false/null values).

        Based on the mask filter the rows of the batch
        and return only those matching the filter.
        """
        for batch in self.child.batches():
            mask = self.expression.apply(batch)
            yield batch.filter(mask, null_selection_behavior="drop")
