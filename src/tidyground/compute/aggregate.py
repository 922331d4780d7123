"""Query plan nodes for aggregations.

``summarise()`` collapses a data frame to a single row,
and when combined with ``group_by()`` it collapses each
group to a single row::

    by_day <- group_by(flights, year, month, day)
    summarise(by_day, delay = mean(dep_delay, na.rm = TRUE))

The aggregate node is in charge of computing
those aggregations and projecting them as new
columns in a query pipeline.

For example, given the following data::

    dest, distance, arr_delay
    IAH, 1400, 11
    IAH, 1416, 20
    MIA, 1089, 33

We could group by dest and compute the number of
flights and the mean delay to get::

    dest, count, delay
    IAH, 2, 15.5
    MIA, 1, 33.0

Grouping and aggregating is performed by pyarrow itself,
through :meth:`pyarrow.Table.group_by`. The node only has
to tell pyarrow which aggregation functions to run and give
back the result in the shape the tutorial expects: key columns
first, aggregations after them, groups sorted by their keys.
"""

import abc
from typing import Any

import pyarrow as pa
import pyarrow.compute as pc

from .base import QueryPlanNode, collect_table

__all__ = (
    "AggregateNode",
    "Aggregation",
    "CountAllAggregation",
    "CountAggregation",
    "SumAggregation",
    "MinAggregation",
    "MaxAggregation",
    "MeanAggregation",
    "MedianAggregation",
)


class AggregateNode(QueryPlanNode):
    """Group data and compute aggregations.

    >>> import pyarrow as pa
    >>> from tidyground.compute import MeanAggregation, PyArrowTableDataSource
    >>> data = pa.record_batch({
    ...    "dest": pa.array(["IAH", "MIA", "IAH"]),
    ...    "arr_delay": pa.array([11.0, 33.5, 20.0]),
    ... })
    >>> aggregate = AggregateNode(["dest"], {"delay": MeanAggregation("arr_delay")}, PyArrowTableDataSource(data))
    >>> next(aggregate.batches())
    pyarrow.RecordBatch
    dest: string
    delay: double
    ----
    dest: ["IAH","MIA"]
    delay: [15.5,33.5]
    """

    def __init__(
        self,
        keys: list[str],
        aggregations: dict[str, "Aggregation"],
        child: QueryPlanNode,
    ) -> None:
        """
        :param keys: The columns to group by, ``[]`` aggregates the whole data.
        :param aggregations: The aggregations to compute in the form of {"new_col_name": Aggregation}.
        :param child: The child node that will provide the data to aggregate.
        """
        self.keys = keys
        self.aggregations = aggregations
        self.child = child

    def __str__(self) -> str:
        return f"AggregateNode(keys={self.keys}, aggregations={self.aggregations}, {self.child})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Aggregate all the data emitted by the child node.

        Aggregations need to see every row of a group
        before they can provide a result, so all batches
        of the child node are gathered before aggregating.
        """
        table = collect_table(self.child)
        if self.keys:
            result = self.grouped_aggregation(table)
        else:
            result = self.whole_aggregation(table)
        yield from result.combine_chunks().to_batches() or [
            pa.RecordBatch.from_pylist([], schema=result.schema)
        ]

    def whole_aggregation(self, table: pa.Table) -> pa.Table:
        """Aggregate the whole table into a single row."""
        columns = {}
        for name, aggregation in self.aggregations.items():
            value = aggregation.compute(table)
            if isinstance(value, pa.Scalar):
                columns[name] = pa.array([value.as_py()], type=value.type)
            else:
                columns[name] = pa.array([value])
        return pa.table(columns)

    def grouped_aggregation(self, table: pa.Table) -> pa.Table:
        """Compute the aggregations for each group of rows.

        pyarrow names the aggregated columns after the function
        that computed them (``arr_delay_mean``), so the aggregated
        columns are picked back by position, skipping the keys.
        Threads are disabled to keep pyarrow grouping deterministic.
        """
        grouped = table.group_by(self.keys, use_threads=False).aggregate(
            [aggregation.hash_aggregate() for aggregation in self.aggregations.values()]
        )
        aggregated_indices = [
            idx for idx, name in enumerate(grouped.schema.names) if name not in self.keys
        ]
        columns = {key: grouped.column(key) for key in self.keys}
        for idx, (name, aggregation) in zip(
            aggregated_indices, self.aggregations.items()
        ):
            columns[name] = aggregation.finalize(grouped.column(idx))

        result = pa.table(columns)
        return result.sort_by([(key, "ascending", "at_end") for key in self.keys])


class Aggregation(abc.ABC):
    """Base class for aggregations.

    Every aggregation is expected to know how to compute
    its value over a whole table, for ``summarise()`` of
    ungrouped data, and which pyarrow hash aggregate function
    computes it for each group.

    Like in R, missing values are not ignored unless
    ``na_rm=True`` is provided: the mean of a group that
    contains a missing value is itself missing.
    """

    function: str = ""

    def __init__(self, column: str, na_rm: bool = False) -> None:
        self.column = column
        self.na_rm = na_rm

    def __str__(self) -> str:
        if self.na_rm:
            return f"{self.__class__.__name__}({self.column}, na_rm=True)"
        return f"{self.__class__.__name__}({self.column})"

    __repr__ = __str__

    @property
    def options(self) -> pc.ScalarAggregateOptions:
        return pc.ScalarAggregateOptions(skip_nulls=self.na_rm, min_count=0)

    def hash_aggregate(self) -> tuple[Any, ...]:
        """The aggregation in the form accepted by :meth:`pyarrow.TableGroupBy.aggregate`."""
        return (self.column, self.function, self.options)

    def finalize(self, data: pa.ChunkedArray) -> pa.ChunkedArray:
        """Post process the column computed by the hash aggregation."""
        return data

    @abc.abstractmethod
    def compute(self, table: pa.Table) -> Any: ...


class SumAggregation(Aggregation):
    """Compute the sum of an aggregated column."""

    function = "sum"

    def compute(self, table: pa.Table) -> Any:
        return pc.sum(table.column(self.column), options=self.options)


class MinAggregation(Aggregation):
    """Compute the min of an aggregated column."""

    function = "min"

    @property
    def options(self) -> pc.ScalarAggregateOptions:
        return pc.ScalarAggregateOptions(skip_nulls=self.na_rm)

    def compute(self, table: pa.Table) -> Any:
        return pc.min(table.column(self.column), options=self.options)


class MaxAggregation(MinAggregation):
    """Compute the max of an aggregated column."""

    function = "max"

    def compute(self, table: pa.Table) -> Any:
        return pc.max(table.column(self.column), options=self.options)


class MeanAggregation(Aggregation):
    """Compute the mean of an aggregated column."""

    function = "mean"

    @property
    def options(self) -> pc.ScalarAggregateOptions:
        return pc.ScalarAggregateOptions(skip_nulls=self.na_rm, min_count=1)

    def compute(self, table: pa.Table) -> Any:
        return pc.mean(table.column(self.column), options=self.options)


class CountAggregation(Aggregation):
    """Count the non missing values of a column.

    Equivalent to ``sum(!is.na(x))``, it's often useful
    to check how many values an aggregation was computed on.
    """

    function = "count"

    @property
    def options(self) -> pc.CountOptions:
        return pc.CountOptions(mode="only_valid")

    def compute(self, table: pa.Table) -> Any:
        return pc.count(table.column(self.column), mode="only_valid")


class CountAllAggregation(Aggregation):
    """Count the rows of each group, like ``n()``."""

    function = "count_all"

    def __init__(self) -> None:
        super().__init__(column="*")

    def __str__(self) -> str:
        return "CountAllAggregation()"

    __repr__ = __str__

    def hash_aggregate(self) -> tuple[Any, ...]:
        return ([], self.function)

    def compute(self, table: pa.Table) -> Any:
        return table.num_rows


class MedianAggregation(Aggregation):
    """Compute the exact median of an aggregated column.

    pyarrow only provides an approximate median for grouped data,
    so the values of each group are gathered in a list and the
    median is computed for each list with :func:`pyarrow.compute.quantile`.
    """

    function = "list"

    def hash_aggregate(self) -> tuple[Any, ...]:
        return (self.column, self.function)

    def finalize(self, data: pa.ChunkedArray) -> pa.Array:
        return pa.array(
            [self._median(pa.array(values)) for values in data.to_pylist()],
            type=pa.float64(),
        )

    def compute(self, table: pa.Table) -> Any:
        return pa.scalar(self._median(table.column(self.column)), type=pa.float64())

    def _median(self, values: pa.Array | pa.ChunkedArray) -> float | None:
        if values.null_count and not self.na_rm:
            return None
        if len(values) == values.null_count:
            return None
        quantile = pc.quantile(values, q=0.5, interpolation="linear", skip_nulls=True)
        return quantile[0].as_py()
