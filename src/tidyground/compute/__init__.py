"""The tidyground Compute Engine

The compute engine defines the in-memory
format for query plans and the plan nodes
supported by the tutorial verbs.

The compute engine is tightly bound to Apache Arrow,
thus the engine will expect to always deal with
:class:`pyarrow.RecordBatch` and emit a new RecordBatch
as the result of the node execution.

This allows to easily build compute pipelines like::

    (RecordBatch)-->Node1--(RecordBatch)-->Node2--(RecordBatch)-->...

No computation is implemented here, every node delegates
the actual work to :mod:`pyarrow.compute` or to the
:class:`pyarrow.Table` methods. The nodes only describe
which step of the tutorial they perform.

Building a query plan requires to combine the nodes that we want
to be executed starting with one or more ``DataSource`` nodes as the
leaf nodes of a query:

>>> import pyarrow as pa
>>> from tidyground.compute import col, PyArrowTableDataSource, FilterNode
>>> flights = pa.table({
...    "month": pa.array([1, 1, 2]),
...    "day": pa.array([1, 2, 1]),
... })
>>> # filter(flights, month == 1, day == 1)
>>> query = FilterNode(
...     (col("month") == 1) & (col("day") == 1),
...     child=PyArrowTableDataSource(flights)
... )
>>> for data in query.batches():
...     print(data.to_pydict())
{'month': [1], 'day': [1]}
"""

from .aggregate import (
    AggregateNode,
    Aggregation,
    CountAggregation,
    CountAllAggregation,
    MaxAggregation,
    MeanAggregation,
    MedianAggregation,
    MinAggregation,
    SumAggregation,
)
from .base import ColumnRef, Expression, Literal, QueryPlanNode, col, collect_table, lit
from .datasources import CSVDataSource, PyArrowTableDataSource
from .expressions import FunctionCallExpression, true_divide
from .filtering import FilterNode
from .pagination import PaginateNode
from .selection import ProjectNode, RenameNode
from .sorting import SortNode

__all__ = (
    "CSVDataSource",
    "PyArrowTableDataSource",
    "FilterNode",
    "FunctionCallExpression",
    "Expression",
    "QueryPlanNode",
    "col",
    "lit",
    "ColumnRef",
    "Literal",
    "collect_table",
    "true_divide",
    "PaginateNode",
    "SortNode",
    "ProjectNode",
    "RenameNode",
    "AggregateNode",
    "Aggregation",
    "CountAggregation",
    "CountAllAggregation",
    "MaxAggregation",
    "MeanAggregation",
    "MedianAggregation",
    "MinAggregation",
    "SumAggregation",
)
