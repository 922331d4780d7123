"""Query plan nodes that implement projection of columns.

Picking variables by their names (``select()``), creating
new variables with functions of existing variables (``mutate()``)
and renaming them (``rename()``) all reshape the columns of the
data without touching its rows.

This module implements those projection capabilities.
"""

from typing import Iterator

import pyarrow as pa

from .base import QueryPlanNode
from .expressions import Expression


class ProjectNode(QueryPlanNode):
    """Project data by selecting specific columns and computing expressions.

    The projection expects a list of column names to select and a dictionary
    of column names and expressions to project new columns.

    Expressions are computed in order, so an expression can
    refer to the columns projected before it::

        {"gain": col("dep_delay") - col("arr_delay"),
         "hours": col("air_time") / 60,
         "gain_per_hour": col("gain") / col("hours")}

    >>> import pyarrow as pa
    >>> from tidyground.compute import col, PyArrowTableDataSource
    >>> data = pa.record_batch({"dep_delay": [2, 4], "arr_delay": [11, 20]})
    >>> next(ProjectNode(None, {"gain": col("dep_delay") - col("arr_delay")},
    ...                  PyArrowTableDataSource(data)).batches())
    pyarrow.RecordBatch
    dep_delay: int64
    arr_delay: int64
    gain: int64
    ----
    dep_delay: [2,4]
    arr_delay: [11,20]
    gain: [-9,-16]
    """

    def __init__(
        self,
        select: list[str] | None,
        project: dict[str, Expression] | None,
        child: QueryPlanNode,
    ) -> None:
        """
        :param select: The list of column names to select.
                       ``None`` means select all columns.
                       ``[]`` means select only the projected columns.
        :param project: The dict {name: Expression} to project new columns.
        :param child: The node emitting the data to be projected.
        """
        self.select = select
        self.project = project or {}
        self.child = child

        if self.select is None:
            # No selection was provided, we will select all columns
            self.restrict_columns = None
        else:
            # This is the list of columns we want to keep,
            # in case select=[] it will only provide the project columns.
            self.restrict_columns = self.select + [
                name for name in self.project if name not in self.select
            ]

    def __str__(self) -> str:
        return f"ProjectNode(select={self.select}, project={self.project}, child={self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Apply the projection to the child node.

        For each recordbatch yielded by the child node,
        sequentially apply the expressions to project new columns
        and then select the requested columns.

        A projected column that has the same name of
        an existing column replaces it in place.
        """
        for batch in self.child.batches():
            for name, expr in self.project.items():
                data = expr.apply(batch)
                if isinstance(data, pa.Scalar):
                    data = pa.repeat(data, batch.num_rows)
                if name in batch.schema.names:
                    batch = batch.set_column(
                        batch.schema.get_field_index(name), name, data
                    )
                else:
                    batch = batch.append_column(name, data)

            if self.restrict_columns is not None:
                batch = batch.select(self.restrict_columns)

            yield batch


class RenameNode(QueryPlanNode):
    """Rename columns, preserving their order and data.

    >>> import pyarrow as pa
    >>> from tidyground.compute import PyArrowTableDataSource
    >>> data = pa.record_batch({"tailnum": ["N14228"]})
    >>> next(RenameNode({"tailnum": "tail_num"}, PyArrowTableDataSource(data)).batches())
    pyarrow.RecordBatch
    tail_num: string
    ----
    tail_num: ["N14228"]
    """

    def __init__(self, mapping: dict[str, str], child: QueryPlanNode) -> None:
        """
        :param mapping: The ``{old_name: new_name}`` renames to apply.
        :param child: The node emitting the data to be renamed.
        """
        self.mapping = mapping
        self.child = child

    def __str__(self) -> str:
        return f"RenameNode(mapping={self.mapping}, child={self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Rename the columns of each batch emitted by the child node."""
        for batch in self.child.batches():
            missing = [name for name in self.mapping if name not in batch.schema.names]
            if missing:
                raise KeyError(f"Cannot rename missing columns {missing}")
            yield batch.rename_columns(
                [self.mapping.get(name, name) for name in batch.schema.names]
            )
