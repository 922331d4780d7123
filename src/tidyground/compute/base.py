"""Base classes and interfaces for the Compute Engine

This module defines the base components that are
necessary to represent a query plan and execute it.

Expressions also implement the Python operators, so that
predicates and derived columns can be written the way
they read in the tutorial::

    (col("month") == 1) & (col("day") == 1)
    col("distance") / col("air_time") * 60

Each operator builds a :class:`tidyground.compute.FunctionCallExpression`
around the equivalent :mod:`pyarrow.compute` function.
"""

import abc
from typing import Any, Iterator

import pyarrow as pa
import pyarrow.compute as pc


class QueryPlanNode(abc.ABC):
    """A node of a query execution plan.

    The Query plan is represented as a tree
    of nodes. Each node is a step in the execution
    and all previous steps are children of the
    last one.

    For example the plan for ``filter(flights, month == 1)``
    involves loading data and filtering it::

        LoadDataNode -> FilterDataNode(month == 1)

    That would be a plan where the last step
    is filtering, and the LoadDataNode is a child
    of the filter node.

    Each Node accepts :class:`pyarrow.RecordBatch`
    data as its input and emits a new
    :class:`pyarrow.RecordBatch` as its output.

    For example a simple node that takes data
    and just forwards it as is after printing
    its content can be implemented as::

        class DebugDataNode(QueryPlanNode):
            def __init__(self, child):
                self.child = child

            def batches(self):
                for b in self.child.batches():
                    print(b)
                    yield b

            def __str__(self):
                return f"DebugDataNode()"
    """

    RecordBatchesGenerator = Iterator[pa.RecordBatch]

    @abc.abstractmethod
    def batches(self) -> Iterator[pa.RecordBatch]:
        """Emits the batches for the next node.

        Each QueryPlan node is expected to be able to
        generate data that has to be provided to the next
        node in the plan.

        Usually this happens by consuming data from its
        child nodes, transforming it somehow, and yielding
        it back to the next consumer.
        """
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the node."""
        ...


def collect_table(node: QueryPlanNode) -> pa.Table:
    """Execute a query plan and gather all its batches in a Table."""
    return pa.Table.from_batches(list(node.batches()))


class Expression(abc.ABC):
    """Expression to apply to a RecordBatch.

    Expressions are some form of operation that
    has to be applied to the data of a :class:`pyarrow.RecordBatch`
    to create new data.

    Typical example of expressions are: ``dep_delay - arr_delay``
    which is expected to subtract column arr_delay of the RecordBatch
    from column dep_delay and return the result.

    As our engine is Column Major, applying an expression
    always results in a new column, thus in a
    :class:`pyarrow.Array` that contains the data
    for that column.
    """

    @abc.abstractmethod
    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Apply the expression to a RecordBatch."""
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the expression."""
        ...

    __hash__ = object.__hash__

    def __bool__(self) -> bool:
        raise TypeError(
            "Expressions have no truth value, "
            "combine predicates with & and | instead of 'and' and 'or'"
        )

    def __eq__(self, other: Any) -> "Expression":  # type: ignore[override]
        return _call(pc.equal, self, other)

    def __ne__(self, other: Any) -> "Expression":  # type: ignore[override]
        return _call(pc.not_equal, self, other)

    def __lt__(self, other: Any) -> "Expression":
        return _call(pc.less, self, other)

    def __le__(self, other: Any) -> "Expression":
        return _call(pc.less_equal, self, other)

    def __gt__(self, other: Any) -> "Expression":
        return _call(pc.greater, self, other)

    def __ge__(self, other: Any) -> "Expression":
        return _call(pc.greater_equal, self, other)

    def __add__(self, other: Any) -> "Expression":
        return _call(pc.add, self, other)

    def __radd__(self, other: Any) -> "Expression":
        return _call(pc.add, other, self)

    def __sub__(self, other: Any) -> "Expression":
        return _call(pc.subtract, self, other)

    def __rsub__(self, other: Any) -> "Expression":
        return _call(pc.subtract, other, self)

    def __mul__(self, other: Any) -> "Expression":
        return _call(pc.multiply, self, other)

    def __rmul__(self, other: Any) -> "Expression":
        return _call(pc.multiply, other, self)

    def __truediv__(self, other: Any) -> "Expression":
        from .expressions import true_divide

        return _call(true_divide, self, other)

    def __rtruediv__(self, other: Any) -> "Expression":
        from .expressions import true_divide

        return _call(true_divide, other, self)

    def __neg__(self) -> "Expression":
        return _call(pc.negate, self)

    def __and__(self, other: Any) -> "Expression":
        return _call(pc.and_kleene, self, other)

    def __or__(self, other: Any) -> "Expression":
        return _call(pc.or_kleene, self, other)

    def __invert__(self) -> "Expression":
        return _call(pc.invert, self)


def _call(func: Any, *args: Any) -> Expression:
    # expressions.py depends on this module, so the import is deferred.
    from .expressions import FunctionCallExpression

    return FunctionCallExpression(func, *args)


class ColumnRef(Expression):
    """References a column in a record batch.

    When another expression or the engine need
    to operate on a specific column, we will
    need a way to reference that column and its data.

    This expression is aware of the column and when
    applied to a record batch returns the data for
    that column.
    """

    def __init__(self, name: str) -> None:
        """
        :param name: The name of the column being referenced.
        """
        self.name = name

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Get the data for the column.

        Raises :class:`KeyError` when the column doesn't exist.
        """
        if self.name not in batch.schema.names:
            raise KeyError(f"Column '{self.name}' not found in {batch.schema.names}")
        return batch.column(self.name)

    def __str__(self) -> str:
        return f"ColumnRef({self.name})"


class Literal(Expression):
    """A constant value.

    Applying a literal doesn't depend on the data,
    it always returns the same :class:`pyarrow.Scalar`.
    """

    def __init__(self, value: Any) -> None:
        self.value = value

    def apply(self, batch: pa.RecordBatch) -> pa.Scalar:
        return pa.scalar(self.value)

    def __str__(self) -> str:
        return f"Literal({self.value!r})"


col = ColumnRef
lit = Literal
