"""Expressions executed by compute engine nodes.

Filters will need a ``predicate``, so an expression that
returns ``true`` or ``false`` for each row that has to be
filtered, like ``month == 1``.

Projections will need an expression that computes the rows
of the new column, like ``dep_delay - arr_delay``.

Every computation is delegated to :mod:`pyarrow.compute`,
expressions only know how to resolve their arguments
against a batch of data and which function to invoke.
"""

from typing import Any, Callable

import pyarrow as pa
import pyarrow.compute as pc

from .. import utils
from .base import Expression


def apply_expression_if_needed(batch: pa.RecordBatch, o: Any) -> Any:
    """Invoke Apply on expressions when needed

    If the provided object is an Expression,
    it will be applied to the target batch.

    Otherwise it will treat it as if it's
    already the result of an expression
    or a literal value.
    """
    if isinstance(o, Expression):
        o = o.apply(batch)
    return o


def true_divide(dividend: Any, divisor: Any) -> pa.Array:
    """Divide always producing floating point values.

    :func:`pyarrow.compute.divide` performs an integer division
    when both arguments are integers, while ``distance / air_time``
    is expected to produce the fractional result.
    """
    return pc.divide(_as_float(dividend), _as_float(divisor))


def _as_float(value: Any) -> Any:
    if isinstance(value, (pa.Array, pa.ChunkedArray, pa.Scalar)):
        if pa.types.is_integer(value.type):
            return pc.cast(value, pa.float64())
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


class FunctionCallExpression(Expression):
    """Call a compute function on its arguments.

    Given a compute function, and a set of arguments
    (other expressions, literals or data), execute
    the function on the provided arguments and return
    the resulting data.

    For example to subtract two columns this would be used as::

        FunctionCallExpression(pyarrow.compute.subtract, col("dep_delay"), col("arr_delay"))
    """

    def __init__(self, func: Callable[..., Any], *args: Any) -> None:
        """
        :param func: The function accepting the arguments.
        :param *args: The arguments for the function.
        """
        self.func = func
        self.args = args

    def __str__(self) -> str:
        func_qualname = utils.inspect.get_qualname(self.func)
        return f"{func_qualname}({','.join(map(str, self.args))})"

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Invoke the function resolving all arguments on the recordbatch.

        When the function arguments are expressions themselves,
        this will apply the expressions on the provided recordbatch
        and the resulting data will be used as the arguments for the
        function.
        """
        args = tuple(apply_expression_if_needed(batch, arg) for arg in self.args)
        return self.func(*args)
