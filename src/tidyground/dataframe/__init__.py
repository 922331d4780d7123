"""Dataframe library built on top of tidyground compute.

A dataframe library is a tool designed to handle and manipulate structured data,
typically in the form of tables (i.e., rows and columns).
It allows users to load data, explore it, apply transformations, and analyze it.

The transformation chapter is built around five verbs, plus grouping:

* Pick observations by their values (``filter()``).
* Reorder the rows (``arrange()``).
* Pick variables by their names (``select()``).
* Create new variables with functions of existing variables (``mutate()``).
* Collapse many values down to a single summary (``summarise()``).

These can all be used in conjunction with ``group_by()`` which changes
the scope of each function from operating on the entire dataset to
operating on it group-by-group.

The :class:`Dataframe` provides them as methods, so that the pipe
of R reads as a chain of method calls::

    import tidyground.dataframe as td
    from tidyground.dataframe import col

    delays = (
        flights
        .group_by("dest")
        .summarise(
            count=td.n(),
            dist=td.mean("distance", na_rm=True),
            delay=td.mean("arr_delay", na_rm=True),
        )
        .filter(col("count") > 20, col("dest") != "HNL")
    )
"""

from ..compute import col, lit
from .dataframe import Dataframe
from .functions import (
    SortKey,
    desc,
    is_na,
    maximum,
    mean,
    median,
    minimum,
    n,
    n_non_na,
    total,
)
from .selectors import (
    ColumnNotFoundError,
    Selector,
    col_range,
    contains,
    ends_with,
    everything,
    exclude,
    matches,
    num_range,
    starts_with,
)

__all__ = (
    "Dataframe",
    "col",
    "lit",
    "SortKey",
    "desc",
    "is_na",
    "maximum",
    "mean",
    "median",
    "minimum",
    "n",
    "n_non_na",
    "total",
    "ColumnNotFoundError",
    "Selector",
    "col_range",
    "contains",
    "ends_with",
    "everything",
    "exclude",
    "matches",
    "num_range",
    "starts_with",
)
