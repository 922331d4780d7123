"""Functions used inside the dataframe verbs.

These mirror the R functions used in the transformation chapter:

=====================================  ==========================================
R                                      tidyground
=====================================  ==========================================
``desc(dep_delay)``                    ``desc("dep_delay")``
``is.na(dep_delay)``                   ``is_na(col("dep_delay"))``
``n()``                                ``n()``
``sum(!is.na(x))``                     ``n_non_na("x")``
``mean(dep_delay, na.rm = TRUE)``      ``mean("dep_delay", na_rm=True)``
``median(x)``                          ``median("x")``
``min(x)``, ``max(x)``, ``sum(x)``     ``minimum("x")``, ``maximum("x")``, ``total("x")``
=====================================  ==========================================
"""

from dataclasses import dataclass

import pyarrow.compute as pc

from ..compute import (
    CountAggregation,
    CountAllAggregation,
    Expression,
    FunctionCallExpression,
    MaxAggregation,
    MeanAggregation,
    MedianAggregation,
    MinAggregation,
    SumAggregation,
)


@dataclass(frozen=True)
class SortKey:
    """A column to sort by and the direction of the sorting."""

    column: str
    descending: bool = False

    def __str__(self) -> str:
        return f"desc({self.column})" if self.descending else self.column


def desc(column: str) -> SortKey:
    """Sort ``column`` in descending order."""
    return SortKey(column, descending=True)


def missing(values):
    return pc.is_null(values, nan_is_null=True)


def is_na(expression: Expression) -> Expression:
    """True where the value is missing or not a number."""
    return FunctionCallExpression(missing, expression)


def n() -> CountAllAggregation:
    """The number of rows in the current group."""
    return CountAllAggregation()


def n_non_na(column: str) -> CountAggregation:
    """The number of non missing values of ``column``."""
    return CountAggregation(column)


def mean(column: str, na_rm: bool = False) -> MeanAggregation:
    return MeanAggregation(column, na_rm=na_rm)


def median(column: str, na_rm: bool = False) -> MedianAggregation:
    return MedianAggregation(column, na_rm=na_rm)


def minimum(column: str, na_rm: bool = False) -> MinAggregation:
    return MinAggregation(column, na_rm=na_rm)


def maximum(column: str, na_rm: bool = False) -> MaxAggregation:
    return MaxAggregation(column, na_rm=na_rm)


def total(column: str, na_rm: bool = False) -> SumAggregation:
    return SumAggregation(column, na_rm=na_rm)
