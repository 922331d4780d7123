"""The Dataframe object itself."""

import logging
from typing import Any, Callable, Iterable, Mapping, Sequence, Self

import pandas as pd
import pyarrow as pa

from ..compute import (
    AggregateNode,
    Aggregation,
    CSVDataSource,
    Expression,
    FilterNode,
    PaginateNode,
    ProjectNode,
    PyArrowTableDataSource,
    RenameNode,
    SortNode,
    collect_table,
)
from ..compute.base import QueryPlanNode
from ..compute.datasources import DataSourceNode
from ..utils.tabulate import tabulate
from .functions import SortKey
from .selectors import ColumnNotFoundError, Selector, resolve_selection

logger = logging.getLogger(__name__)


class Dataframe:
    """Data structure that handles data in rows and columns.

    The Dataframe object allows to represent in-memory data
    and perform transformations over it using the verbs
    of the transformation chapter: ``filter``, ``arrange``,
    ``select``, ``rename``, ``mutate``, ``transmute``,
    ``summarise`` and ``group_by``.

    The tidyground dataframe object is lazy, which means that
    any transformation or analysis will be applied only when the
    ``.collect()`` method will be invoked or the data is printed,
    and no data is kept in memory until that moment (unless it already was).

    The names of the columns are tracked while the verbs are
    chained, so that selectors can be resolved and mistakes
    reported without having to compute anything.

    A Dataframe can be grouped, in which case ``summarise``
    computes one row for each group. It can also carry the
    ordered levels of its categorical columns, which are
    preserved when the data is converted to pandas for plotting.
    """

    def __init__(
        self,
        node_or_table: QueryPlanNode | pa.Table,
        columns: Sequence[str] | None = None,
        groups: Sequence[str] = (),
        levels: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        """
        :param node_or_table: A compute engine node expected to emit
                              the data for the dataframe or a `pyarrow.Table`.
        :param columns: The names of the columns the node emits,
                        polled from the data source when not provided.
        :param groups: The columns the data is grouped by.
        :param levels: The ordered categories of categorical columns.
        """
        if isinstance(node_or_table, (pa.Table, pa.RecordBatch)):
            node_or_table = PyArrowTableDataSource(node_or_table)

        if not isinstance(node_or_table, QueryPlanNode):
            raise ValueError("Invalid input, expected a QueryPlanNode or a PyArrow Table")

        if columns is None:
            if not isinstance(node_or_table, DataSourceNode):
                raise ValueError("columns must be provided for nodes that are not data sources")
            columns = node_or_table.poll_schema().names

        self.node = node_or_table
        self.columns = list(columns)
        self.groups = tuple(groups)
        self.levels = {
            name: list(values)
            for name, values in (levels or {}).items()
            if name in self.columns
        }

    @classmethod
    def open_csv(cls, filename: str, drop_columns: Sequence[str] = ()) -> Self:
        """Open a CSV file and create a Dataframe out of its data.

        :param filename: The path to a local CSV file.
        :param drop_columns: Columns of the file to discard.
        """
        return cls(CSVDataSource(filename, drop_columns=drop_columns))

    @classmethod
    def from_pydict(
        cls,
        mapping: Mapping[str, Sequence[Any]],
        levels: Mapping[str, Sequence[str]] | None = None,
    ) -> Self:
        """Create a Dataframe from a ``{column: values}`` dictionary."""
        return cls(pa.table(dict(mapping)), levels=levels)

    @classmethod
    def from_rows(
        cls,
        header: Sequence[str],
        rows: Iterable[Sequence[Any]],
        levels: Mapping[str, Sequence[str]] | None = None,
    ) -> Self:
        """Create a Dataframe writing it row by row, like ``tribble()``.

        >>> demo = Dataframe.from_rows(
        ...     ["cut", "freq"],
        ...     [("Fair", 1610), ("Good", 4906)],
        ... )
        >>> demo.to_arrow().to_pydict()
        {'cut': ['Fair', 'Good'], 'freq': [1610, 4906]}
        """
        return cls(
            pa.Table.from_pylist([dict(zip(header, row)) for row in rows]), levels=levels
        )

    @classmethod
    def from_pandas(cls, df: pd.DataFrame) -> Self:
        """Create a Dataframe from a :class:`pandas.DataFrame`."""
        return cls(pa.Table.from_pandas(df, preserve_index=False))

    def _derive(
        self,
        node: QueryPlanNode,
        columns: Sequence[str] | None = None,
        groups: Sequence[str] | None = None,
        levels: Mapping[str, Sequence[str]] | None = None,
    ) -> Self:
        return self.__class__(
            node,
            columns=self.columns if columns is None else columns,
            groups=self.groups if groups is None else groups,
            levels=self.levels if levels is None else levels,
        )

    def _check_columns(self, names: Iterable[str]) -> None:
        for name in names:
            if name not in self.columns:
                raise ColumnNotFoundError(name, self.columns)

    def filter(self, *predicates: Expression) -> Self:
        """Keep the rows for which all the predicates are true.

        Rows where a predicate is missing are discarded.

        :param predicates: The expressions representing the predicates,
                           for example ``col("month") == 1``.
        """
        if not predicates:
            raise ValueError("filter() requires at least one predicate")
        predicate = predicates[0]
        for other in predicates[1:]:
            predicate = predicate & other
        return self._derive(FilterNode(predicate, self.node))

    def arrange(self, *keys: str | SortKey) -> Self:
        """Reorder the rows by one or more columns.

        Each additional column is used to break ties in the values
        of the preceding ones, ``desc(name)`` sorts in descending order.
        Missing values are always sorted at the end.
        The grouping of the data is ignored.
        """
        if not keys:
            raise ValueError("arrange() requires at least one column")
        sort_keys = [k if isinstance(k, SortKey) else SortKey(k) for k in keys]
        self._check_columns(k.column for k in sort_keys)
        return self._derive(
            SortNode(
                [k.column for k in sort_keys],
                [k.descending for k in sort_keys],
                self.node,
            )
        )

    def select(self, *selectors: str | Selector) -> Self:
        """Pick columns by their names.

        Accepts column names and the selectors from
        :mod:`tidyground.dataframe.selectors`. Grouping columns
        are always kept, and added back in front when missing.
        """
        selected = resolve_selection(selectors, self.columns)
        missing_groups = [g for g in self.groups if g not in selected]
        if missing_groups:
            logger.info("Adding missing grouping variables: %s", missing_groups)
            selected = missing_groups + selected
        return self._derive(ProjectNode(selected, None, self.node), columns=selected)

    def rename(self, **new_to_old: str) -> Self:
        """Rename columns, ``rename(tail_num="tailnum")``."""
        self._check_columns(new_to_old.values())
        mapping = {old: new for new, old in new_to_old.items()}
        return self._derive(
            RenameNode(mapping, self.node),
            columns=[mapping.get(name, name) for name in self.columns],
            groups=[mapping.get(name, name) for name in self.groups],
            levels={mapping.get(name, name): lv for name, lv in self.levels.items()},
        )

    def mutate(self, **expressions: Expression) -> Self:
        """Add new columns computed from the existing ones.

        New columns are added at the end, in the order they are
        provided, and each of them can refer to the columns
        created before it. A column with the name of an existing
        one replaces it.
        """
        columns = self.columns + [name for name in expressions if name not in self.columns]
        levels = {k: v for k, v in self.levels.items() if k not in expressions}
        return self._derive(
            ProjectNode(None, expressions, self.node), columns=columns, levels=levels
        )

    def transmute(self, **expressions: Expression) -> Self:
        """Like :meth:`mutate` but only keeps the new columns.

        Grouping columns are kept too.
        """
        keep = [g for g in self.groups if g not in expressions]
        columns = keep + list(expressions)
        levels = {k: v for k, v in self.levels.items() if k not in expressions}
        return self._derive(
            ProjectNode(keep, expressions, self.node), columns=columns, levels=levels
        )

    def summarise(self, **aggregations: Aggregation) -> Self:
        """Collapse each group to a single row.

        When the data is not grouped, the result is a single row.
        The last level of grouping is dropped from the result,
        so a table grouped by year, month and day becomes grouped
        by year and month once summarised.
        """
        if not aggregations:
            raise ValueError("summarise() requires at least one aggregation")
        for name, aggregation in aggregations.items():
            if not isinstance(aggregation, Aggregation):
                raise ValueError(
                    f"summarise() expects aggregations, {name}={aggregation!r} is not"
                )
        self._check_columns(
            a.column for a in aggregations.values() if a.function != "count_all"
        )
        keys = list(self.groups)
        return self._derive(
            AggregateNode(keys, dict(aggregations), self.node),
            columns=keys + list(aggregations),
            groups=keys[:-1],
        )

    summarize = summarise

    def group_by(self, *columns: str) -> Self:
        """Group the data by one or more columns.

        Replaces any previous grouping.
        """
        self._check_columns(columns)
        return self._derive(self.node, groups=columns)

    def ungroup(self) -> Self:
        """Remove the grouping."""
        return self._derive(self.node, groups=())

    def pipe(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Call ``func(self, *args, **kwargs)``.

        Allows to chain functions that are not verbs,
        like building a plot, at the end of a pipeline.
        """
        return func(self, *args, **kwargs)

    def head(self, n: int = 10) -> Self:
        """Only the first ``n`` rows."""
        return self._derive(PaginateNode(0, n, self.node))

    def collect(self) -> Self:
        """Collect all data of the dataframe in memory.

        Returns a new Dataframe that has all data from the
        previous dataframe eagerly loaded in memory.
        """
        return self.__class__(
            self.to_arrow(), columns=self.columns, groups=self.groups, levels=self.levels
        )

    def to_arrow(self) -> pa.Table:
        """Collect all the data and return a pyarrow.Table"""
        logger.debug("Executing %s", self.node)
        return collect_table(self.node)

    def to_pandas(self) -> pd.DataFrame:
        """Collect all the data and return a pandas.DataFrame.

        Columns with known levels become ordered categoricals,
        so that plots keep the order of the categories.
        """
        df = self.to_arrow().to_pandas()
        for name, levels in self.levels.items():
            df[name] = pd.Categorical(df[name], categories=levels, ordered=True)
        return df

    @property
    def schema(self) -> pa.Schema:
        return self.to_arrow().schema

    @property
    def num_rows(self) -> int:
        return self.to_arrow().num_rows

    def __len__(self) -> int:
        return self.num_rows

    def __str__(self) -> str:
        table = self.to_arrow()
        lines = [f"# A table: {table.num_rows:,} x {table.num_columns}"]
        if self.groups:
            lines.append(f"# Groups: {', '.join(self.groups)}")
        lines.append(tabulate(table, max_rows=10))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<Dataframe columns={self.columns} groups={list(self.groups)}>"
