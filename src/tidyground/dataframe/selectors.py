"""Helpers to pick columns by their names.

``select()`` accepts plain column names and selectors
that match columns by their position or by their name::

    select(flights, year:day)            -> df.select(col_range("year", "day"))
    select(flights, -(year:day))         -> df.select(exclude(col_range("year", "day")))
    select(flights, ends_with("delay"))  -> df.select(ends_with("delay"))

Like in the tidyverse, name matching ignores the case
unless ``ignore_case=False`` is provided.
"""

import abc
import re
from typing import Iterable, Sequence


class ColumnNotFoundError(KeyError):
    """A selector referenced a column that doesn't exist."""

    def __init__(self, name: str, columns: Sequence[str]) -> None:
        super().__init__(name)
        self.name = name
        self.columns = list(columns)

    def __str__(self) -> str:
        return f"Column '{self.name}' doesn't exist, available columns: {self.columns}"


class Selector(abc.ABC):
    """Picks a subset of columns given all the available ones."""

    @abc.abstractmethod
    def resolve(self, columns: Sequence[str]) -> list[str]:
        """Return the selected column names, in selection order."""
        ...

    @abc.abstractmethod
    def __str__(self) -> str: ...

    def __repr__(self) -> str:
        return str(self)


class ColumnName(Selector):
    """Select a single column by its exact name."""

    def __init__(self, name: str) -> None:
        self.name = name

    def resolve(self, columns: Sequence[str]) -> list[str]:
        if self.name not in columns:
            raise ColumnNotFoundError(self.name, columns)
        return [self.name]

    def __str__(self) -> str:
        return self.name


class ColumnRange(Selector):
    """Select all columns between two columns, both included.

    The range follows the position of the columns,
    if ``last`` comes before ``first`` the columns
    are selected in reverse order.
    """

    def __init__(self, first: str, last: str) -> None:
        self.first = first
        self.last = last

    def resolve(self, columns: Sequence[str]) -> list[str]:
        start = _position(self.first, columns)
        end = _position(self.last, columns)
        if start <= end:
            return list(columns[start : end + 1])
        return list(columns[end : start + 1])[::-1]

    def __str__(self) -> str:
        return f"{self.first}:{self.last}"


class _NameMatcher(Selector):
    def __init__(self, text: str, ignore_case: bool = True) -> None:
        self.text = text
        self.ignore_case = ignore_case

    def resolve(self, columns: Sequence[str]) -> list[str]:
        return [name for name in columns if self._matches(name)]

    def _normalize(self, value: str) -> str:
        return value.lower() if self.ignore_case else value

    @abc.abstractmethod
    def _matches(self, name: str) -> bool: ...

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.text!r})"


class StartsWith(_NameMatcher):
    """Columns whose name begins with a prefix."""

    def _matches(self, name: str) -> bool:
        return self._normalize(name).startswith(self._normalize(self.text))


class EndsWith(_NameMatcher):
    """Columns whose name ends with a suffix."""

    def _matches(self, name: str) -> bool:
        return self._normalize(name).endswith(self._normalize(self.text))


class Contains(_NameMatcher):
    """Columns whose name contains a literal string."""

    def _matches(self, name: str) -> bool:
        return self._normalize(self.text) in self._normalize(name)


class Matches(_NameMatcher):
    """Columns whose name matches a regular expression.

    ``matches("^(arr|dep)_")`` selects the arrival and departure columns.
    """

    def __init__(self, text: str, ignore_case: bool = True) -> None:
        super().__init__(text, ignore_case)
        self.regex = re.compile(text, re.IGNORECASE if ignore_case else 0)

    def _matches(self, name: str) -> bool:
        return self.regex.search(name) is not None


class NumRange(Selector):
    """Columns named by a prefix and a number, like ``x1``, ``x2``, ``x3``.

    :param width: zero pad the numbers to this width, ``x01``.
    """

    def __init__(self, prefix: str, numbers: Iterable[int], width: int | None = None) -> None:
        self.prefix = prefix
        self.numbers = list(numbers)
        self.width = width

    def resolve(self, columns: Sequence[str]) -> list[str]:
        if self.width:
            names = [f"{self.prefix}{n:0{self.width}d}" for n in self.numbers]
        else:
            names = [f"{self.prefix}{n}" for n in self.numbers]
        return [name for name in names if name in columns]

    def __str__(self) -> str:
        return f"NumRange({self.prefix!r}, {self.numbers})"


class Everything(Selector):
    """All the columns."""

    def resolve(self, columns: Sequence[str]) -> list[str]:
        return list(columns)

    def __str__(self) -> str:
        return "everything()"


class Exclude(Selector):
    """Drop the columns picked by other selectors."""

    def __init__(self, *selectors: "Selector | str") -> None:
        self.selectors = [as_selector(s) for s in selectors]

    def resolve(self, columns: Sequence[str]) -> list[str]:
        excluded = set(resolve_selection(self.selectors, columns))
        return [name for name in columns if name not in excluded]

    def excluded(self, columns: Sequence[str]) -> list[str]:
        return resolve_selection(self.selectors, columns)

    def __str__(self) -> str:
        return f"-({', '.join(map(str, self.selectors))})"


def _position(name: str, columns: Sequence[str]) -> int:
    if name not in columns:
        raise ColumnNotFoundError(name, columns)
    return list(columns).index(name)


def as_selector(value: "Selector | str") -> Selector:
    """Wrap plain column names in a :class:`ColumnName` selector."""
    if isinstance(value, Selector):
        return value
    if isinstance(value, str):
        return ColumnName(value)
    raise TypeError(f"Expected a column name or a selector, got {type(value).__name__}")


def resolve_selection(
    selectors: Sequence["Selector | str"], columns: Sequence[str]
) -> list[str]:
    """Resolve multiple selectors into the list of selected columns.

    Selected columns keep the order in which they were first
    selected and appear only once. Exclusions remove columns
    selected so far, and when the first selector is an exclusion
    the selection starts from all the columns.
    """
    selectors = [as_selector(s) for s in selectors]
    selected: list[str] = []
    if selectors and isinstance(selectors[0], Exclude):
        selected = list(columns)

    for selector in selectors:
        if isinstance(selector, Exclude):
            dropped = set(selector.excluded(columns))
            selected = [name for name in selected if name not in dropped]
            continue
        for name in selector.resolve(columns):
            if name not in selected:
                selected.append(name)
    return selected


def col_range(first: str, last: str) -> ColumnRange:
    """All columns between ``first`` and ``last``, like ``year:day``."""
    return ColumnRange(first, last)


def starts_with(prefix: str, ignore_case: bool = True) -> StartsWith:
    return StartsWith(prefix, ignore_case)


def ends_with(suffix: str, ignore_case: bool = True) -> EndsWith:
    return EndsWith(suffix, ignore_case)


def contains(text: str, ignore_case: bool = True) -> Contains:
    return Contains(text, ignore_case)


def matches(pattern: str, ignore_case: bool = True) -> Matches:
    return Matches(pattern, ignore_case)


def num_range(prefix: str, numbers: Iterable[int], width: int | None = None) -> NumRange:
    return NumRange(prefix, numbers, width)


def everything() -> Everything:
    return Everything()


def exclude(*selectors: "Selector | str") -> Exclude:
    """Select everything but the given columns, like ``-(year:day)``."""
    return Exclude(*selectors)
