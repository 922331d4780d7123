"""Format tabular data into a text table for print.

The `tabulate` function takes a `pyarrow.Table` or `pyarrow.RecordBatch`
and formats it into a text table. It will truncate long strings, format
floats to 2 decimal places, show missing values as ``NA`` and limit the
number of rows to display.
The function is used to display the tables produced by the tutorials.

Example:

    >>> import pyarrow as pa
    >>> data = {
    ...     "cut": ["Fair", "Good", "Ideal"],
    ...     "freq": [1610, 4906, None],
    ...     "depth": [64.04, 62.37, 61.71],
    ... }
    >>> table = pa.RecordBatch.from_pydict(data)
    >>> print(tabulate(table))
    cut   | freq | depth
    ----- | ---- | -----
    Fair  | 1610 | 64.04
    Good  | 4906 | 62.37
    Ideal | NA   | 61.71
"""

from typing import Any

from pyarrow import RecordBatch, Table


def tabulate(data: RecordBatch | Table, max_rows: int = 20) -> str:
    """Format a RecordBatch or Table into a text table.

    Will produce a string like::

        year | month | day | delay
        ---- | ----- | --- | -----
        2013 | 1     | 1   | 11.55
        2013 | 1     | 2   | 13.86
        ... and 363 more rows
    """
    cols = data.column_names
    rows = [
        [format_value(row[c]) for c in cols]
        for row in data.slice(length=max_rows).to_pylist()
    ]

    colsizes = compute_max_colsize(cols, rows)
    header = [maketablerow(cols, colsizes=colsizes)]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes) for row in rows]

    table = "\n".join(header + separator + textrows)
    if data.num_rows > max_rows:
        table += f"\n... and {data.num_rows - max_rows} more rows"
    return table


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    ).rstrip()


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    This function will format floats to 2 decimal places,
    missing values as ``NA`` and truncate long strings.
    """
    if v is None:
        return "NA"
    elif isinstance(v, float):
        return f"{v:.2f}"
    elif isinstance(v, bool):
        return "true" if v else "false"

    v = str(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
