"""Statistical summaries computed before plotting.

Some ggplot2 statistical transformations have no direct
seaborn counterpart. Those are computed with the dataframe
verbs and then plotted as they are, with an identity stat.
"""

import pyarrow.compute as pc

from ..dataframe import Dataframe, col, maximum, median, minimum, n


def count_proportions(df: Dataframe, x: str, fill: str | None = None) -> Dataframe:
    """Count the rows for each ``x`` and compute their proportion.

    Without ``fill`` the proportion is relative to the whole
    data, like ``aes(y = ..prop.., group = 1)``.

    With ``fill`` the rows are counted for each ``x`` and ``fill``
    combination, and the proportion is relative to the rows of
    the same ``x``, so stacking them makes bars of the same height,
    like ``position = "fill"``.

    The result has the ``x`` (and ``fill``), ``count`` and ``prop`` columns.
    """
    if fill is None:
        counts = df.ungroup().group_by(x).summarise(count=n()).collect()
        grand_total = pc.sum(counts.to_arrow().column("count")).as_py()
        return counts.mutate(prop=col("count") / grand_total)

    counts = df.ungroup().group_by(x, fill).summarise(count=n()).ungroup().to_arrow()
    totals = df.ungroup().group_by(x).summarise(x_total=n()).to_arrow()
    joined = Dataframe(counts.join(totals, keys=x), levels=df.levels)
    return (
        joined.mutate(prop=col("count") / col("x_total"))
        .select(x, fill, "count", "prop")
        .arrange(x, fill)
    )


def summary_range(df: Dataframe, x: str, y: str) -> Dataframe:
    """Minimum, median and maximum of ``y`` for each ``x``.

    Equivalent of ``stat_summary(fun.ymin = min, fun.ymax = max, fun.y = median)``,
    the result has the ``x``, ``ymin``, ``y`` (the median) and ``ymax`` columns.
    """
    return (
        df.ungroup()
        .group_by(x)
        .summarise(**{"ymin": minimum(y), y: median(y), "ymax": maximum(y)})
    )
