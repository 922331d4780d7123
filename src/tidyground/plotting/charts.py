"""Charts drawn directly with matplotlib.

``seaborn.objects`` has no flipped or polar coordinate systems
and no map projections, the few plots that need them are drawn
on matplotlib axes and returned as a :class:`matplotlib.figure.Figure`.
"""

import math

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.figure import Figure

from ..dataframe import Dataframe, n


def boxplot(data: Dataframe, x: str, y: str, flip: bool = False) -> Figure:
    """One box for each category of ``x`` summarising ``y``.

    With ``flip=True`` the categories are drawn on the
    vertical axis, like ``coord_flip()``.
    """
    frame = data.to_pandas()
    fig, ax = plt.subplots()
    if flip:
        sns.boxplot(data=frame, x=y, y=x, orient="h", ax=ax)
    else:
        sns.boxplot(data=frame, x=x, y=y, orient="v", ax=ax)
    return fig


def polygon_map(
    data: Dataframe,
    x: str = "long",
    y: str = "lat",
    group: str = "group",
    fill: str = "white",
    edgecolor: str = "black",
    quickmap: bool = False,
) -> Figure:
    """Draw one polygon for each ``group`` of points.

    Points are expected in the order they have to be joined.
    With ``quickmap=True`` a degree of latitude is stretched
    to have the same length as a degree of longitude at the
    mean latitude, like ``coord_quickmap()``.
    """
    frame = data.to_pandas()
    fig, ax = plt.subplots()
    for _, polygon in frame.groupby(group, sort=False):
        ax.fill(polygon[x], polygon[y], facecolor=fill, edgecolor=edgecolor)
    ax.set_xlabel(x)
    ax.set_ylabel(y)
    if quickmap:
        mid_latitude = math.radians(frame[y].mean())
        ax.set_aspect(1 / math.cos(mid_latitude))
    return fig


def polar_bar(data: Dataframe, x: str) -> Figure:
    """Count the rows of each ``x`` and draw them as wedges of a circle.

    Every category gets a wedge of the same angle and a radius
    proportional to its count, filled with its own color,
    like a bar chart with ``width = 1`` and ``coord_polar()``.
    No legend and no axis labels are drawn.
    """
    counts = data.ungroup().group_by(x).summarise(count=n()).to_pandas().sort_values(x)
    categories = [str(value) for value in counts[x]]
    width = 2 * math.pi / len(categories)
    angles = [i * width for i in range(len(categories))]

    fig = plt.figure(figsize=(5, 5))
    ax = fig.add_subplot(projection="polar")
    ax.bar(
        angles,
        counts["count"],
        width=width,
        color=sns.color_palette(n_colors=len(categories)),
        align="edge",
    )
    ax.set_xticks([angle + width / 2 for angle in angles], labels=categories)
    ax.set_xlabel("")
    ax.set_ylabel("")
    return fig
