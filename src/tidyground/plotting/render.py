"""Render plots to image files or to the screen.

The tutorials produce two kinds of plots: :class:`seaborn.objects.Plot`
specifications and, for the coordinate systems seaborn doesn't provide,
plain :class:`matplotlib.figure.Figure` objects. The functions in this
module accept both.
"""

import io
import logging
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import seaborn.objects as so
from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

Plottable = so.Plot | Figure


def is_plot(obj: Any) -> bool:
    """If the object is something :func:`save` knows how to render."""
    return isinstance(obj, (so.Plot, Figure))


def save(plot: Plottable, path: str | Path | io.BytesIO, dpi: int = 100) -> str | Path | io.BytesIO:
    """Render a plot to a PNG image.

    Parent directories are created when missing. Figures are
    closed once saved, so that rendering many plots in a row
    doesn't keep them all in memory.

    :param plot: The seaborn.objects Plot or matplotlib Figure to render.
    :param path: File path or buffer the image is written to.
    :param dpi: Resolution of the image.
    """
    if isinstance(path, (str, Path)):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Saving plot to %s", path)

    if isinstance(plot, so.Plot):
        plot.save(path, format="png", dpi=dpi, bbox_inches="tight")
    elif isinstance(plot, Figure):
        try:
            plot.savefig(path, format="png", dpi=dpi, bbox_inches="tight")
        finally:
            plt.close(plot)
    else:
        raise TypeError(f"Cannot render objects of type {type(plot).__name__}")
    return path


def to_png_bytes(plot: Plottable, dpi: int = 100) -> bytes:
    """Render a plot to PNG bytes."""
    buf = io.BytesIO()
    save(plot, buf, dpi=dpi)
    return buf.getvalue()


def show(plot: Plottable) -> None:
    """Display a plot on the screen."""
    if isinstance(plot, so.Plot):
        plot.show()
    elif isinstance(plot, Figure):
        plt.show()
    else:
        raise TypeError(f"Cannot render objects of type {type(plot).__name__}")
