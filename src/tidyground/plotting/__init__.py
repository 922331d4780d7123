"""Plotting helpers for the tutorials.

Plots are built with :mod:`seaborn.objects`, which like ggplot2
describes a plot as data, mappings from columns to visual properties
and layers made of a mark, a statistical transformation and moves.
The geometric objects of the visualisation chapter map to it as follows:

======================================  =====================================================
ggplot2                                 seaborn.objects
======================================  =====================================================
``geom_point()``                        ``.add(so.Dot())``
``geom_smooth()``                       ``.add(so.Line(), so.PolyFit())``
``geom_bar()``, ``stat_count()``        ``.add(so.Bar(), so.Count())``
``geom_bar(stat = "identity")``         ``.add(so.Bar())``
``geom_freqpoly(binwidth = 10)``        ``.add(so.Line(), so.Hist(binwidth=10))``
``position = "stack"``                  ``so.Stack()``
``position = "dodge"``                  ``so.Dodge()``
``position = "jitter"``                 ``so.Jitter()``
``facet_wrap(~ class, nrow = 2)``       ``.facet(col="class", wrap=4)``
``facet_grid(drv ~ cyl)``               ``.facet(row="drv", col="cyl")``
``show.legend = FALSE``                 ``.add(..., legend=False)``
``labs(x = NULL)``                      ``.label(x="")``
======================================  =====================================================

What seaborn.objects can't express is provided here:

* :func:`count_proportions` and :func:`summary_range` compute
  ``..prop..``, ``position = "fill"`` and ``stat_summary()``
  with the dataframe verbs, so that they can be plotted as they are.
* :func:`boxplot`, :func:`polygon_map` and :func:`polar_bar` draw
  with matplotlib the plots that need ``coord_flip()``,
  ``coord_quickmap()`` and ``coord_polar()``.

Both kinds of plots are rendered by :func:`save` and :func:`show`.
"""

from .charts import boxplot, polar_bar, polygon_map
from .render import Plottable, is_plot, save, show, to_png_bytes
from .summaries import count_proportions, summary_range

__all__ = (
    "boxplot",
    "polar_bar",
    "polygon_map",
    "Plottable",
    "is_plot",
    "save",
    "show",
    "to_png_bytes",
    "count_proportions",
    "summary_range",
)
