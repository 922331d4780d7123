"""Data visualisation.

Follows http://r4ds.had.co.nz/data-visualisation.html

The chapter builds every plot out of the same template::

    ggplot(data = <DATA>) +
      <GEOM_FUNCTION>(
        mapping = aes(<MAPPINGS>),
        stat = <STAT>,
        position = <POSITION>
      ) +
      <COORDINATE_FUNCTION> +
      <FACET_FUNCTION>

which with ``seaborn.objects`` becomes::

    (
        so.Plot(<DATA>, <MAPPINGS>)
        .add(<MARK>, <STAT>, <MOVE>)
        .facet(<FACETS>)
    )

See :mod:`tidyground.plotting` for how each geometric object is translated.
"""

import seaborn.objects as so

from .. import plotting
from ..dataframe import Dataframe, col
from ..datasets import DIAMOND_CUTS
from .chapter import Chapter

chapter = Chapter(
    "data-visualisation",
    "Data visualisation",
    source="http://r4ds.had.co.nz/data-visualisation.html",
)


# Aesthetic mappings


@chapter.example("aesthetics")
def displ_vs_hwy(mpg):
    """Engine displacement against highway fuel efficiency."""
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy").add(so.Dot())


@chapter.example("aesthetics")
def color_by_class(mpg):
    """Map the class of the car to the color of the points."""
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy", color="class").add(so.Dot())


@chapter.example("aesthetics")
def size_by_class(mpg):
    """Map the class of the car to the size of the points.

    Mapping an unordered variable to an ordered aesthetic like size
    is not a good idea, it's only here to show that it can be done.
    """
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy", pointsize="class").add(so.Dot())


@chapter.example("aesthetics")
def alpha_by_class(mpg):
    """Map the class of the car to the transparency of the points."""
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy", alpha="class").add(so.Dot())


@chapter.example("aesthetics")
def shape_by_class(mpg):
    """Map the class of the car to the shape of the points."""
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy", marker="class").add(so.Dot())


@chapter.example("aesthetics")
def blue_points(mpg):
    """Set the color of all points by hand, outside of the mappings."""
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy").add(so.Dot(color="blue"))


# Facets


@chapter.example("facets")
def facet_wrap_class(mpg):
    """Split the plot in one facet for each class, on two rows."""
    return (
        so.Plot(mpg.to_pandas(), x="displ", y="hwy")
        .add(so.Dot())
        .facet(col="class", wrap=4)
    )


@chapter.example("facets")
def facet_grid_drv_cyl(mpg):
    """Grid of facets, drive train on the rows and cylinders on the columns."""
    return (
        so.Plot(mpg.to_pandas(), x="displ", y="hwy")
        .add(so.Dot())
        .facet(row="drv", col="cyl")
    )


@chapter.example("facets")
def facet_grid_cyl(mpg):
    """Facets only on the columns, ``facet_grid(. ~ cyl)``."""
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy").add(so.Dot()).facet(col="cyl")


@chapter.example("facets")
def facet_grid_drv(mpg):
    """Facets only on the rows, ``facet_grid(drv ~ .)``."""
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy").add(so.Dot()).facet(row="drv")


# Geometric objects


@chapter.example("geoms")
def point_geom(mpg):
    """The same data drawn with the point geom..."""
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy").add(so.Dot())


@chapter.example("geoms")
def smooth_geom(mpg):
    """...and with the smooth geom."""
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy").add(so.Line(), so.PolyFit())


@chapter.example("geoms")
def smooth_by_drv(mpg):
    """One smooth line for each drive train, over the points of the same color."""
    return (
        so.Plot(mpg.to_pandas(), x="displ", y="hwy", color="drv")
        .add(so.Line(), so.PolyFit(), linestyle="drv")
        .add(so.Dot())
    )


@chapter.example("grouping")
def smooth(mpg):
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy").add(so.Line(), so.PolyFit())


@chapter.example("grouping")
def smooth_group_drv(mpg):
    """Group the data by drive train without any visible distinction."""
    return (
        so.Plot(mpg.to_pandas(), x="displ", y="hwy")
        .add(so.Line(), so.PolyFit(), group="drv")
    )


@chapter.example("grouping")
def smooth_color_drv_no_legend(mpg):
    """Group the data by drive train, coloring each line but without legend."""
    return (
        so.Plot(mpg.to_pandas(), x="displ", y="hwy")
        .add(so.Line(), so.PolyFit(), color="drv", legend=False)
    )


@chapter.example("grouping")
def points_and_smooth(mpg):
    """Multiple geoms in the same plot, repeating the mappings in each one."""
    return (
        so.Plot(mpg.to_pandas())
        .add(so.Dot(), x="displ", y="hwy")
        .add(so.Line(), so.PolyFit(), x="displ", y="hwy")
    )


@chapter.example("grouping")
def global_mappings(mpg):
    """Mappings passed to the plot are shared by all its layers."""
    return (
        so.Plot(mpg.to_pandas(), x="displ", y="hwy")
        .add(so.Dot())
        .add(so.Line(), so.PolyFit())
    )


@chapter.example("grouping")
def local_mappings(mpg):
    """Mappings of a layer extend the global ones, only for that layer."""
    return (
        so.Plot(mpg.to_pandas(), x="displ", y="hwy")
        .add(so.Dot(), color="class")
        .add(so.Line(), so.PolyFit())
    )


@chapter.example("grouping")
def layer_data(mpg):
    """Each layer can even plot different data, here only the subcompact cars."""
    subcompact = mpg.filter(col("class") == "subcompact")
    return (
        so.Plot(mpg.to_pandas(), x="displ", y="hwy")
        .add(so.Dot(), color="class")
        .add(so.Line(), so.PolyFit(), data=subcompact.to_pandas())
    )


@chapter.example("grouping")
def color_by_drv(mpg):
    return so.Plot(mpg.to_pandas(), x="displ", y="hwy").add(so.Dot(), color="drv")


# Statistical transformations


@chapter.example("stats")
def bar_cut(diamonds):
    """Every geom has a default stat, bars count the rows of each category."""
    return so.Plot(diamonds.to_pandas(), x="cut").add(so.Bar(), so.Count())


@chapter.example("stats")
def count_cut(diamonds):
    """The count stat can be used directly, it draws bars."""
    return so.Plot(diamonds.to_pandas(), x="cut").add(so.Bar(), so.Count())


@chapter.example("stats")
def bar_identity():
    """Plot the values as they are, instead of counting them.

    The data is written by hand, the bars are as high as the frequencies.
    """
    demo = Dataframe.from_rows(
        ["cut", "freq"],
        [
            ("Fair", 1610),
            ("Good", 4906),
            ("Very Good", 12082),
            ("Premium", 13791),
            ("Ideal", 21551),
        ],
        levels={"cut": DIAMOND_CUTS},
    )
    return so.Plot(demo.to_pandas(), x="cut", y="freq").add(so.Bar())


@chapter.example("stats")
def bar_proportion(diamonds):
    """Proportion of each cut, rather than the count."""
    proportions = plotting.count_proportions(diamonds, "cut")
    return so.Plot(proportions.to_pandas(), x="cut", y="prop").add(so.Bar())


@chapter.example("stats")
def summary_depth(diamonds):
    """Summarise the depth of each cut with its minimum, median and maximum."""
    summary = plotting.summary_range(diamonds, "cut", "depth")
    return (
        so.Plot(summary.to_pandas(), x="cut")
        .add(so.Range(), ymin="ymin", ymax="ymax")
        .add(so.Dot(), y="depth")
    )


# Position adjustments


@chapter.example("positions")
def bar_outline_cut(diamonds):
    """Color the outline of the bars."""
    return (
        so.Plot(diamonds.to_pandas(), x="cut", edgecolor="cut")
        .add(so.Bar(color="lightgray", edgewidth=2), so.Count())
    )


@chapter.example("positions")
def bar_fill_cut(diamonds):
    """Color the bars themselves."""
    return so.Plot(diamonds.to_pandas(), x="cut", color="cut").add(so.Bar(), so.Count())


@chapter.example("positions")
def bar_stack_clarity(diamonds):
    """Mapping another variable to the color stacks the bars."""
    return (
        so.Plot(diamonds.to_pandas(), x="cut", color="clarity")
        .add(so.Bar(), so.Count(), so.Stack())
    )


@chapter.example("positions")
def bar_identity_transparent(diamonds):
    """Without moving them, the bars overlap: make them transparent to see it."""
    return (
        so.Plot(diamonds.to_pandas(), x="cut", color="clarity")
        .add(so.Bar(alpha=0.2), so.Count())
    )


@chapter.example("positions")
def bar_identity_hollow(diamonds):
    """Or draw only the outline of the overlapping bars."""
    return (
        so.Plot(diamonds.to_pandas(), x="cut", edgecolor="clarity")
        .add(so.Bar(fill=False), so.Count())
    )


@chapter.example("positions")
def bar_fill_clarity(diamonds):
    """Stacked bars of the same height, to compare proportions across groups."""
    proportions = plotting.count_proportions(diamonds, "cut", fill="clarity")
    return (
        so.Plot(proportions.to_pandas(), x="cut", y="prop", color="clarity")
        .add(so.Bar(), so.Stack())
    )


@chapter.example("positions")
def bar_dodge_clarity(diamonds):
    """Place overlapping bars beside one another, to compare individual values."""
    return (
        so.Plot(diamonds.to_pandas(), x="cut", color="clarity")
        .add(so.Bar(), so.Count(), so.Dodge())
    )


@chapter.example("positions")
def jitter_points(mpg):
    """Add some random noise to the points, to avoid overplotting."""
    return (
        so.Plot(mpg.to_pandas(), x="displ", y="hwy")
        .add(so.Dot(), so.Jitter(x=0.08, y=0.8, seed=0))
    )


# Coordinate systems


@chapter.example("coordinates")
def boxplot_class(mpg):
    return plotting.boxplot(mpg, "class", "hwy")


@chapter.example("coordinates")
def boxplot_class_flipped(mpg):
    """Switch the axes, the names of the classes become readable."""
    return plotting.boxplot(mpg, "class", "hwy", flip=True)


@chapter.example("coordinates")
def nz_map(nz):
    """Polygons of the islands of New Zealand."""
    return plotting.polygon_map(nz, "long", "lat", group="group")


@chapter.example("coordinates")
def nz_quickmap(nz):
    """The same map with the aspect ratio set correctly for a map."""
    return plotting.polygon_map(nz, "long", "lat", group="group", quickmap=True)


@chapter.example("coordinates")
def bar_flipped(diamonds):
    """Bars of the cuts, on the vertical axis."""
    return (
        so.Plot(diamonds.to_pandas(), y="cut", color="cut")
        .add(so.Bar(width=1), so.Count(), legend=False)
        .label(x="", y="")
        .layout(size=(5, 5))
    )


@chapter.example("coordinates")
def bar_polar(diamonds):
    """The same bars in polar coordinates, a Coxcomb chart."""
    return plotting.polar_bar(diamonds, "cut")
