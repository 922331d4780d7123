"""Data transformation.

Follows http://r4ds.had.co.nz/transform.html

The key verbs of the chapter are available as methods of
:class:`tidyground.dataframe.Dataframe`:

* Pick observations by their values (``filter()``).
* Reorder the rows (``arrange()``).
* Pick variables by their names (``select()``).
* Create new variables with functions of existing variables (``mutate()``).
* Collapse many values down to a single summary (``summarise()``).

These can all be used in conjunction with ``group_by()`` which changes
the scope of each function from operating on the entire dataset to
operating on it group-by-group.
"""

import seaborn.objects as so

import tidyground.dataframe as td
from tidyground.dataframe import col

from .chapter import Chapter

chapter = Chapter(
    "data-transformation",
    "Data transformation",
    source="http://r4ds.had.co.nz/transform.html",
)


def narrow_flights(flights):
    """A narrower flights table, so that new columns are visible.

    ``mutate()`` always adds new columns at the end of the data.
    """
    return flights.select(
        td.col_range("year", "day"),
        td.ends_with("delay"),
        "distance",
        "air_time",
    )


def not_cancelled_flights(flights):
    """Cancelled flights are those with a missing delay."""
    return flights.filter(
        ~td.is_na(col("dep_delay")),
        ~td.is_na(col("arr_delay")),
    )


def delay_scatter(delays):
    return so.Plot(delays.to_pandas(), x="n", y="delay").add(so.Dot(alpha=0.1))


# Filter rows


@chapter.example("filter")
def jan1(flights):
    """All flights on January 1st."""
    return flights.filter(col("month") == 1, col("day") == 1)


# Arrange rows


@chapter.example("arrange")
def arrange_by_date(flights):
    """Each additional column breaks ties in the values of the preceding ones."""
    return flights.arrange("year", "month", "day")


@chapter.example("arrange")
def arrange_by_delay_desc(flights):
    """Most delayed flights first, missing values are always last."""
    return flights.arrange(td.desc("dep_delay"))


# Select columns


@chapter.example("select")
def select_date(flights):
    return flights.select("year", "month", "day")


@chapter.example("select")
def select_range(flights):
    """All columns between year and day (inclusive)."""
    return flights.select(td.col_range("year", "day"))


@chapter.example("select")
def select_all_but_range(flights):
    """All columns except those from year to day (inclusive)."""
    return flights.select(td.exclude(td.col_range("year", "day")))


@chapter.example("select")
def select_starts_with(flights):
    """Columns whose name begins with "dep"."""
    return flights.select(td.starts_with("dep"))


@chapter.example("select")
def select_contains(flights):
    """Columns whose name contains "time"."""
    return flights.select(td.contains("time"))


@chapter.example("select")
def select_matches(flights):
    """Columns whose name has a repeated character."""
    return flights.select(td.matches(r"(.)\1"))


@chapter.example("select")
def rename_tailnum(flights):
    return flights.rename(tail_num="tailnum")


# Add new variables


@chapter.example("mutate")
def flights_sml(flights):
    return narrow_flights(flights)


@chapter.example("mutate")
def gain_and_speed(flights):
    return narrow_flights(flights).mutate(
        gain=col("dep_delay") - col("arr_delay"),
        speed=col("distance") / col("air_time") * 60,
    )


@chapter.example("mutate")
def gain_per_hour(flights):
    """New columns can refer to the columns just created."""
    return narrow_flights(flights).mutate(
        gain=col("dep_delay") - col("arr_delay"),
        hours=col("air_time") / 60,
        gain_per_hour=col("gain") / col("hours"),
    )


@chapter.example("mutate")
def transmute_gain_per_hour(flights):
    """Only keep the new columns."""
    return flights.transmute(
        gain=col("dep_delay") - col("arr_delay"),
        hours=col("air_time") / 60,
        gain_per_hour=col("gain") / col("hours"),
    )


# Grouped summaries


@chapter.example("summarise")
def mean_delay(flights):
    """Collapse the whole table to a single row."""
    return flights.summarise(delay=td.mean("dep_delay", na_rm=True))


@chapter.example("summarise")
def mean_delay_by_day(flights):
    """Average delay of each day."""
    by_day = flights.group_by("year", "month", "day")
    return by_day.summarise(delay=td.mean("dep_delay", na_rm=True))


# Combining multiple operations with the pipe


@chapter.example("pipe")
def delays_by_destination(flights):
    """Flights count, distance and delay of destinations with more than 20 flights."""
    return (
        flights.group_by("dest")
        .summarise(
            count=td.n(),
            dist=td.mean("distance", na_rm=True),
            delay=td.mean("arr_delay", na_rm=True),
        )
        .filter(col("count") > 20, col("dest") != "HNL")
    )


@chapter.example("pipe")
def not_cancelled_mean_delay(flights):
    """Once cancelled flights are removed, no missing values are left to skip."""
    return (
        not_cancelled_flights(flights)
        .group_by("year", "month", "day")
        .summarise(mean=td.mean("dep_delay"))
    )


# Counts


@chapter.example("counts")
def delay_by_tailnum(flights):
    """Distribution of the average delay of each plane."""
    delays = (
        not_cancelled_flights(flights)
        .group_by("tailnum")
        .summarise(delay=td.mean("arr_delay"))
    )
    return (
        so.Plot(delays.to_pandas(), x="delay")
        .add(so.Line(), so.Hist(binwidth=10))
    )


@chapter.example("counts")
def delay_vs_flights(flights):
    """Average delay against the number of flights of each plane.

    The variation of the average decreases as the sample size increases.
    """
    delays = (
        not_cancelled_flights(flights)
        .group_by("tailnum")
        .summarise(delay=td.mean("arr_delay", na_rm=True), n=td.n())
    )
    return delay_scatter(delays)


@chapter.example("counts")
def delay_vs_flights_filtered(flights):
    """Without the planes with fewest flights, to see less of the extreme variation."""
    return (
        not_cancelled_flights(flights)
        .group_by("tailnum")
        .summarise(delay=td.mean("arr_delay", na_rm=True), n=td.n())
        .filter(col("n") > 25)
        .pipe(delay_scatter)
    )
