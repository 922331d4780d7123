import logging

import matplotlib

matplotlib.use("Agg")

import pyarrow as pa  # noqa: E402
import pyarrow.csv  # noqa: E402
import pytest  # noqa: E402

from tidyground.config import Settings  # noqa: E402
from tidyground.datasets import (  # noqa: E402
    DIAMOND_CLARITIES,
    DIAMOND_COLORS,
    DIAMOND_CUTS,
    Catalog,
)

MPG_CLASSES = ["2seater", "compact", "midsize", "minivan", "pickup", "subcompact", "suv"]
FLIGHT_DESTS = ["IAH", "MIA", "BQN", "ATL", "ORD", "HNL"]


def make_mpg():
    """Few cars for each class, with the columns of ggplot2 mpg."""
    rows = []
    for idx in range(7 * 6):
        displ = 1.6 + (idx % 9) * 0.4
        rows.append(
            {
                "manufacturer": ["audi", "ford", "toyota"][idx % 3],
                "model": f"model {idx % 5}",
                "displ": round(displ, 1),
                "year": 1999 if idx % 2 else 2008,
                "cyl": [4, 6, 8][idx % 3],
                "trans": "auto(l5)" if idx % 2 else "manual(m5)",
                "drv": ["f", "4", "r"][idx % 3],
                "cty": 11 + idx % 12,
                "hwy": int(40 - displ * 4) + idx % 3,
                "fl": "p" if idx % 4 else "r",
                "class": MPG_CLASSES[idx % 7],
            }
        )
    return pa.Table.from_pylist(rows)


def make_diamonds():
    rows = []
    for idx in range(120):
        rows.append(
            {
                "carat": round(0.2 + (idx % 11) * 0.1, 2),
                "cut": DIAMOND_CUTS[idx % 5],
                "color": DIAMOND_COLORS[idx % 7],
                "clarity": DIAMOND_CLARITIES[idx % 8],
                "depth": round(58.0 + (idx % 13) * 0.5, 1),
                "table": 55.0 + idx % 5,
                "price": 326 + idx * 37,
                "x": 3.9 + (idx % 11) * 0.1,
                "y": 3.9 + (idx % 11) * 0.1,
                "z": 2.4 + (idx % 11) * 0.05,
            }
        )
    return pa.Table.from_pylist(rows)


def flight_dest(idx):
    """Most flights go to Houston and Honolulu."""
    if idx < 25:
        return "IAH"
    if idx < 50:
        return "HNL"
    return FLIGHT_DESTS[idx % 6]


def make_flights():
    """Flights of a few days, with missing delays for the cancelled ones.

    Plane N14228 flies often enough to survive
    the filter on the number of flights.
    """
    rows = []
    for idx in range(90):
        cancelled = idx % 11 == 5
        dep_delay = None if cancelled else (idx * 7) % 45 - 10
        arr_delay = None if cancelled or idx % 17 == 3 else dep_delay + idx % 9 - 4
        air_time = None if arr_delay is None else 100 + (idx * 13) % 250
        rows.append(
            {
                "year": 2013,
                "month": 1 + idx % 2,
                "day": 1 + (idx // 2) % 3,
                "dep_time": None if cancelled else 517 + idx,
                "sched_dep_time": 515 + idx,
                "dep_delay": dep_delay,
                "arr_time": None if arr_delay is None else 830 + idx,
                "sched_arr_time": 819 + idx,
                "arr_delay": arr_delay,
                "carrier": ["UA", "AA", "B6", "DL"][idx % 4],
                "flight": 1545 + idx,
                "tailnum": "N14228" if idx < 40 else f"N{600 + idx % 6}US",
                "origin": ["EWR", "LGA", "JFK"][idx % 3],
                "dest": flight_dest(idx),
                "air_time": air_time,
                "distance": 1400 + (idx * 31) % 1200,
                "hour": 5 + idx % 12,
                "minute": idx % 60,
                "time_hour": f"2013-0{1 + idx % 2}-0{1 + (idx // 2) % 3} 05:00:00",
            }
        )
    return pa.Table.from_pylist(rows)


def write_r_csv(table, path):
    """Write the table like R does, row names first."""
    table = table.add_column(0, "rownames", pa.array(range(1, table.num_rows + 1)))
    pa.csv.write_csv(table, path)


@pytest.fixture(scope="session")
def data_home(tmp_path_factory):
    home = tmp_path_factory.mktemp("data_home")
    write_r_csv(make_mpg(), home / "mpg.csv")
    write_r_csv(make_diamonds(), home / "diamonds.csv")
    write_r_csv(make_flights(), home / "flights.csv")
    return home


@pytest.fixture
def settings(data_home, tmp_path):
    return Settings(
        data_home=data_home,
        datasets_url="http://datasets.invalid/csv",
        output_dir=tmp_path / "plots",
        dpi=30,
    )


@pytest.fixture
def catalog(settings):
    return Catalog(settings)


@pytest.fixture
def mpg(catalog):
    return catalog.load("mpg")


@pytest.fixture
def diamonds(catalog):
    return catalog.load("diamonds")


@pytest.fixture
def flights(catalog):
    return catalog.load("flights")


@pytest.fixture
def tidyground_logger():
    """The package logger, restored as it was once the test is done."""
    logger = logging.getLogger("tidyground")
    handlers, level = logger.handlers[:], logger.level
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
