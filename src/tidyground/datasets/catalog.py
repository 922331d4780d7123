"""The catalog of the datasets used by the tutorials.

The tutorials refer to datasets by name, like ``mpg`` or ``flights``.
The catalog knows where each of them comes from and loads it
as a :class:`tidyground.dataframe.Dataframe`.

Most datasets are the CSV exports of the R packages published
by the Rdatasets project. They are downloaded the first time
they are needed and kept in the data home directory, the user cache
directory of the platform by default (``~/.cache/tidyground`` on Linux)::

    ~/.cache/tidyground/mpg.csv
    ~/.cache/tidyground/diamonds.csv
    ~/.cache/tidyground/flights.csv

A CSV file with the name of the dataset that is already in the data
home is used as is, which allows working offline by placing the
files there in advance.
"""

import logging
import os
import urllib.request
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pyarrow as pa

from ..compute import CSVDataSource, collect_table
from ..config import Settings
from ..dataframe import Dataframe
from . import nz

logger = logging.getLogger(__name__)

DIAMOND_CUTS = ["Fair", "Good", "Very Good", "Premium", "Ideal"]
DIAMOND_COLORS = ["D", "E", "F", "G", "H", "I", "J"]
DIAMOND_CLARITIES = ["I1", "SI2", "SI1", "VS2", "VS1", "VVS2", "VVS1", "IF"]


class DatasetNotFoundError(KeyError):
    """The requested dataset is not part of the catalog."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(name)
        self.name = name
        self.available = available

    def __str__(self) -> str:
        return f"Unknown dataset '{self.name}', available datasets: {', '.join(self.available)}"


@dataclass(frozen=True)
class RemoteCSV:
    """A dataset downloaded as CSV from the Rdatasets mirror.

    :param package: The R package that ships the dataset.
    :param name: The name of the dataset in the R package.
    :param levels: The ordered levels of its factor columns.
    """

    package: str
    name: str
    description: str
    levels: dict[str, list[str]] = field(default_factory=dict)

    def url(self, base_url: str) -> str:
        return f"{base_url}/{self.package}/{self.name}.csv"


@dataclass(frozen=True)
class Bundled:
    """A dataset that ships with tidyground."""

    loader: Callable[[], pa.Table]
    description: str


DATASETS: dict[str, RemoteCSV | Bundled] = {
    "mpg": RemoteCSV(
        "ggplot2", "mpg", "Fuel economy data from 1999 to 2008 for 38 popular models of cars"
    ),
    "diamonds": RemoteCSV(
        "ggplot2",
        "diamonds",
        "Prices and attributes of almost 54,000 diamonds",
        levels={
            "cut": DIAMOND_CUTS,
            "color": DIAMOND_COLORS,
            "clarity": DIAMOND_CLARITIES,
        },
    ),
    "flights": RemoteCSV(
        "nycflights13", "flights", "All flights that departed from NYC in 2013"
    ),
    "nz": Bundled(nz.outline, "Coarse outline of New Zealand islands"),
}


class Catalog:
    """Resolves dataset names to Dataframes.

    Datasets are loaded in memory once per catalog,
    every later request returns the same read-only data.
    """

    # Row numbers column added by R when exporting to CSV.
    ROWNAMES_COLUMNS = ("rownames", "")
    # Column types are inferred from the first block, a single block
    # covers the whole file of every dataset in the catalog.
    BLOCK_SIZE = 64 * 1024 * 1024

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings.from_env()
        self._loaded: dict[str, Dataframe] = {}

    def __str__(self) -> str:
        return f"Catalog(data_home={self.settings.data_home})"

    def available(self) -> list[str]:
        """Names of all the datasets in the catalog."""
        return sorted(DATASETS)

    def describe(self, name: str) -> str:
        return self._entry(name).description

    def path(self, name: str) -> Path:
        """Where the CSV file of a dataset is expected in the data home."""
        return Path(self.settings.data_home) / f"{name}.csv"

    def load(self, name: str) -> Dataframe:
        """Load a dataset, downloading it when it's not available locally."""
        if name not in self._loaded:
            self._loaded[name] = self._load(name)
        return self._loaded[name]

    def _entry(self, name: str) -> RemoteCSV | Bundled:
        try:
            return DATASETS[name]
        except KeyError:
            raise DatasetNotFoundError(name, self.available()) from None

    def _load(self, name: str) -> Dataframe:
        entry = self._entry(name)
        if isinstance(entry, Bundled):
            logger.debug("Loading bundled dataset %s", name)
            return Dataframe(entry.loader())

        path = self.fetch(name)
        logger.info("Loading dataset %s from %s", name, path)
        table = collect_table(
            CSVDataSource(
                str(path),
                block_size=self.BLOCK_SIZE,
                drop_columns=self.ROWNAMES_COLUMNS,
            )
        )
        return Dataframe(table, levels=entry.levels)

    def fetch(self, name: str) -> Path:
        """Make sure the CSV file of a dataset exists in the data home.

        The file is downloaded to a temporary name and moved
        in place only once complete, so that an interrupted
        download is never mistaken for the dataset.
        """
        entry = self._entry(name)
        path = self.path(name)
        if path.exists() or isinstance(entry, Bundled):
            return path

        url = entry.url(self.settings.datasets_url)
        path.parent.mkdir(parents=True, exist_ok=True)
        partial = path.with_suffix(".csv.part")
        logger.info("Downloading dataset %s from %s", name, url)
        try:
            urllib.request.urlretrieve(url, partial)
        except BaseException:
            if partial.exists():
                os.unlink(partial)
            raise
        os.replace(partial, path)
        return path
