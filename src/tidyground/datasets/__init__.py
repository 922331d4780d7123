"""Sample datasets used by the tutorials.

=============  ==============================================================
``mpg``        Fuel economy of 38 car models (ggplot2), 234 rows.
``diamonds``   Prices and attributes of diamonds (ggplot2), 53,940 rows.
``flights``    Flights departed from New York City in 2013 (nycflights13),
               336,776 rows.
``nz``         Coarse outline of New Zealand, for the map examples.
=============  ==============================================================

>>> from tidyground.datasets import Catalog
>>> catalog = Catalog()
>>> catalog.load("nz").columns
['long', 'lat', 'group', 'order', 'region']
"""

from .catalog import (
    DATASETS,
    DIAMOND_CLARITIES,
    DIAMOND_COLORS,
    DIAMOND_CUTS,
    Catalog,
    DatasetNotFoundError,
)

__all__ = (
    "DATASETS",
    "DIAMOND_CLARITIES",
    "DIAMOND_COLORS",
    "DIAMOND_CUTS",
    "Catalog",
    "DatasetNotFoundError",
)
