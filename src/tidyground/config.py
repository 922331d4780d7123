"""Runtime settings for tidyground.

Settings are read from the environment, and the command line
tools override them with their own options::

    TIDYGROUND_DATA_HOME      where the downloaded datasets are cached
    TIDYGROUND_DATASETS_URL   base url the CSV datasets are downloaded from
    TIDYGROUND_OUTPUT_DIR     where the tutorial plots are saved
    TIDYGROUND_DPI            resolution of the saved plots
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from platformdirs import user_cache_dir

DEFAULT_DATA_HOME = Path(user_cache_dir("tidyground"))
DEFAULT_DATASETS_URL = "https://vincentarelbundock.github.io/Rdatasets/csv"
DEFAULT_OUTPUT_DIR = Path("plots")
DEFAULT_DPI = 100


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    :param data_home: Directory where datasets are cached.
    :param datasets_url: Base url of the Rdatasets CSV mirror,
                         datasets are fetched from ``{datasets_url}/{package}/{name}.csv``.
    :param output_dir: Directory where the rendered plots are written.
    :param dpi: Resolution of the rendered plots.
    """

    data_home: Path = DEFAULT_DATA_HOME
    datasets_url: str = DEFAULT_DATASETS_URL
    output_dir: Path = DEFAULT_OUTPUT_DIR
    dpi: int = DEFAULT_DPI

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build the settings from environment variables, falling back to defaults."""
        if environ is None:
            environ = os.environ

        settings = cls()
        if environ.get("TIDYGROUND_DATA_HOME"):
            settings = replace(
                settings, data_home=Path(environ["TIDYGROUND_DATA_HOME"]).expanduser()
            )
        if environ.get("TIDYGROUND_DATASETS_URL"):
            settings = replace(
                settings, datasets_url=environ["TIDYGROUND_DATASETS_URL"].rstrip("/")
            )
        if environ.get("TIDYGROUND_OUTPUT_DIR"):
            settings = replace(
                settings, output_dir=Path(environ["TIDYGROUND_OUTPUT_DIR"]).expanduser()
            )
        if environ.get("TIDYGROUND_DPI"):
            try:
                settings = replace(settings, dpi=int(environ["TIDYGROUND_DPI"]))
            except ValueError:
                raise ValueError(
                    f"TIDYGROUND_DPI must be an integer, got {environ['TIDYGROUND_DPI']!r}"
                ) from None
        return settings

    def override(self, **changes: Any) -> "Settings":
        """Return new settings replacing the provided values, ``None`` values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
