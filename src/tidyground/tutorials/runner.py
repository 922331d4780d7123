"""Execute the examples of a chapter, one after the other."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from ..config import Settings
from ..dataframe import Dataframe
from ..datasets import Catalog
from ..plotting import is_plot, save
from .chapter import Chapter, Example

logger = logging.getLogger(__name__)


@dataclass
class ExampleResult:
    """What an example produced.

    :param position: The 1-based position of the example in its chapter.
    :param output: The table or plot the example returned.
    :param path: Where the plot was saved, ``None`` for tables.
    """

    chapter: Chapter
    example: Example
    position: int
    output: Any
    path: Path | None = None

    @property
    def is_plot(self) -> bool:
        return self.path is not None


class Runner:
    """Run tutorial examples against the datasets of a catalog.

    Tables are printed to ``stream``, plots are rendered to
    ``<output_dir>/<chapter>/<NN>-<example>.png``.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        output_dir: str | Path | None = None,
        dpi: int | None = None,
        stream: TextIO | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or Settings.from_env()
        self.catalog = catalog or Catalog(settings)
        self.output_dir = Path(output_dir or settings.output_dir)
        self.dpi = dpi or settings.dpi
        self.stream = stream or sys.stdout

    def run(
        self, chapter: Chapter, section: str | None = None, example: str | None = None
    ) -> list[ExampleResult]:
        """Run the examples of a chapter in order.

        :param section: Only run the examples of this section.
        :param example: Only run the example with this name.
        """
        if example is not None:
            examples = [chapter.get(example)]
        else:
            examples = chapter.examples(section)
        return [self.run_example(chapter, e) for e in examples]

    def run_example(self, chapter: Chapter, example: Example) -> ExampleResult:
        position = chapter.position(example)
        logger.info("Running %s example %d: %s", chapter.name, position, example.name)
        datasets = [self.catalog.load(name) for name in example.datasets]
        output = example(*datasets)

        if isinstance(output, Dataframe):
            self.stream.write(f"## {position:02d} {example.name}: {example.description}\n")
            self.stream.write(f"{output}\n\n")
            return ExampleResult(chapter, example, position, output)

        if is_plot(output):
            path = self.output_dir / chapter.name / f"{position:02d}-{example.name}.png"
            save(output, path, dpi=self.dpi)
            logger.info("Saved plot to %s", path)
            return ExampleResult(chapter, example, position, output, path=path)

        raise TypeError(
            f"Example {example.name} returned {type(output).__name__}, "
            "expected a Dataframe or a plot"
        )
