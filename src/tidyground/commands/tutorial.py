"""Command line interface for running the tutorial examples.

This module provides a command line interface that runs the examples
of a :mod:`tidyground.tutorials` chapter through the
:class:`tidyground.tutorials.Runner`.

Tables are printed to the console in a tabular format using the
:mod:`tidyground.utils.tabulate` module, plots are written as PNG
images in the output directory and their path is printed.
"""

import argparse
import sys
from typing import Sequence

import matplotlib

from tidyground.config import Settings
from tidyground.dataframe import ColumnNotFoundError
from tidyground.datasets import Catalog, DatasetNotFoundError
from tidyground.tutorials import ExampleNotFoundError, Runner, chapters, get_chapter
from tidyground.utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the examples of a data science tutorial chapter."
    )
    parser.add_argument(
        "chapter",
        type=str,
        help=f"The chapter to run, one of: {', '.join(c.name for c in chapters())}.",
    )
    parser.add_argument("-s", "--section", help="Only run the examples of this section.")
    parser.add_argument("-e", "--example", help="Only run the example with this name.")
    parser.add_argument("-o", "--output-dir", help="Directory where plots are saved.")
    parser.add_argument("-d", "--data-home", help="Directory where datasets are cached.")
    parser.add_argument(
        "-l", "--list", action="store_true", help="List the examples instead of running them."
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log progress, twice for debug."
    )
    return parser


def list_examples(chapter, section: str | None = None) -> None:
    print(f"{chapter.title} ({chapter.source})")
    for example in chapter.examples(section):
        datasets = ", ".join(example.datasets) or "-"
        print(
            f"  {chapter.position(example):02d} [{example.section}] {example.name} "
            f"({datasets}): {example.description}"
        )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line arguments and run the requested examples."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        configure_logging("DEBUG" if args.verbose > 1 else "INFO")
    else:
        configure_logging()

    settings = Settings.from_env().override(
        data_home=args.data_home, output_dir=args.output_dir
    )

    try:
        chapter = get_chapter(args.chapter)
        if args.list:
            list_examples(chapter, args.section)
            return 0

        # Plots are only written to files.
        matplotlib.use("Agg")
        runner = Runner(Catalog(settings), settings=settings)
        for result in runner.run(chapter, section=args.section, example=args.example):
            if result.is_plot:
                print(f"## {result.position:02d} {result.example.name}: saved {result.path}")
    except (ExampleNotFoundError, DatasetNotFoundError, ColumnNotFoundError) as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
