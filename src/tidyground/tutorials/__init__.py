"""The chapters of the tutorial.

Each chapter is an ordered list of examples, every example
is a function that receives the datasets it needs and returns
a table or a plot::

    from tidyground.tutorials import Runner, get_chapter

    runner = Runner()
    for result in runner.run(get_chapter("data-transformation"), section="select"):
        print(result.example.name)

The :class:`Runner` prints the tables and saves the plots,
the ``tidyground-tutorial`` command is the usual way to use it.
"""

from . import data_transformation, data_visualisation
from .chapter import Chapter, Example, ExampleNotFoundError
from .runner import ExampleResult, Runner

_CHAPTERS = {
    data_visualisation.chapter.name: data_visualisation.chapter,
    data_transformation.chapter.name: data_transformation.chapter,
}


def chapters() -> list[Chapter]:
    """All the chapters, in the order of the book."""
    return list(_CHAPTERS.values())


def get_chapter(name: str) -> Chapter:
    try:
        return _CHAPTERS[name]
    except KeyError:
        raise ExampleNotFoundError("chapter", name, list(_CHAPTERS)) from None


__all__ = (
    "Chapter",
    "Example",
    "ExampleNotFoundError",
    "ExampleResult",
    "Runner",
    "chapters",
    "get_chapter",
)
