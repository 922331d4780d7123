"""Chapters of the tutorial and the examples they are made of."""

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from ..utils.inspect import get_parameter_names


class ExampleNotFoundError(KeyError):
    """A chapter, section or example that doesn't exist was requested."""

    def __init__(self, kind: str, name: str, available: Sequence[str]) -> None:
        super().__init__(name)
        self.kind = kind
        self.name = name
        self.available = list(available)

    def __str__(self) -> str:
        return f"Unknown {self.kind} '{self.name}', available: {', '.join(self.available)}"


@dataclass(frozen=True)
class Example:
    """A single statement of the tutorial.

    The function builds a table or a plot out of the datasets
    it receives, the names of its arguments are the names
    of the datasets it needs.
    """

    name: str
    section: str
    func: Callable[..., Any]

    @property
    def datasets(self) -> list[str]:
        return get_parameter_names(self.func)

    @property
    def description(self) -> str:
        """The first line of the example documentation."""
        doc = (self.func.__doc__ or "").strip()
        return doc.splitlines()[0] if doc else self.name

    def __call__(self, *datasets: Any) -> Any:
        return self.func(*datasets)


class Chapter:
    """An ordered collection of examples, divided in sections.

    Examples are registered with the :meth:`example` decorator
    and are kept in the order they were registered::

        chapter = Chapter("data-visualisation", "Data visualisation")

        @chapter.example("Aesthetic mappings")
        def displ_vs_hwy(mpg):
            return so.Plot(mpg.to_pandas(), x="displ", y="hwy").add(so.Dot())
    """

    def __init__(self, name: str, title: str, source: str | None = None) -> None:
        """
        :param name: Identifier of the chapter, used from the command line.
        :param title: Human readable title.
        :param source: Url of the book chapter the examples come from.
        """
        self.name = name
        self.title = title
        self.source = source
        self._examples: dict[str, Example] = {}

    def __str__(self) -> str:
        return f"{self.name}: {self.title}"

    def __len__(self) -> int:
        return len(self._examples)

    def example(self, section: str, name: str | None = None) -> Callable:
        """Register the decorated function as an example of ``section``."""

        def _register(func: Callable[..., Any]) -> Callable[..., Any]:
            example_name = name or func.__name__
            if example_name in self._examples:
                raise ValueError(
                    f"Example {example_name} is already registered in {self.name}"
                )
            self._examples[example_name] = Example(example_name, section, func)
            return func

        return _register

    def sections(self) -> list[str]:
        """Names of the sections, in the order they appear."""
        return list(dict.fromkeys(e.section for e in self._examples.values()))

    def examples(self, section: str | None = None) -> list[Example]:
        """The examples of the chapter, or only those of ``section``."""
        if section is None:
            return list(self._examples.values())
        if section not in self.sections():
            raise ExampleNotFoundError("section", section, self.sections())
        return [e for e in self._examples.values() if e.section == section]

    def get(self, name: str) -> Example:
        try:
            return self._examples[name]
        except KeyError:
            raise ExampleNotFoundError("example", name, list(self._examples)) from None

    def position(self, example: Example) -> int:
        """The 1-based position of the example within the chapter."""
        return list(self._examples).index(example.name) + 1
