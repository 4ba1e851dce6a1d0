"""Expand grammar symbols into finished text."""

import itertools
import random
from typing import Iterator, Protocol, Sequence

from errors import ExpansionDepthError, InvalidGroupShapeError
from grammar_graph import GrammarGraph
from template_parser import Literal, Template


class ChoiceStrategy(Protocol):
    """Protocol for picking one template of a group."""

    def choose(self, templates: Sequence[Template]) -> Template:
        """Pick one of the templates (never called with an empty sequence)."""
        ...


class RandomStrategy:
    """Uniform random pick with a private random source."""

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def choose(self, templates: Sequence[Template]) -> Template:
        return self.rng.choice(templates)


class FirstStrategy:
    """Always pick the first template."""

    def choose(self, templates: Sequence[Template]) -> Template:
        return templates[0]


class Expander:
    """Recursive expander over a validated grammar graph.

    There is no depth limit unless max_depth is given: a grammar whose
    recursive rules never pick a terminating branch will not terminate.
    """

    def __init__(
        self,
        graph: GrammarGraph,
        strategy: ChoiceStrategy | None = None,
        max_depth: int | None = None,
    ):
        self.graph = graph
        self.strategy = strategy if strategy is not None else RandomStrategy()
        self.max_depth = max_depth

    def _check_depth(self, symbol: str, depth: int) -> None:
        if self.max_depth is not None and depth > self.max_depth:
            raise ExpansionDepthError(symbol, self.max_depth)

    def expand(self, symbol: str = "origin") -> str:
        """
        Expand a symbol into text.

        Args:
            symbol: Name of the group to expand

        Returns:
            The expanded text

        Raises:
            UnknownGroupError: If the symbol is not in the graph
            InvalidGroupShapeError: If a group on the way has no rules
            ExpansionDepthError: If max_depth is set and exceeded
        """
        return self._expand(symbol, 0)

    def _expand(self, symbol: str, depth: int) -> str:
        self._check_depth(symbol, depth)
        group = self.graph.get(symbol)
        if not group.templates:
            raise InvalidGroupShapeError(symbol, "has no rules to expand")
        template = self.strategy.choose(group.templates)

        parts = []
        for segment in template.segments:
            if isinstance(segment, Literal):
                parts.append(segment.text)
                continue
            text = self._expand(segment.name, depth + 1)
            for modifier in segment.modifiers:
                text = modifier.apply(text)
            parts.append(text)
        return "".join(parts)

    def generate(self, count: int, symbol: str = "origin") -> list[str]:
        """Expand a symbol several times."""
        return [self.expand(symbol) for _ in range(count)]

    def enumerate(self, symbol: str = "origin") -> Iterator[str]:
        """
        Yield every expansion of a symbol, one per derivation.

        Order follows template order, first placeholder varying slowest.
        Recursive groups would never finish, so they are rejected unless
        max_depth bounds the walk; derivations nesting deeper than
        max_depth are then skipped.

        Raises:
            ExpansionDepthError: If the symbol reaches a cycle and no
                max_depth is set
        """
        if self.max_depth is None:
            cyclic = set(self.graph.cyclic_groups())
            for name in self.graph.reachable(symbol):
                if name in cyclic:
                    raise ExpansionDepthError(name, 0)
        yield from self._enumerate(symbol, 0)

    def _enumerate(self, symbol: str, depth: int) -> Iterator[str]:
        if self.max_depth is not None and depth > self.max_depth:
            return
        for template in self.graph.get(symbol).templates:
            yield from self._enumerate_template(template, depth)

    def _enumerate_template(self, template: Template, depth: int) -> Iterator[str]:
        choices = []
        for segment in template.segments:
            if isinstance(segment, Literal):
                choices.append((segment.text,))
                continue
            expansions = []
            for text in self._enumerate(segment.name, depth + 1):
                for modifier in segment.modifiers:
                    text = modifier.apply(text)
                expansions.append(text)
            choices.append(expansions)
        for parts in itertools.product(*choices):
            yield "".join(parts)
