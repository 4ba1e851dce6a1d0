"""Count how many distinct texts each group of a grammar can produce."""

import logging
from enum import Enum

from grammar_graph import GrammarGraph

logger = logging.getLogger(__name__)


class VisitState(Enum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


class CardinalityCalculator:
    """Memoized possibility counter over a grammar graph.

    A rule counts the product of its placeholders' group counts (1 for a
    rule without placeholders), a group the sum of its distinct rules' counts.
    A rule repeated verbatim within a group is counted once.

    On recursive grammars the count of a group that is requested while it is
    still being computed is whatever it has accumulated so far. The result
    terminates but is a lower bound, not the true (often infinite) count.
    """

    def __init__(self, graph: GrammarGraph):
        self.graph = graph
        self._state: dict[str, VisitState] = {}
        self._group_counts: dict[str, int] = {}
        self._template_counts: dict[tuple[str, int], int] = {}

    def group_cardinality(self, name: str) -> int:
        """Number of possible expansions of a group."""
        state = self._state.get(name, VisitState.UNVISITED)
        if state is not VisitState.UNVISITED:
            return self._group_counts[name]

        group = self.graph.get(name)
        self._state[name] = VisitState.IN_PROGRESS
        self._group_counts[name] = 0
        seen_rules = set()
        for index, template in enumerate(group.templates):
            if template.raw in seen_rules:
                continue
            seen_rules.add(template.raw)
            count = self.template_cardinality(name, index)
            self._group_counts[name] += count
        self._state[name] = VisitState.DONE
        return self._group_counts[name]

    def template_cardinality(self, group_name: str, index: int) -> int:
        """Number of possible expansions of one rule of a group."""
        key = (group_name, index)
        if key not in self._template_counts:
            template = self.graph.get(group_name).templates[index]
            count = 1
            for placeholder in template.placeholders:
                count *= self.group_cardinality(placeholder.name)
            self._template_counts[key] = count
        return self._template_counts[key]

    def annotate(self) -> dict[str, int]:
        """Cardinality of every group, in graph order."""
        cyclic = self.graph.cyclic_groups()
        if cyclic:
            logger.warning(
                f"Grammar is recursive through {', '.join(cyclic)}: counts are lower bounds"
            )
        return {group.name: self.group_cardinality(group.name) for group in self.graph}


def format_cardinality(number: int, separator: str = ".") -> str:
    """Group thousands of a count, e.g. 1234567 -> "1.234.567"."""
    return f"{number:,}".replace(",", separator)
