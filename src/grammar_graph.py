"""In-memory graph of grammar groups and the groups their rules reference."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from errors import (
    DuplicateGroupError,
    InvalidGroupShapeError,
    UnknownGroupError,
    UnresolvedGroupError,
)
from symbol_resolver import parse_symbol_name, resolve_candidates
from template_parser import Template, parse_template

logger = logging.getLogger(__name__)


class GroupStatus(str, Enum):
    """Whether a group has been declared yet."""
    PENDING = "pending"
    RESOLVED = "resolved"


@dataclass
class Group:
    """A node of the grammar graph.

    Attributes:
        name: Group name, unique in the graph
        status: PENDING until the group's definition is processed
        templates: Parsed rules, in declaration order
        dependencies: Referenced groups by name, in order of first reference
        derived: True when built from a gendered/pronoun name form
    """
    name: str
    status: GroupStatus = GroupStatus.PENDING
    templates: list[Template] = field(default_factory=list)
    dependencies: dict[str, "Group"] = field(default_factory=dict, repr=False)
    derived: bool = False


class GrammarGraph:
    """Groups of a grammar keyed by name, in insertion order.

    A group is inserted when it is declared or first referenced, whichever
    comes first. That order is kept everywhere the graph is walked.
    """

    def __init__(self):
        self.groups: dict[str, Group] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.groups

    def __iter__(self) -> Iterator[Group]:
        return iter(self.groups.values())

    def __len__(self) -> int:
        return len(self.groups)

    def get(self, name: str) -> Group:
        """Return a group by name, raising UnknownGroupError if absent."""
        try:
            return self.groups[name]
        except KeyError:
            raise UnknownGroupError(name) from None

    def reference(self, name: str) -> Group:
        """Return the group for a name, creating it PENDING if needed."""
        group = self.groups.get(name)
        if group is None:
            group = Group(name)
            self.groups[name] = group
        return group

    def declare(self, name: str, rules: list[str], derived: bool = False) -> Group:
        """
        Mark a group resolved and attach its parsed rules.

        Every placeholder of every rule is referenced, which adds the
        dependency edges and creates pending groups as needed.

        Raises:
            DuplicateGroupError: If the group was already declared
            TemplateParseError: If a rule has unbalanced delimiters
        """
        group = self.reference(name)
        if group.status is GroupStatus.RESOLVED:
            raise DuplicateGroupError(name)
        group.status = GroupStatus.RESOLVED
        group.derived = derived

        for rule in rules:
            template = parse_template(rule)
            for placeholder in template.placeholders:
                if placeholder.name not in group.dependencies:
                    group.dependencies[placeholder.name] = self.reference(placeholder.name)
            group.templates.append(template)
        return group

    def pending(self) -> list[Group]:
        return [group for group in self if group.status is GroupStatus.PENDING]

    def validate(self) -> None:
        """Raise UnresolvedGroupError for the first group never declared."""
        for group in self.pending():
            raise UnresolvedGroupError(group.name)

    def reachable(self, start: str) -> list[str]:
        """Names reachable from a group (itself included), worklist order."""
        order: list[str] = []
        seen: set[str] = set()
        todo = [start]
        while todo:
            name = todo.pop()
            if name in seen:
                continue
            seen.add(name)
            order.append(name)
            todo.extend(reversed(self.get(name).dependencies))
        return order

    def cyclic_groups(self) -> list[str]:
        """
        Names of groups lying on a dependency cycle, in graph order.

        Iterative Tarjan walk: a group is cyclic when its strongly connected
        component has several members or it references itself.
        """
        index: dict[str, int] = {}
        low: dict[str, int] = {}
        stack: list[str] = []
        on_stack: set[str] = set()
        on_cycle: set[str] = set()

        for root in self.groups:
            if root in index:
                continue
            index[root] = low[root] = len(index)
            stack.append(root)
            on_stack.add(root)
            work = [(root, iter(self.groups[root].dependencies))]

            while work:
                name, children = work[-1]
                child = next(children, None)
                if child is not None:
                    if child not in index:
                        index[child] = low[child] = len(index)
                        stack.append(child)
                        on_stack.add(child)
                        work.append((child, iter(self.groups[child].dependencies)))
                    elif child in on_stack:
                        low[name] = min(low[name], index[child])
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[name])
                if low[name] != index[name]:
                    continue

                component = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == name:
                        break
                if len(component) > 1 or name in self.groups[name].dependencies:
                    on_cycle.update(component)

        return [name for name in self.groups if name in on_cycle]

    def has_cycle(self) -> bool:
        return bool(self.cyclic_groups())

    @classmethod
    def from_grammar(cls, grammar: dict) -> "GrammarGraph":
        """
        Build and validate the graph of a grammar.

        Declared groups are scanned in declaration order. Gendered groups are
        declared with all of their rules. Referenced names that use the
        gender/pronoun convention are then declared from the rules they
        resolve to, until nothing derivable is left pending.

        Raises:
            TemplateParseError: If a rule has unbalanced delimiters
            UnknownGroupError: If a derived name's base group is missing
            InvalidGroupShapeError: If a derived name does not fit its group,
                or a gendered group is referenced without a gender suffix
            UnresolvedGroupError: If a referenced group is never declared
        """
        graph = cls()
        for name, content in grammar.items():
            if isinstance(content, dict):
                rules = [rule for tag_rules in content.values() for rule in tag_rules]
            else:
                rules = content
            graph.declare(name, rules)

        progress = True
        while progress:
            progress = False
            for group in graph.pending():
                symbol = parse_symbol_name(group.name)
                if not symbol.is_derived:
                    continue
                logger.debug(f"Deriving group [{group.name}] from [{symbol.base}]")
                graph.declare(group.name, resolve_candidates(symbol, grammar), derived=True)
                progress = True

        graph.validate()
        graph._check_gendered_references(grammar)
        return graph

    def _check_gendered_references(self, grammar: dict) -> None:
        """Reject bare references to gendered groups, which need a suffix."""
        for group in self:
            for dependency in group.dependencies:
                if isinstance(grammar.get(dependency), dict):
                    raise InvalidGroupShapeError(
                        dependency, "is gendered, reference it with a _masc or _fem suffix"
                    )
