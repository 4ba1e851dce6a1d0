"""Export a grammar graph as a Graphviz DOT document.

Render the output with e.g. ``dot -Tsvg grammar.gv -o grammar.svg``.
"""

from enum import Enum

from cardinality import CardinalityCalculator, format_cardinality
from grammar_graph import GrammarGraph


class SchemaVariant(str, Enum):
    """Available DOT layouts."""
    PLAIN = "plain"  # one node per group
    SHORT = "short"  # one node per group, labelled with its count
    LONG = "long"    # one node per rule, clustered by group


def escape_label(text: str) -> str:
    """Escape a string for use inside a double-quoted DOT label."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _group_ids(graph: GrammarGraph) -> dict[str, int]:
    return {group.name: index for index, group in enumerate(graph)}


def _group_lines(
    graph: GrammarGraph,
    calculator: CardinalityCalculator | None,
    separator: str,
) -> list[str]:
    ids = _group_ids(graph)
    lines = []
    for group in graph:
        label = group.name
        if calculator is not None:
            label += " " + format_cardinality(calculator.group_cardinality(group.name), separator)
        lines.append(f'\tgroup_{ids[group.name]} [label="{escape_label(label)}"];')

    lines.append("")

    for group in graph:
        for dependency in group.dependencies:
            lines.append(f"\tgroup_{ids[group.name]} -> group_{ids[dependency]};")
    return lines


def _rule_lines(
    graph: GrammarGraph,
    calculator: CardinalityCalculator,
    separator: str,
) -> list[str]:
    ids = _group_ids(graph)
    lines = ["compound=true;", "\tgraph [rankdir=LR];"]

    for group in graph:
        group_id = ids[group.name]
        for rule_index, template in enumerate(group.templates):
            label = template.raw
            count = calculator.template_cardinality(group.name, rule_index)
            if count != 1:
                label += " " + format_cardinality(count, separator)
            lines.append(f'\trule_{group_id}_{rule_index} [label="{escape_label(label)}"];')
        if not group.templates:
            lines.append(f'\trule_{group_id}_0 [label="", shape=point];')

    lines.append("")

    for group in graph:
        group_id = ids[group.name]
        count = format_cardinality(calculator.group_cardinality(group.name), separator)
        lines.append(f"\tsubgraph cluster_{group_id} {{")
        lines.append(f'\t\tlabel="{escape_label(group.name)} {count}";')
        for rule_index in range(max(len(group.templates), 1)):
            lines.append(f"\t\trule_{group_id}_{rule_index};")
        lines.append("\t}")
        lines.append("")

    for group in graph:
        group_id = ids[group.name]
        for rule_index, template in enumerate(group.templates):
            for placeholder in template.placeholders:
                target = ids[placeholder.name]
                lines.append(
                    f"\trule_{group_id}_{rule_index} -> rule_{target}_0 [lhead=cluster_{target}];"
                )
    return lines


def export_dot(
    graph: GrammarGraph,
    variant: SchemaVariant | str = SchemaVariant.PLAIN,
    calculator: CardinalityCalculator | None = None,
    separator: str = ".",
) -> str:
    """
    Render the dependency graph of a grammar.

    Groups appear in graph order (declaration or first reference), never
    sorted, so the output is stable for a given grammar file.

    Args:
        graph: A validated grammar graph
        variant: Layout to produce
        calculator: Counter to reuse for the short and long variants
        separator: Thousands separator for counts

    Returns:
        The DOT document, newline-terminated
    """
    variant = SchemaVariant(variant)
    if variant is not SchemaVariant.PLAIN and calculator is None:
        calculator = CardinalityCalculator(graph)

    if variant is SchemaVariant.LONG:
        body = _rule_lines(graph, calculator, separator)
    elif variant is SchemaVariant.SHORT:
        body = _group_lines(graph, calculator, separator)
    else:
        body = _group_lines(graph, None, separator)

    return "\n".join(["digraph tracery {", *body, "}"]) + "\n"
