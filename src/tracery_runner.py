"""Render prepared grammars with the stock Tracery implementation."""

import random

import tracery
from tracery.modifiers import base_english

from grammar_loader import prepare_grammar


def generate_one(prepared: dict, origin: str = "origin") -> str:
    """
    Generate a single text from a prepared grammar.

    Args:
        prepared: Grammar whose groups are all plain rule lists
        origin: The starting rule (default: "origin")

    Returns:
        Generated text
    """
    grammar = tracery.Grammar(prepared)
    grammar.add_modifiers(base_english)
    return grammar.flatten(f"#{origin}#")


def run_tracery(
    grammar: dict,
    count: int = 1,
    origin: str = "origin",
    seed: int | None = None,
) -> list[str]:
    """
    Prepare a grammar and generate texts from it with Tracery.

    Args:
        grammar: Loaded grammar, gendered and article forms allowed
        count: Number of texts to generate
        origin: The starting rule (default: "origin")
        seed: Seed for the global random module Tracery draws from

    Returns:
        List of generated texts

    Raises:
        GrammarError: If the grammar cannot be prepared
    """
    prepared = prepare_grammar(grammar, origin)
    if seed is not None:
        random.seed(seed)

    results = []
    for _ in range(count):
        text = generate_one(prepared, origin)
        results.append(text)

    return results
