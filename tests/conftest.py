"""Shared test fixtures for all test modules."""

import json
import sys
import tempfile
from pathlib import Path

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_grammar():
    """Sample grammar for testing."""
    return {
        "origin": ["#subject# in #setting#"],
        "subject": ["a cat", "a dog"],
        "setting": ["a garden", "a forest", "#setting# at night"],
    }


@pytest.fixture
def french_grammar():
    """Grammar using gendered groups and article prefixes."""
    return {
        "origin": ["#pronomdef_animal_masc.capitalize# mange #pronompart_food_fem#."],
        "animal": {"masc": ["chat", "ours"], "fem": ["chatte"], "*": ["oiseau"]},
        "food": {"masc": ["pain"], "fem": ["soupe", "eau"]},
        "unused": ["never reached"],
    }


def write_grammar(directory: Path, grammar: dict, name: str = "grammar.json") -> Path:
    """Helper to write a grammar file.

    Args:
        directory: Directory to create the file in
        grammar: Grammar dictionary
        name: File name

    Returns:
        Path to the written file
    """
    path = directory / name
    path.write_text(json.dumps(grammar, ensure_ascii=False), encoding="utf-8")
    return path
