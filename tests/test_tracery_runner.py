"""Tests for tracery_runner.py - rendering prepared grammars with Tracery."""

import pytest

from errors import InvalidGroupShapeError
from tracery_runner import generate_one, run_tracery


class TestGenerateOne:
    """Tests for single text generation from a prepared grammar."""

    def test_generate_simple_text(self):
        assert generate_one({"origin": ["hello world"]}) == "hello world"

    def test_generate_with_expansion(self):
        grammar = {
            "origin": ["#greeting# #subject#"],
            "greeting": ["hello"],
            "subject": ["world"],
        }
        assert generate_one(grammar) == "hello world"

    def test_generate_custom_origin(self):
        grammar = {"origin": ["default text"], "custom": ["custom text"]}
        assert generate_one(grammar, origin="custom") == "custom text"

    def test_base_english_modifiers(self):
        """Stock Tracery modifiers work on prepared grammars."""
        grammar = {"origin": ["#animal.s#"], "animal": ["cat"]}
        assert generate_one(grammar) == "cats"


class TestRunTracery:
    """Tests for prepare-then-render sampling."""

    def test_count(self):
        results = run_tracery({"origin": ["hello"]}, count=5)
        assert results == ["hello"] * 5

    def test_french_grammar(self, french_grammar):
        results = run_tracery(french_grammar, count=30)
        subjects = {"Le chat", "L'ours", "L'oiseau"}
        objects = {"de la soupe", "de l'eau"}
        expected = {f"{s} mange {o}." for s in subjects for o in objects}
        assert set(results) <= expected

    def test_seed_is_reproducible(self):
        grammar = {"origin": ["#n#"], "n": [str(i) for i in range(100)]}
        assert run_tracery(grammar, count=10, seed=7) == run_tracery(grammar, count=10, seed=7)

    def test_preparation_errors_propagate(self):
        with pytest.raises(InvalidGroupShapeError):
            run_tracery({"origin": ["#thing_fem#"], "thing": {"masc": ["x"]}})
