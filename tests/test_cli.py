"""Tests for cli.py - CLI entry point."""

import json
import re

from click.testing import CliRunner

from cli import main
from conftest import write_grammar


class TestCliUsage:
    """Tests for argument validation."""

    def test_missing_argument(self):
        runner = CliRunner()
        result = runner.invoke(main, ["expand"])
        assert result.exit_code == 2
        assert "Missing argument" in result.output

    def test_extra_argument(self, temp_dir, sample_grammar):
        path = write_grammar(temp_dir, sample_grammar)
        runner = CliRunner()
        result = runner.invoke(main, ["schema", str(path), str(path)])
        assert result.exit_code == 2
        assert "unexpected extra argument" in result.output

    def test_nonexistent_file(self, temp_dir):
        runner = CliRunner()
        result = runner.invoke(main, ["count", str(temp_dir / "nope.json")])
        assert result.exit_code == 2


class TestCliExpand:
    """Tests for the expand command."""

    def test_expand(self, temp_dir):
        path = write_grammar(temp_dir, {"origin": ["hello #name#"], "name": ["Ann", "Bo"]})
        runner = CliRunner()
        result = runner.invoke(main, ["expand", str(path), "-n", "5", "--seed", "1"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 5
        assert all(re.fullmatch(r"hello (Ann|Bo)", line) for line in lines)

    def test_expand_custom_origin(self, temp_dir):
        path = write_grammar(temp_dir, {"origin": ["a"], "start": ["b"]})
        runner = CliRunner()
        result = runner.invoke(main, ["expand", str(path), "--origin", "start"])
        assert result.output == "b\n"

    def test_grammar_error(self, temp_dir):
        path = write_grammar(temp_dir, {"origin": ["#missing#"]})
        runner = CliRunner()
        result = runner.invoke(main, ["expand", str(path)])
        assert result.exit_code == 1
        assert "Error: Unknown group [missing]" in result.output

    def test_unbalanced_rule(self, temp_dir):
        path = write_grammar(temp_dir, {"origin": ["#oops"]})
        runner = CliRunner()
        result = runner.invoke(main, ["expand", str(path)])
        assert result.exit_code == 1
        assert "unbalanced #" in result.output

    def test_gendered_group_without_suffix(self, temp_dir):
        grammar = {"origin": ["#animal#"], "animal": {"masc": ["chat"], "fem": ["chatte"]}}
        path = write_grammar(temp_dir, grammar)
        runner = CliRunner()
        result = runner.invoke(main, ["expand", str(path)])
        assert result.exit_code == 1
        assert "Group [animal] is gendered" in result.output

    def test_max_depth(self, temp_dir):
        path = write_grammar(temp_dir, {"origin": ["#loop#"], "loop": ["x#loop#"]})
        runner = CliRunner()
        result = runner.invoke(main, ["expand", str(path), "--max-depth", "10"])
        assert result.exit_code == 1
        assert "exceeded depth 10" in result.output


class TestCliCount:
    """Tests for the count command."""

    def test_count(self, temp_dir):
        path = write_grammar(temp_dir, {
            "origin": ["#d##d##d##d#"],
            "d": [str(i) for i in range(10)],
        })
        runner = CliRunner()
        result = runner.invoke(main, ["count", str(path)])
        assert result.exit_code == 0
        assert result.output == "origin\t10.000\nd\t10\n"


class TestCliSchema:
    """Tests for the schema command."""

    def test_plain_schema(self, temp_dir):
        path = write_grammar(temp_dir, {"origin": ["#a# #b#"], "a": ["x"], "b": ["y"]})
        runner = CliRunner()
        result = runner.invoke(main, ["schema", str(path)])
        assert result.exit_code == 0
        assert result.output.startswith("digraph tracery {\n")
        assert result.output.count("->") == 2

    def test_long_schema(self, temp_dir):
        path = write_grammar(temp_dir, {"origin": ["#a#"], "a": ["x"]})
        runner = CliRunner()
        result = runner.invoke(main, ["schema", str(path), "--variant", "long"])
        assert "subgraph cluster_1" in result.output

    def test_invalid_variant(self, temp_dir):
        path = write_grammar(temp_dir, {"origin": ["x"]})
        runner = CliRunner()
        result = runner.invoke(main, ["schema", str(path), "--variant", "huge"])
        assert result.exit_code == 2


class TestCliPrepare:
    """Tests for the prepare command."""

    def test_prepare_writes_sibling_file(self, temp_dir, french_grammar):
        path = write_grammar(temp_dir, french_grammar, "bot.json")
        runner = CliRunner()
        result = runner.invoke(main, ["prepare", str(path)])

        assert result.exit_code == 0
        output = temp_dir / "bot_prepared.json"
        assert str(output) in result.output
        prepared = json.loads(output.read_text(encoding="utf-8"))
        assert "unused" not in prepared
        assert "origin" in prepared

    def test_prepare_duplicate_include(self, temp_dir):
        write_grammar(temp_dir, {"origin": ["y"]}, "inc.json")
        path = write_grammar(temp_dir, {"#include": ["inc.json"], "origin": ["x"]})
        runner = CliRunner()
        result = runner.invoke(main, ["prepare", str(path)])
        assert result.exit_code == 1
        assert "Existing key [origin]" in result.output


class TestCliSamples:
    """Tests for the samples command."""

    def test_samples(self, temp_dir, french_grammar):
        path = write_grammar(temp_dir, french_grammar)
        runner = CliRunner()
        result = runner.invoke(main, ["samples", str(path), "-n", "3", "--seed", "3"])
        assert result.exit_code == 0
        assert result.output.count(" mange ") == 3

    def test_samples_custom_origin(self, temp_dir):
        path = write_grammar(temp_dir, {"origin": ["a"], "start": ["#word#"], "word": ["b"]})
        runner = CliRunner()
        result = runner.invoke(main, ["samples", str(path), "--origin", "start"])
        assert result.exit_code == 0
        assert result.output == "\nb\n\n"
