"""Read grammar files and prepare them for stock Tracery."""

import json
import logging
from pathlib import Path

from errors import DuplicateKeyError, GrammarFileError, InvalidGroupShapeError
from symbol_resolver import ALL_KINDS, Gender, resolve_candidates
from template_parser import placeholder_names

logger = logging.getLogger(__name__)

INCLUDE_DIRECTIVE = "#include"
GENDER_TAGS = {gender.value for gender in Gender} | {ALL_KINDS}


def parse_grammar(grammar_json: str, source: str = "<string>") -> dict:
    """
    Parse a JSON grammar string into a dictionary.

    Args:
        grammar_json: JSON string containing a grammar
        source: Where the text came from, for error messages

    Returns:
        Parsed grammar dictionary

    Raises:
        GrammarFileError: If JSON is invalid or not an object
    """
    try:
        grammar = json.loads(grammar_json)
    except json.JSONDecodeError as e:
        raise GrammarFileError(source, f"invalid JSON: {e}")
    if not isinstance(grammar, dict):
        raise GrammarFileError(source, "top-level value must be an object")
    return grammar


def read_grammar_file(path: Path) -> dict:
    """Read and parse one grammar file, without following includes."""
    logger.info(f"Reading [{path}]")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GrammarFileError(str(path), e.strerror or str(e))
    return parse_grammar(text, str(path))


def _is_rule_list(value) -> bool:
    return isinstance(value, list) and all(isinstance(rule, str) for rule in value)


def validate_grammar(grammar: dict) -> None:
    """
    Check every group is a rule list or a gender mapping of rule lists.

    Raises:
        InvalidGroupShapeError: On the first malformed group
    """
    for name, content in grammar.items():
        if isinstance(content, dict):
            unknown = set(content) - GENDER_TAGS
            if unknown:
                raise InvalidGroupShapeError(
                    name, f"has unknown gender tags {sorted(unknown)}"
                )
            for tag, rules in content.items():
                if not _is_rule_list(rules):
                    raise InvalidGroupShapeError(name, f"[{tag}] must be a list of strings")
        elif not _is_rule_list(content):
            raise InvalidGroupShapeError(
                name, "must be a list of strings or a gender mapping"
            )


def merge_includes(grammar: dict, base_dir: Path, include_directive: str = INCLUDE_DIRECTIVE) -> dict:
    """
    Merge the files listed under the include directive into a grammar.

    Included paths are relative to base_dir. Included files are not
    searched for further includes.

    Args:
        grammar: Parsed main grammar (not modified)
        base_dir: Directory of the main grammar file
        include_directive: Key listing the files to include

    Returns:
        A new grammar without the include directive

    Raises:
        DuplicateKeyError: If an included key already exists
    """
    merged = dict(grammar)
    includes = merged.pop(include_directive, [])
    if isinstance(includes, str):
        includes = [includes]

    for include in includes:
        include_path = base_dir / include
        for key, value in read_grammar_file(include_path).items():
            if key in merged or key == include_directive:
                raise DuplicateKeyError(key, str(include_path))
            merged[key] = value
    return merged


def load_grammar(path: Path, include_directive: str = INCLUDE_DIRECTIVE) -> dict:
    """
    Load a grammar file, merging its includes.

    Args:
        path: Grammar JSON file
        include_directive: Key listing sibling files to merge

    Returns:
        The merged, shape-checked grammar

    Raises:
        GrammarFileError: If a file cannot be read or decoded
        DuplicateKeyError: If an included key collides
        InvalidGroupShapeError: If a group is malformed
    """
    path = Path(path)
    grammar = merge_includes(read_grammar_file(path), path.parent, include_directive)
    validate_grammar(grammar)
    return grammar


def prepare_grammar(grammar: dict, origin: str = "origin") -> dict:
    """
    Flatten the part of a grammar reachable from origin.

    Every visited name, including gendered and article forms such as
    "pronomdef_animal_masc", maps to the plain rule list it resolves to, so
    the result can be fed to any Tracery implementation.

    Args:
        grammar: Loaded grammar
        origin: Root symbol

    Returns:
        Prepared grammar, origin first, unused groups omitted

    Raises:
        UnknownGroupError: If a reachable name does not exist
        InvalidGroupShapeError: If a name does not fit its group
        TemplateParseError: If a reachable rule has unbalanced delimiters
    """
    prepared: dict[str, list[str]] = {}
    to_parse = [origin]
    while to_parse:
        name = to_parse.pop()
        if name in prepared:
            continue
        logger.info(f"Processing [{name}]")
        rules = resolve_candidates(name, grammar)
        for rule in rules:
            to_parse.extend(placeholder_names(rule))
        prepared[name] = rules
    return prepared


def prepared_path(path: Path) -> Path:
    """Sibling path of a prepared grammar: foo.json -> foo_prepared.json."""
    path = Path(path)
    return path.with_name(f"{path.stem}_prepared{path.suffix}")


def write_prepared(prepared: dict, path: Path) -> Path:
    """Write a prepared grammar next to its source and return the new path."""
    output = prepared_path(path)
    output.write_text(json.dumps(prepared, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info(f"Wrote [{output}]")
    return output
