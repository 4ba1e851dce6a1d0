"""Resolve group names, including gendered and French article forms.

Names follow a small convention on top of plain Tracery symbols:

    animal_masc              masculine rules of the gendered group "animal"
    pronomdef_animal_fem     same rules, each prefixed with "la"/"l'"

A gendered group is declared as a mapping of gender tags to rule lists:

    {"animal": {"masc": ["chat"], "fem": ["chatte"], "*": ["oiseau"]}}

Rules under "*" belong to every gender.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from errors import InvalidGroupShapeError, UnknownGroupError

ALL_KINDS = "*"
VOWELS = ("a", "e", "i", "o", "u", "é", "è", "ê", "h")


class Gender(str, Enum):
    """Gender tags recognized in gendered groups and name suffixes."""
    MASC = "masc"
    FEM = "fem"

    @property
    def suffix(self) -> str:
        return f"_{self.value}"


@dataclass(frozen=True)
class ArticleForms:
    """Article spellings for one pronoun prefix."""
    masc: str
    fem: str
    elided: str | None = None

    def apply(self, item: str, gender: Gender) -> str:
        if item.startswith(VOWELS) and self.elided is not None:
            return f"{self.elided}{item}"
        article = self.masc if gender is Gender.MASC else self.fem
        return f"{article} {item}"


class Pronoun(Enum):
    """Name prefixes that wrap resolved rules in a French article."""
    DEFINITE = ("pronomdef", ArticleForms("le", "la", "l'"))
    DEFINITE_UPPER = ("Pronomdef", ArticleForms("Le", "La", "L'"))
    INDEFINITE = ("pronomindef", ArticleForms("un", "une"))
    INDEFINITE_UPPER = ("Pronomindef", ArticleForms("Un", "Une"))
    PARTITIVE = ("pronompart", ArticleForms("du", "de la", "de l'"))
    POSSESSIVE = ("pronomposs", ArticleForms("son", "sa", "son "))

    def __init__(self, token: str, forms: ArticleForms):
        self.token = token
        self.forms = forms

    @property
    def prefix(self) -> str:
        return f"{self.token}_"


@dataclass(frozen=True)
class SymbolName:
    """A placeholder name split into its naming-convention parts.

    Attributes:
        raw: The name as written in the rule
        base: Name of the group that holds the rules
        pronoun: Article prefix to apply, if any
        gender: Requested gender, if any
    """
    raw: str
    base: str
    pronoun: Pronoun | None = None
    gender: Gender | None = None

    @property
    def is_derived(self) -> bool:
        """True when the name does not refer to a declared group directly."""
        return self.pronoun is not None or self.gender is not None


def parse_symbol_name(name: str) -> SymbolName:
    """Split a group name into pronoun prefix, base name and gender suffix."""
    base = name
    pronoun = None
    for candidate in Pronoun:
        if base.startswith(candidate.prefix):
            pronoun = candidate
            base = base[len(candidate.prefix):]
            break

    gender = None
    for candidate in Gender:
        if base.endswith(candidate.suffix) and len(base) > len(candidate.suffix):
            gender = candidate
            base = base[:-len(candidate.suffix)]
            break

    return SymbolName(raw=name, base=base, pronoun=pronoun, gender=gender)


def gendered_rules(group_name: str, content: Any, gender: Gender) -> list[str]:
    """
    Collect the rules of a gendered group for one gender.

    Args:
        group_name: Name of the gendered group
        content: The group's value in the grammar
        gender: Requested gender

    Returns:
        Rules for the gender followed by the rules shared by all kinds

    Raises:
        InvalidGroupShapeError: If the group is not a gender mapping or has
            no rules for the requested gender
    """
    if not isinstance(content, dict):
        raise InvalidGroupShapeError(group_name, "is not a Hash")
    if gender.value not in content:
        raise InvalidGroupShapeError(group_name, f"has no [{gender.value}] content")
    return list(content[gender.value]) + list(content.get(ALL_KINDS, []))


def resolve_candidates(name: str | SymbolName, grammar: dict) -> list[str]:
    """
    Return the candidate rules a group name denotes.

    Args:
        name: Group name as written in a rule, or an already parsed name
        grammar: The grammar dictionary

    Returns:
        Candidate rule strings, article-prefixed when a pronoun is requested

    Raises:
        UnknownGroupError: If the base group does not exist
        InvalidGroupShapeError: If the group shape does not match the name
    """
    symbol = name if isinstance(name, SymbolName) else parse_symbol_name(name)

    # Prepared grammars declare derived names as plain groups
    if symbol.is_derived and isinstance(grammar.get(symbol.raw), list):
        return list(grammar[symbol.raw])

    if symbol.base not in grammar:
        raise UnknownGroupError(symbol.raw)
    content = grammar[symbol.base]

    if symbol.gender is None:
        if symbol.pronoun is not None:
            raise InvalidGroupShapeError(
                symbol.raw, "needs a _masc or _fem suffix to choose an article"
            )
        if not isinstance(content, list):
            raise InvalidGroupShapeError(
                symbol.base, "is gendered, reference it with a _masc or _fem suffix"
            )
        return list(content)

    candidates = gendered_rules(symbol.base, content, symbol.gender)
    if symbol.pronoun is None:
        return candidates
    return [symbol.pronoun.forms.apply(item, symbol.gender) for item in candidates]
