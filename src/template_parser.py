"""Split raw Tracery rules into literal text and #placeholder# segments."""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from errors import TemplateParseError

DELIMITER = "#"


class Modifier(str, Enum):
    """Text modifiers applied to an expanded placeholder."""
    CAPITALIZE = "capitalize"

    def apply(self, text: str) -> str:
        if self is Modifier.CAPITALIZE:
            return text[:1].upper() + text[1:]
        return text


@dataclass(frozen=True)
class Literal:
    """Text copied verbatim into the output."""
    text: str

    def source(self) -> str:
        return self.text


@dataclass(frozen=True)
class Placeholder:
    """A reference to another group.

    Attributes:
        raw: Text found between the two delimiters, untouched
        name: Group name with recognized modifier suffixes stripped
        modifiers: Stripped modifiers, in the order they apply
    """
    raw: str
    name: str
    modifiers: tuple[Modifier, ...] = ()

    def source(self) -> str:
        return f"{DELIMITER}{self.raw}{DELIMITER}"


Segment = Literal | Placeholder


@dataclass(frozen=True)
class Template:
    """A parsed rule: the raw string and its ordered segments."""
    raw: str
    segments: tuple[Segment, ...]

    @property
    def placeholders(self) -> list[Placeholder]:
        """Placeholder segments in order of appearance (duplicates kept)."""
        return [s for s in self.segments if isinstance(s, Placeholder)]

    def source(self) -> str:
        """Rebuild the raw rule from the segments."""
        return "".join(segment.source() for segment in self.segments)


def split_modifiers(raw: str) -> tuple[str, tuple[Modifier, ...]]:
    """
    Strip recognized modifier suffixes from a placeholder body.

    Unknown suffixes such as ".s" are left in the name.

    Args:
        raw: Text between the delimiters, e.g. "animal.capitalize"

    Returns:
        Tuple of (group name, modifiers in application order)
    """
    name = raw
    stripped = []
    while True:
        for modifier in Modifier:
            suffix = f".{modifier.value}"
            if name.endswith(suffix) and len(name) > len(suffix):
                name = name[:-len(suffix)]
                stripped.append(modifier)
                break
        else:
            break
    # "a.capitalize.capitalize" strips right to left but applies left to right
    return name, tuple(reversed(stripped))


@lru_cache(maxsize=4096)
def parse_template(raw: str) -> Template:
    """
    Parse a raw rule string into segments.

    Delimiters are paired in order of appearance (1st with 2nd, 3rd with
    4th, ...). Text outside pairs becomes Literal segments.

    Args:
        raw: The rule string

    Returns:
        The parsed Template

    Raises:
        TemplateParseError: If the rule contains an odd number of '#'
    """
    positions = [index for index, char in enumerate(raw) if char == DELIMITER]
    if len(positions) % 2:
        raise TemplateParseError(raw)

    segments: list[Segment] = []
    cursor = 0
    for start, stop in zip(positions[::2], positions[1::2]):
        if start > cursor:
            segments.append(Literal(raw[cursor:start]))
        body = raw[start + 1:stop]
        name, modifiers = split_modifiers(body)
        segments.append(Placeholder(raw=body, name=name, modifiers=modifiers))
        cursor = stop + 1
    if cursor < len(raw):
        segments.append(Literal(raw[cursor:]))

    return Template(raw=raw, segments=tuple(segments))


def placeholder_names(raw: str) -> list[str]:
    """Distinct placeholder names of a rule, in order of first appearance."""
    names: list[str] = []
    for placeholder in parse_template(raw).placeholders:
        if placeholder.name not in names:
            names.append(placeholder.name)
    return names
