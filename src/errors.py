"""Exceptions raised while loading, checking and expanding grammars.

Every error is fatal for the current run: a malformed grammar cannot
produce trustworthy text, so nothing here is meant to be recovered from.
"""


class GrammarError(Exception):
    """Base class for all grammar errors."""
    pass


class TemplateParseError(GrammarError):
    """Raised when a rule has an odd number of '#' delimiters."""

    def __init__(self, rule: str):
        self.rule = rule
        super().__init__(f"[{rule}] has unbalanced #")


class UnknownGroupError(GrammarError):
    """Raised when a group name does not exist in the grammar."""

    def __init__(self, name: str):
        self.name = name
        message = f"Unknown group [{name}]"
        if "." in name:
            modifier = name.rsplit(".", 1)[1]
            message += f" (unsupported modifier '.{modifier}'?)"
        super().__init__(message)


class UnresolvedGroupError(UnknownGroupError):
    """Raised when a group is referenced by a rule but never declared."""
    pass


class InvalidGroupShapeError(GrammarError):
    """Raised when a group does not have the shape its usage requires."""

    def __init__(self, name: str, expected: str):
        self.name = name
        self.expected = expected
        super().__init__(f"Group [{name}] {expected}")


class DuplicateGroupError(GrammarError):
    """Raised when a group is declared twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Group [{name}] is declared twice")


class DuplicateKeyError(GrammarError):
    """Raised when an included file redefines an existing key."""

    def __init__(self, key: str, source: str):
        self.key = key
        self.source = source
        super().__init__(f"Existing key [{key}] found in [{source}]")


class GrammarFileError(GrammarError):
    """Raised when a grammar file cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid grammar file [{path}]: {reason}")


class ExpansionDepthError(GrammarError):
    """Raised when an expansion nests deeper than the configured limit."""

    def __init__(self, symbol: str, depth: int):
        self.symbol = symbol
        self.depth = depth
        super().__init__(
            f"Expansion of [{symbol}] exceeded depth {depth} (recursive grammar?)"
        )
