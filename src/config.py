"""Centralized configuration for the tracery grammar tools."""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class GrammarConfig:
    """How grammar files are read."""
    origin: str = "origin"
    include_directive: str = "#include"


@dataclass(frozen=True)
class ExpansionConfig:
    """Defaults for text generation."""
    sample_count: int = 1
    max_depth: int | None = None  # None means unlimited


@dataclass(frozen=True)
class SchemaConfig:
    """Defaults for DOT export."""
    thousands_separator: str = "."


@dataclass(frozen=True)
class LoggingConfig:
    """Logging defaults for the CLI."""
    level: str = "WARNING"
    format: str = "%(message)s"


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


@dataclass
class Settings:
    """Application settings, can be overridden via environment variables."""
    grammar: GrammarConfig = field(default_factory=GrammarConfig)
    expansion: ExpansionConfig = field(default_factory=ExpansionConfig)
    schema: SchemaConfig = field(default_factory=SchemaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables with TRACERY_TOOLS_ prefix."""
        grammar = GrammarConfig(
            origin=os.environ.get("TRACERY_TOOLS_ORIGIN", GrammarConfig.origin),
            include_directive=os.environ.get("TRACERY_TOOLS_INCLUDE_DIRECTIVE", GrammarConfig.include_directive),
        )
        expansion = ExpansionConfig(
            sample_count=int(os.environ.get("TRACERY_TOOLS_SAMPLE_COUNT", ExpansionConfig.sample_count)),
            max_depth=_optional_int(os.environ.get("TRACERY_TOOLS_MAX_DEPTH")),
        )
        schema = SchemaConfig(
            thousands_separator=os.environ.get("TRACERY_TOOLS_THOUSANDS_SEPARATOR", SchemaConfig.thousands_separator),
        )
        logging = LoggingConfig(
            level=os.environ.get("TRACERY_TOOLS_LOG_LEVEL", LoggingConfig.level).upper(),
        )
        return cls(
            grammar=grammar,
            expansion=expansion,
            schema=schema,
            logging=logging,
        )


# Global settings instance - use from_env() for environment-aware settings
settings = Settings.from_env()
