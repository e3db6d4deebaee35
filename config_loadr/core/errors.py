"""Error model for configuration loading."""

from __future__ import annotations

from typing import Iterable, Sequence


class ConfigError(Exception):
    """Base class for every error raised by config_loadr."""


class _FieldError(ConfigError):
    key: str
    description: str
    example: str | None

    def _render(self, headline: str) -> str:
        lines = [headline, f"\tDescription: {self.description}"]
        if self.example is not None:
            lines.append(f"\tExample: {self.key}={self.example}")
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.key))


class MissingEnvVar(_FieldError):
    """A variable the schema requires is not set."""

    def __init__(self, key: str, description: str, example: str | None = None) -> None:
        self.key = key
        self.description = description
        self.example = example
        super().__init__(key, description, example)

    def __str__(self) -> str:
        return self._render(f"{self.key}: Is missing from environment and is required")

    def __repr__(self) -> str:
        return f"MissingEnvVar(key={self.key!r}, description={self.description!r}, example={self.example!r})"


class InvalidEnvironment(_FieldError, ValueError):
    """A variable is set but its value cannot be parsed into the declared type."""

    def __init__(
        self,
        key: str,
        raw_value: str,
        description: str,
        example: str | None = None,
    ) -> None:
        self.key = key
        self.raw_value = raw_value
        self.description = description
        self.example = example
        super().__init__(key, raw_value, description, example)

    def __str__(self) -> str:
        return self._render(f"{self.key}: Invalid value '{self.raw_value}'")

    def __repr__(self) -> str:
        return (
            f"InvalidEnvironment(key={self.key!r}, raw_value={self.raw_value!r}, "
            f"description={self.description!r}, example={self.example!r})"
        )


class SchemaError(ConfigError):
    """Raised when a configuration schema is declared incorrectly."""


class BuilderFinalizedError(ConfigError):
    """Raised when a finalized builder is used again."""


def format_config_errors(errors: Sequence[ConfigError]) -> str:
    """Render the aggregate failure message, one indented block per error."""
    # continuation lines of each block are already tab-indented
    blocks = [f"  - {error}" for error in errors]
    return "\n".join([f"Configuration failed with {len(errors)} error(s):", *blocks])


class ConfigurationFailed(ConfigError):
    """Fatal aggregate of every error collected during one build attempt."""

    def __init__(self, errors: Iterable[ConfigError]) -> None:
        self.errors: list[ConfigError] = list(errors)
        super().__init__(format_config_errors(self.errors))


__all__ = [
    "BuilderFinalizedError",
    "ConfigError",
    "ConfigurationFailed",
    "InvalidEnvironment",
    "MissingEnvVar",
    "SchemaError",
    "format_config_errors",
]
