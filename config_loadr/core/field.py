"""Field declarations and the per-field evaluation policy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

import structlog

from .errors import ConfigError, InvalidEnvironment, MissingEnvVar, SchemaError
from .parser import ParseStatus, read_env

logger = structlog.get_logger("config_loadr.core")


class FieldMode(Enum):
    REQUIRED = "required"
    DEFAULT = "default"
    OPTIONAL = "optional"


def display_value(value: Any) -> str:
    """Stringify a default or example the way it would be written in a .env file."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum) and type(value).__str__ is Enum.__str__:
        return str(value.value)
    return str(value)


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one configuration field before any value exists.

    ``value_type`` is the type the raw string is parsed into. For optional
    fields it is the inner type; the produced value is ``None`` when the
    variable is unset.
    """

    key: str
    description: str
    mode: FieldMode
    value_type: Any
    default: Any = None
    example: Any = None
    name: str = ""

    def __post_init__(self) -> None:
        if not self.key:
            raise SchemaError("field key cannot be empty")
        if self.mode is FieldMode.REQUIRED and self.example is None:
            raise SchemaError(f"{self.key}: required fields must have an example")
        if not self.name:
            object.__setattr__(self, "name", self.key.lower())

    @classmethod
    def required(
        cls,
        key: str,
        description: str,
        example: Any,
        value_type: Any = None,
        *,
        name: str = "",
    ) -> "FieldSpec":
        if value_type is None and example is not None:
            value_type = type(example)
        return cls(key, description, FieldMode.REQUIRED, value_type, example=example, name=name)

    @classmethod
    def with_default(
        cls,
        key: str,
        description: str,
        default: Any,
        value_type: Any = None,
        *,
        name: str = "",
    ) -> "FieldSpec":
        if value_type is None:
            if default is None:
                raise SchemaError(f"{key}: a None default needs an explicit value_type")
            value_type = type(default)
        return cls(key, description, FieldMode.DEFAULT, value_type, default=default, name=name)

    @classmethod
    def optional(
        cls,
        key: str,
        description: str,
        example: Any = None,
        value_type: Any = str,
        *,
        name: str = "",
    ) -> "FieldSpec":
        return cls(key, description, FieldMode.OPTIONAL, value_type, example=example, name=name)

    @property
    def is_required(self) -> bool:
        return self.mode is FieldMode.REQUIRED

    @property
    def documented_value(self) -> str:
        """Default (for defaulted fields) or example shown in errors and docs."""
        if self.mode is FieldMode.DEFAULT:
            return display_value(self.default)
        return display_value(self.example)

    def metadata(self) -> "FieldMetadata":
        return FieldMetadata(
            key=self.key,
            description=self.description,
            default_str=self.documented_value,
            required=self.is_required,
        )


@dataclass(frozen=True)
class FieldMetadata:
    key: str
    description: str
    default_str: str
    required: bool


@dataclass(frozen=True)
class FieldOutcome:
    value: Any = None
    error: ConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "FieldOutcome":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ConfigError) -> "FieldOutcome":
        return cls(error=error)


def evaluate(spec: FieldSpec, env: Mapping[str, str] | None = None) -> FieldOutcome:
    """Apply the field's mode to a single read of its environment variable.

    A missing variable is only an error for required fields. A variable that is
    set but does not parse is an error in every mode; the default or ``None``
    is never substituted for a value the user supplied.
    """
    result = read_env(spec.key, spec.value_type, env)
    example = spec.documented_value or None

    if result.status is ParseStatus.PARSED:
        return FieldOutcome.success(result.value)

    if result.status is ParseStatus.INVALID:
        logger.debug("config-field-invalid", key=spec.key, mode=spec.mode.value)
        return FieldOutcome.failure(
            InvalidEnvironment(spec.key, result.raw or "", spec.description, example)
        )

    if spec.mode is FieldMode.DEFAULT:
        return FieldOutcome.success(spec.default)
    if spec.mode is FieldMode.OPTIONAL:
        return FieldOutcome.success(None)
    logger.debug("config-field-missing", key=spec.key)
    return FieldOutcome.failure(MissingEnvVar(spec.key, spec.description, example))


__all__ = [
    "FieldMetadata",
    "FieldMode",
    "FieldOutcome",
    "FieldSpec",
    "display_value",
    "evaluate",
]
