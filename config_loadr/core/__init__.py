"""Core package exports."""

from .builder import ConfigBuilder
from .environment import Environment
from .errors import (
    BuilderFinalizedError,
    ConfigError,
    ConfigurationFailed,
    InvalidEnvironment,
    MissingEnvVar,
    SchemaError,
    format_config_errors,
)
from .field import FieldMetadata, FieldMode, FieldOutcome, FieldSpec, evaluate
from .parser import ParseResult, ParseStatus, read_env
from .schema import (
    LoadResult,
    Schema,
    builder_for_docs,
    env_config,
    env_field,
    load,
    load_or_error,
    metadata,
    schema_of,
)

__all__ = [
    "BuilderFinalizedError",
    "ConfigBuilder",
    "ConfigError",
    "ConfigurationFailed",
    "Environment",
    "FieldMetadata",
    "FieldMode",
    "FieldOutcome",
    "FieldSpec",
    "InvalidEnvironment",
    "LoadResult",
    "MissingEnvVar",
    "ParseResult",
    "ParseStatus",
    "Schema",
    "SchemaError",
    "builder_for_docs",
    "env_config",
    "env_field",
    "evaluate",
    "format_config_errors",
    "load",
    "load_or_error",
    "metadata",
    "read_env",
    "schema_of",
]
