"""Typed configuration loading from environment variables."""

from .core import (
    BuilderFinalizedError,
    ConfigBuilder,
    ConfigError,
    ConfigurationFailed,
    Environment,
    FieldMetadata,
    FieldMode,
    FieldSpec,
    InvalidEnvironment,
    LoadResult,
    MissingEnvVar,
    SchemaError,
    builder_for_docs,
    env_config,
    env_field,
    load,
    load_or_error,
    metadata,
)
from .core.dotenv_loader import bootstrap_env

__all__ = [
    "BuilderFinalizedError",
    "ConfigBuilder",
    "ConfigError",
    "ConfigurationFailed",
    "Environment",
    "FieldMetadata",
    "FieldMode",
    "FieldSpec",
    "InvalidEnvironment",
    "LoadResult",
    "MissingEnvVar",
    "SchemaError",
    "bootstrap_env",
    "builder_for_docs",
    "env_config",
    "env_field",
    "load",
    "load_or_error",
    "metadata",
]
