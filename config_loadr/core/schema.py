"""Declarative configuration classes.

Usage:
    @env_config
    class AppConfig:
        name: str = env_field("NAME", "Service name", required=True, example="svc")
        port: int = env_field("PORT", "Server port", default=8080)
        debug_level: Optional[int] = env_field("DEBUG_LEVEL", "Verbosity", optional=True, example=1)

    config = load(AppConfig)            # raises ConfigurationFailed on any error
    result = load_or_error(AppConfig)   # collects errors instead
    builder_for_docs(AppConfig).write_docs("CONFIG.md")

Decorating a class turns its ``env_field`` declarations into an ordered
:class:`Schema`; loading is a plain loop over that schema.
"""

from __future__ import annotations

import dataclasses
import threading
import types
import typing
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Generic, Mapping, TypeVar, Union

import structlog

from .builder import ConfigBuilder
from .dotenv_loader import bootstrap_env
from .errors import ConfigError, ConfigurationFailed, SchemaError
from .field import FieldMode, FieldSpec

logger = structlog.get_logger("config_loadr.core")

T = TypeVar("T")

_DECLARATION_KEY = "config_loadr"
_SCHEMA_ATTR = "__config_schema__"
_UNION_TYPES: tuple[Any, ...] = (typing.Union,) + (
    (types.UnionType,) if hasattr(types, "UnionType") else ()
)

DotenvOption = Union[bool, Path, str]


@dataclass(frozen=True)
class _Declaration:
    key: str
    doc: str | None
    mode: FieldMode
    default: Any = None
    example: Any = None


def env_field(
    key: str,
    doc: str | None = None,
    *,
    required: bool = False,
    default: Any = dataclasses.MISSING,
    optional: bool = False,
    example: Any = None,
) -> Any:
    """Declare a field read from environment variable ``key``.

    Exactly one of ``required=True``, ``default=...`` or ``optional=True``
    must be given. Required and optional fields need an ``example``.
    """
    chosen = [
        mode
        for mode, selected in (
            (FieldMode.REQUIRED, required),
            (FieldMode.DEFAULT, default is not dataclasses.MISSING),
            (FieldMode.OPTIONAL, optional),
        )
        if selected
    ]
    if len(chosen) != 1:
        raise SchemaError(f"{key}: field must have exactly one of: required, optional, or default = value")
    mode = chosen[0]
    if mode is not FieldMode.DEFAULT and example is None:
        raise SchemaError(f"{key}: {mode.value} fields must have an example")

    declaration = _Declaration(
        key=key,
        doc=doc,
        mode=mode,
        default=None if mode is not FieldMode.DEFAULT else default,
        example=example,
    )
    return dataclasses.field(metadata={_DECLARATION_KEY: declaration})


def _unwrap_optional(annotation: Any) -> tuple[bool, Any]:
    if typing.get_origin(annotation) in _UNION_TYPES:
        args = typing.get_args(annotation)
        inner = [arg for arg in args if arg is not type(None)]
        if len(inner) == 1 and len(args) == 2:
            return True, inner[0]
    return False, annotation


@dataclass(frozen=True)
class Schema:
    """Ordered field declarations of one configuration class."""

    target: type
    fields: tuple[FieldSpec, ...]
    allow_missing_docs: bool = False

    def build(self, env: Mapping[str, str] | None = None) -> tuple[ConfigBuilder, dict[str, Any]]:
        """Evaluate every field once, in declaration order."""
        builder = ConfigBuilder(env)
        values = {spec.name: builder.record(spec) for spec in self.fields}
        return builder, values

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)


def _build_schema(cls: type, allow_missing_docs: bool) -> Schema:
    try:
        hints = typing.get_type_hints(cls)
    except NameError as exc:
        raise SchemaError(f"{cls.__name__}: cannot resolve field annotations ({exc})") from exc
    specs: list[FieldSpec] = []
    seen: set[str] = set()

    for item in dataclasses.fields(cls):
        declaration = item.metadata.get(_DECLARATION_KEY)
        if declaration is None:
            raise SchemaError(
                f"{cls.__name__}.{item.name}: field must be declared with env_field(...)"
            )
        if declaration.key in seen:
            raise SchemaError(f"{cls.__name__}: {declaration.key} is declared more than once")
        seen.add(declaration.key)

        description = (declaration.doc or "").strip()
        if not description and not allow_missing_docs:
            raise SchemaError(
                f"{cls.__name__}.{item.name}: field must have a description "
                "(or use allow_missing_docs=True)"
            )

        is_optional, inner = _unwrap_optional(hints[item.name])
        if declaration.mode is FieldMode.OPTIONAL and not is_optional:
            raise SchemaError(f"{cls.__name__}.{item.name}: optional fields must have type Optional[T]")
        if declaration.mode is not FieldMode.OPTIONAL and is_optional:
            raise SchemaError(
                f"{cls.__name__}.{item.name}: only optional fields may be annotated Optional[T]"
            )

        specs.append(
            FieldSpec(
                key=declaration.key,
                description=description,
                mode=declaration.mode,
                value_type=inner,
                default=declaration.default,
                example=declaration.example,
                name=item.name,
            )
        )

    return Schema(target=cls, fields=tuple(specs), allow_missing_docs=allow_missing_docs)


def env_config(cls: type | None = None, *, allow_missing_docs: bool = False) -> Any:
    """Class decorator registering a configuration schema.

    Plain classes are turned into frozen dataclasses first.
    """

    def wrap(target: type) -> type:
        if not dataclasses.is_dataclass(target):
            target = dataclass(frozen=True)(target)
        setattr(target, _SCHEMA_ATTR, _build_schema(target, allow_missing_docs))
        return target

    if cls is None:
        return wrap
    return wrap(cls)


def schema_of(cls: type) -> Schema:
    schema = cls.__dict__.get(_SCHEMA_ATTR)
    if not isinstance(schema, Schema):
        raise SchemaError(f"{cls.__name__} is not decorated with @env_config")
    return schema


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    value: T | None
    errors: tuple[ConfigError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        if self.errors:
            raise ConfigurationFailed(self.errors)
        return typing.cast(T, self.value)


def _maybe_bootstrap(dotenv: DotenvOption) -> None:
    if dotenv is False:
        return
    bootstrap_env(None if dotenv is True else dotenv)


def load(cls: type[T], env: Mapping[str, str] | None = None, dotenv: DotenvOption = False) -> T:
    """Load ``cls`` from the environment, raising :class:`ConfigurationFailed` on any error."""
    _maybe_bootstrap(dotenv)
    builder, values = schema_of(cls).build(env)
    builder.finish_or_panic()
    logger.info("config-loaded", config=cls.__name__, fields=len(values))
    return cls(**values)


def load_or_error(
    cls: type[T],
    env: Mapping[str, str] | None = None,
    dotenv: DotenvOption = False,
) -> LoadResult[T]:
    """Load ``cls`` and return every error instead of raising."""
    _maybe_bootstrap(dotenv)
    builder, values = schema_of(cls).build(env)
    errors = builder.finish()
    if errors:
        return LoadResult(value=None, errors=tuple(errors))
    logger.info("config-loaded", config=cls.__name__, fields=len(values))
    return LoadResult(value=cls(**values))


def builder_for_docs(cls: type, env: Mapping[str, str] | None = None) -> ConfigBuilder:
    """Evaluate the schema once and hand back the open builder for documentation."""
    builder, _ = schema_of(cls).build(env)
    return builder


_metadata_cache: dict[type, Mapping[str, FieldSpec]] = {}
_metadata_lock = threading.Lock()


def metadata(cls: type) -> Mapping[str, FieldSpec]:
    """Field declarations of ``cls`` keyed by attribute name.

    Built on first access and cached for the life of the process; every later
    call returns the same read-only mapping.
    """
    cached = _metadata_cache.get(cls)
    if cached is not None:
        return cached
    with _metadata_lock:
        cached = _metadata_cache.get(cls)
        if cached is None:
            schema = schema_of(cls)
            cached = MappingProxyType({spec.name: spec for spec in schema.fields})
            _metadata_cache[cls] = cached
    return cached


__all__ = [
    "LoadResult",
    "Schema",
    "builder_for_docs",
    "env_config",
    "env_field",
    "load",
    "load_or_error",
    "metadata",
    "schema_of",
]
