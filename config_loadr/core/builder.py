"""Configuration builder: evaluates fields and aggregates their errors.

Usage:
    builder = ConfigBuilder()
    port = builder.or_default("PORT", "Server port", 8080)
    name = builder.required("NAME", "Service name", "svc")
    builder.finish_or_panic()

Every field is evaluated even after an earlier one has failed, so a single
attempt reports all problems in declaration order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import structlog

from . import docs
from .errors import BuilderFinalizedError, ConfigError, ConfigurationFailed, SchemaError
from .field import FieldMetadata, FieldOutcome, FieldSpec, evaluate

logger = structlog.get_logger("config_loadr.core")


class ConfigBuilder:
    """Accumulates field metadata and errors for one load attempt.

    The builder is open until :meth:`finish` or :meth:`finish_or_panic` is
    called. :meth:`validate` inspects the errors without closing it, which
    keeps the captured metadata available for :meth:`write_docs`.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env = env
        self._fields: list[FieldMetadata] = []
        self._errors: list[ConfigError] = []
        self._keys: set[str] = set()
        self._finalized = False

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def record(self, spec: FieldSpec, outcome: FieldOutcome | None = None) -> Any:
        """Record one field and return its value, or ``None`` if it failed.

        When ``outcome`` is omitted the field is evaluated against the
        builder's environment.
        """
        self._ensure_open("record")
        if spec.key in self._keys:
            raise SchemaError(f"{spec.key} is declared more than once")
        if outcome is None:
            outcome = evaluate(spec, self._env)

        self._keys.add(spec.key)
        self._fields.append(spec.metadata())
        if outcome.error is not None:
            self._errors.append(outcome.error)
            return None
        return outcome.value

    def required(self, key: str, description: str, example: Any, value_type: Any = None) -> Any:
        return self.record(FieldSpec.required(key, description, example, value_type))

    def or_default(self, key: str, description: str, default: Any, value_type: Any = None) -> Any:
        """Load a field, falling back to ``default`` only when the variable is unset."""
        return self.record(FieldSpec.with_default(key, description, default, value_type))

    def optional(
        self,
        key: str,
        description: str,
        example: Any = None,
        value_type: Any = str,
    ) -> Any:
        return self.record(FieldSpec.optional(key, description, example, value_type))

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    @property
    def metadata(self) -> tuple[FieldMetadata, ...]:
        return tuple(self._fields)

    @property
    def errors(self) -> tuple[ConfigError, ...]:
        return tuple(self._errors)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def validate(self) -> list[ConfigError]:
        """Return the collected errors (empty means success) without finalizing."""
        return list(self._errors)

    # ------------------------------------------------------------------
    # Finalizing
    # ------------------------------------------------------------------
    def finish(self) -> list[ConfigError]:
        """Close the builder and return every collected error."""
        self._ensure_open("finish")
        self._finalized = True
        if self._errors:
            logger.warning("config-build-failed", fields=len(self._fields), errors=len(self._errors))
        else:
            logger.debug("config-build-succeeded", fields=len(self._fields))
        return list(self._errors)

    def finish_or_panic(self) -> None:
        """Close the builder, raising :class:`ConfigurationFailed` if any field failed."""
        errors = self.finish()
        if errors:
            logger.error(
                "config-build-aborted",
                errors=len(errors),
                keys=[getattr(error, "key", None) for error in errors],
            )
            raise ConfigurationFailed(errors)

    def _ensure_open(self, operation: str) -> None:
        if self._finalized:
            raise BuilderFinalizedError(f"cannot {operation}: builder is already finalized")

    # ------------------------------------------------------------------
    # Documentation
    # ------------------------------------------------------------------
    def rows(self) -> list[docs.DocRow]:
        return docs.build_rows(self._fields)

    def render_docs(self) -> str:
        return docs.render_markdown(self.rows())

    def write_docs(self, path: Path | str) -> Path:
        return docs.write_markdown(self._fields, path)


__all__ = ["ConfigBuilder"]
