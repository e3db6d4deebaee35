"""Deployment environment type usable as a configuration field."""

from __future__ import annotations

from enum import Enum

from .errors import InvalidEnvironment


class Environment(Enum):
    PROD = "prod"
    DEV = "dev"

    @classmethod
    def from_str(cls, value: str) -> "Environment":
        """Parse ``prod``/``production`` or ``dev``/``development`` (case-sensitive)."""
        if value in ("prod", "production"):
            return cls.PROD
        if value in ("dev", "development"):
            return cls.DEV
        raise InvalidEnvironment(
            key="ENVIRONMENT",
            raw_value=value,
            description="Expected 'dev' or 'prod'",
            example="prod",
        )

    def __str__(self) -> str:
        return self.value

    def is_prod(self) -> bool:
        return self is Environment.PROD

    def is_dev(self) -> bool:
        return self is Environment.DEV


__all__ = ["Environment"]
