"""Sample schemas exercised by the CLI."""

from __future__ import annotations

from typing import Optional

from config_loadr.core.environment import Environment
from config_loadr.core.schema import env_config, env_field


@env_config
class WorkingConfig:
    test_string: str = env_field("TEST_STRING", "Test value", required=True, example="test")
    test_int: int = env_field("TEST_INT", "Test value", default=123)
    test_bool: bool = env_field("TEST_BOOL", "Test value", default=True)
    test_optional: Optional[int] = env_field("TEST_OPTIONAL", "Test value", optional=True, example=123)
    environment: Environment = env_field(
        "APP_ENVIRONMENT",
        "Deployment environment (dev or prod)",
        default=Environment.DEV,
    )


@env_config
class ErrorConfig:
    test_string: str = env_field("ERROR_TEST_STRING", "Test value", required=True, example="test")
    test_int: int = env_field("ERROR_TEST_INT", "Test value", default=42)
    test_wrong_type: int = env_field("TEST_WRONG_TYPE", "Test value", default=42)
    test_bool: bool = env_field("ERROR_TEST_BOOL", "Test value", default=True)
    test_optional: Optional[int] = env_field("TEST_OPTIONAL", "Test value", optional=True, example=123)


SCHEMAS: dict[str, type] = {
    "working": WorkingConfig,
    "error": ErrorConfig,
}


__all__ = ["ErrorConfig", "SCHEMAS", "WorkingConfig"]
