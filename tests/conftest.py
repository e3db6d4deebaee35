from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

import pytest

from config_loadr.core.schema import env_config, env_field


@env_config
class ServiceConfig:
    name: str = env_field("NAME", "Service name", required=True, example="svc")
    port: int = env_field("PORT", "Server port", default=8080)
    debug_level: Optional[int] = env_field("DEBUG_LEVEL", "Debug verbosity", optional=True, example=2)


DEMO_KEYS = (
    "NAME",
    "PORT",
    "DEBUG_LEVEL",
    "TEST_STRING",
    "TEST_INT",
    "TEST_BOOL",
    "TEST_OPTIONAL",
    "APP_ENVIRONMENT",
    "ERROR_TEST_STRING",
    "ERROR_TEST_INT",
    "TEST_WRONG_TYPE",
    "ERROR_TEST_BOOL",
    "CONFIG_LOADR_LOG_LEVEL",
    "CONFIG_LOADR_LOG_FORMAT",
)


@pytest.fixture
def config_env(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    def apply(**env: Any) -> None:
        for key, value in env.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, str(value))

    return apply


@pytest.fixture
def clean_env(config_env: Callable[..., None]) -> Callable[..., None]:
    """Unset every variable the test schemas read, then hand back the setter.

    Each key is set before being removed so monkeypatch restores its original
    state even if a dotenv file populates it during the test.
    """
    config_env(**{key: "" for key in DEMO_KEYS})
    config_env(**{key: None for key in DEMO_KEYS})
    return config_env


@pytest.fixture
def service_config() -> type:
    return ServiceConfig


@pytest.fixture
def reset_structlog() -> Iterable[None]:
    import structlog

    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
