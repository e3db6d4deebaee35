"""Typed parsing of single environment values.

Every type-specific conversion flows through :func:`read_env`, which reads a
key once and classifies the result as absent, parsed or invalid.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping

Parser = Callable[[str], Any]


class ParseStatus(Enum):
    ABSENT = "absent"
    PARSED = "parsed"
    INVALID = "invalid"


@dataclass(frozen=True)
class ParseResult:
    status: ParseStatus
    value: Any = None
    raw: str | None = None

    @classmethod
    def absent(cls) -> "ParseResult":
        return cls(ParseStatus.ABSENT)

    @classmethod
    def parsed(cls, value: Any, raw: str) -> "ParseResult":
        return cls(ParseStatus.PARSED, value=value, raw=raw)

    @classmethod
    def invalid(cls, raw: str) -> "ParseResult":
        return cls(ParseStatus.INVALID, raw=raw)


def _parse_str(value: str) -> str:
    return value


_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?i:inf|infinity|nan)"
)


def _parse_int(value: str) -> int:
    # int() alone would accept whitespace, underscores and non-ASCII digits
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid integer literal {value!r}")
    return int(value, 10)


def _parse_float(value: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid float literal {value!r}")
    return float(value)


def _parse_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"expected 'true' or 'false', received {value!r}")


_BUILTIN_PARSERS: dict[type, Parser] = {
    str: _parse_str,
    int: _parse_int,
    float: _parse_float,
    bool: _parse_bool,
    Path: Path,
}


def _enum_parser(enum_type: type[Enum]) -> Parser:
    def parse(value: str) -> Enum:
        try:
            return enum_type(value)
        except ValueError:
            pass
        try:
            return enum_type[value]
        except KeyError as exc:
            raise ValueError(f"{value!r} is not a valid {enum_type.__name__}") from exc

    return parse


def parser_for(value_type: Any) -> Parser:
    """Return the string parser used for ``value_type``."""
    if isinstance(value_type, type):
        builtin = _BUILTIN_PARSERS.get(value_type)
        if builtin is not None:
            return builtin
        from_str = getattr(value_type, "from_str", None)
        if callable(from_str):
            return from_str
        if issubclass(value_type, Enum):
            return _enum_parser(value_type)
    if callable(value_type):
        return value_type
    raise TypeError(f"Cannot parse environment values into {value_type!r}")


def read_env(key: str, value_type: Any, env: Mapping[str, str] | None = None) -> ParseResult:
    """Read ``key`` from ``env`` (default: the process environment) and parse it."""
    source = os.environ if env is None else env
    raw = source.get(key)
    if raw is None:
        return ParseResult.absent()
    parse = parser_for(value_type)
    try:
        value = parse(raw)
    except (ValueError, TypeError):
        return ParseResult.invalid(raw)
    return ParseResult.parsed(value, raw)


__all__ = ["ParseResult", "ParseStatus", "Parser", "parser_for", "read_env"]
