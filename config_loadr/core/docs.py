"""Render captured field metadata as documentation.

Rendering only needs the metadata recorded while a schema was evaluated, so a
summary can be produced whether or not the build succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

import structlog
import yaml

from .field import FieldMetadata

logger = structlog.get_logger("config_loadr.core")

DOCS_HEADING = "## Environment Variables Summary"
_COLUMNS = ("Variable", "Required", "Description", "Default/Example")


@dataclass(frozen=True)
class DocRow:
    variable: str
    required: str
    description: str
    default: str

    def cells(self) -> tuple[str, str, str, str]:
        return (self.variable, self.required, self.description, self.default)


def build_rows(metadata: Iterable[FieldMetadata]) -> list[DocRow]:
    return [
        DocRow(
            variable=item.key,
            required="Yes" if item.required else "No",
            description=item.description,
            default=item.default_str or "-",
        )
        for item in metadata
    ]


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def render_markdown(rows: Sequence[DocRow]) -> str:
    lines = [
        DOCS_HEADING,
        "",
        "| " + " | ".join(_COLUMNS) + " |",
        "|" + "|".join("-" * (len(name) + 2) for name in _COLUMNS) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(cell) for cell in row.cells()) + " |")
    return "\n".join(lines) + "\n"


def write_markdown(metadata: Iterable[FieldMetadata], path: Path | str) -> Path:
    """Write the Markdown summary table to ``path`` and return the path."""
    target = Path(path)
    rows = build_rows(metadata)
    target.write_text(render_markdown(rows), encoding="utf-8")
    logger.info("config-docs-written", path=str(target), fields=len(rows))
    return target


def render_yaml(metadata: Iterable[FieldMetadata]) -> str:
    """Dump the metadata as a YAML list, one mapping per field in declaration order."""
    payload = [
        {
            "key": item.key,
            "description": item.description,
            "required": item.required,
            "default": item.default_str or None,
        }
        for item in metadata
    ]
    return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)


__all__ = [
    "DOCS_HEADING",
    "DocRow",
    "build_rows",
    "render_markdown",
    "render_yaml",
    "write_markdown",
]
