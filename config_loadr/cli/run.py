from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import Any, Callable, Sequence, TextIO

import structlog

from config_loadr.cli.demo import SCHEMAS
from config_loadr.cli.settings import CliSettings
from config_loadr.core import docs
from config_loadr.core.dotenv_loader import bootstrap_env
from config_loadr.core.errors import ConfigError
from config_loadr.core.field import FieldMode, display_value
from config_loadr.core.log_setup import configure_logging
from config_loadr.core.schema import builder_for_docs, load, load_or_error, metadata, schema_of
from config_loadr.core.version import get_version

logger = structlog.get_logger("config_loadr.cli")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="config-loadr",
        description="Load, validate and document configuration read from environment variables.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Dotenv file to load into the environment before evaluating the schema.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument(
            "--schema",
            choices=sorted(SCHEMAS),
            default="working",
            help="Sample schema to evaluate (default: working).",
        )
        return command

    add_command("check", "Load the schema and report every error without aborting.")
    add_command("load", "Load the schema, aborting with the aggregated error message on failure.")
    docs_command = add_command("docs", "Write the Markdown summary table of the schema.")
    docs_command.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("CONFIG.md"),
        help="Destination of the generated documentation (default: CONFIG.md).",
    )
    metadata_command = add_command("metadata", "Print the schema's field metadata.")
    metadata_command.add_argument(
        "--format",
        choices=("table", "yaml"),
        default="table",
        help="Output format (default: table).",
    )
    return parser.parse_args(argv)


def _print_values(config: Any, out: TextIO) -> None:
    print("Config loaded successfully!", file=out)
    for item in dataclasses.fields(config):
        value = getattr(config, item.name)
        print(f"  {item.name}: {display_value(value) if value is not None else 'None'}", file=out)


def _cmd_check(args: argparse.Namespace) -> int:
    result = load_or_error(SCHEMAS[args.schema])
    if result.ok:
        _print_values(result.value, sys.stdout)
        return 0
    print("Failed to load config:", file=sys.stderr)
    for error in result.errors:
        print(f"\t- {error}", file=sys.stderr)
    return 1


def _cmd_load(args: argparse.Namespace) -> int:
    config = load(SCHEMAS[args.schema])
    _print_values(config, sys.stdout)
    return 0


def _cmd_docs(args: argparse.Namespace) -> int:
    builder = builder_for_docs(SCHEMAS[args.schema])
    path = builder.write_docs(args.output)
    print(f"Documentation written to {path}")
    failing = len(builder.validate())
    if failing:
        print(f"Note: {failing} field(s) currently fail validation", file=sys.stderr)
    return 0


def _cmd_metadata(args: argparse.Namespace) -> int:
    cls = SCHEMAS[args.schema]
    if args.format == "yaml":
        print(docs.render_yaml(spec.metadata() for spec in schema_of(cls).fields), end="")
        return 0

    print(f"{cls.__name__} metadata:")
    for name, spec in metadata(cls).items():
        print(f"  {name}:")
        print(f"    env: {spec.key}")
        print(f"    description: {spec.description}")
        print(f"    mode: {spec.mode.value}")
        print(f"    required: {str(spec.is_required).lower()}")
        if spec.documented_value:
            label = "default" if spec.mode is FieldMode.DEFAULT else "example"
            print(f"    {label}: {spec.documented_value}")
    return 0


_COMMANDS: dict[str, Callable[[argparse.Namespace], int]] = {
    "check": _cmd_check,
    "load": _cmd_load,
    "docs": _cmd_docs,
    "metadata": _cmd_metadata,
}


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    # quiet until the tool's own settings have been read
    configure_logging("warning")
    try:
        if args.env_file is not None and not bootstrap_env(args.env_file):
            print(f"Env file not found: {args.env_file}", file=sys.stderr)
            return 1
        settings = load(CliSettings)
        configure_logging(settings.log_level.value, settings.log_format.value)
        logger.debug("command-start", command=args.command, schema=args.schema)
        return _COMMANDS[args.command](args)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


__all__ = ["main"]


if __name__ == "__main__":
    sys.exit(main())
