from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from . import __version__
from .config import Settings
from .exceptions import ErrorManagerError, ValidationError
from .registry import ErrorManager

logger = logging.getLogger(__name__)


def _setup_logging(settings: Settings, verbosity: int) -> None:
    level = getattr(logging, settings.log_level, logging.WARNING)
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings.from_sources(file_path=args.config)
    changes = {}
    if getattr(args, "validate", True) is False:
        changes["validate_schema"] = False
    if getattr(args, "schema", None):
        changes["schema_path"] = Path(args.schema)
    if getattr(args, "include_code", True) is False:
        changes["include_code"] = False
    if changes:
        settings = dataclasses.replace(settings, **changes)
        settings.validate()
    return settings


def _parse_pairs(pairs: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {pair!r}")
        out[key] = value
    return out


def _cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    root = Path(args.path)
    paths = sorted(root.rglob("*.json")) if root.is_dir() else [root]

    success = True
    for p in paths:
        try:
            manager = ErrorManager(p, settings=settings)
            manager.load_sync()
            print(f"OK: {p} ({len(manager.errors)} errors)")
        except ValidationError as e:
            success = False
            print(f"INVALID: {p}\n{e.to_human()}\n")
        except ErrorManagerError as e:
            success = False
            print(f"INVALID: {p}: {e}")

    return 0 if success else 1


def _cmd_render(args: argparse.Namespace, settings: Settings) -> int:
    try:
        values = _parse_pairs(args.arg)
    except argparse.ArgumentTypeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    try:
        manager = ErrorManager(args.file, settings=settings)
        manager.load_sync()
        print(manager.format(args.title, values))
    except ErrorManagerError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="error-manager", description="Validate and render error definition files")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", default=None, help="Settings TOML file (defaults to $ERROR_MANAGER_SETTINGS_FILE)")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    sub = p.add_subparsers(dest="cmd", required=True)

    v = sub.add_parser("validate", help="Load error files and report schema problems")
    v.add_argument("path", help="Path to a JSON file or a directory to scan")
    v.add_argument("--schema", help="Custom JSON schema file", default=None)
    v.add_argument("--no-validate", dest="validate", action="store_false", help="Disable schema validation (parse only)")
    v.set_defaults(func=_cmd_validate, validate=True)

    r = sub.add_parser("render", help="Print the formatted message of one error")
    r.add_argument("file", help="Error definitions JSON file")
    r.add_argument("title", help="Error title")
    r.add_argument("--arg", action="append", default=[], metavar="KEY=VALUE", help="Placeholder value (repeatable)")
    r.add_argument("--no-code", dest="include_code", action="store_false", help="Render the message without its code")
    r.set_defaults(func=_cmd_render, include_code=True)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = _settings_from_args(args)
    except ErrorManagerError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    _setup_logging(settings, args.verbose)
    return args.func(args, settings)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
