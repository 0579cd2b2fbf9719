# classforge/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .codegen import LANGUAGES, generate, resolve_language
from .config import EditorConfig
from .io import load_config, load_diagram
from .model import Diagram
from .validate import validate_diagram
from .writer import write_code, write_md


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classforge",
        description="Generate code skeletons from a UML class diagram.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    export_parser = subparsers.add_parser("export", help="Generate code from a YAML diagram")
    export_parser.add_argument(
        "--model",
        type=Path,
        required=True,
        help="Path to a YAML file with classes, relations and groups.",
    )
    export_parser.add_argument(
        "--language",
        type=str,
        default=None,
        help=(
            "Target language (default: the config's default_language). "
            "Unknown names fall back to Java."
        ),
    )
    export_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output file (default: stdout). A .md file gets a titled Mermaid block.",
    )
    export_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML editor config.",
    )
    export_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on validation warnings (unknown access levels, stale group members). "
        "Errors always fail.",
    )

    subparsers.add_parser("languages", help="List export languages")

    return parser


def _export(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config) if args.config else EditorConfig()
        model = load_diagram(args.model)
    except (OSError, TypeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    errors, warnings = validate_diagram(model)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if errors or (args.strict and warnings):
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        return 2

    diagram = Diagram.from_dict(model)
    spec = resolve_language(args.language or cfg.default_language)
    code = generate(diagram.classes, diagram.relations, spec.language_id)

    out: Optional[Path] = args.out
    if out is None:
        sys.stdout.write(code)
    elif spec.language_id == "mermaid" and out.suffix == ".md":
        write_md(out, args.model.stem, code)
    else:
        write_code(out, code)
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint."""
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "export":
        return _export(args)
    if args.command == "languages":
        for spec in LANGUAGES:
            print(f"{spec.language_id}\t{spec.title}")
        return 0

    parser.print_usage(sys.stderr)
    print("error: missing subcommand (use one of: export, languages)", file=sys.stderr)
    return 2
