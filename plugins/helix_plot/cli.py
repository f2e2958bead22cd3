"""Command line interface for the HelixPlot plugin."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from .core import (
    ComplexMapping,
    Mode,
    build_plot,
    compute_constants,
    describe,
    detect_mode,
    format_definition,
    get_preset,
    list_presets,
    parse_program,
)


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


def command_parse(args: argparse.Namespace) -> None:
    program = parse_program(_read_source(args.file))
    constants = compute_constants(program.definitions)
    _print(
        {
            "mode": detect_mode(program.definitions).value,
            "definitions": [format_definition(definition) for definition in program.definitions],
            "constants": {name: describe(value) for name, value in constants.items()},
            "errors": [error.to_dict() for error in program.errors],
        }
    )


def command_plot(args: argparse.Namespace) -> None:
    result = build_plot(
        _read_source(args.file),
        mode=Mode(args.mode),
        mapping=ComplexMapping(args.mapping),
        count=args.samples,
    )
    _print(result.to_dict())


def command_presets(args: argparse.Namespace) -> None:
    if args.action == "list":
        _print({"presets": [preset.to_dict() for preset in list_presets()]})
    elif args.action == "show":
        try:
            preset = get_preset(args.key)
        except KeyError as exc:
            raise SystemExit(exc.args[0]) from exc
        _print(preset.to_dict())
    else:  # pragma: no cover - argparse guards
        raise SystemExit(f"Unknown presets action: {args.action}")


def _positive(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HelixPlot CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser("parse", help="Parse a definitions file")
    parse_parser.add_argument("file", help="Path to the definitions file, or - for stdin")
    parse_parser.set_defaults(func=command_parse)

    plot_parser = subparsers.add_parser("plot", help="Sample the curve or surface described by a file")
    plot_parser.add_argument("file", help="Path to the definitions file, or - for stdin")
    plot_parser.add_argument("--mode", default="auto", choices=[mode.value for mode in Mode], help="Plot mode")
    plot_parser.add_argument(
        "--mapping",
        default="A",
        choices=[mapping.value for mapping in ComplexMapping],
        help="Complex-curve axis mapping",
    )
    plot_parser.add_argument("--samples", type=_positive, default=None, help="Number of curve samples")
    plot_parser.set_defaults(func=command_plot)

    presets_parser = subparsers.add_parser("presets", help="Bundled example programs")
    presets_sub = presets_parser.add_subparsers(dest="action", required=True)
    presets_sub.add_parser("list", help="List bundled presets")
    show_parser = presets_sub.add_parser("show", help="Show one preset")
    show_parser.add_argument("key", help="Preset key (e.g. helix)")
    presets_parser.set_defaults(func=command_presets)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
