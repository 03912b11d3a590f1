"""Command-line entry point for the Python CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import parse_hex_color
from pychip8.video.palette import DEFAULT_BACKGROUND, DEFAULT_FOREGROUND


def _hex_color(text: str) -> int:
    try:
        return parse_hex_color(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter (space pauses, enter steps while paused)",
    )
    parser.add_argument(
        "--rom",
        type=Path,
        required=True,
        help="Path to the CHIP-8 ROM image",
    )
    parser.add_argument(
        "--scale",
        type=_positive_int,
        default=16,
        help="Integer window scale factor (default: 16)",
    )
    parser.add_argument(
        "--speed",
        type=_positive_int,
        default=840,
        help="Instructions per second (default: 840)",
    )
    parser.add_argument(
        "--explanations",
        action="store_true",
        help="Show registers and the last executed instructions",
    )
    parser.add_argument(
        "--color",
        type=_hex_color,
        default=DEFAULT_FOREGROUND,
        help="Pixel colour as RRGGBB (default: ffcc01)",
    )
    parser.add_argument(
        "--background",
        type=_hex_color,
        default=DEFAULT_BACKGROUND,
        help="Background colour as RRGGBB (default: 996700)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        speed=args.speed,
        explanations=args.explanations,
        foreground=args.color,
        background=args.background,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")

    app = Chip8App(config_from_args(args))
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
