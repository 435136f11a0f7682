"""Command-line entry point for the 6502 emulator.

Opens the pygame monitor by default. ``--headless`` runs the program without
a window and prints the final registers instead.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from py6502.loader import DEFAULT_LOAD_ADDRESS
from py6502.ui.app import AppConfig, MonitorApp


def _address(text: str) -> int:
    try:
        value = int(text, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid address: {text}") from exc
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"address out of range: {text}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="MOS 6502 emulator and monitor",
    )
    parser.add_argument(
        "binary",
        nargs="?",
        type=Path,
        help="Optional raw binary to load at the load address",
    )
    parser.add_argument(
        "--load-address",
        type=_address,
        default=DEFAULT_LOAD_ADDRESS,
        help="Address the binary is loaded at and the reset vector points to (default: 0x8000)",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=2,
        help="Integer font scale factor for the monitor window (default: 2)",
    )
    parser.add_argument(
        "--run-delay",
        type=int,
        default=0,
        help="Milliseconds between instructions while running (default: 0)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without the monitor window and print the final state",
    )
    parser.add_argument(
        "--max-cycles",
        type=int,
        default=1_000_000,
        help="Cycle limit for headless runs (default: 1000000)",
    )
    parser.add_argument(
        "--stop-pc",
        type=_address,
        help="Stop a headless run when the program counter reaches this address",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Record executed instructions and print the most recent ones",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.binary and not args.binary.exists():
        parser.error(f"Binary file not found: {args.binary}")
    if args.max_cycles <= 0:
        parser.error("--max-cycles must be positive")

    config = AppConfig(
        binary_path=args.binary,
        load_address=args.load_address,
        scale=args.scale,
        run_delay_ms=args.run_delay,
        headless=args.headless,
        max_cycles=args.max_cycles,
        stop_pc=args.stop_pc,
        trace=args.trace,
    )
    app = MonitorApp(config)
    try:
        if config.headless:
            for line in app.run_headless():
                print(line)
        else:
            app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
