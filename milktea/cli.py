"""Command-line entrypoint for running milktea applications."""

from __future__ import annotations

import argparse
import dataclasses
import sys

from milktea.application import Application
from milktea.config import resolve_config
from milktea.errors import MilkteaError

EXAMPLES: dict[str, tuple[str, dict]] = {
    "counter": ("milktea.examples.counter:Counter", {}),
    "layout": ("milktea.examples.layout:LayoutDemo", {}),
    "text": ("milktea.examples.text_demo:TextDemo", {}),
    "ticker": ("milktea.examples.ticker:Ticker", {"tick_interval": 0.25}),
}

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="milktea", description="Run a milktea terminal application")
    parser.add_argument("target", nargs="?", help="Root model as module:ClassName")
    parser.add_argument("-e", "--example", choices=sorted(EXAMPLES), help="Run a bundled example")
    parser.add_argument("--app-dir", help="Application directory (put on sys.path, watched for reloads)")
    parser.add_argument("--config", help="Optional JSON config file")
    parser.add_argument("--fps", type=int, help="Frames per second override")
    parser.add_argument("--tick", type=float, dest="tick_interval", help="Send Tick messages every N seconds")
    parser.add_argument(
        "--hot-reload",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Watch the application directory and reload changed modules",
    )
    parser.add_argument("--log-file", help="Write logs to this file")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Minimum log level")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    defaults: dict = {}
    if args.example:
        target, defaults = EXAMPLES[args.example]
    else:
        target = args.target
    if not target:
        parser.error("a target (module:ClassName) or --example is required")

    try:
        config = resolve_config(
            args.config,
            app_dir=args.app_dir,
            fps=args.fps,
            hot_reloading=args.hot_reload,
            tick_interval=args.tick_interval if args.tick_interval is not None else defaults.get("tick_interval"),
        )
        if args.log_file or args.log_level:
            config.log = dataclasses.replace(
                config.log,
                file=args.log_file or config.log.file,
                level=args.log_level or config.log.level,
            )
        app_class = type("CliApplication", (Application,), {"root": target})
        app_class(config).run()
    except MilkteaError as exc:
        print(f"milktea: {exc}", file=sys.stderr)
        return 1
    return 0
