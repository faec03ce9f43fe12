"""Command-line interface: inspect and render transition files."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import yaml

from stateless_fsm.export import render, to_dot
from stateless_fsm.loader import load_transitions
from stateless_fsm.table import TransitionTable

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stateless-fsm",
        description="Inspect and render state machine transition files (YAML/JSON).",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    dot = sub.add_parser("dot", help="Print the Graphviz DOT description")
    dot.add_argument("config", type=Path, help="Transition file")

    export = sub.add_parser("export", help="Render the state diagram with Graphviz")
    export.add_argument("config", type=Path, help="Transition file")
    export.add_argument("-o", "--output", required=True, help="Output image path")
    export.add_argument("--format", default="png", help="Graphviz output format (default: png)")
    export.add_argument("--layout", default="dot", help="Graphviz layout engine (default: dot)")
    export.add_argument("--scale", default="72", help="Graphviz scale (default: 72)")
    export.add_argument("--dot-bin", default="dot", metavar="PATH",
                        help="Graphviz executable (default: dot)")

    check = sub.add_parser("check", help="Summarize a transition file")
    check.add_argument("config", type=Path, help="Transition file")
    check.add_argument("--strict", action="store_true",
                       help="Fail if any (state, event) pair has more than one rule")
    return p


def _cmd_dot(args: argparse.Namespace) -> int:
    print(to_dot(load_transitions(args.config)), end="")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    transitions = load_transitions(args.config)
    render(
        to_dot(transitions),
        args.output,
        format=args.format,
        layout=args.layout,
        scale=args.scale,
        executable=args.dot_bin,
    )
    logger.info("wrote %s", args.output)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    table = TransitionTable(load_transitions(args.config))
    print(f"{len(table)} transitions, {len(table.states())} states, {len(table.events())} events")
    shadowed = table.duplicates()
    for t in shadowed:
        print(f"shadowed: {t.from_state} --{t.event}--> {t.to_state} [{t.action}]")
    if args.strict and shadowed:
        return 1
    return 0


_COMMANDS = {"dot": _cmd_dot, "export": _cmd_export, "check": _cmd_check}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        return _COMMANDS[args.command](args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
