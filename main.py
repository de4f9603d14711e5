#!/usr/bin/env python3
"""
tminvert — Entry point.

Loads a rule table and an initial configuration, then either runs the
machine forward or lists the configurations that could have led to it.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import DEFAULT_SYMBOL, LOG_LEVEL, MAX_DEPTH, MAX_STEPS, WINDOW_PADDING
from explorer import expand, run
from machine import (
    Configuration,
    MachineSpec,
    MoveRule,
    ReadWriteRule,
    RuleParseError,
)
from tape import Tape

logger = logging.getLogger("tminvert")
console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="turing-invert",
        description="Step a Turing machine forward or enumerate its predecessors.",
    )
    parser.add_argument("rules", type=Path, help="Rule table file")
    parser.add_argument("--tape", default="", help="Comma-separated tape contents starting at position 0")
    parser.add_argument("--head", type=int, default=0, help="Head position")
    parser.add_argument("--state", help="Initial state (default: trigger state of the first rule)")
    parser.add_argument("--blank", default=DEFAULT_SYMBOL, help="Default tape symbol")
    parser.add_argument("--halted", action="store_true", help="Start from a halted configuration")
    parser.add_argument("--load", type=Path, help="Load the initial configuration from a JSON file")

    commands = parser.add_subparsers(dest="command", required=True)

    step_cmd = commands.add_parser("step", help="Run forward")
    step_cmd.add_argument("-n", "--steps", type=int, default=MAX_STEPS, help="Maximum number of steps")
    step_cmd.add_argument("--save", type=Path, help="Write the final configuration to a JSON file")

    invert_cmd = commands.add_parser("invert", help="List predecessors")
    invert_cmd.add_argument("--depth", type=int, default=MAX_DEPTH, help="Number of levels to expand")
    return parser


def _first_trigger_state(spec: MachineSpec) -> str:
    if not spec.rules:
        raise RuleParseError("Rule table is empty; pass --state explicitly")
    rule = spec.rules[0]
    if isinstance(rule, ReadWriteRule):
        return rule.trigger.state
    elif isinstance(rule, MoveRule):
        return rule.trigger_state
    raise TypeError(f"Unknown rule type: {type(rule).__name__}")


def initial_configuration(args: argparse.Namespace, spec: MachineSpec) -> Configuration:
    """Build the starting configuration from --load or the tape options."""
    if args.load is not None:
        config = Configuration.load(args.load)
        spec.check_state(config.state)
        return config

    state = args.state if args.state is not None else _first_trigger_state(spec)
    spec.check_state(state)
    tape = Tape.parse(args.tape, args.blank, args.head)
    return Configuration(tape, state, args.halted)


def cmd_step(args: argparse.Namespace, spec: MachineSpec, config: Configuration) -> int:
    result = run(spec, config, args.steps)
    outcome = "halted" if result.halted else "running"
    console.print(f"[bold]{result.steps}[/bold] steps, {outcome}")
    console.print(escape(result.final.render(WINDOW_PADDING)))
    if args.save is not None:
        result.final.save(args.save)
        logger.info(f"Saved configuration to {args.save}")
    return 0


def cmd_invert(args: argparse.Namespace, spec: MachineSpec, config: Configuration) -> int:
    nodes = expand(spec, config, args.depth)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Id", justify="right")
    table.add_column("Parent", justify="right")
    table.add_column("Depth", justify="right")
    table.add_column("Configuration")
    for node in nodes:
        parent = "" if node.parent is None else str(node.parent)
        table.add_row(str(node.id), parent, str(node.depth), escape(node.config.render(WINDOW_PADDING)))

    console.print(table)
    console.print(f"{len(nodes) - 1} predecessors within depth {args.depth}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, load the machine and dispatch the command."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    args = build_parser().parse_args(argv)

    try:
        spec = MachineSpec.parse(args.rules.read_text(encoding="utf-8"), args.blank)
        logger.info(f"Loaded {spec!r} from {args.rules}")
        config = initial_configuration(args, spec)
        logger.info(f"Initial tape: {config.tape.status()}")
    except FileNotFoundError as e:
        console.print(f"[red]File not found: {escape(str(e.filename))}[/red]")
        return 1
    except RuleParseError as e:
        logger.error(f"Rejected input: {e.message}")
        console.print(f"[red]{escape(e.message)}[/red]")
        return 1
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        return 1

    try:
        if args.command == "step":
            return cmd_step(args, spec, config)
        return cmd_invert(args, spec, config)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
