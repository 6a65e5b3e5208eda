# tools/run_machine.py

import argparse
import sys

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from config.config_loader import DEFAULT_CONFIG
from logger.logger import JSONLogger
from simulator.combinators import go_until, move_n, repeat_n
from simulator.monitors import (
    StepCounter,
    StepLimitExceeded,
    combine,
    every,
    progress_monitor,
    step_limit,
    trace_monitor,
)
from simulator.render import render_tape, rich_tape
from simulator.tape import Direction, tape_from, tape_of
from simulator.turing_machine import run_on_tape

console = Console()

PROGRAMS = ("scan", "repeat", "move")

DIRECTIONS = {
    "L": Direction.LEFT,
    "N": Direction.STAY,
    "R": Direction.RIGHT,
}

# === Machine Construction ===
def build_machine(program, direction="R", n=1, symbol="1", target="1"):
    """Build one of the stock combinator machines by name."""
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown direction '{direction}', expected one of {sorted(DIRECTIONS)}")
    move = DIRECTIONS[direction]

    if program == "scan":
        return go_until(move, lambda cell: cell == target)
    if program == "repeat":
        return repeat_n(n, move, symbol)
    if program == "move":
        return move_n(n, move)
    raise ValueError(f"Unknown program '{program}', expected one of {PROGRAMS}")

def initial_tape(zero, init_margin, input_symbols=None):
    """Blank tape, or one whose cursor sits on the first input symbol."""
    if not input_symbols:
        return tape_of(init_margin, zero)
    symbols = list(input_symbols)
    margin = [zero] * init_margin
    return tape_from(zero, symbols[0], margin, symbols[1:] + margin)

# === Main Runner ===
def run_program(machine, zero=DEFAULT_CONFIG["zero"], init_margin=DEFAULT_CONFIG["init_margin"],
                max_steps=DEFAULT_CONFIG["max_steps"], input_symbols=None, json_logger=None,
                log_frequency=DEFAULT_CONFIG["log_frequency"], show_progress=False, label="machine"):
    """
    Run `machine` under a step budget and return a summary dict.

    A run that exhausts the budget is reported with halted=False instead of raising.
    """
    counter = StepCounter()
    monitors = [step_limit(max_steps), counter]
    if json_logger is not None:
        monitors.append(every(log_frequency, trace_monitor(json_logger)))

    tape = initial_tape(zero, init_margin, input_symbols)
    halted = True

    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed:,.0f} steps"),
            TimeElapsedColumn(),
            console=console,
            disable=not show_progress
    ) as progress:
        task = progress.add_task(f"[cyan]Running {label}...", total=max_steps)
        monitors.append(progress_monitor(progress, task))
        try:
            tape = run_on_tape(tape, combine(*monitors), machine)
        except StepLimitExceeded as e:
            halted = False
            tape = e.run_state.tape
            console.print(f"[yellow]{escape('[WARNING]')} {escape(str(e))}[/yellow]")

    summary = {
        "program": label,
        "halted": halted,
        "steps": counter.steps,
        "tape": render_tape(tape)
    }
    if json_logger is not None:
        json_logger.log_run_summary(summary)
    return summary, tape

# === CLI ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Run a stock tape machine on a blank or seeded tape.")
    parser.add_argument("program", choices=PROGRAMS, help="Machine to run")
    parser.add_argument("--direction", default="R", choices=sorted(DIRECTIONS), help="Head direction (L, N, R)")
    parser.add_argument("--n", type=int, default=1, help="Step count for repeat/move")
    parser.add_argument("--symbol", default="1", help="Symbol written by repeat")
    parser.add_argument("--target", default="1", help="Symbol scan stops on")
    parser.add_argument("--input", default="", help="Initial tape contents, cursor on the first symbol")
    parser.add_argument("--zero", default=DEFAULT_CONFIG["zero"], help="Blank symbol")
    parser.add_argument("--init_margin", type=int, default=DEFAULT_CONFIG["init_margin"], help="Pre-allocated blanks on each side")
    parser.add_argument("--max_steps", type=int, default=DEFAULT_CONFIG["max_steps"], help="Maximum steps before abort")
    parser.add_argument("--trace_dir", help="Write a JSON-lines step trace to this directory")
    parser.add_argument("--log_frequency", type=int, default=1, help="Trace every n-th step")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    args = parser.parse_args(argv)

    machine = build_machine(args.program, args.direction, args.n, args.symbol, args.target)
    json_logger = JSONLogger(args.trace_dir) if args.trace_dir else None

    summary, tape = run_program(
        machine,
        zero=args.zero,
        init_margin=args.init_margin,
        max_steps=args.max_steps,
        input_symbols=args.input,
        json_logger=json_logger,
        log_frequency=args.log_frequency,
        show_progress=args.progress,
        label=args.program
    )

    console.print(rich_tape(tape))
    if not summary["halted"]:
        console.print(f"[red]{args.program} did not halt within {args.max_steps:,} steps.[/red]")
        return 1
    console.print(f"[green]{args.program} halted after {summary['steps']:,} steps.[/green]")
    return 0

if __name__ == "__main__":
    sys.exit(main())
