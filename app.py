# app.py

import argparse
import json
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.table import Table

from config.config_loader import DEFAULT_CONFIG, load_config, validate_config
from logger.logger import JSONLogger
from simulator.render import rich_tape
from tools.run_machine import PROGRAMS, build_machine, run_program
from tools.trace_inspect import load_trace, print_trace, summarize_trace

console = Console()

CONFIG_PATH = Path("config/runtime_config.json")

# === Utilities ===
def load_runtime_config(path=CONFIG_PATH):
    if not Path(path).exists():
        console.print(f"[yellow]{path} not found, using defaults.[/yellow]")
        return DEFAULT_CONFIG.copy()
    return load_config(str(path))

def save_runtime_config(config, path=CONFIG_PATH):
    validate_config(config)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
    console.print("[green]Configuration updated successfully.[/green]")

def show_main_menu():
    console.print("\n[bold cyan]Tape Machine Simulator[/bold cyan]")
    console.print("[1] Scan until symbol")
    console.print("[2] Repeat symbol n times")
    console.print("[3] Move n cells")
    console.print("[4] Inspect a trace")
    console.print("[5] Edit Config")
    console.print("[6] Exit")

def make_logger(config):
    if not config["trace_enabled"]:
        return None
    return JSONLogger(config["output_directory"], config["log_file_prefix"])

def execute(program, config, input_symbols="", **machine_args):
    machine = build_machine(program, **machine_args)
    summary, tape = run_program(
        machine,
        zero=config["zero"],
        init_margin=config["init_margin"],
        max_steps=config["max_steps"],
        input_symbols=input_symbols,
        json_logger=make_logger(config),
        log_frequency=config["log_frequency"],
        show_progress=config["show_progress"],
        label=program
    )
    console.print(rich_tape(tape))
    show_summary(summary)
    return summary

def show_summary(summary):
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Program", justify="center")
    table.add_column("Steps", justify="center")
    table.add_column("Status", justify="center")
    status = "[green]Halted[/green]" if summary["halted"] else "[red]Step limit[/red]"
    table.add_row(summary["program"], f"{summary['steps']:,}", status)
    console.print(table)

def handle_run(program, config):
    console.print(f"\n[bold]{program.capitalize()}[/bold]")

    direction = Prompt.ask("Direction", choices=["L", "N", "R"], default="R")
    machine_args = {"direction": direction}
    if program == "scan":
        machine_args["target"] = Prompt.ask("Stop on symbol", default="1")
    else:
        machine_args["n"] = IntPrompt.ask("Number of steps", default=3)
    if program == "repeat":
        machine_args["symbol"] = Prompt.ask("Symbol to write", default="1")
    input_symbols = Prompt.ask("Initial tape contents (blank for empty tape)", default="")

    execute(program, config, input_symbols, **machine_args)

def handle_inspect(config):
    console.print("\n[bold]Inspect Trace[/bold]")
    traces = sorted(Path(config["output_directory"]).glob(f"{config['log_file_prefix']}*.jsonl"))
    if not traces:
        console.print("[red]No traces found. Enable tracing in the config and run a machine first.[/red]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Index", justify="center")
    table.add_column("Trace", justify="center")
    for idx, trace in enumerate(traces):
        table.add_row(str(idx), trace.name)
    console.print(table)

    idx_choice = IntPrompt.ask("\nChoose a trace by Index")
    if idx_choice < 0 or idx_choice >= len(traces):
        console.print("[red]Invalid choice.[/red]")
        return

    entries = load_trace(traces[idx_choice])
    summary = summarize_trace(entries)
    console.print(f"[cyan]{summary['steps_logged']:,} steps logged, {len(summary['distinct_states'])} distinct states.[/cyan]")
    if summary["runs"]:
        console.print(f"[cyan]{summary['runs']} runs, {sum(summary['halted'])} halted.[/cyan]")
    print_trace(entries, limit=IntPrompt.ask("Steps to show", default=20))

def handle_edit_config(config, path=CONFIG_PATH):
    console.print("\n[bold]Edit Configuration[/bold]")

    zero = Prompt.ask("Blank symbol", default=config.get("zero", "_"))
    init_margin = IntPrompt.ask("Initial margin", default=config.get("init_margin", 0))
    max_steps = IntPrompt.ask("Max Steps", default=config.get("max_steps", 1000000))
    log_frequency = IntPrompt.ask("Trace every n-th step", default=config.get("log_frequency", 100))
    trace_enabled = Confirm.ask("Write step traces?", default=config.get("trace_enabled", False))
    show_progress = Confirm.ask("Show progress bar?", default=config.get("show_progress", True))

    updated = config.copy()
    updated.update({
        "zero": zero,
        "init_margin": init_margin,
        "max_steps": max_steps,
        "log_frequency": log_frequency,
        "trace_enabled": trace_enabled,
        "show_progress": show_progress
    })

    try:
        save_runtime_config(updated, path)
    except (ValueError, TypeError) as e:
        console.print(f"[red]Invalid configuration, nothing saved: {escape(str(e))}[/red]")
        return False

    config.update(updated)
    return True

def interactive_main():
    config = load_runtime_config()

    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5", "6"], default="6")

        if choice == "1":
            handle_run("scan", config)
        elif choice == "2":
            handle_run("repeat", config)
        elif choice == "3":
            handle_run("move", config)
        elif choice == "4":
            handle_inspect(config)
        elif choice == "5":
            handle_edit_config(config)
            config = load_runtime_config()
        elif choice == "6":
            console.print("[bold green]Goodbye![/bold green]")
            break

# === CLI Mode for Automation ===
def cli_main(args):
    config = load_runtime_config(args.config)
    if args.max_steps is not None:
        config["max_steps"] = args.max_steps

    summary = execute(
        args.program,
        config,
        args.input,
        direction=args.direction,
        n=args.n,
        symbol=args.symbol,
        target=args.target
    )
    return 0 if summary["halted"] else 1

def main(argv=None):
    parser = argparse.ArgumentParser(description="Tape Machine Simulator Application")
    parser.add_argument("--program", choices=PROGRAMS, help="Run a machine immediately instead of the menu")
    parser.add_argument("--direction", default="R", choices=["L", "N", "R"], help="Head direction")
    parser.add_argument("--n", type=int, default=1, help="Step count for repeat/move")
    parser.add_argument("--symbol", default="1", help="Symbol written by repeat")
    parser.add_argument("--target", default="1", help="Symbol scan stops on")
    parser.add_argument("--input", default="", help="Initial tape contents")
    parser.add_argument("--max_steps", type=int, help="Override max_steps from the config")
    parser.add_argument("--config", default=str(CONFIG_PATH), help="Path to runtime_config.json")
    args = parser.parse_args(argv)

    if args.program:
        return cli_main(args)
    interactive_main()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
