import json

import pytest

from logger.logger import JSONLogger
from simulator.tape import Direction
from tools import run_machine as run_machine_tool
from tools.run_machine import build_machine, initial_tape, run_program
from tools.trace_inspect import load_trace, print_trace, summarize_trace, tape_line
from tools.trace_inspect import main as inspect_main


def test_build_machine_programs():
    repeat = build_machine("repeat", "R", n=2, symbol="x")
    assert repeat.transition("_", repeat.start)[:2] == ("x", Direction.RIGHT)
    scan = build_machine("scan", "L", target="#")
    assert scan.transition("#", scan.start)[1] is Direction.STAY
    move = build_machine("move", "N", n=1)
    assert move.transition("a", move.start)[:2] == ("a", Direction.STAY)


@pytest.mark.parametrize("program, direction", [("jump", "R"), ("scan", "U")])
def test_build_machine_rejects_unknown_input(program, direction):
    with pytest.raises(ValueError):
        build_machine(program, direction)


def test_initial_tape_from_input():
    tape = initial_tape("_", 1, "abc")
    assert tape.middle == "a"
    assert tape.right == ("b", "c", "_")
    assert tape.left == ("_",)
    assert initial_tape("_", 2, "ab").right == ("b", "_", "_")
    assert initial_tape("_", 2, "").left == ("_", "_")


def test_run_program_halting(tmp_path):
    json_logger = JSONLogger(str(tmp_path))
    summary, tape = run_program(
        build_machine("scan", "R", target="1"),
        zero="0",
        input_symbols="0001",
        json_logger=json_logger,
        log_frequency=1,
        label="scan"
    )
    assert summary == {"program": "scan", "halted": True, "steps": 4, "tape": "   v\n0001"}
    assert tape.middle == "1"
    entries = load_trace(json_logger.current_log)
    assert len(entries) == 5
    assert entries[-1]["kind"] == "summary"


def test_run_program_reports_step_limit():
    summary, tape = run_program(build_machine("scan", "R", target="1"), zero="0", max_steps=25)
    assert summary["halted"] is False
    assert summary["steps"] == 25
    assert len(tape.left) == 25


def test_run_machine_cli_exit_codes(tmp_path):
    assert run_machine_tool.main(["repeat", "--n", "3", "--symbol", "X", "--init_margin", "2"]) == 0
    assert run_machine_tool.main(["scan", "--max_steps", "10"]) == 1
    assert run_machine_tool.main(["move", "--n", "2", "--trace_dir", str(tmp_path)]) == 0
    assert list(tmp_path.glob("tapemachine_*.jsonl"))


def test_summarize_and_print_trace(tmp_path, capsys):
    trace = tmp_path / "trace.jsonl"
    entries = [
        {"kind": "step", "step": 0, "state": "'a'", "left": [], "middle": "0", "right": ["1"], "zero": "0"},
        {"kind": "step", "step": 1, "state": "'b'", "left": ["0"], "middle": "1", "right": [], "zero": "0"},
        {"kind": "summary", "program": "scan", "halted": True, "steps": 2},
    ]
    trace.write_text("\n".join(json.dumps(entry) for entry in entries) + "\n\n", encoding="utf-8")

    loaded = load_trace(trace)
    assert loaded == entries
    assert tape_line(loaded[1]) == "0[1]"

    summary = summarize_trace(loaded)
    assert summary["steps_logged"] == 2
    assert summary["first_step"] == 0
    assert summary["last_step"] == 1
    assert summary["distinct_states"] == ["'a'", "'b'"]
    assert summary["halted"] == [True]

    print_trace(loaded, limit=1)
    out = capsys.readouterr().out
    assert "[0]1" in out
    assert "0[1]" not in out

    inspect_main(["--trace", str(trace)])
    assert "Steps logged: 2" in capsys.readouterr().out


def test_load_trace_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_trace(tmp_path / "missing.jsonl")


def test_summarize_trace_counts_logged_runs(tmp_path):
    json_logger = JSONLogger(str(tmp_path))
    run_program(build_machine("repeat", n=2), json_logger=json_logger, log_frequency=1)
    run_program(build_machine("scan", target="1"), max_steps=3, json_logger=json_logger, log_frequency=1)

    summary = summarize_trace(load_trace(json_logger.current_log))
    assert summary["steps_logged"] == 5
    assert summary["runs"] == 2
    assert summary["halted"] == [True, False]
