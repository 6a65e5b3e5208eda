import json
import argparse
from pathlib import Path

def load_trace(trace_file):
    """Load a JSON-lines trace into a list of entries, skipping blank lines."""
    trace_file = Path(trace_file)
    if not trace_file.exists():
        raise FileNotFoundError(f"Trace file {trace_file} not found.")
    entries = []
    with open(trace_file, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                entries.append(json.loads(line))
    return entries

def tape_line(entry):
    """Rebuild the data line of a rendered tape from a step entry."""
    return "".join(reversed(entry["left"])) + f"[{entry['middle']}]" + "".join(entry["right"])

def summarize_trace(entries):
    steps = [entry for entry in entries if entry.get("kind") == "step"]
    summaries = [entry for entry in entries if entry.get("kind") == "summary"]
    states = []
    for entry in steps:
        if entry["state"] not in states:
            states.append(entry["state"])
    return {
        "steps_logged": len(steps),
        "first_step": steps[0]["step"] if steps else None,
        "last_step": steps[-1]["step"] if steps else None,
        "distinct_states": states,
        "runs": len(summaries),
        "halted": [entry["halted"] for entry in summaries]
    }

def print_trace(entries, limit=None):
    """Print the step entries as a tab separated table."""
    print("\n=== Trace ===")
    print("\t".join(["Step", "State", "Tape"]))
    steps = [entry for entry in entries if entry.get("kind") == "step"]
    if limit is not None:
        steps = steps[:limit]
    for entry in steps:
        print("\t".join([str(entry["step"]), entry["state"], tape_line(entry)]))

def main(argv=None):
    parser = argparse.ArgumentParser(description="Tape Machine Trace Inspector")
    parser.add_argument("--trace", required=True, help="Path to a JSON-lines trace file")
    parser.add_argument("--limit", type=int, help="Print at most this many steps")
    args = parser.parse_args(argv)

    entries = load_trace(args.trace)
    summary = summarize_trace(entries)
    print(f"[INFO] Trace {args.trace}")
    print(f"  Steps logged: {summary['steps_logged']}")
    print(f"  Step range: {summary['first_step']} .. {summary['last_step']}")
    print(f"  Distinct states: {len(summary['distinct_states'])}")
    print_trace(entries, args.limit)

if __name__ == "__main__":
    main()
