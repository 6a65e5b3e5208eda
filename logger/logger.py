import json
import os
from datetime import datetime, timezone

class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="tapemachine_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def log(self, entry: dict):
        """Log a single entry to the main trace log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def log_step(self, run_state):
        """Log the control state and tape seen just before one step."""
        tape = run_state.tape
        self.log({
            "kind": "step",
            "step": run_state.step,
            "state": repr(run_state.current_state),
            "left": [str(symbol) for symbol in tape.left],
            "middle": str(tape.middle),
            "right": [str(symbol) for symbol in tape.right],
            "zero": str(tape.zero)
        })

    def log_run_summary(self, summary: dict):
        """Log the outcome of a whole run after its step entries (halted or not, steps, final tape)."""
        entry = {"kind": "summary", "timestamp": datetime.now(timezone.utc).isoformat()}
        entry.update(summary)
        self.log(entry)
