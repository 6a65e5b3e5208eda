from rich.console import Console
from rich.markup import escape

from simulator.render import rich_tape


class StepLimitExceeded(RuntimeError):
    """Raised by a step-limit monitor once a run exceeds its budget."""

    def __init__(self, max_steps, run_state):
        super().__init__(f"Machine did not halt within {max_steps:,} steps (state: {run_state.current_state!r})")
        self.max_steps = max_steps
        self.run_state = run_state


def no_monitor(run_state):
    pass


def step_limit(max_steps):
    """Allow at most `max_steps` transitions, then abort the run."""
    def monitor(run_state):
        if run_state.step >= max_steps:
            raise StepLimitExceeded(max_steps, run_state)
    return monitor


def every(n, monitor):
    """Forward only every n-th step (steps 0, n, 2n, ...) to `monitor`."""
    if n <= 0:
        raise ValueError(f"every() needs a positive interval, got {n}")

    def sampled(run_state):
        if run_state.step % n == 0:
            monitor(run_state)
    return sampled


def combine(*monitors):
    """Call each monitor in order; the first one to raise aborts the rest."""
    def combined(run_state):
        for monitor in monitors:
            monitor(run_state)
    return combined


class StepCounter:
    def __init__(self):
        self.steps = 0
        self.last_state = None

    def __call__(self, run_state):
        self.steps += 1
        self.last_state = run_state


def console_monitor(console=None):
    """Print the tape and control state before every step."""
    console = console or Console()

    def monitor(run_state):
        console.print(f"[bold]Step {run_state.step}[/bold]  state: {escape(repr(run_state.current_state))}")
        console.print(rich_tape(run_state.tape))
    return monitor


def trace_monitor(json_logger):
    """Append one JSON-lines trace entry per step to `json_logger`."""
    def monitor(run_state):
        json_logger.log_step(run_state)
    return monitor


def progress_monitor(progress, task):
    """Advance a rich Progress task by one per step."""
    def monitor(run_state):
        progress.update(task, advance=1)
    return monitor
