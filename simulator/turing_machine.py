from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Tuple, TypeVar

from simulator.tape import Direction, Tape, tape_of

T = TypeVar("T")
S = TypeVar("S", bound=Hashable)

Transition = Callable[[Any, Any], Tuple[Any, Direction, Any]]


@dataclass(frozen=True)
class Machine(Generic[T, S]):
    """
    Stateless description of a Turing machine.

    `transition(symbol, state)` returns `(symbol_to_write, direction, next_state)`.
    The run halts as soon as the current state equals `end`.
    """
    start: S
    end: S
    transition: Transition


@dataclass(frozen=True)
class MachineRunState(Generic[T, S]):
    current_state: S
    tape: Tape
    step: int = 0


Monitor = Callable[[MachineRunState], None]


def run_on_tape(tape, monitor, machine):
    """Drive `machine` from its start state over `tape` until it reaches its end state."""
    current = machine.start
    step = 0
    while current != machine.end:
        monitor(MachineRunState(current, tape, step))
        symbol, direction, current = machine.transition(tape.middle, current)
        tape = tape.set_middle(symbol).move(direction)
        step += 1
    return tape


def run_machine(zero, init_margin, monitor, machine):
    """
    Run `machine` on a blank tape and return the final tape.

    The loop is unbounded: a machine that never reaches its end state runs
    forever unless `monitor` raises.
    """
    return run_on_tape(tape_of(init_margin, zero), monitor, machine)
