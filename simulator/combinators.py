from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import Any, Generic, TypeVar

from simulator.tape import Direction
from simulator.turing_machine import Machine

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class Left(Generic[A]):
    """Composite state while the first machine of a sequence is running."""
    value: A


@dataclass(frozen=True)
class Right(Generic[B]):
    """Composite state once control has passed to the second machine."""
    value: B


class Scan(Enum):
    RUNNING = "running"
    DONE = "done"


@dataclass(frozen=True)
class Running:
    remaining: int


DONE = Scan.DONE


def go_until(direction, pred):
    """Scan in `direction`, leaving symbols untouched, until `pred(symbol)` holds."""
    def transition(symbol, state):
        if state is Scan.DONE or pred(symbol):
            return symbol, Direction.STAY, Scan.DONE
        return symbol, direction, Scan.RUNNING

    return Machine(Scan.RUNNING, Scan.DONE, transition)


def map_n(n, direction, f):
    """
    Replace the cursor symbol with `f(symbol)` and move `direction`, n times.

    n <= 0 gives a machine that finishes after a single no-op step.
    """
    def transition(symbol, state):
        if state is DONE or state.remaining <= 0:
            return symbol, Direction.STAY, DONE
        if state.remaining == 1:
            return f(symbol), direction, DONE
        return f(symbol), direction, Running(state.remaining - 1)

    return Machine(Running(n), DONE, transition)


def repeat_n(n, direction, elm):
    return map_n(n, direction, lambda _: elm)


def move_n(n, direction):
    return map_n(n, direction, lambda symbol: symbol)


def sequence(m1, m2):
    """
    Run `m1` to its end state, then `m2` from its start state.

    The hand-off happens inside a single step: reaching `m1.end` immediately
    performs the first transition of `m2`.
    """
    def transition(symbol, state):
        if isinstance(state, Left):
            if state.value != m1.end:
                write, direction, nxt = m1.transition(symbol, state.value)
                return write, direction, Left(nxt)
            write, direction, nxt = m2.transition(symbol, m2.start)
            return write, direction, Right(nxt)
        write, direction, nxt = m2.transition(symbol, state.value)
        return write, direction, Right(nxt)

    return Machine(Left(m1.start), Right(m2.end), transition)


def chain(*machines: Machine[Any, Any]) -> Machine[Any, Any]:
    if not machines:
        raise ValueError("chain() needs at least one machine")
    return reduce(sequence, machines)
