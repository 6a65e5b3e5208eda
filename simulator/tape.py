from enum import Enum


class Direction(Enum):
    LEFT = "L"
    STAY = "N"
    RIGHT = "R"


# Persistent stacks are nested pairs (head, tail) ending in None,
# so push/pop at the cursor end never copy.
def _push(stack, value):
    return (value, stack)


def _from_iterable(values):
    stack = None
    for value in reversed(list(values)):
        stack = (value, stack)
    return stack


def _to_tuple(stack):
    out = []
    while stack is not None:
        out.append(stack[0])
        stack = stack[1]
    return tuple(out)


def _trimmed(values, zero):
    end = len(values)
    while end and values[end - 1] == zero:
        end -= 1
    return values[:end]


class Tape:
    """
    Immutable zipper over an infinite tape.

    `left` and `right` are ordered nearest-to-cursor first. Positions that
    were never visited read as `zero`.
    """

    __slots__ = ("_left", "middle", "_right", "zero")

    def __init__(self, left, middle, right, zero):
        object.__setattr__(self, "_left", left)
        object.__setattr__(self, "middle", middle)
        object.__setattr__(self, "_right", right)
        object.__setattr__(self, "zero", zero)

    def __setattr__(self, name, value):
        raise AttributeError("Tape is immutable")

    @property
    def left(self):
        return _to_tuple(self._left)

    @property
    def right(self):
        return _to_tuple(self._right)

    def read(self):
        return self.middle

    def move_left(self):
        if self._left is None:
            new_middle, new_left = self.zero, None
        else:
            new_middle, new_left = self._left
        return Tape(new_left, new_middle, _push(self._right, self.middle), self.zero)

    def move_right(self):
        if self._right is None:
            new_middle, new_right = self.zero, None
        else:
            new_middle, new_right = self._right
        return Tape(_push(self._left, self.middle), new_middle, new_right, self.zero)

    def set_middle(self, value):
        return Tape(self._left, value, self._right, self.zero)

    def move(self, direction):
        if direction is Direction.LEFT:
            return self.move_left()
        if direction is Direction.RIGHT:
            return self.move_right()
        if direction is Direction.STAY:
            return self
        raise ValueError(f"Unknown direction: {direction!r}")

    def _key(self):
        # Blanks past the explored edge are indistinguishable from unvisited cells.
        return (
            self.zero,
            _trimmed(self.left, self.zero),
            self.middle,
            _trimmed(self.right, self.zero),
        )

    def __eq__(self, other):
        if not isinstance(other, Tape):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"Tape(left={self.left!r}, middle={self.middle!r}, right={self.right!r}, zero={self.zero!r})"


def tape_of(init_margin, zero):
    """Blank tape with `init_margin` pre-allocated blanks on each side."""
    if init_margin < 0:
        raise ValueError(f"init_margin must be non-negative, got {init_margin}")
    margin = _from_iterable([zero] * init_margin)
    return Tape(margin, zero, margin, zero)


def tape_from(zero, middle, left=(), right=()):
    """Tape with explicit contents; `left` and `right` are nearest-first."""
    return Tape(_from_iterable(left), middle, _from_iterable(right), zero)


def move_left(tape):
    return tape.move_left()


def move_right(tape):
    return tape.move_right()


def set_middle(value, tape):
    return tape.set_middle(value)


def move_dir(direction, tape):
    return tape.move(direction)
