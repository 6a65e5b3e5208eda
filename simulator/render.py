from rich.text import Text


def _parts(tape):
    left = "".join(str(symbol) for symbol in reversed(tape.left))
    right = "".join(str(symbol) for symbol in tape.right)
    return left, str(tape.middle), right


def render_tape(tape):
    """Two lines: a `v` caret above the cursor, then the explored tape."""
    left, middle, right = _parts(tape)
    marker = " " * len(left) + "v"
    return f"{marker}\n{left}{middle}{right}"


def rich_tape(tape, cursor_style="reverse bold"):
    """Same layout as render_tape, with the cursor symbol highlighted."""
    left, middle, right = _parts(tape)
    text = Text(" " * len(left) + "v\n")
    text.append(left)
    text.append(middle, style=cursor_style)
    text.append(right)
    return text
