import threading

from rich.console import Console
from rich.control import Control, ControlType
from rich.text import Text


class TerminalRenderer:
    """Rewrites one terminal row per machine in place.

    Each call moves the cursor to column 0 of the row, erases it and writes
    the text. Calls are serialised so rows from different workers never
    interleave mid-write.
    """

    def __init__(self, console=None):
        self.console = console or Console(highlight=False)
        self._lock = threading.Lock()

    @property
    def can_move_cursor(self):
        return self.console.is_terminal and not self.console.is_dumb_terminal

    def render(self, line_index, text):
        with self._lock:
            if not self.can_move_cursor:
                # Piped output: one line per step instead of an in-place rewrite.
                self.console.print(Text(text), soft_wrap=True)
                return
            self.console.control(
                Control.move_to(0, line_index),
                Control((ControlType.ERASE_IN_LINE, 2)),
            )
            self.console.print(Text(text), end="", soft_wrap=True)

    def clear(self):
        with self._lock:
            self.console.control(Control.clear(), Control.home())

    def finish(self, line_index, message=None):
        """Park the cursor below the machine rows, optionally printing a message."""
        with self._lock:
            self.console.control(Control.move_to(0, line_index))
            if message:
                self.console.print(message)
            else:
                self.console.print()


class RecordingRenderer:
    """Captures render calls instead of touching a terminal."""

    def __init__(self):
        self.calls = []
        self.cleared = False
        self.finished = []
        self._lock = threading.Lock()

    def render(self, line_index, text):
        with self._lock:
            self.calls.append((line_index, text))

    def clear(self):
        self.cleared = True

    def finish(self, line_index, message=None):
        with self._lock:
            self.finished.append((line_index, message))

    def lines(self, line_index):
        return [text for index, text in self.calls if index == line_index]

    def last(self, line_index):
        rendered = self.lines(line_index)
        return rendered[-1] if rendered else None
