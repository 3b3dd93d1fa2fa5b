"""Counter: the smallest useful model."""

from __future__ import annotations

from milktea.messages import Exit, KeyPress, NoOp, Reload
from milktea.model import Model

HELP = """
Press:
- '+' or 'k' to increment
- '-' or 'j' to decrement
- 'r' to reset
- 'q' to quit
"""


class Counter(Model):
    def default_state(self):
        return {"count": 0}

    def view(self) -> str:
        return f"Counter: {self.state['count']}\n{HELP}"

    def update(self, message):
        if isinstance(message, Reload):
            return self.with_state(), NoOp()
        if not isinstance(message, KeyPress):
            return self, NoOp()

        if message.value in ("+", "k"):
            return self.with_state(count=self.state["count"] + 1), NoOp()
        if message.value in ("-", "j"):
            return self.with_state(count=self.state["count"] - 1), NoOp()
        if message.value == "r":
            return self.with_state(count=0), NoOp()
        if message.value == "q" or message.key == "ctrl+c":
            return self, Exit()
        return self, NoOp()
