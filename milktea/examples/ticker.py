"""Ticker: animates from Tick timestamps."""

from __future__ import annotations

import time
from datetime import datetime

from milktea.messages import Exit, KeyPress, NoOp, Tick
from milktea.model import Model


class Ticker(Model):
    def default_state(self):
        return {"last_tick": None, "started": time.time(), "ticks": 0}

    def view(self) -> str:
        last = self.state["last_tick"]
        elapsed = (last - self.state["started"]) if last else 0.0
        dots = "." * (int(elapsed * 2) % 4)
        stamp = datetime.fromtimestamp(last).strftime("%H:%M:%S.%f")[:-3] if last else "none"
        return (
            f"Loading{dots.ljust(3)}\n\n"
            f"Last tick: {stamp}\n"
            f"Ticks: {self.state['ticks']}\n"
            f"Elapsed: {elapsed:.3f}s\n\n"
            "Press 'q' to quit\n"
        )

    def update(self, message):
        if isinstance(message, Tick):
            return self.with_state(last_tick=message.timestamp, ticks=self.state["ticks"] + 1), NoOp()
        if isinstance(message, KeyPress) and message.value == "q":
            return self, Exit()
        return self, NoOp()
