"""Layout demo: a column/row container toggled through a dynamic child selector."""

from __future__ import annotations

from milktea.components.box import Box
from milktea.container import Container
from milktea.layout import ROW
from milktea.messages import Exit, KeyPress, NoOp, Resize
from milktea.model import child

VALUE_KEYS = ("header_value", "content_value", "footer_value", "left_value", "center_value", "right_value")


class ValueBox(Box):
    def body(self) -> str:
        b = self.bounds
        return (
            f"{self.state.get('content', '')}\n"
            f"Value: {self.state.get('value', 0)}\n\n"
            f"{b.width}x{b.height} @({b.x},{b.y})"
        )


def _panel(title: str, content: str, key: str):
    return lambda state: {"title": title, "content": content, "value": state.get(key, 0)}


class ColumnLayout(Container):
    child_specs = (
        child(ValueBox, _panel("Header", "Top Section", "header_value"), weight=1),
        child(ValueBox, _panel("Content", "Main Area", "content_value"), weight=3),
        child(ValueBox, _panel("Footer", "Bottom Status", "footer_value"), weight=1),
    )

    def update(self, message):
        return self, NoOp()


class RowLayout(Container):
    direction = ROW
    child_specs = (
        child(ValueBox, _panel("Left", "Sidebar", "left_value"), weight=1),
        child(ValueBox, _panel("Center", "Main Content", "center_value"), weight=2),
        child(ValueBox, _panel("Right", "Info Panel", "right_value"), weight=1),
    )

    def update(self, message):
        return self, NoOp()


def _status(state) -> dict:
    layout = "Column" if state["show_column"] else "Row"
    return {
        "title": "Layout Demo",
        "content": f"Current: {layout} Layout | 't' toggle | '+/-' change values | 'q' quit",
    }


class LayoutDemo(Container):
    child_specs = (
        child(Box, _status, weight=1),
        child("dynamic_layout", lambda state: {k: state[k] for k in VALUE_KEYS}, weight=5),
    )

    def default_state(self):
        return {
            "show_column": True,
            "header_value": 1,
            "content_value": 10,
            "footer_value": 5,
            "left_value": 3,
            "center_value": 7,
            "right_value": 2,
        }

    def dynamic_layout(self):
        return ColumnLayout if self.state["show_column"] else RowLayout

    def update(self, message):
        if isinstance(message, Resize):
            return self.with_state(width=message.width, height=message.height), NoOp()
        if not isinstance(message, KeyPress):
            return self, NoOp()

        if message.value == "t":
            return self.with_state(show_column=not self.state["show_column"]), NoOp()
        if message.value == "+":
            return self.with_state({k: self.state[k] + 1 for k in VALUE_KEYS}), NoOp()
        if message.value == "-":
            return self.with_state({k: max(self.state[k] - 1, 0) for k in VALUE_KEYS}), NoOp()
        if message.value == "q" or message.key == "ctrl+c":
            return self, Exit()
        return self, NoOp()
