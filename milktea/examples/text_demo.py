"""Text demo: wrapping and clipping inside weighted slots."""

from __future__ import annotations

from milktea.components.text import Text
from milktea.container import Container
from milktea.messages import Exit, KeyPress, NoOp, Resize
from milktea.model import child


class HeaderText(Text):
    def default_state(self):
        return {"content": "Milktea Text Component Demo\nPress 'q' to quit"}


class ShortText(Text):
    def default_state(self):
        return {
            "content": "This is a short text that fits comfortably within the bounds. "
            "It demonstrates basic text rendering."
        }


class LongText(Text):
    def default_state(self):
        return {
            "content": "This is a much longer text that demonstrates the wrapping and "
            "truncation of the Text component. When text is too long to fit within "
            "the available width it wraps to the next line, and lines that do not "
            "fit within the height are dropped, so text always stays within its "
            "designated area and never overflows into other components. Wrapping "
            "is word-aware and only breaks words that are wider than the box."
        }


class UnicodeText(Text):
    def default_state(self):
        return {"content": "Unicode: 你好世界 こんにちは 안녕하세요 🌍🚀✨ wide glyphs take two cells."}


class FooterText(Text):
    def default_state(self):
        return {"content": "Resize the terminal to watch the text reflow."}


class TextDemo(Container):
    child_specs = (
        child("header", weight=1),
        child("short_text", weight=2),
        child("long_text", weight=3),
        child("unicode_text", weight=2),
        child("footer", weight=1),
    )

    def header(self):
        return HeaderText

    def short_text(self):
        return ShortText

    def long_text(self):
        return LongText

    def unicode_text(self):
        return UnicodeText

    def footer(self):
        return FooterText

    def update(self, message):
        if isinstance(message, Resize):
            return self.with_state(width=message.width, height=message.height), NoOp()
        if isinstance(message, KeyPress) and (message.value == "q" or message.key == "ctrl+c"):
            return self, Exit()
        return self, NoOp()
