from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from milktea.examples.counter import Counter  # noqa: E402
from milktea.examples.layout import ColumnLayout, LayoutDemo, RowLayout  # noqa: E402
from milktea.examples.text_demo import HeaderText, LongText, TextDemo  # noqa: E402
from milktea.examples.ticker import Ticker  # noqa: E402
from milktea.messages import Exit, KeyPress, NoOp, Reload, Resize, Tick  # noqa: E402


def key(value: str) -> KeyPress:
    return KeyPress(value, value)


class CounterTests(unittest.TestCase):
    def test_increment_decrement_reset(self):
        model = Counter()
        for value in "+k+":
            model, _ = model.update(key(value))
        self.assertEqual(model.state["count"], 3)
        model, _ = model.update(key("j"))
        self.assertEqual(model.state["count"], 2)
        model, _ = model.update(key("r"))
        self.assertEqual(model.state["count"], 0)
        self.assertIn("Counter: 0", model.view())

    def test_quit(self):
        self.assertEqual(Counter().update(key("q"))[1], Exit())
        self.assertEqual(Counter().update(KeyPress("ctrl+c", "\x03", ctrl=True))[1], Exit())

    def test_reload_rebuilds_with_same_state(self):
        model = Counter(count=4)
        reloaded, command = model.update(Reload())
        self.assertIsNot(reloaded, model)
        self.assertEqual(reloaded.state["count"], 4)
        self.assertEqual(command, NoOp())


class LayoutDemoTests(unittest.TestCase):
    def setUp(self):
        self.demo = LayoutDemo(width=80, height=24)

    def test_initial_layout(self):
        status, body = self.demo.children
        self.assertIsInstance(body, ColumnLayout)
        self.assertEqual(status.bounds.height, 4)
        self.assertEqual(body.bounds.height, 20)
        self.assertEqual([c.bounds.height for c in body.children], [4, 12, 4])

    def test_toggle_swaps_layout(self):
        toggled, _ = self.demo.update(key("t"))
        body = toggled.children[1]
        self.assertIsInstance(body, RowLayout)
        self.assertEqual([c.bounds.width for c in body.children], [20, 40, 20])
        self.assertIn("Row Layout", toggled.children[0].state["content"])

    def test_values_flow_to_boxes(self):
        bumped, _ = self.demo.update(key("+"))
        header = bumped.children[1].children[0]
        self.assertEqual(header.state["value"], 2)
        lowered, _ = LayoutDemo(width=80, height=24, left_value=0).update(key("-"))
        self.assertEqual(lowered.state["left_value"], 0)

    def test_resize(self):
        resized, _ = self.demo.update(Resize(width=100, height=30))
        self.assertEqual((resized.bounds.width, resized.bounds.height), (100, 30))

    def test_view_renders(self):
        view = self.demo.view()
        self.assertIn("Layout Demo", view)
        self.assertIn("Header", view)

    def test_quit(self):
        self.assertEqual(self.demo.update(key("q"))[1], Exit())


class TextDemoTests(unittest.TestCase):
    def test_slots(self):
        demo = TextDemo(width=80, height=36)
        self.assertIsInstance(demo.children[0], HeaderText)
        self.assertIsInstance(demo.children[2], LongText)
        self.assertEqual([c.bounds.height for c in demo.children], [4, 8, 12, 8, 4])

    def test_view_includes_header(self):
        self.assertIn("Milktea Text Component Demo", TextDemo(width=80, height=36).view())

    def test_resize_and_quit(self):
        demo = TextDemo(width=80, height=36)
        resized, _ = demo.update(Resize(width=40, height=18))
        self.assertEqual(resized.children[0].bounds.width, 40)
        self.assertEqual(demo.update(key("q"))[1], Exit())


class TickerTests(unittest.TestCase):
    def test_tick_updates_state(self):
        model = Ticker(started=100.0)
        model, command = model.update(Tick(101.5))
        self.assertEqual(model.state["last_tick"], 101.5)
        self.assertEqual(model.state["ticks"], 1)
        self.assertEqual(command, NoOp())
        self.assertIn("Ticks: 1", model.view())
        self.assertIn("Elapsed: 1.500s", model.view())

    def test_quit(self):
        self.assertEqual(Ticker().update(key("q"))[1], Exit())


if __name__ == "__main__":
    unittest.main()
