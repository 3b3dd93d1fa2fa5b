from __future__ import annotations

import io
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from rich.console import Console  # noqa: E402

from milktea.messages import Exit, KeyPress, NoOp, Resize, Tick  # noqa: E402
from milktea.model import Model  # noqa: E402
from milktea.program import Program  # noqa: E402
from milktea.renderer import Renderer  # noqa: E402


class Log(Model):
    def default_state(self):
        return {"seen": ()}

    def update(self, message):
        updated = self.with_state(seen=self.state["seen"] + (message,))
        if message == KeyPress("q"):
            return updated, Exit()
        return updated, NoOp()

    def view(self):
        return f"seen={len(self.state['seen'])}"


class Interrupting(Model):
    def update(self, message):
        raise KeyboardInterrupt

    def view(self):
        return "interrupting"


class FakeKeys:
    def __init__(self):
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True
        return True

    def stop(self):
        self.stopped = True


class FakeRenderer:
    def __init__(self, size=(80, 24)):
        self.size = size
        self.frames: list[str] = []
        self.setup = False
        self.restored = False

    def setup_screen(self):
        self.setup = True

    def render(self, model):
        self.frames.append(model.view())

    def restore_screen(self):
        self.restored = True


def terminal(buffer: io.StringIO) -> Console:
    return Console(file=buffer, force_terminal=True, width=40, height=10, legacy_windows=False)


class RendererTests(unittest.TestCase):
    def test_render_clears_then_writes_view(self):
        buffer = io.StringIO()
        Renderer(console=terminal(buffer)).render(Log())
        out = buffer.getvalue()
        self.assertIn("\x1b[2J", out)
        self.assertTrue(out.endswith("seen=0"))
        self.assertLess(out.index("\x1b[2J"), out.index("seen=0"))

    def test_setup_hides_and_restore_shows_cursor(self):
        buffer = io.StringIO()
        renderer = Renderer(console=terminal(buffer))
        renderer.setup_screen()
        self.assertIn("\x1b[?25l", buffer.getvalue())
        renderer.restore_screen()
        self.assertTrue(buffer.getvalue().endswith("\x1b[?25h"))

    def test_size_and_output(self):
        buffer = io.StringIO()
        renderer = Renderer(console=terminal(buffer))
        self.assertEqual(renderer.size, (40, 10))
        self.assertIs(renderer.output, buffer)

    def test_plain_output_writes_view(self):
        buffer = io.StringIO()
        Renderer(buffer).render(Log())
        self.assertIn("seen=0", buffer.getvalue())


class ProcessMessagesTests(unittest.TestCase):
    def setUp(self):
        self.renderer = FakeRenderer()
        self.program = Program(Log(), renderer=self.renderer, key_reader=FakeKeys())

    def test_no_messages_no_render(self):
        self.program.process_messages()
        self.assertEqual(self.renderer.frames, [])

    def test_renders_after_message(self):
        self.program.runtime.enqueue(KeyPress("a"))
        self.program.process_messages()
        self.assertEqual(self.renderer.frames, ["seen=1"])
        self.assertEqual(self.program.model.state["seen"], (KeyPress("a"),))

    def test_noop_does_not_render(self):
        self.program.runtime.enqueue(NoOp())
        self.program.process_messages()
        self.assertEqual(self.renderer.frames, [])

    def test_resize_is_detected(self):
        self.program.process_messages()
        self.renderer.size = (100, 30)
        self.program.process_messages()
        self.assertEqual(self.program.model.state["seen"], (Resize(width=100, height=30),))
        self.program.process_messages()
        self.assertEqual(len(self.program.model.state["seen"]), 1)

    def test_tick_interval_enqueues_ticks(self):
        program = Program(Log(), renderer=self.renderer, key_reader=FakeKeys(), tick_interval=3600)
        program.process_messages()
        program.process_messages()
        seen = program.model.state["seen"]
        self.assertEqual(len(seen), 1)
        self.assertIsInstance(seen[0], Tick)
        self.assertGreater(seen[0].timestamp, 0)

    def test_rejects_non_positive_fps(self):
        with self.assertRaises(ValueError):
            Program(Log(), renderer=self.renderer, key_reader=FakeKeys(), fps=0)


class RunTests(unittest.TestCase):
    def test_run_until_exit(self):
        renderer = FakeRenderer()
        keys = FakeKeys()
        program = Program(Log(), renderer=renderer, key_reader=keys, fps=1000)
        program.runtime.enqueue(KeyPress("a"))
        program.runtime.enqueue(KeyPress("q"))

        model = program.run()

        self.assertEqual(model.state["seen"], (KeyPress("a"), KeyPress("q")))
        self.assertIs(model, program.model)
        self.assertFalse(program.running)
        self.assertTrue(renderer.setup and renderer.restored)
        self.assertTrue(keys.started and keys.stopped)
        self.assertEqual(renderer.frames, ["seen=0", "seen=2"])

    def test_keyboard_interrupt_stops_cleanly(self):
        renderer = FakeRenderer()
        keys = FakeKeys()
        program = Program(Interrupting(), renderer=renderer, key_reader=keys, fps=1000)
        program.runtime.enqueue(KeyPress("x"))

        program.run()

        self.assertFalse(program.running)
        self.assertTrue(renderer.restored)
        self.assertTrue(keys.stopped)

    def test_update_errors_propagate_after_cleanup(self):
        class Broken(Model):
            def update(self, message):
                raise RuntimeError("bad update")

            def view(self):
                return ""

        renderer = FakeRenderer()
        program = Program(Broken(), renderer=renderer, key_reader=FakeKeys(), fps=1000)
        program.runtime.enqueue(KeyPress("x"))
        with self.assertRaises(RuntimeError):
            program.run()
        self.assertTrue(renderer.restored)


if __name__ == "__main__":
    unittest.main()
