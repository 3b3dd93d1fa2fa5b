"""Fixed-rate driver loop: tick the runtime, render when due."""

from __future__ import annotations

import time
from typing import Any, TextIO

from loguru import logger

from milktea.keyboard import KeyReader
from milktea.messages import Resize, Tick
from milktea.model import Model
from milktea.renderer import Renderer
from milktea.runtime import Runtime

log = logger.bind(component="program")

FPS = 60


class Program:
    """Owns the root model and drives it at ``fps`` frames per second.

    The driver thread is the only caller of ``Runtime.tick``. Keyboard input
    arrives from the ``KeyReader`` thread through the runtime queue.
    """

    def __init__(
        self,
        model: Model,
        runtime: Runtime | None = None,
        renderer: Renderer | None = None,
        output: TextIO | None = None,
        fps: int = FPS,
        tick_interval: float | None = None,
        key_reader: Any | None = None,
    ) -> None:
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self._model = model
        self.runtime = runtime or Runtime()
        self.renderer = renderer or Renderer(output)
        self.refresh_interval = 1.0 / fps
        self.tick_interval = tick_interval
        self.key_reader = key_reader if key_reader is not None else KeyReader(self.runtime)
        self._last_size: tuple[int, int] | None = None
        self._last_tick: float | None = None

    @property
    def model(self) -> Model:
        return self._model

    @property
    def running(self) -> bool:
        return self.runtime.running

    def stop(self) -> None:
        self.runtime.stop()

    def run(self) -> Model:
        self.runtime.start()
        log.info("program started with {model}", model=type(self._model).__name__)
        try:
            self.renderer.setup_screen()
            self.renderer.render(self._model)
            self._last_size = self.renderer.size
            self.key_reader.start()
            next_frame = time.monotonic()
            while self.running:
                self.process_messages()
                next_frame += self.refresh_interval
                delay = next_frame - time.monotonic()
                if delay > 0:
                    time.sleep(delay)
                else:
                    next_frame = time.monotonic()
        except KeyboardInterrupt:
            self.stop()
        finally:
            self.key_reader.stop()
            self.renderer.restore_screen()
            log.info("program stopped")
        return self._model

    def process_messages(self) -> None:
        self._enqueue_resize()
        self._enqueue_tick()
        self._model = self.runtime.tick(self._model)
        if self.runtime.should_render:
            self.renderer.render(self._model)

    def _enqueue_resize(self) -> None:
        size = self.renderer.size
        if self._last_size is not None and size != self._last_size:
            log.debug("terminal resized to {width}x{height}", width=size[0], height=size[1])
            self.runtime.enqueue(Resize(width=size[0], height=size[1]))
        self._last_size = size

    def _enqueue_tick(self) -> None:
        if self.tick_interval is None:
            return
        now = time.time()
        if self._last_tick is None or now - self._last_tick >= self.tick_interval:
            self._last_tick = now
            self.runtime.enqueue(Tick(timestamp=now))
