"""Message queue and the tick loop that folds messages through the root model."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any

from loguru import logger

from milktea.messages import Batch, Exit, NoOp, Reload, Resize
from milktea.model import Model

log = logger.bind(component="runtime")


class Runtime:
    """Drains queued messages into ``Model.update`` and tracks render/run flags.

    Any number of threads may ``enqueue``; only the driver thread calls
    ``tick``. A tick processes exactly the messages queued when it starts;
    anything enqueued while it runs (including ``Batch`` re-enqueues) waits
    for the next tick. Errors raised by ``update`` propagate to the caller.
    """

    def __init__(self) -> None:
        self._queue: deque[Any] = deque()
        self._lock = threading.Lock()
        self._running = False
        self._should_render = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def stopped(self) -> bool:
        return not self._running

    @property
    def should_render(self) -> bool:
        return self._should_render

    def start(self) -> None:
        self._running = True
        log.debug("runtime started")

    def stop(self) -> None:
        self._running = False
        log.debug("runtime stopped")

    def enqueue(self, message: Any) -> None:
        with self._lock:
            self._queue.append(message)

    def pending(self) -> int:
        with self._lock:
            return len(self._queue)

    def tick(self, model: Model) -> Model:
        with self._lock:
            drained = list(self._queue)
            self._queue.clear()

        render = False
        for message in drained:
            model, command = model.update(message)
            self._execute(command)
            if not isinstance(message, NoOp):
                render = True

        self._should_render = render
        if drained:
            log.trace("tick drained {count} message(s), render={render}", count=len(drained), render=render)
        return model

    def _execute(self, command: Any) -> None:
        if command is None or isinstance(command, NoOp):
            return
        if isinstance(command, Exit):
            log.debug("exit command received")
            self.stop()
        elif isinstance(command, Batch):
            with self._lock:
                self._queue.extend(command.messages)
        elif isinstance(command, (Reload, Resize)):
            # Informational only; application models react to them in update().
            return
        else:
            log.trace("ignoring command {command!r}", command=command)
