"""Hot reloading of application modules by polling file modification times."""

from __future__ import annotations

import importlib
import sys
import threading
from pathlib import Path
from types import ModuleType
from typing import Any

from loguru import logger

from milktea.messages import Reload

log = logger.bind(component="reloader")


def scan_sources(app_path: Path) -> dict[Path, float]:
    """Map every ``*.py`` file under ``app_path`` to its mtime."""
    sources: dict[Path, float] = {}
    try:
        candidates = sorted(app_path.rglob("*.py"))
    except OSError:
        return sources
    for path in candidates:
        try:
            sources[path.resolve()] = path.stat().st_mtime
        except OSError:
            continue
    return sources


def _module_path(module: ModuleType) -> Path | None:
    filename = getattr(module, "__file__", None)
    if not filename:
        return None
    try:
        return Path(filename).resolve()
    except OSError:
        return None


class Reloader:
    """Watches ``app_path`` and reloads changed modules.

    Each detected change reloads the already-imported modules that live under
    ``app_path`` and enqueues a ``Reload`` message, so the root model can
    rebuild itself with ``with_state`` and pick up the new class definitions.
    """

    def __init__(self, app_path: Path | str, runtime: Any, interval: float = 0.5) -> None:
        self.app_path = Path(app_path).resolve()
        self.runtime = runtime
        self.interval = interval
        self._snapshot: dict[Path, float] = {}
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()
        self._ready = False

    @property
    def watching(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def setup(self) -> None:
        path = str(self.app_path)
        if path not in sys.path:
            sys.path.insert(0, path)
        self._ready = True
        self.snapshot()

    def snapshot(self) -> dict[Path, float]:
        self._snapshot = scan_sources(self.app_path)
        return dict(self._snapshot)

    def changed(self) -> set[Path]:
        current = scan_sources(self.app_path)
        previous = self._snapshot
        paths = {p for p, mtime in current.items() if previous.get(p) != mtime}
        paths |= set(previous) - set(current)
        self._snapshot = current
        return paths

    def app_modules(self) -> list[ModuleType]:
        modules = []
        for module in list(sys.modules.values()):
            path = _module_path(module) if module is not None else None
            if path is not None and path.is_relative_to(self.app_path):
                modules.append(module)
        return modules

    def reload(self) -> list[str]:
        if not self._ready:
            return []
        reloaded = []
        # Dependencies are imported after their importers, so reload newest first.
        for module in reversed(self.app_modules()):
            importlib.reload(module)
            reloaded.append(module.__name__)
        self.runtime.enqueue(Reload())
        log.info("reloaded {count} module(s): {names}", count=len(reloaded), names=", ".join(reloaded))
        return reloaded

    def check(self) -> bool:
        changes = self.changed()
        if not changes:
            return False
        log.debug("detected changes in {paths}", paths=sorted(str(p) for p in changes))
        self.reload()
        return True

    def start(self) -> None:
        if self.watching:
            return
        if not self._ready:
            self.setup()
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="milktea-reloader", daemon=True)
        self._thread.start()
        log.debug("watching {path}", path=str(self.app_path))

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 4)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.check()
            except Exception:
                # Half-saved files raise here; keep polling.
                log.exception("reload failed")
