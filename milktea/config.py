"""Application configuration: defaults, JSON file overrides and the runtime context."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, TextIO

from milktea.errors import ConfigError
from milktea.logging import LogConfig
from milktea.renderer import Renderer
from milktea.runtime import Runtime

ROOT_MARKERS = ("pyproject.toml", "setup.cfg", ".git")

DEFAULTS: dict[str, Any] = {
    "app_dir": "app",
    "fps": 60,
    "hot_reloading": None,
    "reload_interval": 0.5,
    "tick_interval": None,
}

LOG_KEYS = ("level", "file", "console", "rotation", "retention")


def env() -> str:
    return os.environ.get("MILKTEA_ENV") or os.environ.get("APP_ENV") or "production"


def find_root(start: Path | None = None) -> Path:
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if any((candidate / marker).exists() for marker in ROOT_MARKERS):
            return candidate
    return current


@dataclass
class Config:
    """Everything a Program needs, passed explicitly instead of living in a global.

    ``hot_reloading`` left as None means "on in the development environment".
    ``runtime`` and ``renderer`` are created on first access.
    """

    app_dir: str = "app"
    fps: int = 60
    hot_reloading: bool | None = None
    reload_interval: float = 0.5
    tick_interval: float | None = None
    output: TextIO = field(default_factory=lambda: sys.stdout)
    log: LogConfig = field(default_factory=LogConfig)
    root: Path | None = None
    _runtime: Runtime | None = field(default=None, repr=False)
    _renderer: Renderer | None = field(default=None, repr=False)

    @property
    def hot_reloading_enabled(self) -> bool:
        if self.hot_reloading is not None:
            return self.hot_reloading
        return env() == "development"

    @property
    def runtime(self) -> Runtime:
        if self._runtime is None:
            self._runtime = Runtime()
        return self._runtime

    @runtime.setter
    def runtime(self, value: Runtime) -> None:
        self._runtime = value

    @property
    def renderer(self) -> Renderer:
        if self._renderer is None:
            self._renderer = Renderer(self.output)
        return self._renderer

    @renderer.setter
    def renderer(self, value: Renderer) -> None:
        self._renderer = value

    @property
    def app_path(self) -> Path:
        app_dir = Path(self.app_dir)
        if app_dir.is_absolute():
            return app_dir
        return (self.root or find_root()) / app_dir


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"config path not found: {config_path}")

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON config: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"config must be a JSON object: {config_path}")
    return data


def _log_config(raw: Any) -> LogConfig:
    if raw is None:
        return LogConfig()
    if isinstance(raw, LogConfig):
        return raw
    if not isinstance(raw, dict):
        raise ConfigError(f"log config must be an object, got {type(raw).__name__}")
    unknown = set(raw) - set(LOG_KEYS)
    if unknown:
        raise ConfigError(f"unknown log config keys: {sorted(unknown)}")
    return LogConfig(**raw)


def resolve_config(path: str | None = None, **overrides: Any) -> Config:
    """Merge built-in defaults, an optional JSON file and keyword overrides.

    Overrides set to None are ignored, so argparse namespaces can be passed
    through without clobbering file values.
    """
    resolved = dict(DEFAULTS)
    user_config = load_user_config(path)
    known = {f.name for f in fields(Config) if not f.name.startswith("_")}

    unknown = set(user_config) - known
    if unknown:
        raise ConfigError(f"unknown config keys: {sorted(unknown)}")

    resolved.update(user_config)
    resolved.update({k: v for k, v in overrides.items() if v is not None})

    if "fps" in resolved:
        fps = int(resolved["fps"])
        if fps <= 0:
            raise ConfigError(f"fps must be positive, got {fps}")
        resolved["fps"] = fps

    interval = float(resolved["reload_interval"])
    if interval <= 0:
        raise ConfigError(f"reload_interval must be positive, got {interval}")
    resolved["reload_interval"] = interval

    if resolved.get("tick_interval") is not None:
        tick = float(resolved["tick_interval"])
        if tick <= 0:
            raise ConfigError(f"tick_interval must be positive, got {tick}")
        resolved["tick_interval"] = tick

    resolved["log"] = _log_config(resolved.get("log"))
    if resolved.get("root") is not None:
        resolved["root"] = Path(resolved["root"])

    unknown = set(resolved) - known
    if unknown:
        raise ConfigError(f"unknown config keys: {sorted(unknown)}")
    return Config(**resolved)
