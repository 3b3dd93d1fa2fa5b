from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from milktea.config import Config, env, find_root, load_user_config, resolve_config  # noqa: E402
from milktea.errors import ConfigError  # noqa: E402
from milktea.logging import LogConfig  # noqa: E402


def write_config(tmp: str, data) -> str:
    path = Path(tmp) / "milktea.json"
    path.write_text(json.dumps(data))
    return str(path)


class ResolveConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = resolve_config()
        self.assertEqual(config.app_dir, "app")
        self.assertEqual(config.fps, 60)
        self.assertIsNone(config.hot_reloading)
        self.assertIsNone(config.tick_interval)
        self.assertEqual(config.log, LogConfig())

    def test_file_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = write_config(tmp, {"fps": 30, "app_dir": "src", "log": {"level": "DEBUG", "file": "x.log"}})
            config = resolve_config(path)
        self.assertEqual(config.fps, 30)
        self.assertEqual(config.app_dir, "src")
        self.assertEqual(config.log.level, "DEBUG")
        self.assertEqual(config.log.file, "x.log")

    def test_overrides_win_and_none_is_ignored(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = write_config(tmp, {"fps": 30, "tick_interval": 2})
            config = resolve_config(path, fps=15, tick_interval=None, hot_reloading=True)
        self.assertEqual(config.fps, 15)
        self.assertEqual(config.tick_interval, 2.0)
        self.assertTrue(config.hot_reloading)

    def test_unknown_keys(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigError):
                resolve_config(write_config(tmp, {"colour": "blue"}))
            with self.assertRaises(ConfigError):
                resolve_config(write_config(tmp, {"log": {"verbose": True}}))
        with self.assertRaises(ConfigError):
            resolve_config(speed=3)

    def test_invalid_numbers(self):
        for overrides in ({"fps": 0}, {"reload_interval": 0}, {"tick_interval": -1}):
            with self.assertRaises(ConfigError):
                resolve_config(**overrides)

    def test_root_becomes_path(self):
        self.assertEqual(resolve_config(root="/srv/app").root, Path("/srv/app"))


class LoadUserConfigTests(unittest.TestCase):
    def test_no_path(self):
        self.assertEqual(load_user_config(None), {})

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_user_config("/nonexistent/milktea.json")

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.json"
            path.write_text("{not json")
            with self.assertRaises(ConfigError):
                load_user_config(str(path))

    def test_non_object(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigError):
                load_user_config(write_config(tmp, [1, 2]))

    def test_config_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigError, ValueError))


class EnvironmentTests(unittest.TestCase):
    def test_production_by_default(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(env(), "production")
            self.assertFalse(Config().hot_reloading_enabled)

    def test_milktea_env_wins(self):
        with patch.dict(os.environ, {"MILKTEA_ENV": "development", "APP_ENV": "test"}, clear=True):
            self.assertEqual(env(), "development")

    def test_app_env_fallback(self):
        with patch.dict(os.environ, {"APP_ENV": "test"}, clear=True):
            self.assertEqual(env(), "test")

    def test_hot_reloading_follows_development(self):
        with patch.dict(os.environ, {"MILKTEA_ENV": "development"}, clear=True):
            self.assertTrue(Config().hot_reloading_enabled)
            self.assertFalse(Config(hot_reloading=False).hot_reloading_enabled)
        with patch.dict(os.environ, {}, clear=True):
            self.assertTrue(Config(hot_reloading=True).hot_reloading_enabled)


class ConfigContextTests(unittest.TestCase):
    def test_app_path_relative_to_root(self):
        with tempfile.TemporaryDirectory() as tmp:
            config = Config(app_dir="app", root=Path(tmp))
            self.assertEqual(config.app_path, Path(tmp) / "app")

    def test_absolute_app_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(Config(app_dir=tmp).app_path, Path(tmp))

    def test_find_root_walks_up(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "pyproject.toml").write_text("")
            nested = root / "a" / "b"
            nested.mkdir(parents=True)
            self.assertEqual(find_root(nested), root)

    def test_runtime_and_renderer_are_created_once(self):
        buffer = io.StringIO()
        config = Config(output=buffer)
        self.assertIs(config.runtime, config.runtime)
        self.assertIs(config.renderer, config.renderer)
        self.assertIs(config.renderer.output, buffer)


if __name__ == "__main__":
    unittest.main()
