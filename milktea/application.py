"""High-level bootstrap: config, hot reloading and the program in one object."""

from __future__ import annotations

import importlib
from typing import ClassVar, Union

from loguru import logger

from milktea.config import Config
from milktea.errors import ApplicationError
from milktea.logging import setup_logging, teardown_logging
from milktea.model import Model
from milktea.program import Program
from milktea.reloader import Reloader

log = logger.bind(component="application")

RootRef = Union[str, type, None]


def resolve_model_class(ref: RootRef) -> type[Model]:
    """Turn a ``"package.module:ClassName"`` reference (or a class) into a Model subclass."""
    if ref is None:
        raise ApplicationError("no root model defined; set `root = \"module:ClassName\"` on the Application")

    if isinstance(ref, type):
        target: object = ref
    else:
        module_name, sep, attr_path = str(ref).partition(":")
        if not sep or not module_name or not attr_path:
            raise ApplicationError(f"invalid root model reference {ref!r}; expected 'module:ClassName'")
        try:
            target = importlib.import_module(module_name)
        except ImportError as exc:
            raise ApplicationError(f"cannot import root model module {module_name!r}: {exc}") from exc
        for part in attr_path.split("."):
            try:
                target = getattr(target, part)
            except AttributeError as exc:
                raise ApplicationError(f"{module_name!r} has no attribute {attr_path!r}") from exc

    if not (isinstance(target, type) and issubclass(target, Model)):
        raise ApplicationError(f"root model {ref!r} is not a Model subclass")
    return target


class Application:
    """Subclass and point ``root`` at the root model::

        class Demo(Application):
            root = "demo_model:DemoModel"

        Demo.boot()

    String references are imported after ``config.app_path`` is put on
    ``sys.path``, so models can live in the application directory.
    """

    root: ClassVar[RootRef] = None

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.reloader = Reloader(self.config.app_path, self.config.runtime, self.config.reload_interval)
        self.reloader.setup()
        self.program = Program(
            self.root_model_class()(),
            runtime=self.config.runtime,
            renderer=self.config.renderer,
            fps=self.config.fps,
            tick_interval=self.config.tick_interval,
        )

    @classmethod
    def boot(cls, config: Config | None = None) -> Model:
        return cls(config).run()

    def root_model_class(self) -> type[Model]:
        return resolve_model_class(type(self).root)

    def run(self) -> Model:
        handler_ids = setup_logging(self.config.log)
        try:
            if self.config.hot_reloading_enabled:
                log.info("hot reloading enabled for {path}", path=str(self.config.app_path))
                self.reloader.start()
            return self.program.run()
        finally:
            self.reloader.stop()
            teardown_logging(handler_ids)
