"""milktea: an Elm-style Model/Update/View runtime for terminal applications."""

from __future__ import annotations

from loguru import logger

from milktea.application import Application
from milktea.bounds import Bounds
from milktea.components.box import Box
from milktea.components.text import Text
from milktea.config import Config, resolve_config
from milktea.container import Container
from milktea.errors import (
    ApplicationError,
    ConfigError,
    InvalidChildTypeError,
    MethodNotFoundError,
    MilkteaError,
)
from milktea.layout import COLUMN, ROW
from milktea.messages import Batch, Command, Exit, KeyPress, Message, NoOp, Reload, Resize, Tick
from milktea.model import Child, Model, child
from milktea.program import Program
from milktea.renderer import Renderer
from milktea.runtime import Runtime

logger.disable("milktea")

__all__ = [
    "Application",
    "ApplicationError",
    "Batch",
    "Bounds",
    "Box",
    "COLUMN",
    "Child",
    "Command",
    "Config",
    "ConfigError",
    "Container",
    "Exit",
    "InvalidChildTypeError",
    "KeyPress",
    "Message",
    "MethodNotFoundError",
    "MilkteaError",
    "Model",
    "NoOp",
    "Program",
    "ROW",
    "Reload",
    "Renderer",
    "Resize",
    "Runtime",
    "Text",
    "Tick",
    "child",
    "resolve_config",
]
