"""Ambient terminal size provider."""

from __future__ import annotations

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=1)
def get_console() -> Console:
    return Console()


def screen_size() -> tuple[int, int]:
    # Console.size is re-read on every access, so a cached console still tracks resizes.
    size = get_console().size
    return size.width, size.height
