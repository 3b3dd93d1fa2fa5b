"""Thin entrypoint for ``python -m milktea``."""

from __future__ import annotations

from milktea.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
