"""Raw keyboard input: decodes terminal bytes into KeyPress messages."""

from __future__ import annotations

import codecs
import os
import select
import sys
import threading
from typing import Any, TextIO

from loguru import logger

from milktea.messages import KeyPress

log = logger.bind(component="keyboard")

ESC = "\x1b"

ESCAPE_SEQUENCES = {
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "[H": "home",
    "[F": "end",
    "OA": "up",
    "OB": "down",
    "OC": "right",
    "OD": "left",
    "OH": "home",
    "OF": "end",
    "OP": "f1",
    "OQ": "f2",
    "OR": "f3",
    "OS": "f4",
    "[1~": "home",
    "[2~": "insert",
    "[3~": "delete",
    "[4~": "end",
    "[5~": "page_up",
    "[6~": "page_down",
    "[15~": "f5",
    "[17~": "f6",
    "[18~": "f7",
    "[19~": "f8",
    "[20~": "f9",
    "[21~": "f10",
    "[23~": "f11",
    "[24~": "f12",
    "[Z": "shift+tab",
}

CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    " ": "space",
}

UNKNOWN = "unknown"

# xterm modifier parameter is 1 + bitmask.
MOD_SHIFT = 1
MOD_ALT = 2
MOD_CTRL = 4


def _control_letter(ch: str) -> str | None:
    code = ord(ch)
    if 1 <= code <= 26:
        return chr(code + ord("a") - 1)
    return None


def _decode_plain(ch: str, alt: bool = False) -> KeyPress:
    prefix = "alt+" if alt else ""
    if ch in CONTROL_KEYS:
        return KeyPress(key=prefix + CONTROL_KEYS[ch], value=ch, alt=alt)
    letter = _control_letter(ch)
    if letter is not None:
        return KeyPress(key=f"{prefix}ctrl+{letter}", value=ch, ctrl=True, alt=alt)
    return KeyPress(key=prefix + ch, value=ch, alt=alt, shift=ch.isalpha() and ch.isupper())


def _csi_length(rest: str) -> int | None:
    """Length of the CSI sequence at the start of ``rest`` (which begins with ``[``).

    Parameter bytes 0x30-0x3F, then intermediate bytes 0x20-0x2F, then one
    final byte 0x40-0x7E. Returns None when the input ends mid-sequence and
    0 when the bytes after ``[`` cannot form a sequence.
    """
    i = 1
    while i < len(rest) and "\x30" <= rest[i] <= "\x3f":
        i += 1
    while i < len(rest) and "\x20" <= rest[i] <= "\x2f":
        i += 1
    if i == len(rest):
        return None
    if "\x40" <= rest[i] <= "\x7e":
        return i + 1
    return 0


def _sequence_key(seq: str) -> KeyPress:
    """Name an escape sequence (without the leading ESC), modifiers included."""
    value = ESC + seq
    name = ESCAPE_SEQUENCES.get(seq)
    if name is not None:
        return KeyPress(key=name, value=value, shift=name == "shift+tab")

    params, final = seq[1:-1], seq[-1]
    if seq[0] != "[" or ";" not in params:
        return KeyPress(key=UNKNOWN, value=value)
    base, _, modifier = params.partition(";")
    name = ESCAPE_SEQUENCES.get(f"[{base}~" if final == "~" else f"[{final}")
    if name is None or not modifier.isdigit() or int(modifier) < 2:
        return KeyPress(key=UNKNOWN, value=value)

    bits = int(modifier) - 1
    ctrl, alt, shift = bool(bits & MOD_CTRL), bool(bits & MOD_ALT), bool(bits & MOD_SHIFT)
    prefix = "".join(p for p, on in (("ctrl+", ctrl), ("alt+", alt), ("shift+", shift)) if on)
    return KeyPress(key=prefix + name, value=value, ctrl=ctrl, alt=alt, shift=shift)


def split_keys(data: str, final: bool = True) -> tuple[list[KeyPress], str]:
    """Decode ``data`` and return the key presses plus any undecoded tail.

    With ``final`` False an escape sequence cut off at the end of ``data`` is
    returned as the tail so the caller can prepend it to the next chunk. With
    ``final`` True the whole input is consumed: a trailing lone ESC is Escape.
    """
    keys: list[KeyPress] = []
    i = 0
    while i < len(data):
        ch = data[i]
        if ch != ESC:
            keys.append(_decode_plain(ch))
            i += 1
            continue

        rest = data[i + 1:]
        if not rest:
            if not final:
                return keys, data[i:]
            keys.append(KeyPress(key="escape", value=ESC))
            i += 1
            continue

        if rest[0] == "[":
            length = _csi_length(rest)
            if length is None and not final:
                return keys, data[i:]
            if length is None:
                length = len(rest)
            if length:
                keys.append(_sequence_key(rest[:length]) if length > 1 else _decode_plain("[", alt=True))
                i += 1 + length
                continue
        elif rest[0] == "O":
            if len(rest) == 1 and not final:
                return keys, data[i:]
            if len(rest) > 1:
                keys.append(_sequence_key(rest[:2]))
                i += 3
                continue

        if rest[0] == ESC:
            keys.append(KeyPress(key="escape", value=ESC))
            i += 1
            continue

        keys.append(_decode_plain(rest[0], alt=True))
        i += 2
    return keys, ""


def decode_keys(data: str) -> list[KeyPress]:
    """Split a complete chunk of terminal input into key presses.

    Recognizes CSI/SS3 sequences (named when known, with xterm modifiers,
    ``unknown`` otherwise), Alt+key (ESC prefix), Ctrl+letter and printable
    characters. A lone ESC at the end of the chunk is Escape.
    """
    return split_keys(data, final=True)[0]


class KeyReader:
    """Background thread feeding key presses into a runtime queue.

    Uses termios non-canonical mode (ICANON/ECHO off, VMIN=0/VTIME=0) rather
    than full raw mode, so Ctrl+C still raises KeyboardInterrupt in the main
    thread. Settings are restored on ``stop``.
    """

    def __init__(self, runtime: Any, stream: TextIO | None = None, poll_interval: float = 0.01) -> None:
        self.runtime = runtime
        self.stream = stream or sys.stdin
        self.poll_interval = poll_interval
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()
        self._old_settings: list[Any] | None = None
        self._fd: int | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""

    @property
    def active(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        if self.active:
            return True
        try:
            fd = self.stream.fileno()
        except (AttributeError, OSError, ValueError):
            log.info("input stream has no file descriptor; keyboard input disabled")
            return False
        if not os.isatty(fd):
            log.info("input stream is not a TTY; keyboard input disabled")
            return False

        self._enter_cbreak(fd)
        self._fd = fd
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="milktea-keys", daemon=True)
        self._thread.start()
        log.debug("key reader started on fd {fd}", fd=fd)
        return True

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
        self._restore()

    def poll(self) -> list[KeyPress]:
        """Read whatever input is available right now without blocking."""
        if self._fd is None:
            return []
        ready, _, _ = select.select([self._fd], [], [], 0)
        if not ready:
            return self._flush()
        try:
            raw = os.read(self._fd, 64)
        except OSError:
            return []
        if not raw:
            return self._flush()
        # Multibyte characters and escape sequences may straddle reads.
        text = self._pending + self._decoder.decode(raw)
        keys, self._pending = split_keys(text, final=False)
        return keys

    def _flush(self) -> list[KeyPress]:
        """Nothing more arrived, so a held-back ESC prefix was a real key."""
        if not self._pending:
            return []
        keys, _ = split_keys(self._pending, final=True)
        self._pending = ""
        return keys

    def _run(self) -> None:
        while not self._stop.is_set():
            for key in self.poll():
                self.runtime.enqueue(key)
            self._stop.wait(self.poll_interval)

    def _enter_cbreak(self, fd: int) -> None:
        import termios

        self._old_settings = termios.tcgetattr(fd)
        new = termios.tcgetattr(fd)
        new[3] &= ~(termios.ICANON | termios.ECHO)
        new[6][termios.VMIN] = 0
        new[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSADRAIN, new)

    def _restore(self) -> None:
        if self._old_settings is None or self._fd is None:
            return
        import termios

        termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)
        self._old_settings = None
        self._fd = None
