"""Keyboard input handler for timer controls (POSIX terminals)."""

import codecs
import os
import select
import sys
import termios
import time
import tty
from collections import deque

_NAMED_KEYS = {
    " ": "space",
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x03": "ctrl+c",
}


def split_keys(text: str) -> list[str]:
    """
    Turn raw terminal input into normalised key names.

    Printable characters map to themselves, a few control characters map
    to names like ``enter`` or ``backspace``. A lone ESC is ``escape``;
    ESC followed by ``[`` or ``O`` starts a cursor/function-key sequence,
    which is dropped.
    """
    keys = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\x1b":
            if i + 1 < len(text) and text[i + 1] in "[O":
                i += 2
                # Sequence ends at the first byte in the 0x40-0x7e range.
                while i < len(text) and not ("@" <= text[i] <= "~"):
                    i += 1
                i += 1
                continue
            keys.append("escape")
        elif char in _NAMED_KEYS:
            keys.append(_NAMED_KEYS[char])
        elif char.isprintable():
            keys.append(char)
        i += 1
    return keys


class KeyboardHandler:
    """Reads keypresses from stdin in cbreak mode with a timeout."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.fd = self.stream.fileno()
        self.old_settings = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")
        self._pending: deque[str] = deque()
        self._eof = False
        self._setup()

    def _setup(self):
        """Switch the terminal to cbreak mode, remembering the old settings."""
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # Not a terminal (piped stdin); keys are still read as they come.
            self.old_settings = None

    def read_key(self, timeout: float) -> str | None:
        """
        Wait up to ``timeout`` seconds for a keypress.

        Returns the normalised key name, or None when nothing usable arrived.
        """
        if self._pending:
            return self._pending.popleft()
        if self._eof:
            time.sleep(max(0.0, timeout))
            return None

        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout))
        if not ready:
            return None

        data = os.read(self.fd, 64)
        if not data:
            self._eof = True
            return None
        self._pending.extend(split_keys(self._decoder.decode(data)))
        if self._pending:
            return self._pending.popleft()
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.stop()
