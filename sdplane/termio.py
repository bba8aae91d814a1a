"""Switching the controlling terminal in and out of raw-ish input mode."""

from __future__ import annotations

import logging
import termios
from typing import Optional

logger = logging.getLogger(__name__)

_LFLAG_NAMES = (
    "ECHOKE",
    "ECHOE",
    "ECHO",
    "ECHONL",
    "ECHOPRT",
    "ECHOCTL",
    "ISIG",
    "ICANON",
    "ALTWERASE",
    "IEXTEN",
    "EXTPROC",
    "TOSTOP",
    "FLUSHO",
    "NOKERNINFO",
    "PENDIN",
    "NOFLSH",
)

# Only the flags this platform defines.
_LFLAGS = tuple(
    (name, getattr(termios, name))
    for name in _LFLAG_NAMES
    if hasattr(termios, name)
)

_LFLAG_INDEX = 3


def lflag_names(c_lflag: int) -> list[str]:
    """Names of the local-mode flags set in ``c_lflag``, in a fixed order."""
    return [name for name, value in _LFLAGS if c_lflag & value]


class Termio:
    """Saves a terminal's settings, turns off canonical mode and echo, restores.

    Usable as a context manager: entering calls :meth:`init`, leaving
    calls :meth:`finish`.
    """

    def __init__(self, fd: int = 0) -> None:
        self.fd = fd
        self._old: Optional[list] = None
        self._new: Optional[list] = None

    def init(self) -> None:
        """Save the current settings and switch to non-canonical, no-echo input."""
        self._old = termios.tcgetattr(self.fd)
        logger.debug("termios_old: c_lflag: %s", lflag_names(self._old[_LFLAG_INDEX]))
        new = [list(v) if isinstance(v, list) else v for v in self._old]
        new[_LFLAG_INDEX] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN)
        self._new = new
        self.start()

    def start(self) -> None:
        """Apply the modified settings."""
        if self._new is None:
            raise RuntimeError("terminal settings not initialised")
        logger.debug("termios_new: c_lflag: %s", lflag_names(self._new[_LFLAG_INDEX]))
        termios.tcsetattr(self.fd, termios.TCSANOW, self._new)

    def reset(self) -> None:
        """Restore the saved settings."""
        if self._old is None:
            raise RuntimeError("terminal settings not initialised")
        logger.debug("termios_old: c_lflag: %s", lflag_names(self._old[_LFLAG_INDEX]))
        termios.tcsetattr(self.fd, termios.TCSANOW, self._old)

    def finish(self) -> None:
        self.reset()

    def __enter__(self) -> "Termio":
        self.init()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finish()