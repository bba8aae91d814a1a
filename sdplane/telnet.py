"""Telnet negotiation: command/option names, option requests and an input parser."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Telnet commands.
IAC = 255
DONT = 254
DO = 253
WONT = 252
WILL = 251
SB = 250
GA = 249
EL = 248
EC = 247
AYT = 246
AO = 245
IP = 244
BREAK = 243
DM = 242
NOP = 241
SE = 240
EOR = 239
ABORT = 238
SUSP = 237
xEOF = 236

# Telnet options.
TELOPT_BINARY = 0
TELOPT_ECHO = 1
TELOPT_SGA = 3
TELOPT_NAWS = 31
TELOPT_LINEMODE = 34

# Bytes of subnegotiation data kept; the rest is dropped.
SUBNEGO_BUFFER_SIZE = 64

# Longest subnegotiation summary, in characters.
_SUMMARY_LIMIT = 62

_COMMAND_NAMES = {
    IAC: "IAC",
    DONT: "DONT",
    DO: "DO",
    WONT: "WONT",
    WILL: "WILL",
    SB: "SB",
    GA: "GA",
    EL: "EL",
    EC: "EC",
    AYT: "AYT",
    AO: "AO",
    IP: "IP",
    BREAK: "BREAK",
    DM: "DM",
    NOP: "NOP",
    SE: "SE",
    EOR: "EOR",
    ABORT: "ABORT",
    SUSP: "SUSP",
    xEOF: "xEOF",
}

_OPTION_NAMES = {
    0: "BINARY",
    1: "ECHO",
    2: "RCP",
    3: "SGA",
    4: "NAMS",
    5: "STATUS",
    6: "TM",
    7: "RCTE",
    8: "NAOL",
    9: "NAOP",
    10: "NAOCRD",
    11: "NAOHTS",
    12: "NAOHTD",
    13: "NAOFFD",
    14: "NAOVTS",
    15: "NAOVTD",
    16: "NAOLFD",
    17: "XASCII",
    18: "LOGOUT",
    19: "BM",
    20: "DET",
    21: "SUPDUP",
    22: "SUPDUPOUTPUT",
    23: "SNDLOC",
    24: "TTYPE",
    25: "EOR",
    26: "TUID",
    27: "OUTMRK",
    28: "TTYLOC",
    29: "3270REGIME",
    30: "X3PAD",
    31: "NAWS",
    32: "TSPEED",
    33: "LFLOW",
    34: "LINEMODE",
    36: "OLD_ENVIRON",
    37: "AUTHENTICATION",
    38: "ENCRYPT",
    39: "NEW_ENVIRON",
    255: "EXOPL",
}


def telnet_command_name(code: int) -> str:
    """Name of a telnet command byte, or an empty string if unknown."""
    return _COMMAND_NAMES.get(code, "")


def telnet_option_name(code: int) -> str:
    """Name of a telnet option byte, or an empty string if unknown."""
    return _OPTION_NAMES.get(code, "")


def will_echo() -> bytes:
    """Request bytes announcing that this side will echo."""
    return bytes((IAC, WILL, TELOPT_ECHO))


def will_suppress_go_ahead() -> bytes:
    """Request bytes announcing suppression of go-ahead."""
    return bytes((IAC, WILL, TELOPT_SGA))


def dont_linemode() -> bytes:
    """Request bytes asking the peer not to use linemode."""
    return bytes((IAC, DONT, TELOPT_LINEMODE))


def do_window_size() -> bytes:
    """Request bytes asking the peer to report its window size."""
    return bytes((IAC, DO, TELOPT_NAWS))


def _hex_byte(value: int) -> str:
    # printf "%#hhx": bare 0 for zero.
    return f"{value:#x}" if value else "0"


def _hex_padded(value: int) -> str:
    # printf "%#02x": zero-padded to two digits, no prefix for zero.
    return f"{value:#x}" if value else "00"


class _State(enum.Enum):
    NORMAL = enum.auto()
    IAC = enum.auto()
    IAC_COMMAND = enum.auto()
    SUBNEGOTIATION = enum.auto()


class TelnetParser:
    """Separates telnet negotiation from user input.

    :meth:`feed` returns the ordinary input bytes. Negotiations update
    :attr:`telnet_cmd`, :attr:`telnet_opt` and, for a window-size
    subnegotiation, :attr:`width` and :attr:`height`. With ``debug`` set,
    a line for each negotiation step is appended to :attr:`messages`.
    """

    def __init__(
        self,
        on_refresh: Optional[Callable[[], None]] = None,
        debug: bool = False,
    ) -> None:
        self.on_refresh = on_refresh
        self.debug = debug
        self.telnet_cmd = 0
        self.telnet_opt = 0
        self.width = 0
        self.height = 0
        self.messages: list[str] = []
        self._subnego = bytearray()
        self._state = _State.NORMAL

    @property
    def subnegotiation(self) -> bytes:
        """Data of the current or last subnegotiation."""
        return bytes(self._subnego)

    def feed(self, data: bytes) -> bytes:
        """Process received bytes; return those that are not telnet protocol."""
        out = bytearray()
        for byte in bytes(data):
            state = self._state
            if state is _State.NORMAL:
                if byte == IAC:
                    self._iac_start()
                else:
                    out.append(byte)
            elif state is _State.IAC:
                if byte == SB:
                    self._sb_start(byte)
                elif byte == SE:
                    self._sb_end(byte)
                elif byte in (DO, WILL, DONT, WONT):
                    self._command(byte)
                else:
                    self._option(byte)
            elif state is _State.IAC_COMMAND:
                self._option(byte)
            elif byte == IAC:
                self._iac_start()
            elif len(self._subnego) < SUBNEGO_BUFFER_SIZE:
                self._subnego.append(byte)
        return bytes(out)

    def subnegotiation_summary(self) -> str:
        """One-line summary of the subnegotiation data."""
        text = "".join(
            [f"len: {len(self._subnego)} ["]
            + [f" {_hex_byte(b)}" for b in self._subnego]
            + ["]"]
        )
        return text[:_SUMMARY_LIMIT]

    def _report(self, message: str) -> None:
        logger.debug("%s", message)
        if self.debug:
            self.messages.append(message)

    def _iac_start(self) -> None:
        self._state = _State.IAC
        self.telnet_cmd = 0

    def _command(self, byte: int) -> None:
        self._state = _State.IAC_COMMAND
        self.telnet_cmd = byte

    def _option(self, byte: int) -> None:
        self._state = _State.NORMAL
        self.telnet_opt = byte
        cmd = (
            f"{telnet_command_name(self.telnet_cmd)}"
            f"({self.telnet_cmd}|{_hex_padded(self.telnet_cmd)})"
        )
        opt = (
            f"{telnet_option_name(self.telnet_opt)}"
            f"({self.telnet_opt}|{_hex_padded(self.telnet_opt)})"
        )
        self._report(f"IAC {cmd} {opt}.")

    def _sb_start(self, byte: int) -> None:
        self._state = _State.SUBNEGOTIATION
        self._subnego.clear()
        self._report(f"IAC SB ({_hex_byte(byte)}).")

    def _sb_end(self, byte: int) -> None:
        self._state = _State.NORMAL
        self._report(f"IAC SE ({_hex_byte(byte)}).")
        self._report(f"telnet_sb: {self.subnegotiation_summary()}")

        buf = self._subnego
        if buf and buf[0] == TELOPT_NAWS and len(buf) == 5:
            self.width = (buf[1] << 8) + buf[2]
            self.height = (buf[3] << 8) + buf[4]
            self._report(f"width: {self.width} height: {self.height}")

        if self.on_refresh is not None:
            self.on_refresh()