"""Debug categories, per-category flag words and the sdplane debug commands."""

from __future__ import annotations

import enum
import logging
from typing import Sequence

logger = logging.getLogger(__name__)

_ALL_BITS = 0xFFFFFFFFFFFFFFFF


class DebugCategory(enum.IntEnum):
    DEFAULT = 0
    ZCMDSH = 1
    SDPLANE = 2


class SdplaneDebug(enum.IntFlag):
    LTHREAD = 1 << 0
    CONSOLE = 1 << 1
    TAPHANDLER = 1 << 2
    L2FWD = 1 << 3
    L3FWD = 1 << 4
    VTY_SERVER = 1 << 5
    VTY_SHELL = 1 << 6
    TELNET_OPT = 1 << 7
    STAT_COLLECTOR = 1 << 8
    SCHED = 1 << 9
    VTY = 1 << 10
    PACKET = 1 << 11
    FDB = 1 << 12
    FDB_CHANGE = 1 << 13
    RCU_READ = 1 << 14
    RCU_WRITE = 1 << 15
    L2_REPEATER = 1 << 16
    THREAD = 1 << 17
    RIB = 1 << 18
    VSWITCH = 1 << 19
    ALL = 1 << 20
    RIB_MESG = 1 << 21
    RIB_CHECK = 1 << 22
    IMESSAGE = 1 << 23
    NETTLP = 1 << 24


# Command names in the order they are listed and shown.
SDPLANE_DEBUG_TYPES: tuple[tuple[SdplaneDebug, str], ...] = (
    (SdplaneDebug.LTHREAD, "lthread"),
    (SdplaneDebug.CONSOLE, "console"),
    (SdplaneDebug.TAPHANDLER, "tap-handler"),
    (SdplaneDebug.L2FWD, "l2fwd"),
    (SdplaneDebug.L3FWD, "l3fwd"),
    (SdplaneDebug.VTY_SERVER, "vty-server"),
    (SdplaneDebug.VTY_SHELL, "vty-shell"),
    (SdplaneDebug.TELNET_OPT, "telnet-opt"),
    (SdplaneDebug.STAT_COLLECTOR, "stat-collector"),
    (SdplaneDebug.SCHED, "sched"),
    (SdplaneDebug.VTY, "vty"),
    (SdplaneDebug.PACKET, "packet"),
    (SdplaneDebug.FDB, "fdb"),
    (SdplaneDebug.FDB_CHANGE, "fdb-change"),
    (SdplaneDebug.RCU_READ, "rcu-read"),
    (SdplaneDebug.RCU_WRITE, "rcu-write"),
    (SdplaneDebug.L2_REPEATER, "l2-repeater"),
    (SdplaneDebug.THREAD, "thread"),
    (SdplaneDebug.RIB, "rib"),
    (SdplaneDebug.VSWITCH, "vswitch"),
    (SdplaneDebug.ALL, "all"),
    (SdplaneDebug.RIB_MESG, "rib-message"),
    (SdplaneDebug.RIB_CHECK, "rib-check"),
    (SdplaneDebug.IMESSAGE, "internal-message"),
    (SdplaneDebug.NETTLP, "nettlp"),
)


class DebugConfig:
    """One 64-bit debug flag word per category."""

    def __init__(self) -> None:
        self._flags: dict[DebugCategory, int] = {c: 0 for c in DebugCategory}

    def __getitem__(self, category: DebugCategory) -> int:
        return self._flags[DebugCategory(category)]

    def check(self, category: DebugCategory, flag: int) -> bool:
        return bool(self._flags[DebugCategory(category)] & int(flag))

    def set(self, category: DebugCategory, flag: int) -> None:
        category = DebugCategory(category)
        self._flags[category] = (self._flags[category] | int(flag)) & _ALL_BITS

    def clear(self, category: DebugCategory, flag: int) -> None:
        category = DebugCategory(category)
        self._flags[category] &= ~int(flag) & _ALL_BITS

    def zero(self, category: DebugCategory) -> None:
        self._flags[DebugCategory(category)] = 0


def debug_sdplane_command(
    config: DebugConfig, argv: Sequence[str], newline: str = "\n"
) -> str:
    """Run ``[no] debug sdplane <name>`` against ``config``; return its output.

    An unknown name changes nothing and produces no output.
    """
    words = list(argv)
    logger.debug("debug_sdplane_command: argv: %r", words)
    negate = bool(words) and words[0] == "no"
    if negate:
        words = words[1:]
    if len(words) < 3:
        raise ValueError(f"incomplete debug command: {' '.join(argv)!r}")
    name = words[2]

    if name == "all":
        if negate:
            config.zero(DebugCategory.SDPLANE)
            return f"debug: sdplane: disable all.{newline}"
        config.set(DebugCategory.SDPLANE, _ALL_BITS)
        return f"debug: sdplane: enable all.{newline}"

    output = []
    for flag, type_name in SDPLANE_DEBUG_TYPES:
        if name != type_name:
            continue
        if negate:
            config.clear(DebugCategory.SDPLANE, flag)
            state = "disabled"
        else:
            config.set(DebugCategory.SDPLANE, flag)
            state = "enabled"
        output.append(
            f"debug: sdplane {type_name} ({int(flag):#x}): {state}.{newline}"
        )
    return "".join(output)


def show_debug_sdplane(config: DebugConfig, newline: str = "\n") -> str:
    """Return one on/off line for every sdplane debug type."""
    return "".join(
        f"debug: sdplane: {name}: "
        f"{'on' if config.check(DebugCategory.SDPLANE, flag) else 'off'}.{newline}"
        for flag, name in SDPLANE_DEBUG_TYPES
    )