import pytest

from sdplane.debug import (
    SDPLANE_DEBUG_TYPES,
    DebugCategory,
    DebugConfig,
    SdplaneDebug,
    debug_sdplane_command,
    show_debug_sdplane,
)


def test_flag_bits_fixed_by_header():
    config = DebugConfig()
    assert debug_sdplane_command(config, ["debug", "sdplane", "packet"]) == (
        "debug: sdplane packet (0x800): enabled.\n"
    )
    assert config[DebugCategory.SDPLANE] == 1 << 11
    assert debug_sdplane_command(config, ["debug", "sdplane", "nettlp"]) == (
        "debug: sdplane nettlp (0x1000000): enabled.\n"
    )
    assert config.check(DebugCategory.SDPLANE, SdplaneDebug.NETTLP)


def test_config_set_check_clear():
    config = DebugConfig()
    assert not config.check(DebugCategory.SDPLANE, SdplaneDebug.RIB)
    config.set(DebugCategory.SDPLANE, SdplaneDebug.RIB)
    assert config.check(DebugCategory.SDPLANE, SdplaneDebug.RIB)
    assert not config.check(DebugCategory.ZCMDSH, SdplaneDebug.RIB)
    config.clear(DebugCategory.SDPLANE, SdplaneDebug.RIB)
    assert config[DebugCategory.SDPLANE] == 0


def test_config_zero():
    config = DebugConfig()
    config.set(DebugCategory.DEFAULT, SdplaneDebug.FDB | SdplaneDebug.VTY)
    config.zero(DebugCategory.DEFAULT)
    assert config[DebugCategory.DEFAULT] == 0


def test_enable_single_type():
    config = DebugConfig()
    out = debug_sdplane_command(config, ["debug", "sdplane", "lthread"])
    assert out == "debug: sdplane lthread (0x1): enabled.\n"
    assert config.check(DebugCategory.SDPLANE, SdplaneDebug.LTHREAD)
    assert not config.check(DebugCategory.SDPLANE, SdplaneDebug.CONSOLE)


def test_disable_single_type():
    config = DebugConfig()
    debug_sdplane_command(config, ["debug", "sdplane", "fdb"])
    debug_sdplane_command(config, ["debug", "sdplane", "rib"])
    out = debug_sdplane_command(config, ["no", "debug", "sdplane", "fdb"])
    assert "disabled." in out
    assert not config.check(DebugCategory.SDPLANE, SdplaneDebug.FDB)
    assert config.check(DebugCategory.SDPLANE, SdplaneDebug.RIB)


def test_enable_and_disable_all():
    config = DebugConfig()
    out = debug_sdplane_command(config, ["debug", "sdplane", "all"], "\r\n")
    assert out == "debug: sdplane: enable all.\r\n"
    assert all(config.check(DebugCategory.SDPLANE, f) for f, _ in SDPLANE_DEBUG_TYPES)
    out = debug_sdplane_command(config, ["no", "debug", "sdplane", "all"])
    assert out == "debug: sdplane: disable all.\n"
    assert config[DebugCategory.SDPLANE] == 0


def test_unknown_name_changes_nothing():
    config = DebugConfig()
    assert debug_sdplane_command(config, ["debug", "sdplane", "bogus"]) == ""
    assert config[DebugCategory.SDPLANE] == 0


def test_incomplete_command_raises():
    with pytest.raises(ValueError):
        debug_sdplane_command(DebugConfig(), ["no", "debug"])


def test_show_lists_every_type_in_order():
    config = DebugConfig()
    debug_sdplane_command(config, ["debug", "sdplane", "packet"])
    lines = show_debug_sdplane(config).splitlines()
    assert len(lines) == len(SDPLANE_DEBUG_TYPES)
    assert [line.split(": ")[2] for line in lines] == [n for _, n in SDPLANE_DEBUG_TYPES]
    assert "debug: sdplane: packet: on." in lines
    assert sum(line.endswith("on.") for line in lines) == 1