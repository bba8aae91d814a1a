import pytest

from sdplane.tlp import (
    TLP_FMT_3DW,
    TLP_FMT_4DW,
    TLP_FMT_W_DATA,
    TLP_TYPE_Cpl,
    TLP_TYPE_MRd,
    CplStatus,
    TlpCplHeader,
    TlpHeader,
    TlpMrHeader,
    tlp_id_to_bus,
    tlp_id_to_device,
)


def test_parse_memory_write():
    header = TlpHeader.from_bytes(b"\x40\x00\x00\x01")
    assert header.is_mwr()
    assert header.is_3dw()
    assert header.is_with_data()
    assert not header.is_mrd()
    assert not header.is_cpl()
    assert header.length == 1


def test_parse_memory_read_4dw():
    header = TlpHeader.from_bytes(bytes([TLP_FMT_4DW | TLP_TYPE_MRd, 0, 0, 4]))
    assert header.is_mrd()
    assert header.is_4dw()
    assert not header.is_3dw()
    assert not header.is_mwr()
    assert header.length == 4


def test_header_round_trip():
    data = bytes([0x4A, 0x30, 0xF3, 0xFF])
    assert TlpHeader.from_bytes(data).to_bytes() == data


def test_set_fmt_and_type_make_completion_with_data():
    header = TlpHeader()
    header.set_fmt(TLP_FMT_3DW, True)
    header.set_type(TLP_TYPE_Cpl)
    assert header.is_cpl()
    assert header.is_with_data()
    assert header.fmt_type == TLP_FMT_W_DATA | TLP_TYPE_Cpl


def test_set_fmt_keeps_type():
    header = TlpHeader(fmt_type=TLP_TYPE_Cpl)
    header.set_fmt(TLP_FMT_4DW, False)
    assert header.is_4dw()
    assert not header.is_with_data()
    assert header.type == TLP_TYPE_Cpl


def test_set_length_keeps_flags():
    header = TlpHeader()
    header.digest = True
    header.no_snoop = True
    header.set_length(0x3FF)
    assert header.length == 0x3FF
    assert header.digest
    assert header.no_snoop
    assert not header.poisoned
    assert not header.relaxed_ordering


def test_set_length_out_of_range():
    with pytest.raises(ValueError):
        TlpHeader().set_length(0x400)


def test_flag_setters_toggle():
    header = TlpHeader()
    header.poisoned = True
    header.relaxed_ordering = True
    assert header.poisoned and header.relaxed_ordering
    header.poisoned = False
    assert not header.poisoned
    assert header.relaxed_ordering


def test_traffic_class_round_trip():
    header = TlpHeader()
    for value in range(8):
        header.set_traffic_class(value)
        assert header.traffic_class == value


def test_truncated_header_rejected():
    with pytest.raises(ValueError):
        TlpHeader.from_bytes(b"\x40\x00")
    with pytest.raises(ValueError):
        TlpMrHeader.from_bytes(b"\x40\x00\x00\x01\x00")
    with pytest.raises(ValueError):
        TlpCplHeader.from_bytes(bytes(8))


def test_memory_request_header_byte_enables():
    data = b"\x40\x00\x00\x01\x01\x02\x07\x0f"
    header = TlpMrHeader.from_bytes(data)
    assert header.fstdw == 0x0F
    assert header.lstdw == 0
    assert header.tag == 7
    assert header.requester == 0x0102
    assert header.to_bytes() == data


def test_memory_request_round_trip_from_fields():
    header = TlpMrHeader(TlpHeader(), requester=0xABCD, tag=9, fstdw=3, lstdw=12)
    parsed = TlpMrHeader.from_bytes(header.to_bytes())
    assert parsed == header


def test_memory_request_rejects_wide_byte_enable():
    with pytest.raises(ValueError):
        TlpMrHeader(fstdw=0x10).to_bytes()


def test_requester_id_parts():
    assert tlp_id_to_bus(0x0102) == 1
    assert tlp_id_to_device(0x0102) == 2


def test_completion_status_and_byte_count():
    header = TlpCplHeader()
    header.set_byte_count(0x0FFF)
    header.set_status(CplStatus.CA)
    assert header.status == CplStatus.CA
    assert header.byte_count == 0x0FFF
    header.set_status(CplStatus.SC)
    assert header.status == CplStatus.SC
    assert header.byte_count == 0x0FFF


def test_completion_rejects_bad_values():
    header = TlpCplHeader()
    with pytest.raises(ValueError):
        header.set_byte_count(0x1000)
    with pytest.raises(ValueError):
        header.set_status(0x0001)


def test_completion_round_trip():
    header = TlpCplHeader(
        TlpHeader(fmt_type=TLP_FMT_W_DATA | TLP_TYPE_Cpl, falen=2),
        completer=0x0100,
        requester=0x0200,
        tag=5,
        lowaddr=0x10,
    )
    header.set_status(CplStatus.UR)
    header.set_byte_count(8)
    parsed = TlpCplHeader.from_bytes(header.to_bytes())
    assert parsed == header
    assert parsed.tlp.is_cpl()
    assert len(header.to_bytes()) == TlpCplHeader.SIZE