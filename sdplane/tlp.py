"""PCI Express transaction-layer packet headers."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import ClassVar

TLP_FMT_DW_MASK = 0x20
TLP_FMT_3DW = 0x00
TLP_FMT_4DW = 0x20

TLP_FMT_DATA_MASK = 0x40
TLP_FMT_WO_DATA = 0x00
TLP_FMT_W_DATA = 0x40

TLP_TYPE_MASK = 0x1F
TLP_TYPE_MRd = 0x00
TLP_TYPE_MRdLk = 0x01
TLP_TYPE_MWr = 0x00
TLP_TYPE_Cpl = 0x0A

TLP_TCLASS_MASK = 0x70

TLP_FLAG_MASK = 0xC000
TLP_FLAG_DIGEST_MASK = 0x8000
TLP_FLAG_EP_MASK = 0x4000

TLP_ATTR_MASK = 0x3000
TLP_ATTR_RELAX_MASK = 0x2000
TLP_ATTR_NOSNP_MASK = 0x1000

TLP_LENGTH_MASK = 0x03FF

TLP_CPL_STATUS_MASK = 0xE000
TLP_CPL_BCNT_MASK = 0x0FFF

_COMMON = struct.Struct("!BBH")
_MR_TAIL = struct.Struct("!HBB")
_CPL_TAIL = struct.Struct("!HHHBB")


class CplStatus(enum.IntEnum):
    SC = 0x0000  # successful completion
    UR = 0x2000  # unsupported request
    CRS = 0x4000  # configuration request retry status
    CA = 0x8000  # completer abort


def _need(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"truncated {what}: need {size} bytes, got {len(data)}")


def _set_bits(word: int, mask: int, on: bool) -> int:
    return word | mask if on else word & ~mask


@dataclass
class TlpHeader:
    """The common first double word; ``falen`` is held in host order."""

    fmt_type: int = 0
    tclass: int = 0
    falen: int = 0

    SIZE: ClassVar[int] = _COMMON.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "TlpHeader":
        _need(data, cls.SIZE, "tlp header")
        return cls(*_COMMON.unpack_from(data))

    def to_bytes(self) -> bytes:
        return _COMMON.pack(self.fmt_type, self.tclass, self.falen)

    def is_3dw(self) -> bool:
        return self.fmt_type & TLP_FMT_DW_MASK == TLP_FMT_3DW

    def is_4dw(self) -> bool:
        return self.fmt_type & TLP_FMT_DW_MASK == TLP_FMT_4DW

    def is_with_data(self) -> bool:
        return self.fmt_type & TLP_FMT_DATA_MASK == TLP_FMT_W_DATA

    @property
    def type(self) -> int:
        return self.fmt_type & TLP_TYPE_MASK

    def is_mrd(self) -> bool:
        return self.type == TLP_TYPE_MRd and not self.is_with_data()

    def is_mwr(self) -> bool:
        return self.type == TLP_TYPE_MWr and self.is_with_data()

    def is_cpl(self) -> bool:
        return self.type == TLP_TYPE_Cpl

    def set_fmt(self, dw: int, with_data: bool) -> None:
        """Set the format: ``dw`` is TLP_FMT_3DW or TLP_FMT_4DW."""
        data_bits = TLP_FMT_W_DATA if with_data else TLP_FMT_WO_DATA
        self.fmt_type = (
            (self.fmt_type & ~(TLP_FMT_DW_MASK | TLP_FMT_DATA_MASK))
            | (dw & TLP_FMT_DW_MASK)
            | data_bits
        )

    def set_type(self, value: int) -> None:
        self.fmt_type = (self.fmt_type & ~TLP_TYPE_MASK) | (value & TLP_TYPE_MASK)

    @property
    def traffic_class(self) -> int:
        return (self.tclass & TLP_TCLASS_MASK) >> 4

    def set_traffic_class(self, value: int) -> None:
        self.tclass = (value << 4) & TLP_TCLASS_MASK

    @property
    def digest(self) -> bool:
        return bool(self.falen & TLP_FLAG_DIGEST_MASK)

    @digest.setter
    def digest(self, on: bool) -> None:
        self.falen = _set_bits(self.falen, TLP_FLAG_DIGEST_MASK, on)

    @property
    def poisoned(self) -> bool:
        return bool(self.falen & TLP_FLAG_EP_MASK)

    @poisoned.setter
    def poisoned(self, on: bool) -> None:
        self.falen = _set_bits(self.falen, TLP_FLAG_EP_MASK, on)

    @property
    def relaxed_ordering(self) -> bool:
        return bool(self.falen & TLP_ATTR_RELAX_MASK)

    @relaxed_ordering.setter
    def relaxed_ordering(self, on: bool) -> None:
        self.falen = _set_bits(self.falen, TLP_ATTR_RELAX_MASK, on)

    @property
    def no_snoop(self) -> bool:
        return bool(self.falen & TLP_ATTR_NOSNP_MASK)

    @no_snoop.setter
    def no_snoop(self, on: bool) -> None:
        self.falen = _set_bits(self.falen, TLP_ATTR_NOSNP_MASK, on)

    @property
    def length(self) -> int:
        """Payload length in double words."""
        return self.falen & TLP_LENGTH_MASK

    def set_length(self, value: int) -> None:
        if not 0 <= value <= TLP_LENGTH_MASK:
            raise ValueError(f"tlp length out of range: {value}")
        self.falen = (self.falen & ~TLP_LENGTH_MASK) | value


@dataclass
class TlpMrHeader:
    """Memory request header: common header, requester, tag and byte enables."""

    tlp: TlpHeader = field(default_factory=TlpHeader)
    requester: int = 0
    tag: int = 0
    fstdw: int = 0
    lstdw: int = 0

    SIZE: ClassVar[int] = _COMMON.size + _MR_TAIL.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "TlpMrHeader":
        _need(data, cls.SIZE, "memory request header")
        tlp = TlpHeader.from_bytes(data)
        requester, tag, be = _MR_TAIL.unpack_from(data, _COMMON.size)
        return cls(tlp, requester, tag, be & 0x0F, be >> 4)

    def to_bytes(self) -> bytes:
        if not (0 <= self.fstdw <= 0xF and 0 <= self.lstdw <= 0xF):
            raise ValueError("byte enables must be 4-bit values")
        be = (self.lstdw << 4) | self.fstdw
        return self.tlp.to_bytes() + _MR_TAIL.pack(self.requester, self.tag, be)


@dataclass
class TlpCplHeader:
    """Completion header: completer, status and byte count, requester, tag."""

    tlp: TlpHeader = field(default_factory=TlpHeader)
    completer: int = 0
    stcnt: int = 0
    requester: int = 0
    tag: int = 0
    lowaddr: int = 0

    SIZE: ClassVar[int] = _COMMON.size + _CPL_TAIL.size

    @classmethod
    def from_bytes(cls, data: bytes) -> "TlpCplHeader":
        _need(data, cls.SIZE, "completion header")
        tlp = TlpHeader.from_bytes(data)
        return cls(tlp, *_CPL_TAIL.unpack_from(data, _COMMON.size))

    def to_bytes(self) -> bytes:
        return self.tlp.to_bytes() + _CPL_TAIL.pack(
            self.completer, self.stcnt, self.requester, self.tag, self.lowaddr
        )

    @property
    def status(self) -> int:
        return self.stcnt & TLP_CPL_STATUS_MASK

    def set_status(self, value: int) -> None:
        if value & ~TLP_CPL_STATUS_MASK:
            raise ValueError(f"invalid completion status: {value:#x}")
        self.stcnt = (self.stcnt & ~TLP_CPL_STATUS_MASK) | value

    @property
    def byte_count(self) -> int:
        return self.stcnt & TLP_CPL_BCNT_MASK

    def set_byte_count(self, value: int) -> None:
        if not 0 <= value <= TLP_CPL_BCNT_MASK:
            raise ValueError(f"byte count out of range: {value}")
        self.stcnt = (self.stcnt & ~TLP_CPL_BCNT_MASK) | value


def tlp_id_to_bus(requester_id: int) -> int:
    """Bus number of a requester/completer id."""
    return requester_id >> 8


def tlp_id_to_device(requester_id: int) -> int:
    """Device/function part of a requester/completer id."""
    return requester_id & 0x00FF