"""One-line text summaries of Ethernet/IP frames for debug logging."""

from __future__ import annotations

import ipaddress
import struct

ETHER_TYPE_IPV4 = 0x0800
ETHER_TYPE_IPV6 = 0x86DD

_ETHER = struct.Struct("!6s6sH")
_IPV4 = struct.Struct("!BBHHHBBH4s4s")
_IPV6 = struct.Struct("!IHBB16s16s")


def _c_hex(value: int) -> str:
    # printf's "%#x" prints a bare 0 for zero.
    return f"{value:#x}" if value else "0"


def format_mac(data: bytes) -> str:
    """Format a 6-byte hardware address as upper-case colon-separated hex."""
    if len(data) != 6:
        raise ValueError(f"MAC address must be 6 bytes, got {len(data)}")
    return ":".join(f"{b:02X}" for b in data)


def format_ether(frame: bytes) -> str:
    """Summarise the Ethernet header at the start of ``frame``."""
    if len(frame) < _ETHER.size:
        raise ValueError("truncated ethernet header")
    dst, src, eth_type = _ETHER.unpack_from(frame)
    return (
        f"ether: type: 0x{eth_type:04x} {format_mac(src)} -> {format_mac(dst)}"
    )


def format_ipv4(data: bytes) -> str:
    """Summarise the IPv4 header at the start of ``data``."""
    if len(data) < _IPV4.size:
        raise ValueError("truncated ipv4 header")
    (ver_ihl, tos, length, packet_id, offset, ttl, proto, cksum,
     src, dst) = _IPV4.unpack_from(data)
    return (
        f"ipv4: ver_ihl: {_c_hex(ver_ihl)} tos: {tos} length: {length} "
        f"id: {packet_id} off: {offset} ttl: {ttl} proto: {proto} "
        f"cksum: {_c_hex(cksum)} "
        f"{ipaddress.IPv4Address(src)} -> {ipaddress.IPv4Address(dst)}"
    )


def format_ipv6(data: bytes) -> str:
    """Summarise the IPv6 header at the start of ``data``."""
    if len(data) < _IPV6.size:
        raise ValueError("truncated ipv6 header")
    vtc_flow, payload_len, proto, hop_limits, src, dst = _IPV6.unpack_from(data)
    return (
        f"ipv6: vtc_flow: {_c_hex(vtc_flow)} length: {payload_len} "
        f"proto: {proto} hop_limits: {hop_limits} "
        f"{ipaddress.IPv6Address(src)} -> {ipaddress.IPv6Address(dst)}"
    )


def format_packet(frame: bytes, rx_port: int, rx_queue: int) -> str:
    """Summarise a received frame: ports, Ethernet and, if present, IP header."""
    ether_str = format_ether(frame)
    (eth_type,) = struct.unpack_from("!H", frame, 12)
    payload = frame[_ETHER.size:]
    if eth_type == ETHER_TYPE_IPV4:
        ip_str = format_ipv4(payload)
    elif eth_type == ETHER_TYPE_IPV6:
        ip_str = format_ipv6(payload)
    else:
        ip_str = ""
    transport_str = ""
    payload_str = ""
    return (
        f"rx_port: {rx_port} rx_queue: {rx_queue} "
        f"{ether_str} {ip_str} {transport_str} {payload_str}"
    )