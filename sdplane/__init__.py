"""Control-plane building blocks: vectors, internal messages, debug flags,
terminal mode, telnet negotiation, packet summaries and PCIe TLP headers."""

__version__ = "0.1.0"

__all__ = [
    "vector",
    "internal_message",
    "debug",
    "termio",
    "packet_log",
    "telnet",
    "tlp",
]