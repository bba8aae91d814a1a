"""Typed messages passed between internal workers over queues."""

from __future__ import annotations

import enum
import logging
import struct
from dataclasses import dataclass
from queue import Empty, Full, Queue
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

_HEADER = struct.Struct("<HH")
_TXRX_DESC = struct.Struct("<HHH")
_MAX_CONTENT = 0xFFFF - _HEADER.size


class MessageType(enum.IntEnum):
    NONE = 0
    QCONF = 1
    ETH_LINK = 2
    PORT_STATUS = 3
    NETTLP_SEND_DMA_WRITE = 4
    NETTLP_SEND_DMA_READ = 5
    QCONF2 = 6
    TXRX_DESC = 7


@dataclass
class InternalMessage:
    """A message: a type code and a content body."""

    type: int
    content: bytes = b""

    @property
    def length(self) -> int:
        """Length of the content, not counting the header."""
        return len(self.content)

    def to_bytes(self) -> bytes:
        return _HEADER.pack(self.type, self.length) + self.content

    @classmethod
    def from_bytes(cls, data: bytes) -> "InternalMessage":
        if len(data) < _HEADER.size:
            raise ValueError("truncated message header")
        msg_type, length = _HEADER.unpack_from(data)
        body = bytes(data[_HEADER.size:_HEADER.size + length])
        if len(body) != length:
            raise ValueError(
                f"truncated message body: expected {length}, got {len(body)}"
            )
        try:
            msg_type = MessageType(msg_type)
        except ValueError:
            pass
        return cls(msg_type, body)


@dataclass(frozen=True)
class TxRxDesc:
    """Per-port rx/tx descriptor counts."""

    portid: int
    nb_rxd: int
    nb_txd: int

    def pack(self) -> bytes:
        return _TXRX_DESC.pack(self.portid, self.nb_rxd, self.nb_txd)

    @classmethod
    def unpack(cls, data: bytes) -> "TxRxDesc":
        if len(data) < _TXRX_DESC.size:
            raise ValueError("truncated txrx descriptor")
        return cls(*_TXRX_DESC.unpack_from(data))


def create_message(
    msg_type: int,
    content: Optional[bytes] = None,
    length: Optional[int] = None,
) -> InternalMessage:
    """Build a message whose body is ``length`` bytes of ``content``.

    With no content the body is zero-filled; with no length the whole
    content is used.
    """
    if length is None:
        length = len(content) if content is not None else 0
    if length < 0 or length > _MAX_CONTENT:
        raise ValueError(f"message content length out of range: {length}")
    if content is None:
        body = bytes(length)
    else:
        if len(content) < length:
            raise ValueError(
                f"content shorter than length: {len(content)} < {length}"
            )
        body = bytes(content[:length])
    return InternalMessage(msg_type, body)


def send_to(
    queue: Optional[Queue],
    message: InternalMessage,
    terminal: Optional[TextIO] = None,
) -> bool:
    """Enqueue ``message``; report on ``terminal`` if there is no queue.

    Returns True if the message was enqueued.
    """
    tag = f"{id(message):#x}"
    if queue is None:
        if terminal is not None:
            terminal.write(f"can't send message {tag} to ring-queue: NULL.\n")
        logger.debug("can't send message %s. ring-queue: NULL", tag)
        return False
    logger.debug("sending message %s.", tag)
    try:
        queue.put_nowait(message)
    except Full:
        logger.debug("ring-queue full, message %s dropped.", tag)
        return False
    return True


def receive(queue: Optional[Queue]) -> Optional[InternalMessage]:
    """Take the next message from ``queue``, or None if there is none."""
    if queue is None:
        return None
    try:
        message = queue.get_nowait()
    except Empty:
        return None
    logger.debug("receiving message %#x.", id(message))
    return message