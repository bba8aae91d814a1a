# sdplane

Building blocks for the control shell of a software data plane. Each module
can be used on its own; none of them needs a third-party library.

## Modules

- `sdplane.vector` – `Vector`, an ordered collection. `add` raises
  `ValueError` for an item already present (`add_allow_dup` does not);
  `set` pads with `None` holes, which count toward the length. It offers
  linear lookup (`lookup`, `lookup_index`), binary search on a sorted vector
  (`sort`, `add_sort`, `lookup_bsearch`, `lookup_index_bsearch`, all taking
  an optional `key`), `remove`, `remove_index`, `get`, `copy`, `is_same`,
  `cap` (intersection), `catenate`, `merge`, `is_empty` and `empty_index`.
  Iterating tolerates removal of the item just yielded.
- `sdplane.internal_message` – `InternalMessage` (a type code and a content
  body, with `to_bytes` / `from_bytes` using a little-endian type/length
  header), `MessageType`, and `TxRxDesc` (port, rx and tx descriptor counts,
  with `pack` / `unpack`). `create_message` builds a message, zero-filled when
  no content is given; `send_to` puts it on a `queue.Queue` (writing a note to
  a terminal stream when the queue is `None`) and returns whether it was
  enqueued; `receive` takes the next message or returns `None`.
- `sdplane.debug` – `DebugConfig`, one 64-bit flag word per `DebugCategory`
  (`check`, `set`, `clear`, `zero`), the `SdplaneDebug` flags, and the
  handlers for `[no] debug sdplane <name>` (`debug_sdplane_command`) and
  `show debugging sdplane` (`show_debug_sdplane`), which return their output
  as text.
- `sdplane.termio` – `Termio`, which saves a terminal's settings, turns off
  canonical mode, echo and extended input processing, and restores them;
  it is also a context manager. `lflag_names` lists the local-mode flags set
  in a `c_lflag` value.
- `sdplane.packet_log` – one-line summaries of frames: `format_mac`,
  `format_ether`, `format_ipv4`, `format_ipv6` and `format_packet`.
- `sdplane.telnet` – `TelnetParser`, whose `feed` strips IAC sequences from
  received bytes and returns the rest, recording the last command and option
  and the window size from a NAWS subnegotiation; `subnegotiation_summary`
  describes the last subnegotiation. `telnet_command_name` and
  `telnet_option_name` name protocol bytes; `will_echo`,
  `will_suppress_go_ahead`, `dont_linemode` and `do_window_size` return the
  negotiation byte strings.
- `sdplane.tlp` – PCIe transaction-layer packet headers: `TlpHeader`,
  `TlpMrHeader` and `TlpCplHeader`, each with `from_bytes` / `to_bytes`,
  format, type, length, flag and attribute accessors, `CplStatus`, and
  `tlp_id_to_bus` / `tlp_id_to_device`.

## Installation

    pip install .

## Examples

```python
from sdplane.debug import DebugConfig, debug_sdplane_command, show_debug_sdplane

config = DebugConfig()
print(debug_sdplane_command(config, ["debug", "sdplane", "rib"]), end="")
# debug: sdplane rib (0x40000): enabled.
print(show_debug_sdplane(config), end="")
```

```python
from sdplane.telnet import TelnetParser

parser = TelnetParser()
rest = parser.feed(bytes([255, 250, 31, 0, 80, 0, 24, 255, 240]) + b"ls")
assert rest == b"ls"
assert (parser.width, parser.height) == (80, 24)
```

```python
from queue import Queue
from sdplane.internal_message import MessageType, TxRxDesc, create_message, send_to, receive

queue = Queue()
desc = TxRxDesc(portid=0, nb_rxd=1024, nb_txd=1024)
send_to(queue, create_message(MessageType.TXRX_DESC, desc.pack()))
message = receive(queue)
assert TxRxDesc.unpack(message.content) == desc
```

## What this package does not do

It provides no interactive shell, command parser, terminal server or command
to run. It does not drive network ports or worker threads, and it does not
send or receive packets; `packet_log` and `tlp` only read and build header
bytes that the caller supplies.

## Tests

    pip install .[test]
    pytest