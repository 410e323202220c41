# trackerkit

Building blocks for BitTorrent trackers, in pure Python with no
dependencies beyond the standard library:

- **`trackerkit.udp_protocol`** – encoding and parsing of the UDP tracker
  protocol: connect, announce and scrape requests; connect, announce,
  scrape and error responses, with IPv4 or IPv6 peer lists.
- **`trackerkit.udp_load_test.common`** – the bookkeeping types of a UDP
  tracker load tester: per-worker and shared, thread-safe statistics, and
  simulated peers.
- **`trackerkit.ws`** – connection metadata and swarm peer selection for a
  WebTorrent (WebSocket) tracker.

Python 3.11 or later is required.

## The UDP protocol

`trackerkit.udp_protocol.common` holds the primitive types: `InfoHash` and
`PeerId` (each exactly 20 bytes), `ResponsePeer` (raw IPv4 or IPv6 address
bytes plus a port, with `to_bytes()` and `ResponsePeer.from_bytes()`), the
big-endian readers `read_i32`, `read_i64`, `read_u16` and `read_u32`, and
`InvalidDataError`, raised for bytes that cannot be decoded.

Requests live in `trackerkit.udp_protocol.request`. Each of
`ConnectRequest`, `AnnounceRequest` and `ScrapeRequest` turns itself into
bytes with `to_bytes()`, and `parse_request` turns a datagram back into one
of them:

```python
from trackerkit.udp_protocol.request import ConnectRequest, parse_request

packet = ConnectRequest(transaction_id=42).to_bytes()
assert parse_request(packet, 255) == ConnectRequest(transaction_id=42)
```

`parse_request(data, max_scrape_torrents)` raises `RequestParseError` for a
datagram it cannot accept: one too short to hold an action, an unknown
action, a connect request without the protocol identifier, an announce with
port 0 or an event outside 0–3, a scrape without any info hashes, or a
scrape whose info hash list is not a whole number of 20-byte hashes. When
the connection and transaction ids could be read, the error's `sendable`
property is true and it carries `connection_id` and `transaction_id`, so an
error response can be sent back. Scrape requests keep at most
`max_scrape_torrents` info hashes.

`AnnounceEvent` maps to and from its wire value with `wire_value()` and
`AnnounceEvent.from_wire()`; unknown wire values read as `AnnounceEvent.NONE`.

Responses live in `trackerkit.udp_protocol.response`: `ConnectResponse`,
`AnnounceResponse` (with `AnnounceResponse.empty()`), `ScrapeResponse` with
`TorrentScrapeStatistics` entries, and `ErrorResponse`. Each has
`to_bytes()`, and `parse_response(data, ipv4)` reads them back; `ipv4`
chooses between 4-byte and 16-byte peer addresses in announce responses.
Malformed responses raise `InvalidDataError`; error messages that are not
valid UTF-8 are decoded with replacement characters.

```python
from trackerkit.udp_protocol.response import ConnectResponse, parse_response

datagram = ConnectResponse(transaction_id=7, connection_id=12345).to_bytes()
assert parse_response(datagram, True) == ConnectResponse(7, 12345)
```

## Load-test bookkeeping

`trackerkit.udp_load_test.common` provides:

- `LocalStatistics` – plain counters of requests sent, peers received and
  connect, announce, scrape and error responses.
- `SharedStatistics` – totals guarded by a lock; `add(local)` adds a
  worker's `LocalStatistics`, and `fetch_and_reset()` returns the totals so
  far and starts again from zero.
- `Peer` – a simulated peer: the info hash it announces, its port, the info
  hash indices it scrapes and the socket it uses.
- `LoadTestState` – the info hashes of the test and its `SharedStatistics`.

## WebTorrent tracker pieces

`trackerkit.ws.common` has `IpVersion`, whose `canonical_from_ip()` counts
IPv4-mapped IPv6 addresses as IPv4, and the message metadata classes
`InMessageMeta` and `OutMessageMeta` (`OutMessageMeta.from_in_meta()` builds
the reply address from a request's metadata). Consumer and pending scrape
ids must fit in a byte.

`trackerkit.ws.peers` provides `PeerStatus.from_event_and_bytes_left()`,
which classifies an announce as stopped, seeding (no bytes left) or
leeching, and `extract_response_peers(rng, peer_map, max_num_peers_to_take,
sender_key, convert)`, which picks up to `max_num_peers_to_take` peers from
a mapping, never the sender. When the map holds more peers than that, it
takes random runs from its first and second halves so the selection is
varied.

```python
import random
from trackerkit.ws.peers import extract_response_peers

peers = {i: f"peer-{i}" for i in range(100)}
chosen = extract_response_peers(random.Random(1), peers, 10, 5, lambda k, v: v)
assert len(chosen) == 10 and "peer-5" not in chosen
```

## What the package does not do

It contains no command-line programs and no network code: there is no
tracker server, no load-test runner that opens sockets and sends requests,
no statistics report, and no configuration files to read or write. It
supplies the wire format, the shared counters and the peer selection that
such programs are built from.

## Running the tests

```
pip install "trackerkit[test]"
pytest
```