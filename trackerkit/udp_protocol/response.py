"""UDP tracker responses: connect, announce, scrape and error."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass, field

from trackerkit.udp_protocol.common import (
    InvalidDataError,
    ResponsePeer,
    read_i32,
)

_ACTION_CONNECT = 0
_ACTION_ANNOUNCE = 1
_ACTION_SCRAPE = 2
_ACTION_ERROR = 3

_ACTION = struct.Struct(">i")
_CONNECT_BODY = struct.Struct(">iq")
_ANNOUNCE_FIXED = struct.Struct(">iiii")
_SCRAPE_STATS = struct.Struct(">iii")
_PEER_V4 = struct.Struct(">4sH")
_PEER_V6 = struct.Struct(">16sH")


@dataclass(frozen=True)
class ConnectResponse:
    transaction_id: int
    connection_id: int

    def to_bytes(self) -> bytes:
        return _ACTION.pack(_ACTION_CONNECT) + _CONNECT_BODY.pack(
            self.transaction_id, self.connection_id
        )


@dataclass(frozen=True)
class AnnounceResponse:
    """Announce response; peers are all IPv4 or all IPv6."""

    transaction_id: int
    announce_interval: int
    leechers: int
    seeders: int
    peers: tuple[ResponsePeer, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "peers", tuple(self.peers))

    @classmethod
    def empty(cls) -> AnnounceResponse:
        """An announce response with all numbers zero and no peers."""
        return cls(0, 0, 0, 0, ())

    def to_bytes(self) -> bytes:
        fixed = _ANNOUNCE_FIXED.pack(
            self.transaction_id, self.announce_interval, self.leechers, self.seeders
        )
        peers = b"".join(peer.to_bytes() for peer in self.peers)
        return _ACTION.pack(_ACTION_ANNOUNCE) + fixed + peers


@dataclass(frozen=True)
class TorrentScrapeStatistics:
    seeders: int
    completed: int
    leechers: int

    def to_bytes(self) -> bytes:
        return _SCRAPE_STATS.pack(self.seeders, self.completed, self.leechers)


@dataclass(frozen=True)
class ScrapeResponse:
    transaction_id: int
    torrent_stats: tuple[TorrentScrapeStatistics, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "torrent_stats", tuple(self.torrent_stats))

    def to_bytes(self) -> bytes:
        header = _ACTION.pack(_ACTION_SCRAPE) + _ACTION.pack(self.transaction_id)
        return header + b"".join(stats.to_bytes() for stats in self.torrent_stats)


@dataclass(frozen=True)
class ErrorResponse:
    transaction_id: int
    message: str

    def to_bytes(self) -> bytes:
        header = _ACTION.pack(_ACTION_ERROR) + _ACTION.pack(self.transaction_id)
        return header + self.message.encode("utf-8")


Response = (
    ConnectResponse | AnnounceResponse | ScrapeResponse | ErrorResponse
)


def parse_response(data: bytes, ipv4: bool) -> Response:
    """Parse a response datagram; ``ipv4`` selects the peer address size."""
    data = bytes(data)
    stream = io.BytesIO(data)
    action = read_i32(stream)

    if action == _ACTION_CONNECT:
        body = data[_ACTION.size:]
        if len(body) < _CONNECT_BODY.size:
            raise InvalidDataError("connect response too short")
        transaction_id, connection_id = _CONNECT_BODY.unpack_from(body)
        return ConnectResponse(transaction_id, connection_id)

    if action == _ACTION_ANNOUNCE:
        body = data[_ACTION.size:]
        if len(body) < _ANNOUNCE_FIXED.size:
            raise InvalidDataError("announce response too short")
        transaction_id, interval, leechers, seeders = _ANNOUNCE_FIXED.unpack_from(body)
        rest = body[_ANNOUNCE_FIXED.size:]
        peer_struct = _PEER_V4 if ipv4 else _PEER_V6
        if len(rest) % peer_struct.size:
            raise InvalidDataError("invalid peer list length")
        peers = tuple(
            ResponsePeer(ip, port) for ip, port in peer_struct.iter_unpack(rest)
        )
        return AnnounceResponse(transaction_id, interval, leechers, seeders, peers)

    if action == _ACTION_SCRAPE:
        transaction_id = read_i32(stream)
        rest = data[stream.tell():]
        if len(rest) % _SCRAPE_STATS.size:
            raise InvalidDataError("invalid torrent statistics length")
        stats = tuple(
            TorrentScrapeStatistics(*values) for values in _SCRAPE_STATS.iter_unpack(rest)
        )
        return ScrapeResponse(transaction_id, stats)

    if action == _ACTION_ERROR:
        transaction_id = read_i32(stream)
        message = data[stream.tell():].decode("utf-8", errors="replace")
        return ErrorResponse(transaction_id, message)

    raise InvalidDataError(f"invalid action: {action}")