"""UDP tracker requests: connect, announce and scrape."""

from __future__ import annotations

import enum
import io
import struct
from dataclasses import dataclass, field

from trackerkit.udp_protocol.common import (
    InfoHash,
    InvalidDataError,
    PeerId,
    read_i32,
    read_i64,
)

PROTOCOL_IDENTIFIER = 4_497_486_125_440

_ACTION_CONNECT = 0
_ACTION_ANNOUNCE = 1
_ACTION_SCRAPE = 2

_CONNECT = struct.Struct(">qii")
_ANNOUNCE = struct.Struct(">qii20s20sqqqi4siiH")
_SCRAPE_HEADER = struct.Struct(">qii")
_INFO_HASH = struct.Struct("20s")


class AnnounceEvent(enum.Enum):
    STARTED = "started"
    STOPPED = "stopped"
    COMPLETED = "completed"
    NONE = "none"

    @classmethod
    def from_wire(cls, value: int) -> AnnounceEvent:
        """Map a wire value to an event; unknown values mean no event."""
        return _EVENT_BY_WIRE.get(value, cls.NONE)

    def wire_value(self) -> int:
        return _WIRE_BY_EVENT[self]


_WIRE_BY_EVENT = {
    AnnounceEvent.NONE: 0,
    AnnounceEvent.COMPLETED: 1,
    AnnounceEvent.STARTED: 2,
    AnnounceEvent.STOPPED: 3,
}
_EVENT_BY_WIRE = {1: AnnounceEvent.COMPLETED, 2: AnnounceEvent.STARTED, 3: AnnounceEvent.STOPPED}


@dataclass(frozen=True)
class ConnectRequest:
    transaction_id: int

    def to_bytes(self) -> bytes:
        return _CONNECT.pack(PROTOCOL_IDENTIFIER, _ACTION_CONNECT, self.transaction_id)


@dataclass(frozen=True)
class AnnounceRequest:
    connection_id: int
    transaction_id: int
    info_hash: InfoHash
    peer_id: PeerId
    bytes_downloaded: int
    bytes_left: int
    bytes_uploaded: int
    event: AnnounceEvent
    ip_address: bytes
    key: int
    peers_wanted: int
    port: int

    def to_bytes(self) -> bytes:
        return _ANNOUNCE.pack(
            self.connection_id,
            _ACTION_ANNOUNCE,
            self.transaction_id,
            bytes(self.info_hash),
            bytes(self.peer_id),
            self.bytes_downloaded,
            self.bytes_left,
            self.bytes_uploaded,
            self.event.wire_value(),
            bytes(self.ip_address),
            self.key,
            self.peers_wanted,
            self.port,
        )


@dataclass(frozen=True)
class ScrapeRequest:
    connection_id: int
    transaction_id: int
    info_hashes: list[InfoHash] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        header = _SCRAPE_HEADER.pack(self.connection_id, _ACTION_SCRAPE, self.transaction_id)
        return header + b"".join(bytes(h) for h in self.info_hashes)


Request = ConnectRequest | AnnounceRequest | ScrapeRequest


class RequestParseError(ValueError):
    """A request could not be parsed.

    When the connection and transaction ids could be read, the error is
    ``sendable``: an error response can be returned to the client.
    """

    def __init__(
        self,
        message: str,
        connection_id: int | None = None,
        transaction_id: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.connection_id = connection_id
        self.transaction_id = transaction_id

    @property
    def sendable(self) -> bool:
        return self.connection_id is not None and self.transaction_id is not None


def parse_request(data: bytes, max_scrape_torrents: int) -> Request:
    """Parse a request datagram, keeping at most ``max_scrape_torrents`` hashes."""
    data = bytes(data)
    if len(data) < 12:
        raise RequestParseError("Couldn't parse action")
    action = int.from_bytes(data[8:12], "big", signed=True)

    if action == _ACTION_CONNECT:
        return _parse_connect(data)
    if action == _ACTION_ANNOUNCE:
        return _parse_announce(data)
    if action == _ACTION_SCRAPE:
        return _parse_scrape(data, max_scrape_torrents)
    raise RequestParseError("Invalid action")


def _parse_connect(data: bytes) -> ConnectRequest:
    stream = io.BytesIO(data)
    try:
        protocol_identifier = read_i64(stream)
        read_i32(stream)
        transaction_id = read_i32(stream)
    except InvalidDataError as err:
        raise RequestParseError(str(err)) from err

    if protocol_identifier != PROTOCOL_IDENTIFIER:
        raise RequestParseError("Protocol identifier missing")
    return ConnectRequest(transaction_id)


def _parse_announce(data: bytes) -> AnnounceRequest:
    if len(data) < _ANNOUNCE.size:
        raise RequestParseError("invalid data")
    (
        connection_id,
        _action,
        transaction_id,
        info_hash,
        peer_id,
        bytes_downloaded,
        bytes_left,
        bytes_uploaded,
        event,
        ip_address,
        key,
        peers_wanted,
        port,
    ) = _ANNOUNCE.unpack_from(data)

    if port == 0:
        raise RequestParseError("Port can't be 0", connection_id, transaction_id)
    if event not in range(4):
        raise RequestParseError("Invalid announce event", connection_id, transaction_id)

    return AnnounceRequest(
        connection_id=connection_id,
        transaction_id=transaction_id,
        info_hash=InfoHash(info_hash),
        peer_id=PeerId(peer_id),
        bytes_downloaded=bytes_downloaded,
        bytes_left=bytes_left,
        bytes_uploaded=bytes_uploaded,
        event=AnnounceEvent.from_wire(event),
        ip_address=ip_address,
        key=key,
        peers_wanted=peers_wanted,
        port=port,
    )


def _parse_scrape(data: bytes, max_scrape_torrents: int) -> ScrapeRequest:
    stream = io.BytesIO(data)
    try:
        connection_id = read_i64(stream)
        read_i32(stream)
        transaction_id = read_i32(stream)
    except InvalidDataError as err:
        raise RequestParseError(str(err)) from err

    remaining = data[stream.tell():]
    if not remaining:
        raise RequestParseError("Full scrapes are not allowed", connection_id, transaction_id)
    if len(remaining) % _INFO_HASH.size:
        raise RequestParseError("Invalid info hash list", connection_id, transaction_id)

    info_hashes = [InfoHash(raw) for (raw,) in _INFO_HASH.iter_unpack(remaining)]
    return ScrapeRequest(connection_id, transaction_id, info_hashes[:max_scrape_torrents])