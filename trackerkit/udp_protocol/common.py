"""Primitive types and big-endian readers shared by the UDP tracker protocol."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass
from typing import BinaryIO

_INFO_HASH_SIZE = 20
_PEER_ID_SIZE = 20
_IPV4_SIZE = 4
_IPV6_SIZE = 16
_PORT = struct.Struct(">H")


class InvalidDataError(ValueError):
    """Raised when bytes cannot be decoded as a protocol value."""


def _as_fixed_bytes(owner: object, value: object, size: int) -> bytes:
    data = bytes(value)  # type: ignore[call-overload]
    if len(data) != size:
        raise ValueError(
            f"{type(owner).__name__} must be {size} bytes long, got {len(data)}"
        )
    return data


@dataclass(frozen=True, order=True)
class InfoHash:
    """A 20-byte torrent info hash."""

    value: bytes

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", _as_fixed_bytes(self, self.value, _INFO_HASH_SIZE)
        )

    def __bytes__(self) -> bytes:
        return self.value


@dataclass(frozen=True, order=True)
class PeerId:
    """A 20-byte BitTorrent peer id."""

    value: bytes

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", _as_fixed_bytes(self, self.value, _PEER_ID_SIZE)
        )

    def __bytes__(self) -> bytes:
        return self.value


@dataclass(frozen=True, order=True)
class ResponsePeer:
    """A peer address as sent in announce responses: raw IP bytes and a port."""

    ip_address: bytes
    port: int

    def __post_init__(self) -> None:
        ip = bytes(self.ip_address)
        if len(ip) not in (_IPV4_SIZE, _IPV6_SIZE):
            raise ValueError(
                f"IP address must be {_IPV4_SIZE} or {_IPV6_SIZE} bytes, got {len(ip)}"
            )
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")
        object.__setattr__(self, "ip_address", ip)

    @property
    def is_ipv4(self) -> bool:
        return len(self.ip_address) == _IPV4_SIZE

    @property
    def ip(self) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
        return ipaddress.ip_address(self.ip_address)

    def to_bytes(self) -> bytes:
        """Encode as IP bytes followed by a big-endian port."""
        return self.ip_address + _PORT.pack(self.port)

    @classmethod
    def from_bytes(cls, data: bytes) -> ResponsePeer:
        """Decode a 6-byte (IPv4) or 18-byte (IPv6) peer entry."""
        data = bytes(data)
        if len(data) not in (_IPV4_SIZE + _PORT.size, _IPV6_SIZE + _PORT.size):
            raise InvalidDataError(f"invalid response peer length: {len(data)}")
        (port,) = _PORT.unpack(data[-_PORT.size:])
        return cls(data[: -_PORT.size], port)


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise InvalidDataError("unexpected end of data")
    return data


def read_i32(stream: BinaryIO) -> int:
    """Read a big-endian signed 32-bit integer."""
    return int.from_bytes(_read_exact(stream, 4), "big", signed=True)


def read_i64(stream: BinaryIO) -> int:
    """Read a big-endian signed 64-bit integer."""
    return int.from_bytes(_read_exact(stream, 8), "big", signed=True)


def read_u16(stream: BinaryIO) -> int:
    """Read a big-endian unsigned 16-bit integer."""
    return int.from_bytes(_read_exact(stream, 2), "big", signed=False)


def read_u32(stream: BinaryIO) -> int:
    """Read a big-endian unsigned 32-bit integer."""
    return int.from_bytes(_read_exact(stream, 4), "big", signed=False)