"""Connection metadata passed between the WebTorrent tracker's workers."""

from __future__ import annotations

import enum
import ipaddress
from dataclasses import dataclass


class IpVersion(enum.Enum):
    V4 = 4
    V6 = 6

    @classmethod
    def canonical_from_ip(
        cls, ip: str | ipaddress.IPv4Address | ipaddress.IPv6Address
    ) -> IpVersion:
        """IP version of an address, counting IPv4-mapped IPv6 addresses as IPv4."""
        address = ipaddress.ip_address(ip) if isinstance(ip, str) else ip
        if isinstance(address, ipaddress.IPv4Address):
            return cls.V4
        if address.ipv4_mapped is not None:
            return cls.V4
        return cls.V6


def _check_u8(name: str, value: int | None) -> None:
    if value is None:
        return
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be an integer in 0..=255, got {value!r}")


@dataclass(frozen=True)
class InMessageMeta:
    """Where a request came from; the consumer id is the socket worker to reply through."""

    out_message_consumer_id: int
    connection_id: int
    ip_version: IpVersion
    pending_scrape_id: int | None = None

    def __post_init__(self) -> None:
        _check_u8("out_message_consumer_id", self.out_message_consumer_id)
        _check_u8("pending_scrape_id", self.pending_scrape_id)


@dataclass(frozen=True)
class OutMessageMeta:
    """Where a response is to be delivered."""

    out_message_consumer_id: int
    connection_id: int
    pending_scrape_id: int | None = None

    def __post_init__(self) -> None:
        _check_u8("out_message_consumer_id", self.out_message_consumer_id)
        _check_u8("pending_scrape_id", self.pending_scrape_id)

    @classmethod
    def from_in_meta(cls, meta: InMessageMeta) -> OutMessageMeta:
        return cls(
            out_message_consumer_id=meta.out_message_consumer_id,
            connection_id=meta.connection_id,
            pending_scrape_id=meta.pending_scrape_id,
        )