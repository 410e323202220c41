"""Peer status and selection of peers for offers in the WebTorrent swarm."""

from __future__ import annotations

import enum
import random
from collections.abc import Callable, Hashable, Mapping
from typing import TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
R = TypeVar("R")


class PeerStatus(enum.Enum):
    SEEDING = "seeding"
    LEECHING = "leeching"
    STOPPED = "stopped"

    @classmethod
    def from_event_and_bytes_left(cls, stopped: bool, bytes_left: int | None) -> PeerStatus:
        """Status from whether the event was ``stopped`` and the bytes left, if sent."""
        if stopped:
            return cls.STOPPED
        if bytes_left == 0:
            return cls.SEEDING
        return cls.LEECHING


def _take_range(
    items: list[tuple[K, V]],
    start: int,
    end: int,
    sender_key: K,
    convert: Callable[[K, V], R],
) -> list[R]:
    if start > end or end > len(items):
        return []
    return [convert(k, v) for k, v in items[start:end] if k != sender_key]


def extract_response_peers(
    rng: random.Random,
    peer_map: Mapping[K, V],
    max_num_peers_to_take: int,
    sender_key: K,
    convert: Callable[[K, V], R],
) -> list[R]:
    """Pick up to ``max_num_peers_to_take`` peers, never the sender.

    With more peers than that, random runs are taken from the first and the
    second half of the map so that the selection is less homogeneous.
    """
    if max_num_peers_to_take < 0:
        raise ValueError("max_num_peers_to_take must not be negative")

    items = list(peer_map.items())
    length = len(items)

    if length <= max_num_peers_to_take + 1:
        peers = [convert(k, v) for k, v in items if k != sender_key]
        # The sender may not be in the map at all
        if len(peers) > max_num_peers_to_take:
            peers.pop()
        return peers

    # The map holds at least two more peers than are to be taken
    middle_index = length // 2
    # One extra per half in case the sender is among them
    num_to_take_per_half = max_num_peers_to_take // 2 + 1

    offset_half_one = rng.randrange(0, max(1, middle_index - num_to_take_per_half))
    offset_half_two = rng.randrange(
        middle_index, max(middle_index + 1, length - num_to_take_per_half)
    )

    peers = _take_range(
        items, offset_half_one, offset_half_one + num_to_take_per_half, sender_key, convert
    )
    peers += _take_range(
        items, offset_half_two, offset_half_two + num_to_take_per_half, sender_key, convert
    )

    del peers[max_num_peers_to_take:]
    return peers