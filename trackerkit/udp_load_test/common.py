"""State shared between the load tester's workers and its monitor."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field

from trackerkit.udp_protocol.common import InfoHash


@dataclass
class LocalStatistics:
    """Counters a worker accumulates before publishing them."""

    requests: int = 0
    response_peers: int = 0
    responses_connect: int = 0
    responses_announce: int = 0
    responses_scrape: int = 0
    responses_error: int = 0


class SharedStatistics:
    """Thread-safe totals that workers add to and the monitor drains."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._totals = LocalStatistics()

    def add(self, local: LocalStatistics) -> None:
        """Add a worker's counters to the totals."""
        with self._lock:
            for f in dataclasses.fields(LocalStatistics):
                setattr(
                    self._totals,
                    f.name,
                    getattr(self._totals, f.name) + getattr(local, f.name),
                )

    def fetch_and_reset(self) -> LocalStatistics:
        """Return the totals so far and start counting from zero."""
        with self._lock:
            snapshot, self._totals = self._totals, LocalStatistics()
        return snapshot


@dataclass(frozen=True)
class Peer:
    """A simulated peer: the torrent it announces and those it scrapes."""

    announce_info_hash_index: int
    announce_info_hash: InfoHash
    announce_port: int
    scrape_info_hash_indices: tuple[int, ...]
    socket_index: int

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "scrape_info_hash_indices", tuple(self.scrape_info_hash_indices)
        )


@dataclass(frozen=True)
class LoadTestState:
    info_hashes: tuple[InfoHash, ...]
    statistics: SharedStatistics = field(default_factory=SharedStatistics)

    def __post_init__(self) -> None:
        object.__setattr__(self, "info_hashes", tuple(self.info_hashes))