"""BitTorrent tracker toolkit: UDP protocol, load-test bookkeeping and WebTorrent helpers."""

__version__ = "0.1.0"