"""Encoding and parsing of the UDP BitTorrent tracker protocol."""

__all__ = ["common", "request", "response"]