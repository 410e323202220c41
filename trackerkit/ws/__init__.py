"""Connection metadata and swarm peer selection for a WebTorrent tracker."""

__all__ = ["common", "peers"]