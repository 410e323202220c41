"""Reserved for WebTorrent load-testing helpers; it holds no modules yet."""

__all__: list[str] = []