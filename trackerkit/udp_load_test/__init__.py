"""Statistics and simulated peers for load testing a UDP tracker."""

__all__ = ["common"]