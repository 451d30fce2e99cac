"""Test helper utilities."""

from tests.helpers.mock_speedy import MockSpeedyAPI, SpeedyCall

__all__ = [
    "MockSpeedyAPI",
    "SpeedyCall",
]
