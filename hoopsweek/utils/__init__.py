"""Shared utilities module."""

__all__ = [
    "player_utils",
    "stat_mappings",
]
