"""Sorted-insertion helpers for tick-ordered event lists."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Callable, TypeVar

T = TypeVar("T")


def insert_sorted(events: list[T], event: T, key: Callable[[T], float]) -> int:
    """Insert ``event`` keeping ``events`` ordered by ``key``.

    The event goes after every existing event with an equal key, so events
    sharing a tick keep their insertion order. Returns the insertion index.
    """
    index = bisect_right(events, key(event), key=key)
    events.insert(index, event)
    return index


def lower_bound(events: list[T], value: float, key: Callable[[T], float]) -> int:
    """First index whose key is not less than ``value`` (``len(events)`` if none)."""
    return bisect_left(events, value, key=key)


def upper_bound(events: list[T], value: float, key: Callable[[T], float]) -> int:
    """First index whose key is greater than ``value``."""
    return bisect_right(events, value, key=key)


def last_index_before(events: list[T], value: float, key: Callable[[T], float]) -> int:
    """Index of the last event whose key is strictly less than ``value``, or -1."""
    return bisect_left(events, value, key=key) - 1
