"""Tempo and time-signature events on the tick timeline."""

from __future__ import annotations

from dataclasses import dataclass


class TempoEvent:
    """A tempo change at ``ticks``.

    ``time`` is the absolute position of the event in seconds. It is derived
    from all preceding tempo events and is only written by the timeline that
    owns the event.
    """

    __slots__ = ("_ticks", "_bpm", "_time")

    def __init__(self, ticks: int, bpm: float, time: float = 0.0) -> None:
        if ticks < 0:
            raise ValueError("ticks must be >= 0")
        if bpm <= 0:
            raise ValueError("bpm must be positive")
        self._ticks = int(ticks)
        self._bpm = float(bpm)
        self._time = float(time)

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def bpm(self) -> float:
        return self._bpm

    @property
    def time(self) -> float:
        return self._time

    def assign_time(self, time: float) -> None:
        """Timeline use only, callers go through ``Timeline`` re-derivation."""
        self._time = time

    def assign_bpm(self, bpm: float) -> None:
        """Timeline use only, see ``Timeline.update_tempo``."""
        if bpm <= 0:
            raise ValueError("bpm must be positive")
        self._bpm = float(bpm)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TempoEvent):
            return NotImplemented
        return (self._ticks, self._bpm, self._time) == (other._ticks, other._bpm, other._time)

    def __repr__(self) -> str:
        return f"TempoEvent(ticks={self._ticks}, bpm={self._bpm}, time={self._time})"


@dataclass(slots=True)
class TimeSignatureEvent:
    ticks: int
    numerator: int
    denominator: int

    def validate(self) -> None:
        if self.ticks < 0:
            raise ValueError("ticks must be >= 0")
        if self.numerator <= 0:
            raise ValueError("numerator must be positive")
        if self.denominator <= 0:
            raise ValueError("denominator must be positive")
