"""Tick-indexed tempo and time-signature timeline."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from songflow.errors import SongInvariantError
from songflow.timeline.events import TempoEvent, TimeSignatureEvent
from songflow.timeline.ordering import insert_sorted, last_index_before

logger = logging.getLogger(__name__)


def _tempo_ticks(event: TempoEvent) -> int:
    return event.ticks


def _tempo_time(event: TempoEvent) -> float:
    return event.time


def _signature_ticks(event: TimeSignatureEvent) -> int:
    return event.ticks


def tempo_bpm_to_ticks_per_second(bpm: float, resolution: int) -> float:
    return bpm * resolution / 60


def tick_to_seconds_with(tick: int, tempos: Sequence[TempoEvent], resolution: int) -> float:
    """Convert ``tick`` to seconds against an explicit tempo list.

    The base segment is the last tempo event strictly before ``tick``; ticks
    before the first recorded change are measured from the first event.
    """
    if tick == 0:
        return 0.0
    if not tempos:
        raise SongInvariantError("At least one tempo event is required to convert ticks to seconds.")
    base_index = last_index_before(tempos, tick, key=_tempo_ticks)
    if base_index < 0:
        base_index = 0
    base = tempos[base_index]
    ticks_per_second = tempo_bpm_to_ticks_per_second(base.bpm, resolution)
    return base.time + (tick - base.ticks) / ticks_per_second


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class Timeline:
    """Resolution, tempo changes and time signatures of one song.

    Tempo event times are a cache over the tempo list. Every structural
    change re-derives all of them in tick order.
    """

    def __init__(self, resolution: int = 0) -> None:
        self._resolution = 0
        self._tempos: list[TempoEvent] = []
        self._time_signatures: list[TimeSignatureEvent] = []
        if resolution:
            self.set_resolution(resolution)

    # -- resolution ---------------------------------------------------------

    @property
    def resolution(self) -> int:
        return self._resolution

    def set_resolution(self, resolution: int) -> None:
        if resolution < 1:
            raise SongInvariantError("resolution must be >= 1")
        if self._tempos and resolution != self._resolution:
            raise SongInvariantError("resolution cannot change once tempo events exist")
        self._resolution = int(resolution)

    # -- tempo ----------------------------------------------------------------

    def get_tempo_changes(self) -> list[TempoEvent]:
        return list(self._tempos)

    def create_tempo_change(self, ticks: int, bpm: float) -> TempoEvent:
        if self._resolution <= 0:
            raise SongInvariantError("Song resolution must be provided before creating tempo changes.")
        if not self._tempos and ticks != 0:
            raise SongInvariantError("The first tempo event must be at tick 0")
        # Time comes from the tempo list as it was before this event.
        tempo = TempoEvent(ticks=ticks, bpm=bpm, time=self.tick_to_seconds(ticks))
        insert_sorted(self._tempos, tempo, key=_tempo_ticks)
        self._retime_tempo_events()
        return tempo

    def overwrite_tempo_changes(self, tempo_events: Iterable[TempoEvent]) -> None:
        """Replace all tempo changes; event times are re-derived, given times are ignored."""
        ordered = sorted(((event.ticks, event.bpm) for event in tempo_events), key=lambda item: item[0])
        if not ordered:
            raise SongInvariantError("Cannot clear all the tempo events.")
        first_ticks, first_bpm = ordered[0]
        if first_ticks > 0:
            raise SongInvariantError("The first tempo event needs to start from tick 0")
        if self._resolution <= 0:
            raise SongInvariantError("Song resolution must be provided before creating tempo changes.")
        self._tempos = [TempoEvent(ticks=0, bpm=first_bpm, time=0.0)]
        for ticks, bpm in ordered[1:]:
            self.create_tempo_change(ticks=ticks, bpm=bpm)

    def update_tempo(self, tempo_event: TempoEvent, bpm: float) -> None:
        if not any(existing is tempo_event for existing in self._tempos):
            raise SongInvariantError("tempo event does not belong to this timeline")
        tempo_event.assign_bpm(bpm)
        self._retime_tempo_events()

    def _retime_tempo_events(self) -> None:
        self._tempos.sort(key=_tempo_ticks)
        for tempo in self._tempos:
            # Only events strictly before ``tempo.ticks`` feed into its time.
            tempo.assign_time(self.tick_to_seconds(tempo.ticks))
        logger.debug("re-derived %d tempo event times", len(self._tempos))

    # -- conversion -----------------------------------------------------------

    def tick_to_seconds(self, tick: int) -> float:
        return tick_to_seconds_with(tick, self._tempos, self._resolution)

    def seconds_to_tick(self, seconds: float) -> int:
        if seconds == 0:
            return 0
        if not self._tempos:
            raise SongInvariantError("At least one tempo event is required to convert seconds to ticks.")
        base_index = last_index_before(self._tempos, seconds, key=_tempo_time)
        if base_index < 0:
            base_index = 0
        base = self._tempos[base_index]
        ticks_per_second = tempo_bpm_to_ticks_per_second(base.bpm, self._resolution)
        return _round_half_up(base.ticks + (seconds - base.time) * ticks_per_second)

    # -- time signatures --------------------------------------------------------

    def get_time_signatures(self) -> list[TimeSignatureEvent]:
        return list(self._time_signatures)

    def create_time_signature(self, ticks: int, numerator: int, denominator: int) -> TimeSignatureEvent:
        time_signature = TimeSignatureEvent(ticks=ticks, numerator=numerator, denominator=denominator)
        time_signature.validate()
        insert_sorted(self._time_signatures, time_signature, key=_signature_ticks)
        return time_signature

    def overwrite_time_signatures(self, time_signatures: Iterable[TimeSignatureEvent]) -> None:
        copies = [
            TimeSignatureEvent(ticks=item.ticks, numerator=item.numerator, denominator=item.denominator)
            for item in time_signatures
        ]
        for item in copies:
            item.validate()
        copies.sort(key=_signature_ticks)
        self._time_signatures = copies

    def _first_time_signature(self) -> TimeSignatureEvent:
        if self._time_signatures:
            return self._time_signatures[0]
        return TimeSignatureEvent(ticks=0, numerator=4, denominator=4)

    def get_beats_per_bar(self) -> int:
        return self._first_time_signature().numerator

    def get_ticks_per_bar(self) -> int:
        return self.get_beats_per_bar() * self._resolution

    def get_ticks_per_beat(self) -> float:
        """Beat length used for drawing; use the resolution for timing."""
        return self._resolution * (4 / self._first_time_signature().denominator)
