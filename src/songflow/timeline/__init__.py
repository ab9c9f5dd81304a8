"""Timeline exports."""

from songflow.timeline.engine import Timeline, tempo_bpm_to_ticks_per_second, tick_to_seconds_with
from songflow.timeline.events import TempoEvent, TimeSignatureEvent
from songflow.timeline.ordering import insert_sorted, last_index_before, lower_bound, upper_bound

__all__ = [
    "TempoEvent",
    "TimeSignatureEvent",
    "Timeline",
    "insert_sorted",
    "last_index_before",
    "lower_bound",
    "tempo_bpm_to_ticks_per_second",
    "tick_to_seconds_with",
    "upper_bound",
]
