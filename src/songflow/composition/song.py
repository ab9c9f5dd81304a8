"""Song aggregate: tracks, timeline and the plugin capability gate."""

from __future__ import annotations

import logging
from typing import Iterable

from songflow.composition.models import Track, TrackType
from songflow.errors import MissingSongAccessError, NoPluginContextError, PluginContextError
from songflow.plugin.access import SongAccess
from songflow.plugin.base import SongPlugin
from songflow.plugin.context import PluginContext
from songflow.timeline.engine import Timeline
from songflow.timeline.events import TempoEvent, TimeSignatureEvent

logger = logging.getLogger(__name__)


class Song:
    def __init__(self) -> None:
        self._tracks: list[Track] = []
        self._timeline = Timeline()
        self._next_track_rank = 1
        self._plugin_context: PluginContext | None = None

    # -- tracks ---------------------------------------------------------------

    def get_tracks(self) -> list[Track]:
        """All tracks in display order."""
        return list(self._tracks)

    def get_track_by_id(self, track_id: str) -> Track | None:
        for track in self._tracks:
            if track.track_id == track_id:
                return track
        return None

    def get_tracks_by_ids(self, track_ids: Iterable[str]) -> list[Track]:
        wanted = set(track_ids)
        return [track for track in self._tracks if track.track_id in wanted]

    def get_track_index(self, track_id: str) -> int:
        for index, track in enumerate(self._tracks):
            if track.track_id == track_id:
                return index
        return -1

    def create_track(self, track_type: TrackType, index: int | None = None, rank: int | None = None) -> Track:
        """Adds a new track and returns it. Requires ``SongAccess.CREATE_TRACK``.

        ``rank`` is for restoring saved songs; new tracks get the next rank.
        """
        context = self.check_access(SongAccess.CREATE_TRACK)
        if rank is None:
            rank = self._take_next_track_rank()
        else:
            self._next_track_rank = max(rank + 1, self._next_track_rank)
        track = Track(track_type=track_type, song=self, track_id=context.next_track_id(), rank=rank)
        if index is None:
            self._tracks.append(track)
        else:
            self._tracks.insert(index, track)
        return track

    def clone_track(self, track: Track) -> Track:
        """Deep-copies ``track`` into this song next to the source, or at the end."""
        track_index: int | None = self.get_track_index(track.track_id)
        if track.song is not self or track_index < 0:
            track_index = None
        new_track = self.create_track(track_type=track.type, index=track_index)
        new_track.set_volume(track.volume)
        new_track.set_pan(track.pan)
        new_track.set_solo(track.solo)
        new_track.set_muted(track.muted)
        if track.type == TrackType.MIDI_TRACK:
            if track.instrument is not None:
                new_track.set_instrument(program=track.instrument.program, is_drum=track.instrument.is_drum)
            for instrument in track.suggested_instruments:
                new_track.create_suggested_instrument(program=instrument.program, is_drum=instrument.is_drum)
            sampler = track.sampler_plugin
            new_track.set_sampler_plugin(sampler.clone(new_track) if sampler is not None else None)

        for plugin in track.get_audio_plugins():
            new_track.add_audio_plugin(plugin.clone(new_track))
        for clip in track.get_clips():
            new_track.insert_clip(new_track.clone_clip(clip))
        return new_track

    def remove_track(self, track_id: str) -> Track | None:
        """Removes a track. Requires ``SongAccess.REMOVE_TRACK``."""
        self.check_access(SongAccess.REMOVE_TRACK)
        index = self.get_track_index(track_id)
        if index < 0:
            return None
        return self._tracks.pop(index)

    def get_last_tick(self) -> int:
        return max((track.get_track_end_tick() for track in self._tracks), default=0)

    def get_duration(self) -> float:
        """Song length in seconds."""
        return self.tick_to_seconds(self.get_last_tick())

    def _take_next_track_rank(self) -> int:
        rank = self._next_track_rank
        self._next_track_rank += 1
        return rank

    # -- timeline ---------------------------------------------------------------

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    def get_resolution(self) -> int:
        return self._timeline.resolution

    def set_resolution(self, resolution: int) -> None:
        self._timeline.set_resolution(resolution)

    def get_tempo_changes(self) -> list[TempoEvent]:
        return self._timeline.get_tempo_changes()

    def create_tempo_change(self, ticks: int, bpm: float) -> TempoEvent:
        return self._timeline.create_tempo_change(ticks=ticks, bpm=bpm)

    def overwrite_tempo_changes(self, tempo_events: Iterable[TempoEvent]) -> None:
        self._timeline.overwrite_tempo_changes(tempo_events)

    def update_tempo(self, tempo_event: TempoEvent, bpm: float) -> None:
        self._timeline.update_tempo(tempo_event, bpm)

    def get_time_signatures(self) -> list[TimeSignatureEvent]:
        return self._timeline.get_time_signatures()

    def create_time_signature(self, ticks: int, numerator: int, denominator: int) -> TimeSignatureEvent:
        return self._timeline.create_time_signature(ticks=ticks, numerator=numerator, denominator=denominator)

    def overwrite_time_signatures(self, time_signatures: Iterable[TimeSignatureEvent]) -> None:
        self._timeline.overwrite_time_signatures(time_signatures)

    def get_beats_per_bar(self) -> int:
        return self._timeline.get_beats_per_bar()

    def get_ticks_per_bar(self) -> int:
        return self._timeline.get_ticks_per_bar()

    def get_ticks_per_beat(self) -> float:
        return self._timeline.get_ticks_per_beat()

    def tick_to_seconds(self, tick: int) -> float:
        return self._timeline.tick_to_seconds(tick)

    def seconds_to_tick(self, seconds: float) -> int:
        return self._timeline.seconds_to_tick(seconds)

    # -- plugin context -----------------------------------------------------------

    @property
    def plugin_context(self) -> PluginContext | None:
        return self._plugin_context

    def set_plugin_context(self, plugin: SongPlugin) -> PluginContext:
        if self._plugin_context is not None:
            raise PluginContextError(
                f"Plugin {type(self._plugin_context.plugin).id()} is still attached; clear its context first."
            )
        self._plugin_context = PluginContext(plugin)
        logger.debug("attached plugin context for %s", plugin.instance_id)
        return self._plugin_context

    def clear_plugin_context(self) -> None:
        self._plugin_context = None

    def check_access(self, access: SongAccess) -> PluginContext:
        context = self._plugin_context
        if context is None:
            raise NoPluginContextError()
        if access not in context.plugin.song_access():
            raise MissingSongAccessError(plugin_id=type(context.plugin).id(), access=access.value)
        return context
