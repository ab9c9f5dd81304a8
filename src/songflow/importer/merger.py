"""Merges decoded MIDI-like data into a song."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Callable

import mido

from songflow.composition.automation import AutomationTarget, AutomationTargetType
from songflow.composition.models import Track, TrackType
from songflow.composition.song import Song
from songflow.errors import SongInvariantError
from songflow.importer.mido_decoder import decode_midi_file
from songflow.importer.schemas import CC_PAN, CC_VOLUME, DecodedControlChange, DecodedSong, DecodedTrack
from songflow.timeline.events import TempoEvent, TimeSignatureEvent

logger = logging.getLogger(__name__)

# Tempo of the region before a positive insertion offset.
LEAD_IN_BPM = 120.0

_CC_TARGETS: dict[int, AutomationTargetType] = {
    CC_VOLUME: AutomationTargetType.VOLUME,
    CC_PAN: AutomationTargetType.PAN,
}


def scale_int_by(value: float, factor: float) -> int:
    return int(math.floor(value * factor + 0.5))


def import_decoded_song(
    song: Song,
    decoded: DecodedSong,
    insert_at_tick: int = 0,
    overwrite_tempos_and_time_signatures: bool = False,
) -> list[Track]:
    """Adds every decoded track to ``song`` and returns the new tracks.

    Track creation goes through ``Song.create_track``, so the caller must have a
    plugin context with ``SongAccess.CREATE_TRACK`` attached.
    """
    if song.get_resolution() <= 0:
        raise SongInvariantError("Song resolution must be provided before importing.")
    if insert_at_tick < 0:
        raise ValueError("insert_at_tick must be >= 0")
    factor = song.get_resolution() / decoded.resolution

    def to_song_tick(ticks: int) -> int:
        return insert_at_tick + scale_int_by(ticks, factor)

    if overwrite_tempos_and_time_signatures:
        time_signature_events = [
            TimeSignatureEvent(
                ticks=to_song_tick(item.ticks),
                numerator=item.numerator,
                denominator=item.denominator,
            )
            for item in decoded.time_signatures
        ]
        tempo_events: list[TempoEvent] = []
        if insert_at_tick > 0:
            tempo_events.append(TempoEvent(ticks=0, bpm=LEAD_IN_BPM, time=0.0))
        for item in decoded.tempos:
            tempo_events.append(TempoEvent(ticks=to_song_tick(item.ticks), bpm=item.bpm, time=item.time))
        # Nothing is written until the tempo list is known to be accepted.
        if tempo_events and min(event.ticks for event in tempo_events) > 0:
            raise SongInvariantError("The first tempo event needs to start from tick 0")
        if time_signature_events:
            song.overwrite_time_signatures(time_signature_events)
        if tempo_events:
            song.overwrite_tempo_changes(tempo_events)

    tracks = [_import_track(song, decoded_track, insert_at_tick, to_song_tick) for decoded_track in decoded.tracks]
    logger.info(
        "imported %d tracks (resolution %d -> %d, offset %d)",
        len(tracks),
        decoded.resolution,
        song.get_resolution(),
        insert_at_tick,
    )
    return tracks


def import_midi_file(
    song: Song,
    source: str | Path | mido.MidiFile,
    insert_at_tick: int = 0,
    overwrite_tempos_and_time_signatures: bool = False,
) -> list[Track]:
    return import_decoded_song(
        song,
        decode_midi_file(source),
        insert_at_tick=insert_at_tick,
        overwrite_tempos_and_time_signatures=overwrite_tempos_and_time_signatures,
    )


def _import_track(
    song: Song,
    decoded_track: DecodedTrack,
    insert_at_tick: int,
    to_song_tick: Callable[[int], int],
) -> Track:
    track = song.create_track(track_type=TrackType.MIDI_TRACK)
    track.set_instrument(program=decoded_track.instrument.program, is_drum=decoded_track.instrument.percussion)
    clip = track.create_midi_clip(clip_start_tick=insert_at_tick)

    min_start_tick: int | None = None
    for note in decoded_track.notes:
        start_tick = to_song_tick(note.ticks)
        end_tick = to_song_tick(note.ticks + note.duration_ticks)
        if end_tick <= start_tick:
            # Zero-length after rescaling, keep at least one tick.
            end_tick = start_tick + 1
        clip.create_note(
            pitch=note.midi,
            velocity=min(max(scale_int_by(note.velocity, 127), 0), 127),
            start_tick=start_tick,
            end_tick=end_tick,
        )
        min_start_tick = start_tick if min_start_tick is None else min(min_start_tick, start_tick)

    for controller, target_type in _CC_TARGETS.items():
        changes = decoded_track.control_changes.get(controller)
        if changes:
            _import_control_changes(track, target_type, changes, to_song_tick)

    if min_start_tick is not None:
        clip.adjust_clip_left(min_start_tick)
    return track


def _import_control_changes(
    track: Track,
    target_type: AutomationTargetType,
    changes: list[DecodedControlChange],
    to_song_tick: Callable[[int], int],
) -> None:
    automation = track.get_automation()
    value = automation.add_automation(AutomationTarget(target_type))
    for change in changes:
        value.add_point(to_song_tick(change.ticks), change.value)
