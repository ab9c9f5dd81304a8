"""Conversion between ``Song`` and ``SongDocument``."""

from __future__ import annotations

from songflow.composition.audio_plugin import AudioPlugin
from songflow.composition.automation import AutomationTarget, AutomationTargetType
from songflow.composition.models import AudioClipData, Clip, ClipType, Track, TrackType
from songflow.composition.song import Song
from songflow.plugin.context import plugin_context
from songflow.plugin.host import HostPlugin
from songflow.project.schema import (
    AudioClipDocument,
    AudioPluginDocument,
    AutomationDocument,
    ClipDocument,
    InstrumentDocument,
    NoteDocument,
    SongDocument,
    TempoDocument,
    TimeSignatureDocument,
    TrackDocument,
)
from songflow.timeline.events import TempoEvent, TimeSignatureEvent


def dump_song(song: Song, title: str = "Untitled") -> SongDocument:
    return SongDocument(
        meta={"title": title},
        resolution=song.get_resolution(),
        tempos=[
            TempoDocument(ticks=tempo.ticks, bpm=tempo.bpm, time=tempo.time) for tempo in song.get_tempo_changes()
        ],
        time_signatures=[
            TimeSignatureDocument(ticks=item.ticks, numerator=item.numerator, denominator=item.denominator)
            for item in song.get_time_signatures()
        ],
        tracks=[_dump_track(track) for track in song.get_tracks()],
    )


def load_song(document: SongDocument) -> Song:
    """Rebuilds a song; track ids and ranks are restored as saved."""
    song = Song()
    if document.resolution:
        song.set_resolution(document.resolution)
    if document.tempos:
        song.overwrite_tempo_changes(TempoEvent(ticks=item.ticks, bpm=item.bpm) for item in document.tempos)
    song.overwrite_time_signatures(
        TimeSignatureEvent(ticks=item.ticks, numerator=item.numerator, denominator=item.denominator)
        for item in document.time_signatures
    )

    loader = HostPlugin()
    loader.generated_track_ids = [item.track_id for item in document.tracks]
    with plugin_context(song, loader):
        for track_document in document.tracks:
            track = song.create_track(track_type=TrackType(track_document.type), rank=track_document.rank)
            _load_track(track, track_document)
    return song


def _dump_plugin(plugin: AudioPlugin) -> AudioPluginDocument:
    return AudioPluginDocument(
        tf_id=plugin.get_tuneflow_id(),
        is_enabled=plugin.is_enabled,
        base64_states=plugin.base64_states,
    )


def _dump_clip(clip: Clip) -> ClipDocument:
    audio = None
    if clip.audio_clip_data is not None:
        audio = AudioClipDocument(
            audio_file_path=clip.audio_clip_data.audio_file_path,
            start_tick=clip.audio_clip_data.start_tick,
            duration_seconds=clip.audio_clip_data.duration_seconds,
        )
    return ClipDocument(
        clip_type=clip.type.value,
        clip_start_tick=clip.clip_start_tick,
        clip_end_tick=clip.clip_end_tick,
        notes=[
            NoteDocument(
                pitch=note.pitch,
                velocity=note.velocity,
                start_tick=note.start_tick,
                end_tick=note.end_tick,
            )
            for note in clip.get_notes()
        ],
        audio=audio,
    )


def _dump_track(track: Track) -> TrackDocument:
    plugins = track.get_audio_plugins()
    plugin_index = {plugin.instance_id: index for index, plugin in enumerate(plugins)}
    sampler_id = track.sampler_plugin.instance_id if track.sampler_plugin is not None else None
    automation: list[AutomationDocument] = []
    for target in track.get_automation().get_automation_targets():
        value = track.get_automation().get_automation_value_by_target(target)
        if value is None:
            continue
        on_sampler = target.type == AutomationTargetType.AUDIO_PLUGIN and target.plugin_instance_id == sampler_id
        if (
            target.type == AutomationTargetType.AUDIO_PLUGIN
            and not on_sampler
            and target.plugin_instance_id not in plugin_index
        ):
            # Automation of a plugin no longer on the track has nothing to point at.
            continue
        automation.append(
            AutomationDocument(
                target_type=target.type.value,
                plugin_index=None if on_sampler else plugin_index.get(target.plugin_instance_id),
                sampler=on_sampler,
                param_id=target.param_id,
                disabled=value.disabled,
                points=[(point.tick, point.value) for point in value.points],
            )
        )

    instrument = None
    if track.instrument is not None:
        instrument = InstrumentDocument(program=track.instrument.program, is_drum=track.instrument.is_drum)
    return TrackDocument(
        track_id=track.track_id,
        type=track.type.value,
        rank=track.rank,
        volume=track.volume,
        pan=track.pan,
        solo=track.solo,
        muted=track.muted,
        instrument=instrument,
        suggested_instruments=[
            InstrumentDocument(program=item.program, is_drum=item.is_drum) for item in track.suggested_instruments
        ],
        sampler_plugin=_dump_plugin(track.sampler_plugin) if track.sampler_plugin is not None else None,
        audio_plugins=[_dump_plugin(plugin) for plugin in plugins],
        clips=[_dump_clip(clip) for clip in track.get_clips()],
        automation=automation,
    )


def _load_plugin(track: Track, document: AudioPluginDocument) -> AudioPlugin:
    plugin = track.create_audio_plugin(document.tf_id)
    plugin.is_enabled = document.is_enabled
    plugin.base64_states = document.base64_states
    return plugin


def _load_track(track: Track, document: TrackDocument) -> None:
    track.set_volume(document.volume)
    track.set_pan(document.pan)
    track.set_solo(document.solo)
    track.set_muted(document.muted)
    if track.type == TrackType.MIDI_TRACK:
        if document.instrument is not None:
            track.set_instrument(program=document.instrument.program, is_drum=document.instrument.is_drum)
        for item in document.suggested_instruments:
            track.create_suggested_instrument(program=item.program, is_drum=item.is_drum)
        sampler = _load_plugin(track, document.sampler_plugin) if document.sampler_plugin is not None else None
        track.set_sampler_plugin(sampler)

    plugins = [_load_plugin(track, item) for item in document.audio_plugins]
    for plugin in plugins:
        track.add_audio_plugin(plugin)

    for clip_document in document.clips:
        if clip_document.clip_type == ClipType.AUDIO_CLIP.value and clip_document.audio is not None:
            track.create_audio_clip(
                clip_start_tick=clip_document.clip_start_tick,
                clip_end_tick=clip_document.clip_end_tick,
                audio_clip_data=AudioClipData(
                    audio_file_path=clip_document.audio.audio_file_path,
                    start_tick=clip_document.audio.start_tick,
                    duration_seconds=clip_document.audio.duration_seconds,
                ),
            )
            continue
        clip = track.create_midi_clip(
            clip_start_tick=clip_document.clip_start_tick,
            clip_end_tick=clip_document.clip_end_tick,
        )
        for note in clip_document.notes:
            clip.create_note(
                pitch=note.pitch,
                velocity=note.velocity,
                start_tick=note.start_tick,
                end_tick=note.end_tick,
                update_clip_range=False,
            )

    automation = track.get_automation()
    for item in document.automation:
        target_type = AutomationTargetType(item.target_type)
        if target_type == AutomationTargetType.AUDIO_PLUGIN and item.sampler:
            if track.sampler_plugin is None:
                raise ValueError("automation references a sampler the track does not have")
            target = AutomationTarget(
                target_type,
                plugin_instance_id=track.sampler_plugin.instance_id,
                param_id=item.param_id,
            )
        elif target_type == AutomationTargetType.AUDIO_PLUGIN:
            if item.plugin_index is None or not (0 <= item.plugin_index < len(plugins)):
                raise ValueError(f"automation references unknown plugin index {item.plugin_index}")
            target = AutomationTarget(
                target_type,
                plugin_instance_id=plugins[item.plugin_index].instance_id,
                param_id=item.param_id,
            )
        else:
            target = AutomationTarget(target_type)
        value = automation.add_automation(target)
        value.disabled = item.disabled
        for tick, point_value in item.points:
            value.add_point(tick, point_value)
