import pytest

from songflow.composition.audio_plugin import get_audio_plugin_tuneflow_id
from songflow.composition.models import TrackType
from songflow.composition.song import Song
from songflow.plugin.access import SongAccess
from songflow.plugin.base import SongPlugin
from songflow.plugin.context import plugin_context

REVERB_TFID = get_audio_plugin_tuneflow_id("Acme", "VST3", "Verb", "1.0.0")


class _EditorPlugin(SongPlugin):
    @classmethod
    def provider_id(cls) -> str:
        return "test"

    @classmethod
    def plugin_id(cls) -> str:
        return "editor"

    def song_access(self) -> set[SongAccess]:
        return {SongAccess.CREATE_TRACK, SongAccess.REMOVE_TRACK}


def _song() -> Song:
    song = Song()
    song.set_resolution(480)
    song.create_tempo_change(ticks=0, bpm=120)
    return song


def test_create_track_appends_and_inserts() -> None:
    song = _song()
    with plugin_context(song, _EditorPlugin()):
        first = song.create_track(track_type=TrackType.MIDI_TRACK)
        second = song.create_track(track_type=TrackType.AUDIO_TRACK)
        inserted = song.create_track(track_type=TrackType.MIDI_TRACK, index=0)

    assert song.get_tracks() == [inserted, first, second]
    assert [first.rank, second.rank, inserted.rank] == [1, 2, 3]
    assert song.get_track_index(second.track_id) == 2
    assert song.get_track_index("missing") == -1
    assert song.get_tracks_by_ids([first.track_id, "missing"]) == [first]


def test_ranks_are_never_reused() -> None:
    song = _song()
    with plugin_context(song, _EditorPlugin()):
        song.create_track(track_type=TrackType.MIDI_TRACK)
        second = song.create_track(track_type=TrackType.MIDI_TRACK)
        assert song.remove_track(second.track_id) is second
        third = song.create_track(track_type=TrackType.MIDI_TRACK)
        explicit = song.create_track(track_type=TrackType.MIDI_TRACK, rank=10)
        after_explicit = song.create_track(track_type=TrackType.MIDI_TRACK)

    assert third.rank == 3
    assert explicit.rank == 10
    assert after_explicit.rank == 11


def test_remove_missing_track_returns_none() -> None:
    song = _song()
    with plugin_context(song, _EditorPlugin()):
        assert song.remove_track("missing") is None


def test_clone_track_into_same_song() -> None:
    song = _song()
    with plugin_context(song, _EditorPlugin()):
        source = song.create_track(track_type=TrackType.MIDI_TRACK)
        source.set_volume(0.8)
        source.set_pan(-10)
        source.set_muted(True)
        source.set_instrument(program=33, is_drum=False)
        source.create_suggested_instrument(program=34, is_drum=False)
        reverb = source.create_audio_plugin(REVERB_TFID)
        reverb.is_enabled = False
        source.add_audio_plugin(reverb)
        clip = source.create_midi_clip(clip_start_tick=0)
        clip.create_note(pitch=60, velocity=100, start_tick=0, end_tick=240)
        clip.create_note(pitch=64, velocity=90, start_tick=240, end_tick=480)

        cloned = song.clone_track(source)

    assert song.get_tracks() == [cloned, source]
    assert cloned.track_id != source.track_id
    assert cloned.rank != source.rank
    assert cloned.volume == 0.8
    assert cloned.pan == -10
    assert cloned.muted is True
    assert cloned.instrument is not None and cloned.instrument.program == 33
    assert [item.program for item in cloned.suggested_instruments] == [34]

    assert len(cloned.get_clips()) == 1
    cloned_clip = cloned.get_clips()[0]
    assert cloned_clip.clip_id != clip.clip_id
    assert cloned_clip.get_notes() == clip.get_notes()
    assert cloned_clip.get_notes()[0] is not clip.get_notes()[0]
    assert (cloned_clip.clip_start_tick, cloned_clip.clip_end_tick) == (clip.clip_start_tick, clip.clip_end_tick)

    cloned_plugins = cloned.get_audio_plugins()
    assert len(cloned_plugins) == 1
    assert cloned_plugins[0].instance_id != reverb.instance_id
    assert cloned_plugins[0].matches_tf_id(REVERB_TFID)
    assert cloned_plugins[0].is_enabled is False
    assert cloned.sampler_plugin is not None and source.sampler_plugin is not None
    assert cloned.sampler_plugin.instance_id != source.sampler_plugin.instance_id


def test_clone_track_into_other_song_appends() -> None:
    source_song = _song()
    target_song = _song()
    with plugin_context(source_song, _EditorPlugin()):
        source = source_song.create_track(track_type=TrackType.MIDI_TRACK)
        source.create_midi_clip(clip_start_tick=0).create_note(pitch=60, velocity=90, start_tick=0, end_tick=10)
    with plugin_context(target_song, _EditorPlugin()):
        existing = target_song.create_track(track_type=TrackType.AUDIO_TRACK)
        cloned = target_song.clone_track(source)

    assert target_song.get_tracks() == [existing, cloned]
    assert cloned.song is target_song
    assert cloned.rank == 2
    assert source_song.get_tracks() == [source]


def test_last_tick_and_duration() -> None:
    song = _song()
    assert song.get_last_tick() == 0
    with plugin_context(song, _EditorPlugin()):
        first = song.create_track(track_type=TrackType.MIDI_TRACK)
        first.create_midi_clip(clip_start_tick=0).create_note(pitch=60, velocity=90, start_tick=0, end_tick=480)
        second = song.create_track(track_type=TrackType.MIDI_TRACK)
        second.create_midi_clip(clip_start_tick=960, clip_end_tick=1920)

    assert first.get_track_end_tick() == 480
    assert song.get_last_tick() == 1920
    assert song.get_duration() == pytest.approx(2.0)


def test_audio_track_rejects_midi_only_operations() -> None:
    song = _song()
    with plugin_context(song, _EditorPlugin()):
        track = song.create_track(track_type=TrackType.AUDIO_TRACK)

    assert track.instrument is None
    assert track.sampler_plugin is None
    with pytest.raises(ValueError):
        track.set_instrument(program=1, is_drum=False)
    with pytest.raises(ValueError):
        track.create_midi_clip(clip_start_tick=0)
