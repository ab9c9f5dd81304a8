from pathlib import Path

import mido
import pytest

from songflow.composition.song import Song
from songflow.importer.merger import import_midi_file
from songflow.importer.mido_decoder import decode_midi_file
from songflow.plugin.context import plugin_context
from songflow.plugin.host import HostPlugin


def _write_midi(path: Path) -> Path:
    midi_file = mido.MidiFile(ticks_per_beat=96)
    conductor = mido.MidiTrack()
    conductor.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(100), time=0))
    conductor.append(mido.MetaMessage("time_signature", numerator=3, denominator=4, time=0))
    conductor.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(50), time=192))
    midi_file.tracks.append(conductor)

    melody = mido.MidiTrack()
    melody.append(mido.Message("program_change", program=5, channel=0, time=0))
    melody.append(mido.Message("control_change", control=7, value=100, channel=0, time=0))
    melody.append(mido.Message("note_on", note=60, velocity=127, channel=0, time=0))
    melody.append(mido.Message("note_off", note=60, velocity=0, channel=0, time=48))
    melody.append(mido.Message("note_on", note=64, velocity=64, channel=0, time=0))
    melody.append(mido.Message("note_on", note=64, velocity=0, channel=0, time=48))
    midi_file.tracks.append(melody)

    out = path / "song.mid"
    midi_file.save(str(out))
    return out


def test_decode_midi_file(tmp_path: Path) -> None:
    decoded = decode_midi_file(_write_midi(tmp_path))

    assert decoded.resolution == 96
    assert len(decoded.tracks) == 1
    track = decoded.tracks[0]
    assert track.instrument.program == 5
    assert track.instrument.percussion is False
    assert [(note.ticks, note.duration_ticks, note.midi) for note in track.notes] == [(0, 48, 60), (48, 48, 64)]
    assert track.notes[0].velocity == pytest.approx(1.0)
    assert track.notes[1].velocity == pytest.approx(64 / 127)
    assert track.control_changes[7][0].value == pytest.approx(100 / 127)

    assert [tempo.ticks for tempo in decoded.tempos] == [0, 192]
    assert decoded.tempos[0].bpm == pytest.approx(100)
    assert decoded.tempos[1].time == pytest.approx(192 * 60 / (100 * 96))
    assert [(item.numerator, item.denominator) for item in decoded.time_signatures] == [(3, 4)]


def test_import_midi_file_into_song(tmp_path: Path) -> None:
    song = Song()
    song.set_resolution(480)
    song.create_tempo_change(ticks=0, bpm=120)

    with plugin_context(song, HostPlugin()):
        (track,) = import_midi_file(song, _write_midi(tmp_path), overwrite_tempos_and_time_signatures=True)

    notes = track.get_clips()[0].get_notes()
    assert [(note.start_tick, note.end_tick, note.velocity) for note in notes] == [(0, 240, 127), (240, 480, 64)]
    assert [tempo.ticks for tempo in song.get_tempo_changes()] == [0, 960]
    assert song.get_tempo_changes()[0].bpm == pytest.approx(100)


def test_decode_midi_file_defaults_to_120_bpm_before_first_set_tempo(tmp_path: Path) -> None:
    midi_file = mido.MidiFile(ticks_per_beat=96)
    conductor = mido.MidiTrack()
    conductor.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(60), time=192))
    midi_file.tracks.append(conductor)
    melody = mido.MidiTrack()
    melody.append(mido.Message("note_on", note=60, velocity=100, channel=0, time=0))
    melody.append(mido.Message("note_off", note=60, velocity=0, channel=0, time=96))
    midi_file.tracks.append(melody)
    out = tmp_path / "late_tempo.mid"
    midi_file.save(str(out))

    decoded = decode_midi_file(out)

    assert [(tempo.ticks, tempo.bpm) for tempo in decoded.tempos] == [(0, pytest.approx(120)), (192, pytest.approx(60))]
    assert decoded.tempos[1].time == pytest.approx(1.0)

    song = Song()
    song.set_resolution(96)
    song.create_tempo_change(ticks=0, bpm=90)
    with plugin_context(song, HostPlugin()):
        import_midi_file(song, out, overwrite_tempos_and_time_signatures=True)

    assert [tempo.ticks for tempo in song.get_tempo_changes()] == [0, 192]
    assert song.tick_to_seconds(192) == pytest.approx(1.0)


def test_decode_midi_file_without_set_tempo_uses_120_bpm(tmp_path: Path) -> None:
    midi_file = mido.MidiFile(ticks_per_beat=96)
    melody = mido.MidiTrack()
    melody.append(mido.Message("note_on", note=60, velocity=100, channel=0, time=0))
    melody.append(mido.Message("note_off", note=60, velocity=0, channel=0, time=96))
    midi_file.tracks.append(melody)
    out = tmp_path / "no_tempo.mid"
    midi_file.save(str(out))

    decoded = decode_midi_file(out)

    assert len(decoded.tempos) == 1
    assert decoded.tempos[0].ticks == 0
    assert decoded.tempos[0].bpm == pytest.approx(120)
