"""Standard MIDI file decoding with mido."""

from __future__ import annotations

from collections import defaultdict, deque
from pathlib import Path

import mido

from songflow.importer.schemas import (
    DecodedControlChange,
    DecodedInstrument,
    DecodedNote,
    DecodedSong,
    DecodedTempo,
    DecodedTimeSignature,
    DecodedTrack,
)

PERCUSSION_CHANNEL = 9
DEFAULT_MIDI_BPM = mido.tempo2bpm(500000)


def decode_midi_file(source: str | Path | mido.MidiFile) -> DecodedSong:
    """Reads a MIDI file into absolute-tick decoded data.

    Velocities and controller values are normalized to 0..1. Tracks without
    notes or controller data (conductor tracks) are skipped.
    """
    midi_file = source if isinstance(source, mido.MidiFile) else mido.MidiFile(str(source))
    resolution = midi_file.ticks_per_beat

    raw_tempos: list[tuple[int, float]] = []
    time_signatures: list[DecodedTimeSignature] = []
    tracks: list[DecodedTrack] = []

    for midi_track in midi_file.tracks:
        tick = 0
        open_notes: dict[tuple[int, int], deque[tuple[int, int]]] = defaultdict(deque)
        notes: list[DecodedNote] = []
        control_changes: dict[int, list[DecodedControlChange]] = defaultdict(list)
        program: int | None = None
        percussion = False

        for msg in midi_track:
            tick += msg.time
            if msg.type == "set_tempo":
                raw_tempos.append((tick, mido.tempo2bpm(msg.tempo)))
            elif msg.type == "time_signature":
                time_signatures.append(
                    DecodedTimeSignature(ticks=tick, numerator=msg.numerator, denominator=msg.denominator)
                )
            elif msg.type == "program_change":
                if program is None:
                    program = msg.program
            elif msg.type == "control_change":
                control_changes[msg.control].append(DecodedControlChange(ticks=tick, value=msg.value / 127))
            elif msg.type == "note_on" and msg.velocity > 0:
                open_notes[(msg.channel, msg.note)].append((tick, msg.velocity))
                percussion = percussion or msg.channel == PERCUSSION_CHANNEL
            elif msg.type in ("note_off", "note_on"):
                pending = open_notes.get((msg.channel, msg.note))
                if not pending:
                    continue
                start_tick, velocity = pending.popleft()
                notes.append(
                    DecodedNote(
                        ticks=start_tick,
                        duration_ticks=tick - start_tick,
                        midi=msg.note,
                        velocity=velocity / 127,
                    )
                )

        if not notes and not control_changes:
            continue
        notes.sort(key=lambda note: note.ticks)
        tracks.append(
            DecodedTrack(
                name=_track_name(midi_track),
                instrument=DecodedInstrument(program=program or 0, percussion=percussion),
                notes=notes,
                control_changes=dict(control_changes),
            )
        )

    return DecodedSong(
        resolution=resolution,
        tempos=_timed_tempos(raw_tempos, resolution),
        time_signatures=sorted(time_signatures, key=lambda item: item.ticks),
        tracks=tracks,
    )


def _timed_tempos(raw_tempos: list[tuple[int, float]], resolution: int) -> list[DecodedTempo]:
    ordered = sorted(raw_tempos, key=lambda item: item[0])
    if not ordered or ordered[0][0] > 0:
        # Standard MIDI files play at 120 BPM until the first set_tempo.
        ordered.insert(0, (0, DEFAULT_MIDI_BPM))
    tempos: list[DecodedTempo] = []
    for tick, bpm in ordered:
        time = 0.0
        if tempos:
            previous = tempos[-1]
            time = previous.time + (tick - previous.ticks) * 60 / (previous.bpm * resolution)
        tempos.append(DecodedTempo(ticks=tick, time=time, bpm=bpm))
    return tempos


def _track_name(midi_track: mido.MidiTrack) -> str:
    name = getattr(midi_track, "name", "")
    return name or ""
