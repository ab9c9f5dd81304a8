"""Track, clip and note models.

Clips cover the closed tick interval ``[clip_start_tick, clip_end_tick]``.
A note belongs to a clip when its start tick lies inside that interval; the
note may ring past ``clip_end_tick`` only when the clip was not grown to it.
Track and song end ticks aggregate ``clip_end_tick``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from uuid import uuid4

from songflow.composition.audio_plugin import DEFAULT_SYNTH_TFID, AudioPlugin
from songflow.composition.automation import TrackAutomation
from songflow.timeline.ordering import insert_sorted

if TYPE_CHECKING:
    from songflow.composition.song import Song


class TrackType(str, Enum):
    MIDI_TRACK = "midi"
    AUDIO_TRACK = "audio"


class ClipType(str, Enum):
    MIDI_CLIP = "midi"
    AUDIO_CLIP = "audio"


@dataclass(slots=True)
class Note:
    pitch: int
    velocity: int
    start_tick: int
    end_tick: int

    def validate(self) -> None:
        if not (0 <= self.pitch <= 127):
            raise ValueError("pitch must be in range [0,127]")
        if not (0 <= self.velocity <= 127):
            raise ValueError("velocity must be in range [0,127]")
        if self.start_tick < 0:
            raise ValueError("start_tick must be >= 0")
        if self.end_tick <= self.start_tick:
            raise ValueError("end_tick must be > start_tick")

    def move(self, offset: int) -> None:
        self.start_tick += offset
        self.end_tick += offset


@dataclass(slots=True)
class InstrumentInfo:
    program: int
    is_drum: bool

    def validate(self) -> None:
        if not (0 <= self.program <= 127):
            raise ValueError("program must be in range [0,127]")


@dataclass(slots=True)
class AudioClipData:
    audio_file_path: str
    start_tick: int
    duration_seconds: float


def _note_start(note: Note) -> int:
    return note.start_tick


def _clip_start(clip: Clip) -> int:
    return clip.clip_start_tick


class Clip:
    def __init__(
        self,
        clip_type: ClipType,
        clip_start_tick: int,
        clip_end_tick: int | None = None,
        track: Track | None = None,
        audio_clip_data: AudioClipData | None = None,
    ) -> None:
        if clip_start_tick < 0:
            raise ValueError("clip_start_tick must be >= 0")
        if clip_end_tick is None:
            clip_end_tick = clip_start_tick
        if clip_end_tick < clip_start_tick:
            raise ValueError("clip_end_tick must be >= clip_start_tick")
        if clip_type == ClipType.AUDIO_CLIP and audio_clip_data is None:
            raise ValueError("audio clips need audio_clip_data")
        self.clip_id = str(uuid4())
        self.type = clip_type
        self.clip_start_tick = clip_start_tick
        self.clip_end_tick = clip_end_tick
        self.track = track
        self.audio_clip_data = audio_clip_data
        self._notes: list[Note] = []

    def get_notes(self) -> list[Note]:
        return list(self._notes)

    def create_note(
        self,
        pitch: int,
        velocity: int,
        start_tick: int,
        end_tick: int,
        update_clip_range: bool = True,
    ) -> Note | None:
        """Adds a note ordered by start tick.

        Returns None when the note starts outside the clip and
        ``update_clip_range`` is off.
        """
        if self.type != ClipType.MIDI_CLIP:
            raise ValueError("notes can only be created in MIDI clips")
        note = Note(pitch=pitch, velocity=velocity, start_tick=start_tick, end_tick=end_tick)
        note.validate()
        if update_clip_range:
            self.clip_start_tick = min(self.clip_start_tick, start_tick)
            self.clip_end_tick = max(self.clip_end_tick, end_tick)
        elif not self.contains_tick(start_tick):
            return None
        insert_sorted(self._notes, note, key=_note_start)
        return note

    def delete_note(self, note: Note) -> None:
        for index, existing in enumerate(self._notes):
            if existing is note:
                del self._notes[index]
                return
        raise KeyError("note not found in clip")

    def contains_tick(self, tick: int) -> bool:
        return self.clip_start_tick <= tick <= self.clip_end_tick

    def adjust_clip_left(self, clip_start_tick: int) -> None:
        """Moves the left boundary; notes keep their ticks, notes left outside are dropped."""
        self.clip_start_tick = min(max(clip_start_tick, 0), self.clip_end_tick)
        self._notes = [note for note in self._notes if self.contains_tick(note.start_tick)]

    def adjust_clip_right(self, clip_end_tick: int) -> None:
        self.clip_end_tick = max(clip_end_tick, self.clip_start_tick)
        self._notes = [note for note in self._notes if self.contains_tick(note.start_tick)]

    def move_clip(self, offset: int) -> None:
        if self.clip_start_tick + offset < 0:
            raise ValueError("clip cannot move before tick 0")
        self.clip_start_tick += offset
        self.clip_end_tick += offset
        for note in self._notes:
            note.move(offset)
        if self.audio_clip_data is not None:
            self.audio_clip_data.start_tick += offset

    def get_duration(self) -> int:
        return self.clip_end_tick - self.clip_start_tick


class Track:
    """A track owned by one song. Create through ``Song.create_track``."""

    def __init__(self, track_type: TrackType, song: Song, track_id: str, rank: int) -> None:
        self.type = track_type
        self.song = song
        self.track_id = track_id
        self.rank = rank
        self.volume = 0.5
        self.pan = 0
        self.solo = False
        self.muted = False
        self.instrument: InstrumentInfo | None = None
        self.suggested_instruments: list[InstrumentInfo] = []
        self.sampler_plugin: AudioPlugin | None = None
        self._audio_plugins: dict[str, AudioPlugin] = {}
        self._clips: list[Clip] = []
        self._automation = TrackAutomation()
        if track_type == TrackType.MIDI_TRACK:
            self.instrument = InstrumentInfo(program=0, is_drum=False)
            self.sampler_plugin = self.create_audio_plugin(DEFAULT_SYNTH_TFID)

    # -- mixer ----------------------------------------------------------------

    def set_volume(self, volume: float) -> None:
        if not (0.0 <= volume <= 1.0):
            raise ValueError("volume must be in range [0,1]")
        self.volume = volume

    def set_pan(self, pan: int) -> None:
        if not (-64 <= pan <= 64):
            raise ValueError("pan must be in range [-64,64]")
        self.pan = pan

    def set_solo(self, solo: bool) -> None:
        self.solo = solo

    def set_muted(self, muted: bool) -> None:
        self.muted = muted

    # -- instruments ------------------------------------------------------------

    def set_instrument(self, program: int, is_drum: bool) -> InstrumentInfo:
        self._require_midi_track()
        instrument = InstrumentInfo(program=program, is_drum=is_drum)
        instrument.validate()
        self.instrument = instrument
        return instrument

    def create_suggested_instrument(self, program: int, is_drum: bool) -> InstrumentInfo:
        self._require_midi_track()
        instrument = InstrumentInfo(program=program, is_drum=is_drum)
        instrument.validate()
        self.suggested_instruments.append(instrument)
        return instrument

    def set_sampler_plugin(self, plugin: AudioPlugin | None) -> None:
        self._require_midi_track()
        self.sampler_plugin = plugin

    # -- audio plugins ----------------------------------------------------------

    def create_audio_plugin(self, tf_id: str) -> AudioPlugin:
        """Builds a plugin instance for this track without attaching it."""
        return AudioPlugin.from_tuneflow_id(tf_id)

    def add_audio_plugin(self, plugin: AudioPlugin) -> None:
        self._audio_plugins[plugin.instance_id] = plugin

    def remove_audio_plugin(self, instance_id: str) -> AudioPlugin | None:
        plugin = self._audio_plugins.pop(instance_id, None)
        if plugin is not None:
            self._automation.remove_automation_of_plugin(instance_id)
        return plugin

    def get_audio_plugins(self) -> list[AudioPlugin]:
        return list(self._audio_plugins.values())

    def get_audio_plugin_by_instance_id(self, instance_id: str) -> AudioPlugin | None:
        return self._audio_plugins.get(instance_id)

    # -- clips ------------------------------------------------------------------

    def get_clips(self) -> list[Clip]:
        return list(self._clips)

    def get_clip_by_id(self, clip_id: str) -> Clip | None:
        for clip in self._clips:
            if clip.clip_id == clip_id:
                return clip
        return None

    def create_midi_clip(
        self,
        clip_start_tick: int,
        clip_end_tick: int | None = None,
        insert_clip: bool = True,
    ) -> Clip:
        self._require_midi_track()
        clip = Clip(ClipType.MIDI_CLIP, clip_start_tick=clip_start_tick, clip_end_tick=clip_end_tick, track=self)
        if insert_clip:
            self.insert_clip(clip)
        return clip

    def create_audio_clip(
        self,
        clip_start_tick: int,
        clip_end_tick: int,
        audio_clip_data: AudioClipData,
        insert_clip: bool = True,
    ) -> Clip:
        if self.type != TrackType.AUDIO_TRACK:
            raise ValueError("audio clips can only be created in audio tracks")
        clip = Clip(
            ClipType.AUDIO_CLIP,
            clip_start_tick=clip_start_tick,
            clip_end_tick=clip_end_tick,
            track=self,
            audio_clip_data=audio_clip_data,
        )
        if insert_clip:
            self.insert_clip(clip)
        return clip

    def insert_clip(self, clip: Clip) -> None:
        clip.track = self
        insert_sorted(self._clips, clip, key=_clip_start)

    def clone_clip(self, clip: Clip) -> Clip:
        """Copies ``clip`` for this track at the same ticks; the copy is not inserted."""
        audio_clip_data = None
        if clip.audio_clip_data is not None:
            audio_clip_data = AudioClipData(
                audio_file_path=clip.audio_clip_data.audio_file_path,
                start_tick=clip.audio_clip_data.start_tick,
                duration_seconds=clip.audio_clip_data.duration_seconds,
            )
        copied = Clip(
            clip.type,
            clip_start_tick=clip.clip_start_tick,
            clip_end_tick=clip.clip_end_tick,
            track=self,
            audio_clip_data=audio_clip_data,
        )
        for note in clip.get_notes():
            copied.create_note(
                pitch=note.pitch,
                velocity=note.velocity,
                start_tick=note.start_tick,
                end_tick=note.end_tick,
                update_clip_range=False,
            )
        return copied

    def delete_clip(self, clip_id: str) -> Clip | None:
        for index, clip in enumerate(self._clips):
            if clip.clip_id == clip_id:
                del self._clips[index]
                clip.track = None
                return clip
        return None

    def get_track_end_tick(self) -> int:
        return max((clip.clip_end_tick for clip in self._clips), default=0)

    def get_automation(self) -> TrackAutomation:
        return self._automation

    def _require_midi_track(self) -> None:
        if self.type != TrackType.MIDI_TRACK:
            raise ValueError(f"track '{self.track_id}' is not a MIDI track")
