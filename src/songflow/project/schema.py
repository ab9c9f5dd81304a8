"""Song document schema: everything needed to rebuild a song timeline."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SongMeta(BaseModel):
    title: str = "Untitled"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class TempoDocument(BaseModel):
    ticks: int = Field(ge=0)
    bpm: float = Field(gt=0.0)
    time: float = Field(default=0.0, ge=0.0)


class TimeSignatureDocument(BaseModel):
    ticks: int = Field(ge=0)
    numerator: int = Field(ge=1)
    denominator: int = Field(ge=1)


class NoteDocument(BaseModel):
    pitch: int = Field(ge=0, le=127)
    velocity: int = Field(ge=0, le=127)
    start_tick: int = Field(ge=0)
    end_tick: int = Field(ge=1)


class AudioClipDocument(BaseModel):
    audio_file_path: str
    start_tick: int
    duration_seconds: float = Field(ge=0.0)


class ClipDocument(BaseModel):
    clip_type: Literal["midi", "audio"]
    clip_start_tick: int = Field(ge=0)
    clip_end_tick: int = Field(ge=0)
    notes: list[NoteDocument] = Field(default_factory=list)
    audio: AudioClipDocument | None = None


class InstrumentDocument(BaseModel):
    program: int = Field(ge=0, le=127)
    is_drum: bool = False


class AudioPluginDocument(BaseModel):
    tf_id: str
    is_enabled: bool = True
    base64_states: str | None = None


class AutomationDocument(BaseModel):
    target_type: Literal["volume", "pan", "audio_plugin"]
    # Index into the track's audio_plugins, instance ids are not persisted.
    plugin_index: int | None = None
    # Set when the automated plugin is the track's sampler.
    sampler: bool = False
    param_id: str | None = None
    disabled: bool = False
    points: list[tuple[int, float]] = Field(default_factory=list)


class TrackDocument(BaseModel):
    track_id: str
    type: Literal["midi", "audio"]
    rank: int = Field(ge=1)
    volume: float = Field(default=0.5, ge=0.0, le=1.0)
    pan: int = Field(default=0, ge=-64, le=64)
    solo: bool = False
    muted: bool = False
    instrument: InstrumentDocument | None = None
    suggested_instruments: list[InstrumentDocument] = Field(default_factory=list)
    sampler_plugin: AudioPluginDocument | None = None
    audio_plugins: list[AudioPluginDocument] = Field(default_factory=list)
    clips: list[ClipDocument] = Field(default_factory=list)
    automation: list[AutomationDocument] = Field(default_factory=list)


class SongDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    format_version: int = 1
    meta: SongMeta = Field(default_factory=SongMeta)
    resolution: int = Field(default=0, ge=0)
    tempos: list[TempoDocument] = Field(default_factory=list)
    time_signatures: list[TimeSignatureDocument] = Field(default_factory=list)
    tracks: list[TrackDocument] = Field(default_factory=list)
