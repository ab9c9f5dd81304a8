"""Decoded external song data, each value in the source file's own resolution."""

from __future__ import annotations

from pydantic import BaseModel, Field

CC_VOLUME = 7
CC_PAN = 10


class DecodedTempo(BaseModel):
    ticks: int = Field(ge=0)
    time: float = Field(default=0.0, ge=0.0)
    bpm: float = Field(gt=0.0)


class DecodedTimeSignature(BaseModel):
    ticks: int = Field(ge=0)
    numerator: int = Field(ge=1)
    denominator: int = Field(ge=1)


class DecodedInstrument(BaseModel):
    program: int = Field(default=0, ge=0, le=127)
    percussion: bool = False


class DecodedNote(BaseModel):
    ticks: int = Field(ge=0)
    duration_ticks: int = Field(ge=0)
    midi: int = Field(ge=0, le=127)
    velocity: float = Field(ge=0.0, le=1.0)


class DecodedControlChange(BaseModel):
    ticks: int = Field(ge=0)
    value: float


class DecodedTrack(BaseModel):
    name: str = ""
    instrument: DecodedInstrument = Field(default_factory=DecodedInstrument)
    notes: list[DecodedNote] = Field(default_factory=list)
    control_changes: dict[int, list[DecodedControlChange]] = Field(default_factory=dict)


class DecodedSong(BaseModel):
    resolution: int = Field(ge=1)
    tempos: list[DecodedTempo] = Field(default_factory=list)
    time_signatures: list[DecodedTimeSignature] = Field(default_factory=list)
    tracks: list[DecodedTrack] = Field(default_factory=list)
