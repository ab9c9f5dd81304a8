"""FastAPI request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from songflow.importer.schemas import DecodedSong


class CreateSongRequest(BaseModel):
    title: str = "Untitled"
    resolution: int | None = Field(default=None, ge=1)
    bpm: float | None = Field(default=None, gt=0.0)
    numerator: int = Field(default=4, ge=1)
    denominator: int = Field(default=4, ge=1)


class CreateSongResponse(BaseModel):
    song_id: str


class TempoChangeRequest(BaseModel):
    ticks: int = Field(ge=0)
    bpm: float = Field(gt=0.0)


class TempoOverwriteRequest(BaseModel):
    tempos: list[TempoChangeRequest]


class TempoItem(BaseModel):
    ticks: int
    bpm: float
    time: float


class TempoListResponse(BaseModel):
    tempos: list[TempoItem]


class ConvertResponse(BaseModel):
    tick: int
    seconds: float


class ImportRequest(BaseModel):
    data: DecodedSong
    insert_at_tick: int = Field(default=0, ge=0)
    overwrite_tempos_and_time_signatures: bool = False


class ImportResponse(BaseModel):
    track_ids: list[str]
