"""HTTP endpoints for song timelines and imports."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query

from songflow.api.schemas import (
    ConvertResponse,
    CreateSongRequest,
    CreateSongResponse,
    ImportRequest,
    ImportResponse,
    TempoChangeRequest,
    TempoItem,
    TempoListResponse,
    TempoOverwriteRequest,
)
from songflow.api.store import SongStore
from songflow.composition.song import Song
from songflow.config import EngineSettings, configure_logging
from songflow.errors import SongflowError
from songflow.importer.merger import import_decoded_song
from songflow.plugin.context import plugin_context
from songflow.plugin.host import HostPlugin
from songflow.project.document import dump_song
from songflow.project.schema import SongDocument
from songflow.timeline.events import TempoEvent

logger = logging.getLogger(__name__)


def create_app(store: SongStore | None = None, settings: EngineSettings | None = None) -> FastAPI:
    app = FastAPI(title="songflow API", version="0.1.0")
    songs = store or SongStore()
    config = settings or EngineSettings.from_env()
    configure_logging(config)

    @app.get("/")
    def root() -> dict[str, str]:
        return {
            "service": "songflow API",
            "status": "ok",
            "docs": "/docs",
        }

    @app.post("/v1/songs", response_model=CreateSongResponse)
    def create_song(payload: CreateSongRequest) -> CreateSongResponse:
        song = Song()
        try:
            song.set_resolution(payload.resolution or config.default_resolution)
            song.create_tempo_change(ticks=0, bpm=payload.bpm or config.default_bpm)
            song.create_time_signature(ticks=0, numerator=payload.numerator, denominator=payload.denominator)
        except (SongflowError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        song_id = songs.add(song, title=payload.title)
        logger.info("created song %s", song_id)
        return CreateSongResponse(song_id=song_id)

    @app.get("/v1/songs/{song_id}", response_model=SongDocument)
    def get_song(song_id: str) -> SongDocument:
        try:
            with songs.acquire(song_id) as song:
                return dump_song(song, title=songs.title(song_id))
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.post("/v1/songs/{song_id}/tempos", response_model=TempoListResponse)
    def create_tempo(song_id: str, payload: TempoChangeRequest) -> TempoListResponse:
        try:
            with songs.acquire(song_id) as song:
                song.create_tempo_change(ticks=payload.ticks, bpm=payload.bpm)
                return _tempo_list(song)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (SongflowError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.put("/v1/songs/{song_id}/tempos", response_model=TempoListResponse)
    def overwrite_tempos(song_id: str, payload: TempoOverwriteRequest) -> TempoListResponse:
        try:
            with songs.acquire(song_id) as song:
                song.overwrite_tempo_changes(TempoEvent(ticks=item.ticks, bpm=item.bpm) for item in payload.tempos)
                return _tempo_list(song)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (SongflowError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/v1/songs/{song_id}/convert", response_model=ConvertResponse)
    def convert(
        song_id: str,
        tick: int | None = Query(default=None, ge=0),
        seconds: float | None = Query(default=None, ge=0),
    ) -> ConvertResponse:
        if (tick is None) == (seconds is None):
            raise HTTPException(status_code=400, detail="exactly one of tick or seconds is required")
        try:
            with songs.acquire(song_id) as song:
                if tick is not None:
                    return ConvertResponse(tick=tick, seconds=song.tick_to_seconds(tick))
                return ConvertResponse(tick=song.seconds_to_tick(seconds), seconds=seconds)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (SongflowError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/v1/songs/{song_id}/import", response_model=ImportResponse)
    def import_song(song_id: str, payload: ImportRequest) -> ImportResponse:
        try:
            with songs.acquire(song_id) as song:
                with plugin_context(song, HostPlugin()):
                    tracks = import_decoded_song(
                        song,
                        payload.data,
                        insert_at_tick=payload.insert_at_tick,
                        overwrite_tempos_and_time_signatures=payload.overwrite_tempos_and_time_signatures,
                    )
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (SongflowError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ImportResponse(track_ids=[track.track_id for track in tracks])

    return app


def _tempo_list(song: Song) -> TempoListResponse:
    return TempoListResponse(
        tempos=[TempoItem(ticks=tempo.ticks, bpm=tempo.bpm, time=tempo.time) for tempo in song.get_tempo_changes()]
    )


app = create_app()
