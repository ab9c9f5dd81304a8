"""In-memory song store for the HTTP host."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator
from uuid import uuid4

from songflow.composition.song import Song


class SongStore:
    """Songs by id, each with its own lock so one song is mutated at a time."""

    def __init__(self) -> None:
        self._songs: dict[str, Song] = {}
        self._titles: dict[str, str] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def add(self, song: Song, title: str = "Untitled") -> str:
        song_id = str(uuid4())
        with self._guard:
            self._songs[song_id] = song
            self._titles[song_id] = title
            self._locks[song_id] = threading.Lock()
        return song_id

    def title(self, song_id: str) -> str:
        self._require(song_id)
        return self._titles[song_id]

    @contextmanager
    def acquire(self, song_id: str) -> Iterator[Song]:
        self._require(song_id)
        with self._locks[song_id]:
            yield self._songs[song_id]

    def _require(self, song_id: str) -> None:
        if song_id not in self._songs:
            raise KeyError(f"Song '{song_id}' not found")
