"""Song document exports."""

from songflow.project.document import dump_song, load_song
from songflow.project.schema import SongDocument, TrackDocument

__all__ = ["SongDocument", "TrackDocument", "dump_song", "load_song"]
