"""Song timeline and composition engine for plugin pipelines."""

from songflow.composition import Clip, Note, Song, Track, TrackType
from songflow.config import EngineSettings, configure_logging
from songflow.errors import (
    MissingSongAccessError,
    NoPluginContextError,
    PluginAccessError,
    PluginContextError,
    SongflowError,
    SongInvariantError,
    TrackIdPoolOutOfSyncError,
)
from songflow.plugin import PluginRunner, SongAccess, SongPlugin, plugin_context
from songflow.timeline import TempoEvent, TimeSignatureEvent, Timeline

__all__ = [
    "Clip",
    "EngineSettings",
    "MissingSongAccessError",
    "NoPluginContextError",
    "Note",
    "PluginAccessError",
    "PluginContextError",
    "PluginRunner",
    "Song",
    "SongAccess",
    "SongInvariantError",
    "SongPlugin",
    "SongflowError",
    "TempoEvent",
    "TimeSignatureEvent",
    "Timeline",
    "Track",
    "TrackIdPoolOutOfSyncError",
    "TrackType",
    "configure_logging",
    "plugin_context",
]
