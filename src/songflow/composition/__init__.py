"""Composition model exports."""

from songflow.composition.audio_plugin import (
    DEFAULT_SYNTH_TFID,
    AudioPlugin,
    are_tuneflow_ids_equal,
    are_tuneflow_ids_equal_ignore_version,
    decode_audio_plugin_tuneflow_id,
    get_audio_plugin_tuneflow_id,
)
from songflow.composition.automation import (
    AutomationPoint,
    AutomationTarget,
    AutomationTargetType,
    AutomationValue,
    TrackAutomation,
)
from songflow.composition.models import AudioClipData, Clip, ClipType, InstrumentInfo, Note, Track, TrackType
from songflow.composition.song import Song

__all__ = [
    "AudioClipData",
    "AudioPlugin",
    "AutomationPoint",
    "AutomationTarget",
    "AutomationTargetType",
    "AutomationValue",
    "Clip",
    "ClipType",
    "DEFAULT_SYNTH_TFID",
    "InstrumentInfo",
    "Note",
    "Song",
    "Track",
    "TrackAutomation",
    "TrackType",
    "are_tuneflow_ids_equal",
    "are_tuneflow_ids_equal_ignore_version",
    "decode_audio_plugin_tuneflow_id",
    "get_audio_plugin_tuneflow_id",
]
