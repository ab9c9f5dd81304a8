"""Audio plugin instances attached to tracks."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from songflow.composition.models import Track

_SEPARATOR = "|"


def get_audio_plugin_tuneflow_id(manufacturer_name: str, plugin_format_name: str, name: str, version: str) -> str:
    """Identity string of an audio plugin type, independent of any instance."""
    return _SEPARATOR.join((manufacturer_name, plugin_format_name, name, version))


def decode_audio_plugin_tuneflow_id(tf_id: str) -> tuple[str, str, str, str]:
    parts = tf_id.split(_SEPARATOR)
    if len(parts) != 4:
        raise ValueError(f"invalid audio plugin id '{tf_id}'")
    manufacturer_name, plugin_format_name, name, version = parts
    return manufacturer_name, plugin_format_name, name, version


def are_tuneflow_ids_equal(tf_id1: str, tf_id2: str) -> bool:
    return tf_id1 == tf_id2


def are_tuneflow_ids_equal_ignore_version(tf_id1: str, tf_id2: str) -> bool:
    return decode_audio_plugin_tuneflow_id(tf_id1)[:3] == decode_audio_plugin_tuneflow_id(tf_id2)[:3]


def _generate_instance_id() -> str:
    return uuid4().hex[:10]


class AudioPlugin:
    """One audio plugin instance. Create through ``Track.create_audio_plugin``."""

    def __init__(self, name: str, manufacturer_name: str, plugin_format_name: str, plugin_version: str) -> None:
        self.name = name
        self.manufacturer_name = manufacturer_name
        self.plugin_format_name = plugin_format_name
        self.plugin_version = plugin_version
        self.is_enabled = True
        self.base64_states: str | None = None
        self._instance_id = _generate_instance_id()

    @staticmethod
    def from_tuneflow_id(tf_id: str) -> AudioPlugin:
        manufacturer_name, plugin_format_name, name, version = decode_audio_plugin_tuneflow_id(tf_id)
        return AudioPlugin(
            name=name,
            manufacturer_name=manufacturer_name,
            plugin_format_name=plugin_format_name,
            plugin_version=version,
        )

    @property
    def instance_id(self) -> str:
        return self._instance_id

    def get_tuneflow_id(self) -> str:
        return get_audio_plugin_tuneflow_id(
            self.manufacturer_name,
            self.plugin_format_name,
            self.name,
            self.plugin_version,
        )

    def matches_tf_id(self, tf_id: str) -> bool:
        return are_tuneflow_ids_equal(tf_id, self.get_tuneflow_id())

    def matches_tf_id_ignore_version(self, tf_id: str) -> bool:
        return are_tuneflow_ids_equal_ignore_version(tf_id, self.get_tuneflow_id())

    def clone(self, new_track: Track) -> AudioPlugin:
        plugin = new_track.create_audio_plugin(self.get_tuneflow_id())
        plugin.is_enabled = self.is_enabled
        plugin.base64_states = self.base64_states
        return plugin

    def to_json(self) -> dict[str, object]:
        return {
            "name": self.name,
            "manufacturerName": self.manufacturer_name,
            "pluginFormatName": self.plugin_format_name,
            "pluginVersion": self.plugin_version,
            "isEnabled": self.is_enabled,
        }


DEFAULT_SYNTH_TFID = get_audio_plugin_tuneflow_id("TuneFlow", "VST3", "TFSynth", "1.0.0")
