"""Privileged plugin used by the host itself for imports and loading."""

from __future__ import annotations

from songflow.plugin.access import SongAccess
from songflow.plugin.base import SongPlugin


class HostPlugin(SongPlugin):
    @classmethod
    def provider_id(cls) -> str:
        return "songflow"

    @classmethod
    def plugin_id(cls) -> str:
        return "host"

    def song_access(self) -> set[SongAccess]:
        return set(SongAccess)

    def should_manual_enable(self) -> bool:
        return False
