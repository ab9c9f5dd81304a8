"""Runs plugins against a song and keeps a run history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from songflow.plugin.base import SongPlugin
from songflow.plugin.context import plugin_context

if TYPE_CHECKING:
    from songflow.composition.song import Song

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PluginRunRecord:
    plugin_id: str
    instance_id: str
    created_track_ids: list[str]
    succeeded: bool
    error: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class PluginRunner:
    def __init__(self) -> None:
        self._history: list[PluginRunRecord] = []

    def run(self, plugin: SongPlugin, song: Song) -> bool:
        """Runs ``plugin`` on ``song``. Returns False when the plugin is disabled."""
        plugin_id = type(plugin).id()
        if not plugin.enabled:
            logger.warning("skipping disabled plugin %s", plugin_id)
            return False

        logger.info("running plugin %s (%s)", plugin_id, plugin.instance_id)
        with plugin_context(song, plugin) as context:
            try:
                plugin.run(song, plugin.get_params())
            except Exception as exc:
                self._record(plugin, context.num_tracks_created, succeeded=False, error=str(exc))
                raise
            self._record(plugin, context.num_tracks_created, succeeded=True)
        return True

    def get_history(self, plugin_id: str | None = None) -> list[PluginRunRecord]:
        items: list[PluginRunRecord] = []
        for record in reversed(self._history):
            if plugin_id is not None and record.plugin_id != plugin_id:
                continue
            items.append(record)
        return items

    def _record(self, plugin: SongPlugin, num_tracks_created: int, succeeded: bool, error: str | None = None) -> None:
        self._history.append(
            PluginRunRecord(
                plugin_id=type(plugin).id(),
                instance_id=plugin.instance_id,
                created_track_ids=plugin.generated_track_ids[:num_tracks_created],
                succeeded=succeeded,
                error=error,
            )
        )
