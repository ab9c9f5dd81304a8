"""Per-run plugin execution context and replayable track ids."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator
from uuid import uuid4

from songflow.errors import TrackIdPoolOutOfSyncError
from songflow.plugin.base import SongPlugin

if TYPE_CHECKING:
    from songflow.composition.song import Song

logger = logging.getLogger(__name__)


def generate_track_id() -> str:
    return str(uuid4())


class PluginContext:
    """Binds one plugin run to one song.

    Track ids are drawn from ``plugin.generated_track_ids`` by call order, so a
    plugin that creates tracks in the same sequence gets the same ids on every
    run.
    """

    def __init__(self, plugin: SongPlugin) -> None:
        self.plugin = plugin
        self.num_tracks_created = 0

    def next_track_id(self) -> str:
        pool = self.plugin.generated_track_ids
        if self.num_tracks_created == len(pool):
            pool.append(generate_track_id())
            logger.debug("minted track id %s for plugin %s", pool[-1], self.plugin.instance_id)
        elif self.num_tracks_created > len(pool):
            raise TrackIdPoolOutOfSyncError(
                f"Plugin generated track ids out of sync: {self.num_tracks_created} created, {len(pool)} recorded."
            )
        track_id = pool[self.num_tracks_created]
        self.num_tracks_created += 1
        return track_id


@contextmanager
def plugin_context(song: Song, plugin: SongPlugin) -> Iterator[PluginContext]:
    """Attaches ``plugin`` to ``song`` for the block and always detaches it."""
    context = song.set_plugin_context(plugin)
    try:
        yield context
    finally:
        song.clear_plugin_context()
