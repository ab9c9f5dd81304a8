"""Error taxonomy shared by the timeline, composition and plugin layers."""

from __future__ import annotations


class SongflowError(Exception):
    """Base class for all songflow errors."""


class SongInvariantError(SongflowError, ValueError):
    """Raised when an operation would break a song timeline invariant."""


class PluginAccessError(SongflowError, PermissionError):
    """Raised when a privileged song method is called without the right access."""


class NoPluginContextError(PluginAccessError):
    def __init__(self) -> None:
        super().__init__("Song needs to be accessed in a plugin context in order to use privileged methods.")


class MissingSongAccessError(PluginAccessError):
    def __init__(self, plugin_id: str, access: str) -> None:
        super().__init__(f"Plugin {plugin_id} requires access {access} in order to run.")
        self.plugin_id = plugin_id
        self.access = access


class PluginContextError(SongflowError, RuntimeError):
    """Raised when a plugin context is attached on top of another one."""


class TrackIdPoolOutOfSyncError(SongflowError, RuntimeError):
    """Raised when a plugin's replay id pool no longer matches its run history."""
