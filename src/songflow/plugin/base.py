"""Base class for song transformation plugins."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import uuid4

from songflow.plugin.access import MANUAL_ENABLE_ACCESS, SongAccess
from songflow.plugin.params import ParamDescriptor, is_param_value_set

if TYPE_CHECKING:
    from songflow.composition.song import Song

RunParameters = dict[str, Any]


class SongPlugin:
    """A plugin that transforms a song inside a pipeline.

    Subclasses override the identity classmethods, ``params``, ``song_access``
    and ``run``. The host creates instances with ``create`` and keeps them
    between runs so that ``generated_track_ids`` can be replayed.
    """

    def __init__(self) -> None:
        self._instance_id = str(uuid4())
        self.enabled = True
        self._params_result: RunParameters = {}
        # Append-only. The n-th track created in any run gets the n-th id.
        self.generated_track_ids: list[str] = []

    @classmethod
    def provider_id(cls) -> str:
        raise NotImplementedError("provider_id() should be overwritten.")

    @classmethod
    def plugin_id(cls) -> str:
        raise NotImplementedError("plugin_id() should be overwritten.")

    @classmethod
    def provider_display_name(cls) -> str:
        return cls.provider_id()

    @classmethod
    def plugin_display_name(cls) -> str:
        return cls.plugin_id()

    @classmethod
    def plugin_description(cls) -> str | None:
        return None

    @classmethod
    def id(cls) -> str:
        return f"{cls.provider_id()}.{cls.plugin_id()}"

    @classmethod
    def get_prefixed_artifact_id(cls, artifact_id: str) -> str:
        return f"{cls.id()}.{artifact_id}"

    @classmethod
    def create(cls) -> SongPlugin:
        plugin = cls()
        plugin.reset()
        plugin.init()
        return plugin

    def init(self) -> None:
        pass

    def params(self) -> dict[str, ParamDescriptor]:
        return {}

    def song_access(self) -> set[SongAccess]:
        return set()

    def run(self, song: Song, params: RunParameters) -> None:
        pass

    @property
    def instance_id(self) -> str:
        return self._instance_id

    def get_param(self, params: RunParameters, param_name: str) -> Any:
        return params[param_name]

    def has_all_params_set(self) -> bool:
        for param_name, descriptor in self.params().items():
            if not is_param_value_set(descriptor, self._params_result.get(param_name)):
                return False
        return True

    def set_params(self, params: RunParameters) -> None:
        self._params_result = dict(params)
        self._sync_enabled_with_params()

    def get_params(self) -> RunParameters:
        return dict(self._params_result)

    def reset_params(self) -> None:
        for param_name, descriptor in self.params().items():
            self._params_result[param_name] = descriptor.default_value
        self._sync_enabled_with_params()

    def reset(self) -> None:
        self.reset_params()
        if self.should_manual_enable():
            self.enabled = False

    def should_manual_enable(self) -> bool:
        return bool(self.song_access() & MANUAL_ENABLE_ACCESS)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def _sync_enabled_with_params(self) -> None:
        if self.should_manual_enable() and not self.has_all_params_set():
            self.enabled = False
