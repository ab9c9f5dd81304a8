"""Plugin execution exports."""

from songflow.plugin.access import MANUAL_ENABLE_ACCESS, SongAccess
from songflow.plugin.base import RunParameters, SongPlugin
from songflow.plugin.context import PluginContext, generate_track_id, plugin_context
from songflow.plugin.host import HostPlugin
from songflow.plugin.params import ParamDescriptor, WidgetType, is_param_value_set
from songflow.plugin.runner import PluginRunner, PluginRunRecord

__all__ = [
    "HostPlugin",
    "MANUAL_ENABLE_ACCESS",
    "ParamDescriptor",
    "PluginContext",
    "PluginRunRecord",
    "PluginRunner",
    "RunParameters",
    "SongAccess",
    "SongPlugin",
    "WidgetType",
    "generate_track_id",
    "is_param_value_set",
    "plugin_context",
]
