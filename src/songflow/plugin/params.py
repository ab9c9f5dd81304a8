"""Parameter descriptors collected from the host UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class WidgetType(str, Enum):
    INPUT = "input"
    PITCH = "pitch"
    SLIDER = "slider"
    TRACK_SELECTOR = "trackSelector"
    SELECT = "select"
    SWITCH = "switch"
    TRACK_PITCH_SELECTOR = "trackPitchSelector"
    INSTRUMENT_SELECTOR = "instrumentSelector"


@dataclass(slots=True)
class ParamDescriptor:
    widget_type: WidgetType
    default_value: Any = None
    display_name: str = ""
    options: dict[str, Any] = field(default_factory=dict)


def is_param_value_set(descriptor: ParamDescriptor, value: Any) -> bool:
    if value is None:
        return False
    if descriptor.widget_type == WidgetType.TRACK_PITCH_SELECTOR:
        return _has_keys(value, ("track", "pitch"))
    if descriptor.widget_type == WidgetType.INSTRUMENT_SELECTOR:
        return _has_keys(value, ("program", "is_drum"))
    return True


def _has_keys(value: Any, keys: tuple[str, ...]) -> bool:
    if not isinstance(value, dict):
        return False
    return all(value.get(key) is not None for key in keys)
