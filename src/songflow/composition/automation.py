"""Track automation targets and value curves."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from songflow.timeline.ordering import insert_sorted, lower_bound, upper_bound


class AutomationTargetType(str, Enum):
    VOLUME = "volume"
    PAN = "pan"
    AUDIO_PLUGIN = "audio_plugin"


@dataclass(frozen=True, slots=True)
class AutomationTarget:
    type: AutomationTargetType
    plugin_instance_id: str | None = None
    param_id: str | None = None

    def __post_init__(self) -> None:
        if self.type == AutomationTargetType.AUDIO_PLUGIN:
            if not self.plugin_instance_id or not self.param_id:
                raise ValueError("audio plugin automation needs plugin_instance_id and param_id")
        elif self.plugin_instance_id is not None or self.param_id is not None:
            raise ValueError(f"'{self.type.value}' automation does not take plugin parameters")

    def to_tf_automation_target_id(self) -> str:
        if self.type == AutomationTargetType.AUDIO_PLUGIN:
            return f"{self.type.value}^^{self.plugin_instance_id}^^{self.param_id}"
        return self.type.value


@dataclass(slots=True)
class AutomationPoint:
    point_id: int
    tick: int
    value: float


def _point_tick(point: AutomationPoint) -> int:
    return point.tick


@dataclass(slots=True)
class AutomationValue:
    points: list[AutomationPoint] = field(default_factory=list)
    disabled: bool = False
    _next_point_id: int = field(default=1, repr=False)

    def add_point(self, tick: int, value: float) -> AutomationPoint:
        if tick < 0:
            raise ValueError("tick must be >= 0")
        point = AutomationPoint(point_id=self._next_point_id, tick=tick, value=value)
        self._next_point_id += 1
        insert_sorted(self.points, point, key=_point_tick)
        return point

    def remove_point(self, point_id: int) -> None:
        self.points = [point for point in self.points if point.point_id != point_id]

    def remove_points_in_range(self, start_tick: int, end_tick: int) -> None:
        """Drop points with ``start_tick <= tick <= end_tick``."""
        first = lower_bound(self.points, start_tick, key=_point_tick)
        last = upper_bound(self.points, end_tick, key=_point_tick)
        del self.points[first:last]


class TrackAutomation:
    def __init__(self) -> None:
        self._targets: list[AutomationTarget] = []
        self._values: dict[AutomationTarget, AutomationValue] = {}

    def add_automation(self, target: AutomationTarget) -> AutomationValue:
        """Registers ``target``; an existing target keeps its curve."""
        existing = self._values.get(target)
        if existing is not None:
            return existing
        value = AutomationValue()
        self._targets.append(target)
        self._values[target] = value
        return value

    def remove_automation(self, target: AutomationTarget) -> None:
        if target not in self._values:
            return
        self._targets.remove(target)
        del self._values[target]

    def remove_automation_of_plugin(self, plugin_instance_id: str) -> None:
        for target in list(self._targets):
            if target.plugin_instance_id == plugin_instance_id:
                self.remove_automation(target)

    def get_automation_targets(self) -> list[AutomationTarget]:
        return list(self._targets)

    def get_automation_value_by_target(self, target: AutomationTarget) -> AutomationValue | None:
        return self._values.get(target)

    def is_empty(self) -> bool:
        return not self._targets
