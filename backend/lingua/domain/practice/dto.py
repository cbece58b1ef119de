from dataclasses import dataclass, field, replace
from typing import Any

from lingua.core.enums import ExerciseCategory, ExerciseType


DEFAULT_WEAKNESS_THRESHOLD = 70.0


def _implemented_types() -> frozenset[ExerciseType]:
    return frozenset(t for t in ExerciseType if t.is_implemented)


@dataclass(frozen=True)
class ExercisePreferences:
    """
    User choice of exercise types and how to order them.
    Read-only for the scheduler; every change returns a new instance.
    """

    enabled_types: frozenset[ExerciseType] = field(default_factory=_implemented_types)
    prioritize_weaknesses: bool = True
    weakness_threshold: float = DEFAULT_WEAKNESS_THRESHOLD

    @classmethod
    def defaults(cls) -> "ExercisePreferences":
        return cls()

    def is_enabled(self, exercise_type: ExerciseType) -> bool:
        return exercise_type in self.enabled_types

    @property
    def has_any_enabled(self) -> bool:
        return bool(self.enabled_types)

    @property
    def enabled_count(self) -> int:
        return len(self.enabled_types)

    def is_category_fully_enabled(self, category: ExerciseCategory) -> bool:
        return all(t in self.enabled_types for t in category.exercise_types)

    def is_category_partially_enabled(self, category: ExerciseCategory) -> bool:
        types = category.exercise_types
        enabled = [t for t in types if t in self.enabled_types]
        return 0 < len(enabled) < len(types)

    def toggle_type(self, exercise_type: ExerciseType) -> "ExercisePreferences":
        return replace(self, enabled_types=self.enabled_types ^ {exercise_type})

    def toggle_category(self, category: ExerciseCategory, *, enabled: bool) -> "ExercisePreferences":
        types = set(category.exercise_types)
        if enabled:
            return replace(self, enabled_types=self.enabled_types | types)
        return replace(self, enabled_types=self.enabled_types - types)

    def enable_all(self) -> "ExercisePreferences":
        return replace(self, enabled_types=_implemented_types())

    def disable_all(self) -> "ExercisePreferences":
        return replace(self, enabled_types=frozenset())

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled_types": sorted(t.value for t in self.enabled_types),
            "prioritize_weaknesses": self.prioritize_weaknesses,
            "weakness_threshold": self.weakness_threshold,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExercisePreferences":
        enabled = set()
        for name in data.get("enabled_types") or []:
            try:
                exercise_type = ExerciseType(name)
            except ValueError:
                continue
            if exercise_type.is_implemented:
                enabled.add(exercise_type)

        threshold = data.get("weakness_threshold")
        return cls(
            enabled_types=frozenset(enabled),
            prioritize_weaknesses=bool(data.get("prioritize_weaknesses", True)),
            weakness_threshold=float(threshold) if threshold is not None else DEFAULT_WEAKNESS_THRESHOLD,
        )


@dataclass(frozen=True)
class SchedulingSettingsSnapshot:
    # Incorrect answers come back after a few hours
    retry_hours: float = 4.0

    # Base interval in days per card difficulty (1 = easiest)
    base_days: tuple[float, ...] = (1, 3, 7, 14, 30)

    mastery_rate: float = 90.0
    good_rate: float = 70.0
    learning_rate: float = 50.0

    mastery_multiplier: float = 2.0
    good_multiplier: float = 1.5
    learning_multiplier: float = 1.0
    weak_multiplier: float = 0.5

    min_attempts_for_mastery: int = 3

    # Each extra correct answer stretches the interval a little, up to the cap
    growth_factor: float = 0.5
    max_growth: float = 4.0
