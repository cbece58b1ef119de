from typing import List

from pydantic import BaseModel, Field

from lingua.core.enums import ExerciseCategory, ExerciseType
from lingua.domain.practice.dto import DEFAULT_WEAKNESS_THRESHOLD, ExercisePreferences


class CategoryState(BaseModel):
    category: ExerciseCategory
    display_name: str
    fully_enabled: bool
    partially_enabled: bool


class PreferencesOut(BaseModel):
    enabled_types: List[ExerciseType]
    prioritize_weaknesses: bool
    weakness_threshold: float
    enabled_count: int
    categories: List[CategoryState]

    @classmethod
    def from_domain(cls, prefs: ExercisePreferences) -> "PreferencesOut":
        return cls(
            enabled_types=[t for t in ExerciseType if prefs.is_enabled(t)],
            prioritize_weaknesses=prefs.prioritize_weaknesses,
            weakness_threshold=prefs.weakness_threshold,
            enabled_count=prefs.enabled_count,
            categories=[
                CategoryState(
                    category=c,
                    display_name=c.display_name,
                    fully_enabled=prefs.is_category_fully_enabled(c),
                    partially_enabled=prefs.is_category_partially_enabled(c),
                )
                for c in ExerciseCategory
            ],
        )


class UpdatePreferencesRequest(BaseModel):
    enabled_types: List[ExerciseType]
    prioritize_weaknesses: bool = True
    weakness_threshold: float = Field(DEFAULT_WEAKNESS_THRESHOLD, ge=0, le=100)
    # Reorder the rest of a running session right away
    rebuild_queue: bool = True

    def to_domain(self) -> ExercisePreferences:
        return ExercisePreferences(
            enabled_types=frozenset(t for t in self.enabled_types if t.is_implemented),
            prioritize_weaknesses=self.prioritize_weaknesses,
            weakness_threshold=self.weakness_threshold,
        )
