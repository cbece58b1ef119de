# backend/lingua/domain/practice/policy.py

from datetime import datetime, timedelta

from .dto import SchedulingSettingsSnapshot
from .entities import ExerciseScore


class SchedulingPolicy:
    """
    Interval-based spacing for a (card, exercise type) pair.
    Pure domain logic.
    """

    def __init__(self, settings: SchedulingSettingsSnapshot | None = None):
        self.settings = settings or SchedulingSettingsSnapshot()

    def is_due(self, score: ExerciseScore, now: datetime) -> bool:
        return score.is_due(now)

    def base_interval(self, difficulty: int) -> timedelta:
        table = self.settings.base_days
        tier = min(max(difficulty, 1), len(table))
        return timedelta(days=table[tier - 1])

    def rate_multiplier(self, score: ExerciseScore) -> float:
        s = self.settings
        rate = score.success_rate

        if rate >= s.mastery_rate and score.total_attempts >= s.min_attempts_for_mastery:
            return s.mastery_multiplier
        if rate >= s.good_rate:
            return s.good_multiplier
        if rate >= s.learning_rate:
            return s.learning_multiplier
        return s.weak_multiplier

    def growth_multiplier(self, score: ExerciseScore) -> float:
        s = self.settings
        growth = 1 + s.growth_factor * max(score.correct_count - 1, 0)
        return min(growth, s.max_growth)

    def next_review(
            self,
            score: ExerciseScore,
            *,
            was_correct: bool,
            now: datetime,
            difficulty: int = 1,
    ) -> datetime:
        # score already includes this answer
        if not was_correct:
            return now + timedelta(hours=self.settings.retry_hours)

        interval = (
                self.base_interval(difficulty)
                * self.rate_multiplier(score)
                * self.growth_multiplier(score)
        )
        return now + interval
