from dataclasses import replace
from datetime import datetime

from lingua.core.enums import ExerciseType

from .dto import ExercisePreferences
from .entities import Card, ExerciseScore
from .policy import SchedulingPolicy


class ScoreTracker:
    """
    Single entry point for changing a card's exercise scores, so counters
    and next-review timestamps always move together.
    """

    def __init__(self, policy: SchedulingPolicy | None = None):
        self.policy = policy or SchedulingPolicy()

    def get_score(self, card: Card, exercise_type: ExerciseType) -> ExerciseScore:
        return card.get_exercise_score(exercise_type) or ExerciseScore.initial(exercise_type)

    def record_attempt(
            self,
            card: Card,
            exercise_type: ExerciseType,
            *,
            was_correct: bool,
            now: datetime,
    ) -> Card:
        current = self.get_score(card, exercise_type)

        if was_correct:
            streak = current.current_streak + 1
            counted = replace(
                current,
                correct_count=current.correct_count + 1,
                current_streak=streak,
                best_streak=max(streak, current.best_streak),
            )
        else:
            counted = replace(
                current,
                incorrect_count=current.incorrect_count + 1,
                current_streak=max(current.current_streak - 1, 0),
            )

        updated = replace(
            counted,
            last_practiced=now,
            next_review=self.policy.next_review(
                counted,
                was_correct=was_correct,
                now=now,
                difficulty=card.difficulty,
            ),
        )

        return card.with_score(
            updated,
            review_count=card.review_count + 1,
            correct_count=card.correct_count + (1 if was_correct else 0),
            last_reviewed=now,
            updated_at=now,
        )

    def weak_exercise_types(self, card: Card, preferences: ExercisePreferences) -> list[ExerciseType]:
        return [
            t for t, score in card.exercise_scores.items()
            if not score.is_unseen and score.success_rate < preferences.weakness_threshold
        ]
