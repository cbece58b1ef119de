from .card import Card
from .user_exercise_preferences import UserExercisePreferences

__all__ = ["Card", "UserExercisePreferences"]
