from enum import Enum


class ExerciseCategory(str, Enum):
    recognition = "recognition"
    production = "production"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        if self is ExerciseCategory.recognition:
            return "See or hear, then identify the meaning"
        return "Actively produce the translation"

    @property
    def exercise_types(self) -> list["ExerciseType"]:
        return [t for t in ExerciseType if t.category is self and t.is_implemented]


class ExerciseType(str, Enum):
    """
    How a card is tested. Values are the persisted wire names.
    """

    reading_recognition = "reading_recognition"
    writing_translation = "writing_translation"
    multiple_choice_text = "multiple_choice_text"
    multiple_choice_icon = "multiple_choice_icon"
    reverse_translation = "reverse_translation"
    listening_recognition = "listening_recognition"
    speaking_pronunciation = "speaking_pronunciation"
    sentence_fill = "sentence_fill"
    sentence_building = "sentence_building"
    conjugation_practice = "conjugation_practice"
    article_selection = "article_selection"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_implemented(self) -> bool:
        return self not in _NOT_IMPLEMENTED

    @property
    def category(self) -> ExerciseCategory:
        if self in _RECOGNITION:
            return ExerciseCategory.recognition
        return ExerciseCategory.production

    @property
    def is_recognition(self) -> bool:
        return self.category is ExerciseCategory.recognition

    @property
    def is_production(self) -> bool:
        return self.category is ExerciseCategory.production

    @property
    def is_multiple_choice(self) -> bool:
        return self in (ExerciseType.multiple_choice_text, ExerciseType.multiple_choice_icon)

    @property
    def requires_icon(self) -> bool:
        return self is ExerciseType.multiple_choice_icon


_DISPLAY_NAMES = {
    ExerciseType.reading_recognition: "Reading Recognition",
    ExerciseType.writing_translation: "Writing Translation",
    ExerciseType.multiple_choice_text: "Multiple Choice (Text)",
    ExerciseType.multiple_choice_icon: "Multiple Choice (Icon)",
    ExerciseType.reverse_translation: "Reverse Translation",
    ExerciseType.listening_recognition: "Listening Recognition",
    ExerciseType.speaking_pronunciation: "Speaking Pronunciation",
    ExerciseType.sentence_fill: "Sentence Fill",
    ExerciseType.sentence_building: "Sentence Building",
    ExerciseType.conjugation_practice: "Conjugation Practice",
    ExerciseType.article_selection: "Article Selection",
}

_DESCRIPTIONS = {
    ExerciseType.reading_recognition: "See the word and recall its meaning",
    ExerciseType.writing_translation: "Type the correct translation",
    ExerciseType.multiple_choice_text: "Choose the correct meaning from options",
    ExerciseType.multiple_choice_icon: "Choose the matching icon",
    ExerciseType.reverse_translation: "Translate from your native language",
    ExerciseType.listening_recognition: "Listen and identify the word",
    ExerciseType.speaking_pronunciation: "Speak the word correctly",
    ExerciseType.sentence_fill: "Complete the sentence with the word",
    ExerciseType.sentence_building: "Arrange words in correct order",
    ExerciseType.conjugation_practice: "Provide the correct form",
    ExerciseType.article_selection: "Choose the correct article",
}

_NOT_IMPLEMENTED = frozenset({
    ExerciseType.listening_recognition,
    ExerciseType.speaking_pronunciation,
    ExerciseType.sentence_fill,
})

_RECOGNITION = frozenset({
    ExerciseType.reading_recognition,
    ExerciseType.multiple_choice_text,
    ExerciseType.multiple_choice_icon,
    ExerciseType.listening_recognition,
    ExerciseType.article_selection,
})


class AnswerState(str, Enum):
    pending = "pending"
    answered = "answered"


class SessionStatus(str, Enum):
    not_started = "not_started"
    active = "active"
    complete = "complete"


class RemovalPolicy(str, Enum):
    """What a card deleted while on screen counts as."""

    incorrect = "incorrect"
    skip = "skip"


class WordType(str, Enum):
    verb = "verb"
    noun = "noun"
    adjective = "adjective"
    adverb = "adverb"
    phrase = "phrase"
    other = "other"
