from lingua.core.enums import ExerciseType
from lingua.domain.practice.dto import ExercisePreferences
from lingua.domain.practice.eligibility import can_use, distractor_cards, eligible_types
from lingua.domain.practice.entities import NounData, VerbData


def test_multiple_choice_needs_pool_and_distractors(make_card):
    card = make_card()

    assert not can_use(ExerciseType.multiple_choice_text, card, has_enough_cards_for_multiple_choice=False)
    assert not can_use(
        ExerciseType.multiple_choice_text,
        card,
        has_enough_cards_for_multiple_choice=True,
        has_distractors=False,
    )
    assert can_use(ExerciseType.multiple_choice_text, card, has_enough_cards_for_multiple_choice=True)


def test_icon_multiple_choice_needs_icon(make_card):
    assert not can_use(ExerciseType.multiple_choice_icon, make_card(), has_enough_cards_for_multiple_choice=True)
    assert can_use(ExerciseType.multiple_choice_icon, make_card(icon="🏠"), has_enough_cards_for_multiple_choice=True)


def test_article_selection_only_for_german_nouns(make_card):
    german = make_card(word_data=NounData(gender="das"))
    spanish = make_card(language="es", german_article="el")

    assert can_use(ExerciseType.article_selection, german, has_enough_cards_for_multiple_choice=False)
    assert not can_use(ExerciseType.article_selection, spanish, has_enough_cards_for_multiple_choice=False)
    assert not can_use(ExerciseType.article_selection, make_card(), has_enough_cards_for_multiple_choice=False)


def test_conjugation_needs_verb_data(make_card):
    assert can_use(ExerciseType.conjugation_practice, make_card(word_data=VerbData()), has_enough_cards_for_multiple_choice=False)
    assert not can_use(ExerciseType.conjugation_practice, make_card(), has_enough_cards_for_multiple_choice=False)


def test_sentence_building_needs_several_words(make_card):
    assert can_use(ExerciseType.sentence_building, make_card(back_text="guten Morgen"), has_enough_cards_for_multiple_choice=False)
    assert not can_use(ExerciseType.sentence_building, make_card(back_text="Haus"), has_enough_cards_for_multiple_choice=False)


def test_unimplemented_types_never_usable(make_card):
    card = make_card()

    for t in (ExerciseType.listening_recognition, ExerciseType.speaking_pronunciation, ExerciseType.sentence_fill):
        assert not can_use(t, card, has_enough_cards_for_multiple_choice=True)


def test_distractors_skip_same_card_and_same_answer(make_card):
    card = make_card(back_text="Haus")
    pool = [card, make_card(back_text="Haus"), make_card(back_text=""), make_card(back_text="Hund")]

    assert [c.back_text for c in distractor_cards(card, pool)] == ["Hund"]


def test_eligible_types_respect_preferences(make_card):
    card = make_card()
    prefs = ExercisePreferences(enabled_types=frozenset({ExerciseType.writing_translation}))

    assert eligible_types(card, [card], prefs) == [ExerciseType.writing_translation]


def test_eligible_types_keep_declaration_order(make_card):
    pool = [make_card() for _ in range(4)]

    types = eligible_types(pool[0], pool, ExercisePreferences())

    assert types == [
        ExerciseType.reading_recognition,
        ExerciseType.writing_translation,
        ExerciseType.multiple_choice_text,
        ExerciseType.reverse_translation,
    ]


def test_no_multiple_choice_with_three_cards(make_card):
    pool = [make_card() for _ in range(3)]

    types = eligible_types(pool[0], pool, ExercisePreferences())

    assert not any(t.is_multiple_choice for t in types)
