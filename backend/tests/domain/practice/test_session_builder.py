import random
from datetime import timedelta

from lingua.core.enums import ExerciseType
from lingua.domain.practice.dto import ExercisePreferences
from lingua.domain.practice.eligibility import can_use, has_enough_cards_for_multiple_choice
from lingua.domain.practice.entities import ExerciseScore, NounData, VerbData
from lingua.domain.practice.queue import SessionBuilder, select_due_cards, weakness_key


def _score(exercise_type, correct, incorrect, next_review=None):
    return ExerciseScore(
        type=exercise_type,
        correct_count=correct,
        incorrect_count=incorrect,
        next_review=next_review,
    )


def test_unseen_is_weaker_than_any_measured_score(make_card):
    card = make_card(exercise_scores={
        ExerciseType.writing_translation: _score(ExerciseType.writing_translation, 0, 5),
    })

    assert weakness_key(card, ExerciseType.reading_recognition) < weakness_key(card, ExerciseType.writing_translation)


def test_weakness_priority_queues_one_type_per_card_weakest_first(make_card, now):
    later = now + timedelta(days=5)
    strong = make_card(exercise_scores={
        t: _score(t, 9, 1) for t in (ExerciseType.reading_recognition, ExerciseType.writing_translation, ExerciseType.reverse_translation)
    })
    weak = make_card(exercise_scores={
        ExerciseType.reading_recognition: _score(ExerciseType.reading_recognition, 1, 3),
        ExerciseType.writing_translation: _score(ExerciseType.writing_translation, 2, 2, next_review=later),
        ExerciseType.reverse_translation: _score(ExerciseType.reverse_translation, 3, 1, next_review=later),
    })
    fresh = make_card()
    pool = [strong, weak, fresh]

    queue = SessionBuilder(rng=random.Random(1)).build_queue(pool, pool, ExercisePreferences(), now=now)

    assert [(i.card.id, i.exercise_type) for i in queue] == [
        (fresh.id, ExerciseType.reading_recognition),
        (weak.id, ExerciseType.reading_recognition),
        (strong.id, ExerciseType.reading_recognition),
    ]


def test_due_types_preferred_over_fallback(make_card, now):
    later = now + timedelta(days=3)
    card = make_card(exercise_scores={
        ExerciseType.reading_recognition: _score(ExerciseType.reading_recognition, 5, 0, next_review=later),
        ExerciseType.writing_translation: _score(ExerciseType.writing_translation, 5, 0, next_review=later),
        ExerciseType.reverse_translation: _score(ExerciseType.reverse_translation, 4, 1, next_review=now),
    })

    queue = SessionBuilder().build_queue([card], [card], ExercisePreferences(), now=now)

    assert [i.exercise_type for i in queue] == [ExerciseType.reverse_translation]


def test_falls_back_to_eligible_types_when_nothing_due(make_card, now):
    later = now + timedelta(days=3)
    card = make_card(exercise_scores={
        t: _score(t, 5, 0, next_review=later)
        for t in (ExerciseType.reading_recognition, ExerciseType.writing_translation, ExerciseType.reverse_translation)
    })

    builder = SessionBuilder()
    assert builder.candidate_types(card, [card], ExercisePreferences(), now) == [
        ExerciseType.reading_recognition,
        ExerciseType.writing_translation,
        ExerciseType.reverse_translation,
    ]


def test_random_mode_queues_every_candidate_type(make_card, now):
    prefs = ExercisePreferences(prioritize_weaknesses=False)
    pool = [make_card() for _ in range(2)]

    queue = SessionBuilder(rng=random.Random(7)).build_queue(pool, pool, prefs, now=now)

    assert len(queue) == 6
    assert {(i.card.id, i.exercise_type) for i in queue} == {
        (c.id, t)
        for c in pool
        for t in (ExerciseType.reading_recognition, ExerciseType.writing_translation, ExerciseType.reverse_translation)
    }


def test_card_without_eligible_type_is_omitted(make_card, now):
    prefs = ExercisePreferences(enabled_types=frozenset({ExerciseType.article_selection}))
    noun = make_card(word_data=NounData(gender="der"))
    plain = make_card()

    queue = SessionBuilder().build_queue([plain, noun], [plain, noun], prefs, now=now)

    assert [i.card.id for i in queue] == [noun.id]


def test_queue_items_always_usable(make_card, now):
    rng = random.Random(3)
    pool = [
        make_card(icon="🐕" if n % 2 else None, word_data=VerbData() if n % 3 == 0 else None, back_text=f"ein Wort {n}")
        for n in range(8)
    ]
    enough = has_enough_cards_for_multiple_choice(len(pool))

    for prioritize in (True, False):
        prefs = ExercisePreferences(prioritize_weaknesses=prioritize)
        queue = SessionBuilder(rng=rng).build_queue(pool, pool, prefs, now=now)
        assert queue
        for item in queue:
            assert can_use(item.exercise_type, item.card, has_enough_cards_for_multiple_choice=enough)


def test_three_card_pool_never_yields_multiple_choice(make_card, now):
    pool = [make_card(icon="🏠") for _ in range(3)]
    prefs = ExercisePreferences(prioritize_weaknesses=False)

    for seed in range(10):
        queue = SessionBuilder(rng=random.Random(seed)).build_queue(pool, pool, prefs, now=now)
        assert not any(i.exercise_type.is_multiple_choice for i in queue)


def test_four_card_pool_can_yield_multiple_choice(make_card, now):
    pool = [make_card(icon="🏠") for _ in range(4)]
    prefs = ExercisePreferences(prioritize_weaknesses=False)

    queue = SessionBuilder(rng=random.Random(0)).build_queue(pool, pool, prefs, now=now)

    assert any(i.exercise_type.is_multiple_choice for i in queue)


def test_multiple_choice_options_contain_answer_once(make_card):
    card = make_card(back_text="Haus")
    pool = [card] + [make_card(back_text=w) for w in ("Hund", "Katze", "Maus", "Baum", "Hund")]

    options = SessionBuilder(rng=random.Random(5)).multiple_choice_options(card, pool)

    assert len(options) == 4
    assert options.count("Haus") == 1
    assert len(set(options)) == 4


def test_select_due_cards_filters_language_and_archive(make_card, now):
    later = now + timedelta(days=2)
    due = make_card()
    archived = make_card(is_archived=True)
    spanish = make_card(language="es")
    not_due = make_card(next_review=later)

    selected = select_due_cards([due, archived, spanish, not_due], ExercisePreferences(), active_language="de", now=now)

    assert selected == [due]


def test_card_not_due_when_only_unusable_types_lack_scores(make_card, now):
    later = now + timedelta(days=2)
    practised = make_card(exercise_scores={
        t: _score(t, 3, 0, next_review=later)
        for t in (ExerciseType.reading_recognition, ExerciseType.writing_translation, ExerciseType.reverse_translation)
    })

    # Article and conjugation exercises are enabled but never apply to this card
    assert practised.is_due_for_any_exercise(ExercisePreferences(), now)
    assert select_due_cards([practised], ExercisePreferences(), now=now) == []
