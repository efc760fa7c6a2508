"""Tests for the performance model."""
import random
from datetime import UTC, datetime, timedelta

import pytest

from flashvocab.models.vocabulary_models import Word
from flashvocab.services import performance

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=UTC)


@pytest.fixture
def word() -> Word:
    return Word(id="w1", english="Apple", russian="Яблоко")


def test_mark_learned_schedules_next_day(word: Word) -> None:
    """Memorizing a fresh word schedules its first review 24 hours later."""
    learned = performance.mark_learned(word, NOW)

    assert learned.is_learned is True
    assert learned.last_reviewed == NOW
    assert learned.next_review == NOW + timedelta(hours=24)
    assert learned.difficulty == 1.0
    assert learned.correct_answers == 0
    assert learned.incorrect_answers == 0
    # Input word is untouched
    assert word.is_learned is False


def test_correct_answer_updates_counters_and_difficulty() -> None:
    word = Word(id="w1", english="Apple", russian="Яблоко", is_learned=True,
                correct_answers=2, incorrect_answers=1, difficulty=0.5)

    updated = performance.apply_answer(word, True, NOW)

    assert updated.correct_answers == 3
    assert updated.incorrect_answers == 1
    assert updated.difficulty == pytest.approx(0.4)
    # accuracy 0.75 -> multiplier 1 + 0.75 * 6 = 5.5
    assert updated.next_review == NOW + timedelta(days=5.5)
    assert updated.last_reviewed == NOW


def test_incorrect_answer_halves_interval() -> None:
    word = Word(id="w1", english="Apple", russian="Яблоко", is_learned=True,
                correct_answers=5, difficulty=0.3)

    updated = performance.apply_answer(word, False, NOW)

    assert updated.correct_answers == 5
    assert updated.incorrect_answers == 1
    assert updated.difficulty == pytest.approx(0.5)
    assert updated.next_review == NOW + timedelta(days=0.5)


def test_difficulty_is_clamped(word: Word) -> None:
    hard = performance.apply_answer(word, False, NOW)
    assert hard.difficulty == 1.0

    easy = Word(id="w2", english="Cat", russian="Кошка", difficulty=0.15)
    assert performance.apply_answer(easy, True, NOW).difficulty == 0.1


def test_perfect_accuracy_caps_multiplier() -> None:
    word = Word(id="w1", english="Apple", russian="Яблоко", correct_answers=10)
    updated = performance.apply_answer(word, True, NOW)
    assert updated.next_review == NOW + timedelta(days=7)


def test_incorrect_step_is_double_the_correct_step() -> None:
    down = 0.6 - performance.calculate_difficulty(0.6, True)
    up = performance.calculate_difficulty(0.6, False) - 0.6
    assert up == pytest.approx(2 * down)


def test_accuracy_without_attempts() -> None:
    assert performance.calculate_accuracy(0, 0) == 0.0
    assert performance.calculate_accuracy(3, 1) == 0.75


def test_random_answer_sequences_keep_invariants(word: Word) -> None:
    """Difficulty bounds, monotonic steps and review windows hold for any history."""
    rng = random.Random(7)
    for _ in range(20):
        current = word
        answers = [rng.random() < 0.6 for _ in range(rng.randint(1, 40))]
        for is_correct in answers:
            updated = performance.apply_answer(current, is_correct, NOW)

            assert 0.1 <= updated.difficulty <= 1.0
            if is_correct:
                assert updated.difficulty <= current.difficulty
                assert NOW + timedelta(days=1) <= updated.next_review <= NOW + timedelta(days=7)
            else:
                assert updated.difficulty >= current.difficulty
                assert updated.next_review == NOW + timedelta(days=0.5)
            current = updated

        assert current.correct_answers + current.incorrect_answers == len(answers)
        assert current.accuracy == pytest.approx(sum(answers) / len(answers))


if __name__ == "__main__":
    pytest.main([__file__])
