"""Difficulty and review-time calculations for answered words.

Every function here is pure: it takes a word and returns an updated copy,
leaving persistence to the caller.
"""
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import Optional

from flashvocab.config import settings
from flashvocab.models.vocabulary_models import Word


def clamp_difficulty(difficulty: float) -> float:
    """Keep difficulty within the configured bounds."""
    return min(settings.learning.max_difficulty, max(settings.learning.min_difficulty, difficulty))


def calculate_accuracy(correct: int, incorrect: int) -> float:
    """Share of correct answers, 0 when there were no attempts."""
    total = correct + incorrect
    return correct / total if total > 0 else 0.0


def calculate_difficulty(difficulty: float, is_correct: bool) -> float:
    """Move difficulty towards easy on success and towards hard on failure."""
    if is_correct:
        return clamp_difficulty(difficulty - settings.learning.correct_step)
    return clamp_difficulty(difficulty + settings.learning.incorrect_step)


def calculate_review_multiplier(accuracy: float, is_correct: bool) -> float:
    """Multiplier applied to the base interval for the next review."""
    if not is_correct:
        return settings.learning.incorrect_multiplier
    return min(settings.learning.max_multiplier, 1 + accuracy * (settings.learning.max_multiplier - 1))


def calculate_next_review(now: datetime, accuracy: float, is_correct: bool) -> datetime:
    """Calculate when the word becomes due again."""
    base_interval = timedelta(hours=settings.learning.base_interval_hours)
    return now + base_interval * calculate_review_multiplier(accuracy, is_correct)


def apply_answer(word: Word, is_correct: bool, now: Optional[datetime] = None) -> Word:
    """Return the word updated with one more answer."""
    now = now or datetime.now(UTC)
    correct = word.correct_answers + 1 if is_correct else word.correct_answers
    incorrect = word.incorrect_answers if is_correct else word.incorrect_answers + 1
    accuracy = calculate_accuracy(correct, incorrect)
    return replace(
        word,
        correct_answers=correct,
        incorrect_answers=incorrect,
        difficulty=calculate_difficulty(word.difficulty, is_correct),
        last_reviewed=now,
        next_review=calculate_next_review(now, accuracy, is_correct),
    )


def mark_learned(word: Word, now: Optional[datetime] = None) -> Word:
    """Return the word after its first successful memorization."""
    now = now or datetime.now(UTC)
    return replace(
        word,
        is_learned=True,
        last_reviewed=now,
        next_review=now + timedelta(hours=settings.learning.base_interval_hours),
    )
