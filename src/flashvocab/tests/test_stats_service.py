"""Tests for stats service."""
from datetime import timedelta

import pytest

from flashvocab.models.vocabulary_models import GameSession, UserStats, Word
from flashvocab.services.stats_service import (
    DifficultyLevel,
    PerformanceLevel,
    SessionTracker,
    StatsService,
    accuracy_percent,
    next_streak,
)
from flashvocab.services.word_service import WordService


def test_session_tracker() -> None:
    tracker = SessionTracker()
    tracker.record_answer(True)
    tracker.record_answer(True)
    tracker.record_answer(False)
    tracker.record_learned()

    assert tracker.correct == 2
    assert tracker.incorrect == 1
    assert tracker.words_learned == 1
    assert tracker.total_answers == 3

    tracker.reset()
    assert (tracker.correct, tracker.incorrect, tracker.words_learned) == (0, 0, 0)


def test_accuracy_percent() -> None:
    assert accuracy_percent(0, 0) == 0
    assert accuracy_percent(2, 1) == 67
    assert accuracy_percent(1, 2) == 33
    assert accuracy_percent(5, 0) == 100


def test_summary_of_empty_vocabulary(stats_service: StatsService) -> None:
    summary = stats_service.get_summary()

    assert summary.total_words == 0
    assert summary.learned_words == 0
    assert summary.accuracy == 0
    assert summary.progress == 0.0
    assert summary.streak_days == 0


def test_summary_recomputed_from_words(
    stats_service: StatsService, word_service: WordService, make_words
) -> None:
    words = make_words(2, learned=True)
    make_words(2)
    word_service.update_word_performance(words[0].id, True)
    word_service.update_word_performance(words[0].id, True)
    word_service.update_word_performance(words[1].id, False)
    word_service.save_stats(UserStats(streak_days=4))

    summary = stats_service.get_summary()

    assert summary.total_words == 4
    assert summary.learned_words == 2
    assert summary.total_correct == 2
    assert summary.total_incorrect == 1
    assert summary.total_attempts == 3
    assert summary.accuracy == 67
    assert summary.progress == 50.0
    assert summary.streak_days == 4

    # Derived on demand, so deletions show up immediately
    word_service.delete_word(words[1].id)
    assert stats_service.get_summary().accuracy == 100


@pytest.mark.parametrize(
    "correct, incorrect, level",
    [
        (0, 0, PerformanceLevel.NONE),
        (4, 1, PerformanceLevel.GOOD),
        (3, 2, PerformanceLevel.FAIR),
        (1, 1, PerformanceLevel.POOR),
    ],
)
def test_word_performance_level(stats_service: StatsService, correct: int, incorrect: int, level) -> None:
    word = Word(id="1", english="Apple", russian="Яблоко", correct_answers=correct, incorrect_answers=incorrect)
    assert stats_service.get_word_performance(word).performance == level


@pytest.mark.parametrize(
    "difficulty, level",
    [(0.1, DifficultyLevel.EASY), (0.3, DifficultyLevel.EASY), (0.5, DifficultyLevel.MEDIUM), (0.9, DifficultyLevel.HARD)],
)
def test_word_difficulty_level(stats_service: StatsService, difficulty: float, level) -> None:
    word = Word(id="1", english="Apple", russian="Яблоко", difficulty=difficulty)
    assert stats_service.get_word_performance(word).difficulty_level == level


def test_word_performance_accuracy(stats_service: StatsService) -> None:
    word = Word(id="1", english="Apple", russian="Яблоко", correct_answers=3, incorrect_answers=1)
    assert stats_service.get_word_performance(word).accuracy == 75


def test_next_streak(clock) -> None:
    now = clock()

    assert next_streak(UserStats(), now) == 1
    assert next_streak(UserStats(streak_days=3, last_session_date=now - timedelta(hours=1)), now) == 3
    assert next_streak(UserStats(streak_days=3, last_session_date=now - timedelta(days=1)), now) == 4
    assert next_streak(UserStats(streak_days=3, last_session_date=now - timedelta(days=2)), now) == 1


def test_record_session(stats_service: StatsService, word_service: WordService, make_words, clock) -> None:
    words = make_words(3, learned=True)
    word_service.update_word_performance(words[0].id, True)
    word_service.save_stats(
        UserStats(total_sessions=2, streak_days=2, last_session_date=clock() - timedelta(days=1), total_time_spent=10.0)
    )
    session = GameSession(
        id="s1",
        start_time=clock() - timedelta(minutes=5),
        end_time=clock(),
        correct_answers=1,
        words_learned=[word.id for word in words],
    )

    stats = stats_service.record_session(session)

    assert stats.total_sessions == 3
    assert stats.total_words_learned == 3
    assert stats.average_accuracy == 100
    assert stats.streak_days == 3
    assert stats.last_session_date == clock()
    assert stats.total_time_spent == pytest.approx(15.0)
    assert word_service.stats == stats


def test_achievements(stats_service: StatsService, word_service: WordService, make_words) -> None:
    assert stats_service.get_achievements() == []

    words = make_words(10, learned=True)
    for word in words:
        word_service.update_word_performance(word.id, True)
        word_service.update_word_performance(word.id, True)
    word_service.save_stats(UserStats(streak_days=7))

    codes = [achievement.code for achievement in stats_service.get_achievements()]
    assert codes == ["first_word", "ten_words", "sniper", "week_streak"]


def test_sniper_needs_twenty_attempts(stats_service: StatsService, word_service: WordService, make_words) -> None:
    word = make_words(1, learned=True)[0]
    for _ in range(19):
        word_service.update_word_performance(word.id, True)

    assert "sniper" not in [achievement.code for achievement in stats_service.get_achievements()]


if __name__ == "__main__":
    pytest.main([__file__])
