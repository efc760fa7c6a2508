"""Session counters and aggregate statistics."""
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, List, Optional

from flashvocab.models.vocabulary_models import GameSession, UserStats, Word
from flashvocab.services.word_service import WordService

logger = logging.getLogger(__name__)


class PerformanceLevel(Enum):
    """How well a word is answered."""
    NONE = "none"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class DifficultyLevel(Enum):
    """Bucketed word difficulty."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass
class VocabularySummary:
    """Statistics derived from the current word collection."""
    total_words: int
    learned_words: int
    total_correct: int
    total_incorrect: int
    accuracy: int  # percent
    progress: float  # percent of words learned
    streak_days: int

    @property
    def total_attempts(self) -> int:
        return self.total_correct + self.total_incorrect


@dataclass
class WordPerformance:
    """Per-word statistics for display."""
    word: Word
    accuracy: int  # percent
    performance: PerformanceLevel
    difficulty_level: DifficultyLevel


@dataclass
class Achievement:
    """A milestone the learner has reached."""
    code: str
    title: str
    description: str


def accuracy_percent(correct: int, incorrect: int) -> int:
    """Rounded percentage of correct answers, 0 with no attempts."""
    total = correct + incorrect
    if total == 0:
        return 0
    return round(100 * correct / total)


def performance_level(word: Word) -> PerformanceLevel:
    if word.total_answers == 0:
        return PerformanceLevel.NONE
    if word.accuracy >= 0.8:
        return PerformanceLevel.GOOD
    if word.accuracy >= 0.6:
        return PerformanceLevel.FAIR
    return PerformanceLevel.POOR


def difficulty_level(word: Word) -> DifficultyLevel:
    if word.difficulty <= 0.3:
        return DifficultyLevel.EASY
    if word.difficulty <= 0.6:
        return DifficultyLevel.MEDIUM
    return DifficultyLevel.HARD


def next_streak(stats: UserStats, now: datetime) -> int:
    """Streak length after a session finished at now."""
    if stats.last_session_date is None:
        return 1
    last_day = stats.last_session_date.date()
    today = now.date()
    if last_day == today:
        return max(stats.streak_days, 1)
    if last_day == today - timedelta(days=1):
        return stats.streak_days + 1
    return 1


class SessionTracker:
    """Counts outcomes during a single training run."""

    def __init__(self):
        self.correct = 0
        self.incorrect = 0
        self.words_learned = 0

    def reset(self) -> None:
        self.correct = 0
        self.incorrect = 0
        self.words_learned = 0

    def record_answer(self, is_correct: bool) -> None:
        if is_correct:
            self.correct += 1
        else:
            self.incorrect += 1

    def record_learned(self) -> None:
        self.words_learned += 1

    @property
    def total_answers(self) -> int:
        return self.correct + self.incorrect


class StatsService:
    """Derives statistics from the word store and keeps the stats record."""

    def __init__(self, word_service: WordService, clock: Optional[Callable[[], datetime]] = None):
        """Initialize the service with the word store."""
        self.word_service = word_service
        self.clock = clock or word_service.clock

    def get_summary(self) -> VocabularySummary:
        """Recompute the summary from the current words."""
        words = self.word_service.get_words()
        learned = sum(1 for word in words if word.is_learned)
        correct = sum(word.correct_answers for word in words)
        incorrect = sum(word.incorrect_answers for word in words)
        return VocabularySummary(
            total_words=len(words),
            learned_words=learned,
            total_correct=correct,
            total_incorrect=incorrect,
            accuracy=accuracy_percent(correct, incorrect),
            progress=learned / len(words) * 100 if words else 0.0,
            streak_days=self.word_service.stats.streak_days,
        )

    def get_word_performance(self, word: Word) -> WordPerformance:
        """Get display statistics for one word."""
        return WordPerformance(
            word=word,
            accuracy=accuracy_percent(word.correct_answers, word.incorrect_answers),
            performance=performance_level(word),
            difficulty_level=difficulty_level(word),
        )

    def get_achievements(self) -> List[Achievement]:
        """List the milestones reached so far."""
        summary = self.get_summary()
        achievements = []
        for count, code, title in [
            (1, "first_word", "First word"),
            (10, "ten_words", "Ten words"),
            (50, "fifty_words", "Fifty words"),
            (100, "hundred_words", "Hundred words"),
        ]:
            if summary.learned_words >= count:
                achievements.append(Achievement(code, title, f"Learned {count} word{'s' if count > 1 else ''}"))
        if summary.accuracy >= 80 and summary.total_attempts >= 20:
            achievements.append(Achievement("sniper", "Sniper", "Accuracy of 80% or more"))
        if summary.streak_days >= 7:
            achievements.append(Achievement("week_streak", "Week in a row", "Studied 7 days in a row"))
        if summary.streak_days >= 30:
            achievements.append(Achievement("month_streak", "Month in a row", "Studied 30 days in a row"))
        return achievements

    def record_session(self, session: GameSession) -> UserStats:
        """Fold a finished session into the stats record and save it."""
        now = session.end_time or self.clock()
        stats = self.word_service.stats
        summary = self.get_summary()
        updated = replace(
            stats,
            total_words_learned=summary.learned_words,
            total_sessions=stats.total_sessions + 1,
            average_accuracy=summary.accuracy,
            streak_days=next_streak(stats, now),
            last_session_date=now,
            total_time_spent=stats.total_time_spent + session.duration_minutes,
        )
        self.word_service.save_stats(updated)
        logger.info(
            f"Session {session.id} recorded: {session.correct_answers} correct, "
            f"{session.incorrect_answers} incorrect, {len(session.words_learned)} learned, "
            f"streak {updated.streak_days}"
        )
        return updated
