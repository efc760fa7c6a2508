"""Models for vocabulary data kept in the key-value store."""
import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Dict, List, Optional

from flashvocab.config import settings


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO format datetime string, assuming UTC when no zone is given."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"Expected ISO datetime string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as an ISO string for storage."""
    return value.isoformat() if value else None


def _require(data: Dict[str, Any], key: str, kind: type) -> Any:
    value = data[key]
    # bool is an int subclass, keep counters and flags apart
    if kind is not bool and isinstance(value, bool):
        raise TypeError(f"Field {key} must be {kind.__name__}, got bool")
    if not isinstance(value, kind):
        raise TypeError(f"Field {key} must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass
class Word:
    """One English-Russian pair with its learning state."""
    id: str
    english: str
    russian: str
    is_learned: bool = False
    correct_answers: int = 0
    incorrect_answers: int = 0
    last_reviewed: Optional[datetime] = None
    difficulty: float = 1.0
    next_review: Optional[datetime] = None

    @property
    def total_answers(self) -> int:
        return self.correct_answers + self.incorrect_answers

    @property
    def accuracy(self) -> float:
        """Share of correct answers, 0 when the word was never tested."""
        total = self.total_answers
        return self.correct_answers / total if total > 0 else 0.0

    def to_data(self) -> Dict[str, Any]:
        """Convert to serializable data for storage."""
        return {
            "id": self.id,
            "english": self.english,
            "russian": self.russian,
            "is_learned": self.is_learned,
            "correct_answers": self.correct_answers,
            "incorrect_answers": self.incorrect_answers,
            "last_reviewed": format_datetime(self.last_reviewed),
            "difficulty": self.difficulty,
            "next_review": format_datetime(self.next_review),
        }

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> "Word":
        """Create a Word from stored data.

        Raises KeyError, TypeError or ValueError when the data is malformed.
        """
        correct = _require(data, "correct_answers", int)
        incorrect = _require(data, "incorrect_answers", int)
        if correct < 0 or incorrect < 0:
            raise ValueError("Answer counters cannot be negative")
        difficulty = data["difficulty"]
        if isinstance(difficulty, bool) or not isinstance(difficulty, (int, float)):
            raise TypeError("Field difficulty must be a number")
        if not math.isfinite(difficulty) or not (
            settings.learning.min_difficulty <= difficulty <= settings.learning.max_difficulty
        ):
            raise ValueError(f"Difficulty {difficulty} is out of range")
        return cls(
            id=_require(data, "id", str),
            english=_require(data, "english", str),
            russian=_require(data, "russian", str),
            is_learned=_require(data, "is_learned", bool),
            correct_answers=correct,
            incorrect_answers=incorrect,
            last_reviewed=parse_datetime(data.get("last_reviewed")),
            difficulty=float(difficulty),
            next_review=parse_datetime(data.get("next_review")),
        )


@dataclass
class UserStats:
    """Aggregate counters kept across sessions."""
    total_words_learned: int = 0
    total_sessions: int = 0
    average_accuracy: int = 0
    streak_days: int = 0
    last_session_date: Optional[datetime] = None
    total_time_spent: float = 0.0  # in minutes

    def to_data(self) -> Dict[str, Any]:
        """Convert to serializable data for storage."""
        return {
            "total_words_learned": self.total_words_learned,
            "total_sessions": self.total_sessions,
            "average_accuracy": self.average_accuracy,
            "streak_days": self.streak_days,
            "last_session_date": format_datetime(self.last_session_date),
            "total_time_spent": self.total_time_spent,
        }

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> "UserStats":
        """Create UserStats from stored data."""
        time_spent = data["total_time_spent"]
        if isinstance(time_spent, bool) or not isinstance(time_spent, (int, float)):
            raise TypeError("Field total_time_spent must be a number")
        if not math.isfinite(time_spent) or time_spent < 0:
            raise ValueError(f"Time spent {time_spent} is out of range")
        counters = {
            key: _require(data, key, int)
            for key in ("total_words_learned", "total_sessions", "average_accuracy", "streak_days")
        }
        if any(value < 0 for value in counters.values()):
            raise ValueError("Stats counters cannot be negative")
        return cls(
            last_session_date=parse_datetime(data.get("last_session_date")),
            total_time_spent=float(time_spent),
            **counters,
        )


@dataclass
class GameSession:
    """A single training run."""
    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    total_words: int = 0
    correct_answers: int = 0
    incorrect_answers: int = 0
    words_learned: List[str] = field(default_factory=list)

    @property
    def is_finished(self) -> bool:
        return self.end_time is not None

    @property
    def duration_minutes(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds() / 60
