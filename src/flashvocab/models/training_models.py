"""Models for training-related data structures."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from flashvocab.models.vocabulary_models import Word


class TrainingMode(Enum):
    """Which side of a word is tested."""
    TRANSLATION = "translation"  # Show English, choose Russian
    PRONUNCIATION = "pronunciation"  # Hear English, choose English
    RUSSIAN = "russian"  # Hear Russian, choose Russian

    def answer_text(self, word: Word) -> str:
        """Get the text of the word that answers a question in this mode."""
        if self == TrainingMode.PRONUNCIATION:
            return word.english
        return word.russian


class ReviewStrategy(Enum):
    """How a learned word is picked for review."""
    DUE_THEN_DIFFICULTY = "due_then_difficulty"
    ACCURACY_WEIGHTED = "accuracy_weighted"


class TrainingState(Enum):
    """States of a training session."""
    IDLE = "idle"  # Mode select
    MEMORIZING = "memorizing"
    TESTING = "testing"
    RESULT = "result"
    COMPLETED = "completed"


class SelectionKind(Enum):
    """How a selected word is presented."""
    MEMORIZE = "memorize"
    REVIEW = "review"


@dataclass
class Selection:
    """A word picked by the selector together with its presentation."""
    word: Word
    kind: SelectionKind


@dataclass
class TrainingStep:
    """What the presentation layer shows next."""
    state: TrainingState
    word: Word
    options: List[str] = field(default_factory=list)


@dataclass
class AnswerResult:
    """Outcome of one answered question."""
    is_correct: bool
    selected: str
    correct_answer: str
    word: Optional[Word] = None
