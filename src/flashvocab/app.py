"""Main application entry point."""
import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from flashvocab.config import ensure_directories
from flashvocab.logging_config import setup_logging
from flashvocab.models.base import SessionLocal, init_db
from flashvocab.models.vocabulary_models import UserStats, Word
from flashvocab.services.learning_service import LearningService
from flashvocab.services.speech_service import SpeechService
from flashvocab.services.stats_service import Achievement, StatsService, VocabularySummary
from flashvocab.services.storage import DatabaseStorage, KeyValueStorage
from flashvocab.services.training_service import TrainingService
from flashvocab.services.word_service import WordService

logger = logging.getLogger(__name__)


def validate_word_input(english: str, russian: str) -> Tuple[str, str]:
    """Strip both texts and reject empty ones."""
    english = (english or "").strip()
    russian = (russian or "").strip()
    if not english or not russian:
        raise ValueError("Both English and Russian text are required")
    return english, russian


class VocabularyTrainer:
    """Everything the presentation layer calls."""

    def __init__(
        self,
        storage: KeyValueStorage,
        speech: Optional[SpeechService] = None,
        rng=None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the trainer and load persisted state."""
        self.word_service = WordService(storage, clock)
        self.word_service.load()
        self.learning_service = LearningService(self.word_service, rng)
        self.stats_service = StatsService(self.word_service)
        self.speech = speech
        self.training: Optional[TrainingService] = None

    @property
    def words(self) -> List[Word]:
        return self.word_service.words

    @property
    def stats(self) -> UserStats:
        return self.word_service.stats

    def add_word(self, english: str, russian: str) -> Word:
        english, russian = validate_word_input(english, russian)
        return self.word_service.add_word(english, russian)

    def edit_word(self, word_id: str, english: str, russian: str) -> Optional[Word]:
        english, russian = validate_word_input(english, russian)
        return self.word_service.edit_word(word_id, english, russian)

    def delete_word(self, word_id: str) -> bool:
        return self.word_service.delete_word(word_id)

    def mark_word_as_learned(self, word_id: str) -> Optional[Word]:
        return self.word_service.mark_word_as_learned(word_id)

    def update_word_performance(self, word_id: str, is_correct: bool) -> Optional[Word]:
        return self.word_service.update_word_performance(word_id, is_correct)

    def get_random_words(self, exclude_ids: List[str], count: int) -> List[Word]:
        return self.learning_service.get_random_words(exclude_ids, count)

    def get_next_word_to_learn(self) -> Optional[Word]:
        return self.learning_service.get_next_word_to_learn()

    def get_word_for_review(self) -> Optional[Word]:
        return self.learning_service.get_word_for_review()

    def start_training(self) -> TrainingService:
        """Get a fresh training session in the idle state."""
        self.training = TrainingService(
            self.word_service,
            self.learning_service,
            self.stats_service,
            speech=self.speech,
        )
        return self.training

    def get_summary(self) -> VocabularySummary:
        return self.stats_service.get_summary()

    def get_achievements(self) -> List[Achievement]:
        return self.stats_service.get_achievements()

    def reset_progress(self) -> None:
        self.word_service.reset_progress()


def create_trainer(configure_logging: bool = True, with_speech: bool = True) -> VocabularyTrainer:
    """Build a trainer over the configured database."""
    ensure_directories()
    if configure_logging:
        setup_logging("Starting flashvocab ...")
    init_db()
    storage = DatabaseStorage(SessionLocal())
    logger.info("Database initialized")
    return VocabularyTrainer(storage, speech=SpeechService() if with_speech else None)
