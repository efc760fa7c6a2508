"""Service for managing words in the vocabulary."""
import json
import logging
import uuid
from dataclasses import replace
from datetime import UTC, datetime
from typing import Callable, List, Optional

from flashvocab import monitoring
from flashvocab.config import STATS_KEY, WORDS_KEY, settings
from flashvocab.models.vocabulary_models import UserStats, Word
from flashvocab.services import performance
from flashvocab.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class WordService:
    """Owns the word collection and the stats record.

    Every mutation builds a new collection from the current one and saves it
    in full, so the persisted state is consistent after any single call.
    """

    def __init__(self, storage: KeyValueStorage, clock: Optional[Callable[[], datetime]] = None):
        """Initialize the service with a storage provider."""
        self.storage = storage
        self.clock = clock or (lambda: datetime.now(UTC))
        self._words: List[Word] = []
        self._stats = UserStats()

    @property
    def words(self) -> List[Word]:
        return list(self._words)

    @property
    def stats(self) -> UserStats:
        return self._stats

    def load(self) -> None:
        """Load words and stats from storage, falling back to defaults."""
        self._words = self._load_words()
        self._stats = self._load_stats()
        logger.info(f"Loaded {len(self._words)} words")

    def _load_words(self) -> List[Word]:
        raw = self.storage.get(WORDS_KEY)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"Expected a list of words, got {type(data).__name__}")
            return [Word.from_data(item) for item in data]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"Stored words are malformed, starting from an empty collection: {e}")
            monitoring.storage_errors.labels(record="words").inc()
            return []

    def _load_stats(self) -> UserStats:
        raw = self.storage.get(STATS_KEY)
        if raw is None:
            return UserStats()
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise TypeError(f"Expected a stats object, got {type(data).__name__}")
            return UserStats.from_data(data)
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(f"Stored stats are malformed, using defaults: {e}")
            monitoring.storage_errors.labels(record="stats").inc()
            return UserStats()

    def save_words(self, words: List[Word]) -> None:
        """Persist the full word collection."""
        self.storage.set(WORDS_KEY, json.dumps([word.to_data() for word in words], ensure_ascii=False))
        self._words = list(words)

    def save_stats(self, stats: UserStats) -> None:
        """Persist the stats record."""
        self.storage.set(STATS_KEY, json.dumps(stats.to_data(), ensure_ascii=False))
        self._stats = stats

    def get_word(self, word_id: str) -> Optional[Word]:
        """Get a word by its ID."""
        return next((word for word in self._words if word.id == word_id), None)

    def get_words(self, learned: Optional[bool] = None) -> List[Word]:
        """Get words, optionally filtered by learned state."""
        if learned is None:
            return list(self._words)
        return [word for word in self._words if word.is_learned == learned]

    def get_word_count(self, learned: Optional[bool] = None) -> int:
        """Get the count of words, optionally filtered by learned state."""
        return len(self.get_words(learned))

    def add_word(self, english: str, russian: str) -> Word:
        """Add a new unlearned word."""
        word = Word(
            id=uuid.uuid4().hex,
            english=english,
            russian=russian,
            difficulty=settings.learning.initial_difficulty,
        )
        self.save_words(self._words + [word])
        monitoring.words_added.inc()
        logger.info(f"Word added: {english} - {russian}")
        return word

    def edit_word(self, word_id: str, english: str, russian: str) -> Optional[Word]:
        """Change the text of a word, keeping its learning state."""
        return self._replace_word(word_id, lambda word: replace(word, english=english, russian=russian))

    def delete_word(self, word_id: str) -> bool:
        """Delete a word."""
        words = [word for word in self._words if word.id != word_id]
        if len(words) == len(self._words):
            return False
        self.save_words(words)
        monitoring.words_deleted.inc()
        logger.info(f"Word deleted: {word_id}")
        return True

    def mark_word_as_learned(self, word_id: str) -> Optional[Word]:
        """Mark a word as learned and schedule its first review."""
        word = self._replace_word(word_id, lambda word: performance.mark_learned(word, self.clock()))
        if word:
            monitoring.words_learned.inc()
            logger.debug(f"Word {word_id} learned, next review at {word.next_review}")
        return word

    def update_word_performance(self, word_id: str, is_correct: bool) -> Optional[Word]:
        """Record an answer for a word and reschedule it."""
        word = self._replace_word(word_id, lambda word: performance.apply_answer(word, is_correct, self.clock()))
        if word:
            monitoring.answers.labels(result="correct" if is_correct else "incorrect").inc()
            logger.debug(
                f"Word {word_id} answered {'correctly' if is_correct else 'incorrectly'}, "
                f"difficulty {word.difficulty:.2f}, next review at {word.next_review}"
            )
        return word

    def reset_progress(self) -> None:
        """Remove all words and stats."""
        self.storage.delete(WORDS_KEY)
        self.storage.delete(STATS_KEY)
        self._words = []
        self._stats = UserStats()
        logger.info("Progress reset")

    def _replace_word(self, word_id: str, update: Callable[[Word], Word]) -> Optional[Word]:
        updated = None
        words = []
        for word in self._words:
            if word.id == word_id:
                updated = update(word)
                words.append(updated)
            else:
                words.append(word)
        if updated is None:
            return None
        self.save_words(words)
        return updated
