"""Test configuration."""
import os
import random
import tempfile
from datetime import UTC, datetime, timedelta
from typing import List

import pytest
from faker import Faker

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SPEECH_ENABLED"] = "false"
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="flashvocab-test-"))

# Import after environment setup
from flashvocab.config import ensure_directories
from flashvocab.models.vocabulary_models import Word
from flashvocab.services.learning_service import LearningService
from flashvocab.services.stats_service import StatsService
from flashvocab.services.storage import InMemoryStorage
from flashvocab.services.word_service import WordService

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=UTC)


class Clock:
    """Controllable replacement for datetime.now(UTC)."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Set up test environment before each test."""
    ensure_directories()
    yield


@pytest.fixture
def fake() -> Faker:
    return Faker()


@pytest.fixture
def fake_ru() -> Faker:
    return Faker("ru_RU")


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def word_service(storage: InMemoryStorage, clock: Clock) -> WordService:
    """Create an empty word store on in-memory storage."""
    service = WordService(storage, clock)
    service.load()
    return service


@pytest.fixture
def learning_service(word_service: WordService, rng: random.Random) -> LearningService:
    return LearningService(word_service, rng)


@pytest.fixture
def stats_service(word_service: WordService) -> StatsService:
    return StatsService(word_service)


@pytest.fixture
def make_words(word_service: WordService):
    """Factory adding words with distinct texts, optionally marked learned."""

    def _make_words(count: int, learned: bool = False) -> List[Word]:
        offset = word_service.get_word_count()
        words = []
        for i in range(offset, offset + count):
            word = word_service.add_word(f"word{i}", f"слово{i}")
            if learned:
                word = word_service.mark_word_as_learned(word.id)
            words.append(word)
        return words

    return _make_words
