"""Learning service for word selection and multiple-choice options."""
import logging
import math
import random
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from flashvocab.config import settings
from flashvocab.models.training_models import ReviewStrategy, Selection, SelectionKind, TrainingMode
from flashvocab.models.vocabulary_models import Word
from flashvocab.services.word_service import WordService

logger = logging.getLogger(__name__)

T = TypeVar("T")


def weighted_choice(items: Sequence[Tuple[T, float]], rng=random) -> Optional[T]:
    """Pick an item with probability proportional to its weight.

    Draws ``random * total`` and subtracts each weight in order until the
    remainder is no longer positive.
    """
    if not items:
        return None
    total = sum(weight for _, weight in items)
    remainder = rng.random() * total
    for item, weight in items:
        remainder -= weight
        if remainder <= 0:
            return item
    # Float rounding can leave a tiny positive remainder
    return items[-1][0]


def difficulty_weight(word: Word) -> int:
    """Integer review weight, harder words weigh more."""
    # Round first so 0.30000000000000004 counts as 3, not 4
    return max(1, math.ceil(round(word.difficulty * 10, 6)))


def accuracy_weight(word: Word) -> float:
    """Review weight, words answered badly weigh more."""
    if word.total_answers == 0:
        return 1.0
    return max(0.1, 1 - word.accuracy)


class LearningService:
    """Decides which word to present next and builds answer options."""

    def __init__(self, word_service: WordService, rng=None, clock: Optional[Callable[[], datetime]] = None):
        """Initialize the service with the word store."""
        self.word_service = word_service
        self.random = rng or random
        self.clock = clock or word_service.clock

    def get_next_word_to_learn(self) -> Optional[Word]:
        """Pick a random unlearned word."""
        unlearned = self.word_service.get_words(learned=False)
        if not unlearned:
            return None
        return self.random.choice(unlearned)

    def get_due_words(self) -> List[Word]:
        """Get learned words whose review time has passed."""
        now = self.clock()
        return [
            word for word in self.word_service.get_words(learned=True)
            if word.next_review is not None and word.next_review <= now
        ]

    def get_word_for_review(self) -> Optional[Word]:
        """Pick a due word, or a difficulty-weighted learned word when none is due."""
        due = self.get_due_words()
        if due:
            logger.debug(f"Choosing among {len(due)} due words")
            return self.random.choice(due)

        learned = self.word_service.get_words(learned=True)
        if not learned:
            return None
        logger.debug(f"No due words, choosing among {len(learned)} learned words by difficulty")
        return weighted_choice([(word, difficulty_weight(word)) for word in learned], self.random)

    def get_word_weighted_by_accuracy(self) -> Optional[Word]:
        """Pick a learned word, favouring words with low accuracy."""
        learned = self.word_service.get_words(learned=True)
        return weighted_choice([(word, accuracy_weight(word)) for word in learned], self.random)

    def choose_next_word(self, strategy: ReviewStrategy = ReviewStrategy.DUE_THEN_DIFFICULTY) -> Optional[Selection]:
        """Choose the next word to present.

        Unlearned words always come first. Learned words are reviewed only
        when there are enough of them for a multiple-choice question.
        """
        word = self.get_next_word_to_learn()
        if word:
            return Selection(word=word, kind=SelectionKind.MEMORIZE)

        learned_count = self.word_service.get_word_count(learned=True)
        if learned_count < settings.learning.min_review_words:
            logger.info(f"Only {learned_count} learned words, nothing to review")
            return None

        if strategy == ReviewStrategy.ACCURACY_WEIGHTED:
            word = self.get_word_weighted_by_accuracy()
        else:
            word = self.get_word_for_review()
        if not word:
            return None
        return Selection(word=word, kind=SelectionKind.REVIEW)

    def get_random_words(self, exclude_ids: List[str], count: int) -> List[Word]:
        """Get up to count random learned words not in exclude_ids."""
        available = [
            word for word in self.word_service.get_words(learned=True)
            if word.id not in exclude_ids
        ]
        self.random.shuffle(available)
        return available[:count]

    def generate_options(self, word: Word, mode: TrainingMode) -> Optional[List[str]]:
        """Build shuffled answer options for a word, or None when too few words exist."""
        count = settings.learning.distractor_count
        correct_answer = mode.answer_text(word)

        candidates = [w for w in self.word_service.get_words(learned=True) if w.id != word.id]
        self.random.shuffle(candidates)
        if len(candidates) < count:
            # Not enough learned words, top up from the rest of the vocabulary
            fallback = [w for w in self.word_service.get_words(learned=False) if w.id != word.id]
            self.random.shuffle(fallback)
            candidates += fallback
        if len(candidates) < count:
            logger.info(f"Cannot generate options for word {word.id}: only {len(candidates)} other words")
            return None

        options = [correct_answer]
        for candidate in candidates:
            text = mode.answer_text(candidate)
            if text in options:
                continue
            options.append(text)
            if len(options) == count + 1:
                break
        if len(options) < count + 1:
            logger.info(f"Cannot generate options for word {word.id}: too few distinct answers")
            return None

        self.random.shuffle(options)
        return options
