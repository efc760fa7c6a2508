"""Service for running a training session."""
import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from flashvocab import monitoring
from flashvocab.config import settings
from flashvocab.models.training_models import (
    AnswerResult,
    ReviewStrategy,
    SelectionKind,
    TrainingMode,
    TrainingState,
    TrainingStep,
)
from flashvocab.models.vocabulary_models import GameSession, Word
from flashvocab.services.learning_service import LearningService
from flashvocab.services.speech_service import SpeechService
from flashvocab.services.stats_service import SessionTracker, StatsService
from flashvocab.services.word_service import WordService

logger = logging.getLogger(__name__)


class InvalidTransitionError(ValueError):
    """A training call was made in a state that does not accept it."""


class TrainingService:
    """State machine for one training run.

    idle -> memorizing / testing -> result -> ... -> completed. Each
    transition is triggered by start, memorized, answer, next_word or end.
    """

    def __init__(
        self,
        word_service: WordService,
        learning_service: LearningService,
        stats_service: StatsService,
        speech: Optional[SpeechService] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.word_service = word_service
        self.learning_service = learning_service
        self.stats_service = stats_service
        self.speech = speech
        self.clock = clock or word_service.clock

        self.state = TrainingState.IDLE
        self.mode = TrainingMode.TRANSLATION
        self.strategy = ReviewStrategy.DUE_THEN_DIFFICULTY
        self.tracker = SessionTracker()
        self.session: Optional[GameSession] = None
        self.current_word: Optional[Word] = None
        self.options: List[str] = []

    def _require_state(self, *states: TrainingState) -> None:
        if self.state not in states:
            expected = ", ".join(state.value for state in states)
            raise InvalidTransitionError(f"Cannot do this in state {self.state.value}, expected {expected}")

    def start(
        self,
        mode: TrainingMode = TrainingMode.TRANSLATION,
        strategy: ReviewStrategy = ReviewStrategy.DUE_THEN_DIFFICULTY,
    ) -> Optional[TrainingStep]:
        """Start a new session and present its first word.

        Returns None and stays idle when the vocabulary is too small for
        multiple-choice questions.
        """
        self._require_state(TrainingState.IDLE, TrainingState.COMPLETED)
        word_count = self.word_service.get_word_count()
        if word_count < settings.learning.min_review_words:
            logger.info(f"Not enough words to start training: {word_count}")
            self.state = TrainingState.IDLE
            return None

        self.mode = mode
        self.strategy = strategy
        self.tracker.reset()
        self.session = GameSession(id=uuid.uuid4().hex, start_time=self.clock())
        monitoring.training_sessions.labels(mode=mode.value).inc()
        logger.info(f"Training session {self.session.id} started in {mode.value} mode")
        return self._advance()

    def memorized(self) -> Optional[TrainingStep]:
        """The learner memorized the current word."""
        self._require_state(TrainingState.MEMORIZING)
        word = self.word_service.mark_word_as_learned(self.current_word.id)
        if word:
            self.tracker.record_learned()
            self.session.words_learned.append(word.id)
        return self._advance()

    def answer(self, option: str) -> AnswerResult:
        """Check the selected option and record the outcome."""
        self._require_state(TrainingState.TESTING)
        correct_answer = self.mode.answer_text(self.current_word)
        is_correct = option == correct_answer
        word = self.word_service.update_word_performance(self.current_word.id, is_correct)
        if word:
            self.tracker.record_answer(is_correct)
        else:
            logger.warning(f"Word {self.current_word.id} was deleted before it was answered")
        self.state = TrainingState.RESULT
        return AnswerResult(
            is_correct=is_correct,
            selected=option,
            correct_answer=correct_answer,
            word=word,
        )

    def next_word(self) -> Optional[TrainingStep]:
        """Continue after seeing an answer result."""
        self._require_state(TrainingState.RESULT)
        return self._advance()

    def end(self) -> Optional[GameSession]:
        """Finish the session early or acknowledge a completed one."""
        session = self.session
        if session and not session.is_finished:
            self._finish()
        self.session = None
        self.state = TrainingState.IDLE
        self.current_word = None
        self.options = []
        return session

    def pronounce(self) -> None:
        """Speak the current word in the language of the mode."""
        if not self.speech or not self.current_word:
            return
        if self.mode == TrainingMode.RUSSIAN:
            self.speech.speak(self.current_word.russian, settings.speech.russian_lang)
        else:
            self.speech.speak(self.current_word.english, settings.speech.english_lang)

    def _advance(self) -> Optional[TrainingStep]:
        selection = self.learning_service.choose_next_word(self.strategy)
        if selection and selection.kind == SelectionKind.MEMORIZE:
            return self._present(TrainingState.MEMORIZING, selection.word, [])

        if selection:
            options = self.learning_service.generate_options(selection.word, self.mode)
            if options:
                step = self._present(TrainingState.TESTING, selection.word, options)
                if self.mode != TrainingMode.TRANSLATION:
                    self.pronounce()
                return step

        logger.info("No more words to train")
        self._finish()
        self.state = TrainingState.COMPLETED
        self.current_word = None
        self.options = []
        return None

    def _present(self, state: TrainingState, word: Word, options: List[str]) -> TrainingStep:
        self.state = state
        self.current_word = word
        self.options = options
        self.session.total_words += 1
        logger.debug(f"Presenting word {word.id} in state {state.value}")
        return TrainingStep(state=state, word=word, options=list(options))

    def _finish(self) -> None:
        self.session.end_time = self.clock()
        self.session.correct_answers = self.tracker.correct
        self.session.incorrect_answers = self.tracker.incorrect
        self.stats_service.record_session(self.session)
