"""Configuration settings for the trainer."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))
MEDIA_DIR = DATA_DIR / "media"
PRONUNCIATIONS_DIR = MEDIA_DIR / "pronunciations"

# Storage keys for the two persisted records
WORDS_KEY = "vocabulary-words"
STATS_KEY = "vocabulary-stats"


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    directories = [
        DATA_DIR,
        MEDIA_DIR,
        PRONUNCIATIONS_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


@dataclass
class PathSettings:
    """Path configuration settings."""
    base_dir: Path = BASE_DIR
    data_dir: Path = DATA_DIR
    media_dir: Path = MEDIA_DIR
    pronunciations_dir: Path = PRONUNCIATIONS_DIR


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///flashvocab.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class LearningSettings:
    """Scheduling and performance settings."""
    min_difficulty: float = 0.1
    max_difficulty: float = 1.0
    initial_difficulty: float = 1.0
    correct_step: float = float(os.getenv("CORRECT_STEP", "0.1"))
    incorrect_step: float = float(os.getenv("INCORRECT_STEP", "0.2"))
    base_interval_hours: float = float(os.getenv("BASE_INTERVAL_HOURS", "24"))
    max_multiplier: float = float(os.getenv("MAX_MULTIPLIER", "7"))
    incorrect_multiplier: float = float(os.getenv("INCORRECT_MULTIPLIER", "0.5"))
    min_review_words: int = int(os.getenv("MIN_REVIEW_WORDS", "4"))
    distractor_count: int = int(os.getenv("DISTRACTOR_COUNT", "3"))


@dataclass
class SpeechSettings:
    """Speech output settings."""
    enabled: bool = os.getenv("SPEECH_ENABLED", "true").lower() == "true"
    english_lang: str = os.getenv("SPEECH_ENGLISH_LANG", "en")
    russian_lang: str = os.getenv("SPEECH_RUSSIAN_LANG", "ru")
    slow: bool = os.getenv("SPEECH_SLOW", "false").lower() == "true"


def get_path_settings() -> PathSettings:
    """Get path settings."""
    return PathSettings()


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_speech_settings() -> SpeechSettings:
    """Get speech settings."""
    return SpeechSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    paths: PathSettings = field(default_factory=get_path_settings)
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    speech: SpeechSettings = field(default_factory=get_speech_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if self.learning.min_difficulty > self.learning.max_difficulty:
            raise ValueError("min_difficulty cannot be greater than max_difficulty")

        if self.learning.correct_step <= 0 or self.learning.incorrect_step <= 0:
            raise ValueError("CORRECT_STEP and INCORRECT_STEP must be positive")

        if self.learning.base_interval_hours <= 0:
            raise ValueError("BASE_INTERVAL_HOURS must be positive")

        if self.learning.max_multiplier < 1:
            raise ValueError("MAX_MULTIPLIER must be at least 1")

        if self.learning.distractor_count < 1:
            raise ValueError("DISTRACTOR_COUNT must be positive")

        if self.learning.min_review_words < self.learning.distractor_count + 1:
            raise ValueError("MIN_REVIEW_WORDS must leave room for the correct answer and all distractors")


# Create global settings instance
settings = Settings()
settings.validate()
