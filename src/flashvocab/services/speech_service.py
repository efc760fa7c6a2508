"""Speech output for words using gTTS."""
import logging
import re
import threading
from pathlib import Path
from typing import Callable, Optional

from gtts import gTTS

from flashvocab.config import settings

logger = logging.getLogger(__name__)


class SpeechService:
    """Fire-and-forget text-to-speech.

    Audio is synthesized on a daemon thread into the pronunciations
    directory; the file path is handed to on_ready when it exists.
    """

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        on_ready: Optional[Callable[[str], None]] = None,
        enabled: Optional[bool] = None,
    ):
        self.output_dir = Path(output_dir or settings.paths.pronunciations_dir)
        self.on_ready = on_ready
        self.enabled = settings.speech.enabled if enabled is None else enabled

    def speak(self, text: str, lang: str) -> Optional[threading.Thread]:
        """Start synthesizing text in the background."""
        if not self.enabled or not text:
            return None
        thread = threading.Thread(target=self.synthesize, args=(text, lang), daemon=True)
        thread.start()
        return thread

    def synthesize(self, text: str, lang: str) -> Optional[str]:
        """Generate a pronunciation file for text, reusing an existing one."""
        path = self.output_dir / f"{lang}_{self._sanitize_filename(text)}.mp3"
        try:
            if not path.exists():
                self.output_dir.mkdir(parents=True, exist_ok=True)
                tts = gTTS(text=text, lang=lang, slow=settings.speech.slow)
                tts.save(str(path))
                logger.info(f"Pronunciation generated for: {text}, file: {path}")
            if self.on_ready:
                self.on_ready(str(path))
            return str(path)
        except Exception as e:
            logger.error(f"Error generating pronunciation for: {text}, error: {e}")
            return None

    @staticmethod
    def _sanitize_filename(text: str) -> str:
        """Sanitize text for use in filename."""
        return re.sub(r"\W", "_", text.strip().lower())
