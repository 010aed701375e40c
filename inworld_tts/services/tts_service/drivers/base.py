from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from inworld_tts.shared.tts_models import SpeakOptions


class TTSEngine(ABC):
    """Abstract base class for TTS engines."""

    @abstractmethod
    async def synthesize(self, text: str, options: SpeakOptions | None = None) -> bytes:
        """Synthesize speech from text. Returns the complete audio payload."""
        pass

    def synthesize_stream(
        self, text: str, options: SpeakOptions | None = None
    ) -> AsyncIterator[bytes]:
        """Synthesize speech and yield audio chunks as they arrive. Not supported by all drivers."""
        raise NotImplementedError("Streaming synthesis not supported by this TTS driver")
