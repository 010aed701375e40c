"""Python client and command-line wrapper for the Inworld text-to-speech API."""

from inworld_tts.services.tts_service.drivers.inworld import InworldTTSEngine
from inworld_tts.services.tts_service.errors import (
    ConfigurationError,
    InworldTTSError,
    ProtocolError,
    ScriptCompositionError,
    SpeechValidationError,
    TransportError,
)
from inworld_tts.services.tts_service.script import ScriptStitcher
from inworld_tts.shared.enums import AudioFormat, LanguageCode, PauseMode, TTSModel, Voice
from inworld_tts.shared.tts_models import ScriptDocument, ScriptSegment, SpeakOptions, Speaker

__version__ = "0.1.0"

__all__ = [
    "AudioFormat",
    "ConfigurationError",
    "InworldTTSEngine",
    "InworldTTSError",
    "LanguageCode",
    "PauseMode",
    "ProtocolError",
    "ScriptCompositionError",
    "ScriptDocument",
    "ScriptSegment",
    "ScriptStitcher",
    "SpeakOptions",
    "Speaker",
    "SpeechValidationError",
    "TTSModel",
    "TransportError",
    "Voice",
]
