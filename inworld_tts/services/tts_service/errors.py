"""Exceptions raised by the Inworld TTS client."""

from typing import Any


class InworldTTSError(Exception):
    """Base class for every error raised by the Inworld TTS client."""


class ConfigurationError(InworldTTSError):
    """Raised when required configuration is missing or invalid."""


class SpeechValidationError(InworldTTSError, ValueError):
    """Raised when text or a speak option is outside its accepted values."""

    def __init__(self, message: str, field: str, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class TransportError(InworldTTSError):
    """Raised when the API answers with a non-success HTTP status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Inworld TTS error {status}: {body}")
        self.status = status
        self.body = body


class ProtocolError(InworldTTSError):
    """Raised when a well-formed response does not carry decodable audio."""


class ScriptCompositionError(InworldTTSError):
    """Raised when a script references a speaker missing from the roster."""
