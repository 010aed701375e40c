"""Inworld TTS driver: validates speak options and calls the hosted voice API."""

import base64
import binascii
import json
from collections.abc import AsyncIterator, Sequence
from typing import Any, ClassVar

from inworld_tts.services.tts_service.errors import (
    ConfigurationError,
    InworldTTSError,
    ProtocolError,
    SpeechValidationError,
    TransportError,
)
from inworld_tts.services.tts_service.script import ScriptStitcher
from inworld_tts.shared.config import DEFAULT_BASE_URL, ServiceConfig, config
from inworld_tts.shared.enums import (
    DEFAULT_FORMAT,
    DEFAULT_MODEL,
    AudioFormat,
    LanguageCode,
    TTSModel,
    Voice,
)
from inworld_tts.shared.http_client import AsyncHTTPClient, HTTPStatusError
from inworld_tts.shared.logging_utils import setup_logging
from inworld_tts.shared.tts_models import SpeakOptions

from .base import TTSEngine

logger = setup_logging("inworld-tts-driver", config.get("log_level", "INFO"))

MIN_SAMPLE_RATE = 8000
MAX_SAMPLE_RATE = 48000

# Blank strings count as unset for these, matching the validation below
OPTIONAL_TEXT_FIELDS = (
    ("voice_id", "voiceId"),
    ("language", "language"),
)
# SpeakOptions field -> request body key, in payload order
OPTIONAL_PAYLOAD_FIELDS = (
    ("temperature", "temperature"),
    ("speed", "speed"),
    ("pitch", "pitch"),
    ("sample_rate_hertz", "sampleRateHertz"),
    ("bit_rate", "bitRate"),
    ("bit_depth", "bitDepth"),
)


def _value(item: Any) -> Any:
    return item.value if isinstance(item, (Voice, LanguageCode, TTSModel, AudioFormat)) else item


class InworldTTSEngine(TTSEngine):
    """Inworld TTS implementation using the hosted REST API."""

    SUPPORTED_VOICES: ClassVar[list[str]] = [v.value for v in Voice]
    SUPPORTED_LANGUAGES: ClassVar[list[str]] = [lang.value for lang in LanguageCode]
    SUPPORTED_MODELS: ClassVar[list[str]] = [m.value for m in TTSModel]
    SUPPORTED_FORMATS: ClassVar[list[str]] = [f.value for f in AudioFormat]

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        stream_url: str | None = None,
    ):
        """
        Initialize Inworld TTS engine.

        Args:
            api_key: Inworld API key, sent in a Basic authorization header
            base_url: Voice endpoint; a trailing slash is removed
            timeout: Total request timeout in seconds, None for the transport default
            stream_url: Streaming endpoint, defaults to ``<base_url>:stream``
        """
        if not api_key:
            raise ConfigurationError("Inworld TTS: api_key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.stream_url = (stream_url or f"{self.base_url}:stream").rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, service_config: ServiceConfig | None = None) -> "InworldTTSEngine":
        """Build an engine from environment-backed configuration."""
        cfg = service_config or config
        return cls(
            api_key=cfg.get("inworld_api_key"),
            base_url=cfg.get("base_url", DEFAULT_BASE_URL),
            timeout=cfg.get("timeout"),
            stream_url=cfg.get("stream_url"),
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Basic {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, text: str, options: SpeakOptions | None = None) -> dict[str, Any]:
        """
        Validate text and options and assemble the JSON request body.

        Checks run in a fixed order and the first violation is raised:
        voice, language, model, format, sample rate.

        Raises:
            SpeechValidationError: naming the offending field and accepted values
        """
        if not text:
            raise SpeechValidationError("Inworld TTS: text is required", field="text", value=text)

        options = options or SpeakOptions()

        voice = _value(options.voice_id)
        if voice:
            self._check_member("voiceId", voice, self.SUPPORTED_VOICES)

        language = _value(options.language)
        if language:
            self._check_member("language", language, self.SUPPORTED_LANGUAGES)

        model = _value(options.model_id) or DEFAULT_MODEL.value
        self._check_member("modelId", model, self.SUPPORTED_MODELS)

        output_format = _value(options.output_format) or DEFAULT_FORMAT.value
        self._check_member("format", output_format, self.SUPPORTED_FORMATS)

        rate = options.sample_rate_hertz
        if rate is not None and not MIN_SAMPLE_RATE <= rate <= MAX_SAMPLE_RATE:
            raise SpeechValidationError(
                f"sampleRateHertz must be between {MIN_SAMPLE_RATE} and {MAX_SAMPLE_RATE}",
                field="sampleRateHertz",
                value=rate,
            )

        payload: dict[str, Any] = {"text": text, "modelId": model, "format": output_format}
        for attr, key in OPTIONAL_TEXT_FIELDS:
            value = _value(getattr(options, attr))
            if value:
                payload[key] = value
        for attr, key in OPTIONAL_PAYLOAD_FIELDS:
            value = _value(getattr(options, attr))
            if value is not None:
                payload[key] = value
        return payload

    @staticmethod
    def _check_member(field: str, value: Any, supported: Sequence[str]) -> None:
        if value not in supported:
            raise SpeechValidationError(
                f"Unsupported {field} '{value}'. Supported: {', '.join(supported)}",
                field=field,
                value=value,
            )

    async def synthesize(self, text: str, options: SpeakOptions | None = None) -> bytes:
        """
        Synthesize speech and return the decoded audio bytes.

        Exactly one POST is issued per call. Nothing is retried or cached.

        Raises:
            SpeechValidationError: invalid text or options
            TransportError: non-2xx response, with status and body
            ProtocolError: response without ``audioContent``
        """
        payload = self.build_payload(text, options)
        logger.info(
            "Synthesizing %s chars (model=%s, voice=%s, format=%s)",
            len(text),
            payload["modelId"],
            payload.get("voiceId", "default"),
            payload["format"],
        )

        async with AsyncHTTPClient(timeout=self.timeout) as http:
            try:
                data = await http.post(self.base_url, data=payload, headers=self.headers)
            except HTTPStatusError as exc:
                logger.error("Inworld API error %s: %s", exc.status, exc.body[:300])
                raise TransportError(exc.status, exc.body) from exc

        audio_content = data.get("audioContent") if isinstance(data, dict) else None
        if not audio_content:
            raise ProtocolError("No audioContent in response")

        audio = self._decode_audio(audio_content)
        logger.info("Received %s bytes of %s audio", len(audio), payload["format"])
        return audio

    def synthesize_stream(
        self, text: str, options: SpeakOptions | None = None
    ) -> AsyncIterator[bytes]:
        """
        Synthesize speech and yield decoded audio chunks in arrival order.

        Validation happens immediately; the request is sent when iteration
        starts. The iterator ends when the server closes the response and
        cannot be restarted.
        """
        payload = self.build_payload(text, options)
        return self._stream(payload)

    async def _stream(self, payload: dict[str, Any]) -> AsyncIterator[bytes]:
        logger.info(
            "Streaming %s chars (model=%s, format=%s)",
            len(payload["text"]),
            payload["modelId"],
            payload["format"],
        )
        pending = b""
        async with AsyncHTTPClient(timeout=self.timeout) as http:
            try:
                async for chunk in http.stream(self.stream_url, data=payload, headers=self.headers):
                    pending += chunk
                    while b"\n" in pending:
                        line, pending = pending.split(b"\n", 1)
                        audio = self._decode_stream_line(line)
                        if audio:
                            yield audio
            except HTTPStatusError as exc:
                logger.error("Inworld API error %s: %s", exc.status, exc.body[:300])
                raise TransportError(exc.status, exc.body) from exc

        audio = self._decode_stream_line(pending)
        if audio:
            yield audio

    def _decode_stream_line(self, line: bytes) -> bytes | None:
        """Decode one newline-delimited JSON envelope into audio bytes."""
        line = line.strip()
        if not line:
            return None
        try:
            message = json.loads(line)
        except ValueError as exc:
            raise ProtocolError(f"Malformed stream envelope: {line[:100]!r}") from exc
        if not isinstance(message, dict):
            raise ProtocolError(f"Unexpected stream envelope: {line[:100]!r}")

        if message.get("error"):
            error = message["error"]
            detail = error.get("message", error) if isinstance(error, dict) else error
            raise ProtocolError(f"Inworld stream error: {detail}")

        result = message.get("result", message)
        audio_content = result.get("audioContent") if isinstance(result, dict) else None
        if not audio_content:
            logger.debug("Skipping stream envelope without audio: %s", list(message))
            return None
        return self._decode_audio(audio_content)

    @staticmethod
    def _decode_audio(audio_content: str) -> bytes:
        try:
            return base64.b64decode(audio_content, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ProtocolError("audioContent is not valid base64") from exc

    async def synthesize_script(
        self,
        speakers: Sequence[Any],
        script: Sequence[Any],
        pause_ms: int = 500,
    ) -> bytes:
        """Stitch a multi-speaker script into one buffer. See ScriptStitcher."""
        return await ScriptStitcher(self).synthesize_script(speakers, script, pause_ms)
