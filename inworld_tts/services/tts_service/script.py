"""Script stitcher: synthesizes a multi-speaker dialogue one line at a time."""

from __future__ import annotations

import wave
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from inworld_tts.services.tts_service.errors import ConfigurationError, ScriptCompositionError
from inworld_tts.shared.config import config
from inworld_tts.shared.enums import DEFAULT_FORMAT, AudioFormat, PauseMode
from inworld_tts.shared.logging_utils import setup_logging
from inworld_tts.shared.media_utils import concat_wav_bytes, silence_bytes
from inworld_tts.shared.tts_models import ScriptSegment, SpeakOptions, Speaker

if TYPE_CHECKING:
    from inworld_tts.services.tts_service.drivers.base import TTSEngine

logger = setup_logging("script-stitcher", config.get("log_level", "INFO"))


def build_roster(speakers: Sequence[Speaker | tuple[str, SpeakOptions]]) -> dict[str, SpeakOptions]:
    """Map speaker names to options. When a name repeats, the last entry wins."""
    roster: dict[str, SpeakOptions] = {}
    for speaker in speakers:
        if isinstance(speaker, Speaker):
            roster[speaker.name] = speaker.options
        else:
            name, options = speaker
            roster[name] = options if options is not None else SpeakOptions()
    return roster


def _as_segment(segment: ScriptSegment | tuple[str, str]) -> ScriptSegment:
    if isinstance(segment, ScriptSegment):
        return segment
    name, line = segment
    return ScriptSegment(name=name, line=line)


def _format_of(options: SpeakOptions) -> str:
    fmt: Any = options.output_format or DEFAULT_FORMAT
    return fmt.value if isinstance(fmt, AudioFormat) else str(fmt)


class ScriptStitcher:
    """Drive a TTS engine line by line and join the results in script order."""

    def __init__(self, engine: TTSEngine, pause_mode: PauseMode | str | None = None):
        self.engine = engine
        mode = pause_mode or config.get("pause_mode", PauseMode.SILENCE.value)
        try:
            self.pause_mode = PauseMode(mode)
        except ValueError as exc:
            supported = ", ".join(m.value for m in PauseMode)
            raise ConfigurationError(
                f"Unsupported pause_mode '{mode}'. Supported: {supported}"
            ) from exc

    async def synthesize_script(
        self,
        speakers: Sequence[Speaker | tuple[str, SpeakOptions]],
        script: Sequence[ScriptSegment | tuple[str, str]],
        pause_ms: int = 500,
    ) -> bytes:
        """
        Synthesize every segment in order and return the stitched audio.

        Every segment's speaker is resolved against the roster before the
        first request is sent, so an unknown speaker costs no synthesis.
        WAV segments that cannot be merged into one container are joined
        as raw bytes with a warning instead.

        Args:
            speakers: Roster of (name, options); duplicate names resolve to the last entry
            script: Ordered (name, line) segments
            pause_ms: Gap appended after each segment; 0 disables it

        Returns:
            Concatenated audio for the whole script

        Raises:
            ScriptCompositionError: a segment names a speaker missing from the roster
            InworldTTSError: the first synthesis failure, unchanged
        """
        roster = build_roster(speakers)
        segments = [_as_segment(segment) for segment in script]

        # Every speaker is resolved before any request goes out
        resolved: list[tuple[ScriptSegment, SpeakOptions]] = []
        for segment in segments:
            options = roster.get(segment.name)
            if options is None:
                raise ScriptCompositionError(f"No options for speaker '{segment.name}'")
            resolved.append((segment, options))

        logger.info(
            "Stitching %s segments from %s speakers (pause=%sms, mode=%s)",
            len(resolved),
            len(roster),
            pause_ms,
            self.pause_mode.value,
        )

        parts: list[bytes] = []
        formats: list[str] = []
        for index, (segment, options) in enumerate(resolved, 1):
            logger.debug("Segment %s/%s: speaker=%s", index, len(resolved), segment.name)
            parts.append(await self.engine.synthesize(segment.line, options))
            formats.append(_format_of(options))

        if self.pause_mode == PauseMode.EMPTY or pause_ms <= 0:
            return self._join_with_placeholders(parts)

        if formats and all(fmt == AudioFormat.WAV.value for fmt in formats):
            try:
                return concat_wav_bytes(parts, pause_ms)
            except (wave.Error, ValueError, EOFError) as exc:
                logger.warning("Cannot merge WAV segments (%s); joining them as raw bytes", exc)

        buffers: list[bytes] = []
        warned: set[str] = set()
        for part, fmt, (_, options) in zip(parts, formats, resolved):
            buffers.append(part)
            gap = silence_bytes(fmt, pause_ms, options.sample_rate_hertz)
            if not gap and fmt not in warned:
                warned.add(fmt)
                logger.warning(
                    "A %sms pause cannot be rendered for %s audio; inserting an empty placeholder",
                    pause_ms,
                    fmt,
                )
            buffers.append(gap)
        return b"".join(buffers)

    @staticmethod
    def _join_with_placeholders(parts: list[bytes]) -> bytes:
        buffers: list[bytes] = []
        for part in parts:
            buffers.append(part)
            buffers.append(b"")
        return b"".join(buffers)
