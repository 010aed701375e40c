"""
Audio byte utilities used when stitching synthesized segments.
"""

import io
import wave

from .enums import AudioFormat

# G.711 encodings of zero amplitude
MULAW_SILENCE = b"\xff"
ALAW_SILENCE = b"\xd5"
DEFAULT_G711_SAMPLE_RATE = 8000


def frames_for_duration(duration_ms: int, sample_rate: int) -> int:
    """Number of sample frames covering ``duration_ms`` at ``sample_rate``."""
    if duration_ms <= 0:
        return 0
    return int(sample_rate * duration_ms / 1000)


def silence_bytes(audio_format: str, duration_ms: int, sample_rate: int | None = None) -> bytes:
    """
    Raw silence for headerless formats.

    Only mulaw and alaw can be extended byte-wise. Container and compressed
    formats (mp3, opus, wav) return an empty buffer; WAV silence is added by
    :func:`concat_wav_bytes` instead.
    """
    fmt = AudioFormat(audio_format)
    if fmt not in (AudioFormat.MULAW, AudioFormat.ALAW):
        return b""

    frames = frames_for_duration(duration_ms, sample_rate or DEFAULT_G711_SAMPLE_RATE)
    fill = MULAW_SILENCE if fmt == AudioFormat.MULAW else ALAW_SILENCE
    return fill * frames


def concat_wav_bytes(parts: list[bytes], pause_ms: int = 0) -> bytes:
    """
    Join PCM WAV files into one WAV, with ``pause_ms`` of silence after each part.

    Raises:
        ValueError: if the parts do not share channels, sample width and rate
        wave.Error: if a part is not a PCM WAV file
    """
    if not parts:
        return b""

    params = None
    frames: list[bytes] = []
    for index, wav_bytes in enumerate(parts):
        with wave.open(io.BytesIO(wav_bytes), "rb") as wf:
            current = (wf.getnchannels(), wf.getsampwidth(), wf.getframerate())
            if params is None:
                params = current
            elif current != params:
                raise ValueError(
                    f"WAV segment {index} has channels/width/rate {current}, expected {params}"
                )
            frames.append(wf.readframes(wf.getnframes()))

    channels, sample_width, frame_rate = params
    # 8-bit PCM is unsigned, so its midpoint is 0x80
    zero = b"\x80" if sample_width == 1 else b"\x00" * sample_width
    gap = zero * channels * frames_for_duration(pause_ms, frame_rate)

    out = io.BytesIO()
    with wave.open(out, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(frame_rate)
        for chunk in frames:
            wf.writeframes(chunk)
            if gap:
                wf.writeframes(gap)
    return out.getvalue()
