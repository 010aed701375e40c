import io
import wave
from typing import Any

import pytest
from conftest import TEST_API_KEY, make_wav

from inworld_tts.services.tts_service.drivers.base import TTSEngine
from inworld_tts.services.tts_service.drivers.inworld import InworldTTSEngine
from inworld_tts.services.tts_service.errors import ConfigurationError, ScriptCompositionError, TransportError
from inworld_tts.services.tts_service.script import ScriptStitcher, build_roster
from inworld_tts.shared.config import config as service_config
from inworld_tts.shared.enums import PauseMode, Voice
from inworld_tts.shared.tts_models import ScriptSegment, SpeakOptions, Speaker


class DummyDriver(TTSEngine):
    """Returns the line text as audio and records every call."""

    def __init__(self, fail_on: str | None = None, audio: dict[str, bytes] | None = None) -> None:
        self.calls: list[tuple[str, SpeakOptions | None]] = []
        self.fail_on = fail_on
        self.audio = audio or {}

    async def synthesize(self, text: str, options: SpeakOptions | None = None) -> bytes:
        self.calls.append((text, options))
        if text == self.fail_on:
            raise TransportError(500, "synthesis failed")
        return self.audio.get(text, text.encode())


FIRST_VOICE = [voice.value for voice in Voice][0]


@pytest.mark.asyncio
async def test_stitched_buffer_equals_concatenated_lines() -> None:
    driver = DummyDriver()
    options = SpeakOptions(voice_id=FIRST_VOICE)
    speakers = [Speaker(name="A", options=options)]
    script = [ScriptSegment(name="A", line="first"), ScriptSegment(name="A", line="second")]

    result = await ScriptStitcher(driver).synthesize_script(speakers, script, pause_ms=0)

    assert result == b"first" + b"" + b"second" + b""
    assert driver.calls == [("first", options), ("second", options)]


@pytest.mark.asyncio
async def test_accepts_plain_pairs() -> None:
    driver = DummyDriver()
    speakers = [("Ann", SpeakOptions(voice_id="Olivia")), ("Bob", SpeakOptions(voice_id="Mark"))]
    script = [("Ann", "Hi Bob."), ("Bob", "Hi Ann."), ("Ann", "Bye.")]

    result = await ScriptStitcher(driver, pause_mode=PauseMode.EMPTY).synthesize_script(speakers, script)

    assert result == b"Hi Bob.Hi Ann.Bye."
    assert [(text, opts.voice_id) for text, opts in driver.calls] == [
        ("Hi Bob.", "Olivia"),
        ("Hi Ann.", "Mark"),
        ("Bye.", "Olivia"),
    ]


@pytest.mark.asyncio
async def test_unknown_speaker_fails_without_synthesis() -> None:
    driver = DummyDriver()
    with pytest.raises(ScriptCompositionError, match="No options for speaker 'Unknown'"):
        await ScriptStitcher(driver).synthesize_script([], [ScriptSegment(name="Unknown", line="hi")])
    assert driver.calls == []


@pytest.mark.asyncio
async def test_unknown_speaker_later_in_script_aborts_everything() -> None:
    driver = DummyDriver()
    speakers = [Speaker(name="A")]
    script = [("A", "one"), ("A", "two"), ("Ghost", "boo")]
    with pytest.raises(ScriptCompositionError, match="'Ghost'"):
        await ScriptStitcher(driver).synthesize_script(speakers, script)
    assert driver.calls == []


@pytest.mark.asyncio
async def test_first_synthesis_failure_aborts() -> None:
    driver = DummyDriver(fail_on="two")
    script = [("A", "one"), ("A", "two"), ("A", "three")]
    with pytest.raises(TransportError, match="synthesis failed"):
        await ScriptStitcher(driver).synthesize_script([Speaker(name="A")], script)
    assert [text for text, _ in driver.calls] == ["one", "two"]


def test_duplicate_speaker_last_entry_wins() -> None:
    roster = build_roster(
        [
            Speaker(name="A", options=SpeakOptions(voice_id="Mark")),
            ("A", SpeakOptions(voice_id="Sarah")),
        ]
    )
    assert roster["A"].voice_id == "Sarah"


@pytest.mark.asyncio
async def test_empty_mode_ignores_pause_length() -> None:
    driver = DummyDriver()
    speakers = [Speaker(name="A", options=SpeakOptions(output_format="mulaw"))]
    stitcher = ScriptStitcher(driver, pause_mode="empty")
    result = await stitcher.synthesize_script(speakers, [("A", "x"), ("A", "y")], pause_ms=1000)
    assert result == b"xy"


@pytest.mark.asyncio
async def test_mp3_pause_is_empty_placeholder(caplog: pytest.LogCaptureFixture) -> None:
    driver = DummyDriver()
    result = await ScriptStitcher(driver).synthesize_script(
        [Speaker(name="A")], [("A", "x"), ("A", "y")], pause_ms=500
    )
    assert result == b"xy"
    assert "cannot be rendered for mp3" in caplog.text


@pytest.mark.asyncio
async def test_mulaw_pause_is_rendered_as_silence() -> None:
    driver = DummyDriver()
    speakers = [Speaker(name="A", options=SpeakOptions(output_format="mulaw", sample_rate_hertz=8000))]
    result = await ScriptStitcher(driver).synthesize_script(speakers, [("A", "x"), ("A", "y")], pause_ms=250)
    gap = b"\xff" * 2000
    assert result == b"x" + gap + b"y" + gap


@pytest.mark.asyncio
async def test_alaw_pause_uses_default_rate() -> None:
    driver = DummyDriver()
    speakers = [Speaker(name="A", options=SpeakOptions(output_format="alaw"))]
    result = await ScriptStitcher(driver).synthesize_script(speakers, [("A", "x")], pause_ms=100)
    assert result == b"x" + b"\xd5" * 800


@pytest.mark.asyncio
async def test_wav_segments_merge_into_one_container() -> None:
    first = make_wav(b"\x01\x00" * 160, sample_rate=16000)
    second = make_wav(b"\x02\x00" * 320, sample_rate=16000)
    driver = DummyDriver(audio={"first": first, "second": second})
    speakers = [Speaker(name="A", options=SpeakOptions(output_format="wav"))]

    result = await ScriptStitcher(driver).synthesize_script(
        speakers, [("A", "first"), ("A", "second")], pause_ms=100
    )

    with wave.open(io.BytesIO(result), "rb") as wf:
        assert wf.getframerate() == 16000
        assert wf.getsampwidth() == 2
        frames = wf.readframes(wf.getnframes())
    silence = b"\x00\x00" * 1600
    assert frames == b"\x01\x00" * 160 + silence + b"\x02\x00" * 320 + silence


@pytest.mark.asyncio
async def test_mismatched_wav_segments_fall_back_to_plain_join(caplog: pytest.LogCaptureFixture) -> None:
    wav_a = make_wav(b"\x00\x00", sample_rate=16000)
    wav_b = make_wav(b"\x00\x00", sample_rate=24000)
    driver = DummyDriver(audio={"a": wav_a, "b": wav_b})
    speakers = [Speaker(name="A", options=SpeakOptions(output_format="wav"))]

    result = await ScriptStitcher(driver).synthesize_script(speakers, [("A", "a"), ("A", "b")], pause_ms=10)

    assert result == wav_a + wav_b
    assert len(driver.calls) == 2
    assert "Cannot merge WAV segments" in caplog.text


@pytest.mark.asyncio
async def test_unreadable_wav_segment_falls_back_to_plain_join() -> None:
    good = make_wav(b"\x01\x00", sample_rate=16000)
    driver = DummyDriver(audio={"good": good, "bad": b"not a wav"})
    speakers = [Speaker(name="A", options=SpeakOptions(output_format="wav"))]

    result = await ScriptStitcher(driver).synthesize_script(speakers, [("A", "good"), ("A", "bad")], pause_ms=10)

    assert result == good + b"not a wav"


def test_unknown_pause_mode_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="Unsupported pause_mode 'bogus'. Supported: silence, empty"):
        ScriptStitcher(DummyDriver(), pause_mode="bogus")


def test_pause_mode_from_config() -> None:
    service_config.set("pause_mode", "empty")
    assert ScriptStitcher(DummyDriver()).pause_mode == PauseMode.EMPTY


@pytest.mark.asyncio
async def test_engine_convenience_method(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = InworldTTSEngine(TEST_API_KEY)
    calls: list[str] = []

    async def fake_synthesize(text: str, options: Any = None) -> bytes:
        calls.append(text)
        return text.encode()

    monkeypatch.setattr(engine, "synthesize", fake_synthesize)
    speakers = [Speaker(name="A", options=SpeakOptions(voice_id=FIRST_VOICE))]
    result = await engine.synthesize_script(speakers, [("A", "first"), ("A", "second")], 0)

    assert result == b"firstsecond"
    assert calls == ["first", "second"]
