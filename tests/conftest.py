import base64
import io
import sys
import wave
from pathlib import Path
from typing import Any, Generator

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from inworld_tts.services.tts_service.drivers import inworld as inworld_driver
from inworld_tts.services.tts_service.drivers.inworld import InworldTTSEngine
from inworld_tts.shared.config import config as service_config

TEST_API_KEY = "test-api-key"
CONFIG_ENV_VARS = (
    "INWORLD_API_KEY",
    "INWORLD_TTS_BASE_URL",
    "INWORLD_TTS_STREAM_URL",
    "INWORLD_TTS_TIMEOUT",
    "LOG_LEVEL",
    "INWORLD_TTS_PAUSE_MODE",
)


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def make_wav(frames: bytes, sample_rate: int = 16000, sample_width: int = 2, channels: int = 1) -> bytes:
    """Build an in-memory PCM WAV file."""
    out = io.BytesIO()
    with wave.open(out, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(sample_rate)
        wf.writeframes(frames)
    return out.getvalue()


class FakeTransport:
    """Records requests made through AsyncHTTPClient and serves canned responses."""

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self.response: Any = {"audioContent": b64(b"dummy audio")}
        self.chunks: list[bytes] = []
        self.error: Exception | None = None
        self.timeouts: list[float | None] = []

    def client_factory(self, timeout: float | None = None) -> "FakeHTTPClient":
        self.timeouts.append(timeout)
        return FakeHTTPClient(self)


class FakeHTTPClient:
    def __init__(self, transport: FakeTransport) -> None:
        self.transport = transport

    async def __aenter__(self) -> "FakeHTTPClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        return None

    async def post(self, url: str, data: dict | None = None, headers: dict | None = None) -> Any:
        self.transport.requests.append({"url": url, "data": data, "headers": headers})
        if self.transport.error:
            raise self.transport.error
        return self.transport.response

    async def stream(
        self, url: str, data: dict | None = None, headers: dict | None = None, chunk_size: int = 8192
    ):
        self.transport.requests.append({"url": url, "data": data, "headers": headers})
        if self.transport.error:
            raise self.transport.error
        for chunk in self.transport.chunks:
            yield chunk


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate every test from the caller's Inworld environment variables."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

    saved = dict(service_config.config)
    service_config.set("inworld_api_key", None)
    service_config.set("pause_mode", "silence")
    try:
        yield
    finally:
        service_config.config = saved


@pytest.fixture
def fake_transport(monkeypatch: pytest.MonkeyPatch) -> FakeTransport:
    transport = FakeTransport()
    monkeypatch.setattr(inworld_driver, "AsyncHTTPClient", transport.client_factory)
    return transport


@pytest.fixture
def engine() -> InworldTTSEngine:
    return InworldTTSEngine(TEST_API_KEY)
