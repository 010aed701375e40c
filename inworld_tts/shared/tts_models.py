"""
Text-to-Speech (TTS) request and script models.
"""
from pydantic import BaseModel, Field


class SpeakOptions(BaseModel):
    """Per-request synthesis settings. Unset fields are left out of the request."""
    voice_id: str | None = Field(None, description="Voice identifier as defined by Inworld")
    language: str | None = Field(None, description="ISO language code, e.g. 'en'")
    model_id: str | None = Field(None, description="TTS model, defaults to inworld-tts-1")
    temperature: float | None = Field(None, description="Sampling temperature (0.6-1.0)")
    speed: float | None = Field(None, description="Speaking rate (0.5-1.5)")
    pitch: float | None = Field(None, description="Pitch adjustment (-5.0-5.0)")
    output_format: str | None = Field(None, description="Audio format, defaults to mp3")
    sample_rate_hertz: int | None = Field(None, description="Sample rate in Hz (8000-48000)")
    bit_rate: int | None = Field(None, description="Bit rate in kbps for compressed formats")
    bit_depth: int | None = Field(None, description="Bit depth for WAV/PCM output")


class Speaker(BaseModel):
    """A named participant in a script and the options used for their lines."""
    name: str = Field(..., description="Speaker name referenced by script segments")
    options: SpeakOptions = Field(default_factory=SpeakOptions)


class ScriptSegment(BaseModel):
    """One line of dialogue."""
    name: str = Field(..., description="Speaker name")
    line: str = Field(..., description="Text spoken by the speaker")


class ScriptDocument(BaseModel):
    """A multi-speaker script as loaded from a YAML or JSON file."""
    speakers: list[Speaker] = Field(default_factory=list)
    script: list[ScriptSegment] = Field(default_factory=list)
    pause_ms: int = Field(default=500, ge=0, description="Gap inserted after each line")
