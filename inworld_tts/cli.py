"""Command-line entry point for the Inworld TTS client."""

import argparse
import asyncio
import sys
from pathlib import Path

import aiohttp
import yaml
from pydantic import ValidationError

from inworld_tts.services.tts_service.drivers.inworld import InworldTTSEngine
from inworld_tts.services.tts_service.errors import InworldTTSError
from inworld_tts.services.tts_service.script import ScriptStitcher
from inworld_tts.shared.config import config
from inworld_tts.shared.enums import DEFAULT_FORMAT, AudioFormat, LanguageCode, PauseMode, TTSModel, Voice
from inworld_tts.shared.logging_utils import set_log_level, setup_logging
from inworld_tts.shared.tts_models import ScriptDocument, SpeakOptions

logger = setup_logging("inworld-tts-cli", config.get("log_level", "INFO"))

LOGGER_NAMES = ("inworld-tts-cli", "inworld-tts-driver", "script-stitcher")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inworld-tts", description="Generate speech with the Inworld TTS API."
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    speak = subparsers.add_parser("speak", help="Synthesize a single utterance")
    speak.add_argument("text", help="Text to speak")
    speak.add_argument("--voice", "-v", help="Voice identifier")
    speak.add_argument("--out", "-o", help="Output file (default: output.<format>)")
    speak.add_argument("--format", dest="output_format", help="Audio format")
    speak.add_argument("--rate", type=int, help="Sample rate in Hz")
    speak.add_argument("--bitrate", type=int, help="Bit rate in kbps")
    speak.add_argument("--depth", type=int, help="Bit depth")
    speak.add_argument("--language", help="ISO language code")
    speak.add_argument("--model", help="Model identifier")
    speak.add_argument("--temperature", type=float, help="Sampling temperature")
    speak.add_argument("--speed", type=float, help="Speaking rate")
    speak.add_argument("--pitch", type=float, help="Pitch adjustment")
    speak.add_argument("--stream", "-s", action="store_true", help="Write audio as it arrives")

    script = subparsers.add_parser("script", help="Synthesize a multi-speaker script file")
    script.add_argument("file", help="YAML or JSON script with speakers and lines")
    script.add_argument("--out", "-o", help="Output file (default: output.<format>)")
    script.add_argument("--pause", type=int, help="Pause after each line in milliseconds")
    script.add_argument(
        "--pause-mode",
        choices=[mode.value for mode in PauseMode],
        help="Render pauses as real silence or as empty placeholders",
    )

    subparsers.add_parser("voices", help="List supported voices, languages, models and formats")
    return parser


def options_from_args(args: argparse.Namespace) -> SpeakOptions:
    """Map speak flags onto SpeakOptions, leaving unset flags out."""
    return SpeakOptions(
        voice_id=args.voice,
        language=args.language,
        model_id=args.model,
        temperature=args.temperature,
        speed=args.speed,
        pitch=args.pitch,
        output_format=args.output_format,
        sample_rate_hertz=args.rate,
        bit_rate=args.bitrate,
        bit_depth=args.depth,
    )


def load_script(path: str | Path) -> ScriptDocument:
    """Read a script document. JSON is a subset of YAML, so both parse here."""
    with open(path, "r", encoding="utf-8") as stream:
        data = yaml.safe_load(stream) or {}
    return ScriptDocument.model_validate(data)


def _default_output(formats: list[str]) -> Path:
    unique = set(formats) or {DEFAULT_FORMAT.value}
    extension = unique.pop() if len(unique) == 1 else "bin"
    return Path(f"output.{extension}")


async def run_speak(engine: InworldTTSEngine, args: argparse.Namespace) -> Path:
    options = options_from_args(args)
    output_format = options.output_format or DEFAULT_FORMAT.value
    output_path = Path(args.out or _default_output([output_format])).resolve()

    if args.stream:
        print("Streaming speech...")
        chunks = engine.synthesize_stream(args.text, options)
        # Chunks are flushed as they arrive; a failure can leave a partial file
        with open(output_path, "wb") as f:
            async for chunk in chunks:
                f.write(chunk)
        print(f"Streamed audio saved to {output_path}")
    else:
        print("Generating speech...")
        audio = await engine.synthesize(args.text, options)
        output_path.write_bytes(audio)
        print(f"Audio saved to {output_path}")
    return output_path


async def run_script(engine: InworldTTSEngine, args: argparse.Namespace) -> Path:
    document = load_script(args.file)
    pause_ms = args.pause if args.pause is not None else document.pause_ms
    formats = [speaker.options.output_format or DEFAULT_FORMAT.value for speaker in document.speakers]
    output_path = Path(args.out or _default_output(formats)).resolve()

    print(f"Generating {len(document.script)} lines...")
    stitcher = ScriptStitcher(engine, pause_mode=args.pause_mode)
    audio = await stitcher.synthesize_script(document.speakers, document.script, pause_ms)
    output_path.write_bytes(audio)
    print(f"Audio saved to {output_path}")
    return output_path


def list_voices() -> None:
    print("Voices:    " + ", ".join(voice.value for voice in Voice))
    print("Languages: " + ", ".join(lang.value for lang in LanguageCode))
    print("Models:    " + ", ".join(model.value for model in TTSModel))
    print("Formats:   " + ", ".join(fmt.value for fmt in AudioFormat))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_log_level("DEBUG", *LOGGER_NAMES)

    if args.command == "voices":
        list_voices()
        return 0

    if not config.get("inworld_api_key"):
        print("Error: INWORLD_API_KEY environment variable is required.", file=sys.stderr)
        return 1

    try:
        engine = InworldTTSEngine.from_config(config)
        if args.command == "speak":
            asyncio.run(run_speak(engine, args))
        else:
            asyncio.run(run_script(engine, args))
    except (
        InworldTTSError,
        ValidationError,
        yaml.YAMLError,
        aiohttp.ClientError,
        asyncio.TimeoutError,
        OSError,
    ) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        message = str(exc).splitlines()[0] if str(exc) else type(exc).__name__
        print(f"Error: {message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
