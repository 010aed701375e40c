"""TTS driver implementations"""

from .base import TTSEngine
from .inworld import InworldTTSEngine

__all__ = ["InworldTTSEngine", "TTSEngine"]
