"""
Enums and constants for the Inworld TTS API.
"""

from enum import Enum


class LanguageCode(str, Enum):
    """ISO language codes accepted by the Inworld TTS models."""

    ENGLISH = "en"
    SPANISH = "es"
    FRENCH = "fr"
    KOREAN = "ko"
    DUTCH = "nl"
    CHINESE = "zh"
    GERMAN = "de"
    ITALIAN = "it"
    JAPANESE = "ja"
    POLISH = "pl"
    PORTUGUESE = "pt"


class TTSModel(str, Enum):
    """Inworld TTS model identifiers."""

    TTS_1 = "inworld-tts-1"
    TTS_1_MAX = "inworld-tts-1-max"


class AudioFormat(str, Enum):
    """Audio output formats produced by the API."""

    MP3 = "mp3"
    WAV = "wav"
    OPUS = "opus"
    MULAW = "mulaw"
    ALAW = "alaw"


class PauseMode(str, Enum):
    """How the script stitcher renders the gap between lines."""

    SILENCE = "silence"
    EMPTY = "empty"


class Voice(str, Enum):
    """Voice identifiers published by Inworld."""

    ALAIN = "Alain"
    ALEX = "Alex"
    ASHLEY = "Ashley"
    ASUKA = "Asuka"
    CRAIG = "Craig"
    DEBORAH = "Deborah"
    DENNIS = "Dennis"
    DIEGO = "Diego"
    DOMINUS = "Dominus"
    EDWARD = "Edward"
    ELIZABETH = "Elizabeth"
    ERIK = "Erik"
    ETIENNE = "Étienne"
    GIANNI = "Gianni"
    HADES = "Hades"
    HEITOR = "Heitor"
    HELENE = "Hélène"
    HYUNWOO = "Hyunwoo"
    JING = "Jing"
    JOHANNA = "Johanna"
    JOSEF = "Josef"
    JULIA = "Julia"
    KATRIEN = "Katrien"
    LENNART = "Lennart"
    LORE = "Lore"
    LUPITA = "Lupita"
    MAITE = "Maitê"
    MARK = "Mark"
    MATHIEU = "Mathieu"
    MIGUEL = "Miguel"
    MINJI = "Minji"
    OLIVIA = "Olivia"
    ORIETTA = "Orietta"
    PIXIE = "Pixie"
    PRIYA = "Priya"
    RAFAEL = "Rafael"
    RONALD = "Ronald"
    SARAH = "Sarah"
    SATOSHI = "Satoshi"
    SEOJUN = "Seojun"
    SHAUN = "Shaun"
    SZYMON = "Szymon"
    THEODORE = "Theodore"
    TIMOTHY = "Timothy"
    WENDY = "Wendy"
    WOJCIECH = "Wojciech"
    XIAOYIN = "Xiaoyin"
    XINYI = "Xinyi"
    YICHEN = "Yichen"
    YOONA = "Yoona"


DEFAULT_MODEL = TTSModel.TTS_1
DEFAULT_FORMAT = AudioFormat.MP3
