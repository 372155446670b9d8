"""Encoder configuration, codec selection and version information."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple, Optional

from aaccore.coder import MAX_CHANNELS

FAAC_CFG_VERSION = 104
FAAC_RELEASE = 1
FAAC_VERSION = "1.28"


class MpegVersion(IntEnum):
    """MPEG identifier written to the stream."""

    MPEG4 = 0
    MPEG2 = 1


class ObjectType(IntEnum):
    """AAC object type (profile)."""

    MAIN = 1
    LOW = 2
    SSR = 3
    LTP = 4


class InputFormat(IntEnum):
    """PCM sample format of the encoder input."""

    NULL = 0
    BIT16 = 1
    BIT24 = 2
    BIT32 = 3
    FLOAT = 4


class ShortControl(IntEnum):
    """Block type enforcement."""

    NORMAL = 0
    NOSHORT = 1
    NOLONG = 2


class Law(IntEnum):
    """Source audio codec."""

    ULAW = 0
    ALAW = 1
    PCM16 = 2
    G726 = 3


class Rate(IntEnum):
    """G.726 bit rate, valued as bits per ADPCM sample."""

    RATE_16K = 2
    RATE_24K = 3
    RATE_32K = 4
    RATE_40K = 5

    @property
    def bits_per_second(self) -> int:
        return int(self) * 8000


OUTPUT_RAW = 0
OUTPUT_ADTS = 1


class VersionInfo(NamedTuple):
    config_version: int
    version: str
    release: bool


def get_version() -> VersionInfo:
    """Return the configuration version and library version string."""
    return VersionInfo(FAAC_CFG_VERSION, FAAC_VERSION, bool(FAAC_RELEASE))


@dataclass
class EncoderConfig:
    """Settings that control one AAC encoder instance."""

    mpeg_version: MpegVersion = MpegVersion.MPEG4
    aac_object_type: ObjectType = ObjectType.LOW
    allow_midside: bool = True
    use_lfe: bool = False
    use_tns: bool = False
    bit_rate: int = 0
    band_width: int = 0
    quantqual: int = 100
    output_format: int = OUTPUT_ADTS
    psymodelidx: int = 0
    input_format: InputFormat = InputFormat.BIT32
    shortctl: ShortControl = ShortControl.NORMAL
    channel_map: list[int] = field(default_factory=lambda: list(range(MAX_CHANNELS)))
    version: int = FAAC_CFG_VERSION

    def __post_init__(self) -> None:
        self.mpeg_version = MpegVersion(self.mpeg_version)
        self.aac_object_type = ObjectType(self.aac_object_type)
        self.input_format = InputFormat(self.input_format)
        self.shortctl = ShortControl(self.shortctl)
        if self.output_format not in (OUTPUT_RAW, OUTPUT_ADTS):
            raise ValueError(f"output format must be 0 (raw) or 1 (ADTS), got {self.output_format}")
        if len(self.channel_map) != MAX_CHANNELS:
            raise ValueError(f"channel map must have {MAX_CHANNELS} entries")
        if any(not 0 <= ch < MAX_CHANNELS for ch in self.channel_map):
            raise ValueError("channel map entries must lie in 0..63")
        if self.bit_rate < 0 or self.band_width < 0:
            raise ValueError("bit rate and bandwidth must not be negative")

    @property
    def adts(self) -> bool:
        return self.output_format == OUTPUT_ADTS


@dataclass
class InitParam:
    """Parameters describing the incoming audio for the AAC encoder front end."""

    audio_codec: Law
    audio_channel: int = 1
    sample_rate: int = 8000
    pcm_bit_size: int = 16
    g726_rate: Optional[Rate] = None

    def __post_init__(self) -> None:
        self.audio_codec = Law(self.audio_codec)
        if self.g726_rate is not None:
            self.g726_rate = Rate(self.g726_rate)
        if self.audio_codec is Law.G726 and self.g726_rate is None:
            raise ValueError("G.726 input needs a rate")
        if not 1 <= self.audio_channel <= 255:
            raise ValueError("channel count must lie in 1..255")
        if self.sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        if self.pcm_bit_size <= 0:
            raise ValueError("PCM bit size must be positive")