"""Software mixer that plays stereo 16-bit sounds with distance fading and panning."""

from __future__ import annotations

import logging
import math
import struct
import sys
import wave
from array import array
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable, Optional, Union

log = logging.getLogger(__name__)

SAMPLE_RATE = 44100
CHANNELS = 2
MAX_CHANNELS = 16
PAN_RANGE = 400.0
DEFAULT_MAX_DISTANCE = 800.0
MIN_VOLUME = 0.01

_INT16_MIN = -32768
_INT16_MAX = 32767


class AudioError(Exception):
    """A sound could not be loaded or converted."""


@dataclass(frozen=True)
class AudioPosition:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Sound:
    """Interleaved stereo signed 16-bit samples at the mixer rate."""

    samples: array = field(default_factory=lambda: array("h"))

    def __post_init__(self) -> None:
        if not isinstance(self.samples, array) or self.samples.typecode != "h":
            self.samples = array("h", self.samples)

    def __len__(self) -> int:
        return len(self.samples)


@dataclass
class Channel:
    sound: Optional[Sound] = None
    position: int = 0
    volume: float = 1.0
    left_gain: float = 1.0
    right_gain: float = 1.0
    active: bool = False


def _decode(raw: bytes, width: int) -> list[int]:
    if width == 1:
        return [(b - 128) << 8 for b in raw]
    if width == 2:
        samples = array("h")
        samples.frombytes(raw[: len(raw) - len(raw) % 2])
        if sys.byteorder == "big":
            samples.byteswap()
        return samples.tolist()
    if width == 3:
        return [
            int.from_bytes(raw[i : i + 3], "little", signed=True) >> 8
            for i in range(0, len(raw) - 2, 3)
        ]
    if width == 4:
        return [value >> 16 for (value,) in struct.iter_unpack("<i", raw[: len(raw) - len(raw) % 4])]
    raise AudioError(f"unsupported sample width: {width} bytes")


def _to_stereo(samples: list[int], channels: int) -> list[int]:
    if channels == 2:
        return samples
    if channels == 1:
        return [s for sample in samples for s in (sample, sample)]
    if channels > 2:
        frames = len(samples) // channels
        return [samples[f * channels + c] for f in range(frames) for c in (0, 1)]
    raise AudioError(f"invalid channel count: {channels}")


def _resample(stereo: list[int], rate: int) -> list[int]:
    frames = len(stereo) // 2
    if frames == 0 or rate == SAMPLE_RATE:
        return stereo
    count = round(frames * SAMPLE_RATE / rate)
    out: list[int] = []
    for i in range(count):
        pos = i * rate / SAMPLE_RATE
        i0 = min(int(pos), frames - 1)
        i1 = min(i0 + 1, frames - 1)
        frac = pos - i0
        for c in (0, 1):
            a, b = stereo[2 * i0 + c], stereo[2 * i1 + c]
            out.append(int(round(a + (b - a) * frac)))
    return out


def _clamp16(values: Iterable[int]) -> array:
    return array("h", (max(_INT16_MIN, min(_INT16_MAX, v)) for v in values))


class AudioMixer:
    """Mixes up to sixteen playing sounds into one stereo stream."""

    def __init__(self) -> None:
        self.sounds: dict[str, Sound] = {}
        self.listener = AudioPosition(400.0, 300.0, 0.0)
        self.channels = [Channel() for _ in range(MAX_CHANNELS)]

    def load_sound(self, path: Union[str, PathLike]) -> Sound:
        """Read a PCM WAV file and convert it to the mixer format."""
        try:
            with wave.open(str(path), "rb") as wav:
                channels = wav.getnchannels()
                width = wav.getsampwidth()
                rate = wav.getframerate()
                raw = wav.readframes(wav.getnframes())
        except (wave.Error, EOFError) as exc:
            raise AudioError(f"failed to load sound {path}: {exc}") from exc
        if rate <= 0:
            raise AudioError(f"invalid sample rate in {path}: {rate}")
        stereo = _to_stereo(_decode(raw, width), channels)
        return Sound(_resample(stereo, rate))

    def add_sound(self, name: str, sound: Optional[Sound]) -> None:
        if sound is not None:
            self.sounds[name] = sound

    def play_sound(self, name: str) -> bool:
        return self.play_sound_3d(name, self.listener, 0.0)

    def play_sound_3d(
        self, name: str, pos: AudioPosition, max_distance: float = DEFAULT_MAX_DISTANCE
    ) -> bool:
        """Start a sound at a position; True also when it is too far away to hear."""
        sound = self.sounds.get(name)
        if sound is None or len(sound) == 0:
            return False

        volume = 1.0
        if max_distance > 0.0:
            distance = self.distance_to(pos)
            if distance > max_distance:
                return True
            volume = max(0.0, 1.0 - distance / max_distance)
            if volume < MIN_VOLUME:
                return True

        left_gain, right_gain = self.stereo_pan(pos)
        channel = next((c for c in self.channels if not c.active), None)
        if channel is None:
            log.info("No free audio channels to play sound: %s", name)
            return False

        channel.sound = sound
        channel.position = 0
        channel.volume = volume
        channel.left_gain = left_gain
        channel.right_gain = right_gain
        channel.active = True
        return True

    def set_listener_position(self, pos: AudioPosition) -> None:
        self.listener = pos

    def distance_to(self, pos: AudioPosition) -> float:
        lp = self.listener
        return math.dist((pos.x, pos.y, pos.z), (lp.x, lp.y, lp.z))

    def stereo_pan(self, pos: AudioPosition) -> tuple[float, float]:
        """Left and right gains for a sound at the given position."""
        pan = max(-1.0, min(1.0, (pos.x - self.listener.x) / PAN_RANGE))
        if pan <= 0:
            left, right = 1.0, 1.0 + pan
        else:
            left, right = 1.0 - pan, 1.0
        return max(0.0, left), max(0.0, right)

    def mix(self, num_bytes: int) -> bytes:
        """Produce the next ``num_bytes`` of little-endian 16-bit stereo output."""
        if num_bytes < 0:
            raise ValueError("num_bytes must not be negative")
        count = num_bytes // 2
        acc = [0] * count

        for chan in self.channels:
            if not chan.active or chan.sound is None:
                continue
            data = chan.sound.samples
            n = min(count, len(data) - chan.position)
            base = chan.position
            for j in range(0, n, 2):
                acc[j] += int(data[base + j] * chan.volume * chan.left_gain)
                if j + 1 < count:
                    acc[j + 1] += int(data[base + j + 1] * chan.volume * chan.right_gain)
            chan.position += n
            if chan.position >= len(data):
                chan.active = False

        out = _clamp16(acc)
        if sys.byteorder == "big":
            out.byteswap()
        return out.tobytes()