# analyse/io.py
"""
Audio decoding utilities for peak analysis.

Design goals:
- one entry point (load_audio_file) for every supported container
- consistent internal format: mono float64 in range [-1, 1]
- decoder failures surface as DecodeError, with the decoder's message kept

Decoders:
- .wav         -> scipy.io.wavfile
- .mp3, .ogg   -> soundfile (libsndfile)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Tuple

import numpy as np

try:
    from scipy.io import wavfile
except ImportError as import_error:  # pragma: no cover
    raise ImportError(
        "scipy is required for WAV reading. Install with: pip install scipy"
    ) from import_error

try:
    import soundfile
except ImportError as import_error:  # pragma: no cover
    raise ImportError(
        "soundfile is required for MP3/OGG reading. Install with: pip install soundfile"
    ) from import_error

from analyse.errors import DecodeError, UnsupportedFormatError


logger = logging.getLogger(__name__)

SUPPORTED_AUDIO_EXTENSIONS: Tuple[str, ...] = (".wav", ".mp3", ".ogg")


@dataclass(frozen=True)
class LoadedAudio:
    """
    Container for decoded audio, already mixed down to mono.
    """
    samples: np.ndarray          # shape (num_samples,), float64 in [-1, 1]
    sample_rate_hz: int          # decoder-reported rate
    file_path: Path              # original file

    @property
    def duration_seconds(self) -> float:
        return self.samples.size / float(self.sample_rate_hz)


# -------------------------------------------------------------------
# Sample conversion
# -------------------------------------------------------------------

def _convert_integer_pcm_to_float(samples: np.ndarray) -> np.ndarray:
    """
    Convert integer PCM to float64 in [-1, 1].

    Supports:
    - uint8: offset binary, centre 128
    - int16: scale by 32768
    - int32: scale by 2147483648 (also covers 24-bit PCM in an int32 container)
    """
    if samples.dtype == np.uint8:
        return (samples.astype(np.float64) - 128.0) / 128.0

    if samples.dtype == np.int16:
        return samples.astype(np.float64) / 32768.0

    if samples.dtype == np.int32:
        return samples.astype(np.float64) / 2147483648.0

    raise ValueError(f"Unsupported integer PCM dtype: {samples.dtype}")


def convert_samples_to_float(samples: np.ndarray) -> np.ndarray:
    """
    Convert decoded samples to float64 in [-1, 1] regardless of source dtype.

    - float32/float64: passed through (clipped to [-1,1])
    - uint8/int16/int32: scaled appropriately
    """
    if np.issubdtype(samples.dtype, np.floating):
        return np.clip(samples.astype(np.float64), -1.0, 1.0)

    if np.issubdtype(samples.dtype, np.integer):
        return np.clip(_convert_integer_pcm_to_float(samples), -1.0, 1.0)

    raise ValueError(f"Unsupported sample dtype: {samples.dtype}")


def downmix_to_mono(samples: np.ndarray) -> np.ndarray:
    """
    Average all channels of each frame.

    Accepts (num_samples,) or (num_samples, num_channels); returns (num_samples,).
    """
    if samples.ndim == 1:
        return samples.astype(np.float64)

    if samples.ndim == 2:
        return np.mean(samples, axis=1, dtype=np.float64)

    raise ValueError(f"Expected 1D or 2D audio array, got shape {samples.shape}")


# -------------------------------------------------------------------
# Decoders
# -------------------------------------------------------------------

def _decode_wav(file_path: Path) -> Tuple[np.ndarray, int]:
    sample_rate_hz, samples = wavfile.read(str(file_path))
    return convert_samples_to_float(samples), int(sample_rate_hz)


def _decode_with_soundfile(file_path: Path) -> Tuple[np.ndarray, int]:
    samples, sample_rate_hz = soundfile.read(str(file_path), dtype="float64", always_2d=True)
    return convert_samples_to_float(samples), int(sample_rate_hz)


_DECODERS: Dict[str, Callable[[Path], Tuple[np.ndarray, int]]] = {
    ".wav": _decode_wav,
    ".mp3": _decode_with_soundfile,
    ".ogg": _decode_with_soundfile,
}


def load_audio_file(audio_file_path: str | Path) -> LoadedAudio:
    """
    Decode an audio file and mix it down to mono.

    The decoder is chosen by file extension. Unknown extensions are rejected
    before the file is touched.

    Raises:
        UnsupportedFormatError: extension is not .wav, .mp3 or .ogg
        DecodeError: the file could not be opened or decoded
    """
    audio_file_path = Path(audio_file_path)
    extension = audio_file_path.suffix.lower()

    decoder = _DECODERS.get(extension)
    if decoder is None:
        raise UnsupportedFormatError(
            f"Unsupported audio format {audio_file_path.suffix!r} for file {audio_file_path}. "
            f"Supported: {', '.join(SUPPORTED_AUDIO_EXTENSIONS)}"
        )

    try:
        float_samples, sample_rate_hz = decoder(audio_file_path)
    except (OSError, ValueError, RuntimeError, EOFError) as decode_error:
        raise DecodeError(f"Failed to decode {audio_file_path}: {decode_error}") from decode_error

    mono_samples = downmix_to_mono(float_samples)

    if sample_rate_hz <= 0:
        raise DecodeError(f"Decoder reported invalid sample rate {sample_rate_hz} Hz for file {audio_file_path}")

    if mono_samples.size == 0:
        raise DecodeError(f"No audio frames decoded from {audio_file_path}")

    loaded_audio = LoadedAudio(
        samples=mono_samples,
        sample_rate_hz=sample_rate_hz,
        file_path=audio_file_path,
    )

    logger.info(
        "Decoded %s: %d samples at %d Hz (%.3f s)",
        audio_file_path,
        mono_samples.size,
        sample_rate_hz,
        loaded_audio.duration_seconds,
    )
    return loaded_audio
