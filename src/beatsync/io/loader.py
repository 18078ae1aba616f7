"""Audio file loading utilities."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Union

import librosa

from beatsync.core.waveform import Waveform

logger = logging.getLogger(__name__)


class DecodeError(RuntimeError):
    """The audio source could not be decoded into samples."""


def load_waveform(
    source: Union[str, Path, BytesIO],
    sr: int | None = None,
) -> Waveform:
    """Decode an audio file or buffer into a Waveform.

    Multichannel audio keeps its first channel rather than a downmix, so
    percussive transients panned to one side are not attenuated.

    Parameters
    ----------
    source:
        Path to an audio file (wav, mp3, flac) or a BytesIO buffer.
    sr:
        Target sample rate. None preserves the file's rate.

    Returns
    -------
    Waveform
        Decoded samples with sample rate and duration.

    Raises
    ------
    DecodeError
        If the file is missing or cannot be decoded.
    """
    if isinstance(source, (str, Path)) and not Path(source).exists():
        raise DecodeError(f"Audio file not found: {source}")

    try:
        y, sr_out = librosa.load(source, sr=sr, mono=False)
    except Exception as e:
        raise DecodeError(f"Failed to decode audio data: {e}") from e

    waveform = Waveform.from_array(y, sr_out)
    logger.info(
        f"Loaded {waveform.duration:.2f}s at {waveform.sample_rate}Hz "
        f"({y.shape[0] if y.ndim == 2 else 1} channel(s))"
    )
    return waveform
