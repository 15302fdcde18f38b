# aaarg/core/audio/io.py

"""
Handles decoding audio files into sample sources and saving output buffers,
using librosa and soundfile.
"""

import logging
from pathlib import Path
from typing import Optional

import librosa
import numpy as np
import soundfile as sf

from ..buffer import OutputBuffer
from ..source import SampleSource

logger = logging.getLogger(__name__)

# Create sets of supported extensions (lowercase, including dot)
SUPPORTED_READ_EXTENSIONS = {f".{fmt.lower()}" for fmt in sf.available_formats()}
# librosa can decode mp3 through audioread
SUPPORTED_READ_EXTENSIONS.add(".mp3")

SUPPORTED_WRITE_EXTENSIONS = {f".{fmt.lower()}" for fmt in sf.available_formats()} - {".mp3"}

# The output buffer is written as 32-bit float samples by default.
DEFAULT_SUBTYPE = "FLOAT"


def load_source(
    file_path: Path,
    offset: float = 0.0,
    duration: Optional[float] = None
) -> SampleSource:
    """
    Decodes an audio file into a SampleSource at its native sample rate.

    Multi-channel audio is interleaved frame by frame, so the source carries
    the file's channel count.

    Args:
        file_path: Path object for the audio file.
        offset: Start reading after this time (in seconds).
        duration: Only load up to this much audio (in seconds).

    Returns:
        A SampleSource over the decoded samples.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the path is not a file or its extension is not supported.
        Exception: For librosa/soundfile decoding errors.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Audio input file not found: {file_path}")
    if not file_path.is_file():
        raise ValueError(f"Input path is not a file: {file_path}")
    if file_path.suffix.lower() not in SUPPORTED_READ_EXTENSIONS:
        raise ValueError(f"Unsupported audio input extension: '{file_path.suffix}'. "
                         f"Supported: {sorted(SUPPORTED_READ_EXTENSIONS)}")

    logger.info(f"Loading audio from: {file_path} (offset={offset}, duration={duration})")
    try:
        data, sample_rate = librosa.load(file_path, sr=None, mono=False, offset=offset, duration=duration)
    except Exception as e:
        logger.error(f"Error loading audio file {file_path}: {e}")
        raise

    data = data.astype(np.float64, copy=False)
    channels = 1 if data.ndim == 1 else data.shape[0]
    logger.debug(f"Audio loaded. Shape: {data.shape}, SR: {sample_rate}, channels: {channels}")
    return SampleSource.from_array(data, sample_rate=int(sample_rate))


def save_buffer(
    buffer: OutputBuffer,
    output_path: Path,
    subtype: Optional[str] = DEFAULT_SUBTYPE
):
    """
    Writes an OutputBuffer to an audio file using soundfile.

    Interleaved samples are reshaped to (frames, channels). A trailing partial
    frame is dropped.

    Args:
        buffer: The buffer to write.
        output_path: Destination path; the format is taken from its extension.
        subtype: Soundfile subtype string (default 'FLOAT', 32-bit float).

    Raises:
        ValueError: If the output extension is unsupported.
        Exception: For soundfile writing errors.
    """
    logger.info(f"Saving audio to: {output_path} (channels={buffer.channels}, "
                f"sr={buffer.sample_rate}, subtype={subtype})")

    ext = output_path.suffix.lower()
    if ext not in SUPPORTED_WRITE_EXTENSIONS:
        raise ValueError(f"Unsupported audio output extension: '{ext}'. "
                         f"Supported extensions: {SUPPORTED_WRITE_EXTENSIONS}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    samples = buffer.samples
    remainder = len(samples) % buffer.channels
    if remainder:
        logger.warning(f"Dropping {remainder} trailing sample(s) that do not fill a {buffer.channels}-channel frame.")
        samples = samples[:len(samples) - remainder]
    frames = samples.reshape(-1, buffer.channels)

    if subtype and 'PCM' in subtype:
        max_abs_val = np.max(np.abs(frames)) if frames.size else 0.0
        if max_abs_val > 1.0:
            logger.warning(f"Audio data exceeds range [-1, 1] (max abs: {max_abs_val:.4f}) "
                           f"for PCM subtype '{subtype}'. Clipping data.")
            frames = np.clip(frames, -1.0, 1.0)

    try:
        sf.write(output_path, frames, buffer.sample_rate, subtype=subtype, format=ext[1:].upper())
        logger.info(f"Audio successfully saved to {output_path}")
    except Exception as e:
        logger.error(f"Error saving audio file {output_path}: {e}")
        raise
