"""Generators of fixed carrier tones: DC and +/- fs/4 and fs/2 signals.

Float generators return ``numpy.complex64`` arrays of ``size`` samples.
16-bit generators return ``numpy.int16`` arrays of shape ``(size, 2)``;
each row is one I/Q pair.
"""

from __future__ import annotations

import numpy as np

SHRT_MAX = 32767
#: Amplitude of the float carriers, kept just below full scale.
FLOAT_AMPLITUDE = 127.0 / 128.0
#: Amplitude of each component in the combined 16-bit carriers.
HALF_SCALE = SHRT_MAX // 2

_PERIOD = 4


def _check_size(size: int, period: int = 1) -> None:
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    if size % period:
        raise ValueError(f"size must be a multiple of {period}, got {size}")


def _tile_complex(pattern, size: int, period: int) -> np.ndarray:
    _check_size(size, period)
    base = np.array([complex(i, q) for i, q in pattern], dtype=np.complex64)
    return np.tile(base, size // len(base))


def _tile_s16(pattern, size: int, period: int) -> np.ndarray:
    _check_size(size, period)
    base = np.array(pattern, dtype=np.int16).reshape(-1, 2)
    return np.tile(base, (size // len(base), 1))


def generate_dc_f(size: int) -> np.ndarray:
    """A constant carrier at 0 Hz."""
    return _tile_complex([(FLOAT_AMPLITUDE, 0.0)], size, 1)


def generate_dc_s16(size: int) -> np.ndarray:
    """A constant 16-bit carrier at 0 Hz."""
    return _tile_s16([(SHRT_MAX, 0)], size, 1)


def generate_pos_fs4_f(size: int) -> np.ndarray:
    """A carrier at +fs/4; ``size`` must be a multiple of four."""
    a = FLOAT_AMPLITUDE
    return _tile_complex([(a, 0.0), (0.0, a), (-a, 0.0), (0.0, -a)], size, _PERIOD)


def generate_pos_fs4_s16(size: int) -> np.ndarray:
    """A 16-bit carrier at +fs/4; ``size`` must be a multiple of four."""
    a = SHRT_MAX
    return _tile_s16([(a, 0), (0, a), (-a, 0), (0, -a)], size, _PERIOD)


def generate_neg_fs4_f(size: int) -> np.ndarray:
    """A carrier at -fs/4; ``size`` must be a multiple of four."""
    a = FLOAT_AMPLITUDE
    return _tile_complex([(a, 0.0), (0.0, -a), (-a, 0.0), (0.0, a)], size, _PERIOD)


def generate_neg_fs4_s16(size: int) -> np.ndarray:
    """A 16-bit carrier at -fs/4; ``size`` must be a multiple of four."""
    a = SHRT_MAX
    return _tile_s16([(a, 0), (0, -a), (-a, 0), (0, a)], size, _PERIOD)


def generate_dc_pos_fs4_s16(size: int) -> np.ndarray:
    """DC plus a +fs/4 carrier, each at half scale."""
    m = HALF_SCALE
    return _tile_s16([(m + m, 0), (m, m), (m - m, 0), (m, -m)], size, _PERIOD)


def generate_dc_neg_fs4_s16(size: int) -> np.ndarray:
    """DC plus a -fs/4 carrier, each at half scale."""
    m = HALF_SCALE
    return _tile_s16([(m + m, 0), (m, -m), (m - m, 0), (m, m)], size, _PERIOD)


def generate_pos_neg_fs4_s16(size: int) -> np.ndarray:
    """Combined +fs/4 and -fs/4 test pattern at half scale."""
    m = HALF_SCALE
    return _tile_s16([(m, -m), (-m, m), (-m, m), (m, -m)], size, _PERIOD)


def generate_dc_pos_neg_fs4_s16(size: int) -> np.ndarray:
    """Combined DC, +fs/4 and -fs/4 test pattern at half scale."""
    m = HALF_SCALE
    return _tile_s16([(m + m, -m), (0, m), (0, m), (m + m, -m)], size, _PERIOD)


def generate_pos_neg_fs2_s16(size: int) -> np.ndarray:
    """A carrier at fs/2 (alternating sign on I)."""
    m = HALF_SCALE
    return _tile_s16([(m, 0), (-m, 0), (m, 0), (-m, 0)], size, _PERIOD)


def generate_dc_pos_neg_fs2_s16(size: int) -> np.ndarray:
    """An fs/2 carrier on I plus a constant on Q."""
    m = HALF_SCALE
    return _tile_s16([(m, m), (-m, m), (m, m), (-m, m)], size, _PERIOD)