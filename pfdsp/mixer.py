"""Complex frequency shifters (mixers) for interleaved I/Q sample streams.

Every shifter multiplies complex samples by a rotating phasor. Results are
returned as ``numpy.complex64`` arrays; internal arithmetic is done in double
precision.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

PI = math.pi
TWO_PI = 2.0 * math.pi

#: Number of samples processed between phasor re-normalisations.
LIMITED_UNROLL_SIZE = 128
#: Samples are processed in groups of this many.
LIMITED_SIMD_SIZE = 4


def _as_complex(samples: Sequence[complex]) -> np.ndarray:
    return np.asarray(samples, dtype=np.complex128).ravel()


def _wrap_symmetric(phase: float) -> float:
    """Bring a phase into the range [-pi, pi]."""
    while phase > PI:
        phase -= TWO_PI
    while phase < -PI:
        phase += TWO_PI
    return phase


def _wrap_positive(phase: float) -> float:
    """Bring a phase into the range [0, 2*pi]."""
    while phase > TWO_PI:
        phase -= TWO_PI
    while phase < 0:
        phase += TWO_PI
    return phase


def _phase_steps(increment: float, count: int) -> np.ndarray:
    """Phasors for the cumulative phases increment*1 .. increment*count."""
    phasors = np.empty(count, dtype=np.complex128)
    phase = 0.0
    for k in range(count):
        phase = _wrap_symmetric(phase + increment)
        phasors[k] = complex(math.cos(phase), math.sin(phase))
    return phasors


def _require_multiple_of_four(length: int) -> None:
    if length % LIMITED_SIMD_SIZE:
        raise ValueError(
            f"number of samples must be a multiple of {LIMITED_SIMD_SIZE}, got {length}"
        )


def shift_math_cc(
    samples: Sequence[complex], rate: float, starting_phase: float = 0.0
) -> Tuple[np.ndarray, float]:
    """Shift samples by ``rate`` (cycles per sample) using direct sin/cos.

    Returns the shifted samples and the phase for the next call, kept in
    the range [0, 2*pi].
    """
    data = _as_complex(samples)
    increment = 2.0 * rate * PI
    phases = np.empty(len(data), dtype=np.float64)
    phase = starting_phase
    for k in range(len(data)):
        phases[k] = phase
        phase = _wrap_positive(phase + increment)
    output = data * np.exp(1j * phases)
    return output.astype(np.complex64), phase


class ShiftTable:
    """Mixer driven by a quarter-wave sine lookup table."""

    def __init__(self, table_size: int) -> None:
        if table_size <= 0:
            raise ValueError("table_size must be positive")
        self.table_size = table_size
        self.table = np.sin(np.arange(table_size) / table_size * (PI / 2.0))

    def _phasor(self, phase: float) -> complex:
        quadrant = int(phase / (PI / 2.0))
        vphase = phase - quadrant * (PI / 2.0)
        sin_index = int(vphase / (PI / 2.0)) * self.table_size
        cos_index = self.table_size - 1 - sin_index
        if quadrant & 1:
            sin_index, cos_index = cos_index, sin_index
        sin_sign = -1.0 if quadrant > 1 else 1.0
        cos_sign = -1.0 if 0 < quadrant < 3 else 1.0
        return complex(
            cos_sign * self.table[cos_index], sin_sign * self.table[sin_index]
        )

    def shift(
        self, samples: Sequence[complex], rate: float, starting_phase: float = 0.0
    ) -> Tuple[np.ndarray, float]:
        """Shift samples using the table; returns output and next phase."""
        data = _as_complex(samples)
        increment = 2.0 * rate * PI
        phasors = np.empty(len(data), dtype=np.complex128)
        phase = starting_phase
        for k in range(len(data)):
            phasors[k] = self._phasor(phase)
            phase = _wrap_positive(phase + increment)
        return (data * phasors).astype(np.complex64), phase


class AddFastShifter:
    """Mixer advancing the phasor by four precomputed steps per block."""

    def __init__(self, rate: float) -> None:
        self.phase_increment = 2.0 * rate * PI
        steps = self.phase_increment * np.arange(1, LIMITED_SIMD_SIZE + 1)
        self.deltas = np.exp(1j * steps)

    def shift(
        self, samples: Sequence[complex], starting_phase: float = 0.0
    ) -> Tuple[np.ndarray, float]:
        """Shift samples (a multiple of four); returns output and next phase in [-pi, pi]."""
        data = _as_complex(samples)
        _require_multiple_of_four(len(data))
        blocks = len(data) // LIMITED_SIMD_SIZE
        starts = np.empty(blocks, dtype=np.complex128)
        start = complex(math.cos(starting_phase), math.sin(starting_phase))
        for b in range(blocks):
            starts[b] = start
            start = start * self.deltas[-1]
        phasors = (starts[:, None] * self.deltas[None, :]).ravel()
        output = (data * phasors).astype(np.complex64)
        phase = _wrap_symmetric(starting_phase + len(data) * self.phase_increment)
        return output, phase


class UnrollShifter:
    """Mixer using a full table of phase steps for up to ``size`` samples."""

    def __init__(self, rate: float, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self.phase_increment = 2.0 * rate * PI
        self.size = size
        self.deltas = _phase_steps(self.phase_increment, size)

    def shift(
        self, samples: Sequence[complex], starting_phase: float = 0.0
    ) -> Tuple[np.ndarray, float]:
        """Shift at most ``size`` samples; returns output and next phase in [-pi, pi]."""
        data = _as_complex(samples)
        if len(data) > self.size:
            raise ValueError(
                f"at most {self.size} samples can be shifted, got {len(data)}"
            )
        start = complex(math.cos(starting_phase), math.sin(starting_phase))
        phasors = np.empty(len(data), dtype=np.complex128)
        if len(data):
            phasors[0] = start
            phasors[1:] = start * self.deltas[: len(data) - 1]
        output = (data * phasors).astype(np.complex64)
        phase = _wrap_symmetric(starting_phase + len(data) * self.phase_increment)
        return output, phase


class LimitedUnrollShifter:
    """Stateful mixer that re-normalises its phasor every block of samples."""

    def __init__(self, rate: float) -> None:
        self.phase_increment = 2.0 * rate * PI
        self.deltas = _phase_steps(self.phase_increment, LIMITED_UNROLL_SIZE)
        self.complex_phase = complex(1.0, 0.0)

    def shift(self, samples: Sequence[complex]) -> np.ndarray:
        """Shift samples (a multiple of four), continuing from the previous call."""
        data = _as_complex(samples)
        _require_multiple_of_four(len(data))
        output = np.empty(len(data), dtype=np.complex128)
        start = self.complex_phase
        for offset in range(0, len(data), LIMITED_UNROLL_SIZE):
            chunk = data[offset : offset + LIMITED_UNROLL_SIZE]
            count = len(chunk)
            phasors = np.empty(count, dtype=np.complex128)
            phasors[0] = start
            phasors[1:] = start * self.deltas[: count - 1]
            output[offset : offset + count] = chunk * phasors
            value = start * self.deltas[count - 1]
            start = value / abs(value)
        self.complex_phase = start
        return output.astype(np.complex64)