"""Block-wise and recursive complex oscillators used as frequency shifters.

All shifters multiply complex samples by a rotating phasor and keep their
phase between calls, so a stream can be processed in pieces. Results are
returned as ``numpy.complex64`` arrays.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from pfdsp.mixer import (
    LIMITED_SIMD_SIZE,
    LIMITED_UNROLL_SIZE,
    PI,
    _as_complex,
    _require_multiple_of_four,
    _wrap_symmetric,
)

#: Lanes advanced together by :class:`RecursiveOscillator`.
RECURSIVE_SIMD_SIZE = 8
#: Lanes advanced together by :class:`VectorRecursiveOscillator`.
RECURSIVE_SIMD_SSE_SIZE = 4


class BlockShifter:
    """Stateful mixer that rotates four lanes at once.

    Each lane holds the phasor of one sample of a group of four; after every
    block of samples the lane phasors are re-normalised to unit magnitude.
    """

    def __init__(self, relative_freq: float, phase_start_rad: float = 0.0) -> None:
        self.phase_increment = 2.0 * relative_freq * PI
        group_count = (LIMITED_UNROLL_SIZE + LIMITED_SIMD_SIZE) // LIMITED_SIMD_SIZE
        deltas = np.empty(group_count, dtype=np.complex128)
        phase = 0.0
        for g in range(group_count):
            for _ in range(LIMITED_SIMD_SIZE):
                phase = _wrap_symmetric(phase + self.phase_increment)
            deltas[g] = complex(math.cos(phase), math.sin(phase))
        self.block_deltas = deltas

        lanes = np.empty(LIMITED_SIMD_SIZE, dtype=np.complex128)
        phase = phase_start_rad
        for k in range(LIMITED_SIMD_SIZE):
            lanes[k] = complex(math.cos(phase), math.sin(phase))
            phase = _wrap_symmetric(phase + self.phase_increment)
        self.phase_state = lanes

    def shift(self, samples: Sequence[complex]) -> np.ndarray:
        """Shift samples (a multiple of four), continuing from the previous call."""
        data = _as_complex(samples)
        _require_multiple_of_four(len(data))
        output = np.empty(len(data), dtype=np.complex128)
        starts = self.phase_state.copy()
        for offset in range(0, len(data), LIMITED_UNROLL_SIZE):
            chunk = data[offset : offset + LIMITED_UNROLL_SIZE]
            groups = len(chunk) // LIMITED_SIMD_SIZE
            values = np.empty((groups, LIMITED_SIMD_SIZE), dtype=np.complex128)
            values[0] = starts
            values[1:] = self.block_deltas[: groups - 1, None] * starts[None, :]
            output[offset : offset + len(chunk)] = (
                chunk.reshape(groups, LIMITED_SIMD_SIZE) * values
            ).ravel()
            last = self.block_deltas[groups - 1] * starts
            starts = last / np.abs(last)
        self.phase_state = starts
        return output.astype(np.complex64)


class _LaneOscillator:
    """Recursive quadrature oscillator advancing several lanes per step.

    The phasor is rotated with three shears (``k1 = tan(theta/2)``,
    ``k2 = sin(theta)``), which keeps its magnitude without re-normalisation.
    The phase step per sample is ``rate * pi``.
    """

    lanes = RECURSIVE_SIMD_SIZE

    def _setup(self, rate: float, starting_phase: float) -> None:
        self.u_cos = np.zeros(self.lanes, dtype=np.float64)
        self.v_sin = np.zeros(self.lanes, dtype=np.float64)
        if starting_phase != 0.0:
            self.u_cos[0] = math.cos(starting_phase)
            self.v_sin[0] = math.sin(starting_phase)
        else:
            self.u_cos[0] = 1.0
            self.v_sin[0] = 0.0
        self.k1 = 0.0
        self.k2 = 0.0
        self._set_rate(rate)

    @staticmethod
    def _coefficients(phase_step: float) -> tuple:
        k1 = math.tan(0.5 * phase_step)
        return k1, 2.0 * k1 / (1.0 + k1 * k1)

    def _set_rate(self, rate: float) -> None:
        step = rate * PI
        k1, k2 = self._coefficients(step)
        for j in range(1, self.lanes):
            tmp = self.u_cos[j - 1] - k1 * self.v_sin[j - 1]
            v = self.v_sin[j - 1] + k2 * tmp
            self.v_sin[j] = v
            self.u_cos[j] = tmp - k1 * v
        self.k1, self.k2 = self._coefficients(_wrap_symmetric(step * self.lanes))

    def _advance(self) -> None:
        tmp = self.u_cos - self.k1 * self.v_sin
        self.v_sin = self.v_sin + self.k2 * tmp
        self.u_cos = tmp - self.k1 * self.v_sin

    def _check_length(self, length: int) -> None:
        if length % self.lanes:
            raise ValueError(
                f"number of samples must be a multiple of {self.lanes}, got {length}"
            )

    def _rotate(self, samples: Sequence[complex]) -> np.ndarray:
        data = _as_complex(samples)
        self._check_length(len(data))
        groups = data.reshape(-1, self.lanes)
        output = np.empty_like(groups)
        for index, block in enumerate(groups):
            output[index] = block * (self.u_cos + 1j * self.v_sin)
            self._advance()
        return output.ravel().astype(np.complex64)


class RecursiveOscillator(_LaneOscillator):
    """Recursive oscillator with eight lanes; can also generate its phasor."""

    lanes = RECURSIVE_SIMD_SIZE

    def __init__(self, rate: float, starting_phase: float = 0.0) -> None:
        self._setup(rate, starting_phase)

    def update_rate(self, rate: float) -> None:
        """Change the frequency, keeping the phase of the first lane."""
        self._set_rate(rate)

    def shift(self, samples: Sequence[complex]) -> np.ndarray:
        """Shift samples (a multiple of eight), continuing the phase."""
        return self._rotate(samples)

    def generate(self, size: int) -> np.ndarray:
        """Return ``size`` oscillator values (a multiple of eight)."""
        if size < 0:
            raise ValueError("size must not be negative")
        self._check_length(size)
        output = np.empty((size // self.lanes, self.lanes), dtype=np.complex128)
        for index in range(len(output)):
            output[index] = self.u_cos + 1j * self.v_sin
            self._advance()
        return output.ravel().astype(np.complex64)


class VectorRecursiveOscillator(_LaneOscillator):
    """Recursive oscillator with four lanes."""

    lanes = RECURSIVE_SIMD_SSE_SIZE

    def __init__(self, rate: float, starting_phase: float = 0.0) -> None:
        self._setup(rate, starting_phase)

    def update_rate(self, rate: float) -> None:
        """Change the frequency, keeping the phase of the first lane."""
        self._set_rate(rate)

    def shift(self, samples: Sequence[complex]) -> np.ndarray:
        """Shift samples (a multiple of four), continuing the phase."""
        return self._rotate(samples)