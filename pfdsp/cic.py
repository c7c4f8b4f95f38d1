"""Digital down-converter: NCO mixing followed by a CIC decimator.

The input is mixed with a table-driven oscillator, passed through three
integrators and two combs (the third integrator and first comb are merged
into a block sum) and decimated by ``factor``. Output gain is normalised.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

SINE_SHIFT = 12
SINE_SIZE = 1 << SINE_SHIFT
#: Quarter period offset into the table (cos -> -sin).
_QUARTER = 1 << (SINE_SHIFT - 2)
_SINE_AMP = 32767.0
_SHRT_MAX = 32767
#: Offset subtracted from unsigned 8-bit samples (about 127.4 * 256).
CU8_OFFSET = 32614

_MASK64 = (1 << 64) - 1


def _wrap64(value: int) -> int:
    return ((value + (1 << 63)) & _MASK64) - (1 << 63)


def _wrap32(values: np.ndarray) -> np.ndarray:
    return values.astype(np.int64).astype(np.int32).astype(np.int64)


class CicDdc:
    """Stateful CIC down-converter decimating by ``factor``."""

    def __init__(self, factor: int) -> None:
        if factor <= 0:
            raise ValueError(f"factor must be positive, got {factor}")
        self.factor = factor
        self.phase = 0
        self.gain = float(
            np.float32(1.0) / np.float32(_SHRT_MAX) / np.float32(_SINE_AMP)
            / np.float32(factor) / np.float32(factor) / np.float32(factor)
        )
        size = SINE_SIZE * 5 // 4
        step = 2.0 * math.pi / SINE_SIZE
        self.sinetable = np.array(
            [int(_SINE_AMP * math.cos(step * i)) for i in range(size)], dtype=np.int64
        )
        self._integrators = [0, 0, 0, 0]  # ig0a, ig0b, ig1a, ig1b
        self._combs = [0, 0, 0, 0]  # comb0a, comb0b, comb1a, comb1b

    @staticmethod
    def _frequency(rate: float) -> int:
        return int(float(np.float32(rate)) * float(1 << 64)) & _MASK64

    def _oscillator(self, count: int, rate: float):
        freq = self._frequency(rate)
        steps = (np.arange(count, dtype=np.uint64) * np.uint64(freq)) + np.uint64(
            self.phase
        )
        index = (steps >> np.uint64(64 - SINE_SHIFT)).astype(np.int64)
        self.phase = (self.phase + count * freq) & _MASK64
        return self.sinetable[index + _QUARTER], self.sinetable[index]

    def _integrate(self, in_a: np.ndarray, in_b: np.ndarray) -> np.ndarray:
        ig0a, ig0b, ig1a, ig1b = self._integrators
        comb0a, comb0b, comb1a, comb1b = self._combs
        outsize = len(in_a) // self.factor
        output = np.empty(outsize, dtype=np.complex64)
        gain = np.float32(self.gain)
        a_values = in_a.tolist()
        b_values = in_b.tolist()
        for k in range(outsize):
            ig2a = ig2b = 0
            start = k * self.factor
            for a, b in zip(
                a_values[start : start + self.factor],
                b_values[start : start + self.factor],
            ):
                ig2a += ig1a
                ig2b += ig1b
                ig1a += ig0a
                ig1b += ig0b
                ig0a += a
                ig0b += b
            ig0a, ig0b, ig1a, ig1b = map(_wrap64, (ig0a, ig0b, ig1a, ig1b))
            ig2a, ig2b = _wrap64(ig2a), _wrap64(ig2b)
            out0a = _wrap64(ig2a - comb0a)
            out0b = _wrap64(ig2b - comb0b)
            comb0a, comb0b = ig2a, ig2b
            out1a = _wrap64(out0a - comb1a)
            out1b = _wrap64(out0b - comb1b)
            comb1a, comb1b = out0a, out0b
            output[k] = complex(
                np.float32(out1a) * gain, np.float32(out1b) * gain
            )
        self._integrators = [ig0a, ig0b, ig1a, ig1b]
        self._combs = [comb0a, comb0b, comb1a, comb1b]
        return output

    def _check_length(self, length: int, per_sample: int) -> None:
        block = self.factor * per_sample
        if length % block:
            raise ValueError(
                f"number of input values must be a multiple of {block}, got {length}"
            )

    def process_s16(self, samples: Sequence[int], rate: float) -> np.ndarray:
        """Down-convert real 16-bit samples; ``rate`` is cycles per input sample."""
        data = np.asarray(samples, dtype=np.int16).ravel().astype(np.int64)
        self._check_length(len(data), 1)
        cos_part, sin_part = self._oscillator(len(data), rate)
        return self._integrate(data * cos_part, data * sin_part)

    def _process_complex(self, i_part: np.ndarray, q_part: np.ndarray, rate: float):
        m_c, m_d = self._oscillator(len(i_part), rate)
        in_a = _wrap32(i_part * m_c - q_part * m_d)
        in_b = _wrap32(i_part * m_d + q_part * m_c)
        return self._integrate(in_a, in_b)

    def process_cs16(self, samples: Sequence[int], rate: float) -> np.ndarray:
        """Down-convert interleaved complex 16-bit I/Q samples."""
        data = np.asarray(samples, dtype=np.int16).ravel().astype(np.int64)
        self._check_length(len(data), 2)
        return self._process_complex(data[0::2], data[1::2], rate)

    def process_cu8(self, samples, rate: float) -> np.ndarray:
        """Down-convert interleaved unsigned 8-bit I/Q samples."""
        if isinstance(samples, (bytes, bytearray, memoryview)):
            data = np.frombuffer(bytes(samples), dtype=np.uint8)
        else:
            data = np.asarray(samples, dtype=np.uint8).ravel()
        data = data.astype(np.int64)
        self._check_length(len(data), 2)
        scaled = (data << 8) - CU8_OFFSET
        return self._process_complex(scaled[0::2], scaled[1::2], rate)