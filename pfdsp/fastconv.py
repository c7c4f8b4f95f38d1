"""Fast FIR convolution and correlation by overlap-save FFT filtering.

The filter spectrum is computed once; input is processed in blocks of the
transform length and each block yields the outputs that need no wrap-around.
"""

from __future__ import annotations

import enum
from typing import Sequence

import numpy as np

from pfdsp.sizes import next_power_of_two

#: Vector width of the transform engine; sets the smallest transform length.
SIMD_SIZE = 4
#: Smallest transform length used.
MIN_FFT_SIZE = 2 * SIMD_SIZE * SIMD_SIZE


class ConvFlags(enum.IntFlag):
    """Options for :class:`FastConvolver`."""

    NONE = 0
    #: Input and output are complex samples.
    CPLX_INP_OUT = enum.auto()
    #: With complex samples, filter the interleaved stream in one transform.
    CPLX_SINGLE_FFT = enum.auto()
    #: Complex filter coefficients (not supported).
    CPLX_FILTER = enum.auto()
    #: Transform the input in place without copying (layout hint only).
    DIRECT_INP = enum.auto()
    #: Write transform output directly (layout hint only).
    DIRECT_OUT = enum.auto()
    #: Correlate with the coefficients instead of convolving.
    CORRELATION = enum.auto()


class FastConvolver:
    """FIR filter applying real coefficients through FFT block processing."""

    def __init__(
        self,
        coefficients: Sequence[float],
        block_len: int = 0,
        flags: ConvFlags = ConvFlags.NONE,
    ) -> None:
        flags = ConvFlags(flags)
        if ConvFlags.CPLX_FILTER in flags:
            raise ValueError("complex filter coefficients are not supported")
        coeffs = np.asarray(coefficients, dtype=np.float64).ravel()
        filter_len = len(coeffs)
        if filter_len == 0:
            raise ValueError("at least one filter coefficient is required")

        self.flags = flags
        self._single_fft = (
            ConvFlags.CPLX_INP_OUT in flags and ConvFlags.CPLX_SINGLE_FFT in flags
        )
        factor = 2 if self._single_fft else 1

        nfft = max(2 * next_power_of_two(filter_len - 1), MIN_FFT_SIZE)
        if block_len > nfft:
            nfft = next_power_of_two(block_len)
        self.block_len = nfft
        nfft *= factor
        self.nfft = nfft
        self.filter_len = 2 * filter_len - 1 if factor == 2 else filter_len

        ordered = coeffs if ConvFlags.CORRELATION in flags else coeffs[::-1]
        kernel = np.zeros(nfft, dtype=np.float64)
        positions = (nfft - factor * np.arange(filter_len)) & (nfft - 1)
        kernel[positions] = ordered
        self._spectrum = np.fft.rfft(kernel)

    def _filter_block(self, block: np.ndarray) -> np.ndarray:
        padded = np.zeros(self.nfft, dtype=np.float64)
        padded[: len(block)] = block
        return np.fft.irfft(np.fft.rfft(padded) * self._spectrum, n=self.nfft)

    def _run(self, stream: np.ndarray, flush: bool) -> np.ndarray:
        nfft = self.nfft
        filter_len = self.filter_len
        total = len(stream)
        max_off = total - filter_len + 1 if flush else total - nfft + 1
        pieces = []
        offset = 0
        while offset < max_off:
            proc_len = min(nfft, total - offset)
            num_out = proc_len - filter_len + 1
            if self._single_fft:
                num_out &= ~1
                if num_out <= 0:
                    break
            block = stream[offset : offset + proc_len]
            pieces.append(self._filter_block(block)[:num_out])
            offset += num_out
        if not pieces:
            return np.zeros(0, dtype=np.float64)
        return np.concatenate(pieces)

    def apply(self, samples, flush: bool = False) -> np.ndarray:
        """Filter ``samples`` and return every output that could be produced.

        Without ``flush`` only whole transform blocks are processed; with it
        the input is consumed up to its last full filter span. The number of
        returned samples tells how far the input was used.
        """
        if ConvFlags.CPLX_INP_OUT not in self.flags:
            data = np.asarray(samples, dtype=np.float64).ravel()
            return self._run(data, flush).astype(np.float32)

        data = np.asarray(samples, dtype=np.complex128).ravel()
        if self._single_fft:
            interleaved = np.empty(2 * len(data), dtype=np.float64)
            interleaved[0::2] = data.real
            interleaved[1::2] = data.imag
            out = self._run(interleaved, flush)
            return (out[0::2] + 1j * out[1::2]).astype(np.complex64)

        real_part = self._run(data.real.copy(), flush)
        imag_part = self._run(data.imag.copy(), flush)
        return (real_part + 1j * imag_part).astype(np.complex64)