# pfdsp

DSP building blocks for complex baseband (I/Q) signals, built on numpy.
Results come back as numpy arrays: complex samples as `numpy.complex64`,
16-bit carrier patterns as `numpy.int16` arrays of shape `(size, 2)`.

## Installation

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Modules

### `pfdsp.mixer` — frequency shifters

Each shifter multiplies complex samples by a rotating phasor. `rate` is the
shift in cycles per sample (the phase advances by `2*pi*rate` per sample).

- `shift_math_cc(samples, rate, starting_phase=0.0)` computes the phasor
  directly and returns `(output, next_phase)`, with the phase kept in
  `[0, 2*pi]`.
- `ShiftTable(table_size).shift(samples, rate, starting_phase=0.0)` takes its
  phasor from a quarter-wave sine table; returns `(output, next_phase)`.
- `AddFastShifter(rate).shift(samples, starting_phase=0.0)` advances the
  phasor four samples at a time; the number of samples must be a multiple of
  four. Returns `(output, next_phase)`, phase in `[-pi, pi]`.
- `UnrollShifter(rate, size).shift(samples, starting_phase=0.0)` uses a
  precomputed table of `size` phase steps and accepts at most `size` samples.
- `LimitedUnrollShifter(rate).shift(samples)` keeps its phasor between calls
  and re-normalises it every 128 samples; the number of samples must be a
  multiple of four. Returns only the output.

### `pfdsp.oscillator` — stateful oscillators

- `BlockShifter(relative_freq, phase_start_rad=0.0).shift(samples)` rotates
  four lanes at once and re-normalises them every 128 samples; input length a
  multiple of four.
- `RecursiveOscillator(rate, starting_phase=0.0)` is a recursive quadrature
  oscillator with eight lanes. Its phase step per sample is `rate*pi` (so
  `rate` here is in half-cycles per sample). `shift(samples)` needs a multiple
  of eight samples, `generate(size)` returns `size` oscillator values (a
  multiple of eight), and `update_rate(rate)` changes the frequency while
  keeping the phase of the first lane.
- `VectorRecursiveOscillator(rate, starting_phase=0.0)` is the same with four
  lanes; it has `shift` and `update_rate`.

All of these carry their phase from one call to the next.

### `pfdsp.carrier` — fixed carrier patterns

`generate_dc_f`, `generate_pos_fs4_f` and `generate_neg_fs4_f` return
complex64 carriers at amplitude 127/128. `generate_dc_s16`,
`generate_pos_fs4_s16`, `generate_neg_fs4_s16`, `generate_dc_pos_fs4_s16`,
`generate_dc_neg_fs4_s16`, `generate_pos_neg_fs4_s16`,
`generate_dc_pos_neg_fs4_s16`, `generate_pos_neg_fs2_s16` and
`generate_dc_pos_neg_fs2_s16` return 16-bit I/Q pairs. Apart from the two DC
generators, `size` must be a multiple of four.

### `pfdsp.cic` — CIC down-converter

`CicDdc(factor)` mixes its input with a table-driven oscillator and
decimates by `factor` through a CIC filter, with the gain normalised. It
takes real 16-bit (`process_s16`), interleaved complex 16-bit
(`process_cs16`) or interleaved complex unsigned 8-bit (`process_cu8`, which
also accepts `bytes`) input. `rate` is the mixing frequency in cycles per
input sample. The input must hold whole output samples' worth of values.
State carries over between calls.

### `pfdsp.sizes`

`next_power_of_two(n)` and `is_power_of_two(n)`.

### `pfdsp.fastconv` — FFT fast convolution

`FastConvolver(coefficients, block_len=0, flags=ConvFlags.NONE)` filters by
overlap-save FFT blocks. `apply(samples, flush=False)` returns every output
that could be produced: without `flush` only whole transform blocks are used,
with it the input is consumed up to its last full filter span. `ConvFlags`
selects complex input/output (`CPLX_INP_OUT`, optionally `CPLX_SINGLE_FFT`)
and correlation instead of convolution (`CORRELATION`).

## Example

```python
import numpy as np
from pfdsp.mixer import shift_math_cc
from pfdsp.oscillator import RecursiveOscillator
from pfdsp.fastconv import FastConvolver

signal = np.ones(64, dtype=np.complex64)

# shift by a quarter of the sample rate
shifted, phase = shift_math_cc(signal, 0.25, 0.0)

# a stateful oscillator keeps its phase from one block to the next
osc = RecursiveOscillator(0.01, 0.0)
first = osc.shift(signal)
second = osc.shift(signal)

# FIR filtering by fast convolution
conv = FastConvolver([0.25, 0.5, 0.25], 0, 0)
filtered = conv.apply(np.random.default_rng(0).standard_normal(256), flush=True)
```

## What it does not do

- There is no FFT engine of its own: `FastConvolver` uses `numpy.fft`.
  `ConvFlags.DIRECT_INP` and `ConvFlags.DIRECT_OUT` are accepted but change
  nothing, and `ConvFlags.CPLX_FILTER` (complex coefficients) raises
  `ValueError`.
- There is no command-line tool and no reading or writing of sample files;
  everything works on arrays in memory.