import math

import numpy as np
import pytest

from pfdsp.mixer import (
    AddFastShifter,
    LimitedUnrollShifter,
    ShiftTable,
    UnrollShifter,
    shift_math_cc,
)


def _tone(n, increment, start=0.0, offset=0):
    k = np.arange(n) + offset
    return np.exp(1j * (start + increment * k))


def test_shift_math_zero_rate_rotates_by_start_phase():
    data = np.array([1 + 2j, -0.5 + 0.25j, 3 - 1j])
    out, phase = shift_math_cc(data, 0.0, 0.7)
    np.testing.assert_allclose(out, data * np.exp(0.7j), rtol=1e-6, atol=1e-6)
    assert phase == pytest.approx(0.7)


def test_shift_math_produces_tone_from_ones():
    rate = 0.1
    out, _ = shift_math_cc(np.ones(50), rate, 0.0)
    np.testing.assert_allclose(out, _tone(50, 2 * math.pi * rate), atol=1e-5)


def test_shift_math_preserves_magnitude_and_phase_range():
    rng = np.random.default_rng(1)
    data = rng.normal(size=64) + 1j * rng.normal(size=64)
    out, phase = shift_math_cc(data, 0.37, 1.0)
    np.testing.assert_allclose(np.abs(out), np.abs(data), rtol=1e-5)
    assert 0.0 <= phase <= 2 * math.pi


def test_shift_math_continues_across_calls():
    rate = -0.23
    data = np.ones(40)
    whole, _ = shift_math_cc(data, rate, 0.0)
    first, phase = shift_math_cc(data[:17], rate, 0.0)
    second, _ = shift_math_cc(data[17:], rate, phase)
    np.testing.assert_allclose(np.concatenate([first, second]), whole, atol=1e-5)


def test_shift_table_contents():
    table = ShiftTable(16)
    assert table.table[0] == 0.0
    assert len(table.table) == 16
    assert np.all(np.diff(table.table) > 0)
    assert table.table[-1] < 1.0


def test_shift_table_zero_phase_scales_by_last_entry():
    table = ShiftTable(64)
    data = np.array([1 + 1j, 2 - 3j])
    out, phase = table.shift(data, 0.0, 0.0)
    np.testing.assert_allclose(out, data * table.table[-1], rtol=1e-6)
    assert phase == 0.0


def test_shift_table_rejects_bad_size():
    with pytest.raises(ValueError):
        ShiftTable(0)


def test_addfast_tone_starts_one_step_ahead():
    rate, start = 0.05, 0.3
    shifter = AddFastShifter(rate)
    out, phase = shifter.shift(np.ones(32), start)
    inc = 2 * math.pi * rate
    np.testing.assert_allclose(out, _tone(32, inc, start, offset=1), atol=1e-5)
    expected = math.atan2(math.sin(start + 32 * inc), math.cos(start + 32 * inc))
    assert phase == pytest.approx(expected)
    assert -math.pi <= phase <= math.pi


def test_addfast_requires_multiple_of_four():
    with pytest.raises(ValueError):
        AddFastShifter(0.1).shift(np.ones(6), 0.0)


def test_unroll_tone_and_phase():
    rate, start = -0.12, -1.1
    shifter = UnrollShifter(rate, 100)
    out, phase = shifter.shift(np.ones(100), start)
    inc = 2 * math.pi * rate
    np.testing.assert_allclose(out, _tone(100, inc, start), atol=1e-5)
    expected = math.atan2(math.sin(start + 100 * inc), math.cos(start + 100 * inc))
    assert phase == pytest.approx(expected, abs=1e-9)


def test_unroll_rejects_too_many_samples():
    with pytest.raises(ValueError):
        UnrollShifter(0.1, 8).shift(np.ones(9), 0.0)


def test_limited_unroll_tone_over_several_blocks():
    rate = 0.031
    shifter = LimitedUnrollShifter(rate)
    out = shifter.shift(np.ones(400))
    np.testing.assert_allclose(out, _tone(400, 2 * math.pi * rate), atol=1e-4)


def test_limited_unroll_continues_across_calls():
    rate = 0.2
    whole = LimitedUnrollShifter(rate).shift(np.ones(20))
    split = LimitedUnrollShifter(rate)
    parts = [split.shift(np.ones(8)), split.shift(np.ones(12))]
    np.testing.assert_allclose(np.concatenate(parts), whole, atol=1e-5)
    assert abs(split.complex_phase) == pytest.approx(1.0)


def test_limited_unroll_requires_multiple_of_four():
    with pytest.raises(ValueError):
        LimitedUnrollShifter(0.1).shift(np.ones(5))