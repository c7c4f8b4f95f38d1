import numpy as np
import pytest

from pfdsp.oscillator import (
    BlockShifter,
    RecursiveOscillator,
    VectorRecursiveOscillator,
)


def _signal(n, seed=1):
    rng = np.random.default_rng(seed)
    return rng.standard_normal(n) + 1j * rng.standard_normal(n)


def test_block_shifter_matches_exact_rotation():
    n = 512
    rate = 0.013
    start = 0.3
    data = _signal(n)
    out = BlockShifter(rate, start).shift(data)
    expected = data * np.exp(1j * (start + 2 * np.pi * rate * np.arange(n)))
    np.testing.assert_allclose(out, expected, atol=1e-4)


def test_block_shifter_split_calls_equal_single_call():
    data = _signal(400)
    whole = BlockShifter(0.07, 0.5).shift(data)
    shifter = BlockShifter(0.07, 0.5)
    parts = np.concatenate([shifter.shift(data[:132]), shifter.shift(data[132:])])
    np.testing.assert_allclose(parts, whole, atol=1e-4)


def test_block_shifter_preserves_magnitude():
    data = _signal(256, seed=3)
    out = BlockShifter(-0.21).shift(data)
    np.testing.assert_allclose(np.abs(out), np.abs(data), rtol=1e-5)


def test_block_shifter_zero_rate_is_identity():
    data = _signal(64, seed=4)
    out = BlockShifter(0.0).shift(data)
    np.testing.assert_allclose(out, data, atol=1e-5)


def test_block_shifter_rejects_partial_group():
    with pytest.raises(ValueError):
        BlockShifter(0.1).shift(np.ones(6, dtype=complex))


def test_recursive_generate_matches_exact_phasor():
    rate = 0.03
    start = 0.7
    out = RecursiveOscillator(rate, start).generate(256)
    expected = np.exp(1j * (start + np.pi * rate * np.arange(256)))
    np.testing.assert_allclose(out, expected, atol=1e-5)


def test_recursive_generate_starts_at_one_for_zero_phase():
    out = RecursiveOscillator(0.1, 0.0).generate(8)
    assert out[0] == pytest.approx(1.0 + 0.0j)
    np.testing.assert_allclose(np.abs(out), np.ones(8), atol=1e-6)


def test_recursive_shift_matches_exact_rotation():
    data = _signal(160, seed=5)
    rate = -0.11
    out = RecursiveOscillator(rate, 0.2).shift(data)
    expected = data * np.exp(1j * (0.2 + np.pi * rate * np.arange(160)))
    np.testing.assert_allclose(out, expected, atol=1e-4)


def test_recursive_split_calls_equal_single_call():
    data = _signal(64, seed=6)
    whole = RecursiveOscillator(0.05).shift(data)
    osc = RecursiveOscillator(0.05)
    parts = np.concatenate([osc.shift(data[:24]), osc.shift(data[24:])])
    np.testing.assert_allclose(parts, whole, atol=1e-5)


def test_recursive_update_rate_continues_phase():
    a, b = 0.02, 0.09
    osc = RecursiveOscillator(a, 0.0)
    osc.generate(16)
    osc.update_rate(b)
    out = osc.generate(32)
    expected = np.exp(1j * (16 * np.pi * a + np.pi * b * np.arange(32)))
    np.testing.assert_allclose(out, expected, atol=1e-5)


def test_recursive_rejects_partial_group():
    osc = RecursiveOscillator(0.1)
    with pytest.raises(ValueError):
        osc.shift(np.ones(12, dtype=complex))
    with pytest.raises(ValueError):
        osc.generate(10)


def test_vector_recursive_shift_matches_exact_rotation():
    data = _signal(100, seed=7)
    rate = 0.17
    out = VectorRecursiveOscillator(rate, -0.4).shift(data)
    expected = data * np.exp(1j * (-0.4 + np.pi * rate * np.arange(100)))
    np.testing.assert_allclose(out, expected, atol=1e-4)


def test_vector_recursive_agrees_with_eight_lane_oscillator():
    data = _signal(48, seed=8)
    four = VectorRecursiveOscillator(0.04, 1.1).shift(data)
    eight = RecursiveOscillator(0.04, 1.1).shift(data)
    np.testing.assert_allclose(four, eight, atol=1e-5)


def test_vector_recursive_rejects_partial_group():
    with pytest.raises(ValueError):
        VectorRecursiveOscillator(0.1).shift(np.ones(6, dtype=complex))