import pytest

from pfdsp.sizes import is_power_of_two, next_power_of_two


def test_zero_maps_to_zero():
    assert next_power_of_two(0) == 0


@pytest.mark.parametrize("n", range(1, 2100))
def test_next_power_of_two_bounds(n):
    result = next_power_of_two(n)
    assert is_power_of_two(result)
    assert result >= n
    assert result // 2 < n


@pytest.mark.parametrize("exponent", range(0, 31))
def test_powers_map_to_themselves(exponent):
    value = 1 << exponent
    assert next_power_of_two(value) == value
    assert is_power_of_two(value)


@pytest.mark.parametrize("exponent", range(2, 31))
def test_neighbours_of_powers(exponent):
    value = 1 << exponent
    assert not is_power_of_two(value + 1)
    assert not is_power_of_two(value - 1)
    assert next_power_of_two(value + 1) == 2 * value


def test_zero_and_negative_are_not_powers():
    assert is_power_of_two(0) is False
    assert is_power_of_two(-4) is False


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        next_power_of_two(-1)


def test_too_large_size_rejected():
    with pytest.raises(ValueError):
        next_power_of_two((1 << 31) + 1)