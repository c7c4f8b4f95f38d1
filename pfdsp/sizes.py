"""Helpers for choosing transform sizes."""

from __future__ import annotations

_MAX_SIZE = 1 << 31


def _check(n: int) -> int:
    n = int(n)
    if n < 0:
        raise ValueError(f"size must not be negative, got {n}")
    if n > _MAX_SIZE:
        raise ValueError(f"size must not exceed {_MAX_SIZE}, got {n}")
    return n


def next_power_of_two(n: int) -> int:
    """Smallest power of two that is >= ``n``; ``0`` for ``n == 0``."""
    n = _check(n)
    if n == 0:
        return 0
    return 1 << (n - 1).bit_length()


def is_power_of_two(n: int) -> bool:
    """True if ``n`` is a positive power of two."""
    n = int(n)
    return n > 0 and not n & (n - 1)