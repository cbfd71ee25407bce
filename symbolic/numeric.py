#! /usr/bin/env python3


def gcd(a: int, b: int) -> int:
    """Greatest common divisor, always non-negative; gcd(a, 0) == abs(a)."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def is_divisible(a: int, b: int) -> bool:
    """Whether `a / b` is an integer, decided by gcd(a, b) == b.

    A negative divisor therefore never counts as dividing evenly, which
    leaves such quotients symbolic.
    """
    return b != 0 and gcd(a, b) == b
