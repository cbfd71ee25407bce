import pytest

from symbolic.numeric import gcd, is_divisible


@pytest.mark.parametrize('a, b, expected', [
    (6, 1, 1),
    (1, 7, 1),
    (6, 0, 6),
    (0, -7, 7),
    (-8, 0, 8),
    (6, 6, 6),
    (-7, 7, 7),
    (8, -8, 8),
    (16, 24, 8),
    (14, 21, 7),
    (0, 0, 0),
])
def test_gcd(a, b, expected):
    assert gcd(a, b) == expected


@pytest.mark.parametrize('a, b, expected', [
    (4, 2, True),
    (3, 2, False),
    (-4, 2, True),
    (0, 5, True),
    (4, -2, False),
    (5, 0, False),
    (0, 0, False),
])
def test_is_divisible(a, b, expected):
    assert is_divisible(a, b) is expected
