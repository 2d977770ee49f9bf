import datetime
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from .bounds import Bounded, domain_bounds, register_bounds, value_bounds


class Grade(Bounded):
    def __init__(self, letter):
        self.letter = letter

    @classmethod
    def lower_bound(cls):
        return cls('A')

    @classmethod
    def upper_bound(cls):
        return cls('F')


class Note(str):
    pass


def test_numeric_dtypes():
    lower, upper = domain_bounds(np.array([1.5], dtype=np.float32))
    assert lower == -np.inf and upper == np.inf
    assert lower.dtype == np.float32

    lower, upper = domain_bounds(np.array([1], dtype=np.int16))
    assert (lower, upper) == (-2**15, 2**15 - 1)
    assert lower.dtype == np.int16

    assert domain_bounds(np.array([7], dtype=np.uint32)) == (0, 2**32 - 1)
    assert domain_bounds(np.array([True])) == (False, True)


def test_datetime64():
    column = np.array(['2020-01-01'], dtype='datetime64[s]')
    lower, upper = domain_bounds(column)
    assert lower.dtype == column.dtype
    assert not np.isnat(lower) and not np.isnat(upper)
    assert lower < column[0] < upper

    lower, upper = domain_bounds(np.array([3], dtype='timedelta64[ms]'))
    assert lower < np.timedelta64(-10**12, 'ms')
    assert upper > np.timedelta64(10**12, 'ms')


def test_values():
    assert value_bounds(3) == (float('-inf'), float('inf'))
    assert value_bounds(Fraction(1, 3)) == (float('-inf'), float('inf'))
    assert value_bounds(Decimal('2.5')) == (Decimal('-Infinity'),
                                            Decimal('Infinity'))
    assert value_bounds(datetime.date(2000, 1, 1)) == (datetime.date.min,
                                                       datetime.date.max)
    # A datetime is a date too, but has bounds of its own.
    assert value_bounds(datetime.datetime(2000, 1, 1)) == (
        datetime.datetime.min, datetime.datetime.max)
    assert value_bounds(datetime.timedelta(1)) == (datetime.timedelta.min,
                                                   datetime.timedelta.max)


def test_bounded():
    lower, upper = value_bounds(Grade('C'))
    assert lower.letter == 'A'
    assert upper.letter == 'F'

    column = np.empty(1, dtype=object)
    column[0] = Grade('B')
    lower, upper = domain_bounds(column)
    assert (lower.letter, upper.letter) == ('A', 'F')

    class Unbounded(Bounded):
        @classmethod
        def lower_bound(cls):
            return cls()

    # Both extremes must be defined.
    with pytest.raises(TypeError):
        Unbounded()
    with pytest.raises(TypeError):
        Bounded()


def test_register():
    with pytest.raises(TypeError):
        value_bounds(Note('do'))
    with pytest.raises(TypeError):
        domain_bounds(np.array([Note('re')], dtype=object))

    register_bounds(Note, Note(''), Note('\U0010ffff'))
    assert value_bounds(Note('mi')) == ('', '\U0010ffff')


def test_unknown():
    with pytest.raises(TypeError):
        value_bounds(object())
    with pytest.raises(TypeError):
        domain_bounds(np.empty(0, dtype=object))


def test_aware():
    utc = datetime.timezone.utc
    west = datetime.timezone(-datetime.timedelta(hours=12))
    east = datetime.timezone(datetime.timedelta(hours=14))
    lower, upper = value_bounds(datetime.datetime(2000, 1, 1, tzinfo=utc))
    for zone in [utc, west, east]:
        assert lower <= datetime.datetime.min.replace(tzinfo=zone)
        assert upper >= datetime.datetime.max.replace(tzinfo=zone)

    lower, upper = value_bounds(datetime.time(12, tzinfo=west))
    for zone in [utc, west, east]:
        assert lower <= datetime.time.min.replace(tzinfo=zone)
        assert upper >= datetime.time.max.replace(tzinfo=zone)
