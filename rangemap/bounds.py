""" Sentinel values for the domains a RangeMap can be built over. """
import datetime
import numbers
from abc import ABC, abstractmethod
from decimal import Decimal

import numpy as np


class Bounded(ABC):
    """ Base class for value types that know their own extremes.

    A custom value type used as interval endpoints inherits this class and
    implements both classmethods. Every value of the type must compare
    greater than or equal to `lower_bound()` and less than or equal to
    `upper_bound()`.
    """
    @classmethod
    @abstractmethod
    def lower_bound(cls):
        """ A value not greater than any value of the type. """
        pass

    @classmethod
    @abstractmethod
    def upper_bound(cls):
        """ A value not less than any value of the type. """
        pass


# Maps a value type to its (lower, upper) sentinels.
_registered = {
    datetime.datetime: (datetime.datetime.min, datetime.datetime.max),
    datetime.date: (datetime.date.min, datetime.date.max),
    datetime.time: (datetime.time.min, datetime.time.max),
    datetime.timedelta: (datetime.timedelta.min, datetime.timedelta.max),
}

# Aware values are compared in UTC; min in the largest offset is the earliest
# instant, max in the smallest offset the latest.
_earliest_zone = datetime.timezone(datetime.timedelta(hours=23, minutes=59))
_latest_zone = datetime.timezone(-datetime.timedelta(hours=23, minutes=59))


def register_bounds(value_type, lower, upper):
    """ Registers the sentinels for a type that cannot inherit Bounded. """
    assert lower < upper
    _registered[value_type] = (lower, upper)


def value_bounds(value):
    """ Returns the (lower, upper) sentinels of the domain `value` lives in. """
    value_type = type(value)
    if isinstance(value, Bounded):
        return value_type.lower_bound(), value_type.upper_bound()
    if isinstance(value, (datetime.datetime, datetime.time)) and \
            value.tzinfo is not None:
        # Aware values do not compare with the naive min and max.
        base = datetime.datetime if isinstance(
            value, datetime.datetime) else datetime.time
        return (base.min.replace(tzinfo=_earliest_zone),
                base.max.replace(tzinfo=_latest_zone))
    # Most derived first: datetime is a subclass of date.
    for base in value_type.__mro__:
        if base in _registered:
            return _registered[base]
    if isinstance(value, Decimal):
        return Decimal('-Infinity'), Decimal('Infinity')
    if isinstance(value, numbers.Real):
        return float('-inf'), float('inf')
    raise TypeError(
        'No bounds known for values of type {}; inherit Bounded, call '
        'register_bounds, or pass lower and upper explicitly.'.format(
            value_type.__name__))


def domain_bounds(column):
    """ Returns the (lower, upper) sentinels for a 1D numpy column.

    Numeric columns take their sentinels from the dtype, object columns from
    the type of their first value.
    """
    dtype = column.dtype
    if dtype.kind == 'f':
        return dtype.type(-np.inf), dtype.type(np.inf)
    if dtype.kind in 'iu':
        info = np.iinfo(dtype)
        return dtype.type(info.min), dtype.type(info.max)
    if dtype.kind == 'b':
        return np.False_, np.True_
    if dtype.kind in 'mM':
        # The smallest int64 is NaT, which does not order.
        info = np.iinfo(np.int64)
        extremes = np.array([info.min + 1, info.max], dtype=np.int64)
        lower, upper = extremes.view(dtype)
        return lower, upper
    if dtype.kind == 'O' and len(column):
        return value_bounds(column[0])
    raise TypeError('No bounds known for columns of dtype {}.'.format(dtype))
