""" Stabbing queries on static collections of half-open intervals. """
from .bounds import Bounded, domain_bounds, register_bounds, value_bounds
from .range_map import RangeMap
