""" Column-wise reductions

facet supports the following reductions, both on single vectors and per
group through the hashed aggregate kernel of the compute backend:

    count, sum, mean, min, max, product, stddev, variance, median

Single vectors additionally support ``first``, ``last``, ``one`` (the first
non-missing value) and ``count_uniq``.

``stddev`` and ``variance`` are population statistics (``ddof=0``).  ``sum``
and ``product`` of nothing but missing values are missing.

>>> import pandas as pd
>>> reduce_series(pd.Series([1, 2, None]), 'sum')
3.0
>>> reduce_series(pd.Series([None, 'b', 'c']), 'one')
'b'
"""
from enum import Enum

from .error import ArgumentError
from .utils import type_tag, unbox

__all__ = ['Aggregation', 'GROUPED', 'aggregation', 'applies_to',
           'reduce_series']


class Aggregation(Enum):
    count = 'count'
    sum = 'sum'
    mean = 'mean'
    min = 'min'
    max = 'max'
    product = 'product'
    stddev = 'stddev'
    variance = 'variance'
    median = 'median'
    first = 'first'
    last = 'last'
    one = 'one'
    count_uniq = 'count_uniq'

    @property
    def kernel(self):
        """ Name of the hashed aggregate kernel """
        return 'hash_%s' % self.value


GROUPED = frozenset([Aggregation.count, Aggregation.sum, Aggregation.mean,
                     Aggregation.min, Aggregation.max, Aggregation.product,
                     Aggregation.stddev, Aggregation.variance,
                     Aggregation.median])

NUMERIC_ONLY = frozenset([Aggregation.sum, Aggregation.mean,
                          Aggregation.product, Aggregation.stddev,
                          Aggregation.variance, Aggregation.median])


def aggregation(name):
    """ Look up an aggregation by name

    >>> aggregation('stddev')
    <Aggregation.stddev: 'stddev'>
    """
    if isinstance(name, Aggregation):
        return name
    try:
        return Aggregation(name)
    except ValueError:
        raise ArgumentError('Unknown aggregation function: %r' % (name,))


def applies_to(function, series, explicit=False):
    """ Whether ``function`` can reduce ``series``

    Numeric-only reductions take booleans when asked for explicitly.
    """
    tag = type_tag(series)
    if function not in NUMERIC_ONLY:
        return True
    if explicit:
        return tag in ('numeric', 'boolean')
    return tag == 'numeric'


def _first(s):
    return s.iloc[0] if len(s) else None


def _last(s):
    return s.iloc[-1] if len(s) else None


def _one(s):
    s = s.dropna()
    return s.iloc[0] if len(s) else None


_reducers = {
    Aggregation.count: lambda s: s.count(),
    Aggregation.sum: lambda s: s.sum(min_count=1),
    Aggregation.mean: lambda s: s.mean(),
    Aggregation.min: lambda s: s.min(),
    Aggregation.max: lambda s: s.max(),
    Aggregation.product: lambda s: s.prod(min_count=1),
    Aggregation.stddev: lambda s: s.std(ddof=0),
    Aggregation.variance: lambda s: s.var(ddof=0),
    Aggregation.median: lambda s: s.median(),
    Aggregation.first: _first,
    Aggregation.last: _last,
    Aggregation.one: _one,
    Aggregation.count_uniq: lambda s: s.nunique(),
}


def reduce_series(series, function):
    """ Reduce a pandas Series to a plain Python scalar

    Missing results come back as ``None``.
    """
    function = aggregation(function)
    if function in NUMERIC_ONLY and not applies_to(function, series,
                                                   explicit=True):
        raise ArgumentError('%s is not defined for %s values'
                            % (function.value, type_tag(series)))
    if function in NUMERIC_ONLY and type_tag(series) == 'boolean':
        series = series.astype('Float64')
    return unbox(_reducers[function](series))
