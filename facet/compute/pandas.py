"""
Kernels of the columnar engine, implemented on pandas

Every kernel returns a new object with a fresh ``0..n-1`` index and never
mutates its input.

>>> import numpy as np
>>> from pandas import DataFrame
>>> df = DataFrame({'name': ['Alice', 'Bob', 'Charlie'],
...                 'amount': [100, -50, -20]})
>>> take(df, np.array([2, 0]))
      name  amount
0  Charlie     -20
1    Alice     100
>>> filter_by_mask(df['amount'], np.array([False, True, True])).tolist()
[-50, -20]
"""
import numpy as np
import pandas as pd
from pandas import DataFrame, Series

from ..dispatch import dispatch
from ..error import ArgumentError, ShapeMismatchError

__all__ = ['take', 'filter_by_mask', 'empty_like', 'project', 'concat',
           'hash_aggregate', 'hash_functions']


@dispatch((DataFrame, Series), np.ndarray)
def take(data, positions):
    return data.iloc[positions].reset_index(drop=True)


@dispatch((DataFrame, Series), np.ndarray)
def filter_by_mask(data, mask):
    if len(mask) != len(data):
        raise ShapeMismatchError('Booleans must be same size as self: '
                                 '%d != %d' % (len(mask), len(data)))
    return data.iloc[mask].reset_index(drop=True)


@dispatch((DataFrame, Series))
def empty_like(data):
    return data.iloc[0:0].reset_index(drop=True)


@dispatch(DataFrame, (list, tuple))
def project(df, keys):
    if not keys:
        return DataFrame()
    return df[list(keys)].reset_index(drop=True)


@dispatch((list, tuple))
def concat(frames):
    frames = list(frames)
    if not frames:
        return DataFrame()
    columns = list(frames[0].columns)
    for frame in frames[1:]:
        if list(frame.columns) != columns:
            raise ShapeMismatchError('Can not concatenate tables with keys '
                                     '%s and %s'
                                     % (columns, list(frame.columns)))
    return pd.concat(frames, ignore_index=True)


hash_functions = {
    'hash_count': lambda g: g.count(),
    'hash_sum': lambda g: g.sum(min_count=1),
    'hash_mean': lambda g: g.mean(),
    'hash_min': lambda g: g.min(),
    'hash_max': lambda g: g.max(),
    'hash_product': lambda g: g.prod(min_count=1),
    'hash_stddev': lambda g: g.std(ddof=0),
    'hash_variance': lambda g: g.var(ddof=0),
    'hash_median': lambda g: g.median(),
}


@dispatch(DataFrame, list, str, list)
def hash_aggregate(df, keys, function, targets):
    """ Hashed aggregation of ``targets`` grouped by ``keys``

    One row per distinct key combination, in order of first appearance.
    Missing key values form their own group.  Output columns are the keys
    followed by ``function(target)`` for each target.

    >>> df = DataFrame({'k': ['a', 'b', 'a'], 'x': [1, 2, 3]})
    >>> hash_aggregate(df, ['k'], 'hash_sum', ['x'])
       k  sum(x)
    0  a       4
    1  b       2
    """
    try:
        func = hash_functions[function]
    except KeyError:
        raise ArgumentError('Unknown aggregate function: %s' % function)
    grouped = df.groupby(keys, sort=False, dropna=False)[targets]
    result = func(grouped)
    name = function[len('hash_'):]
    result.columns = ['%s(%s)' % (name, target) for target in targets]
    return result.reset_index()
