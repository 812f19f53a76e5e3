import numbers

import numpy as np
import pandas as pd
from pandas.api import types as pdt

_booltypes = (bool, np.bool_)
_inttypes = (int, np.integer)
_floattypes = (float, np.floating)
_strtypes = (str,)


def isbool(x):
    return isinstance(x, _booltypes)


def isint(x):
    return isinstance(x, _inttypes) and not isinstance(x, _booltypes)


def listpack(x):
    """
    >>> listpack(1)
    [1]
    >>> listpack((1, 2))
    [1, 2]
    >>> listpack([1, 2])
    [1, 2]
    >>> listpack(None)
    []
    """
    if x is None:
        return []
    if isinstance(x, tuple):
        return list(x)
    elif isinstance(x, list):
        return x
    else:
        return [x]


def flatten(seq):
    """ Flatten nested lists and tuples

    >>> flatten(['a', ('b', ['c']), 'd'])
    ['a', 'b', 'c', 'd']
    """
    result = []
    for x in seq:
        if isinstance(x, (list, tuple)):
            result.extend(flatten(x))
        else:
            result.append(x)
    return result


def plural(num):
    return 's' if num > 1 else ''


def isna_scalar(x):
    """ ``pd.isna`` restricted to scalars

    >>> isna_scalar(None), isna_scalar(float('nan')), isna_scalar('a')
    (True, True, False)
    >>> isna_scalar([None])
    False
    """
    if isinstance(x, (list, tuple, dict, np.ndarray)):
        return False
    try:
        return bool(pd.isna(x))
    except (TypeError, ValueError):
        return False


def unbox(x):
    """ Convert a pandas/numpy scalar into a plain Python value

    Missing values become ``None``.

    >>> unbox(np.int64(3))
    3
    >>> unbox(pd.NA) is None
    True
    """
    if isna_scalar(x):
        return None
    if isinstance(x, np.generic):
        return x.item()
    return x


def _dtype_of(values):
    dtype = getattr(values, 'dtype', None)
    if dtype is None or dtype == object:
        return None
    return dtype


def is_boolean_like(values):
    """ All elements are booleans or missing

    >>> is_boolean_like([True, None, False])
    True
    >>> is_boolean_like([1, 0])
    False
    >>> is_boolean_like(np.array([True, False]))
    True
    """
    dtype = _dtype_of(values)
    if dtype is not None:
        return pdt.is_bool_dtype(dtype)
    return all(x is None or isbool(x) for x in values)


def is_numeric_like(values):
    """ All elements are (non-boolean) numbers

    >>> is_numeric_like([1, 2.5])
    True
    >>> is_numeric_like([1, True])
    False
    """
    dtype = _dtype_of(values)
    if dtype is not None:
        return pdt.is_numeric_dtype(dtype) and not pdt.is_bool_dtype(dtype)
    return all(isinstance(x, numbers.Number) and not isbool(x)
               for x in values)


def is_integer_like(values):
    dtype = _dtype_of(values)
    if dtype is not None:
        return pdt.is_integer_dtype(dtype)
    return all(isint(x) for x in values)


def is_string_like(values):
    dtype = _dtype_of(values)
    if dtype is not None:
        return pdt.is_string_dtype(dtype)
    return all(isinstance(x, _strtypes) for x in values)


_inferred_tags = {
    'string': 'string',
    'boolean': 'boolean',
    'integer': 'numeric',
    'floating': 'numeric',
    'mixed-integer-float': 'numeric',
    'decimal': 'numeric',
    'complex': 'numeric',
    'datetime64': 'temporal',
    'datetime': 'temporal',
    'date': 'temporal',
    'timedelta64': 'temporal',
    'timedelta': 'temporal',
    'time': 'temporal',
    'period': 'temporal',
}


def type_tag(series):
    """ Classify a pandas Series as numeric, string, boolean, temporal or other

    >>> type_tag(pd.Series([1, 2]))
    'numeric'
    >>> type_tag(pd.Series([True, False]))
    'boolean'
    >>> type_tag(pd.Series(['a', None]))
    'string'
    """
    dtype = series.dtype
    if pdt.is_bool_dtype(dtype):
        return 'boolean'
    if pdt.is_numeric_dtype(dtype):
        return 'numeric'
    if (pdt.is_datetime64_any_dtype(dtype) or pdt.is_timedelta64_dtype(dtype)
            or isinstance(dtype, pd.PeriodDtype)):
        return 'temporal'
    if isinstance(dtype, pd.StringDtype):
        return 'string'
    if dtype == object:
        return _inferred_tags.get(pdt.infer_dtype(series, skipna=True),
                                  'other')
    return 'other'


def booleans_to_indices(booleans):
    """
    >>> booleans_to_indices([True, False, None, True])
    [0, 3]
    """
    return [i for i, b in enumerate(booleans) if b]


def select_by_booleans(seq, booleans):
    """
    >>> select_by_booleans('abc', [True, None, True])
    ['a', 'c']
    """
    return [x for x, b in zip(seq, booleans) if b]


def reject_by_booleans(seq, booleans):
    """
    >>> reject_by_booleans('abc', [True, None, True])
    ['b']
    """
    return [x for x, b in zip(seq, booleans) if not b]


def reject_by_indices(seq, indices):
    """ Remove elements at ``indices``, negative positions included

    Order of ``indices`` is not considered.

    >>> reject_by_indices('abcd', [0, -1])
    ['b', 'c']
    """
    seq = list(seq)
    n = len(seq)
    indices = set(i + n if i < 0 else i for i in indices)
    return [x for i, x in enumerate(seq) if i not in indices]


class attribute(object):
    """An attribute that can be overridden by instances.
    This is like a non data descriptor property.

    Memoize by assigning to the instance inside the getter::

        @attribute
        def filters(self):
            self.filters = filters = expensive()
            return filters

    Parameters
    ----------
    f : callable
        The function to execute.
    """
    def __init__(self, f):
        self._f = f
        self.__doc__ = f.__doc__

    def __get__(self, instance, owner):
        if instance is None:
            return self

        return self._f(instance)
