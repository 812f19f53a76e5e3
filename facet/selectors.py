""" Normalization of loosely typed selectors

Callers select rows and columns with integers, names, slices, ranges,
booleans, ``None`` and arbitrarily nested collections of those.  This module
turns such a heterogeneous list into exactly one of four normalized
selections against an axis of known size:

    Empty    -- select nothing
    Indices  -- concrete, non-negative, bounds-checked positions
    Names    -- column names and inclusive name ranges, still unresolved
    Mask     -- one boolean per position of the axis

It works in two passes.  ``classify`` turns each raw element into a flat list
of ``Selector(kind, value)`` records, then ``normalize`` decides the kind of
the whole list.  A list mixing kinds (say, names and positions) is an error.

>>> normalize([-1, -2], 5)
Indices([4, 3])
>>> normalize([slice(1, None)], 4)
Indices([1, 2, 3])
>>> normalize(['a', slice('c', 'e')], 5)
Names(['a', NameRange(start='c', stop='e')])
>>> normalize([True, False, None], 3)
Mask([True, False, False])
>>> normalize([None, 1], 3)
Empty()
"""
from collections import namedtuple
from collections.abc import Iterator

import numpy as np
import pandas as pd
from pandas.api import types as pdt
from toolz import concat

from .dispatch import dispatch
from .error import (ArgumentError, InvalidSelectorError, OutOfRangeError,
                    ShapeMismatchError)
from .utils import _booltypes, _floattypes, _inttypes, _strtypes, isint

__all__ = ['Empty', 'Indices', 'Mask', 'NameRange', 'Names', 'Selector',
           'classify', 'normalize', 'normalize_index', 'wrap_indices']


INDEX = 'index'
NAME = 'name'
NAME_RANGE = 'name_range'
BOOL = 'bool'
NIL = 'nil'


Selector = namedtuple('Selector', 'kind value')
NameRange = namedtuple('NameRange', 'start stop')


class Selection(object):
    """ Result of normalizing a selector list """
    __slots__ = ()

    def __repr__(self):
        return '%s()' % type(self).__name__


class Empty(Selection):
    """ Select nothing """
    __slots__ = ()


class Indices(Selection):
    __slots__ = 'positions',

    def __init__(self, positions):
        self.positions = np.asarray(positions, dtype=np.int64).reshape(-1)

    def __len__(self):
        return len(self.positions)

    def __repr__(self):
        return 'Indices(%s)' % self.positions.tolist()


class Names(Selection):
    __slots__ = 'names',

    def __init__(self, names):
        self.names = list(names)

    def __len__(self):
        return len(self.names)

    def __repr__(self):
        return 'Names(%s)' % self.names


class Mask(Selection):
    __slots__ = 'mask',

    def __init__(self, mask):
        self.mask = np.asarray(mask, dtype=bool).reshape(-1)

    def __len__(self):
        return len(self.mask)

    def __repr__(self):
        return 'Mask(%s)' % self.mask.tolist()


def wrap_indices(positions, size):
    """ Apply negative wraparound and check bounds

    >>> wrap_indices([0, -1, -5], 5).tolist()
    [0, 4, 0]
    """
    positions = np.asarray(positions, dtype=np.int64).reshape(-1)
    wrapped = np.where(positions < 0, positions + size, positions)
    bad = (wrapped < 0) | (wrapped >= size)
    if bad.any():
        raise OutOfRangeError('Index out of range: %s for 0..%d'
                              % (positions[bad].tolist(), size - 1))
    return wrapped


def normalize_index(i, size):
    """
    >>> normalize_index(-1, 3)
    2
    """
    return int(wrap_indices([int(i)], size)[0])


#------------------------------------------------------------------------
# Classification of one raw element
#------------------------------------------------------------------------

@dispatch(type(None))
def classify(x, size=None):
    return [Selector(NIL, None)]


@dispatch(_booltypes)
def classify(x, size=None):
    return [Selector(BOOL, bool(x))]


@dispatch(_inttypes)
def classify(x, size=None):
    return [Selector(INDEX, int(x))]


@dispatch(_floattypes)
def classify(x, size=None):
    if np.isnan(x):
        return [Selector(NIL, None)]
    return [Selector(INDEX, int(x))]


@dispatch(_strtypes)
def classify(x, size=None):
    return [Selector(NAME, x)]


@dispatch(slice)
def classify(s, size=None):
    if s.step not in (None, 1):
        raise InvalidSelectorError('slicing with step != 1 not supported: %s'
                                   % (s,))
    start, stop = s.start, s.stop
    if isinstance(start, _strtypes) or isinstance(stop, _strtypes):
        return [_name_range(s)]
    for endpoint in (start, stop):
        if endpoint is not None and not isint(endpoint):
            raise InvalidSelectorError('Invalid range endpoint %r in %s'
                                       % (endpoint, s))
    first = 0 if start is None else int(start)
    stop = size if stop is None else int(stop)
    if first < 0:
        first += size
    if stop < 0:
        stop += size
    if not (0 <= first <= size and 0 <= stop <= size):
        raise OutOfRangeError('Index out of range: %s for 0..%d'
                              % (s, size - 1))
    return [Selector(INDEX, np.arange(first, stop, dtype=np.int64))]


def _name_range(s):
    if s.start is None:
        raise InvalidSelectorError('Cannot use beginless range: %s' % (s,))
    if s.stop is None:
        raise InvalidSelectorError('Cannot use endless range: %s' % (s,))
    if not (isinstance(s.start, _strtypes) and isinstance(s.stop, _strtypes)):
        raise InvalidSelectorError('Mixed range endpoints: %s' % (s,))
    return Selector(NAME_RANGE, NameRange(s.start, s.stop))


@dispatch(range)
def classify(r, size=None):
    return [Selector(INDEX, np.asarray(r, dtype=np.int64))]


@dispatch((list, tuple))
def classify(seq, size=None):
    return list(concat(classify(x, size=size) for x in seq))


@dispatch(Iterator)
def classify(it, size=None):
    return classify(list(it), size=size)


@dispatch(np.ndarray)
def classify(arr, size=None):
    return _classify_array(pd.Series(arr.reshape(-1)), size)


@dispatch((pd.Series, pd.Index, pd.api.extensions.ExtensionArray))
def classify(arr, size=None):
    return _classify_array(pd.Series(arr), size)


@dispatch(object)
def classify(x, size=None):
    raise InvalidSelectorError('Invalid selector: %r' % (x,))


def _classify_array(s, size):
    """ Classify a whole one-dimensional array by its dtype """
    dtype = s.dtype
    if pdt.is_bool_dtype(dtype):
        return [Selector(BOOL, s.to_numpy(dtype=bool, na_value=False))]
    if pdt.is_integer_dtype(dtype) or pdt.is_float_dtype(dtype):
        values = s.dropna().to_numpy(dtype=np.float64)
        return [Selector(INDEX, np.trunc(values).astype(np.int64))]
    return classify([None if v is pd.NA else v for v in s.tolist()],
                    size=size)


#------------------------------------------------------------------------
# Whole-list normalization
#------------------------------------------------------------------------

def normalize(selectors, size):
    """ Normalize a selector list against an axis of ``size`` positions

    Parameters
    ----------
    selectors : list
        Heterogeneous selectors, typically the positional arguments of a
        selecting method.  A non-list is treated as a one element list.
    size : int
        Size of the target axis (rows or columns).

    Returns
    -------
    selection : Empty, Indices, Names or Mask
    """
    if size < 0:
        raise ArgumentError('Axis size must not be negative: %d' % size)
    if not isinstance(selectors, (list, tuple)):
        selectors = [selectors]
    if len(selectors) == 0 or selectors[0] is None:
        return Empty()

    parsed = classify(list(selectors), size=size)
    kinds = set(s.kind for s in parsed) - set([NIL])

    if not kinds:
        return Empty()
    if kinds == set([INDEX]):
        positions = [np.atleast_1d(s.value) for s in parsed if s.kind == INDEX]
        return Indices(wrap_indices(np.concatenate(positions), size))
    if kinds == set([BOOL]):
        return Mask(_to_mask(parsed, size))
    if kinds <= set([NAME, NAME_RANGE]):
        return Names(s.value for s in parsed if s.kind != NIL)
    raise InvalidSelectorError('Mixed selector kinds %s: %r'
                               % (sorted(kinds), selectors))


def _to_mask(parsed, size):
    pieces = [np.atleast_1d(np.asarray(s.value, dtype=bool))
              if s.kind == BOOL else np.zeros(1, dtype=bool)
              for s in parsed]
    mask = np.concatenate(pieces)
    if len(mask) != size:
        raise ShapeMismatchError('Booleans must be same size as the axis: '
                                 '%d != %d' % (len(mask), size))
    return mask
