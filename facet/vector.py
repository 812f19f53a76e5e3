""" One named column of a Table

A ``Vector`` wraps a pandas ``Series``.  Python lists are inferred into the
pandas nullable extension types so that missing values survive round trips
unchanged.

>>> v = Vector([1, 2, None], key='x')
>>> v.to_list()
[1, 2, None]
>>> v.n_nulls
1
>>> v[-1] is None
True
>>> v[[0, 1]].to_list()
[1, 2]
>>> (v > 1).to_list()
[False, True, None]
>>> v.sum()
3
"""
import numpy as np
import pandas as pd
from pandas import Series
from pandas.api import types as pdt

from .aggregates import Aggregation, reduce_series
from .dispatch import dispatch
from .error import InvalidSelectorError
from .resolve import resolve_rows
from .selectors import Empty, Indices, Mask, classify, normalize, \
    normalize_index
from .utils import _floattypes, isint, type_tag, unbox

__all__ = ['Vector', 'as_series']


def as_series(values, name=None):
    """ Coerce column values into a pandas Series with a fresh index

    >>> as_series([1, None], name='a').dtype
    Int64Dtype()
    >>> as_series([True, None]).tolist()
    [True, <NA>]
    """
    if isinstance(values, Vector):
        series = values.data
    elif isinstance(values, Series):
        series = values.reset_index(drop=True)
    elif isinstance(values, np.ndarray):
        series = Series(values.reshape(-1))
    elif isinstance(values, (pd.Index, pd.api.extensions.ExtensionArray)):
        series = Series(values)
    elif isinstance(values, (list, tuple, range)) or hasattr(values,
                                                             '__next__'):
        values = list(values)
        series = Series(pd.array(values)) if values else Series([],
                                                                dtype=object)
    else:
        series = Series(pd.array([values]))
    if series.name != name:
        series = series.rename(name)
    return series


class Vector(object):
    """ Immutable one dimensional column """

    __hash__ = None

    def __init__(self, values=(), key=None):
        self._data = as_series(values, name=key)

    @classmethod
    def create(cls, series):
        """ Wrap a pandas Series without conversion """
        v = cls.__new__(cls)
        v._data = series
        return v

    @property
    def data(self):
        return self._data

    @property
    def key(self):
        name = self._data.name
        return name if isinstance(name, str) else None

    @property
    def size(self):
        return len(self._data)

    def __len__(self):
        return len(self._data)

    @property
    def n_nulls(self):
        return int(self._data.isna().sum())

    @property
    def type(self):
        return type_tag(self._data)

    @property
    def dtype(self):
        return self._data.dtype

    @property
    def is_numeric(self):
        return self.type == 'numeric'

    @property
    def is_boolean(self):
        return self.type == 'boolean'

    @property
    def is_string(self):
        return self.type == 'string'

    @property
    def is_temporal(self):
        return self.type == 'temporal'

    @property
    def is_integer(self):
        return pdt.is_integer_dtype(self.dtype)

    @property
    def is_float(self):
        return pdt.is_float_dtype(self.dtype)

    @property
    def empty(self):
        return self.size == 0

    @property
    def indices(self):
        return Vector(np.arange(self.size))

    def to_list(self):
        return [unbox(x) for x in self._data.tolist()]

    def __iter__(self):
        return iter(self.to_list())

    def __getitem__(self, key):
        if isinstance(key, _floattypes) and not np.isnan(key):
            key = int(key)
        if isint(key):
            return unbox(self._data.iloc[normalize_index(key, self.size)])
        selectors = list(key) if isinstance(key, tuple) else [key]
        return resolve_rows(self, normalize(selectors, self.size))

    def take(self, indices):
        """ Elements at ``indices``, without negative wraparound """
        positions = np.asarray(as_series(indices).to_numpy(dtype=np.int64))
        return resolve_rows(self, Indices(positions))

    def filter(self, *booleans):
        selection = normalize(list(booleans), self.size)
        if not isinstance(selection, (Mask, Empty)):
            raise InvalidSelectorError('Not booleans: %r' % (booleans,))
        return resolve_rows(self, selection)

    def first(self):
        return unbox(self._data.iloc[0]) if self.size else None

    def last(self):
        return unbox(self._data.iloc[-1]) if self.size else None

    # Element-wise operations

    def _binary(self, other, op):
        if isinstance(other, Vector):
            other = other.data
        return Vector.create(op(self._data, other))

    def __eq__(self, other):
        return self._binary(other, lambda a, b: (a == b).fillna(False))

    def __ne__(self, other):
        return self._binary(other, lambda a, b: (a != b).fillna(True))

    def __lt__(self, other):
        return self._binary(other, lambda a, b: a < b)

    def __le__(self, other):
        return self._binary(other, lambda a, b: a <= b)

    def __gt__(self, other):
        return self._binary(other, lambda a, b: a > b)

    def __ge__(self, other):
        return self._binary(other, lambda a, b: a >= b)

    def __and__(self, other):
        return self._binary(other, lambda a, b: a & b)

    def __or__(self, other):
        return self._binary(other, lambda a, b: a | b)

    def __invert__(self):
        return Vector.create(~self._data)

    def is_null(self):
        return Vector.create(self._data.isna())

    def is_in(self, values):
        if isinstance(values, Vector):
            values = values.data
        return Vector.create(self._data.isin(list(values)))

    def uniq(self):
        """ Distinct values in order of first appearance

        >>> Vector(['b', None, 'b', 'a', None]).uniq().to_list()
        ['b', None, 'a']
        """
        return Vector.create(Series(pd.unique(self._data),
                                    name=self._data.name))

    def any(self):
        return bool(self._data.any())

    def all(self):
        return bool(self._data.all())

    def equals(self, other):
        return isinstance(other, Vector) and self._data.equals(other.data)

    # Reductions

    def aggregate(self, function):
        return reduce_series(self._data, function)

    def count(self):
        return self.aggregate(Aggregation.count)

    def sum(self):
        return self.aggregate(Aggregation.sum)

    def mean(self):
        return self.aggregate(Aggregation.mean)

    def min(self):
        return self.aggregate(Aggregation.min)

    def max(self):
        return self.aggregate(Aggregation.max)

    def product(self):
        return self.aggregate(Aggregation.product)

    def stddev(self):
        return self.aggregate(Aggregation.stddev)

    def variance(self):
        return self.aggregate(Aggregation.variance)

    def median(self):
        return self.aggregate(Aggregation.median)

    def one(self):
        return self.aggregate(Aggregation.one)

    def count_uniq(self):
        return self.aggregate(Aggregation.count_uniq)

    def __repr__(self):
        return repr(self._data)


@dispatch(Vector)
def classify(v, size=None):
    return classify(v.data, size=size)
