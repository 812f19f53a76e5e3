""" The Table View

A ``Table`` is an immutable, named, equal-length set of columns backed by a
pandas ``DataFrame``.  Every selecting method returns a new ``Table`` and
never touches the receiver.

>>> t = Table(x=[1, 2, 3, 4, 5], y=['a', 'b', 'c', 'd', 'e'])
>>> t.shape
(5, 2)
>>> t[-1, -2].to_dict()
{'x': [5, 4], 'y': ['e', 'd']}
>>> t['x'].to_list()
[1, 2, 3, 4, 5]
>>> t.slice(lambda t: t['x'] > 3).to_dict()
{'x': [4, 5], 'y': ['d', 'e']}
>>> t.pick('y').keys
['y']
"""
import numpy as np
import pandas as pd
from pandas import DataFrame

from .compute import concat, project
from .error import (ArgumentError, DuplicateKeyError, InvalidSelectorError,
                    OutOfRangeError, ShapeMismatchError, UnknownKeyError)
from .params import options
from .resolve import resolve_columns, resolve_keys, resolve_rows
from .selectors import Empty, Indices, Mask, Names, normalize
from .utils import attribute, isint, listpack, type_tag, unbox
from .vector import Vector, as_series

__all__ = ['Table']


def _unnamed(keys):
    """ Replace empty keys by ``unnamed1``, ``unnamed2``, ...

    >>> _unnamed(['a', '', 'unnamed1', ''])
    ['a', 'unnamed2', 'unnamed1', 'unnamed3']
    """
    taken = set(keys)
    result = []
    i = 1
    for key in keys:
        if key == '':
            while 'unnamed%d' % i in taken:
                i += 1
            key = 'unnamed%d' % i
            taken.add(key)
        result.append(key)
    return result


def _frame_from_pairs(pairs):
    pairs = list(pairs)
    for key, _ in pairs:
        if not isinstance(key, str):
            raise ArgumentError('Keys must be strings: %r' % (key,))
    keys = _unnamed([key for key, _ in pairs])
    seen = set()
    for key in keys:
        if key in seen:
            raise DuplicateKeyError('Duplicate key: %s' % key)
        seen.add(key)
    columns = [as_series(values, name=key)
               for key, (_, values) in zip(keys, pairs)]
    lengths = set(len(c) for c in columns)
    if len(lengths) > 1:
        raise ShapeMismatchError('Columns must have the same length: %s'
                                 % dict((c.name, len(c)) for c in columns))
    if not columns:
        return DataFrame()
    return pd.concat(columns, axis=1)


class Table(object):
    """ Immutable two dimensional table of named columns

    Parameters
    ----------
    data : dict, list of pairs, DataFrame, Table or None
        The columns.
    **columns :
        Columns given as keyword arguments.
    """

    __hash__ = None

    def __init__(self, data=None, **columns):
        if data is not None and columns:
            raise ArgumentError('Must not specify both data and columns')
        if isinstance(data, Table):
            frame = data.data
        elif isinstance(data, DataFrame):
            frame = _frame_from_pairs((key, data[key].reset_index(drop=True))
                                      for key in data.columns)
        elif isinstance(data, dict):
            frame = _frame_from_pairs(data.items())
        elif isinstance(data, (list, tuple)):
            frame = _frame_from_pairs(data)
        elif data is None:
            frame = _frame_from_pairs(columns.items())
        else:
            raise ArgumentError('Can not build a Table from %r'
                                % type(data).__name__)
        self._data = frame

    @classmethod
    def create(cls, frame):
        """ Wrap a DataFrame without validation """
        t = cls.__new__(cls)
        t._data = frame
        return t

    @property
    def data(self):
        return self._data

    def to_pandas(self):
        return self._data.copy()

    # Shape and schema

    @property
    def size(self):
        if len(self._data.columns) == 0:
            return 0
        return len(self._data)

    n_rows = size

    def __len__(self):
        return self.size

    @property
    def n_keys(self):
        return len(self._data.columns)

    @property
    def shape(self):
        return (self.size, self.n_keys)

    @property
    def empty(self):
        return self.size == 0

    @attribute
    def keys(self):
        self.keys = keys = list(self._data.columns)
        return keys

    def key_index(self, key):
        try:
            return self.keys.index(key)
        except ValueError:
            raise UnknownKeyError('Key does not exist: %s' % (key,))

    def has_key(self, key):
        return key in self.keys

    def __contains__(self, key):
        return self.has_key(key)

    @attribute
    def types(self):
        self.types = types = [type_tag(self._data[k]) for k in self.keys]
        return types

    @property
    def schema(self):
        """ Ordered mapping of key to dtype name

        >>> Table(a=[1], b=[2.5]).schema
        {'a': 'Int64', 'b': 'Float64'}
        """
        return dict((k, str(self._data[k].dtype)) for k in self.keys)

    @attribute
    def vectors(self):
        self.vectors = vectors = [Vector.create(self._data[k])
                                  for k in self.keys]
        return vectors

    @attribute
    def variables(self):
        self.variables = variables = dict(zip(self.keys, self.vectors))
        return variables

    @property
    def indices(self):
        return Vector(np.arange(self.size))

    def to_dict(self):
        return dict((k, v.to_list()) for k, v in self.variables.items())

    def to_records(self):
        """ Rows as lists

        >>> Table(a=[1, 2], b=['x', None]).to_records()
        [[1, 'x'], [2, None]]
        """
        return [[unbox(x) for x in row]
                for row in self._data.itertuples(index=False, name=None)]

    def __eq__(self, other):
        return (isinstance(other, Table) and self.keys == other.keys
                and self._data.equals(other.data))

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return repr(self._data)

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        if name in self._data.columns:
            return self.v(name)
        raise AttributeError('%r object has no attribute %r'
                             % (type(self).__name__, name))

    def __dir__(self):
        return sorted(set(dir(type(self)) + list(self.__dict__)
                          + [k for k in self.keys if k.isidentifier()]))

    # Selection

    def _selectors(self, args):
        """ Evaluate a single callable argument against self """
        if any(callable(a) for a in args):
            if len(args) != 1:
                raise ArgumentError('Must not specify both arguments and '
                                    'a function')
            return listpack(args[0](self))
        return list(args)

    def __getitem__(self, key):
        if self.n_keys == 0:
            raise ArgumentError('Can not select from an empty Table')
        selectors = list(key) if isinstance(key, tuple) else [key]
        selection = normalize(selectors, self.size)
        if isinstance(selection, Names):
            return resolve_columns(self, selection, single=True)
        return resolve_rows(self, selection)

    def v(self, key):
        """ Column ``key`` as a Vector """
        if not isinstance(key, str):
            raise ArgumentError('Key must be a string: %r' % (key,))
        if key not in self._data.columns:
            raise UnknownKeyError('Key does not exist: %s' % key)
        return self.variables[key]

    def slice(self, *args):
        """ Rows selected by indices, ranges or booleans """
        return resolve_rows(self, normalize(self._selectors(args), self.size))

    def remove(self, *args):
        """ Rows not selected by indices, ranges or booleans """
        selection = normalize(self._selectors(args), self.size)
        if isinstance(selection, Empty):
            return self
        if isinstance(selection, Indices):
            keep = np.ones(self.size, dtype=bool)
            keep[selection.positions] = False
            return resolve_rows(self, Mask(keep))
        if isinstance(selection, Mask):
            return resolve_rows(self, Mask(~selection.mask))
        raise InvalidSelectorError('Can not remove rows by names: %s'
                                   % selection.names)

    def filter(self, *args):
        selection = normalize(self._selectors(args), self.size)
        if not isinstance(selection, (Mask, Empty)):
            raise InvalidSelectorError('Not booleans: %r' % (args,))
        return resolve_rows(self, selection)

    def head(self, n=None):
        if n is None:
            n = options.head
        if n < 0:
            raise OutOfRangeError('Index out of range: %d' % n)
        return resolve_rows(self, Indices(np.arange(min(n, self.size))))

    def tail(self, n=None):
        if n is None:
            n = options.head
        if n < 0:
            raise OutOfRangeError('Index out of range: %d' % n)
        return resolve_rows(self, Indices(np.arange(max(self.size - n, 0),
                                                    self.size)))

    def first(self, n=1):
        return self.head(n)

    def last(self, n=1):
        return self.tail(n)

    def take(self, indices):
        """ Rows at ``indices``; negative positions are out of range """
        if isint(indices):
            indices = [indices]
        positions = as_series(indices).to_numpy(dtype=np.int64)
        return resolve_rows(self, Indices(positions))

    # Columns

    def pick(self, *args):
        """ Columns selected by names, indices or booleans """
        selection = normalize(self._selectors(args), self.n_keys)
        picked = resolve_columns(self, selection)
        if picked.keys == self.keys:
            return self
        return picked

    def drop(self, *args):
        """ Columns not selected by names, indices or booleans """
        selection = normalize(self._selectors(args), self.n_keys)
        if isinstance(selection, Empty):
            return self
        dropped = set(resolve_keys(self, selection, unique=False))
        keys = [k for k in self.keys if k not in dropped]
        if not keys:
            return Table()
        return Table.create(project(self._data, keys))

    def rename(self, *args):
        """ Rename columns

        >>> Table(a=[1], b=[2]).rename('a', 'c').keys
        ['c', 'b']
        >>> Table(a=[1], b=[2]).rename({'a': 'b', 'b': 'a'}).keys
        ['b', 'a']
        """
        if len(args) == 2:
            mapping = [tuple(args)]
        elif len(args) == 1 and callable(args[0]):
            mapping = args[0](self)
        elif len(args) == 1:
            mapping = args[0]
        else:
            raise ArgumentError('Invalid rename arguments: %r' % (args,))
        mapping = dict(mapping.items() if isinstance(mapping, dict)
                       else mapping)
        for old, new in mapping.items():
            self.key_index(old)
            if not isinstance(new, str):
                raise ArgumentError('Keys must be strings: %r' % (new,))
        keys = [mapping.get(k, k) for k in self.keys]
        if len(set(keys)) != len(keys):
            raise DuplicateKeyError('Duplicate keys after rename: %s' % keys)
        frame = self._data.copy(deep=False)
        frame.columns = keys
        return Table.create(frame)

    def assign(self, *args, **columns):
        """ Replace or append columns

        Scalars are propagated to the length of the table.

        >>> Table(a=[1, 2]).assign(b=0, a=['x', 'y']).to_dict()
        {'a': ['x', 'y'], 'b': [0, 0]}
        """
        if args:
            if columns or len(args) != 1:
                raise ArgumentError('Must not specify both a mapping and '
                                    'columns')
            mapping = args[0](self) if callable(args[0]) else args[0]
            columns = dict(mapping.items() if isinstance(mapping, dict)
                           else mapping)
        if not columns:
            return self
        size = self.size if self.n_keys else None
        assigned = []
        for key, values in columns.items():
            if not isinstance(key, str):
                raise ArgumentError('Keys must be strings: %r' % (key,))
            if not isinstance(values, (Vector, pd.Series, np.ndarray, list,
                                       tuple, range)):
                values = [values] * (size if size is not None else 1)
            series = as_series(values, name=key)
            if size is None:
                size = len(series)
            if len(series) != size:
                raise ShapeMismatchError('Size mismatch for %s: %d != %d'
                                         % (key, len(series), size))
            assigned.append(series)
        if self.n_keys == 0:
            return Table.create(pd.concat(assigned, axis=1))
        frame = self._data.copy(deep=False)
        for series in assigned:
            frame[series.name] = series.array
        return Table.create(frame)

    def remove_nil(self):
        """ Rows without any missing value """
        if self.n_keys == 0:
            return self
        return resolve_rows(self,
                            Mask(~self._data.isna().any(axis=1).to_numpy()))

    def concatenate(self, *others):
        tables = [self] + [t for other in others for t in listpack(other)]
        frames = [t.data for t in tables if t.n_keys]
        if not frames:
            return self
        if len(frames) == 1:
            return Table.create(frames[0])
        return Table.create(concat(frames))

    concat = concatenate

    # Partitions

    def group(self, *keys, **kwargs):
        """ Group rows by equal values of ``keys``

        With ``func`` the group is summarized right away.
        """
        from .group import Group
        func = kwargs.pop('func', None)
        if kwargs:
            raise ArgumentError('Unexpected arguments: %s' % sorted(kwargs))
        g = Group(self, *keys)
        if func is not None:
            return g.summarize(func)
        return g

    def sub_by_value(self, *keys):
        from .subframes import SubFrames
        from .group import Group
        return SubFrames.by_group(Group(self, *keys))

    sub_group = sub_by_value

    def sub_by_window(self, start=0, size=None, step=1):
        """ SubFrames of ``size`` consecutive rows moving by ``step``

        ``size`` defaults to every row from ``start``.
        """
        from .subframes import SubFrames
        if size is None:
            size = self.size - start
        if self.empty:
            return SubFrames(self, [])
        if size <= 0 or step <= 0 or start < 0:
            raise ArgumentError('Invalid window: start=%r size=%r step=%r'
                                % (start, size, step))
        windows = [list(range(i, i + size))
                   for i in range(start, self.size - size + 1, step)]
        return SubFrames(self, windows)

    def sub_by_kernel(self, kernel, step=1):
        """ SubFrames of a boolean window ``kernel`` moving by ``step``

        >>> t = Table(x=[1, 2, 3, 4, 5, 6])
        >>> t.sub_by_kernel([True, False, False, True], step=2).sizes
        [2, 2]
        """
        from .subframes import SubFrames
        kernel = [bool(b) for b in kernel]
        if step <= 0:
            raise ArgumentError('Invalid step: %r' % (step,))
        limit = self.size - len(kernel)
        masks = [[False] * i + kernel + [False] * (limit - i)
                 for i in range(0, limit + 1, step)]
        return SubFrames(self, masks)

    def sub_by_chunks(self, size):
        """ SubFrames of consecutive chunks of ``size`` rows

        >>> Table(x=[1, 2, 3, 4, 5]).sub_by_chunks(2).sizes
        [2, 2, 1]
        """
        from .subframes import SubFrames
        if size <= 0:
            raise ArgumentError('Invalid chunk size: %r' % (size,))
        chunks = [list(range(i, min(i + size, self.size)))
                  for i in range(0, self.size, size)]
        return SubFrames(self, chunks)

    def build_subframes(self, specifier=None):
        """ SubFrames from index lists, boolean filters or a function """
        from .subframes import SubFrames
        return SubFrames(self, specifier)
