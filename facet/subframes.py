""" Caller specified partitions of a Table

A ``SubFrames`` holds a base table and a list of partition specifiers,
each an index list or a boolean filter over the base rows.  Partitions may
overlap or leave rows out.  They are materialized lazily, once each, on first
access.

>>> from facet import Table
>>> t = Table(x=[1, 2, 3], y=['a', 'b', 'c'])
>>> sf = SubFrames.by_filters(t, [[True, False, True], [False, True, False]])
>>> sf.sizes
[2, 1]
>>> [p.to_dict() for p in sf]
[{'x': [1, 3], 'y': ['a', 'c']}, {'x': [2], 'y': ['b']}]
>>> sf.aggregate('x', {'x': 'sum', 'y': 'count'}).to_dict()
{'x': [1, 2], 'sum(x)': [4, 2], 'count(y)': [2, 1]}
"""
import logging

import numpy as np
from toolz import concat, unique

from .aggregates import aggregation, reduce_series
from .error import (OutOfRangeError, ShapeMismatchError,
                    SubFramesArgumentError)
from .params import options
from .resolve import resolve_rows
from .selectors import Empty, Indices, Mask, normalize_index
from .table import Table
from .utils import (attribute, flatten, is_boolean_like, is_numeric_like,
                    isna_scalar, listpack, plural)

__all__ = ['SubFrames']

logger = logging.getLogger(__name__)

MASK = 'mask'
INDICES = 'indices'


def _entry_kind(entry):
    if len(entry) == 0:
        return None
    if is_boolean_like(entry):
        return MASK
    if is_numeric_like(entry):
        return INDICES
    raise SubFramesArgumentError('illegal type: %r' % (entry,))


def _as_mask(entry):
    return np.array([False if isna_scalar(b) else bool(b) for b in entry],
                    dtype=bool)


def _as_indices(entry):
    return np.array([int(i) for i in entry if not isna_scalar(i)],
                    dtype=np.int64)


def _entries(specifier):
    entries = []
    for entry in specifier:
        if hasattr(entry, 'to_list'):
            entry = entry.to_list()
        elif isinstance(entry, np.ndarray):
            entry = entry.tolist()
        elif not isinstance(entry, (list, tuple, range)):
            raise SubFramesArgumentError('illegal type: %r' % (entry,))
        entries.append(list(entry))
    return entries


def parse_specifier(specifier):
    """ Turn index lists or boolean filters into row selections

    >>> parse_specifier([[0, 2], []])
    [Indices([0, 2]), Indices([])]
    >>> parse_specifier([[True, None], [], [False, True]])
    [Mask([True, False]), Indices([]), Mask([False, True])]
    """
    if specifier is None:
        return []
    specifier = list(specifier)
    if not specifier or (len(specifier) == 1 and specifier[0] is None):
        return []
    entries = _entries(specifier)
    kinds = set(_entry_kind(e) for e in entries) - set([None])
    if len(kinds) > 1:
        raise SubFramesArgumentError('Mixed partition kinds: %s'
                                     % sorted(kinds))
    if kinds == set([MASK]):
        return [Mask(_as_mask(e)) if e else Indices([]) for e in entries]
    return [Indices(_as_indices(e)) for e in entries]


class SubFrames(object):
    """ Partitions of a Table

    Parameters
    ----------
    table : Table
        The base table.
    specifier : list, optional
        Index lists or boolean filters, one per partition.
    func : callable, optional
        Called with ``table`` to compute ``specifier``.
    """

    def __init__(self, table, specifier=None, func=None):
        if not isinstance(table, Table):
            raise SubFramesArgumentError('Not a Table: %r' % (table,))
        if callable(specifier):
            if func is not None:
                raise SubFramesArgumentError('Must not specify both '
                                             'arguments and a function')
            specifier, func = None, specifier
        if func is not None:
            if specifier is not None:
                raise SubFramesArgumentError('Must not specify both '
                                             'arguments and a function')
            specifier = func(table)
        self.universal_frame = table
        self.specifiers = [] if table.empty else parse_specifier(specifier)
        self._frames = dict()
        logger.debug('Built %d subframe%s over %d rows', len(self.specifiers),
                     plural(len(self.specifiers)), table.size)

    @classmethod
    def by_group(cls, group):
        return cls(group.table, group.filters)

    @classmethod
    def by_indices(cls, table, indices):
        sf = cls(table, indices)
        if any(isinstance(s, Mask) for s in sf.specifiers):
            raise SubFramesArgumentError('Not index lists: %r' % (indices,))
        return sf

    @classmethod
    def by_filters(cls, table, filters):
        sf = cls(table, filters)
        if any(isinstance(s, Indices) and len(s) for s in sf.specifiers):
            raise SubFramesArgumentError('Not boolean filters: %r'
                                         % (filters,))
        return sf

    @classmethod
    def by_frames(cls, tables):
        """ SubFrames made of existing tables

        The base table is their concatenation, computed on demand.
        """
        tables = listpack(tables)
        for t in tables:
            if not isinstance(t, Table):
                raise SubFramesArgumentError('Not a Table: %r' % (t,))
        keys = [t.keys for t in tables if t.n_keys]
        if any(k != keys[0] for k in keys[1:]):
            raise ShapeMismatchError('Tables have different keys: %s' % keys)
        sf = cls.__new__(cls)
        sf.specifiers = []
        offset = 0
        for t in tables:
            sf.specifiers.append(Indices(np.arange(offset, offset + t.size)))
            offset += t.size
        sf._frames = dict(enumerate(tables))
        return sf

    @attribute
    def universal_frame(self):
        frames = list(self._frames.values())
        self.universal_frame = t = frames[0].concatenate(*frames[1:]) \
            if frames else Table()
        return t

    def _subset(self, positions):
        sf = SubFrames.__new__(SubFrames)
        sf.universal_frame = self.universal_frame
        sf.specifiers = [self.specifiers[i] for i in positions]
        sf._frames = dict((j, self._frames[i])
                          for j, i in enumerate(positions)
                          if i in self._frames)
        return sf

    def _materialize(self, i):
        try:
            return self._frames[i]
        except KeyError:
            pass
        try:
            frame = resolve_rows(self.universal_frame, self.specifiers[i])
        except (OutOfRangeError, ShapeMismatchError) as e:
            raise SubFramesArgumentError('Invalid partition %d: %s' % (i, e)) \
                from e
        logger.debug('Materialized subframe %d with %d rows', i, frame.size)
        self._frames[i] = frame
        return frame

    def each(self):
        for i in range(len(self.specifiers)):
            yield self._materialize(i)

    def __iter__(self):
        return self.each()

    @property
    def frames(self):
        return list(self.each())

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self._subset(range(*key.indices(self.size)))
        return self._materialize(normalize_index(key, self.size))

    @property
    def size(self):
        return len(self.specifiers)

    def __len__(self):
        return self.size

    @attribute
    def sizes(self):
        self.sizes = sizes = [int(s.mask.sum()) if isinstance(s, Mask)
                              else len(s) for s in self.specifiers]
        return sizes

    @property
    def offset_indices(self):
        """ Row where each partition starts

        The first true position of each filter, or the running total of
        sizes for index lists.  An all-false filter starts nowhere (None).
        """
        if any(isinstance(s, Mask) for s in self.specifiers):
            return [int(np.argmax(s.mask))
                    if isinstance(s, Mask) and s.mask.any() else None
                    for s in self.specifiers]
        offsets, total = [], 0
        for size in self.sizes:
            offsets.append(total)
            total += size
        return offsets

    @property
    def empty(self):
        return self.size == 0

    @property
    def universal(self):
        """ Whether the only partition is the whole base table """
        if self.size != 1:
            return False
        s, n = self.specifiers[0], self.universal_frame.size
        if isinstance(s, Mask):
            return bool(len(s) == n and s.mask.all())
        return bool(len(s) == n
                    and (s.positions == np.arange(n)).all())

    def first(self):
        return self._materialize(0) if self.size else None

    def take(self, n):
        if n < 0:
            raise OutOfRangeError('Index out of range: %d' % n)
        if n >= self.size:
            return self
        for i in range(n):
            self._materialize(i)
        return self._subset(range(n))

    def concatenate(self):
        frames = self.frames
        if not frames:
            return resolve_rows(self.universal_frame, Empty())
        return frames[0].concatenate(*frames[1:])

    concat = concatenate

    # Traversal

    def _check(self, tables):
        for t in tables:
            if not isinstance(t, Table):
                raise SubFramesArgumentError('Not a Table: %r' % (t,))
        return SubFrames.by_frames(tables)

    def map(self, func):
        """ SubFrames of ``func(partition)`` for each partition """
        return self._check([func(t) for t in self])

    def select(self, predicate):
        return SubFrames.by_frames([t for t in self if predicate(t)])

    filter = select

    def reject(self, predicate):
        return SubFrames.by_frames([t for t in self if not predicate(t)])

    def filter_map(self, func):
        results = (func(t) for t in self)
        return self._check([r for r in results
                            if r is not None and r is not False])

    def aggregate(self, *args):
        """ One row per partition

        ``aggregate(func)``
            ``func(partition)`` returns a mapping of column to value.
        ``aggregate(labels, func)``
            ``func(partition)`` returns one value per label.
        ``aggregate(*group_keys, {column: function})``
            The first value of each group key followed by
            ``function(column)`` for each column.  A column may name a list
            of functions.

        >>> from facet import Table
        >>> sf = Table(x=[1, 2, 3, 4]).sub_by_chunks(2)
        >>> result = sf.aggregate(['n', 'total'], lambda t: [t.size, t.x.sum()])
        >>> result.to_dict()
        {'n': [2, 2], 'total': [3, 7]}
        """
        if len(args) == 1 and callable(args[0]):
            rows = [dict(args[0](t)) for t in self]
            keys = unique(concat(rows))
            return Table([(key, [row.get(key) for row in rows])
                          for key in keys])

        if len(args) == 2 and callable(args[1]):
            labels = listpack(args[0])
            rows = [listpack(args[1](t)) for t in self]
            for row in rows:
                if len(row) != len(labels):
                    raise SubFramesArgumentError(
                        'Expected %d values, got %r' % (len(labels), row))
            return Table([(label, [row[j] for row in rows])
                          for j, label in enumerate(labels)])

        if args and isinstance(args[-1], dict):
            group_keys = flatten(args[:-1])
            specs = [(column, aggregation(f))
                     for column, functions in args[-1].items()
                     for f in listpack(functions)]
            frames = self.frames
            columns = [(key, [t.v(key).first() for t in frames])
                       for key in group_keys]
            columns += [('%s(%s)' % (f.value, column),
                         [reduce_series(t.v(column).data, f) for t in frames])
                        for column, f in specs]
            return Table(columns)

        raise SubFramesArgumentError('Invalid aggregate arguments: %r'
                                     % (args,))

    def __repr__(self):
        limit = options.subframes_limit
        shown = self.sizes[:limit] + (['...'] if self.size > limit else [])
        lines = ['<SubFrames: %d subframe%s, sizes %s>'
                 % (self.size, plural(self.size), shown)]
        for t in self.take(min(limit, self.size)):
            lines.append('---')
            lines.append(repr(t))
        if self.size > limit:
            lines.append('+ %d more subframe%s' % (self.size - limit,
                                                   plural(self.size - limit)))
        return '\n'.join(lines)

