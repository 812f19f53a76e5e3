""" Equality grouping of a Table

A ``Group`` partitions the rows of a table by the distinct values of one or
more key columns.  Missing key values form a group of their own.  Groups are
ordered by the first row in which their key combination appears.

>>> from facet import Table
>>> t = Table(i=[0, 0, 1, 2, 2, None], x=[1, 2, 3, 4, 5, 6])
>>> g = t.group('i')
>>> g.group_counts
[2, 1, 2, 1]
>>> g.sum().to_dict()
{'i': [0, 1, 2, None], 'sum(x)': [3, 3, 9, 6]}
>>> g.count().to_dict()
{'i': [0, 1, 2, None], 'count': [2, 1, 2, 1]}

The per-group reductions are ``count``, ``sum``, ``mean``, ``min``, ``max``,
``product``, ``stddev``, ``variance`` and ``median``.  Each runs the hashed
aggregate kernel of the compute backend once over all its targets.
"""
import logging
from functools import reduce

import numpy as np
import pandas as pd
from toolz import frequencies

from .aggregates import (Aggregation, GROUPED, NUMERIC_ONLY, aggregation,
                         applies_to)
from .compute import hash_aggregate, project, take
from .error import DuplicateKeyError, GroupArgumentError, UnknownKeyError
from .params import options
from .resolve import resolve_rows
from .selectors import Mask
from .table import Table
from .utils import attribute, flatten, plural, type_tag

__all__ = ['Group']

logger = logging.getLogger(__name__)

_GROUP_ID = '__facet_group__'


def _value_masks(series):
    """ One boolean mask per distinct value, missing values last

    >>> [m.tolist() for m in _value_masks(pd.Series(['b', None, 'a', 'b']))]
    [[True, False, False, True], [False, False, True, False], [False, True, False, False]]
    """
    null = series.isna().to_numpy(dtype=bool)
    masks = [(series == value).fillna(False).to_numpy(dtype=bool)
             for value in pd.unique(series[~null])]
    if null.any():
        masks.append(null)
    return masks


class Group(object):
    """ Rows of ``table`` partitioned by equal values of ``group_keys``

    Parameters
    ----------
    table : Table
    *group_keys : str or list of str
    """

    def __init__(self, table, *group_keys):
        if not isinstance(table, Table):
            raise GroupArgumentError('Not a Table: %r' % (table,))
        group_keys = flatten(group_keys)
        if not group_keys:
            raise GroupArgumentError('Group keys are empty')
        missing = [k for k in group_keys if k not in table.keys]
        if missing:
            raise UnknownKeyError('%s is not a key of the table: %s'
                                  % (missing, table.keys))
        self.table = table
        self.group_keys = group_keys

    @attribute
    def filters(self):
        """ One boolean mask per observed combination of key values """
        first, others = self.group_keys[0], self.group_keys[1:]
        masks = _value_masks(self.table.data[first])
        for key in others:
            values = _value_masks(self.table.data[key])
            masks = [a & b
                     for a in masks
                     for b in values
                     if (a & b).any()]
        masks = [m for m in masks if m.any()]
        masks.sort(key=np.argmax)
        logger.debug('Grouped %d rows by %s into %d groups',
                     self.table.size, self.group_keys, len(masks))
        self.filters = masks
        return masks

    @attribute
    def group_counts(self):
        self.group_counts = counts = [int(f.sum()) for f in self.filters]
        return counts

    @attribute
    def base_table(self):
        """ Key columns at the first row of each group """
        positions = np.array([np.argmax(f) for f in self.filters],
                             dtype=np.int64)
        frame = take(project(self.table.data, self.group_keys), positions)
        self.base_table = base = Table.create(frame)
        return base

    @attribute
    def _group_codes(self):
        codes = np.empty(self.table.size, dtype=np.int64)
        for i, f in enumerate(self.filters):
            codes[f] = i
        self._group_codes = codes
        return codes

    @property
    def size(self):
        return len(self.filters)

    def __len__(self):
        return self.size

    def _targets(self, function, summary_keys):
        data = self.table.data
        if summary_keys:
            duplicates = [k for k, n in frequencies(summary_keys).items()
                          if n > 1]
            if duplicates:
                raise DuplicateKeyError('Duplicate summary keys: %s'
                                        % duplicates)
            missing = [k for k in summary_keys if k not in self.table.keys]
            if missing:
                raise UnknownKeyError('%s is not a key of the table: %s'
                                      % (missing, self.table.keys))
            invalid = [k for k in summary_keys
                       if not applies_to(function, data[k], explicit=True)]
            if invalid:
                raise GroupArgumentError('%s is not defined for %s'
                                         % (function.value, invalid))
            return summary_keys
        return [k for k in self.table.keys
                if k not in self.group_keys and applies_to(function, data[k])]

    def aggregate(self, function, *summary_keys):
        """ Apply the reduction ``function`` to each group

        Output columns are the group keys followed by ``function(target)``
        for every target, one row per group in group order.
        """
        function = aggregation(function)
        if function not in GROUPED:
            raise GroupArgumentError('Not a group aggregation: %s'
                                     % function.value)
        targets = self._targets(function, flatten(summary_keys))
        if not targets or self.table.size == 0:
            columns = [pd.Series([], dtype=object, name='%s(%s)'
                                 % (function.value, k)) for k in targets]
            return Table.create(pd.concat([self.base_table.data] + columns,
                                          axis=1))

        frame = self.table.data[targets].copy()
        if function in NUMERIC_ONLY:
            for k in targets:
                if type_tag(frame[k]) == 'boolean':
                    frame[k] = frame[k].astype('Float64')
        frame[_GROUP_ID] = self._group_codes

        result = hash_aggregate(frame, [_GROUP_ID], function.kernel, targets)
        result = (result.sort_values(_GROUP_ID)
                        .drop(columns=_GROUP_ID)
                        .reset_index(drop=True))
        return Table.create(pd.concat([self.base_table.data, result],
                                      axis=1))

    def count(self, *summary_keys):
        """ Number of non-missing values per group

        Collapses into a single ``count`` column when every target counts
        the same values.
        """
        result = self.aggregate(Aggregation.count, *summary_keys)
        counts = result.keys[len(self.group_keys):]
        if not (options.count_unification and counts):
            return result
        first = result.data[counts[0]].tolist()
        if all(result.data[k].tolist() == first for k in counts[1:]):
            return result.pick(self.group_keys + counts[:1]) \
                         .rename(counts[0], 'count')
        return result

    def sum(self, *summary_keys):
        return self.aggregate(Aggregation.sum, *summary_keys)

    def mean(self, *summary_keys):
        return self.aggregate(Aggregation.mean, *summary_keys)

    def min(self, *summary_keys):
        return self.aggregate(Aggregation.min, *summary_keys)

    def max(self, *summary_keys):
        return self.aggregate(Aggregation.max, *summary_keys)

    def product(self, *summary_keys):
        return self.aggregate(Aggregation.product, *summary_keys)

    def stddev(self, *summary_keys):
        return self.aggregate(Aggregation.stddev, *summary_keys)

    def variance(self, *summary_keys):
        return self.aggregate(Aggregation.variance, *summary_keys)

    def median(self, *summary_keys):
        return self.aggregate(Aggregation.median, *summary_keys)

    def group_count(self):
        """ Group keys with the number of rows in each group """
        return self.base_table.assign(group_count=self.group_counts)

    count_all = group_count

    def each(self):
        for f in self.filters:
            yield resolve_rows(self.table, Mask(f))

    def __iter__(self):
        return self.each()

    def summarize(self, func):
        """ Summarize with ``func(group)``

        ``func`` returns a Table or a list of Tables sharing the group keys,
        merged column-wise.

        >>> from facet import Table
        >>> g = Table(k=['a', 'b', 'a'], x=[1, 2, 3]).group('k')
        >>> g.summarize(lambda g: [g.sum('x'), g.max('x')]).to_dict()
        {'k': ['a', 'b'], 'sum(x)': [4, 2], 'max(x)': [3, 2]}
        """
        result = func(self)
        if isinstance(result, Table):
            return result
        if isinstance(result, (list, tuple)) and result and \
                all(isinstance(t, Table) for t in result):
            return reduce(lambda a, b: a.assign(b.variables), result)
        raise GroupArgumentError('Unknown summary: %r' % (result,))

    def __repr__(self):
        return '<Group: %d group%s by %s>\n%r' % (
            self.size, plural(self.size), self.group_keys, self.group_count())
