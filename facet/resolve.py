""" Resolve normalized selections against tables and vectors

Row selections dispatch on the kind of selection and the pandas object that
holds the data, issuing exactly one call into the compute kernels.  Column
selections resolve names, positions or per-column booleans into a unique key
list and project it.

Views are duck typed: anything with a ``data`` attribute holding a pandas
object and a ``create`` classmethod wrapping one (``Table`` and ``Vector``).
"""
from pandas import DataFrame, Series
from toolz import frequencies

from .compute import empty_like, filter_by_mask, project, take
from .dispatch import dispatch
from .error import (DuplicateKeyError, InvalidSelectorError, OutOfRangeError,
                    ShapeMismatchError, UnknownKeyError)
from .selectors import Empty, Indices, Mask, NameRange, Names

__all__ = ['resolve_rows', 'resolve_columns', 'resolve_keys', 'select_rows',
           'select_keys']


@dispatch(Indices, (DataFrame, Series))
def select_rows(selection, data):
    positions = selection.positions
    n = len(data)
    bad = (positions < 0) | (positions >= n)
    if bad.any():
        raise OutOfRangeError('Index out of range: %s for 0..%d'
                              % (positions[bad].tolist(), n - 1))
    return take(data, positions)


@dispatch(Mask, (DataFrame, Series))
def select_rows(selection, data):
    if len(selection.mask) != len(data):
        raise ShapeMismatchError('Booleans must be same size as self: '
                                 '%d != %d' % (len(selection.mask), len(data)))
    return filter_by_mask(data, selection.mask)


@dispatch(Empty, (DataFrame, Series))
def select_rows(selection, data):
    return empty_like(data)


@dispatch(Names, (DataFrame, Series))
def select_rows(selection, data):
    raise InvalidSelectorError('Can not select rows by names: %s'
                               % selection.names)


def resolve_rows(view, selection):
    """ Select rows of a Table or elements of a Vector """
    return type(view).create(select_rows(selection, view.data))


#------------------------------------------------------------------------
# Columns
#------------------------------------------------------------------------

def _key_index(keys, name):
    try:
        return keys.index(name)
    except ValueError:
        raise UnknownKeyError('Key does not exist: %s' % (name,))


@dispatch(Names, list)
def select_keys(selection, keys):
    result = []
    for name in selection.names:
        if isinstance(name, NameRange):
            start = _key_index(keys, name.start)
            stop = _key_index(keys, name.stop)
            if start > stop:
                raise InvalidSelectorError('Reversed key range: %s..%s'
                                           % (name.start, name.stop))
            result.extend(keys[start:stop + 1])
        else:
            _key_index(keys, name)
            result.append(name)
    return result


@dispatch(Indices, list)
def select_keys(selection, keys):
    n = len(keys)
    positions = selection.positions
    bad = (positions < 0) | (positions >= n)
    if bad.any():
        raise OutOfRangeError('Index out of range: %s for 0..%d'
                              % (positions[bad].tolist(), n - 1))
    return [keys[i] for i in positions]


@dispatch(Mask, list)
def select_keys(selection, keys):
    if len(selection.mask) != len(keys):
        raise ShapeMismatchError('Booleans must be same size as keys: '
                                 '%d != %d' % (len(selection.mask), len(keys)))
    return [k for k, b in zip(keys, selection.mask) if b]


@dispatch(Empty, list)
def select_keys(selection, keys):
    return []


def resolve_keys(table, selection, unique=True):
    """ Resolve a column selection into a list of existing keys

    >>> from facet import Table
    >>> from facet.selectors import normalize
    >>> t = Table({'a': [1], 'b': [2], 'c': [3]})
    >>> resolve_keys(t, normalize([slice('a', 'b'), -1], 3))
    Traceback (most recent call last):
        ...
    facet.error.InvalidSelectorError: Mixed selector kinds ['index', 'name_range']: [slice('a', 'b', None), -1]
    >>> resolve_keys(t, normalize([slice('b', 'c')], 3))
    ['b', 'c']
    """
    keys = select_keys(selection, list(table.keys))
    if unique:
        duplicates = [k for k, count in frequencies(keys).items() if count > 1]
        if duplicates:
            raise DuplicateKeyError('Duplicate keys: %s' % duplicates)
    return keys


def resolve_columns(table, selection, single=False):
    """ Project the columns of ``table`` named by ``selection``

    With ``single=True`` a selection of exactly one plain name returns the
    bare Vector instead of a one-column Table.
    """
    if isinstance(selection, Empty):
        return type(table)()
    keys = resolve_keys(table, selection)
    if (single and isinstance(selection, Names) and len(selection) == 1
            and not isinstance(selection.names[0], NameRange)):
        return table.v(keys[0])
    return type(table).create(project(table.data, keys))
