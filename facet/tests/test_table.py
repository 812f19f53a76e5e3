import pytest

import numpy as np
import pandas as pd
from pandas import DataFrame

from facet import Table, Vector, set_options
from facet.error import (ArgumentError, DuplicateKeyError,
                         InvalidSelectorError, OutOfRangeError,
                         ShapeMismatchError, UnknownKeyError)


t = Table(x=[1, 2, 3, 4, 5],
          y=['A', 'A', 'B', 'B', None],
          z=[False, True, False, None, True])


def test_construction_forms():
    d = {'a': [1, 2], 'b': ['x', 'y']}
    assert Table(d).to_dict() == d
    assert Table(a=[1, 2], b=['x', 'y']) == Table(d)
    assert Table(list(d.items())) == Table(d)
    assert Table(DataFrame(d)).to_dict() == d
    assert Table(Table(d)) == Table(d)


def test_empty_construction():
    for empty in [Table(), Table(None), Table({}), Table([])]:
        assert empty.shape == (0, 0)
        assert empty.empty
        assert empty.keys == []


def test_construction_errors():
    with pytest.raises(ArgumentError):
        Table({1: [1]})
    with pytest.raises(DuplicateKeyError):
        Table([('a', [1]), ('a', [2])])
    with pytest.raises(ShapeMismatchError):
        Table(a=[1, 2], b=[1])
    with pytest.raises(ArgumentError):
        Table(42)


def test_unnamed_keys():
    assert Table([('', [1]), ('b', [2]), ('', [3])]).keys == \
        ['unnamed1', 'b', 'unnamed2']


def test_dataframe_index_is_dropped():
    df = DataFrame({'a': [1, 2]}, index=[10, 20])
    assert Table(df)[0].to_dict() == {'a': [1]}


def test_attributes():
    assert t.size == t.n_rows == len(t) == 5
    assert t.n_keys == 3
    assert t.shape == (5, 3)
    assert t.keys == ['x', 'y', 'z']
    assert t.key_index('y') == 1
    assert t.has_key('z') and 'z' in t and 'w' not in t
    assert t.types == ['numeric', 'string', 'boolean']
    assert list(t.schema) == ['x', 'y', 'z']
    assert [v.key for v in t.vectors] == t.keys
    assert t.variables['x'].to_list() == [1, 2, 3, 4, 5]
    assert t.indices.to_list() == [0, 1, 2, 3, 4]
    assert not t.empty
    with pytest.raises(UnknownKeyError):
        t.key_index('w')


def test_memoized_attributes():
    u = Table(a=[1])
    assert u.keys is u.keys
    assert u.variables is u.variables


def test_output():
    assert t.to_dict()['y'] == ['A', 'A', 'B', 'B', None]
    assert t.to_records()[4] == [5, None, True]
    assert isinstance(t.to_pandas(), DataFrame)
    assert t.to_pandas() is not t.data
    assert 'x' in repr(t)


def test_attribute_column_access():
    assert isinstance(t.x, Vector)
    assert t.x.to_list() == [1, 2, 3, 4, 5]
    with pytest.raises(AttributeError):
        t.nope


def test_equality():
    assert t == Table(t.to_pandas())
    assert t != Table(x=[1, 2, 3, 4, 5])
    assert t != t.to_dict()


def test_getitem_negative_rows():
    assert t[-1, -2] == t[4, 3]
    assert t[-1, -2]['x'].to_list() == [5, 4]
    with pytest.raises(OutOfRangeError):
        t[5]
    with pytest.raises(OutOfRangeError):
        t[-6]


def test_getitem_forms():
    assert isinstance(t['x'], Vector)
    assert t[0].to_dict() == {'x': [1], 'y': ['A'], 'z': [False]}
    assert t['x', 'z'].keys == ['x', 'z']
    assert t[['y', 'x']].keys == ['y', 'x']
    assert t[slice('y', 'z')].keys == ['y', 'z']
    assert t[1:3]['x'].to_list() == [2, 3]
    assert t[range(2)]['x'].to_list() == [1, 2]
    assert t[t['x'] > 3]['x'].to_list() == [4, 5]


@pytest.mark.parametrize('selector', [None, [], [None]])
def test_getitem_empty_selection(selector):
    result = t[selector]
    assert result.size == 0
    assert result.keys == t.keys
    assert result.schema == t.schema


def test_getitem_errors():
    with pytest.raises(UnknownKeyError):
        t['w']
    with pytest.raises(InvalidSelectorError):
        t['x', 0]
    with pytest.raises(ShapeMismatchError):
        t[[True, False]]
    with pytest.raises(ArgumentError):
        Table()[0]


def test_v():
    assert t.v('y').key == 'y'
    with pytest.raises(ArgumentError):
        t.v(0)
    with pytest.raises(UnknownKeyError):
        t.v('w')


def test_slice():
    assert t.slice(0, 2)['x'].to_list() == [1, 3]
    assert t.slice(range(3, 5))['x'].to_list() == [4, 5]
    assert t.slice(lambda t: t['z'])['x'].to_list() == [2, 5]
    assert t.slice(lambda t: [0, 1])['x'].to_list() == [1, 2]
    assert t.slice().size == 0


def test_slice_function_with_arguments():
    with pytest.raises(ArgumentError):
        t.slice(0, lambda t: [1])


def test_remove():
    assert t.remove(0, -1)['x'].to_list() == [2, 3, 4]
    assert t.remove(t['z'])['x'].to_list() == [1, 3, 4]
    assert t.remove(lambda t: t['x'] > 2)['x'].to_list() == [1, 2]
    assert t.remove() is t
    assert t.remove(None) is t


def test_remove_keeps_missing():
    mask = t['y'] == 'B'
    assert t.remove(mask)['y'].to_list() == ['A', 'A', None]


def test_filter():
    assert t.filter([True, False, False, False, True])['x'].to_list() == \
        [1, 5]
    with pytest.raises(InvalidSelectorError):
        t.filter(0, 1)


def test_head_tail():
    assert t.head(2)['x'].to_list() == [1, 2]
    assert t.tail(2)['x'].to_list() == [4, 5]
    assert t.head(10).size == 5
    assert t.first()['x'].to_list() == [1]
    assert t.last()['x'].to_list() == [5]
    with pytest.raises(OutOfRangeError):
        t.head(-1)
    with set_options(head=3):
        assert t.head().size == 3
        assert t.tail()['x'].to_list() == [3, 4, 5]


def test_take():
    assert t.take([4, 0])['x'].to_list() == [5, 1]
    with pytest.raises(OutOfRangeError):
        t.take([-1])


def test_pick():
    assert t.pick('z', 'x').keys == ['z', 'x']
    assert t.pick(1).keys == ['y']
    assert t.pick([True, False, True]).keys == ['x', 'z']
    assert t.pick(lambda t: [k for k in t.keys if k != 'y']).keys == \
        ['x', 'z']
    assert t.pick(slice('x', 'y')).keys == ['x', 'y']
    assert t.pick('x', 'y', 'z') is t
    assert t.pick().n_keys == 0
    with pytest.raises(DuplicateKeyError):
        t.pick('x', 'x')
    with pytest.raises(UnknownKeyError):
        t.pick('w')


def test_drop():
    assert t.drop('y').keys == ['x', 'z']
    assert t.drop(0, 2).keys == ['y']
    assert t.drop(lambda t: 'z').keys == ['x', 'y']
    assert t.drop() is t
    assert t.drop('x', 'y', 'z').n_keys == 0
    with pytest.raises(UnknownKeyError):
        t.drop('w')


def test_rename():
    assert t.rename('x', 'a').keys == ['a', 'y', 'z']
    assert t.rename({'x': 'y', 'y': 'x'}).keys == ['y', 'x', 'z']
    assert t.rename([('z', 'c')]).keys == ['x', 'y', 'c']
    with pytest.raises(UnknownKeyError):
        t.rename('w', 'a')
    with pytest.raises(DuplicateKeyError):
        t.rename('x', 'y')


def test_assign():
    result = t.assign(w=[5, 4, 3, 2, 1])
    assert result.keys == ['x', 'y', 'z', 'w']
    assert t.keys == ['x', 'y', 'z']
    result = t.assign({'x': Vector(['a', 'b', 'c', 'd', 'e'])})
    assert result['x'].to_list() == ['a', 'b', 'c', 'd', 'e']
    assert t.assign(lambda t: {'x2': t['x'].data * 2})['x2'].to_list() == \
        [2, 4, 6, 8, 10]
    assert t.assign(k=0)['k'].to_list() == [0] * 5
    assert Table().assign(a=[1, 2]).to_dict() == {'a': [1, 2]}
    with pytest.raises(ShapeMismatchError):
        t.assign(w=[1, 2])


def test_remove_nil():
    assert t.remove_nil()['x'].to_list() == [1, 2, 3]


def test_concatenate():
    result = t.head(2).concatenate(t.tail(1))
    assert result['x'].to_list() == [1, 2, 5]
    assert t.concatenate([t, t]).size == 15
    with pytest.raises(ShapeMismatchError):
        t.concatenate(t.pick('x'))


def test_full_selection_round_trip():
    by_indices = t.slice(range(t.size))
    by_mask = t.slice([True] * t.size)
    assert by_indices == by_mask == t


def test_selection_never_mutates():
    before = t.to_dict()
    t.slice(0)
    t.pick('x')
    t.assign(x=[0] * 5)
    t.rename('x', 'a')
    assert t.to_dict() == before
    assert t.keys == ['x', 'y', 'z']


def test_group_entry_point():
    g = t.group('y')
    assert g.size == 3
    result = t.group('y', func=lambda g: g.count('x'))
    assert result.keys == ['y', 'count']


def test_sub_by_value():
    assert t.sub_by_value('y').sizes == [2, 2, 1]


def test_sub_by_window():
    sf = Table(x=list(range(6))).sub_by_window(size=4, step=2)
    assert [f['x'].to_list() for f in sf] == [[0, 1, 2, 3], [2, 3, 4, 5]]
    assert Table(x=list(range(6))).sub_by_window(start=2).sizes == [4]
    with pytest.raises(ArgumentError):
        t.sub_by_window(size=0)


def test_sub_by_window_on_empty_table():
    sf = t.slice().sub_by_window()
    assert sf.empty
    assert sf.size == 0


def test_sub_by_kernel():
    sf = Table(x=list(range(6))).sub_by_kernel([True, False, False, True],
                                              step=2)
    assert [f['x'].to_list() for f in sf] == [[0, 3], [2, 5]]


def test_sub_by_chunks():
    sf = t.sub_by_chunks(2)
    assert sf.sizes == [2, 2, 1]
    assert sf.offset_indices == [0, 2, 4]


def test_build_subframes():
    assert t.build_subframes([[0, 2], [1]]).sizes == [2, 1]
    sf = t.build_subframes(lambda t: [t['z'].to_list(), [True] * 5])
    assert sf.sizes == [2, 5]
