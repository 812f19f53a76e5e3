import pytest

import numpy as np
import pandas as pd

from facet.selectors import (Empty, Indices, Mask, NameRange, Names,
                             normalize, normalize_index, wrap_indices)
from facet.error import (ArgumentError, InvalidSelectorError, OutOfRangeError,
                         ShapeMismatchError)
from facet import Vector


def positions(selection):
    assert isinstance(selection, Indices)
    return selection.positions.tolist()


def test_integers():
    assert positions(normalize([0, 2, 2], 3)) == [0, 2, 2]


def test_negative_integers():
    assert positions(normalize([-1, -2], 5)) == [4, 3]
    assert positions(normalize([-1, -2], 5)) == positions(normalize([4, 3], 5))


@pytest.mark.parametrize('i', [-5, -4, -3, -2, -1])
def test_negative_index_symmetry(i):
    assert normalize_index(i, 5) == normalize_index(i + 5, 5)


@pytest.mark.parametrize('i', [5, -6, 100])
def test_out_of_range(i):
    with pytest.raises(OutOfRangeError):
        normalize([i], 5)


def test_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        normalize([5], 5)


def test_numpy_integers():
    assert positions(normalize([np.int64(1), np.int32(-1)], 3)) == [1, 2]


def test_floats_truncate():
    assert positions(normalize([1.9, -0.5], 3)) == [1, 0]


def test_nan_is_dropped():
    assert positions(normalize([1, float('nan')], 3)) == [1]


def test_range():
    assert positions(normalize([range(1, 3)], 4)) == [1, 2]


def test_slices():
    assert positions(normalize([slice(1, 3)], 4)) == [1, 2]
    assert positions(normalize([slice(None, None)], 3)) == [0, 1, 2]
    assert positions(normalize([slice(-2, None)], 4)) == [2, 3]
    assert positions(normalize([slice(2, 1)], 4)) == []


def test_slice_out_of_range():
    with pytest.raises(OutOfRangeError):
        normalize([slice(0, 5)], 4)
    with pytest.raises(OutOfRangeError):
        normalize([slice(-5, None)], 4)


def test_slice_with_step():
    with pytest.raises(InvalidSelectorError):
        normalize([slice(0, 4, 2)], 4)


def test_nested():
    selection = normalize([0, [1, (2, range(3, 4))], iter([0])], 4)
    assert positions(selection) == [0, 1, 2, 3, 0]


def test_names():
    selection = normalize(['a', ['b', 'c']], 3)
    assert isinstance(selection, Names)
    assert selection.names == ['a', 'b', 'c']


def test_name_range():
    selection = normalize([slice('a', 'c')], 3)
    assert selection.names == [NameRange('a', 'c')]


@pytest.mark.parametrize('s', [slice('a', None), slice(None, 'c'),
                               slice('a', 2)])
def test_open_or_mixed_name_range(s):
    with pytest.raises(InvalidSelectorError):
        normalize([s], 3)


def test_booleans():
    selection = normalize([True, False, None], 3)
    assert isinstance(selection, Mask)
    assert selection.mask.tolist() == [True, False, False]


def test_boolean_length_mismatch():
    with pytest.raises(ShapeMismatchError):
        normalize([True, False], 3)


def test_boolean_arrays():
    assert normalize([np.array([True, False])], 2).mask.tolist() == \
        [True, False]
    series = pd.Series([True, None, False], dtype='boolean')
    assert normalize([series], 3).mask.tolist() == [True, False, False]


def test_integer_arrays():
    assert positions(normalize([np.array([2, -1])], 3)) == [2, 2]
    series = pd.Series([0, None, 2], dtype='Int64')
    assert positions(normalize([series], 3)) == [0, 2]


def test_vectors():
    assert positions(normalize([Vector([1, 0])], 2)) == [1, 0]
    assert normalize([Vector([True, None])], 2).mask.tolist() == [True, False]


@pytest.mark.parametrize('selectors', [[], [None], [None, 1], [[]],
                                       [[None, None]], None])
def test_empty(selectors):
    assert isinstance(normalize(selectors, 3), Empty)


def test_none_dropped_from_indices():
    assert positions(normalize([1, None, 0], 3)) == [1, 0]


def test_scalar_is_wrapped():
    assert positions(normalize(1, 3)) == [1]


@pytest.mark.parametrize('selectors', [[0, 'a'], [True, 0], ['a', True],
                                       [slice('a', 'b'), 1]])
def test_mixed_kinds(selectors):
    with pytest.raises(InvalidSelectorError):
        normalize(selectors, 2)


def test_invalid_selector():
    with pytest.raises(InvalidSelectorError):
        normalize([{'a': 1}], 3)


def test_negative_axis_size():
    with pytest.raises(ArgumentError):
        normalize([0], -1)


def test_normalize_is_pure():
    selectors = [1, [0, 2]]
    normalize(selectors, 3)
    assert selectors == [1, [0, 2]]


def test_wrap_indices():
    assert wrap_indices([0, -1], 3).tolist() == [0, 2]
    with pytest.raises(OutOfRangeError):
        wrap_indices([3], 3)
