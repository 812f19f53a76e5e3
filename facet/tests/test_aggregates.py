import pytest

import pandas as pd

from facet.aggregates import (Aggregation, GROUPED, aggregation, applies_to,
                              reduce_series)
from facet.compute import hash_functions
from facet.error import ArgumentError


def test_lookup():
    assert aggregation('sum') is Aggregation.sum
    assert aggregation(Aggregation.max) is Aggregation.max
    with pytest.raises(ArgumentError):
        aggregation('mode')


def test_every_group_aggregation_has_a_kernel():
    for function in GROUPED:
        assert function.kernel in hash_functions


def test_applies_to():
    numbers = pd.Series([1, 2])
    strings = pd.Series(['a', 'b'])
    booleans = pd.Series([True, False])
    assert applies_to(Aggregation.sum, numbers)
    assert not applies_to(Aggregation.sum, strings)
    assert not applies_to(Aggregation.sum, booleans)
    assert applies_to(Aggregation.sum, booleans, explicit=True)
    assert applies_to(Aggregation.max, strings)
    assert applies_to(Aggregation.count, strings)


def test_reduce_series():
    s = pd.Series([3, None, 1], dtype='Int64')
    assert reduce_series(s, 'count') == 2
    assert reduce_series(s, 'sum') == 4
    assert reduce_series(s, 'first') == 3
    assert reduce_series(s, 'last') == 1
    assert reduce_series(s, 'one') == 3
    assert reduce_series(s, 'count_uniq') == 2
    assert reduce_series(pd.Series([], dtype='Float64'), 'sum') is None
    assert reduce_series(pd.Series([], dtype='Float64'), 'first') is None


def test_reduce_series_rejects_strings():
    with pytest.raises(ArgumentError):
        reduce_series(pd.Series(['a']), 'mean')
