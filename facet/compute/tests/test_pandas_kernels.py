import pytest

import numpy as np
import pandas as pd
from pandas import DataFrame
from pandas.testing import assert_frame_equal

from facet.compute import (take, filter_by_mask, empty_like, project, concat,
                           hash_aggregate)
from facet.error import ArgumentError, ShapeMismatchError


df = DataFrame([['Alice', 100, 1],
                ['Bob', 200, 2],
                ['Alice', 50, 3]], columns=['name', 'amount', 'id'])

ndf = DataFrame({'name': ['Alice', 'Bob', None, 'Alice', None],
                 'amount': pd.array([100, None, 50, 20, None], dtype='Int64'),
                 'value': [1.0, 2.0, 3.0, 4.0, 5.0]})


def test_take():
    result = take(df, np.array([2, 0, 2]))
    assert list(result['id']) == [3, 1, 3]
    assert list(result.index) == [0, 1, 2]


def test_take_series():
    result = take(df['amount'], np.array([1]))
    assert result.tolist() == [200]
    assert result.name == 'amount'


def test_take_does_not_mutate():
    take(df, np.array([1]))
    assert list(df['id']) == [1, 2, 3]


def test_filter_by_mask():
    result = filter_by_mask(df, np.array([True, False, True]))
    assert list(result['name']) == ['Alice', 'Alice']
    assert list(result.index) == [0, 1]


def test_filter_by_mask_wrong_length():
    with pytest.raises(ShapeMismatchError):
        filter_by_mask(df, np.array([True, False]))


def test_empty_like_keeps_schema():
    result = empty_like(df)
    assert len(result) == 0
    assert list(result.columns) == list(df.columns)
    assert (result.dtypes == df.dtypes).all()


def test_project():
    result = project(df, ['id', 'name'])
    assert list(result.columns) == ['id', 'name']
    assert project(df, []).empty


def test_concat():
    result = concat([df, df.iloc[:1]])
    assert len(result) == 4
    assert list(result.index) == [0, 1, 2, 3]


def test_concat_different_columns():
    with pytest.raises(ShapeMismatchError):
        concat([df, df[['id']]])


def test_hash_aggregate_sum():
    result = hash_aggregate(df, ['name'], 'hash_sum', ['amount', 'id'])
    expected = DataFrame({'name': ['Alice', 'Bob'],
                          'sum(amount)': [150, 200],
                          'sum(id)': [4, 2]})
    assert_frame_equal(result, expected)


def test_hash_aggregate_first_appearance_order():
    frame = DataFrame({'k': ['b', 'a', 'b', 'c'], 'x': [1, 2, 3, 4]})
    result = hash_aggregate(frame, ['k'], 'hash_count', ['x'])
    assert list(result['k']) == ['b', 'a', 'c']
    assert list(result['count(x)']) == [2, 1, 1]


def test_hash_aggregate_null_keys_form_a_group():
    result = hash_aggregate(ndf, ['name'], 'hash_count', ['value'])
    assert len(result) == 3
    assert list(result['count(value)']) == [2, 1, 2]


def test_hash_aggregate_all_null_sum_is_null():
    result = hash_aggregate(ndf, ['name'], 'hash_sum', ['amount'])
    assert result['sum(amount)'].isna().tolist() == [False, True, False]


def test_hash_aggregate_population_stddev():
    frame = DataFrame({'k': [1, 1], 'x': [1.0, 3.0]})
    result = hash_aggregate(frame, ['k'], 'hash_stddev', ['x'])
    assert result['stddev(x)'].tolist() == [1.0]
    result = hash_aggregate(frame, ['k'], 'hash_variance', ['x'])
    assert result['variance(x)'].tolist() == [1.0]


def test_hash_aggregate_unknown_function():
    with pytest.raises(ArgumentError):
        hash_aggregate(df, ['name'], 'hash_mode', ['amount'])
