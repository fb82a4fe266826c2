import pytest

from stratification.combinatorics import all_combinations, combine_states, n_combinations


def test_n_combinations_is_product_of_sizes():
    assert n_combinations([[0, 1], [2, 3, 4], [5, 6]]) == 12
    assert n_combinations([[0]]) == 1
    assert n_combinations([[0, 1], [2, 2]]) == 2


def test_all_combinations_first_axis_slowest():
    assert all_combinations([[0, 1], [2, 3]]) == [(0, 2), (0, 3), (1, 2), (1, 3)]
    assert all_combinations([["x"]]) == [("x",)]
    assert all_combinations([]) == []


def test_combine_states():
    assert combine_states((0, 2), (1, 3)) == [[0, 1], [2, 3]]
    assert combine_states((0, 2), (0, 3)) == [[0], [2, 3]]
    assert n_combinations(combine_states((0, 2, 4), (0, 3, 5))) == 4
    with pytest.raises(ValueError):
        combine_states((0, 2), (0,))
