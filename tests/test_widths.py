import pytest

from panelnet import NetworkInputError, normalize_widths


def test_single_seed_is_repeated():
    assert normalize_widths([2.0], 5) == [2.0, 2.0, 2.0, 2.0, 2.0]


def test_padding_repeats_last_value():
    assert normalize_widths([1.0, 3.0], 4) == [1.0, 3.0, 3.0, 3.0]


def test_longer_list_is_not_truncated():
    assert normalize_widths([1.0, 2.0, 3.0], 2) == [1.0, 2.0, 3.0]


def test_input_list_is_left_alone():
    seeds = [0.5]
    normalize_widths(seeds, 3)
    assert seeds == [0.5]


def test_empty_seed_list_is_rejected():
    with pytest.raises(NetworkInputError):
        normalize_widths([], 3)
