import pytest

from structured.search import NOT_FOUND, binary_search


def test_binary_search():
    assert binary_search((), 1) == -1
    assert binary_search((1,), 1) == 0
    assert binary_search((1, 2, 3, 4, 5, 6), 3) == 2
    assert binary_search((1, 2, 3, 4, 5, 6, 7), 7) == 6


def test_not_found_returns_sentinel():
    assert NOT_FOUND == -1
    assert binary_search((1,), 2) == -1
    assert binary_search((1, 2, 3, 4, 5, 6, 7), 0) == -1
    assert binary_search((1, 2, 3, 4, 5, 6, 7), 8) == -1


@pytest.mark.parametrize("target", [1, 2, 3, 4, 6, 7])
def test_finds_elements_of_small_tuple(target):
    items = (1, 2, 3, 4, 5, 6, 7)
    assert binary_search(items, target) == target - 1


def test_revisited_index_ends_search():
    # visits 3 -> 1 -> 4 -> 2 -> 4
    assert binary_search((1, 2, 3, 4, 5, 6), 3.5) == -1


def test_visiting_order_can_miss_present_element():
    # visits 3 -> 5 -> 2 -> 5
    assert binary_search((1, 2, 3, 4, 5, 6, 7), 5) == -1


def test_accepts_lists():
    assert binary_search([10, 20, 30], 20) == 1
