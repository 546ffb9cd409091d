from structured.sorting import mergesort, quicksort


def test_quicksort():
    assert quicksort([]) == []
    assert quicksort([1]) == [1]
    assert quicksort([3, 1, 2]) == [1, 2, 3]
    assert quicksort([9, -9, 9, -9, 9, -9, 9, 9, 9]) == [-9, -9, -9, 9, 9, 9, 9, 9, 9]


def test_quicksort_does_not_modify_input():
    items = [5, 4, 3, 2, 1]
    assert quicksort(items) == [1, 2, 3, 4, 5]
    assert items == [5, 4, 3, 2, 1]


def test_quicksort_accepts_tuples_and_strings():
    assert quicksort((2, 1)) == [1, 2]
    assert quicksort(["pear", "apple", "fig"]) == ["apple", "fig", "pear"]


def test_quicksort_many_duplicates():
    assert quicksort([7] * 2000) == [7] * 2000


def test_mergesort():
    assert mergesort([]) == []
    assert mergesort([1]) == [1]
    assert mergesort([3, 1, 2]) == [1, 2, 3]
    assert mergesort([9, -9, -9, 9, 9, -9]) == [-9, -9, -9, 9, 9, 9]


def test_mergesort_does_not_modify_input():
    items = [3, 1, 2, 1]
    assert mergesort(items) == [1, 1, 2, 3]
    assert items == [3, 1, 2, 1]


def test_mergesort_odd_and_even_lengths():
    assert mergesort([5, 4, 3, 2, 1]) == [1, 2, 3, 4, 5]
    assert mergesort([2, 1]) == [1, 2]
    assert mergesort([4, 1, 3, 2]) == [1, 2, 3, 4]
    assert mergesort([0.5, -1, 2, 0.5, 3, -1, 2]) == [-1, -1, 0.5, 0.5, 2, 2, 3]


def test_quicksort_presorted_input_is_not_depth_limited():
    ascending = list(range(5000))
    assert quicksort(ascending) == ascending
    assert quicksort(ascending[::-1]) == ascending
