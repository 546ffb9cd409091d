"""Sorting functions over lists.

Both functions return a new ascending list and never modify their input.
Elements only need to support ``<``, ``>`` and ``==`` among themselves;
comparing incomparable elements raises the usual TypeError.

Typical usage example:

    ```python
    from structured.sorting import mergesort, quicksort

    quicksort([3, 1, 2])                # [1, 2, 3]
    mergesort([9, -9, -9, 9, 9, -9])    # [-9, -9, -9, 9, 9, 9]
    ```
"""

from typing import Any, List, Sequence, Tuple


def quicksort(items: Sequence[Any]) -> List[Any]:
    """Return the items in ascending order using quicksort.

    The first item is the pivot. The rest is partitioned three ways (lesser,
    equal, greater) so runs of duplicate values are grouped with the pivot
    instead of being recursed into.

    Example:
        ```python
        quicksort([])                                  # []
        quicksort([9, -9, 9, -9, 9, -9, 9, 9, 9])      # [-9, -9, -9, 9, 9, 9, 9, 9, 9]
        ```
    """
    result: List[Any] = []
    # Work items are (True, segment) to sort or (False, run) to emit as is.
    # Lesser is pushed last so it is handled first.
    work: List[Tuple[bool, Sequence[Any]]] = [(True, items)]
    while work:
        to_sort, segment = work.pop()
        if not to_sort or len(segment) <= 1:
            result.extend(segment)
            continue
        pivot = segment[0]
        lesser, equivalent, greater = _partition(pivot, segment[1:])
        work.append((True, greater))
        work.append((False, [pivot] + equivalent))
        work.append((True, lesser))
    return result


def _partition(pivot: Any, items: Sequence[Any]) -> Tuple[List[Any], List[Any], List[Any]]:
    lesser: List[Any] = []
    equivalent: List[Any] = []
    greater: List[Any] = []
    for item in items:
        if item < pivot:
            lesser.append(item)
        elif item > pivot:
            greater.append(item)
        else:
            equivalent.append(item)
    return lesser, equivalent, greater


def mergesort(items: Sequence[Any]) -> List[Any]:
    """Return the items in ascending order using mergesort.

    The list is split with the extra element of an odd length going to the
    first half. Each sorted half is reversed and the two are merged largest
    first.

    Example:
        ```python
        mergesort([3, 1, 2])   # [1, 2, 3]
        ```
    """
    if len(items) <= 1:
        return list(items)
    middle = (len(items) + 1) // 2
    first = mergesort(items[:middle])
    second = mergesort(items[middle:])
    return _merge(first[::-1], second[::-1])


def _merge(first: List[Any], second: List[Any]) -> List[Any]:
    # Both inputs are descending; the accumulator is built largest first.
    acc: List[Any] = []
    i, j = 0, 0
    while i < len(first) and j < len(second):
        head1, head2 = first[i], second[j]
        if head1 == head2:
            acc.append(head2)
            acc.append(head1)
            i += 1
            j += 1
        elif head1 > head2:
            acc.append(head1)
            i += 1
        else:
            acc.append(head2)
            j += 1
    acc.extend(first[i:])
    acc.extend(second[j:])
    acc.reverse()
    return acc
