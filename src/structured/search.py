"""Binary search over an ascending, fixed-size sequence.

The sequence of inspected indexes is not midpoint bisection. The first index
is ``floor(n / 2)``. When the value at index ``i`` is too large the next index is
``floor(i / 2)``, which falls back towards index 0 rather than halving the
remaining range; when it is too small the next index is
``ceil((i + n) / 2)``. Reaching index 0 or index n - 1 without a match
ends the search.

Because of this step function the search is not O(log n) on every input,
and some targets that are present can be missed when the steps skip past
them before reaching an end. Results are kept identical to that visiting order
rather than to a textbook binary search.

Typical usage example:

    ```python
    from structured.search import binary_search

    binary_search((), 1)                      # -1
    binary_search((1, 2, 3, 4, 5, 6), 3)      # 2
    binary_search((1, 2, 3, 4, 5, 6, 7), 7)   # 6
    ```
"""

import logging
from typing import Any, Sequence, Set

logger = logging.getLogger(__name__)

NOT_FOUND = -1


def binary_search(items: Sequence[Any], target: Any) -> int:
    """Return the index of ``target`` in the ascending sequence, or -1.

    Args:
        items: An ascending, random-access sequence such as a tuple.
        target: The value to look for.

    Returns:
        The index that matched, or -1 if the search ends
        without a match (including for an empty sequence).
    """
    size = len(items)
    if size == 0:
        return NOT_FOUND
    index = size // 2
    visited: Set[int] = set()
    while index not in visited:
        visited.add(index)
        value = items[index]
        if target == value:
            return index
        if index == 0 or index == size - 1:
            return NOT_FOUND
        if value > target:
            index = index // 2
        elif value < target:
            index = -(-(index + size) // 2)
        else:
            return NOT_FOUND
    logger.debug("Index %d revisited while searching for %r; not found", index, target)
    return NOT_FOUND
