"""Functions treating a list as a queue.

A queue is "first-in first-out". Items are read from the front of the list
and added at its back. None of these functions modify the list they are
given.

``peek`` is O(1) and hands back the very queue it was given. ``dequeue`` and
``enqueue`` build a new list, so both are O(n) in the length of the queue; a
Python list has no shared tail to return in constant time.

Typical usage example:

    ```python
    from structured import queue

    q = queue.enqueue([1, 2, 3], 4)   # [1, 2, 3, 4]
    queue.peek(q)                     # (1, [1, 2, 3, 4])
    queue.dequeue(q)                  # (1, [2, 3, 4])
    queue.dequeue([])                 # (None, [])
    ```
"""

from typing import Any, List, Sequence, Tuple


def peek(queue: Sequence[Any]) -> Tuple[Any, Sequence[Any]]:
    """Return the next item to be dequeued and the queue itself.

    Returns:
        A (next, queue) pair where ``queue`` is the argument, not a copy;
        (None, queue) for an empty queue.
    """
    if not queue:
        return None, queue
    return queue[0], queue


def dequeue(queue: Sequence[Any]) -> Tuple[Any, List[Any]]:
    """Return the dequeued item and a new list without it.

    Returns:
        A (next, rest) pair; (None, []) for an empty queue.
    """
    if not queue:
        return None, []
    return queue[0], list(queue[1:])


def enqueue(queue: Sequence[Any], value: Any) -> List[Any]:
    """Return a new list with ``value`` added at the back."""
    return [*queue, value]
