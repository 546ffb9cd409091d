"""Functions treating a list as a stack.

A stack is "last-in first-out": the last item pushed is the first one read.
The top of the stack is the first item of the list. None of these functions
modify the list they are given.

``top`` is O(1). ``pop`` and ``push`` build a new list, so both are O(n) in
the depth of the stack.

Typical usage example:

    ```python
    from structured import stack

    s = stack.push([5, 4, 3, 2, 1], 6)   # [6, 5, 4, 3, 2, 1]
    stack.top(s)                          # 6
    stack.pop(s)                          # (6, [5, 4, 3, 2, 1])
    stack.pop([], "empty")                # ("empty", [])
    ```
"""

from typing import Any, List, Sequence, Tuple


def top(stack: Sequence[Any], default: Any = None) -> Any:
    """Return the top of the stack, or ``default`` if it is empty."""
    if not stack:
        return default
    return stack[0]


def pop(stack: Sequence[Any], default: Any = None) -> Tuple[Any, List[Any]]:
    """Return the top of the stack and the stack without it.

    Args:
        stack: The stack, top first.
        default: Value returned in place of the top when the stack is empty.

    Returns:
        A (top, rest) pair; (default, []) for an empty stack.
    """
    if not stack:
        return default, []
    return stack[0], list(stack[1:])


def push(stack: Sequence[Any], value: Any) -> List[Any]:
    """Return the stack with ``value`` on top."""
    return [value, *stack]
