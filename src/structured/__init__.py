"""Classic data structures and algorithms as pure, immutable-update functions.

The structured package provides a general-purpose rose tree together with a
few small algorithms over linear sequences. Nothing in it mutates its input:
every edit returns a new value.

## Modules

### Tree - Rose trees
The Tree class is an N-ary tree whose nodes hold an optional value, ordered
children and a metadata mapping:
- Construction from nested lists and flattening back to nested lists
- Iteration, membership, counting and reduction over all values
- Leaf collection
- Appending and removing direct children (by value or by structure)
- Depth-first and breadth-first search, edge listing
- Parenthesized string rendering/parsing and Graphviz visualization

### sorting - List sorting
`quicksort` (first-element pivot, three-way partition) and `mergesort`.

### stack / queue - Lists as LIFO and FIFO collections
`top`, `pop`, `push` and `peek`, `dequeue`, `enqueue` over plain lists.

### search - Binary search
`binary_search` over an ascending tuple, returning -1 when not found.

## Quick Examples

### Using Tree
```python
from structured import Tree

tree = Tree.new(["root", ["a", "b", "c"], "d"])
tree.values()       # ["root", ["a", "b", "c"], "d"]
tree.leaf_values()  # ["b", "c", "d"]
tree = tree.insert_child("e").remove_child("d")
tree.as_string()    # "(root (a b c) e)"
```

### Using the sequence utilities
```python
from structured import binary_search, mergesort, queue, stack

mergesort([3, 1, 2])                 # [1, 2, 3]
stack.pop(stack.push([1], 2))        # (2, [1])
queue.dequeue(queue.enqueue([1], 2)) # (1, [2])
binary_search((1, 2, 3, 4, 5, 6), 3) # 2
```

## Configuration

Defaults for traversal order and rendering can be loaded from a YAML/JSON
file or a dict, with ``STRUCTURED_<FIELD>`` environment overrides; see
`structured.config`.
"""

from structured import queue, stack
from structured.config import StructuredSettings, get_settings, load_settings, set_settings
from structured.exceptions import (
    ConfigurationError,
    NotFoundError,
    StructuredError,
    TreeParseError,
    ValidationError,
)
from structured.search import binary_search
from structured.sorting import mergesort, quicksort
from structured.tree import Tree, build_tree_from_list, build_tree_from_string, new_tree

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "NotFoundError",
    "StructuredError",
    "StructuredSettings",
    "Tree",
    "TreeParseError",
    "ValidationError",
    "binary_search",
    "build_tree_from_list",
    "build_tree_from_string",
    "get_settings",
    "load_settings",
    "mergesort",
    "new_tree",
    "queue",
    "quicksort",
    "set_settings",
    "stack",
]
