"""Immutable rose tree with flattening, membership and child edit operations.

This module provides a Tree where each node holds an optional value, an
ordered tuple of child trees and a read-only metadata mapping. Links only run
from a parent to its children: given a tree one can reach its descendants,
but a node never knows its parent.

Trees are values. Edits such as ``insert_child`` and ``remove_child`` return
a new tree and leave the receiver untouched, and equality is structural
(value, children and meta, all compared recursively).

The Tree class supports:
- Construction from nested lists (``Tree.new``)
- Flattening to nested lists (``values``) and iteration over all values
- Membership, counting and reduction over the flattened values
- Leaf collection
- Appending and removing direct children
- Depth-first and breadth-first node search, edge listing
- Parenthesized string rendering/parsing and Graphviz visualization

Typical usage example:

    ```python
    from structured import Tree

    tree = Tree.new([1, [2, 3, [4, 5], 6], 7])

    tree.values()       # [1, [2, 3, [4, 5], 6], 7]
    list(tree)          # [1, 2, 3, 4, 5, 6, 7]
    tree.leaf_values()  # [3, 5, 6, 7]
    5 in tree           # True

    bigger = tree.insert_child(8)
    bigger.values()     # [1, [2, 3, [4, 5], 6], 7, 8]
    tree.values()       # unchanged
    ```
"""

from __future__ import annotations

import functools
import logging
from collections import deque
from collections.abc import Callable, Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Deque, List, Tuple, Union

import graphviz
from pyparsing import ParseException, nested_expr

from structured.config import TRAVERSALS, get_settings
from structured.exceptions import TreeParseError, ValidationError

logger = logging.getLogger(__name__)


def _resolve_traversal(traversal: str | None) -> str:
    if traversal is None:
        return get_settings().traversal
    if traversal not in TRAVERSALS:
        raise ValidationError(
            f"Unknown traversal '{traversal}'",
            context={"traversal": traversal, "allowed": list(TRAVERSALS)},
        )
    return traversal


class Tree:
    """A rose tree node with a value, ordered children and metadata.

    Each Tree instance holds:
    - An optional value of any type (None means "no value")
    - An ordered tuple of child Tree nodes, owned by this node
    - A read-only metadata mapping

    A tree with no value and no children is the empty tree. A tree with no
    children is a leaf, whether or not it has a value.

    Attributes:
        value: The data held by this node, or None.
        children: Tuple of child Tree nodes (empty for a leaf).
        meta: Read-only mapping of metadata for this node.

    Example:
        ```python
        tree = Tree("Dijkstra")
        tree.value     # "Dijkstra"
        tree.children  # ()
        tree.meta      # mappingproxy({})

        employee = Tree("Employee", meta={"key": "emp"})
        manager = Tree("Manager", [employee])
        manager.remove_child(employee)  # Tree("Manager")
        ```

    Note:
        Trees define ``__eq__`` structurally and are therefore unhashable.
        ``len(tree)`` is the number of flattened values, so the empty tree is
        falsy.
    """

    def __init__(
        self,
        value: Any = None,
        children: Iterable[Tree] = (),
        meta: Mapping[str, Any] | None = None,
    ):
        """Initialize a tree node.

        Args:
            value: The data held by this node. None means the node has no value.
            children: Child trees, in order.
            meta: Optional metadata; it is copied, so later changes to the
                given mapping do not affect the tree.
        """
        self._value = value
        self._children: Tuple[Tree, ...] = tuple(children)
        self._meta: Mapping[str, Any] = MappingProxyType(dict(meta) if meta else {})

    @classmethod
    def new(cls, data: Union[Any, List]) -> Tree:
        """Build a tree from a scalar or a nested list.

        A scalar (anything that is not a list) becomes a leaf holding it. An
        empty list becomes the empty tree. For a non-empty list the first
        element becomes the value, as is, and each remaining element is built
        into a child: nested lists become subtrees and scalars become leaves.

        Args:
            data: A scalar or a nested list.

        Returns:
            The constructed tree.

        Example:
            ```python
            Tree.new(1)            # Tree(1)
            Tree.new([1, 2])       # Tree(1, [Tree(2)])
            Tree.new([1, [2, 3]])  # Tree(1, [Tree(2, [Tree(3)])])
            ```
        """
        built: List[Tree] = []
        pending: List[Tuple[Any, bool]] = [(data, False)]
        while pending:
            item, expanded = pending.pop()
            if not isinstance(item, list):
                built.append(cls(item))
            elif not item:
                built.append(cls())
            elif expanded:
                start = len(built) - (len(item) - 1)
                children = built[start:]
                del built[start:]
                built.append(cls(item[0], children))
            else:
                pending.append((item, True))
                pending.extend((sub, False) for sub in reversed(item[1:]))
        return built[0]

    def __repr__(self) -> str:
        return self._fold(_node_repr)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        pending: Deque[Tuple[Tree, Tree]] = deque([(self, other)])
        while pending:
            mine, theirs = pending.popleft()
            if mine is theirs:
                continue
            if (
                mine._value != theirs._value
                or len(mine._children) != len(theirs._children)
                or mine._meta != theirs._meta
            ):
                return False
            pending.extend(zip(mine._children, theirs._children))
        return True

    __hash__ = None  # type: ignore[assignment]

    @property
    def value(self) -> Any:
        """The data held by this node, or None if it has no value."""
        return self._value

    @property
    def children(self) -> Tuple[Tree, ...]:
        """This node's children, in insertion order."""
        return self._children

    @property
    def meta(self) -> Mapping[str, Any]:
        """This node's metadata as a read-only mapping."""
        return self._meta

    @property
    def num_children(self) -> int:
        """Number of direct children."""
        return len(self._children)

    def get_meta(self, key: str, missing: Any = None) -> Any:
        """Get a metadata value.

        Args:
            key: The metadata key.
            missing: Value returned when the key is absent.

        Returns:
            The metadata value, or ``missing``.
        """
        return self._meta.get(key, missing)

    def with_meta(self, **kwargs: Any) -> Tree:
        """Return a copy of this tree with its metadata updated by ``kwargs``."""
        return Tree(self._value, self._children, {**self._meta, **kwargs})

    def is_empty(self) -> bool:
        """True if this tree has neither a value nor children."""
        return self._value is None and not self._children

    def is_leaf(self) -> bool:
        """True if this tree has no children, regardless of its value."""
        return not self._children

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the fully flattened values, depth first.

        Every node contributes its value except that an internal node (one
        with children) without a value contributes nothing, and a childless
        root without a value yields nothing at all. This is the sequence
        obtained by fully unnesting ``values()``, so a value that is itself a
        list contributes its items rather than the list.

        Example:
            ```python
            list(Tree.new([[1, 2], 3]))   # [1, 2, 3]
            ```
        """
        if not self._children:
            if self._value is not None:
                yield from _unnest(self._value)
            return
        pending: Deque[Tree] = deque([self])
        while pending:
            node = pending.popleft()
            if node._children:
                if node._value is not None:
                    yield from _unnest(node._value)
                pending.extendleft(reversed(node._children))
            else:
                yield from _unnest(node._value)

    def contains(self, target: Any) -> bool:
        """Check whether any node in this tree holds ``target``.

        Nodes are visited depth first with children in order, stopping at the
        first match.

        Args:
            target: The value to look for, compared with ``==``.

        Returns:
            True if this node or any descendant has a value equal to target.
        """
        pending: Deque[Tree] = deque([self])
        while pending:
            node = pending.popleft()
            if node._value == target:
                return True
            pending.extendleft(reversed(node._children))
        return False

    __contains__ = contains

    def count(self) -> int:
        """Number of values in the fully flattened tree; 0 for the empty tree.

        Example:
            ```python
            Tree().count()                            # 0
            Tree.new([1, 2, 3, 4, [5, 6, 7]]).count()  # 7
            ```
        """
        return sum(1 for _ in self)

    __len__ = count

    def reduce(self, initial: Any, combine: Callable[[Any, Any], Any]) -> Any:
        """Fold ``combine(accumulator, value)`` over the flattened values.

        Args:
            initial: The starting accumulator.
            combine: Function of (accumulator, value) returning the next
                accumulator.

        Returns:
            The final accumulator; ``initial`` for the empty tree.
        """
        return functools.reduce(combine, self, initial)

    def values(self) -> List[Any]:
        """Return the tree as a nested list.

        The first element is the root value and each following element stands
        for a child: a leaf child contributes its bare value and a child with
        children contributes a nested list built the same way. A node without
        a value contributes only its children. This is the inverse of
        ``Tree.new``.

        Returns:
            The nested list representation; [] for the empty tree.

        Example:
            ```python
            tree = Tree("Heroes of the Storm", [
                Tree("Damage", [Tree("Zeratul"), Tree("Lunara")]),
                Tree("Support", [Tree("Rehgar")]),
                Tree("Specialist"),
            ])
            tree.values()
            # ["Heroes of the Storm",
            #  ["Damage", "Zeratul", "Lunara"],
            #  ["Support", "Rehgar"],
            #  "Specialist"]
            ```
        """
        if not self._children:
            return [] if self._value is None else [self._value]
        return self._fold(_grouped_values)

    def _fold(self, combine: Callable[[Tree, List[Any], int], Any]) -> Any:
        """Combine per-node results bottom up, without recursion.

        ``combine(node, child_results, depth)`` is called once for each node,
        after it has been called for all of that node's children.
        """
        results: List[Any] = []
        pending: List[Tuple[Tree, int, bool]] = [(self, 0, False)]
        while pending:
            node, depth, expanded = pending.pop()
            if expanded or not node._children:
                start = len(results) - len(node._children)
                child_results = results[start:]
                del results[start:]
                results.append(combine(node, child_results, depth))
            else:
                pending.append((node, depth, True))
                pending.extend((child, depth + 1, False) for child in reversed(node._children))
        return results[0]

    def leaves(self, accept_node_fn: Callable[[Tree], bool] | None = None) -> List[Tree]:
        """Collect the leaf nodes of this tree, depth first, left to right.

        A tree without children is its own only leaf.

        Args:
            accept_node_fn: Optional filter; only leaves for which it returns
                True are collected.

        Returns:
            List of leaf Tree nodes.

        Example:
            ```python
            parent = Tree("Michael Jordan", [Tree("John Stockton")])
            parent.leaves()  # [Tree("John Stockton")]
            ```
        """
        found: List[Tree] = []
        pending: Deque[Tree] = deque([self])
        while pending:
            node = pending.popleft()
            if node._children:
                pending.extendleft(reversed(node._children))
            elif accept_node_fn is None or accept_node_fn(node):
                found.append(node)
        return found

    def leaf_values(self) -> List[Any]:
        """Values of ``leaves()``, in the same order."""
        return [leaf.value for leaf in self.leaves()]

    def insert_child(self, child: Union[Tree, Any]) -> Tree:
        """Return a new tree with ``child`` appended as the last child.

        Args:
            child: A Tree, appended as is, or any other value, which is wrapped
                in a leaf first.

        Returns:
            The new tree. This tree is unchanged.

        Example:
            ```python
            Tree().insert_child(5)             # Tree(None, [Tree(5)])
            Tree(26).insert_child(Tree(5))     # Tree(26, [Tree(5)])
            ```
        """
        if not isinstance(child, Tree):
            child = Tree(child)
        return Tree(self._value, self._children + (child,), self._meta)

    def remove_child(self, child: Union[Tree, Any]) -> Tree:
        """Return a new tree without the first matching direct child.

        A Tree argument removes the first child structurally equal to it (see
        ``remove_child_by_identity``); any other argument removes the first
        child whose value equals it (see ``remove_child_by_value``).

        Args:
            child: The child tree or child value to remove.

        Returns:
            The new tree, or this same tree if nothing matched.
        """
        if isinstance(child, Tree):
            return self.remove_child_by_identity(child)
        return self.remove_child_by_value(child)

    def remove_child_by_identity(self, child: Tree) -> Tree:
        """Remove the first direct child equal to ``child`` in value, children and meta.

        Example:
            ```python
            child = Tree("Employee", meta={"key": "emp"})
            parent = Tree("Manager", [child])
            parent.remove_child_by_identity(child)              # Tree("Manager")
            parent.remove_child_by_identity(Tree("Employee"))   # parent (meta differs)
            ```
        """
        for idx, existing in enumerate(self._children):
            if existing == child:
                return self._without_child(idx)
        logger.debug("No child of %r equals %r; tree unchanged", self._value, child)
        return self

    def remove_child_by_value(self, value: Any) -> Tree:
        """Remove the first direct child whose value equals ``value``.

        Only direct children are considered; deeper descendants are never
        removed.
        """
        for idx, existing in enumerate(self._children):
            if existing._value == value:
                return self._without_child(idx)
        logger.debug("No child of %r has value %r; tree unchanged", self._value, value)
        return self

    def _without_child(self, idx: int) -> Tree:
        return Tree(self._value, self._children[:idx] + self._children[idx + 1 :], self._meta)

    def find_nodes(
        self,
        accept_node_fn: Callable[[Tree], bool],
        traversal: str | None = None,
        include_self: bool = True,
        only_first: bool = False,
        highest_only: bool = False,
    ) -> List[Tree]:
        """Find nodes matching a condition using depth-first or breadth-first search.

        Args:
            accept_node_fn: Function that takes a Tree node and returns True to
                include it in results.
            traversal: Either 'dfs' or 'bfs'. Defaults to the configured
                traversal ("dfs" unless changed).
            include_self: If True, considers this node in the search. If False,
                starts with this node's children.
            only_first: If True, stops after the first match.
            highest_only: If True, doesn't search below matched nodes.

        Returns:
            List of Tree nodes that matched, in visiting order.

        Raises:
            ValidationError: If traversal is not 'dfs' or 'bfs'.

        Example:
            ```python
            tree = build_tree_from_string("(root apple banana (parent apricot))")

            found = tree.find_nodes(lambda n: "a" in str(n.value))
            # [apple, banana, parent, apricot]

            first = tree.find_nodes(lambda n: "a" in str(n.value), only_first=True)
            # [apple]
            ```
        """
        traversal = _resolve_traversal(traversal)
        queue: Deque[Tree] = deque()
        found: List[Tree] = []
        if include_self:
            queue.append(self)
        else:
            queue.extend(self._children)
        while queue:
            item = queue.popleft()
            if accept_node_fn(item):
                found.append(item)
                if only_first:
                    break
                elif highest_only:
                    continue
            if item._children:
                if traversal == "dfs":
                    queue.extendleft(reversed(item._children))
                else:
                    queue.extend(item._children)
        return found

    def get_edges(
        self,
        traversal: str = "bfs",
        include_self: bool = True,
        as_data: bool = True,
    ) -> List[Tuple[Union[Tree, Any], Union[Tree, Any]]]:
        """Get all parent-child edges below this node.

        Args:
            traversal: Either 'dfs' or 'bfs'. Defaults to 'bfs'.
            include_self: If False, edges from this node to its children are
                left out.
            as_data: If True, returns values in the tuples; otherwise Tree nodes.

        Returns:
            List of (parent, child) tuples.

        Raises:
            ValidationError: If traversal is not 'dfs' or 'bfs'.

        Example:
            ```python
            tree = build_tree_from_string("(root (a b) c)")
            tree.get_edges()
            # [("root", "a"), ("root", "c"), ("a", "b")]
            ```
        """
        traversal = _resolve_traversal(traversal)
        queue: Deque[Tuple[Tree, Tree]] = deque((self, child) for child in self._children)
        result: List[Tuple[Union[Tree, Any], Union[Tree, Any]]] = []
        while queue:
            parent, item = queue.popleft()
            if parent is not self or include_self:
                result.append((parent.value, item.value) if as_data else (parent, item))
            pairs = [(item, child) for child in item._children]
            if traversal == "dfs":
                queue.extendleft(reversed(pairs))
            else:
                queue.extend(pairs)
        return result

    def as_string(self, delim: str | None = None, multiline: bool | None = None) -> str:
        """Get a parenthesized string representation of this tree.

        A leaf renders as ``str(value)``; a node with children renders as its
        value followed by its children, in parentheses. The result can be read
        back with ``build_tree_from_string``, which yields string values only.

        The round trip is lossy in two cases. A valueless node with children
        renders as ``(None ...)`` and parses back with the value ``"None"``.
        A value whose string form contains whitespace or parentheses is split
        into several tokens when parsed.

        Args:
            delim: Delimiter between siblings, repeated per level when
                multiline. Defaults to the configured ``string_delim``.
            multiline: If True, puts each child on its own indented line.
                Defaults to the configured ``multiline``.

        Returns:
            String representation of this tree and its descendants.

        Example:
            ```python
            tree = Tree.new(["root", ["child1", "leaf1"], "child2"])

            tree.as_string()
            # "(root (child1 leaf1) child2)"

            print(tree.as_string(delim="  ", multiline=True))
            # (root
            #   (child1
            #     leaf1)
            #   child2)
            ```
        """
        settings = get_settings()
        if delim is None:
            delim = settings.string_delim
        if multiline is None:
            multiline = settings.multiline
        btwn = "\n" if multiline else ""

        def render(node: Tree, rendered: List[str], depth: int) -> str:
            if not node._children:
                return str(node._value)
            d = (depth + 1 if multiline else 1) * delim
            return "".join(["(", str(node._value), *(btwn + d + r for r in rendered), ")"])

        return self._fold(render)

    def build_dot(
        self, node_name_fn: Callable[[Tree], str] | None = None, **kwargs: Any
    ) -> graphviz.Digraph:
        """Build a Graphviz Digraph for visualizing this tree.

        Nodes are named ``N_000``, ``N_001``, ... in breadth-first order, so a
        subtree that appears at several positions is drawn once per position.

        Args:
            node_name_fn: Optional function producing each node's label. If
                None, uses ``str(node.value)``.
            **kwargs: Keyword arguments passed to ``graphviz.Digraph``. The
                configured ``dot_graph_attr``/``dot_node_attr`` are used when
                ``graph_attr``/``node_attr`` are not given.

        Returns:
            A graphviz.Digraph object representing this tree.

        Example:
            ```python
            dot = Tree.new(["root", "a", "b"]).build_dot(name="MyTree", format="png")
            print(dot.source)
            dot.render("/tmp/tree")  # requires the Graphviz binaries
            ```
        """
        if node_name_fn is None:
            def node_name_fn(n: Tree) -> str:
                return str(n.value)
        settings = get_settings()
        if "graph_attr" not in kwargs and settings.dot_graph_attr:
            kwargs["graph_attr"] = dict(settings.dot_graph_attr)
        if "node_attr" not in kwargs and settings.dot_node_attr:
            kwargs["node_attr"] = dict(settings.dot_node_attr)
        dot = graphviz.Digraph(**kwargs)
        dot.node("N_000", node_name_fn(self))
        next_id = 1
        queue: Deque[Tuple[Tree, int]] = deque([(self, 0)])
        while queue:
            node, idx = queue.popleft()
            for child in node._children:
                dot.node(f"N_{next_id:03}", node_name_fn(child))
                dot.edge(f"N_{idx:03}", f"N_{next_id:03}")
                queue.append((child, next_id))
                next_id += 1
        return dot


def _unnest(value: Any) -> Iterator[Any]:
    if not isinstance(value, list):
        yield value
        return
    pending: Deque[Any] = deque(value)
    while pending:
        item = pending.popleft()
        if isinstance(item, list):
            pending.extendleft(reversed(item))
        else:
            yield item


def _grouped_values(node: Tree, grouped: List[Any], depth: int) -> Any:
    if not node.children:
        return node.value
    return grouped if node.value is None else [node.value] + grouped


def _node_repr(node: Tree, child_reprs: List[str], depth: int) -> str:
    parts = [repr(node.value)]
    if child_reprs:
        parts.append(f"[{', '.join(child_reprs)}]")
    if node.meta:
        parts.append(f"meta={dict(node.meta)!r}")
    return f"Tree({', '.join(parts)})"


def build_tree_from_list(data: Union[Any, List]) -> Tree:
    """Build a Tree from a scalar or nested list representation.

    Same as ``Tree.new``: the first element of a list is the value and the
    remaining elements become children, recursively.

    Args:
        data: The tree data as nested lists. Format: [value, child1, child2, ...]
            where children can be single values or nested lists.

    Returns:
        The root Tree node with all descendants constructed.

    Example:
        ```python
        tree = build_tree_from_list(["root", ["child1", "leaf1", "leaf2"], "child2"])
        tree.value                       # "root"
        tree.children[0].children[0].value  # "leaf1"
        ```
    """
    return Tree.new(data)


new_tree = build_tree_from_list


def build_tree_from_string(from_string: str) -> Tree:
    """Build a Tree from a parenthesized string representation.

    Parses a string such as produced by ``Tree.as_string()``. All values in
    the result are strings. A string that does not start with "(" becomes a
    single leaf.

    Args:
        from_string: The tree string, e.g. "(root (child1 leaf1 leaf2) child2)".

    Returns:
        The reconstructed Tree.

    Raises:
        TreeParseError: If the string is not a single balanced expression.

    Example:
        ```python
        tree = build_tree_from_string("(root (child1 leaf1 leaf2) child2)")
        tree.value                # "root"
        tree.num_children         # 2
        tree.children[0].value    # "child1"
        ```
    """
    if not from_string.strip().startswith("("):
        return Tree(from_string)
    try:
        data = nested_expr().parse_string(from_string, parse_all=True)
    except ParseException as e:
        raise TreeParseError(
            f"Cannot parse tree string: {e}",
            context={"text": from_string, "column": e.col},
        ) from e
    return Tree.new(data.as_list()[0])
