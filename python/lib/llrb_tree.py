#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
llrb_tree.py
------------

An ordered symbol table backed by a **left‑leaning red‑black** (LLRB) binary
search tree.  Red links encode the "glue" inside the 3‑nodes of a 2‑3 tree and
always lean left, so every root‑to‑leaf path crosses the same number of black
links and the height never exceeds ``2 * log2(n + 1)``.

Features
~~~~~~~~
* `tree.put(key, value)` / `tree[key] = value`   – insert / replace
* `tree.get(key)` – matching node (or ``None``), `tree[key]` – value (KeyError)
* `tree.delete(key)`, `tree.delete_min()`, `tree.delete_max()` – never raise
* `del tree[key]` – delete (KeyError if missing)
* order statistics: `min()`, `max()`, `floor()`, `ceiling()`, `rank()`, `select()`
* `size()` / `len(tree)`, `height()`
* pre/in/post‑order traversal, lazily, with an explicit stack or by recursion
* `is_bst()`, `is_size_consistent()`, `is_23_tree()`, `is_balanced()` and
  `validate()` – invariant diagnostics (useful for debugging)

Every node owns its two children outright; there are no parent pointers.  A
mutation recurses from the root to the affected position and rebuilds the path
on the way back, so each recursive call takes a subtree root and returns the
(possibly different) root of the rebuilt subtree.

Typical usage
~~~~~~~~~~~~~
>>> from llrb_tree import LeftLeaningRedBlackTree
>>> st = LeftLeaningRedBlackTree()
>>> for k in [50, 30, 70, 20, 40, 60, 80]:
...     st.put(k)
>>> st.delete(30)
True
>>> list(st)
[20, 40, 50, 60, 70, 80]
>>> st.floor(45).key, st.ceiling(45).key
(40, 50)
>>> st.rank(60), st.select(4).key
(3, 60)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import (
    Any,
    Callable,
    Generator,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
)

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
#  Run ``validate()`` after every public mutation (tests switch this on)
# ----------------------------------------------------------------------
CHECK_INVARIANTS = False

# ----------------------------------------------------------------------
#  Type variables (keys need a strict total order via ``<``)
# ----------------------------------------------------------------------
K = TypeVar("K")
V = TypeVar("V")

# ----------------------------------------------------------------------
#  Colour of the link from a node's parent to the node itself
# ----------------------------------------------------------------------
RED = True
BLACK = False


class TraversalOrder(Enum):
    PRE = "pre"
    IN = "in"
    POST = "post"


class Node(Generic[K, V]):
    """One key of the tree.  ``size`` counts the nodes of the subtree rooted here."""

    __slots__ = ("key", "value", "color", "left", "right", "size")

    def __init__(
        self,
        key: K,
        value: Optional[V] = None,
        color: bool = RED,
        left: Optional[Node[K, V]] = None,
        right: Optional[Node[K, V]] = None,
        size: int = 1,
    ) -> None:
        self.key = key
        self.value = value
        self.color = color
        self.left = left
        self.right = right
        self.size = size

    def __repr__(self) -> str:
        col = "R" if self.color == RED else "B"
        return f"<{col} {self.key!r}:{self.value!r} n={self.size}>"


# ----------------------------------------------------------------------
#  Structural primitives
# ----------------------------------------------------------------------
def is_red(node: Optional[Node[K, V]]) -> bool:
    """Absent links are black."""
    return node is not None and node.color == RED


def size_of(node: Optional[Node[K, V]]) -> int:
    return 0 if node is None else node.size


def _resize(node: Node[K, V]) -> None:
    node.size = size_of(node.left) + size_of(node.right) + 1


def rotate_left(node: Optional[Node[K, V]]) -> Optional[Node[K, V]]:
    """
    Turn the red right link of *node* into a red left link and return the new
    subtree root.  Returns *node* unchanged when its right link is not red.
    """
    if node is None or not is_red(node.right):
        return node
    top = node.right
    node.right = top.left
    top.left = node
    top.color = node.color
    node.color = RED
    top.size = node.size
    _resize(node)
    return top


def rotate_right(node: Optional[Node[K, V]]) -> Optional[Node[K, V]]:
    """Mirror of :func:`rotate_left`; requires a red left link."""
    if node is None or not is_red(node.left):
        return node
    top = node.left
    node.left = top.right
    top.right = node
    top.color = node.color
    node.color = RED
    top.size = node.size
    _resize(node)
    return top


def flip_colors(node: Optional[Node[K, V]]) -> None:
    """
    Toggle the colours of *node* and both its children.

    Only the two configurations that model a 4‑node split (black parent, two
    red children) or its inverse merge (red parent, two black children) are
    flipped; anything else, including a missing child, is left untouched.
    """
    if node is None or node.left is None or node.right is None:
        return
    split = not is_red(node) and is_red(node.left) and is_red(node.right)
    merge = is_red(node) and not is_red(node.left) and not is_red(node.right)
    if split or merge:
        node.color = not node.color
        node.left.color = not node.left.color
        node.right.color = not node.right.color


def balance(node: Optional[Node[K, V]]) -> Optional[Node[K, V]]:
    """
    Restore the local LLRB shape on the way back up from a recursive mutation
    and recompute ``size``.  The three steps must run in this order: each may
    set up the condition the next one tests for.
    """
    if node is None:
        return None
    if is_red(node.right):
        node = rotate_left(node)
    if is_red(node.left) and is_red(node.left.left):
        node = rotate_right(node)
    if is_red(node.left) and is_red(node.right):
        flip_colors(node)
    _resize(node)
    return node


def move_red_left(node: Optional[Node[K, V]]) -> Optional[Node[K, V]]:
    """
    Make ``node.left`` or one of its children red before descending left.

    Requires a red *node* whose left child and left‑left grandchild are both
    black; borrows a key from the right sibling when it is a 3‑node.
    """
    if node is None or node.left is None:
        return node
    if not (is_red(node) and not is_red(node.left) and not is_red(node.left.left)):
        return node
    flip_colors(node)
    if node.right is not None and is_red(node.right.left):
        node.right = rotate_right(node.right)
        node = rotate_left(node)
        flip_colors(node)
    return node


def move_red_right(node: Optional[Node[K, V]]) -> Optional[Node[K, V]]:
    """Mirror of :func:`move_red_left`, borrowing from the left sibling."""
    if node is None or node.right is None:
        return node
    if not (is_red(node) and not is_red(node.right) and not is_red(node.right.left)):
        return node
    flip_colors(node)
    if node.left is not None and is_red(node.left.left):
        node = rotate_right(node)
        flip_colors(node)
    return node


# ----------------------------------------------------------------------
#  Depth‑first visitation (nodes, lazily)
# ----------------------------------------------------------------------
def _preorder_stack(root: Optional[Node[K, V]]) -> Generator[Node[K, V], None, None]:
    stack: List[Node[K, V]] = []
    cur = root
    while stack or cur is not None:
        if cur is not None:
            yield cur
            stack.append(cur)
            cur = cur.left
        else:
            cur = stack.pop().right


def _inorder_stack(root: Optional[Node[K, V]]) -> Generator[Node[K, V], None, None]:
    stack: List[Node[K, V]] = []
    cur = root
    while stack or cur is not None:
        while cur is not None:
            stack.append(cur)
            cur = cur.left
        cur = stack.pop()
        yield cur
        cur = cur.right


def _postorder_stack(root: Optional[Node[K, V]]) -> Generator[Node[K, V], None, None]:
    stack: List[Node[K, V]] = []
    cur = root
    last: Optional[Node[K, V]] = None
    while stack or cur is not None:
        if cur is not None:
            stack.append(cur)
            cur = cur.left
            continue
        top = stack[-1]
        if top.right is not None and top.right is not last:
            cur = top.right
        else:
            yield top
            last = stack.pop()


def _preorder_recursive(node: Optional[Node[K, V]]) -> Generator[Node[K, V], None, None]:
    if node is None:
        return
    yield node
    yield from _preorder_recursive(node.left)
    yield from _preorder_recursive(node.right)


def _inorder_recursive(node: Optional[Node[K, V]]) -> Generator[Node[K, V], None, None]:
    if node is None:
        return
    yield from _inorder_recursive(node.left)
    yield node
    yield from _inorder_recursive(node.right)


def _postorder_recursive(node: Optional[Node[K, V]]) -> Generator[Node[K, V], None, None]:
    if node is None:
        return
    yield from _postorder_recursive(node.left)
    yield from _postorder_recursive(node.right)
    yield node


_WALKERS = {
    (TraversalOrder.PRE, False): _preorder_stack,
    (TraversalOrder.IN, False): _inorder_stack,
    (TraversalOrder.POST, False): _postorder_stack,
    (TraversalOrder.PRE, True): _preorder_recursive,
    (TraversalOrder.IN, True): _inorder_recursive,
    (TraversalOrder.POST, True): _postorder_recursive,
}


class LeftLeaningRedBlackTree(Generic[K, V]):
    """
    An ordered symbol table implemented with a left‑leaning red‑black tree.

    Besides the order‑statistics API the class mimics the built‑in ``dict``
    where appropriate (``__setitem__``, ``__getitem__``, ``__delitem__``,
    ``__contains__``, ``__len__``, ``__iter__``).  Keys are compared with
    ``<`` only; two keys are equal when neither is smaller.
    """

    __slots__ = ("_root", "_check_invariants")

    # ------------------------------------------------------------------
    #   Construction / basic container protocol
    # ------------------------------------------------------------------
    def __init__(
        self,
        items: Optional[Iterable[Tuple[K, V]]] = None,
        check_invariants: Optional[bool] = None,
    ) -> None:
        """
        Create an empty tree or optionally initialise it from an iterable of
        ``(key, value)`` pairs.

        Parameters
        ----------
        items : iterable of (key, value)   optional
            Each pair is inserted with ``put`` (O(n log n) overall).
        check_invariants : bool   optional
            Run ``validate()`` after every mutation.  ``None`` defers to the
            module level ``CHECK_INVARIANTS`` flag.
        """
        self._root: Optional[Node[K, V]] = None
        self._check_invariants = check_invariants

        if items is not None:
            for key, value in items:
                self.put(key, value)

    @property
    def root(self) -> Optional[Node[K, V]]:
        return self._root

    def size(self) -> int:
        return size_of(self._root)

    def is_empty(self) -> bool:
        return self._root is None

    def height(self) -> int:
        """Number of nodes on the longest root‑to‑leaf path (0 when empty)."""

        def height_of(node: Optional[Node[K, V]]) -> int:
            if node is None:
                return 0
            return 1 + max(height_of(node.left), height_of(node.right))

        return height_of(self._root)

    def clear(self) -> None:
        self._root = None
        self._after_mutation("clear")

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return self._root is not None

    def __contains__(self, key: object) -> bool:  # type: ignore[override]
        return self.get(key) is not None  # type: ignore[arg-type]

    def __getitem__(self, key: K) -> V:
        node = self.get(key)
        if node is None:
            raise KeyError(key)
        return node.value  # type: ignore[return-value]

    def __setitem__(self, key: K, value: V) -> None:
        """Insert *key* with *value* or replace the existing value."""
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def __iter__(self) -> Generator[K, None, None]:
        """Yield keys in ascending order (in‑order traversal)."""
        return self.iter_keys()

    # ------------------------------------------------------------------
    #   Convenience collection‑like view methods
    # ------------------------------------------------------------------
    def keys(self) -> List[K]:
        """Return a list of all keys in sorted order."""
        return list(self)

    def values(self) -> List[Optional[V]]:
        """Return a list of all values in key order."""
        return [node.value for node in _inorder_stack(self._root)]

    def items(self) -> List[Tuple[K, Optional[V]]]:
        """Return a list of ``(key, value)`` pairs in sorted order."""
        return [(node.key, node.value) for node in _inorder_stack(self._root)]

    # ------------------------------------------------------------------
    #   Lookup
    # ------------------------------------------------------------------
    def get(self, key: K) -> Optional[Node[K, V]]:
        """Return the node that holds *key*, or ``None``."""
        cur = self._root
        while cur is not None:
            if key < cur.key:
                cur = cur.left
            elif cur.key < key:
                cur = cur.right
            else:
                return cur
        return None

    def contains(self, key: K) -> bool:
        return self.get(key) is not None

    # ------------------------------------------------------------------
    #   Insertion
    # ------------------------------------------------------------------
    def put(self, key: K, value: Optional[V] = None) -> None:
        """Insert *key*, or replace the value stored under an equal key."""
        before = self.size()
        self._root = self._put(self._root, key, value)
        self._root.color = BLACK
        if self.size() > before:
            logger.debug("inserted key %r (size=%d)", key, before + 1)
        else:
            logger.debug("replaced value for key %r", key)
        self._after_mutation("put")

    def _put(self, node: Optional[Node[K, V]], key: K, value: Optional[V]) -> Node[K, V]:
        if node is None:
            return Node(key, value, RED)
        if key < node.key:
            node.left = self._put(node.left, key, value)
        elif node.key < key:
            node.right = self._put(node.right, key, value)
        else:
            node.value = value
        return balance(node)  # type: ignore[return-value]

    # ------------------------------------------------------------------
    #   Deletion
    # ------------------------------------------------------------------
    # Each public entry point colours a root with two black children red, so
    # that the node the recursion enters is always red or has a red left
    # child.  The root goes back to black once the recursion unwinds.
    def _redden_root(self) -> None:
        if not is_red(self._root.left) and not is_red(self._root.right):
            self._root.color = RED

    def _blacken_root(self) -> None:
        if self._root is not None:
            self._root.color = BLACK

    def delete_min(self) -> bool:
        """Remove the smallest key.  Returns ``False`` on an empty tree."""
        if self._root is None:
            logger.debug("delete_min on empty tree ignored")
            return False
        key = self._min_node(self._root).key
        self._redden_root()
        self._root = self._delete_min(self._root)
        self._blacken_root()
        logger.debug("deleted key %r (size=%d)", key, self.size())
        self._after_mutation("delete_min")
        return True

    @staticmethod
    def _delete_min(node: Node[K, V]) -> Optional[Node[K, V]]:
        if node.left is None:
            return node.right
        if not is_red(node.left) and not is_red(node.left.left):
            node = move_red_left(node)
        node.left = LeftLeaningRedBlackTree._delete_min(node.left)
        return balance(node)

    def delete_max(self) -> bool:
        """Remove the largest key.  Returns ``False`` on an empty tree."""
        if self._root is None:
            logger.debug("delete_max on empty tree ignored")
            return False
        key = self._max_node(self._root).key
        self._redden_root()
        self._root = self._delete_max(self._root)
        self._blacken_root()
        logger.debug("deleted key %r (size=%d)", key, self.size())
        self._after_mutation("delete_max")
        return True

    @staticmethod
    def _delete_max(node: Node[K, V]) -> Optional[Node[K, V]]:
        if is_red(node.left):
            node = rotate_right(node)
        if node.right is None:
            return node.left
        if not is_red(node.right) and not is_red(node.right.left):
            node = move_red_right(node)
        node.right = LeftLeaningRedBlackTree._delete_max(node.right)
        return balance(node)

    def delete(self, key: K) -> bool:
        """
        Remove *key* if present.  Returns ``False`` (leaving the tree as it
        was) when the key is missing.
        """
        if not self.contains(key):
            logger.debug("delete of missing key %r ignored", key)
            return False
        self._redden_root()
        self._root = self._delete(self._root, key)
        self._blacken_root()
        logger.debug("deleted key %r (size=%d)", key, self.size())
        self._after_mutation("delete")
        return True

    def _delete(self, node: Optional[Node[K, V]], key: K) -> Optional[Node[K, V]]:
        if node is None:
            return None

        if key < node.key:
            if node.left is not None and not is_red(node.left) and not is_red(node.left.left):
                node = move_red_left(node)
            node.left = self._delete(node.left, key)
        else:
            if is_red(node.left):
                node = rotate_right(node)
            if not node.key < key and node.right is None:
                return None
            if node.right is not None and not is_red(node.right) and not is_red(node.right.left):
                node = move_red_right(node)
            # the rotations above may have changed which key sits at ``node``
            if not node.key < key:
                successor = self._min_node(node.right)
                node.key, node.value = successor.key, successor.value
                node.right = self._delete_min(node.right)
            else:
                node.right = self._delete(node.right, key)

        return balance(node)

    # ------------------------------------------------------------------
    #   Minimum / maximum
    # ------------------------------------------------------------------
    @staticmethod
    def _min_node(node: Optional[Node[K, V]]) -> Optional[Node[K, V]]:
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node

    @staticmethod
    def _max_node(node: Optional[Node[K, V]]) -> Optional[Node[K, V]]:
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node

    def min(self) -> Optional[Node[K, V]]:
        return self._min_node(self._root)

    def max(self) -> Optional[Node[K, V]]:
        return self._max_node(self._root)

    def min_key(self) -> K:
        """Return the smallest key stored in the tree."""
        node = self.min()
        if node is None:
            raise ValueError("Tree is empty")
        return node.key

    def max_key(self) -> K:
        """Return the largest key stored in the tree."""
        node = self.max()
        if node is None:
            raise ValueError("Tree is empty")
        return node.key

    # ------------------------------------------------------------------
    #   Floor / ceiling
    # ------------------------------------------------------------------
    def floor(self, key: K) -> Optional[Node[K, V]]:
        """Node with the greatest key ``<= key``, or ``None``."""

        def floor_in(node: Optional[Node[K, V]]) -> Optional[Node[K, V]]:
            if node is None:
                return None
            if key < node.key:
                return floor_in(node.left)
            if node.key < key:
                found = floor_in(node.right)
                return node if found is None else found
            return node

        return floor_in(self._root)

    def ceiling(self, key: K) -> Optional[Node[K, V]]:
        """Node with the smallest key ``>= key``, or ``None``."""

        def ceiling_in(node: Optional[Node[K, V]]) -> Optional[Node[K, V]]:
            if node is None:
                return None
            if node.key < key:
                return ceiling_in(node.right)
            if key < node.key:
                found = ceiling_in(node.left)
                return node if found is None else found
            return node

        return ceiling_in(self._root)

    # ------------------------------------------------------------------
    #   Rank / select
    # ------------------------------------------------------------------
    def rank(self, key: K) -> int:
        """Number of keys strictly smaller than *key* (present or not)."""

        def rank_in(node: Optional[Node[K, V]]) -> int:
            if node is None:
                return 0
            if key < node.key:
                return rank_in(node.left)
            if node.key < key:
                return 1 + size_of(node.left) + rank_in(node.right)
            return size_of(node.left)

        return rank_in(self._root)

    def select(self, k: int) -> Optional[Node[K, V]]:
        """Node at 1‑indexed in‑order position *k*, or ``None`` if out of range."""

        def select_in(node: Optional[Node[K, V]], k: int) -> Optional[Node[K, V]]:
            if node is None:
                return None
            here = size_of(node.left) + 1
            if here > k:
                return select_in(node.left, k)
            if here < k:
                return select_in(node.right, k - here)
            return node

        if k < 1 or k > self.size():
            return None
        return select_in(self._root, k)

    # ------------------------------------------------------------------
    #   Traversal
    # ------------------------------------------------------------------
    def iter_keys(
        self,
        order: TraversalOrder = TraversalOrder.IN,
        recursive: bool = False,
    ) -> Generator[K, None, None]:
        """
        Lazily yield every key in the requested depth‑first *order*.

        Each call starts a fresh walk.  ``recursive=False`` keeps its own
        stack; ``recursive=True`` walks via nested generators instead.
        """
        walk = _WALKERS[(TraversalOrder(order), recursive)]
        return (node.key for node in walk(self._root))

    def traverse(
        self,
        visitor: Callable[[K], Any],
        order: TraversalOrder = TraversalOrder.IN,
        recursive: bool = False,
    ) -> None:
        """Call *visitor* once per key in the requested order."""
        for key in self.iter_keys(order, recursive):
            visitor(key)

    # ------------------------------------------------------------------
    #   Invariant diagnostics
    # ------------------------------------------------------------------
    def is_bst(self) -> bool:
        """Every key lies strictly between the bounds set by its ancestors."""

        def check(
            node: Optional[Node[K, V]],
            low: Optional[Node[K, V]],
            high: Optional[Node[K, V]],
        ) -> bool:
            if node is None:
                return True
            if low is not None and not low.key < node.key:
                return False
            if high is not None and not node.key < high.key:
                return False
            return check(node.left, low, node) and check(node.right, node, high)

        return check(self._root, None, None)

    def is_size_consistent(self) -> bool:
        def check(node: Optional[Node[K, V]]) -> bool:
            if node is None:
                return True
            if node.size != size_of(node.left) + size_of(node.right) + 1:
                return False
            return check(node.left) and check(node.right)

        return check(self._root)

    def is_23_tree(self) -> bool:
        """No red right links, and no red node (root aside) with a red left child."""

        def check(node: Optional[Node[K, V]]) -> bool:
            if node is None:
                return True
            if is_red(node.right):
                return False
            if node is not self._root and is_red(node) and is_red(node.left):
                return False
            return check(node.left) and check(node.right)

        return check(self._root)

    def is_balanced(self) -> bool:
        """Every path from the root to an absent link has the same black count."""

        def check(node: Optional[Node[K, V]], black: int) -> bool:
            if node is None:
                return black == 0
            if not is_red(node):
                black -= 1
            return check(node.left, black) and check(node.right, black)

        black = 0
        cur = self._root
        while cur is not None:
            if not is_red(cur):
                black += 1
            cur = cur.left
        return check(self._root, black)

    def validate(self) -> None:
        """
        Verify that the tree satisfies all LLRB invariants.
        Raises ``AssertionError`` with a descriptive message if something is broken.
        """
        assert not is_red(self._root), "Root is not black"
        assert self.is_bst(), "BST order violated"
        assert self.is_size_consistent(), "Subtree sizes are inconsistent"
        assert self.is_23_tree(), "Not a 2-3 tree (red right link or two reds in a row)"
        assert self.is_balanced(), "Black-height mismatch"

    def _after_mutation(self, operation: str) -> None:
        enabled = self._check_invariants
        if enabled is None:
            enabled = CHECK_INVARIANTS
        if not enabled:
            return
        try:
            self.validate()
        except AssertionError:
            logger.error("invariant check failed after %s", operation)
            raise

    # ------------------------------------------------------------------
    #   Convenience string representation (for debugging)
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"LeftLeaningRedBlackTree({{{items}}})"
