"""
Support trees for fast divisor search (the filter trees of 4ti2).

Every stored monomial is placed at the end of the path labeled by its
support, in increasing index order. A monomial a can only divide a query q
if supp(a) is a subset of supp(q), so a search only descends into children
labeled by indices where q is positive.
"""

from typing import Any, Dict, Generator, List, Optional, Tuple

import numpy as np

from ipgbs.core.matrix_types import IntVector


class _Node:
    __slots__ = ("children", "entries")

    def __init__(self):
        self.children: Dict[int, "_Node"] = {}
        self.entries: List[Tuple[IntVector, Any]] = []


class SupportTree:
    """
    Index of (key, item) pairs where key is a non-negative integer vector.

    Items are compared by identity for removal and skipping, so the same key
    may be stored for several items.

    Example:
        >>> tree = SupportTree()
        >>> tree.insert("a", np.array([1, 0, 2]))
        >>> tree.find_divisor(np.array([1, 1, 3]))
        'a'
        >>> tree.find_divisor(np.array([0, 1, 3])) is None
        True
    """

    def __init__(self):
        self.root = _Node()
        self.size = 0

    def __len__(self) -> int:
        return self.size

    def insert(self, item: Any, key: IntVector) -> None:
        key = np.array(key, dtype=np.int64)
        node = self.root
        for i in np.flatnonzero(key > 0):
            node = node.children.setdefault(int(i), _Node())
        node.entries.append((key, item))
        self.size += 1

    def remove(self, item: Any, key: IntVector) -> bool:
        """
        Remove item stored under key.

        Returns:
            True iff the item was found and removed
        """
        path = [self.root]
        node = self.root
        for i in np.flatnonzero(np.asarray(key) > 0):
            node = node.children.get(int(i))
            if node is None:
                return False
            path.append(node)
        for pos, (_, stored) in enumerate(node.entries):
            if stored is item:
                del node.entries[pos]
                self.size -= 1
                self._prune(path, key)
                return True
        return False

    def _prune(self, path: List[_Node], key: IntVector) -> None:
        labels = [int(i) for i in np.flatnonzero(np.asarray(key) > 0)]
        for depth in range(len(path) - 1, 0, -1):
            node = path[depth]
            if node.entries or node.children:
                break
            del path[depth - 1].children[labels[depth - 1]]

    def divisors(self, query: IntVector, skip: Optional[Any] = None) -> Generator[Any, None, None]:
        """
        Yield every stored item whose key divides query (key <= query).

        Args:
            query: Non-negative integer vector
            skip: Item to leave out of the results (by identity)
        """
        stack = [self.root]
        while stack:
            node = stack.pop()
            for key, item in node.entries:
                if item is not skip and np.all(key <= query):
                    yield item
            for i, child in node.children.items():
                if query[i] > 0:
                    stack.append(child)

    def find_divisor(self, query: IntVector, skip: Optional[Any] = None) -> Optional[Any]:
        """First item whose key divides query, or None."""
        return next(self.divisors(query, skip=skip), None)
