"""Disjoint-set forest over a fixed universe of integer indices."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np


class InvalidArgument(ValueError):
    """Raised when a forest is constructed with a negative size."""


class OutOfRange(IndexError):
    """Raised when an index falls outside ``[0, size - 1]``."""


@dataclass
class DisjointSetForest:
    """Union-find structure using union-by-size and two-pass path compression.

    Every element owns one signed slot. A negative slot marks a root and holds
    the negated size of its tree; a non-negative slot is the parent index.
    """

    size: int
    slots: List[int] = field(init=False, repr=False)
    set_count: int = field(init=False)

    def __post_init__(self) -> None:
        if self.size < 0:
            raise InvalidArgument(f"size must be non-negative, got {self.size}")
        self.slots = [-1] * self.size
        self.set_count = self.size

    def __len__(self) -> int:
        return self.size

    def _validate(self, index: int) -> None:
        if index < 0 or index >= self.size:
            raise OutOfRange(f"index {index} is not valid, choose from 0 to {self.size - 1}")

    def parent(self, index: int) -> int:
        """Return the parent of `index`, or the negated set size if it is a root."""

        self._validate(index)
        return self.slots[index]

    def find(self, index: int) -> int:
        """Return the root of the set containing `index`, compressing the path to it."""

        self._validate(index)
        slots = self.slots
        if slots[index] < 0:
            return index

        root = index
        hops = 0
        while slots[root] >= 0:
            root = slots[root]
            hops += 1

        node = index
        for _ in range(hops):
            parent = slots[node]
            slots[node] = root
            node = parent
        return root

    def size_of(self, index: int) -> int:
        """Return the size of the set containing `index` without touching the tree."""

        self._validate(index)
        slots = self.slots
        root = index
        while slots[root] >= 0:
            root = slots[root]
        return -slots[root]

    def connected(self, left: int, right: int) -> bool:
        self._validate(left)
        self._validate(right)
        return self.find(left) == self.find(right)

    def union(self, left: int, right: int) -> None:
        """Merge the sets containing `left` and `right`.

        The smaller tree is attached under the root of the larger one. On equal
        sizes the root of `left` goes under the root of `right`.
        """

        self._validate(left)
        self._validate(right)
        if self.connected(left, right):
            return

        root_left = self.find(left)
        root_right = self.find(right)
        size_left = self.size_of(left)
        size_right = self.size_of(right)
        if size_left <= size_right:
            self.slots[root_left] = root_right
            self.slots[root_right] = -(size_left + size_right)
        else:
            self.slots[root_right] = root_left
            self.slots[root_left] = -(size_left + size_right)
        self.set_count -= 1

    def roots(self) -> List[int]:
        return [index for index, slot in enumerate(self.slots) if slot < 0]

    def groups(self) -> Dict[int, List[int]]:
        """Return a mapping from each root to the indices of its set."""

        groups: Dict[int, List[int]] = defaultdict(list)
        for index in range(self.size):
            groups[self.find(index)].append(index)
        return dict(groups)

    def labels(self) -> np.ndarray:
        return np.fromiter((self.find(index) for index in range(self.size)), dtype=np.int64, count=self.size)


__all__ = ["DisjointSetForest", "InvalidArgument", "OutOfRange"]
