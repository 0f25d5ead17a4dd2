"""Mapping between external labels and dense forest indices."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import ftfy
from unidecode import unidecode


_MULTI_SPACE_PATTERN = re.compile(r"\s+")


def normalize_label(text: object) -> str:
    """Return a folded representation of `text` so spelling variants share an index."""

    raw = str(text if text is not None else "").strip()
    if not raw:
        return ""

    fixed = ftfy.fix_text(raw)
    ascii_friendly = unidecode(fixed).lower()
    collapsed = _MULTI_SPACE_PATTERN.sub(" ", ascii_friendly)
    return collapsed.strip()


@dataclass
class LabelIndex:
    """Assign indices ``0..n-1`` to labels in the order they are first seen."""

    normalize: bool = False
    labels: List[str] = field(default_factory=list)
    _positions: Dict[str, int] = field(default_factory=dict, repr=False)

    @classmethod
    def from_values(cls, values: Iterable[object], normalize: bool = False) -> "LabelIndex":
        index = cls(normalize=normalize)
        for value in values:
            index.add(value)
        return index

    def _key(self, label: object) -> str:
        if self.normalize:
            return normalize_label(label)
        return str(label)

    def add(self, label: object) -> int:
        key = self._key(label)
        position = self._positions.get(key)
        if position is None:
            position = len(self.labels)
            self._positions[key] = position
            self.labels.append(key)
        return position

    def index_of(self, label: object) -> int:
        return self._positions[self._key(label)]

    def label_of(self, index: int) -> str:
        return self.labels[index]

    def __contains__(self, label: object) -> bool:
        return self._key(label) in self._positions

    def __len__(self) -> int:
        return len(self.labels)


__all__ = ["LabelIndex", "normalize_label"]
