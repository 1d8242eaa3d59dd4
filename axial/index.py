# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from bisect import bisect_left
from typing import Dict, Optional

from .sequence import *

#
# label -> position indexes.
#
# An Index is a secondary structure over an axis's label list: the list
# is authoritative for order, the index only answers "where is label x".
# build() always rebuilds from scratch; axes call it after every
# structural change.
#


class Index:
    kind: IndexKind

    def build(self, labels: Sequence[Label]):
        raise NotImplementedError

    def get(self, label: Label) -> Optional[int]:
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError

    def __contains__(self, label) -> bool:
        return self.get(label) is not None


class HashIndex(Index):
    kind = IndexKind.HASH

    def __init__(self, labels: Sequence[Label] = ()):
        self.map: Dict[Label, int] = {}
        self.build(labels)

    def __repr__(self) -> str:
        return f"HashIndex({self.map})"

    def build(self, labels: Sequence[Label]):
        self.map = {x: i for i, x in enumerate(labels)}

    def get(self, label: Label) -> Optional[int]:
        try:
            return self.map.get(label)
        except TypeError:
            # unhashable probe
            return None

    def __len__(self) -> int:
        return len(self.map)


#
# SortedIndex keeps labels in ascending order alongside their positions
# and bisects. Lookups are O(log n) and only need labels to be ordered,
# which all configured label types are.
#
class SortedIndex(Index):
    kind = IndexKind.SORTED

    def __init__(self, labels: Sequence[Label] = ()):
        self.keys: List[Label] = []
        self.positions: List[int] = []
        self.build(labels)

    def __repr__(self) -> str:
        return f"SortedIndex({list(zip(self.keys, self.positions))})"

    def build(self, labels: Sequence[Label]):
        pairs = sorted(((x, i) for i, x in enumerate(labels)), key=lambda p: p[0])
        self.keys = [x for x, _ in pairs]
        self.positions = [i for _, i in pairs]

    def get(self, label: Label) -> Optional[int]:
        try:
            i = bisect_left(self.keys, label)
        except TypeError:
            # probe not comparable with our labels
            return None
        if i < len(self.keys) and self.keys[i] == label:
            return self.positions[i]
        return None

    def __len__(self) -> int:
        return len(self.keys)


INDEX_KINDS = {
    IndexKind.HASH: HashIndex,
    IndexKind.SORTED: SortedIndex,
}


def make_index(kind: IndexKind, labels: Sequence[Label] = ()) -> Index:
    try:
        cls = INDEX_KINDS[kind]
    except KeyError:
        raise ValueError(f"unknown index kind {kind!r}") from None
    return cls(labels)
