# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from typing import List, Union, overload

from .merge import *

#
# LabelList is the read-only, type-tagged view every axis returns from
# labels(). It wraps one of the concrete label containers axes use -
# a list for Axis, a range for DefaultAxis - without copying it, and
# presents them through one Sequence interface.
#
# The view borrows its source: mutation of the owning axis (merge,
# intersect) is visible through it, and it must not be relied on once
# the axis is gone. Use tolist() for an owned copy.
#

LabelStorage = Union[List[Label], range]


class LabelList(Sequence[Label]):
    __slots__ = ("_source", "_label_type")

    def __init__(self, source: LabelStorage, label_type: LabelType):
        if not isinstance(source, (list, range)):
            msg = f"label storage must be a list or range, got {type(source).__name__}"
            raise TypeError(msg)
        self._source = source
        self._label_type = label_type

    @property
    def label_type(self) -> LabelType:
        return self._label_type

    # True if this view presents a virtual 0..n-1 sequence (no storage)
    def is_range(self) -> bool:
        return isinstance(self._source, range)

    def __repr__(self) -> str:
        return f"LabelList({self.tolist()!r}, {self._label_type})"

    def __len__(self) -> int:
        return len(self._source)

    @overload
    def __getitem__(self, i: int) -> Label: ...

    @overload
    def __getitem__(self, i: slice) -> List[Label]: ...

    def __getitem__(self, i):
        if isinstance(i, slice):
            return list(self._source[i])
        return self._source[i]

    def __iter__(self) -> Iterator[Label]:
        return iter(self._source)

    def __reversed__(self) -> Iterator[Label]:
        return reversed(self._source)

    def __contains__(self, x) -> bool:
        return x in self._source

    # equality with any sequence holding the same labels in the same order
    def __eq__(self, other) -> bool:
        if isinstance(other, LabelList):
            other = other._source
        if not isinstance(other, (list, tuple, range)):
            return NotImplemented
        if len(other) != len(self):
            return False
        return all(x == y for x, y in zip(self._source, other))

    __hash__ = None  # type: ignore

    # typed access: the view re-checked as holding labels of type t
    def get(self, t: LabelType) -> "LabelList":
        if t != self._label_type:
            msg = f"requested labels of type {t}, axis holds {self._label_type}"
            raise LabelTypeError(msg)
        return self

    def tolist(self) -> List[Label]:
        return list(self._source)
