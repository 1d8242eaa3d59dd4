# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Hashable,
    Iterable,
    Iterator,
    Optional,
    Sequence,
    Tuple,
)

from .errors import *

#
# Label types.
#
# A LabelType names one kind of axis label and knows which Python values
# belong to it. Python has no size_t or fixed-capacity strings, so types
# that share a Python representation (INT/SIZE, CHAR/FSTRING) are told
# apart by their acceptance predicate rather than by isinstance alone.
#
# LabelTypes is the closed list of label types an AxisVariant can hold.
# Order matters for inference: the first type accepting every label wins.
#

Label = Hashable


def is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def is_size(x: Any) -> bool:
    return is_int(x) and x >= 0


def is_char(x: Any) -> bool:
    return isinstance(x, str) and len(x) == 1


def is_fstring(x: Any) -> bool:
    return isinstance(x, str) and len(x) <= FIXED_STRING_LENGTH


@dataclass(frozen=True)
class LabelType:
    name: str
    pytype: type
    accepts: Callable[[Any], bool] = field(compare=False)
    # integral label types can back a DefaultAxis
    integral: bool = False

    def __repr__(self) -> str:
        return self.name

    def accepts_all(self, labels: Iterable[Any]) -> bool:
        return all(self.accepts(x) for x in labels)

    def check(self, label: Any) -> Any:
        if not self.accepts(label):
            msg = f"label {label!r} is not of label type {self.name}"
            raise LabelTypeError(msg)
        return label


INT = LabelType("int", int, is_int, integral=True)
SIZE = LabelType("size", int, is_size, integral=True)
CHAR = LabelType("char", str, is_char)
FSTRING = LabelType(f"fstring<{FIXED_STRING_LENGTH}>", str, is_fstring)


class LabelTypes(Sequence[LabelType]):
    types: Tuple[LabelType, ...]

    def __init__(self, *types: LabelType):
        if len(types) == 0:
            raise ValueError("a label type list needs at least one label type")
        names = [t.name for t in types]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate label types in {names}")
        self.types = tuple(types)

    def __repr__(self) -> str:
        return f"LabelTypes{self.types}"

    def __len__(self) -> int:
        return len(self.types)

    def __getitem__(self, i):
        return self.types[i]

    def __iter__(self) -> Iterator[LabelType]:
        return iter(self.types)

    def __contains__(self, t) -> bool:
        return t in self.types

    def __eq__(self, other) -> bool:
        return isinstance(other, LabelTypes) and self.types == other.types

    def __hash__(self) -> int:
        return hash(self.types)

    # position of t in the list - the tag of its variant alternative
    def tag(self, t: LabelType) -> int:
        try:
            return self.types.index(t)
        except ValueError:
            raise LabelTypeError(f"label type {t} not in {self}") from None

    def infer(self, labels: Sequence[Any]) -> LabelType:
        if len(labels) == 0:
            return self.types[0]
        for t in self.types:
            if t.accepts_all(labels):
                return t
        sample = labels[0] if len(labels) < 2 else (labels[0], labels[-1])
        raise LabelTypeError(f"no label type in {self} accepts labels like {sample!r}")

    # label types accepting a single value, in list order
    def accepting(self, label: Any) -> Tuple[LabelType, ...]:
        return tuple(t for t in self.types if t.accepts(label))


DEFAULT_LABEL_TYPES = LabelTypes(INT, SIZE, CHAR, FSTRING)


def infer_label_type(
    labels: Sequence[Any], label_types: Optional[LabelTypes] = None
) -> LabelType:
    if label_types is None:
        label_types = DEFAULT_LABEL_TYPES
    return label_types.infer(labels)


def resolve_label_type(
    labels: Sequence[Any], label_type: Optional[LabelType]
) -> LabelType:
    if label_type is None:
        return infer_label_type(labels)
    for x in labels:
        label_type.check(x)
    return label_type


# a label type an axis can use as its integral default, e.g. for DefaultAxis
def integral_label_type(t: Optional[LabelType]) -> LabelType:
    t = INT if t is None else t
    if not t.integral:
        raise LabelTypeError(f"label type {t} is not integral")
    return t
