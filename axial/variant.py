# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
from dataclasses import dataclass
from typing import TypeVar

from .axis import *

#
# AxisVariant
#
# A closed choice over concrete axes: exactly one Axis or DefaultAxis is
# active, and its label type must belong to the variant's LabelTypes.
# The alternative is identified by (label type, default-or-not); the
# variant never tries to convert between alternatives on its own.
#
# Every operation goes through visit(), which hands the active axis to
# a function. merge/intersect additionally re-type each argument variant
# to our label type through an ArgumentAdaptor, which raises before
# anything is written if the argument's label type differs from ours.
#

T = TypeVar("T")


#
# the view of a merge/intersect argument a concrete axis gets to see:
# labels and sortedness only, checked against the receiver's label type
#
@dataclass(frozen=True)
class ArgumentAdaptor:
    axis: AxisBase
    label_type: LabelType

    def labels(self) -> LabelList:
        return self.axis.labels().get(self.label_type)

    def is_sorted(self) -> bool:
        return self.axis.is_sorted()


class AxisVariant:
    def __init__(
        self,
        axis: Union[AxisBase, "AxisVariant"] = None,
        label_types: Optional[LabelTypes] = None,
    ):
        if isinstance(axis, AxisVariant):
            if label_types is None:
                label_types = axis.label_types
            axis = axis.axis.copy()
        elif axis is None:
            axis = Axis()
        elif not isinstance(axis, AxisBase):
            msg = f"axis variant holds an Axis or DefaultAxis, got {type(axis).__name__}"
            raise TypeError(msg)
        self.label_types = DEFAULT_LABEL_TYPES if label_types is None else label_types
        # raises if the label type isn't one of our alternatives
        self.label_types.tag(axis.label_type)
        self._axis = axis

    def __repr__(self) -> str:
        return f"AxisVariant({self._axis!r})"

    def __str__(self) -> str:
        return str(self._axis)

    # the active alternative
    @property
    def axis(self) -> AxisBase:
        return self._axis

    @property
    def label_type(self) -> LabelType:
        return self._axis.label_type

    # (label type tag, is default) - identifies the active alternative
    def alternative(self) -> Tuple[int, bool]:
        return self.label_types.tag(self.label_type), self.is_default()

    def is_default(self) -> bool:
        return isinstance(self._axis, DefaultAxis)

    def visit(self, f: Callable[[AxisBase], T]) -> T:
        return f(self._axis)

    # labels of the active axis; a label type, if given, must match it
    def labels(self, label_type: Optional[LabelType] = None) -> LabelList:
        labels = self.visit(lambda a: a.labels())
        return labels if label_type is None else labels.get(label_type)

    def __len__(self) -> int:
        return self.visit(len)

    def size(self) -> int:
        return len(self)

    def empty(self) -> bool:
        return self.visit(lambda a: a.empty())

    def is_sorted(self) -> bool:
        return self.visit(lambda a: a.is_sorted())

    # keys are checked against the active label type first
    def check_key(self, key: Label) -> Label:
        if not self.label_type.accepts(key):
            msg = f"key {key!r} is not a label of type {self.label_type}"
            raise LabelTypeError(msg)
        return key

    def contains(self, key: Label) -> bool:
        self.check_key(key)
        return self.visit(lambda a: a.contains(key))

    def __contains__(self, key) -> bool:
        return self.contains(key)

    def position(self, key: Label) -> int:
        self.check_key(key)
        return self.visit(lambda a: a.position(key))

    def __getitem__(self, key: Label) -> int:
        return self.position(key)

    def label(self, i: int) -> Label:
        return self.visit(lambda a: a.label(i))

    def find(self, key: Label) -> Optional[Tuple[Label, int]]:
        self.check_key(key)
        return self.visit(lambda a: a.find(key))

    def __iter__(self) -> Iterator[Tuple[Label, int]]:
        return self.visit(iter)

    def __reversed__(self) -> Iterator[Tuple[Label, int]]:
        return self.visit(reversed)

    def filter(self, f: LabelPredicate, size: Optional[int] = None) -> "AxisVariant":
        filtered = self.visit(lambda a: a.filter(f, size))
        return AxisVariant(filtered, self.label_types)

    def adapt(
        self, other: Union["AxisVariant", AxisBase], label_type: Optional[LabelType] = None
    ) -> ArgumentAdaptor:
        label_type = self.label_type if label_type is None else label_type
        a = other.axis if isinstance(other, AxisVariant) else other
        if a.label_type != label_type:
            msg = f"label type mismatch: {a.label_type} argument for {label_type} axis"
            raise LabelTypeError(msg)
        return ArgumentAdaptor(a, label_type)

    # merge/intersect arguments, all checked against the label type the
    # active axis expects of them (an untyped empty axis takes the first's)
    def adapt_all(self, axes) -> List[ArgumentAdaptor]:
        raw = [a.axis if isinstance(a, AxisVariant) else a for a in axes]
        label_type = self.visit(lambda a: a.operand_label_type(raw))
        self.label_types.tag(label_type)
        return [self.adapt(a, label_type) for a in raw]

    def merge(self, *axes: "AxisVariant") -> bool:
        args = self.adapt_all(axes)
        return self.visit(lambda a: a.merge(*args))

    def intersect(self, *axes: "AxisVariant") -> bool:
        args = self.adapt_all(axes)
        return self.visit(lambda a: a.intersect(*args))

    # same labels, active alternative forced to a plain Axis
    def as_xaxis(self) -> "AxisVariant":
        return AxisVariant(self.visit(lambda a: a.as_axis()), self.label_types)

    def copy(self) -> "AxisVariant":
        return AxisVariant(self._axis.copy(), self.label_types)

    __copy__ = copy

    def tolist(self) -> List[Label]:
        return self.visit(lambda a: a.tolist())

    def __eq__(self, other) -> bool:
        if not isinstance(other, AxisVariant):
            return NotImplemented
        return (
            self.label_type == other.label_type
            and self.is_default() == other.is_default()
            and self._axis == other._axis
        )

    __hash__ = None  # type: ignore


# promote axis descriptions (see axis()) and concrete axes to variants
def axis_variant(
    x: Union[AxisDesc, AxisVariant],
    label_types: Optional[LabelTypes] = None,
    **kwargs,
) -> AxisVariant:
    if isinstance(x, AxisVariant):
        return x
    return AxisVariant(axis(x, **kwargs), label_types)
