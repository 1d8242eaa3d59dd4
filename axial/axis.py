# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
import logging
from typing import Callable

from .index import *

logger = logging.getLogger(__name__)

#
# Axis interface and implementations, plus the axis() builder.
#
# An axis is a bijection between a sequence of unique labels and the
# dense positions 0..n-1 along one dimension. The label sequence is
# authoritative for order (position == index into it).
#
# Code structure follows the usual split: method skeletons with the
# common checks and trivial cases live in AxisBase, nontrivial
# post-check implementations in the subclasses. Axis is the general
# representation (label list + index). DefaultAxis is the compressed
# one for an unlabeled dimension, labels 0..n-1 with no storage.
#

# a predicate over labels, as taken by filter()
LabelPredicate = Callable[[Label], bool]

# anything that can take part in merge/intersect as an argument: concrete
# axes, and AxisVariant's argument adaptors
#   labels() -> Sequence[Label], is_sorted() -> bool, label_type


class AxisBase:
    label_type: LabelType

    def labels(self) -> LabelList:
        raise NotImplementedError

    def __len__(self) -> int:
        return len(self.labels())

    def size(self) -> int:
        return len(self)

    def empty(self) -> bool:
        return len(self) == 0

    def is_sorted(self) -> bool:
        raise NotImplementedError

    # labels of the wrong type are never contained, no error here
    def contains(self, label: Label) -> bool:
        if not self.label_type.accepts(label):
            return False
        return self.contains_impl(label)

    def contains_impl(self, label: Label) -> bool:
        raise NotImplementedError

    def __contains__(self, label) -> bool:
        return self.contains(label)

    # position of label, KeyNotFoundError if absent
    def position(self, label: Label) -> int:
        if not self.label_type.accepts(label):
            raise KeyNotFoundError(self.not_found_msg(label), label)
        return self.position_impl(label)

    def position_impl(self, label: Label) -> int:
        raise NotImplementedError

    def __getitem__(self, label: Label) -> int:
        return self.position(label)

    def not_found_msg(self, label: Label) -> str:
        return f"label {label!r} not found in {self.short_repr()}"

    # label at position i (negative i wraps)
    def label(self, i: int) -> Label:
        return self.labels()[self.check_index(i)]

    # (label, position) if present, else None
    def find(self, label: Label) -> Optional[Tuple[Label, int]]:
        if not self.contains(label):
            return None
        return label, self.position(label)

    # (label, position) pairs in label sequence order
    def __iter__(self) -> Iterator[Tuple[Label, int]]:
        for i, x in enumerate(self.labels()):
            yield x, i

    def __reversed__(self) -> Iterator[Tuple[Label, int]]:
        n = len(self)
        for i, x in enumerate(reversed(self.labels())):
            yield x, n - 1 - i

    # new Axis holding the labels satisfying f, in our order.
    # size, if given, is the exact number of labels expected to pass.
    def filter(self, f: LabelPredicate, size: Optional[int] = None) -> "Axis":
        if size is not None and size < 0:
            raise ValueError(f"filter: size {size} < 0")
        return self.filter_impl(f, size)

    def filter_impl(self, f: LabelPredicate, size: Optional[int]) -> "Axis":
        raise NotImplementedError

    def filter_labels(self, f: LabelPredicate, size: Optional[int]) -> List[Label]:
        if size is None:
            return [x for x in self.labels() if f(x)]
        out: List[Label] = [None] * size
        n = 0
        for x in self.labels():
            if f(x):
                if n == size:
                    raise ValueError(f"filter: more than {size} labels passed")
                out[n] = x
                n += 1
        if n != size:
            raise ValueError(f"filter: {n} labels passed, expected {size}")
        return out

    # set union with the labels of axes, in place.
    # returns True iff we already held the union.
    def merge(self, *axes) -> bool:
        self.check_operands("merge", axes)
        if len(axes) == 0:
            return True
        return self.merge_impl(axes)

    def merge_impl(self, axes) -> bool:
        raise NotImplementedError

    # set intersection with the labels of axes, in place.
    # returns True iff we already equaled the intersection.
    def intersect(self, *axes) -> bool:
        self.check_operands("intersect", axes)
        if len(axes) == 0:
            return True
        return self.intersect_impl(axes)

    def intersect_impl(self, axes) -> bool:
        raise NotImplementedError

    # the label type merge/intersect arguments must have
    def operand_label_type(self, axes) -> LabelType:
        return self.label_type

    # label type given at construction or implied by labels, None if neither
    def explicit_label_type(self) -> Optional[LabelType]:
        return self.label_type

    # all checks happen here, before any mutation
    def check_operands(self, op: str, axes):
        expected = self.operand_label_type(axes)
        for i, a in enumerate(axes):
            if a.label_type != expected:
                msg = f"{op}: argument {i} has label type {a.label_type}, expected {expected}"
                raise LabelTypeError(msg)

    # plain (mutable) Axis with our labels
    def as_axis(self) -> "Axis":
        raise NotImplementedError

    def check_index(self, i: int) -> int:
        n = len(self)
        if i < 0:
            i += n
            if i < 0:
                raise IndexError(f"{i - n} + len(self) {n} < 0")
            return i
        if i >= n:
            raise IndexError(f"{i} >= len(self) {n}")
        return i

    def tolist(self) -> List[Label]:
        return self.labels().tolist()

    # equality mod representation: same labels in the same order
    def __eq__(self, other) -> bool:
        if not isinstance(other, AxisBase):
            return NotImplemented
        return self.labels() == other.labels()

    __hash__ = None  # type: ignore

    def short_repr(self) -> str:
        return f"{type(self).__name__} of {len(self)} {self.label_type} labels"

    def __str__(self) -> str:
        return f"({', '.join(str(x) for x in self.labels())})"


#
# Axis is the ground (uncompressed) representation: an owned label list,
# a label -> position index rebuilt after every structural change, and
# a sortedness flag.
#
# The flag is computed by a linear scan at construction unless the
# caller declares it. It picks the merge/intersect algorithm: sorted
# operands use comparison merges, anything else falls back to the
# positional algorithms, after which the axis is flagged unsorted for
# good.
#


class Axis(AxisBase):
    def __init__(
        self,
        labels: Iterable[Label] = (),
        label_type: Optional[LabelType] = None,
        is_sorted: Optional[bool] = None,
        index: IndexKind = DEFAULT_INDEX,
    ):
        if isinstance(labels, AxisBase):
            if label_type is None:
                label_type = labels.explicit_label_type()
            labels = labels.labels()
        self._labels: List[Label] = list(labels)
        self._typed = label_type is not None or len(self._labels) > 0
        self.label_type = resolve_label_type(self._labels, label_type)
        if is_sorted is None:
            is_sorted = is_nondecreasing(self._labels)
        self._sorted = bool(is_sorted)
        self._index = make_index(index)
        self.populate_index()

    # labels start, start + step, ... up to stop (exclusive).
    # ints or single characters.
    @staticmethod
    def from_range(
        start: Union[int, str],
        stop: Union[int, str],
        step: int = 1,
        label_type: Optional[LabelType] = None,
        index: IndexKind = DEFAULT_INDEX,
    ) -> "Axis":
        if step == 0:
            raise ValueError("from_range: step must be != 0")
        if isinstance(start, str) or isinstance(stop, str):
            if not (is_char(start) and is_char(stop)):
                raise ValueError(f"from_range: expected two characters, got {start!r}, {stop!r}")
            labels: List[Label] = [chr(c) for c in range(ord(start), ord(stop), step)]
            if label_type is None:
                label_type = CHAR
        else:
            labels = list(range(start, stop, step))
        return Axis(labels, label_type, is_sorted=step > 0, index=index)

    def __repr__(self) -> str:
        return f"Axis({self._labels!r}, {self.label_type})"

    def labels(self) -> LabelList:
        return LabelList(self._labels, self.label_type)

    def __len__(self) -> int:
        return len(self._labels)

    def is_sorted(self) -> bool:
        return self._sorted

    def explicit_label_type(self) -> Optional[LabelType]:
        return self.label_type if self._typed else None

    # an empty axis of no explicit label type takes its first argument's
    def operand_label_type(self, axes) -> LabelType:
        if not self._typed and len(axes) > 0:
            return axes[0].label_type
        return self.label_type

    def adopt_label_type(self, axes):
        self.label_type = self.operand_label_type(axes)
        self._typed = True

    @property
    def index_kind(self) -> IndexKind:
        return self._index.kind

    def contains_impl(self, label: Label) -> bool:
        return label in self._index

    def position_impl(self, label: Label) -> int:
        i = self._index.get(label)
        if i is None:
            raise KeyNotFoundError(self.not_found_msg(label), label)
        return i

    def label(self, i: int) -> Label:
        return self._labels[self.check_index(i)]

    def filter_impl(self, f: LabelPredicate, size: Optional[int]) -> "Axis":
        labels = self.filter_labels(f, size)
        # a subsequence of a sorted sequence is sorted
        return Axis(labels, self.explicit_label_type(), is_sorted=self._sorted, index=self.index_kind)

    def merge_impl(self, axes) -> bool:
        res = True
        if self.empty():
            self.adopt_label_type(axes)
            first, axes = axes[0], axes[1:]
            self._labels[:] = first.labels()
            self._sorted = first.is_sorted()
            res = len(self._labels) == 0
        if len(axes) > 0:
            others = [a.labels() for a in axes]
            if self._sorted and all(a.is_sorted() for a in axes):
                res = merge_to(self._labels, *others) and res
            else:
                logger.debug("unsorted merge of %s with %d axes", self.short_repr(), len(axes))
                res = merge_unsorted_to(self._labels, *others) and res
                self._sorted = False
        if not res:
            self.populate_index()
        return res

    def intersect_impl(self, axes) -> bool:
        if self.empty():
            self.adopt_label_type(axes)
            return True
        others = [a.labels() for a in axes]
        if self._sorted and all(a.is_sorted() for a in axes):
            res = intersect_to(self._labels, *others)
        else:
            logger.debug("unsorted intersect of %s with %d axes", self.short_repr(), len(axes))
            res = intersect_unsorted_to(self._labels, *others)
        if not res:
            self.populate_index()
        return res

    def populate_index(self):
        self._index.build(self._labels)

    def as_axis(self) -> "Axis":
        return self.copy()

    def copy(self) -> "Axis":
        return Axis(self._labels, self.explicit_label_type(), is_sorted=self._sorted, index=self.index_kind)

    __copy__ = copy


#
# DefaultAxis models labels 0..n-1 of an integral label type. Nothing is
# stored but the size: membership is a range check and position == label.
#
# Merge and intersect are refused. A default axis *is* its size, so any
# structural change has to go through as_axis() first.
#


class DefaultAxis(AxisBase):
    def __init__(self, size: int = 0, label_type: Optional[LabelType] = None):
        if not is_int(size) or size < 0:
            raise ValueError(f"default axis size must be an int >= 0, got {size!r}")
        self.label_type = integral_label_type(label_type)
        self._size = size

    def __repr__(self) -> str:
        return f"DefaultAxis({self._size}, {self.label_type})"

    def labels(self) -> LabelList:
        return LabelList(range(self._size), self.label_type)

    def __len__(self) -> int:
        return self._size

    def is_sorted(self) -> bool:
        return True

    def contains_impl(self, label: Label) -> bool:
        return 0 <= label < self._size

    def position_impl(self, label: Label) -> int:
        if not self.contains_impl(label):
            msg = f"label {label} out of range for default axis of size {self._size}"
            raise KeyNotFoundError(msg, label)
        return label

    def label(self, i: int) -> Label:
        return self.check_index(i)

    def filter_impl(self, f: LabelPredicate, size: Optional[int]) -> Axis:
        return Axis(self.filter_labels(f, size), self.label_type, is_sorted=True)

    def merge(self, *axes) -> bool:
        raise UnsupportedOperationError(
            "merge is not supported on a default axis, convert it with as_axis() first"
        )

    def intersect(self, *axes) -> bool:
        raise UnsupportedOperationError(
            "intersect is not supported on a default axis, convert it with as_axis() first"
        )

    def as_axis(self) -> Axis:
        return Axis(range(self._size), self.label_type, is_sorted=True)

    def copy(self) -> "DefaultAxis":
        return DefaultAxis(self._size, self.label_type)

    __copy__ = copy


#
# builders
#

# axis() promotes AxisDesc to an axis
AxisDesc = Union[
    int,  # DefaultAxis(n)
    range,  # Axis from range, sorted iff step > 0
    Iterable[Label],  # Axis(labels)
    AxisBase,
]


def axis(
    x: AxisDesc,
    stop: Optional[Union[int, str]] = None,
    step: int = 1,
    label_type: Optional[LabelType] = None,
    index: IndexKind = DEFAULT_INDEX,
) -> AxisBase:
    # axis -> axis
    if isinstance(x, AxisBase):
        return x

    # start, stop[, step] -> Axis over the range
    if stop is not None:
        return Axis.from_range(x, stop, step, label_type, index)

    # int -> DefaultAxis of that size
    if is_int(x):
        return DefaultAxis(x, label_type)

    # range -> Axis, sortedness known without a scan
    if isinstance(x, range):
        return Axis(x, label_type, is_sorted=x.step > 0, index=index)

    # str would iterate as characters, which is never what's meant
    if isinstance(x, str):
        raise ValueError(f"can't promote to axis: {x!r}")

    if isinstance(x, Iterable):
        return Axis(x, label_type, index=index)

    raise ValueError(f"can't promote to axis: {x!r}")


def merge_axes(output: AxisBase, *axes) -> bool:
    return output.merge(*axes)


def intersect_axes(output: AxisBase, *axes) -> bool:
    return output.intersect(*axes)
