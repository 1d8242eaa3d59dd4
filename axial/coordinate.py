# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
import logging

from .named_axis import *

logger = logging.getLogger(__name__)

#
# Coordinates - the named axes of a labeled array
#
# An ordered mapping from dimension name to AxisVariant. Order is the
# dimension order of the data the coordinates describe, so shape is
# just the axis sizes in order.
#
# broadcast() aligns coordinate systems ahead of element-wise ops:
# - dimension names are combined with the unsorted merge, the way
#   dimension lists always are (they carry positional meaning)
# - axes present on both sides are merged (Join.OUTER) or intersected
#   (Join.INNER); axes present on one side are taken as is
# It reports (same_dimensions, trivial): whether no new dimension was
# added, and whether no shared axis changed.
#

CoordinatesDesc = Union[
    "Coordinates",
    Mapping[str, Union[AxisDesc, AxisVariant]],  # name -> axis
    Iterable[NamedAxis],
    Iterable[Tuple[str, Union[AxisDesc, AxisVariant]]],  # (name, axis) pairs
]


class Coordinates:
    def __init__(self, axes: CoordinatesDesc = ()):
        self._axes: Dict[str, AxisVariant] = {}
        if isinstance(axes, Coordinates):
            self._axes = {n: a.copy() for n, a in axes._axes.items()}
            return
        items = axes.items() if isinstance(axes, Mapping) else axes
        for item in items:
            if isinstance(item, NamedAxis):
                name, a = item.name, item.axis
            else:
                name, a = item
            if name in self._axes:
                raise ValueError(f"duplicate dimension name {name!r}")
            self._axes[name] = axis_variant(a).copy()

    def __repr__(self) -> str:
        inner = ", ".join(f"{n}={a}" for n, a in self._axes.items())
        return f"Coordinates({inner})"

    @property
    def dims(self) -> Tuple[str, ...]:
        return tuple(self._axes)

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(len(a) for a in self._axes.values())

    @property
    def ndim(self) -> int:
        return len(self._axes)

    def __len__(self) -> int:
        return len(self._axes)

    def empty(self) -> bool:
        return len(self._axes) == 0

    def __contains__(self, name) -> bool:
        return name in self._axes

    def __getitem__(self, name: str) -> AxisVariant:
        try:
            return self._axes[name]
        except KeyError:
            raise KeyNotFoundError(f"no dimension {name!r} in {self.dims}", name) from None

    def __iter__(self) -> Iterator[NamedAxis]:
        for n, a in self._axes.items():
            yield NamedAxis(n, a)

    def items(self) -> Iterator[Tuple[str, AxisVariant]]:
        return iter(self._axes.items())

    # dimension index of name
    def dim_index(self, name: str) -> int:
        try:
            return self.dims.index(name)
        except ValueError:
            raise KeyNotFoundError(f"no dimension {name!r} in {self.dims}", name) from None

    def position(self, name: str, label: Label) -> int:
        return self[name].position(label)

    # positions of one label per dimension, in dimension order
    def positions(self, *labels: Label) -> Tuple[int, ...]:
        if len(labels) != self.ndim:
            raise ValueError(f"expected {self.ndim} labels for dims {self.dims}, got {len(labels)}")
        return tuple(a.position(x) for a, x in zip(self._axes.values(), labels))

    # coordinates keeping only dims not in names
    def drop(self, *names: str) -> "Coordinates":
        for n in names:
            self.dim_index(n)
        return Coordinates((n, a) for n, a in self._axes.items() if n not in names)

    def copy(self) -> "Coordinates":
        return Coordinates(self)

    __copy__ = copy

    def __eq__(self, other) -> bool:
        if not isinstance(other, Coordinates):
            return NotImplemented
        return self.dims == other.dims and all(
            self._axes[n] == other._axes[n] for n in self.dims
        )

    __hash__ = None  # type: ignore

    def broadcast(self, *others: "Coordinates", join: Join = DEFAULT_JOIN) -> Tuple[bool, bool]:
        join = Join(join)
        others = tuple(coordinates(c) for c in others)

        # an empty receiver starts out as the first operand
        if self.empty() and len(others) > 0:
            dims = list(others[0].dims)
            axes = {n: a.copy() for n, a in others[0].items()}
            others = others[1:]
        else:
            dims = list(self.dims)
            axes = {n: a.copy() for n, a in self.items()}

        same_dimensions = merge_unsorted_to(dims, *(c.dims for c in others))
        trivial = True
        for c in others:
            for name, a in c.items():
                if name not in axes:
                    axes[name] = a.copy()
                    continue
                axes[name], res = broadcast_axis(axes[name], a, join)
                trivial = trivial and res

        # everything checked, commit
        self._axes = {n: axes[n] for n in dims}
        logger.debug(
            "broadcast %s: dims %s, same_dimensions=%s, trivial=%s",
            join.name.lower(),
            self.dims,
            same_dimensions,
            trivial,
        )
        return same_dimensions, trivial


#
# join one shared axis. Equal axes are left alone, which is the only
# way a default axis comes through unchanged; otherwise a default
# receiver is converted before merge/intersect.
#
def broadcast_axis(output: AxisVariant, input: AxisVariant, join: Join) -> Tuple[AxisVariant, bool]:
    if output.label_type == input.label_type and output.axis == input.axis:
        return output, True
    if output.is_default():
        output = output.as_xaxis()
    if join == Join.OUTER:
        res = output.merge(input)
    else:
        res = output.intersect(input)
    return output, res


def coordinates(x: CoordinatesDesc = (), /, **axes: Union[AxisDesc, AxisVariant]) -> Coordinates:
    if isinstance(x, Coordinates) and len(axes) == 0:
        return x
    c = Coordinates(x)
    for name, a in axes.items():
        if name in c:
            raise ValueError(f"duplicate dimension name {name!r}")
        c._axes[name] = axis_variant(a).copy()
    return c


# broadcast into a fresh coordinate system: (result, same_dimensions, trivial)
def broadcast_coordinates(
    *coords: Coordinates, join: Join = DEFAULT_JOIN
) -> Tuple[Coordinates, bool, bool]:
    result = Coordinates()
    same_dimensions, trivial = result.broadcast(*coords, join=join)
    return result, same_dimensions, trivial
