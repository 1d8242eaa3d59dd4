# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
import itertools
import logging
import math
import operator

import torch

from .coordinate import *

logger = logging.getLogger(__name__)

#
# Variable - a torch.Tensor with Coordinates
#
# Dimension i of the tensor is described by the i-th axis of the
# coordinates, so data.shape == coords.shape always holds. Labels are
# resolved to positions through the axes; the tensor never sees them.
#
# Element-wise ops between variables align by label, not by position:
# operands' coordinates are broadcast under a join (see Coordinates),
# each operand is reindexed onto the result, and the op runs on plain
# tensors of identical shape. Labels missing from an operand after an
# outer join read as NaN.
#


class Variable:
    def __init__(
        self,
        data: Any,
        coords: Optional[CoordinatesDesc] = None,
        dims: Optional[Sequence[str]] = None,
    ):
        if not isinstance(data, torch.Tensor):
            data = torch.tensor(data)
        if coords is None:
            if dims is None:
                dims = [f"dim_{i}" for i in range(data.ndim)]
            if len(dims) != data.ndim:
                raise ValueError(f"{len(dims)} dim names for {data.ndim}-d data")
            coords = Coordinates((d, DefaultAxis(n)) for d, n in zip(dims, data.shape))
        else:
            coords = coordinates(coords)
            if dims is not None and tuple(dims) != coords.dims:
                raise ValueError(f"dims {tuple(dims)} don't match coordinates {coords.dims}")
        if tuple(data.shape) != coords.shape:
            msg = f"data shape {tuple(data.shape)} doesn't match coordinate shape {coords.shape} for dims {coords.dims}"
            raise ValueError(msg)
        self.data = data
        self.coords = coords

    def __repr__(self) -> str:
        return f"Variable({self.data.tolist()}, {self.coords})"

    @property
    def dims(self) -> Tuple[str, ...]:
        return self.coords.dims

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.coords.shape

    @property
    def ndim(self) -> int:
        return self.coords.ndim

    @property
    def dtype(self) -> torch.dtype:
        return self.data.dtype

    def numel(self) -> int:
        return self.data.numel()

    # the named axis of dimension `name`, for building axis expressions
    def axis(self, name: str) -> NamedAxis:
        return NamedAxis(name, self.coords[name])

    def tolist(self) -> Any:
        return self.data.tolist()

    def item(self) -> Any:
        return self.data.item()

    def copy(self) -> "Variable":
        return Variable(self.data.clone(), self.coords.copy())

    #
    # selection by label
    #

    # labels for the leading dimensions; fully specified -> element
    def locate(self, *labels: Label) -> Union["Variable", Any]:
        if len(labels) > self.ndim:
            raise ValueError(f"too many labels ({len(labels)}), ndim = {self.ndim}")
        return self.select(**dict(zip(self.dims, labels)))

    # labels by dimension name; selected dimensions are dropped
    def select(self, **labels: Label) -> Union["Variable", Any]:
        unknown = [n for n in labels if n not in self.coords]
        if len(unknown) > 0:
            raise KeyNotFoundError(f"no dimension(s) {unknown} in {self.dims}", unknown[0])
        index: List[Union[int, slice]] = []
        for name in self.dims:
            if name in labels:
                index.append(self.coords.position(name, labels[name]))
            else:
                index.append(slice(None))
        data = self.data[tuple(index)]
        if len(labels) == self.ndim:
            return data.item()
        return Variable(data, self.coords.drop(*labels))

    #
    # reindex onto target coordinates.
    # - shared dims are permuted into target order and gathered by label,
    #   labels the target has and we don't are filled with fill_value
    # - target dims we don't have are broadcast
    # - our dims the target doesn't have are dropped only if of size 1
    #
    def reindex(self, coords: CoordinatesDesc, fill_value: Any = math.nan) -> "Variable":
        target = coordinates(coords)
        data = self.data

        extra = [d for d in self.dims if d not in target]
        for d in extra:
            if len(self.coords[d]) != 1:
                msg = f"reindex would drop dimension {d!r} of size {len(self.coords[d])}"
                raise ValueError(msg)
        if len(extra) > 0:
            keep = [i for i, d in enumerate(self.dims) if d in target]
            data = data.reshape([self.shape[i] for i in keep])
        kept = [d for d in self.dims if d in target]

        shared = [d for d in target.dims if d in kept]
        order = [kept.index(d) for d in shared]
        if order != sorted(order):
            data = data.permute(*order)

        valid: Optional[torch.Tensor] = None
        for i, d in enumerate(shared):
            src, dst = self.coords[d], target[d]
            if src.axis == dst.axis:
                continue
            found = [src.find(x) for x, _ in dst]
            positions = torch.tensor([0 if f is None else f[1] for f in found], dtype=torch.long)
            data = data.index_select(i, positions)
            if any(f is None for f in found):
                present = torch.tensor([f is not None for f in found], dtype=torch.bool)
                vshape = [1] * len(shared)
                vshape[i] = len(found)
                present = present.reshape(vshape)
                valid = present if valid is None else valid & present

        if valid is not None:
            dtype = torch.result_type(data, fill_value)
            logger.debug(
                "reindex %s -> %s: %d missing value(s) filled with %s",
                self.dims,
                target.dims,
                int((~valid).expand(data.shape).sum()),
                fill_value,
            )
            fill = torch.tensor(fill_value, dtype=dtype)
            data = torch.where(valid, data.to(dtype), fill)

        full = [target.shape[i] if d in shared else 1 for i, d in enumerate(target.dims)]
        data = data.reshape(full).expand(target.shape).contiguous()
        return Variable(data, target.copy())

    #
    # element-wise ops aligned by label
    #
    def apply(self, op: Callable[..., torch.Tensor], *args: Any, join: Join = DEFAULT_JOIN) -> "Variable":
        return apply(op, self, *args, join=join)

    def _binop(fn, reflected=False):
        def opmethod(self, other):
            if reflected:
                return apply(fn, other, self)
            return apply(fn, self, other)

        opmethod.__name__ = f"__{'r' if reflected else ''}{fn.__name__}__"
        return opmethod

    __add__ = _binop(operator.add)
    __radd__ = _binop(operator.add, reflected=True)
    __sub__ = _binop(operator.sub)
    __rsub__ = _binop(operator.sub, reflected=True)
    __mul__ = _binop(operator.mul)
    __rmul__ = _binop(operator.mul, reflected=True)
    __truediv__ = _binop(operator.truediv)
    __rtruediv__ = _binop(operator.truediv, reflected=True)

    del _binop

    def __neg__(self) -> "Variable":
        return Variable(-self.data, self.coords.copy())

    #
    # masking by axis expression
    #

    # bool tensor of our shape: expr evaluated at every position.
    # expr's leaves should be our own axes (see axis()), since a leaf
    # reads labels from the axis it was built with.
    def mask(self, expr: Any) -> torch.Tensor:
        used = expression_dims(expr)
        for d in used:
            if d not in self.coords:
                raise MissingAxisError(d)
        used = tuple(d for d in self.dims if d in used)
        sizes = [len(self.coords[d]) for d in used]
        values = [
            bool(evaluate(expr, tuple(zip(used, pos))))
            for pos in itertools.product(*(range(n) for n in sizes))
        ]
        m = torch.tensor(values, dtype=torch.bool)
        shape = [len(a) if d in used else 1 for d, a in self.coords.items()]
        return m.reshape(shape).expand(self.shape)

    # our values where expr holds, other elsewhere
    def where(self, expr: Any, other: Any = math.nan) -> "Variable":
        m = self.mask(expr)
        dtype = torch.result_type(self.data, other)
        fill = torch.tensor(other, dtype=dtype)
        return Variable(torch.where(m, self.data.to(dtype), fill), self.coords.copy())

    # same coordinates and values, NaN equal to NaN
    def equals(self, other: "Variable") -> bool:
        if not isinstance(other, Variable) or self.coords != other.coords:
            return False
        a, b = self.data, other.data
        same = a == b
        if a.is_floating_point() and b.is_floating_point():
            same = same | (torch.isnan(a) & torch.isnan(b))
        return bool(same.all())


#
# builders
#


def variable(data: Any, coords: Optional[CoordinatesDesc] = None, /, **axes: Union[AxisDesc, AxisVariant]) -> Variable:
    if len(axes) > 0:
        coords = coordinates(() if coords is None else coords, **axes)
    return Variable(data, coords)


#
# apply op to variables (and scalars) aligned by label: coordinates
# are broadcast under join, then every variable is reindexed onto
# the result
#
def apply(op: Callable[..., torch.Tensor], *args: Any, join: Join = DEFAULT_JOIN) -> Variable:
    operands = [a for a in args if isinstance(a, Variable)]
    if len(operands) == 0:
        raise ValueError("apply needs at least one Variable operand")
    coords, _, _ = broadcast_coordinates(*(v.coords for v in operands), join=join)
    # broadcast flags describe the receiver only, not each operand
    if all(v.coords == coords for v in operands):
        datas = [a.data if isinstance(a, Variable) else a for a in args]
    else:
        datas = [a.reindex(coords).data if isinstance(a, Variable) else a for a in args]
    return Variable(op(*datas), coords)
