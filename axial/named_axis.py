# Copyright (c) Facebook, Inc. and its affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.
import operator
from typing import Dict, Mapping

from .variant import *

#
# Named axes and axis expressions.
#
# A NamedAxis binds a dimension name to an AxisVariant. Used inside
# arithmetic, comparisons or logical operators it turns into a Leaf of
# an expression tree; nothing is computed until the tree is evaluated
# against a selector, a sequence of (name, position) pairs saying where
# along each dimension we are. A Leaf evaluates to its axis's label at
# the selected position.
#
# Tree nodes:
#   Leaf(named)            label of a named axis at the selected position
#   Scalar(value)          a constant
#   Not(operand)
#   And(left, right)
#   Or(left, right)
#   Compare(op, left, right)
#   Function(fn, args)     any other function of evaluated children
#
# == and != are left alone (nodes compare by identity); use equal() and
# not_equal() to build comparisons.
#

# (name, position) pairs as a tuple or list, or a name -> position mapping
Selector = Union[Sequence[Tuple[str, int]], Mapping[str, int]]

COMPARISONS: Dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class AxisExpression:
    def __call__(self, selector: Selector):
        return evaluate(self, selector)

    # method factory for binary operators
    def _binop(fn, reflected=False):
        def opmethod(self, other):
            if reflected:
                return Function(fn, (expression(other), expression(self)))
            return Function(fn, (expression(self), expression(other)))

        opmethod.__name__ = f"__{'r' if reflected else ''}{fn.__name__}__"
        return opmethod

    def _cmpop(op):
        def opmethod(self, other):
            return Compare(op, expression(self), expression(other))

        opmethod.__name__ = f"__{COMPARISONS[op].__name__}__"
        return opmethod

    __add__ = _binop(operator.add)
    __radd__ = _binop(operator.add, reflected=True)
    __sub__ = _binop(operator.sub)
    __rsub__ = _binop(operator.sub, reflected=True)
    __mul__ = _binop(operator.mul)
    __rmul__ = _binop(operator.mul, reflected=True)
    __truediv__ = _binop(operator.truediv)
    __rtruediv__ = _binop(operator.truediv, reflected=True)
    __floordiv__ = _binop(operator.floordiv)
    __rfloordiv__ = _binop(operator.floordiv, reflected=True)
    __mod__ = _binop(operator.mod)
    __rmod__ = _binop(operator.mod, reflected=True)
    __pow__ = _binop(operator.pow)
    __rpow__ = _binop(operator.pow, reflected=True)
    __xor__ = _binop(operator.xor)
    __rxor__ = _binop(operator.xor, reflected=True)

    # reflected comparisons come back through the mirrored operator
    __lt__ = _cmpop("<")
    __le__ = _cmpop("<=")
    __gt__ = _cmpop(">")
    __ge__ = _cmpop(">=")

    def __and__(self, other):
        return And(expression(self), expression(other))

    def __rand__(self, other):
        return And(expression(other), expression(self))

    def __or__(self, other):
        return Or(expression(self), expression(other))

    def __ror__(self, other):
        return Or(expression(other), expression(self))

    def __invert__(self):
        return Not(expression(self))

    def __neg__(self):
        return Function(operator.neg, (expression(self),))

    def __pos__(self):
        return Function(operator.pos, (expression(self),))

    def __abs__(self):
        return Function(abs, (expression(self),))

    del _binop, _cmpop


#
# NamedAxis
#
@dataclass(frozen=True, eq=False)
class NamedAxis(AxisExpression):
    name: str
    axis: AxisVariant

    def __post_init__(self):
        if not isinstance(self.axis, AxisVariant):
            msg = f"named axis {self.name!r} needs an AxisVariant, got {type(self.axis).__name__}"
            raise TypeError(msg)

    def __repr__(self) -> str:
        return f"NamedAxis({self.name!r}, {self.axis!r})"

    def label(self, i: int) -> Label:
        return self.axis.label(i)

    def __len__(self) -> int:
        return len(self.axis)

    def size(self) -> int:
        return len(self.axis)

    def rename(self, name: str) -> "NamedAxis":
        return NamedAxis(name, self.axis)


def named_axis(name: str, x: Union[AxisDesc, AxisVariant], **kwargs) -> NamedAxis:
    return NamedAxis(name, axis_variant(x, **kwargs).copy())


#
# expression nodes
#
@dataclass(eq=False)
class Leaf(AxisExpression):
    named: NamedAxis

    @property
    def name(self) -> str:
        return self.named.name

    def __repr__(self) -> str:
        return self.name


@dataclass(eq=False)
class Scalar(AxisExpression):
    value: Any

    def __repr__(self) -> str:
        return repr(self.value)


@dataclass(eq=False)
class Not(AxisExpression):
    operand: AxisExpression

    def __repr__(self) -> str:
        return f"~{self.operand!r}"


@dataclass(eq=False)
class And(AxisExpression):
    left: AxisExpression
    right: AxisExpression

    def __repr__(self) -> str:
        return f"({self.left!r} & {self.right!r})"


@dataclass(eq=False)
class Or(AxisExpression):
    left: AxisExpression
    right: AxisExpression

    def __repr__(self) -> str:
        return f"({self.left!r} | {self.right!r})"


@dataclass(eq=False)
class Compare(AxisExpression):
    op: str
    left: AxisExpression
    right: AxisExpression

    def __post_init__(self):
        if self.op not in COMPARISONS:
            raise ValueError(f"unknown comparison {self.op!r}")

    def __repr__(self) -> str:
        return f"({self.left!r} {self.op} {self.right!r})"


@dataclass(eq=False)
class Function(AxisExpression):
    fn: Callable[..., Any]
    args: Tuple[AxisExpression, ...]

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", repr(self.fn))
        return f"{name}({', '.join(repr(a) for a in self.args)})"


# lift a value into the expression tree
def expression(x: Any) -> AxisExpression:
    if isinstance(x, NamedAxis):
        return Leaf(x)
    if isinstance(x, AxisExpression):
        return x
    return Scalar(x)


# position selected for dimension `name`, MissingAxisError if none
def selected_position(selector: Selector, name: str) -> int:
    if isinstance(selector, Mapping):
        if name in selector:
            return selector[name]
    else:
        for n, i in selector:
            if n == name:
                return i
    raise MissingAxisError(name)


def evaluate(expr: Any, selector: Selector) -> Any:
    expr = expression(expr)
    if isinstance(expr, Leaf):
        return expr.named.label(selected_position(selector, expr.name))
    if isinstance(expr, Scalar):
        return expr.value
    if isinstance(expr, Not):
        return not evaluate(expr.operand, selector)
    # both sides are evaluated, so a missing axis is reported either way
    if isinstance(expr, And):
        left, right = evaluate(expr.left, selector), evaluate(expr.right, selector)
        return bool(left) and bool(right)
    if isinstance(expr, Or):
        left, right = evaluate(expr.left, selector), evaluate(expr.right, selector)
        return bool(left) or bool(right)
    if isinstance(expr, Compare):
        fn = COMPARISONS[expr.op]
        return fn(evaluate(expr.left, selector), evaluate(expr.right, selector))
    if isinstance(expr, Function):
        return expr.fn(*(evaluate(a, selector) for a in expr.args))
    raise TypeError(f"not an axis expression: {expr!r}")


# names of the dimensions an expression reads, in first-seen order
def expression_dims(expr: Any) -> Tuple[str, ...]:
    dims: List[str] = []

    def walk(e: AxisExpression):
        if isinstance(e, Leaf):
            if e.name not in dims:
                dims.append(e.name)
        elif isinstance(e, Not):
            walk(e.operand)
        elif isinstance(e, (And, Or, Compare)):
            walk(e.left)
            walk(e.right)
        elif isinstance(e, Function):
            for a in e.args:
                walk(a)

    walk(expression(expr))
    return tuple(dims)


#
# named builders
#
def equal(a, b) -> Compare:
    return Compare("==", expression(a), expression(b))


def not_equal(a, b) -> Compare:
    return Compare("!=", expression(a), expression(b))


def less(a, b) -> Compare:
    return Compare("<", expression(a), expression(b))


def less_equal(a, b) -> Compare:
    return Compare("<=", expression(a), expression(b))


def greater(a, b) -> Compare:
    return Compare(">", expression(a), expression(b))


def greater_equal(a, b) -> Compare:
    return Compare(">=", expression(a), expression(b))


def logical_and(a, b) -> And:
    return And(expression(a), expression(b))


def logical_or(a, b) -> Or:
    return Or(expression(a), expression(b))


def logical_not(a) -> Not:
    return Not(expression(a))


def maximum(*args) -> Function:
    return Function(max, tuple(expression(a) for a in args))


def minimum(*args) -> Function:
    return Function(min, tuple(expression(a) for a in args))


def choose(cond, x, y):
    return x if cond else y


def where(cond, x, y) -> Function:
    return Function(choose, (expression(cond), expression(x), expression(y)))


# any function of labels, lifted into the tree
def axis_function(fn: Callable[..., Any], *args) -> Function:
    return Function(fn, tuple(expression(a) for a in args))


# fixed-arity selector: selector(("abs", 1), ("ord", 2))
def selector(*pairs: Tuple[str, int], **positions: int) -> Tuple[Tuple[str, int], ...]:
    return tuple(pairs) + tuple(positions.items())


#
# AxisFunctionWrapper calls an expression either with a selector or
# with bare positions, one per dimension in `dims` order.
#
class AxisFunctionWrapper:
    def __init__(self, expr: Any, dims: Optional[Sequence[str]] = None):
        self.expr = expression(expr)
        self.dims: Tuple[str, ...] = expression_dims(self.expr) if dims is None else tuple(dims)
        if len(set(self.dims)) != len(self.dims):
            raise ValueError(f"duplicate dimension names in {self.dims}")

    def __repr__(self) -> str:
        return f"AxisFunctionWrapper({self.expr!r}, {self.dims})"

    def __call__(self, *args):
        if len(args) == 1 and not is_int(args[0]):
            return evaluate(self.expr, args[0])
        if len(args) != len(self.dims):
            msg = f"expected {len(self.dims)} positions for dims {self.dims}, got {len(args)}"
            raise ValueError(msg)
        return evaluate(self.expr, tuple(zip(self.dims, args)))
