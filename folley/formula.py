"""First-order formulas: structure, evaluation, substitution and rewriting."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Callable, ClassVar, Mapping, Optional, TypeVar

from folley.term import Bottom, Term, TermError, Top

T = TypeVar("T")

Transformer = Callable[["Formula"], Optional[tuple["Formula", T]]]


class Formula(ABC):
    """Base class of all formulas; instances are immutable."""

    __slots__ = ()
    _description: ClassVar[str] = "Formula"

    @abstractmethod
    def evaluate(self, scope: Any) -> Optional["Formula"]:
        """Simplify the formula in a scope; None if some variable is unbound."""

    @abstractmethod
    def bound(self, valuation: Mapping[int, int]) -> "Formula":
        """Replace free variables found in the valuation by their values."""

    @abstractmethod
    def _transform_children(
        self, fun: Transformer, collapse: Callable[[T, T], T], initial: T
    ) -> tuple["Formula", T]:
        """Apply a transformation to the sub-formulas."""

    def transform(
        self, fun: Transformer, collapse: Callable[[T, T], T], initial: T
    ) -> tuple["Formula", T]:
        """Rebuild the formula top-down.

        ``fun`` gets each sub-formula and returns either None, to descend into
        it, or a pair of its replacement and a value. The values of sibling
        branches are merged with ``collapse``; leaves that ``fun`` leaves
        alone yield ``initial``. Returns the new formula and the merged value.
        """
        result = fun(self)
        if result is not None:
            return result
        return self._transform_children(fun, collapse, initial)

    def rewrite(self, truth: "Formula") -> tuple["Formula", bool]:
        """Replace every occurrence of ``truth`` by ⊤.

        Returns the new formula and whether anything was replaced.
        """
        return self.transform(
            lambda formula: (TRUE, True) if formula == truth else None,
            lambda a, b: a or b,
            False,
        )

    def description(self) -> str:
        """The name of the outermost connective."""
        return self._description

    def __invert__(self) -> "Formula":
        return Not(self)

    def __and__(self, other: "Formula") -> "Formula":
        return And(self, other)

    def __or__(self, other: "Formula") -> "Formula":
        return Or(self, other)

    def __xor__(self, other: "Formula") -> "Formula":
        return Xor(self, other)


class _Leaf(Formula):
    __slots__ = ()

    def _transform_children(self, fun, collapse, initial):
        return self, initial


@dataclass(frozen=True)
class TermFormula(_Leaf):
    """A term used as a formula, such as ⊤ or ⊥."""

    term: Term
    _description: ClassVar[str] = "Term"

    def __str__(self) -> str:
        return str(self.term)

    def evaluate(self, scope: Any) -> Optional[Formula]:
        value = self.term.evaluate(scope)
        return None if value is None else TermFormula(value)

    def bound(self, valuation: Mapping[int, int]) -> Formula:
        return TermFormula(self.term.bound(valuation))


@dataclass(frozen=True)
class PredicateApplication(_Leaf):
    """A predicate symbol applied to argument terms."""

    identifier: int
    arguments: tuple[Term, ...] = ()
    _description: ClassVar[str] = "Predicate"

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def __str__(self) -> str:
        inner = ", ".join(str(argument) for argument in self.arguments)
        return f"P{self.identifier}({inner})"

    def evaluate(self, scope: Any) -> Optional[Formula]:
        predicate = scope.get_predicate(self.identifier)
        if predicate.arity != len(self.arguments):
            raise TermError(
                f"Predicate {self.identifier} expects {predicate.arity} arguments, "
                f"{len(self.arguments)} given"
            )
        values = []
        for argument in self.arguments:
            value = argument.evaluate(scope)
            if value is None:
                return None
            values.append(value)
        return PredicateApplication(self.identifier, tuple(values))

    def bound(self, valuation: Mapping[int, int]) -> Formula:
        return PredicateApplication(
            self.identifier, tuple(argument.bound(valuation) for argument in self.arguments)
        )


@dataclass(frozen=True)
class Not(Formula):
    """Negation."""

    inner: Formula
    _description: ClassVar[str] = "Negation"

    def __str__(self) -> str:
        if isinstance(self.inner, (TermFormula, PredicateApplication)):
            return f"¬{self.inner}"
        return f"¬({self.inner})"

    def evaluate(self, scope: Any) -> Optional[Formula]:
        inner = self.inner.evaluate(scope)
        if inner is None:
            return None
        if inner == TRUE:
            return FALSE
        if inner == FALSE:
            return TRUE
        if isinstance(inner, Not):
            return inner.inner
        return Not(inner)

    def bound(self, valuation: Mapping[int, int]) -> Formula:
        return Not(self.inner.bound(valuation))

    def _transform_children(self, fun, collapse, initial):
        inner, value = self.inner.transform(fun, collapse, initial)
        return replace(self, inner=inner), value


@dataclass(frozen=True)
class _Quantifier(Formula):
    variable: int
    inner: Formula
    symbol: ClassVar[str] = ""

    def __str__(self) -> str:
        return f"{self.symbol}{self.variable}.({self.inner})"

    def evaluate(self, scope: Any) -> Optional[Formula]:
        inner = self.inner.evaluate(scope)
        return None if inner is None else replace(self, inner=inner)

    def bound(self, valuation: Mapping[int, int]) -> Formula:
        shadowed = {key: value for key, value in valuation.items() if key != self.variable}
        return replace(self, inner=self.inner.bound(shadowed))

    def _transform_children(self, fun, collapse, initial):
        inner, value = self.inner.transform(fun, collapse, initial)
        return replace(self, inner=inner), value


class ForAll(_Quantifier):
    """Universal quantification over a variable."""

    symbol = "∀"
    _description = "ForAll"


class ThereExist(_Quantifier):
    """Existential quantification over a variable."""

    symbol = "∃"
    _description = "ThereExist"


@dataclass(frozen=True)
class _Binary(Formula):
    left: Formula
    right: Formula

    def bound(self, valuation: Mapping[int, int]) -> Formula:
        return replace(self, left=self.left.bound(valuation), right=self.right.bound(valuation))

    def _transform_children(self, fun, collapse, initial):
        left, a = self.left.transform(fun, collapse, initial)
        right, b = self.right.transform(fun, collapse, initial)
        return replace(self, left=left, right=right), collapse(a, b)


class _Connective(_Binary):
    """A binary connective written infix."""

    infix: ClassVar[str] = ""
    parenthesize: ClassVar[tuple[type, ...]] = ()
    _right_first: ClassVar[bool] = False

    def _wrap(self, child: Formula) -> str:
        return f"({child})" if isinstance(child, self.parenthesize) else str(child)

    def __str__(self) -> str:
        return f"{self._wrap(self.left)}{self.infix}{self._wrap(self.right)}"

    def evaluate(self, scope: Any) -> Optional[Formula]:
        first, second = (self.right, self.left) if self._right_first else (self.left, self.right)
        first_value = first.evaluate(scope)
        if first_value is None:
            return None
        second_value = second.evaluate(scope)
        if second_value is None:
            return None
        if self._right_first:
            return self._combine(second_value, first_value)
        return self._combine(first_value, second_value)

    @abstractmethod
    def _combine(self, a: Formula, b: Formula) -> Formula:
        """Simplify the connective applied to evaluated operands."""


def _other(a: Formula, b: Formula, constant: Formula) -> Formula:
    return b if a == constant else a


def _constants(a: Formula, b: Formula) -> bool:
    return a in (TRUE, FALSE) and b in (TRUE, FALSE)


class And(_Connective):
    """Conjunction."""

    infix = " ∧ "
    _description = "Conjunction"

    def _combine(self, a, b):
        if a == TRUE and b == TRUE:
            return TRUE
        if FALSE in (a, b):
            return FALSE
        if TRUE in (a, b):
            return _other(a, b, TRUE)
        return And(a, b)


class Or(_Connective):
    """Disjunction."""

    infix = " ∨ "
    _description = "Disjunction"

    def _combine(self, a, b):
        if a == FALSE and b == FALSE:
            return FALSE
        if TRUE in (a, b):
            return TRUE
        if FALSE in (a, b):
            return _other(a, b, FALSE)
        return Or(a, b)


class Imply(_Connective):
    """Implication."""

    infix = " → "
    _description = "Implication"

    def _combine(self, a, b):
        if a == FALSE or b == TRUE:
            return TRUE
        if a == TRUE:
            return FALSE if b == FALSE else b
        if a == b:
            return TRUE
        return Imply(a, b)


class Nimply(_Connective):
    """Negated implication."""

    infix = " ↛  "
    _description = "NegativeImplication"

    def _combine(self, a, b):
        if a == FALSE or b == TRUE:
            return FALSE
        if a == TRUE:
            return TRUE if b == FALSE else Not(b)
        if a == b:
            return FALSE
        return Nimply(a, b)


class Nand(_Connective):
    """Negated conjunction."""

    infix = " ↑ "
    _description = "NegativeConjunction"

    def _combine(self, a, b):
        if a == TRUE and b == TRUE:
            return FALSE
        if FALSE in (a, b):
            return TRUE
        if TRUE in (a, b):
            return Not(_other(a, b, TRUE))
        return Nand(a, b)


class Nor(_Connective):
    """Negated disjunction."""

    infix = " ↓ "
    _description = "NegativeDisjunction"

    def _combine(self, a, b):
        if a == FALSE and b == FALSE:
            return TRUE
        if TRUE in (a, b):
            return FALSE
        if FALSE in (a, b):
            return Not(_other(a, b, FALSE))
        return Nor(a, b)


class Xor(_Connective):
    """Exclusive disjunction."""

    infix = " ⊕ "
    _description = "ExclusiveDisjunction"

    def _combine(self, a, b):
        if _constants(a, b):
            return FALSE if a == b else TRUE
        if TRUE in (a, b):
            return Not(_other(a, b, TRUE))
        if FALSE in (a, b):
            return _other(a, b, FALSE)
        if a == b:
            return FALSE
        return Xor(a, b)


class Nxor(_Connective):
    """Equivalence, the negated exclusive disjunction."""

    infix = " ⊙ "
    _description = "NegativeExclusiveDisjunction"

    def _combine(self, a, b):
        if _constants(a, b):
            return TRUE if a == b else FALSE
        if TRUE in (a, b):
            return _other(a, b, TRUE)
        if FALSE in (a, b):
            return Not(_other(a, b, FALSE))
        if a == b:
            return TRUE
        return Nxor(a, b)


class Rimply(_Connective):
    """Reverse implication: the right operand implies the left one."""

    infix = " ← "
    _description = "ReverseImplication"
    _right_first = True

    def _combine(self, left, right):
        if right == FALSE or left == TRUE:
            return TRUE
        if right == TRUE:
            return FALSE if left == FALSE else left
        if left == right:
            return TRUE
        return Rimply(left, right)


class Nrimply(_Connective):
    """Negated reverse implication."""

    infix = " ↚  "
    _description = "NegativeReverseImplication"

    def _combine(self, left, right):
        if left == FALSE or right == TRUE:
            return FALSE
        if left == TRUE:
            return TRUE if right == FALSE else Not(right)
        if left == right:
            return FALSE
        return Nrimply(right, left)


class _Selector(_Binary):
    """A binary connective that keeps one operand, written as a call."""

    prefix: ClassVar[str] = ""

    def __str__(self) -> str:
        return f"{self.prefix}({self.left}, {self.right})"


class First(_Selector):
    """Keeps the left operand."""

    prefix = "A"
    _description = "First"

    def evaluate(self, scope: Any) -> Optional[Formula]:
        return self.left.evaluate(scope)


class Second(_Selector):
    """Keeps the right operand."""

    prefix = "B"
    _description = "Second"

    def evaluate(self, scope: Any) -> Optional[Formula]:
        return self.right.evaluate(scope)


class NotFirst(_Selector):
    """Keeps the negation of the left operand."""

    prefix = "¬A"
    _description = "NegativeFirst"

    def evaluate(self, scope: Any) -> Optional[Formula]:
        return Not(self.left).evaluate(scope)


class NotSecond(_Selector):
    """Keeps the negation of the right operand."""

    prefix = "¬B"
    _description = "NegativeSecond"

    def evaluate(self, scope: Any) -> Optional[Formula]:
        return Not(self.right).evaluate(scope)


_IMPLICATIONS = (Imply, Nimply, Rimply, Nrimply)
_WEAK = (Or, Nand, Nor, Xor, Nxor) + _IMPLICATIONS

And.parenthesize = _WEAK
Or.parenthesize = (Nand, Nor, Xor, Nxor) + _IMPLICATIONS
Nand.parenthesize = (And,) + _WEAK
Nor.parenthesize = _WEAK
Xor.parenthesize = (Xor, Nxor)
Nxor.parenthesize = (Xor, Nxor)
for _implication in _IMPLICATIONS:
    _implication.parenthesize = _IMPLICATIONS

TRUE: Formula = TermFormula(Top())
FALSE: Formula = TermFormula(Bottom())