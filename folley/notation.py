"""Short constructors for writing terms and formulas by hand."""

from __future__ import annotations

from typing import Iterable

from folley.formula import (
    And,
    ForAll,
    Formula,
    Imply,
    Not,
    Nxor,
    Or,
    PredicateApplication,
    TermFormula,
    ThereExist,
)
from folley.term import Application, Term, Value, Variable


def value(v: int) -> Term:
    return Value(v)


def term(t: Term) -> Formula:
    return TermFormula(t)


def imply(a: Formula, b: Formula) -> Formula:
    return Imply(a, b)


def and_(a: Formula, b: Formula) -> Formula:
    return And(a, b)


def or_(a: Formula, b: Formula) -> Formula:
    return Or(a, b)


def not_(a: Formula) -> Formula:
    return Not(a)


def iff(a: Formula, b: Formula) -> Formula:
    """Equivalence."""
    return Nxor(a, b)


def for_all(variable: Term, f: Formula) -> Formula:
    if not isinstance(variable, Variable):
        raise ValueError(f"Cannot quantify (∀) over non-variable {variable}")
    return ForAll(variable.identifier, f)


def there_exist(variable: Term, f: Formula) -> Formula:
    if not isinstance(variable, Variable):
        raise ValueError(f"Cannot quantify (∃) over non-variable {variable}")
    return ThereExist(variable.identifier, f)


def predicate(identifier: int, arguments: Iterable[Term]) -> Formula:
    return PredicateApplication(identifier, tuple(arguments))


def function(identifier: int, arguments: Iterable[Term]) -> Term:
    return Application(identifier, tuple(arguments))