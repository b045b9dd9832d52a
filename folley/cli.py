"""Interactive proof session over Peano-style arithmetic."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from folley.context import Context
from folley.notation import (
    for_all,
    function,
    iff,
    imply,
    not_,
    predicate,
    there_exist,
    value,
)
from folley.scope import Scope
from folley.term import DOMAIN_LIMIT, Term, TermError, Value


def _values(terms: list[Term], arity: int) -> list[int]:
    if len(terms) < arity or not all(isinstance(t, Value) for t in terms[:arity]):
        raise TermError("arguments must be values of the domain")
    return [t.value for t in terms[:arity]]


def _domain(number: int) -> Value:
    if number >= DOMAIN_LIMIT:
        raise TermError("value overflows the domain")
    return Value(number)


def _successor(terms: list[Term]) -> Term:
    (a,) = _values(terms, 1)
    return _domain(a + 1)


def _sum(terms: list[Term]) -> Term:
    a, b = _values(terms, 2)
    return _domain(a + b)


def _product(terms: list[Term]) -> Term:
    a, b = _values(terms, 2)
    return _domain(a * b)


def peano_context() -> Context:
    """The axioms of arithmetic with the goal that even plus even is even."""
    scope = Scope()
    x = scope.allocate_variable("X")
    y = scope.allocate_variable("Y")
    z = scope.allocate_variable("Z")

    eq_id = scope.make_predicate(2, "Eq")
    even_id = scope.make_predicate(1, "Even")
    successor_id = scope.make_function(1, "S", _successor)
    sum_id = scope.make_function(2, "+", _sum)
    product_id = scope.make_function(2, "*", _product)

    def eq(a, b):
        return predicate(eq_id, [a, b])

    def even(a):
        return predicate(even_id, [a])

    def successor(a):
        return function(successor_id, [a])

    def add(a, b):
        return function(sum_id, [a, b])

    def mul(a, b):
        return function(product_id, [a, b])

    theorems = [
        for_all(x, eq(x, x)),
        for_all(x, for_all(y, iff(eq(x, y), eq(y, x)))),
        for_all(x, for_all(y, for_all(z, imply(eq(x, y) & eq(y, z), eq(x, z))))),
        for_all(x, not_(eq(value(0), successor(x)))),
        for_all(x, for_all(y, imply(eq(successor(x), successor(y)), eq(x, y)))),
        for_all(x, eq(add(x, value(0)), x)),
        for_all(x, for_all(y, eq(add(x, successor(y)), successor(add(x, y))))),
        for_all(x, eq(mul(x, value(0)), value(0))),
        for_all(x, for_all(y, eq(mul(x, successor(y)), add(mul(x, y), x)))),
        for_all(x, imply(there_exist(y, eq(mul(value(2), y), x)), even(x))),
    ]
    goals = [imply(even(x) & even(y), even(add(x, y)))]
    return Context(theorems, goals, scope)


def _parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="folley",
        description="Prove that the sum of two even numbers is even, "
        "one proof step at a time.",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the interactive session; exit status 0 once every goal is proved."""
    _parser().parse_args(argv)
    context = peano_context()
    try:
        solved = context.mainloop()
    except (EOFError, KeyboardInterrupt):
        print()
        return 1
    return 0 if solved else 1


if __name__ == "__main__":
    raise SystemExit(main())