"""Function and predicate symbols known to a scope."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:
    from folley.term import Term


@dataclass(frozen=True)
class Function:
    """A function symbol: its arity and the callable that computes it."""

    arity: int
    application: Callable[[list["Term"]], "Term"] = field(compare=False)

    def apply(self, terms: Iterable["Term"]) -> "Term":
        """Compute the function on already evaluated argument terms."""
        return self.application(list(terms))

    def __str__(self) -> str:
        return f"Function(arity: {self.arity})"


@dataclass(frozen=True)
class Predicate:
    """A predicate symbol, known only by its arity."""

    arity: int

    def __str__(self) -> str:
        return f"Predicate(arity: {self.arity})"