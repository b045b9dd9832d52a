"""The symbol table of a proof: variables, functions, predicates and their names."""

from __future__ import annotations

from typing import Callable, Optional

from folley.formula import (
    First,
    ForAll,
    Formula,
    Not,
    NotFirst,
    NotSecond,
    PredicateApplication,
    Second,
    TermFormula,
    ThereExist,
)
from folley.symbols import Function, Predicate
from folley.term import (
    Application,
    Bottom,
    Term,
    Top,
    Value,
    Variable,
    parse_term,
)

IDENTIFIER_LIMIT = 255

_SELECTOR_PREFIXES = {First: "A", Second: "B", NotFirst: "¬A", NotSecond: "¬B"}


class ScopeError(LookupError):
    """Raised when an identifier is misused or the identifier space runs out."""


class Scope:
    """Allocates identifiers and keeps what each of them stands for."""

    def __init__(self) -> None:
        self._last_allocated_id = 0
        self._bindings: dict[int, int] = {}
        self._variables: dict[int, None] = {}
        self._functions: dict[int, Function] = {}
        self._predicates: dict[int, Predicate] = {}
        self._reprs: dict[int, str] = {}
        self._rev_reprs: dict[str, int] = {}

    def __str__(self) -> str:
        lines = ["  Variables: "]
        lines.append("".join(f"{self._label(i)}, " for i in self._variables))
        lines.append("  Bindings: ")
        lines.append(
            "".join(f"{self._label(key)} -> {value}, " for key, value in self._bindings.items())
        )
        lines.append("  Functions:")
        for identifier, function in self._functions.items():
            name = self._reprs.get(identifier)
            head = f"f{identifier} {name}" if name is not None else f"f{identifier}"
            lines.append(f"    {head}: {function}")
        text = "\n".join(lines) + "\n  Predicates:"
        for identifier, predicate in self._predicates.items():
            name = self._reprs.get(identifier)
            head = f"P{identifier} {name}" if name is not None else f"P{identifier}"
            text += f"\n    {head}: {predicate}"
        return text

    def _label(self, identifier: int) -> str:
        name = self._reprs.get(identifier)
        return f"{name} ({identifier})" if name is not None else str(identifier)

    def _name(self, identifier: int, fallback: str) -> str:
        return self._reprs.get(identifier, fallback)

    # --- formatting ------------------------------------------------------

    def format_term(self, term: Term) -> str:
        """Render a term with the names bound in this scope."""
        if isinstance(term, Top):
            return "⊤"
        if isinstance(term, Bottom):
            return "⊥"
        if isinstance(term, Variable):
            return self._name(term.identifier, f"${term.identifier}")
        if isinstance(term, Value):
            return str(term.value)
        if isinstance(term, Application):
            name = self._name(term.identifier, f"f{term.identifier}")
            inner = ", ".join(self.format_term(argument) for argument in term.arguments)
            return f"{name}({inner})"
        raise TypeError(f"not a term: {term!r}")

    def format_formula(self, formula: Formula) -> str:
        """Render a formula with the names bound in this scope."""
        if isinstance(formula, TermFormula):
            return self.format_term(formula.term)
        if isinstance(formula, PredicateApplication):
            name = self._name(formula.identifier, f"P{formula.identifier}")
            inner = ", ".join(self.format_term(argument) for argument in formula.arguments)
            return f"{name}({inner})"
        if isinstance(formula, Not):
            inner = self.format_formula(formula.inner)
            if isinstance(formula.inner, (TermFormula, PredicateApplication)):
                return f"¬{inner}"
            return f"¬({inner})"
        if isinstance(formula, (ForAll, ThereExist)):
            symbol = "∀" if isinstance(formula, ForAll) else "∃"
            name = self._name(formula.variable, str(formula.variable))
            return f"{symbol}{name}.({self.format_formula(formula.inner)})"
        for selector, prefix in _SELECTOR_PREFIXES.items():
            if isinstance(formula, selector):
                left = self.format_formula(formula.left)
                right = self.format_formula(formula.right)
                return f"{prefix}({left}, {right})"
        parenthesize = type(formula).parenthesize

        def wrap(child: Formula) -> str:
            text = self.format_formula(child)
            return f"({text})" if isinstance(child, parenthesize) else text

        return f"{wrap(formula.left)}{type(formula).infix}{wrap(formula.right)}"

    # --- identifiers -----------------------------------------------------

    def is_variable(self, identifier: int) -> bool:
        return identifier in self._variables

    def is_function(self, identifier: int) -> bool:
        return identifier in self._functions

    def is_predicate(self, identifier: int) -> bool:
        return identifier in self._predicates

    def _allocate(self) -> int:
        if self._last_allocated_id >= IDENTIFIER_LIMIT:
            raise ScopeError("Can't allocate: no more space in identifier space")
        self._last_allocated_id += 1
        return self._last_allocated_id

    def bind_repr(self, identifier: int, repr: str) -> None:
        """Give an identifier its printed name; an identifier has at most one."""
        existing = self._reprs.get(identifier)
        if existing is not None:
            raise ScopeError(
                f"{repr} ({identifier}) already bound to {existing}, cannot bind to {repr}"
            )
        self._reprs[identifier] = repr
        self._rev_reprs[repr] = identifier

    def get_identifier(self, repr: str) -> Optional[int]:
        return self._rev_reprs.get(repr)

    def allocate_lambda_variable(self) -> Variable:
        """Allocate an unnamed variable."""
        identifier = self._allocate()
        self._variables[identifier] = None
        return Variable(identifier)

    def allocate_variable(self, repr: str) -> Variable:
        """Allocate a named variable."""
        identifier = self._allocate()
        self._variables[identifier] = None
        self.bind_repr(identifier, repr)
        return Variable(identifier)

    def allocate_lambda_variables(self, count: int) -> list[Variable]:
        return [self.allocate_lambda_variable() for _ in range(count)]

    def allocate_variables(self, count: int, repr: Callable[[int], str]) -> list[Variable]:
        """Allocate ``count`` variables, the n-th named ``repr(n)``."""
        return [self.allocate_variable(repr(n)) for n in range(count)]

    def make_predicate(self, arity: int, repr: str) -> int:
        identifier = self._allocate()
        self._predicates[identifier] = Predicate(arity)
        self.bind_repr(identifier, repr)
        return identifier

    def make_function(
        self, arity: int, repr: str, application: Callable[[list[Term]], Term]
    ) -> int:
        identifier = self._allocate()
        self._functions[identifier] = Function(arity, application)
        self.bind_repr(identifier, repr)
        return identifier

    # --- values ----------------------------------------------------------

    def bind(self, variable: int, value: int) -> None:
        """Give a variable a value of the domain."""
        if variable not in self._variables:
            raise ScopeError(f"Can only bind to variable, not {variable}")
        self._bindings[variable] = value

    def unbind(self, variable: int) -> None:
        if variable not in self._variables:
            raise ScopeError(f"Can only unbind from variables, not {variable}")
        self._bindings.pop(variable, None)

    def get_value(self, variable: int) -> Optional[int]:
        return self._bindings.get(variable)

    def get_function(self, identifier: int) -> Function:
        try:
            return self._functions[identifier]
        except KeyError:
            raise ScopeError(f"Unknown function: {identifier}") from None

    def get_predicate(self, identifier: int) -> Predicate:
        try:
            return self._predicates[identifier]
        except KeyError:
            raise ScopeError(f"Unknown predicate: {identifier}") from None

    def parse_term(self, source: str) -> Term:
        """Parse a term written with the names of this scope."""
        return parse_term(self, source)