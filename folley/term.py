"""Terms of first-order formulas and a parser for their textual form."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from folley.symbols import Function

DOMAIN_LIMIT = 2**128
_DOMAIN_RE = re.compile(r"\+?[0-9]+")


class TermError(ValueError):
    """Raised when a term cannot be parsed or evaluated."""


class _TermScope(Protocol):
    def get_identifier(self, repr: str) -> Optional[int]: ...
    def is_variable(self, identifier: int) -> bool: ...
    def is_function(self, identifier: int) -> bool: ...
    def is_predicate(self, identifier: int) -> bool: ...
    def get_value(self, variable: int) -> Optional[int]: ...
    def get_function(self, identifier: int) -> "Function": ...


class Term:
    """Base class of all terms."""

    __slots__ = ()

    def bound(self, valuation: Mapping[int, int]) -> "Term":
        """Replace variables found in the valuation by their values."""
        return self

    def evaluate(self, scope: _TermScope) -> Optional["Term"]:
        """Compute the term in a scope; None if a variable is unbound."""
        return self


@dataclass(frozen=True)
class Top(Term):
    """The true constant."""

    def __str__(self) -> str:
        return "⊤"


@dataclass(frozen=True)
class Bottom(Term):
    """The false constant."""

    def __str__(self) -> str:
        return "⊥"


@dataclass(frozen=True)
class Variable(Term):
    """A variable, known by its identifier."""

    identifier: int

    def __str__(self) -> str:
        return f"${self.identifier}"

    def bound(self, valuation: Mapping[int, int]) -> Term:
        if self.identifier in valuation:
            return Value(valuation[self.identifier])
        return self

    def evaluate(self, scope: _TermScope) -> Optional[Term]:
        value = scope.get_value(self.identifier)
        return None if value is None else Value(value)


@dataclass(frozen=True)
class Value(Term):
    """A value of the domain, a non-negative integer."""

    value: int

    def __str__(self) -> str:
        return f"#{self.value}"


@dataclass(frozen=True)
class Application(Term):
    """A function symbol applied to argument terms."""

    identifier: int
    arguments: tuple[Term, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def __str__(self) -> str:
        inner = ", ".join(str(argument) for argument in self.arguments)
        return f"f{self.identifier}({inner})"

    def bound(self, valuation: Mapping[int, int]) -> Term:
        return Application(
            self.identifier, tuple(argument.bound(valuation) for argument in self.arguments)
        )

    def evaluate(self, scope: _TermScope) -> Optional[Term]:
        values = []
        for argument in self.arguments:
            value = argument.evaluate(scope)
            if value is None:
                return None
            values.append(value)
        function = scope.get_function(self.identifier)
        if function.arity != len(self.arguments):
            raise TermError(
                f"Function {self.identifier} expects {function.arity} arguments, "
                f"{len(self.arguments)} given"
            )
        return function.apply(values)


class TokenKind(Enum):
    CHARS = "chars"
    OPEN = "("
    CLOSE = ")"


@dataclass(frozen=True)
class Token:
    """A lexical token of a term's text."""

    kind: TokenKind
    text: str = ""


def tokenize(source: str) -> list[Token]:
    """Split text into words and parentheses; whitespace and commas separate."""
    tokens: list[Token] = []
    buffer: list[str] = []

    def flush() -> None:
        if buffer:
            tokens.append(Token(TokenKind.CHARS, "".join(buffer)))
            buffer.clear()

    for char in source:
        if char == "(":
            flush()
            tokens.append(Token(TokenKind.OPEN))
        elif char == ")":
            flush()
            tokens.append(Token(TokenKind.CLOSE))
        elif char.isspace() or char == ",":
            flush()
        else:
            buffer.append(char)
    flush()
    return tokens


def _parse_domain(text: str) -> Optional[int]:
    if not _DOMAIN_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value < DOMAIN_LIMIT else None


def build_term(scope: _TermScope, tokens: Iterable[Token]) -> Term:
    """Build a single term from tokens, resolving names through the scope."""
    argument_stack: list[list[Term]] = [[]]
    func_stack: list[int] = []
    depth = 0

    for token in tokens:
        if token.kind is TokenKind.CHARS:
            text = token.text
            if text == "T":
                argument_stack[-1].append(Top())
            elif text == "F":
                argument_stack[-1].append(Bottom())
            else:
                identifier = scope.get_identifier(text)
                if identifier is not None:
                    if scope.is_variable(identifier):
                        argument_stack[-1].append(Variable(identifier))
                    elif scope.is_function(identifier):
                        func_stack.append(identifier)
                        argument_stack.append([])
                    elif scope.is_predicate(identifier):
                        raise TermError(
                            f"Predicate ({identifier}) not allowed, expected Term"
                        )
                    else:
                        raise TermError(f"unknown identifier type: {identifier}")
                else:
                    value = _parse_domain(text)
                    if value is None:
                        raise TermError(f"{text} could not be understood")
                    argument_stack[-1].append(Value(value))
        elif token.kind is TokenKind.OPEN:
            depth += 1
            if depth != len(func_stack) or argument_stack[-1]:
                raise TermError("Unexpected '('")
        else:
            if not func_stack:
                raise TermError("Unexpected ')': no function mentionned")
            func_id = func_stack.pop()
            arguments = argument_stack.pop()
            if depth == 0:
                raise TermError("Unexpected ')'")
            depth -= 1
            if depth != len(func_stack):
                raise TermError("Unexpected ')'")
            argument_stack[-1].append(Application(func_id, arguments))

    context = argument_stack.pop()
    if argument_stack:
        raise TermError("Too many Terms specified")
    if not context:
        raise TermError("No Term found")
    term = context.pop()
    if context:
        raise TermError("Too many Terms specified")
    return term


def parse_term(scope: _TermScope, source: str) -> Term:
    """Parse the textual form of a term."""
    return build_term(scope, tokenize(source))