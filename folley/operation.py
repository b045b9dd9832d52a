"""Commands of the interactive prover and their textual syntax."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


class OperationError(ValueError):
    """Raised when a command cannot be parsed."""


class Operation:
    """Base class of all prover commands."""

    __slots__ = ()


@dataclass(frozen=True)
class Instantiate(Operation):
    """Strip outer universal quantifiers of a theorem, binding their variables."""

    theorem: int
    values: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class ModusPonens(Operation):
    """Split an implication theorem into its conclusion and a goal for its premise."""

    theorem: int


@dataclass(frozen=True)
class ModusPonensGoal(Operation):
    """Assume the premise of the current implication goal."""


@dataclass(frozen=True)
class Name(Operation):
    """Give witnesses to the outer existential quantifiers of the current goal."""

    values: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class Rewrite(Operation):
    """Replace occurrences of a theorem inside the current goal by ⊤."""

    theorem: int


@dataclass(frozen=True)
class Eval(Operation):
    """Simplify the current goal."""


@dataclass(frozen=True)
class Qed(Operation):
    """Close the current goal if it is ⊤."""


@dataclass(frozen=True)
class Contradict(Operation):
    """Wrap the current goal in a double negation."""


@dataclass(frozen=True)
class Combine(Operation):
    """Rewrite theorem ``a`` with theorem ``b`` into a new theorem."""

    a: int
    b: int


@dataclass(frozen=True)
class Simplify(Operation):
    """Simplify a theorem into a new theorem."""

    theorem: int


_INSTANTIATE_RE = re.compile(
    r"instantiate *(?P<theorem>\d+) *(?:with *(?P<values>[^,]+ *(?:, *[^,]+ *)*))? *"
)
_MODUS_PONENS_RE = re.compile(r"modus ponens *(?P<theorem>\d+|G) *")
_NAME_RE = re.compile(r"name *(?P<values>[^,]+ *(?:, *[^,]+ *)*) *")
_REWRITE_RE = re.compile(r"rewrite with *(?P<theorem>\d+) *")
_EVAL_RE = re.compile(r"eval")
_QED_RE = re.compile(r"qed")
_CONTRADICT_RE = re.compile(r"contradict")
_COMBINE_RE = re.compile(r"combine *(?P<a>\d+) *with *(?P<b>\d+) *")
_SIMPLIFY_RE = re.compile(r"simplify *(?P<theorem>\d+) *")


def _parse_key(text: str) -> int:
    if text.isascii() and text.isdigit():
        return int(text)
    raise OperationError(f"Cannot parse {text} as a key")


def _parse_values(text: Optional[str], message: str) -> tuple[int, ...]:
    """Each non-comma character is one value of the domain."""
    if text is None:
        return ()
    values = []
    for char in text:
        if char == ",":
            continue
        if not (char.isascii() and char.isdigit()):
            raise OperationError(message.format(char))
        values.append(int(char))
    return tuple(values)


def parse_operation(source: str) -> Operation:
    """Parse a command line into an operation."""
    if match := _INSTANTIATE_RE.search(source):
        values = _parse_values(
            match["values"], "Unable to parse {} to a domain value"
        )
        return Instantiate(_parse_key(match["theorem"]), values)
    if match := _MODUS_PONENS_RE.search(source):
        if match["theorem"].startswith("G"):
            return ModusPonensGoal()
        return ModusPonens(_parse_key(match["theorem"]))
    if match := _NAME_RE.search(source):
        return Name(_parse_values(match["values"], "Unknown symbol {}"))
    if match := _REWRITE_RE.search(source):
        return Rewrite(_parse_key(match["theorem"]))
    if _EVAL_RE.search(source):
        return Eval()
    if _QED_RE.search(source):
        return Qed()
    if _CONTRADICT_RE.search(source):
        return Contradict()
    if match := _COMBINE_RE.search(source):
        return Combine(_parse_key(match["a"]), _parse_key(match["b"]))
    if match := _SIMPLIFY_RE.search(source):
        return Simplify(_parse_key(match["theorem"]))
    raise OperationError("Couldn't parse source")