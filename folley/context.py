"""A proof state: theorems, goals and the commands that transform them."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from folley.formula import TRUE, ForAll, Formula, Imply, Not, ThereExist
from folley.operation import (
    Combine,
    Contradict,
    Eval,
    Instantiate,
    ModusPonens,
    ModusPonensGoal,
    Name,
    Operation,
    OperationError,
    Qed,
    Rewrite,
    Simplify,
    parse_operation,
)
from folley.scope import Scope


class ProofError(ValueError):
    """Raised when a command cannot be applied to the proof state."""


class Context:
    """Theorems known so far, goals left to prove, and the scope they live in."""

    def __init__(
        self, theorems: Iterable[Formula], goals: Iterable[Formula], scope: Scope
    ) -> None:
        self.theorems: list[Formula] = list(theorems)
        self.goals: list[Formula] = list(goals)
        self.scope = scope
        self.mutated = True

    def __str__(self) -> str:
        lines = ["Theorems:"]
        lines += [
            f"  [{i}] {self.scope.format_formula(theorem)}"
            for i, theorem in enumerate(self.theorems)
        ]
        lines.append("Goals:")
        lines += [
            f"  [{i}] {self.scope.format_formula(goal)}" for i, goal in enumerate(self.goals)
        ]
        return "\n".join(lines)

    @property
    def solved(self) -> bool:
        return not self.goals

    def _theorem(self, key: int) -> Formula:
        if not 0 <= key < len(self.theorems):
            raise ProofError(f"invalid theorem key: {key}")
        return self.theorems[key]

    def _pop_goal(self) -> Formula:
        if not self.goals:
            raise ProofError("no goal in this context")
        return self.goals.pop()

    def apply(self, operation: Operation) -> str:
        """Apply a command; return a message or raise ProofError."""
        match operation:
            case Instantiate(theorem=key, values=values):
                theorem = self._theorem(key)
                valuation: dict[int, int] = {}
                for value in values:
                    if not isinstance(theorem, ForAll):
                        raise ProofError(
                            f"outermost Formula is not ForAll, it is {theorem.description()}"
                        )
                    valuation[theorem.variable] = value
                    theorem = theorem.inner
                self.theorems.append(theorem.bound(valuation))
                self.mutated = True
                return f"instantiated with valuation {valuation}"

            case ModusPonens(theorem=key):
                theorem = self._theorem(key)
                if not isinstance(theorem, Imply):
                    raise ProofError(
                        f"outermost Formula is not an Implication, it is {theorem.description()}"
                    )
                self.theorems.append(theorem.right)
                self.goals.append(theorem.left)
                self.mutated = True
                return "done"

            case ModusPonensGoal():
                goal = self._pop_goal()
                if not isinstance(goal, Imply):
                    self.goals.append(goal)
                    raise ProofError(
                        f"outermost Formula is not an Implication, it is {goal.description()}"
                    )
                self.theorems.append(goal.left)
                self.goals.append(goal.right)
                self.mutated = True
                return "done"

            case Name(values=values):
                backup = self._pop_goal()
                goal = backup
                valuation = {}
                for value in values:
                    if not isinstance(goal, ThereExist):
                        self.goals.append(backup)
                        raise ProofError(
                            f"outermost Formula is not ThereExist, it is {goal.description()}"
                        )
                    valuation[goal.variable] = value
                    goal = goal.inner
                self.goals.append(goal.bound(valuation))
                self.mutated = True
                return "instantiated"

            case Rewrite(theorem=key):
                if not self.goals:
                    raise ProofError("no goal in this context")
                theorem = self._theorem(key)
                rewritten, changed = self.goals[-1].rewrite(theorem)
                if not changed:
                    return "nothing to rewrite"
                self.goals[-1] = rewritten
                self.mutated = True
                return "rewritten"

            case Eval():
                if not self.goals:
                    raise ProofError("no goal in this context")
                evaluated = self.goals[-1].evaluate(self.scope)
                if evaluated is None:
                    return "not evaluable"
                self.goals[-1] = evaluated
                self.mutated = True
                return "evaluated"

            case Qed():
                goal = self._pop_goal()
                if goal == TRUE:
                    self.mutated = True
                    return "∎ proved"
                self.goals.append(goal)
                return f"goal is not ⊤, goal is {goal.description()}"

            case Contradict():
                goal = self._pop_goal()
                self.goals.append(Not(Not(goal)))
                self.mutated = True
                return "added double negation"

            case Combine(a=a, b=b):
                theorem_a = self._theorem(a)
                theorem_b = self._theorem(b)
                combined, changed = theorem_a.rewrite(theorem_b)
                if not changed:
                    return "nothing new to add to theorems"
                self.theorems.append(combined)
                self.mutated = True
                return "added new theorem"

            case Simplify(theorem=key):
                evaluated = self._theorem(key).evaluate(self.scope)
                if evaluated is None:
                    return "not evaluable"
                self.theorems.append(evaluated)
                self.mutated = True
                return "evaluated to a new theorem"

        raise ProofError(f"unknown operation: {operation!r}")

    def mainloop(
        self,
        read_line: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None,
    ) -> bool:
        """Read commands until every goal is proved or input ends.

        Returns whether all goals were proved.
        """
        read_line = read_line or input
        write = write or print
        self.mutated = True

        while self.goals:
            if self.mutated:
                write(str(self))
                self.mutated = False
            try:
                command = read_line("(?) ").strip()
            except EOFError:
                return False
            try:
                operation = parse_operation(command)
            except OperationError as error:
                write(f"(!) {error}")
                continue
            write(f"(...) applying {operation!r}")
            try:
                write(f"(+) {self.apply(operation)}")
            except ProofError as error:
                write(f"(!) {error}")

        write("All is solved! ^-^")
        return True