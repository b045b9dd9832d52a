import pytest

from folley.context import Context, ProofError
from folley.formula import (
    TRUE,
    And,
    ForAll,
    Imply,
    Not,
    PredicateApplication,
    ThereExist,
)
from folley.operation import (
    Combine,
    Contradict,
    Eval,
    Instantiate,
    ModusPonens,
    ModusPonensGoal,
    Name,
    Qed,
    Rewrite,
    Simplify,
)
from folley.scope import Scope
from folley.term import Value


@pytest.fixture
def world():
    scope = Scope()
    x = scope.allocate_variable("X")
    eq = scope.make_predicate(2, "Eq")
    p = scope.make_predicate(1, "P")
    return scope, x, eq, p


def make(world, theorems=(), goals=()):
    scope = world[0]
    return Context(theorems, goals, scope)


def test_instantiate_binds_forall(world):
    scope, x, eq, _ = world
    ctx = make(world, [ForAll(x.identifier, PredicateApplication(eq, (x, x)))], [TRUE])
    ctx.apply(Instantiate(0, (5,)))
    assert ctx.theorems[-1] == PredicateApplication(eq, (Value(5), Value(5)))


def test_instantiate_on_non_forall(world):
    _, x, _, p = world
    ctx = make(world, [PredicateApplication(p, (x,))], [TRUE])
    with pytest.raises(ProofError, match="not ForAll"):
        ctx.apply(Instantiate(0, (1,)))
    assert len(ctx.theorems) == 1


def test_invalid_theorem_key(world):
    ctx = make(world, [], [TRUE])
    with pytest.raises(ProofError, match="invalid theorem key"):
        ctx.apply(Simplify(3))


def test_modus_ponens_on_theorem(world):
    _, _, _, p = world
    a = PredicateApplication(p, (Value(1),))
    b = PredicateApplication(p, (Value(2),))
    ctx = make(world, [Imply(a, b)], [TRUE])
    assert ctx.apply(ModusPonens(0)) == "done"
    assert ctx.theorems[-1] == b
    assert ctx.goals[-1] == a


def test_modus_ponens_goal(world):
    _, _, _, p = world
    a = PredicateApplication(p, (Value(1),))
    b = PredicateApplication(p, (Value(2),))
    ctx = make(world, [], [Imply(a, b)])
    ctx.apply(ModusPonensGoal())
    assert ctx.theorems == [a]
    assert ctx.goals == [b]


def test_modus_ponens_goal_keeps_goal_on_failure(world):
    _, _, _, p = world
    goal = PredicateApplication(p, (Value(1),))
    ctx = make(world, [], [goal])
    with pytest.raises(ProofError, match="not an Implication"):
        ctx.apply(ModusPonensGoal())
    assert ctx.goals == [goal]


def test_name_gives_witness(world):
    _, x, eq, _ = world
    ctx = make(world, [], [ThereExist(x.identifier, PredicateApplication(eq, (x, x)))])
    assert ctx.apply(Name((3,))) == "instantiated"
    assert ctx.goals == [PredicateApplication(eq, (Value(3), Value(3)))]


def test_name_failure_restores_goal(world):
    _, x, eq, _ = world
    goal = ThereExist(x.identifier, PredicateApplication(eq, (x, x)))
    ctx = make(world, [], [goal])
    with pytest.raises(ProofError, match="not ThereExist"):
        ctx.apply(Name((1, 2)))
    assert ctx.goals == [goal]


def test_rewrite_then_qed(world):
    _, x, _, p = world
    fact = PredicateApplication(p, (x,))
    ctx = make(world, [fact], [fact])
    assert ctx.apply(Rewrite(0)) == "rewritten"
    assert ctx.goals == [TRUE]
    assert ctx.apply(Qed()) == "∎ proved"
    assert ctx.solved


def test_rewrite_nothing(world):
    _, x, _, p = world
    ctx = make(world, [PredicateApplication(p, (x,))], [TRUE])
    assert ctx.apply(Rewrite(0)) == "nothing to rewrite"
    assert ctx.goals == [TRUE]


def test_eval_and_not_evaluable(world):
    _, x, _, p = world
    ctx = make(world, [], [And(TRUE, TRUE)])
    assert ctx.apply(Eval()) == "evaluated"
    assert ctx.goals == [TRUE]
    unbound = PredicateApplication(p, (x,))
    ctx.goals = [unbound]
    assert ctx.apply(Eval()) == "not evaluable"
    assert ctx.goals == [unbound]


def test_qed_on_unproved_goal(world):
    _, _, _, p = world
    goal = PredicateApplication(p, (Value(1),))
    ctx = make(world, [], [goal])
    assert ctx.apply(Qed()) == "goal is not ⊤, goal is Predicate"
    assert ctx.goals == [goal]


def test_contradict(world):
    _, _, _, p = world
    goal = PredicateApplication(p, (Value(1),))
    ctx = make(world, [], [goal])
    ctx.apply(Contradict())
    assert ctx.goals == [Not(Not(goal))]


def test_combine_and_simplify(world):
    _, _, _, p = world
    a = PredicateApplication(p, (Value(1),))
    b = PredicateApplication(p, (Value(2),))
    ctx = make(world, [Imply(a, b), a], [TRUE])
    assert ctx.apply(Combine(0, 1)) == "added new theorem"
    assert ctx.theorems[-1] == Imply(TRUE, b)
    assert ctx.apply(Simplify(2)) == "evaluated to a new theorem"
    assert ctx.theorems[-1] == b


def test_no_goal(world):
    ctx = make(world, [], [])
    with pytest.raises(ProofError, match="no goal in this context"):
        ctx.apply(Eval())


def test_display(world):
    _, x, eq, _ = world
    ctx = make(world, [ForAll(x.identifier, PredicateApplication(eq, (x, x)))], [TRUE])
    assert str(ctx) == "Theorems:\n  [0] ∀X.(Eq(X, X))\nGoals:\n  [0] ⊤"


def test_mainloop_reports_and_solves(world):
    ctx = make(world, [], [TRUE])
    commands = iter(["bogus", "qed"])
    output = []
    assert ctx.mainloop(lambda prompt: next(commands), output.append) is True
    assert "(!) Couldn't parse source" in output
    assert "(+) ∎ proved" in output
    assert output[-1] == "All is solved! ^-^"


def test_mainloop_stops_at_end_of_input(world):
    ctx = make(world, [], [TRUE])

    def read(prompt):
        raise EOFError

    output = []
    assert ctx.mainloop(read, output.append) is False
    assert ctx.goals == [TRUE]