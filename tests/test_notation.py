import pytest

from folley.formula import (
    TRUE,
    FALSE,
    And,
    ForAll,
    Imply,
    Not,
    Nxor,
    Or,
    PredicateApplication,
    TermFormula,
    ThereExist,
)
from folley.notation import (
    and_,
    for_all,
    function,
    iff,
    imply,
    not_,
    or_,
    predicate,
    term,
    there_exist,
    value,
)
from folley.term import Application, Top, Value, Variable


def test_connectives():
    assert imply(TRUE, FALSE) == Imply(TRUE, FALSE)
    assert and_(TRUE, FALSE) == And(TRUE, FALSE)
    assert or_(TRUE, FALSE) == Or(TRUE, FALSE)
    assert not_(TRUE) == Not(TRUE)
    assert iff(TRUE, FALSE) == Nxor(TRUE, FALSE)


def test_terms():
    assert value(7) == Value(7)
    assert term(Top()) == TRUE
    assert term(Value(2)) == TermFormula(Value(2))


def test_quantifiers():
    x = Variable(3)
    assert for_all(x, TRUE) == ForAll(3, TRUE)
    assert there_exist(x, TRUE) == ThereExist(3, TRUE)


@pytest.mark.parametrize("quantifier", [for_all, there_exist])
def test_quantifier_over_non_variable(quantifier):
    with pytest.raises(ValueError, match="non-variable"):
        quantifier(Value(1), TRUE)


def test_applications():
    x = Variable(1)
    assert predicate(2, [x, Value(0)]) == PredicateApplication(2, (x, Value(0)))
    assert function(4, [x]) == Application(4, (x,))