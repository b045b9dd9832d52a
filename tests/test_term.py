import pytest

from folley.symbols import Function, Predicate
from folley.term import (
    Application,
    Bottom,
    Token,
    TokenKind,
    Top,
    TermError,
    Value,
    Variable,
    build_term,
    parse_term,
    tokenize,
)


class _Scope:
    """A minimal scope exposing what terms need."""

    def __init__(self):
        self._last = 0
        self._reprs = {}
        self._variables = set()
        self._functions = {}
        self._predicates = {}
        self._bindings = {}

    def _allocate(self, repr):
        self._last += 1
        self._reprs[repr] = self._last
        return self._last

    def allocate_variable(self, repr):
        identifier = self._allocate(repr)
        self._variables.add(identifier)
        return Variable(identifier)

    def make_function(self, arity, repr, application):
        identifier = self._allocate(repr)
        self._functions[identifier] = Function(arity, application)
        return identifier

    def make_predicate(self, arity, repr):
        identifier = self._allocate(repr)
        self._predicates[identifier] = Predicate(arity)
        return identifier

    def bind(self, variable, value):
        self._bindings[variable] = value

    def get_identifier(self, repr):
        return self._reprs.get(repr)

    def is_variable(self, identifier):
        return identifier in self._variables

    def is_function(self, identifier):
        return identifier in self._functions

    def is_predicate(self, identifier):
        return identifier in self._predicates

    def get_value(self, variable):
        return self._bindings.get(variable)

    def get_function(self, identifier):
        return self._functions[identifier]


def _identity(args):
    return args[0]


def _add(args):
    return Value(args[0].value + args[1].value)


def test_tokenize_simple():
    tokens = tokenize("T")
    assert tokens == [Token(TokenKind.CHARS, "T")]


def test_tokenize_parens_and_whitespace():
    assert tokenize("f ( x , y )") == [
        Token(TokenKind.CHARS, "f"),
        Token(TokenKind.OPEN),
        Token(TokenKind.CHARS, "x"),
        Token(TokenKind.CHARS, "y"),
        Token(TokenKind.CLOSE),
    ]


def test_tokenize_function():
    assert tokenize("f ( X )") == [
        Token(TokenKind.CHARS, "f"),
        Token(TokenKind.OPEN),
        Token(TokenKind.CHARS, "X"),
        Token(TokenKind.CLOSE),
    ]


def test_tokenize_without_spaces():
    assert tokenize("f(x,y)") == tokenize("f ( x , y )")


def test_build_term_true_false():
    scope = _Scope()
    assert build_term(scope, tokenize("T")) == Top()
    assert build_term(scope, tokenize("F")) == Bottom()


def test_build_term_variable():
    scope = _Scope()
    var = scope.allocate_variable("X")
    assert build_term(scope, tokenize("X")) == var


def test_build_term_function():
    scope = _Scope()
    var = scope.allocate_variable("X")
    func_id = scope.make_function(1, "f", _identity)
    assert build_term(scope, tokenize("f ( X )")) == Application(func_id, [var])


def test_build_term_unknown_identifier():
    with pytest.raises(TermError):
        build_term(_Scope(), tokenize("Y"))


def test_build_term_nested_functions():
    scope = _Scope()
    var_x = scope.allocate_variable("X")
    var_y = scope.allocate_variable("Y")
    func_g = scope.make_function(1, "g", _identity)
    func_f = scope.make_function(2, "f", _identity)
    term = build_term(scope, tokenize("f ( g ( X ) , Y )"))
    assert term == Application(func_f, [Application(func_g, [var_x]), var_y])


def test_parse_value():
    assert parse_term(_Scope(), "42") == Value(42)


def test_parse_value_with_plus_sign():
    assert parse_term(_Scope(), "+7") == Value(7)


def test_parse_negative_value_rejected():
    with pytest.raises(TermError):
        parse_term(_Scope(), "-1")


def test_parse_predicate_rejected():
    scope = _Scope()
    scope.make_predicate(2, "Eq")
    with pytest.raises(TermError, match="Predicate"):
        parse_term(scope, "Eq")


def test_parse_unexpected_open_paren():
    with pytest.raises(TermError, match=r"Unexpected '\('"):
        parse_term(_Scope(), "( 1")


def test_parse_unexpected_close_paren():
    with pytest.raises(TermError):
        parse_term(_Scope(), ")")


def test_parse_too_many_terms():
    with pytest.raises(TermError, match="Too many"):
        parse_term(_Scope(), "1 2")


def test_parse_unclosed_function():
    scope = _Scope()
    scope.make_function(1, "f", _identity)
    with pytest.raises(TermError, match="Too many"):
        parse_term(scope, "f ( 1")


def test_parse_empty():
    with pytest.raises(TermError, match="No Term"):
        parse_term(_Scope(), "")


def test_str_forms():
    assert str(Top()) == "⊤"
    assert str(Bottom()) == "⊥"
    assert str(Variable(3)) == "$3"
    assert str(Value(5)) == "#5"
    assert str(Application(4, [Variable(1), Value(2)])) == "f4($1, #2)"


def test_bound_replaces_variables():
    term = Application(9, [Variable(1), Variable(2)])
    assert term.bound({1: 10}) == Application(9, [Value(10), Variable(2)])


def test_bound_leaves_constants():
    assert Top().bound({1: 3}) == Top()
    assert Value(4).bound({4: 1}) == Value(4)


def test_evaluate_bound_variable():
    scope = _Scope()
    x = scope.allocate_variable("X")
    scope.bind(x.identifier, 6)
    assert x.evaluate(scope) == Value(6)


def test_evaluate_unbound_variable_is_none():
    scope = _Scope()
    x = scope.allocate_variable("X")
    assert x.evaluate(scope) is None
    add = scope.make_function(2, "+", _add)
    assert Application(add, [x, Value(1)]).evaluate(scope) is None


def test_evaluate_function_application():
    scope = _Scope()
    x = scope.allocate_variable("X")
    add = scope.make_function(2, "+", _add)
    scope.bind(x.identifier, 2)
    term = parse_term(scope, "+(X, +(3, 4))")
    assert term.evaluate(scope) == Value(9)


def test_evaluate_arity_mismatch():
    scope = _Scope()
    add = scope.make_function(2, "+", _add)
    with pytest.raises(TermError, match="expects 2 arguments"):
        Application(add, [Value(1)]).evaluate(scope)