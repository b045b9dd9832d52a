# folley

An interactive proof assistant for first-order logic over the natural numbers.
You keep a list of theorems and a stack of goals and close the goals one step at
a time: instantiate quantifiers, apply modus ponens, rewrite with known theorems
and evaluate closed formulas. The work is done when no goal is left.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Running

```
folley
```

This starts a session loaded with Peano-style axioms for equality, successor,
addition and multiplication, together with a definition of evenness. The goal is:

```
Even(X) ∧ Even(Y) → Even(+(X, Y))
```

Whenever the theorems or goals change, the session prints them numbered, then
shows a `(?)` prompt. Every command is echoed as `(...) applying ...`, followed
by `(+) message` when it worked or `(!) message` when it did not. Once every
goal is closed it prints `All is solved! ^-^` and exits with status 0; if input
ends first it exits with status 1. The command takes no options besides `--help`.

## Commands

Commands act on the theorem with the given number or on the last goal in the
list (the "top" goal).

| Command              | Effect                                                                      |
|----------------------|-----------------------------------------------------------------------------|
| `instantiate N`      | copy theorem N                                                              |
| `instantiate N with 1,2` | strip one leading `∀` of theorem N per value, binding it; add the result |
| `modus ponens N`     | theorem N is `A → B`: add B as a theorem, push A as a goal                  |
| `modus ponens G`     | the top goal is `A → B`: add A as a theorem, replace the goal with B        |
| `name 3,4`           | give witnesses for the leading `∃` quantifiers of the top goal              |
| `rewrite with N`     | replace copies of theorem N inside the top goal with `⊤`                    |
| `eval`               | simplify the top goal                                                       |
| `simplify N`         | simplify theorem N and add the result                                       |
| `combine N with M`   | rewrite theorem N with theorem M and add the result                         |
| `contradict`         | wrap the top goal in a double negation                                      |
| `qed`                | close the top goal once it is `⊤`                                           |

Values given to `instantiate ... with` and `name` are read one character at a
time: each digit is one value, commas are skipped, and anything else, spaces
included, is rejected. So `with 1,2` binds 1 and 2, and `with 12` does the same;
values above 9 cannot be given this way.

`eval` and `simplify` only do something when every variable in the formula has
a value in the scope; otherwise they report `not evaluable`.

## Using it as a library

Build your own vocabulary with `folley.scope.Scope`, write formulas with the
helpers in `folley.notation` (`for_all`, `there_exist`, `imply`, `and_`, `or_`,
`not_`, `iff`, `predicate`, `function`, `value`, `term`), and drive a
`folley.context.Context` yourself:

```python
from folley.context import Context
from folley.notation import for_all, predicate, value
from folley.operation import parse_operation
from folley.scope import Scope

scope = Scope()
x = scope.allocate_variable("X")
eq = scope.make_predicate(2, "Eq")

theorems = [for_all(x, predicate(eq, [x, x]))]
goals = [predicate(eq, [value(1), value(1)])]

context = Context(theorems, goals, scope)
print(context.apply(parse_operation("instantiate 0 with 1")))
print(context.apply(parse_operation("rewrite with 1")))
print(context.apply(parse_operation("qed")))   # ∎ proved
print(context.solved)                          # True
```

- `Context.apply` returns a message when a step works and raises
  `folley.context.ProofError` when it does not apply.
- `Context.mainloop(read_line, write)` runs the prompt loop with your own input
  and output callables (by default `input` and `print`) and returns whether all
  goals were proved.
- `parse_operation` (in `folley.operation`) raises `OperationError` for input it
  cannot read.
- `Scope.parse_term` reads a term written with the scope's names, such as
  `S(+(X, 2))`; `T` and `F` stand for `⊤` and `⊥`. Errors raise
  `folley.term.TermError`.
- `Scope.bind` gives a variable a value so that formulas containing it can be
  evaluated; `Scope.make_function` takes a Python callable that computes the
  function on evaluated argument terms.
- `Scope.format_formula` prints a formula with the names bound in the scope.
- `folley.cli.peano_context()` builds the context that the `folley` command
  starts with.

Formulas are immutable: `Formula.rewrite`, `Formula.bound` and
`Formula.evaluate` return new formulas instead of changing the one they are
called on.

## What it does not do

- There is no parser for formulas: theorems and goals are written in Python
  with `folley.notation`, and the prompt cannot add new ones except through the
  commands above.
- The `folley` command always starts the same arithmetic session; it cannot
  load other axioms or goals.
- Sessions are not saved; the proof state lives only as long as the process.