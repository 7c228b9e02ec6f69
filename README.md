# filkit

`filkit` provides building blocks for a hardware description language whose
types track *when* signals are valid:

* expressions over integer parameters that simplify as they are built;
* time expressions made of an event plus an offset, and differences
  between them;
* ordering constraints and guarded implications over these;
* ordered name bindings used to substitute parameters and events;
* descriptions of external **generator tools** (the modules they can
  produce, the command line used to start them) and of **manifests** that
  list the instances to produce.

It needs only the Python standard library (Python 3.11 or later).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `filkit.loc` | `Loc`, a value paired with an optional source position |
| `filkit.binding` | `Binding`, an insertion-ordered map from names to values; `MissingBindingError` |
| `filkit.expr` | `Expr` and its forms `Concrete`, `Abstract`, `ParamAccess`, `App`, `BinOp`; `Op`, `Fn`, `make_op`, `from_sum`, `ConcretizeError` |
| `filkit.time` | `Time` and the differences `TimeSub`, `TimeUnit`, `TimeSym` |
| `filkit.constraint` | `OrderOp`, `OrderConstraint`, `Constraint` |
| `filkit.implication` | `Implication` (`guard => cons`) |
| `filkit.tool_schema` | `Tool`, `Module`, `Manifest`, `Instance`, `ToolOutput`, `substitute_params`, `FormatError`, `InvalidToolError` |

## Positions and bindings

`Loc(inner, pos)` wraps a value; `Loc.unknown(value)` has no position.
Equality, ordering and hashing look only at the wrapped value. `map`
applies a function and keeps the position, `take` returns the value and
`split` returns `(value, pos)`.

`Binding` keeps names in insertion order; inserting a name again updates
its value and moves it to the end. `find` returns `None` for an unbound
name, while `get` and `b[name]` raise `MissingBindingError`. Iterating
yields `(name, value)` pairs, and `repr` gives `[a->1, b->2]`.

## Expressions

```python
from filkit.loc import Loc
from filkit.binding import Binding
from filkit.expr import Abstract, Concrete

n = Abstract(Loc.unknown("N"))
e = (n + 1) * 2
print(e)                                   # (N+1)*2
print(n + 0 is n)                          # True
r = e.resolve(Binding([("N", Concrete(3))]))
print(r.to_int())                          # 8
```

* `Concrete` holds a 64-bit unsigned value; anything outside that range
  raises `OverflowError`.
* `+`, `-`, `*`, `/` and `%` accept expressions or plain integers and fold
  away adding or subtracting `0`, multiplying by `0` or `1`, dividing by
  `1`, `0 / e`, `0 % e`, `e % 1`, and operations on two constants. `/` is
  integer division. Subtracting a larger constant from a smaller one stays
  symbolic instead of going negative.
* `make_op(op, left, right)` combines two expressions with an `Op`, with
  the same simplifications; `from_sum(values)` is the constant sum of a
  list of integers.
* `Fn` names the built-in functions `pow2`, `log2` (rounded up),
  `sin_bits` and `cos_bits` (the 32-bit float bits of the sine or cosine
  of `2*pi*num/den`) and `bit_rev` (reverse the low `numbits` bits).
  `Fn.eval(args)` computes one; a wrong number of arguments raises
  `ValueError`.
* `resolve(binding)` substitutes bound `Abstract` names and simplifies
  again; `to_int()` returns the value of a constant or raises
  `ConcretizeError`.
* `str()` prints with only the parentheses needed.

## Times and constraints

`Time(event, offset)` prints as `G+1`; `Time.unit(event, n)` is the time
`n` cycles after the event. Subtracting two times on the same event gives
`TimeUnit(offset difference)`, otherwise `TimeSym(l, r)`.
`resolve_event` replaces the event by its binding and adds the offset
(an unbound event raises `MissingBindingError`); `resolve_expr`
substitutes parameters in the offset.

`OrderConstraint(left, right, op)` is built with `gt`, `gte`, `eq`, `lt`
and `lte`; `lt` and `lte` store the reversed `>` / `>=` form. It resolves
parameters with `resolve_expr`, events with `resolve_event` (time
constraints only; expression constraints raise `TypeError`), and `exprs()`
lists both sides. `Constraint` wraps an ordering over times or time
differences; `Constraint.lt(a, b)` states `a < b`.

`Implication.implies(guard, cons)`, `Implication.fact(cons)` and
`Implication.iff(a, b)` (a pair of implications) build guarded
constraints; `exprs()` lists the guard's sides, then the consequent's.

## Generator tool descriptions

A tool is described in TOML:

```toml
name = "gen-adder"
path = "/opt/tools/gen_adder.sh"
requires_out_file = true

[globals]
prefix = "fil"

[modules.Adder]
parameters = ["WIDTH"]
name_format = "${prefix}_adder_${WIDTH}"
cli_format = "--width ${WIDTH} --out ${OUT_FILE}"
outputs = { LATENCY = "latency" }
```

and a manifest lists the instances to produce:

```toml
[[modules]]
name = "Adder"
parameters = ["32"]
```

```python
from filkit.tool_schema import Manifest, Tool, substitute_params

print(substitute_params("mod_${W}", [("W", "8")]))     # mod_8

tool = Tool.from_toml(open("gen_adder.toml").read())
tool.validate()
module = tool.get_module("Adder")
params = [("WIDTH", "32"), ("prefix", "fil")]
print(module.name(params))                            # fil_adder_32

manifest = Manifest.from_toml(open("manifest.toml").read())
for instance in manifest.modules:
    print(instance)                                   # Adder[32]
```

`substitute_params` replaces each `${name}` with the first matching
value; a missing `{`, an empty name or an unknown name raises
`FormatError`. `Tool.from_toml` / `Tool.from_dict` raise
`InvalidToolError` for malformed descriptions. `Tool.validate` raises
`InvalidToolError` when the tool's `path` does not exist or when a
module's `name_format` or `cli_format` uses a name other than its
parameters, the globals, `NAME_FORMAT`, or `OUT_FILE` (the last only when
`requires_out_file` is true). `ToolOutput` holds a generated module's
name, file and existential parameter values.

## What this package does not do

* It has no command-line program and does not run generator tools: it
  describes tools and manifests, but starting a tool, writing its output
  files and reading values back from it are left to the caller.
* It does not parse source files, and has no nodes for ranges, ports,
  bundles, commands, signatures, components or namespaces.