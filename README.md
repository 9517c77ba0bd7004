# jigsat

The components of a conflict-driven clause-learning (CDCL) SAT solver, written
as plain Python modules that can be combined and tested one by one:

- `jigsat.lit` – `Lit` (a literal encoded as `2 * var + polarity`) and
  `Assignments` (per-variable values 0, 1 or 2 for unassigned).
- `jigsat.clause` – `Clause`, with LBD computation, abstraction bits,
  subsumption checks (`subsumes`, returning a `SubsumptionRes`) and
  strengthening.
- `jigsat.formula` – `Formula`, the clause database, with learnt-clause
  bookkeeping, `reduce_db`, garbage collection and satisfied-clause removal.
- `jigsat.watches` – `Watches` and `Watcher`, two-watched-literal lists with
  blocker literals.
- `jigsat.trail` – `Trail`, the assignment trail with decision levels, reasons,
  backtracking and unit learning.
- `jigsat.unit_prop` – `unit_propagate`, returning a `Propagation` with the
  conflicting clause (or `None`) and the updated tick count.
- `jigsat.conflict_analysis` – `analyze_conflict`, first-UIP analysis giving
  `Ground`, `Unit` or `Learned`.
- `jigsat.minimize` – recursive and local minimisation of learnt clauses.
- `jigsat.decision` – `Vsids` (activity heap) and `Vmtf` (move-to-front queue)
  branching heuristics, both implementing `Decisions`.
- `jigsat.restart` – Glucose-style EMA restarts, Luby restarts and `Restart`
  to switch between them.
- `jigsat.target_phase` – saved, target and best phases and the rephasing
  cycle.
- `jigsat.modes` – `SearchMode`, `adapt_solver` and `change_mode`.
- `jigsat.preprocess` – `Preprocess`, backward subsumption, self-subsuming
  resolution and bounded variable elimination on an unwatched formula.
- `jigsat.results` – `SatResult` and `Status`.
- `jigsat.friday` – `solve_naive`, an exhaustive solver for tiny formulas,
  useful as a reference when checking results.
- `jigsat.util` – small sorting and moving-average helpers.

## Installation

```
pip install .
```

## Examples

Propagating an assignment through two implications:

```python
from jigsat.clause import Clause
from jigsat.formula import Formula
from jigsat.lit import Lit
from jigsat.trail import UNIT, Trail
from jigsat.unit_prop import unit_propagate
from jigsat.watches import Watches

formula = Formula(3)
formula.add_unwatched_clause(Clause([Lit.new(0, False), Lit.new(1, True)]))  # ¬x0 ∨ x1
formula.add_unwatched_clause(Clause([Lit.new(1, False), Lit.new(2, True)]))  # ¬x1 ∨ x2

watches = Watches(formula.num_vars)
watches.init_watches(formula)
trail = Trail(formula.num_vars)
trail.enq_assignment(Lit.new(0, True), UNIT)

result = unit_propagate(formula, trail, watches, 0)
print(result.conflict)            # None
print(trail.assignments.values)   # [1, 1, 1]
```

Checking a small formula exhaustively:

```python
from jigsat.friday import Literal, NaiveClause, NaiveFormula, solve_naive

formula = NaiveFormula(
    clauses=(
        NaiveClause((Literal(0, True), Literal(1, True))),
        NaiveClause((Literal(0, False),)),
    ),
    num_vars=2,
)
print(solve_naive(formula))  # True
```

`solve_naive` raises `ValueError` if a literal names a variable outside
`num_vars`.

## What the package does not do

The package provides the parts of a solver but not the whole of one. There is
no search loop that ties propagation, conflict analysis, restarts and
decisions together into a single solve call, no reader for DIMACS CNF files,
and no command-line program. Complete satisfiability checking is available
only through `jigsat.friday.solve_naive`, which is exponential in the number of
variables.

## Running the tests

```
pip install .[test]
pytest
```