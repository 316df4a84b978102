# crabdrill

crabdrill runs a course of small Rust exercises. Each exercise is a `.rs`
file that fails to compile, fails its tests or trips a lint. You fix it, and
crabdrill checks your work and moves you on to the next one.

The `rustc` compiler must be on your `PATH`. Clippy exercises also need
`cargo`. `reset` uses `git`.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Course layout

crabdrill does not ship any exercises. You run it from a course directory
that holds the exercise files and an `info.toml` file listing them in order.
Every command, even the bare `crabdrill`, stops with exit status 1 when
`info.toml` is missing from the current directory or when `rustc --version`
cannot be run.

Each entry in `info.toml` has a `name`, a `path`, a `mode` and a `hint`:

```toml
[[exercises]]
name = "intro1"
path = "exercises/00_intro/intro1.rs"
mode = "compile"
hint = "Remove the I AM NOT DONE comment to move on."
```

The `mode` is one of these:

- `compile`: build the file with `rustc` and run the program.
- `test`: build it with `rustc --test` and run the tests.
- `clippy`: write `exercises/22_clippy/Cargo.toml` for it, build it, and lint
  it with `cargo clippy`, with warnings treated as errors.

An exercise counts as pending while its file still has an `// I AM NOT DONE`
comment. Delete that comment once you are happy with your solution. When an
exercise passes but is still pending, crabdrill shows the lines around the
comment.

## Commands

```
crabdrill                    # welcome text and first steps
crabdrill --version
crabdrill watch              # check exercises in order, re-check on every save
crabdrill watch --success-hints
crabdrill verify             # check every exercise once, in order
crabdrill run NAME           # compile and run, or test, a single exercise
crabdrill run next           # the first exercise that is not done yet
crabdrill hint NAME          # print the hint for an exercise
crabdrill reset NAME         # run "git stash -- <path>" for an exercise
crabdrill list               # names, paths and Done/Pending status
crabdrill list --solved      # only finished exercises
crabdrill list --unsolved    # only pending exercises
crabdrill list --paths       # only paths
crabdrill list --names       # only names
crabdrill list --filter if,vec   # names or paths containing any of the patterns
crabdrill lsp                # write rust-project.json for rust-analyzer
```

`list` ends with a line that gives how many exercises are done. `verify` and
`run` exit with status 1 when an exercise fails or is still pending, and
`run`, `hint` and `reset` exit with status 1 for an unknown name.

Add `--nocapture` before a command, as in `crabdrill --nocapture run NAME`,
to see the output of test exercises.

`lsp` writes `./rust-project.json` with one crate for each `.rs` file under
`./exercises`. It takes the standard library path from `RUST_SRC_PATH` when
that is set, and otherwise asks `rustc --print sysroot`.

### Watch mode

`watch` checks the exercises in order and stops at the first one that fails
or is still marked not done. It then re-checks each time a `.rs` file under
`./exercises` is created or changed, starting with the changed exercise.
While it runs, you can type these commands:

- `hint`: show the hint for the current exercise
- `clear`: clear the screen
- `quit`: leave watch mode
- `!<cmd>`: run a command, for example `!rustc --explain E0381`
- `help`: list these commands

Set the `NO_EMOJI` environment variable to print plain symbols in place of
emoji.

## Using it from Python

The command-line entry point is `crabdrill.cli.main`, which takes an optional
argument list and returns the exit status. The pieces behind it can be used
directly:

```python
from crabdrill.exercise import load_exercises
from crabdrill.verify import VerificationFailed, verify

exercises = load_exercises("info.toml")
try:
    verify(exercises)
except VerificationFailed as exc:
    print("stopped at", exc.exercise.name)
```

`Exercise.compile()` returns a `CompiledExercise` that can be used as a
context manager; it removes the built binary on exit. Compiler and run
failures raise `ExerciseFailed`, whose `output` holds the captured stdout and
stderr.

## Reference solutions

The `crabdrill.lessons` package holds worked solutions to part of the course,
written as ordinary Python with tests:

- `quizzes`: apple pricing, a string transformer and report cards
- `basics`: functions, `if` and strings
- `structs`: packages, message-driven state and rectangles
- `sequences`: vectors and optional values
- `hashmaps`: fruit baskets and a football scores table
- `errors`: error handling and positive non-zero integers
- `traits`: generics, traits and struct templates
- `iterators`: capitalisation, exact division, factorial and progress counts
- `conversions`: `Person.from_text`, `Person.parse` and `Color.try_from`
- `threads`: per-thread offset sums and two senders sharing a channel

```python
from crabdrill.lessons.quizzes import calculate_price_of_apples

calculate_price_of_apples(41)  # 41
```

There are no reference solutions for the smart pointer, lifetime, `AsRef`
and numeric casting lessons.