"""Checking exercises in order, with progress and completion prompts."""

from __future__ import annotations

import contextlib
import os
from collections.abc import Iterable, Iterator
from enum import Enum, auto

from rich.console import Console
from rich.text import Text

from .exercise import CompiledExercise, Exercise, ExerciseFailed, Mode
from .ui import success, warn

_console = Console(soft_wrap=True, highlight=False)
_stderr = Console(stderr=True, soft_wrap=True, highlight=False)
_BAR_WIDTH = 60
_SEPARATOR = "===================="

_SUCCESS_TITLES = {
    Mode.COMPILE: "Successfully ran {}!",
    Mode.TEST: "Successfully tested {}!",
    Mode.CLIPPY: "Successfully compiled {}!",
}


class VerificationFailed(Exception):
    """An exercise did not compile, run, pass or was still marked pending."""

    def __init__(self, exercise: Exercise):
        super().__init__(f"{exercise} is not finished")
        self.exercise = exercise


class _RunMode(Enum):
    INTERACTIVE = auto()
    NON_INTERACTIVE = auto()


@contextlib.contextmanager
def _spinner(message: str) -> Iterator[None]:
    if _stderr.is_terminal:
        with _stderr.status(message):
            yield
    else:
        yield


def _percentage(done: int, total: int) -> float:
    return done / total * 100.0 if total else 100.0


def _progress_line(position: int, total: int, percentage: float) -> str:
    filled = min(_BAR_WIDTH * position // total, _BAR_WIDTH) if total else _BAR_WIDTH
    if filled >= _BAR_WIDTH:
        bar = "#" * _BAR_WIDTH
    else:
        bar = "#" * filled + ">" + "-" * (_BAR_WIDTH - filled - 1)
    return f"Progress: [{bar}] {position}/{total} ({percentage:.1f} %)"


def _report(position: int, total: int, percentage: float) -> None:
    _stderr.print(_progress_line(position, total, percentage))


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int] | None = None,
    verbose: bool = False,
    success_hints: bool = False,
) -> None:
    """Check each exercise in turn; raise VerificationFailed at the first unfinished one."""
    if progress is None:
        exercises = list(exercises)
        progress = (0, len(exercises))
    num_done, total = progress
    position = num_done
    percentage = _percentage(num_done, total)
    _report(position, total, percentage)

    for exercise in exercises:
        try:
            if exercise.mode is Mode.TEST:
                finished = _compile_and_test(
                    exercise, _RunMode.INTERACTIVE, verbose, success_hints
                )
            elif exercise.mode is Mode.COMPILE:
                finished = _compile_and_run_interactively(exercise, success_hints)
            else:
                finished = _compile_only(exercise, success_hints)
        except ExerciseFailed:
            finished = False
        if not finished:
            raise VerificationFailed(exercise)
        position += 1
        if total:
            percentage += 100.0 / total
        _report(position, total, percentage)


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run an exercise's tests; raise ExerciseFailed if they fail."""
    _compile_and_test(exercise, _RunMode.NON_INTERACTIVE, verbose, False)


def _compile(exercise: Exercise, message: str) -> CompiledExercise:
    try:
        with _spinner(message):
            return exercise.compile()
    except ExerciseFailed as exc:
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        print(exc.output.stderr)
        raise


def _compile_only(exercise: Exercise, success_hints: bool) -> bool:
    _compile(exercise, f"Compiling {exercise}...").close()
    return _prompt_for_completion(exercise, None, success_hints)


def _compile_and_run_interactively(exercise: Exercise, success_hints: bool) -> bool:
    with _compile(exercise, f"Compiling {exercise}...") as compiled:
        try:
            with _spinner(f"Running {exercise}..."):
                output = compiled.run()
        except ExerciseFailed as exc:
            warn(f"Ran {exercise} with errors")
            print(exc.output.stdout)
            print(exc.output.stderr)
            raise
    return _prompt_for_completion(exercise, output.stdout, success_hints)


def _compile_and_test(
    exercise: Exercise, run_mode: _RunMode, verbose: bool, success_hints: bool
) -> bool:
    with _compile(exercise, f"Testing {exercise}...") as compiled:
        try:
            with _spinner(f"Testing {exercise}..."):
                output = compiled.run()
        except ExerciseFailed as exc:
            warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
            print(exc.output.stdout)
            raise
    if verbose:
        print(output.stdout)
    if run_mode is _RunMode.INTERACTIVE:
        return _prompt_for_completion(exercise, None, success_hints)
    return True


def _separator() -> None:
    _console.print(Text(_SEPARATOR, style="bold"))


def _prompt_for_completion(
    exercise: Exercise, prompt_output: str | None, success_hints: bool
) -> bool:
    context = exercise.state()
    if not context:
        return True

    success(_SUCCESS_TITLES[exercise.mode].format(exercise))

    no_emoji = "NO_EMOJI" in os.environ
    if exercise.mode is Mode.COMPILE:
        success_msg = "The code is compiling!"
    elif exercise.mode is Mode.TEST:
        success_msg = "The code is compiling, and the tests pass!"
    elif no_emoji:
        success_msg = "The code is compiling, and Clippy is happy!"
    else:
        success_msg = "The code is compiling, and 📎 Clippy 📎 is happy!"

    print()
    print(f"~*~ {success_msg} ~*~" if no_emoji else f"🎉 🎉  {success_msg} 🎉 🎉")
    print()

    if prompt_output is not None:
        print("Output:")
        _separator()
        print(prompt_output)
        _separator()
        print()
    if success_hints:
        print("Hints:")
        _separator()
        print(exercise.hint)
        _separator()
        print()

    print("You can keep working on this exercise,")
    _console.print(
        Text.assemble(
            "or jump into the next one by removing the ",
            ("`I AM NOT DONE`", "bold"),
            " comment:",
        )
    )
    print()
    for context_line in context:
        _console.print(
            Text.assemble(
                (f"{context_line.number:>2}", "bold blue"),
                " ",
                ("|", "blue"),
                "  ",
                (context_line.line, "bold" if context_line.important else ""),
            )
        )
    return False