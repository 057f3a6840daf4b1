"""Checking exercises in order and reporting the outcome."""

from __future__ import annotations

import enum
import os
import sys
from collections.abc import Iterable

from .exercise import CompiledExercise, CompileError, Exercise, Mode, RunError
from .ui import blue, bold, success, warn

BAR_WIDTH = 60


class RunMode(enum.Enum):
    """Whether a passing exercise is followed by the completion prompt."""

    INTERACTIVE = "interactive"
    NON_INTERACTIVE = "non-interactive"


class VerificationFailed(Exception):
    """An exercise did not compile, run, pass its tests or is still pending."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(f"{exercise} did not pass")
        self.exercise = exercise


def render_progress(done: int, total: int) -> str:
    """Return the progress line for done out of total exercises."""
    if total > 0:
        filled = min(BAR_WIDTH, max(0, done * BAR_WIDTH // total))
        percentage = done / total * 100.0
    else:
        filled = BAR_WIDTH
        percentage = 100.0
    if filled < BAR_WIDTH:
        bar = "#" * filled + ">" + "-" * (BAR_WIDTH - filled - 1)
    else:
        bar = "#" * BAR_WIDTH
    return f"Progress: [{bar}] {done}/{total} ({percentage:.1f} %)"


def _show_progress(done: int, total: int) -> None:
    print(render_progress(done, total), file=sys.stderr)


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int],
    verbose: bool = False,
    success_hints: bool = False,
) -> None:
    """Check exercises in order; raise VerificationFailed at the first one that fails."""
    done, total = progress
    _show_progress(done, total)
    for exercise in exercises:
        if exercise.mode in (Mode.TEST, Mode.BUILDSCRIPT):
            passed = _compile_and_test(exercise, RunMode.INTERACTIVE, verbose, success_hints)
        elif exercise.mode is Mode.COMPILE:
            passed = _compile_and_run_interactively(exercise, success_hints)
        else:
            passed = _compile_only(exercise, success_hints)
        if not passed:
            raise VerificationFailed(exercise)
        done += 1
        _show_progress(done, total)


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run an exercise's tests; raise VerificationFailed on failure."""
    if not _compile_and_test(exercise, RunMode.NON_INTERACTIVE, verbose, False):
        raise VerificationFailed(exercise)


def _compile(exercise: Exercise) -> CompiledExercise | None:
    try:
        return exercise.compile()
    except CompileError as err:
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        print(err.output.stderr)
        return None


def _compile_only(exercise: Exercise, success_hints: bool) -> bool:
    compiled = _compile(exercise)
    if compiled is None:
        return False
    compiled.close()
    return prompt_for_completion(exercise, None, success_hints)


def _compile_and_run_interactively(exercise: Exercise, success_hints: bool) -> bool:
    compiled = _compile(exercise)
    if compiled is None:
        return False
    with compiled:
        try:
            output = compiled.run()
        except RunError as err:
            warn(f"Ran {exercise} with errors")
            print(err.output.stdout)
            print(err.output.stderr)
            return False
        return prompt_for_completion(exercise, output.stdout, success_hints)


def _compile_and_test(
    exercise: Exercise, run_mode: RunMode, verbose: bool, success_hints: bool
) -> bool:
    compiled = _compile(exercise)
    if compiled is None:
        return False
    with compiled:
        try:
            output = compiled.run()
        except RunError as err:
            warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
            print(err.output.stdout)
            return False
        if verbose:
            print(output.stdout)
        if run_mode is RunMode.INTERACTIVE:
            return prompt_for_completion(exercise, None, success_hints)
        return True


def _separator() -> str:
    return bold("====================")


_SUCCESS_HEADLINES = {
    Mode.COMPILE: "Successfully ran {}!",
    Mode.TEST: "Successfully tested {}!",
    Mode.CLIPPY: "Successfully compiled {}!",
    Mode.BUILDSCRIPT: "Successfully compiled {}!",
}


def prompt_for_completion(
    exercise: Exercise, prompt_output: str | None, success_hints: bool
) -> bool:
    """Return True when the exercise is done, else print the pending context and return False."""
    context = exercise.state()
    if not context:
        return True

    success(_SUCCESS_HEADLINES[exercise.mode].format(exercise))

    no_emoji = "NO_EMOJI" in os.environ
    if no_emoji:
        clippy_message = "The code is compiling, and Clippy is happy!"
    else:
        clippy_message = "The code is compiling, and \U0001f4ce Clippy \U0001f4ce is happy!"
    success_message = {
        Mode.COMPILE: "The code is compiling!",
        Mode.TEST: "The code is compiling, and the tests pass!",
        Mode.CLIPPY: clippy_message,
        Mode.BUILDSCRIPT: "Build script works!",
    }[exercise.mode]

    print()
    if no_emoji:
        print(f"~*~ {success_message} ~*~")
    else:
        print(f"\U0001f389 \U0001f389  {success_message} \U0001f389 \U0001f389")
    print()

    if prompt_output is not None:
        print("Output:")
        print(_separator())
        print(prompt_output)
        print(_separator())
        print()
    if success_hints:
        print("Hints:")
        print(_separator())
        print(exercise.hint)
        print(_separator())
        print()

    print("You can keep working on this exercise,")
    print(f"or jump into the next one by removing the {bold('`I AM NOT DONE`')} comment:")
    print()
    for context_line in context:
        text = bold(context_line.line) if context_line.important else context_line.line
        number = blue(bold(f"{context_line.number:>2}"))
        print(f"{number} {blue('|')}  {text}")

    return False