"""Running a single exercise and resetting it."""

from __future__ import annotations

import subprocess

from .exercise import CompileError, Exercise, Mode, RunError
from .ui import success, warn
from .verify import VerificationFailed, test


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run or test one exercise; raise VerificationFailed on failure."""
    if exercise.mode in (Mode.TEST, Mode.BUILDSCRIPT):
        test(exercise, verbose)
    else:
        compile_and_run(exercise)


def reset(exercise: Exercise) -> subprocess.Popen:
    """Start `git stash -- <path>` for the exercise; OSError if git cannot start."""
    return subprocess.Popen(["git", "stash", "--", str(exercise.path)])


def compile_and_run(exercise: Exercise) -> None:
    """Compile the exercise, run the binary and show its output."""
    try:
        compiled = exercise.compile()
    except CompileError as err:
        warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
        print(err.output.stderr)
        raise VerificationFailed(exercise) from err

    with compiled:
        try:
            output = compiled.run()
        except RunError as err:
            print(err.output.stdout)
            print(err.output.stderr)
            warn(f"Ran {exercise} with errors")
            raise VerificationFailed(exercise) from err

    print(output.stdout)
    success(f"Successfully ran {exercise}")