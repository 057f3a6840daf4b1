"""Exercise definitions, compilation and completion state."""

from __future__ import annotations

import enum
import os
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from pathlib import Path

RUSTC_COLOR_ARGS = ("--color", "always")
RUSTC_EDITION_ARGS = ("--edition", "2021")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/clippy/Cargo.toml"
BUILD_SCRIPT_CARGO_TOML_PATH = "./exercises/tests/Cargo.toml"


def temp_file() -> str:
    """Return a temporary binary name unique to this process and thread."""
    return f"./temp_{os.getpid()}_ThreadId{threading.get_ident()}"


def clean() -> None:
    """Remove the temporary binary, ignoring any error."""
    try:
        os.remove(temp_file())
    except OSError:
        pass


class Mode(enum.Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"
    BUILDSCRIPT = "buildscript"


@dataclass
class ContextLine:
    """A source line shown around a pending marker."""

    line: str
    number: int
    important: bool


@dataclass
class ExerciseOutput:
    """Captured output of a command."""

    stdout: str
    stderr: str


class ExerciseError(Exception):
    """A command for an exercise failed; carries its output."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__(output.stderr or output.stdout)
        self.output = output


class CompileError(ExerciseError):
    """Compiling an exercise failed."""


class RunError(ExerciseError):
    """Running a compiled exercise failed."""


def _output_of(completed: subprocess.CompletedProcess) -> ExerciseOutput:
    return ExerciseOutput(
        stdout=(completed.stdout or b"").decode("utf-8", errors="replace"),
        stderr=(completed.stderr or b"").decode("utf-8", errors="replace"),
    )


def _capture(args: list[str], failure: str) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(args, capture_output=True)
    except OSError as err:
        raise RuntimeError(failure) from err


def _cargo_toml(name: str) -> str:
    return (
        "[package]\n"
        f'name = "{name}"\n'
        'version = "0.0.1"\n'
        'edition = "2021"\n'
        "[[bin]]\n"
        f'name = "{name}"\n'
        f'path = "{name}.rs"'
    )


def _write_cargo_toml(path: str, name: str) -> None:
    if "NO_EMOJI" in os.environ:
        message = "Failed to write Clippy Cargo.toml file."
    else:
        message = "Failed to write \U0001f4ce Clippy \U0001f4ce Cargo.toml file."
    try:
        Path(path).write_text(_cargo_toml(name), encoding="utf-8")
    except OSError as err:
        raise RuntimeError(message) from err


def _source_lines(source: str) -> list[str]:
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class CompiledExercise:
    """A successfully compiled exercise; closing it removes the binary."""

    def __init__(self, exercise: Exercise) -> None:
        self.exercise = exercise
        self._closed = False

    def run(self) -> ExerciseOutput:
        """Run the compiled exercise."""
        return self.exercise.run()

    def close(self) -> None:
        """Remove the temporary binary."""
        if not self._closed:
            self._closed = True
            clean()

    def __enter__(self) -> CompiledExercise:
        return self

    def __exit__(self, *args) -> None:
        self.close()


@dataclass
class Exercise:
    """An exercise as described in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.mode = Mode(self.mode)

    def _rustc(self, *extra: str) -> list[str]:
        return [
            "rustc",
            *extra,
            str(self.path),
            "-o",
            temp_file(),
            *RUSTC_COLOR_ARGS,
            *RUSTC_EDITION_ARGS,
        ]

    def compile(self) -> CompiledExercise:
        """Compile the exercise; raise CompileError with the output on failure."""
        failure = "Failed to run 'compile' command."
        if self.mode is Mode.COMPILE:
            completed = _capture(self._rustc(), failure)
        elif self.mode is Mode.TEST:
            completed = _capture(self._rustc("--test"), failure)
        elif self.mode is Mode.CLIPPY:
            _write_cargo_toml(CLIPPY_CARGO_TOML_PATH, self.name)
            # Build a binary too so clippy exercises can be run afterwards.
            _capture(self._rustc(), "Failed to compile!")
            _capture(
                ["cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH, *RUSTC_COLOR_ARGS],
                "Failed to run 'cargo clean'",
            )
            completed = _capture(
                [
                    "cargo",
                    "clippy",
                    "--manifest-path",
                    CLIPPY_CARGO_TOML_PATH,
                    *RUSTC_COLOR_ARGS,
                    "--",
                    "-D",
                    "warnings",
                    "-D",
                    "clippy::float_cmp",
                ],
                failure,
            )
        else:
            _write_cargo_toml(BUILD_SCRIPT_CARGO_TOML_PATH, self.name)
            completed = _capture(
                ["cargo", "test", "--manifest-path", BUILD_SCRIPT_CARGO_TOML_PATH],
                failure,
            )

        if completed.returncode == 0:
            return CompiledExercise(self)
        clean()
        raise CompileError(_output_of(completed))

    def run(self) -> ExerciseOutput:
        """Run the compiled binary; raise RunError with the output on failure."""
        if self.mode is Mode.BUILDSCRIPT:
            return ExerciseOutput(stdout="", stderr="")
        args = [temp_file()]
        if self.mode is Mode.TEST:
            args.append("--show-output")
        completed = _capture(args, "Failed to run 'run' command")
        output = _output_of(completed)
        if completed.returncode != 0:
            raise RunError(output)
        return output

    def state(self) -> list[ContextLine]:
        """Return the lines around the pending marker, or an empty list when done."""
        source = self.path.read_text(encoding="utf-8")
        if not I_AM_DONE_REGEX.search(source):
            return []

        lines = _source_lines(source)
        matched = next(
            (index for index, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)),
            None,
        )
        if matched is None:
            raise RuntimeError(f"pending marker in {self.path} spans several lines")

        first = max(matched - CONTEXT, 0)
        return [
            ContextLine(line=line, number=index + 1, important=index == matched)
            for index, line in enumerate(lines[first : matched + CONTEXT + 1], start=first)
        ]

    def looks_done(self) -> bool:
        """Tell whether the pending marker has been removed."""
        return not self.state()

    def __str__(self) -> str:
        return str(self.path)


def load_exercises(path: str | os.PathLike = "info.toml") -> list[Exercise]:
    """Read the exercise list from an info.toml file."""
    with open(path, "rb") as handle:
        data = tomllib.load(handle)
    try:
        return [
            Exercise(
                name=entry["name"],
                path=Path(entry["path"]),
                mode=Mode(entry["mode"]),
                hint=entry["hint"],
            )
            for entry in data["exercises"]
        ]
    except KeyError as err:
        raise ValueError(f"missing field {err.args[0]!r} in {path}") from err