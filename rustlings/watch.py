"""Watch mode: re-verify exercises when their files change."""

from __future__ import annotations

import enum
import itertools
import queue
import subprocess
import sys
import threading
from collections.abc import Iterable, Iterator
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .exercise import Exercise
from .verify import VerificationFailed, verify

EXERCISES_DIR = "./exercises"

# Resets the terminal; works in UNIX and newer Windows terminals.
_RESET_TERMINAL = "\x1bc"

_HELP = (
    "Commands available to you in watch mode:\n"
    "  hint   - prints the current exercise's hint\n"
    "  clear  - clears the screen\n"
    "  quit   - quits watch mode\n"
    "  !<cmd> - executes a command, like `!rustc --explain E0381`\n"
    "  help   - displays this help message\n"
    "\n"
    "Watch mode automatically re-evaluates the current exercise\n"
    "when you edit a file's contents."
)


class WatchStatus(enum.Enum):
    """How watch mode ended."""

    FINISHED = "finished"
    UNFINISHED = "unfinished"


class WatchShell:
    """The interactive commands accepted on standard input during watch mode."""

    def __init__(self, hint: str | None = None) -> None:
        self.hint = hint
        self.should_quit = threading.Event()

    def handle(self, line: str) -> None:
        """Carry out one command line."""
        command = line.strip()
        if command == "hint":
            if self.hint is not None:
                print(self.hint)
        elif command == "clear":
            print("\x1b[2J\x1b[1;1H")
        elif command == "quit":
            self.should_quit.set()
            print("Bye!")
        elif command == "help":
            print(_HELP)
        elif command.startswith("!"):
            cmd = command[1:]
            parts = cmd.split()
            if not parts:
                print("no command provided")
                return
            try:
                subprocess.run(parts)
            except OSError as err:
                print(f"failed to execute command `{cmd}`: {err}")
        else:
            print(f"unknown command: {command}")

    def _read_commands(self) -> None:
        while not self.should_quit.is_set():
            try:
                line = sys.stdin.readline()
            except (OSError, ValueError) as err:
                print(f"error reading command: {err}")
                return
            if not line:
                return
            self.handle(line)

    def start(self) -> threading.Thread:
        """Greet the user and read commands from standard input in the background."""
        print(
            "Welcome to watch mode! You can type 'help' to get an overview "
            "of the commands you can use here."
        )
        thread = threading.Thread(target=self._read_commands, daemon=True)
        thread.start()
        return thread


class _ChangeCollector(FileSystemEventHandler):
    def __init__(self, changes: queue.Queue) -> None:
        super().__init__()
        self._changes = changes

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._changes.put(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._changes.put(event.src_path)


def _ends_with(full: Path, tail: Path) -> bool:
    parts = tail.parts
    if not parts:
        return True
    return len(parts) <= len(full.parts) and full.parts[-len(parts):] == parts


def _drain(changes: queue.Queue, first: str) -> list[str]:
    paths = [first]
    while True:
        try:
            paths.append(changes.get_nowait())
        except queue.Empty:
            break
    return list(dict.fromkeys(paths))


def _pending_after_change(filepath: Path, exercises: list[Exercise]) -> Iterator[Exercise]:
    changed = next((e for e in exercises if _ends_with(filepath, e.path)), None)
    others = (
        e for e in exercises if not e.looks_done() and not _ends_with(filepath, e.path)
    )
    return itertools.chain([changed] if changed is not None else [], others)


def watch(
    exercises: Iterable[Exercise], verbose: bool = False, success_hints: bool = False
) -> WatchStatus:
    """Verify exercises, then re-verify on every change below ./exercises until done or quit."""
    exercises = list(exercises)
    if not Path(EXERCISES_DIR).is_dir():
        raise FileNotFoundError(f"No such directory: {EXERCISES_DIR!r}")

    changes: queue.Queue = queue.Queue()
    observer = Observer()
    observer.schedule(_ChangeCollector(changes), EXERCISES_DIR, recursive=True)
    observer.start()
    try:
        print(_RESET_TERMINAL, flush=True)
        try:
            verify(exercises, (0, len(exercises)), verbose, success_hints)
            return WatchStatus.FINISHED
        except VerificationFailed as failed:
            shell = WatchShell(failed.exercise.hint)
        shell.start()

        while True:
            try:
                first = changes.get(timeout=1)
            except queue.Empty:
                pass
            else:
                for changed in _drain(changes, first):
                    filepath = Path(changed)
                    if filepath.suffix != ".rs" or not filepath.exists():
                        continue
                    filepath = filepath.resolve()
                    pending = _pending_after_change(filepath, exercises)
                    num_done = sum(1 for e in exercises if e.looks_done())
                    print(_RESET_TERMINAL, flush=True)
                    try:
                        verify(pending, (num_done, len(exercises)), verbose, success_hints)
                        return WatchStatus.FINISHED
                    except VerificationFailed as failed:
                        shell.hint = failed.exercise.hint
            if shell.should_quit.is_set():
                return WatchStatus.UNFINISHED
    finally:
        observer.stop()
        observer.join()