import subprocess

import pytest

from rustlings import verify as verify_module
from rustlings.exercise import Exercise, Mode
from rustlings.verify import (
    VerificationFailed,
    prompt_for_completion,
    render_progress,
    verify,
)


class FakeCommands:
    def __init__(self, failing_compile=(), fail_run=False, run_stdout=b"", run_stderr=b""):
        self.failing_compile = tuple(failing_compile)
        self.fail_run = fail_run
        self.run_stdout = run_stdout
        self.run_stderr = run_stderr
        self.calls = []

    def __call__(self, args, **kwargs):
        args = [str(arg) for arg in args]
        self.calls.append(args)
        if args[0] in ("rustc", "cargo"):
            failed = any(name in arg for arg in args for name in self.failing_compile)
            return subprocess.CompletedProcess(
                args, 1 if failed else 0, stdout=b"", stderr=b"error: boom" if failed else b""
            )
        return subprocess.CompletedProcess(
            args, 1 if self.fail_run else 0, stdout=self.run_stdout, stderr=self.run_stderr
        )


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)
    monkeypatch.delenv("NO_EMOJI", raising=False)
    return tmp_path


def make_exercise(root, name, mode, pending=False, hint="a hint"):
    path = root / f"{name}.rs"
    body = "// I AM NOT DONE\n\nfn main() {}\n" if pending else "fn main() {}\n"
    path.write_text(body, encoding="utf-8")
    return Exercise(name=name, path=path, mode=mode, hint=hint)


def install(monkeypatch, **kwargs):
    fake = FakeCommands(**kwargs)
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


def _bar(line):
    return line[line.index("[") + 1 : line.index("]")]


def test_render_progress_at_start():
    line = render_progress(0, 4)
    assert line.startswith("Progress: [>")
    assert "0/4" in line
    assert line.endswith("(0.0 %)")
    assert len(_bar(line)) == 60


def test_render_progress_complete():
    line = render_progress(4, 4)
    assert _bar(line) == "#" * 60
    assert line.endswith("(100.0 %)")


def test_render_progress_fills_monotonically():
    counts = [_bar(render_progress(done, 10)).count("#") for done in range(11)]
    assert counts == sorted(counts)
    assert all(len(_bar(render_progress(done, 10))) == 60 for done in range(11))


def test_prompt_for_done_exercise(workspace, capsys):
    exercise = make_exercise(workspace, "done", Mode.COMPILE)
    assert prompt_for_completion(exercise, None, False) is True
    assert capsys.readouterr().out == ""


def test_prompt_for_pending_exercise(workspace, capsys):
    exercise = make_exercise(workspace, "pending", Mode.COMPILE, pending=True)
    assert prompt_for_completion(exercise, None, False) is False
    out = capsys.readouterr().out
    assert f"Successfully ran {exercise}!" in out
    assert "The code is compiling!" in out
    assert " 1 |  // I AM NOT DONE" in out
    assert "Hints:" not in out


def test_prompt_shows_output_and_hints(workspace, capsys):
    exercise = make_exercise(workspace, "pending", Mode.COMPILE, pending=True, hint="look closer")
    assert prompt_for_completion(exercise, "program said hi", True) is False
    out = capsys.readouterr().out
    assert "Output:" in out
    assert "program said hi" in out
    assert "Hints:" in out
    assert "look closer" in out


def test_prompt_without_emoji(workspace, monkeypatch, capsys):
    monkeypatch.setenv("NO_EMOJI", "1")
    exercise = make_exercise(workspace, "pending", Mode.TEST, pending=True)
    prompt_for_completion(exercise, None, False)
    out = capsys.readouterr().out
    assert "~*~ The code is compiling, and the tests pass! ~*~" in out


def test_verify_all_done(workspace, monkeypatch):
    fake = install(monkeypatch)
    exercises = [
        make_exercise(workspace, "one", Mode.COMPILE),
        make_exercise(workspace, "two", Mode.TEST),
    ]
    assert verify(exercises, (0, 2), False, False) is None
    rustc_calls = [call for call in fake.calls if call[0] == "rustc"]
    assert len(rustc_calls) == 2
    assert any("--show-output" in call for call in fake.calls)


def test_verify_stops_at_first_compile_failure(workspace, monkeypatch, capsys):
    fake = install(monkeypatch, failing_compile=("broken.rs",))
    first = make_exercise(workspace, "first", Mode.COMPILE)
    broken = make_exercise(workspace, "broken", Mode.COMPILE)
    last = make_exercise(workspace, "last", Mode.COMPILE)
    with pytest.raises(VerificationFailed) as info:
        verify([first, broken, last], (0, 3), False, False)
    assert info.value.exercise is broken
    assert not any("last.rs" in arg for call in fake.calls for arg in call)
    out = capsys.readouterr().out
    assert "Compiling of" in out
    assert "error: boom" in out


def test_verify_pending_exercise_fails(workspace, monkeypatch):
    install(monkeypatch)
    pending = make_exercise(workspace, "pending", Mode.COMPILE, pending=True)
    with pytest.raises(VerificationFailed) as info:
        verify([pending], (0, 1), False, False)
    assert info.value.exercise is pending


def test_verify_clippy_writes_manifest(workspace, monkeypatch):
    (workspace / "exercises" / "clippy").mkdir(parents=True)
    fake = install(monkeypatch)
    exercise = make_exercise(workspace, "clippy1", Mode.CLIPPY)
    verify([exercise], (0, 1), False, False)
    manifest = (workspace / "exercises" / "clippy" / "Cargo.toml").read_text(encoding="utf-8")
    assert 'name = "clippy1"' in manifest
    assert any(call[:2] == ["cargo", "clippy"] for call in fake.calls)


def test_test_verbose_shows_output(workspace, monkeypatch, capsys):
    install(monkeypatch, run_stdout=b"THIS TEST TOO SHALL PASS")
    exercise = make_exercise(workspace, "t", Mode.TEST)
    verify_module.test(exercise, True)
    assert "THIS TEST TOO SHALL PASS" in capsys.readouterr().out


def test_test_quiet_hides_output(workspace, monkeypatch, capsys):
    install(monkeypatch, run_stdout=b"THIS TEST TOO SHALL PASS")
    exercise = make_exercise(workspace, "t", Mode.TEST)
    verify_module.test(exercise, False)
    assert "THIS TEST TOO SHALL PASS" not in capsys.readouterr().out


def test_test_does_not_prompt_for_pending(workspace, monkeypatch, capsys):
    install(monkeypatch)
    exercise = make_exercise(workspace, "pending_test_exercise", Mode.TEST, pending=True)
    verify_module.test(exercise, False)
    assert "I AM NOT DONE" not in capsys.readouterr().out


def test_test_failure_raises(workspace, monkeypatch, capsys):
    install(monkeypatch, fail_run=True, run_stdout=b"assertion failed")
    exercise = make_exercise(workspace, "t", Mode.TEST)
    with pytest.raises(VerificationFailed) as info:
        verify_module.test(exercise, False)
    assert info.value.exercise is exercise
    out = capsys.readouterr().out
    assert "Testing of" in out
    assert "assertion failed" in out