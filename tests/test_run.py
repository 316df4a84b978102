import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from crabdrill.exercise import Exercise, ExerciseFailed, Mode, temp_file
from crabdrill.run import reset, run

PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"


def make_exercise(tmp_path: Path, name: str, mode: Mode) -> Exercise:
    path = tmp_path / f"{name}.rs"
    path.write_text(PENDING, encoding="utf-8")
    return Exercise(name=name, path=path, mode=mode, hint="Hello!")


def fake_tools(compile_code=0, run_code=0, compile_err=b"", run_out=b"", run_err=b""):
    calls = []

    def fake(args, **kwargs):
        calls.append(list(args))
        if args[0] == "rustc":
            return subprocess.CompletedProcess(args, compile_code, b"", compile_err)
        return subprocess.CompletedProcess(args, run_code, run_out, run_err)

    return fake, calls


def test_run_compile_exercise_does_not_prompt(tmp_path, capsys):
    exercise = make_exercise(tmp_path, "pending_exercise", Mode.COMPILE)
    fake, calls = fake_tools(run_out=b"program output")
    with patch("subprocess.run", side_effect=fake):
        run(exercise)
    out = capsys.readouterr().out
    assert "I AM NOT DONE" not in out
    assert "program output" in out
    assert "Successfully ran" in out
    assert calls[1] == [temp_file()]


def test_run_test_exercise_does_not_prompt(tmp_path, capsys):
    exercise = make_exercise(tmp_path, "pending_test_exercise", Mode.TEST)
    fake, calls = fake_tools()
    with patch("subprocess.run", side_effect=fake):
        run(exercise, False)
    assert "I AM NOT DONE" not in capsys.readouterr().out
    assert calls[1] == [temp_file(), "--show-output"]


def test_run_test_with_output(tmp_path, capsys):
    exercise = make_exercise(tmp_path, "testSuccess", Mode.TEST)
    fake, _ = fake_tools(run_out=b"THIS TEST TOO SHALL PASS")
    with patch("subprocess.run", side_effect=fake):
        run(exercise, True)
    assert "THIS TEST TOO SHALL PASS" in capsys.readouterr().out


def test_run_test_without_output(tmp_path, capsys):
    exercise = make_exercise(tmp_path, "testSuccess", Mode.TEST)
    fake, _ = fake_tools(run_out=b"THIS TEST TOO SHALL PASS")
    with patch("subprocess.run", side_effect=fake):
        run(exercise, False)
    assert "THIS TEST TOO SHALL PASS" not in capsys.readouterr().out


def test_run_compile_failure_raises(tmp_path, capsys):
    exercise = make_exercise(tmp_path, "compFailure", Mode.COMPILE)
    fake, calls = fake_tools(compile_code=1, compile_err=b"error: expected pattern")
    with patch("subprocess.run", side_effect=fake):
        with pytest.raises(ExerciseFailed):
            run(exercise)
    assert len(calls) == 1
    out = capsys.readouterr().out
    assert "Compilation of" in out
    assert "error: expected pattern" in out


def test_run_binary_failure_raises(tmp_path, capsys):
    exercise = make_exercise(tmp_path, "panics", Mode.COMPILE)
    fake, _ = fake_tools(run_code=101, run_out=b"partial", run_err=b"panicked")
    with patch("subprocess.run", side_effect=fake):
        with pytest.raises(ExerciseFailed) as info:
            run(exercise)
    assert info.value.output.stderr == "panicked"
    out = capsys.readouterr().out
    assert "with errors" in out
    assert "partial" in out


def test_run_failing_tests_raises(tmp_path):
    exercise = make_exercise(tmp_path, "testNotPassed", Mode.TEST)
    fake, _ = fake_tools(run_code=101)
    with patch("subprocess.run", side_effect=fake):
        with pytest.raises(ExerciseFailed):
            run(exercise)


def test_reset_stashes_exercise_file(tmp_path):
    exercise = make_exercise(tmp_path, "intro1", Mode.COMPILE)
    process = MagicMock()
    with patch("subprocess.Popen", return_value=process) as popen:
        result = reset(exercise)
    assert result is process
    popen.assert_called_once_with(["git", "stash", "--", str(exercise.path)])


def test_reset_without_git_raises(tmp_path):
    exercise = make_exercise(tmp_path, "intro1", Mode.COMPILE)
    with patch("subprocess.Popen", side_effect=FileNotFoundError("git")):
        with pytest.raises(FileNotFoundError):
            reset(exercise)