"""Command-line interface: list, run, verify, watch, hint, reset and lsp."""

from __future__ import annotations

import argparse
import math
import os
import queue
import subprocess
import sys
import threading
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .exercise import Exercise, ExerciseFailed, load_exercises
from .project import RustAnalyzerProject
from .run import reset, run
from .verify import VerificationFailed, verify

WELCOME = r"""       welcome to...
   ___ _ __ __ _| |__   __| |_ __(_) | |
  / __| '__/ _` | '_ \ / _` | '__| | | |
 | (__| | | (_| | |_) | (_| | |  | | | |
  \___|_|  \__,_|_.__/ \__,_|_|  |_|_|_|"""

DEFAULT_OUT = """Thanks for installing crabdrill!

Is this your first time? Don't worry, crabdrill was made for beginners! We are
going to teach you a lot of things about Rust, but before we can get
started, here's a couple of notes about how crabdrill operates:

1. The central concept behind crabdrill is that you solve exercises. These
   exercises usually have some sort of syntax error in them, which will cause
   them to fail compilation or testing. Sometimes there's a logic error instead
   of a syntax error. No matter what error, it's your job to find it and fix it!
   You'll know when you fixed it because then, the exercise will compile and
   crabdrill will be able to move on to the next exercise.
2. If you run crabdrill in watch mode (which we recommend), it'll automatically
   start with the first exercise. Don't get confused by an error message popping
   up as soon as you run crabdrill! This is part of the exercise that you're
   supposed to solve, so open the exercise file in an editor and start your
   detective work!
3. If you're stuck on an exercise, there is a helpful hint you can view by typing
   'hint' (in watch mode), or running `crabdrill hint exercise_name`.
4. If an exercise doesn't make sense to you, feel free to open an issue on the
   project's tracker. We look at every issue, and sometimes, other learners do
   too so you can help each other out!
5. If you want to use `rust-analyzer` with exercises, which provides features like
   autocompletion, run the command `crabdrill lsp`.

Got all that? Great! To get started, run `crabdrill watch` in order to get the first
exercise. Make sure to have your editor open!"""

FINISH_LINE = r"""+----------------------------------------------------+
|          You made it to the Fe-nish line!          |
+--------------------------  ------------------------+
                          \\/
     ▒▒          ▒▒▒▒▒▒▒▒      ▒▒▒▒▒▒▒▒          ▒▒
   ▒▒▒▒  ▒▒    ▒▒        ▒▒  ▒▒        ▒▒    ▒▒  ▒▒▒▒
   ▒▒▒▒  ▒▒  ▒▒            ▒▒            ▒▒  ▒▒  ▒▒▒▒
 ░░▒▒▒▒░░▒▒  ▒▒            ▒▒            ▒▒  ▒▒░░▒▒▒▒
   ▓▓▓▓▓▓▓▓  ▓▓      ▓▓██  ▓▓  ▓▓██      ▓▓  ▓▓▓▓▓▓▓▓
     ▒▒▒▒    ▒▒      ████  ▒▒  ████      ▒▒░░  ▒▒▒▒
       ▒▒  ▒▒▒▒▒▒        ▒▒▒▒▒▒        ▒▒▒▒▒▒  ▒▒
         ▒▒▒▒▒▒▒▒▒▒▓▓▓▓▓▓▒▒▒▒▒▒▒▒▓▓▒▒▓▓▒▒▒▒▒▒▒▒
           ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒
             ▒▒▒▒▒▒▒▒▒▒██▒▒▒▒▒▒██▒▒▒▒▒▒▒▒▒▒
           ▒▒  ▒▒▒▒▒▒▒▒▒▒██████▒▒▒▒▒▒▒▒▒▒  ▒▒
         ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒
       ▒▒    ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒    ▒▒
       ▒▒  ▒▒    ▒▒                  ▒▒    ▒▒  ▒▒
           ▒▒  ▒▒                      ▒▒  ▒▒

We hope you enjoyed learning about the various aspects of Rust!
If you noticed any issues, please don't hesitate to report them.
You can also contribute your own exercises to help the greater community!"""

_WATCH_HELP = """Commands available to you in watch mode:
  hint   - prints the current exercise's hint
  clear  - clears the screen
  quit   - quits watch mode
  !<cmd> - executes a command, like `!rustc --explain E0381`
  help   - displays this help message

Watch mode automatically re-evaluates the current exercise
when you edit a file's contents."""


class WatchStatus(Enum):
    """How watch mode ended."""

    FINISHED = auto()
    UNFINISHED = auto()


def _version() -> str:
    try:
        return version("crabdrill")
    except PackageNotFoundError:
        return "unknown"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crabdrill",
        description="A collection of small exercises to get you used to writing and reading Rust code",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument(
        "--nocapture", action="store_true", help="Show outputs from the test exercises"
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("verify", help="Verify all exercises according to the recommended order")
    watch_cmd = commands.add_parser("watch", help="Rerun `verify` when files were edited")
    watch_cmd.add_argument("--success-hints", action="store_true", help="Show hints on success")
    for name, text in (
        ("run", "Run/Test a single exercise"),
        ("reset", 'Reset a single exercise using "git stash -- <filename>"'),
        ("hint", "Return a hint for the given exercise"),
    ):
        sub = commands.add_parser(name, help=text)
        sub.add_argument("name", help="The name of the exercise")
    list_cmd = commands.add_parser("list", help="List the exercises available")
    list_cmd.add_argument("-p", "--paths", action="store_true", help="Show only the paths of the exercises")
    list_cmd.add_argument("-n", "--names", action="store_true", help="Show only the names of the exercises")
    list_cmd.add_argument(
        "-f",
        "--filter",
        default=None,
        help="Provide a string to match exercise names. Comma separated patterns are accepted",
    )
    list_cmd.add_argument("-u", "--unsolved", action="store_true", help="Display only exercises not yet solved")
    list_cmd.add_argument("-s", "--solved", action="store_true", help="Display only exercises that have been solved")
    commands.add_parser("lsp", help="Enable rust-analyzer for exercises")
    return parser


def rustc_exists() -> bool:
    """Whether `rustc --version` can be run successfully."""
    try:
        result = subprocess.run(
            ["rustc", "--version"],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return result.returncode == 0


def find_exercise(name: str, exercises: Sequence[Exercise]) -> Exercise:
    """Find an exercise by name; "next" means the first unfinished one."""
    if name == "next":
        found = next((e for e in exercises if not e.looks_done()), None)
        if found is None:
            raise LookupError(
                "🎉 Congratulations! You have done all the exercises!\n"
                "🔚 There are no more exercises to do next!"
            )
        return found
    found = next((e for e in exercises if e.name == name), None)
    if found is None:
        raise LookupError(f"No exercise found for '{name}'!")
    return found


def list_exercises(
    exercises: Sequence[Exercise],
    paths: bool = False,
    names: bool = False,
    filter: str | None = None,
    unsolved: bool = False,
    solved: bool = False,
) -> int:
    """Print the exercise table and progress; return the number done."""
    if not paths and not names:
        print(f"{'Name':<17}\t{'Path':<46}\t{'Status':<7}")
    patterns = [p for p in (filter or "").lower().split(",") if p.strip()]
    done_count = 0
    for exercise in exercises:
        fname = str(exercise.path)
        matches = any(p in exercise.name or p in fname for p in patterns)
        done = exercise.looks_done()
        if done:
            done_count += 1
        status = "Done" if done else "Pending"
        wanted = (done and solved) or (not done and unsolved) or (not solved and not unsolved)
        if wanted and (matches or filter is None):
            if paths:
                line = f"{fname}\n"
            elif names:
                line = f"{exercise.name}\n"
            else:
                line = f"{exercise.name:<17}\t{fname:<46}\t{status:<7}\n"
            sys.stdout.write(line)
    total = len(exercises)
    percentage = done_count / total * 100.0 if total else math.nan
    print(f"Progress: You completed {done_count} / {total} exercises ({percentage:.1f} %).")
    return done_count


@dataclass
class _SharedHint:
    hint: str
    lock: threading.Lock = field(default_factory=threading.Lock)


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, changes: queue.Queue[Path]):
        super().__init__()
        self._changes = changes

    def on_created(self, event: FileSystemEvent) -> None:
        self._push(event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._push(event)

    def _push(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        path = event.src_path
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        self._changes.put(Path(path))


def _clear_screen() -> None:
    print("\x1bc")


def _run_shell_command(command: str) -> None:
    parts = command.split()
    if not parts:
        print("no command provided")
        return
    try:
        subprocess.run(parts, check=False)
    except OSError as exc:
        print(f"failed to execute command `{command}`: {exc}")


def _watch_shell(shared: _SharedHint, should_quit: threading.Event) -> None:
    try:
        for raw in sys.stdin:
            command = raw.strip()
            if command == "hint":
                with shared.lock:
                    print(shared.hint)
            elif command == "clear":
                print("\x1b[2J\x1b[1;1H")
            elif command == "quit":
                should_quit.set()
                print("Bye!")
            elif command == "help":
                print(_WATCH_HELP)
            elif command.startswith("!"):
                _run_shell_command(command[1:])
            else:
                print(f"unknown command: {command}")
    except (OSError, ValueError) as exc:
        print(f"error reading command: {exc}")


def _spawn_watch_shell(shared: _SharedHint, should_quit: threading.Event) -> None:
    print(
        "Welcome to watch mode! You can type 'help' to get an overview of "
        "the commands you can use here."
    )
    threading.Thread(target=_watch_shell, args=(shared, should_quit), daemon=True).start()


def _ends_with(path: Path, suffix: Path) -> bool:
    parts = suffix.parts
    return len(parts) <= len(path.parts) and path.parts[len(path.parts) - len(parts):] == parts


def _next_changes(changes: queue.Queue[Path]) -> list[Path]:
    try:
        first = changes.get(timeout=1.0)
    except queue.Empty:
        return []
    seen = {first: None}
    while True:
        try:
            seen[changes.get_nowait()] = None
        except queue.Empty:
            return list(seen)


def _pending_after_change(exercises: Sequence[Exercise], filepath: Path) -> Iterator[Exercise]:
    changed = next((e for e in exercises if _ends_with(filepath, e.path)), None)
    if changed is not None:
        yield changed
    for exercise in exercises:
        if not exercise.looks_done() and not _ends_with(filepath, exercise.path):
            yield exercise


def watch(
    exercises: Iterable[Exercise], verbose: bool = False, success_hints: bool = False
) -> WatchStatus:
    """Verify exercises, then re-verify whenever an exercise file changes."""
    exercises = list(exercises)
    total = len(exercises)
    changes: queue.Queue[Path] = queue.Queue()
    observer = Observer()
    observer.schedule(_ChangeHandler(changes), "./exercises", recursive=True)
    observer.start()
    try:
        _clear_screen()
        try:
            verify(exercises, (0, total), verbose, success_hints)
        except VerificationFailed as exc:
            shared = _SharedHint(exc.exercise.hint)
        else:
            return WatchStatus.FINISHED
        should_quit = threading.Event()
        _spawn_watch_shell(shared, should_quit)
        while True:
            for path in _next_changes(changes):
                if path.suffix != ".rs" or not path.exists():
                    continue
                filepath = path.resolve()
                num_done = sum(
                    1 for e in exercises if e.looks_done() and not _ends_with(filepath, e.path)
                )
                _clear_screen()
                try:
                    verify(
                        _pending_after_change(exercises, filepath),
                        (num_done, total),
                        verbose,
                        success_hints,
                    )
                except VerificationFailed as exc:
                    with shared.lock:
                        shared.hint = exc.exercise.hint
                else:
                    return WatchStatus.FINISHED
            if should_quit.is_set():
                return WatchStatus.UNFINISHED
    finally:
        observer.stop()
        observer.join()


def _lsp() -> int:
    project = RustAnalyzerProject()
    try:
        project.get_sysroot_src()
    except OSError:
        print("Couldn't find toolchain path, do you have `rustc` installed?")
        return 1
    try:
        project.exercises_to_json()
    except OSError:
        print("Couldn't parse exercises files")
        return 1
    if not project.crates:
        print("Failed find any exercises, make sure you're in the exercises folder")
        return 0
    try:
        project.write_to_disk()
    except OSError:
        print("Failed to write rust-project.json to disk for rust-analyzer")
        return 0
    print("Successfully generated rust-project.json")
    print("rust-analyzer will now parse exercises, restart your language server or editor")
    return 0


def _watch_command(exercises: Sequence[Exercise], verbose: bool, success_hints: bool) -> int:
    try:
        status = watch(exercises, verbose, success_hints)
    except OSError as exc:
        print(f"Error: Could not watch your progress. Error message was {exc!r}.")
        print(
            "Most likely you've run out of disk space or your 'inotify limit' has been reached."
        )
        return 1
    if status is WatchStatus.FINISHED:
        emoji = "★" if "NO_EMOJI" in os.environ else "🎉"
        print(f"{emoji} All exercises completed! {emoji}")
        print(f"\n{FINISH_LINE}\n")
    else:
        print("We hope you're enjoying learning about Rust!")
        print(
            "If you want to continue working on the exercises at a later point, "
            "you can simply run `crabdrill watch` again"
        )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = _parser().parse_args(argv)

    if args.command is None:
        print(f"\n{WELCOME}\n")

    if not Path("info.toml").exists():
        print(f"{sys.argv[0]} must be run from the exercises directory")
        print("Try `cd` into the directory that holds info.toml!")
        return 1

    if not rustc_exists():
        print("We cannot find `rustc`.")
        print("Try running `rustc --version` to diagnose your problem.")
        print("For instructions on how to install Rust, check the README.")
        return 1

    exercises = load_exercises("info.toml")
    verbose = args.nocapture

    if args.command is None:
        print(f"{DEFAULT_OUT}\n")
        return 0

    match args.command:
        case "list":
            try:
                list_exercises(
                    exercises, args.paths, args.names, args.filter, args.unsolved, args.solved
                )
            except BrokenPipeError:
                return 0
            except OSError:
                return 1
            return 0
        case "run" | "reset" | "hint":
            try:
                exercise = find_exercise(args.name, exercises)
            except LookupError as exc:
                print(exc)
                return 1
            if args.command == "hint":
                print(exercise.hint)
                return 0
            if args.command == "reset":
                try:
                    reset(exercise).wait()
                except OSError:
                    return 1
                return 0
            try:
                run(exercise, verbose)
            except ExerciseFailed:
                return 1
            return 0
        case "verify":
            try:
                verify(exercises, (0, len(exercises)), verbose, False)
            except VerificationFailed:
                return 1
            return 0
        case "lsp":
            return _lsp()
        case "watch":
            return _watch_command(exercises, verbose, args.success_hints)
    return 2