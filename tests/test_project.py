import json
import subprocess
from pathlib import Path

from crabdrill.project import Crate, RustAnalyzerProject


def _make_tree(tmp_path):
    root = tmp_path / "exercises"
    (root / "01_variables").mkdir(parents=True)
    (root / "02_functions").mkdir()
    (root / "01_variables" / "variables1.rs").write_text("fn main() {}\n")
    (root / "02_functions" / "functions1.rs").write_text("fn main() {}\n")
    (root / "01_variables" / "README.md").write_text("notes\n")
    return root


def test_exercises_to_json_collects_only_rust_files(tmp_path):
    root = _make_tree(tmp_path)
    project = RustAnalyzerProject()
    assert project.crates == []
    project.exercises_to_json(root)
    modules = [crate.root_module for crate in project.crates]
    assert modules == [
        str(root / "01_variables" / "variables1.rs"),
        str(root / "02_functions" / "functions1.rs"),
    ]
    assert all(crate.edition == "2021" for crate in project.crates)
    assert all(crate.cfg == ["test"] and crate.deps == [] for crate in project.crates)


def test_to_json_round_trip():
    project = RustAnalyzerProject(sysroot_src="/sys", crates=[Crate(root_module="a.rs")])
    data = json.loads(project.to_json())
    assert data == {
        "sysroot_src": "/sys",
        "crates": [{"root_module": "a.rs", "edition": "2021", "deps": [], "cfg": ["test"]}],
    }


def test_write_to_disk(tmp_path):
    project = RustAnalyzerProject(sysroot_src="/sys", crates=[Crate(root_module="b.rs")])
    target = tmp_path / "rust-project.json"
    project.write_to_disk(target)
    assert target.read_text() == project.to_json()


def test_sysroot_from_environment(monkeypatch):
    monkeypatch.setenv("RUST_SRC_PATH", "/src/rust")
    project = RustAnalyzerProject()
    project.get_sysroot_src()
    assert project.sysroot_src == "/src/rust"


def test_sysroot_from_rustc(monkeypatch, capsys):
    monkeypatch.delenv("RUST_SRC_PATH", raising=False)
    calls = []

    def fake_run(args, **kwargs):
        calls.append(list(args))
        return subprocess.CompletedProcess(args, 0, b"/opt/toolchain\n", b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    project = RustAnalyzerProject()
    project.get_sysroot_src()
    assert calls == [["rustc", "--print", "sysroot"]]
    assert project.sysroot_src == str(
        Path("/opt/toolchain") / "lib" / "rustlib" / "src" / "rust" / "library"
    )
    assert "Determined toolchain: /opt/toolchain" in capsys.readouterr().out