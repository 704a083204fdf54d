"""Unit tests for rename execution, run logs and temp-name recovery."""

import errno
import json
import subprocess
from pathlib import Path
from unittest.mock import Mock

import pytest

from conftest import make_tree, names_in
from kebab_core.errors import ExecutionError
from kebab_core.exec_rename import (
    execute_commands,
    find_temp_leftovers,
    recover_temp_renames,
    save_run_log,
)
from kebab_core.models_fs import FileSystemItem, RenameCommand
from kebab_core.plan_rename import plan_renames
from kebab_core.scan_files import scan_directories


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(["git"], returncode, stdout, stderr)


class TestPlainMove:
    """Test cases for execution without version control."""

    def test_executes_plan_on_disk(self, tmp_path):
        root = make_tree(tmp_path, {
            "fooBar/nestedDir/DeepFile.ts": "deep",
            "fooBar/TopFile.ts": "top",
            "Readme.md": "readme",
        })
        commands = plan_renames(scan_directories([root]).items)

        execute_commands(commands, use_vcs_move=False)

        assert names_in(root) == ["foo-bar", "readme.md"]
        assert names_in(root / "foo-bar") == ["nested-dir", "top-file.ts"]
        assert (root / "foo-bar" / "nested-dir" / "deep-file.ts").read_text() == "deep"

    def test_case_only_directory_rename(self, tmp_path):
        root = make_tree(tmp_path, {"Foo/inner.ts": "x"})
        commands = plan_renames(scan_directories([root]).items)
        assert len(commands) == 2

        execute_commands(commands)

        assert names_in(root) == ["foo"]
        assert (root / "foo" / "inner.ts").read_text() == "x"

    def test_refuses_to_overwrite(self, tmp_path):
        root = make_tree(tmp_path, {"a.ts": "a", "b.ts": "b"})
        cmd = RenameCommand("a.ts", "b.ts", root)

        with pytest.raises(ExecutionError) as exc_info:
            execute_commands([cmd])

        assert "Destination already exists" in exc_info.value.stderr
        assert (root / "a.ts").read_text() == "a"
        assert (root / "b.ts").read_text() == "b"

    def test_stops_at_first_failure(self, tmp_path):
        root = make_tree(tmp_path, {"first.ts": "", "secondFile.ts": ""})
        commands = [
            RenameCommand("first.ts", "first-renamed.ts", root),
            RenameCommand("missingFile.ts", "missing-file.ts", root),
            RenameCommand("secondFile.ts", "second-file.ts", root),
        ]

        with pytest.raises(ExecutionError) as exc_info:
            execute_commands(commands)

        error = exc_info.value
        assert error.command == commands[1]
        assert error.returncode == errno.ENOENT
        assert error.signal is None
        assert "Command failed: mv missingFile.ts missing-file.ts" in str(error)
        # Applied moves stay, later ones are not attempted
        assert names_in(root) == ["first-renamed.ts", "secondFile.ts"]

    def test_working_directory_override(self, tmp_path):
        root = make_tree(tmp_path / "elsewhere", {"fooBar.ts": ""})
        cmd = RenameCommand("fooBar.ts", "foo-bar.ts", Path("/not/used"))

        execute_commands([cmd], working_directory=root)

        assert names_in(root) == ["foo-bar.ts"]

    def test_progress_callback(self, tmp_path):
        root = make_tree(tmp_path, {"aFile.ts": "", "bFile.ts": ""})
        commands = [
            RenameCommand("aFile.ts", "a-file.ts", root),
            RenameCommand("bFile.ts", "b-file.ts", root),
        ]
        progress = Mock()

        execute_commands(commands, progress_callback=progress)

        assert [c.args[:2] for c in progress.call_args_list] == [(1, 2), (2, 2)]
        assert progress.call_args_list[0].args[2] == "aFile.ts -> a-file.ts"


class TestGitMove:
    """Test cases for execution through git mv."""

    def setup_method(self):
        self.root = Path("/repo/src")
        self.commands = [
            RenameCommand("fooBar", "foo-bar", self.root),
            RenameCommand("Baz.ts", "baz.ts.temp-rename", self.root, uses_temp=True),
            RenameCommand("baz.ts.temp-rename", "baz.ts", self.root, uses_temp=True),
        ]

    def test_runs_git_mv_in_root(self):
        runner = Mock(return_value=completed())

        execute_commands(self.commands, use_vcs_move=True, runner=runner)

        assert runner.call_count == 3
        args, kwargs = runner.call_args_list[0]
        assert args[0] == ["git", "mv", "fooBar", "foo-bar"]
        assert kwargs["cwd"] == str(self.root)
        assert kwargs["capture_output"] is True

    def test_failure_carries_output(self):
        runner = Mock(return_value=completed(128, "", "fatal: not under version control\n"))

        with pytest.raises(ExecutionError) as exc_info:
            execute_commands(self.commands, use_vcs_move=True, runner=runner)

        error = exc_info.value
        assert runner.call_count == 1
        assert error.returncode == 128
        assert error.stderr.startswith("fatal: not under version control")
        assert error.command_line == "git mv fooBar foo-bar"
        message = str(error)
        assert "Command failed: git mv fooBar foo-bar" in message
        assert "Stderr: fatal: not under version control" in message
        assert "Exit code: 128" in message
        assert error.leftover_temp_path is None

    def test_killed_by_signal(self):
        runner = Mock(return_value=completed(-9))

        with pytest.raises(ExecutionError) as exc_info:
            execute_commands(self.commands, use_vcs_move=True, runner=runner)

        assert exc_info.value.signal == "SIGKILL"
        assert "Signal: SIGKILL" in str(exc_info.value)

    def test_leftover_temp_path(self):
        runner = Mock(side_effect=[completed(), completed(), completed(1, "", "boom")])

        with pytest.raises(ExecutionError) as exc_info:
            execute_commands(self.commands, use_vcs_move=True, runner=runner)

        assert exc_info.value.leftover_temp_path == "baz.ts.temp-rename"

    def test_git_not_installed(self):
        runner = Mock(side_effect=FileNotFoundError(errno.ENOENT, "No such file or directory: 'git'"))

        with pytest.raises(ExecutionError) as exc_info:
            execute_commands(self.commands, use_vcs_move=True, runner=runner)

        assert exc_info.value.returncode == errno.ENOENT


class TestRunLog:
    """Test cases for save_run_log."""

    def test_writes_json(self, tmp_path):
        items = [
            FileSystemItem("fooBar", "foo-bar", True, True, tmp_path),
            FileSystemItem("fooBar/BazQux.ts", "foo-bar/baz-qux.ts", False, True, tmp_path),
        ]
        log_file = tmp_path / "logs" / "kebabify.log"

        path = save_run_log([tmp_path], items, [tmp_path / "foo-bar" / "baz-qux.ts"], log_file)

        assert path == log_file
        data = json.loads(log_file.read_text(encoding="utf-8"))
        assert data["directories"] == [str(tmp_path)]
        assert data["renamed"][0] == {
            "root": str(tmp_path), "src": "fooBar", "dst": "foo-bar", "type": "directory",
        }
        assert data["renamed"][1]["type"] == "file"
        assert data["updated_files"] == [str(tmp_path / "foo-bar" / "baz-qux.ts")]
        assert "timestamp" in data


class TestTempRecovery:
    """Test cases for find_temp_leftovers and recover_temp_renames."""

    def test_find_leftovers(self, tmp_path):
        root = make_tree(tmp_path, {
            "foo.temp-rename/inner.ts": "",
            "lib/bar.ts.temp-rename-0a1b2c3d": "",
            "lib/normal.ts": "",
            "node_modules/x.temp-rename": "",
        })

        found = find_temp_leftovers([root])

        assert sorted(p.relative_to(root).as_posix() for p in found) == [
            "foo.temp-rename", "lib/bar.ts.temp-rename-0a1b2c3d",
        ]

    def test_recover(self, tmp_path):
        root = make_tree(tmp_path, {
            "foo.temp-rename/bar.ts.temp-rename": "x",
            "taken.ts.temp-rename": "new",
            "taken.ts": "old",
        })

        restored = recover_temp_renames([root])

        assert len(restored) == 2
        assert (root / "foo" / "bar.ts").read_text() == "x"
        # Target name occupied: left for the user
        assert (root / "taken.ts.temp-rename").exists()
        assert (root / "taken.ts").read_text() == "old"
