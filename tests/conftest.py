"""Shared fixtures for kebabify tests."""

import shutil
import subprocess
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple
from unittest.mock import Mock

import pytest
from git.exc import InvalidGitRepositoryError


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def make_tree(root: Path, files: Dict[str, str]) -> Path:
    """Create files (and their parent directories) under root."""
    for rel, content in files.items():
        path = root / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def names_in(directory: Path) -> List[str]:
    """Actual on-disk names, independent of filesystem case sensitivity."""
    return sorted(p.name for p in directory.iterdir())


def diff_entry(change_type: str, a_path: str, b_path: Optional[str] = None) -> Mock:
    """A GitPython Diff stand-in."""
    return Mock(change_type=change_type, a_path=a_path, b_path=b_path or a_path)


def fake_repo(
    toplevel: Path,
    ignored: Iterable[str] = (),
    unstaged: Iterable[Mock] = (),
    staged: Iterable[Mock] = (),
    has_commits: bool = True,
) -> Mock:
    """A GitPython Repo stand-in rooted at toplevel."""
    repo = Mock()
    repo.working_tree_dir = str(toplevel)
    repo.ignored.return_value = list(ignored)
    repo.index.diff.return_value = list(unstaged)
    repo.head.is_valid.return_value = has_commits
    repo.head.commit.diff.return_value = list(staged)
    return repo


class FakeGit:
    """Stand-in for subprocess.run that answers git mv."""

    def __init__(self, mv_returncode: int = 0):
        self.mv_returncode = mv_returncode
        self.calls: List[Tuple[List[str], Optional[str]]] = []

    def __call__(self, args, cwd=None, **kwargs):
        self.calls.append((list(args), cwd))
        if args[1] == "mv":
            return subprocess.CompletedProcess(args, self.mv_returncode, "", "")
        raise AssertionError(f"Unexpected git command: {args}")

    def mv_calls(self) -> List[List[str]]:
        return [args for args, _ in self.calls if args[1] == "mv"]


def git(repo: Path, *args: str) -> str:
    """Run a real git command in repo."""
    proc = subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com",
         "-c", "commit.gpgsign=false", *args],
        cwd=str(repo), capture_output=True, text=True, check=True,
    )
    return proc.stdout


@pytest.fixture
def not_version_controlled(monkeypatch) -> FakeGit:
    """No directory is inside a repository; returns a git mv runner."""
    monkeypatch.setattr(
        "kebab_core.safety_checks.Repo",
        Mock(side_effect=InvalidGitRepositoryError("not a git repository")),
    )
    return FakeGit()


@pytest.fixture
def use_repo(monkeypatch):
    """Make the git status check open the given Repo stand-in."""
    def install(repo: Mock) -> Mock:
        repo_class = Mock(return_value=repo)
        monkeypatch.setattr("kebab_core.safety_checks.Repo", repo_class)
        return repo_class
    return install
