"""
safety_checks.py - Safety Check Module

Checks the version-control state of the target directories before any
file is touched, and enforces the "commit or stash first" rule.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union
import os

# Importing GitPython must not fail when the git executable is missing;
# commands then raise GitCommandNotFound, handled below.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

from git import Repo
from git.exc import CommandError, InvalidGitRepositoryError, NoSuchPathError

from .errors import DirtyTreeError, RootNotFoundError
from .models_fs import GitCheck, GitStatus, VcsState


PathLike = Union[str, Path]


def _within(path: str, rel_dir: str) -> bool:
    return not rel_dir or path == rel_dir or path.startswith(rel_dir + "/")


def modified_paths(repo: Repo, rel_dir: str = "") -> List[str]:
    """
    Collect modified or renamed paths in a repository

    Covers unstaged modifications (working tree against the index) and
    staged modifications and renames (index against HEAD). Untracked,
    added and deleted entries are not reported.

    Args:
        repo: Repository
        rel_dir: Limit to this directory, relative to the top level

    Returns:
        Paths relative to the repository top level, without duplicates
    """
    paths: List[str] = []

    def add(path: Optional[str]) -> None:
        if path and _within(path, rel_dir) and path not in paths:
            paths.append(path)

    for diff in repo.index.diff(None):
        if diff.change_type == "M":
            add(diff.a_path)

    # A repository without commits has nothing staged against HEAD
    if repo.head.is_valid():
        for diff in repo.head.commit.diff():
            if diff.change_type == "M":
                add(diff.a_path)
            elif diff.change_type == "R":
                add(diff.b_path)

    return paths


def check_git_status(directories: Sequence[PathLike]) -> GitCheck:
    """
    Check if the directories have uncommitted modified files

    Args:
        directories: Directories to check

    Returns:
        NOT_VERSION_CONTROLLED if any directory is outside a git work tree
        or ignored by git, otherwise CLEAN or DIRTY with details

    Raises:
        RootNotFoundError: a directory does not exist
    """
    status = GitStatus()

    for directory in directories:
        path = Path(directory)
        if not path.exists():
            raise RootNotFoundError(directory)

        absolute = path.resolve()
        status.checked_directories.append(str(absolute))

        try:
            repo = Repo(absolute, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError):
            return GitCheck(VcsState.NOT_VERSION_CONTROLLED)
        if repo.working_tree_dir is None:
            # Bare repository
            return GitCheck(VcsState.NOT_VERSION_CONTROLLED)

        toplevel = Path(repo.working_tree_dir).resolve()
        if str(toplevel) not in status.git_repositories:
            status.git_repositories.append(str(toplevel))

        rel_dir = absolute.relative_to(toplevel).as_posix()
        if rel_dir == ".":
            rel_dir = ""

        try:
            if rel_dir and repo.ignored(rel_dir):
                return GitCheck(VcsState.NOT_VERSION_CONTROLLED)
            dirty = modified_paths(repo, rel_dir)
        except CommandError:
            # git executable missing or unusable
            return GitCheck(VcsState.NOT_VERSION_CONTROLLED)

        for rel in dirty:
            full_path = str(toplevel / rel)
            if full_path not in status.dirty_files:
                status.dirty_files.append(full_path)

    status.is_dirty = len(status.dirty_files) > 0
    return GitCheck(VcsState.DIRTY if status.is_dirty else VcsState.CLEAN, status)


def ensure_safe_to_modify(check: GitCheck, force: bool = False) -> None:
    """
    Refuse to continue when tracked files have uncommitted changes

    Args:
        check: Result of check_git_status
        force: Proceed anyway

    Raises:
        DirtyTreeError: tree is dirty and force is not set
    """
    if check.is_dirty and not force:
        status: Optional[GitStatus] = check.status
        raise DirtyTreeError(status, status.dirty_repositories() or status.git_repositories)
