"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Execute planned moves in order, through git mv or a plain rename
- Stop at the first failure (no rollback, applied moves stay)
- Write the optional JSON run log
- Find and complete case-only renames interrupted mid-way
"""

from datetime import datetime
from pathlib import Path
from typing import Callable, Collection, Iterable, List, Optional, Sequence, Tuple, Union
import json
import os
import signal
import subprocess

from .errors import ExecutionError
from .models_fs import DEFAULT_IGNORE_NAMES, FileSystemItem, RenameCommand, temp_target_name
from .scan_files import should_skip, unique_roots


PathLike = Union[str, Path]


def _signal_name(returncode: int) -> Optional[str]:
    """Signal name for a negative subprocess return code"""
    if returncode >= 0:
        return None
    try:
        return signal.Signals(-returncode).name
    except ValueError:
        return str(-returncode)


def git_move(
    cmd: RenameCommand,
    cwd: Path,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run
) -> None:
    """
    Move with ``git mv`` so the rename is recorded in history

    Raises:
        ExecutionError: git exited non-zero or could not be started
    """
    args = ["git", "mv", cmd.src, cmd.dst]
    try:
        proc = runner(args, cwd=str(cwd), capture_output=True, text=True, check=False)
    except OSError as e:
        raise ExecutionError(cmd, cmd.command_line(True), stderr=str(e), returncode=e.errno) from e

    if proc.returncode != 0:
        raise ExecutionError(
            cmd,
            cmd.command_line(True),
            stderr=proc.stderr or "",
            stdout=proc.stdout or "",
            returncode=proc.returncode,
            signal=_signal_name(proc.returncode),
        )


def plain_move(cmd: RenameCommand, cwd: Path) -> None:
    """
    Move with a plain filesystem rename

    Refuses to replace an existing destination, as ``git mv`` does.

    Raises:
        ExecutionError: destination exists or the rename failed
    """
    src = cwd / cmd.src
    dst = cwd / cmd.dst

    if os.path.lexists(dst) and not _same_entry(src, dst):
        raise ExecutionError(cmd, cmd.command_line(False), stderr=f"Destination already exists: {dst}")

    try:
        os.rename(src, dst)
    except OSError as e:
        raise ExecutionError(cmd, cmd.command_line(False), stderr=str(e), returncode=e.errno) from e


def _same_entry(src: Path, dst: Path) -> bool:
    # On case-insensitive filesystems dst may resolve to src itself
    try:
        return os.path.samefile(src, dst)
    except OSError:
        return False


def execute_commands(
    commands: Sequence[RenameCommand],
    use_vcs_move: bool = False,
    working_directory: Optional[PathLike] = None,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run
) -> None:
    """
    Execute rename commands in order

    Args:
        commands: Planned commands
        use_vcs_move: Use ``git mv`` instead of a plain rename
        working_directory: Directory command paths are relative to
            (defaults to each command's scan root)
        progress_callback: Progress callback (current, total, message)
        runner: Subprocess runner for ``git mv``

    Raises:
        ExecutionError: on the first failing command; later commands are
            not attempted and applied moves are left in place
    """
    total = len(commands)

    for i, cmd in enumerate(commands):
        cwd = Path(working_directory) if working_directory is not None else cmd.root

        if progress_callback:
            progress_callback(i + 1, total, f"{cmd.src} -> {cmd.dst}")

        if use_vcs_move:
            git_move(cmd, cwd, runner)
        else:
            plain_move(cmd, cwd)


def save_run_log(
    directories: Sequence[PathLike],
    items: Iterable[FileSystemItem],
    updated_files: Iterable[PathLike],
    log_file: PathLike
) -> Path:
    """
    Save run log

    Args:
        directories: Processed root directories
        items: Renamed items
        updated_files: Files whose imports were rewritten
        log_file: Log file path

    Returns:
        Log file path
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "directories": [str(d) for d in directories],
        "renamed": [
            {
                "root": str(item.root),
                "src": item.original_path,
                "dst": item.new_path,
                "type": "directory" if item.is_directory else "file",
            }
            for item in items
        ],
        "updated_files": [str(f) for f in updated_files],
    }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return log_file


def find_temp_leftovers(
    roots: Sequence[PathLike],
    ignore_names: Collection[str] = DEFAULT_IGNORE_NAMES
) -> List[Path]:
    """
    Find entries still carrying a temporary case-only rename suffix

    Args:
        roots: Root directories
        ignore_names: Names to skip

    Returns:
        Paths of leftover temporary entries
    """
    found: List[Path] = []
    for root in unique_roots(roots):
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if not should_skip(d, ignore_names))
            for name in sorted(dirnames + filenames):
                if temp_target_name(name):
                    found.append(Path(dirpath) / name)
    return found


def recover_temp_renames(
    roots: Sequence[PathLike],
    ignore_names: Collection[str] = DEFAULT_IGNORE_NAMES
) -> List[Tuple[Path, Path]]:
    """
    Complete case-only renames interrupted between their two steps

    A leftover is moved to its intended name only when that name is free.

    Args:
        roots: Root directories
        ignore_names: Names to skip

    Returns:
        (temporary path, restored path) pairs that were moved
    """
    restored: List[Tuple[Path, Path]] = []
    # Deepest first so a parent rename doesn't invalidate its children's paths
    leftovers = sorted(find_temp_leftovers(roots, ignore_names), key=lambda p: len(p.parts), reverse=True)
    for temp_path in leftovers:
        target = temp_path.with_name(temp_target_name(temp_path.name))
        if os.path.lexists(target):
            continue
        os.rename(temp_path, target)
        restored.append((temp_path, target))
    return restored
