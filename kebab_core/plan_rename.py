"""
plan_rename.py - Rename Plan Generation Module

Responsibilities:
- Filter scan items to those needing a rename
- Order them for safe execution
- Split case-only renames into two moves through a temporary name
- Detect destination conflicts
- Output RenamePlan
"""

from collections import defaultdict
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple
import os
import posixpath
import uuid

from .models_fs import TEMP_SUFFIX, FileSystemItem, RenameCommand, RenamePlan
from .sort_rules import sort_for_execution


def is_case_only_change(src: str, dst: str) -> bool:
    """Whether two paths differ only in letter case"""
    return src.lower() == dst.lower() and src != dst


def source_path(item: FileSystemItem) -> str:
    """
    Where the item lives when its command runs

    Ancestors are renamed by earlier commands, so the item's original name
    is found under its parent's converted path.
    """
    parent = posixpath.dirname(item.new_path)
    return posixpath.join(parent, item.original_name) if parent else item.original_name


def make_temp_path(item: FileSystemItem, exists: Callable[[Path], bool] = os.path.lexists) -> str:
    """
    Generate a temporary path for a case-only rename

    Uses ``<dst>.temp-rename`` unless an entry with that name already sits
    next to the item, in which case a random token is appended.

    Args:
        item: Item being renamed
        exists: Existence check, applied to the on-disk location

    Returns:
        Temporary path relative to the item's root
    """
    temp_path = item.new_path + TEMP_SUFFIX
    on_disk_parent = item.root / posixpath.dirname(item.original_path)
    if exists(on_disk_parent / posixpath.basename(temp_path)):
        temp_path = f"{temp_path}-{uuid.uuid4().hex[:8]}"
    return temp_path


def plan_renames(
    items: List[FileSystemItem],
    exists: Callable[[Path], bool] = os.path.lexists
) -> List[RenameCommand]:
    """
    Generate ordered rename commands

    Args:
        items: Scanned items (items not needing rename are dropped)
        exists: Existence check used when choosing temporary names

    Returns:
        Commands in execution order; a case-only rename yields two
        consecutive commands
    """
    commands: List[RenameCommand] = []

    for item in sort_for_execution([i for i in items if i.needs_rename]):
        src = source_path(item)
        dst = item.new_path

        if is_case_only_change(src, dst):
            temp_path = make_temp_path(item, exists)
            commands.append(RenameCommand(src=src, dst=temp_path, root=item.root, uses_temp=True))
            commands.append(RenameCommand(src=temp_path, dst=dst, root=item.root, uses_temp=True))
        else:
            commands.append(RenameCommand(src=src, dst=dst, root=item.root))

    return commands


def validate_plan(items: List[FileSystemItem]) -> List[str]:
    """
    Validate scanned items for destination conflicts

    Two entries conflict when their target paths are equal ignoring case,
    whether or not either of them is renamed (``fooBar.ts`` next to an
    existing ``foo-bar.ts``).

    Args:
        items: All scanned items, renamed or not

    Returns:
        Error list
    """
    errors = []

    dst_set: Dict[Tuple[str, str], List[str]] = defaultdict(list)
    for item in items:
        dst_set[(str(item.root), item.new_path.casefold())].append(item.original_path)

    for (root, _), srcs in dst_set.items():
        if len(srcs) > 1:
            first = next(i for i in items if str(i.root) == root and i.original_path == srcs[0])
            errors.append(f"Multiple entries have the same destination: {srcs} -> {first.new_path} (in {root})")

    return errors


def build_rename_plan(
    items: List[FileSystemItem],
    exists: Optional[Callable[[Path], bool]] = None
) -> RenamePlan:
    """
    Generate the full rename plan

    Args:
        items: All scanned items
        exists: Existence check used when choosing temporary names

    Returns:
        Rename plan with commands and validation errors
    """
    plan = RenamePlan(items=[i for i in items if i.needs_rename])

    for error in validate_plan(items):
        plan.add_error(error)

    plan.commands = plan_renames(items, exists or os.path.lexists)

    for cmd in plan.commands:
        if cmd.uses_temp and not cmd.is_temp_source and not cmd.dst.endswith(TEMP_SUFFIX):
            default_temp = cmd.dst[:cmd.dst.rindex(TEMP_SUFFIX) + len(TEMP_SUFFIX)]
            plan.add_warning(f"Temporary name {cmd.dst} used because {default_temp} already exists")

    return plan
