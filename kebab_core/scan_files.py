"""
scan_files.py - File Scanning Module

Walks directory trees and computes the kebab-case target path of every
file and directory. Also provides the source-file walk used by the import
rewriter, so both stages skip the same subtrees.
"""

from pathlib import Path
from typing import Callable, Collection, Iterator, List, Optional, Sequence, Union
import os
import posixpath

from .errors import RootNotADirectoryError, RootNotFoundError
from .models_fs import DEFAULT_IGNORE_NAMES, SOURCE_EXTENSIONS, FileSystemItem, ScanResult
from .text_case import convert_directory_name, convert_file_name


PathLike = Union[str, Path]


def should_skip(name: str, ignore_names: Collection[str] = DEFAULT_IGNORE_NAMES) -> bool:
    """
    Check if an entry should be skipped

    Args:
        name: Base name of the entry
        ignore_names: Names to skip (hidden names are always skipped)

    Returns:
        Whether to skip
    """
    return name.startswith(".") or name in ignore_names


def check_root(root: PathLike) -> Path:
    """
    Validate a root directory

    Raises:
        RootNotFoundError: root does not exist
        RootNotADirectoryError: root is not a directory
    """
    path = Path(root)
    if not path.exists():
        raise RootNotFoundError(root)
    if not path.is_dir():
        raise RootNotADirectoryError(root)
    return path


def unique_roots(roots: Sequence[PathLike]) -> List[Path]:
    """
    Validate roots and drop any root that lies inside another one

    Entries under a nested root are already covered by the outer scan.
    Duplicate roots are kept once.

    Raises:
        RootNotFoundError: root does not exist
        RootNotADirectoryError: root is not a directory
    """
    checked = [(check_root(root), Path(root).resolve()) for root in roots]
    resolved_all = [resolved for _, resolved in checked]

    kept: List[Path] = []
    seen: List[Path] = []
    for path, resolved in checked:
        if resolved in seen or any(other in resolved.parents for other in resolved_all):
            continue
        seen.append(resolved)
        kept.append(path)
    return kept


def _sorted_entries(directory: Path) -> List[os.DirEntry]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda e: e.name)


def scan_directory_recursive(
    root: Path,
    rel_dir: str = "",
    new_rel_dir: str = "",
    ignore_names: Collection[str] = DEFAULT_IGNORE_NAMES,
    progress_callback: Optional[Callable[[str], None]] = None
) -> List[FileSystemItem]:
    """
    Scan a single directory recursively

    The walk reads the original on-disk directory ``root / rel_dir``, while
    target paths of children are built under the parent's converted path
    ``new_rel_dir``.

    Args:
        root: Scan root
        rel_dir: Original path of the directory relative to root
        new_rel_dir: Converted path of the same directory
        ignore_names: Names to skip
        progress_callback: Progress callback function

    Returns:
        Items found under the directory
    """
    items: List[FileSystemItem] = []
    directory = root / rel_dir if rel_dir else root

    for entry in _sorted_entries(directory):
        if should_skip(entry.name, ignore_names):
            continue

        original_path = posixpath.join(rel_dir, entry.name) if rel_dir else entry.name

        if progress_callback:
            progress_callback(original_path)

        # Symlinks are neither followed nor renamed
        if entry.is_dir(follow_symlinks=False):
            new_name = convert_directory_name(entry.name)
            is_directory = True
        elif entry.is_file(follow_symlinks=False):
            new_name = convert_file_name(entry.name)
            is_directory = False
        else:
            continue

        new_path = posixpath.join(new_rel_dir, new_name) if new_rel_dir else new_name
        items.append(FileSystemItem(
            original_path=original_path,
            new_path=new_path,
            is_directory=is_directory,
            needs_rename=entry.name != new_name,
            root=root,
        ))

        if is_directory:
            items.extend(scan_directory_recursive(
                root, original_path, new_path, ignore_names, progress_callback
            ))

    return items


def scan_directories(
    roots: Sequence[PathLike],
    ignore_names: Collection[str] = DEFAULT_IGNORE_NAMES,
    progress_callback: Optional[Callable[[str], None]] = None
) -> ScanResult:
    """
    Scan multiple directories for files and directories to convert

    Args:
        roots: Root directories
        ignore_names: Names to skip
        progress_callback: Progress callback function

    Returns:
        Scan result over all roots

    Raises:
        RootNotFoundError: a root does not exist
        RootNotADirectoryError: a root is not a directory
    """
    result = ScanResult()
    for path in unique_roots(roots):
        result.items.extend(
            scan_directory_recursive(path, ignore_names=ignore_names, progress_callback=progress_callback)
        )
    return result


def get_items_to_rename(scan_result: ScanResult) -> List[FileSystemItem]:
    """Get items that need to be renamed"""
    return scan_result.items_to_rename


def iter_source_files(
    roots: Sequence[PathLike],
    extensions: Collection[str] = SOURCE_EXTENSIONS,
    ignore_names: Collection[str] = DEFAULT_IGNORE_NAMES
) -> Iterator[Path]:
    """
    Recursively yield source files under the roots

    Args:
        roots: Root directories
        extensions: File extensions to yield (with leading dot)
        ignore_names: Names to skip

    Yields:
        Paths of matching files
    """
    for root in unique_roots(roots):
        for dirpath, dirnames, filenames in os.walk(root):
            # Modifying dirnames in place prevents os.walk from entering these directories
            dirnames[:] = sorted(d for d in dirnames if not should_skip(d, ignore_names))

            for filename in sorted(filenames):
                if should_skip(filename, ignore_names):
                    continue
                if posixpath.splitext(filename)[1] not in extensions:
                    continue
                filepath = Path(dirpath) / filename
                if filepath.is_symlink():
                    continue
                yield filepath
