"""
sort_rules.py - Sorting Rules Module

Orders rename items so that executing them one after another never
invalidates a path that a later command still needs
"""

from typing import Callable, List, Tuple

from .models_fs import FileSystemItem


def get_sort_key() -> Callable[[FileSystemItem], Tuple]:
    """
    Get execution-order sort key function

    Directories come before files. Directories go shallowest first, so a
    parent is renamed before its children are addressed. Files go deepest
    first. Ties are broken by path to keep the order stable.

    Returns:
        Sort key function
    """
    def key(item: FileSystemItem) -> Tuple:
        if item.is_directory:
            return (0, item.depth, str(item.root), item.original_path)
        return (1, -item.depth, str(item.root), item.original_path)

    return key


def sort_for_execution(items: List[FileSystemItem]) -> List[FileSystemItem]:
    """
    Sort items into safe execution order

    Args:
        items: Items to rename

    Returns:
        Sorted item list (new list)
    """
    return sorted(items, key=get_sort_key())
