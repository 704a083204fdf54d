"""
import_rewrite.py - Import Path Rewriting Module

After renaming, rewrites relative import specifiers in source files so they
point at the kebab-case names. Works on text with regular expressions; it
does not parse the source and does not check that rewritten paths resolve.
"""

from pathlib import Path
from typing import Callable, Collection, List, Optional, Sequence, Tuple, Union
import re

from .models_fs import DEFAULT_IGNORE_NAMES, SOURCE_EXTENSIONS
from .scan_files import iter_source_files
from .text_case import convert_file_name, split_extension, to_kebab_case


PathLike = Union[str, Path]

IMPORT_PATTERNS = [
    # ES modules: import ... from '...' / export ... from '...'
    re.compile(r"""(?P<head>\bfrom\s*)(?P<q>['"])(?P<path>[^'"\r\n]+)(?P=q)"""),
    # CommonJS: require('...')
    re.compile(r"""(?P<head>\brequire\s*\(\s*)(?P<q>['"])(?P<path>[^'"\r\n]+)(?P=q)(?=\s*\))"""),
    # Dynamic imports: import('...')
    re.compile(r"""(?P<head>\bimport\s*\(\s*)(?P<q>['"])(?P<path>[^'"\r\n]+)(?P=q)(?=\s*\))"""),
]


def convert_import_path(import_path: str) -> str:
    """
    Convert the segments of a relative import path to kebab-case

    Package specifiers (not starting with ``.`` or ``/``) are returned
    unchanged.

    Args:
        import_path: Specifier as written in source

    Returns:
        Converted specifier
    """
    if not import_path.startswith((".", "/")):
        return import_path

    parts = []
    for part in import_path.split("/"):
        if part in (".", "..", ""):
            parts.append(part)
        elif split_extension(part)[1]:
            parts.append(convert_file_name(part))
        else:
            parts.append(to_kebab_case(part))
    return "/".join(parts)


def rewrite_source_text(content: str) -> Tuple[str, int]:
    """
    Rewrite import specifiers in source text

    Args:
        content: File content

    Returns:
        (new content, number of specifiers changed)
    """
    changes = 0

    def replace(match: "re.Match") -> str:
        nonlocal changes
        specifier = match.group("path")
        converted = convert_import_path(specifier)
        if converted == specifier:
            return match.group(0)
        changes += 1
        q = match.group("q")
        return f"{match.group('head')}{q}{converted}{q}"

    for pattern in IMPORT_PATTERNS:
        content = pattern.sub(replace, content)

    return content, changes


class ImportRewriter:
    """Import specifier rewriter over a set of directory trees"""

    def __init__(
        self,
        extensions: Collection[str] = SOURCE_EXTENSIONS,
        ignore_names: Collection[str] = DEFAULT_IGNORE_NAMES,
        progress_callback: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize import rewriter

        Args:
            extensions: Source file extensions to process
            ignore_names: Names to skip, same as used by the scanner
            progress_callback: Progress callback function
        """
        self.extensions = extensions
        self.ignore_names = ignore_names
        self.progress_callback = progress_callback
        # Files that could not be read or written: (path, reason)
        self.skipped: List[Tuple[Path, str]] = []

    def _skip(self, path: Path, reason: str) -> None:
        self.skipped.append((path, reason))
        if self.progress_callback:
            self.progress_callback(f"Warning: Skipping {path}: {reason}")

    def rewrite_file(self, path: Path) -> bool:
        """
        Rewrite imports in a single file

        The file is written back only if a specifier changed. Line endings
        are preserved.

        Args:
            path: Source file

        Returns:
            Whether the file was modified
        """
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            self._skip(path, f"cannot read ({e})")
            return False

        new_content, changes = rewrite_source_text(content)
        if not changes:
            return False

        try:
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(new_content)
        except OSError as e:
            self._skip(path, f"cannot write ({e})")
            return False

        if self.progress_callback:
            self.progress_callback(f"Updated {changes} import(s) in {path}")
        return True

    def rewrite(self, roots: Sequence[PathLike]) -> List[Path]:
        """
        Rewrite imports in all source files under the roots

        Args:
            roots: Root directories

        Returns:
            Files actually modified
        """
        updated: List[Path] = []
        for path in iter_source_files(roots, self.extensions, self.ignore_names):
            if self.rewrite_file(path):
                updated.append(path)
        return updated


def rewrite_imports(
    roots: Sequence[PathLike],
    ignore_names: Collection[str] = DEFAULT_IGNORE_NAMES,
    progress_callback: Optional[Callable[[str], None]] = None
) -> List[Path]:
    """
    Update import statements in all source files within the directories

    Args:
        roots: Root directories
        ignore_names: Names to skip
        progress_callback: Progress callback function

    Returns:
        Files actually modified
    """
    return ImportRewriter(ignore_names=ignore_names, progress_callback=progress_callback).rewrite(roots)
