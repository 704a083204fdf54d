"""
models_fs.py - Core Data Structure Definitions

Contains:
- FileSystemItem: One scanned entry with its current and target path
- ScanResult: All entries found under a batch of roots
- RenameCommand: Single move operation
- RenamePlan: Ordered move operations plus validation messages
- GitStatus / GitCheck: Result of the version-control precondition check
- ConvertOptions: Run options configuration
- PipelineResult: What a run did
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple
import posixpath
import re
import shlex


# Base names skipped by both the tree scanner and the import rewriter.
# Anything starting with "." is skipped as well.
DEFAULT_IGNORE_NAMES: FrozenSet[str] = frozenset({
    "node_modules",
    ".git",
    "dist",
    "build",
    "coverage",
    ".nyc_output",
})

# Files whose import specifiers are rewritten
SOURCE_EXTENSIONS: FrozenSet[str] = frozenset({
    ".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".vue", ".svelte",
})

TEMP_SUFFIX = ".temp-rename"

_TEMP_NAME_RE = re.compile(r"^(?P<target>.+)" + re.escape(TEMP_SUFFIX) + r"(?:-[0-9a-f]{8})?$")


def is_temp_name(name: str) -> bool:
    """Check if it's a temporary name left by a case-only rename"""
    return _TEMP_NAME_RE.match(name) is not None


def temp_target_name(name: str) -> Optional[str]:
    """Name a temporary entry was meant to end up with, or None"""
    match = _TEMP_NAME_RE.match(name)
    return match.group("target") if match else None


def path_depth(rel_path: str) -> int:
    """Number of segments in a root-relative path"""
    return len([part for part in rel_path.split("/") if part])


class VcsState(Enum):
    """Version-control precondition state"""
    CLEAN = "clean"
    DIRTY = "dirty"
    NOT_VERSION_CONTROLLED = "not_version_controlled"


@dataclass(frozen=True)
class FileSystemItem:
    """One file or directory found by the scanner"""
    original_path: str              # Relative to root, forward slashes
    new_path: str                   # Relative to root, ancestors already converted
    is_directory: bool
    needs_rename: bool
    root: Path = Path(".")          # Scan root both paths are relative to

    @property
    def depth(self) -> int:
        return path_depth(self.original_path)

    @property
    def original_name(self) -> str:
        return posixpath.basename(self.original_path)

    @property
    def new_name(self) -> str:
        return posixpath.basename(self.new_path)


@dataclass
class ScanResult:
    """Scan output for a batch of root directories"""
    items: List[FileSystemItem] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        return len(self.items)

    @property
    def items_to_rename(self) -> List[FileSystemItem]:
        return [item for item in self.items if item.needs_rename]


@dataclass(frozen=True)
class RenameCommand:
    """Single move operation, paths relative to root"""
    src: str
    dst: str
    root: Path = Path(".")
    uses_temp: bool = False         # Part of a two-step case-only rename

    @property
    def is_temp_source(self) -> bool:
        """Whether this command moves an entry out of its temporary name"""
        return self.uses_temp and is_temp_name(posixpath.basename(self.src))

    def command_line(self, use_vcs_move: bool = False) -> str:
        """Equivalent shell command, for previews and error messages"""
        args = ["git", "mv"] if use_vcs_move else ["mv"]
        return shlex.join(args + [self.src, self.dst])


@dataclass
class RenamePlan:
    """Ordered rename commands generated from a scan"""
    commands: List[RenameCommand] = field(default_factory=list)
    items: List[FileSystemItem] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    scanned_total: int = 0          # Entries seen by the scan, renamed or not

    @property
    def total_count(self) -> int:
        """Number of entries that will be renamed"""
        return len(self.items)

    @property
    def temp_count(self) -> int:
        """Number of case-only renames that go through a temporary name"""
        return sum(1 for cmd in self.commands if cmd.uses_temp and not cmd.is_temp_source)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            f"Rename Plan Summary:",
            f"  - Items to rename: {self.total_count}",
            f"  - Commands: {len(self.commands)}",
            f"  - Case-only renames: {self.temp_count}",
            f"  - Warnings: {len(self.warnings)}",
            f"  - Errors: {len(self.errors)}",
        ]
        return "\n".join(lines)


@dataclass
class GitStatus:
    """Git status for a set of directories"""
    is_dirty: bool = False
    dirty_files: List[str] = field(default_factory=list)
    checked_directories: List[str] = field(default_factory=list)
    git_repositories: List[str] = field(default_factory=list)

    def dirty_repositories(self) -> List[str]:
        """Repositories that contain at least one dirty file"""
        return [
            repo for repo in self.git_repositories
            if any(f == repo or f.startswith(repo.rstrip("/") + "/") for f in self.dirty_files)
        ]


@dataclass
class GitCheck:
    """Tagged result of the version-control precondition check"""
    state: VcsState
    status: Optional[GitStatus] = None

    @property
    def is_version_controlled(self) -> bool:
        return self.state is not VcsState.NOT_VERSION_CONTROLLED

    @property
    def is_dirty(self) -> bool:
        return self.state is VcsState.DIRTY


@dataclass
class ConvertOptions:
    """Run options configuration"""
    # Precondition
    force: bool = False                     # Proceed even with uncommitted changes

    # Execution options
    dry_run: bool = False                   # Scan and plan only
    use_vcs_move: Optional[bool] = None     # None means: use git mv when under git

    # Scan options
    ignore_names: FrozenSet[str] = DEFAULT_IGNORE_NAMES
    source_extensions: FrozenSet[str] = SOURCE_EXTENSIONS

    # Run log
    enable_logging: bool = False
    log_file: Path = field(default_factory=lambda: Path.cwd() / "kebabify.log")


@dataclass
class PipelineResult:
    """Outcome of one pipeline run"""
    total_items: int = 0
    renamed: List[FileSystemItem] = field(default_factory=list)
    commands: List[RenameCommand] = field(default_factory=list)
    updated_files: List[Path] = field(default_factory=list)
    skipped_files: List[Tuple[Path, str]] = field(default_factory=list)
    git_check: Optional[GitCheck] = None
    log_file: Optional[Path] = None
    dry_run: bool = False

    @property
    def renamed_count(self) -> int:
        return len(self.renamed)

    @property
    def updated_count(self) -> int:
        return len(self.updated_files)

    def summary(self) -> str:
        """Generate summary"""
        verb = "Would rename" if self.dry_run else "Renamed"
        lines = [
            f"Conversion Result:",
            f"  - Scanned items: {self.total_items}",
            f"  - {verb}: {self.renamed_count}",
            f"  - Updated files: {self.updated_count}",
        ]
        if self.skipped_files:
            lines.append(f"  - Skipped files: {len(self.skipped_files)}")
            for path, reason in self.skipped_files[:10]:
                lines.append(f"      {path}: {reason}")
            if len(self.skipped_files) > 10:
                lines.append(f"      ... and {len(self.skipped_files) - 10} more")
        if self.log_file:
            lines.append(f"  - Log written to: {self.log_file}")
        return "\n".join(lines)
