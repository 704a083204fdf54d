"""
kebab_core - Kebab-case Conversion Core Module

Provides name conversion, tree scanning, rename planning and execution, and
import path rewriting
"""

from .models_fs import (
    FileSystemItem,
    ScanResult,
    RenameCommand,
    RenamePlan,
    GitStatus,
    GitCheck,
    VcsState,
    ConvertOptions,
    PipelineResult,
    DEFAULT_IGNORE_NAMES,
    SOURCE_EXTENSIONS,
    TEMP_SUFFIX,
)

from .errors import (
    KebabifyError,
    RootNotFoundError,
    RootNotADirectoryError,
    DirtyTreeError,
    PlanConflictError,
    ExecutionError,
)

from .text_case import (
    to_kebab_case,
    split_extension,
    convert_file_name,
    convert_directory_name,
)

from .scan_files import (
    scan_directories,
    get_items_to_rename,
    iter_source_files,
    unique_roots,
)

from .sort_rules import (
    sort_for_execution,
)

from .plan_rename import (
    plan_renames,
    build_rename_plan,
    validate_plan,
)

from .exec_rename import (
    execute_commands,
    save_run_log,
    find_temp_leftovers,
    recover_temp_renames,
)

from .import_rewrite import (
    ImportRewriter,
    rewrite_imports,
    convert_import_path,
)

from .safety_checks import (
    check_git_status,
    ensure_safe_to_modify,
)

from .pipeline import (
    ProcessingStep,
    preview,
    run_pipeline,
)

__all__ = [
    # Data models
    "FileSystemItem",
    "ScanResult",
    "RenameCommand",
    "RenamePlan",
    "GitStatus",
    "GitCheck",
    "VcsState",
    "ConvertOptions",
    "PipelineResult",
    "DEFAULT_IGNORE_NAMES",
    "SOURCE_EXTENSIONS",
    "TEMP_SUFFIX",

    # Errors
    "KebabifyError",
    "RootNotFoundError",
    "RootNotADirectoryError",
    "DirtyTreeError",
    "PlanConflictError",
    "ExecutionError",

    # Name conversion
    "to_kebab_case",
    "split_extension",
    "convert_file_name",
    "convert_directory_name",

    # Scanning
    "scan_directories",
    "get_items_to_rename",
    "iter_source_files",
    "unique_roots",

    # Planning
    "sort_for_execution",
    "plan_renames",
    "build_rename_plan",
    "validate_plan",

    # Execution
    "execute_commands",
    "save_run_log",
    "find_temp_leftovers",
    "recover_temp_renames",

    # Import rewriting
    "ImportRewriter",
    "rewrite_imports",
    "convert_import_path",

    # Safety checks
    "check_git_status",
    "ensure_safe_to_modify",

    # Pipeline
    "ProcessingStep",
    "preview",
    "run_pipeline",
]
