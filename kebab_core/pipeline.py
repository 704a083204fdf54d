"""
pipeline.py - Conversion Pipeline

Runs the stages in order, each one a full barrier for the next:
git check -> scan -> plan -> rename -> rewrite imports -> write log
"""

from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .errors import PlanConflictError
from .exec_rename import execute_commands, save_run_log
from .import_rewrite import ImportRewriter
from .models_fs import ConvertOptions, PipelineResult, RenamePlan
from .plan_rename import build_rename_plan
from .safety_checks import check_git_status, ensure_safe_to_modify
from .scan_files import scan_directories, unique_roots


PathLike = Union[str, Path]
ProgressCallback = Callable[[int, str], None]


class ProcessingStep(Enum):
    """Pipeline step, with the progress value reported when it starts"""
    CHECKING_GIT = 0
    SCANNING = 20
    RENAMING = 40
    UPDATING_IMPORTS = 80
    WRITING_LOG = 90
    COMPLETED = 100


def preview(
    directories: Sequence[PathLike],
    options: Optional[ConvertOptions] = None,
    progress_callback: Optional[Callable[[str], None]] = None
) -> RenamePlan:
    """
    Scan and plan without touching anything

    Args:
        directories: Root directories
        options: Run options
        progress_callback: Called with each scanned path

    Returns:
        Rename plan
    """
    options = options or ConvertOptions()
    scan_result = scan_directories(directories, options.ignore_names, progress_callback)
    plan = build_rename_plan(scan_result.items)
    plan.scanned_total = scan_result.total_items
    return plan


def run_pipeline(
    directories: Sequence[PathLike],
    options: Optional[ConvertOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    git_runner=None
) -> PipelineResult:
    """
    Convert file and directory names to kebab-case and fix imports

    Args:
        directories: Root directories
        options: Run options
        progress_callback: Progress callback (percent, message)
        git_runner: Subprocess runner for git mv, for tests

    Returns:
        Pipeline result

    Raises:
        RootNotFoundError, RootNotADirectoryError: bad root
        DirtyTreeError: uncommitted changes and not forced
        PlanConflictError: two entries map to the same destination
        ExecutionError: a move failed; earlier moves stay applied
    """
    options = options or ConvertOptions()
    runner_kwargs = {"runner": git_runner} if git_runner is not None else {}

    def report(progress: int, message: str) -> None:
        if progress_callback:
            progress_callback(progress, message)

    # Step 1: Check git status
    report(ProcessingStep.CHECKING_GIT.value, "Checking git status...")
    git_check = check_git_status(directories)
    ensure_safe_to_modify(git_check, options.force)
    directories = unique_roots(directories)

    result = PipelineResult(git_check=git_check, dry_run=options.dry_run)

    # Step 2: Scan directories
    report(ProcessingStep.SCANNING.value, "Scanning directories for files to rename...")
    plan = preview(directories, options)
    result.total_items = plan.scanned_total

    if plan.errors:
        raise PlanConflictError(plan.errors)

    if not plan.items:
        report(ProcessingStep.COMPLETED.value, "No files or directories need to be renamed.")
        return result

    result.commands = plan.commands
    report(ProcessingStep.SCANNING.value, f"Found {plan.total_count} items to rename...")

    if options.dry_run:
        result.renamed = plan.items
        report(ProcessingStep.COMPLETED.value, f"[Preview] {plan.total_count} items would be renamed")
        return result

    # Step 3: Rename files and directories
    report(ProcessingStep.RENAMING.value, "Renaming files and directories...")
    use_vcs_move = options.use_vcs_move
    if use_vcs_move is None:
        use_vcs_move = git_check.is_version_controlled

    span = ProcessingStep.UPDATING_IMPORTS.value - ProcessingStep.RENAMING.value

    def on_command(current: int, total: int, message: str) -> None:
        report(ProcessingStep.RENAMING.value + (span // 2) * current // total, message)

    execute_commands(plan.commands, use_vcs_move, progress_callback=on_command, **runner_kwargs)
    result.renamed = plan.items

    # Step 4: Update import statements
    report(ProcessingStep.UPDATING_IMPORTS.value, "Updating import statements...")
    rewriter = ImportRewriter(
        extensions=options.source_extensions,
        ignore_names=options.ignore_names,
        progress_callback=lambda msg: report(ProcessingStep.UPDATING_IMPORTS.value, msg),
    )
    result.updated_files = rewriter.rewrite(directories)
    result.skipped_files = rewriter.skipped

    # Step 5: Write log if enabled
    if options.enable_logging:
        report(ProcessingStep.WRITING_LOG.value, "Writing log file...")
        result.log_file = save_run_log(directories, result.renamed, result.updated_files, options.log_file)

    # Step 6: Complete
    report(
        ProcessingStep.COMPLETED.value,
        f"Successfully renamed {result.renamed_count} items and updated {result.updated_count} files",
    )
    return result
