"""
cli_entry.py - CLI Entry Point

Supports:
- Command-line argument mode
- Interactive mode
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from kebab_core import (
    ConvertOptions, ExecutionError, KebabifyError, RenamePlan,
    check_git_status, ensure_safe_to_modify, preview, recover_temp_renames, run_pipeline,
)

from .cli_interactive import interactive_mode


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="kebabify",
        description="Rename camelCase files and directories to kebab-case and update imports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  kebabify --cli

  # Show what would be renamed
  kebabify --cli preview ./src

  # Rename and rewrite imports
  kebabify --cli run ./src ./test --log

  # Finish case-only renames left half-done by an interrupted run
  kebabify --cli recover ./src
"""
    )

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # run subcommand
    run_parser = subparsers.add_parser("run", help="Rename and update imports")
    run_parser.add_argument("directories", nargs="+", type=str, help="Directories to process")
    run_parser.add_argument("--force", "-f", action="store_true", help="Proceed even with uncommitted changes")
    run_parser.add_argument("--log", "-l", action="store_true", help="Write a JSON log of the run")
    run_parser.add_argument("--log-file", type=str, default="kebabify.log", help="Log file path")
    run_parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not execute")
    run_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # preview subcommand
    preview_parser = subparsers.add_parser("preview", help="Show planned renames")
    preview_parser.add_argument("directories", nargs="+", type=str, help="Directories to scan")

    # recover subcommand
    recover_parser = subparsers.add_parser("recover", help="Complete interrupted case-only renames")
    recover_parser.add_argument("directories", nargs="+", type=str, help="Directories to check")

    return parser


def print_plan(plan: RenamePlan, limit: int = 20) -> None:
    """Print planned commands"""
    print(f"Will rename {plan.total_count} items ({len(plan.commands)} moves):")
    print("-" * 80)
    for cmd in plan.commands[:limit]:
        print(f"  {cmd.src:<40} -> {cmd.dst}")
    if len(plan.commands) > limit:
        print(f"  ... and {len(plan.commands) - limit} more moves")
    print("-" * 80)

    if plan.warnings:
        print("Warnings:")
        for warn in plan.warnings:
            print(f"  - {warn}")


def print_error(error: KebabifyError) -> None:
    """Print a core error, calling out a leftover temporary name"""
    print(f"Error: {error}")
    if isinstance(error, ExecutionError) and error.leftover_temp_path:
        print()
        print(f"An entry was left at its temporary name: {error.leftover_temp_path}")
        print("Run 'kebabify --cli recover <directory>' to finish the rename.")


def cmd_preview(args) -> int:
    """Handle preview command"""
    try:
        plan = preview(args.directories)
    except KebabifyError as e:
        print_error(e)
        return 1

    print(f"Scanned {plan.scanned_total} items")

    if plan.errors:
        print("Errors:")
        for err in plan.errors:
            print(f"  - {err}")
        return 1

    if not plan.commands:
        print("No files or directories need to be renamed")
        return 0

    print_plan(plan)
    return 0


def cmd_run(args) -> int:
    """Handle run command"""
    options = ConvertOptions(
        force=args.force,
        dry_run=args.dry_run,
        enable_logging=args.log,
        log_file=Path(args.log_file).resolve(),
    )

    if not args.dry_run and not args.yes:
        try:
            # Git gate runs before the prompt
            ensure_safe_to_modify(check_git_status(args.directories), args.force)
            plan = preview(args.directories, options)
        except KebabifyError as e:
            print_error(e)
            return 1
        if plan.errors:
            print("Errors:")
            for err in plan.errors:
                print(f"  - {err}")
            return 1
        if not plan.commands:
            print("No files or directories need to be renamed")
            return 0
        print_plan(plan)
        confirm = input("\nConfirm execution? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    def progress_callback(progress: int, message: str) -> None:
        print(f"[{progress:>3}%] {message}")

    try:
        result = run_pipeline(args.directories, options, progress_callback)
    except KebabifyError as e:
        print_error(e)
        return 1

    print()
    print(result.summary())
    if args.dry_run:
        for cmd in result.commands:
            print(f"  {cmd.src:<40} -> {cmd.dst}")
    return 0


def cmd_recover(args) -> int:
    """Handle recover command"""
    try:
        restored = recover_temp_renames(args.directories)
    except (KebabifyError, OSError) as e:
        print(f"Error: {e}")
        return 1

    if not restored:
        print("No interrupted renames found")
        return 0

    for temp_path, target in restored:
        print(f"  {temp_path} -> {target.name}")
    print(f"Restored {len(restored)} entries")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        # No subcommand, enter interactive mode
        return interactive_mode()

    # Handle subcommands
    if args.command == "run":
        return cmd_run(args)
    elif args.command == "preview":
        return cmd_preview(args)
    elif args.command == "recover":
        return cmd_recover(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
