"""
cli_interactive.py - Interactive CLI

Provides a menu-style interactive interface
"""

import os
import sys
from pathlib import Path
from typing import List

from kebab_core import (
    ConvertOptions, KebabifyError, ExecutionError,
    check_git_status, ensure_safe_to_modify, preview, recover_temp_renames, run_pipeline,
)


def clear_screen():
    """Clear screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def print_header(title: str):
    """Print header"""
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)
    print()


def input_directories(prompt: str = "Please enter directory path") -> List[Path]:
    """Input and validate one or more directories, empty line to finish"""
    directories: List[Path] = []
    while True:
        label = prompt if not directories else "Another directory (empty to finish)"
        path_str = input(f"{label} (q to return): ").strip()
        if path_str.lower() == 'q':
            return []
        if not path_str:
            if directories:
                return directories
            continue

        path = Path(path_str).expanduser().resolve()
        if path.is_dir():
            directories.append(path)
        else:
            print(f"Error: Directory does not exist: {path}")


def input_bool(prompt: str, default: bool = False) -> bool:
    """Input boolean value"""
    default_str = "Y/n" if default else "y/N"
    value = input(f"{prompt} ({default_str}): ").strip().lower()
    if not value:
        return default
    return value == 'y'


def menu_preview():
    """Preview menu"""
    print_header("Preview Renames")

    directories = input_directories()
    if not directories:
        return

    print("\nScanning...")
    try:
        plan = preview(directories)
    except KebabifyError as e:
        print(f"Error: {e}")
        input("Press Enter to return...")
        return

    if not plan.commands:
        print("No files or directories need to be renamed")
        input("Press Enter to return...")
        return

    print(f"\nWill rename {plan.total_count} items:")
    print("-" * 70)
    for cmd in plan.commands[:30]:
        print(f"  {cmd.src:<35} -> {cmd.dst}")
    if len(plan.commands) > 30:
        print(f"  ... and {len(plan.commands) - 30} more moves")
    print("-" * 70)

    for err in plan.errors:
        print(f"Conflict: {err}")

    input("\nPress Enter to return...")


def menu_convert():
    """Convert menu"""
    print_header("Convert to kebab-case")

    directories = input_directories()
    if not directories:
        return

    options = ConvertOptions(
        force=input_bool("Proceed even with uncommitted git changes", default=False),
        enable_logging=input_bool("Write log file", default=False),
    )

    try:
        ensure_safe_to_modify(check_git_status(directories), options.force)
        plan = preview(directories, options)
    except KebabifyError as e:
        print(f"Error: {e}")
        input("Press Enter to return...")
        return

    if not plan.commands:
        print("No files or directories need to be renamed")
        input("Press Enter to return...")
        return

    print(f"\n{plan.summary()}")
    if plan.errors:
        for err in plan.errors:
            print(f"Conflict: {err}")
        input("Press Enter to return...")
        return

    # Confirm execution
    print()
    if not input_bool("Confirm execution", default=False):
        print("Cancelled")
        input("Press Enter to return...")
        return

    print("\nExecuting...")
    try:
        result = run_pipeline(directories, options, lambda progress, msg: print(f"[{progress:>3}%] {msg}"))
    except KebabifyError as e:
        print(f"\nError: {e}")
        if isinstance(e, ExecutionError) and e.leftover_temp_path:
            print(f"An entry was left at its temporary name: {e.leftover_temp_path}")
            print("Use 'Recover interrupted renames' to finish it.")
        input("\nPress Enter to return...")
        return

    print()
    print(result.summary())

    input("\nPress Enter to return...")


def menu_recover():
    """Recover menu"""
    print_header("Recover Interrupted Renames")

    directories = input_directories()
    if not directories:
        return

    try:
        restored = recover_temp_renames(directories)
    except (KebabifyError, OSError) as e:
        print(f"Error: {e}")
        input("Press Enter to return...")
        return

    if not restored:
        print("No interrupted renames found")
    for temp_path, target in restored:
        print(f"  {temp_path} -> {target.name}")

    input("\nPress Enter to return...")


def interactive_mode() -> int:
    """Interactive mode main loop"""
    while True:
        clear_screen()
        print_header("kebabify - Kebab-case File Converter")

        print("Please select function:")
        print()
        print("  1. Preview renames")
        print("  2. Convert to kebab-case")
        print("  3. Recover interrupted renames")
        print()
        print("  q. Exit")
        print()

        choice = input("Please select (1/2/3/q): ").strip().lower()

        if choice == 'q':
            print("Goodbye!")
            return 0
        elif choice == '1':
            menu_preview()
        elif choice == '2':
            menu_convert()
        elif choice == '3':
            menu_recover()
        else:
            print("Invalid choice")
            input("Press Enter to continue...")


if __name__ == "__main__":
    sys.exit(interactive_mode())
