#!/usr/bin/env python3
"""
kebabify - Main Entry

Supports:
- GUI mode (default startup)
- CLI mode (--cli or -c parameter)

Usage:
    kebabify                          # GUI mode (default)
    kebabify --cli                    # CLI interactive mode
    kebabify -c                       # CLI interactive mode
    kebabify --cli preview ./src      # CLI command mode
    kebabify -c run ./src --log       # CLI command mode
    kebabify -c recover ./src         # CLI command mode
"""

import sys


def main():
    """Main entry point"""
    # Check if CLI should be started
    if "--cli" in sys.argv or "-c" in sys.argv:
        # Remove --cli parameter
        argv = [arg for arg in sys.argv[1:] if arg not in ("--cli", "-c")]

        # CLI mode
        from kebab_cli import main as cli_main
        return cli_main(argv)

    # Default to starting GUI
    try:
        from kebab_gui import main as gui_main
    except ImportError as e:
        print(f"Error: Unable to start GUI, please ensure PySide6 is installed")
        print(f"Detailed error: {e}")
        print("\nInstall command: pip install PySide6")
        print("\nTo use CLI mode, run:")
        print("    kebabify --cli")
        print("or  kebabify -c")
        return 1
    return gui_main()


if __name__ == "__main__":
    sys.exit(main())
