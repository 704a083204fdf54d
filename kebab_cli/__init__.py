"""
kebab_cli - Command Line Interface for kebabify
"""

from .cli_entry import main
from .cli_interactive import interactive_mode

__all__ = ["main", "interactive_mode"]
