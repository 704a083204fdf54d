"""
kebab_gui - PySide6 desktop interface for kebabify
"""

from .gui_entry import main

__all__ = ["main"]
