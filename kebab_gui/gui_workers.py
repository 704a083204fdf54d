"""
gui_workers.py - GUI Worker Threads

Provides background execution of long tasks to avoid blocking UI
"""

from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QThread, Signal, QObject

from kebab_core import ConvertOptions, KebabifyError, preview, run_pipeline


class PreviewWorker(QThread):
    """Scan and plan worker thread"""

    # Signals
    progress = Signal(str)          # Scanned path
    finished = Signal(object)       # RenamePlan
    error = Signal(object)          # Exception

    def __init__(
        self,
        directories: List[Path],
        options: Optional[ConvertOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.directories = directories
        self.options = options or ConvertOptions()

    def run(self):
        try:
            plan = preview(self.directories, self.options, self.progress.emit)
            self.finished.emit(plan)
        except (KebabifyError, OSError) as e:
            self.error.emit(e)


class PipelineWorker(QThread):
    """Full conversion worker thread"""

    # Signals
    progress = Signal(int, str)     # percent, message
    finished = Signal(object)       # PipelineResult
    error = Signal(object)          # Exception

    def __init__(
        self,
        directories: List[Path],
        options: Optional[ConvertOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.directories = directories
        self.options = options or ConvertOptions()

    def run(self):
        try:
            result = run_pipeline(self.directories, self.options, self.progress.emit)
            self.finished.emit(result)
        except (KebabifyError, OSError) as e:
            self.error.emit(e)
