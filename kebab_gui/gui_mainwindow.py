"""
gui_mainwindow.py - GUI Main Window

Directory list, preview table and conversion progress
"""

from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGroupBox,
    QLabel, QPushButton, QCheckBox, QListWidget, QTableWidget,
    QTableWidgetItem, QProgressBar, QFileDialog, QMessageBox, QHeaderView
)
from PySide6.QtCore import Slot
from PySide6.QtGui import QColor

from kebab_core import ConvertOptions, ExecutionError, PipelineResult, RenamePlan

from .gui_workers import PreviewWorker, PipelineWorker


class ConvertPanel(QWidget):
    """Kebab-case conversion panel"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.plan: Optional[RenamePlan] = None
        self.preview_worker: Optional[PreviewWorker] = None
        self.pipeline_worker: Optional[PipelineWorker] = None

        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        # Directory group
        dir_group = QGroupBox("Directories")
        dir_layout = QHBoxLayout(dir_group)

        self.dir_list = QListWidget()
        dir_layout.addWidget(self.dir_list, 1)

        dir_buttons = QVBoxLayout()
        self.add_btn = QPushButton("Add...")
        self.add_btn.clicked.connect(self._add_directory)
        dir_buttons.addWidget(self.add_btn)
        self.remove_btn = QPushButton("Remove")
        self.remove_btn.clicked.connect(self._remove_directory)
        dir_buttons.addWidget(self.remove_btn)
        dir_buttons.addStretch()
        dir_layout.addLayout(dir_buttons)

        layout.addWidget(dir_group)

        # Options
        options_layout = QHBoxLayout()
        self.force_check = QCheckBox("Force (ignore uncommitted git changes)")
        self.log_check = QCheckBox("Write log file")
        options_layout.addWidget(self.force_check)
        options_layout.addWidget(self.log_check)
        options_layout.addStretch()

        self.preview_btn = QPushButton("Preview")
        self.preview_btn.clicked.connect(self._do_preview)
        options_layout.addWidget(self.preview_btn)
        layout.addLayout(options_layout)

        # Plan table
        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Original Path", "New Path", "Type"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self.table, 1)

        # Progress and execution
        bottom_layout = QHBoxLayout()

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.execute_btn = QPushButton("Convert")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setEnabled(False)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)

        layout.addLayout(bottom_layout)

        # Status label
        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def _directories(self) -> List[Path]:
        return [Path(self.dir_list.item(i).text()) for i in range(self.dir_list.count())]

    def _options(self) -> ConvertOptions:
        return ConvertOptions(
            force=self.force_check.isChecked(),
            enable_logging=self.log_check.isChecked(),
        )

    def _set_busy(self, busy: bool):
        self.preview_btn.setEnabled(not busy)
        self.add_btn.setEnabled(not busy)
        self.remove_btn.setEnabled(not busy)
        self.execute_btn.setEnabled(not busy and bool(self.plan and self.plan.commands))
        self.progress_bar.setVisible(busy)

    def _add_directory(self):
        """Browse and add directory"""
        directory = QFileDialog.getExistingDirectory(self, "Select Directory")
        if directory and directory not in [str(d) for d in self._directories()]:
            self.dir_list.addItem(directory)
            self._invalidate_plan()

    def _remove_directory(self):
        for item in self.dir_list.selectedItems():
            self.dir_list.takeItem(self.dir_list.row(item))
        self._invalidate_plan()

    def _invalidate_plan(self):
        self.plan = None
        self.table.setRowCount(0)
        self.execute_btn.setEnabled(False)

    def _do_preview(self):
        """Generate preview"""
        directories = self._directories()
        if not directories:
            QMessageBox.warning(self, "Warning", "Please add a directory first")
            return

        self.plan = None
        self._set_busy(True)
        self.progress_bar.setRange(0, 0)  # Indeterminate progress

        self.preview_worker = PreviewWorker(directories, self._options())
        self.preview_worker.progress.connect(self._on_scan_progress)
        self.preview_worker.finished.connect(self._on_preview_finished)
        self.preview_worker.error.connect(self._on_error)
        self.preview_worker.start()

    @Slot(str)
    def _on_scan_progress(self, msg: str):
        self.status_label.setText(msg[-80:] if len(msg) > 80 else msg)

    @Slot(object)
    def _on_preview_finished(self, plan: RenamePlan):
        self.plan = plan
        self.progress_bar.setRange(0, 100)
        self._set_busy(False)
        self._update_table()

        if plan.errors:
            self.execute_btn.setEnabled(False)
            QMessageBox.warning(self, "Conflicts", "\n".join(plan.errors))
            return

        if plan.commands:
            self.status_label.setText(f"Will rename {plan.total_count} of {plan.scanned_total} items")
        else:
            self.status_label.setText("No files or directories need to be renamed")

    def _update_table(self):
        """Update table to display planned renames"""
        items = self.plan.items if self.plan else []
        self.table.setRowCount(len(items))
        for i, item in enumerate(items):
            self.table.setItem(i, 0, QTableWidgetItem(item.original_path))
            new_item = QTableWidgetItem(item.new_path)
            if item.original_name.lower() == item.new_name.lower():
                # Case-only rename
                new_item.setBackground(QColor(255, 255, 200))
            self.table.setItem(i, 1, new_item)
            self.table.setItem(i, 2, QTableWidgetItem("Directory" if item.is_directory else "File"))

    def _do_execute(self):
        """Execute conversion"""
        if not self.plan or not self.plan.commands:
            return

        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to rename {self.plan.total_count} items and update imports?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self._set_busy(True)
        self.execute_btn.setEnabled(False)
        self.progress_bar.setValue(0)

        self.pipeline_worker = PipelineWorker(self._directories(), self._options())
        self.pipeline_worker.progress.connect(self._on_pipeline_progress)
        self.pipeline_worker.finished.connect(self._on_pipeline_finished)
        self.pipeline_worker.error.connect(self._on_error)
        self.pipeline_worker.start()

    @Slot(int, str)
    def _on_pipeline_progress(self, progress: int, msg: str):
        self.progress_bar.setValue(progress)
        self.status_label.setText(msg)

    @Slot(object)
    def _on_pipeline_finished(self, result: PipelineResult):
        self._invalidate_plan()
        self._set_busy(False)
        self.status_label.setText("Complete")
        QMessageBox.information(self, "Complete", result.summary())

    @Slot(object)
    def _on_error(self, error: Exception):
        self.progress_bar.setRange(0, 100)
        self._invalidate_plan()
        self._set_busy(False)
        self.status_label.setText("Failed")

        msg = str(error)
        if isinstance(error, ExecutionError) and error.leftover_temp_path:
            msg += (
                f"\n\nAn entry was left at its temporary name: {error.leftover_temp_path}"
                "\nRun 'kebabify --cli recover <directory>' to finish the rename."
            )
        QMessageBox.critical(self, "Error", msg)


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("kebabify - Kebab-case File Converter")
        self.setMinimumSize(800, 600)

        self.panel = ConvertPanel()
        self.setCentralWidget(self.panel)

        # Status bar
        self.statusBar().showMessage("Ready")
