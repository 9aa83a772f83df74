# src/leverlog/ui/history_view.py
# ---------------------------------------------------------------
# History screen: heatmap + today's total / daily average at the
# top, then every saved workout grouped by day (newest first).
# Each workout card shows date, time of day, duration and a small
# drawing of the saved pose, with Edit / Delete actions.
#
# The view never touches the store; it emits the entry id and the
# MainWindow performs the change and calls set_entries() again.
# ---------------------------------------------------------------

from __future__ import annotations
from datetime import date
from typing import List, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from ..analysis.history_stats import format_short, grouped_entries, summarize
from ..data_models import WorkoutEntry
from ..geometry.pose import is_valid_pose
from .heatmap import HeatmapCanvas
from .overlays import cvimg_to_qt, render_pose_thumbnail


# ------------------ ENTRY CARD ------------------
class EntryCard(QtWidgets.QWidget):
    edit_requested = QtCore.Signal(str)
    delete_requested = QtCore.Signal(str)

    def __init__(self, entry: WorkoutEntry, parent=None):
        super().__init__(parent)
        self.entry_id = entry.id

        lbl_date = QtWidgets.QLabel(entry.date.strftime("%b %d, %Y"))
        f = lbl_date.font(); f.setBold(True); lbl_date.setFont(f)
        lbl_time = QtWidgets.QLabel(entry.date.strftime("%H:%M"))
        lbl_time.setStyleSheet("color: gray;")
        left = QtWidgets.QVBoxLayout(); left.addWidget(lbl_date); left.addWidget(lbl_time)

        self.lbl_duration = QtWidgets.QLabel(format_short(entry.time_under_tension))
        self.lbl_duration.setFont(f)

        # Pose drawing only for records that carry a 4-angle pose
        self.lbl_pose = QtWidgets.QLabel()
        if is_valid_pose(entry.joint_angles):
            img = render_pose_thumbnail(entry.joint_angles)
            self.lbl_pose.setPixmap(QtGui.QPixmap.fromImage(cvimg_to_qt(QtGui, img)))
        else:
            self.lbl_pose.hide()

        btn_edit = QtWidgets.QToolButton(); btn_edit.setText("Edit")
        btn_delete = QtWidgets.QToolButton(); btn_delete.setText("Delete")
        btn_edit.clicked.connect(lambda: self.edit_requested.emit(self.entry_id))
        btn_delete.clicked.connect(lambda: self.delete_requested.emit(self.entry_id))
        actions = QtWidgets.QVBoxLayout(); actions.addWidget(btn_edit); actions.addWidget(btn_delete)

        lay = QtWidgets.QHBoxLayout(self)
        lay.setContentsMargins(4, 8, 4, 8); lay.setSpacing(16)
        lay.addLayout(left)
        lay.addWidget(self.lbl_duration)
        lay.addWidget(self.lbl_pose)
        lay.addStretch(1)
        lay.addLayout(actions)


# ------------------ HISTORY VIEW ------------------
class HistoryView(QtWidgets.QWidget):
    edit_requested = QtCore.Signal(str)
    delete_requested = QtCore.Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)

        # ------------------ SUMMARY ROW ------------------
        self.heatmap = HeatmapCanvas(self)
        self.heatmap.setFixedSize(180, 250)
        self.lbl_today = QtWidgets.QLabel("00:00")
        self.lbl_average = QtWidgets.QLabel("00:00")
        bold = self.lbl_today.font(); bold.setBold(True)
        self.lbl_today.setFont(bold); self.lbl_average.setFont(bold)
        totals = QtWidgets.QFormLayout()
        totals.addRow("Today's Total", self.lbl_today)
        totals.addRow("Daily Average", self.lbl_average)
        top = QtWidgets.QHBoxLayout()
        top.addWidget(self.heatmap)
        top.addLayout(totals, 1)

        # ------------------ ENTRY TREE ------------------
        # top-level items are days, children hold EntryCard widgets
        self.tree = QtWidgets.QTreeWidget()
        self.tree.setHeaderHidden(True)
        self.tree.setRootIsDecorated(False)
        self.tree.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)

        self.lbl_empty = QtWidgets.QLabel("No workouts saved yet.")
        self.lbl_empty.setAlignment(QtCore.Qt.AlignCenter)

        title = QtWidgets.QLabel("History")
        tf = title.font(); tf.setPointSize(20); tf.setBold(True); title.setFont(tf)

        lay = QtWidgets.QVBoxLayout(self)
        lay.addWidget(title)
        lay.addLayout(top)
        lay.addWidget(self.lbl_empty)
        lay.addWidget(self.tree, 1)

    def set_entries(self, entries: List[WorkoutEntry], today: Optional[date] = None) -> None:
        """Rebuild the whole screen from `entries` (any order)."""
        today = today or date.today()
        summary = summarize(entries, today)
        self.lbl_today.setText(format_short(summary.today_total))
        self.lbl_average.setText(format_short(summary.daily_average))
        self.heatmap.set_cells(summary.heatmap)

        self.tree.clear()
        ordered = sorted(entries, key=lambda e: e.date, reverse=True)
        for day, day_entries in grouped_entries(ordered):
            header = QtWidgets.QTreeWidgetItem([day.strftime("%A, %B %d, %Y")])
            hf = header.font(0); hf.setBold(True); header.setFont(0, hf)
            header.setFlags(QtCore.Qt.ItemIsEnabled)
            self.tree.addTopLevelItem(header)
            for e in day_entries:
                item = QtWidgets.QTreeWidgetItem(header)
                card = EntryCard(e)
                card.edit_requested.connect(self.edit_requested)
                card.delete_requested.connect(self.delete_requested)
                item.setSizeHint(0, card.sizeHint())
                self.tree.setItemWidget(item, 0, card)
            header.setExpanded(True)
        self.lbl_empty.setVisible(not entries)
        self.tree.setVisible(bool(entries))
