# src/leverlog/ui/main_window.py
import logging  # store failures are logged before being shown
from typing import Optional  # type hints for clarity
from PySide6 import QtCore, QtGui, QtWidgets  # Qt UI framework (signals, widgets, etc.)
from PySide6.QtGui import QAction  # toolbar actions

from ..config import WINDOW_TITLE, AppConfig  # window title + runtime settings
from ..io.entry_store import EntryStore, StoreError  # local JSON object store
from .dialogs import EditEntryDialog, confirm_delete  # edit / delete confirmation
from .history_view import HistoryView  # history screen (heatmap, totals, cards)
from .timer_view import TimerView  # timer screen (clock + pose editor)

logger = logging.getLogger(__name__)

TIMER_PAGE, HISTORY_PAGE = 0, 1

class MainWindow(QtWidgets.QMainWindow):  # main application window (switches between the two screens)
    def __init__(self, config: Optional[AppConfig] = None, store: Optional[EntryStore] = None):
        super().__init__()  # init base QMainWindow
        self.config = config or AppConfig.from_env()  # resolve data folder / log level
        self.setWindowTitle(WINDOW_TITLE)  # set window title from config
        self.resize(480, 860)  # phone-like portrait window
        self.store = store or EntryStore(self.config.store_path)  # open (or create) the entry store

        # toolbar with the two screen switches
        self.tb = QtWidgets.QToolBar("Main"); self.tb.setMovable(False); self.addToolBar(self.tb)
        self.act_timer = QAction("Timer", self); self.act_history = QAction("History", self)
        for act in (self.act_timer, self.act_history):
            act.setCheckable(True); self.tb.addAction(act)
        group = QtGui.QActionGroup(self); group.addAction(self.act_timer); group.addAction(self.act_history)  # exclusive pair
        self.act_timer.triggered.connect(self.show_timer)
        self.act_history.triggered.connect(self.show_history)

        # pages
        self.timer_view = TimerView(self.store.most_recent_pose())  # seed editor with last saved pose
        self.history_view = HistoryView()
        self.stack = QtWidgets.QStackedWidget()
        self.stack.addWidget(self.timer_view)  # index TIMER_PAGE
        self.stack.addWidget(self.history_view)  # index HISTORY_PAGE
        self.setCentralWidget(self.stack)

        # wiring between views and the store
        self.timer_view.saved.connect(self.on_save)
        self.history_view.edit_requested.connect(self.on_edit)
        self.history_view.delete_requested.connect(self.on_delete)

        # keyboard shortcuts
        QtGui.QShortcut(QtGui.QKeySequence("T"), self, activated=self.show_timer)  # T = timer
        QtGui.QShortcut(QtGui.QKeySequence("H"), self, activated=self.show_history)  # H = history

        self.status = self.statusBar()
        self.show_timer()
        self.status.showMessage(f"{len(self.store)} workouts loaded.")  # status hint

    # ---------- navigation ----------
    def show_timer(self):
        self.timer_view.set_initial_pose(self.store.most_recent_pose())  # no-op mid-hold
        self.stack.setCurrentIndex(TIMER_PAGE); self.act_timer.setChecked(True)

    def show_history(self):
        self.history_view.set_entries(self.store.entries())  # rebuild from the store
        self.stack.setCurrentIndex(HISTORY_PAGE); self.act_history.setChecked(True)

    # ---------- store actions ----------
    def on_save(self, time_under_tension: float, joint_angles: list):
        try:
            entry = self.store.insert(time_under_tension, joint_angles)
        except StoreError as e:
            self._report(e); return
        self.status.showMessage(f"Saved {entry.time_under_tension:.1f}s hold.")
        self.show_timer()

    def on_edit(self, entry_id: str):
        try:
            entry = self.store.get(entry_id)
            dlg = EditEntryDialog(entry, self)
            if dlg.exec() != QtWidgets.QDialog.Accepted:
                return
            self.store.update(entry_id, time_under_tension=dlg.time_under_tension(), joint_angles=dlg.joint_angles())
        except StoreError as e:
            self._report(e); return
        self.status.showMessage("Workout updated.")
        QtCore.QTimer.singleShot(0, self.show_history)  # same reason as on_delete

    def on_delete(self, entry_id: str):
        try:
            entry = self.store.get(entry_id)
            if not confirm_delete(self, entry):
                return
            self.store.delete(entry_id)
        except StoreError as e:
            self._report(e); return
        self.status.showMessage("Workout deleted.")
        # defer: the clicked card lives inside the tree that show_history() clears
        QtCore.QTimer.singleShot(0, self.show_history)

    def _report(self, err: StoreError):
        logger.error("[MainWindow] Store error: %s", err)
        self.status.showMessage(f"Store error: {err}")
        QtWidgets.QMessageBox.warning(self, "Workout Store", str(err))
