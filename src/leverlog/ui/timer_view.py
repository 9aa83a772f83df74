# src/leverlog/ui/timer_view.py
# ----------------------------------------------------------------------
# Timer screen: 3-second countdown, running clock, then (once stopped)
# time correction buttons, the pose editor and "Save Workout".
#
# All timing state lives in Stopwatch; this widget only forwards QTimer
# ticks and button presses to it and repaints the labels.
# ----------------------------------------------------------------------

from __future__ import annotations
from typing import Optional, Sequence
from PySide6 import QtCore, QtGui, QtWidgets

from ..config import COUNTDOWN_INTERVAL_MS, DEFAULT_POSE, RUN_INTERVAL_MS
from ..timer.stopwatch import COUNTDOWN, READY, RUNNING, STOPPED, Stopwatch, time_string
from .pose_editor import PoseEditor


class TimerView(QtWidgets.QWidget):
    # (time_under_tension seconds, [blue, green, purple, yellow])
    saved = QtCore.Signal(float, list)

    def __init__(self, initial_angles: Optional[Sequence[float]] = None,
                 parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.sw = Stopwatch()

        # ------------------ TIMERS ------------------
        self._countdown_timer = QtCore.QTimer(self)
        self._countdown_timer.setInterval(COUNTDOWN_INTERVAL_MS)
        self._countdown_timer.timeout.connect(self._on_countdown_tick)
        self._run_timer = QtCore.QTimer(self)
        self._run_timer.setInterval(RUN_INTERVAL_MS)
        self._run_timer.timeout.connect(self._on_run_tick)

        # ------------------ LABELS ------------------
        title = QtWidgets.QLabel("Front Lever Timer")
        tf = title.font(); tf.setPointSize(24); tf.setBold(True); title.setFont(tf)

        self.lbl_clock = QtWidgets.QLabel(time_string(0.0))
        self.lbl_clock.setAlignment(QtCore.Qt.AlignCenter)
        cf = QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.FixedFont)
        cf.setPointSize(48); cf.setBold(True)
        self.lbl_clock.setFont(cf)

        # ------------------ ADJUST ROW (stopped only) ------------------
        step = self.sw.p.adjust_step_s
        self.btn_minus = self._make_adjust_button("−", -step, "#d9534f")
        self.btn_plus = self._make_adjust_button("+", step, "#5cb85c")
        adj_lbl = QtWidgets.QLabel("Adjust Time")
        af = adj_lbl.font(); af.setBold(True); af.setPointSize(14); adj_lbl.setFont(af)
        self.adjust_row = QtWidgets.QWidget()
        row = QtWidgets.QHBoxLayout(self.adjust_row)
        row.addStretch(1); row.addWidget(self.btn_minus); row.addWidget(adj_lbl); row.addWidget(self.btn_plus); row.addStretch(1)

        # ------------------ POSE EDITOR + SAVE (stopped only) ------------------
        self.lbl_pose = QtWidgets.QLabel("Adjust Positioning")
        self.lbl_pose.setFont(af)
        self.editor = PoseEditor(initial_angles, self)
        self.btn_save = QtWidgets.QPushButton("Save Workout")
        self.btn_save.setStyleSheet("QPushButton { background: #2f6fdf; color: white; padding: 10px; border-radius: 10px; }")
        self.btn_save.clicked.connect(self.save_workout)

        # ------------------ START / STOP ------------------
        self.btn_start = QtWidgets.QPushButton("Start")
        self.btn_start.setStyleSheet("QPushButton { background: #2e9e4f; color: white; min-width: 200px; min-height: 60px; border-radius: 15px; }")
        self.btn_start.clicked.connect(self.start_countdown)
        self.btn_stop = QtWidgets.QPushButton("Stop")
        self.btn_stop.setStyleSheet("QPushButton { background: #c9302c; color: white; min-width: 200px; min-height: 60px; border-radius: 15px; }")
        self.btn_stop.clicked.connect(self.stop_timer)

        # ------------------ MAIN LAYOUT ------------------
        lay = QtWidgets.QVBoxLayout(self)
        lay.addWidget(title, 0, QtCore.Qt.AlignHCenter)
        lay.addStretch(1)
        lay.addWidget(self.lbl_clock)
        lay.addWidget(self.adjust_row)
        lay.addWidget(self.lbl_pose, 0, QtCore.Qt.AlignHCenter)
        lay.addWidget(self.editor, 3)
        lay.addWidget(self.btn_save)
        lay.addWidget(self.btn_start, 0, QtCore.Qt.AlignHCenter)
        lay.addWidget(self.btn_stop, 0, QtCore.Qt.AlignHCenter)
        lay.addStretch(1)

        self._sync_ui()

    def _make_adjust_button(self, text: str, amount: float, color: str) -> QtWidgets.QPushButton:
        btn = QtWidgets.QPushButton(text)
        btn.setStyleSheet(f"QPushButton {{ color: {color}; font-size: 32px; font-weight: bold; min-width: 56px; }}")
        # Qt's auto-repeat re-emits clicked while held, after an initial delay
        btn.setAutoRepeat(True)
        btn.setAutoRepeatDelay(RUN_INTERVAL_MS)
        btn.setAutoRepeatInterval(RUN_INTERVAL_MS)
        btn.pressed.connect(lambda a=amount: self._on_adjust_pressed(a))
        btn.released.connect(self._on_adjust_released)
        return btn

    # ---------- public ----------
    def set_initial_pose(self, angles: Optional[Sequence[float]]) -> None:
        """Seed the editor, only while no hold is in progress."""
        if self.sw.state == READY:
            self.editor.set_pose(angles)

    def start_countdown(self) -> None:
        self.sw.start_countdown()
        self._countdown_timer.start()
        self._sync_ui()

    def stop_timer(self) -> None:
        self._run_timer.stop()
        self.sw.stop()
        self._sync_ui()

    def save_workout(self) -> None:
        if self.sw.state != STOPPED:
            return
        self.saved.emit(float(self.sw.display_time), self.editor.pose())
        self.reset()

    def reset(self) -> None:
        self._countdown_timer.stop(); self._run_timer.stop()
        self.sw.reset()
        self.editor.set_pose(DEFAULT_POSE)
        self._sync_ui()

    # ---------- ticks ----------
    def _on_countdown_tick(self) -> None:
        if self.sw.tick_countdown() == RUNNING:
            self._countdown_timer.stop()
            self._run_timer.start()
        self._sync_ui()

    def _on_run_tick(self) -> None:
        self.sw.tick()
        self.lbl_clock.setText(time_string(self.sw.shown_time))

    def _on_adjust_pressed(self, amount: float) -> None:
        # pressed fires again on every auto-repeat cycle
        if self.sw.adjusting:
            self.sw.repeat_adjust()
        else:
            self.sw.begin_adjust(amount)
        self.lbl_clock.setText(time_string(self.sw.shown_time))

    def _on_adjust_released(self) -> None:
        btn = self.sender()
        if isinstance(btn, QtWidgets.QAbstractButton) and btn.isDown():
            return   # auto-repeat release, the user is still holding
        self.sw.end_adjust()

    # ---------- view state ----------
    def _sync_ui(self) -> None:
        st = self.sw.state
        stopped = st == STOPPED
        if st == COUNTDOWN:
            self.lbl_clock.setText(str(self.sw.countdown))
            self.lbl_clock.setStyleSheet("color: orange;")
        else:
            self.lbl_clock.setText(time_string(self.sw.shown_time))
            self.lbl_clock.setStyleSheet("color: #2e9e4f;" if st == RUNNING else "")
        for w in (self.adjust_row, self.lbl_pose, self.editor, self.btn_save):
            w.setVisible(stopped)
        self.btn_start.setVisible(st == READY)
        self.btn_stop.setVisible(st == RUNNING)
