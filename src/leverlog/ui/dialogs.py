# src/leverlog/ui/dialogs.py
from typing import List, Optional  # type hints
from PySide6 import QtWidgets  # Qt widgets
from ..data_models import WorkoutEntry  # record being edited
from ..geometry.pose import is_valid_pose  # decides whether a stored pose can be edited as-is
from .pose_editor import PoseEditor  # same drag editor as the timer screen

class EditEntryDialog(QtWidgets.QDialog):
    def __init__(self, entry: WorkoutEntry, parent=None):
        super().__init__(parent)  # initialize QDialog with optional parent
        self.setWindowTitle("Edit Workout"); self.setModal(True)  # title + modal dialog (blocks parent)
        self._entry = entry
        lab = QtWidgets.QLabel(entry.date.strftime("%b %d, %Y  %H:%M"))  # which record is being edited
        self.spn_time = QtWidgets.QDoubleSpinBox()  # duration in seconds, tenths resolution
        self.spn_time.setRange(0.0, 24 * 3600.0); self.spn_time.setDecimals(1); self.spn_time.setSingleStep(0.1)
        self.spn_time.setSuffix(" s"); self.spn_time.setValue(entry.time_under_tension)
        self._had_pose = is_valid_pose(entry.joint_angles)  # malformed poses open on the default figure
        self.editor = PoseEditor(entry.joint_angles, self)  # draggable chain seeded from the record
        self._pose_touched = False
        self.editor.angles_changed.connect(self._on_pose_changed)
        form = QtWidgets.QFormLayout()  # label/field rows
        form.addRow("Time under tension:", self.spn_time)
        btn_ok = QtWidgets.QPushButton("Save")  # confirm button
        btn_cancel = QtWidgets.QPushButton("Cancel")  # cancel/close button
        btns = QtWidgets.QHBoxLayout()  # horizontal layout for buttons
        btns.addStretch(1)  # push buttons to the right
        btns.addWidget(btn_cancel)  # add Cancel
        btns.addWidget(btn_ok)  # add Save
        lay = QtWidgets.QVBoxLayout(self)  # main vertical layout for the dialog (parent = self)
        lay.addWidget(lab)  # row: record date
        lay.addLayout(form)  # row: duration
        lay.addWidget(self.editor, 1)  # row: pose editor (stretches)
        lay.addLayout(btns)  # row: buttons
        btn_ok.clicked.connect(self.accept)  # Save -> QDialog.accept() (returns Accepted)
        btn_cancel.clicked.connect(self.reject)  # Cancel -> QDialog.reject() (returns Rejected)
        self.resize(420, 560)

    def _on_pose_changed(self, _angles: list):
        self._pose_touched = True  # user dragged a joint

    def time_under_tension(self) -> float:
        return float(self.spn_time.value())  # helper for callers to read the edited duration

    def joint_angles(self) -> Optional[List[float]]:
        """Edited pose, or None to leave a malformed stored pose untouched."""
        if not self._had_pose and not self._pose_touched:
            return None
        return self.editor.pose()

def confirm_delete(parent, entry: WorkoutEntry) -> bool:
    answer = QtWidgets.QMessageBox.question(
        parent, "Delete Workout",
        f"Delete the {entry.date:%b %d, %H:%M} workout?",
        QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No, QtWidgets.QMessageBox.No,
    )
    return answer == QtWidgets.QMessageBox.Yes
