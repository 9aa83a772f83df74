# src/leverlog/ui/pose_editor.py
# ----------------------------------------------------------------------
# Interactive four-segment pose editor.
# The widget owns a Chain, paints it with QPainter every frame and turns
# mouse drags on a joint marker into clamped angle updates.
# Press picks a joint (hit-test), move rotates it, release ends the drag.
# ----------------------------------------------------------------------

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
from PySide6 import QtCore, QtGui, QtWidgets

from ..config import DOT_SIZE, HIT_RADIUS, LINE_WIDTH
from ..geometry.chain import Chain
from ..geometry.pose import capture, restore


class ChainCanvas(QtWidgets.QWidget):
    """Paints a chain centred in the widget; editable unless the chain is read-only."""

    angles_changed = QtCore.Signal(list)

    def __init__(self, chain: Chain, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self._chain = chain
        self.setMinimumSize(260, 200)
        self.setMouseTracking(False)   # only drags matter

    @property
    def chain(self) -> Chain:
        return self._chain

    def set_chain(self, chain: Chain) -> None:
        self._chain = chain
        self.update()
        self.angles_changed.emit(chain.angles())

    def _center(self) -> Tuple[float, float]:
        return (self.width() / 2.0, self.height() / 2.0)

    # ---------- painting ----------
    def paintEvent(self, _ev: QtGui.QPaintEvent) -> None:
        p = QtGui.QPainter(self)
        p.setRenderHint(QtGui.QPainter.Antialiasing)
        center = self._center()
        for (x0, y0), (x1, y1), color in self._chain.segments(center):
            pen = QtGui.QPen(QtGui.QColor(color), LINE_WIDTH)
            pen.setCapStyle(QtCore.Qt.RoundCap)
            p.setPen(pen)
            p.drawLine(QtCore.QPointF(x0, y0), QtCore.QPointF(x1, y1))
        if not self._chain.read_only:
            p.setPen(QtCore.Qt.NoPen)
            p.setBrush(QtGui.QColor("black"))
            r = DOT_SIZE / 2.0
            for (x, y) in self._chain.joint_positions(center):
                p.drawEllipse(QtCore.QPointF(x, y), r, r)
        p.end()

    # ---------- dragging ----------
    def mousePressEvent(self, ev: QtGui.QMouseEvent) -> None:
        pos = ev.position()
        idx = self._chain.hit_test((pos.x(), pos.y()), self._center(), HIT_RADIUS)
        if idx is None or self._chain.read_only:
            ev.ignore(); return
        self._chain.begin_drag(idx)
        ev.accept()

    def mouseMoveEvent(self, ev: QtGui.QMouseEvent) -> None:
        if self._chain.dragging is None:
            ev.ignore(); return
        pos = ev.position()
        self._chain.drag_to((pos.x(), pos.y()), self._center())
        self.update()
        self.angles_changed.emit(self._chain.angles())

    def mouseReleaseEvent(self, ev: QtGui.QMouseEvent) -> None:
        self._chain.end_drag()
        ev.accept()


class PoseEditor(QtWidgets.QWidget):
    """Angle read-out above an editable ChainCanvas."""

    angles_changed = QtCore.Signal(list)

    def __init__(self, angles: Optional[Sequence[float]] = None, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        title = QtWidgets.QLabel("Joint Angles (in degrees)")
        f = title.font(); f.setBold(True); title.setFont(f)
        self._labels = [QtWidgets.QLabel("") for _ in range(4)]
        self.canvas = ChainCanvas(restore(angles), self)
        self.canvas.angles_changed.connect(self._on_angles)

        lay = QtWidgets.QVBoxLayout(self)
        lay.addWidget(title, 0, QtCore.Qt.AlignHCenter)
        for lbl in self._labels:
            lay.addWidget(lbl, 0, QtCore.Qt.AlignHCenter)
        lay.addWidget(self.canvas, 1)
        self._refresh_labels()

    def set_pose(self, angles: Optional[Sequence[float]]) -> None:
        """Replace the chain; malformed or missing poses load the default pose."""
        self.canvas.set_chain(restore(angles))

    def pose(self) -> List[float]:
        return list(capture(self.canvas.chain))

    def _on_angles(self, angles: list) -> None:
        self._refresh_labels()
        self.angles_changed.emit(angles)

    def _refresh_labels(self) -> None:
        for lbl, text in zip(self._labels, self.canvas.chain.angle_labels()):
            lbl.setText(text)
