"""Pendulum canvas: QPainter rendering of the double pendulum."""

from collections import deque

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor, QPolygonF
from PyQt6.QtWidgets import QWidget

from simulation import PhysicalParams, DEFAULT_INITIAL_STATE, positions


class PendulumCanvas(QWidget):
    """Custom widget that draws the double pendulum using QPainter."""

    TRAIL_LENGTH = 500

    def __init__(self, parent=None):
        super().__init__(parent)
        self.params = PhysicalParams()
        self.state = DEFAULT_INITIAL_STATE
        self.trail = deque(maxlen=self.TRAIL_LENGTH)
        self.setMinimumSize(400, 400)

    def set_state(self, state, params, append_trail=True):
        """Show ``state`` and optionally extend the second bob's trail."""
        self.state = state
        self.params = params
        if append_trail:
            _, _, x2, y2 = positions(state, params)
            self.trail.append((x2, y2))
        self.update()

    def clear_trail(self):
        self.trail.clear()

    def _to_pixel(self, x, y):
        """Convert physics coords to pixel coords."""
        w, h = self.width(), self.height()
        total_length = self.params.l1 + self.params.l2
        scale = min(w, h) * 0.45 / max(total_length, 0.01)
        cx = w / 2
        cy = h / 2
        px = cx + x * scale
        py = cy - y * scale
        return px, py

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.fillRect(self.rect(), QColor(245, 245, 245))

        pivot_px = self._to_pixel(0, 0)
        x1, y1, x2, y2 = positions(self.state, self.params)
        bob1_px = self._to_pixel(x1, y1)
        bob2_px = self._to_pixel(x2, y2)

        # Trail first so the arms draw over it
        if len(self.trail) > 1:
            trail_pen = QPen(QColor(95, 158, 160))
            trail_pen.setWidthF(2.0)
            painter.setPen(trail_pen)
            trail_px = [QPointF(*self._to_pixel(*p)) for p in self.trail]
            painter.drawPolyline(QPolygonF(trail_px))

        # Arms
        arm_pen = QPen(QColor(128, 128, 128))
        arm_pen.setWidthF(4.0)
        painter.setPen(arm_pen)
        painter.drawLine(QPointF(*pivot_px), QPointF(*bob1_px))
        painter.drawLine(QPointF(*bob1_px), QPointF(*bob2_px))

        # Pivot and bobs
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(128, 128, 128)))
        for point in (pivot_px, bob1_px, bob2_px):
            painter.drawEllipse(QPointF(*point), 7, 7)

        painter.end()
