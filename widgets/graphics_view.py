from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPainter, QWheelEvent
from PyQt5.QtWidgets import QGraphicsView


class ReplayGraphicsView(QGraphicsView):
    """
    Canvas for the heap replay:
    - Ctrl + wheel: zoom around the cursor (factor 1.1, clamped)
    - plain wheel: vertical panning
    """

    min_zoom = 0.2
    max_zoom = 4.0

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHints(QPainter.Antialiasing | QPainter.TextAntialiasing)
        self.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)

    def wheelEvent(self, event: QWheelEvent):
        angle = event.angleDelta().y()
        if event.modifiers() & Qt.ControlModifier:
            factor = 1.1 if angle > 0 else (1 / 1.1)
            zoom = self.transform().m11() * factor
            if self.min_zoom <= zoom <= self.max_zoom:
                self.scale(factor, factor)
        else:
            self.translate(0, angle * 0.2)
        event.accept()
