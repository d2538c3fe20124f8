import math

from PyQt5.QtCore import QPointF, QRectF, Qt
from PyQt5.QtGui import QBrush, QColor, QPen
from PyQt5.QtWidgets import (
    QGraphicsItem,
    QGraphicsLineItem,
    QGraphicsObject,
    QGraphicsSimpleTextItem,
)

from core.base_view import BaseStructureView

NORMAL_FILL = "#b8b8d6"
FOCUS_FILL = "#ffd54f"
INACTIVE_FILL = "#e3e3ea"


def tree_slot(index: int, width: float, node_size: float, level_padding: float = 15):
    """Centre of heap slot ``index`` in a tree ``width`` wide (root at y=0)."""
    level = math.ceil(math.log2(index + 2)) - 1
    level_count = 2 ** level
    pos = index - (level_count - 1)
    x = width / level_count * pos + width / level_count / 2
    y = level * (node_size + level_padding)
    return x, y


class HeapView(BaseStructureView):
    """
    Draws a heap snapshot twice: as an array row and as a binary tree of the
    active prefix. Items are keyed by element key so a swap moves the two
    values instead of repainting slots.
    """

    tree_width = 650

    def __init__(self, debug=False):
        super().__init__()
        self.debug = debug
        self.cells = {}
        self.nodes = {}
        self.edges = {}
        self.index_labels = {}
        self.array_origin = QPointF(0, 0)
        self.tree_origin = QPointF(0, HeapCellItem.height + 80)

    # ---------- Public API ----------

    def reset(self):
        self.cancel_animations()
        self.scene.clear()
        self.cells.clear()
        self.nodes.clear()
        self.edges.clear()
        self.index_labels.clear()

    def render(self, snapshot, duration=0):
        """Bring the scene to ``snapshot``; ``duration`` 0 places items instantly."""
        self.cancel_animations()
        self._drop_missing(snapshot)

        animations = []
        for idx, element in enumerate(snapshot.elements):
            fill = self._fill_for(snapshot, idx)

            cell = self.cells.get(element.key)
            if cell is None:
                cell = self._create_cell(element.key)
                cell.setPos(self._slot_position(idx))
            cell.set_value(element.value)
            animations.append(self._place(cell, self._slot_position(idx), duration))
            animations.append(self._recolor(cell, fill, duration))

            node = self.nodes.get(element.key)
            if node is None:
                node = self._create_node(element.key)
                node.setPos(self._node_position(idx))
            node.set_value(f"{element.value} ({idx})" if self.debug else element.value)
            active = snapshot.is_active(idx)
            if active and not node.isVisible():
                node.setPos(self._node_position(idx))
            node.setVisible(active)
            if active:
                animations.append(self._place(node, self._node_position(idx), duration))
                animations.append(self._recolor(node, fill, duration))

        self._update_edges(snapshot.active_length)
        self._update_index_labels(len(snapshot.elements))

        if any(animations):
            self._track_animation(self.anim.parallel(*animations))
        self.auto_fit_view(duration=duration)

    # ---------- Internal helpers ----------

    def _fill_for(self, snapshot, index):
        if snapshot.is_focused(index):
            return QColor(FOCUS_FILL)
        if not snapshot.is_active(index):
            return QColor(INACTIVE_FILL)
        return QColor(NORMAL_FILL)

    def _place(self, item, target, duration):
        if duration <= 0 or item.pos() == target:
            item.setPos(target)
            return None
        return self.anim.move_item(item, target, duration=duration)

    def _recolor(self, item, color, duration):
        if duration <= 0 or item.fillColor == color:
            item.setFillColor(color)
            return None
        return self.anim.tint(item.setFillColor, item.fillColor, color, duration)

    def _drop_missing(self, snapshot):
        keep = set(snapshot.keys())
        for table in (self.cells, self.nodes):
            for key in list(table.keys()):
                if key not in keep:
                    item = table.pop(key)
                    if item.scene():
                        self.scene.removeItem(item)

    def _create_cell(self, key):
        cell = HeapCellItem(key)
        self.scene.addItem(cell)
        self.cells[key] = cell
        return cell

    def _create_node(self, key):
        node = HeapNodeItem(key)
        self.scene.addItem(node)
        self.nodes[key] = node
        return node

    def _slot_position(self, index: int) -> QPointF:
        step = HeapCellItem.width + 3
        return QPointF(self.array_origin.x() + index * step, self.array_origin.y())

    def _node_position(self, index: int) -> QPointF:
        size = HeapNodeItem.size
        x, y = tree_slot(index, self.tree_width - size, size)
        return QPointF(self.tree_origin.x() + x, self.tree_origin.y() + y)

    def _node_center(self, index: int) -> QPointF:
        pos = self._node_position(index)
        return QPointF(pos.x() + HeapNodeItem.size / 2, pos.y() + HeapNodeItem.size / 2)

    def _update_edges(self, active_length):
        for idx in list(self.edges.keys()):
            if idx >= active_length:
                edge = self.edges.pop(idx)
                if edge.scene():
                    self.scene.removeItem(edge)

        for idx in range(1, active_length):
            if idx in self.edges:
                continue
            parent = (idx - 1) // 2
            start = self._node_center(parent)
            end = self._node_center(idx)
            edge = QGraphicsLineItem(start.x(), start.y(), end.x(), end.y())
            edge.setPen(QPen(QColor("#9e9e9e"), 2))
            edge.setZValue(1)
            self.scene.addItem(edge)
            self.edges[idx] = edge

    def _update_index_labels(self, count):
        for idx in list(self.index_labels.keys()):
            if idx >= count:
                label = self.index_labels.pop(idx)
                if label.scene():
                    self.scene.removeItem(label)

        for idx in range(count):
            if idx in self.index_labels:
                continue
            label = QGraphicsSimpleTextItem(str(idx))
            label.setBrush(QColor("#90a4ae"))
            slot = self._slot_position(idx)
            rect = label.boundingRect()
            label.setPos(
                slot.x() + HeapCellItem.width / 2 - rect.width() / 2,
                slot.y() + HeapCellItem.height + 6,
            )
            self.scene.addItem(label)
            self.index_labels[idx] = label


class _ValueItem(QGraphicsObject):
    width = 40
    height = 30

    def __init__(self, key):
        super().__init__()
        self.key = key
        self._value = ""
        self.fillColor = QColor(NORMAL_FILL)
        self.strokeColor = QColor("#4a4a52")
        self.textColor = QColor("#1f1f24")
        self.setZValue(2)
        self.setCacheMode(QGraphicsItem.DeviceCoordinateCache)

    def boundingRect(self):
        return QRectF(0, 0, self.width, self.height)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)
        painter.setPen(QPen(self.strokeColor, 2))
        painter.setBrush(QBrush(self.fillColor))
        self._draw_shape(painter)
        painter.setPen(self.textColor)
        painter.drawText(self.boundingRect(), Qt.AlignCenter, self._value)

    def _draw_shape(self, painter):
        painter.drawRect(self.boundingRect())

    @property
    def value_text(self) -> str:
        return self._value

    def set_value(self, value):
        text = str(value)
        if text != self._value:
            self._value = text
            self.update()

    def setFillColor(self, color: QColor):
        self.fillColor = QColor(color)
        self.update()


class HeapCellItem(_ValueItem):
    width = 40
    height = 30


class HeapNodeItem(_ValueItem):
    size = 60
    width = size
    height = size

    def _draw_shape(self, painter):
        painter.drawEllipse(self.boundingRect())
