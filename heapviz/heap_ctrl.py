import logging

from PyQt5.QtWidgets import (
    QAbstractItemView,
    QGroupBox,
    QHBoxLayout,
    QListWidget,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.errors import InvariantViolation, ReplayError
from core.global_ctrl import GlobalController
from core.playback import PlaybackDriver
from heapviz.heap_replay import ReplayEngine
from heapviz.heap_view import HeapView

logger = logging.getLogger(__name__)


class HeapController(QWidget):
    """
    Replay panel for a heap-sort operation log: prev / next / play / reset
    buttons plus the operation list. Bridges the playback driver and the view.
    """

    def __init__(self, global_ctrl: GlobalController, log, clock=None):
        super().__init__()
        self.engine = ReplayEngine(log)
        self.view = HeapView(debug=global_ctrl.config.debug)
        self.driver = PlaybackDriver(self.engine, global_ctrl, clock=clock, parent=self)
        self._halted = False
        self._syncing_list = False

        self.panel = self._create_panel()

        self.driver.stepped.connect(self.view.render)
        self.driver.positionChanged.connect(self._sync_selection)
        self.driver.playingChanged.connect(self._sync_play_button)
        self.driver.errorOccurred.connect(self._report_error)

        self.view.render(self.driver.snapshot(), 0)
        self._sync_selection(self.engine.position)

    # ---------- Panel UI ----------

    def _create_panel(self):
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.operations_list = QListWidget()
        self.operations_list.setSelectionMode(QAbstractItemView.SingleSelection)
        self.operations_list.addItems(self.engine.log.labels())
        self.operations_list.currentRowChanged.connect(self._on_row_selected)

        list_group = QGroupBox("Operations")
        list_group.setStyleSheet("QGroupBox { color: white; }")
        list_layout = QVBoxLayout(list_group)
        list_layout.setContentsMargins(12, 10, 12, 12)
        list_layout.addWidget(self.operations_list)
        layout.addWidget(list_group, 1)

        self.prev_btn = QPushButton("< prev")
        self.next_btn = QPushButton("next >")
        self.play_btn = QPushButton("play")
        self.reset_btn = QPushButton("reset")

        self.prev_btn.clicked.connect(lambda: self._navigate(self.driver.step_backward))
        self.next_btn.clicked.connect(lambda: self._navigate(self.driver.step_forward))
        self.reset_btn.clicked.connect(lambda: self._navigate(self.driver.reset))
        self.play_btn.clicked.connect(self._on_play_clicked)

        buttons = QHBoxLayout()
        buttons.setSpacing(6)
        for button in (self.prev_btn, self.next_btn, self.play_btn, self.reset_btn):
            buttons.addWidget(button)
        layout.addLayout(buttons)

        return container

    def build_panel(self):
        return self.panel

    # ---------- Controller lifecycle ----------

    def on_activate(self, graphics_view):
        self.view.bind_canvas(graphics_view)
        self.view.render(self.driver.snapshot(), 0)

    def shutdown(self):
        self.driver.shutdown()

    # ---------- UI handlers ----------

    def _navigate(self, command):
        if self._halted:
            return
        try:
            command()
        except ReplayError as exc:
            self._report_error(exc)

    def _on_row_selected(self, row):
        if self._syncing_list or row < 0:
            return
        self._navigate(lambda: self.driver.seek_to(row))

    def _on_play_clicked(self):
        if not self._halted:
            self.driver.toggle()

    def _report_error(self, exc):
        # partial progress is still a consistent state
        self.view.render(self.driver.snapshot(), 0)
        self._sync_selection(self.engine.position)
        if isinstance(exc, InvariantViolation):
            self._halted = True
            self._set_navigation_enabled(False)
            logger.error("Replay halted: %s", exc)
            QMessageBox.critical(self, "Replay halted", str(exc))
        else:
            logger.warning("Replay step rejected: %s", exc)
            QMessageBox.warning(self, "Replay step rejected", str(exc))

    # ---------- State helpers ----------

    def _sync_selection(self, position):
        self._syncing_list = True
        try:
            self.operations_list.setCurrentRow(position)
        finally:
            self._syncing_list = False

    def _sync_play_button(self, playing):
        self.play_btn.setText("pause" if playing else "play")

    def _set_navigation_enabled(self, enabled):
        for widget in (
            self.prev_btn,
            self.next_btn,
            self.play_btn,
            self.reset_btn,
            self.operations_list,
        ):
            widget.setEnabled(enabled)
