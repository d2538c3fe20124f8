import argparse
import logging
import sys
from pathlib import Path

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from core.errors import ReplayError
from core.global_ctrl import GlobalController, ReplayConfig
from heapviz.heap_ctrl import HeapController
from heapviz.heap_ops import OperationLog, load_operations
from heapviz.heap_trace import example_log, record_heap_sort
from widgets.graphics_view import ReplayGraphicsView

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main window: replay canvas and speed slider on the left, operations on the right."""

    def __init__(self, log: OperationLog, config: ReplayConfig):
        super().__init__()
        self.setWindowTitle("Heap Sort Replay")
        self.resize(1280, 760)

        self.global_ctrl = GlobalController(config)
        self.controller = HeapController(self.global_ctrl, log)

        self._build_ui()
        self._connect_signals()

        style_path = Path(__file__).parent / "resources" / "styles.qss"
        if style_path.exists():
            with open(style_path, "r", encoding="utf-8") as handle:
                self.setStyleSheet(handle.read())

        self.controller.on_activate(self.graphics_view)

    def _build_ui(self):
        central = QWidget(self)
        self.setCentralWidget(central)

        root_layout = QHBoxLayout(central)
        root_layout.setContentsMargins(8, 8, 8, 8)
        root_layout.setSpacing(8)

        # Left panel (70%)
        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)
        left_layout.setSpacing(6)

        self.graphics_view = ReplayGraphicsView()
        left_layout.addWidget(self.graphics_view, 1)

        speed_layout = QHBoxLayout()
        speed_label = QLabel("Animation Speed")
        self.speed_value_label = QLabel("1.0×")
        self.speed_slider = QSlider(Qt.Horizontal)
        self.speed_slider.setRange(50, 300)  # maps to 0.5x – 3x
        self.speed_slider.setValue(100)
        speed_layout.addWidget(speed_label)
        speed_layout.addWidget(self.speed_slider, 1)
        speed_layout.addWidget(self.speed_value_label)
        left_layout.addLayout(speed_layout)

        # Right panel (30%)
        right_panel = QWidget()
        right_layout = QVBoxLayout(right_panel)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.addWidget(self.controller.build_panel(), 1)

        root_layout.addWidget(left_panel, 14)
        root_layout.addWidget(right_panel, 6)

    def _connect_signals(self):
        self.speed_slider.valueChanged.connect(self._on_speed_slider_changed)

    def _on_speed_slider_changed(self, value):
        speed = value / 100.0
        self.speed_value_label.setText(f"{speed:.1f}×")
        self.global_ctrl.set_speed(speed)

    def closeEvent(self, event):
        self.controller.shutdown()
        super().closeEvent(event)


def parse_values(text: str):
    values = []
    for part in text.replace("，", ",").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            values.append(int(part))
        except ValueError:
            try:
                values.append(float(part))
            except ValueError as exc:
                raise ValueError(f"not a number: {part!r}") from exc
    return values


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Step through a recorded heap sort.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--log", type=Path, help="JSON file with the operation list")
    source.add_argument("--values", help="comma-separated numbers to heap-sort and replay")
    parser.add_argument(
        "--duration-ms",
        type=int,
        default=ReplayConfig.animation_duration_ms,
        help="animation duration and playback cadence in milliseconds",
    )
    parser.add_argument("--debug", action="store_true", help="show indexes and debug logs")
    return parser


def load_log(args) -> OperationLog:
    if args.log:
        return load_operations(args.log)
    if args.values:
        return OperationLog(record_heap_sort(parse_values(args.values)))
    return example_log()


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ReplayConfig.from_mapping(
            {"animation_duration_ms": args.duration_ms, "debug": args.debug}
        )
        log = load_log(args)
    except (OSError, ValueError, ReplayError) as exc:
        parser.error(str(exc))
    logger.info("Loaded %s operations", len(log))

    app = QApplication(sys.argv[:1])
    window = MainWindow(log, config)
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
