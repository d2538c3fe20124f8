"""
Shared fixtures: a single offscreen QApplication and a controllable clock.
"""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5.QtWidgets import QApplication  # noqa: E402

from core.global_ctrl import GlobalController, ReplayConfig  # noqa: E402
from heapviz.heap_ops import (  # noqa: E402
    ChangeActiveLength,
    Focus,
    Init,
    Swap,
)


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start=1000.0):
        self.now = float(start)

    def advance(self, ms):
        self.now += ms

    def __call__(self):
        return self.now


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def global_ctrl(qapp):
    return GlobalController(ReplayConfig(animation_duration_ms=500))


@pytest.fixture
def scenario_log():
    return [
        Init([1, 3, 4, 0, 2, 5]),
        Focus(5, 6),
        Focus(2, 5),
        Swap(2, 5),
        ChangeActiveLength(-1),
        Focus(0, 1),
        Swap(0, 4),
    ]
