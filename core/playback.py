"""
Timed playback over a replay engine.

The driver is the single entry point for navigation: it forwards seeks to
the engine, decides whether the view should animate or snap, and runs two
timers (auto-play and highlight expiry) on the Qt event loop.
"""

import enum
import logging
import time
from typing import Callable, FrozenSet, Optional

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from core.errors import ReplayError
from core.global_ctrl import GlobalController
from heapviz.heap_model import HeapSnapshot
from heapviz.heap_ops import Operation, Swap
from heapviz.heap_replay import ReplayEngine

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class PlaybackState(enum.Enum):
    STOPPED = "stopped"
    PLAYING = "playing"


class PlaybackDriver(QObject):
    """
    Signals:
        stepped(snapshot, duration_ms): render request; duration 0 means snap.
        positionChanged(int)
        playingChanged(bool)
        errorOccurred(object): replay error raised from a timer tick.
    """

    stepped = pyqtSignal(object, int)
    positionChanged = pyqtSignal(int)
    playingChanged = pyqtSignal(bool)
    errorOccurred = pyqtSignal(object)

    def __init__(
        self,
        engine: ReplayEngine,
        global_ctrl: GlobalController,
        clock: Optional[Callable[[], float]] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.engine = engine
        self.global_ctrl = global_ctrl
        self._clock = clock or monotonic_ms
        self._state = PlaybackState.STOPPED

        self.last_operation: Optional[Operation] = None
        self.last_step_ms: Optional[float] = None
        self._focus_dismissed = False

        self._play_timer = QTimer(self)
        self._play_timer.timeout.connect(self._on_play_tick)

        self._focus_timer = QTimer(self)
        self._focus_timer.setInterval(global_ctrl.config.focus_poll_ms)
        self._focus_timer.timeout.connect(self.expire_highlight)
        self._focus_timer.start()

        global_ctrl.speedChanged.connect(self._on_speed_changed)

    # ---------- Observables ----------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def current_position(self) -> int:
        return self.engine.position

    def snapshot(self) -> HeapSnapshot:
        snapshot = self.engine.snapshot()
        return snapshot.without_focus() if self._focus_dismissed else snapshot

    def focused(self) -> FrozenSet[int]:
        return frozenset() if self._focus_dismissed else self.engine.focused()

    # ---------- Navigation ----------

    def seek_to(self, position: int) -> int:
        """
        Seek the engine and request a render. Replay errors stop playback
        and propagate to the caller.
        """
        previous_ms = self.last_step_ms
        origin = self.engine.position
        try:
            applied = self.engine.seek(position)
        except ReplayError:
            self.pause()
            raise
        finally:
            if self.engine.position != origin:
                self._record_step()

        self.stepped.emit(self.snapshot(), self._render_duration(previous_ms))
        self.positionChanged.emit(self.engine.position)
        return applied

    def step_forward(self) -> int:
        return self.seek_to(self.engine.position + 1)

    def step_backward(self) -> int:
        return self.seek_to(self.engine.position - 1)

    def reset(self) -> int:
        return self.seek_to(0)

    # ---------- Playback ----------

    def play(self):
        if self.is_playing:
            return
        if self.engine.position >= self.engine.last_index:
            logger.debug("Play ignored: already at the last operation")
            return
        # flag first so a re-entrant toggle cannot schedule twice
        self._state = PlaybackState.PLAYING
        self._play_timer.start(self.global_ctrl.animation_duration)
        logger.info("Playback started at position %s", self.engine.position)
        self.playingChanged.emit(True)

    def pause(self):
        if not self.is_playing:
            return
        self._state = PlaybackState.STOPPED
        self._play_timer.stop()
        logger.info("Playback stopped at position %s", self.engine.position)
        self.playingChanged.emit(False)

    def toggle(self):
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def shutdown(self):
        self.pause()
        self._focus_timer.stop()

    def _on_play_tick(self):
        if not self.is_playing:
            return
        if self.engine.position >= self.engine.last_index:
            self.pause()
            return
        try:
            self.step_forward()
        except ReplayError as exc:
            logger.error("Playback halted: %s", exc)
            self.errorOccurred.emit(exc)
            return
        if self.engine.position >= self.engine.last_index:
            self.pause()

    def _on_speed_changed(self, _speed: float):
        if self.is_playing:
            self._play_timer.setInterval(self.global_ctrl.animation_duration)

    # ---------- Render gating ----------

    def _record_step(self):
        self.last_operation = self.engine.last_applied
        self.last_step_ms = self._clock()
        self._focus_dismissed = False

    def _render_duration(self, previous_ms: Optional[float]) -> int:
        duration = self.global_ctrl.animation_duration
        if previous_ms is None:
            return duration
        elapsed = self._clock() - previous_ms
        if elapsed > duration - self.global_ctrl.config.render_margin_ms:
            return duration
        return 0

    def expire_highlight(self) -> bool:
        """Drop the highlight left by a swap once its animation has had time to finish."""
        if self._focus_dismissed or not isinstance(self.last_operation, Swap):
            return False
        if not self.engine.focused():
            return False
        if self._clock() - self.last_step_ms < self.global_ctrl.animation_duration:
            return False
        self._focus_dismissed = True
        logger.debug("Swap highlight expired at position %s", self.engine.position)
        self.stepped.emit(self.snapshot(), self.global_ctrl.animation_duration)
        return True
