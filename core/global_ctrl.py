from dataclasses import dataclass, fields
from typing import Any, Mapping

from PyQt5.QtCore import QObject, pyqtSignal


@dataclass(frozen=True)
class ReplayConfig:
    """
    animation_duration_ms drives both the playback cadence and the
    animate-or-snap decision; render_margin_ms is how much earlier than a
    full duration a new step may still animate.
    """

    animation_duration_ms: int = 500
    render_margin_ms: int = 50
    focus_poll_ms: int = 100
    debug: bool = False

    def __post_init__(self):
        for name in ("animation_duration_ms", "focus_poll_ms"):
            if int(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be positive")
        if int(self.render_margin_ms) < 0:
            raise ValueError("render_margin_ms must not be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ReplayConfig":
        data = dict(data or {})
        if "animationDurationMs" in data:
            data.setdefault("animation_duration_ms", data.pop("animationDurationMs"))
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                continue
            kwargs[key] = bool(value) if key == "debug" else int(value)
        return cls(**kwargs)


class GlobalController(QObject):
    """
    Holds the replay configuration and the user speed multiplier, and emits
    changes so the playback timer and every animation stay in step.
    """

    speedChanged = pyqtSignal(float)

    def __init__(self, config: ReplayConfig = None):
        super().__init__()
        self.config = config or ReplayConfig()
        self._speed = 1.0  # multiplier: 1.0× by default

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def animation_duration(self) -> int:
        return self.scale_duration(self.config.animation_duration_ms)

    def set_speed(self, value: float):
        """Clamp and broadcast speed multiplier (0.5× – 3×)."""
        value = max(0.5, min(3.0, value))
        if abs(value - self._speed) > 1e-3:
            self._speed = value
            self.speedChanged.emit(self._speed)

    def scale_duration(self, base_ms: int) -> int:
        """
        Convert a base duration (ms) into the actual playback duration.
        Higher speed → shorter duration.
        """
        if self._speed <= 0:
            return base_ms
        return max(1, int(base_ms / self._speed))
