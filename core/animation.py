from PyQt5.QtCore import (
    QEasingCurve,
    QParallelAnimationGroup,
    QPropertyAnimation,
    QVariantAnimation,
)
from PyQt5.QtGui import QColor


class AnimationToolkit:
    """
    Helper factory for the replay view. Durations handed in are final: the
    playback driver already applied the speed multiplier and decided whether
    a step animates at all.
    """

    def move_item(self, item, end_pos, duration, easing=QEasingCurve.InOutCubic):
        anim = QPropertyAnimation(item, b"pos")
        anim.setDuration(max(1, int(duration)))
        anim.setEndValue(end_pos)
        anim.setEasingCurve(easing)
        return anim

    def tint(self, setter, start_color, end_color, duration):
        """
        setter: callable receiving QColor (e.g. cell.setFillColor).
        """
        anim = QVariantAnimation()
        anim.setDuration(max(1, int(duration)))
        anim.setStartValue(QColor(start_color))
        anim.setEndValue(QColor(end_color))
        anim.setEasingCurve(QEasingCurve.InOutQuad)

        def _update(value):
            if isinstance(value, QColor):
                setter(value)

        anim.valueChanged.connect(_update)
        return anim

    @staticmethod
    def parallel(*animations):
        group = QParallelAnimationGroup()
        for anim in animations:
            if anim:
                group.addAnimation(anim)
        return group
