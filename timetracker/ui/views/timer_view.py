from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...utils import format_hms
from ..controller import TrackerController

START_TEXT = "START COUNTING"
STOP_TEXT = "STOP COUNTING"
IDLE_COLOR = "#67fc1c"
COUNTING_COLOR = "#fc6e1c"


class CountButton(QPushButton):
    def __init__(self, diameter: int = 360, parent: Optional[QWidget] = None) -> None:
        super().__init__(START_TEXT, parent)
        self._diameter = diameter
        self._counting: Optional[bool] = None
        self.setFixedSize(diameter, diameter)
        self.setCursor(Qt.PointingHandCursor)
        self.set_counting(False)

    def set_counting(self, counting: bool) -> None:
        if counting == self._counting:
            return
        self._counting = counting
        color = COUNTING_COLOR if counting else IDLE_COLOR
        self.setText(STOP_TEXT if counting else START_TEXT)
        self.setStyleSheet(
            f"QPushButton {{ background: {color}; color: #ffffff; font-size: 28px; font-weight: 700;"
            f" border: 20px solid #d3d3d3; border-radius: {self._diameter // 2}px; }}"
            " QPushButton:hover { color: #d3d3d3; border-color: #808080; }"
        )


class TimerView(QWidget):
    def __init__(self, controller: TrackerController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._controller = controller

        root = QVBoxLayout(self)
        root.setContentsMargins(10, 5, 10, 10)
        root.setSpacing(8)

        stats = QGridLayout()
        self.total_value = QLabel("0")
        self.session_value = QLabel("0")
        self.track_value = QLabel("")
        for row, (title, value) in enumerate(
            (("Total:", self.total_value), ("Session:", self.session_value), ("Track:", self.track_value))
        ):
            label = QLabel(title)
            label.setStyleSheet("font-size: 18px;")
            value.setStyleSheet("font-size: 18px;")
            stats.addWidget(label, row, 0)
            stats.addWidget(value, row, 1)
        stats.setColumnStretch(1, 1)
        root.addLayout(stats)

        actions = QHBoxLayout()
        self.sync_btn = QPushButton("Sync")
        self.sync_btn.setToolTip("Fetch the saved time of this track")
        self.sync_btn.clicked.connect(self._controller.sync)
        self.save_btn = QPushButton("Save")
        self.save_btn.setToolTip("Send the session time to the server")
        self.save_btn.clicked.connect(self._controller.save)
        self.logout_btn = QPushButton("Logout")
        self.logout_btn.clicked.connect(lambda: self._controller.request_logout())
        self.reset_btn = QPushButton("Reset")
        self.reset_btn.setToolTip("Discard the unsaved session time")
        self.reset_btn.clicked.connect(self._controller.reset)
        for btn in (self.sync_btn, self.save_btn, self.logout_btn, self.reset_btn):
            btn.setCursor(Qt.PointingHandCursor)
            actions.addWidget(btn)
        actions.addStretch(1)
        root.addLayout(actions)

        root.addStretch(1)
        self.count_btn = CountButton()
        self.count_btn.clicked.connect(lambda: self._controller.toggle_counting())
        root.addWidget(self.count_btn, alignment=Qt.AlignCenter)

        self.live_label = QLabel("")
        self.live_label.setAlignment(Qt.AlignCenter)
        self.live_label.setStyleSheet("font-size: 32px;")
        root.addWidget(self.live_label)
        root.addStretch(1)

    def refresh(self, now: float) -> None:
        state = self._controller.state
        clock = state.clock
        self.count_btn.set_counting(clock.counting)
        self.total_value.setText(str(clock.total(now)))
        self.session_value.setText(format_hms(clock.session_total(now)))
        self.track_value.setText(state.track_name)
        self.live_label.setText(format_hms(clock.running_seconds(now)) if clock.counting else "")
        self.sync_btn.setEnabled(self._controller.can_sync())
        self.save_btn.setEnabled(self._controller.can_save())
        self.reset_btn.setEnabled(self._controller.can_reset())
