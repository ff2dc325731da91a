import time
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QLabel, QMainWindow, QMessageBox, QStackedWidget, QVBoxLayout, QWidget

from endpoints import DEFAULT_WINDOW_TITLE
from ..client import TrackerClient
from ..dispatch import CallDispatcher
from ..utils import get_logger
from .controller import TrackerController
from .state import Screen
from .threads import TaskRunner
from .views.login_view import LoginView
from .views.timer_view import TimerView
from .views.track_picker import TrackPickerView

FRAMES_PER_SECOND = 30
BACKGROUND_COLOR = "#292c33"


class MainWindow(QMainWindow):
    def __init__(self, client: Optional[TrackerClient] = None, runner: Optional[TaskRunner] = None) -> None:
        super().__init__()
        self.setWindowTitle(DEFAULT_WINDOW_TITLE)
        self.resize(600, 800)
        self.setStyleSheet(f"QMainWindow {{ background: {BACKGROUND_COLOR}; }} QLabel {{ color: #ffffff; }}")
        self.logger = get_logger("timetracker.qt")

        self.client = client or TrackerClient()
        self.runner = runner or TaskRunner()
        self.controller = TrackerController(CallDispatcher(self.client, self.runner))
        self._dialog_open = False

        central = QWidget(self)
        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 8)
        self.stack = QStackedWidget()
        self.login_view = LoginView(self.controller, self.client.base_url)
        self.picker_view = TrackPickerView(self.controller)
        self.timer_view = TimerView(self.controller)
        self.stack.addWidget(self.login_view)
        self.stack.addWidget(self.picker_view)
        self.stack.addWidget(self.timer_view)
        root.addWidget(self.stack, 1)

        self.message_label = QLabel("")
        self.message_label.setAlignment(Qt.AlignCenter)
        root.addWidget(self.message_label)
        self.setCentralWidget(central)

        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(1000 // FRAMES_PER_SECOND)
        self.frame_timer.timeout.connect(self._tick)
        self.frame_timer.start()

    def _tick(self) -> None:
        now = time.time()
        screen = self.controller.tick(now)
        if self.controller.state.should_close:
            self.close()
            return

        if screen is Screen.LOGIN:
            self.stack.setCurrentWidget(self.login_view)
            self.login_view.refresh()
        elif screen is Screen.TRACK_PICKER:
            self.stack.setCurrentWidget(self.picker_view)
            self.picker_view.refresh()
        elif screen is Screen.TIMER:
            self.stack.setCurrentWidget(self.timer_view)
            self.timer_view.refresh(now)
        elif screen is Screen.CLOSE_CONFIRM and not self._dialog_open:
            self._confirm(
                "You sure you want to exit?\nYour time may not be saved.",
                self.controller.answer_close,
            )
        elif screen is Screen.LOGOUT_CONFIRM and not self._dialog_open:
            self._confirm(
                "You sure you want to logout?\nYour time may not be saved.",
                self.controller.answer_logout,
            )

        title = self.controller.window_title()
        if title != self.windowTitle():
            self.setWindowTitle(title)
        self._show_message(now)

    def _confirm(self, text: str, answer) -> None:
        self._dialog_open = True
        try:
            choice = QMessageBox.question(self, "Confirmation Dialogue", text)
        finally:
            self._dialog_open = False
        answer(choice == QMessageBox.StandardButton.Yes)

    def _show_message(self, now: float) -> None:
        message = self.controller.message(now)
        if message is None:
            self.message_label.setText("")
            return
        color = "#ffffff" if message.ok else "#e62937"
        self.message_label.setStyleSheet(f"color: {color}; font-size: 14px;")
        self.message_label.setText(message.text)

    def closeEvent(self, event) -> None:
        if not self.controller.state.should_close and not self.controller.request_close():
            event.ignore()
            return
        self.frame_timer.stop()
        self.client.close()
        super().closeEvent(event)
