from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..controller import TrackerController


class LoginView(QWidget):
    def __init__(self, controller: TrackerController, server_url: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._controller = controller

        root = QVBoxLayout(self)
        root.setContentsMargins(16, 60, 16, 16)
        root.setSpacing(10)

        title = QLabel("Log in or Register")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 28px; font-weight: 600;")
        root.addWidget(title)
        root.addStretch(1)

        form = QVBoxLayout()
        user_box = QGroupBox("Username")
        user_layout = QVBoxLayout(user_box)
        self.username_edit = QLineEdit()
        self.username_edit.setMaxLength(49)
        user_layout.addWidget(self.username_edit)
        form.addWidget(user_box)

        pass_box = QGroupBox("Password")
        pass_layout = QVBoxLayout(pass_box)
        self.password_edit = QLineEdit()
        self.password_edit.setMaxLength(49)
        self.password_edit.setEchoMode(QLineEdit.Password)
        self.password_edit.returnPressed.connect(lambda: self._submit(self._controller.login))
        pass_layout.addWidget(self.password_edit)
        form.addWidget(pass_box)

        buttons = QHBoxLayout()
        self.login_btn = QPushButton("Log in")
        self.login_btn.setCursor(Qt.PointingHandCursor)
        self.login_btn.clicked.connect(lambda: self._submit(self._controller.login))
        self.register_btn = QPushButton("Register")
        self.register_btn.setCursor(Qt.PointingHandCursor)
        self.register_btn.clicked.connect(lambda: self._submit(self._controller.register))
        buttons.addWidget(self.login_btn)
        buttons.addWidget(self.register_btn)
        form.addLayout(buttons)

        form_row = QHBoxLayout()
        form_row.addStretch(1)
        form_row.addLayout(form)
        form_row.addStretch(1)
        root.addLayout(form_row)

        server_label = QLabel(f"Server: {server_url}")
        server_label.setAlignment(Qt.AlignCenter)
        root.addWidget(server_label)
        root.addStretch(2)

    def refresh(self) -> None:
        enabled = self._controller.can_submit_credentials(
            self.username_edit.text(), self.password_edit.text()
        )
        self.login_btn.setEnabled(enabled)
        self.register_btn.setEnabled(enabled)

    def _submit(self, action: Callable[[str, str], bool]) -> None:
        if action(self.username_edit.text(), self.password_edit.text()):
            self.username_edit.clear()
            self.password_edit.clear()
