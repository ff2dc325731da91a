from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)


class NewTrackDialog(QDialog):
    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("New Track")
        self.setModal(True)
        self.setFixedSize(360, 150)

        root = QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 16)
        root.setSpacing(10)

        root.addWidget(QLabel("Track name"))
        self.name_edit = QLineEdit()
        self.name_edit.setMaxLength(255)
        self.name_edit.textChanged.connect(self._on_text_changed)
        root.addWidget(self.name_edit)

        footer = QHBoxLayout()
        footer.addStretch(1)
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.clicked.connect(self.reject)
        self.create_btn = QPushButton("Create")
        self.create_btn.setCursor(Qt.PointingHandCursor)
        self.create_btn.setEnabled(False)
        self.create_btn.setDefault(True)
        self.create_btn.clicked.connect(self.accept)
        footer.addWidget(self.cancel_btn)
        footer.addWidget(self.create_btn)
        root.addLayout(footer)

    def _on_text_changed(self, text: str) -> None:
        self.create_btn.setEnabled(bool(text.strip()))

    def track_name(self) -> str:
        return self.name_edit.text().strip()
