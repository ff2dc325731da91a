from typing import Callable, List, Optional, Tuple

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from ..controller import TrackerController
from .new_track_dialog import NewTrackDialog


class TrackRow(QFrame):
    def __init__(
        self,
        name: str,
        on_open: Callable[[str], None],
        on_delete: Callable[[str], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.name = name

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2)
        layout.setSpacing(5)

        open_btn = QPushButton(name)
        open_btn.setCursor(Qt.PointingHandCursor)
        open_btn.setMinimumWidth(300)
        open_btn.clicked.connect(lambda: on_open(self.name))
        layout.addWidget(open_btn, 1)

        # Editing tracks is not supported by the server yet.
        edit_btn = QPushButton("Edit")
        edit_btn.setEnabled(False)
        layout.addWidget(edit_btn)

        delete_btn = QPushButton("Delete")
        delete_btn.setCursor(Qt.PointingHandCursor)
        delete_btn.clicked.connect(lambda: on_delete(self.name))
        layout.addWidget(delete_btn)


class TrackPickerView(QWidget):
    def __init__(self, controller: TrackerController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self._shown: Tuple[str, ...] = ()

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(10)

        header = QHBoxLayout()
        header.addWidget(QLabel("Pick a track"))
        header.addStretch(1)
        self.new_btn = QPushButton("New Track")
        self.new_btn.setCursor(Qt.PointingHandCursor)
        self.new_btn.clicked.connect(self._new_track)
        header.addWidget(self.new_btn)
        root.addLayout(header)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        container = QWidget()
        self.list_layout = QVBoxLayout(container)
        self.list_layout.setSpacing(5)
        self.list_layout.addStretch(1)
        self.scroll.setWidget(container)
        root.addWidget(self.scroll, 1)

    def refresh(self) -> None:
        names = tuple(self._controller.state.track_names)
        if names != self._shown:
            self._rebuild(list(names))

    def _rebuild(self, names: List[str]) -> None:
        while self.list_layout.count() > 1:
            item = self.list_layout.takeAt(0)
            widget = item.widget()
            if widget:
                widget.deleteLater()
        for name in names:
            row = TrackRow(name, on_open=self._controller.select_track, on_delete=self._controller.delete_track)
            self.list_layout.insertWidget(self.list_layout.count() - 1, row)
        self._shown = tuple(names)

    def _new_track(self) -> None:
        dialog = NewTrackDialog(self)
        if dialog.exec():
            self._controller.create_track(dialog.track_name())
