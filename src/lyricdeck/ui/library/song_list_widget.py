"""곡 목록 위젯

곡 아래에 구간(절/후렴 ...)이 트리로 펼쳐지며,
구간을 클릭하면 바로 송출 요청 시그널이 나간다.
"""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from lyricdeck.domain.song import Segment, Song


class SongListWidget(QWidget):
    """곡 목록

    Signals:
        segment_activated: 구간 클릭 (Segment)
        song_selected: 곡 선택 변경 (Song)
        edit_requested: 편집 버튼 (Song)
        delete_requested: 삭제 버튼 (Song)
        add_to_queue_requested: 예배 순서에 추가 버튼 (Song)
    """

    segment_activated = Signal(object)
    song_selected = Signal(object)
    edit_requested = Signal(object)
    delete_requested = Signal(object)
    add_to_queue_requested = Signal(object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._songs: list[Song] = []
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)

        self._filter = QLineEdit()
        self._filter.setPlaceholderText("제목/작가 검색")
        self._filter.textChanged.connect(self._apply_filter)
        layout.addWidget(self._filter)

        self._tree = QTreeWidget()
        self._tree.setHeaderHidden(True)
        self._tree.itemClicked.connect(self._on_item_clicked)
        self._tree.currentItemChanged.connect(self._on_current_changed)
        layout.addWidget(self._tree)

        self._empty_label = QLabel("등록된 곡이 없습니다")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._empty_label)

        buttons = QHBoxLayout()
        self._btn_edit = QPushButton("✏️ 편집")
        self._btn_edit.clicked.connect(lambda: self._emit_for_current(self.edit_requested))
        self._btn_delete = QPushButton("🗑 삭제")
        self._btn_delete.clicked.connect(lambda: self._emit_for_current(self.delete_requested))
        self._btn_queue = QPushButton("➕ 예배 순서에 추가")
        self._btn_queue.clicked.connect(lambda: self._emit_for_current(self.add_to_queue_requested))
        for btn in (self._btn_edit, self._btn_delete, self._btn_queue):
            buttons.addWidget(btn)
        layout.addLayout(buttons)

        self._update_buttons()

    def set_songs(self, songs: list[Song]) -> None:
        """곡 목록 갱신 (선택은 가능한 한 유지)"""
        current = self.current_song()
        current_id = current.id if current else None

        self._songs = list(songs)
        self._tree.blockSignals(True)
        self._tree.clear()
        for song in self._songs:
            title = f"{song.title} - {song.author}" if song.author else song.title
            song_item = QTreeWidgetItem([title])
            song_item.setData(0, Qt.ItemDataRole.UserRole, song)
            for segment in song.get_ordered_segments():
                seg_item = QTreeWidgetItem([f"{segment.label}  {_first_line(segment.content)}"])
                seg_item.setData(0, Qt.ItemDataRole.UserRole, segment)
                seg_item.setToolTip(0, segment.content)
                song_item.addChild(seg_item)
            self._tree.addTopLevelItem(song_item)
            if song.id == current_id:
                self._tree.setCurrentItem(song_item)
        self._tree.expandAll()
        self._tree.blockSignals(False)

        self._empty_label.setVisible(not self._songs)
        self._apply_filter(self._filter.text())
        self._update_buttons()

    @property
    def songs(self) -> list[Song]:
        return list(self._songs)

    def current_song(self) -> Song | None:
        """선택된 곡 (구간이 선택되어 있으면 그 구간의 곡)"""
        item = self._tree.currentItem()
        if item is None:
            return None
        if item.parent() is not None:
            item = item.parent()
        data = item.data(0, Qt.ItemDataRole.UserRole)
        return data if isinstance(data, Song) else None

    def select_song(self, song_id: int) -> None:
        for i in range(self._tree.topLevelItemCount()):
            item = self._tree.topLevelItem(i)
            song = item.data(0, Qt.ItemDataRole.UserRole)
            if song.id == song_id:
                self._tree.setCurrentItem(item)
                return

    def _on_item_clicked(self, item: QTreeWidgetItem) -> None:
        data = item.data(0, Qt.ItemDataRole.UserRole)
        if isinstance(data, Segment):
            self.segment_activated.emit(data)

    def _on_current_changed(self, current: QTreeWidgetItem | None, _previous) -> None:
        self._update_buttons()
        song = self.current_song()
        if song is not None:
            self.song_selected.emit(song)

    def _emit_for_current(self, signal) -> None:
        song = self.current_song()
        if song is not None:
            signal.emit(song)

    def _apply_filter(self, text: str) -> None:
        needle = text.strip().lower()
        for i in range(self._tree.topLevelItemCount()):
            item = self._tree.topLevelItem(i)
            song = item.data(0, Qt.ItemDataRole.UserRole)
            haystack = f"{song.title} {song.author}".lower()
            item.setHidden(bool(needle) and needle not in haystack)

    def _update_buttons(self) -> None:
        has_song = self.current_song() is not None
        for btn in (self._btn_edit, self._btn_delete, self._btn_queue):
            btn.setEnabled(has_song)


def _first_line(text: str, limit: int = 30) -> str:
    line = text.strip().splitlines()[0] if text.strip() else ""
    return line if len(line) <= limit else line[:limit] + "…"
