"""곡 입력 폼

새 곡 등록과 기존 곡 편집에 같이 쓰인다. 저장 자체는 제어창이 한다.
"""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from lyricdeck.domain.song import SEGMENT_TYPES, Segment, Song


class _SegmentRow(QWidget):
    """구간 한 줄 (종류 + 가사 + 삭제)"""

    remove_requested = Signal(object)

    def __init__(self, segment: Segment | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.type_combo = QComboBox()
        self.type_combo.addItems(SEGMENT_TYPES)
        self.content_edit = QPlainTextEdit()
        self.content_edit.setPlaceholderText("가사 입력")
        self.content_edit.setFixedHeight(80)
        btn_remove = QPushButton("−")
        btn_remove.setFixedWidth(32)
        btn_remove.clicked.connect(lambda: self.remove_requested.emit(self))

        layout.addWidget(self.type_combo)
        layout.addWidget(self.content_edit, 1)
        layout.addWidget(btn_remove)

        if segment is not None:
            self.type_combo.setCurrentText(segment.type)
            self.content_edit.setPlainText(segment.content)

    def to_segment(self) -> Segment:
        return Segment(content=self.content_edit.toPlainText(), type=self.type_combo.currentText())


class SongForm(QWidget):
    """곡 입력 폼

    Signals:
        save_requested: 저장 버튼 (editing_song_id 또는 None)
        cancel_requested: 편집 취소
    """

    save_requested = Signal(object)
    cancel_requested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._editing_song_id: int | None = None
        self._rows: list[_SegmentRow] = []
        self._setup_ui()
        self.clear()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        self._mode_label = QLabel()
        layout.addWidget(self._mode_label)

        form = QFormLayout()
        self._title_edit = QLineEdit()
        self._author_edit = QLineEdit()
        form.addRow("제목", self._title_edit)
        form.addRow("작가", self._author_edit)
        layout.addLayout(form)

        self._rows_container = QWidget()
        self._rows_layout = QVBoxLayout(self._rows_container)
        self._rows_layout.addStretch()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._rows_container)
        layout.addWidget(scroll, 1)

        self._error_label = QLabel()
        self._error_label.setStyleSheet("color: #ef4444;")
        layout.addWidget(self._error_label)

        buttons = QHBoxLayout()
        btn_add = QPushButton("➕ 구간 추가")
        btn_add.clicked.connect(lambda: self.add_segment_row())
        self._btn_cancel = QPushButton("취소")
        self._btn_cancel.clicked.connect(self._on_cancel)
        self._btn_save = QPushButton("💾 저장")
        self._btn_save.clicked.connect(self._on_save)
        buttons.addWidget(btn_add)
        buttons.addStretch()
        buttons.addWidget(self._btn_cancel)
        buttons.addWidget(self._btn_save)
        layout.addLayout(buttons)

    # === 데이터 ===

    @property
    def editing_song_id(self) -> int | None:
        return self._editing_song_id

    def clear(self) -> None:
        """새 곡 입력 상태로 초기화 (빈 구간 한 줄)"""
        self._editing_song_id = None
        self._title_edit.clear()
        self._author_edit.clear()
        self._set_rows([None])
        self._error_label.clear()
        self._mode_label.setText("새 곡 등록")
        self._btn_cancel.setVisible(False)

    def load_song(self, song: Song) -> None:
        """기존 곡 편집 상태로 전환"""
        self._editing_song_id = song.id
        self._title_edit.setText(song.title)
        self._author_edit.setText(song.author)
        self._set_rows(song.get_ordered_segments() or [None])
        self._error_label.clear()
        self._mode_label.setText(f"곡 편집: {song.title}")
        self._btn_cancel.setVisible(True)

    def add_segment_row(self, segment: Segment | None = None) -> None:
        row = _SegmentRow(segment)
        row.remove_requested.connect(self._remove_row)
        self._rows.append(row)
        self._rows_layout.insertWidget(self._rows_layout.count() - 1, row)

    def _set_rows(self, segments: list[Segment | None]) -> None:
        for row in self._rows:
            row.setParent(None)
            row.deleteLater()
        self._rows = []
        for segment in segments:
            self.add_segment_row(segment)

    def _remove_row(self, row: _SegmentRow) -> None:
        if len(self._rows) <= 1:
            return  # 최소 한 줄 유지
        self._rows.remove(row)
        row.setParent(None)
        row.deleteLater()

    @property
    def title(self) -> str:
        return self._title_edit.text().strip()

    @property
    def author(self) -> str:
        return self._author_edit.text().strip()

    def segments(self) -> list[Segment]:
        """입력된 구간 (빈 가사 줄은 제외, 화면 순서대로)"""
        return [s for s in (row.to_segment() for row in self._rows) if s.content.strip()]

    def validate(self) -> str | None:
        """입력 검증 (문제가 있으면 안내 문구)"""
        if not self.title:
            return "제목을 입력하세요."
        if not self.segments():
            return "가사 구간을 하나 이상 입력하세요."
        return None

    def _on_save(self) -> None:
        error = self.validate()
        self._error_label.setText(error or "")
        if error is None:
            self.save_requested.emit(self._editing_song_id)

    def _on_cancel(self) -> None:
        self.clear()
        self.cancel_requested.emit()
