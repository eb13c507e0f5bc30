"""예배 순서 패널

예배 순서 선택/생성, 곡 추가/삭제/이동.
모든 순서 변경은 QueueService를 거치며, 화면은 항상 저장소 기준으로 다시 그린다.
"""

from __future__ import annotations

import logging
from datetime import date

from PySide6.QtCore import QDate, Qt, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QDateEdit,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from lyricdeck.domain.queue_ordering import ReorderError, ReorderResult
from lyricdeck.domain.service_queue import QueueItem
from lyricdeck.repository.queue_repository import QueueRepository
from lyricdeck.services.queue_service import QueueService

logger = logging.getLogger(__name__)


class _QueueItemList(QListWidget):
    """드래그로 순서를 바꿀 수 있는 곡 목록

    드롭 후 실제 순서 변경은 item_dropped 시그널을 받은 쪽에서 처리한다.
    """

    item_dropped = Signal(int, int)  # item_id, new_order

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setDragDropMode(QAbstractItemView.DragDropMode.InternalMove)
        self.setDefaultDropAction(Qt.DropAction.MoveAction)

    def dropEvent(self, event) -> None:
        dragged = self.currentItem()
        super().dropEvent(event)
        if dragged is None:
            return
        item_id = dragged.data(Qt.ItemDataRole.UserRole)
        self.item_dropped.emit(item_id, self.row(dragged) + 1)


class QueuePanel(QWidget):
    """예배 순서 패널

    Signals:
        song_activated: 곡 더블클릭 (song_id)
        reorder_failed: 순서 변경 실패 (ReorderError)
        queue_changed: 현재 예배 순서 변경 (queue_id 또는 None)
    """

    song_activated = Signal(int)
    reorder_failed = Signal(object)
    queue_changed = Signal(object)

    def __init__(
        self,
        repository: QueueRepository,
        service: QueueService,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._repo = repository
        self._service = service
        self._queue_id: int | None = None

        self._setup_ui()
        self.reload_queues()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)

        # 예배 순서 선택
        self._queue_combo = QComboBox()
        self._queue_combo.currentIndexChanged.connect(self._on_queue_selected)
        layout.addWidget(self._queue_combo)

        # 새 예배 순서
        create_row = QHBoxLayout()
        self._name_edit = QLineEdit()
        self._name_edit.setPlaceholderText("새 예배 이름")
        self._date_edit = QDateEdit(QDate.currentDate())
        self._date_edit.setCalendarPopup(True)
        btn_create = QPushButton("➕ 만들기")
        btn_create.clicked.connect(self._on_create_clicked)
        create_row.addWidget(self._name_edit, 1)
        create_row.addWidget(self._date_edit)
        create_row.addWidget(btn_create)
        layout.addLayout(create_row)

        self._list = _QueueItemList()
        self._list.item_dropped.connect(self.move_item)
        self._list.itemDoubleClicked.connect(self._on_item_double_clicked)
        self._list.currentRowChanged.connect(lambda _row: self._update_buttons())
        layout.addWidget(self._list, 1)

        self._empty_label = QLabel("예배 순서가 없습니다")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._empty_label)

        # 순서 조작
        buttons = QHBoxLayout()
        self._btn_up = QPushButton("▲")
        self._btn_up.clicked.connect(lambda: self._shift_current(-1))
        self._btn_down = QPushButton("▼")
        self._btn_down.clicked.connect(lambda: self._shift_current(1))
        self._target_spin = QSpinBox()
        self._target_spin.setMinimum(1)
        self._btn_move = QPushButton("위치로 이동")
        self._btn_move.clicked.connect(self._on_move_clicked)
        self._btn_remove = QPushButton("🗑 빼기")
        self._btn_remove.clicked.connect(self._on_remove_clicked)
        self._btn_delete_queue = QPushButton("예배 순서 삭제")
        self._btn_delete_queue.clicked.connect(self._on_delete_queue_clicked)
        for w in (self._btn_up, self._btn_down, self._target_spin, self._btn_move, self._btn_remove):
            buttons.addWidget(w)
        buttons.addStretch()
        buttons.addWidget(self._btn_delete_queue)
        layout.addLayout(buttons)

    # === 예배 순서 ===

    @property
    def queue_id(self) -> int | None:
        return self._queue_id

    def reload_queues(self, select_id: int | None = None) -> None:
        """예배 순서 목록 다시 읽기"""
        if select_id is None:
            select_id = self._queue_id
        queues = self._repo.list_queues()

        self._queue_combo.blockSignals(True)
        self._queue_combo.clear()
        for queue in queues:
            self._queue_combo.addItem(queue.display_name, queue.id)
        index = self._queue_combo.findData(select_id) if select_id is not None else -1
        if index < 0 and queues:
            index = 0
        self._queue_combo.setCurrentIndex(index)
        self._queue_combo.blockSignals(False)

        self._set_queue(self._queue_combo.currentData() if queues else None)

    def create_queue(self, name: str, service_date: date) -> int:
        queue = self._repo.create_queue(name, service_date)
        self.reload_queues(select_id=queue.id)
        return queue.id

    def _set_queue(self, queue_id: int | None) -> None:
        changed = queue_id != self._queue_id
        self._queue_id = queue_id
        self.refresh()
        if changed:
            self.queue_changed.emit(queue_id)

    def _on_queue_selected(self, index: int) -> None:
        self._set_queue(self._queue_combo.itemData(index) if index >= 0 else None)

    def _on_create_clicked(self) -> None:
        name = self._name_edit.text().strip()
        if not name:
            self._name_edit.setFocus()
            return
        self.create_queue(name, self._date_edit.date().toPython())
        self._name_edit.clear()

    def _on_delete_queue_clicked(self) -> None:
        if self._queue_id is None:
            return
        self._repo.delete_queue(self._queue_id)
        self._queue_id = None
        self.reload_queues()

    # === 곡 목록 ===

    def items(self) -> list[QueueItem]:
        if self._queue_id is None:
            return []
        return self._service.list_items(self._queue_id)

    def refresh(self) -> None:
        """저장소 기준으로 곡 목록 다시 그리기"""
        current_id = self._current_item_id()
        items = self.items()

        self._list.blockSignals(True)
        self._list.clear()
        for item in items:
            row = QListWidgetItem(f"{item.order}. {item.song_title}")
            row.setData(Qt.ItemDataRole.UserRole, item.id)
            row.setData(Qt.ItemDataRole.UserRole + 1, item.song_id)
            self._list.addItem(row)
            if item.id == current_id:
                self._list.setCurrentItem(row)
        self._list.blockSignals(False)

        self._target_spin.setMaximum(max(1, len(items)))
        self._empty_label.setVisible(self._queue_id is None)
        self._list.setVisible(self._queue_id is not None)
        self._update_buttons()

    def add_song(self, song_id: int) -> ReorderResult | None:
        """현재 예배 순서 맨 뒤에 곡 추가"""
        if self._queue_id is None:
            return None
        result = self._service.add_song(self._queue_id, song_id)
        self._handle_result(result)
        return result

    def remove_item(self, item_id: int) -> ReorderResult | None:
        if self._queue_id is None:
            return None
        result = self._service.remove_item(self._queue_id, item_id)
        self._handle_result(result)
        return result

    def move_item(self, item_id: int, new_order: int) -> ReorderResult | None:
        if self._queue_id is None:
            return None
        result = self._service.move_item(self._queue_id, item_id, new_order)
        self._handle_result(result)
        self._select_item(item_id)
        return result

    def _handle_result(self, result: ReorderResult) -> None:
        if not result.ok:
            logger.warning("예배 순서 변경 실패: %s", result.error.value)
            self.reorder_failed.emit(result.error)
            if result.error is ReorderError.PARTIAL_REORDER:
                # 로컬 상태를 믿지 않고 복구 후 전체 재조회
                repaired = self._service.repair(self._queue_id)
                if not repaired.ok:
                    logger.error("예배 순서 복구 실패: %s", repaired.error.value)
                    self.reorder_failed.emit(repaired.error)
        self.refresh()

    def _current_item_id(self) -> int | None:
        row = self._list.currentItem()
        return row.data(Qt.ItemDataRole.UserRole) if row else None

    def _select_item(self, item_id: int) -> None:
        for i in range(self._list.count()):
            if self._list.item(i).data(Qt.ItemDataRole.UserRole) == item_id:
                self._list.setCurrentRow(i)
                return

    def _shift_current(self, delta: int) -> None:
        item_id = self._current_item_id()
        if item_id is None:
            return
        new_order = self._list.currentRow() + 1 + delta
        if 1 <= new_order <= self._list.count():
            self.move_item(item_id, new_order)

    def _on_move_clicked(self) -> None:
        item_id = self._current_item_id()
        if item_id is not None:
            self.move_item(item_id, self._target_spin.value())

    def _on_remove_clicked(self) -> None:
        item_id = self._current_item_id()
        if item_id is not None:
            self.remove_item(item_id)

    def _on_item_double_clicked(self, row: QListWidgetItem) -> None:
        self.song_activated.emit(row.data(Qt.ItemDataRole.UserRole + 1))

    def _update_buttons(self) -> None:
        has_item = self._current_item_id() is not None
        for btn in (self._btn_up, self._btn_down, self._btn_move, self._btn_remove):
            btn.setEnabled(has_item)
        self._btn_delete_queue.setEnabled(self._queue_id is not None)
