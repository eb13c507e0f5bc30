"""예배 순서 서비스

정렬 엔진이 계산한 전환을 저장소에 한 번에 반영한다.
반영 중 실패하면 저장소를 다시 읽어 순서 불변식(1..N)을 검증하고,
깨져 있으면 PARTIAL_REORDER를 돌려준다.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Protocol, Sequence

from lyricdeck.domain import queue_ordering
from lyricdeck.domain.queue_ordering import OrderEntry, ReorderError, ReorderResult
from lyricdeck.domain.service_queue import QueueItem

logger = logging.getLogger(__name__)


class QueueStore(Protocol):
    """QueueService가 사용하는 저장소 인터페이스"""

    def list_queue_items(self, queue_id: int) -> list[QueueItem]: ...

    def insert_queue_item(self, queue_id: int, song_id: int, order: int) -> QueueItem: ...

    def apply_orders(
        self,
        queue_id: int,
        changes: Sequence[OrderEntry],
        delete_item_id: int | None = None,
    ) -> None: ...


def to_entries(items: Sequence[QueueItem]) -> list[OrderEntry]:
    return [OrderEntry(item.id, item.order) for item in items]


class QueueService:
    """예배 순서 곡 추가/삭제/이동"""

    def __init__(self, store: QueueStore) -> None:
        self._store = store

    def list_items(self, queue_id: int) -> list[QueueItem]:
        return self._store.list_queue_items(queue_id)

    def add_song(self, queue_id: int, song_id: int) -> ReorderResult:
        """곡을 맨 뒤에 추가"""
        entries = to_entries(self._store.list_queue_items(queue_id))
        try:
            item = self._store.insert_queue_item(
                queue_id, song_id, queue_ordering.next_order(entries)
            )
        except sqlite3.Error as e:
            return self._recover(queue_id, e)
        return queue_ordering.append(entries, item.id)

    def remove_item(self, queue_id: int, item_id: int) -> ReorderResult:
        """항목 제거 후 뒤쪽 항목을 한 칸씩 당김"""
        entries = to_entries(self._store.list_queue_items(queue_id))
        result = queue_ordering.remove(entries, item_id)
        if not result.ok:
            return result

        changes = queue_ordering.changed_orders(entries, result.items)
        try:
            self._store.apply_orders(queue_id, changes, delete_item_id=item_id)
        except sqlite3.Error as e:
            return self._recover(queue_id, e)
        return result

    def move_item(self, queue_id: int, item_id: int, new_order: int) -> ReorderResult:
        """항목을 new_order 위치로 이동"""
        entries = to_entries(self._store.list_queue_items(queue_id))
        result = queue_ordering.move(entries, item_id, new_order)
        if not result.ok:
            return result

        changes = queue_ordering.changed_orders(entries, result.items)
        if not changes:
            return result
        try:
            self._store.apply_orders(queue_id, changes)
        except sqlite3.Error as e:
            return self._recover(queue_id, e)
        return result

    def repair(self, queue_id: int) -> ReorderResult:
        """저장된 순서를 상대 순서를 유지한 채 1..N으로 복구"""
        entries = to_entries(self._store.list_queue_items(queue_id))
        normalized = queue_ordering.normalize(entries)
        changes = queue_ordering.changed_orders(entries, normalized)
        if changes:
            logger.warning("큐 %s 순서 복구: %d개 항목", queue_id, len(changes))
            try:
                self._store.apply_orders(queue_id, changes)
            except sqlite3.Error as e:
                return self._recover(queue_id, e)
        return ReorderResult.success(normalized)

    def _recover(self, queue_id: int, error: sqlite3.Error) -> ReorderResult:
        """반영 실패 후 저장소 상태를 다시 읽어 검증"""
        logger.error("큐 %s 반영 실패: %s", queue_id, error)
        try:
            entries = to_entries(self._store.list_queue_items(queue_id))
        except sqlite3.Error as e:
            logger.error("큐 %s 재조회 실패: %s", queue_id, e)
            return ReorderResult.failure(ReorderError.PARTIAL_REORDER)

        if not queue_ordering.is_dense(entries):
            logger.error("큐 %s 순서가 깨졌습니다: %s", queue_id, [e.order for e in entries])
            return ReorderResult.failure(ReorderError.PARTIAL_REORDER, entries)
        return ReorderResult.failure(ReorderError.PERSISTENCE_FAILED, entries)
