"""예배 순서 저장소 (Repository)

service_queues / queue_items 테이블 CRUD.
한 번의 정렬 전환에서 나온 쓰기들은 apply_orders()로 한 트랜잭션에 반영한다.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from typing import Iterable

from lyricdeck.domain.queue_ordering import OrderEntry
from lyricdeck.domain.service_queue import QueueItem, ServiceQueue
from lyricdeck.repository.database import PersistError

logger = logging.getLogger(__name__)


def write_orders(db: sqlite3.Connection, queue_id: int, changes: Iterable[OrderEntry]) -> None:
    """순서 변경 목록을 현재 트랜잭션 안에서 기록

    UNIQUE(queue_id, sort_order) 충돌을 피하려고 먼저 음수로 옮긴 뒤
    최종 값으로 바꾼다. 호출자가 트랜잭션(commit/rollback)을 책임진다.
    """
    changes = list(changes)
    for entry in changes:
        cursor = db.execute(
            "UPDATE queue_items SET sort_order = ? WHERE id = ? AND queue_id = ?",
            (-entry.order, entry.item_id, queue_id),
        )
        if cursor.rowcount != 1:
            raise PersistError(f"큐 {queue_id}에 항목 {entry.item_id}이(가) 없습니다")
    for entry in changes:
        db.execute(
            "UPDATE queue_items SET sort_order = ? WHERE id = ?",
            (entry.order, entry.item_id),
        )


def _row_to_item(row: sqlite3.Row) -> QueueItem:
    return QueueItem(
        id=row["id"],
        queue_id=row["queue_id"],
        song_id=row["song_id"],
        order=row["sort_order"],
        song_title=row["title"] or "",
    )


def _row_to_queue(row: sqlite3.Row) -> ServiceQueue:
    return ServiceQueue(
        id=row["id"],
        name=row["name"],
        service_date=date.fromisoformat(row["service_date"]),
        created_at=row["created_at"],
    )


class QueueRepository:
    """예배 순서 저장소

    Attributes:
        db: SQLite 연결 (row_factory = sqlite3.Row)
    """

    def __init__(self, db: sqlite3.Connection) -> None:
        self.db = db

    # === 예배 순서 ===

    def create_queue(self, name: str, service_date: date) -> ServiceQueue:
        """새 예배 순서 생성"""
        with self.db:
            cursor = self.db.execute(
                "INSERT INTO service_queues (name, service_date) VALUES (?, ?)",
                (name, service_date.isoformat()),
            )
        return self.get_queue(cursor.lastrowid)

    def list_queues(self) -> list[ServiceQueue]:
        """예배 순서 목록 (최근 날짜 먼저, 곡 목록은 비어 있음)"""
        rows = self.db.execute(
            "SELECT * FROM service_queues ORDER BY service_date DESC, id DESC"
        ).fetchall()
        return [_row_to_queue(row) for row in rows]

    def get_queue(self, queue_id: int) -> ServiceQueue | None:
        """곡 목록을 포함한 예배 순서 조회"""
        row = self.db.execute(
            "SELECT * FROM service_queues WHERE id = ?", (queue_id,)
        ).fetchone()
        if row is None:
            return None
        queue = _row_to_queue(row)
        queue.items = self.list_queue_items(queue_id)
        return queue

    def delete_queue(self, queue_id: int) -> bool:
        """예배 순서 삭제 (곡 목록도 함께 삭제)

        Returns:
            삭제 성공 여부
        """
        with self.db:
            cursor = self.db.execute("DELETE FROM service_queues WHERE id = ?", (queue_id,))
        return cursor.rowcount > 0

    # === 큐 항목 ===

    def list_queue_items(self, queue_id: int) -> list[QueueItem]:
        """순서대로 정렬된 큐 항목"""
        rows = self.db.execute(
            """
            SELECT qi.id, qi.queue_id, qi.song_id, qi.sort_order, s.title
            FROM queue_items qi
            LEFT JOIN songs s ON s.id = qi.song_id
            WHERE qi.queue_id = ?
            ORDER BY qi.sort_order
            """,
            (queue_id,),
        ).fetchall()
        return [_row_to_item(row) for row in rows]

    def set_order(self, item_id: int, new_order: int) -> None:
        """항목 하나의 순서 변경 (단건 커밋)"""
        with self.db:
            cursor = self.db.execute(
                "UPDATE queue_items SET sort_order = ? WHERE id = ?", (new_order, item_id)
            )
            if cursor.rowcount != 1:
                raise PersistError(f"큐 항목 {item_id}이(가) 없습니다")

    def insert_queue_item(self, queue_id: int, song_id: int, order: int) -> QueueItem:
        """큐에 곡 추가"""
        with self.db:
            cursor = self.db.execute(
                "INSERT INTO queue_items (queue_id, song_id, sort_order) VALUES (?, ?, ?)",
                (queue_id, song_id, order),
            )
        row = self.db.execute(
            """
            SELECT qi.id, qi.queue_id, qi.song_id, qi.sort_order, s.title
            FROM queue_items qi
            LEFT JOIN songs s ON s.id = qi.song_id
            WHERE qi.id = ?
            """,
            (cursor.lastrowid,),
        ).fetchone()
        return _row_to_item(row)

    def delete_queue_item(self, item_id: int) -> bool:
        """큐 항목 삭제 (순서 재배치 없음, 단건 커밋)"""
        with self.db:
            cursor = self.db.execute("DELETE FROM queue_items WHERE id = ?", (item_id,))
        return cursor.rowcount > 0

    def apply_orders(
        self,
        queue_id: int,
        changes: Iterable[OrderEntry],
        delete_item_id: int | None = None,
    ) -> None:
        """정렬 전환 하나를 단일 트랜잭션으로 반영

        delete_item_id가 있으면 같은 트랜잭션에서 먼저 삭제한다.
        중간에 실패하면 전체가 롤백된다.
        """
        with self.db:
            if delete_item_id is not None:
                cursor = self.db.execute(
                    "DELETE FROM queue_items WHERE id = ? AND queue_id = ?",
                    (delete_item_id, queue_id),
                )
                if cursor.rowcount != 1:
                    raise PersistError(f"큐 {queue_id}에 항목 {delete_item_id}이(가) 없습니다")
            write_orders(self.db, queue_id, changes)
        logger.debug("큐 %s 순서 반영 완료", queue_id)
