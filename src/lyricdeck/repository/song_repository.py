"""곡 저장소 (Repository)

songs / segments 테이블 CRUD.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Iterable

from lyricdeck.domain import queue_ordering
from lyricdeck.domain.queue_ordering import OrderEntry
from lyricdeck.domain.song import Segment, Song
from lyricdeck.repository.queue_repository import write_orders

logger = logging.getLogger(__name__)


def _row_to_song(row: sqlite3.Row) -> Song:
    return Song(
        id=row["id"],
        title=row["title"],
        author=row["author"] or "",
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_segment(row: sqlite3.Row) -> Segment:
    return Segment(
        id=row["id"],
        song_id=row["song_id"],
        content=row["content"],
        type=row["type"],
        order=row["sort_order"],
    )


class SongRepository:
    """곡 저장소

    곡을 저장할 때 구간 순서는 전달된 리스트 순서대로 1..N이 된다.

    Attributes:
        db: SQLite 연결 (row_factory = sqlite3.Row)
    """

    def __init__(self, db: sqlite3.Connection) -> None:
        self.db = db

    def create_song(self, title: str, author: str = "", segments: Iterable[Segment] = ()) -> Song:
        """곡과 구간을 한 번에 저장"""
        title = title.strip()
        if not title:
            raise ValueError("곡 제목이 비어 있습니다")

        with self.db:
            cursor = self.db.execute(
                "INSERT INTO songs (title, author) VALUES (?, ?)",
                (title, author or None),
            )
            song_id = cursor.lastrowid
            self._insert_segments(song_id, segments)

        logger.info("곡 생성: %s (id=%s)", title, song_id)
        return self.get_song(song_id)

    def _insert_segments(self, song_id: int, segments: Iterable[Segment]) -> None:
        for order, segment in enumerate(segments, start=1):
            self.db.execute(
                "INSERT INTO segments (song_id, content, sort_order, type) VALUES (?, ?, ?, ?)",
                (song_id, segment.content, order, segment.type),
            )

    def list_songs(self) -> list[Song]:
        """전체 곡 목록 (구간은 순서대로 포함)"""
        songs = [
            _row_to_song(row)
            for row in self.db.execute("SELECT * FROM songs ORDER BY title COLLATE NOCASE, id")
        ]
        by_id = {song.id: song for song in songs}

        rows = self.db.execute("SELECT * FROM segments ORDER BY song_id, sort_order").fetchall()
        for row in rows:
            song = by_id.get(row["song_id"])
            if song is not None:
                song.segments.append(_row_to_segment(row))
        return songs

    def get_song(self, song_id: int) -> Song | None:
        row = self.db.execute("SELECT * FROM songs WHERE id = ?", (song_id,)).fetchone()
        if row is None:
            return None
        song = _row_to_song(row)
        song.segments = [
            _row_to_segment(r)
            for r in self.db.execute(
                "SELECT * FROM segments WHERE song_id = ? ORDER BY sort_order", (song_id,)
            )
        ]
        return song

    def update_song(
        self, song_id: int, title: str, author: str = "", segments: Iterable[Segment] = ()
    ) -> Song | None:
        """곡 정보 수정 (구간은 통째로 교체)

        Returns:
            수정된 곡, 곡이 없으면 None
        """
        title = title.strip()
        if not title:
            raise ValueError("곡 제목이 비어 있습니다")

        with self.db:
            cursor = self.db.execute(
                "UPDATE songs SET title = ?, author = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (title, author or None, song_id),
            )
            if cursor.rowcount == 0:
                return None
            self.db.execute("DELETE FROM segments WHERE song_id = ?", (song_id,))
            self._insert_segments(song_id, segments)
        return self.get_song(song_id)

    def delete_song(self, song_id: int) -> bool:
        """곡 삭제

        구간과 해당 곡이 들어간 큐 항목도 함께 지워지며,
        영향을 받은 예배 순서는 같은 트랜잭션 안에서 1..N으로 다시 매긴다.
        """
        with self.db:
            queue_ids = [
                row["queue_id"]
                for row in self.db.execute(
                    "SELECT DISTINCT queue_id FROM queue_items WHERE song_id = ?", (song_id,)
                )
            ]
            cursor = self.db.execute("DELETE FROM songs WHERE id = ?", (song_id,))
            if cursor.rowcount == 0:
                return False
            for queue_id in queue_ids:
                self._repack_queue(queue_id)

        logger.info("곡 삭제: id=%s (예배 순서 %d개 재정렬)", song_id, len(queue_ids))
        return True

    def _repack_queue(self, queue_id: int) -> None:
        rows = self.db.execute(
            "SELECT id, sort_order FROM queue_items WHERE queue_id = ? ORDER BY sort_order",
            (queue_id,),
        ).fetchall()
        before = [OrderEntry(row["id"], row["sort_order"]) for row in rows]
        after = queue_ordering.normalize(before)
        write_orders(self.db, queue_id, queue_ordering.changed_orders(before, after))
