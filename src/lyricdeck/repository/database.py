"""SQLite 데이터베이스 초기화 및 스키마 마이그레이션

스키마 버전은 PRAGMA user_version으로 관리한다.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

CURRENT_DB_VERSION = 2
MEMORY_DATABASE = ":memory:"


class PersistError(sqlite3.DatabaseError):
    """저장소가 요청을 반영하지 못함 (대상 행 없음 등)"""


def connect(db_path: Path | str) -> sqlite3.Connection:
    """DB 연결 생성 및 최신 스키마로 업그레이드"""
    if str(db_path) != MEMORY_DATABASE:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("데이터베이스 경로: %s", db_path)

    db = sqlite3.connect(str(db_path))
    db.row_factory = sqlite3.Row
    db.execute("PRAGMA foreign_keys=ON")

    existing_version = db.execute("PRAGMA user_version").fetchone()[0]
    upgrade_database_if_needed(db, existing_version)
    return db


def upgrade_database_if_needed(db: sqlite3.Connection, existing_version: int) -> None:
    if existing_version >= CURRENT_DB_VERSION:
        return

    logger.info("데이터베이스 버전 %d -> %d", existing_version, CURRENT_DB_VERSION)

    if existing_version <= 0:
        logger.debug("Migrate database version 1...")
        db.executescript("""
            CREATE TABLE songs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                author TEXT,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );
            CREATE TABLE segments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                song_id INTEGER NOT NULL REFERENCES songs(id) ON DELETE CASCADE,
                content TEXT NOT NULL,
                sort_order INTEGER NOT NULL,
                type TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );
            CREATE INDEX idx_segments_song ON segments(song_id, sort_order);
            PRAGMA user_version=1;
        """)

    if existing_version <= 1:
        logger.debug("Migrate database version 2...")
        db.executescript("""
            CREATE TABLE service_queues (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                service_date TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );
            CREATE TABLE queue_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                queue_id INTEGER NOT NULL REFERENCES service_queues(id) ON DELETE CASCADE,
                song_id INTEGER NOT NULL REFERENCES songs(id) ON DELETE CASCADE,
                sort_order INTEGER NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (queue_id, sort_order)
            );
            CREATE INDEX idx_queue_items_song ON queue_items(song_id);
            PRAGMA user_version=2;
        """)
