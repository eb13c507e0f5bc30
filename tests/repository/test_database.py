"""DB 초기화/마이그레이션 테스트"""

from lyricdeck.repository import database


class TestConnect:

    def test_memory_database_has_latest_schema(self, db):
        version = db.execute("PRAGMA user_version").fetchone()[0]

        assert version == database.CURRENT_DB_VERSION

    def test_foreign_keys_enabled(self, db):
        assert db.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_tables_created(self, db):
        names = {
            row["name"]
            for row in db.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }

        assert {"songs", "segments", "service_queues", "queue_items"} <= names

    def test_file_database_creates_parent_dir(self, tmp_path):
        path = tmp_path / "nested" / "lyricdeck.sqlite3"

        conn = database.connect(path)
        conn.close()

        assert path.exists()

    def test_reconnect_keeps_data(self, tmp_path):
        path = tmp_path / "lyricdeck.sqlite3"
        conn = database.connect(path)
        with conn:
            conn.execute("INSERT INTO songs (title) VALUES ('보존')")
        conn.close()

        conn = database.connect(path)
        titles = [row["title"] for row in conn.execute("SELECT title FROM songs")]
        conn.close()

        assert titles == ["보존"]

    def test_upgrade_from_version_1(self, tmp_path):
        """v1 DB(곡만 있음)에 예배 순서 테이블 추가"""
        path = tmp_path / "old.sqlite3"
        conn = database.connect(path)
        conn.executescript("""
            DROP TABLE queue_items;
            DROP TABLE service_queues;
            PRAGMA user_version=1;
        """)
        conn.close()

        conn = database.connect(path)
        version = conn.execute("PRAGMA user_version").fetchone()[0]
        conn.execute("SELECT * FROM queue_items").fetchall()
        conn.close()

        assert version == database.CURRENT_DB_VERSION
