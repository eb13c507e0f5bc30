"""QueueService 테스트

실제 SQLite 저장소와, 중간 실패를 흉내 내는 가짜 저장소 두 가지로 확인한다.
"""

import sqlite3
from datetime import date

import pytest

from lyricdeck.domain.queue_ordering import ReorderError
from lyricdeck.domain.service_queue import QueueItem
from lyricdeck.services.queue_service import QueueService


class FakeStore:
    """메모리 저장소 (실패 방식 선택 가능)

    fail_mode:
        None: 정상
        "clean": 아무것도 쓰지 않고 실패 (트랜잭션 롤백과 동일)
        "partial": 첫 번째 변경만 쓰고 실패 (원자성 깨짐)
        "reread": 실패 후 재조회도 실패
    """

    def __init__(self, orders):
        self.items = {
            item_id: QueueItem(queue_id=1, song_id=item_id, order=order, id=item_id)
            for item_id, order in orders.items()
        }
        self.fail_mode = None
        self.apply_calls = 0
        self._reads_blocked = False

    def list_queue_items(self, queue_id):
        if self._reads_blocked:
            raise sqlite3.OperationalError("database is locked")
        return sorted(self.items.values(), key=lambda i: i.order)

    def insert_queue_item(self, queue_id, song_id, order):
        if self.fail_mode is not None:
            raise sqlite3.OperationalError("disk I/O error")
        item_id = max(self.items, default=0) + 1
        self.items[item_id] = QueueItem(queue_id, song_id, order, id=item_id)
        return self.items[item_id]

    def apply_orders(self, queue_id, changes, delete_item_id=None):
        self.apply_calls += 1
        changes = list(changes)
        if self.fail_mode == "clean":
            raise sqlite3.OperationalError("disk I/O error")
        if self.fail_mode == "reread":
            self._reads_blocked = True
            raise sqlite3.OperationalError("database is locked")
        if delete_item_id is not None:
            del self.items[delete_item_id]
        for i, entry in enumerate(changes):
            if self.fail_mode == "partial" and i == 1:
                raise sqlite3.OperationalError("disk I/O error")
            self.items[entry.item_id].order = entry.order

    def orders(self):
        return {item_id: item.order for item_id, item in self.items.items()}


@pytest.fixture
def store():
    return FakeStore({1: 1, 2: 2, 3: 3, 4: 4})


@pytest.fixture
def service(store):
    return QueueService(store)


class TestQueueServiceWithFakeStore:
    """가짜 저장소 테스트"""

    def test_move(self, service, store):
        result = service.move_item(1, 4, 1)

        assert result.ok
        assert store.orders() == {1: 2, 2: 3, 3: 4, 4: 1}

    def test_move_noop_skips_write(self, service, store):
        result = service.move_item(1, 2, 2)

        assert result.ok
        assert store.apply_calls == 0

    def test_invalid_target_skips_write(self, service, store):
        result = service.move_item(1, 2, 9)

        assert result.error is ReorderError.INVALID_TARGET
        assert store.apply_calls == 0

    def test_remove(self, service, store):
        result = service.remove_item(1, 2)

        assert result.ok
        assert store.orders() == {1: 1, 3: 2, 4: 3}

    def test_remove_unknown(self, service, store):
        assert service.remove_item(1, 99).error is ReorderError.NOT_FOUND

    def test_add_song_appends(self, service, store):
        result = service.add_song(1, song_id=77)

        assert result.ok
        new_id = max(store.items)
        assert store.items[new_id].order == 5
        assert result.orders()[new_id] == 5

    def test_clean_failure_reports_persistence_failed(self, service, store):
        store.fail_mode = "clean"

        result = service.move_item(1, 4, 1)

        assert result.error is ReorderError.PERSISTENCE_FAILED
        assert result.orders() == {1: 1, 2: 2, 3: 3, 4: 4}

    def test_partial_failure_reports_partial_reorder(self, service, store):
        store.fail_mode = "partial"

        result = service.move_item(1, 4, 1)

        assert result.error is ReorderError.PARTIAL_REORDER

    def test_reread_failure_reports_partial_reorder(self, service, store):
        store.fail_mode = "reread"

        result = service.move_item(1, 1, 3)

        assert result.error is ReorderError.PARTIAL_REORDER
        assert result.items == ()

    def test_insert_failure(self, service, store):
        store.fail_mode = "clean"

        result = service.add_song(1, song_id=77)

        assert result.error is ReorderError.PERSISTENCE_FAILED

    def test_repair_after_partial_failure(self, service, store):
        store.fail_mode = "partial"
        service.move_item(1, 4, 1)
        store.fail_mode = None

        result = service.repair(1)

        assert result.ok
        assert sorted(store.orders().values()) == [1, 2, 3, 4]

    def test_repair_on_dense_queue_is_noop(self, service, store):
        service.repair(1)

        assert store.apply_calls == 0


class TestQueueServiceWithSqlite:
    """실제 저장소 연동 테스트"""

    @pytest.fixture
    def queue_id(self, queue_repo):
        queue = queue_repo.create_queue("주일 예배", date(2026, 3, 1))
        return queue.id

    @pytest.fixture
    def sqlite_service(self, queue_repo):
        return QueueService(queue_repo)

    def titles(self, sqlite_service, queue_id):
        return [(i.order, i.song_title) for i in sqlite_service.list_items(queue_id)]

    def test_build_and_reorder(self, sqlite_service, song_repo, queue_id):
        for title in "ABCD":
            song = song_repo.create_song(title)
            assert sqlite_service.add_song(queue_id, song.id).ok
        items = sqlite_service.list_items(queue_id)

        assert sqlite_service.move_item(queue_id, items[3].id, 1).ok
        assert sqlite_service.remove_item(queue_id, items[1].id).ok

        assert self.titles(sqlite_service, queue_id) == [(1, "D"), (2, "A"), (3, "C")]

    def test_same_song_twice(self, sqlite_service, song_repo, queue_id):
        song = song_repo.create_song("반복")

        sqlite_service.add_song(queue_id, song.id)
        sqlite_service.add_song(queue_id, song.id)

        assert self.titles(sqlite_service, queue_id) == [(1, "반복"), (2, "반복")]

    def test_item_from_other_queue_not_found(self, sqlite_service, song_repo, queue_repo, queue_id):
        other = queue_repo.create_queue("다른 예배", date(2026, 3, 8))
        song = song_repo.create_song("곡")
        sqlite_service.add_song(other.id, song.id)
        other_item = sqlite_service.list_items(other.id)[0]

        result = sqlite_service.move_item(queue_id, other_item.id, 1)

        assert result.error is ReorderError.NOT_FOUND
