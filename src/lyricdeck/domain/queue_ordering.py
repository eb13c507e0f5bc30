"""예배 순서 정렬 엔진

큐 항목들의 order 값을 항상 1..N (빈칸/중복 없음)으로 유지하기 위한
순수 함수 모음. 입력 리스트는 절대 수정하지 않고 새 상태를 돌려준다.
저장소 반영(트랜잭션)은 QueueService 담당.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from collections.abc import Hashable, Iterable, Sequence


@dataclass(frozen=True)
class OrderEntry:
    """정렬 대상 한 칸 (항목 ID + 순서)"""

    item_id: Hashable
    order: int


class ReorderError(str, Enum):
    """정렬 실패 사유"""

    NOT_FOUND = "not_found"
    INVALID_TARGET = "invalid_target"
    PARTIAL_REORDER = "partial_reorder"
    PERSISTENCE_FAILED = "persistence_failed"


@dataclass(frozen=True)
class ReorderResult:
    """정렬 연산 결과

    성공 시 error는 None이고 items에 새 상태가 order 오름차순으로 담긴다.
    실패 시 items는 연산 전 상태(또는 저장소에서 다시 읽은 상태) 그대로다.
    """

    items: tuple[OrderEntry, ...] = ()
    error: ReorderError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def orders(self) -> dict[Hashable, int]:
        """item_id -> order 매핑"""
        return {e.item_id: e.order for e in self.items}

    @classmethod
    def success(cls, items: Iterable[OrderEntry]) -> ReorderResult:
        return cls(items=tuple(sort_entries(items)))

    @classmethod
    def failure(cls, error: ReorderError, items: Iterable[OrderEntry] = ()) -> ReorderResult:
        return cls(items=tuple(sort_entries(items)), error=error)


def sort_entries(items: Iterable[OrderEntry]) -> list[OrderEntry]:
    """order 오름차순 정렬"""
    return sorted(items, key=lambda e: e.order)


def is_dense(items: Sequence[OrderEntry]) -> bool:
    """order 집합이 정확히 {1..N}이고 ID가 중복되지 않는지 확인"""
    if len({e.item_id for e in items}) != len(items):
        return False
    return sorted(e.order for e in items) == list(range(1, len(items) + 1))


def next_order(items: Sequence[OrderEntry]) -> int:
    """맨 뒤에 추가될 항목의 순서"""
    return len(items) + 1


def _find(items: Sequence[OrderEntry], item_id: Hashable) -> OrderEntry | None:
    for e in items:
        if e.item_id == item_id:
            return e
    return None


def append(items: Sequence[OrderEntry], new_item_id: Hashable) -> ReorderResult:
    """맨 뒤에 추가 (기존 순서는 그대로)"""
    entries = list(items)
    entries.append(OrderEntry(new_item_id, next_order(items)))
    return ReorderResult.success(entries)


def remove(items: Sequence[OrderEntry], item_id: Hashable) -> ReorderResult:
    """항목 제거 및 순서 재배치 (빈자리 채우기)"""
    target = _find(items, item_id)
    if target is None:
        return ReorderResult.failure(ReorderError.NOT_FOUND, items)

    entries = []
    for e in items:
        if e.item_id == item_id:
            continue
        if e.order > target.order:
            entries.append(OrderEntry(e.item_id, e.order - 1))
        else:
            entries.append(e)
    return ReorderResult.success(entries)


def move(items: Sequence[OrderEntry], item_id: Hashable, new_order: int) -> ReorderResult:
    """항목을 new_order 위치로 이동

    사이 구간을 한 칸씩 밀거나 당긴 뒤 빈자리에 항목을 넣는다.
    같은 위치로의 이동은 아무것도 바꾸지 않는다.
    """
    target = _find(items, item_id)
    if target is None:
        return ReorderResult.failure(ReorderError.NOT_FOUND, items)
    if isinstance(new_order, bool) or not isinstance(new_order, int):
        return ReorderResult.failure(ReorderError.INVALID_TARGET, items)
    if not 1 <= new_order <= len(items):
        return ReorderResult.failure(ReorderError.INVALID_TARGET, items)

    old_order = target.order
    if new_order == old_order:
        return ReorderResult.success(items)

    entries = []
    for e in items:
        if e.item_id == item_id:
            entries.append(OrderEntry(e.item_id, new_order))
        elif new_order > old_order and old_order < e.order <= new_order:
            # 뒤로 이동: 사이 구간을 앞으로 당김
            entries.append(OrderEntry(e.item_id, e.order - 1))
        elif new_order < old_order and new_order <= e.order < old_order:
            # 앞으로 이동: 사이 구간을 뒤로 밂
            entries.append(OrderEntry(e.item_id, e.order + 1))
        else:
            entries.append(e)
    return ReorderResult.success(entries)


def normalize(items: Iterable[OrderEntry]) -> list[OrderEntry]:
    """상대 순서를 유지한 채 1..N으로 다시 매김 (깨진 상태 복구용)"""
    ordered = sorted(enumerate(items), key=lambda pair: (pair[1].order, pair[0]))
    return [OrderEntry(e.item_id, i) for i, (_, e) in enumerate(ordered, start=1)]


def changed_orders(
    before: Iterable[OrderEntry], after: Iterable[OrderEntry]
) -> list[OrderEntry]:
    """before -> after 전환에 필요한 최소 쓰기 목록

    after에만 있거나 order가 달라진 항목만 돌려준다 (제거된 항목은 제외).
    """
    old = {e.item_id: e.order for e in before}
    return [e for e in sort_entries(after) if old.get(e.item_id) != e.order]
