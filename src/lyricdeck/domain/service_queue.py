"""예배 순서(ServiceQueue) 도메인 모델

하나의 예배(행사)에서 부를 곡들의 순서 목록.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass
class QueueItem:
    """예배 순서 안의 곡 하나

    Attributes:
        queue_id: 소속 예배 순서 ID
        song_id: 참조하는 곡 ID
        order: 순서 (1부터 시작, 큐 안에서 빈칸/중복 없음)
        song_title: 목록 표시용 곡 제목 (조회 시 채워짐)
        id: DB 식별자
    """

    queue_id: int
    song_id: int
    order: int
    song_title: str = ""
    id: Optional[int] = None


@dataclass
class ServiceQueue:
    """예배 순서

    Attributes:
        name: 예배 이름 (예: "주일 2부 예배")
        service_date: 예배 날짜
        items: 곡 목록 (order 오름차순)
        id: DB 식별자
    """

    name: str
    service_date: date = field(default_factory=date.today)
    items: list[QueueItem] = field(default_factory=list)
    id: Optional[int] = None
    created_at: str = ""

    @property
    def display_name(self) -> str:
        """콤보박스 표시용 이름"""
        return f"{self.name} ({self.service_date.isoformat()})"
