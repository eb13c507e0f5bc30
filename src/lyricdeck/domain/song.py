"""곡(Song) / 구간(Segment) 도메인 모델

곡은 여러 개의 가사 구간(절, 후렴, 브릿지 ...)을 순서대로 가진다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

# 구간 종류 (표시 순서대로)
SEGMENT_TYPES: tuple[str, ...] = (
    "verse",
    "chorus",
    "bridge",
    "pre-chorus",
    "ending",
)

DEFAULT_SEGMENT_TYPE = "verse"


@dataclass
class Segment:
    """곡 안의 가사 한 덩어리

    Attributes:
        content: 송출될 가사 텍스트
        type: 구간 종류 (SEGMENT_TYPES 중 하나)
        order: 곡 내 순서 (1부터 시작)
        song_id: 소속 곡 ID
        id: DB 식별자 (저장 전에는 None)
    """

    content: str
    type: str = DEFAULT_SEGMENT_TYPE
    order: int = 0
    song_id: Optional[int] = None
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.type not in SEGMENT_TYPES:
            raise ValueError(f"알 수 없는 구간 종류: {self.type}")

    @property
    def label(self) -> str:
        """버튼 표시용 이름 (예: "chorus 2")"""
        return f"{self.type} {self.order}"


@dataclass
class Song:
    """곡 정보를 담는 도메인 모델

    Attributes:
        title: 곡 제목 (필수)
        author: 작사/작곡자
        segments: 가사 구간 목록 (order 오름차순)
        id: DB 식별자 (저장 전에는 None)
    """

    title: str
    author: str = ""
    segments: list[Segment] = field(default_factory=list)
    id: Optional[int] = None
    created_at: str = ""
    updated_at: str = ""

    def get_ordered_segments(self) -> list[Segment]:
        """순서대로 정렬된 구간 목록 반환"""
        return sorted(self.segments, key=lambda s: s.order)

    def get_next_segment(self, current_id: int) -> Segment | None:
        """다음 구간 반환 (마지막이면 None)"""
        ordered = self.get_ordered_segments()
        for i, s in enumerate(ordered):
            if s.id == current_id and i + 1 < len(ordered):
                return ordered[i + 1]
        return None

    def get_previous_segment(self, current_id: int) -> Segment | None:
        """이전 구간 반환 (처음이면 None)"""
        ordered = self.get_ordered_segments()
        for i, s in enumerate(ordered):
            if s.id == current_id and i > 0:
                return ordered[i - 1]
        return None
