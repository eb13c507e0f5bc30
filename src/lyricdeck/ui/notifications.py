"""실패 사유 -> 사용자 안내 문구"""

from __future__ import annotations

from lyricdeck.display.display_channel import DisplayError
from lyricdeck.domain.queue_ordering import ReorderError

_DISPLAY_MESSAGES: dict[DisplayError, str] = {
    DisplayError.POPUP_BLOCKED: "송출창을 열 수 없습니다. 창 열기가 허용되어 있는지 확인하세요.",
    DisplayError.NOT_OPEN: "송출창이 열려 있지 않습니다. 먼저 송출을 시작하세요.",
    DisplayError.TRANSPORT_FAILURE: "송출창으로 내용을 보내지 못했습니다. 다시 시도하세요.",
}

_REORDER_MESSAGES: dict[ReorderError, str] = {
    ReorderError.NOT_FOUND: "예배 순서를 변경하지 못했습니다.",
    ReorderError.INVALID_TARGET: "예배 순서를 변경하지 못했습니다.",
    ReorderError.PERSISTENCE_FAILED: "예배 순서를 저장하지 못했습니다. 다시 시도하세요.",
    ReorderError.PARTIAL_REORDER: "예배 순서 저장 중 오류가 발생해 목록을 다시 불러왔습니다.",
}


def describe(error: DisplayError | ReorderError) -> str:
    """토스트에 표시할 문구"""
    if isinstance(error, DisplayError):
        return _DISPLAY_MESSAGES[error]
    return _REORDER_MESSAGES[error]


def severity(error: DisplayError | ReorderError) -> str:
    """토스트 종류 ("warning" | "error")"""
    if error in (DisplayError.NOT_OPEN, ReorderError.NOT_FOUND, ReorderError.INVALID_TARGET):
        return "warning"
    return "error"
