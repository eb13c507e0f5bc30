"""송출 메시지 (Wire format)

제어창 <-> 송출창 사이를 오가는 메시지 정의와 JSON 인코딩/디코딩.

    {"kind": "READY"}                          송출창 -> 제어창 (선택)
    {"kind": "CONTENT_UPDATE", "text": "..."}  제어창 -> 송출창

형식이 맞지 않는 메시지는 예외 없이 None으로 디코딩된다.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class MessageKind(str, Enum):
    READY = "READY"
    CONTENT_UPDATE = "CONTENT_UPDATE"


@dataclass(frozen=True)
class DisplayMessage:
    """송출 메시지 (불변)

    Attributes:
        kind: 메시지 종류
        text: CONTENT_UPDATE의 표시 텍스트 (READY는 None)
    """

    kind: MessageKind
    text: str | None = None

    @classmethod
    def ready(cls) -> DisplayMessage:
        return cls(MessageKind.READY)

    @classmethod
    def content_update(cls, text: str) -> DisplayMessage:
        if not isinstance(text, str):
            raise TypeError(f"송출 텍스트는 str이어야 합니다: {type(text).__name__}")
        return cls(MessageKind.CONTENT_UPDATE, text)

    def to_dict(self) -> dict[str, Any]:
        if self.kind is MessageKind.CONTENT_UPDATE:
            return {"kind": self.kind.value, "text": self.text}
        return {"kind": self.kind.value}

    @classmethod
    def from_dict(cls, data: Any) -> DisplayMessage | None:
        """구조 검증 후 메시지 생성 (알 수 없는 형식이면 None)"""
        if not isinstance(data, dict):
            return None

        kind = data.get("kind")
        if kind == MessageKind.READY.value:
            return cls.ready()
        if kind == MessageKind.CONTENT_UPDATE.value:
            text = data.get("text")
            if not isinstance(text, str):
                return None
            return cls(MessageKind.CONTENT_UPDATE, text)
        return None


def encode(message: DisplayMessage) -> str:
    """메시지를 JSON 프레임으로 변환"""
    return json.dumps(message.to_dict(), ensure_ascii=False)


def decode(frame: str | bytes | bytearray) -> DisplayMessage | None:
    """JSON 프레임을 메시지로 변환 (깨진 프레임은 None)"""
    try:
        if isinstance(frame, (bytes, bytearray)):
            frame = frame.decode("utf-8")
        data = json.loads(frame)
    except (UnicodeDecodeError, ValueError, TypeError):
        return None
    return DisplayMessage.from_dict(data)
