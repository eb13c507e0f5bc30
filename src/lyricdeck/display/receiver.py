"""송출창 수신기

송출창 쪽에서 들어오는 메시지를 검증하고 현재 표시 텍스트를 관리한다.
같은 CONTENT_UPDATE를 여러 번 받아도 결과 상태는 같다.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, Qt, Signal, SignalInstance

from lyricdeck.display.messages import DisplayMessage, MessageKind, decode, encode

logger = logging.getLogger(__name__)


class DisplayReceiver(QObject):
    """송출 메시지 수신기

    Signals:
        content_changed: 표시 텍스트가 바뀜 (첫 업데이트는 항상 발생, str)
    """

    content_changed = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._text = ""
        self._received = 0
        self._source: SignalInstance | None = None

    @property
    def text(self) -> str:
        """현재 표시 중인 텍스트"""
        return self._text

    @property
    def has_content(self) -> bool:
        """CONTENT_UPDATE를 한 번이라도 받았는지"""
        return self._received > 0

    @property
    def is_listening(self) -> bool:
        return self._source is not None

    def handle(self, data: Any) -> bool:
        """수신 데이터 처리 (프레임 문자열 또는 디코딩된 dict)

        Returns:
            표시 텍스트에 반영했으면 True, 무시했으면 False
        """
        if isinstance(data, (str, bytes, bytearray)):
            message = decode(data)
        else:
            message = DisplayMessage.from_dict(data)

        if message is None or message.kind is not MessageKind.CONTENT_UPDATE:
            logger.debug("송출 메시지 무시: %r", data)
            return False

        first = self._received == 0
        self._received += 1
        # 첫 업데이트는 빈 텍스트여도 안내 문구를 지워야 함
        if first or message.text != self._text:
            self._text = message.text
            self.content_changed.emit(self._text)
        return True

    # === 수신 등록 (송출창 수명 동안만 유지) ===

    def listen(
        self,
        source: SignalInstance,
        reply: Callable[[str], None] | None = None,
        connection: Qt.ConnectionType = Qt.ConnectionType.AutoConnection,
    ) -> None:
        """프레임 시그널에 수신기 하나를 등록하고 READY 응답

        이미 등록되어 있으면 기존 등록을 먼저 해제한다.
        """
        self.stop_listening()
        source.connect(self.handle, connection)
        self._source = source
        if reply is not None:
            reply(encode(DisplayMessage.ready()))

    def stop_listening(self) -> None:
        """수신 등록 해제 (중복 호출 가능)"""
        if self._source is None:
            return
        try:
            self._source.disconnect(self.handle)
        except (RuntimeError, TypeError) as e:
            logger.debug("수신 해제 중 무시된 오류: %s", e)
        self._source = None
