"""송출 채널 (Display Channel)

제어창에서 송출창(청중용 화면)으로 가사를 보내는 1:1 채널.
송출창은 언제든 사용자가 직접 닫을 수 있으므로 모든 전송 전에
생존 여부를 다시 확인하고, 실패는 예외 대신 결과값으로 돌려준다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from PySide6.QtCore import QObject, QTimer, Signal

from lyricdeck.display.messages import DisplayMessage, MessageKind, decode, encode
from lyricdeck.display.transport import SurfaceHandle, SurfaceLauncher, TransportError

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 1000
DEFAULT_SURFACE_SIZE = (800, 600)


class DisplayError(str, Enum):
    """송출 실패 사유"""

    POPUP_BLOCKED = "popup_blocked"
    NOT_OPEN = "not_open"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class DisplayResult:
    """송출 연산 결과 (open()이면 value에 핸들)"""

    value: Any = None
    error: DisplayError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: DisplayError) -> DisplayResult:
        return cls(error=error)


class DisplaySession(QObject):
    """송출창 세션

    송출창은 하나뿐이므로 제어창 인스턴스당 세션도 하나다.
    전역 변수 대신 이 객체를 필요한 곳에 직접 넘겨준다.

    Attributes:
        handle: 현재 송출창 핸들 (없으면 None)
        live: 마지막으로 확인한 생존 여부
        poll_timer: 생존 여부 주기 확인용 타이머
    """

    def __init__(
        self,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.handle: SurfaceHandle | None = None
        self.live = False
        self.poll_timer = QTimer(self)
        self.poll_timer.setInterval(max(1, int(poll_interval_ms)))

    def attach(self, handle: SurfaceHandle) -> None:
        self.handle = handle
        self.poll_timer.start()

    def detach(self) -> None:
        self.handle = None
        self.poll_timer.stop()


class DisplayChannel(QObject):
    """송출 채널

    Signals:
        open_changed: 송출창 생존 여부가 바뀜 (bool)
        ready_received: 송출창이 READY를 보내옴
        content_sent: 텍스트 전송 성공 (str)
    """

    open_changed = Signal(bool)
    ready_received = Signal()
    content_sent = Signal(str)

    DISPLAY_ROUTE = "display"

    def __init__(
        self,
        launcher: SurfaceLauncher,
        session: DisplaySession | None = None,
        size: tuple[int, int] = DEFAULT_SURFACE_SIZE,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._launcher = launcher
        self._session = session if session is not None else DisplaySession(parent=self)
        self._size = size
        self._last_content: str | None = None
        self._session.poll_timer.timeout.connect(self.is_open)

    @property
    def session(self) -> DisplaySession:
        return self._session

    @property
    def last_content(self) -> str | None:
        """마지막으로 전송에 성공한 텍스트"""
        return self._last_content

    # === 수명 관리 ===

    def open(self) -> DisplayResult:
        """송출창 열기 (이미 열려 있으면 같은 창을 앞으로 가져옴)"""
        if self.is_open():
            handle = self._session.handle
            try:
                handle.focus()
            except RuntimeError as e:
                logger.debug("송출창 포커스 실패: %s", e)
            return DisplayResult(value=handle)

        handle = self._launcher.launch(self.DISPLAY_ROUTE, self._size)
        if handle is None:
            logger.warning("송출창 생성이 거부되었습니다")
            return DisplayResult.failure(DisplayError.POPUP_BLOCKED)

        handle.connect_inbound(self._on_inbound_frame)
        self._session.attach(handle)
        self._set_live(True)
        logger.info("송출창 열림")
        return DisplayResult(value=handle)

    def close(self) -> None:
        """송출창 닫기 (몇 번을 호출해도 결과는 같음)"""
        handle = self._session.handle
        if handle is not None and self._probe(handle):
            try:
                handle.close()
            except RuntimeError as e:
                logger.warning("송출창 닫기 실패: %s", e)
        self._session.detach()
        self._set_live(False)

    def is_open(self) -> bool:
        """송출창 생존 여부를 다시 확인"""
        handle = self._session.handle
        live = handle is not None and self._probe(handle)
        if not live and handle is not None:
            # 상대가 스스로 닫힌 경우: 오래된 핸들 정리
            logger.info("송출창이 닫힌 것을 감지했습니다")
            self._session.detach()
        self._set_live(live)
        return live

    # === 전송 ===

    def send(self, content: str) -> DisplayResult:
        """텍스트를 송출창에 표시"""
        message = DisplayMessage.content_update(content)
        if not self.is_open():
            return DisplayResult.failure(DisplayError.NOT_OPEN)

        try:
            self._session.handle.post_message(encode(message))
        except (TransportError, RuntimeError, OSError) as e:
            logger.warning("송출 실패: %s", e)
            return DisplayResult.failure(DisplayError.TRANSPORT_FAILURE)

        self._last_content = content
        self.content_sent.emit(content)
        return DisplayResult()

    def clear(self) -> DisplayResult:
        """송출 화면 비우기"""
        return self.send("")

    def resend_last(self) -> DisplayResult:
        """마지막 텍스트 다시 전송 (송출창을 새로 연 직후 동기화용)"""
        if self._last_content is None:
            return DisplayResult()
        return self.send(self._last_content)

    # === 내부 ===

    def _probe(self, handle: SurfaceHandle) -> bool:
        try:
            return not handle.is_closed()
        except (RuntimeError, OSError) as e:
            # 이미 삭제된 창 객체 등: 닫힌 것으로 취급
            logger.debug("송출창 상태 확인 실패: %s", e)
            return False

    def _set_live(self, live: bool) -> None:
        if self._session.live != live:
            self._session.live = live
            self.open_changed.emit(live)

    def _on_inbound_frame(self, frame: str) -> None:
        message = decode(frame)
        if message is None:
            logger.debug("알 수 없는 수신 프레임 무시: %r", frame)
            return
        if message.kind is MessageKind.READY:
            logger.info("송출창 준비 완료 (READY)")
            self.ready_received.emit()
