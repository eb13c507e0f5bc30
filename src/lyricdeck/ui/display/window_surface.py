"""Qt 창 기반 송출 전송 계층

DisplayWindow를 띄우고, 큐 연결(QueuedConnection) 시그널로 프레임을 전달한다.
같은 채널의 프레임은 보낸 순서대로 도착한다.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtGui import QGuiApplication

from lyricdeck.display.transport import FrameListener, SurfaceHandle, SurfaceLauncher, TransportError
from lyricdeck.ui.display.display_window import DisplayWindow

logger = logging.getLogger(__name__)


class _FrameBridge(QObject):
    """제어창 -> 송출창 프레임 시그널"""

    frame = Signal(str)


class WindowSurfaceHandle(SurfaceHandle):
    """DisplayWindow 하나에 대한 핸들"""

    def __init__(self, window: DisplayWindow, send_ready: bool = True) -> None:
        self._window = window
        self._bridge = _FrameBridge()
        window.attach(self._bridge.frame, send_ready=send_ready)

    @property
    def window(self) -> DisplayWindow:
        return self._window

    def is_closed(self) -> bool:
        # 삭제된 C++ 객체면 RuntimeError가 올라감
        return self._window.is_closed or not self._window.isVisible()

    def post_message(self, frame: str) -> None:
        if self._window.is_closed:
            raise TransportError("송출창이 이미 닫혔습니다")
        self._bridge.frame.emit(frame)

    def close(self) -> None:
        self._window.close()

    def focus(self) -> None:
        self._window.raise_()
        self._window.activateWindow()

    def connect_inbound(self, listener: FrameListener) -> None:
        self._window.outbound.connect(listener, Qt.ConnectionType.QueuedConnection)


class WindowSurfaceLauncher(SurfaceLauncher):
    """DisplayWindow 생성기

    화면(모니터)이 하나도 없으면 창 생성을 거부한다.
    """

    def __init__(
        self,
        background_mode: str = DisplayWindow.BG_BLACK,
        font_size: int = DisplayWindow.BASE_FONT_SIZE,
        send_ready: bool = True,
    ) -> None:
        self._background_mode = background_mode
        self._font_size = font_size
        self._send_ready = send_ready

    def launch(self, route: str, size: tuple[int, int]) -> WindowSurfaceHandle | None:
        if not QGuiApplication.screens():
            logger.warning("사용 가능한 화면이 없어 송출창(%s)을 열 수 없습니다", route)
            return None

        window = DisplayWindow()
        window.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, True)
        window.set_background_mode(self._background_mode)
        window.set_font_size(self._font_size)
        handle = WindowSurfaceHandle(window, send_ready=self._send_ready)
        window.show_on_screen(size)
        return handle
