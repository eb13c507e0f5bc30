"""송출창 (Display Window)

두 번째 모니터에 전체화면으로 표시되는 가사 전용 창.
제어창과는 메시지 프레임으로만 통신한다.
"""

from __future__ import annotations

from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QApplication
from PySide6.QtGui import QFont
from PySide6.QtCore import Qt, QTimer, Signal, SignalInstance

from lyricdeck.display.receiver import DisplayReceiver


class DisplayWindow(QWidget):
    """송출창

    두 번째 모니터에서 전체화면으로 가사를 표시합니다.
    OBS에서 윈도우 캡처 또는 크로마키로 사용할 수 있습니다.

    Signals:
        closed: 창이 닫혔을 때
        outbound: 제어창으로 보내는 프레임 (READY 등)
    """

    closed = Signal()
    outbound = Signal(str)

    # 배경색 옵션
    BG_BLACK = "black"
    BG_CHROMA_GREEN = "chroma"

    # 첫 가사를 받기 전 안내 문구
    IDLE_CAPTION = "송출 대기 중"
    BASE_FONT_SIZE = 72

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._background_mode = self.BG_BLACK
        self._font_size = self.BASE_FONT_SIZE
        self._is_closed = False

        self._receiver = DisplayReceiver(self)
        self._receiver.content_changed.connect(self._on_content_changed)

        self._setup_ui()
        self._apply_style()

    def _setup_ui(self) -> None:
        """UI 초기화"""
        self.setWindowTitle("LyricDeck - 송출")
        self.setWindowFlags(
            Qt.WindowType.Window |
            Qt.WindowType.FramelessWindowHint
        )

        self._main_layout = QVBoxLayout(self)
        self._main_layout.setContentsMargins(40, 40, 40, 40)

        self._lyric_label = QLabel(self.IDLE_CAPTION)
        self._lyric_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._lyric_label.setWordWrap(True)
        self._main_layout.addWidget(self._lyric_label)

        self.set_font_size(self._font_size)

    def _apply_style(self) -> None:
        """스타일 적용"""
        if self._background_mode == self.BG_CHROMA_GREEN:
            bg_color = "#00FF00"
        else:
            bg_color = "#000000"

        self.setStyleSheet(f"""
            QWidget {{
                background-color: {bg_color};
            }}
            QLabel {{
                color: white;
                background-color: transparent;
            }}
        """)

    # === 수신 ===

    @property
    def receiver(self) -> DisplayReceiver:
        return self._receiver

    @property
    def displayed_text(self) -> str:
        """화면에 실제로 표시 중인 텍스트"""
        return self._lyric_label.text()

    @property
    def is_closed(self) -> bool:
        return self._is_closed

    def attach(self, inbound: SignalInstance, send_ready: bool = True) -> None:
        """제어창 프레임 시그널에 연결 (창이 닫힐 때 해제됨)"""
        reply = self._queue_outbound if send_ready else None
        self._receiver.listen(inbound, reply, Qt.ConnectionType.QueuedConnection)

    def _queue_outbound(self, frame: str) -> None:
        # 제어창이 응답 수신기를 등록한 뒤에 보내도록 이벤트 루프로 미룸
        QTimer.singleShot(0, lambda: self._emit_outbound(frame))

    def _emit_outbound(self, frame: str) -> None:
        if not self._is_closed:
            self.outbound.emit(frame)

    def _on_content_changed(self, text: str) -> None:
        self._lyric_label.setText(text)

    # === 표시 옵션 ===

    def set_background_mode(self, mode: str) -> None:
        """배경색 모드 설정"""
        self._background_mode = mode
        self._apply_style()

    def set_font_size(self, size: int) -> None:
        """폰트 크기 설정 (1080px 높이 기준)"""
        self._font_size = size
        self._apply_scaled_font(size)

    def _apply_scaled_font(self, base_size: int) -> None:
        """화면 높이에 비례하는 폰트 적용"""
        screen_height = self.height() or 1080
        scaled_size = max(1, int(base_size * (screen_height / 1080)))

        font = QFont("Pretendard", scaled_size)
        if not font.exactMatch():
            font = QFont("Malgun Gothic", scaled_size)

        font.setBold(True)
        self._lyric_label.setFont(font)

    def resizeEvent(self, event) -> None:
        """창 크기가 바뀔 때 폰트 재계산 (모니터 크기 대응)"""
        super().resizeEvent(event)
        self._apply_scaled_font(self._font_size)

    def show_on_screen(self, size: tuple[int, int]) -> None:
        """두 번째 모니터가 있으면 전체화면, 없으면 창 모드로 표시"""
        screens = QApplication.screens()

        if len(screens) > 1:
            geometry = screens[1].geometry()
            self.setGeometry(geometry)
            self.showFullScreen()
        else:
            # 싱글 모니터: 일반 윈도우처럼 관리 가능하도록
            self.setWindowFlags(Qt.WindowType.Window)
            self.resize(*size)
            self.show()
            if screens:
                geo = screens[0].availableGeometry()
                self.move(geo.width() - self.width() - 20,
                          geo.height() - self.height() - 20)

    def keyPressEvent(self, event) -> None:
        """키보드 이벤트 - ESC로 종료"""
        if event.key() == Qt.Key.Key_Escape:
            self.close()
        super().keyPressEvent(event)

    def closeEvent(self, event) -> None:
        """창 닫기 - 수신 등록 해제"""
        self._is_closed = True
        self._receiver.stop_listening()
        self.closed.emit()
        super().closeEvent(event)
