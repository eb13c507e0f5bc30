"""토스트 알림 오버레이

제어창 오른쪽 위에 잠깐 떴다 사라지는 알림을 쌓아서 보여준다.
"""

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import Qt, QTimer, QPoint
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QToolButton, QWidget


@dataclass(frozen=True)
class ToastData:
    """토스트 한 개의 내용"""

    message: str
    notify_type: str = "info"  # "info" | "success" | "warning" | "error"
    timeout_ms: int = 3000


def _colors(kind: str) -> tuple[str, str, str]:
    """알림 종류별 (배경, 테두리, 글자) 색"""
    kind = (kind or "info").lower()
    if kind == "success":
        return "#052e1a", "#16a34a", "#e5e7eb"
    if kind == "warning":
        return "#2a1a05", "#f59e0b", "#e5e7eb"
    if kind == "error":
        return "#2a0a0a", "#ef4444", "#e5e7eb"
    return "#0b1222", "#2196f3", "#e5e7eb"


class ToastWidget(QFrame):
    """알림 한 개 (문구 + 닫기 버튼)"""

    def __init__(self, data: ToastData, manager: ToastManager):
        super().__init__(manager)
        self.data = data
        self._manager = manager

        bg, border, text = _colors(data.notify_type)
        self.setObjectName("Toast")
        self.setStyleSheet(f"""
        QFrame#Toast {{
            background: {bg};
            border: 1px solid {border};
            border-radius: 10px;
        }}
        QLabel {{
            color: {text};
            font-size: 12px;
        }}
        QToolButton {{
            border: none;
            background: transparent;
            color: {text};
        }}
        """)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        root = QHBoxLayout(self)
        root.setContentsMargins(12, 10, 10, 10)
        root.setSpacing(10)

        self.lbl = QLabel(data.message)
        self.lbl.setWordWrap(True)

        self.btn_close = QToolButton()
        self.btn_close.setText("✕")
        self.btn_close.clicked.connect(lambda: self._manager.dismiss(self))

        root.addWidget(self.lbl, 1)
        root.addWidget(self.btn_close, 0, Qt.AlignmentFlag.AlignTop)


class ToastManager(QWidget):
    """호스트 창 오른쪽 위에 토스트를 쌓아 보여주는 오버레이"""

    def __init__(self, host: QWidget):
        super().__init__(host)
        self.host = host
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)

        self._toasts: list[ToastWidget] = []
        self._margin = 14
        self._spacing = 10
        self._max_visible = 4
        self.hide()

    @property
    def messages(self) -> list[str]:
        """현재 떠 있는 토스트 문구 (최신 순)"""
        return [t.data.message for t in self._toasts]

    def show_toast(self, message: str, notify_type: str = "info", timeout_ms: int = 3000):
        """토스트 표시 (timeout_ms 뒤 자동으로 사라짐)"""
        toast = ToastWidget(ToastData(message, notify_type, timeout_ms), manager=self)
        toast.setFixedWidth(min(420, max(260, self.host.width() // 2)))

        # 최신 알림이 맨 위
        self._toasts.insert(0, toast)
        while len(self._toasts) > self._max_visible:
            old = self._toasts.pop()
            old.hide()
            old.deleteLater()

        self._layout_toasts()

        # 토스트와 함께 삭제되는 타이머
        timer = QTimer(toast)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self.dismiss(toast))
        timer.start(max(500, int(timeout_ms)))

    def dismiss(self, toast: ToastWidget):
        """토스트 닫기 (이미 닫혔으면 무시)"""
        if toast not in self._toasts:
            return
        self._toasts.remove(toast)
        toast.hide()
        toast.deleteLater()
        self._layout_toasts()

    def _layout_toasts(self):
        # 오버레이는 토스트 영역만 덮음 (아래 위젯 클릭을 막지 않도록)
        column = max((t.width() for t in self._toasts), default=0)
        y = self._margin
        for t in self._toasts:
            t.adjustSize()
            h = t.sizeHint().height()
            t.setFixedHeight(h)
            t.move(QPoint(self._margin, y))
            t.show()
            y += h + self._spacing

        width = column + self._margin * 2
        self.setGeometry(self.host.width() - width, 0, width, y)
        self.setVisible(bool(self._toasts))
        self.raise_()
