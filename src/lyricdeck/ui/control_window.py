"""LyricDeck 제어창

곡 목록 / 새 곡 / 예배 순서 탭과 Preview-Live 패널을 가진 운영자용 메인 윈도우.
송출창과는 DisplayChannel을 통해서만 통신한다.
"""

import logging
import sqlite3

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QSplitter, QLabel,
    QPushButton, QToolBar, QStatusBar, QMessageBox, QTabWidget,
    QLineEdit, QTextEdit, QPlainTextEdit
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt

from lyricdeck.display.display_channel import DisplayChannel, DisplayError, DisplaySession
from lyricdeck.display.transport import SurfaceLauncher
from lyricdeck.domain.queue_ordering import ReorderError
from lyricdeck.domain.song import Segment, Song
from lyricdeck.repository.queue_repository import QueueRepository
from lyricdeck.repository.song_repository import SongRepository
from lyricdeck.services.config_service import ConfigService
from lyricdeck.services.queue_service import QueueService
from lyricdeck.ui import notifications, styles
from lyricdeck.ui.display.window_surface import WindowSurfaceLauncher
from lyricdeck.ui.library.song_form import SongForm
from lyricdeck.ui.library.song_list_widget import SongListWidget
from lyricdeck.ui.live.live_controller import LiveController
from lyricdeck.ui.queue.queue_panel import QueuePanel
from lyricdeck.ui.toast import ToastManager

logger = logging.getLogger(__name__)


class ControlWindow(QMainWindow):
    """LyricDeck 제어창"""

    TAB_SONGS = 0
    TAB_FORM = 1
    TAB_QUEUE = 2

    def __init__(
        self,
        config: ConfigService,
        db: sqlite3.Connection,
        launcher: SurfaceLauncher | None = None,
    ) -> None:
        super().__init__()

        self._config = config
        self._song_repo = SongRepository(db)
        self._queue_repo = QueueRepository(db)
        self._queue_service = QueueService(self._queue_repo)

        # 송출 관련 (세션은 제어창 하나당 하나)
        if launcher is None:
            launcher = WindowSurfaceLauncher(
                background_mode=config.display_background,
                font_size=config.display_font_size,
                send_ready=config.send_ready_handshake,
            )
        self._session = DisplaySession(config.liveness_poll_ms, parent=self)
        self._channel = DisplayChannel(
            launcher, session=self._session, size=config.display_size, parent=self
        )
        self._live_controller = LiveController(self._channel, self)

        self._setup_ui()
        self._setup_toolbar()
        self._setup_statusbar()
        self._connect_signals()

        self._toasts = ToastManager(self)
        self.reload_songs()
        self._queue_panel.reload_queues(select_id=config.get_recent_queue_id())

    def _setup_ui(self) -> None:
        """UI 초기화"""
        self.setWindowTitle("LyricDeck - 찬양 가사 송출")
        self.setMinimumSize(900, 600)
        self.setStyleSheet(styles.GLOBAL_STYLESHEET)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        # 왼쪽: 탭 (곡 목록 / 새 곡 / 예배 순서)
        self._tabs = QTabWidget()
        self._song_list = SongListWidget()
        self._song_form = SongForm()
        self._queue_panel = QueuePanel(self._queue_repo, self._queue_service)
        self._tabs.addTab(self._song_list, "곡 목록")
        self._tabs.addTab(self._song_form, "새 곡")
        self._tabs.addTab(self._queue_panel, "예배 순서")
        splitter.addWidget(self._tabs)

        # 오른쪽: Preview / Live 패널
        live_panel = QWidget()
        live_panel.setMinimumWidth(280)
        live_layout = QVBoxLayout(live_panel)

        live_layout.addWidget(QLabel("PREVIEW"))
        self._preview_label = QLabel()
        self._preview_label.setWordWrap(True)
        self._preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview_label.setMinimumHeight(120)
        self._preview_label.setStyleSheet(styles.PREVIEW_FRAME)
        live_layout.addWidget(self._preview_label)

        nav = QHBoxLayout()
        btn_prev = QPushButton("◀ 이전")
        btn_prev.clicked.connect(self._live_controller.previous_segment)
        btn_send = QPushButton("송출 ▶")
        btn_send.clicked.connect(self._send_preview)
        btn_next = QPushButton("다음 ▶")
        btn_next.clicked.connect(self._live_controller.next_segment)
        nav.addWidget(btn_prev)
        nav.addWidget(btn_send)
        nav.addWidget(btn_next)
        live_layout.addLayout(nav)

        live_layout.addWidget(QLabel("LIVE"))
        self._live_label = QLabel()
        self._live_label.setWordWrap(True)
        self._live_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._live_label.setMinimumHeight(120)
        self._live_label.setStyleSheet(styles.LIVE_FRAME)
        live_layout.addWidget(self._live_label)
        live_layout.addStretch()

        splitter.addWidget(live_panel)
        splitter.setStretchFactor(0, 1)

    def _setup_toolbar(self) -> None:
        """툴바 설정"""
        toolbar = QToolBar("메인 툴바")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self._display_action = QAction("📺 송출 시작", self)
        self._display_action.setShortcut("F11")
        self._display_action.setCheckable(True)
        self._display_action.triggered.connect(self._toggle_display)
        toolbar.addAction(self._display_action)

        clear_action = QAction("⬛ 화면 지우기", self)
        clear_action.triggered.connect(self._clear_display)
        toolbar.addAction(clear_action)

        toolbar.addSeparator()
        self._indicator = QLabel()
        toolbar.addWidget(self._indicator)
        self._update_indicator(False)

    def _setup_statusbar(self) -> None:
        """상태바 설정"""
        self._statusbar = QStatusBar()
        self.setStatusBar(self._statusbar)
        self._statusbar.showMessage("준비됨")

    def _connect_signals(self) -> None:
        """시그널 연결"""
        self._song_list.segment_activated.connect(self._on_segment_activated)
        self._song_list.song_selected.connect(self._live_controller.set_song)
        self._song_list.edit_requested.connect(self._on_edit_requested)
        self._song_list.delete_requested.connect(self._on_delete_requested)
        self._song_list.add_to_queue_requested.connect(self._on_add_to_queue)

        self._song_form.save_requested.connect(self._on_save_song)
        self._song_form.cancel_requested.connect(lambda: self._tabs.setCurrentIndex(self.TAB_SONGS))

        self._queue_panel.song_activated.connect(self._on_queue_song_activated)
        self._queue_panel.reorder_failed.connect(self._notify)
        self._queue_panel.queue_changed.connect(self._config.set_recent_queue_id)

        self._live_controller.preview_changed.connect(self._preview_label.setText)
        self._live_controller.live_changed.connect(self._live_label.setText)
        self._live_controller.send_failed.connect(self._notify)

        self._channel.open_changed.connect(self._on_display_open_changed)
        self._channel.ready_received.connect(self._on_display_ready)

    # === 송출창 ===

    @property
    def channel(self) -> DisplayChannel:
        return self._channel

    @property
    def live_controller(self) -> LiveController:
        return self._live_controller

    @property
    def toasts(self) -> ToastManager:
        return self._toasts

    def _toggle_display(self) -> None:
        """송출 시작/중지 토글"""
        if self._channel.is_open():
            self._channel.close()
            return

        result = self._channel.open()
        if not result.ok:
            self._notify(result.error)
            self._display_action.setChecked(False)
            return
        # 새 송출창에 현재 Live 내용 표시 (READY가 오면 한 번 더 맞춤)
        self._live_controller.sync_live()

    def _on_display_open_changed(self, is_open: bool) -> None:
        """송출창 상태 변경 (직접 닫힌 경우 포함)"""
        self._update_indicator(is_open)
        self._display_action.setChecked(is_open)
        self._display_action.setText("⏹ 송출 중지" if is_open else "📺 송출 시작")
        self._statusbar.showMessage(
            "송출이 시작되었습니다 (F11로 중지)" if is_open else "송출이 중지되었습니다"
        )

    def _on_display_ready(self) -> None:
        """송출창 준비 완료 - 현재 Live 상태를 즉시 동기화"""
        self._live_controller.sync_live()

    def _update_indicator(self, is_open: bool) -> None:
        self._indicator.setText("● 송출 중" if is_open else "○ 송출 꺼짐")
        self._indicator.setStyleSheet(styles.INDICATOR_ON if is_open else styles.INDICATOR_OFF)

    def _clear_display(self) -> None:
        self._live_controller.clear_live()

    def _send_preview(self) -> None:
        self._live_controller.send_to_live()

    def _on_segment_activated(self, segment: Segment) -> None:
        song = self._song_list.current_song()
        if song is not None and song.id == segment.song_id:
            self._live_controller.set_song(song)
        self._live_controller.show_segment(segment)

    def _on_queue_song_activated(self, song_id: int) -> None:
        """예배 순서에서 곡 더블클릭 - 곡 목록에서 해당 곡을 열고 첫 구간을 Preview"""
        self._tabs.setCurrentIndex(self.TAB_SONGS)
        self._song_list.select_song(song_id)
        song = self._song_repo.get_song(song_id)
        if song is not None:
            self._live_controller.set_song(song)
            self._live_controller.next_segment()

    def _notify(self, error: DisplayError | ReorderError) -> None:
        """실패 사유를 토스트로 표시"""
        self._toasts.show_toast(notifications.describe(error), notifications.severity(error))

    # === 곡 관리 ===

    def reload_songs(self) -> None:
        self._song_list.set_songs(self._song_repo.list_songs())

    def _on_edit_requested(self, song: Song) -> None:
        self._song_form.load_song(song)
        self._tabs.setCurrentIndex(self.TAB_FORM)

    def _on_delete_requested(self, song: Song) -> None:
        answer = QMessageBox.question(
            self, "곡 삭제",
            f"'{song.title}'을(를) 삭제할까요?\n예배 순서에 들어 있는 곡도 함께 빠집니다.",
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        self._song_repo.delete_song(song.id)
        self.reload_songs()
        self._queue_panel.refresh()
        self._statusbar.showMessage(f"곡 삭제됨: {song.title}")

    def _on_save_song(self, song_id: int | None) -> None:
        form = self._song_form
        try:
            if song_id is None:
                song = self._song_repo.create_song(form.title, form.author, form.segments())
            else:
                song = self._song_repo.update_song(song_id, form.title, form.author, form.segments())
        except sqlite3.Error as e:
            logger.error("곡 저장 실패: %s", e)
            QMessageBox.critical(self, "오류", f"곡을 저장할 수 없습니다:\n{e}")
            return

        form.clear()
        self.reload_songs()
        self._queue_panel.refresh()
        if song is not None:
            self._song_list.select_song(song.id)
            self._toasts.show_toast(f"저장됨: {song.title}", "success")
        self._tabs.setCurrentIndex(self.TAB_SONGS)

    def _on_add_to_queue(self, song: Song) -> None:
        if self._queue_panel.queue_id is None:
            self._toasts.show_toast("먼저 예배 순서를 만드세요.", "warning")
            self._tabs.setCurrentIndex(self.TAB_QUEUE)
            return
        result = self._queue_panel.add_song(song.id)
        if result is not None and result.ok:
            self._statusbar.showMessage(f"예배 순서에 추가됨: {song.title}")

    def closeEvent(self, event) -> None:
        """제어창 종료 시 송출창도 닫음"""
        self._channel.close()
        super().closeEvent(event)

    def keyPressEvent(self, event) -> None:
        """키보드 이벤트 핸들러"""
        # 텍스트 입력 중일 때는 전역 키 조작을 하지 않음 (커서 이동/줄바꿈 보호)
        if isinstance(self.focusWidget(), (QLineEdit, QTextEdit, QPlainTextEdit)):
            super().keyPressEvent(event)
            return

        key = event.key()
        if key == Qt.Key.Key_Right:
            self._live_controller.next_segment()
        elif key == Qt.Key.Key_Left:
            self._live_controller.previous_segment()
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            # 엔터: 라이브 송출
            self._send_preview()
            self._statusbar.showMessage("🔴 LIVE 송출!", 2000)
        elif key == Qt.Key.Key_Escape:
            # ESC: 송출 지움
            self._clear_display()
            self._statusbar.showMessage("송출 지움", 2000)
        else:
            super().keyPressEvent(event)
            return
        event.accept()
