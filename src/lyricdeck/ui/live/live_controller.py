"""라이브 컨트롤러

Preview-Live 2단계 송출 로직을 관리
"""

from PySide6.QtCore import QObject, Signal

from lyricdeck.display.display_channel import DisplayChannel, DisplayResult
from lyricdeck.domain.song import Segment, Song


class LiveController(QObject):
    """라이브 컨트롤러

    Preview-Live 2단계 송출을 관리합니다.
    - Preview: 다음에 송출될 구간 미리보기
    - Live: 현재 송출 중인 구간

    Signals:
        preview_changed: Preview 내용이 변경됨 (str)
        live_changed: Live 내용이 변경됨 (str)
        send_failed: 송출 실패 (DisplayError)
    """

    preview_changed = Signal(str)
    live_changed = Signal(str)
    send_failed = Signal(object)

    def __init__(self, channel: DisplayChannel, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._channel = channel
        self._song: Song | None = None
        self._preview_segment: Segment | None = None
        self._live_segment: Segment | None = None

    def set_song(self, song: Song | None) -> None:
        """현재 곡 설정 (Preview 초기화)"""
        self._song = song
        self._preview_segment = None
        self.preview_changed.emit("")

    def set_preview(self, segment: Segment | None) -> None:
        """Preview에 구간 설정"""
        self._preview_segment = segment
        self.preview_changed.emit(segment.content if segment else "")

    def send_to_live(self) -> DisplayResult | None:
        """Preview 내용을 Live로 송출 (Preview가 없으면 None)"""
        if not self._preview_segment:
            return None
        return self._push(self._preview_segment)

    def show_segment(self, segment: Segment) -> DisplayResult:
        """구간을 바로 송출 (Preview 거치지 않음)"""
        self.set_preview(segment)
        return self._push(segment)

    def _push(self, segment: Segment) -> DisplayResult:
        result = self._channel.send(segment.content)
        if result.ok:
            self._live_segment = segment
            self.live_changed.emit(segment.content)
        else:
            self.send_failed.emit(result.error)
        return result

    def clear_live(self) -> DisplayResult:
        """Live 내용 지우기"""
        result = self._channel.clear()
        if result.ok:
            self._live_segment = None
            self.live_changed.emit("")
        else:
            self.send_failed.emit(result.error)
        return result

    def sync_live(self) -> DisplayResult:
        """현재 Live 상태를 다시 송출 (새로 열린 송출창 동기화용)"""
        if self._live_segment:
            return self._channel.send(self._live_segment.content)
        return self._channel.resend_last()

    def next_segment(self) -> Segment | None:
        """다음 구간으로 Preview 이동"""
        if not self._song:
            return None

        ordered = self._song.get_ordered_segments()
        if not ordered:
            return None

        if not self._preview_segment:
            segment = ordered[0]
        else:
            segment = self._song.get_next_segment(self._preview_segment.id)
            if not segment:
                return None  # 마지막 구간

        self.set_preview(segment)
        return segment

    def previous_segment(self) -> Segment | None:
        """이전 구간으로 Preview 이동"""
        if not self._song or not self._preview_segment:
            return None

        segment = self._song.get_previous_segment(self._preview_segment.id)
        if segment:
            self.set_preview(segment)

        return segment

    @property
    def preview_segment(self) -> Segment | None:
        """현재 Preview 구간"""
        return self._preview_segment

    @property
    def live_segment(self) -> Segment | None:
        """현재 Live 구간"""
        return self._live_segment
