import pytest

from lyricdeck.display.display_channel import DisplayChannel, DisplayError
from lyricdeck.display.receiver import DisplayReceiver
from lyricdeck.display.transport import SurfaceHandle, SurfaceLauncher
from lyricdeck.domain.song import Segment, Song
from lyricdeck.ui.live.live_controller import LiveController


class SignalSpy:
    """Qt 시그널 발생 여부와 인자를 기록하는 간단한 스파이 클래스"""

    def __init__(self, signal):
        self.called = False
        self.args = None
        signal.connect(self.callback)

    def callback(self, *args):
        self.called = True
        self.args = args


class MockHandle(SurfaceHandle):
    """테스트용 송출창 핸들 모킹"""

    def __init__(self):
        self.closed = False
        self.receiver = DisplayReceiver()

    def is_closed(self):
        return self.closed

    def post_message(self, frame):
        self.receiver.handle(frame)

    def close(self):
        self.closed = True


class MockLauncher(SurfaceLauncher):
    def __init__(self):
        self.handle = None

    def launch(self, route, size):
        self.handle = MockHandle()
        return self.handle


def make_song():
    song = Song(title="Test Song", id=1, segments=[
        Segment("Verse 1", type="verse", order=1, song_id=1, id=11),
        Segment("Chorus 1", type="chorus", order=2, song_id=1, id=12),
        Segment("Verse 2", type="verse", order=3, song_id=1, id=13),
    ])
    return song


@pytest.fixture
def launcher():
    return MockLauncher()


@pytest.fixture
def channel(qapp, launcher):
    return DisplayChannel(launcher)


@pytest.fixture
def live_controller(channel):
    """테스트용 LiveController 인스턴스"""
    controller = LiveController(channel)
    controller.set_song(make_song())
    return controller


class TestLiveControllerPreview:
    """Preview 설정 테스트"""

    def test_set_preview_emits_signal(self, live_controller):
        spy = SignalSpy(live_controller.preview_changed)
        segment = make_song().segments[1]

        live_controller.set_preview(segment)

        assert spy.called
        assert spy.args[0] == "Chorus 1"
        assert live_controller.preview_segment == segment

    def test_set_song_resets_preview(self, live_controller):
        live_controller.next_segment()
        spy = SignalSpy(live_controller.preview_changed)

        live_controller.set_song(make_song())

        assert live_controller.preview_segment is None
        assert spy.args == ("",)


class TestLiveControllerNavigation:
    """구간 이동 테스트"""

    def test_next_starts_at_first_segment(self, live_controller):
        assert live_controller.next_segment().content == "Verse 1"

    def test_next_walks_forward_and_stops(self, live_controller):
        contents = [live_controller.next_segment() for _ in range(4)]

        assert [s.content if s else None for s in contents] == ["Verse 1", "Chorus 1", "Verse 2", None]
        assert live_controller.preview_segment.content == "Verse 2"

    def test_previous(self, live_controller):
        live_controller.next_segment()
        live_controller.next_segment()

        assert live_controller.previous_segment().content == "Verse 1"
        assert live_controller.previous_segment() is None

    def test_without_song(self, channel):
        controller = LiveController(channel)

        assert controller.next_segment() is None
        assert controller.previous_segment() is None


class TestLiveControllerBroadcast:
    """Live 송출(Send to Live) 테스트"""

    def test_send_preview_to_live(self, live_controller, channel, launcher):
        channel.open()
        live_controller.next_segment()
        live_spy = SignalSpy(live_controller.live_changed)

        result = live_controller.send_to_live()

        assert result.ok
        assert live_spy.args == ("Verse 1",)
        assert live_controller.live_segment.content == "Verse 1"
        assert launcher.handle.receiver.text == "Verse 1"

    def test_send_without_preview(self, live_controller):
        assert live_controller.send_to_live() is None

    def test_show_segment_sets_preview_and_live(self, live_controller, channel, launcher):
        channel.open()
        segment = make_song().segments[2]

        live_controller.show_segment(segment)

        assert live_controller.preview_segment == segment
        assert live_controller.live_segment == segment
        assert launcher.handle.receiver.text == "Verse 2"

    def test_send_when_display_closed(self, live_controller):
        fail_spy = SignalSpy(live_controller.send_failed)
        live_spy = SignalSpy(live_controller.live_changed)
        live_controller.next_segment()

        result = live_controller.send_to_live()

        assert result.error is DisplayError.NOT_OPEN
        assert fail_spy.args == (DisplayError.NOT_OPEN,)
        assert not live_spy.called
        assert live_controller.live_segment is None

    def test_clear_live(self, live_controller, channel, launcher):
        channel.open()
        live_controller.next_segment()
        live_controller.send_to_live()
        live_spy = SignalSpy(live_controller.live_changed)

        assert live_controller.clear_live().ok
        assert live_spy.args == ("",)
        assert live_controller.live_segment is None
        assert launcher.handle.receiver.text == ""

    def test_sync_live_to_reopened_display(self, live_controller, channel, launcher):
        channel.open()
        live_controller.next_segment()
        live_controller.send_to_live()
        channel.close()
        channel.open()

        assert live_controller.sync_live().ok
        assert launcher.handle.receiver.text == "Verse 1"
