"""송출 수신기 테스트"""

import pytest
from PySide6.QtCore import QObject, Signal

from lyricdeck.display.messages import DisplayMessage, decode, encode
from lyricdeck.display.receiver import DisplayReceiver


class SignalSpy:
    """Qt 시그널 발생 여부와 인자를 기록하는 간단한 스파이 클래스"""

    def __init__(self, signal):
        self.calls = []
        signal.connect(self.callback)

    def callback(self, *args):
        self.calls.append(args)


class FrameSource(QObject):
    frame = Signal(str)


@pytest.fixture
def receiver(qapp):
    return DisplayReceiver()


def content(text):
    return encode(DisplayMessage.content_update(text))


class TestHandle:
    """메시지 처리 테스트"""

    def test_content_update_sets_text(self, receiver):
        assert receiver.handle(content("Chorus 1"))
        assert receiver.text == "Chorus 1"
        assert receiver.has_content

    def test_dict_message_accepted(self, receiver):
        assert receiver.handle({"kind": "CONTENT_UPDATE", "text": "1절"})
        assert receiver.text == "1절"

    def test_unknown_kind_ignored(self, receiver):
        receiver.handle(content("기존"))

        assert not receiver.handle('{"kind": "PING"}')
        assert receiver.text == "기존"

    def test_ready_is_not_content(self, receiver):
        assert not receiver.handle(encode(DisplayMessage.ready()))
        assert not receiver.has_content

    def test_malformed_frames_ignored(self, receiver):
        for frame in ("{", None, 42, {"kind": "CONTENT_UPDATE", "text": None}):
            assert not receiver.handle(frame)
        assert receiver.text == ""

    def test_same_update_twice_is_idempotent(self, receiver):
        spy = SignalSpy(receiver.content_changed)

        receiver.handle(content("후렴"))
        receiver.handle(content("후렴"))

        assert receiver.text == "후렴"
        assert spy.calls == [("후렴",)]

    def test_empty_text_clears(self, receiver):
        receiver.handle(content("가사"))
        receiver.handle(content(""))

        assert receiver.text == ""
        assert receiver.has_content

    def test_first_empty_update_is_reported(self, receiver):
        spy = SignalSpy(receiver.content_changed)

        assert receiver.handle(content(""))

        assert receiver.has_content
        assert spy.calls == [("",)]


class TestListen:
    """수신 등록 테스트"""

    def test_listen_receives_frames(self, receiver):
        source = FrameSource()

        receiver.listen(source.frame)
        source.frame.emit(content("가사"))

        assert receiver.is_listening
        assert receiver.text == "가사"

    def test_listen_replies_ready(self, receiver):
        source = FrameSource()
        replies = []

        receiver.listen(source.frame, reply=replies.append)

        assert [decode(r) for r in replies] == [DisplayMessage.ready()]

    def test_listen_twice_keeps_single_registration(self, receiver):
        source = FrameSource()
        spy = SignalSpy(receiver.content_changed)

        receiver.listen(source.frame)
        receiver.listen(source.frame)
        source.frame.emit(content("A"))

        assert spy.calls == [("A",)]

    def test_stop_listening(self, receiver):
        source = FrameSource()
        receiver.listen(source.frame)

        receiver.stop_listening()
        receiver.stop_listening()
        source.frame.emit(content("무시됨"))

        assert not receiver.is_listening
        assert receiver.text == ""
