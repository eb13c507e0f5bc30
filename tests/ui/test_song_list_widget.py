"""SongListWidget UI 테스트"""

import pytest

from lyricdeck.domain.song import Segment, Song
from lyricdeck.ui.library.song_list_widget import SongListWidget


class SignalSpy:
    """Qt 시그널 발생 여부와 인자를 기록하는 간단한 스파이 클래스"""

    def __init__(self, signal):
        self.calls = []
        signal.connect(self.callback)

    def callback(self, *args):
        self.calls.append(args)


@pytest.fixture
def song_list(qtbot):
    """SongListWidget 픽스처"""
    widget = SongListWidget()
    qtbot.addWidget(widget)
    return widget


def _make_song(song_id, title, author="", contents=("1절",)):
    segments = [
        Segment(content, order=i, song_id=song_id, id=song_id * 10 + i)
        for i, content in enumerate(contents, start=1)
    ]
    return Song(title=title, author=author, id=song_id, segments=segments)


class TestSongListWidget:

    def test_empty_label(self, song_list):
        song_list.set_songs([])

        assert song_list._empty_label.isVisibleTo(song_list)
        assert not song_list._btn_edit.isEnabled()

    def test_tree_shows_songs_and_segments(self, song_list):
        song_list.set_songs([_make_song(1, "A", "작가", ("1절 가사\n둘째 줄", "2절"))])

        top = song_list._tree.topLevelItem(0)
        assert top.text(0) == "A - 작가"
        assert top.childCount() == 2
        assert top.child(0).text(0) == "verse 1  1절 가사"

    def test_segment_click_emits_segment(self, song_list):
        song_list.set_songs([_make_song(1, "A", contents=("1절", "2절"))])
        spy = SignalSpy(song_list.segment_activated)
        child = song_list._tree.topLevelItem(0).child(1)

        song_list._on_item_clicked(child)

        assert spy.calls[0][0].content == "2절"

    def test_song_click_does_not_emit_segment(self, song_list):
        song_list.set_songs([_make_song(1, "A")])
        spy = SignalSpy(song_list.segment_activated)

        song_list._on_item_clicked(song_list._tree.topLevelItem(0))

        assert spy.calls == []

    def test_current_song_from_segment(self, song_list):
        song_list.set_songs([_make_song(1, "A"), _make_song(2, "B")])

        song_list._tree.setCurrentItem(song_list._tree.topLevelItem(1).child(0))

        assert song_list.current_song().id == 2

    def test_selection_kept_after_reload(self, song_list):
        songs = [_make_song(1, "A"), _make_song(2, "B")]
        song_list.set_songs(songs)
        song_list.select_song(2)

        song_list.set_songs(songs + [_make_song(3, "C")])

        assert song_list.current_song().id == 2

    def test_buttons_emit_current_song(self, song_list):
        song_list.set_songs([_make_song(1, "A")])
        song_list.select_song(1)
        edit_spy = SignalSpy(song_list.edit_requested)
        queue_spy = SignalSpy(song_list.add_to_queue_requested)

        song_list._btn_edit.click()
        song_list._btn_queue.click()

        assert edit_spy.calls[0][0].id == 1
        assert queue_spy.calls[0][0].id == 1

    def test_filter(self, song_list):
        song_list.set_songs([_make_song(1, "Amazing Grace"), _make_song(2, "주 은혜임을", "홍길동")])

        song_list._filter.setText("홍길")

        assert song_list._tree.topLevelItem(0).isHidden()
        assert not song_list._tree.topLevelItem(1).isHidden()

    def test_song_selected_signal(self, song_list):
        song_list.set_songs([_make_song(1, "A")])
        spy = SignalSpy(song_list.song_selected)

        song_list.select_song(1)

        assert spy.calls[0][0].id == 1
