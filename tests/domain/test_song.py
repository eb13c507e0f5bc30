"""Song / Segment 도메인 모델 테스트"""

import pytest

from lyricdeck.domain.song import SEGMENT_TYPES, Segment, Song


def make_song():
    return Song(
        title="주 은혜임을",
        author="홍길동",
        id=1,
        segments=[
            Segment("후렴 가사", type="chorus", order=2, song_id=1, id=12),
            Segment("1절 가사", type="verse", order=1, song_id=1, id=11),
            Segment("브릿지", type="bridge", order=3, song_id=1, id=13),
        ],
    )


class TestSegment:
    """구간 모델 테스트"""

    def test_default_type_is_verse(self):
        assert Segment("가사").type == "verse"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            Segment("가사", type="intro")

    @pytest.mark.parametrize("segment_type", SEGMENT_TYPES)
    def test_known_types_accepted(self, segment_type):
        assert Segment("가사", type=segment_type).type == segment_type

    def test_label(self):
        assert Segment("가사", type="chorus", order=2).label == "chorus 2"


class TestSongSegments:
    """곡-구간 관계 테스트"""

    def test_get_ordered_segments(self):
        song = make_song()

        assert [s.id for s in song.get_ordered_segments()] == [11, 12, 13]

    def test_next_and_previous(self):
        song = make_song()

        assert song.get_next_segment(11).id == 12
        assert song.get_next_segment(13) is None
        assert song.get_previous_segment(12).id == 11
        assert song.get_previous_segment(11) is None
