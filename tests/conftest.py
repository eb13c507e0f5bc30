"""pytest 공통 픽스처 및 설정"""

import os

# 디스플레이 없는 환경(CI)에서도 위젯 생성이 가능하도록
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from lyricdeck.repository import database
from lyricdeck.repository.queue_repository import QueueRepository
from lyricdeck.repository.song_repository import SongRepository


@pytest.fixture(scope="session")
def qapp_args():
    """QApplication 인자 설정 - headless 모드"""
    return ["--platform", "offscreen"]


@pytest.fixture
def db():
    """테스트용 메모리 DB (최신 스키마)"""
    conn = database.connect(database.MEMORY_DATABASE)
    yield conn
    conn.close()


@pytest.fixture
def song_repo(db):
    return SongRepository(db)


@pytest.fixture
def queue_repo(db):
    return QueueRepository(db)
