"""송출창 전송 계층 인터페이스

DisplayChannel은 실제 창이 무엇인지 모른다. 창을 띄우는 런처와
띄워진 창의 핸들만 이 인터페이스로 다룬다.
"""

from __future__ import annotations

import abc
from typing import Callable

FrameListener = Callable[[str], None]


class TransportError(RuntimeError):
    """프레임 전달 실패 (상대 창이 사라짐 등)"""


class SurfaceHandle(abc.ABC):
    """띄워진 송출창 하나에 대한 핸들"""

    @abc.abstractmethod
    def is_closed(self) -> bool:
        """상대 창이 닫혔는지 확인 (상대가 사라졌으면 RuntimeError 가능)"""

    @abc.abstractmethod
    def post_message(self, frame: str) -> None:
        """인코딩된 프레임 전달 (fire-and-forget)"""

    @abc.abstractmethod
    def close(self) -> None:
        """창 닫기 요청"""

    def focus(self) -> None:
        """창을 앞으로 가져오기 (지원하지 않으면 무시)"""

    def connect_inbound(self, listener: FrameListener) -> None:
        """송출창 -> 제어창 방향 프레임 수신자 등록 (READY 등)"""


class SurfaceLauncher(abc.ABC):
    """송출창 생성기"""

    @abc.abstractmethod
    def launch(self, route: str, size: tuple[int, int]) -> SurfaceHandle | None:
        """새 송출창을 띄우고 핸들 반환

        호스트가 창 생성을 거부하면 None.
        """
