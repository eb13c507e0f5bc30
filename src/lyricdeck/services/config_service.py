import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "database_path": str(Path.home() / ".lyricdeck" / "lyricdeck.sqlite3"),
    "display_width": 800,
    "display_height": 600,
    "liveness_poll_ms": 1000,
    "send_ready_handshake": True,
    "display_font_size": 72,
    "display_background": "black",
    "recent_queue_id": None,
}

BACKGROUND_MODES = ("black", "chroma")


class ConfigService:
    """애플리케이션 설정 관리 (송출창 크기, DB 경로 등)"""

    def __init__(self, config_dir: Path | str | None = None):
        self._config_dir = Path(config_dir) if config_dir else Path.home() / ".lyricdeck"
        self._config_file = self._config_dir / "config.json"
        self._config = dict(DEFAULT_CONFIG)
        self.load()

    def load(self):
        """설정 파일 로드 (깨진 파일이면 기본값 유지)"""
        if self._config_file.exists():
            try:
                with open(self._config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    self._config.update(data)
                else:
                    logger.warning("[Config] 설정 형식이 올바르지 않습니다: %s", self._config_file)
            except (OSError, ValueError) as e:
                logger.warning("[Config] 설정 로드 실패: %s", e)

    def save(self):
        """설정 파일 저장"""
        self._config_dir.mkdir(parents=True, exist_ok=True)
        try:
            with open(self._config_file, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=4, ensure_ascii=False)
        except OSError as e:
            logger.error("[Config] 설정 저장 실패: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, DEFAULT_CONFIG.get(key, default))

    def set(self, key: str, value: Any) -> None:
        """값 변경 후 바로 저장"""
        self._config[key] = value
        self.save()

    @property
    def database_path(self) -> Path:
        return Path(self.get("database_path")).expanduser()

    @property
    def display_size(self) -> tuple[int, int]:
        """송출창 기본 크기 (창 모드일 때)"""
        try:
            return int(self.get("display_width")), int(self.get("display_height"))
        except (TypeError, ValueError):
            return DEFAULT_CONFIG["display_width"], DEFAULT_CONFIG["display_height"]

    @property
    def liveness_poll_ms(self) -> int:
        try:
            return max(100, int(self.get("liveness_poll_ms")))
        except (TypeError, ValueError):
            return DEFAULT_CONFIG["liveness_poll_ms"]

    @property
    def display_font_size(self) -> int:
        """송출 글자 크기 (1080px 높이 기준)"""
        try:
            size = int(self.get("display_font_size"))
        except (TypeError, ValueError):
            return DEFAULT_CONFIG["display_font_size"]
        return size if size > 0 else DEFAULT_CONFIG["display_font_size"]

    @property
    def display_background(self) -> str:
        """송출 배경 ("black" 또는 "chroma")"""
        value = self.get("display_background")
        if value in BACKGROUND_MODES:
            return value
        return DEFAULT_CONFIG["display_background"]

    @property
    def send_ready_handshake(self) -> bool:
        value = self.get("send_ready_handshake")
        if isinstance(value, bool):
            return value
        return DEFAULT_CONFIG["send_ready_handshake"]

    def get_recent_queue_id(self) -> int | None:
        """마지막으로 열었던 예배 순서"""
        value = self.get("recent_queue_id")
        return value if isinstance(value, int) else None

    def set_recent_queue_id(self, queue_id: int | None) -> None:
        if queue_id == self.get_recent_queue_id():
            return
        self.set("recent_queue_id", queue_id)
