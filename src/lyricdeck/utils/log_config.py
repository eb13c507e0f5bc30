from __future__ import annotations

import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"
_LEVEL_ENV_VAR = "LYRICDECK_LOG_LEVEL"
_DEBUG_FLAG = "LYRICDECK_DEBUG"


def _coerce_level(value: Optional[str], fallback: int) -> int:
    if not value or not value.strip():
        return fallback
    text = value.strip()
    if text.isdigit():
        return int(text)
    candidate = getattr(logging, text.upper(), None)
    if isinstance(candidate, int):
        return candidate
    return fallback


def _env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def resolve_level(default_level: int = logging.INFO) -> int:
    """환경 변수 기준 로그 레벨 (LYRICDECK_LOG_LEVEL > LYRICDECK_DEBUG > 기본값)"""
    value = os.getenv(_LEVEL_ENV_VAR)
    if value:
        return _coerce_level(value, default_level)
    if _env_truthy(os.getenv(_DEBUG_FLAG)):
        return logging.DEBUG
    return default_level


def configure_root(default_level: int = logging.INFO) -> int:
    """루트 로거 설정 (이미 핸들러가 있으면 레벨만 조정)

    Returns:
        적용된 로그 레벨
    """
    effective = resolve_level(default_level)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)
    root.setLevel(effective)
    return effective
