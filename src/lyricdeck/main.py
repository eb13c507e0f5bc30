"""LyricDeck 애플리케이션 진입점"""

import logging
import sys
import signal

logger = logging.getLogger(__name__)


def main() -> int:
    """애플리케이션 메인 함수"""
    # PySide6 임포트는 여기서 수행 (테스트 시 GUI 의존성 분리)
    from PySide6.QtWidgets import QApplication
    from PySide6.QtCore import QTimer

    from lyricdeck.repository import database
    from lyricdeck.services.config_service import ConfigService
    from lyricdeck.ui.control_window import ControlWindow
    from lyricdeck.utils.log_config import configure_root

    configure_root()

    app = QApplication(sys.argv)
    app.setApplicationName("LyricDeck")
    app.setApplicationVersion("0.1.0")

    config = ConfigService()
    db = database.connect(config.database_path)
    logger.info("데이터베이스: %s", config.database_path)

    # Ctrl+C로 종료 가능하게 설정
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    # 타이머로 이벤트 루프에서 시그널 처리
    timer = QTimer()
    timer.start(500)
    timer.timeout.connect(lambda: None)

    window = ControlWindow(config, db)
    window.show()

    try:
        return app.exec()
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
