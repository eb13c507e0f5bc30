from __future__ import annotations

GLOBAL_STYLESHEET = """
    QMainWindow { background-color: #1a1a1a; }
    QWidget { color: #ddd; font-family: 'Malgun Gothic', 'Segoe UI', sans-serif; }

    QSplitter::handle { background-color: #222; }
    QSplitter::handle:horizontal { width: 1px; }

    QToolBar {
        background-color: #252525;
        border-bottom: 1px solid #333;
    }
    QToolButton {
        background-color: transparent;
        padding: 4px 8px;
        border-radius: 6px;
        font-weight: bold;
        font-size: 11px;
        color: #ccc;
    }
    QToolButton:hover { background-color: #383838; color: white; }
    QToolButton:checked { background-color: #ff4444; color: white; }

    QStatusBar {
        background-color: #1e1e1e;
        color: #888;
        font-size: 11px;
        border-top: 1px solid #333;
    }

    QPushButton {
        background-color: #333;
        border-radius: 6px;
        padding: 5px 15px;
        color: #ddd;
    }
    QPushButton:hover { background-color: #444; }
    QPushButton:pressed { background-color: #222; }
    QPushButton:disabled { color: #666; }

    QTabWidget::pane { border: 1px solid #333; }
    QTabBar::tab {
        background: #252525; color: #aaa; padding: 6px 14px;
        border-top-left-radius: 6px; border-top-right-radius: 6px;
    }
    QTabBar::tab:selected { background: #2196f3; color: white; }

    QDialog, QMessageBox {
        background-color: #252525; color: #ddd; border: 1px solid #444;
    }

    QLineEdit, QTextEdit, QPlainTextEdit, QComboBox, QSpinBox, QDateEdit, QAbstractItemView {
        background-color: #2a2a2a; color: #ddd; border: 1px solid #444;
        selection-background-color: #2196f3; selection-color: white;
    }

    QScrollBar:vertical {
        border: none; background: #1a1a1a; width: 10px; margin: 0px;
    }
    QScrollBar::handle:vertical {
        background: #333; min-height: 20px; border-radius: 5px; margin: 2px;
    }
    QScrollBar::handle:vertical:hover { background: #2196f3; }
    QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical { height: 0px; }
"""

# 송출 상태 표시등
INDICATOR_ON = "color: #ff4444; font-weight: bold; padding: 0 8px;"
INDICATOR_OFF = "color: #777; padding: 0 8px;"

# 라이브 패널 (Preview / Live)
PREVIEW_FRAME = """
    QLabel {
        background-color: #111; color: #ddd; border: 1px solid #2196f3;
        border-radius: 6px; padding: 10px; font-size: 14px;
    }
"""

LIVE_FRAME = """
    QLabel {
        background-color: #111; color: white; border: 2px solid #ff4444;
        border-radius: 6px; padding: 10px; font-size: 14px; font-weight: bold;
    }
"""
