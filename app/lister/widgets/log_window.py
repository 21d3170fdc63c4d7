"""
ログウィンドウ

サーフェスの内容を表示する読み取り専用のウィンドウ
"""

from typing import Dict, Optional

from PySide6.QtWidgets import QPlainTextEdit, QWidget
from PySide6.QtGui import QFont, QTextCursor
from PySide6.QtCore import Signal

from proc.surface import LogSurface, SurfacePresenter


class LogWindow(QPlainTextEdit):
    """1つのサーフェスを表示するウィンドウ"""

    # 他スレッドからの書き込みをGUIスレッドへ渡すためのシグナル
    text_appended = Signal(str)
    text_cleared = Signal()

    def __init__(self, surface: LogSurface, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.surface = surface
        self.setReadOnly(True)
        self.setWindowTitle(surface.name)
        self.setFont(QFont("Monospace"))
        self.resize(640, 320)

        self.text_appended.connect(self._append)
        self.text_cleared.connect(self.clear)

        self.setPlainText(surface.text())
        surface.add_listener(self._on_surface_changed)

    def _on_surface_changed(self, surface: LogSurface, text: Optional[str]) -> None:
        if text is None:
            self.text_cleared.emit()
        else:
            self.text_appended.emit(text)

    def _append(self, text: str) -> None:
        cursor = self.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)
        cursor.insertText(text)
        self.setTextCursor(cursor)
        self.ensureCursorVisible()

    def detach(self) -> None:
        """サーフェスとの接続を解除する"""
        self.surface.remove_listener(self._on_surface_changed)


class LogWindowPresenter(SurfacePresenter):
    """
    サーフェスごとにログウィンドウを開くプレゼンター
    """

    def __init__(self):
        self._windows: Dict[int, LogWindow] = {}

    def show(self, surface: LogSurface) -> None:
        window = self._windows.get(surface.ordinal)
        if window is None or window.surface is not surface:
            if window is not None:
                self._close(window)
            window = LogWindow(surface)
            self._windows[surface.ordinal] = window
        window.show()
        window.raise_()

    def discard(self, surface: LogSurface) -> None:
        window = self._windows.get(surface.ordinal)
        if window is not None and window.surface is surface:
            del self._windows[surface.ordinal]
            self._close(window)

    def _close(self, window: LogWindow) -> None:
        window.detach()
        window.close()
        window.deleteLater()
