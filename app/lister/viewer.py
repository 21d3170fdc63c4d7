"""
ディレクトリリストビューア

ディレクトリの内容を一覧表示し、キー操作でカーソル位置のアイテムを
書庫化・展開するウィンドウ。
"""

import os
import sys
from typing import List, Optional

from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QLineEdit, QStatusBar
)
from PySide6.QtCore import Signal
from PySide6.QtGui import QAction, QKeySequence

from arc import NotAnArchiveError, PackerSettings
from logutils import log_print, INFO
from proc.events import CommandEvent, CommandStatus, EventQueue
from proc.runner import CommandRunner
from proc.surface import SurfacePool

from app.actions import PackActionHandler
from app.completion import CompletionHandler
from app.debug_utils import DebugMixin
from app.listing import ListingRegistry

from .qt_process import QtProcessHost
from .widgets.file_list_view import FileListView
from .widgets.log_window import LogWindowPresenter


class ListerController(DebugMixin):
    """
    開いているウィンドウとコマンドランナーを束ねるクラス

    すべてのウィンドウでサーフェスプールと登録簿を共有する。
    """

    def __init__(self, settings: PackerSettings, event_queue: Optional[EventQueue] = None):
        self._init_debug_mixin("ListerController")
        self.registry = ListingRegistry()
        self.presenter = LogWindowPresenter()
        self.host = QtProcessHost(settings.shell)
        self.event_queue = event_queue
        self.runner = CommandRunner(self.host,
                                    SurfacePool(self.presenter),
                                    CompletionHandler(self.registry),
                                    event_queue)
        self.actions = PackActionHandler(self.runner, settings)
        self.windows: List[ListerWindow] = []

    def open_window(self, directory: str) -> 'ListerWindow':
        """
        新しいウィンドウを開く

        Args:
            directory: 表示するディレクトリ

        Returns:
            ListerWindow: 開いたウィンドウ
        """
        window = ListerWindow(self)
        window.navigate_to(directory)
        self.registry.register(window.file_view)
        if self.event_queue is not None:
            self.event_queue.subscribe(window.event_listener)
        self.windows.append(window)
        window.show()
        self.debug_info(f"ウィンドウを開きました: {directory}")
        return window

    def window_closed(self, window: 'ListerWindow') -> None:
        """ウィンドウが閉じられたときの処理"""
        self.registry.unregister(window.file_view)
        if self.event_queue is not None:
            self.event_queue.unsubscribe(window.event_listener)
        if window in self.windows:
            self.windows.remove(window)


class ListerWindow(QMainWindow, DebugMixin):
    """ディレクトリリストのメインウィンドウ"""

    # 配信スレッドから届いたコマンドイベントをGUIスレッドへ渡す
    command_event = Signal(object)

    def __init__(self, controller: ListerController):
        super().__init__()
        self._init_debug_mixin("ListerWindow")
        self.controller = controller
        self.event_listener = self.command_event.emit

        self.setMinimumSize(640, 480)
        self._setup_ui()
        self._setup_actions()
        self.file_view.directory_activated.connect(self.navigate_to)
        self.command_event.connect(self._on_command_event)
        self._show_settings()

    def _setup_ui(self):
        """UIの初期化"""
        central_widget = QWidget()
        main_layout = QVBoxLayout(central_widget)

        # 現在のディレクトリ
        self.path_edit = QLineEdit()
        self.path_edit.setReadOnly(True)
        main_layout.addWidget(self.path_edit)

        self.file_view = FileListView()
        main_layout.addWidget(self.file_view)

        self.setStatusBar(QStatusBar())
        self.setCentralWidget(central_widget)

    def _setup_actions(self):
        """キー操作の設定"""
        bindings = [
            ("書庫化/展開", "Z", lambda: self.pack_or_unpack(list_only=False)),
            ("書庫の内容を表示", "Shift+Z", lambda: self.pack_or_unpack(list_only=True)),
            ("書庫化プリセットの切り替え", "Ctrl+T", self.toggle_packer),
            ("再読み込み", QKeySequence.StandardKey.Refresh, self.file_view.refresh),
            ("親ディレクトリへ", "Backspace", self.go_up),
            ("新しいウィンドウ", QKeySequence.StandardKey.New, self._open_new_window),
            ("閉じる", QKeySequence.StandardKey.Close, self.close),
        ]
        for text, shortcut, slot in bindings:
            action = QAction(text, self)
            action.setShortcut(QKeySequence(shortcut))
            action.triggered.connect(slot)
            self.addAction(action)

    def navigate_to(self, directory: str):
        """ディレクトリを表示する"""
        self.file_view.set_directory(directory)
        self.path_edit.setText(self.file_view.directory)
        self.setWindowTitle(f"arcpack - {os.path.basename(self.file_view.directory) or self.file_view.directory}")

    def go_up(self):
        """親ディレクトリへ移動する"""
        parent = os.path.dirname(self.file_view.directory)
        if parent and parent != self.file_view.directory:
            self.navigate_to(parent)

    def pack_or_unpack(self, list_only: bool = False):
        """カーソル位置のアイテムを書庫化または展開する"""
        try:
            run = self.controller.actions.perform_on_current_item(self.file_view, list_only=list_only)
        except NotAnArchiveError as e:
            self.statusBar().showMessage(str(e))
            return
        except OSError as e:
            self.statusBar().showMessage(f"コマンドを起動できませんでした: {e}")
            return

        if run is None:
            self.statusBar().showMessage("カーソル位置にアイテムがありません")
            return
        self.statusBar().showMessage(f"[{run.surface.ordinal}] {run.command}")

    def toggle_packer(self):
        """書庫化プリセットを切り替える"""
        self.controller.actions.toggle_packer()
        self._show_settings()

    def _show_settings(self):
        settings = self.controller.actions.settings
        self.statusBar().showMessage(f"書庫化プリセット: {settings.describe()}")

    def _on_command_event(self, event: CommandEvent):
        """コマンドの終了をステータスバーに表示する"""
        if event.status is not CommandStatus.STARTED:
            self.statusBar().showMessage(event.describe())

    def _open_new_window(self):
        self.controller.open_window(self.file_view.directory)

    def closeEvent(self, event):
        """ウィンドウを閉じるときに登録簿から外す"""
        self.controller.window_closed(self)
        super().closeEvent(event)


def run_gui(directory: str, settings: PackerSettings, event_queue: Optional[EventQueue] = None) -> int:
    """
    GUIを起動する

    Args:
        directory: 最初に表示するディレクトリ
        settings: 書庫化・展開の設定
        event_queue: コマンドイベントの発行先（配信スレッドが動いていること）

    Returns:
        int: 終了コード
    """
    app = QApplication.instance() or QApplication(sys.argv)
    app.setStyle("Fusion")

    controller = ListerController(settings, event_queue)
    controller.open_window(directory)

    log_print(INFO, "アプリケーション実行開始")
    return app.exec()
