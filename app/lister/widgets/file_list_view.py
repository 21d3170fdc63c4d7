"""
ファイルリストビュー

1つのディレクトリの内容を一覧表示するリストビュー
"""

import os
from typing import Optional

from PySide6.QtWidgets import QListView, QAbstractItemView
from PySide6.QtCore import QModelIndex, Signal

from app.listing import ListingView, scan_directory, entry_info
from ..models.file_list_model import FileListModel, ROLE_IS_DIR, ROLE_PATH


class FileListView(QListView, ListingView):
    """ファイルとフォルダのリストビュー"""

    # ディレクトリがダブルクリックされた（path）
    directory_activated = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.directory = ""

        self.setViewMode(QListView.ViewMode.ListMode)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setUniformItemSizes(True)

        self.file_model = FileListModel(self)
        self.setModel(self.file_model)

        self.doubleClicked.connect(self._on_item_double_clicked)

    def set_directory(self, directory: str) -> None:
        """
        表示するディレクトリを設定する

        Args:
            directory: ディレクトリのパス
        """
        self.directory = os.path.abspath(directory)
        self.refresh()
        if self.file_model.rowCount():
            self.setCurrentIndex(self.file_model.index(0, 0))

    def path_at_cursor(self) -> Optional[str]:
        index = self.currentIndex()
        if not index.isValid():
            return None
        return index.data(ROLE_PATH)

    def refresh(self) -> None:
        """ディレクトリを読み込み直す（カーソル位置はパスで復元する）"""
        current = self.path_at_cursor()
        self.file_model.set_items(scan_directory(self.directory))
        self._restore_cursor(current)

    def refresh_entry(self, path: str) -> None:
        self.file_model.update_entry(entry_info(path), path)

    def _restore_cursor(self, path: Optional[str]) -> None:
        if not path:
            return
        row = self.file_model.find_row(path)
        if row is not None:
            self.setCurrentIndex(self.file_model.index(row, 0))

    def _on_item_double_clicked(self, index: QModelIndex):
        """ディレクトリのダブルクリックで移動する"""
        if index.data(ROLE_IS_DIR):
            self.directory_activated.emit(index.data(ROLE_PATH))
