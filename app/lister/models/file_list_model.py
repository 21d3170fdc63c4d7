"""
ファイルリスト用データモデル

ディレクトリ内のファイルとフォルダの情報をQtのモデルとして管理するためのクラス
"""

from typing import Any, Dict, List, Optional

from PySide6.QtCore import Qt, QFileInfo
from PySide6.QtGui import QStandardItemModel, QStandardItem
from PySide6.QtWidgets import QFileIconProvider, QStyle, QApplication

# アイテムに保持するデータのロール
ROLE_IS_DIR = Qt.UserRole + 1
ROLE_SIZE = Qt.UserRole + 2
ROLE_MODIFIED = Qt.UserRole + 3
ROLE_PATH = Qt.UserRole + 4
ROLE_IS_ARCHIVE = Qt.UserRole + 5


class FileListModel(QStandardItemModel):
    """ファイルとフォルダを表示するためのモデル"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.icon_provider = QFileIconProvider()
        self.archive_icon = QApplication.style().standardIcon(QStyle.StandardPixmap.SP_FileDialogContentsView)

    def set_items(self, items: List[Dict[str, Any]]):
        """
        アイテムのリストをモデルにセットする

        Args:
            items: scan_directory が返す辞書のリスト（並び順はそのまま使う）
        """
        self.clear()
        for info in items:
            self.appendRow(self._create_item(info))

    def find_row(self, path: str) -> Optional[int]:
        """パスに対応する行番号を取得する"""
        for row in range(self.rowCount()):
            if self.item(row).data(ROLE_PATH) == path:
                return row
        return None

    def update_entry(self, info: Optional[Dict[str, Any]], path: str) -> None:
        """
        1つのエントリを更新する

        Args:
            info: 新しいエントリ情報（Noneならエントリを削除）
            path: エントリのパス
        """
        row = self.find_row(path)
        if info is None:
            if row is not None:
                self.removeRow(row)
            return
        item = self._create_item(info)
        if row is None:
            self.appendRow(item)
        else:
            self.setItem(row, item)

    def _create_item(self, info: Dict[str, Any]) -> QStandardItem:
        name = info['name']
        if info['is_dir']:
            icon = self.icon_provider.icon(QFileIconProvider.IconType.Folder)
        elif info['is_archive']:
            icon = self.archive_icon
        else:
            icon = self.icon_provider.icon(QFileInfo(info['path']))

        item = QStandardItem(icon, name)
        item.setData(info['is_dir'], ROLE_IS_DIR)
        item.setData(info['size'], ROLE_SIZE)
        item.setData(info['modified'], ROLE_MODIFIED)
        item.setData(info['path'], ROLE_PATH)
        item.setData(info['is_archive'], ROLE_IS_ARCHIVE)

        type_str = "書庫" if info['is_archive'] else "フォルダ" if info['is_dir'] else "ファイル"
        item.setToolTip(f"名前: {name}\n"
                        f"種類: {type_str}\n"
                        f"サイズ: {self._format_size(info['size']) if info['size'] else '-'}\n"
                        f"更新日: {info['modified']}")
        return item

    def _format_size(self, size: int) -> str:
        """ファイルサイズを人間が読みやすい形式にフォーマット"""
        if size < 1024:
            return f"{size} B"
        elif size < 1024 * 1024:
            return f"{size / 1024:.1f} KB"
        elif size < 1024 * 1024 * 1024:
            return f"{size / (1024 * 1024):.1f} MB"
        else:
            return f"{size / (1024 * 1024 * 1024):.1f} GB"
