"""
リストビューの共通インターフェース

ディレクトリの内容を表示するビューが実装する操作と、開いているビューの登録簿
"""

import datetime
import os
import re
import threading
from typing import Any, Dict, List, Optional

from arc import is_archive


def normalize_directory(path: str) -> str:
    """比較用にディレクトリパスを正規化する"""
    return os.path.normcase(os.path.abspath(path))


def natural_sort_key(text: str) -> List[str]:
    """
    自然順ソート用のキーを生成（数値部分を数値として扱う）

    数値部分は0詰めの文字列にして、型の混在で比較が失敗しないようにする。

    Args:
        text: ソートする文字列

    Returns:
        比較可能な文字列のリスト
    """
    parts = []
    for digit, non_digit in re.findall(r'(\d+)|(\D+)', text or ""):
        if digit:
            parts.append(f"{int(digit):020d}")
        else:
            parts.append(non_digit.lower())
    return parts or [""]


def entry_info(path: str) -> Optional[Dict[str, Any]]:
    """
    1つのエントリの表示用情報を取得する

    Args:
        path: エントリのパス

    Returns:
        name, path, is_dir, is_archive, size, modified を持つ辞書（存在しなければNone）
    """
    try:
        st = os.stat(path)
    except OSError:
        return None
    is_dir = os.path.isdir(path)
    name = os.path.basename(path)
    return {
        'name': name,
        'path': path,
        'is_dir': is_dir,
        'is_archive': not is_dir and is_archive(name),
        'size': 0 if is_dir else st.st_size,
        'modified': datetime.datetime.fromtimestamp(st.st_mtime).strftime('%Y-%m-%d %H:%M'),
    }


def scan_directory(directory: str, show_hidden: bool = False) -> List[Dict[str, Any]]:
    """
    ディレクトリの内容を表示用に読み込む

    フォルダ → 書庫 → ファイル の順に、それぞれ自然順で並べる。

    Args:
        directory: 読み込むディレクトリ
        show_hidden: ドットで始まるエントリも含めるかどうか

    Returns:
        entry_info の辞書のリスト
    """
    directories, archives, files = [], [], []
    with os.scandir(directory) as it:
        for dirent in it:
            if not show_hidden and dirent.name.startswith('.'):
                continue
            info = entry_info(dirent.path)
            if info is None:
                continue
            if info['is_dir']:
                directories.append(info)
            elif info['is_archive']:
                archives.append(info)
            else:
                files.append(info)

    def by_name(info):
        return natural_sort_key(info['name'])

    return sorted(directories, key=by_name) + sorted(archives, key=by_name) + sorted(files, key=by_name)


class ListingView:
    """
    ディレクトリ一覧ビューの基底クラス

    実装側は directory を保持し、カーソル位置のパス取得と再読み込みを提供する。
    """

    directory: str = ""

    def path_at_cursor(self) -> Optional[str]:
        """カーソル位置のアイテムの絶対パス（なければNone）"""
        raise NotImplementedError

    def refresh(self) -> None:
        """表示中のディレクトリを読み込み直す"""
        raise NotImplementedError

    def refresh_entry(self, path: str) -> None:
        """
        1つのエントリだけを更新する

        既定ではディレクトリ全体を読み込み直す。
        """
        self.refresh()

    def shows_directory(self, directory: str) -> bool:
        """指定したディレクトリを表示しているかどうか"""
        if not self.directory:
            return False
        return normalize_directory(self.directory) == normalize_directory(directory)


class ListingRegistry:
    """
    開いているリストビューの登録簿
    """

    def __init__(self):
        self._views: List[ListingView] = []
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._views)

    def register(self, view: ListingView) -> None:
        """ビューを登録する"""
        with self._lock:
            if view not in self._views:
                self._views.append(view)

    def unregister(self, view: ListingView) -> bool:
        """ビューの登録を解除する"""
        with self._lock:
            try:
                self._views.remove(view)
                return True
            except ValueError:
                return False

    def views_showing(self, directory: str) -> List[ListingView]:
        """
        指定したディレクトリを表示しているビューを取得する

        Args:
            directory: ディレクトリのパス

        Returns:
            List[ListingView]: 該当するビュー
        """
        with self._lock:
            views = list(self._views)
        return [view for view in views if view.shows_directory(directory)]
