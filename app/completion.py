"""
完了ハンドラ

コマンド終了後、サーフェスに残された結果パスが実際に存在するかどうかで
成否を判断し、該当するリストビューを更新する。終了コードは見ない。
"""

import os
from typing import List

from logutils import log_print, DEBUG, INFO

from proc.surface import LogSurface
from .listing import ListingRegistry, ListingView


class CompletionHandler:
    """
    コマンド完了時にリストビューを更新するハンドラ
    """

    def __init__(self, registry: ListingRegistry):
        """
        初期化

        Args:
            registry: 開いているリストビューの登録簿
        """
        self.registry = registry

    def __call__(self, surface: LogSurface, message: str) -> List[ListingView]:
        """
        完了時の処理

        Args:
            surface: コマンドの出力先サーフェス
            message: プロセスの状態メッセージ

        Returns:
            List[ListingView]: 更新したビュー
        """
        result_path = surface.take_pending_result()
        if not result_path:
            return []

        if os.path.isdir(result_path):
            views = self.registry.views_showing(result_path)
            for view in views:
                view.refresh()
            log_print(INFO, f"{result_path} を表示中のビュー {len(views)} 件を更新しました ({message})",
                      name="arcpack.app")
            return views

        if os.path.exists(result_path):
            views = self.registry.views_showing(os.path.dirname(os.path.abspath(result_path)))
            for view in views:
                view.refresh_entry(result_path)
            log_print(INFO, f"{result_path} のエントリを更新しました ({message})", name="arcpack.app")
            return views

        # 失敗した操作はサーフェスの出力でのみ確認できる
        log_print(DEBUG, f"結果パスが存在しないため更新しません: {result_path} ({message})",
                  name="arcpack.app")
        return []
