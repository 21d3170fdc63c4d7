"""
arcpack アプリケーション層

リストビューの共通インターフェース、完了ハンドラ、書庫化・展開アクション
"""

from .listing import ListingView, ListingRegistry, scan_directory, entry_info
from .completion import CompletionHandler
from .actions import PackActionHandler

__all__ = [
    'ListingView', 'ListingRegistry', 'scan_directory', 'entry_info',
    'CompletionHandler', 'PackActionHandler'
]
