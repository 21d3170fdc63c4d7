"""
アーカイブ操作の要求と型定義

書庫化・展開の要求を表すクラス
"""

from enum import Enum
from typing import NamedTuple, Optional


class ItemKind(Enum):
    """リスト上のアイテムの種別を表す列挙型"""
    PACKABLE = 1  # 書庫化できるファイル/ディレクトリ
    ARCHIVE = 2   # 既存の書庫

    def is_archive(self) -> bool:
        """書庫かどうかを判定する"""
        return self == ItemKind.ARCHIVE


class ArchiveMode(Enum):
    """操作モードを表す列挙型"""
    PACK = "pack"        # 書庫化
    UNPACK = "unpack"    # 展開
    LIST = "list"        # 内容の一覧表示のみ


class ArchiveRequest(NamedTuple):
    """
    1回の操作要求

    ユーザーの操作ごとに作られ、一度だけ消費されます。
    """
    source: str
    mode: ArchiveMode
    target: Optional[str] = None


class ArchiveCommand(NamedTuple):
    """
    実行するシェルコマンドと、その元になった要求
    """
    request: ArchiveRequest
    command: str
    cwd: str

    @property
    def result_path(self) -> Optional[str]:
        """完了後に存在するはずのパス（一覧表示のみの場合はNone）"""
        if self.request.mode == ArchiveMode.LIST:
            return None
        return self.request.target
