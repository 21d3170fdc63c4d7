"""
arcpack アーカイブ処理モジュール

書庫の判定、設定、書庫化・展開コマンドの組み立てを提供
"""

from .arc import ItemKind, ArchiveMode, ArchiveRequest, ArchiveCommand
from .classifier import ARCHIVE_EXTENSIONS, archive_suffix, is_archive, classify
from .settings import (
    PackerSettings, default_settings, toggled,
    add_settings_arguments, settings_from_args
)
from .commands import CommandBuilder, NotAnArchiveError

__all__ = [
    'ItemKind', 'ArchiveMode', 'ArchiveRequest', 'ArchiveCommand',
    'ARCHIVE_EXTENSIONS', 'archive_suffix', 'is_archive', 'classify',
    'PackerSettings', 'default_settings', 'toggled',
    'add_settings_arguments', 'settings_from_args',
    'CommandBuilder', 'NotAnArchiveError'
]
