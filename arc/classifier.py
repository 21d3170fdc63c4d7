"""
書庫判定

ファイル名の拡張子だけを見て、既存の書庫か書庫化対象かを判定する
"""

from typing import Optional

from .arc import ItemKind

# 認識する書庫の拡張子（大文字小文字を区別する）
ARCHIVE_EXTENSIONS = (
    '.tar',
    '.tar.z',
    '.tar.gz',
    '.tar.Z',
    '.tgz',
    '.tar.xz',
    '.txz',
    '.rar',
    '.zip',
    '.7z',
    '.tar.bz2',
)

# tarで扱う拡張子
TAR_EXTENSIONS = frozenset(ext for ext in ARCHIVE_EXTENSIONS
                           if ext.startswith('.tar') or ext in ('.tgz', '.txz'))

# 長い拡張子から順に照合する
_BY_LENGTH = sorted(ARCHIVE_EXTENSIONS, key=len, reverse=True)


def archive_suffix(path: str) -> Optional[str]:
    """
    パスに一致する書庫の拡張子を返す

    Args:
        path: 判定するパス

    Returns:
        一致した拡張子（最長一致）、書庫でなければNone
    """
    if not path:
        return None
    for ext in _BY_LENGTH:
        if path.endswith(ext):
            return ext
    return None


def is_archive(path: str) -> bool:
    """パスが既存の書庫を指しているかどうか"""
    return archive_suffix(path) is not None


def classify(path: str) -> ItemKind:
    """
    パスを書庫か書庫化対象かに分類する

    Args:
        path: 分類するパス（任意の文字列）

    Returns:
        ItemKind.ARCHIVE または ItemKind.PACKABLE
    """
    return ItemKind.ARCHIVE if is_archive(path) else ItemKind.PACKABLE
