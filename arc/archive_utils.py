"""
アーカイブ操作のユーティリティ関数

外部コマンドの検出とコマンド文字列組み立て用のヘルパー関数群
"""

import os
import shlex
import shutil
from typing import Iterable


def find_executable(name: str) -> str:
    """
    指定した名前の実行ファイルをPATHから検索する

    Args:
        name: 検索する実行ファイル名

    Returns:
        実行ファイルのパス、見つからない場合は空文字列
    """
    return shutil.which(name) or ""


def find_first_executable(names: Iterable[str], default: str = "") -> str:
    """
    候補のうちPATH上で最初に見つかった実行ファイル名を返す

    Args:
        names: 候補の実行ファイル名
        default: どれも見つからない場合の戻り値

    Returns:
        見つかった実行ファイル名（パスではなく名前）
    """
    for name in names:
        if find_executable(name):
            return name
    return default


def quote_path(path: str) -> str:
    """シェルに渡すためにパスをクォートする"""
    return shlex.quote(path)


def strip_trailing_separators(path: str) -> str:
    """
    末尾のパス区切り文字を取り除く

    ルート（"/"）だけは区切り文字を残す
    """
    separators = os.sep + (os.altsep or "")
    stripped = path.rstrip(separators)
    return stripped or path[:1]


def containing_directory(path: str) -> str:
    """パスを含むディレクトリの絶対パスを返す"""
    return os.path.dirname(os.path.abspath(strip_trailing_separators(path)))
