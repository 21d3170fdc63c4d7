"""
ロギング用ユーティリティ

arcpack全体でのロギング操作を統一的に扱うためのユーティリティ関数群
"""
import os
import sys
import traceback
from typing import Optional, Any

# Pythonの標準loggingモジュールをインポート
import logging as py_logging

# ログレベルの定数定義
DEBUG = 10
INFO = 20
WARNING = 30
ERROR = 40
CRITICAL = 50

# ロガー名の既定値
DEFAULT_LOGGER_NAME = 'arcpack'

_FORMAT = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'

# デフォルトのログレベル
_log_level = ERROR

# ロガーオブジェクトの格納用辞書
_loggers = {}

# ロギング先のファイルパス
_log_file = None


def setup_logging(level: int = ERROR, logfile: str = None) -> None:
    """
    ロギングシステムをセットアップする

    Args:
        level: ログレベル（デフォルトはERROR）
        logfile: ログの出力先ファイル（デフォルトはNone）
    """
    global _log_level, _log_file
    _log_level = level

    if logfile:
        try:
            # ログディレクトリが存在しない場合は作成
            log_dir = os.path.dirname(logfile)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir)
            _log_file = os.path.abspath(logfile)
        except OSError as e:
            sys.stderr.write(f"ログファイルを準備できませんでした: {e}\n")
            _log_file = None

    # 既存のロガーのレベルとファイルハンドラを更新
    for logger in _loggers.values():
        logger.setLevel(_log_level)
        if _log_file:
            _attach_file_handler(logger)


def get_log_level() -> int:
    """現在のログレベルを取得する"""
    return _log_level


def _attach_file_handler(logger: py_logging.Logger) -> None:
    """ロガーにファイルハンドラを追加する（重複追加はしない）"""
    for handler in logger.handlers:
        if isinstance(handler, py_logging.FileHandler) and handler.baseFilename == _log_file:
            return
    file_handler = py_logging.FileHandler(_log_file, encoding='utf-8')
    file_handler.setFormatter(py_logging.Formatter(_FORMAT))
    logger.addHandler(file_handler)


def get_logger(name: str) -> py_logging.Logger:
    """
    名前付きのロガーを取得する

    Args:
        name: ロガー名

    Returns:
        設定済みのロガーオブジェクト
    """
    if name in _loggers:
        return _loggers[name]

    logger = py_logging.getLogger(name)
    logger.setLevel(_log_level)
    # ルートロガーへの伝播は止めて二重出力を防ぐ
    logger.propagate = False

    console = py_logging.StreamHandler()
    console.setFormatter(py_logging.Formatter(_FORMAT))
    logger.addHandler(console)

    if _log_file:
        _attach_file_handler(logger)

    _loggers[name] = logger
    return logger


def log_print(level: int, message: Any, *args, name: str = None, **kwargs) -> None:
    """
    指定したレベルでメッセージをログに出力する

    Args:
        level: ログレベル
        message: 出力するメッセージ
        *args: メッセージのフォーマット引数
        name: ロガー名（デフォルトは'arcpack'）
        **kwargs: その他のキーワード引数
    """
    if level < _log_level:
        return

    logger = get_logger(name or DEFAULT_LOGGER_NAME)
    logger.log(_normalize_level(level), message, *args, **kwargs)


def log_trace(e: Optional[BaseException], level: int, message: Any, *args, name: str = None, **kwargs) -> None:
    """
    例外のトレース情報を含めてログに出力する

    Args:
        e: 例外オブジェクト（NoneでもOK）
        level: ログレベル
        message: 出力するメッセージ
        *args: メッセージのフォーマット引数
        name: ロガー名（デフォルトは'arcpack'）
        **kwargs: その他のキーワード引数
    """
    if level < _log_level:
        return

    log_print(level, message, *args, name=name, **kwargs)

    if e is not None:
        stack = ''.join(traceback.format_exception(type(e), e, e.__traceback__))
    else:
        stack = ''.join(traceback.format_stack()[:-1])  # 自分自身の呼び出しを除外

    logger = get_logger(name or DEFAULT_LOGGER_NAME)
    logger.log(_normalize_level(level), "スタックトレース:\n%s", stack)


def _normalize_level(level: int) -> int:
    """任意の数値レベルを標準の5段階に丸める"""
    if level >= CRITICAL:
        return CRITICAL
    if level >= ERROR:
        return ERROR
    if level >= WARNING:
        return WARNING
    if level >= INFO:
        return INFO
    return DEBUG
