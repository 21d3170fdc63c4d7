"""
arcpack エントリポイント

コマンドライン引数を解析し、GUIまたはバッチモードを起動する
"""

import argparse
import os
import sys

from arc import add_settings_arguments, settings_from_args
from logutils import setup_logging, log_print, DEBUG, INFO, ERROR
from proc import (
    initialize_event_system, subscribe_to_events, unsubscribe_from_events,
    stop_event_processing, CommandEvent
)


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数のパーサーを作成する"""
    parser = argparse.ArgumentParser(description="arcpack - ディレクトリリストから書庫化・展開")
    parser.add_argument("path", nargs="?", default=os.getcwd(),
                        help="開くディレクトリ（バッチモードでは対象のパス）")
    parser.add_argument("--debug", action="store_true", help="デバッグモードで起動")
    parser.add_argument("--log-file", default=None, help="ログの出力先ファイル")
    parser.add_argument("--batch", action="store_true",
                        help="GUIを使わずにpathを書庫化または展開する")
    parser.add_argument("--list", dest="list_only", action="store_true",
                        help="バッチモードで書庫の内容を表示するだけにする")
    parser.add_argument("--timeout", type=float, default=None,
                        help="バッチモードで完了を待つ最大時間（秒）")
    add_settings_arguments(parser)
    return parser


def _log_event(event: CommandEvent) -> None:
    """コマンドイベントをログに出力する"""
    log_print(DEBUG, event.describe(), name="arcpack.events")


def main(argv=None) -> int:
    """アプリケーションのエントリポイント"""
    args = build_parser().parse_args(argv)

    log_level = DEBUG if args.debug else ERROR
    setup_logging(log_level, args.log_file)
    if args.debug:
        log_print(INFO, "デバッグモードが有効化されました")

    event_queue = initialize_event_system()
    subscribe_to_events(_log_event)

    settings = settings_from_args(args)

    try:
        if args.batch:
            from .batch import run_batch
            return run_batch(args.path, settings, list_only=args.list_only,
                             timeout=args.timeout, event_queue=event_queue)

        from .viewer import run_gui
        directory = args.path if os.path.isdir(args.path) else os.path.dirname(os.path.abspath(args.path))
        return run_gui(directory, settings, event_queue)
    finally:
        unsubscribe_from_events(_log_event)
        stop_event_processing(timeout=1.0)


if __name__ == "__main__":
    sys.exit(main())
