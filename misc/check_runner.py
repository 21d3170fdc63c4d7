#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
procモジュールの動作確認用スクリプト
一時ディレクトリにファイルを作り、書庫化→展開をコマンドランナーで実行して
サーフェスの内容とイベントを表示する
"""

import os
import sys
import tempfile
import argparse

# プロジェクトルートを追加して、各モジュールをインポートできるようにする
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, project_root)

from arc import default_settings, CommandBuilder
from logutils import setup_logging, DEBUG, ERROR
from proc import (
    SubprocessHost, SurfacePool, CommandRunner, EventQueue
)


def run_and_print(runner, archive_command, timeout):
    """コマンドを実行して完了まで待ち、サーフェスの内容を表示する"""
    run = runner.run(archive_command.command, archive_command.cwd, archive_command.result_path)
    surface, message = run.wait(timeout)
    print(f"===== サーフェス {surface.ordinal} ({message}) =====")
    print(surface.text())
    return run


def main():
    parser = argparse.ArgumentParser(description="コマンドランナーの動作確認")
    parser.add_argument("--debug", action="store_true", help="デバッグ出力を有効にする")
    parser.add_argument("--timeout", type=float, default=30.0, help="1コマンドの待機時間（秒）")
    args = parser.parse_args()

    setup_logging(DEBUG if args.debug else ERROR)

    settings = default_settings()
    builder = CommandBuilder(settings)
    events = EventQueue()
    runner = CommandRunner(SubprocessHost(settings.shell), SurfacePool(), event_queue=events)

    with tempfile.TemporaryDirectory() as tmpdir:
        source = os.path.join(tmpdir, "sample")
        os.makedirs(source)
        for i in range(3):
            with open(os.path.join(source, f"file{i}.txt"), "w", encoding="utf-8") as f:
                f.write(f"sample {i}\n")

        pack = builder.pack(source)
        run_and_print(runner, pack, args.timeout)
        print(f"書庫の存在: {os.path.exists(pack.request.target)}")

        listing = builder.unpack(pack.request.target, list_only=True)
        run_and_print(runner, listing, args.timeout)

        print("===== イベント =====")
        for event in events.get_events(max_events=100):
            print(event.describe())


if __name__ == "__main__":
    main()
