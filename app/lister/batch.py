"""
バッチモード

GUIを使わずに1つのパスを書庫化または展開し、出力を標準出力へ流す。
"""

import os
import sys
from concurrent import futures
from typing import List, Optional, TextIO

from arc import PackerSettings
from logutils import log_print, ERROR
from proc.events import EventQueue
from proc.host import SubprocessHost
from proc.runner import CommandRunner
from proc.surface import LogSurface, SurfacePool, SurfacePresenter

from app.actions import PackActionHandler
from app.completion import CompletionHandler
from app.listing import ListingRegistry, ListingView


class StaticListingView(ListingView):
    """
    1つのアイテムだけを指すリストビュー

    更新要求は記録するだけで何も表示しない。
    """

    def __init__(self, path: str):
        self.target = os.path.abspath(path)
        self.directory = os.path.dirname(self.target)
        self.refreshed: List[str] = []

    def path_at_cursor(self) -> Optional[str]:
        return self.target

    def refresh(self) -> None:
        self.refreshed.append(self.directory)

    def refresh_entry(self, path: str) -> None:
        self.refreshed.append(path)


class StreamPresenter(SurfacePresenter):
    """サーフェスの内容をストリームへ書き出すプレゼンター"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def show(self, surface: LogSurface) -> None:
        self.stream.write(surface.text())
        self.stream.flush()
        surface.add_listener(self._on_surface_changed)

    def _on_surface_changed(self, surface: LogSurface, text: Optional[str]) -> None:
        if text:
            self.stream.write(text)
            self.stream.flush()


def run_batch(path: str, settings: PackerSettings, list_only: bool = False,
              timeout: Optional[float] = None, stream: Optional[TextIO] = None,
              event_queue: Optional[EventQueue] = None) -> int:
    """
    1つのパスを書庫化または展開する

    Args:
        path: 対象のパス
        settings: 書庫化・展開の設定
        list_only: 書庫の場合に一覧表示のみ行うかどうか
        timeout: 完了を待つ最大時間（秒）。超えた場合は子プロセスを終了させる
        stream: 出力先（Noneの場合は標準出力）
        event_queue: コマンドイベントの発行先（Noneの場合は発行しない）

    Returns:
        int: コマンドが正常終了し結果パスが存在すれば0、それ以外は1
             （パスが存在しない場合は2）
    """
    if not os.path.exists(path):
        log_print(ERROR, f"パスが存在しません: {path}")
        return 2

    registry = ListingRegistry()
    view = StaticListingView(path)
    registry.register(view)

    runner = CommandRunner(SubprocessHost(settings.shell),
                           SurfacePool(StreamPresenter(stream)),
                           CompletionHandler(registry),
                           event_queue)
    handler = PackActionHandler(runner, settings)

    try:
        run = handler.perform_on_current_item(view, list_only=list_only)
    except OSError as e:
        log_print(ERROR, f"コマンドを起動できませんでした: {e}")
        return 1

    try:
        _, message = run.wait(timeout)
    except futures.TimeoutError:
        log_print(ERROR, f"{timeout}秒以内に終了しなかったため中断します: {run.command}")
        run.process.terminate()
        return 1

    if message != "finished":
        return 1
    if run.result_path and not os.path.exists(run.result_path):
        return 1
    return 0
