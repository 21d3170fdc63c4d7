"""
外部コマンド実行モジュール

子プロセスでシェルコマンドを実行し、出力のサーフェス管理と完了通知を提供します。
"""

from .host import (
    ProcessHost, ProcessHandle, SubprocessHost, SubprocessHandle,
    status_message, DEFAULT_SHELL
)
from .surface import (
    LogSurface, SurfacePool, SurfacePresenter, SurfaceReadOnlyError
)
from .runner import CommandRunner, CommandRun, format_header
from .events import (
    CommandEvent, CommandStatus, EventQueue, get_event_queue,
    subscribe_to_events, unsubscribe_from_events,
    start_event_processing, stop_event_processing
)


# インターフェース関数
def create_runner(host=None, presenter=None, on_complete=None, shell=DEFAULT_SHELL,
                  event_queue=None):
    """
    新しいコマンドランナーを作成する

    Args:
        host: プロセスホスト（Noneの場合はSubprocessHost）
        presenter: サーフェスの表示を担当するオブジェクト
        on_complete: 完了ハンドラ
        shell: hostを作成する場合に使うシェル
        event_queue: イベントの発行先（Noneの場合は発行しない）

    Returns:
        CommandRunner: 作成されたランナー
    """
    host = host or SubprocessHost(shell)
    return CommandRunner(host, SurfacePool(presenter), on_complete, event_queue)


def initialize_event_system(auto_start=True):
    """
    共有イベントキューを用意する

    Args:
        auto_start: 配信スレッドを開始するかどうか

    Returns:
        EventQueue: 共有イベントキュー
    """
    event_queue = get_event_queue()
    if auto_start:
        start_event_processing()
    return event_queue


__all__ = [
    # プロセス関連
    'ProcessHost', 'ProcessHandle', 'SubprocessHost', 'SubprocessHandle',
    'status_message', 'DEFAULT_SHELL',

    # サーフェス関連
    'LogSurface', 'SurfacePool', 'SurfacePresenter', 'SurfaceReadOnlyError',

    # ランナー関連
    'CommandRunner', 'CommandRun', 'format_header', 'create_runner',

    # イベント関連
    'CommandEvent', 'CommandStatus', 'EventQueue', 'get_event_queue',
    'subscribe_to_events', 'unsubscribe_from_events',
    'start_event_processing', 'stop_event_processing',
    'initialize_event_system'
]
