"""
非同期コマンドランナー

コマンドをバックグラウンドで実行し、出力をサーフェスへ流し、
終了時に完了ハンドラを呼び出す。呼び出し元は子プロセスの終了を待たない。
"""

import time
import uuid
from concurrent.futures import Future
from typing import Callable, Optional

from logutils import log_print, log_trace, DEBUG, INFO, ERROR

from .events import CommandEvent, CommandStatus, EventQueue
from .host import ProcessHost, ProcessHandle
from .surface import LogSurface, SurfacePool

# 完了ハンドラ: (surface, status_message)
CompletionCallback = Callable[[LogSurface, str], object]


def format_header(cwd: str, command: str) -> str:
    """サーフェスの先頭に書くヘッダー"""
    return f"Directory: {cwd}\nCommand: {command}\n\n"


class CommandRun:
    """
    1回のコマンド実行

    future は終了時に (surface, status_message) で一度だけ解決される。
    """

    def __init__(self, surface: LogSurface, command: str, cwd: str, result_path: Optional[str]):
        self.id = str(uuid.uuid4())
        self.surface = surface
        self.command = command
        self.cwd = cwd
        self.result_path = result_path
        self.process: Optional[ProcessHandle] = None
        self.future: Future = Future()

    def done(self) -> bool:
        """終了処理まで済んだかどうか"""
        if not self.future.done():
            return False
        return self.process is None or not self.process.is_running()

    def wait(self, timeout: Optional[float] = None):
        """
        終了を待機する

        完了ハンドラが戻り、プロセスハンドルが終了を報告するまで待つ。

        Args:
            timeout: タイムアウト時間（秒）

        Returns:
            tuple: (surface, status_message)

        Raises:
            concurrent.futures.TimeoutError: 時間内に終了しなかった場合
        """
        result = self.future.result(timeout)
        if self.process is not None:
            self.process.wait(timeout)
        return result


class CommandRunner:
    """
    サーフェスを割り当ててコマンドを非同期に実行するクラス
    """

    def __init__(self, host: ProcessHost, pool: Optional[SurfacePool] = None,
                 on_complete: Optional[CompletionCallback] = None,
                 event_queue: Optional[EventQueue] = None):
        """
        初期化

        Args:
            host: プロセスホスト
            pool: サーフェスプール（Noneの場合は新規作成）
            on_complete: 完了ハンドラ
            event_queue: イベントの発行先（Noneの場合は発行しない）
        """
        self.host = host
        self.pool = pool or SurfacePool()
        self.on_complete = on_complete
        self.event_queue = event_queue

    def run(self, command: str, cwd: str, result_path: Optional[str] = None,
            shell: Optional[str] = None) -> CommandRun:
        """
        コマンドを起動する

        Args:
            command: シェルに渡すコマンド文字列
            cwd: 作業ディレクトリ
            result_path: 成功時に存在するはずのパス（Noneなら更新しない）
            shell: 使用するシェル（Noneの場合はホストの既定値）

        Returns:
            CommandRun: 実行中のコマンド

        Raises:
            OSError: プロセスを起動できなかった場合
        """
        surface = self.pool.acquire()
        with surface.writable():
            surface.clear()
            surface.insert(format_header(cwd, command))
        surface.set_pending_result(result_path)

        run = CommandRun(surface, command, cwd, result_path)
        self.pool.display(surface)

        try:
            process = self.host.start(command, cwd, surface, shell=shell)
        except OSError as e:
            log_trace(e, ERROR, f"コマンドを起動できませんでした: {command}", name="arcpack.proc")
            surface.take_pending_result()
            surface.write(f"Process failed to start: {e}\n")
            surface.detach()
            self._publish(run, CommandStatus.FAILED, str(e))
            raise

        surface.attach(process)
        run.process = process
        log_print(INFO, f"[{surface.ordinal}] {command} (in {cwd})", name="arcpack.proc")
        self._publish(run, CommandStatus.STARTED)

        process.add_exit_callback(lambda message: self._on_exit(run, message))
        return run

    def _on_exit(self, run: CommandRun, message: str) -> None:
        """プロセス終了時の処理"""
        surface = run.surface
        surface.write(f"\nProcess {message}\n")
        log_print(DEBUG, f"[{surface.ordinal}] {message}", name="arcpack.proc")

        if self.on_complete:
            try:
                self.on_complete(surface, message)
            except Exception as e:
                log_trace(e, ERROR, f"完了ハンドラでエラーが発生しました: {e}", name="arcpack.proc")

        self._publish(run, CommandStatus.FINISHED, message)
        if not run.future.done():
            run.future.set_result((surface, message))

    def _publish(self, run: CommandRun, status: CommandStatus, message: str = "") -> None:
        if self.event_queue is None:
            return
        self.event_queue.publish(CommandEvent(
            run_id=run.id,
            ordinal=run.surface.ordinal,
            command=run.command,
            status=status,
            result_path=run.result_path,
            message=message,
            timestamp=time.time()
        ))
