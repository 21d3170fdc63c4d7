"""
プロセスホスト

シェルコマンドを子プロセスとして起動し、出力を出力先へ流し、
終了時にコールバックを呼び出す。
"""

import os
import subprocess
import threading
from typing import Callable, List, Optional

from logutils import log_print, log_trace, DEBUG, ERROR

DEFAULT_SHELL = '/bin/sh'

ExitCallback = Callable[[str], None]


def status_message(returncode: int) -> str:
    """
    終了コードから状態メッセージを作る

    Args:
        returncode: プロセスの終了コード（負数はシグナル番号）

    Returns:
        str: "finished" / "exited abnormally with code N" / "killed by signal N"
    """
    if returncode == 0:
        return "finished"
    if returncode < 0:
        return f"killed by signal {-returncode}"
    return f"exited abnormally with code {returncode}"


def default_encoding() -> str:
    """子プロセスの出力をデコードするエンコーディング"""
    return 'cp932' if os.name == 'nt' else 'utf-8'


class ProcessHandle:
    """
    起動したプロセスのハンドル

    終了コールバックは一度だけ呼ばれる。終了後に登録されたコールバックは
    その場で呼ばれる。
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._callbacks: List[ExitCallback] = []
        self._exit_message: Optional[str] = None
        self._exited = threading.Event()

    @property
    def pid(self) -> Optional[int]:
        """プロセスID"""
        return None

    @property
    def exit_message(self) -> Optional[str]:
        """終了時の状態メッセージ（実行中はNone）"""
        return self._exit_message

    def is_running(self) -> bool:
        """プロセスがまだ終了処理を終えていないかどうか"""
        return not self._exited.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        プロセスの終了を待機する

        Args:
            timeout: タイムアウト時間（秒）

        Returns:
            bool: 終了したかどうか
        """
        return self._exited.wait(timeout)

    def terminate(self) -> None:
        """プロセスを終了させる（終了通知は通常どおり届く）"""
        raise NotImplementedError

    def add_exit_callback(self, callback: ExitCallback) -> None:
        """
        終了コールバックを登録する

        Args:
            callback: 状態メッセージを受け取る関数
        """
        with self._lock:
            if self._exit_message is None:
                self._callbacks.append(callback)
                return
            message = self._exit_message
        self._invoke(callback, message)

    def _notify_exit(self, message: str) -> None:
        """
        終了を通知する（2回目以降は無視）

        コールバックがすべて戻るまで is_running() はTrueのままにする。
        """
        with self._lock:
            if self._exit_message is not None:
                return
            self._exit_message = message
            callbacks = list(self._callbacks)
            self._callbacks.clear()

        try:
            for callback in callbacks:
                self._invoke(callback, message)
        finally:
            self._exited.set()

    def _invoke(self, callback: ExitCallback, message: str) -> None:
        try:
            callback(message)
        except Exception as e:
            log_trace(e, ERROR, f"終了コールバックでエラーが発生しました: {e}", name="arcpack.proc")


class ProcessHost:
    """
    プロセスホストの基底クラス
    """

    def __init__(self, shell: str = DEFAULT_SHELL):
        self.shell = shell

    def start(self, command: str, cwd: str, sink, shell: Optional[str] = None) -> ProcessHandle:
        """
        コマンドを起動する

        Args:
            command: シェルに渡すコマンド文字列
            cwd: 作業ディレクトリ
            sink: 出力先（write(text) を持つオブジェクト）
            shell: 使用するシェル（Noneの場合はホストの既定値）

        Returns:
            ProcessHandle: 起動したプロセスのハンドル
        """
        raise NotImplementedError


class SubprocessHandle(ProcessHandle):
    """subprocess.Popen をラップしたハンドル"""

    def __init__(self, popen: subprocess.Popen):
        super().__init__()
        self.popen = popen

    @property
    def pid(self) -> Optional[int]:
        return self.popen.pid

    @property
    def returncode(self) -> Optional[int]:
        return self.popen.returncode

    def terminate(self) -> None:
        if self.popen.poll() is None:
            log_print(DEBUG, f"プロセス {self.popen.pid} を終了させます", name="arcpack.proc")
            self.popen.terminate()

    def _pump(self, sink, encoding: str) -> None:
        """出力を読み取って出力先へ流し、終了を通知する（読み取りスレッド）"""
        try:
            for line in iter(self.popen.stdout.readline, b''):
                sink.write(line.decode(encoding, errors='replace'))
        except Exception as e:
            log_trace(e, ERROR, f"出力の読み取り中にエラーが発生しました: {e}", name="arcpack.proc")
        finally:
            self.popen.stdout.close()
            returncode = self.popen.wait()
            log_print(DEBUG, f"プロセス {self.popen.pid} が終了しました (code={returncode})", name="arcpack.proc")
            self._notify_exit(status_message(returncode))


class SubprocessHost(ProcessHost):
    """
    subprocessとスレッドでコマンドを実行するプロセスホスト

    子プロセスごとに1本の読み取りスレッドを使い、終了コールバックは
    そのスレッドから呼ばれる。
    """

    def __init__(self, shell: str = DEFAULT_SHELL, encoding: Optional[str] = None):
        super().__init__(shell)
        self.encoding = encoding or default_encoding()

    def start(self, command: str, cwd: str, sink, shell: Optional[str] = None) -> SubprocessHandle:
        popen = subprocess.Popen(
            [shell or self.shell, '-c', command],
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        log_print(DEBUG, f"プロセス {popen.pid} を起動しました: {command}", name="arcpack.proc")

        handle = SubprocessHandle(popen)
        reader = threading.Thread(
            target=handle._pump,
            args=(sink, self.encoding),
            name=f"arcpack-reader-{popen.pid}",
            daemon=True
        )
        reader.start()
        return handle
