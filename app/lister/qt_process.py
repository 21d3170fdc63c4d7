"""
QProcessによるプロセスホスト

GUIではイベントループ上でコマンドを実行し、出力と終了通知を
メインスレッドで受け取る。
"""

import codecs
from typing import Optional

from PySide6.QtCore import QObject, QProcess

from logutils import log_print, DEBUG, WARNING
from proc.host import ProcessHost, ProcessHandle, DEFAULT_SHELL, default_encoding, status_message


class QtProcessHandle(ProcessHandle):
    """QProcess をラップしたハンドル"""

    def __init__(self, process: QProcess, sink, encoding: str):
        super().__init__()
        self.process = process
        self._sink = sink
        # チャンク境界で分断されたマルチバイト文字を持ち越す
        self._decoder = codecs.getincrementaldecoder(encoding)(errors='replace')

    @property
    def pid(self) -> Optional[int]:
        pid = self.process.processId()
        return pid or None

    def terminate(self) -> None:
        # 終了通知後のQProcessは deleteLater 済み
        if self.exit_message is None:
            self.process.kill()

    def _read_output(self) -> None:
        data = self.process.readAllStandardOutput().data()
        if data:
            self._sink.write(self._decoder.decode(bytes(data)))

    def _on_finished(self, exit_code: int, exit_status: QProcess.ExitStatus) -> None:
        self._read_output()
        tail = self._decoder.decode(b'', final=True)
        if tail:
            self._sink.write(tail)
        if exit_status == QProcess.ExitStatus.CrashExit:
            message = "crashed"
        else:
            message = status_message(exit_code)
        log_print(DEBUG, f"QProcess が終了しました: {message}", name="arcpack.proc")
        self._notify_exit(message)
        self.process.deleteLater()

    def _on_error(self, error: QProcess.ProcessError) -> None:
        # 起動失敗のときは finished が発行されない
        if error == QProcess.ProcessError.FailedToStart:
            log_print(WARNING, f"プロセスを起動できませんでした: {self.process.errorString()}",
                      name="arcpack.proc")
            self._sink.write(f"{self.process.errorString()}\n")
            self._notify_exit("failed to start")
            self.process.deleteLater()


class QtProcessHost(ProcessHost):
    """
    QProcessでコマンドを実行するプロセスホスト
    """

    def __init__(self, shell: str = DEFAULT_SHELL, parent: Optional[QObject] = None,
                 encoding: Optional[str] = None):
        super().__init__(shell)
        self.parent = parent
        self.encoding = encoding or default_encoding()

    def start(self, command: str, cwd: str, sink, shell: Optional[str] = None) -> QtProcessHandle:
        process = QProcess(self.parent)
        process.setProcessChannelMode(QProcess.ProcessChannelMode.MergedChannels)
        process.setWorkingDirectory(cwd)

        handle = QtProcessHandle(process, sink, self.encoding)
        process.readyReadStandardOutput.connect(handle._read_output)
        process.finished.connect(handle._on_finished)
        process.errorOccurred.connect(handle._on_error)

        process.start(shell or self.shell, ['-c', command])
        return handle
