from unittest.mock import MagicMock

import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from app.lister.qt_process import QtProcessHandle  # noqa: E402

QProcess = QtCore.QProcess


class Sink:
    def __init__(self):
        self.chunks = []

    def write(self, text):
        self.chunks.append(text)


def make_handle(*outputs):
    process = MagicMock()
    process.readAllStandardOutput.return_value.data.side_effect = list(outputs) + [b""] * 4
    process.errorString.return_value = "No such file or directory"
    sink = Sink()
    return QtProcessHandle(process, sink, "utf-8"), process, sink


@pytest.mark.parametrize("exit_code, exit_status, message", [
    (0, QProcess.ExitStatus.NormalExit, "finished"),
    (2, QProcess.ExitStatus.NormalExit, "exited abnormally with code 2"),
    (0, QProcess.ExitStatus.CrashExit, "crashed"),
])
def test_finished_maps_exit_status(exit_code, exit_status, message):
    handle, process, _ = make_handle()
    seen = []
    handle.add_exit_callback(seen.append)

    handle._on_finished(exit_code, exit_status)

    assert seen == [message]
    assert not handle.is_running()
    process.deleteLater.assert_called_once()


def test_failed_to_start_resolves_once():
    handle, _, sink = make_handle()
    seen = []
    handle.add_exit_callback(seen.append)

    handle._on_error(QProcess.ProcessError.FailedToStart)
    handle._on_error(QProcess.ProcessError.FailedToStart)

    assert seen == ["failed to start"]
    assert sink.chunks == ["No such file or directory\n"]


def test_output_split_inside_multibyte_character():
    text = "書庫".encode("utf-8")
    handle, _, sink = make_handle(text[:2], text[2:])

    handle._read_output()
    handle._read_output()

    assert "".join(sink.chunks) == "書庫"


def test_terminate_after_exit_is_ignored():
    handle, process, _ = make_handle()
    handle._on_finished(0, QProcess.ExitStatus.NormalExit)

    handle.terminate()

    process.kill.assert_not_called()
