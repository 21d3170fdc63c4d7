import io
import shutil

import pytest

from app.lister.batch import StaticListingView, run_batch
from app.lister.main import build_parser, main
from proc import CommandStatus, EventQueue

requires_tar = pytest.mark.skipif(
    not (shutil.which("tar") and shutil.which("gzip")),
    reason="tar and gzip are required"
)


@requires_tar
def test_batch_pack(sample_tree, settings):
    out = io.StringIO()

    assert run_batch(str(sample_tree), settings, timeout=30, stream=out) == 0

    archive = sample_tree.parent / "sample.tgz"
    assert archive.exists()
    text = out.getvalue()
    assert "Command: tar -czf" in text
    assert text.endswith("\nProcess finished\n")


@requires_tar
def test_batch_list_archive(sample_tree, settings):
    run_batch(str(sample_tree), settings, timeout=30, stream=io.StringIO())
    out = io.StringIO()

    archive = sample_tree.parent / "sample.tgz"
    assert run_batch(str(archive), settings, list_only=True, timeout=30, stream=out) == 0
    assert "file0.txt" in out.getvalue()


@requires_tar
def test_batch_unpack(sample_tree, settings, tmp_path):
    run_batch(str(sample_tree), settings, timeout=30, stream=io.StringIO())
    target = tmp_path / "elsewhere"
    target.mkdir()
    archive = shutil.move(str(sample_tree.parent / "sample.tgz"), str(target))

    assert run_batch(archive, settings, timeout=30, stream=io.StringIO()) == 0
    assert (target / "sample" / "file1.txt").read_text() == "sample 1\n"


@requires_tar
def test_batch_reports_command_failure(tmp_path, settings):
    broken = tmp_path / "broken.tgz"
    broken.write_bytes(b"not an archive")

    assert run_batch(str(broken), settings, list_only=True, timeout=30, stream=io.StringIO()) == 1


def test_batch_missing_path(tmp_path, settings):
    assert run_batch(str(tmp_path / "missing"), settings) == 2


def test_static_view_points_at_item(tmp_path):
    view = StaticListingView(str(tmp_path / "x.tgz"))
    assert view.path_at_cursor() == str(tmp_path / "x.tgz")
    assert view.shows_directory(str(tmp_path))


def test_parser_defaults():
    args = build_parser().parse_args(["/tmp", "--batch", "--list"])
    assert args.batch
    assert args.list_only
    assert args.use_gzip
    assert args.timeout is None


@requires_tar
def test_main_batch(sample_tree, capsys):
    assert main([str(sample_tree), "--batch", "--timeout", "30", "--shell", "/bin/sh"]) == 0
    assert (sample_tree.parent / "sample.tgz").exists()
    assert "Process finished" in capsys.readouterr().out


@requires_tar
def test_batch_timeout_stops_command(sample_tree, settings):
    slow = settings._replace(pack_template="sleep 3; tar -czf %s %s")

    assert run_batch(str(sample_tree), slow, timeout=0.5, stream=io.StringIO()) == 1
    assert not (sample_tree.parent / "sample.tgz").exists()


@requires_tar
def test_batch_publishes_events_only_when_given_a_queue(sample_tree, settings):
    events = EventQueue()

    assert run_batch(str(sample_tree), settings, timeout=30, stream=io.StringIO(),
                     event_queue=events) == 0

    statuses = [e.status for e in events.get_events(max_events=10, timeout=1.0)]
    assert statuses == [CommandStatus.STARTED, CommandStatus.FINISHED]
