import pytest

from arc import ArchiveMode, CommandBuilder, NotAnArchiveError, toggled


def test_pack_directory_with_default_settings(settings):
    cmd = CommandBuilder(settings).pack("/home/u/proj")
    assert cmd.command == "tar -czf /home/u/proj.tgz proj"
    assert cmd.cwd == "/home/u"
    assert cmd.request.mode is ArchiveMode.PACK
    assert cmd.request.source == "/home/u/proj"
    assert cmd.request.target == "/home/u/proj.tgz"
    assert cmd.result_path == "/home/u/proj.tgz"


def test_pack_strips_trailing_separators(settings):
    cmd = CommandBuilder(settings).pack("/home/u/proj//")
    assert cmd.command == "tar -czf /home/u/proj.tgz proj"
    assert cmd.cwd == "/home/u"


def test_pack_quotes_names_with_spaces(settings):
    cmd = CommandBuilder(settings).pack("/home/u/my proj")
    assert cmd.command == "tar -czf '/home/u/my proj.tgz' 'my proj'"


def test_pack_appends_extra_flags(settings):
    cmd = CommandBuilder(settings._replace(extra_flags="--exclude=*.o")).pack("/home/u/proj")
    assert cmd.command == "tar -czf /home/u/proj.tgz proj --exclude=*.o"


def test_pack_with_sevenzip_preset(settings):
    cmd = CommandBuilder(toggled(settings)).pack("/home/u/proj")
    assert cmd.command == "7z a /home/u/proj.7z proj"
    assert cmd.result_path == "/home/u/proj.7z"


def test_pack_with_malformed_template_propagates(settings):
    with pytest.raises(TypeError):
        CommandBuilder(settings._replace(pack_template="tar -czf %s")).pack("/home/u/proj")


@pytest.mark.parametrize("name, extract, listing", [
    ("a.tar", "tar -xf /tmp/a.tar", "tar -tf /tmp/a.tar"),
    ("a.tar.gz", "tar -xzf /tmp/a.tar.gz", "tar -tzf /tmp/a.tar.gz"),
    ("a.tgz", "tar -xzf /tmp/a.tgz", "tar -tzf /tmp/a.tgz"),
    ("a.tar.xz", "tar -xJf /tmp/a.tar.xz", "tar -tJf /tmp/a.tar.xz"),
    ("a.txz", "tar -xJf /tmp/a.txz", "tar -tJf /tmp/a.txz"),
    ("a.tar.bz2", "tar -xjf /tmp/a.tar.bz2", "tar -tjf /tmp/a.tar.bz2"),
    ("a.tar.Z", "gzip -dc /tmp/a.tar.Z | tar -xf -", "gzip -dc /tmp/a.tar.Z | tar -tf -"),
    ("a.tar.z", "gzip -dc /tmp/a.tar.z | tar -xf -", "gzip -dc /tmp/a.tar.z | tar -tf -"),
    ("a.zip", "7z x /tmp/a.zip", "7z l /tmp/a.zip"),
    ("a.rar", "7z x /tmp/a.rar", "7z l /tmp/a.rar"),
    ("a.7z", "7z x /tmp/a.7z", "7z l /tmp/a.7z"),
])
def test_unpack_commands_with_tar_backend(settings, name, extract, listing):
    builder = CommandBuilder(settings)

    cmd = builder.unpack(f"/tmp/{name}")
    assert cmd.command == extract
    assert cmd.cwd == "/tmp"
    assert cmd.request.mode is ArchiveMode.UNPACK
    assert cmd.result_path == "/tmp"

    cmd = builder.unpack(f"/tmp/{name}", list_only=True)
    assert cmd.command == listing
    assert cmd.request.mode is ArchiveMode.LIST
    assert cmd.result_path is None


@pytest.mark.parametrize("name, tar_backend, sevenzip_backend", [
    ("a.tgz", "tar -xzf /tmp/a.tgz", "7za x -so /tmp/a.tgz | tar -xf -"),
    ("a.tar.bz2", "tar -xjf /tmp/a.tar.bz2", "7za x -so /tmp/a.tar.bz2 | tar -xf -"),
    ("a.tar.Z", "gzip -dc /tmp/a.tar.Z | tar -xf -", "7za x -so /tmp/a.tar.Z | tar -xf -"),
    ("a.tar", "tar -xf /tmp/a.tar", "7za x /tmp/a.tar"),
])
def test_sevenzip_backend_decompresses_tar_family(settings, name, tar_backend, sevenzip_backend):
    settings = settings._replace(sevenzip="7za")
    path = f"/tmp/{name}"

    assert CommandBuilder(settings).unpack(path).command == tar_backend
    assert CommandBuilder(settings._replace(unpack_backend="7z")).unpack(path).command == sevenzip_backend


def test_sevenzip_backend_listing(settings):
    builder = CommandBuilder(settings._replace(unpack_backend="7z", sevenzip="7za"))
    assert builder.unpack("/tmp/a.tgz", list_only=True).command == "7za x -so /tmp/a.tgz | tar -tf -"
    assert builder.unpack("/tmp/a.tar", list_only=True).command == "7za l /tmp/a.tar"
    assert builder.unpack("/tmp/a.zip", list_only=True).command == "7za l /tmp/a.zip"
    assert builder.unpack("/tmp/a.zip").command == "7za x /tmp/a.zip"


def test_unpack_with_unar_backend(settings):
    builder = CommandBuilder(settings._replace(unpack_backend="unar"))
    assert builder.unpack("/tmp/a.rar").command == "unar -f /tmp/a.rar"
    assert builder.unpack("/tmp/a.tar.gz").command == "unar -f /tmp/a.tar.gz"
    assert builder.unpack("/tmp/a.rar", list_only=True).command == "lsar /tmp/a.rar"


def test_unpack_quotes_archive_path(settings):
    cmd = CommandBuilder(settings).unpack("/tmp/my files.tgz")
    assert cmd.command == "tar -xzf '/tmp/my files.tgz'"


@pytest.mark.parametrize("path", ["/tmp/proj", "/tmp/a.TAR", "/tmp/a.tarfoo"])
def test_unpack_rejects_non_archives(settings, path):
    with pytest.raises(NotAnArchiveError) as excinfo:
        CommandBuilder(settings).unpack(path)
    assert excinfo.value.path == path
    assert isinstance(excinfo.value, ValueError)
