import pytest

from arc import ARCHIVE_EXTENSIONS, ItemKind, CommandBuilder, archive_suffix, classify, is_archive


@pytest.mark.parametrize("ext", ARCHIVE_EXTENSIONS)
def test_recognized_extensions_classify_as_archive(ext):
    assert classify(f"/tmp/data{ext}") is ItemKind.ARCHIVE
    assert is_archive(f"data{ext}")


@pytest.mark.parametrize("path", [
    "/tmp/data.tarfoo",
    "/tmp/DATA.TAR",
    "/tmp/data.ZIP",
    "/tmp/data.gz",
    "/tmp/data.tar.bz",
    "/tmp/proj",
    "/tmp/proj/",
    "",
])
def test_other_paths_classify_as_packable(path):
    assert classify(path) is ItemKind.PACKABLE
    assert not is_archive(path)


def test_archive_suffix_prefers_longest_match():
    assert archive_suffix("a.tar.gz") == ".tar.gz"
    assert archive_suffix("a.tar.bz2") == ".tar.bz2"
    assert archive_suffix("a.tar.Z") == ".tar.Z"
    assert archive_suffix("a.tar") == ".tar"
    assert archive_suffix("a.txt") is None


def test_item_kind_is_archive():
    assert ItemKind.ARCHIVE.is_archive()
    assert not ItemKind.PACKABLE.is_archive()


@pytest.mark.parametrize("extension", [".tgz", ".tar", ".7z", ".zip", ".tar.xz"])
def test_packed_path_is_recognized_as_archive(settings, extension):
    builder = CommandBuilder(settings._replace(extension=extension))
    packed = builder.pack("/home/u/proj")
    assert classify(packed.request.target) is ItemKind.ARCHIVE
