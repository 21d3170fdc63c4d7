import argparse
from unittest.mock import patch

from arc import default_settings, toggled, add_settings_arguments, settings_from_args
from arc.settings import (
    TAR_GZIP_TEMPLATE, TAR_PLAIN_TEMPLATE, PackerSettings
)


def parse(argv):
    parser = argparse.ArgumentParser()
    add_settings_arguments(parser)
    return parser.parse_args(argv)


def test_default_settings_use_gzipped_tar(settings):
    assert settings.use_gzip
    assert not settings.use_alternate
    assert settings.extension == ".tgz"
    assert settings.pack_template == TAR_GZIP_TEMPLATE
    assert settings.unpack_backend == "tar"
    assert settings.shell == "/bin/sh"


def test_toggle_switches_to_sevenzip_preset(settings):
    alt = toggled(settings)
    assert alt.use_alternate
    assert alt.extension == ".7z"
    assert alt.pack_template == "7z a %s %s"
    # 元のスナップショットは変わらない
    assert settings.extension == ".tgz"


def test_toggle_twice_restores_extension_and_template(settings):
    twice = toggled(toggled(settings))
    assert twice.extension == settings.extension
    assert twice.pack_template == settings.pack_template
    assert twice == settings


def test_toggle_off_without_gzip_uses_plain_tar():
    settings = default_settings(use_gzip=False, shell="/bin/sh", sevenzip="7za")
    assert settings.extension == ".tar"
    assert settings.pack_template == TAR_PLAIN_TEMPLATE

    alt = toggled(settings)
    assert alt.pack_template == "7za a %s %s"

    back = toggled(alt)
    assert back.extension == ".tar"
    assert back.pack_template == TAR_PLAIN_TEMPLATE


def test_toggle_twice_after_overrides_returns_to_tar_default(settings):
    custom = settings._replace(pack_template="tar --zstd -cf %s %s", extension=".tar.zst")

    twice = toggled(toggled(custom))

    # 戻すときはuse_gzipに応じたtarの既定値になり、上書きした値は残らない
    assert twice.pack_template == TAR_GZIP_TEMPLATE
    assert twice.extension == ".tgz"
    assert not twice.use_alternate


def test_default_settings_detects_sevenzip_program():
    with patch("arc.settings.find_first_executable", return_value="7za") as finder:
        settings = default_settings(shell="/bin/sh")
    finder.assert_called_once()
    assert settings.sevenzip == "7za"


def test_default_settings_reads_shell_from_environment(monkeypatch):
    monkeypatch.setenv("SHELL", "/bin/zsh")
    assert default_settings(sevenzip="7z").shell == "/bin/zsh"


def test_settings_from_args():
    args = parse(["--no-gzip", "--unpack-backend", "unar", "--sevenzip", "7za",
                  "--shell", "/bin/bash", "--extra-flags=--exclude=*.o"])
    settings = settings_from_args(args)
    assert settings.extension == ".tar"
    assert settings.pack_template == TAR_PLAIN_TEMPLATE
    assert settings.unpack_backend == "unar"
    assert settings.sevenzip == "7za"
    assert settings.shell == "/bin/bash"
    assert settings.extra_flags == "--exclude=*.o"


def test_settings_from_args_alternate_and_overrides():
    settings = settings_from_args(parse(["--alternate", "--sevenzip", "7z", "--shell", "/bin/sh"]))
    assert settings.use_alternate
    assert settings.pack_template == "7z a %s %s"
    assert settings.extension == ".7z"

    settings = settings_from_args(parse(["--extension", ".tar.gz", "--pack-template", "tar -cvzf %s %s",
                                         "--sevenzip", "7z", "--shell", "/bin/sh"]))
    assert settings.extension == ".tar.gz"
    assert settings.pack_template == "tar -cvzf %s %s"


def test_describe_names_active_preset():
    assert PackerSettings().describe() == "tar+gzip (.tgz)"
    assert toggled(PackerSettings()).describe() == "7z (.7z)"
