"""
書庫化・展開の設定

設定は不変のスナップショットとして扱い、操作ごとにその時点の値を渡す。
切り替え操作は新しいスナップショットを返す。
"""

import argparse
import os
from typing import NamedTuple, Optional

from .archive_utils import find_first_executable

# 書庫化コマンドのプリセット（テンプレート, 拡張子）
TAR_GZIP_TEMPLATE = 'tar -czf %s %s'
TAR_GZIP_EXTENSION = '.tgz'
TAR_PLAIN_TEMPLATE = 'tar -cf %s %s'
TAR_PLAIN_EXTENSION = '.tar'
SEVENZIP_EXTENSION = '.7z'

# 展開に使うバックエンド
UNPACK_BACKENDS = ('tar', '7z', 'unar')

DEFAULT_SHELL = '/bin/sh'


class PackerSettings(NamedTuple):
    """
    書庫化・展開の設定スナップショット

    Attributes:
        use_gzip: tarプリセットでgzip圧縮するかどうか
        extension: 書庫化で付ける拡張子
        pack_template: 書庫化コマンドのテンプレート（書庫パス, 元の名前 の2つの%s）
        unpack_backend: 展開に使うバックエンド（tar / 7z / unar）
        shell: コマンドを実行するシェル
        extra_flags: 書庫化コマンドの末尾に追加するオプション
        use_alternate: 7zプリセットを使用中かどうか
        sevenzip: 7zの実行ファイル名（7z または 7za）
    """
    use_gzip: bool = True
    extension: str = TAR_GZIP_EXTENSION
    pack_template: str = TAR_GZIP_TEMPLATE
    unpack_backend: str = 'tar'
    shell: str = DEFAULT_SHELL
    extra_flags: str = ''
    use_alternate: bool = False
    sevenzip: str = '7z'

    def describe(self) -> str:
        """ステータス表示用の短い説明"""
        preset = self.sevenzip if self.use_alternate else ('tar+gzip' if self.use_gzip else 'tar')
        return f"{preset} ({self.extension})"


def tar_preset(use_gzip: bool):
    """tarプリセットの（テンプレート, 拡張子）を返す"""
    if use_gzip:
        return TAR_GZIP_TEMPLATE, TAR_GZIP_EXTENSION
    return TAR_PLAIN_TEMPLATE, TAR_PLAIN_EXTENSION


def sevenzip_preset(sevenzip: str):
    """7zプリセットの（テンプレート, 拡張子）を返す"""
    return f'{sevenzip} a %s %s', SEVENZIP_EXTENSION


def toggled(settings: PackerSettings) -> PackerSettings:
    """
    書庫化プリセットを切り替えた設定を返す

    7zプリセットへ切り替えるときは7zのテンプレートと拡張子に、
    戻すときはuse_gzipに応じたtarの既定値に戻す。

    Args:
        settings: 現在の設定

    Returns:
        PackerSettings: 切り替え後の設定
    """
    use_alternate = not settings.use_alternate
    if use_alternate:
        template, extension = sevenzip_preset(settings.sevenzip)
    else:
        template, extension = tar_preset(settings.use_gzip)
    return settings._replace(use_alternate=use_alternate,
                             pack_template=template,
                             extension=extension)


def detect_sevenzip() -> str:
    """PATH上の7zプログラム名を検出する（見つからなければ7z）"""
    return find_first_executable(('7z', '7za'), default='7z')


def default_settings(use_gzip: bool = True, use_alternate: bool = False,
                     shell: Optional[str] = None, sevenzip: Optional[str] = None) -> PackerSettings:
    """
    既定の設定を作成する

    Args:
        use_gzip: tarプリセットでgzip圧縮するかどうか
        use_alternate: 7zプリセットで開始するかどうか
        shell: 使用するシェル（Noneの場合は$SHELLまたは/bin/sh）
        sevenzip: 7zの実行ファイル名（Noneの場合は自動検出）

    Returns:
        PackerSettings: 設定
    """
    sevenzip = sevenzip or detect_sevenzip()
    if use_alternate:
        template, extension = sevenzip_preset(sevenzip)
    else:
        template, extension = tar_preset(use_gzip)
    return PackerSettings(
        use_gzip=use_gzip,
        extension=extension,
        pack_template=template,
        shell=shell or os.environ.get('SHELL') or DEFAULT_SHELL,
        use_alternate=use_alternate,
        sevenzip=sevenzip,
    )


def add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    """
    設定用のコマンドライン引数をパーサーに登録する

    Args:
        parser: 引数を追加するパーサー
    """
    group = parser.add_argument_group("書庫化・展開の設定")
    group.add_argument("--no-gzip", dest="use_gzip", action="store_false",
                       help="tarで書庫化するときにgzip圧縮しない")
    group.add_argument("--extension", default=None,
                       help="書庫化で付ける拡張子（例: .tgz）")
    group.add_argument("--pack-template", default=None,
                       help="書庫化コマンドのテンプレート（%%s を2つ含む: 書庫パス, 元の名前）")
    group.add_argument("--unpack-backend", choices=UNPACK_BACKENDS, default='tar',
                       help="展開に使うバックエンド")
    group.add_argument("--shell", default=None, help="コマンドを実行するシェル")
    group.add_argument("--extra-flags", default='',
                       help="書庫化コマンドの末尾に追加するオプション")
    group.add_argument("--alternate", action="store_true",
                       help="7zプリセットで開始する")
    group.add_argument("--sevenzip", default=None, help="7zの実行ファイル名（7z または 7za）")


def settings_from_args(args: argparse.Namespace) -> PackerSettings:
    """
    解析済みのコマンドライン引数から設定を作成する

    Args:
        args: add_settings_arguments で登録した引数を含む名前空間

    Returns:
        PackerSettings: 設定
    """
    settings = default_settings(use_gzip=args.use_gzip,
                                use_alternate=args.alternate,
                                shell=args.shell,
                                sevenzip=args.sevenzip)
    overrides = {
        'unpack_backend': args.unpack_backend,
        'extra_flags': args.extra_flags or '',
    }
    if args.extension:
        overrides['extension'] = args.extension
    if args.pack_template:
        overrides['pack_template'] = args.pack_template
    return settings._replace(**overrides)
