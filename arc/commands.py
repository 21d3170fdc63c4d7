"""
書庫化・展開コマンドの組み立て

設定スナップショットから、シェルに渡すコマンド文字列と作業ディレクトリを作る
"""

import os

from .arc import ArchiveMode, ArchiveRequest, ArchiveCommand
from .archive_utils import quote_path, strip_trailing_separators
from .classifier import archive_suffix, TAR_EXTENSIONS
from .settings import PackerSettings

# tarの圧縮オプション（拡張子 -> オプション文字）
_TAR_COMPRESSION = {
    '.tar': '',
    '.tar.gz': 'z',
    '.tgz': 'z',
    '.tar.xz': 'J',
    '.txz': 'J',
    '.tar.bz2': 'j',
}

# gzip -dc 経由で展開する拡張子
_GZIP_PIPED = ('.tar.Z', '.tar.z')


class NotAnArchiveError(ValueError):
    """書庫として認識できないパスに展開が要求された"""

    def __init__(self, path: str):
        super().__init__(f"書庫として認識できないパスです: {path}")
        self.path = path


class CommandBuilder:
    """
    設定に従ってコマンド文字列を組み立てるクラス
    """

    def __init__(self, settings: PackerSettings):
        """
        初期化

        Args:
            settings: 使用する設定スナップショット
        """
        self.settings = settings

    def pack(self, source: str) -> ArchiveCommand:
        """
        書庫化コマンドを組み立てる

        Args:
            source: 書庫化するファイルまたはディレクトリのパス

        Returns:
            ArchiveCommand: コマンド（作業ディレクトリは元アイテムの親）
        """
        source = os.path.abspath(strip_trailing_separators(source))
        cwd = os.path.dirname(source)
        name = os.path.basename(source)
        target = source + self.settings.extension

        command = self.settings.pack_template % (quote_path(target), quote_path(name))
        if self.settings.extra_flags:
            command = f"{command} {self.settings.extra_flags}"

        request = ArchiveRequest(source=source, mode=ArchiveMode.PACK, target=target)
        return ArchiveCommand(request=request, command=command, cwd=cwd)

    def unpack(self, archive: str, list_only: bool = False) -> ArchiveCommand:
        """
        展開（または内容一覧）コマンドを組み立てる

        Args:
            archive: 書庫のパス
            list_only: 展開せずに内容を一覧表示するかどうか

        Returns:
            ArchiveCommand: コマンド（作業ディレクトリは書庫を含むディレクトリ）

        Raises:
            NotAnArchiveError: パスが書庫として認識できない場合
        """
        suffix = archive_suffix(archive)
        if suffix is None:
            raise NotAnArchiveError(archive)

        archive = os.path.abspath(archive)
        cwd = os.path.dirname(archive)
        command = self._unpack_command(archive, suffix, list_only)

        if list_only:
            request = ArchiveRequest(source=archive, mode=ArchiveMode.LIST)
        else:
            request = ArchiveRequest(source=archive, mode=ArchiveMode.UNPACK, target=cwd)
        return ArchiveCommand(request=request, command=command, cwd=cwd)

    def _unpack_command(self, archive: str, suffix: str, list_only: bool) -> str:
        """バックエンドと拡張子に応じた展開コマンドを返す"""
        quoted = quote_path(archive)
        backend = self.settings.unpack_backend
        sevenzip = self.settings.sevenzip

        if backend == 'unar':
            return f"lsar {quoted}" if list_only else f"unar -f {quoted}"

        if suffix in TAR_EXTENSIONS:
            op = 't' if list_only else 'x'
            if backend == '7z':
                # 圧縮の解除は7zに任せ、tarには展開済みのストリームを渡す
                if suffix == '.tar':
                    return f"{sevenzip} {'l' if list_only else 'x'} {quoted}"
                return f"{sevenzip} x -so {quoted} | tar -{op}f -"
            if suffix in _GZIP_PIPED:
                return f"gzip -dc {quoted} | tar -{op}f -"
            return f"tar -{op}{_TAR_COMPRESSION[suffix]}f {quoted}"

        # .rar / .zip / .7z
        op = 'l' if list_only else 'x'
        return f"{sevenzip} {op} {quoted}"
