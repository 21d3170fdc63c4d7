"""
書庫化・展開アクション

カーソル位置のアイテムを判定し、書庫なら展開、それ以外なら書庫化する
"""

from typing import Optional

from arc import classify, toggled, CommandBuilder, NotAnArchiveError, PackerSettings
from arc.arc import ArchiveCommand
from proc.runner import CommandRunner, CommandRun

from ..debug_utils import DebugMixin
from ..listing import ListingView


class PackActionHandler(DebugMixin):
    """書庫化・展開の操作を処理するハンドラ"""

    def __init__(self, runner: CommandRunner, settings: PackerSettings):
        """
        初期化

        Args:
            runner: コマンドランナー
            settings: 初期設定スナップショット
        """
        self._init_debug_mixin("PackActionHandler")
        self.runner = runner
        self.settings = settings

    def build_command(self, path: str, list_only: bool = False,
                      settings: Optional[PackerSettings] = None) -> ArchiveCommand:
        """
        パスに対するコマンドを組み立てる

        Args:
            path: 対象のパス
            list_only: 書庫の場合に一覧表示のみ行うかどうか
            settings: 使用する設定（Noneの場合は現在の設定）

        Returns:
            ArchiveCommand: 組み立てたコマンド
        """
        builder = CommandBuilder(settings or self.settings)
        if classify(path).is_archive():
            return builder.unpack(path, list_only=list_only)
        return builder.pack(path)

    def perform_on_current_item(self, view: ListingView, list_only: bool = False) -> Optional[CommandRun]:
        """
        カーソル位置のアイテムを書庫化または展開する

        Args:
            view: 操作対象のリストビュー
            list_only: 書庫の場合に一覧表示のみ行うかどうか

        Returns:
            Optional[CommandRun]: 起動したコマンド（アイテムがなければNone）

        Raises:
            NotAnArchiveError: 書庫判定と展開コマンドの組み立てが食い違った場合
            OSError: プロセスを起動できなかった場合
        """
        path = view.path_at_cursor()
        if not path:
            self.debug_warning("カーソル位置にアイテムがありません")
            return None

        settings = self.settings
        try:
            archive_command = self.build_command(path, list_only, settings)
        except NotAnArchiveError as e:
            self.debug_error(f"展開できないパスです: {e.path}", trace=True)
            raise

        self.debug_info(f"{archive_command.request.mode.value}: {path}")
        return self.runner.run(archive_command.command,
                               archive_command.cwd,
                               archive_command.result_path,
                               shell=settings.shell)

    def toggle_packer(self) -> PackerSettings:
        """
        書庫化プリセットを切り替える

        Returns:
            PackerSettings: 切り替え後の設定
        """
        self.settings = toggled(self.settings)
        self.debug_info(f"書庫化プリセットを切り替えました: {self.settings.describe()}")
        return self.settings
