"""
ログ出力先（サーフェス）とそのプール

コマンドごとの出力を受け取るサーフェスを番号（1, 2, 3, ...）で管理します。
実行中のプロセスがつながったサーフェスは再利用せず、終了したものは
次の取得時に破棄して番号を空けます。
"""

import threading
from contextlib import contextmanager
from typing import Callable, Dict, List, Optional

from logutils import log_print, log_trace, DEBUG, ERROR

# (surface, text) を受け取る。textがNoneのときは内容の消去
SurfaceListener = Callable[['LogSurface', Optional[str]], None]


class SurfaceReadOnlyError(RuntimeError):
    """読み取り専用のサーフェスを編集しようとした"""


class LogSurface:
    """
    1つのコマンドの出力を保持するサーフェス

    プロセスの出力（write）はいつでも追記できるが、
    内容の消去や挿入（clear / insert）は writable() の中でのみ行える。
    """

    def __init__(self, ordinal: int):
        """
        初期化

        Args:
            ordinal: サーフェスの番号（1から）
        """
        self.ordinal = ordinal
        self.read_only = True
        self.process = None
        self.destroyed = False
        self._reserved = True  # プロセスが接続されるまでは使用中扱い
        self._pending_result: Optional[str] = None
        self._chunks: List[str] = []
        self._listeners: List[SurfaceListener] = []
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        """表示名"""
        if self.ordinal == 1:
            return "Archive Output"
        return f"Archive Output <{self.ordinal}>"

    def __repr__(self):
        return f"LogSurface(ordinal={self.ordinal}, live={self.is_live()})"

    # 内容

    @contextmanager
    def writable(self):
        """一時的に書き込み可能にするコンテキストマネージャ"""
        self.read_only = False
        try:
            yield self
        finally:
            self.read_only = True

    def clear(self) -> None:
        """内容を消去する"""
        self._check_writable()
        with self._lock:
            self._chunks.clear()
        self._notify(None)

    def insert(self, text: str) -> None:
        """テキストを挿入する"""
        self._check_writable()
        self._append(text)

    def write(self, text: str) -> None:
        """プロセスの出力を追記する"""
        self._append(text)

    def text(self) -> str:
        """現在の内容を取得する"""
        with self._lock:
            return ''.join(self._chunks)

    def _append(self, text: str) -> None:
        if not text:
            return
        with self._lock:
            self._chunks.append(text)
        self._notify(text)

    def _check_writable(self) -> None:
        if self.read_only:
            raise SurfaceReadOnlyError(f"{self.name} は読み取り専用です")

    # リスナー

    def add_listener(self, listener: SurfaceListener) -> None:
        """内容の変化を受け取るリスナーを登録する"""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: SurfaceListener) -> bool:
        """リスナーの登録を解除する"""
        with self._lock:
            try:
                self._listeners.remove(listener)
                return True
            except ValueError:
                return False

    def _notify(self, text: Optional[str]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(self, text)
            except Exception as e:
                log_trace(e, ERROR, f"サーフェスのリスナーでエラーが発生しました: {e}", name="arcpack.proc")

    # プロセスと結果

    def attach(self, process) -> None:
        """プロセスを接続する"""
        self.process = process
        self._reserved = False

    def detach(self) -> None:
        """起動に失敗したときなど、プロセスなしで使用中を解除する"""
        self.process = None
        self._reserved = False

    def is_live(self) -> bool:
        """生きているプロセスがつながっているかどうか"""
        if self._reserved:
            return True
        return self.process is not None and self.process.is_running()

    def set_pending_result(self, path: Optional[str]) -> None:
        """完了時に確認するパスを設定する"""
        self._pending_result = path or None

    def take_pending_result(self) -> Optional[str]:
        """完了時に確認するパスを取り出す（一度だけ）"""
        path, self._pending_result = self._pending_result, None
        return path

    def _destroy(self) -> None:
        with self._lock:
            self.destroyed = True
            self._chunks.clear()
            self._listeners.clear()
            self._pending_result = None
            self.process = None


class SurfacePresenter:
    """
    サーフェスを表示する側のインターフェース

    GUIではログウィンドウ、バッチモードでは標準出力が実装する。
    """

    def show(self, surface: LogSurface) -> None:
        """サーフェスを表示する"""

    def discard(self, surface: LogSurface) -> None:
        """破棄されたサーフェスの表示を片付ける"""


class SurfacePool:
    """
    番号付きサーフェスのプール
    """

    def __init__(self, presenter: Optional[SurfacePresenter] = None):
        """
        初期化

        Args:
            presenter: サーフェスの表示を担当するオブジェクト
        """
        self.presenter = presenter or SurfacePresenter()
        self._surfaces: Dict[int, LogSurface] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._surfaces)

    def surfaces(self) -> List[LogSurface]:
        """現在のサーフェスを番号順に取得する"""
        with self._lock:
            return [self._surfaces[n] for n in sorted(self._surfaces)]

    def get(self, ordinal: int) -> Optional[LogSurface]:
        """番号からサーフェスを取得する"""
        with self._lock:
            return self._surfaces.get(ordinal)

    def acquire(self) -> LogSurface:
        """
        空のサーフェスを取得する

        番号1から順に見ていき、生きたプロセスがないサーフェスは破棄する。
        最初に空いた番号で新しいサーフェスを作る。

        Returns:
            LogSurface: 新しいサーフェス
        """
        destroyed = []
        with self._lock:
            ordinal = 1
            while ordinal in self._surfaces:
                surface = self._surfaces[ordinal]
                if not surface.is_live():
                    del self._surfaces[ordinal]
                    surface._destroy()
                    destroyed.append(surface)
                    break
                ordinal += 1

            surface = LogSurface(ordinal)
            self._surfaces[ordinal] = surface

        for old in destroyed:
            self._discard(old)
        log_print(DEBUG, f"サーフェス {ordinal} を割り当てました", name="arcpack.proc")
        return surface

    def release(self, surface: LogSurface) -> bool:
        """
        終了したサーフェスを破棄して番号を空ける

        Args:
            surface: 破棄するサーフェス

        Returns:
            bool: 破棄したかどうか（実行中の場合はFalse）
        """
        with self._lock:
            if surface.is_live() or self._surfaces.get(surface.ordinal) is not surface:
                return False
            del self._surfaces[surface.ordinal]
            surface._destroy()
        self._discard(surface)
        return True

    def display(self, surface: LogSurface) -> None:
        """サーフェスを表示する"""
        try:
            self.presenter.show(surface)
        except Exception as e:
            log_trace(e, ERROR, f"サーフェスの表示に失敗しました: {e}", name="arcpack.proc")

    def _discard(self, surface: LogSurface) -> None:
        try:
            self.presenter.discard(surface)
        except Exception as e:
            log_trace(e, ERROR, f"サーフェスの片付けに失敗しました: {e}", name="arcpack.proc")
        log_print(DEBUG, f"サーフェス {surface.ordinal} を破棄しました", name="arcpack.proc")
