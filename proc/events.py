"""
コマンドイベント

コマンドの起動・終了をリスナーへ配信する。イベントはランナーに
キューが渡されたときだけ発行され、配信スレッドが取り出してリスナーを呼ぶ。
"""

import enum
import queue
import threading
from typing import Callable, List, NamedTuple, Optional

from logutils import log_print, log_trace, DEBUG, ERROR

# 配信されずに溜まるイベントの上限
DEFAULT_MAX_PENDING = 256


class CommandStatus(enum.Enum):
    """コマンドの状態"""
    STARTED = "started"     # 起動済み
    FINISHED = "finished"   # 終了（成否は問わない）
    FAILED = "failed"       # 起動失敗


class CommandEvent(NamedTuple):
    """
    コマンドランナーから発行されるイベント

    Attributes:
        run_id: 実行ごとのID
        ordinal: 出力先サーフェスの番号
        command: 実行したコマンド
        status: 発行時の状態
        result_path: 完了時に確認するパス
        message: 状態メッセージ
        timestamp: 発行時刻（time.time()）
    """
    run_id: str
    ordinal: int
    command: str
    status: CommandStatus
    result_path: Optional[str] = None
    message: str = ""
    timestamp: float = 0.0

    def describe(self) -> str:
        """ステータスバー向けの短い説明"""
        if self.status is CommandStatus.STARTED:
            return f"[{self.ordinal}] 実行中: {self.command}"
        return f"[{self.ordinal}] {self.message or self.status.value}: {self.command}"


EventListener = Callable[[CommandEvent], None]

# 配信スレッドを止めるための目印
_STOP = object()


class EventQueue:
    """
    上限付きのイベントキュー

    満杯のときは最も古いイベントを捨てて新しいイベントを入れる。
    """

    def __init__(self, max_pending: int = DEFAULT_MAX_PENDING):
        self._queue = queue.Queue(maxsize=max_pending)
        self._listeners: List[EventListener] = []
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    def __len__(self):
        return self._queue.qsize()

    @property
    def is_processing(self) -> bool:
        """配信スレッドが動いているかどうか"""
        return self._thread is not None and self._thread.is_alive()

    def publish(self, event: CommandEvent) -> None:
        """イベントを追加する"""
        self._put(event)

    def _put(self, item) -> None:
        while True:
            try:
                self._queue.put_nowait(item)
                return
            except queue.Full:
                pass
            try:
                dropped = self._queue.get_nowait()
                log_print(DEBUG, f"イベントを破棄しました: {dropped}", name="arcpack.events")
            except queue.Empty:
                pass

    def subscribe(self, listener: EventListener) -> None:
        """リスナーを登録する"""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> bool:
        """
        リスナーの登録を解除する

        Returns:
            bool: 登録されていたかどうか
        """
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                return True
            return False

    def get_events(self, max_events: int = 10, timeout: Optional[float] = 0.1) -> List[CommandEvent]:
        """
        配信スレッドを使わずにイベントを直接取り出す

        Args:
            max_events: 取り出す最大数
            timeout: 最初の1件を待つ時間（秒）

        Returns:
            List[CommandEvent]: 取り出したイベント
        """
        events = []
        block = True
        while len(events) < max_events:
            try:
                item = self._queue.get(block, timeout if block else None)
            except queue.Empty:
                break
            block = False
            if item is not _STOP:
                events.append(item)
        return events

    def start_processing(self, daemon: bool = True) -> None:
        """
        配信スレッドを開始する

        Args:
            daemon: デーモンスレッドとして実行するかどうか
        """
        if self.is_processing:
            return
        self._thread = threading.Thread(target=self._run, name="arcpack-events", daemon=daemon)
        self._thread.start()

    def stop_processing(self, timeout: Optional[float] = None) -> bool:
        """
        配信スレッドを停止する

        キューに残っているイベントを配信し終えてから止まる。

        Returns:
            bool: スレッドが停止したかどうか
        """
        thread = self._thread
        if thread is None or not thread.is_alive():
            return True
        self._put(_STOP)
        thread.join(timeout)
        return not thread.is_alive()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                break
            self._dispatch(item)

    def _dispatch(self, event: CommandEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                log_trace(e, ERROR, f"イベントリスナーでエラーが発生しました: {e}", name="arcpack.events")


_event_queue = EventQueue()


def get_event_queue() -> EventQueue:
    """アプリケーション全体で共有するイベントキュー"""
    return _event_queue


def subscribe_to_events(listener: EventListener) -> None:
    _event_queue.subscribe(listener)


def unsubscribe_from_events(listener: EventListener) -> bool:
    return _event_queue.unsubscribe(listener)


def start_event_processing(daemon: bool = True) -> None:
    _event_queue.start_processing(daemon)


def stop_event_processing(timeout: Optional[float] = None) -> bool:
    return _event_queue.stop_processing(timeout)
