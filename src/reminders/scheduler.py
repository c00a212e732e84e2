"""
日次リマインダースケジューラーモジュール

毎日指定時刻に「記録しましょう」通知をキューに積む。
無効化されたら保留中のタイマーを必ずキャンセルする。

関連クラス:
  - settings.SettingsService: reminder_enabled/reminder_timeの変更を通知
"""

import logging
import threading
import time
from collections import deque
from datetime import datetime, timedelta
from typing import Any, Callable, Deque, Dict, List, Optional

REMINDER_TITLE = "Time to journal"
REMINDER_BODY = "Add a quick note to your Life Tracker."

DEFAULT_HOUR = 20
DEFAULT_MINUTE = 0


def _parse_part(value: str, default: int, upper: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if 0 <= parsed <= upper else default


def next_reminder_at(now: datetime, reminder_time: str) -> datetime:
    """
    次回の通知時刻を計算

    Args:
        now: 現在時刻
        reminder_time: "HH:MM"形式（不正な部分は20:00で補う）

    Returns:
        今日のHH:MMが未来ならその時刻、過ぎていれば翌日のHH:MM
    """
    hours_str, _, minutes_str = (reminder_time or "").partition(":")
    hours = _parse_part(hours_str, DEFAULT_HOUR, 23)
    minutes = _parse_part(minutes_str, DEFAULT_MINUTE, 59)

    target = now.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return target


class ReminderScheduler:
    """threading.Timerで日次リマインダーを管理するクラス"""

    def __init__(
        self,
        max_queue_size: int = 10,
        clock: Optional[Callable[[], datetime]] = None,
        timer_factory: Optional[Callable[[float, Callable[[], None]], Any]] = None,
    ):
        """
        初期化

        Args:
            max_queue_size: 通知キューの最大サイズ
            clock: 現在時刻を返す関数（テスト用にDI可能）
            timer_factory: (秒, コールバック) からタイマーを作る関数（テスト用にDI可能）
        """
        self.max_queue_size = max_queue_size
        self.clock = clock or datetime.now
        self.timer_factory = timer_factory or self._default_timer
        self.logger = logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._enabled = False
        self._reminder_time = f"{DEFAULT_HOUR:02d}:{DEFAULT_MINUTE:02d}"
        self._timer: Any = None
        self._generation = 0
        self._next_fire: Optional[datetime] = None
        self._notifications: Deque[Dict[str, Any]] = deque(maxlen=max_queue_size)

    @staticmethod
    def _default_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        return timer

    def apply(self, settings: Any) -> None:
        """設定（reminder_enabled, reminder_time）を反映する"""
        with self._lock:
            self._enabled = bool(settings.reminder_enabled)
            self._reminder_time = settings.reminder_time
            self._cancel_locked()
            if self._enabled:
                self._schedule_locked()

    def stop(self) -> None:
        """保留中のタイマーをキャンセル"""
        with self._lock:
            self._enabled = False
            self._cancel_locked()
            self.logger.info("Reminder scheduler stopped")

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self._next_fire = None

    def _schedule_locked(self) -> None:
        now = self.clock()
        self._next_fire = next_reminder_at(now, self._reminder_time)
        delay = (self._next_fire - now).total_seconds()
        self._generation += 1
        generation = self._generation
        self._timer = self.timer_factory(delay, lambda: self._fire(generation))
        self._timer.start()
        self.logger.info(f"Next reminder scheduled at {self._next_fire.isoformat()}")

    def _fire(self, generation: int) -> None:
        """通知をキューに積み、翌日分を再スケジュール"""
        with self._lock:
            # 再スケジュール前に起動済みだった古いタイマーは無視する
            if not self._enabled or generation != self._generation:
                return
            self._notifications.append(
                {
                    "title": REMINDER_TITLE,
                    "body": REMINDER_BODY,
                    "timestamp": time.time(),
                }
            )
            self.logger.info(
                f"Reminder notification queued (size: {len(self._notifications)})"
            )
            self._timer = None
            self._schedule_locked()

    def get_status(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "enabled": self._enabled,
                "reminder_time": self._reminder_time,
                "next_fire": self._next_fire.isoformat() if self._next_fire else None,
                "pending_count": len(self._notifications),
            }

    def get_pending_notifications(self) -> List[Dict[str, Any]]:
        """保留中の通知を全て取得（取得後キューはクリア）"""
        with self._lock:
            notifications = list(self._notifications)
            self._notifications.clear()
            return notifications
