"""
設定管理サービス

設定値はKeyValueStoreに1項目1キーで保存し、アプリ内では
イミュータブルなAppSettingsとして受け渡す。

関連クラス:
  - storage.KeyValueStore: 永続化先
  - reminders.ReminderScheduler: 設定変更の購読者
"""

import logging
import threading
from dataclasses import replace
from typing import Any, Callable, List, Optional

from src.storage import KeyValueStore

from .models import AppSettings, SettingsError, validate_setting

SettingsListener = Callable[[AppSettings], None]


class SettingsService:
    """AppSettingsの読み込みと更新を一元管理するクラス"""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._listeners: List[SettingsListener] = []
        self._current: Optional[AppSettings] = None

    @property
    def current(self) -> AppSettings:
        """現在の設定（未ロードならストアから読み込む）"""
        with self._lock:
            if self._current is None:
                self._current = self._load_locked()
            return self._current

    def load(self) -> AppSettings:
        """ストアから設定を再読み込みする"""
        with self._lock:
            self._current = self._load_locked()
            return self._current

    def _load_locked(self) -> AppSettings:
        defaults = AppSettings()
        values: dict[str, Any] = {}
        for name in AppSettings.field_names():
            raw = self.store.get(name)
            if raw is None:
                continue
            try:
                values[name] = validate_setting(name, raw)
            except SettingsError as e:
                self.logger.warning(
                    f"Ignoring stored setting {name}={raw!r}, using default "
                    f"{getattr(defaults, name)!r}: {e}"
                )
        return replace(defaults, **values)

    def subscribe(self, listener: SettingsListener) -> None:
        """設定変更時に呼ばれるリスナーを登録"""
        with self._lock:
            self._listeners.append(listener)

    def update(self, **changes: Any) -> AppSettings:
        """
        設定を更新して新しいAppSettingsを返す

        Args:
            **changes: 変更する項目と値

        Returns:
            更新後のAppSettings

        Raises:
            SettingsError: 未知の項目、または不正な値（この場合は何も保存しない）
        """
        validated = {name: validate_setting(name, value) for name, value in changes.items()}
        with self._lock:
            current = self._current if self._current is not None else self._load_locked()
            updated = replace(current, **validated)
            for name, value in validated.items():
                self.store.set(name, value)
            self._current = updated
            listeners = list(self._listeners)

        if validated:
            self.logger.info(f"Settings updated: {sorted(validated)}")

        for listener in listeners:
            try:
                listener(updated)
            except Exception as e:
                self.logger.error(f"Settings listener failed: {e}", exc_info=True)

        return updated
