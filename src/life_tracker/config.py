"""
設定管理モジュール

関連クラス:
  - server.dependencies: この設定でリポジトリ・スケジューラーを組み立てる
  - ollama_client.OllamaClient: Ollama API設定を使用

ユーザーごとの表示設定（テーマ等）はsrc/settingsで管理し、ここでは扱わない。
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class OllamaConfig:
    """Ollama API設定"""

    host: str = "http://localhost:11434"
    model: str = "llama3.1:8b"


@dataclass
class ReminderConfig:
    """リマインダー設定"""

    max_queue_size: int = 10


@dataclass
class Config:
    """アプリケーション設定クラス"""

    # Ollama設定
    ollama: OllamaConfig = None  # type: ignore

    # リマインダー設定
    reminders: ReminderConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/life_tracker.log"

    # データベース（Noneの場合はLIFE_TRACKER_DB_PATHまたはdata/life_tracker.db）
    db_path: Optional[str] = None

    # AI生成設定
    max_tokens: int = 300
    temperature: float = 0.7

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.ollama is None:
            self.ollama = OllamaConfig()
        if self.reminders is None:
            self.reminders = ReminderConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス（デフォルトパスにファイルが無い場合は既定値）
        """
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "app_config.yaml"
            if not config_path.exists():
                return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        ollama_data = yaml_data.get("ollama", {})
        reminder_data = yaml_data.get("reminders", {})
        log_data = yaml_data.get("log", {})
        storage_data = yaml_data.get("storage", {})
        ai_data = yaml_data.get("ai", {})

        return cls(
            ollama=OllamaConfig(
                host=ollama_data.get("host", "http://localhost:11434"),
                model=ollama_data.get("model", "llama3.1:8b"),
            ),
            reminders=ReminderConfig(
                max_queue_size=reminder_data.get("max_queue_size", 10),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/life_tracker.log"),
            db_path=storage_data.get("db_path"),
            max_tokens=ai_data.get("max_tokens", 300),
            temperature=ai_data.get("temperature", 0.7),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            ollama=OllamaConfig(
                host=os.getenv("OLLAMA_HOST", "http://localhost:11434"),
                model=os.getenv("OLLAMA_MODEL", "llama3.1:8b"),
            ),
            reminders=ReminderConfig(
                max_queue_size=int(os.getenv("REMINDER_MAX_QUEUE", "10")),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/life_tracker.log"),
            db_path=os.getenv("LIFE_TRACKER_DB_PATH"),
            max_tokens=int(os.getenv("MAX_TOKENS", "300")),
            temperature=float(os.getenv("TEMPERATURE", "0.7")),
        )
