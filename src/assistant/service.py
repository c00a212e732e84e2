"""
アシスタント会話サービス

表示用の会話履歴を保持し、AI設定が有効なら外部LLMに問い合わせる。
LLMが無効・APIキー未設定・呼び出し失敗のいずれでもルールベース応答にフォールバック。

関連:
- src/assistant/responder.py: ルールベース応答
- src/life_tracker/ollama_client.py: LLM推論
"""

import logging
import threading
import time
import uuid
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .responder import GREETING, respond

SYSTEM_PROMPT = (
    "You are an AI assistant that helps users track their activities and habits. "
    "You have access to their activity records and can provide personalized insights, "
    "suggestions, and motivation. Keep responses concise, helpful, and encouraging. "
    "Focus on helping them build better habits and understand their patterns."
)

CONTEXT_RECORD_LIMIT = 10


class AssistantService:
    """アシスタントとの会話を管理するクラス"""

    def __init__(
        self,
        records_provider: Callable[[], Sequence[Any]],
        settings_provider: Optional[Callable[[], Any]] = None,
        ollama_client_factory: Optional[Callable[[Any], Any]] = None,
    ):
        """
        初期化

        Args:
            records_provider: ユーザーの記録（新しい順）を返す関数
            settings_provider: 現在のAppSettingsを返す関数
            ollama_client_factory: AppSettingsからOllamaClientを生成する関数
        """
        self.records_provider = records_provider
        self.settings_provider = settings_provider
        self.ollama_client_factory = ollama_client_factory
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._history: List[Dict[str, Any]] = []
        self.reset()

    @staticmethod
    def _message(text: str, sender: str) -> Dict[str, Any]:
        return {
            "id": uuid.uuid4().hex,
            "text": text,
            "sender": sender,
            "timestamp": time.time(),
        }

    @property
    def history(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(message) for message in self._history]

    def reset(self) -> List[Dict[str, Any]]:
        """会話履歴を挨拶メッセージだけの状態に戻す"""
        with self._lock:
            self._history = [self._message(GREETING, "ai")]
        return self.history

    def chat(self, message: str) -> Dict[str, Any]:
        """
        ユーザーメッセージを処理して応答メッセージを返す

        Args:
            message: ユーザーの入力

        Returns:
            応答メッセージ辞書（id, text, sender, timestamp, source）

        Raises:
            ValueError: 空メッセージの場合
        """
        if not message or not message.strip():
            raise ValueError("message must not be empty")

        with self._lock:
            prior = [dict(m) for m in self._history]
            self._history.append(self._message(message, "user"))

        records = list(self.records_provider())
        text, source = self._remote_response(message, prior, records)
        if text is None:
            text, source = respond(message, records), "local"

        reply = self._message(text, "ai")
        reply["source"] = source
        with self._lock:
            self._history.append(reply)
        return dict(reply)

    def _remote_response(
        self, message: str, prior: List[Dict[str, Any]], records: Sequence[Any]
    ) -> Tuple[Optional[str], str]:
        if self.settings_provider is None or self.ollama_client_factory is None:
            return None, "local"
        settings = self.settings_provider()
        if not (settings.ai_enabled and settings.ai_api_key):
            return None, "local"

        recent = ", ".join(
            getattr(record, "text", "") for record in records[:CONTEXT_RECORD_LIMIT]
        )
        messages = [{"role": "system", "content": SYSTEM_PROMPT}]
        messages.extend(
            {
                "role": "user" if m["sender"] == "user" else "assistant",
                "content": m["text"],
            }
            for m in prior
        )
        messages.append(
            {
                "role": "user",
                "content": f"User's recent activities: {recent}. User question: {message}",
            }
        )

        try:
            client = self.ollama_client_factory(settings)
            response = client.chat(messages)
            text = str(response).strip()
            if not text:
                return "No response from AI.", "llm"
            return text, "llm"
        except Exception as e:
            self.logger.error(f"Error calling completion service: {e}")
            return None, "local"
