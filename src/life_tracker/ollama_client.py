"""
Ollama APIクライアントモジュール

関連クラス:
  - config.Config: Ollama設定を提供
  - journal.JournalSummarizer / assistant.AssistantService: このクライアントを使用

APIキーはユーザー設定（AppSettings.ai_api_key）から渡され、
Authorizationヘッダーとして送信される（認証付きプロキシ経由の利用を想定）。
"""

import logging
from typing import Dict, List, Optional

import ollama


class OllamaClient:
    """Ollama APIクライアント"""

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "llama3.1:8b",
        temperature: float = 0.7,
        max_tokens: int = 300,
        api_key: Optional[str] = None,
    ):
        """
        初期化

        Args:
            host: OllamaサーバーのURL
            model: 使用するモデル名
            temperature: 生成温度（0.0-1.0）
            max_tokens: 最大トークン数
            api_key: Bearerトークン（省略時はヘッダーなし）
        """
        self.host = host
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logging.getLogger(__name__)

        headers = {"Authorization": f"Bearer {api_key}"} if api_key else None
        self.client = ollama.Client(host=host, headers=headers)

    def chat(self, messages: List[Dict[str, str]]) -> str:
        """
        チャット形式で会話

        Args:
            messages: メッセージのリスト [{"role": "user", "content": "..."}]

        Returns:
            応答テキスト
        """
        try:
            response = self.client.chat(
                model=self.model,
                messages=messages,
                options={
                    "temperature": self.temperature,
                    "num_predict": self.max_tokens,
                },
            )
            return response["message"]["content"]

        except Exception as e:
            self.logger.error(f"Ollama chat error: {e}")
            raise
