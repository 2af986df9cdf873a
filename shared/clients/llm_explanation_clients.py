#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
各厂商文本生成客户端（OpenAI / Anthropic / Gemini）

均通过 httpx.AsyncClient 调用 REST 接口；HTTP 错误直接抛出，
由上层的 FallbackExplanationClient 记录并切换到下一个服务。
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any, Dict, Optional, Tuple

import httpx

from .base_explanation_client import BaseExplanationClient, ExplanationContext
from .prompt_builder import SYSTEM_PROMPT, build_explanation_prompt

logger = logging.getLogger(__name__)


class HttpExplanationClient(BaseExplanationClient):
    """基于 httpx 的客户端公共部分"""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str,
        timeout: float = 15.0,
        max_tokens: int = 200,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_tokens = max_tokens
        # 注入的客户端归调用方管理，这里不负责关闭
        self._http_client = http_client

    @property
    def is_enabled(self) -> bool:
        return bool(self.api_key)

    async def generate_explanation(self, context: ExplanationContext) -> str:
        if not self.is_enabled:
            raise RuntimeError(f"{self.provider_name} API key is not configured")

        prompt = build_explanation_prompt(context)
        url, headers, payload = self._build_request(prompt)
        logger.debug("Calling %s model=%s", self.provider_name, self.model)

        data = await self._post(url, headers, payload)
        text = (self._extract_text(data) or "").strip()
        if not text:
            raise ValueError(f"{self.provider_name} returned an empty explanation")
        return text

    async def _post(self, url: str, headers: Dict[str, str], payload: Dict[str, Any]) -> Dict[str, Any]:
        if self._http_client is not None:
            response = await self._http_client.post(url, headers=headers, json=payload, timeout=self.timeout)
            return self._handle_response(response)

        # 未注入时每次请求临时创建，用完即关闭
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(url, headers=headers, json=payload)
            return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Dict[str, Any]:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("%s returned %s: %s", self.provider_name, exc.response.status_code, exc.response.text[:500])
            raise
        return response.json()

    @abstractmethod
    def _build_request(self, prompt: str) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        """返回 (url, headers, payload)；密钥只能放在 headers 中"""

    @abstractmethod
    def _extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        """从响应 JSON 中取出文本"""


class OpenAIExplanationClient(HttpExplanationClient):
    """OpenAI Chat Completions"""

    @property
    def provider_name(self) -> str:
        return "openai"

    def _build_request(self, prompt: str):
        url = f"{self.base_url}/v1/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": 0.7,
        }
        return url, headers, payload

    def _extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        choices = data.get("choices") or []
        if not choices:
            return None
        return (choices[0].get("message") or {}).get("content")


class AnthropicExplanationClient(HttpExplanationClient):
    """Anthropic Messages API"""

    API_VERSION = "2023-06-01"

    @property
    def provider_name(self) -> str:
        return "anthropic"

    def _build_request(self, prompt: str):
        url = f"{self.base_url}/v1/messages"
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.API_VERSION,
        }
        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": prompt}],
        }
        return url, headers, payload

    def _extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        blocks = data.get("content") or []
        return "".join(block.get("text", "") for block in blocks if block.get("type") == "text")


class GeminiExplanationClient(HttpExplanationClient):
    """Google Gemini generateContent"""

    @property
    def provider_name(self) -> str:
        return "gemini"

    def _build_request(self, prompt: str):
        url = f"{self.base_url}/v1beta/models/{self.model}:generateContent"
        headers = {"x-goog-api-key": self.api_key}
        payload = {
            "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"maxOutputTokens": self.max_tokens, "temperature": 0.7},
        }
        return url, headers, payload

    def _extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        candidates = data.get("candidates") or []
        if not candidates:
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)
