#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
文本生成客户端工厂
按配置顺序组装可用的服务，失败时依次切换
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from core.exceptions import ServiceUnavailableError
from shared.config.app_config import ExplanationConfig

from .base_explanation_client import BaseExplanationClient, ExplanationContext
from .llm_explanation_clients import (
    AnthropicExplanationClient,
    GeminiExplanationClient,
    OpenAIExplanationClient,
)

logger = logging.getLogger(__name__)


class FallbackExplanationClient(BaseExplanationClient):
    """按顺序尝试多个服务，全部失败时抛出 ServiceUnavailableError"""

    def __init__(self, clients: Sequence[BaseExplanationClient]):
        self.clients: List[BaseExplanationClient] = [c for c in clients if c.is_enabled]

    @property
    def provider_name(self) -> str:
        return "fallback(" + ",".join(c.provider_name for c in self.clients) + ")"

    @property
    def is_enabled(self) -> bool:
        return bool(self.clients)

    async def generate_explanation(self, context: ExplanationContext) -> str:
        errors = []
        for client in self.clients:
            try:
                return await client.generate_explanation(context)
            except Exception as e:
                logger.warning(f"{client.provider_name} 生成解释失败，尝试下一个服务: {e}")
                errors.append(f"{client.provider_name}: {e}")
        raise ServiceUnavailableError(
            "All explanation providers failed: " + "; ".join(errors),
            service="explanation",
        )

    async def aclose(self) -> None:
        for client in self.clients:
            await client.aclose()


class ExplanationClientFactory:
    """文本生成客户端工厂"""

    _builders: Dict[str, Callable[[ExplanationConfig], BaseExplanationClient]] = {
        "gemini": lambda c: GeminiExplanationClient(
            c.gemini_api_key, c.gemini_model, c.gemini_base_url, c.request_timeout, c.max_tokens
        ),
        "openai": lambda c: OpenAIExplanationClient(
            c.openai_api_key, c.openai_model, c.openai_base_url, c.request_timeout, c.max_tokens
        ),
        "anthropic": lambda c: AnthropicExplanationClient(
            c.anthropic_api_key, c.anthropic_model, c.anthropic_base_url, c.request_timeout, c.max_tokens
        ),
    }

    @classmethod
    def supported_providers(cls) -> List[str]:
        return list(cls._builders)

    @classmethod
    def create(cls, config: ExplanationConfig) -> Optional[FallbackExplanationClient]:
        """
        根据配置创建客户端链

        Returns:
            FallbackExplanationClient；没有配置任何 API Key 时返回 None
        """
        clients = []
        for provider in config.providers:
            builder = cls._builders.get(provider)
            if builder is None:
                logger.warning(f"不支持的文本生成服务: {provider}")
                continue
            client = builder(config)
            if client.is_enabled:
                clients.append(client)

        if not clients:
            logger.info("未配置文本生成服务，推荐解释将使用默认文案")
            return None

        logger.info(f"文本生成服务: {', '.join(c.provider_name for c in clients)}")
        return FallbackExplanationClient(clients)
