#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""推荐解释文本生成客户端"""

from .base_explanation_client import BaseExplanationClient, ExplanationContext
from .explanation_client_factory import ExplanationClientFactory, FallbackExplanationClient
from .llm_explanation_clients import (
    AnthropicExplanationClient,
    GeminiExplanationClient,
    OpenAIExplanationClient,
)
from .prompt_builder import build_explanation_prompt

__all__ = [
    'BaseExplanationClient',
    'ExplanationContext',
    'ExplanationClientFactory',
    'FallbackExplanationClient',
    'AnthropicExplanationClient',
    'GeminiExplanationClient',
    'OpenAIExplanationClient',
    'build_explanation_prompt',
]
