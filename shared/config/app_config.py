#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
统一应用配置管理

所有配置项均来自环境变量，启动时由工厂读取一次后显式传给各组件。
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .env_config import EnvConfig, get_env_config

DEFAULT_PROVIDER_ORDER: Tuple[str, ...] = ("gemini", "openai", "anthropic")


@dataclass
class ExplanationConfig:
    """文本生成服务配置（各厂商 Key / 模型 / 地址）"""
    providers: Tuple[str, ...] = DEFAULT_PROVIDER_ORDER
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com"
    anthropic_api_key: Optional[str] = None
    anthropic_model: str = "claude-3-5-haiku-latest"
    anthropic_base_url: str = "https://api.anthropic.com"
    request_timeout: float = 15.0
    max_tokens: int = 200

    @classmethod
    def from_env(cls, env: Optional[EnvConfig] = None) -> 'ExplanationConfig':
        env = env or get_env_config()
        raw_providers = env.get_config("EXPLANATION_PROVIDERS", ",".join(DEFAULT_PROVIDER_ORDER))
        providers = tuple(p.strip().lower() for p in raw_providers.split(",") if p.strip())
        return cls(
            providers=providers,
            gemini_api_key=env.get_config("GOOGLE_AI_API_KEY") or None,
            gemini_model=env.get_config("GEMINI_MODEL", cls.gemini_model),
            openai_api_key=env.get_config("OPENAI_API_KEY") or None,
            openai_model=env.get_config("OPENAI_MODEL", cls.openai_model),
            openai_base_url=env.get_config("OPENAI_BASE_URL", cls.openai_base_url),
            anthropic_api_key=env.get_config("ANTHROPIC_API_KEY") or None,
            anthropic_model=env.get_config("ANTHROPIC_MODEL", cls.anthropic_model),
            request_timeout=env.get_float_config("EXPLANATION_REQUEST_TIMEOUT", cls.request_timeout),
        )

    @property
    def has_any_key(self) -> bool:
        return any((self.gemini_api_key, self.openai_api_key, self.anthropic_api_key))


@dataclass
class MatcherConfig:
    """匹配器配置"""
    top_n: int = 5                   # 心愿匹配返回数量（同时作为解释并发上限）
    element_top_n: int = 10          # 仅五行匹配返回数量
    explanation_timeout: float = 20.0

    @classmethod
    def from_env(cls, env: Optional[EnvConfig] = None) -> 'MatcherConfig':
        env = env or get_env_config()
        return cls(
            top_n=max(1, env.get_int_config("MATCH_TOP_N", cls.top_n)),
            element_top_n=max(1, env.get_int_config("ELEMENT_MATCH_TOP_N", cls.element_top_n)),
            explanation_timeout=env.get_float_config("EXPLANATION_TIMEOUT", cls.explanation_timeout),
        )


@dataclass
class AppConfig:
    """应用配置"""
    env: str = "local"
    debug: bool = False
    log_level: str = "INFO"
    explanation: ExplanationConfig = field(default_factory=ExplanationConfig)
    matcher: MatcherConfig = field(default_factory=MatcherConfig)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        env = get_env_config()
        return cls(
            env=env.env,
            debug=env.get_bool_config("DEBUG", False),
            log_level=(env.get_config("LOG_LEVEL", "INFO") or "INFO").upper(),
            explanation=ExplanationConfig.from_env(env),
            matcher=MatcherConfig.from_env(env),
        )


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reload_config() -> AppConfig:
    global _config
    _config = AppConfig.from_env()
    return _config
