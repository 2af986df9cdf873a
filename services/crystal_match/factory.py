#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
水晶匹配服务启动装配

读取 .env 与环境变量，配置日志，创建文本生成客户端与匹配器。
"""

import logging
from typing import Optional

from shared.clients.explanation_client_factory import ExplanationClientFactory
from shared.config.app_config import AppConfig, reload_config
from shared.config.env_config import load_env_file, reset_env_config

from .matcher import CrystalMatcher

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def create_matcher(
    config: Optional[AppConfig] = None,
    load_env: bool = True,
    env_file: Optional[str] = None,
) -> CrystalMatcher:
    """
    创建匹配器

    Args:
        config: 应用配置，默认从环境变量读取
        load_env: 是否先加载 .env（覆盖已存在的同名环境变量）
        env_file: .env 路径，默认项目根目录下的 .env

    Returns:
        CrystalMatcher（未配置任何文本生成服务时，解释文本全部使用默认文案）
    """
    if config is None:
        if load_env:
            load_env_file(env_file, override=True)
            # 环境判断单例可能在加载 .env 之前已创建
            reset_env_config()
        config = reload_config()

    configure_logging(config.log_level)
    client = ExplanationClientFactory.create(config.explanation)
    logger.info(
        f"水晶匹配服务初始化: env={config.env}, top_n={config.matcher.top_n}, "
        f"explanation={'enabled' if client else 'fallback only'}"
    )
    return CrystalMatcher(explanation_client=client, config=config.matcher)
