#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
环境配置读取

统一环境判断（local / staging / production）和环境变量读取，
.env 文件通过 python-dotenv 加载。
"""

import logging
import os
from pathlib import Path
from typing import Literal, Optional, Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

Environment = Literal["local", "staging", "production"]

PROJECT_ROOT = Path(__file__).resolve().parents[2]

_ENV_ALIASES = {
    "local": "local",
    "dev": "local",
    "development": "local",
    "test": "local",
    "staging": "staging",
    "stage": "staging",
    "prod": "production",
    "production": "production",
}

_TRUE_VALUES = ("true", "1", "yes", "on")


def load_env_file(path: Union[str, Path, None] = None, override: bool = False) -> bool:
    """
    加载 .env 文件

    Args:
        path: .env 路径，默认项目根目录下的 .env
        override: 是否覆盖已存在的环境变量

    Returns:
        文件存在并已加载时返回 True
    """
    env_path = Path(path) if path else PROJECT_ROOT / ".env"
    if not env_path.exists():
        logger.debug(f"未找到环境变量文件: {env_path}")
        return False
    load_dotenv(env_path, override=override)
    logger.info(f"已加载环境变量文件: {env_path}")
    return True


class EnvConfig:
    """环境判断 + 类型化的环境变量读取"""

    def __init__(self):
        raw = os.getenv("ENV", os.getenv("APP_ENV", "local")).lower()
        # 未知环境按本地开发处理
        self._env: Environment = _ENV_ALIASES.get(raw, "local")

    @property
    def env(self) -> Environment:
        return self._env

    @property
    def is_local_dev(self) -> bool:
        return self._env == "local"

    @property
    def is_staging(self) -> bool:
        return self._env == "staging"

    @property
    def is_production(self) -> bool:
        return self._env == "production"

    def get_config(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        读取字符串配置

        Raises:
            ValueError: required=True 且未设置
        """
        value = os.getenv(key, default)
        if required and value is None:
            raise ValueError(f"必需的环境变量 {key} 未设置")
        return value

    def get_bool_config(self, key: str, default: bool = False) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.strip().lower() in _TRUE_VALUES

    def get_int_config(self, key: str, default: int = 0) -> int:
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning(f"环境变量 {key}={value!r} 不是整数，使用默认值 {default}")
            return default

    def get_float_config(self, key: str, default: float = 0.0) -> float:
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning(f"环境变量 {key}={value!r} 不是数字，使用默认值 {default}")
            return default


_env_config: Optional[EnvConfig] = None


def get_env_config() -> EnvConfig:
    """获取环境配置实例（全局单例）"""
    global _env_config
    if _env_config is None:
        _env_config = EnvConfig()
    return _env_config


def reset_env_config() -> None:
    """丢弃单例，下次读取时重新检测（测试中修改环境变量后使用）"""
    global _env_config
    _env_config = None


def is_local_dev() -> bool:
    return get_env_config().is_local_dev


def is_production() -> bool:
    return get_env_config().is_production
