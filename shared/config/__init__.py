#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""共享配置"""

from .app_config import AppConfig, ExplanationConfig, MatcherConfig, get_config, reload_config
from .env_config import EnvConfig, get_env_config, load_env_file

__all__ = [
    'AppConfig',
    'ExplanationConfig',
    'MatcherConfig',
    'get_config',
    'reload_config',
    'EnvConfig',
    'get_env_config',
    'load_env_file',
]
