#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
排盘计算模块共享日志

pillar_calculator.py、year_calculator.py 通过 safe_log 输出日志。
"core.calculators" 日志器自带一个不会因 Broken pipe 中断计算的处理器，
且不向根日志器传播，避免 configure_logging 之后每行输出两次。
"""

import logging

LOGGER_NAME = "core.calculators"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


class SafeStreamHandler(logging.StreamHandler):
    """输出端已关闭（管道断开）时静默丢弃，不影响排盘"""

    def emit(self, record):
        try:
            super().emit(record)
        except (BrokenPipeError, OSError):
            pass


def _build_logger() -> logging.Logger:
    calc_logger = logging.getLogger(LOGGER_NAME)
    # 模块被重复导入时不重复挂处理器
    if not calc_logger.handlers:
        handler = SafeStreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        calc_logger.addHandler(handler)
    calc_logger.setLevel(logging.INFO)
    calc_logger.propagate = False
    return calc_logger


logger = _build_logger()


def safe_log(level: str, message: str, *args) -> None:
    """
    输出排盘日志，未知级别按 info 处理

    Args:
        level: 'debug' / 'info' / 'warning' / 'error'
        message: 日志模板（%-格式）
        *args: 模板参数
    """
    try:
        logger.log(_LEVELS.get(level, logging.INFO), message, *args)
    except (BrokenPipeError, OSError):
        pass
