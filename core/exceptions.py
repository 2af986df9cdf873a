#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
自定义业务异常

用于表示业务逻辑错误，与系统错误区分开来。
"""

from typing import Optional


class BusinessError(Exception):
    """
    业务异常基类

    code 与 HTTP 状态码保持一致，方便上层路由直接映射。
    """
    def __init__(self, message: str, code: int = 400, error_type: str = "business_error"):
        self.message = message
        self.code = code
        self.error_type = error_type
        super().__init__(message)


class ValidationError(BusinessError):
    """参数验证错误（出生日期超出支持范围、时辰非法等）"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        error_type = f"validation_error:{field}" if field else "validation_error"
        super().__init__(message, code=400, error_type=error_type)


class ServiceUnavailableError(BusinessError):
    """服务不可用错误（文本生成服务全部失败等）"""
    def __init__(self, message: str = "Service temporarily unavailable", service: Optional[str] = None):
        self.service = service
        super().__init__(message, code=503, error_type="service_unavailable")


class InvariantError(AssertionError):
    """程序不变量被破坏（五行越界、命盘总分为 0 等），属于编程错误，不可恢复"""
    pass
