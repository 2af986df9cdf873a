#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
出生信息输入处理 - 统一校验出生日期与时辰
"""

import logging
from datetime import date, datetime
from typing import Any, Mapping, Optional, Tuple, Union

import pydantic

from core.exceptions import ValidationError

from .schemas import BirthInput

logger = logging.getLogger(__name__)


class BirthInputProcessor:
    """出生信息输入处理工具类"""

    @staticmethod
    def process_input(
        birth_date: Union[date, datetime, str],
        birth_hour: Optional[int] = None,
    ) -> BirthInput:
        """
        校验出生信息

        Args:
            birth_date: 出生日期（date 或 YYYY-MM-DD 字符串；datetime 只取日期部分）
            birth_hour: 出生小时（0-23），可为空

        Returns:
            BirthInput

        Raises:
            ValidationError: 日期格式错误、年份超出范围或时辰非法（field 指明出错字段）
        """
        if isinstance(birth_date, datetime):
            birth_date = birth_date.date()
        return BirthInputProcessor.from_payload({"birth_date": birth_date, "birth_hour": birth_hour})

    @staticmethod
    def from_payload(payload: Union[BirthInput, Mapping[str, Any]]) -> BirthInput:
        """从请求字典构建 BirthInput，pydantic 错误统一转换为 ValidationError"""
        if isinstance(payload, BirthInput):
            return payload
        try:
            return BirthInput.model_validate(dict(payload))
        except pydantic.ValidationError as e:
            field, message = BirthInputProcessor._first_error(e)
            logger.info(f"出生信息校验失败: {field}: {message}")
            raise ValidationError(message, field=field) from e

    @staticmethod
    def _first_error(error: pydantic.ValidationError) -> Tuple[Optional[str], str]:
        first = error.errors()[0]
        loc = first.get("loc") or ()
        field = str(loc[0]) if loc else None
        return field, first.get("msg", str(error))
