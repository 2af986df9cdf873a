#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
推荐解释文本生成客户端基类
提供统一的生成接口，便于接入不同的文本生成服务
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ExplanationContext:
    """生成单条推荐解释所需的上下文"""
    candidate_name: str
    candidate_element: str
    dominant_element: str
    beneficial_elements: List[str] = field(default_factory=list)
    animal_sign: Optional[str] = None
    intentions: List[str] = field(default_factory=list)
    reasons: List[str] = field(default_factory=list)


class BaseExplanationClient(ABC):
    """文本生成客户端基类"""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """服务名称"""
        pass

    @property
    @abstractmethod
    def is_enabled(self) -> bool:
        """是否已配置（有 API Key）"""
        pass

    @abstractmethod
    async def generate_explanation(self, context: ExplanationContext) -> str:
        """
        生成推荐解释

        Args:
            context: 水晶与命盘上下文

        Returns:
            解释文本（非空）

        Raises:
            httpx.HTTPError: 网络或服务端错误
            ValueError: 服务返回空文本
        """
        pass

    async def aclose(self) -> None:
        """释放连接（可选实现）"""
        return None
