#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest 全局配置

提供：
- 共享 fixtures
- 测试钩子
"""

import os
import sys
from datetime import date
from typing import List

import pytest

# 添加项目根目录到路径
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)


# ==================== 命盘 Fixtures ====================

@pytest.fixture(scope="function")
def sample_birth_date() -> date:
    """示例出生日期（庚午年 辛巳月 庚辰日）"""
    return date(1990, 5, 15)


@pytest.fixture(scope="function")
def sample_chart(sample_birth_date):
    """
    示例四柱命盘（正午出生）

    Returns:
        FullChart
    """
    from core.calculators.pillar_calculator import PillarCalculator
    return PillarCalculator().calculate(sample_birth_date, 12)


@pytest.fixture(scope="function")
def sample_analysis(sample_chart):
    """
    示例五行分析（火旺、缺木）

    Returns:
        ChartAnalysis
    """
    from core.analyzers.element_balance_analyzer import ElementBalanceAnalyzer
    return ElementBalanceAnalyzer.analyze(sample_chart)


@pytest.fixture(scope="function")
def fire_tiger_chart():
    """1986 丙寅年简化命盘（火、虎）"""
    from core.calculators.year_calculator import calculate_year_chart
    return calculate_year_chart(1986)


# ==================== 候选水晶 Fixtures ====================

@pytest.fixture(scope="function")
def sample_candidates() -> List:
    """
    示例候选水晶

    Returns:
        CandidateItem 列表
    """
    from services.crystal_match.schemas import CandidateItem
    from tests.fixtures.sample_data import CANDIDATES
    return [CandidateItem(**item) for item in CANDIDATES]


# ==================== Mock Fixtures ====================

@pytest.fixture(scope="function")
def mock_explanation_client():
    """
    Mock 文本生成客户端（总是成功）

    Yields:
        MagicMock，generate_explanation 为 AsyncMock
    """
    from unittest.mock import AsyncMock, MagicMock
    client = MagicMock()
    client.is_enabled = True
    client.provider_name = "mock"
    client.generate_explanation = AsyncMock(return_value="A thoughtful explanation.")
    yield client


@pytest.fixture(scope="function")
def failing_explanation_client():
    """Mock 文本生成客户端（总是失败）"""
    from unittest.mock import AsyncMock, MagicMock
    client = MagicMock()
    client.is_enabled = True
    client.provider_name = "broken"
    client.generate_explanation = AsyncMock(side_effect=RuntimeError("provider down"))
    yield client


@pytest.fixture(scope="function")
def clean_env(monkeypatch):
    """清除与本服务相关的环境变量，并重置配置单例"""
    from shared.config import env_config
    for key in (
        "ENV", "APP_ENV", "LOG_LEVEL", "DEBUG",
        "EXPLANATION_PROVIDERS", "GOOGLE_AI_API_KEY", "GEMINI_MODEL",
        "OPENAI_API_KEY", "OPENAI_MODEL", "OPENAI_BASE_URL",
        "ANTHROPIC_API_KEY", "ANTHROPIC_MODEL",
        "EXPLANATION_REQUEST_TIMEOUT", "MATCH_TOP_N", "ELEMENT_MATCH_TOP_N", "EXPLANATION_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)
    env_config.reset_env_config()
    yield monkeypatch
    env_config.reset_env_config()


# ==================== Pytest Hooks ====================

def pytest_configure(config):
    """
    pytest 配置钩子

    在 pytest 初始化时调用
    """
    config.addinivalue_line("markers", "slow: 标记为慢速测试，可通过 -m 'not slow' 跳过")
    config.addinivalue_line("markers", "integration: 集成测试")
    config.addinivalue_line("markers", "unit: 单元测试")


def pytest_collection_modifyitems(config, items):
    """根据路径自动添加标记"""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        elif "unit" in item.nodeid:
            item.add_marker(pytest.mark.unit)
