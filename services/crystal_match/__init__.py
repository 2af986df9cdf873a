#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
水晶匹配服务模块
提供排盘、五行分析与水晶推荐
"""

from .factory import create_matcher
from .input_processor import BirthInputProcessor
from .matcher import CrystalMatcher, InventoryProvider, build_demand
from .schemas import BirthInput, CandidateItem, ChartProfile, MatchResult, QualityTier, RankedMatch

__all__ = [
    'create_matcher',
    'BirthInputProcessor',
    'CrystalMatcher',
    'InventoryProvider',
    'build_demand',
    'BirthInput',
    'CandidateItem',
    'ChartProfile',
    'MatchResult',
    'QualityTier',
    'RankedMatch',
]
