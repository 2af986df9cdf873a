#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Schemas for crystal-match service."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from core.analyzers.compatibility_analyzer import CompatibilityScore
from core.calculators.bazi_core.element_relations import to_element
from core.data.constants import Animal, Element, SUPPORTED_YEAR_RANGE
from core.exceptions import InvariantError


class QualityTier(str, Enum):
    """水晶品级"""
    HIGH = "HIGH"
    GOOD = "GOOD"
    NORMAL = "NORMAL"


class BirthInput(BaseModel):
    """出生信息"""
    birth_date: date = Field(..., description="公历出生日期，格式：YYYY-MM-DD", examples=["1990-05-15"])
    birth_hour: Optional[int] = Field(None, ge=0, le=23, description="出生小时（0-23），未知时为空，按正午计算")

    @field_validator('birth_date')
    @classmethod
    def validate_birth_date(cls, v: date) -> date:
        """出生年份必须在支持范围内"""
        min_year, max_year = SUPPORTED_YEAR_RANGE
        if not min_year <= v.year <= max_year:
            raise ValueError(f'出生年份必须在 {min_year}-{max_year} 之间')
        return v


class CandidateItem(BaseModel):
    """候选水晶（库存商品）"""
    id: str = Field(..., description="商品ID")
    element: Element = Field(..., description="水晶五行：Wood/Fire/Earth/Metal/Water（不区分大小写）")
    quality_tier: QualityTier = Field(QualityTier.NORMAL, description="品级：HIGH/GOOD/NORMAL")
    available: bool = Field(True, description="是否有货")
    animal_tag: Optional[str] = Field(None, description="关联生肖（可选）")
    name: Optional[str] = Field(None, description="展示名称")

    @field_validator('id', mode='before')
    @classmethod
    def validate_id(cls, v):
        if v is None or str(v).strip() == "":
            raise ValueError('商品ID不能为空')
        return str(v)

    @field_validator('element', mode='before')
    @classmethod
    def validate_element(cls, v):
        try:
            return to_element(v)
        except InvariantError:
            raise ValueError(f'未知五行: {v!r}')

    @field_validator('quality_tier', mode='before')
    @classmethod
    def validate_quality_tier(cls, v):
        if v is None:
            return QualityTier.NORMAL
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def display_name(self) -> str:
        return self.name or self.id


class RankedMatch(BaseModel):
    """排序后的推荐结果"""
    candidate_id: str
    candidate_name: str
    element: Element
    score: CompatibilityScore
    reasons: List[str] = Field(default_factory=list)
    explanation_text: str = ""


class ChartProfile(BaseModel):
    """命盘概要（展示用）"""
    year_element: Element
    day_element: Element
    dominant_element: Element
    deficient_elements: List[Element] = Field(default_factory=list)
    animal_sign: Animal


class MatchResult(BaseModel):
    """完整推荐结果"""
    matches: List[RankedMatch] = Field(default_factory=list)
    chart_profile: ChartProfile
    summary: str
