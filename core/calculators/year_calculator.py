#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
简化年柱命盘

只根据出生年份推算年干支、年五行、生肖与阴阳，并给出简化的
主五行 / 辅助五行 / 需平衡五行 / 助力五行。

注意：本模块不看节气，1 月与 2 月初出生者的结果可能与四柱排盘
（core.calculators.pillar_calculator）不同，四柱排盘为准。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.calculators.bazi_core.element_relations import (
    get_controlled_by_element,
    get_controlled_element,
    get_producing_element,
    get_producing_from_element,
)
from core.calculators.bazi_logging import safe_log
from core.data.constants import (
    Animal,
    BRANCH_ANIMALS,
    EARTHLY_BRANCHES,
    Element,
    HEAVENLY_STEMS,
    STEM_ELEMENTS,
    STEM_YINYANG,
    SUPPORTED_YEAR_RANGE,
    YEAR_ANCHOR,
)
from core.exceptions import ValidationError


@dataclass(frozen=True)
class BirthYearInfo:
    """出生年信息"""
    year: int
    stem: str
    branch: str
    element: Element
    animal: Animal
    yin_yang: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "stem": self.stem,
            "branch": self.branch,
            "element": self.element.value,
            "animal": self.animal.value,
            "yin_yang": self.yin_yang,
        }


@dataclass(frozen=True)
class YearChart:
    """简化年柱命盘（以年干五行为主五行）"""
    birth_year: BirthYearInfo
    dominant_element: Element
    secondary_element: Optional[Element]
    needs_balance: List[Element]
    strengths: List[Element]

    @property
    def animal_sign(self) -> Animal:
        return self.birth_year.animal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "birth_year": self.birth_year.year,
            "animal": self.birth_year.animal.value,
            "element": self.birth_year.element.value,
            "dominant_element": self.dominant_element.value,
            "secondary_element": self.secondary_element.value if self.secondary_element else None,
            "needs_balance": [e.value for e in self.needs_balance],
            "strengths": [e.value for e in self.strengths],
        }


def validate_year(year: int, field: str = "birth_year") -> int:
    """校验年份是否在支持范围内，超出范围抛出 ValidationError（不做静默修正）"""
    min_year, max_year = SUPPORTED_YEAR_RANGE
    if isinstance(year, bool) or not isinstance(year, int):
        raise ValidationError(f"{field} must be an integer year, got {year!r}", field=field)
    if not min_year <= year <= max_year:
        raise ValidationError(
            f"Year {year} is outside the supported range ({min_year}-{max_year})",
            field=field,
        )
    return year


def get_birth_year_info(year: int) -> BirthYearInfo:
    """
    查询出生年的干支信息

    Args:
        year: 公历年份（按整年计算，不考虑立春）

    Raises:
        ValidationError: 年份超出支持范围
    """
    validate_year(year)
    stem = HEAVENLY_STEMS[(year - YEAR_ANCHOR) % 10]
    branch = EARTHLY_BRANCHES[(year - YEAR_ANCHOR) % 12]
    return BirthYearInfo(
        year=year,
        stem=stem,
        branch=branch,
        element=STEM_ELEMENTS[stem],
        animal=BRANCH_ANIMALS[branch],
        yin_yang=STEM_YINYANG[stem],
    )


def calculate_year_chart(year: int) -> YearChart:
    """
    计算简化年柱命盘

    - 主五行：年干五行
    - 辅助五行：阳年取我生，阴年取生我
    - 需平衡：克我、我克
    - 助力：本五行 + 生我
    """
    info = get_birth_year_info(year)
    dominant = info.element

    if info.yin_yang == 'yang':
        secondary = get_producing_element(dominant)
    else:
        secondary = get_producing_from_element(dominant)

    chart = YearChart(
        birth_year=info,
        dominant_element=dominant,
        secondary_element=secondary,
        needs_balance=[get_controlled_by_element(dominant), get_controlled_element(dominant)],
        strengths=[dominant, get_producing_from_element(dominant)],
    )
    safe_log('debug', "年柱命盘 %s: %s%s %s %s", year, info.stem, info.branch, dominant, info.animal)
    return chart
