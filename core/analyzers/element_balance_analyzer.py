#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
五行平衡分析器

功能：
- 按固定权重统计四柱八个位置的五行分布
- 判断：主五行、最弱五行、缺失五行
- 推导：需要补充的喜用五行
- 生成固定模板的总结文本

设计原则：
- 每次请求重新计算，不缓存
- 结果只依赖命盘本身，可并发调用
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from core.calculators.bazi_core.element_relations import (
    get_controlled_by_element,
    get_producing_from_element,
)
from core.calculators.pillar_calculator import FullChart
from core.data.constants import Animal, ELEMENTS, Element
from core.exceptions import InvariantError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartAnalysis:
    """命盘五行分析结果"""
    chart: FullChart
    scores: Dict[Element, int]
    dominant_element: Element
    weakest_elements: List[Element]
    missing_elements: List[Element]
    beneficial_elements: List[Element]
    summary: str

    @property
    def animal_sign(self) -> Animal:
        return self.chart.animal_sign

    @property
    def strengths(self) -> List[Element]:
        """助力五行：主五行 + 生主五行者"""
        return [self.dominant_element, get_producing_from_element(self.dominant_element)]

    @property
    def total_score(self) -> int:
        return sum(self.scores.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chart": self.chart.to_dict(),
            "scores": {element.value: score for element, score in self.scores.items()},
            "dominant_element": self.dominant_element.value,
            "weakest_elements": [e.value for e in self.weakest_elements],
            "missing_elements": [e.value for e in self.missing_elements],
            "beneficial_elements": [e.value for e in self.beneficial_elements],
            "strengths": [e.value for e in self.strengths],
            "summary": self.summary,
        }


class ElementBalanceAnalyzer:
    """五行平衡分析器"""

    # 八个位置的权重，月令（月支）代表季节主气，权重最高
    PILLAR_WEIGHTS = {
        ('year', 'stem'): 10,
        ('year', 'branch'): 10,
        ('month', 'stem'): 10,
        ('month', 'branch'): 40,
        ('day', 'stem'): 20,
        ('day', 'branch'): 15,
        ('hour', 'stem'): 10,
        ('hour', 'branch'): 10,
    }

    TOTAL_WEIGHT = sum(PILLAR_WEIGHTS.values())  # 125

    # 主五行占比超过该值时，需要克制主五行
    DOMINANT_RATIO_THRESHOLD = 0.40

    @staticmethod
    def analyze(chart: FullChart) -> ChartAnalysis:
        """
        分析四柱命盘的五行分布

        Args:
            chart: 四柱命盘

        Returns:
            ChartAnalysis

        Raises:
            InvariantError: 五行总分为 0（固定权重下不可能出现）
        """
        scores = ElementBalanceAnalyzer.calculate_scores(chart)
        total = sum(scores.values())
        if total <= 0:
            raise InvariantError(f"命盘五行总分异常: {total}")

        # 按分数稳定降序：同分时声明在前的五行排在前面，
        # 因此主五行取同分中最先声明者，末尾两位取同分中最后声明者
        descending = sorted(ELEMENTS, key=lambda e: -scores[e])
        dominant = descending[0]
        missing = [e for e in ELEMENTS if scores[e] == 0]
        weakest = descending[-2:]

        beneficial = ElementBalanceAnalyzer._derive_beneficial(scores, dominant, missing, descending, total)
        summary = ElementBalanceAnalyzer._build_summary(dominant, missing, beneficial)

        logger.debug(f"五行分布: {ElementBalanceAnalyzer._format_scores(scores)}, 主五行={dominant.value}, 喜用={[e.value for e in beneficial]}")

        return ChartAnalysis(
            chart=chart,
            scores=scores,
            dominant_element=dominant,
            weakest_elements=weakest,
            missing_elements=missing,
            beneficial_elements=beneficial,
            summary=summary,
        )

    @staticmethod
    def calculate_scores(chart: FullChart) -> Dict[Element, int]:
        """按位置权重累加五行分数（五行齐全，缺失为 0）"""
        scores = {element: 0 for element in ELEMENTS}
        pillars = chart.pillars()
        for (position, part), weight in ElementBalanceAnalyzer.PILLAR_WEIGHTS.items():
            pillar = pillars[position]
            element = pillar.stem_element if part == 'stem' else pillar.branch_element
            scores[element] += weight
        return scores

    @staticmethod
    def _derive_beneficial(
        scores: Dict[Element, int],
        dominant: Element,
        missing: List[Element],
        descending: List[Element],
        total: int
    ) -> List[Element]:
        """
        喜用五行 = 缺失五行
                 + 克主五行者（主五行占比 > 40%）
                 + 最弱的非零五行（缺失少于两个时）
        """
        beneficial: List[Element] = list(missing)

        if scores[dominant] / total > ElementBalanceAnalyzer.DOMINANT_RATIO_THRESHOLD:
            controller = get_controlled_by_element(dominant)
            if controller not in beneficial:
                beneficial.append(controller)

        if len(missing) < 2:
            weakest_present = next((e for e in reversed(descending) if scores[e] > 0), None)
            if weakest_present is not None and weakest_present not in beneficial:
                beneficial.append(weakest_present)

        return beneficial

    @staticmethod
    def _build_summary(dominant: Element, missing: List[Element], beneficial: List[Element]) -> str:
        summary = f"Your chart shows a strong influence of {dominant.value} energy. "
        if missing:
            summary += f"You are missing {', '.join(e.value for e in missing)} elements."
        else:
            summary += "Your energy profile is relatively distributed."
        summary += f" To balance your energy, we recommend crystals rich in {' and '.join(e.value for e in beneficial)}."
        return summary

    @staticmethod
    def _format_scores(scores: Dict[Element, int]) -> str:
        return ", ".join(f"{element.value}={score}" for element, score in scores.items())


def analyze_chart(chart: FullChart) -> ChartAnalysis:
    """便捷函数：分析命盘五行"""
    return ElementBalanceAnalyzer.analyze(chart)
