#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
水晶相合度评分器

总分 = 基础分 + 五行分 + 生肖分（不做上下限截断）

五行分按「水晶五行」与「用户主五行」的关系计算：
- 同五行：增强
- 水晶生主五行：滋养
- 水晶克主五行：压制（产生警告）
- 主五行克水晶：可驾驭
- 主五行生水晶：泄气，不计分
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from core.calculators.bazi_core.element_relations import get_element_relation, to_element
from core.config.compatibility_config import CompatibilityRules, DEFAULT_COMPATIBILITY_RULES
from core.data.constants import Animal, Element
from core.data.relations import ZODIAC_COMPATIBILITY

logger = logging.getLogger(__name__)


@dataclass
class CompatibilityScore:
    """相合度评分结果"""
    total_score: int
    element_score: int
    zodiac_score: int
    explanation: str = ""
    warnings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_score": self.total_score,
            "element_score": self.element_score,
            "zodiac_score": self.zodiac_score,
            "explanation": self.explanation,
            "warnings": list(self.warnings),
            "recommendations": list(self.recommendations),
        }


def to_animal(value: Union[Animal, str, None]) -> Optional[Animal]:
    """将生肖标签转换为 Animal，无法识别时返回 None"""
    if value is None or isinstance(value, Animal):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for animal in Animal:
            if animal.value.lower() == normalized:
                return animal
    return None


class CompatibilityScorer:
    """相合度评分器（无状态，可复用）"""

    def __init__(self, rules: Optional[CompatibilityRules] = None):
        self.rules = rules or DEFAULT_COMPATIBILITY_RULES

    def calculate(self, chart, candidate_element: Union[Element, str],
                  candidate_animal: Union[Animal, str, None] = None) -> CompatibilityScore:
        """
        计算水晶与命盘的相合度

        Args:
            chart: 提供 dominant_element 与 animal_sign 的命盘（ChartAnalysis / YearChart）
            candidate_element: 水晶五行
            candidate_animal: 水晶关联生肖（可选）

        Raises:
            InvariantError: 五行取值非法
        """
        return self.calculate_for_element(
            chart.dominant_element,
            candidate_element,
            candidate_animal=candidate_animal,
            user_animal=getattr(chart, 'animal_sign', None),
        )

    def calculate_for_element(self, dominant_element: Union[Element, str],
                              candidate_element: Union[Element, str],
                              candidate_animal: Union[Animal, str, None] = None,
                              user_animal: Union[Animal, str, None] = None) -> CompatibilityScore:
        dominant = to_element(dominant_element)
        candidate = to_element(candidate_element)

        warnings: List[str] = []
        recommendations: List[str] = []
        element_score, explanation = self._score_element(dominant, candidate, warnings, recommendations)
        zodiac_score = self._score_zodiac(candidate_animal, user_animal, warnings, recommendations)

        return CompatibilityScore(
            total_score=self.rules.base_score + element_score + zodiac_score,
            element_score=element_score,
            zodiac_score=zodiac_score,
            explanation=explanation,
            warnings=warnings,
            recommendations=recommendations,
        )

    # === 五行分 ====================================================================================

    def _score_element(self, dominant: Element, candidate: Element,
                       warnings: List[str], recommendations: List[str]):
        rules = self.rules
        relation = get_element_relation(dominant, candidate)
        names = {'dominant': dominant.value, 'candidate': candidate.value}

        if relation == 'same':
            recommendations.append(rules.same_element.render(**names))
            return rules.same_element.delta, rules.same_element_explanation.format(**names)

        if relation == 'producing_me':
            text = rules.productive.render(source=candidate.value, target=dominant.value)
            recommendations.append(text)
            return rules.productive.delta, text

        if relation == 'controlling_me':
            text = rules.controlling.render(
                source=candidate.value,
                verb=rules.control_verbs[candidate],
                target=dominant.value,
                qualities=rules.element_qualities[dominant],
            )
            warnings.append(text)
            return rules.controlling.delta, text

        if relation == 'me_controlling':
            recommendations.append(rules.controlled_recommendation)
            return rules.controlled.delta, rules.controlled.render(**names)

        # me_producing
        return rules.drain.delta, rules.drain.render(**names)

    # === 生肖分 ====================================================================================

    def _score_zodiac(self, candidate_animal, user_animal,
                      warnings: List[str], recommendations: List[str]) -> int:
        if candidate_animal is None or user_animal is None:
            return 0

        candidate = to_animal(candidate_animal)
        user = to_animal(user_animal)
        if candidate is None or user is None:
            logger.debug(f"忽略无法识别的生肖: candidate={candidate_animal!r}, user={user_animal!r}")
            return 0

        rules = self.rules
        affinity = ZODIAC_COMPATIBILITY[user]
        names = {'candidate': candidate.value, 'user': user.value}

        if candidate in affinity.best_matches:
            recommendations.append(rules.zodiac_best.render(**names))
            return rules.zodiac_best.delta
        if candidate in affinity.good_matches:
            recommendations.append(rules.zodiac_good.render(**names))
            return rules.zodiac_good.delta
        if candidate in affinity.challenging_matches:
            warnings.append(rules.zodiac_challenging.render(**names))
            return rules.zodiac_challenging.delta
        if candidate == affinity.conflict:
            warnings.append(rules.zodiac_conflict.render(**names))
            return rules.zodiac_conflict.delta
        return 0


def calculate_compatibility(chart, candidate_element, candidate_animal=None) -> CompatibilityScore:
    """便捷函数：使用默认规则计算相合度"""
    return CompatibilityScorer().calculate(chart, candidate_element, candidate_animal)
