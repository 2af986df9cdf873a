#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
水晶匹配与排序

两种流程：
- 心愿流程（match / recommend）：命盘喜用五行 + 用户心愿 -> 五行需求权重 -> 打分排序 -> 生成解释
- 仅五行流程（rank_by_element）：用相合度评分器逐个打分排序

打分与排序完全同步且确定；只有解释文本生成是异步的，失败时使用固定文案。
"""

import asyncio
import inspect
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

from core.analyzers.compatibility_analyzer import CompatibilityScore, CompatibilityScorer
from core.analyzers.element_balance_analyzer import ChartAnalysis, ElementBalanceAnalyzer
from core.calculators.pillar_calculator import PillarCalculator
from core.config.intention_config import get_elements_for_intention, get_elements_for_intentions
from core.data.constants import ELEMENTS, Element
from shared.clients.base_explanation_client import BaseExplanationClient, ExplanationContext
from shared.config.app_config import MatcherConfig

from .input_processor import BirthInputProcessor
from .schemas import BirthInput, CandidateItem, ChartProfile, MatchResult, QualityTier, RankedMatch

logger = logging.getLogger(__name__)

BENEFICIAL_WEIGHT = 3
INTENTION_WEIGHT = 2
POINTS_PER_WEIGHT = 20
MAX_ELEMENT_POINTS = 100

QUALITY_BONUS = {
    QualityTier.HIGH: (10, "Premium quality crystal"),
    QualityTier.GOOD: (5, "Good quality crystal"),
}

FALLBACK_TEMPLATE = "This {name} resonates with your energy profile and supports your journey toward {intention}."


class InventoryProvider(Protocol):
    """库存查询（由调用方提供，只返回有货商品）"""

    def list_available(self, elements: Sequence[Element]) -> Sequence[CandidateItem]:
        ...


def build_demand(analysis: ChartAnalysis, intentions: Sequence[str]) -> Dict[Element, int]:
    """
    合并五行需求权重：喜用五行每个 +3，心愿五行每个 +2（同一五行累加）

    返回的字典按首次出现顺序排列，只包含有需求的五行
    """
    demand: Dict[Element, int] = {}
    for element in analysis.beneficial_elements:
        demand[element] = demand.get(element, 0) + BENEFICIAL_WEIGHT
    for element in get_elements_for_intentions(intentions):
        demand[element] = demand.get(element, 0) + INTENTION_WEIGHT
    return demand


def fallback_explanation(candidate: CandidateItem, intentions: Sequence[str]) -> str:
    intention = intentions[0].lower() if intentions else "balance"
    return FALLBACK_TEMPLATE.format(name=candidate.display_name, intention=intention)


class CrystalMatcher:
    """水晶匹配器"""

    def __init__(
        self,
        explanation_client: Optional[BaseExplanationClient] = None,
        config: Optional[MatcherConfig] = None,
        scorer: Optional[CompatibilityScorer] = None,
        calculator: Optional[PillarCalculator] = None,
    ):
        self.explanation_client = explanation_client
        self.config = config or MatcherConfig()
        self.scorer = scorer or CompatibilityScorer()
        self.calculator = calculator or PillarCalculator()

    # === 心愿流程 ==================================================================================

    async def match(
        self,
        analysis: ChartAnalysis,
        intentions: Sequence[str],
        candidates: Sequence[CandidateItem],
    ) -> List[RankedMatch]:
        """
        按命盘与心愿为候选水晶打分，返回前 N 个并附带解释文本

        Args:
            analysis: 命盘五行分析
            intentions: 用户选择的心愿（未知心愿忽略）
            candidates: 候选水晶（库存方已过滤有货）

        Returns:
            按 score.total_score 降序的 RankedMatch 列表（同分保持输入顺序）
        """
        intentions = list(intentions)
        demand = build_demand(analysis, intentions)

        scored = [self._score_candidate(c, analysis, intentions, demand) for c in candidates if c.available]
        scored.sort(key=lambda item: -item[1].score.total_score)
        top = scored[:self.config.top_n]

        logger.info(
            f"水晶匹配: 候选 {len(candidates)} 个, 返回 {len(top)} 个, "
            f"需求权重 {', '.join(f'{e.value}={w}' for e, w in demand.items())}"
        )

        texts = await self._generate_explanations(
            [candidate for candidate, _ in top], analysis, intentions, [m.reasons for _, m in top]
        )
        return [match.model_copy(update={"explanation_text": text}) for (_, match), text in zip(top, texts)]

    def _score_candidate(self, candidate: CandidateItem, analysis: ChartAnalysis,
                         intentions: List[str], demand: Dict[Element, int]):
        element = candidate.element
        element_points = min(MAX_ELEMENT_POINTS, demand.get(element, 0) * POINTS_PER_WEIGHT)

        reasons: List[str] = []
        if element in analysis.beneficial_elements:
            if element in analysis.missing_elements:
                reasons.append(f"Restores your missing {element.value.lower()} energy")
            else:
                reasons.append("Balances your energy profile")

        supported = next((tag for tag in intentions if element in get_elements_for_intention(tag)), None)
        if supported is not None:
            reasons.append(f"Supports your intention: {supported}")

        bonus, quality_reason = QUALITY_BONUS.get(candidate.quality_tier, (0, None))
        if quality_reason:
            reasons.append(quality_reason)

        reasons = list(dict.fromkeys(reasons))
        score = CompatibilityScore(
            total_score=element_points + bonus,
            element_score=element_points,
            zodiac_score=0,
            explanation=reasons[0] if reasons else "",
            recommendations=list(reasons),
        )
        match = RankedMatch(
            candidate_id=candidate.id,
            candidate_name=candidate.display_name,
            element=element,
            score=score,
            reasons=reasons,
        )
        return candidate, match

    async def _generate_explanations(self, candidates: List[CandidateItem], analysis: ChartAnalysis,
                                     intentions: List[str], reasons: List[List[str]]) -> List[str]:
        if not candidates:
            return []
        if self.explanation_client is None or not self.explanation_client.is_enabled:
            return [fallback_explanation(c, intentions) for c in candidates]

        semaphore = asyncio.Semaphore(max(1, self.config.top_n))

        async def explain(candidate: CandidateItem, candidate_reasons: List[str]) -> str:
            context = ExplanationContext(
                candidate_name=candidate.display_name,
                candidate_element=candidate.element.value,
                dominant_element=analysis.dominant_element.value,
                beneficial_elements=[e.value for e in analysis.beneficial_elements],
                animal_sign=analysis.animal_sign.value,
                intentions=list(intentions),
                reasons=list(candidate_reasons),
            )
            async with semaphore:
                try:
                    return await asyncio.wait_for(
                        self.explanation_client.generate_explanation(context),
                        timeout=self.config.explanation_timeout,
                    )
                except Exception as e:
                    logger.warning(f"生成推荐解释失败，使用默认文案: candidate={candidate.id}, error={e!r}")
                    return fallback_explanation(candidate, intentions)

        return list(await asyncio.gather(*(explain(c, r) for c, r in zip(candidates, reasons))))

    # === 仅五行流程 ================================================================================

    def rank_by_element(self, chart, candidates: Sequence[CandidateItem],
                        limit: Optional[int] = None) -> List[RankedMatch]:
        """
        用相合度评分器为候选水晶排序（无心愿、无解释生成）

        Args:
            chart: 提供 dominant_element 与 animal_sign 的命盘（ChartAnalysis / YearChart）
            candidates: 候选水晶，无货的跳过
            limit: 返回数量，默认 config.element_top_n
        """
        limit = self.config.element_top_n if limit is None else limit
        matches = []
        for candidate in candidates:
            if not candidate.available:
                continue
            score = self.scorer.calculate(chart, candidate.element, candidate.animal_tag)
            matches.append(RankedMatch(
                candidate_id=candidate.id,
                candidate_name=candidate.display_name,
                element=candidate.element,
                score=score,
                reasons=list(score.recommendations),
                explanation_text=score.explanation,
            ))
        matches.sort(key=lambda m: -m.score.total_score)
        return matches[:limit]

    # === 完整流程 ==================================================================================

    async def recommend(
        self,
        birth: Union[BirthInput, Mapping[str, Any]],
        intentions: Sequence[str],
        inventory: InventoryProvider,
    ) -> MatchResult:
        """
        出生信息 -> 排盘 -> 五行分析 -> 查询库存 -> 匹配

        Raises:
            ValidationError: 出生信息非法
        """
        birth_input = BirthInputProcessor.from_payload(birth)
        chart = self.calculator.calculate(birth_input.birth_date, birth_input.birth_hour)
        analysis = ElementBalanceAnalyzer.analyze(chart)

        demand = build_demand(analysis, intentions)
        wanted = [e for e in ELEMENTS if e in demand]
        candidates = inventory.list_available(wanted)
        if inspect.isawaitable(candidates):
            candidates = await candidates

        matches = await self.match(analysis, intentions, list(candidates))
        profile = ChartProfile(
            year_element=chart.year.stem_element,
            day_element=chart.day.stem_element,
            dominant_element=analysis.dominant_element,
            deficient_elements=list(analysis.missing_elements),
            animal_sign=chart.animal_sign,
        )
        return MatchResult(matches=matches, chart_profile=profile, summary=analysis.summary)
