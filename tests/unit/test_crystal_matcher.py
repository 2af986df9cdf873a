#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
水晶匹配器单元测试
"""

import asyncio
import os
import sys
from unittest.mock import MagicMock

import pytest

# 添加项目根目录到路径
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, project_root)

from core.data.constants import Element
from core.exceptions import ValidationError
from services.crystal_match.matcher import CrystalMatcher, build_demand
from services.crystal_match.schemas import CandidateItem, MatchResult
from shared.config.app_config import MatcherConfig

INTENTIONS = ["Peace & Calm"]


class TestDemand:
    """五行需求权重测试类"""

    def test_weights_are_summed(self, sample_analysis):
        demand = build_demand(sample_analysis, INTENTIONS)
        assert demand == {Element.WOOD: 3, Element.WATER: 5, Element.EARTH: 2}

    def test_unknown_intentions_only_use_chart(self, sample_analysis):
        assert build_demand(sample_analysis, ["???"]) == {Element.WOOD: 3, Element.WATER: 3}


class TestMatch:
    """心愿流程测试类"""

    @pytest.mark.asyncio
    async def test_ranking_and_reasons(self, sample_analysis, sample_candidates):
        matches = await CrystalMatcher().match(sample_analysis, INTENTIONS, sample_candidates)

        assert [m.candidate_id for m in matches] == ["aquamarine", "green-aventurine", "smoky-quartz", "red-jasper"]
        assert [m.score.total_score for m in matches] == [110, 65, 40, 0]

        aquamarine = matches[0]
        assert aquamarine.score.element_score == 100
        assert aquamarine.score.zodiac_score == 0
        assert aquamarine.reasons == [
            "Balances your energy profile",
            "Supports your intention: Peace & Calm",
            "Premium quality crystal",
        ]
        assert aquamarine.score.explanation == "Balances your energy profile"
        assert matches[1].reasons == ["Restores your missing wood energy", "Good quality crystal"]
        assert matches[3].reasons == []

    @pytest.mark.asyncio
    async def test_fallback_text_without_client(self, sample_analysis, sample_candidates):
        matches = await CrystalMatcher().match(sample_analysis, INTENTIONS, sample_candidates)
        assert matches[0].explanation_text == (
            "This Aquamarine resonates with your energy profile and supports your journey toward peace & calm."
        )

    @pytest.mark.asyncio
    async def test_fallback_text_without_intentions(self, sample_analysis, sample_candidates):
        matches = await CrystalMatcher().match(sample_analysis, [], sample_candidates)
        assert matches[0].explanation_text.endswith("supports your journey toward balance.")

    @pytest.mark.asyncio
    async def test_top_n(self, sample_analysis):
        candidates = [CandidateItem(id=str(i), element="Water") for i in range(8)]
        matches = await CrystalMatcher().match(sample_analysis, INTENTIONS, candidates)
        assert len(matches) == 5
        # 同分保持输入顺序
        assert [m.candidate_id for m in matches] == ["0", "1", "2", "3", "4"]

    @pytest.mark.asyncio
    async def test_client_explanations(self, sample_analysis, sample_candidates, mock_explanation_client):
        matcher = CrystalMatcher(explanation_client=mock_explanation_client)
        matches = await matcher.match(sample_analysis, INTENTIONS, sample_candidates)

        assert all(m.explanation_text == "A thoughtful explanation." for m in matches)
        assert mock_explanation_client.generate_explanation.await_count == 4
        context = mock_explanation_client.generate_explanation.await_args_list[0].args[0]
        assert context.candidate_name == "Aquamarine"
        assert context.dominant_element == "Fire"
        assert context.intentions == INTENTIONS

    @pytest.mark.asyncio
    async def test_client_failure_keeps_scores(self, sample_analysis, sample_candidates, failing_explanation_client):
        """测试：解释生成失败不影响排序与分数"""
        matcher = CrystalMatcher(explanation_client=failing_explanation_client)
        matches = await matcher.match(sample_analysis, INTENTIONS, sample_candidates)

        assert [m.score.total_score for m in matches] == [110, 65, 40, 0]
        assert matches[0].explanation_text.startswith("This Aquamarine resonates")

    @pytest.mark.asyncio
    async def test_client_timeout_uses_fallback(self, sample_analysis, sample_candidates):
        async def slow(context):
            await asyncio.sleep(5)
            return "too late"

        client = MagicMock()
        client.is_enabled = True
        client.generate_explanation = slow
        matcher = CrystalMatcher(explanation_client=client, config=MatcherConfig(explanation_timeout=0.05))

        matches = await matcher.match(sample_analysis, INTENTIONS, sample_candidates)
        assert all("resonates with your energy profile" in m.explanation_text for m in matches)

    @pytest.mark.asyncio
    async def test_partial_failure_is_isolated(self, sample_analysis, sample_candidates):
        async def flaky(context):
            if context.candidate_name == "Smoky Quartz":
                raise RuntimeError("boom")
            return f"Great pick: {context.candidate_name}"

        client = MagicMock()
        client.is_enabled = True
        client.generate_explanation = flaky
        matches = await CrystalMatcher(explanation_client=client).match(sample_analysis, INTENTIONS, sample_candidates)

        texts = {m.candidate_id: m.explanation_text for m in matches}
        assert texts["aquamarine"] == "Great pick: Aquamarine"
        assert texts["smoky-quartz"].startswith("This Smoky Quartz resonates")

    @pytest.mark.asyncio
    async def test_deterministic(self, sample_analysis, sample_candidates):
        matcher = CrystalMatcher()
        first = await matcher.match(sample_analysis, INTENTIONS, sample_candidates)
        second = await matcher.match(sample_analysis, INTENTIONS, list(sample_candidates))
        assert [m.model_dump() for m in first] == [m.model_dump() for m in second]


class TestRankByElement:
    """仅五行流程测试类"""

    def test_ranking(self, fire_tiger_chart):
        candidates = [
            CandidateItem(id="water", element="Water"),
            CandidateItem(id="earth", element="Earth"),
            CandidateItem(id="metal", element="Metal"),
            CandidateItem(id="wood", element="Wood"),
            CandidateItem(id="fire", element="Fire"),
        ]
        matches = CrystalMatcher().rank_by_element(fire_tiger_chart, candidates)

        assert [m.candidate_id for m in matches] == ["fire", "wood", "metal", "earth", "water"]
        assert [m.score.total_score for m in matches] == [100, 75, 60, 50, 0]
        assert "Wood nourishes Fire" in matches[1].explanation_text

    def test_skips_unavailable_and_limits(self, fire_tiger_chart):
        candidates = [CandidateItem(id=f"c{i}", element="Fire") for i in range(12)]
        candidates.append(CandidateItem(id="sold-out", element="Fire", available=False))
        matches = CrystalMatcher().rank_by_element(fire_tiger_chart, candidates)

        assert len(matches) == 10
        assert "sold-out" not in {m.candidate_id for m in matches}

    def test_animal_tag_contributes(self, fire_tiger_chart):
        candidates = [
            CandidateItem(id="plain", element="Fire"),
            CandidateItem(id="dog", element="Fire", animal_tag="Dog"),
        ]
        matches = CrystalMatcher().rank_by_element(fire_tiger_chart, candidates, limit=1)
        assert [m.candidate_id for m in matches] == ["dog"]


class FakeInventory:
    """内存库存"""

    def __init__(self, items):
        self.items = items
        self.requested = None

    def list_available(self, elements):
        self.requested = list(elements)
        return [item for item in self.items if item.available and item.element in elements]


class TestRecommend:
    """完整流程测试类"""

    @pytest.mark.asyncio
    async def test_end_to_end(self, sample_candidates):
        inventory = FakeInventory(sample_candidates)
        result = await CrystalMatcher().recommend(
            {"birth_date": "1990-05-15", "birth_hour": 12}, INTENTIONS, inventory
        )

        assert isinstance(result, MatchResult)
        assert inventory.requested == [Element.WOOD, Element.EARTH, Element.WATER]
        assert [m.candidate_id for m in result.matches] == ["aquamarine", "green-aventurine", "smoky-quartz"]
        assert result.chart_profile.year_element == Element.METAL
        assert result.chart_profile.day_element == Element.METAL
        assert result.chart_profile.dominant_element == Element.FIRE
        assert result.chart_profile.deficient_elements == [Element.WOOD]
        assert result.summary.startswith("Your chart shows a strong influence of Fire energy.")

    @pytest.mark.asyncio
    async def test_async_inventory(self, sample_candidates):
        class AsyncInventory:
            async def list_available(self, elements):
                return sample_candidates[:1]

        result = await CrystalMatcher().recommend({"birth_date": "1990-05-15"}, INTENTIONS, AsyncInventory())
        assert [m.candidate_id for m in result.matches] == ["red-jasper"]

    @pytest.mark.asyncio
    async def test_invalid_birth_input(self, sample_candidates):
        with pytest.raises(ValidationError) as exc_info:
            await CrystalMatcher().recommend({"birth_date": "1850-01-01"}, INTENTIONS, FakeInventory(sample_candidates))
        assert exc_info.value.field == "birth_date"
