#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
心愿五行映射单元测试
"""

import os
import sys

# 添加项目根目录到路径
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, project_root)

from core.config.intention_config import (
    INTENTION_ELEMENT_MAP,
    get_all_intentions,
    get_elements_for_intentions,
    get_intention_categories,
    resolve_intention,
)
from core.data.constants import Element


class TestIntentionConfig:
    """心愿映射测试类"""

    def test_every_intention_is_mapped(self):
        intentions = get_all_intentions()
        assert len(intentions) == 24
        assert set(intentions) == set(INTENTION_ELEMENT_MAP)
        for elements in INTENTION_ELEMENT_MAP.values():
            assert 1 <= len(elements) <= 2

    def test_categories(self):
        categories = get_intention_categories()
        assert list(categories) == ["emotional", "relationships", "personal", "spiritual", "wellbeing"]
        assert "Peace & Calm" in categories["emotional"]

    def test_single_intention(self):
        assert get_elements_for_intentions(["Peace & Calm"]) == [Element.WATER, Element.EARTH]
        assert get_elements_for_intentions(["Grounding & Centering"]) == [Element.EARTH]

    def test_counts_decide_order(self):
        """测试：出现次数多的五行排在前面"""
        result = get_elements_for_intentions(["Creative Expression", "Peace & Calm", "Restful Sleep"])
        assert result == [Element.WATER, Element.EARTH, Element.WOOD, Element.FIRE]

    def test_ties_keep_first_seen_order(self):
        result = get_elements_for_intentions(["Creative Expression", "Peace & Calm"])
        assert result == [Element.WOOD, Element.FIRE, Element.WATER, Element.EARTH]

    def test_unknown_intentions_are_ignored(self):
        assert get_elements_for_intentions(["Win the lottery"]) == []
        assert get_elements_for_intentions(["Win the lottery", "Mental Clarity"]) == [Element.METAL, Element.WATER]
        assert get_elements_for_intentions([]) == []

    def test_case_insensitive_fallback(self):
        assert resolve_intention("peace & calm") == "Peace & Calm"
        assert resolve_intention("  MENTAL CLARITY ") == "Mental Clarity"
        assert resolve_intention("unknown") is None
