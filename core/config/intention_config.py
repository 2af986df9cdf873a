# -*- coding: utf-8 -*-
"""
心愿（意图）与五行映射配置

用户可自由选择多个心愿标签，每个标签映射到 1-2 个五行；
未知标签直接忽略，不视为错误。
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from core.data.constants import Element

logger = logging.getLogger(__name__)

# 心愿分类（用于前端展示选择列表）
INTENTION_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "emotional": (
        "Peace & Calm",
        "Emotional Balance",
        "Joy & Positivity",
        "Releasing Worry",
        "Inner Strength",
    ),
    "relationships": (
        "Authentic Connections",
        "Healthy Boundaries",
        "Attracting Love",
        "Deepening Friendships",
        "Family Harmony",
    ),
    "personal": (
        "Self-Confidence",
        "Self-Love & Acceptance",
        "Mental Clarity",
        "Focus & Productivity",
        "Creative Expression",
    ),
    "spiritual": (
        "Spiritual Protection",
        "Intuition & Insight",
        "Grounding & Centering",
        "Energy Cleansing",
        "Manifestation",
    ),
    "wellbeing": (
        "Restful Sleep",
        "Vitality & Energy",
        "Gentle Transitions",
        "Overall Wellness",
    ),
}

# 心愿 -> 有益五行（按优先级排列）
INTENTION_ELEMENT_MAP: Dict[str, Tuple[Element, ...]] = {
    # 情绪
    "Peace & Calm": (Element.WATER, Element.EARTH),
    "Emotional Balance": (Element.WATER, Element.EARTH),
    "Joy & Positivity": (Element.FIRE, Element.WOOD),
    "Releasing Worry": (Element.WATER, Element.METAL),
    "Inner Strength": (Element.EARTH, Element.METAL),

    # 人际关系
    "Authentic Connections": (Element.FIRE, Element.WOOD),
    "Healthy Boundaries": (Element.METAL, Element.EARTH),
    "Attracting Love": (Element.FIRE, Element.WATER),
    "Deepening Friendships": (Element.WOOD, Element.FIRE),
    "Family Harmony": (Element.EARTH, Element.WATER),

    # 个人成长
    "Self-Confidence": (Element.FIRE, Element.WOOD),
    "Self-Love & Acceptance": (Element.EARTH, Element.FIRE),
    "Mental Clarity": (Element.METAL, Element.WATER),
    "Focus & Productivity": (Element.METAL, Element.WOOD),
    "Creative Expression": (Element.WOOD, Element.FIRE),

    # 灵性
    "Spiritual Protection": (Element.METAL, Element.EARTH),
    "Intuition & Insight": (Element.WATER, Element.METAL),
    "Grounding & Centering": (Element.EARTH,),
    "Energy Cleansing": (Element.METAL, Element.WATER),
    "Manifestation": (Element.FIRE, Element.WOOD),

    # 身心健康
    "Restful Sleep": (Element.WATER, Element.EARTH),
    "Vitality & Energy": (Element.FIRE, Element.WOOD),
    "Gentle Transitions": (Element.WATER, Element.EARTH),
    "Overall Wellness": (Element.EARTH, Element.WOOD),
}

_LOWERCASE_INDEX: Dict[str, str] = {name.lower(): name for name in INTENTION_ELEMENT_MAP}


def get_all_intentions() -> List[str]:
    """获取全部心愿（按分类顺序展开）"""
    return [intention for group in INTENTION_CATEGORIES.values() for intention in group]


def get_intention_categories() -> Dict[str, List[str]]:
    return {category: list(items) for category, items in INTENTION_CATEGORIES.items()}


def resolve_intention(tag: str) -> Optional[str]:
    """标准化心愿名称：精确匹配优先，其次忽略大小写"""
    if tag in INTENTION_ELEMENT_MAP:
        return tag
    if isinstance(tag, str):
        return _LOWERCASE_INDEX.get(tag.strip().lower())
    return None


def get_elements_for_intention(tag: str) -> Tuple[Element, ...]:
    name = resolve_intention(tag)
    return INTENTION_ELEMENT_MAP[name] if name else ()


def get_elements_for_intentions(tags: Iterable[str]) -> List[Element]:
    """
    统计所选心愿对应的五行，按出现次数降序返回

    平局时保持首次出现的顺序；未知心愿忽略。

    Args:
        tags: 用户选择的心愿标签

    Returns:
        五行列表，如 [Element.WATER, Element.EARTH]
    """
    counts: Counter = Counter()
    for tag in tags:
        elements = get_elements_for_intention(tag)
        if not elements:
            logger.debug(f"忽略未知心愿: {tag!r}")
            continue
        counts.update(elements)

    # Counter 保留插入顺序，sorted 稳定排序保证平局顺序
    return [element for element, _ in sorted(counts.items(), key=lambda item: -item[1])]
