# -*- coding: utf-8 -*-
"""
水晶相合度评分规则配置

每种五行关系 / 生肖关系对应一个带符号的分值和一段文案模板，
评分器（core.analyzers.compatibility_analyzer）只读取这里的配置，
调整分值时无需改动评分逻辑。
"""

from dataclasses import dataclass, field
from typing import Dict

from core.data.constants import Element


@dataclass(frozen=True)
class RelationRule:
    """单条规则：分值 + 文案模板（str.format 占位符）"""
    delta: int
    template: str = ""

    def render(self, **kwargs) -> str:
        return self.template.format(**kwargs)


# 克制动词：{克者} {动词} {被克者}
CONTROL_VERBS: Dict[Element, str] = {
    Element.WATER: "extinguishes",
    Element.METAL: "cuts",
    Element.WOOD: "penetrates",
    Element.FIRE: "melts",
    Element.EARTH: "absorbs",
}

# 被克时受影响的特质
ELEMENT_QUALITIES: Dict[Element, str] = {
    Element.FIRE: "passion and vitality",
    Element.WOOD: "growth and flexibility",
    Element.EARTH: "stability and nourishment",
    Element.METAL: "clarity and focus",
    Element.WATER: "wisdom and flow",
}


@dataclass(frozen=True)
class CompatibilityRules:
    """相合度评分规则（默认值即线上规则）"""

    base_score: int = 50

    # 同五行：直接增强
    same_element: RelationRule = RelationRule(
        50, "This {candidate} crystal directly strengthens your {dominant} energy"
    )
    same_element_explanation: str = "{candidate} crystals resonate with and amplify your natural {dominant} energy"

    # 水晶生主五行
    productive: RelationRule = RelationRule(
        25, "{source} nourishes {target} - this crystal feeds and sustains your core energy"
    )

    # 水晶克主五行
    controlling: RelationRule = RelationRule(
        -50, "{source} {verb} {target} - may dampen {qualities}"
    )

    # 主五行克水晶
    controlled: RelationRule = RelationRule(
        10, "Your {dominant} energy can harness this {candidate} crystal's power"
    )
    controlled_recommendation: str = "Use this crystal to channel and direct your energy"

    # 主五行生水晶（泄气），不加减分
    drain: RelationRule = RelationRule(
        0, "Your {dominant} energy flows into this {candidate} crystal, expressing rather than building your strength"
    )

    # 生肖：三合 / 六合 / 六害 / 六冲
    zodiac_best: RelationRule = RelationRule(30, "{candidate} and {user} have natural harmony")
    zodiac_good: RelationRule = RelationRule(15, "{candidate} and {user} support each other")
    zodiac_challenging: RelationRule = RelationRule(-15, "This zodiac pairing may require extra mindfulness")
    zodiac_conflict: RelationRule = RelationRule(-30, "{candidate} and {user} are opposing signs")

    control_verbs: Dict[Element, str] = field(default_factory=lambda: dict(CONTROL_VERBS))
    element_qualities: Dict[Element, str] = field(default_factory=lambda: dict(ELEMENT_QUALITIES))


DEFAULT_COMPATIBILITY_RULES = CompatibilityRules()
