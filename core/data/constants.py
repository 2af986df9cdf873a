#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字基础数据常量

天干、地支、五行、藏干、生肖、节气（近似日期）等静态查表数据。
纯常量，无业务逻辑。
"""

from enum import Enum
from typing import Dict, List, NamedTuple, Tuple


class Element(str, Enum):
    """五行（声明顺序即全局平局顺序：木、火、土、金、水）"""
    WOOD = "Wood"
    FIRE = "Fire"
    EARTH = "Earth"
    METAL = "Metal"
    WATER = "Water"

    def __str__(self):
        return self.value


class Animal(str, Enum):
    """十二生肖（与地支顺序一致）"""
    RAT = "Rat"
    OX = "Ox"
    TIGER = "Tiger"
    RABBIT = "Rabbit"
    DRAGON = "Dragon"
    SNAKE = "Snake"
    HORSE = "Horse"
    GOAT = "Goat"
    MONKEY = "Monkey"
    ROOSTER = "Rooster"
    DOG = "Dog"
    PIG = "Pig"

    def __str__(self):
        return self.value


ELEMENTS: Tuple[Element, ...] = tuple(Element)

ELEMENT_CHINESE: Dict[Element, str] = {
    Element.WOOD: '木',
    Element.FIRE: '火',
    Element.EARTH: '土',
    Element.METAL: '金',
    Element.WATER: '水',
}

# 天干（甲乙丙丁戊己庚辛壬癸）
HEAVENLY_STEMS: Tuple[str, ...] = (
    "Jia", "Yi", "Bing", "Ding", "Wu", "Ji", "Geng", "Xin", "Ren", "Gui",
)
STEM_CHINESE: Tuple[str, ...] = ('甲', '乙', '丙', '丁', '戊', '己', '庚', '辛', '壬', '癸')

# 地支（子丑寅卯辰巳午未申酉戌亥）
EARTHLY_BRANCHES: Tuple[str, ...] = (
    "Zi", "Chou", "Yin", "Mao", "Chen", "Si", "Wu", "Wei", "Shen", "You", "Xu", "Hai",
)
BRANCH_CHINESE: Tuple[str, ...] = ('子', '丑', '寅', '卯', '辰', '巳', '午', '未', '申', '酉', '戌', '亥')

STEM_ELEMENTS: Dict[str, Element] = {
    "Jia": Element.WOOD, "Yi": Element.WOOD,
    "Bing": Element.FIRE, "Ding": Element.FIRE,
    "Wu": Element.EARTH, "Ji": Element.EARTH,
    "Geng": Element.METAL, "Xin": Element.METAL,
    "Ren": Element.WATER, "Gui": Element.WATER,
}

BRANCH_ELEMENTS: Dict[str, Element] = {
    "Zi": Element.WATER, "Chou": Element.EARTH, "Yin": Element.WOOD, "Mao": Element.WOOD,
    "Chen": Element.EARTH, "Si": Element.FIRE, "Wu": Element.FIRE, "Wei": Element.EARTH,
    "Shen": Element.METAL, "You": Element.METAL, "Xu": Element.EARTH, "Hai": Element.WATER,
}

# 地支藏干（本气、中气、余气）
HIDDEN_STEMS: Dict[str, Tuple[str, ...]] = {
    "Zi": ("Gui",),
    "Chou": ("Ji", "Gui", "Xin"),
    "Yin": ("Jia", "Bing", "Wu"),
    "Mao": ("Yi",),
    "Chen": ("Wu", "Yi", "Gui"),
    "Si": ("Bing", "Wu", "Geng"),
    "Wu": ("Ding", "Ji"),
    "Wei": ("Ji", "Ding", "Yi"),
    "Shen": ("Geng", "Ren", "Wu"),
    "You": ("Xin",),
    "Xu": ("Wu", "Xin", "Ding"),
    "Hai": ("Ren", "Jia"),
}

BRANCH_ANIMALS: Dict[str, Animal] = dict(zip(EARTHLY_BRANCHES, Animal))

# 天干阴阳：偶数位为阳，奇数位为阴
STEM_YINYANG: Dict[str, str] = {
    stem: ("yang" if index % 2 == 0 else "yin") for index, stem in enumerate(HEAVENLY_STEMS)
}


class SolarTerm(NamedTuple):
    """节（近似公历日期）"""
    name: str
    month: int
    day: int


# 十二节近似日期，索引 0 = 立春（寅月），依次到小寒（丑月）
# 不做真太阳黄经计算，只用固定日期近似
SOLAR_TERMS: List[SolarTerm] = [
    SolarTerm("LiChun", 2, 4),       # 立春（寅）
    SolarTerm("JingZhe", 3, 6),      # 惊蛰（卯）
    SolarTerm("QingMing", 4, 5),     # 清明（辰）
    SolarTerm("LiXia", 5, 6),        # 立夏（巳）
    SolarTerm("MangZhong", 6, 6),    # 芒种（午）
    SolarTerm("XiaoShu", 7, 7),      # 小暑（未）
    SolarTerm("LiQiu", 8, 8),        # 立秋（申）
    SolarTerm("BaiLu", 9, 8),        # 白露（酉）
    SolarTerm("HanLu", 10, 8),       # 寒露（戌）
    SolarTerm("LiDong", 11, 7),      # 立冬（亥）
    SolarTerm("DaXue", 12, 7),       # 大雪（子）
    SolarTerm("XiaoHan", 1, 6),      # 小寒（丑）
]

START_OF_SPRING: SolarTerm = SOLAR_TERMS[0]

# 年柱锚点：公元 4 年为甲子年
YEAR_ANCHOR = 4

# 日柱锚点：1900-01-01 为甲戌日
DAY_ANCHOR_DATE: Tuple[int, int, int] = (1900, 1, 1)
DAY_ANCHOR_STEM_INDEX = 0
DAY_ANCHOR_BRANCH_INDEX = 10

# 五虎遁：年干决定寅月天干（甲己丙、乙庚戊、丙辛庚、丁壬壬、戊癸甲）
FIVE_TIGERS_START_STEM: Tuple[int, ...] = (2, 4, 6, 8, 0)

# 五鼠遁：日干决定子时天干（甲己甲、乙庚丙、丙辛戊、丁壬庚、戊癸壬）
FIVE_RATS_START_STEM: Tuple[int, ...] = (0, 2, 4, 6, 8)

# 固定日期近似节气的可用年份范围（含两端）
SUPPORTED_YEAR_RANGE: Tuple[int, int] = (1900, 2100)

DEFAULT_BIRTH_HOUR = 12
