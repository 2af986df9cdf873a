#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
五行生克与生肖合冲关系表

所有表都以枚举为键，导入时做完整性校验，避免运行时出现缺键。
"""

from typing import Dict, FrozenSet, NamedTuple

from core.data.constants import Animal, Element


class ElementRelation(NamedTuple):
    """单个五行的生克关系"""
    produces: Element       # 我生
    controls: Element       # 我克
    produced_by: Element    # 生我
    controlled_by: Element  # 克我


# 相生：木→火→土→金→水→木；相克：木→土→水→火→金→木
ELEMENT_RELATIONS: Dict[Element, ElementRelation] = {
    Element.WOOD: ElementRelation(Element.FIRE, Element.EARTH, Element.WATER, Element.METAL),
    Element.FIRE: ElementRelation(Element.EARTH, Element.METAL, Element.WOOD, Element.WATER),
    Element.EARTH: ElementRelation(Element.METAL, Element.WATER, Element.FIRE, Element.WOOD),
    Element.METAL: ElementRelation(Element.WATER, Element.WOOD, Element.EARTH, Element.FIRE),
    Element.WATER: ElementRelation(Element.WOOD, Element.FIRE, Element.METAL, Element.EARTH),
}


class ZodiacAffinity(NamedTuple):
    """单个生肖的合冲关系"""
    best_matches: FrozenSet[Animal]         # 三合
    good_matches: FrozenSet[Animal]         # 六合
    challenging_matches: FrozenSet[Animal]  # 六害
    conflict: Animal                        # 六冲


def _affinity(best, good, challenging, conflict) -> ZodiacAffinity:
    return ZodiacAffinity(frozenset(best), frozenset(good), frozenset(challenging), conflict)


ZODIAC_COMPATIBILITY: Dict[Animal, ZodiacAffinity] = {
    Animal.RAT: _affinity((Animal.DRAGON, Animal.MONKEY), (Animal.OX,), (Animal.GOAT,), Animal.HORSE),
    Animal.OX: _affinity((Animal.SNAKE, Animal.ROOSTER), (Animal.RAT,), (Animal.HORSE,), Animal.GOAT),
    Animal.TIGER: _affinity((Animal.HORSE, Animal.DOG), (Animal.PIG,), (Animal.SNAKE,), Animal.MONKEY),
    Animal.RABBIT: _affinity((Animal.GOAT, Animal.PIG), (Animal.DOG,), (Animal.DRAGON,), Animal.ROOSTER),
    Animal.DRAGON: _affinity((Animal.RAT, Animal.MONKEY), (Animal.ROOSTER,), (Animal.RABBIT,), Animal.DOG),
    Animal.SNAKE: _affinity((Animal.OX, Animal.ROOSTER), (Animal.MONKEY,), (Animal.TIGER,), Animal.PIG),
    Animal.HORSE: _affinity((Animal.TIGER, Animal.DOG), (Animal.GOAT,), (Animal.OX,), Animal.RAT),
    Animal.GOAT: _affinity((Animal.RABBIT, Animal.PIG), (Animal.HORSE,), (Animal.RAT,), Animal.OX),
    Animal.MONKEY: _affinity((Animal.RAT, Animal.DRAGON), (Animal.SNAKE,), (Animal.PIG,), Animal.TIGER),
    Animal.ROOSTER: _affinity((Animal.OX, Animal.SNAKE), (Animal.DRAGON,), (Animal.DOG,), Animal.RABBIT),
    Animal.DOG: _affinity((Animal.TIGER, Animal.HORSE), (Animal.RABBIT,), (Animal.ROOSTER,), Animal.DRAGON),
    Animal.PIG: _affinity((Animal.RABBIT, Animal.GOAT), (Animal.TIGER,), (Animal.MONKEY,), Animal.SNAKE),
}


def _check_tables():
    """校验关系表覆盖全部枚举值"""
    missing_elements = set(Element) - set(ELEMENT_RELATIONS)
    if missing_elements:
        raise RuntimeError(f"ELEMENT_RELATIONS 缺少五行: {sorted(missing_elements)}")
    missing_animals = set(Animal) - set(ZODIAC_COMPATIBILITY)
    if missing_animals:
        raise RuntimeError(f"ZODIAC_COMPATIBILITY 缺少生肖: {sorted(missing_animals)}")


_check_tables()
