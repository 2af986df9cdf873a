#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
五行生克关系模块

提供五行生克关系的计算函数，数据来源于 core.data.relations。
"""

from typing import Literal, Union

from core.data.constants import ELEMENT_CHINESE, Element
from core.data.relations import ELEMENT_RELATIONS
from core.exceptions import InvariantError

# 五行关系类型
RelationType = Literal['same', 'me_producing', 'me_controlling', 'producing_me', 'controlling_me']


def to_element(value: Union[Element, str]) -> Element:
    """
    将字符串或枚举统一转换为 Element

    Args:
        value: Element 或五行名称（不区分大小写，如 "wood"、"WATER"、"木"）

    Raises:
        InvariantError: 不属于五行的取值（数据层已保证五行取值，出现即为编程错误）
    """
    if isinstance(value, Element):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for element in Element:
            if element.value.lower() == normalized:
                return element
        for element, chinese in ELEMENT_CHINESE.items():
            if chinese == value.strip():
                return element
    raise InvariantError(f"Unknown element: {value!r}")


def get_element_relation(day_element: Element, target_element: Element) -> RelationType:
    """
    判断五行生克关系

    Args:
        day_element: 主五行
        target_element: 目标五行

    Returns:
        RelationType: 关系类型
        - 'same': 同元素
        - 'me_producing': 我生
        - 'me_controlling': 我克
        - 'producing_me': 生我
        - 'controlling_me': 克我
    """
    day_element = to_element(day_element)
    target_element = to_element(target_element)

    if day_element == target_element:
        return 'same'

    relations = ELEMENT_RELATIONS[day_element]

    if target_element == relations.produces:
        return 'me_producing'
    elif target_element == relations.controls:
        return 'me_controlling'
    elif target_element == relations.produced_by:
        return 'producing_me'
    return 'controlling_me'


def get_producing_element(element: Element) -> Element:
    """获取被生的元素"""
    return ELEMENT_RELATIONS[to_element(element)].produces


def get_controlled_element(element: Element) -> Element:
    """获取被克的元素"""
    return ELEMENT_RELATIONS[to_element(element)].controls


def get_producing_from_element(element: Element) -> Element:
    """获取生我的元素"""
    return ELEMENT_RELATIONS[to_element(element)].produced_by


def get_controlled_by_element(element: Element) -> Element:
    """获取克我的元素"""
    return ELEMENT_RELATIONS[to_element(element)].controlled_by
