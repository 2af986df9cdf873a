#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
八字核心计算模块

提供八字计算的核心功能：
- 五行生克关系计算
"""

from .element_relations import (
    get_element_relation,
    get_producing_element,
    get_controlled_element,
    get_producing_from_element,
    get_controlled_by_element,
    to_element,
)

__all__ = [
    'get_element_relation',
    'get_producing_element',
    'get_controlled_element',
    'get_producing_from_element',
    'get_controlled_by_element',
    'to_element',
]
