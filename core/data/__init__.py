#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""八字静态数据（天干地支、五行、节气、生克合冲）"""

from .constants import Animal, Element, ELEMENTS
from .relations import ELEMENT_RELATIONS, ZODIAC_COMPATIBILITY

__all__ = [
    'Animal',
    'Element',
    'ELEMENTS',
    'ELEMENT_RELATIONS',
    'ZODIAC_COMPATIBILITY',
]
