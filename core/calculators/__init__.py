#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""排盘计算器：四柱排盘与简化年柱命盘"""

from .pillar_calculator import FullChart, Pillar, PillarCalculator, calculate_chart
from .year_calculator import BirthYearInfo, YearChart, calculate_year_chart, get_birth_year_info

__all__ = [
    'FullChart',
    'Pillar',
    'PillarCalculator',
    'calculate_chart',
    'BirthYearInfo',
    'YearChart',
    'calculate_year_chart',
    'get_birth_year_info',
]
