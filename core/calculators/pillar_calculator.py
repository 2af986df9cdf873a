#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
四柱排盘计算器

根据公历出生日期与时辰计算年、月、日、时四柱（天干 + 地支），
并附带五行与藏干信息。

注意：节气使用固定公历日期近似（见 core.data.constants.SOLAR_TERMS），
不做真太阳黄经计算；日柱按 1900-01-01 甲戌日推算整数天数，与时区无关。
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

from core.calculators.bazi_logging import safe_log
from core.data.constants import (
    Animal,
    BRANCH_ANIMALS,
    BRANCH_ELEMENTS,
    DAY_ANCHOR_BRANCH_INDEX,
    DAY_ANCHOR_DATE,
    DAY_ANCHOR_STEM_INDEX,
    DEFAULT_BIRTH_HOUR,
    EARTHLY_BRANCHES,
    Element,
    FIVE_RATS_START_STEM,
    FIVE_TIGERS_START_STEM,
    HEAVENLY_STEMS,
    HIDDEN_STEMS,
    SOLAR_TERMS,
    START_OF_SPRING,
    STEM_ELEMENTS,
    YEAR_ANCHOR,
)

_DAY_ANCHOR_ORDINAL = date(*DAY_ANCHOR_DATE).toordinal()


@dataclass(frozen=True)
class Pillar:
    """单柱：天干 + 地支（只能由计算器根据索引生成）"""
    stem: str
    branch: str
    stem_element: Element
    branch_element: Element
    hidden_stems: Tuple[str, ...]

    @property
    def stem_index(self) -> int:
        return HEAVENLY_STEMS.index(self.stem)

    @property
    def branch_index(self) -> int:
        return EARTHLY_BRANCHES.index(self.branch)

    def __str__(self):
        return f"{self.stem} {self.branch}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stem": self.stem,
            "branch": self.branch,
            "stem_element": self.stem_element.value,
            "branch_element": self.branch_element.value,
            "hidden_stems": list(self.hidden_stems),
        }


@dataclass(frozen=True)
class FullChart:
    """完整四柱命盘"""
    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar
    animal_sign: Animal
    solar_year: int
    solar_month_index: int
    birth_date: date
    birth_hour: int

    def pillars(self) -> Dict[str, Pillar]:
        return {"year": self.year, "month": self.month, "day": self.day, "hour": self.hour}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "birth_date": self.birth_date.isoformat(),
            "birth_hour": self.birth_hour,
            "solar_year": self.solar_year,
            "animal_sign": self.animal_sign.value,
            "pillars": {name: pillar.to_dict() for name, pillar in self.pillars().items()},
        }


def build_pillar(stem_index: int, branch_index: int) -> Pillar:
    """根据天干、地支索引构建单柱（索引自动取模归一）"""
    stem = HEAVENLY_STEMS[stem_index % 10]
    branch = EARTHLY_BRANCHES[branch_index % 12]
    return Pillar(
        stem=stem,
        branch=branch,
        stem_element=STEM_ELEMENTS[stem],
        branch_element=BRANCH_ELEMENTS[branch],
        hidden_stems=HIDDEN_STEMS[branch],
    )


class PillarCalculator:
    """四柱排盘计算器 - 纯函数式，无状态，可并发调用"""

    # === 公开方法 ==================================================================================

    def calculate(self, birth_date: date, hour: Optional[int] = None) -> FullChart:
        """
        计算完整四柱

        Args:
            birth_date: 公历出生日期
            hour: 出生小时（0-23），未知时默认正午 12 点

        Returns:
            FullChart: 四柱命盘
        """
        if hour is None:
            hour = DEFAULT_BIRTH_HOUR

        solar_year, month_index = self.get_solar_date(birth_date)

        year_pillar = self.calculate_year_pillar(solar_year)
        month_pillar = self.calculate_month_pillar(month_index, year_pillar)
        # 日柱只看公历日，不受节气影响
        day_pillar = self.calculate_day_pillar(birth_date)
        hour_pillar = self.calculate_hour_pillar(day_pillar, hour)

        chart = FullChart(
            year=year_pillar,
            month=month_pillar,
            day=day_pillar,
            hour=hour_pillar,
            animal_sign=self.get_animal_sign(solar_year),
            solar_year=solar_year,
            solar_month_index=month_index,
            birth_date=birth_date,
            birth_hour=hour,
        )
        safe_log(
            'debug',
            "排盘完成 %s %02d时: 年%s 月%s 日%s 时%s",
            birth_date.isoformat(), hour, year_pillar, month_pillar, day_pillar, hour_pillar,
        )
        return chart

    # === 节气换算 ==================================================================================

    @staticmethod
    def get_solar_date(birth_date: date) -> Tuple[int, int]:
        """
        计算节气年与节气月索引

        立春（约 2 月 4 日）之前出生的人属于上一年，且一律按丑月计，
        1 月 1 日至小寒前也不例外；节气月索引 0 = 寅月（立春起），11 = 丑月。

        Returns:
            (solar_year, solar_month_index)
        """
        month, day = birth_date.month, birth_date.day
        if (month, day) < (START_OF_SPRING.month, START_OF_SPRING.day):
            return birth_date.year - 1, len(SOLAR_TERMS) - 1

        # 立春之后必有已过的节，取公历中不晚于出生日的最后一个
        date_value = month * 100 + day
        passed = [index for index, term in enumerate(SOLAR_TERMS) if term.month * 100 + term.day <= date_value]
        return birth_date.year, max(passed, key=lambda index: SOLAR_TERMS[index].month * 100 + SOLAR_TERMS[index].day)

    # === 四柱计算 ==================================================================================

    @staticmethod
    def calculate_year_pillar(solar_year: int) -> Pillar:
        """年柱：公元 4 年为甲子，Python 取模结果天然非负"""
        return build_pillar((solar_year - YEAR_ANCHOR) % 10, (solar_year - YEAR_ANCHOR) % 12)

    @staticmethod
    def calculate_month_pillar(month_index: int, year_pillar: Pillar) -> Pillar:
        """月柱：五虎遁定寅月天干，再按节气月顺推"""
        start_stem = FIVE_TIGERS_START_STEM[year_pillar.stem_index % 5]
        stem_index = (start_stem + month_index) % 10
        branch_index = (2 + month_index) % 12  # 寅位于地支第 2 位
        return build_pillar(stem_index, branch_index)

    @staticmethod
    def calculate_day_pillar(birth_date: date) -> Pillar:
        """日柱：与 1900-01-01（甲戌）相差的整数天数推算"""
        day_count = birth_date.toordinal() - _DAY_ANCHOR_ORDINAL
        stem_index = (DAY_ANCHOR_STEM_INDEX + day_count) % 10
        branch_index = (DAY_ANCHOR_BRANCH_INDEX + day_count) % 12
        return build_pillar(stem_index, branch_index)

    @staticmethod
    def calculate_hour_pillar(day_pillar: Pillar, hour: int) -> Pillar:
        """时柱：23:00-00:59 为子时，五鼠遁定子时天干"""
        branch_index = ((hour + 1) // 2) % 12
        start_stem = FIVE_RATS_START_STEM[day_pillar.stem_index % 5]
        stem_index = (start_stem + branch_index) % 10
        return build_pillar(stem_index, branch_index)

    @staticmethod
    def get_animal_sign(solar_year: int) -> Animal:
        return BRANCH_ANIMALS[EARTHLY_BRANCHES[(solar_year - YEAR_ANCHOR) % 12]]


def calculate_chart(birth_date: date, hour: Optional[int] = None) -> FullChart:
    """便捷函数：计算四柱命盘"""
    return PillarCalculator().calculate(birth_date, hour)
