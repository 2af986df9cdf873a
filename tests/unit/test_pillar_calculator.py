#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
四柱排盘计算器单元测试
"""

import os
import sys
from datetime import date, timedelta

import pytest

# 添加项目根目录到路径
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, project_root)

from core.calculators.pillar_calculator import PillarCalculator, build_pillar, calculate_chart
from core.data.constants import Animal, Element
from tests.fixtures.sample_data import KNOWN_CHARTS, KNOWN_DAY_PILLARS


class TestPillarCalculator:
    """四柱排盘测试类"""

    @pytest.mark.parametrize("case", KNOWN_CHARTS)
    def test_known_chart(self, case):
        """测试：已知命盘四柱"""
        chart = calculate_chart(date.fromisoformat(case["birth_date"]), case["hour"])
        for position, (stem, branch) in case["expected"].items():
            pillar = getattr(chart, position)
            assert (pillar.stem, pillar.branch) == (stem, branch), position

    def test_chart_metadata(self, sample_chart):
        """测试：命盘附带生肖、节气年月与输入信息"""
        assert sample_chart.animal_sign == Animal.HORSE
        assert sample_chart.solar_year == 1990
        assert sample_chart.solar_month_index == 3
        assert sample_chart.birth_hour == 12
        assert sample_chart.year.stem_element == Element.METAL
        assert sample_chart.month.branch_element == Element.FIRE
        assert sample_chart.day.hidden_stems == ("Wu", "Yi", "Gui")

    def test_default_hour_is_noon(self, sample_birth_date):
        """测试：未知时辰按正午计算"""
        calculator = PillarCalculator()
        assert calculator.calculate(sample_birth_date) == calculator.calculate(sample_birth_date, 12)

    def test_to_dict(self, sample_chart):
        data = sample_chart.to_dict()
        assert data["birth_date"] == "1990-05-15"
        assert data["animal_sign"] == "Horse"
        assert data["pillars"]["day"] == {
            "stem": "Geng",
            "branch": "Chen",
            "stem_element": "Metal",
            "branch_element": "Earth",
            "hidden_stems": ["Wu", "Yi", "Gui"],
        }


class TestDayPillar:
    """日柱测试类"""

    @pytest.mark.parametrize("case", KNOWN_DAY_PILLARS)
    def test_known_day_pillars(self, case):
        pillar = PillarCalculator.calculate_day_pillar(date.fromisoformat(case["date"]))
        assert (pillar.stem, pillar.branch) == case["expected"]

    def test_anchor_date_indices(self):
        """测试：1900-01-01 为天干 0、地支 10"""
        pillar = PillarCalculator.calculate_day_pillar(date(1900, 1, 1))
        assert pillar.stem_index == 0
        assert pillar.branch_index == 10

    @pytest.mark.parametrize("start", [date(1900, 1, 1), date(1955, 7, 3), date(2024, 2, 29)])
    def test_sixty_day_cycle(self, start):
        """测试：日柱 60 天一循环，相邻日柱各进一位"""
        first = PillarCalculator.calculate_day_pillar(start)
        later = PillarCalculator.calculate_day_pillar(start + timedelta(days=60))
        assert first == later

        following = PillarCalculator.calculate_day_pillar(start + timedelta(days=1))
        assert following.stem_index == (first.stem_index + 1) % 10
        assert following.branch_index == (first.branch_index + 1) % 12

    def test_day_pillar_ignores_solar_terms(self):
        """测试：立春前后日柱连续"""
        before = PillarCalculator.calculate_day_pillar(date(2024, 2, 3))
        after = PillarCalculator.calculate_day_pillar(date(2024, 2, 4))
        assert after.stem_index == (before.stem_index + 1) % 10


class TestYearAndMonthPillar:
    """年柱、月柱测试类"""

    def test_year_anchor(self):
        """测试：公元 4 年为甲子"""
        pillar = PillarCalculator.calculate_year_pillar(4)
        assert (pillar.stem, pillar.branch) == ("Jia", "Zi")

    @pytest.mark.parametrize("year", [1900, 1984, 2000, 2040])
    def test_sixty_year_cycle(self, year):
        assert PillarCalculator.calculate_year_pillar(year) == PillarCalculator.calculate_year_pillar(year + 60)

    def test_before_start_of_spring_belongs_to_previous_year(self):
        """测试：立春前出生属于上一年"""
        assert PillarCalculator.get_solar_date(date(2024, 2, 3)) == (2023, 11)
        assert PillarCalculator.get_solar_date(date(2024, 2, 4)) == (2024, 0)

    @pytest.mark.parametrize("day", [1, 3, 5])
    def test_early_january_is_chou_month(self, day):
        """测试：1 月初（小寒之前）同样按上一年丑月计"""
        assert PillarCalculator.get_solar_date(date(2024, 1, day)) == (2023, 11)

        chart = calculate_chart(date(2024, 1, day))
        assert chart.month.branch == "Chou"
        assert chart.year.branch == "Mao"

    def test_january_after_minor_cold_is_chou_month(self):
        assert PillarCalculator.get_solar_date(date(2024, 1, 6)) == (2023, 11)

    def test_december_after_major_snow(self):
        assert PillarCalculator.get_solar_date(date(2024, 12, 7)) == (2024, 10)
        assert PillarCalculator.get_solar_date(date(2024, 12, 6)) == (2024, 9)

    def test_five_tigers_month_stem(self):
        """测试：甲年寅月为丙寅"""
        year_pillar = build_pillar(0, 0)
        month = PillarCalculator.calculate_month_pillar(0, year_pillar)
        assert (month.stem, month.branch) == ("Bing", "Yin")

    def test_animal_sign_follows_solar_year(self):
        assert calculate_chart(date(2024, 2, 3)).animal_sign == Animal.RABBIT
        assert calculate_chart(date(2024, 2, 4)).animal_sign == Animal.DRAGON


class TestHourPillar:
    """时柱测试类"""

    @pytest.mark.parametrize("hour,branch", [
        (23, "Zi"), (0, "Zi"), (1, "Chou"), (2, "Chou"), (11, "Wu"), (12, "Wu"), (22, "Hai"),
    ])
    def test_hour_branch(self, hour, branch):
        day_pillar = build_pillar(0, 0)
        assert PillarCalculator.calculate_hour_pillar(day_pillar, hour).branch == branch

    def test_five_rats_hour_stem(self):
        """测试：甲日子时为甲子，庚日午时为壬午"""
        jia_day = build_pillar(0, 0)
        assert str(PillarCalculator.calculate_hour_pillar(jia_day, 0)) == "Jia Zi"

        geng_day = build_pillar(6, 4)
        assert str(PillarCalculator.calculate_hour_pillar(geng_day, 12)) == "Ren Wu"
