#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""推荐解释提示词构建"""

from .base_explanation_client import ExplanationContext

SYSTEM_PROMPT = (
    "You are a warm, knowledgeable crystal guide who explains Chinese five-element (Bazi) "
    "recommendations in plain language. Never make medical or financial promises."
)


def build_explanation_prompt(context: ExplanationContext) -> str:
    """
    构建提示词（相同上下文得到相同文本）

    Args:
        context: 推荐上下文

    Returns:
        提示词文本
    """
    beneficial = ", ".join(context.beneficial_elements) or "none"
    intentions = ", ".join(context.intentions) or "general balance"
    lines = [
        f"Crystal: {context.candidate_name} ({context.candidate_element} element)",
        f"Dominant element of the person's chart: {context.dominant_element}",
        f"Elements the chart benefits from: {beneficial}",
    ]
    if context.animal_sign:
        lines.append(f"Zodiac animal: {context.animal_sign}")
    lines.append(f"Selected intentions: {intentions}")
    if context.reasons:
        lines.append(f"Match reasons: {'; '.join(context.reasons)}")
    lines.append(
        "Write two or three sentences explaining why this crystal suits this person. "
        "Speak directly to them and keep the tone encouraging."
    )
    return "\n".join(lines)
