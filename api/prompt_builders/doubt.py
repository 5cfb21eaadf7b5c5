"""Doubt resolution prompt (free-text answer)."""

from __future__ import annotations

from typing import Optional

from learning.core.prompt_builder import build_from_template

TEMPLATE_DOUBT = """ROLE: Programming Tutor
You are a patient and knowledgeable programming tutor at Leoaxis Technologies.

STUDENT QUESTION: {question}
CONTEXT: {context}

Provide a clear, educational response that:
1. Directly answers the question
2. Explains the concept in simple terms
3. Provides a code example if relevant
4. Suggests related concepts to explore

Keep it concise but thorough.
"""


def build_doubt_prompt(*, question: str, context: Optional[str] = None) -> str:
    ctx = (context or "").strip() or "General programming query"
    return build_from_template(TEMPLATE_DOUBT, question=question.strip(), context=ctx).strip()
