"""
Wealth advice built from the household's holdings.

The text generation itself is delegated to an injected ``TextGenerator``;
this module only prepares the prompt and handles the reply.
"""

from __future__ import annotations

import json
import logging
from typing import Protocol, Sequence

from wealthplan.core.net_worth import summarize_items
from wealthplan.models import AppSettings, FinancialItem

logger = logging.getLogger(__name__)

EMPTY_REPLY = "Unable to generate advice at this time."
FAILED_REPLY = "Error: Unable to reach the advice service. Please check its configuration."

REPORT_INSTRUCTIONS = """
Please provide a concise, actionable "Wealth Control Report" covering:
1. **Health Check**: Brief assessment of the current Net Worth and Debt-to-Asset ratio.
2. **Risk Analysis**: Are they too concentrated in one asset class (e.g., Real Estate)?
3. **Growth Opportunities**: Suggestions to optimize growth based on the interest rates provided.
4. **Liability Management**: Advice on handling the debts.

Format the response in Markdown. Use bold headings and bullet points. Keep it professional but encouraging.
""".strip()


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


def build_advice_prompt(items: Sequence[FinancialItem], settings: AppSettings) -> str:
    snapshot = summarize_items(items)
    summary = {
        "totalAssets": snapshot.totalAssets,
        "totalLiabilities": snapshot.totalLiabilities,
        "netWorth": snapshot.netWorth,
        "settings": settings.model_dump(),
        "assets": [
            {"name": i.name, "val": i.amount, "cat": i.category, "rate": i.interestRate}
            for i in items
            if i.type == "asset"
        ],
        "liabilities": [
            {"name": i.name, "val": i.amount, "cat": i.category, "rate": i.interestRate}
            for i in items
            if i.type == "liability"
        ],
    }
    return (
        "Act as a high-net-worth family office wealth advisor.\n"
        "Analyze the following financial data for a client:\n"
        f"{json.dumps(summary, indent=2)}\n\n"
        f"{REPORT_INSTRUCTIONS}"
    )


class AdviceService:
    def __init__(self, generator: TextGenerator):
        self.generator = generator

    def advise(self, items: Sequence[FinancialItem], settings: AppSettings) -> str:
        prompt = build_advice_prompt(items, settings)
        try:
            reply = self.generator.generate(prompt)
        except Exception:
            logger.exception("advice generation failed")
            return FAILED_REPLY
        return reply or EMPTY_REPLY
