from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from wealthplan.app import create_app
from wealthplan.models import ScheduleConfig


class EchoGenerator:
    def __init__(self, reply: str = "**Health Check**: solid.") -> None:
        self.reply = reply
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture()
def generator() -> EchoGenerator:
    return EchoGenerator()


@pytest.fixture()
def app(generator):
    return create_app({"TESTING": True}, advice_generator=generator)


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def schedule() -> ScheduleConfig:
    """Scenario A: 1,000/month in phase 1, flat 10 % return."""
    return ScheduleConfig(
        startYear=2026,
        phaseMonthlyContribution=(1000, None, None),
        globalAnnualReturnPct=10,
    )
