"""
Shared fixtures: a small hand-built dataset whose answers are easy to check
by hand.
"""

from datetime import date

import pytest

from drca.engine import DRCA
from drca.models import Agent, Claim, ClaimHandler, Disaster


def make_disaster(id, state, declared, end=None, radius=10.0):
    return Disaster(
        id=id,
        state=state,
        declared_date=declared,
        end_date=end or declared,
        radius_miles=radius,
    )


def make_claim(id, disaster_id, cost, agent_id=1, handler_id=1, status="Open", severity=5):
    return Claim(
        id=id,
        disaster_id=disaster_id,
        agent_assigned_id=agent_id,
        claim_handler_assigned_id=handler_id,
        status=status,
        estimate_cost=cost,
        severity_rating=severity,
    )


@pytest.fixture
def disasters():
    return [
        # Texas x3, Florida x3, Ohio x1, Maine x1
        make_disaster(1, "Texas", date(2023, 3, 10), date(2023, 3, 20), radius=10.0),
        make_disaster(2, "Texas", date(2023, 4, 2), date(2023, 3, 30)),
        make_disaster(3, "Texas", date(2023, 3, 15), date(2023, 4, 1)),
        make_disaster(4, "Florida", date(2023, 5, 1), date(2023, 5, 10)),
        make_disaster(5, "Florida", date(2023, 6, 5), date(2023, 6, 4)),
        make_disaster(6, "Florida", date(2023, 6, 7), date(2023, 6, 20)),
        make_disaster(7, "Ohio", date(2022, 12, 1), date(2022, 12, 5)),
        make_disaster(8, "Maine", date(2023, 1, 1), date(2023, 1, 1)),
    ]


@pytest.fixture
def claims():
    return [
        # disaster 1 (March 2023): four claims, radius 10
        make_claim(1, 1, 10.005, agent_id=1, handler_id=1, status="Closed", severity=9),
        make_claim(2, 1, 5.00, agent_id=1, handler_id=1, status="Open", severity=7),
        make_claim(3, 1, 100.0, agent_id=2, handler_id=2, status="In Review", severity=3),
        make_claim(4, 1, 200.0, agent_id=2, handler_id=2, status="Received", severity=8),
        # disaster 4 (May 2023)
        make_claim(5, 4, 10.0, agent_id=3, handler_id=3, status="Closed", severity=10),
        make_claim(6, 4, 20.0, agent_id=3, handler_id=3, status="Closed", severity=10),
        make_claim(7, 4, 31.0, agent_id=3, handler_id=3, status="Closed", severity=2),
        # disaster 5 (June 2023)
        make_claim(8, 5, 500.0, agent_id=1, handler_id=4, status="Open", severity=1),
        # disaster 7 (December 2022)
        make_claim(9, 7, 50.0, agent_id=99, handler_id=4, status="Open", severity=4),
        # unknown disaster, unknown agent
        make_claim(10, 404, 9999.0, agent_id=98, handler_id=5, status="Open", severity=6),
    ]


@pytest.fixture
def agents():
    return [
        Agent(id=1, state="Texas", secondary_language="Spanish", first_name="Ana", last_name="Diaz"),
        Agent(id=2, state="Texas", secondary_language="Vietnamese"),
        Agent(id=3, state="Texas", secondary_language="Spanish"),
        Agent(id=4, state="Florida", secondary_language="Haitian Creole"),
        Agent(id=5, state="Florida", secondary_language="French"),
        Agent(id=6, state="Ohio", secondary_language="English"),
        Agent(id=7, state="Ohio", secondary_language=""),
    ]


@pytest.fixture
def claim_handlers():
    return [ClaimHandler(id=i) for i in range(1, 6)]


@pytest.fixture
def engine(disasters, claims, agents, claim_handlers):
    return DRCA.from_records(disasters, claims, agents, claim_handlers)
