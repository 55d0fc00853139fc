"""
Data model (Disaster / Claim / Agent / ClaimHandler)
====================================================

Each row of the four dataset files is converted into one of these records.
They are immutable (`frozen=True`) so that:
- records cannot be accidentally modified after loading, and
- every query is a pure read over the same snapshot.

Foreign keys (Claim.disaster_id, Claim.agent_assigned_id) are plain ints.
Nothing checks that they point at a loaded record; queries that need the
join simply skip claims whose target is missing.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

CLOSED_STATUS = "Closed"
NO_SECONDARY_LANGUAGE = "English"


@dataclass(frozen=True)
class Disaster:
    """One declared disaster with its location, time window and impact radius."""
    id: int
    state: str
    declared_date: date
    end_date: date
    radius_miles: float
    # display-only columns
    name: str = ""
    disaster_type: str = ""


@dataclass(frozen=True)
class Claim:
    id: int
    disaster_id: int
    agent_assigned_id: Optional[int]
    claim_handler_assigned_id: Optional[int]
    status: str
    estimate_cost: float
    # 1 (minor) .. 10 (critical)
    severity_rating: int

    def is_closed(self) -> bool:
        return self.status == CLOSED_STATUS


@dataclass(frozen=True)
class Agent:
    """Field agent. `secondary_language` is "" when the agent has none."""
    id: int
    state: str
    secondary_language: str = ""
    first_name: str = ""
    last_name: str = ""
    primary_language: str = ""

    def full_name(self) -> str:
        """Return "First Last", falling back to "Agent <id>" when unnamed."""
        name = f"{self.first_name} {self.last_name}".strip()
        return name or f"Agent {self.id}"


@dataclass(frozen=True)
class ClaimHandler:
    """Claim handler record. Loaded for completeness; no query reads it."""
    id: int
    first_name: str = ""
    last_name: str = ""
