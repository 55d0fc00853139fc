"""
Core engine (DRCA)
==================

This is the heart of the project. DRCA works like a tiny offline analytics
engine over disaster-relief insurance data:

1) Load datasets -> lists of Disaster / Claim / Agent records (immutable)
2) Build indices -> per-state disaster counts and a disaster-by-id lookup
3) Answer questions -> each query method is a pure read over the records

Nothing is cached between calls and nothing is mutated, so calling a query
twice always gives the same answer.

Absence conventions:
- "no matching records" is returned as None (or "" for the string queries)
- an out-of-range severity rating is returned as -1
- claims pointing at an unknown disaster/agent are skipped by joins
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging, math
from .models import Agent, Claim, ClaimHandler, Disaster, NO_SECONDARY_LANGUAGE
from .indices import Indices, build_indices
from .dsa import decimal_sum, merge_sort, pick_by_count, round_half_up

logger = logging.getLogger(__name__)

MONEY_PLACES = 2
DENSITY_PLACES = 5
MAX_SEVERITY = 10

REGION_MAP: Dict[str, Tuple[str, ...]] = {
    "west": (
        "Alaska", "Hawaii", "Washington", "Oregon", "California", "Montana", "Idaho",
        "Wyoming", "Nevada", "Utah", "Colorado", "Arizona", "New Mexico",
    ),
    "midwest": (
        "North Dakota", "South Dakota", "Minnesota", "Wisconsin", "Michigan", "Nebraska",
        "Iowa", "Illinois", "Indiana", "Ohio", "Missouri", "Kansas",
    ),
    "south": (
        "Oklahoma", "Texas", "Arkansas", "Louisiana", "Kentucky", "Tennessee", "Mississippi",
        "Alabama", "West Virginia", "Virginia", "North Carolina", "South Carolina",
        "Georgia", "Florida",
    ),
    "northeast": (
        "Maryland", "Delaware", "District of Columbia", "Pennsylvania", "New York",
        "New Jersey", "Connecticut", "Massachusetts", "Vermont", "New Hampshire",
        "Rhode Island", "Maine",
    ),
}


@dataclass
class DRCA:
    """Disaster Relief Claims Analytics engine.

    The engine stores:
    - disasters, claims, agents, claim_handlers: the loaded records
    - idx: precomputed indices built once from `disasters`

    Claim handlers are carried along with the other datasets but no query
    reads them.
    """
    disasters: Sequence[Disaster]
    claims: Sequence[Claim]
    agents: Sequence[Agent]
    idx: Indices
    claim_handlers: Sequence[ClaimHandler] = ()
    dataset_path: Optional[str] = None
    # Stores CLI commands (for reproducibility in reports)
    command_log: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        logger.debug(
            "engine ready: %d disasters, %d claims, %d agents, %d states indexed",
            len(self.disasters), len(self.claims), len(self.agents), len(self.idx.disaster_counts),
        )

    @classmethod
    def from_records(
        cls,
        disasters: Sequence[Disaster],
        claims: Sequence[Claim],
        agents: Sequence[Agent],
        claim_handlers: Sequence[ClaimHandler] = (),
    ) -> "DRCA":
        """Build the indices and the engine in one step."""
        return cls(
            disasters=disasters,
            claims=claims,
            agents=agents,
            claim_handlers=claim_handlers,
            idx=build_indices(disasters),
        )

    # ---------------- Counts ----------------
    def get_num_closed_claims(self) -> int:
        """Number of claims whose status is "Closed"."""
        return sum(1 for c in self.claims if c.is_closed())

    def get_num_claims_for_claim_handler_id(self, claim_handler_id: int) -> int:
        return len(self._claims_for_handler(claim_handler_id))

    def get_num_disasters_for_state(self, state: str) -> int:
        """Number of disasters declared in `state` (0 for unknown states)."""
        return sum(1 for d in self.disasters if d.state == state)

    def get_num_disasters_declared_after_end_date(self) -> int:
        """Disasters whose declared date is strictly after their end date."""
        return sum(1 for d in self.disasters if d.declared_date > d.end_date)

    def get_num_disasters_for_region(self, region: str) -> int:
        """Total disasters over the states of a census region.

        Raises:
            ValueError: if `region` is not one of REGION_MAP's keys.
        """
        key = region.strip().lower()
        if key not in REGION_MAP:
            raise ValueError(f"region must be one of: {', '.join(REGION_MAP)}")
        counts = self.idx.disaster_counts
        return sum(counts[s] for s in REGION_MAP[key] if s in counts)

    # ---------------- Costs ----------------
    def get_total_claim_cost_for_disaster(self, disaster_id: int) -> Optional[float]:
        """Sum of estimate_cost over the disaster's claims, rounded to cents.

        Returns None when no claim references `disaster_id`.
        """
        related = [c for c in self.claims if c.disaster_id == disaster_id]
        if not related:
            return None
        total = decimal_sum(c.estimate_cost for c in related)
        return round_half_up(total, MONEY_PLACES)

    def get_average_claim_cost_for_claim_handler(self, claim_handler_id: int) -> Optional[float]:
        """Mean estimate_cost of the handler's claims, rounded to cents (None if no claims)."""
        handler_claims = self._claims_for_handler(claim_handler_id)
        if not handler_claims:
            return None
        total = decimal_sum(c.estimate_cost for c in handler_claims)
        return round_half_up(total / len(handler_claims), MONEY_PLACES)

    def build_map_of_agents_to_total_claim_cost(self) -> Dict[int, float]:
        """Map every loaded agent id to the rounded total cost of its claims.

        Agents without claims map to 0. Claims for agent ids that are not
        loaded never create a key.
        """
        by_agent: Dict[int, List[float]] = {}
        for c in self.claims:
            if c.agent_assigned_id not in by_agent:
                by_agent[c.agent_assigned_id] = []
            by_agent[c.agent_assigned_id].append(c.estimate_cost)

        out: Dict[int, float] = {}
        for a in self.agents:
            costs = by_agent[a.id] if a.id in by_agent else []
            out[a.id] = round_half_up(decimal_sum(costs), MONEY_PLACES)
        return out

    # ---------------- Rankings ----------------
    def get_state_with_most_disasters(self) -> str:
        """State with the most disasters; ties go to the alphabetically first state."""
        return pick_by_count(self.idx.disaster_counts, largest=True)

    def get_state_with_least_disasters(self) -> str:
        """State with the fewest disasters among states that have at least one.

        Example: if New Mexico and West Virginia both have 1 disaster and no
        state has fewer, this returns "New Mexico".
        """
        return pick_by_count(self.idx.disaster_counts, largest=False)

    def get_most_spoken_agent_language_by_state(self, state: str) -> str:
        """Most common secondary language (besides English) among the state's agents.

        Returns "" when the state has no agents or none of them lists a
        qualifying language.
        """
        agents = [a for a in self.agents if a.state == state]
        if not agents:
            return ""
        tally = Counter(
            a.secondary_language
            for a in agents
            if a.secondary_language and a.secondary_language != NO_SECONDARY_LANGUAGE
        )
        return pick_by_count(tally, largest=True)

    def get_num_of_open_claims_for_agent_and_severity(self, agent_id: int, min_severity_rating: int) -> Optional[int]:
        """Open claims of `agent_id` with severity >= `min_severity_rating`.

        Returns:
            -1 if the rating is outside 1..10,
            None if the agent has no claims at all (open or closed),
            otherwise the count.
        """
        if min_severity_rating > MAX_SEVERITY or min_severity_rating <= 0:
            return -1

        claims = [c for c in self.claims if c.agent_assigned_id == agent_id]
        if not claims:
            return None

        return sum(1 for c in claims if not c.is_closed() and c.severity_rating >= min_severity_rating)

    # ---------------- Geometry / time ----------------
    def calculate_disaster_claim_density(self, disaster_id: int) -> Optional[float]:
        """Claims per square mile of the disaster's circular impact area.

        Returns None if no claim references the disaster, or if the disaster
        id itself is not loaded (its radius is unknown).
        """
        n_claims = sum(1 for c in self.claims if c.disaster_id == disaster_id)
        if n_claims == 0:
            return None

        if disaster_id not in self.idx.disaster_by_id:
            logger.debug("density: %d claims reference unknown disaster %s", n_claims, disaster_id)
            return None

        radius = self.idx.disaster_by_id[disaster_id].radius_miles
        density = n_claims / (math.pi * radius ** 2)
        return round_half_up(density, DENSITY_PLACES)

    def get_top_three_months_with_highest_num_of_claims_desc(self) -> List[str]:
        """Top three "<Month> <Year>" buckets by total claim cost, highest first.

        Buckets use the declared date of each claim's disaster. Claims whose
        disaster is not loaded are skipped. Equal totals are ordered by label.
        """
        return [label for label, _ in self.claim_cost_by_month()[:3]]

    def claim_cost_by_month(self) -> List[Tuple[str, float]]:
        """All month buckets as (label, unrounded total), ordered like the top-three query."""
        month_costs: Dict[str, float] = {}
        skipped = 0
        for c in self.claims:
            if c.disaster_id not in self.idx.disaster_by_id:
                skipped += 1
                continue
            label = _month_label(self.idx.disaster_by_id[c.disaster_id])
            if label not in month_costs:
                month_costs[label] = 0.0
            month_costs[label] += c.estimate_cost
        if skipped:
            logger.debug("month buckets: skipped %d claims with unknown disaster ids", skipped)

        # cost descending, then label ascending
        return merge_sort(list(month_costs.items()), key=lambda kv: (-kv[1], kv[0]))

    # ---------------- Summary ----------------
    def summary(self) -> Dict[str, Any]:
        """Every query that takes no argument, keyed by a short name."""
        return {
            "closed_claims": self.get_num_closed_claims(),
            "state_with_most_disasters": self.get_state_with_most_disasters(),
            "state_with_least_disasters": self.get_state_with_least_disasters(),
            "disasters_declared_after_end_date": self.get_num_disasters_declared_after_end_date(),
            "top_three_months": self.get_top_three_months_with_highest_num_of_claims_desc(),
        }

    # ---------------- Helpers ----------------
    def _claims_for_handler(self, claim_handler_id: int) -> List[Claim]:
        return [c for c in self.claims if c.claim_handler_assigned_id == claim_handler_id]


def _month_label(d: Disaster) -> str:
    return f"{_MONTH_NAMES[d.declared_date.month - 1]} {d.declared_date.year}"


# English names regardless of the process locale
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
