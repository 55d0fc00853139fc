"""
Dataset loader (files -> record lists)
======================================

This module reads the four DRCA dataset files and converts each row into an
immutable record (`Disaster`, `Claim`, `Agent`, `ClaimHandler`).

Key ideas:
- pandas reads JSON, CSV or Excel depending on the file suffix.
- Required columns are converted strictly; a malformed value raises.
- Optional columns go through _to_int/_to_str so blanks become None/"".
- The loader returns lists of immutable records; DRCA never writes back.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, TypeVar, Union
import logging
import pandas as pd
from .models import Agent, Claim, ClaimHandler, Disaster

logger = logging.getLogger(__name__)

T = TypeVar("T")
PathLike = Union[str, Path]

SUPPORTED_FORMATS = ("json", "csv", "xlsx")


@dataclass(frozen=True)
class Datasets:
    """The four collections that make up one dataset load."""
    disasters: List[Disaster]
    claims: List[Claim]
    agents: List[Agent]
    claim_handlers: List[ClaimHandler]


def _to_int(x) -> Optional[int]:
    """Convert a cell to int, returning None if missing."""
    if pd.isna(x): return None
    return int(float(x))

def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()

def _to_date(x) -> date:
    """Parse an ISO string (or a Timestamp pandas already parsed) to a date."""
    return pd.Timestamp(x).date()

def _opt(row: pd.Series, name: str):
    return row[name] if name in row.index else None


def _read_table(path: PathLike) -> pd.DataFrame:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Dataset file not found: {p}")
    suffix = p.suffix.lower()
    if suffix == ".json":
        # date columns are parsed by _to_date
        df = pd.read_json(p, orient="records", convert_dates=False)
    elif suffix == ".csv":
        df = pd.read_csv(p)
    elif suffix == ".xlsx":
        df = pd.read_excel(p, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported dataset format '{suffix}' (expected one of {SUPPORTED_FORMATS})")
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    return df


def _load(path: PathLike, convert: Callable[[pd.Series], T], label: str) -> List[T]:
    df = _read_table(path)
    records = [convert(row) for _, row in df.iterrows()]
    logger.info("loaded %d %s from %s", len(records), label, path)
    return records


def _disaster(row: pd.Series) -> Disaster:
    return Disaster(
        id=int(row["id"]),
        state=_to_str(row["state"]),
        declared_date=_to_date(row["declared_date"]),
        end_date=_to_date(row["end_date"]),
        radius_miles=float(row["radius_miles"]),
        name=_to_str(_opt(row, "name")),
        disaster_type=_to_str(_opt(row, "type")),
    )

def _claim(row: pd.Series) -> Claim:
    return Claim(
        id=int(row["id"]),
        disaster_id=int(row["disaster_id"]),
        agent_assigned_id=_to_int(_opt(row, "agent_assigned_id")),
        claim_handler_assigned_id=_to_int(_opt(row, "claim_handler_assigned_id")),
        status=_to_str(row["status"]),
        estimate_cost=float(row["estimate_cost"]),
        severity_rating=int(row["severity_rating"]),
    )

def _agent(row: pd.Series) -> Agent:
    return Agent(
        id=int(row["id"]),
        state=_to_str(row["state"]),
        secondary_language=_to_str(_opt(row, "secondary_language")),
        first_name=_to_str(_opt(row, "first_name")),
        last_name=_to_str(_opt(row, "last_name")),
        primary_language=_to_str(_opt(row, "primary_language")),
    )

def _claim_handler(row: pd.Series) -> ClaimHandler:
    return ClaimHandler(
        id=int(row["id"]),
        first_name=_to_str(_opt(row, "first_name")),
        last_name=_to_str(_opt(row, "last_name")),
    )


def load_disasters(path: PathLike) -> List[Disaster]:
    return _load(path, _disaster, "disasters")

def load_claims(path: PathLike) -> List[Claim]:
    return _load(path, _claim, "claims")

def load_agents(path: PathLike) -> List[Agent]:
    return _load(path, _agent, "agents")

def load_claim_handlers(path: PathLike) -> List[ClaimHandler]:
    return _load(path, _claim_handler, "claim handlers")


def load_datasets(data_dir: PathLike, prefix: str = "sfcc_2023", fmt: str = "json") -> Datasets:
    """Load all four datasets from `data_dir`.

    Files are expected as `<prefix>_disasters.<fmt>`, `<prefix>_claims.<fmt>`,
    `<prefix>_agents.<fmt>` and `<prefix>_claim_handlers.<fmt>`.
    """
    fmt = fmt.lower().lstrip(".")
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"fmt must be one of {SUPPORTED_FORMATS}")
    base = Path(data_dir)

    def _path(name: str) -> Path:
        return base / f"{prefix}_{name}.{fmt}"

    return Datasets(
        disasters=load_disasters(_path("disasters")),
        claims=load_claims(_path("claims")),
        agents=load_agents(_path("agents")),
        claim_handlers=load_claim_handlers(_path("claim_handlers")),
    )
