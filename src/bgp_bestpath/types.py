"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class Origin(str, Enum):
    """BGP ORIGIN attribute as printed by the router."""

    IGP = "IGP"
    EGP = "EGP"
    INCOMPLETE = "Incomplete"

    @property
    def preference(self) -> int:
        """Ordinal used by the decision process (lower wins)."""
        return _ORIGIN_PREFERENCE[self]

    @classmethod
    def from_text(cls, text: str) -> "Origin":
        lowered = text.strip().lower()
        for origin in cls:
            if origin.value.lower() == lowered:
                return origin
        raise ValueError(f"Unknown origin code: {text}")


_ORIGIN_PREFERENCE = {Origin.IGP: 0, Origin.EGP: 1, Origin.INCOMPLETE: 2}


@dataclass(frozen=True, slots=True)
class PathRecord:
    """One candidate path to the destination prefix."""

    id: str
    index: int
    prefix: str
    next_hop: str = "0.0.0.0"
    local_pref: int = 100
    weight: int = 0
    med: int = 0
    as_path: str = ""
    as_path_length: int = 0
    origin: Origin = Origin.INCOMPLETE
    is_internal: bool = False
    igp_cost: int = 0
    router_id: str = "0.0.0.0"
    peer_ip: str = ""
    raw_text: str = ""
    is_valid: bool = True
    source_marked_best: bool = False

    @property
    def session(self) -> str:
        return "iBGP" if self.is_internal else "eBGP"


@dataclass(frozen=True, slots=True)
class IntValue:
    kind: ClassVar[str] = "int"
    value: int

    def display(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class TextValue:
    kind: ClassVar[str] = "text"
    value: str

    def display(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FlagValue:
    kind: ClassVar[str] = "flag"
    value: bool

    def display(self) -> str:
        return "true" if self.value else "false"


StepValue = IntValue | TextValue | FlagValue


@dataclass(frozen=True, slots=True)
class DecisionCandidate:
    """A record's standing within a single pipeline step."""

    record_id: str
    value: StepValue
    is_best: bool
    in_pool: bool


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of one pipeline step across every original record."""

    step_name: str
    candidates: tuple[DecisionCandidate, ...]
    reason: str
    survivor_ids: tuple[str, ...] = ()

    def candidate(self, record_id: str) -> DecisionCandidate:
        for item in self.candidates:
            if item.record_id == record_id:
                return item
        raise KeyError(f"No candidate for record: {record_id}")


@dataclass(frozen=True, slots=True)
class DecisionTrace:
    """Result of one full run of the decision pipeline."""

    winner: PathRecord | None
    steps: tuple[StepResult, ...] = ()
    error: str | None = None
    tie_broken_by_order: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.winner is not None

    def step(self, name: str) -> StepResult:
        for result in self.steps:
            if result.step_name == name:
                return result
        raise KeyError(f"Step not in trace: {name}")


@dataclass(frozen=True, slots=True)
class RankEntry:
    """One position in a full ranking, with the round that produced it."""

    rank: int
    record: PathRecord
    reason: str
    trace: DecisionTrace = field(repr=False)
