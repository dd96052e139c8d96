"""Best-path decision steps in priority order."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from bgp_bestpath.config import DecisionOptions
from bgp_bestpath.types import FlagValue, IntValue, PathRecord, StepValue, TextValue

LOCAL_NEXT_HOP = "0.0.0.0"

_DIGIT_RUN = re.compile(r"(\d+)")


@dataclass(frozen=True, slots=True)
class DecisionStep:
    """A named criterion: value extractor plus strict preference."""

    name: str
    extract: Callable[[PathRecord], StepValue]
    better: Callable[[StepValue, StepValue], bool]
    preference: str


def address_key(text: str) -> tuple[int | str, ...]:
    """Sort key comparing digit runs numerically, so 2.0.0.0 < 10.0.0.0."""
    parts = _DIGIT_RUN.split(text)
    # split() with a capture group alternates text and digits, text first.
    return tuple(int(part) if i % 2 else part for i, part in enumerate(parts))


def _higher(a: StepValue, b: StepValue) -> bool:
    return a.value > b.value


def _lower(a: StepValue, b: StepValue) -> bool:
    return a.value < b.value


def _true_first(a: StepValue, b: StepValue) -> bool:
    return bool(a.value) and not b.value


def _ebgp_first(a: StepValue, b: StepValue) -> bool:
    return a.value == "eBGP" and b.value == "iBGP"


def _lower_address(a: StepValue, b: StepValue) -> bool:
    return address_key(str(a.value)) < address_key(str(b.value))


WEIGHT = DecisionStep(
    name="Weight",
    extract=lambda r: IntValue(r.weight),
    better=_higher,
    preference="higher weight",
)
LOCAL_PREFERENCE = DecisionStep(
    name="Local Preference",
    extract=lambda r: IntValue(r.local_pref),
    better=_higher,
    preference="higher local preference",
)
LOCALLY_ORIGINATED = DecisionStep(
    name="Locally Originated",
    extract=lambda r: FlagValue(r.next_hop == LOCAL_NEXT_HOP),
    better=_true_first,
    preference=f"locally originated, next hop {LOCAL_NEXT_HOP}",
)
AS_PATH_LENGTH = DecisionStep(
    name="AS Path Length",
    extract=lambda r: IntValue(r.as_path_length),
    better=_lower,
    preference="shorter AS path",
)
ORIGIN_CODE = DecisionStep(
    name="Origin Code",
    extract=lambda r: IntValue(r.origin.preference),
    better=_lower,
    preference="lower origin code, IGP < EGP < Incomplete",
)
MED = DecisionStep(
    name="MED",
    extract=lambda r: IntValue(r.med),
    better=_lower,
    preference="lower MED",
)
EBGP_OVER_IBGP = DecisionStep(
    name="eBGP over iBGP",
    extract=lambda r: TextValue(r.session),
    better=_ebgp_first,
    preference="external path preferred",
)
IGP_COST = DecisionStep(
    name="IGP Cost",
    extract=lambda r: IntValue(r.igp_cost),
    better=_lower,
    preference="lower IGP cost to next hop",
)
ROUTER_ID = DecisionStep(
    name="Router ID",
    extract=lambda r: TextValue(r.router_id),
    better=_lower_address,
    preference="lower router ID",
)
PEER_IP = DecisionStep(
    name="Peer IP",
    extract=lambda r: TextValue(r.peer_ip),
    better=_lower_address,
    preference="lower peer address",
)

ALL_STEPS: tuple[DecisionStep, ...] = (
    WEIGHT,
    LOCAL_PREFERENCE,
    LOCALLY_ORIGINATED,
    AS_PATH_LENGTH,
    ORIGIN_CODE,
    MED,
    EBGP_OVER_IBGP,
    IGP_COST,
    ROUTER_ID,
    PEER_IP,
)


def build_pipeline(options: DecisionOptions | None = None) -> tuple[DecisionStep, ...]:
    """Return the ordered steps active under `options`."""
    options = options or DecisionOptions()
    if options.skip_as_path_length:
        return tuple(step for step in ALL_STEPS if step is not AS_PATH_LENGTH)
    return ALL_STEPS
