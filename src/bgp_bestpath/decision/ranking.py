"""Total ordering of candidate paths by repeated decision rounds."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bgp_bestpath.config import DecisionOptions
from bgp_bestpath.decision.engine import TIE, DecisionEngine
from bgp_bestpath.types import DecisionTrace, PathRecord, RankEntry

logger = logging.getLogger(__name__)

ONLY_CANDIDATE = "Only candidate remaining"


class RankingOrchestrator:
    """Ranks every path from 1st to Nth place.

    Each round runs the full pipeline over the paths not ranked yet, records
    the winner with that round's trace, then drops the winner from the pool.
    The pool is a private copy; the caller's sequence is never modified.
    """

    def __init__(
        self,
        engine: DecisionEngine | None = None,
        *,
        options: DecisionOptions | None = None,
    ) -> None:
        if engine is not None and options is not None:
            raise ValueError("Pass either engine or options, not both")
        self.engine = engine or DecisionEngine(options)

    def rank(self, records: Sequence[PathRecord]) -> list[RankEntry]:
        pool = list(records)
        ranking: list[RankEntry] = []

        while pool:
            trace = self.engine.decide(pool)
            if trace.winner is None:
                logger.debug("ranking stopped with %d paths unranked: %s", len(pool), trace.error)
                break

            winner = trace.winner
            ranking.append(
                RankEntry(
                    rank=len(ranking) + 1,
                    record=winner,
                    reason=decisive_reason(trace),
                    trace=trace,
                )
            )
            pool = [record for record in pool if record.id != winner.id]

        return ranking


def decisive_reason(trace: DecisionTrace) -> str:
    """The last step of a round that actually eliminated something."""
    for step in reversed(trace.steps):
        if step.reason and step.reason != TIE:
            return step.reason
    return ONLY_CANDIDATE


def rank(records: Sequence[PathRecord], options: DecisionOptions | None = None) -> list[RankEntry]:
    """Order all `records` from best to worst."""
    return RankingOrchestrator(options=options).rank(records)
