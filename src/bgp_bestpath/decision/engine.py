"""Step-wise BGP best-path decision engine with a full elimination trace."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bgp_bestpath.config import DecisionOptions
from bgp_bestpath.decision.steps import DecisionStep, build_pipeline
from bgp_bestpath.types import DecisionCandidate, DecisionTrace, PathRecord, StepResult, StepValue

logger = logging.getLogger(__name__)

EMPTY_INPUT = "No paths provided"
TIE = "Tie"


class DecisionEngine:
    """Runs the ordered tie-break pipeline over one pool of paths.

    Every step emits a `StepResult` covering all input records, including the
    ones an earlier step already eliminated, so the caller can render the full
    matrix. Steps only eliminate while more than one path is left. If the last
    step still leaves a tie, the first remaining path in input order wins.
    """

    def __init__(self, options: DecisionOptions | None = None) -> None:
        self.options = options or DecisionOptions()
        self.steps = build_pipeline(self.options)

    def decide(self, records: Sequence[PathRecord]) -> DecisionTrace:
        if not records:
            logger.debug("decision requested with no paths")
            return DecisionTrace(winner=None, steps=(), error=EMPTY_INPUT)

        originals = list(records)
        pool = list(range(len(originals)))
        results: list[StepResult] = []

        for step in self.steps:
            result, pool = self._run_step(step, originals, pool)
            results.append(result)

        winner = originals[pool[0]]
        tie_broken_by_order = len(pool) > 1
        if tie_broken_by_order:
            logger.debug(
                "%d paths tied on every step, picking %s by input order", len(pool), winner.id
            )
        return DecisionTrace(
            winner=winner,
            steps=tuple(results),
            tie_broken_by_order=tie_broken_by_order,
        )

    def _run_step(
        self, step: DecisionStep, originals: list[PathRecord], pool: list[int]
    ) -> tuple[StepResult, list[int]]:
        values = [step.extract(record) for record in originals]

        best: StepValue = values[pool[0]]
        for position in pool[1:]:
            if step.better(values[position], best):
                best = values[position]

        survivors = [position for position in pool if values[position] == best]
        reason = self._reason(step, values, pool, survivors, best)
        if len(survivors) < len(pool):
            logger.debug("%s: %d -> %d paths", step.name, len(pool), len(survivors))

        alive = set(pool)
        candidates = tuple(
            DecisionCandidate(
                record_id=record.id,
                value=values[position],
                is_best=values[position] == best,
                in_pool=position in alive,
            )
            for position, record in enumerate(originals)
        )
        result = StepResult(
            step_name=step.name,
            candidates=candidates,
            reason=reason,
            survivor_ids=tuple(originals[position].id for position in survivors),
        )
        return result, survivors

    @staticmethod
    def _reason(
        step: DecisionStep,
        values: list[StepValue],
        pool: list[int],
        survivors: list[int],
        best: StepValue,
    ) -> str:
        if len(pool) <= 1:
            return ""
        if len(survivors) == len(pool):
            return TIE
        loser = next(values[position] for position in pool if values[position] != best)
        return (
            f"{step.name}: {best.display()} preferred over {loser.display()} "
            f"({step.preference})"
        )


def decide(
    records: Sequence[PathRecord], options: DecisionOptions | None = None
) -> DecisionTrace:
    """Pick the best path among `records` and return the full trace."""
    return DecisionEngine(options).decide(records)


def claimed_best(records: Sequence[PathRecord]) -> PathRecord | None:
    """Return the first path the source text itself marked as best."""
    for record in records:
        if record.source_marked_best:
            return record
    return None


def agrees_with_source(records: Sequence[PathRecord], trace: DecisionTrace) -> bool | None:
    """Cross-check the computed winner against the router's own choice.

    Returns None when the source marked no path as best or the trace has no
    winner.
    """

    marked = claimed_best(records)
    if marked is None or trace.winner is None:
        return None
    return marked.id == trace.winner.id
