"""Analysis tracing, latency timing, and summary metrics."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from bgp_bestpath.config import TraceConfig


@dataclass(slots=True)
class AnalysisRecord:
    analysis_id: str
    timestamp_utc: str
    operation: str
    prefix: str
    path_count: int
    winner_id: str | None
    reason: str
    agrees_with_source: bool | None
    latency_ms: float
    error: str | None = None


class AnalysisStore:
    """In-memory store of recent analyses for API-level observability.

    Holds at most `max_records` entries; the oldest is evicted first.
    """

    def __init__(self, config: TraceConfig | None = None) -> None:
        self.config = config or TraceConfig()
        self._records: dict[str, AnalysisRecord] = {}

    def create_record(
        self,
        *,
        operation: str,
        prefix: str,
        path_count: int,
        winner_id: str | None,
        reason: str,
        latency_ms: float,
        agrees_with_source: bool | None = None,
        error: str | None = None,
    ) -> AnalysisRecord:
        analysis_id = str(uuid.uuid4())
        record = AnalysisRecord(
            analysis_id=analysis_id,
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            operation=operation,
            prefix=prefix,
            path_count=path_count,
            winner_id=winner_id,
            reason=reason,
            agrees_with_source=agrees_with_source,
            latency_ms=latency_ms,
            error=error,
        )
        self._records[analysis_id] = record
        while len(self._records) > self.config.max_records:
            del self._records[next(iter(self._records))]
        return record

    def get(self, analysis_id: str) -> AnalysisRecord:
        record = self._records.get(analysis_id)
        if record is None:
            raise KeyError(f"Analysis not found: {analysis_id}")
        return record

    def list_recent(self, limit: int = 20) -> list[AnalysisRecord]:
        return list(self._records.values())[-limit:]

    def __len__(self) -> int:
        return len(self._records)

    def summary(self) -> dict[str, float | int]:
        """Aggregate core metrics for dashboard display."""
        records = list(self._records.values())
        total = len(records)
        if total == 0:
            return {
                "total_analyses": 0,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "over_budget": 0,
                "errors": 0,
                "source_agreement_rate": 0.0,
            }

        latencies = sorted(record.latency_ms for record in records)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        checked = [r.agrees_with_source for r in records if r.agrees_with_source is not None]
        agreement = sum(1 for ok in checked if ok) / len(checked) if checked else 0.0

        return {
            "total_analyses": total,
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
            "over_budget": sum(1 for value in latencies if value > self.config.latency_budget_ms),
            "errors": sum(1 for record in records if record.error),
            "source_agreement_rate": agreement,
        }


class Timer:
    """Simple context timer used around analyses."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
