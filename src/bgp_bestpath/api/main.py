"""FastAPI entrypoint for parse/decide/rank and analysis trace endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator

from bgp_bestpath.config import DecisionOptions, ParserConfig, TraceConfig
from bgp_bestpath.decision.engine import DecisionEngine, agrees_with_source
from bgp_bestpath.decision.ranking import RankingOrchestrator, decisive_reason
from bgp_bestpath.ingest.parser import CiscoDetailParser, ParserRegistry, as_path_length
from bgp_bestpath.obs.tracing import AnalysisStore, Timer
from bgp_bestpath.types import DecisionTrace, Origin, PathRecord, RankEntry, StepResult


class PathRecordIn(BaseModel):
    """A caller-constructed path, e.g. a parsed path with edited attributes."""

    id: str | None = None
    prefix: str = "0.0.0.0/0"
    next_hop: str = "0.0.0.0"
    local_pref: int = Field(default=100, ge=0)
    weight: int = Field(default=0, ge=0)
    med: int = Field(default=0, ge=0)
    as_path: str = ""
    origin: Origin = Origin.INCOMPLETE
    is_internal: bool = False
    igp_cost: int = Field(default=0, ge=0)
    router_id: str = "0.0.0.0"
    peer_ip: str = ""
    source_marked_best: bool = False


class ParseRequest(BaseModel):
    text: str
    dialect: str = "cisco"
    id_prefix: str | None = Field(default=None, min_length=1)


class AnalysisRequest(BaseModel):
    text: str | None = None
    records: list[PathRecordIn] | None = None
    dialect: str = "cisco"
    options: DecisionOptions = Field(default_factory=DecisionOptions)

    @model_validator(mode="after")
    def _one_source(self) -> "AnalysisRequest":
        if (self.text is None) == (self.records is None):
            raise ValueError("Provide exactly one of text or records")
        return self


app = FastAPI(title="BGP Best Path Analyzer", version="0.1.0")

_parser_registry = ParserRegistry([CiscoDetailParser(ParserConfig())])
_analysis_store = AnalysisStore(TraceConfig())


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "dialects": _parser_registry.dialects(),
        "analysis_count": len(_analysis_store),
    }


@app.post("/parse")
def parse_dump(request: ParseRequest) -> dict[str, Any]:
    records = _parse_or_400(request.text, request.dialect, request.id_prefix)
    return {
        "prefix": records[0].prefix if records else None,
        "records": [_record_payload(record) for record in records],
    }


@app.post("/decide")
def decide_paths(request: AnalysisRequest) -> dict[str, Any]:
    records = _load_records(request)
    with Timer() as timer:
        trace = DecisionEngine(request.options).decide(records)
    agreement = agrees_with_source(records, trace)

    record = _analysis_store.create_record(
        operation="decide",
        prefix=_prefix_of(records),
        path_count=len(records),
        winner_id=trace.winner.id if trace.winner else None,
        reason=decisive_reason(trace) if trace.ok else "",
        agrees_with_source=agreement,
        latency_ms=timer.elapsed_ms,
        error=trace.error,
    )
    if not trace.ok:
        raise HTTPException(status_code=422, detail=trace.error)

    return {
        "analysis_id": record.analysis_id,
        "agrees_with_source": agreement,
        **_trace_payload(trace),
    }


@app.post("/rank")
def rank_paths(request: AnalysisRequest) -> dict[str, Any]:
    records = _load_records(request)
    with Timer() as timer:
        ranking = RankingOrchestrator(options=request.options).rank(records)

    record = _analysis_store.create_record(
        operation="rank",
        prefix=_prefix_of(records),
        path_count=len(records),
        winner_id=ranking[0].record.id if ranking else None,
        reason=ranking[0].reason if ranking else "",
        latency_ms=timer.elapsed_ms,
    )
    return {
        "analysis_id": record.analysis_id,
        "ranking": [_rank_payload(entry) for entry in ranking],
    }


@app.get("/analyses")
def analyses(limit: int = 20) -> dict[str, Any]:
    return {"items": [asdict(record) for record in _analysis_store.list_recent(limit=limit)]}


@app.get("/analyses/{analysis_id}")
def analysis_detail(analysis_id: str) -> dict[str, Any]:
    try:
        record = _analysis_store.get(analysis_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return asdict(record)


@app.get("/metrics")
def metrics() -> dict[str, Any]:
    return _analysis_store.summary()


def _parse_or_400(text: str, dialect: str, id_prefix: str | None) -> list[PathRecord]:
    try:
        return _parser_registry.parse_text(text, dialect=dialect, id_prefix=id_prefix)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _load_records(request: AnalysisRequest) -> list[PathRecord]:
    if request.text is not None:
        return _parse_or_400(request.text, request.dialect, None)

    records: list[PathRecord] = []
    for index, item in enumerate(request.records or []):
        records.append(
            PathRecord(
                id=item.id or f"path-{index:04d}",
                index=index,
                prefix=item.prefix,
                next_hop=item.next_hop,
                local_pref=item.local_pref,
                weight=item.weight,
                med=item.med,
                as_path=item.as_path,
                as_path_length=as_path_length(item.as_path),
                origin=item.origin,
                is_internal=item.is_internal,
                igp_cost=item.igp_cost,
                router_id=item.router_id,
                peer_ip=item.peer_ip,
                source_marked_best=item.source_marked_best,
            )
        )
    if len({record.id for record in records}) != len(records):
        raise HTTPException(status_code=400, detail="Path ids must be unique")
    return records


def _prefix_of(records: list[PathRecord]) -> str:
    return records[0].prefix if records else ""


def _record_payload(record: PathRecord) -> dict[str, Any]:
    payload = asdict(record)
    payload["origin"] = record.origin.value
    payload["session"] = record.session
    return payload


def _step_payload(step: StepResult) -> dict[str, Any]:
    return {
        "step_name": step.step_name,
        "reason": step.reason,
        "survivor_ids": list(step.survivor_ids),
        "candidates": [
            {
                "record_id": candidate.record_id,
                "kind": candidate.value.kind,
                "value": candidate.value.value,
                "display": candidate.value.display(),
                "is_best": candidate.is_best,
                "in_pool": candidate.in_pool,
            }
            for candidate in step.candidates
        ],
    }


def _trace_payload(trace: DecisionTrace) -> dict[str, Any]:
    return {
        "winner": _record_payload(trace.winner) if trace.winner else None,
        "error": trace.error,
        "tie_broken_by_order": trace.tie_broken_by_order,
        "steps": [_step_payload(step) for step in trace.steps],
    }


def _rank_payload(entry: RankEntry) -> dict[str, Any]:
    return {
        "rank": entry.rank,
        "record_id": entry.record.id,
        "next_hop": entry.record.next_hop,
        "reason": entry.reason,
        "trace": _trace_payload(entry.trace),
    }
