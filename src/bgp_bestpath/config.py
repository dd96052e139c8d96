"""Configuration models for parsing, decision, and tracing."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DecisionOptions(BaseModel):
    """Options recognised by the decision pipeline.

    `always_compare_med` is advisory: MED is compared across every path in the
    pool whether or not it is set.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    skip_as_path_length: bool = False
    always_compare_med: bool = False


class ParserConfig(BaseModel):
    """Configures identity assignment and defaults for parsed paths."""

    id_prefix: str = Field(default="path", min_length=1)
    default_prefix: str = Field(default="0.0.0.0/0", min_length=1)
    default_local_pref: int = Field(default=100, ge=0)


class TraceConfig(BaseModel):
    """Configures the in-memory analysis store."""

    max_records: int = Field(default=500, ge=1)
    latency_budget_ms: float = Field(default=50.0, gt=0.0)
