"""BGP best-path analysis package."""

from .config import DecisionOptions, ParserConfig, TraceConfig
from .decision.engine import decide
from .decision.ranking import rank
from .ingest.parser import parse

__all__ = ["DecisionOptions", "ParserConfig", "TraceConfig", "decide", "parse", "rank"]
