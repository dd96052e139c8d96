"""Parsing interfaces and concrete parsers for router route dumps."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from bgp_bestpath.config import ParserConfig
from bgp_bestpath.types import Origin, PathRecord

logger = logging.getLogger(__name__)

_PATH_HEADER = re.compile(r"^\s*Path\s+#\d+:", flags=re.IGNORECASE)
_NEXT_HOP_LINE = re.compile(
    r"^\s+(?P<next_hop>[0-9.]+)"
    r"(?:\s+\((?P<note>[^)]*)\))?"
    r"\s+from\s+(?P<peer>[0-9.]+)\s+\((?P<router_id>[0-9.]+)\)"
)
_INLINE_METRIC = re.compile(r"^\s*metric\s+(\d+)\s*$", flags=re.IGNORECASE)
_AS_PATH_LINE = re.compile(r"^[0-9\s]+$")
_PREFIX = re.compile(r"entry for ([0-9A-Fa-f:./]+)")

_ORIGIN = re.compile(r"Origin\s+(IGP|EGP|Incomplete)\b", flags=re.IGNORECASE)
_MED = re.compile(r"\bmetric\s+(\d+)")
_LOCAL_PREF = re.compile(r"\blocalpref\s+(\d+)")
_WEIGHT = re.compile(r"\bweight\s+(\d+)")
_BEST_MARKER = re.compile(r"(?:^|,)\s*best\s*(?:,|$)", flags=re.MULTILINE)


class RouteDumpParser(ABC):
    """Base parser interface for vendor route-dump text."""

    dialects: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, text: str, *, id_prefix: str | None = None) -> list[PathRecord]:
        """Parse one route dump into ordered path records."""


@dataclass(slots=True)
class _PathBuilder:
    lines: list[str] = field(default_factory=list)
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def has_next_hop(self) -> bool:
        return bool(self.fields.get("next_hop"))


@dataclass(slots=True)
class _ScanState:
    current: _PathBuilder | None = None
    previous_line: str = ""


class CiscoDetailParser(RouteDumpParser):
    """Parser for `show ip bgp <prefix>` style detail output.

    Paths are delimited two ways:
    1. An explicit `Path #N:` header always closes the open path and starts a
       new one.
    2. A next-hop line (`<nh> [(metric N)] from <peer> (<router-id>)`) starts a
       path when none is open, and closes the open path first when that path
       already has a next hop. Dialects without headers are split this way.

    Nothing in the input is treated as fatal. Missing attributes keep their
    defaults and a path is produced for every boundary found.
    """

    dialects = ("cisco", "arista")

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def parse(self, text: str, *, id_prefix: str | None = None) -> list[PathRecord]:
        prefix = extract_prefix(text) or self.config.default_prefix
        ident = id_prefix or self.config.id_prefix
        records: list[PathRecord] = []
        state = _ScanState()

        for line in text.splitlines():
            header = _PATH_HEADER.match(line)
            next_hop = _NEXT_HOP_LINE.match(line)

            if header:
                if state.current is not None:
                    records.append(self._finalize(state.current, prefix, ident, len(records)))
                state.current = _PathBuilder()
            elif next_hop:
                if state.current is not None and state.current.has_next_hop:
                    records.append(self._finalize(state.current, prefix, ident, len(records)))
                    state.current = None
                if state.current is None:
                    state.current = _PathBuilder()

            if state.current is not None:
                self._consume(state, line, next_hop)
            state.previous_line = line

        if state.current is not None:
            records.append(self._finalize(state.current, prefix, ident, len(records)))

        logger.debug("parsed %d paths for %s", len(records), prefix)
        return records

    def _consume(self, state: _ScanState, line: str, next_hop: re.Match[str] | None) -> None:
        builder = state.current
        assert builder is not None
        builder.lines.append(line)

        if next_hop:
            builder.fields["next_hop"] = next_hop.group("next_hop")
            builder.fields["peer_ip"] = next_hop.group("peer")
            builder.fields["router_id"] = next_hop.group("router_id")
            note = next_hop.group("note")
            metric = _INLINE_METRIC.match(note) if note else None
            if metric:
                builder.fields["igp_cost"] = int(metric.group(1))

            previous = state.previous_line.strip()
            if not _PATH_HEADER.match(state.previous_line) and _AS_PATH_LINE.match(previous):
                builder.fields["as_path"] = previous

        builder.fields.update(scan_attribute_line(line))

    def _finalize(
        self, builder: _PathBuilder, prefix: str, id_prefix: str, index: int
    ) -> PathRecord:
        raw = "\n".join(builder.lines)
        fields = builder.fields
        as_path = fields.get("as_path", "")

        # "external" wins when both words appear in the block.
        is_internal = "external" not in raw and "internal" in raw

        return PathRecord(
            id=f"{id_prefix}-{index:04d}",
            index=index,
            prefix=prefix,
            next_hop=fields.get("next_hop", "0.0.0.0"),
            local_pref=fields.get("local_pref", self.config.default_local_pref),
            weight=fields.get("weight", 0),
            med=fields.get("med", 0),
            as_path=as_path,
            as_path_length=as_path_length(as_path),
            origin=fields.get("origin", Origin.INCOMPLETE),
            is_internal=is_internal,
            igp_cost=fields.get("igp_cost", 0),
            router_id=fields.get("router_id", "0.0.0.0"),
            peer_ip=fields.get("peer_ip", ""),
            raw_text=raw,
            is_valid=True,
            source_marked_best=bool(_BEST_MARKER.search(raw)),
        )


class ParserRegistry:
    """Maps a dialect name to its parser implementation."""

    def __init__(self, parsers: list[RouteDumpParser] | None = None) -> None:
        self._parsers: dict[str, RouteDumpParser] = {}
        for parser in parsers or [CiscoDetailParser()]:
            self.register(parser)

    def register(self, parser: RouteDumpParser) -> None:
        for dialect in parser.dialects:
            self._parsers[dialect.lower()] = parser

    def dialects(self) -> list[str]:
        return sorted(self._parsers)

    def parse_text(
        self, text: str, *, dialect: str = "cisco", id_prefix: str | None = None
    ) -> list[PathRecord]:
        parser = self._parsers.get(dialect.lower())
        if parser is None:
            raise ValueError(f"No parser registered for dialect: {dialect}")
        return parser.parse(text, id_prefix=id_prefix)


_default_registry = ParserRegistry()


def parse(text: str, *, dialect: str = "cisco", id_prefix: str | None = None) -> list[PathRecord]:
    """Parse a route dump with the default registry."""
    return _default_registry.parse_text(text, dialect=dialect, id_prefix=id_prefix)


def extract_prefix(text: str) -> str | None:
    match = _PREFIX.search(text)
    return match.group(1) if match else None


def as_path_length(as_path: str) -> int:
    """Count AS numbers, ignoring confederation or set markers."""
    return sum(1 for token in as_path.split() if token.isdigit())


def scan_attribute_line(line: str) -> dict[str, Any]:
    """Extract origin, MED, local preference and weight from an `Origin` line.

    Each sub-pattern is optional and order-insensitive. Lines without the
    `Origin` token yield an empty map.
    """

    if "Origin" not in line:
        return {}

    found: dict[str, Any] = {}
    origin = _ORIGIN.search(line)
    if origin:
        found["origin"] = Origin.from_text(origin.group(1))
    med = _MED.search(line)
    if med:
        found["med"] = int(med.group(1))
    local_pref = _LOCAL_PREF.search(line)
    if local_pref:
        found["local_pref"] = int(local_pref.group(1))
    weight = _WEIGHT.search(line)
    if weight:
        found["weight"] = int(weight.group(1))
    return found


def render_attribute_line(record: PathRecord) -> str:
    """Serialize a record's attributes back into the `Origin` line shape."""
    session = "internal" if record.is_internal else "external"
    return (
        f"      Origin {record.origin.value}, metric {record.med}, "
        f"localpref {record.local_pref}, weight {record.weight}, valid, {session}"
    )
