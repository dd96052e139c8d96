import pytest

from bgp_bestpath.config import ParserConfig
from bgp_bestpath.ingest.parser import (
    CiscoDetailParser,
    ParserRegistry,
    as_path_length,
    parse,
    scan_attribute_line,
)
from bgp_bestpath.types import Origin


def test_parse_headerless_dump_splits_on_repeated_next_hop_lines(as_path_dump: str) -> None:
    records = parse(as_path_dump)

    assert len(records) == 2
    assert [r.index for r in records] == [0, 1]
    assert [r.id for r in records] == ["path-0000", "path-0001"]
    assert {r.prefix for r in records} == {"192.168.0.0/24"}

    first, second = records
    assert first.as_path == "65001 65002"
    assert first.as_path_length == 2
    assert first.next_hop == "10.1.1.1"
    assert second.as_path == "65003"
    assert second.as_path_length == 1
    assert second.router_id == "192.168.1.1"
    assert second.peer_ip == "10.2.2.2"
    assert second.origin is Origin.IGP
    assert not first.source_marked_best
    assert second.source_marked_best


def test_parse_explicit_headers_with_inline_metric(mixed_session_dump: str) -> None:
    records = parse(mixed_session_dump)

    assert len(records) == 3
    assert [r.igp_cost for r in records] == [0, 2000, 2000]
    assert [r.is_internal for r in records] == [False, True, True]
    assert records[1].next_hop == "81.228.69.237"
    assert records[1].router_id == "81.228.65.237"
    assert records[2].peer_ip == "81.228.63.48"
    assert all(r.as_path == "1299 15169" for r in records)
    assert records[0].source_marked_best
    assert "group-best" in records[0].raw_text
    assert not any(r.source_marked_best for r in records[1:])


def test_parse_attribute_line_fields(policy_dump: str) -> None:
    records = parse(policy_dump)

    assert len(records) == 4
    assert records[0].med == 20
    assert records[1].origin is Origin.EGP
    assert records[2].local_pref == 200
    local = records[3]
    assert local.weight == 32768
    assert local.next_hop == "0.0.0.0"
    assert local.origin is Origin.INCOMPLETE
    # The header line precedes the next-hop line, so no AS path is taken.
    assert local.as_path == ""
    assert local.as_path_length == 0
    assert not local.is_internal


def test_partial_block_falls_back_to_defaults() -> None:
    records = parse("  Path #1: Received by speaker 0\n  garbage here\n")

    assert len(records) == 1
    record = records[0]
    assert record.prefix == "0.0.0.0/0"
    assert record.next_hop == "0.0.0.0"
    assert record.router_id == "0.0.0.0"
    assert record.peer_ip == ""
    assert record.local_pref == 100
    assert record.weight == 0
    assert record.med == 0
    assert record.igp_cost == 0
    assert record.origin is Origin.INCOMPLETE
    assert record.is_valid


@pytest.mark.parametrize("text", ["", "no routes here\n", "Paths: (0 available)\n"])
def test_no_path_boundary_yields_empty_result(text: str) -> None:
    assert parse(text) == []


def test_parser_config_controls_identity_and_defaults() -> None:
    parser = CiscoDetailParser(
        ParserConfig(id_prefix="lab", default_prefix="198.18.0.0/15", default_local_pref=50)
    )
    records = parser.parse("    10.0.0.1 from 10.0.0.2 (10.0.0.3)\n")

    assert records[0].id == "lab-0000"
    assert records[0].prefix == "198.18.0.0/15"
    assert records[0].local_pref == 50

    override = parser.parse("    10.0.0.1 from 10.0.0.2 (10.0.0.3)\n", id_prefix="run7")
    assert override[0].id == "run7-0000"


def test_reparse_produces_same_ids(router_id_dump: str) -> None:
    assert [r.id for r in parse(router_id_dump)] == [r.id for r in parse(router_id_dump)]


def test_ipv6_prefix_is_accepted() -> None:
    text = "BGP routing table entry for 2001:db8::/32\n    10.0.0.1 from 10.0.0.1 (1.1.1.1)\n"
    assert parse(text)[0].prefix == "2001:db8::/32"


def test_other_parenthesised_annotation_is_ignored() -> None:
    text = "    10.0.0.1 (inaccessible) from 10.0.0.2 (1.1.1.1)\n"
    record = parse(text)[0]

    assert record.next_hop == "10.0.0.1"
    assert record.peer_ip == "10.0.0.2"
    assert record.igp_cost == 0


def test_scan_attribute_line_is_order_insensitive() -> None:
    found = scan_attribute_line("  Origin incomplete, weight 5, localpref 90, metric 7, valid")

    assert found == {"origin": Origin.INCOMPLETE, "med": 7, "local_pref": 90, "weight": 5}


def test_scan_attribute_line_ignores_lines_without_origin() -> None:
    assert scan_attribute_line("    10.0.0.1 (metric 10) from 10.0.0.2 (1.1.1.1)") == {}
    assert scan_attribute_line("      Originator: 81.228.65.237, Cluster list: 81.228.66.11") == {}


def test_as_path_length_skips_non_numeric_tokens() -> None:
    assert as_path_length("65001 {65002 65003} 65004") == 2
    assert as_path_length("(65010) 65001") == 1
    assert as_path_length("") == 0


def test_registry_rejects_unknown_dialect() -> None:
    registry = ParserRegistry()

    assert registry.dialects() == ["arista", "cisco"]
    with pytest.raises(ValueError):
        registry.parse_text("anything", dialect="juniper")
