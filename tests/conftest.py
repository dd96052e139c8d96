import pytest

AS_PATH_DUMP = """
BGP routing table entry for 192.168.0.0/24, version 10
Paths: (2 available, best #2, table default)
  Advertised to update-groups:
     1
  65001 65002
    10.1.1.1 from 10.1.1.1 (10.1.1.1)
      Origin IGP, localpref 100, valid, external
  65003
    10.2.2.2 from 10.2.2.2 (192.168.1.1)
      Origin IGP, localpref 100, valid, external, best
"""

ROUTER_ID_DUMP = """
BGP routing table entry for 10.0.0.0/8, version 2
Paths: (2 available, best #1)
  65001
    1.1.1.1 from 1.1.1.1 (1.1.1.1)
      Origin IGP, localpref 100, valid, external, best
  65001
    2.2.2.2 from 2.2.2.2 (2.2.2.2)
      Origin IGP, localpref 100, valid, external
"""

MIXED_SESSION_DUMP = """
BGP routing table entry for 8.8.8.0/24
Last Modified: Dec  9 21:10:04.409 for 7w5d
Paths: (3 available, best #1)

  Path #1: Received by speaker 0
  1299 15169
    62.115.35.116 from 62.115.35.116 (2.255.252.25)
      Origin IGP, localpref 100, valid, external, best, group-best
Communities: 

1299:430
    (RPKI state Valid)

1299:4000 1299:20000 1299:20002 1299:20200


  Path #2: Received by speaker 0
  1299 15169
    81.228.69.237 (metric 2000) from 81.228.63.47 (81.228.65.237)
      Origin IGP, localpref 100, valid, internal
Communities: 

1299:430
    (RPKI state Valid)

1299:4000 1299:20000 1299:20002 1299:20200

      Originator: 81.228.65.237, Cluster list: 81.228.66.11

  Path #3: Received by speaker 0
  1299 15169
    81.228.69.237 (metric 2000) from 81.228.63.48 (81.228.65.237)
      Origin IGP, localpref 100, valid, internal
Communities: 

1299:430
    (RPKI state Valid)

1299:4000 1299:20000 1299:20002 1299:20200

      Originator: 81.228.65.237, Cluster list: 81.228.66.12
"""

POLICY_DUMP = """
BGP routing table entry for 203.0.113.0/24, version 41
Paths: (4 available, best #3)
  Path #1:
  64500 64510 64520
    198.51.100.1 from 198.51.100.1 (10.10.10.1)
      Origin IGP, metric 20, localpref 100, valid, external
  Path #2:
  64501
    198.51.100.2 from 198.51.100.2 (10.10.10.2)
      Origin EGP, metric 0, localpref 100, valid, external
  Path #3:
  64502
    198.51.100.3 from 198.51.100.3 (10.10.10.3)
      Origin IGP, metric 0, localpref 200, valid, external, best
  Path #4:
    0.0.0.0 from 0.0.0.0 (10.0.0.9)
      Origin incomplete, metric 0, localpref 100, weight 32768, valid, sourced, local
"""


@pytest.fixture()
def as_path_dump() -> str:
    return AS_PATH_DUMP


@pytest.fixture()
def router_id_dump() -> str:
    return ROUTER_ID_DUMP


@pytest.fixture()
def mixed_session_dump() -> str:
    return MIXED_SESSION_DUMP


@pytest.fixture()
def policy_dump() -> str:
    return POLICY_DUMP


@pytest.fixture()
def sample_dumps() -> list[str]:
    return [AS_PATH_DUMP, ROUTER_ID_DUMP, MIXED_SESSION_DUMP, POLICY_DUMP]
