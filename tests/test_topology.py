# /*
# Copyright 2026 The Grove Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */


"""Unit tests for the realm, zone group, and zone bootstrap."""

from __future__ import annotations

import pytest

from conftest import ScriptedRunner
from rgw_manager.errors import ExecutionError, TopologyError, TopologyParseError
from rgw_manager.topology import ParsedID, ParseFailure, TopologyIDs, bootstrap_topology, decode_id


class TestDecodeID:
    """Tests for decode_id."""

    def test_parses_id(self):
        """Test the id is read from a JSON object with other fields."""
        assert decode_id('{"id": "r1", "name": "store1", "current_period": "p1"}') == ParsedID("r1")

    @pytest.mark.parametrize(
        ("output", "reason"),
        [
            ("couldn't create realm", "malformed"),
            ("", "malformed"),
            ('["r1"]', "not-an-object"),
            ('{"name": "store1"}', "missing-id"),
            ('{"id": ""}', "invalid-id"),
            ('{"id": 7}', "invalid-id"),
        ],
    )
    def test_failures_are_distinguished(self, output, reason):
        """Test each way of not finding an id yields its own reason."""
        result = decode_id(output)
        assert isinstance(result, ParseFailure)
        assert result.reason == reason


class TestBootstrapTopology:
    """Tests for bootstrap_topology."""

    def test_creates_realm_zonegroup_zone_in_order(self, topology_runner, object_store, test_log):
        """Test three commands run in order, each naming what came before."""
        ids = bootstrap_topology(topology_runner, object_store, "10.96.0.42", 53390, test_log)

        assert ids == TopologyIDs("r1", "zg1", "z1")
        assert topology_runner.calls == [
            ["realm", "create", "--rgw-realm=store1"],
            ["zonegroup", "create", "--master", "--endpoints=10.96.0.42:53390",
             "--rgw-zonegroup=store1", "--rgw-realm=store1"],
            ["zone", "create", "--master", "--endpoints=10.96.0.42:53390",
             "--rgw-zone=store1", "--rgw-zonegroup=store1", "--rgw-realm=store1"],
        ]

    def test_non_json_realm_output_is_parse_error(self, object_store, test_log):
        """Test unparseable realm output fails instead of yielding an empty id."""
        runner = ScriptedRunner(["realm create: (17) File exists", '{"id": "zg1"}', '{"id": "z1"}'])
        with pytest.raises(TopologyParseError) as exc_info:
            bootstrap_topology(runner, object_store, "10.96.0.42", 53390, test_log)

        assert exc_info.value.step == "realm"
        assert exc_info.value.output == "realm create: (17) File exists"
        assert len(runner.calls) == 1

    def test_missing_zone_id_is_parse_error(self, object_store, test_log):
        """Test a zone result without an id fails at the zone step."""
        runner = ScriptedRunner(['{"id": "r1"}', '{"id": "zg1"}', '{"name": "store1"}'])
        with pytest.raises(TopologyParseError, match="missing-id") as exc_info:
            bootstrap_topology(runner, object_store, "10.96.0.42", 53390, test_log)
        assert exc_info.value.step == "zone"

    def test_command_failure_stops_sequence(self, object_store, test_log):
        """Test an execution failure is reported for its step and later steps do not run."""
        err = ExecutionError("failed to run radosgw-admin", ["radosgw-admin", "zonegroup", "create"])
        runner = ScriptedRunner(['{"id": "r1"}', err, '{"id": "z1"}'])
        with pytest.raises(TopologyError) as exc_info:
            bootstrap_topology(runner, object_store, "10.96.0.42", 53390, test_log)

        assert not isinstance(exc_info.value, TopologyParseError)
        assert exc_info.value.step == "zonegroup"
        assert exc_info.value.__cause__ is err
        assert len(runner.calls) == 2

    def test_empty_address_is_passed_through(self, topology_runner, object_store, test_log):
        """Test an unknown service address leaves the endpoint host empty."""
        bootstrap_topology(topology_runner, object_store, "", 53390, test_log)
        assert "--endpoints=:53390" in topology_runner.calls[1]
