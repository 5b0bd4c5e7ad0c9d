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


"""Realm, zone group, and zone bootstrap through the admin binary."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import NamedTuple, Union

from rgw_manager.config import ObjectStore
from rgw_manager.errors import ExecutionError, TopologyError, TopologyParseError
from rgw_manager.executor import AdminCommandRunner


class TopologyIDs(NamedTuple):
    realm_id: str
    zone_group_id: str
    zone_id: str


# ============================================================================
# Output parsing
# ============================================================================

@dataclass(frozen=True)
class ParsedID:
    value: str


@dataclass(frozen=True)
class ParseFailure:
    """Why admin output did not yield an id.

    Attributes:
        reason: ``malformed``, ``not-an-object``, ``missing-id`` or ``invalid-id``.
        detail: Human-readable explanation.
    """

    reason: str
    detail: str


ParseResult = Union[ParsedID, ParseFailure]


def decode_id(output: str) -> ParseResult:
    """Extract the ``id`` field from a JSON object printed by the admin binary."""
    try:
        data = json.loads(output)
    except ValueError as err:
        return ParseFailure("malformed", f"output is not valid JSON: {err}")
    if not isinstance(data, dict):
        return ParseFailure("not-an-object", f"expected a JSON object, got {type(data).__name__}")
    if "id" not in data:
        return ParseFailure("missing-id", "JSON object has no 'id' field")
    value = data["id"]
    if not isinstance(value, str) or not value:
        return ParseFailure("invalid-id", f"'id' must be a non-empty string, got {value!r}")
    return ParsedID(value)


# ============================================================================
# Bootstrap
# ============================================================================

def _run_step(runner: AdminCommandRunner, step: str, store: ObjectStore, *args: str) -> str:
    """Run one create command and return the parsed id.

    Raises:
        TopologyError: If the command fails.
        TopologyParseError: If the output carries no usable id.
    """
    try:
        output = runner.run(*args)
    except ExecutionError as err:
        raise TopologyError(f"failed to create rgw {step} {store.name}. {err}", step) from err

    parsed = decode_id(output)
    if isinstance(parsed, ParseFailure):
        raise TopologyParseError(
            f"failed to parse {step} id for {store.name} ({parsed.reason}): {parsed.detail}",
            step,
            output,
        )
    return parsed.value


def bootstrap_topology(
    runner: AdminCommandRunner,
    store: ObjectStore,
    address: str,
    port: int,
    log: logging.Logger | logging.LoggerAdapter,
) -> TopologyIDs:
    """Create the realm, its master zone group, and its master zone.

    All three are named after the object store. Each step runs only after the
    previous one returned an id. Re-creation of an existing topology relies on
    the admin binary's own behavior.

    Args:
        runner: Runner bound to the admin binary and the target cluster.
        store: Object store being bootstrapped.
        address: Service address used for the zone group and zone endpoints.
        port: Gateway port used for the endpoints.
        log: Logger scoped to this bootstrap.

    Returns:
        The realm, zone group, and zone ids.

    Raises:
        TopologyError: If a step fails or its output cannot be parsed.
    """
    endpoints = f"--endpoints={address}:{port}"
    realm = f"--rgw-realm={store.name}"
    zonegroup = f"--rgw-zonegroup={store.name}"

    realm_id = _run_step(runner, "realm", store, "realm", "create", realm)
    log.debug("created realm %s (%s)", store.name, realm_id)

    zone_group_id = _run_step(
        runner, "zonegroup", store,
        "zonegroup", "create", "--master", endpoints, zonegroup, realm,
    )
    log.debug("created zonegroup %s (%s)", store.name, zone_group_id)

    zone_id = _run_step(
        runner, "zone", store,
        "zone", "create", "--master", endpoints, f"--rgw-zone={store.name}", zonegroup, realm,
    )

    log.info("RGW: realm=%s, zonegroup=%s, zone=%s", realm_id, zone_group_id, zone_id)
    return TopologyIDs(realm_id, zone_group_id, zone_id)
