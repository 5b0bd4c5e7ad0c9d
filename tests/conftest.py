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


"""Shared test fixtures for rgw_manager tests.

This module provides in-memory stand-ins for the external collaborators:
- FakeResourceStore: Kubernetes secrets, services, and deployments
- ScriptedRunner: admin binary returning queued outputs
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from rgw_manager.config import ObjectStore
from rgw_manager.resources import AlreadyExists, Created, Failed

TEST_KEYRING = "[client.radosgw.gateway]\n\tkey = AQBtest==\n"


class FakeResourceStore:
    """In-memory resource store that records every call in order."""

    def __init__(self, events: list[tuple] | None = None) -> None:
        self.events = events if events is not None else []
        self.objects: dict[tuple[str, str, str], Any] = {}
        self.get_secret_error: Exception | None = None
        self.create_errors: dict[str, Exception] = {}
        self.cluster_ip = "10.96.0.42"

    def get_secret(self, name: str, namespace: str):
        self.events.append(("get_secret", name))
        if self.get_secret_error is not None:
            raise self.get_secret_error
        return self.objects.get(("secret", namespace, name))

    def create_secret(self, secret):
        return self._create("secret", secret)

    def create_service(self, service):
        return self._create("service", service)

    def create_deployment(self, deployment):
        return self._create("deployment", deployment)

    def created(self, kind: str) -> list[str]:
        return [name for op, name in self.events if op == f"create_{kind}"]

    def _create(self, kind: str, body):
        meta = body.metadata
        self.events.append((f"create_{kind}", meta.name))
        if kind in self.create_errors:
            return Failed(self.create_errors[kind])
        key = (kind, meta.namespace, meta.name)
        if key in self.objects:
            return AlreadyExists()
        if kind == "service":
            body.spec.cluster_ip = self.cluster_ip
        self.objects[key] = body
        return Created(body)


class ScriptedRunner:
    """Admin command runner that replays queued outputs or raises queued errors."""

    def __init__(self, outputs: list[str | Exception], events: list[tuple] | None = None) -> None:
        self.outputs = list(outputs)
        self.events = events if events is not None else []
        self.calls: list[list[str]] = []

    def run(self, *args: str) -> str:
        self.calls.append(list(args))
        self.events.append(("run", " ".join(args)))
        out = self.outputs.pop(0)
        if isinstance(out, Exception):
            raise out
        return out


@pytest.fixture
def events() -> list[tuple]:
    return []


@pytest.fixture
def object_store() -> ObjectStore:
    return ObjectStore(name="store1", namespace="rook-ceph", version="v1", replicas=2)


@pytest.fixture
def resources(events) -> FakeResourceStore:
    return FakeResourceStore(events)


@pytest.fixture
def topology_runner(events) -> ScriptedRunner:
    return ScriptedRunner(['{"id": "r1"}', '{"id": "zg1"}', '{"id": "z1"}'], events)


@pytest.fixture
def test_log() -> logging.Logger:
    return logging.getLogger("rgw_manager.tests")


@pytest.fixture
def keyring_generator():
    calls: list[str] = []

    def _generate(namespace: str) -> str:
        calls.append(namespace)
        return TEST_KEYRING

    _generate.calls = calls
    return _generate
