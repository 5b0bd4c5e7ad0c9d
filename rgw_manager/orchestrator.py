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


"""Orchestration of the gateway bootstrap: keyring, service, topology, deployment."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from kubernetes import client

from rgw_manager import logger
from rgw_manager.config import ObjectStore, ObjectStoreConfig, Placement
from rgw_manager.constants import RGW_PORT
from rgw_manager.executor import AdminCommandRunner
from rgw_manager.keyring import KeyringGenerator, ensure_keyring, generate_keyring
from rgw_manager.resources import ResourceStore
from rgw_manager.service import ensure_service
from rgw_manager.topology import TopologyIDs, bootstrap_topology
from rgw_manager.workload import ensure_workload

T = TypeVar("T")


class BootstrapState(str, Enum):
    INIT = "init"
    CREDENTIALS_READY = "credentials-ready"
    SERVICE_READY = "service-ready"
    TOPOLOGY_READY = "topology-ready"
    WORKLOAD_SCHEDULED = "workload-scheduled"
    FAILED = "failed"


@dataclass(frozen=True)
class BootstrapResult:
    """What one successful bootstrap produced.

    Attributes:
        address: Service cluster IP, or empty if the service already existed.
        topology: Realm, zone group, and zone ids.
    """

    address: str
    topology: TopologyIDs


class _StoreAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        return f"[{self.extra['object_store']}] {msg}", kwargs


def bootstrap_logger(store: ObjectStore, base: logging.Logger = logger) -> logging.LoggerAdapter:
    """Return a logger that tags every message with the object store."""
    return _StoreAdapter(base, {"object_store": f"{store.namespace}/{store.name}"})


# ============================================================================
# Orchestrator
# ============================================================================

class Orchestrator:
    """Runs one bootstrap of one object store gateway.

    Steps run strictly in order and the first failure stops the run. Nothing
    created before a failure is rolled back; the next run picks up from the
    resources that already exist.
    """

    def __init__(
        self,
        store: ObjectStore,
        resources: ResourceStore,
        runner: AdminCommandRunner,
        generate: KeyringGenerator,
        log: logging.Logger | logging.LoggerAdapter | None = None,
        port: int = RGW_PORT,
    ) -> None:
        self.store = store
        self.resources = resources
        self.runner = runner
        self.generate = generate
        self.log = log if log is not None else bootstrap_logger(store)
        self.port = port
        self.state = BootstrapState.INIT
        self.history: list[BootstrapState] = [BootstrapState.INIT]

    def _transition(self, state: BootstrapState) -> None:
        self.log.debug("%s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _step(self, done: BootstrapState, fn: Callable[[], T]) -> T:
        try:
            value = fn()
        except Exception as err:
            self.log.error("bootstrap failed after %s: %s", self.state.value, err)
            self._transition(BootstrapState.FAILED)
            raise
        self._transition(done)
        return value

    def start(self) -> BootstrapResult:
        """Bootstrap the gateway.

        Returns:
            The service address and topology ids.

        Raises:
            BootstrapError: The first step failure, with the run left in ``FAILED``.
        """
        if self.state is not BootstrapState.INIT:
            raise RuntimeError(f"bootstrap already ran (state {self.state.value})")
        self.log.info("start running rgw")

        self._step(
            BootstrapState.CREDENTIALS_READY,
            lambda: ensure_keyring(self.resources, self.store, self.generate, self.log),
        )
        address = self._step(
            BootstrapState.SERVICE_READY,
            lambda: ensure_service(self.resources, self.store, self.port, self.log),
        )
        if not address:
            # TODO: look the existing service up by name once callers confirm they want its IP here.
            self.log.warning("service address unknown on this run; topology endpoints use an empty host")
        topology = self._step(
            BootstrapState.TOPOLOGY_READY,
            lambda: bootstrap_topology(self.runner, self.store, address, self.port, self.log),
        )
        self._step(
            BootstrapState.WORKLOAD_SCHEDULED,
            lambda: ensure_workload(self.resources, self.store, self.log, self.port),
        )
        return BootstrapResult(address=address, topology=topology)


def start(
    cfg: ObjectStoreConfig,
    api_client: client.ApiClient | None = None,
    placement: Placement | None = None,
) -> BootstrapResult:
    """Bootstrap the gateway described by *cfg*.

    Args:
        cfg: Resolved object store configuration.
        api_client: Kubernetes API client, or None for the default configuration.
        placement: Scheduling constraints, or None for none.

    Returns:
        The service address and topology ids.

    Raises:
        BootstrapError: If any step fails.
    """
    store = ObjectStore.from_config(cfg, placement)
    runner = AdminCommandRunner(store.config_dir, store.namespace, cfg.admin_binary)

    def _generate(namespace: str) -> str:
        return generate_keyring(AdminCommandRunner(store.config_dir, namespace, cfg.ceph_binary))

    orchestrator = Orchestrator(store, ResourceStore(api_client), runner, _generate, port=cfg.port)
    return orchestrator.start()
