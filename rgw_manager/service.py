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


"""Cluster-internal service in front of the gateway pods."""

from __future__ import annotations

import logging

from kubernetes import client

from rgw_manager.config import ObjectStore
from rgw_manager.constants import RGW_PORT
from rgw_manager.errors import ProvisioningError
from rgw_manager.resources import AlreadyExists, Failed, ResourceStore


def make_service(store: ObjectStore, port: int = RGW_PORT) -> client.V1Service:
    """Build a service selecting the gateway pods on a single TCP port.

    Args:
        store: Object store being bootstrapped.
        port: Port exposed by the service and targeted on the pods.

    Returns:
        The service manifest.
    """
    labels = store.labels
    return client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=client.V1ObjectMeta(
            name=store.instance_name,
            namespace=store.namespace,
            labels=labels,
        ),
        spec=client.V1ServiceSpec(
            ports=[
                client.V1ServicePort(
                    name=store.instance_name,
                    port=port,
                    target_port=port,
                    protocol="TCP",
                )
            ],
            selector=labels,
        ),
    )


def ensure_service(
    resources: ResourceStore,
    store: ObjectStore,
    port: int,
    log: logging.Logger | logging.LoggerAdapter,
) -> str:
    """Create the gateway service.

    Args:
        resources: Kubernetes resource store.
        store: Object store being bootstrapped.
        port: Gateway port.
        log: Logger scoped to this bootstrap.

    Returns:
        The service cluster IP, or an empty string if the service already existed.

    Raises:
        ProvisioningError: If the service cannot be created.
    """
    result = resources.create_service(make_service(store, port))
    if isinstance(result, Failed):
        raise ProvisioningError(f"failed to create rgw service. {result.error}") from result.error
    if isinstance(result, AlreadyExists):
        log.info("RGW service already running")
        return ""

    cluster_ip = result.value.spec.cluster_ip or ""
    log.info("RGW service running at %s:%d", cluster_ip, port)
    return cluster_ip
