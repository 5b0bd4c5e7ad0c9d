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


"""Kubernetes resource store with explicit create-if-absent results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from rgw_manager import logger

T = TypeVar("T")

HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409


# ============================================================================
# Create results
# ============================================================================

@dataclass(frozen=True)
class Created(Generic[T]):
    """The object was created; *value* is what the API server returned."""

    value: T


@dataclass(frozen=True)
class AlreadyExists:
    """An object with the same name was already present."""


@dataclass(frozen=True)
class Failed:
    """The create call failed for any other reason."""

    error: Exception


CreateResult = Union[Created[T], AlreadyExists, Failed]


# ============================================================================
# Client loading
# ============================================================================

def load_kube_client() -> client.ApiClient:
    """Load in-cluster config, falling back to the local kubeconfig.

    Returns:
        A configured Kubernetes API client.

    Raises:
        RuntimeError: If neither configuration can be loaded.
    """
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration")
    except config.ConfigException:
        try:
            config.load_kube_config()
            logger.info("Loaded kubeconfig")
        except config.ConfigException as e:
            raise RuntimeError("Cannot load Kubernetes configuration") from e
    return client.ApiClient()


# ============================================================================
# Resource store
# ============================================================================

class ResourceStore:
    """Secrets, services, and deployments keyed by namespace and name."""

    def __init__(self, api_client: client.ApiClient | None = None) -> None:
        self.core_v1 = client.CoreV1Api(api_client)
        self.apps_v1 = client.AppsV1Api(api_client)

    def get_secret(self, name: str, namespace: str) -> client.V1Secret | None:
        """Read a secret, returning None when it does not exist.

        Raises:
            ApiException: For any failure other than not found.
        """
        try:
            return self.core_v1.read_namespaced_secret(name=name, namespace=namespace)
        except ApiException as e:
            if e.status == HTTP_NOT_FOUND:
                return None
            raise

    def create_secret(self, secret: client.V1Secret) -> CreateResult[client.V1Secret]:
        return _create(self.core_v1.create_namespaced_secret, secret)

    def create_service(self, service: client.V1Service) -> CreateResult[client.V1Service]:
        return _create(self.core_v1.create_namespaced_service, service)

    def create_deployment(self, deployment: client.V1Deployment) -> CreateResult[client.V1Deployment]:
        return _create(self.apps_v1.create_namespaced_deployment, deployment)


def _create(create_fn: Any, body: Any) -> CreateResult:
    """Call a namespaced create and classify the outcome."""
    meta = body.metadata
    kind = type(body).__name__.removeprefix("V1")
    try:
        created = create_fn(namespace=meta.namespace, body=body)
    except ApiException as e:
        if e.status == HTTP_CONFLICT:
            logger.debug("%s %s/%s already exists", kind, meta.namespace, meta.name)
            return AlreadyExists()
        return Failed(e)
    except HTTPError as e:
        return Failed(e)
    logger.debug("Created %s %s/%s", kind, meta.namespace, meta.name)
    return Created(created)
