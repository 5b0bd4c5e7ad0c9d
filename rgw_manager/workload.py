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


"""Gateway deployment manifest and submission."""

from __future__ import annotations

import logging

from kubernetes import client

from rgw_manager.config import ObjectStore
from rgw_manager.constants import (
    ADMIN_SECRET_KEY,
    APP_NAME,
    CONFIG_OVERRIDE_DIR,
    CONFIG_OVERRIDE_KEY,
    CONFIG_OVERRIDE_NAME,
    DATA_DIR,
    DATA_DIR_VOLUME,
    ENV_ADMIN_SECRET,
    ENV_CLUSTER_NAME,
    ENV_CONFIG_OVERRIDE,
    ENV_MON_ENDPOINTS,
    ENV_MON_SECRET,
    ENV_PRIVATE_IP,
    ENV_PUBLIC_IP,
    ENV_RGW_KEYRING,
    KEYRING_KEY,
    MON_ENDPOINTS_CONFIGMAP,
    MON_ENDPOINTS_KEY,
    MON_SECRET_KEY,
    MON_SECRET_NAME,
    RGW_DNS_NAME,
    RGW_PORT,
    ROOK_IMAGE,
)
from rgw_manager.errors import SchedulingError
from rgw_manager.resources import AlreadyExists, Failed, ResourceStore


def rook_image(version: str) -> str:
    return f"{ROOK_IMAGE}:{version}"


# ============================================================================
# Environment helpers
# ============================================================================

def _secret_env(name: str, secret: str, key: str) -> client.V1EnvVar:
    return client.V1EnvVar(
        name=name,
        value_from=client.V1EnvVarSource(
            secret_key_ref=client.V1SecretKeySelector(name=secret, key=key),
        ),
    )


def _pod_ip_env(name: str) -> client.V1EnvVar:
    return client.V1EnvVar(
        name=name,
        value_from=client.V1EnvVarSource(
            field_ref=client.V1ObjectFieldSelector(field_path="status.podIP"),
        ),
    )


def _mon_endpoints_env() -> client.V1EnvVar:
    return client.V1EnvVar(
        name=ENV_MON_ENDPOINTS,
        value_from=client.V1EnvVarSource(
            config_map_key_ref=client.V1ConfigMapKeySelector(name=MON_ENDPOINTS_CONFIGMAP, key=MON_ENDPOINTS_KEY),
        ),
    )


def gateway_env(store: ObjectStore) -> list[client.V1EnvVar]:
    """Environment the gateway process reads at startup.

    The keyring is passed by secret reference, never by value.
    """
    return [
        _secret_env(ENV_RGW_KEYRING, store.instance_name, KEYRING_KEY),
        _pod_ip_env(ENV_PRIVATE_IP),
        _pod_ip_env(ENV_PUBLIC_IP),
        client.V1EnvVar(name=ENV_CLUSTER_NAME, value=store.namespace),
        _mon_endpoints_env(),
        _secret_env(ENV_MON_SECRET, MON_SECRET_NAME, MON_SECRET_KEY),
        _secret_env(ENV_ADMIN_SECRET, MON_SECRET_NAME, ADMIN_SECRET_KEY),
        client.V1EnvVar(name=ENV_CONFIG_OVERRIDE, value=f"{CONFIG_OVERRIDE_DIR}/{CONFIG_OVERRIDE_KEY}"),
    ]


# ============================================================================
# Manifests
# ============================================================================

def rgw_container(store: ObjectStore, port: int = RGW_PORT) -> client.V1Container:
    return client.V1Container(
        name=store.instance_name,
        image=rook_image(store.version),
        args=[
            "rgw",
            f"--config-dir={DATA_DIR}",
            f"--rgw-name={store.name}",
            f"--rgw-port={port}",
            f"--rgw-host={RGW_DNS_NAME}",
        ],
        volume_mounts=[
            client.V1VolumeMount(name=DATA_DIR_VOLUME, mount_path=DATA_DIR),
            client.V1VolumeMount(name=CONFIG_OVERRIDE_NAME, mount_path=CONFIG_OVERRIDE_DIR),
        ],
        env=gateway_env(store),
    )


def make_deployment(store: ObjectStore, port: int = RGW_PORT) -> client.V1Deployment:
    """Build the gateway deployment.

    Args:
        store: Object store being bootstrapped.
        port: Gateway port passed to the process.

    Returns:
        The deployment manifest with the placement applied to its pod spec.
    """
    pod_spec = client.V1PodSpec(
        containers=[rgw_container(store, port)],
        restart_policy="Always",
        volumes=[
            client.V1Volume(name=DATA_DIR_VOLUME, empty_dir=client.V1EmptyDirVolumeSource()),
            client.V1Volume(
                name=CONFIG_OVERRIDE_NAME,
                config_map=client.V1ConfigMapVolumeSource(
                    name=CONFIG_OVERRIDE_NAME,
                    items=[client.V1KeyToPath(key=CONFIG_OVERRIDE_KEY, path=CONFIG_OVERRIDE_KEY)],
                ),
            ),
        ],
    )
    store.placement.apply_to_pod_spec(pod_spec)

    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(name=store.instance_name, namespace=store.namespace),
        spec=client.V1DeploymentSpec(
            replicas=store.replicas,
            selector=client.V1LabelSelector(match_labels=store.labels),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(name=APP_NAME, labels=store.labels, annotations={}),
                spec=pod_spec,
            ),
        ),
    )


def ensure_workload(
    resources: ResourceStore,
    store: ObjectStore,
    log: logging.Logger | logging.LoggerAdapter,
    port: int = RGW_PORT,
) -> None:
    """Submit the gateway deployment; an existing one counts as success.

    Raises:
        SchedulingError: If the deployment cannot be created.
    """
    result = resources.create_deployment(make_deployment(store, port))
    if isinstance(result, Failed):
        raise SchedulingError(f"failed to create rgw deployment. {result.error}") from result.error
    if isinstance(result, AlreadyExists):
        log.info("rgw deployment already exists")
    else:
        log.info("rgw deployment started")
