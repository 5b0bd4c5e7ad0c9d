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


"""Configuration classes and the object store descriptor."""

from __future__ import annotations

from dataclasses import dataclass, field

from kubernetes import client
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.panel import Panel

from rgw_manager import console
from rgw_manager.constants import (
    APP_NAME,
    DATA_DIR,
    DEFAULT_ADMIN_BINARY,
    DEFAULT_CEPH_BINARY,
    DEFAULT_NAMESPACE,
    DEFAULT_REPLICAS,
    DEFAULT_ROOK_VERSION,
    LABEL_APP,
    LABEL_CLUSTER,
    LABEL_OBJECT_STORE,
    RGW_PORT,
)

NAME_PATTERN = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$"


# ============================================================================
# Configuration classes
# ============================================================================

class ObjectStoreConfig(BaseSettings):
    """Object store gateway configuration, auto-loaded from RGW_* env vars.

    Attributes:
        name: Logical name of the object store; also used for realm, zone group and zone.
        namespace: Kubernetes namespace of the Rook cluster.
        version: Rook image tag to run.
        replicas: Number of gateway pods.
        config_dir: Directory holding the cluster config and admin keyring.
        port: Port the gateway listens on and the service exposes.
        admin_binary: Binary used for realm, zone group and zone commands.
        ceph_binary: Binary used to generate the gateway keyring.
    """

    model_config = SettingsConfigDict(env_prefix="RGW_", extra="ignore")

    name: str | None = Field(default=None, pattern=NAME_PATTERN)
    namespace: str = Field(default=DEFAULT_NAMESPACE, pattern=NAME_PATTERN)
    version: str = DEFAULT_ROOK_VERSION
    replicas: int = Field(default=DEFAULT_REPLICAS, ge=1, le=100)
    config_dir: str = DATA_DIR
    port: int = Field(default=RGW_PORT, ge=1, le=65535)
    admin_binary: str = DEFAULT_ADMIN_BINARY
    ceph_binary: str = DEFAULT_CEPH_BINARY


# ============================================================================
# Object store descriptor
# ============================================================================

@dataclass(frozen=True)
class Placement:
    """Scheduling constraints applied to the gateway pods.

    Attributes:
        node_affinity: Node affinity rules, or None.
        pod_affinity: Pod affinity rules, or None.
        pod_anti_affinity: Pod anti-affinity rules, or None.
        tolerations: Taints the gateway pods tolerate.
    """

    node_affinity: client.V1NodeAffinity | None = None
    pod_affinity: client.V1PodAffinity | None = None
    pod_anti_affinity: client.V1PodAntiAffinity | None = None
    tolerations: tuple[client.V1Toleration, ...] = ()

    def apply_to_pod_spec(self, pod_spec: client.V1PodSpec) -> None:
        """Set affinity and tolerations on *pod_spec* in place."""
        if self.node_affinity or self.pod_affinity or self.pod_anti_affinity:
            pod_spec.affinity = client.V1Affinity(
                node_affinity=self.node_affinity,
                pod_affinity=self.pod_affinity,
                pod_anti_affinity=self.pod_anti_affinity,
            )
        if self.tolerations:
            pod_spec.tolerations = list(self.tolerations)


def instance_name(name: str) -> str:
    """Return the Kubernetes resource name for the object store *name*."""
    return f"{APP_NAME}-{name}"


@dataclass(frozen=True)
class ObjectStore:
    """One object store gateway to bootstrap.

    Attributes:
        name: Logical object store name.
        namespace: Kubernetes namespace of the Rook cluster.
        version: Rook image tag.
        replicas: Number of gateway pods.
        placement: Scheduling constraints for the gateway pods.
        config_dir: Directory holding the cluster config and admin keyring.
    """

    name: str
    namespace: str
    version: str
    replicas: int = DEFAULT_REPLICAS
    placement: Placement = field(default_factory=Placement)
    config_dir: str = DATA_DIR

    @property
    def instance_name(self) -> str:
        return instance_name(self.name)

    @property
    def labels(self) -> dict[str, str]:
        return {
            LABEL_APP: APP_NAME,
            LABEL_CLUSTER: self.namespace,
            LABEL_OBJECT_STORE: self.name,
        }

    @classmethod
    def from_config(cls, cfg: ObjectStoreConfig, placement: Placement | None = None) -> ObjectStore:
        """Build a descriptor from resolved configuration."""
        return cls(
            name=cfg.name,
            namespace=cfg.namespace,
            version=cfg.version,
            replicas=cfg.replicas,
            placement=placement or Placement(),
            config_dir=cfg.config_dir,
        )


# ============================================================================
# Resolution and display
# ============================================================================

def resolve_config(
    name: str | None = None,
    namespace: str | None = None,
    version: str | None = None,
    replicas: int | None = None,
    config_dir: str | None = None,
) -> ObjectStoreConfig:
    """Merge CLI overrides, environment variables, and defaults.

    Resolution priority: CLI arguments > RGW_* environment variables > defaults.

    Args:
        name: Object store name override, or None.
        namespace: Namespace override, or None.
        version: Rook image tag override, or None.
        replicas: Gateway replica count override, or None.
        config_dir: Config directory override, or None.

    Returns:
        The resolved configuration.

    Raises:
        ValueError: If no object store name was given by flag or environment.
    """
    cfg = ObjectStoreConfig()

    overrides: dict = {}
    if name is not None:
        overrides["name"] = name
    if namespace is not None:
        overrides["namespace"] = namespace
    if version is not None:
        overrides["version"] = version
    if replicas is not None:
        overrides["replicas"] = replicas
    if config_dir is not None:
        overrides["config_dir"] = config_dir
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    if not cfg.name:
        raise ValueError("An object store name is required (--name or RGW_NAME)")
    # model_copy skips validation
    return ObjectStoreConfig.model_validate(cfg.model_dump())


def display_config(cfg: ObjectStoreConfig) -> None:
    """Print the resolved configuration.

    Args:
        cfg: Resolved object store configuration.
    """
    console.print(Panel.fit("Configuration", style="bold blue"))
    console.print("[yellow]Object store:[/yellow]")
    console.print(f"  name        : {cfg.name}")
    console.print(f"  namespace   : {cfg.namespace}")
    console.print(f"  instance    : {instance_name(cfg.name)}")
    console.print(f"  version     : {cfg.version}")
    console.print(f"  replicas    : {cfg.replicas}")
    console.print(f"  port        : {cfg.port}")
    console.print("[yellow]Admin tools:[/yellow]")
    console.print(f"  config_dir  : {cfg.config_dir}")
    console.print(f"  admin_binary: {cfg.admin_binary}")
    console.print(f"  ceph_binary : {cfg.ceph_binary}")
