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


"""Constants, dependency loading, and dep_value helper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_dependencies() -> dict:
    """Load image and binary defaults from dependencies.yaml.

    Returns:
        Parsed YAML content as a nested dictionary.
    """
    deps_file = Path(__file__).resolve().parent / "dependencies.yaml"
    with open(deps_file) as f:
        return yaml.safe_load(f)


DEPENDENCIES = load_dependencies()


def dep_value(*keys: str, default: Any = None) -> Any:
    """Safely traverse the DEPENDENCIES dict by key path.

    Args:
        *keys: Sequence of dictionary keys to traverse.
        default: Value to return if any key is missing.

    Returns:
        The value at the nested key path, or *default* if not found.
    """
    node = DEPENDENCIES
    for key in keys:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


# -- Naming --
APP_NAME = "rook-ceph-rgw"
KEYRING_KEY = "keyring"
ROOK_SECRET_TYPE = "kubernetes.io/rook"

# -- Gateway process --
RGW_PORT = 53390
RGW_DNS_NAME = "rook-ceph-rgw"
RGW_USERNAME = "client.radosgw.gateway"
RGW_ACCESS = ("osd", "allow rwx", "mon", "allow rw")

# -- Admin connection --
ADMIN_USERNAME = "client.admin"
DEFAULT_ADMIN_BINARY = dep_value("ceph", "admin_binary", default="radosgw-admin")
DEFAULT_CEPH_BINARY = dep_value("ceph", "auth_binary", default="ceph")

# -- Image --
ROOK_IMAGE = dep_value("rook", "image", default="rook/rook")
DEFAULT_ROOK_VERSION = dep_value("rook", "version", default="latest")

# -- Labels --
LABEL_APP = "app"
LABEL_CLUSTER = "rook_cluster"
LABEL_OBJECT_STORE = "rook_object_store"

# -- Volumes --
DATA_DIR = "/var/lib/rook"
DATA_DIR_VOLUME = "rook-data"
CONFIG_OVERRIDE_NAME = "rook-config-override"
CONFIG_OVERRIDE_DIR = "/etc/rook"
CONFIG_OVERRIDE_KEY = "config"

# -- Environment variables read by the gateway process --
ENV_RGW_KEYRING = "ROOK_RGW_KEYRING"
ENV_PRIVATE_IP = "ROOK_PRIVATE_IP"
ENV_PUBLIC_IP = "ROOK_PUBLIC_IP"
ENV_CLUSTER_NAME = "ROOK_CLUSTER_NAME"
ENV_MON_ENDPOINTS = "ROOK_MON_ENDPOINTS"
ENV_MON_SECRET = "ROOK_MON_SECRET"
ENV_ADMIN_SECRET = "ROOK_ADMIN_SECRET"
ENV_CONFIG_OVERRIDE = "ROOK_CEPH_CONFIG_OVERRIDE"

# -- Monitor component references --
MON_ENDPOINTS_CONFIGMAP = "rook-ceph-mon-endpoints"
MON_ENDPOINTS_KEY = "data"
MON_SECRET_NAME = "rook-ceph-mon"
MON_SECRET_KEY = "mon-secret"
ADMIN_SECRET_KEY = "admin-secret"

# -- Defaults --
DEFAULT_NAMESPACE = "rook"
DEFAULT_REPLICAS = 2
