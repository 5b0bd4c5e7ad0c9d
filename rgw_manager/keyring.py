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


"""Gateway keyring generation and the keyring secret."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from rgw_manager.config import ObjectStore
from rgw_manager.constants import KEYRING_KEY, RGW_ACCESS, RGW_USERNAME, ROOK_SECRET_TYPE
from rgw_manager.errors import ProvisioningError
from rgw_manager.executor import AdminCommandRunner
from rgw_manager.resources import AlreadyExists, Created, Failed, ResourceStore

KEYRING_TEMPLATE = """[{username}]
	key = {key}
	caps mon = "{mon_caps}"
	caps osd = "{osd_caps}"
"""

KeyringGenerator = Callable[[str], str]


def generate_keyring(runner: AdminCommandRunner) -> str:
    """Get or create the gateway auth key and render it as a keyring.

    Args:
        runner: Runner bound to the ``ceph`` binary and the target cluster.

    Returns:
        Keyring file content for the gateway user.

    Raises:
        ExecutionError: If the ``ceph auth`` command fails.
        ProvisioningError: If the command output carries no key.
    """
    output = runner.run("auth", "get-or-create-key", RGW_USERNAME, *RGW_ACCESS, "--format", "json")
    try:
        key = json.loads(output)["key"]
    except (ValueError, KeyError, TypeError) as err:
        raise ProvisioningError(f"failed to parse key for {RGW_USERNAME}: {output[:200]!r}") from err
    if not isinstance(key, str) or not key:
        raise ProvisioningError(f"empty key returned for {RGW_USERNAME}")

    caps = dict(zip(RGW_ACCESS[::2], RGW_ACCESS[1::2]))
    return KEYRING_TEMPLATE.format(username=RGW_USERNAME, key=key, mon_caps=caps["mon"], osd_caps=caps["osd"])


def make_keyring_secret(store: ObjectStore, keyring: str) -> client.V1Secret:
    """Build the secret holding the gateway keyring under a single key."""
    return client.V1Secret(
        metadata=client.V1ObjectMeta(name=store.instance_name, namespace=store.namespace),
        string_data={KEYRING_KEY: keyring},
        type=ROOK_SECRET_TYPE,
    )


def ensure_keyring(
    resources: ResourceStore,
    store: ObjectStore,
    generate: KeyringGenerator,
    log: logging.Logger | logging.LoggerAdapter,
) -> None:
    """Create the keyring secret unless it already exists.

    Args:
        resources: Kubernetes resource store.
        store: Object store being bootstrapped.
        generate: Produces keyring text for a namespace.
        log: Logger scoped to this bootstrap.

    Raises:
        ProvisioningError: If the secret cannot be read, generated, or saved.
    """
    try:
        existing = resources.get_secret(store.instance_name, store.namespace)
    except (ApiException, HTTPError) as err:
        raise ProvisioningError(f"failed to get rgw secrets. {err}") from err
    if existing is not None:
        log.info("the rgw keyring was already generated")
        return

    log.info("generating rgw keyring")
    try:
        keyring = generate(store.namespace)
    except ProvisioningError:
        raise
    except Exception as err:
        raise ProvisioningError(f"failed to create keyring. {err}") from err

    result = resources.create_secret(make_keyring_secret(store, keyring))
    if isinstance(result, Failed):
        raise ProvisioningError(f"failed to save rgw secrets. {result.error}") from result.error
    if isinstance(result, AlreadyExists):
        log.info("the rgw keyring was saved by a concurrent bootstrap")
    elif isinstance(result, Created):
        log.info("saved rgw keyring secret %s", store.instance_name)
