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


"""Admin binary execution with the cluster connection arguments appended."""

from __future__ import annotations

import os

import sh

from rgw_manager.constants import ADMIN_USERNAME, DEFAULT_ADMIN_BINARY
from rgw_manager.errors import ExecutionError


def admin_connection_args(config_dir: str, namespace: str) -> list[str]:
    """Build the arguments that point an admin binary at the cluster.

    Args:
        config_dir: Directory holding per-cluster config and keyrings.
        namespace: Cluster namespace, which is also the Ceph cluster name.

    Returns:
        List of ``--cluster``, ``--conf`` and ``--keyring`` arguments.
    """
    cluster_dir = os.path.join(config_dir, namespace)
    return [
        f"--cluster={namespace}",
        f"--conf={os.path.join(cluster_dir, f'{namespace}.config')}",
        f"--keyring={os.path.join(cluster_dir, f'{ADMIN_USERNAME}.keyring')}",
    ]


class AdminCommandRunner:
    """Runs one admin binary against one cluster.

    Output is returned as opaque text; retries are left to the caller.
    """

    def __init__(self, config_dir: str, namespace: str, binary: str = DEFAULT_ADMIN_BINARY) -> None:
        self.config_dir = config_dir
        self.namespace = namespace
        self.binary = binary

    def command_line(self, *args: str) -> list[str]:
        """Return the full command line that ``run`` would execute."""
        return [self.binary, *args, *admin_connection_args(self.config_dir, self.namespace)]

    def run(self, *args: str) -> str:
        """Execute the binary and return its combined stdout/stderr.

        Args:
            *args: Subcommand and its arguments (e.g. ``"realm", "create"``).

        Returns:
            Combined output of the process.

        Raises:
            ExecutionError: If the binary cannot be launched or exits non-zero.
        """
        cmd = self.command_line(*args)
        try:
            result = sh.Command(self.binary)(*cmd[1:], _err_to_out=True)
        except sh.ErrorReturnCode as err:
            output = err.stdout.decode(errors="replace") if err.stdout else ""
            raise ExecutionError(
                f"failed to run {self.binary} (exit {getattr(err, 'exit_code', '?')}): {' '.join(cmd)}",
                cmd,
                output,
            ) from err
        except (sh.CommandNotFound, OSError) as err:
            raise ExecutionError(f"failed to launch {self.binary}: {err}", cmd) from err
        return str(result)
