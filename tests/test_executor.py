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


"""Unit tests for the admin command runner."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import sh

from rgw_manager.errors import ExecutionError
from rgw_manager.executor import AdminCommandRunner, admin_connection_args

CONNECTION_ARGS = [
    "--cluster=rook-ceph",
    "--conf=/var/lib/rook/rook-ceph/rook-ceph.config",
    "--keyring=/var/lib/rook/rook-ceph/client.admin.keyring",
]


@pytest.fixture
def mock_sh():
    """Replace sh in the executor, keeping its real exception classes."""
    with patch("rgw_manager.executor.sh") as mocked:
        mocked.ErrorReturnCode = sh.ErrorReturnCode
        mocked.CommandNotFound = sh.CommandNotFound
        yield mocked


class TestAdminConnectionArgs:
    """Tests for admin_connection_args."""

    def test_points_at_cluster_config_and_admin_keyring(self):
        """Test the connection arguments derive from config dir and namespace."""
        assert admin_connection_args("/var/lib/rook", "rook-ceph") == CONNECTION_ARGS


class TestAdminCommandRunner:
    """Tests for AdminCommandRunner."""

    def test_command_line_appends_connection_args(self):
        """Test connection arguments go after the subcommand arguments."""
        runner = AdminCommandRunner("/var/lib/rook", "rook-ceph")
        assert runner.command_line("realm", "create", "--rgw-realm=store1") == [
            "radosgw-admin", "realm", "create", "--rgw-realm=store1", *CONNECTION_ARGS,
        ]

    def test_run_returns_combined_output(self, mock_sh):
        """Test run executes the binary with stderr merged into stdout."""
        runner = AdminCommandRunner("/var/lib/rook", "rook-ceph")
        command = mock_sh.Command
        command.return_value.return_value = '{"id": "r1"}\n'
        output = runner.run("realm", "create", "--rgw-realm=store1")

        assert output == '{"id": "r1"}\n'
        command.assert_called_once_with("radosgw-admin")
        command.return_value.assert_called_once_with(
            "realm", "create", "--rgw-realm=store1", *CONNECTION_ARGS, _err_to_out=True,
        )

    def test_run_uses_configured_binary(self, mock_sh):
        """Test a runner bound to another binary executes that binary."""
        runner = AdminCommandRunner("/etc/ceph", "rook", binary="ceph")
        command = mock_sh.Command
        command.return_value.return_value = "ok"
        runner.run("status")

        command.assert_called_once_with("ceph")

    def test_non_zero_exit_raises_execution_error(self, mock_sh):
        """Test a failing command raises ExecutionError with command and output."""
        runner = AdminCommandRunner("/var/lib/rook", "rook-ceph")
        err = sh.ErrorReturnCode_1("radosgw-admin realm create", b"couldn't init storage provider", b"")
        command = mock_sh.Command
        command.return_value.side_effect = err
        with pytest.raises(ExecutionError) as exc_info:
            runner.run("realm", "create", "--rgw-realm=store1")

        assert exc_info.value.command[:3] == ["radosgw-admin", "realm", "create"]
        assert "couldn't init storage provider" in exc_info.value.output
        assert exc_info.value.__cause__ is err
        assert "exit 1" in str(exc_info.value)

    def test_missing_binary_raises_execution_error(self, mock_sh):
        """Test a binary that cannot be found raises ExecutionError."""
        runner = AdminCommandRunner("/var/lib/rook", "rook-ceph")
        command = mock_sh.Command
        command.side_effect = sh.CommandNotFound("radosgw-admin")
        with pytest.raises(ExecutionError, match="failed to launch radosgw-admin"):
            runner.run("realm", "list")
