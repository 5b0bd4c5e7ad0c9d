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


"""Errors raised while bootstrapping an object store gateway."""

from __future__ import annotations


class BootstrapError(RuntimeError):
    """Base class for every failure surfaced by the bootstrap."""


class ProvisioningError(BootstrapError):
    """A keyring secret or service could not be read or created."""


class ExecutionError(BootstrapError):
    """An admin binary failed to launch or exited non-zero.

    Attributes:
        command: The attempted command line, binary first.
        output: Combined stdout/stderr captured before the failure, if any.
    """

    def __init__(self, message: str, command: list[str], output: str = "") -> None:
        super().__init__(message)
        self.command = command
        self.output = output


class TopologyError(BootstrapError):
    """A realm, zone group, or zone step did not complete.

    Attributes:
        step: The topology step that failed (``realm``, ``zonegroup``, ``zone``).
    """

    def __init__(self, message: str, step: str) -> None:
        super().__init__(message)
        self.step = step


class TopologyParseError(TopologyError):
    """Admin output did not carry a usable ``id``.

    Attributes:
        output: The raw admin output that failed to parse.
    """

    def __init__(self, message: str, step: str, output: str) -> None:
        super().__init__(message, step)
        self.output = output


class SchedulingError(BootstrapError):
    """The gateway deployment could not be submitted."""
