#!/usr/bin/env python3
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


"""
cli.py - CLI for bootstrapping Ceph object store gateways on Rook clusters.

Subcommands:
    create     Bootstrap resources (object-store)
    render     Print manifests without contacting the cluster (object-store)

Examples:
    # Bootstrap object store "store1" in namespace "rook-ceph"
    ./cli.py create object-store --name store1 --namespace rook-ceph

    # Same, configured from the environment
    RGW_NAME=store1 RGW_NAMESPACE=rook-ceph ./cli.py create object-store

    # Inspect the service and deployment that would be submitted
    ./cli.py render object-store --name store1 --output-dir ./manifests

For detailed usage information, run: ./cli.py --help
"""

from __future__ import annotations

import logging
import sys

import typer

from rgw_manager import console
from rgw_manager.commands import create_cmd, render_cmd

app = typer.Typer(
    help="Bootstrap Ceph object store gateways on Rook clusters.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.add_typer(create_cmd.app, name="create")
app.add_typer(render_cmd.app, name="render")


def main() -> None:
    try:
        app()
    except Exception as e:
        console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
