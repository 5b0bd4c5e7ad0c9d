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


"""Create subcommands (object-store)."""

from __future__ import annotations

import typer
from rich.panel import Panel

from rgw_manager import console
from rgw_manager.config import display_config, resolve_config
from rgw_manager.orchestrator import start
from rgw_manager.resources import load_kube_client

app = typer.Typer(help="Create object store resources.")


@app.command("object-store")
def object_store(
    name: str | None = typer.Option(None, "--name", help="Object store name (overrides RGW_NAME)"),
    namespace: str | None = typer.Option(None, "--namespace", help="Rook cluster namespace"),
    version: str | None = typer.Option(None, "--version", help="Rook image tag"),
    replicas: int | None = typer.Option(None, "--replicas", min=1, help="Gateway replica count"),
    config_dir: str | None = typer.Option(None, "--config-dir", help="Ceph config directory"),
) -> None:
    """Create the keyring, service, realm/zone group/zone, and deployment."""
    try:
        cfg = resolve_config(
            name=name,
            namespace=namespace,
            version=version,
            replicas=replicas,
            config_dir=config_dir,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    display_config(cfg)
    console.print(Panel.fit(f"Bootstrapping object store '{cfg.name}'", style="bold blue"))
    result = start(cfg, load_kube_client())

    console.print(f"[green]✅ Object store '{cfg.name}' scheduled[/green]")
    console.print(f"  address     : {result.address or '(existing service)'}")
    console.print(f"  realm       : {result.topology.realm_id}")
    console.print(f"  zonegroup   : {result.topology.zone_group_id}")
    console.print(f"  zone        : {result.topology.zone_id}")
