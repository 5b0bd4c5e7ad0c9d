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


"""Render subcommands (object-store): print manifests without touching the cluster."""

from __future__ import annotations

from pathlib import Path

import typer
import yaml
from kubernetes import client

from rgw_manager import console
from rgw_manager.config import ObjectStore, resolve_config
from rgw_manager.service import make_service
from rgw_manager.workload import make_deployment

app = typer.Typer(help="Render gateway manifests as YAML.")


def render_manifests(store: ObjectStore, port: int) -> dict[str, str]:
    """Serialize the service and deployment manifests.

    Args:
        store: Object store to render.
        port: Gateway port.

    Returns:
        Mapping of file name to YAML document.
    """
    api = client.ApiClient()
    manifests = {
        "service.yaml": make_service(store, port),
        "deployment.yaml": make_deployment(store, port),
    }
    return {
        file_name: yaml.safe_dump(api.sanitize_for_serialization(obj), default_flow_style=False, sort_keys=False)
        for file_name, obj in manifests.items()
    }


@app.command("object-store")
def object_store(
    name: str | None = typer.Option(None, "--name", help="Object store name (overrides RGW_NAME)"),
    namespace: str | None = typer.Option(None, "--namespace", help="Rook cluster namespace"),
    version: str | None = typer.Option(None, "--version", help="Rook image tag"),
    replicas: int | None = typer.Option(None, "--replicas", min=1, help="Gateway replica count"),
    output_dir: Path | None = typer.Option(None, "--output-dir", help="Write manifests here instead of stdout"),
) -> None:
    """Render the service and deployment the bootstrap would submit."""
    try:
        cfg = resolve_config(name=name, namespace=namespace, version=version, replicas=replicas)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    rendered = render_manifests(ObjectStore.from_config(cfg), cfg.port)
    if output_dir is None:
        typer.echo("---\n".join(rendered.values()), nl=False)
        return

    output_dir.mkdir(parents=True, exist_ok=True)
    for file_name, content in rendered.items():
        (output_dir / file_name).write_text(content)
        console.print(f"[green]  ✓ Wrote {output_dir / file_name}[/green]")
