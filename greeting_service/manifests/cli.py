from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from greeting_service.manifests.builder import render_manifests
from greeting_service.manifests.schemas import DeploymentSpec


@click.command()
@click.option("--image", required=True, help="Container image reference, e.g. <registry>/hello-world:latest")
@click.option("--replicas", "-r", type=int, default=2, show_default=True, help="Desired replica count")
@click.option("--name", default="hello-world", show_default=True, help="Resource name and app label")
@click.option("--namespace", "-n", default=None, help="Target namespace")
@click.option("--container-port", type=int, default=3000, show_default=True)
@click.option("--service-port", type=int, default=80, show_default=True)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to this file instead of stdout",
)
def main(
    image: str,
    replicas: int,
    name: str,
    namespace: str | None,
    container_port: int,
    service_port: int,
    output: Path | None,
) -> None:
    """Render the Deployment and Service manifests for `kubectl apply -f`.

    Scaling is done by re-rendering with a new --replicas and reapplying.

    Example:
        greeting-service-manifests --image hello-world:latest --replicas 5 | kubectl apply -f -
    """
    try:
        spec = DeploymentSpec(
            name=name,
            image=image,
            replicas=replicas,
            namespace=namespace,
            container_port=container_port,
            service_port=service_port,
        )
    except ValidationError as exc:
        raise click.BadParameter(str(exc)) from exc

    rendered = render_manifests(spec)
    if output is None:
        click.echo(rendered, nl=False)
    else:
        output.write_text(rendered, encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
