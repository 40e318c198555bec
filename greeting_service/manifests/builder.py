"""Build the Deployment and Service declarations as plain dicts / YAML."""

from __future__ import annotations

from typing import Any

import yaml

from greeting_service.manifests.schemas import DeploymentSpec


def _metadata(spec: DeploymentSpec) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": spec.name, "labels": dict(spec.labels)}
    if spec.namespace:
        metadata["namespace"] = spec.namespace
    return metadata


def _probe(spec: DeploymentSpec) -> dict[str, Any]:
    return {
        "httpGet": {"path": "/health", "port": spec.container_port},
        "initialDelaySeconds": 2,
        "periodSeconds": 10,
    }


def deployment_manifest(spec: DeploymentSpec) -> dict[str, Any]:
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": _metadata(spec),
        "spec": {
            "replicas": spec.replicas,
            "selector": {"matchLabels": dict(spec.labels)},
            "template": {
                "metadata": {"labels": dict(spec.labels)},
                "spec": {
                    "containers": [
                        {
                            "name": spec.name,
                            "image": spec.image,
                            "ports": [{"containerPort": spec.container_port}],
                            "env": [{"name": "PORT", "value": str(spec.container_port)}],
                            "livenessProbe": _probe(spec),
                            "readinessProbe": _probe(spec),
                        }
                    ]
                },
            },
        },
    }


def service_manifest(spec: DeploymentSpec) -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Service",
        "metadata": _metadata(spec),
        "spec": {
            "type": "LoadBalancer",
            "selector": dict(spec.labels),
            "ports": [
                {
                    "protocol": "TCP",
                    "port": spec.service_port,
                    "targetPort": spec.container_port,
                }
            ],
        },
    }


def scale(spec: DeploymentSpec, replicas: int) -> DeploymentSpec:
    """Return a copy of ``spec`` with a new desired replica count.

    Reapplying the rendered Deployment is the whole scaling operation; the
    orchestrator converges the running pod count.
    """

    return DeploymentSpec.model_validate({**spec.model_dump(), "replicas": replicas})


def render_manifests(spec: DeploymentSpec) -> str:
    """Render Deployment then Service as one multi-document YAML stream."""

    return yaml.safe_dump_all(
        [deployment_manifest(spec), service_manifest(spec)],
        sort_keys=False,
        default_flow_style=False,
    )
