from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from greeting_service.manifests.builder import (
    deployment_manifest,
    render_manifests,
    scale,
    service_manifest,
)
from greeting_service.manifests.schemas import DeploymentSpec

REPO_ROOT = Path(__file__).resolve().parents[2]


def _spec(**kwargs) -> DeploymentSpec:
    return DeploymentSpec(image="hello-world-eks:latest", **kwargs)


def test_deployment_declares_replicas_selector_image_and_port() -> None:
    manifest = deployment_manifest(_spec())

    assert manifest["apiVersion"] == "apps/v1"
    assert manifest["kind"] == "Deployment"
    spec = manifest["spec"]
    assert spec["replicas"] == 2
    assert spec["selector"] == {"matchLabels": {"app": "hello-world"}}
    assert spec["template"]["metadata"]["labels"] == {"app": "hello-world"}

    (container,) = spec["template"]["spec"]["containers"]
    assert container["image"] == "hello-world-eks:latest"
    assert container["ports"] == [{"containerPort": 3000}]
    assert container["readinessProbe"]["httpGet"] == {"path": "/health", "port": 3000}


def test_service_maps_port_80_to_3000_by_label() -> None:
    manifest = service_manifest(_spec())

    assert manifest["kind"] == "Service"
    assert manifest["spec"]["type"] == "LoadBalancer"
    assert manifest["spec"]["selector"] == {"app": "hello-world"}
    assert manifest["spec"]["ports"] == [{"protocol": "TCP", "port": 80, "targetPort": 3000}]


def test_namespace_is_only_set_when_given() -> None:
    assert "namespace" not in deployment_manifest(_spec())["metadata"]
    assert service_manifest(_spec(namespace="demo"))["metadata"]["namespace"] == "demo"


def test_scaling_changes_only_replica_count() -> None:
    before = _spec()
    after = scale(before, 5)

    assert after.replicas == 5
    assert before.replicas == 2

    scaled = deployment_manifest(after)
    original = deployment_manifest(before)
    assert scaled["spec"]["replicas"] == 5
    scaled["spec"]["replicas"] = original["spec"]["replicas"]
    assert scaled == original
    assert service_manifest(after) == service_manifest(before)


def test_negative_replicas_rejected() -> None:
    with pytest.raises(ValidationError):
        scale(_spec(), -1)


def test_invalid_name_rejected() -> None:
    with pytest.raises(ValidationError):
        _spec(name="Hello_World")


def test_render_produces_deployment_then_service() -> None:
    docs = list(yaml.safe_load_all(render_manifests(_spec())))
    assert [d["kind"] for d in docs] == ["Deployment", "Service"]


def test_checked_in_manifests_match_builder() -> None:
    path = REPO_ROOT / "k8s" / "hello-world.yaml"
    docs = list(yaml.safe_load_all(path.read_text(encoding="utf-8")))

    assert docs == [deployment_manifest(_spec()), service_manifest(_spec())]
