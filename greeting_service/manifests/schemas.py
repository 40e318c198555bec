from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DeploymentSpec(BaseModel):
    """Inputs for the Deployment and Service declarations handed to the orchestrator.

    The desired replica count lives here and in the cluster's declarative state only;
    the running service never sees it.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        default="hello-world",
        pattern=r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$",
        max_length=63,
        description="Resource name; also the `app` label used by the selectors.",
    )
    image: str = Field(
        min_length=1,
        description="Container image reference (registry/repository:tag).",
    )
    replicas: int = Field(default=2, ge=0, description="Desired replica count.")
    container_port: int = Field(
        default=3000, ge=1, le=65535, description="Port the service listens on inside the pod."
    )
    service_port: int = Field(
        default=80, ge=1, le=65535, description="Port exposed by the load balancer."
    )
    namespace: str | None = Field(default=None, description="Target namespace (optional).")

    @property
    def labels(self) -> dict[str, str]:
        return {"app": self.name}
