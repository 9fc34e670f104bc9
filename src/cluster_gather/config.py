"""Configuration and environment for the cluster gatherer."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Gatherer settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="CLUSTER_GATHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kubernetes
    kubeconfig: Path | None = Field(
        default=None,
        description="Path to kubeconfig; uses KUBECONFIG env or default location if unset",
    )
    context: str | None = Field(default=None, description="Kubernetes context to use")

    # Gathering
    namespace: str = Field(
        default="openshift-cluster-version",
        description="Namespace of the cluster-version operator pods",
    )
    events_interval: timedelta = Field(
        default=timedelta(hours=2),
        description="Trailing window for events collected when a pod is unhealthy",
    )
    pod_grace_period: timedelta = Field(
        default=timedelta(minutes=2),
        description="Pods younger than this are not flagged as unhealthy while starting",
    )
    timeout_seconds: float | None = Field(
        default=60.0,
        gt=0,
        description="Deadline for one gather pass; unset to disable",
    )

    # Output
    output_dir: Path | None = Field(
        default=None,
        description="Directory to write gathered records to",
    )


def get_settings() -> Settings:
    """Return validated settings instance."""
    return Settings()
