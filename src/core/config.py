"""Application settings loaded from environment with validation."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Webhook settings from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Listen address")
    port: int = Field(default=443, ge=1, le=65535)
    tls_cert_file: str = Field(
        default="/etc/kuberay-tpu-webhook/tls/tls.crt",
        description="PEM certificate presented to the API server",
    )
    tls_key_file: str = Field(
        default="/etc/kuberay-tpu-webhook/tls/tls.key",
        description="PEM private key for tls_cert_file",
    )

    # TPU injection
    node_pool_label: str = Field(
        default="cloud.google.com/gke-nodepool",
        min_length=1,
        description="Pod label naming the node pool (TPU slice) the pod is scheduled to",
    )
    worker_id_env_name: str = Field(default="TPU_WORKER_ID", min_length=1)
    worker_hostnames_env_name: str = Field(default="TPU_WORKER_HOSTNAMES", min_length=1)
    worker_hostname_prefix: str = Field(
        default="worker",
        min_length=1,
        description="Hostnames are rendered as <prefix>-<index>",
    )
    hostname_separator: str = Field(default=",", min_length=1)
    reject_invalid_objects: bool = Field(
        default=False,
        description=(
            "Deny admission for pods/clusters that cannot be mutated (e.g. missing node pool label). "
            "When false they are admitted unmutated with a warning."
        ),
    )

    # Logging
    log_level: LogLevel = Field(default="INFO")

    # Tracing
    gcp_project_id: str = Field(
        default="",
        description="GCP project for Cloud Trace export (empty disables export)",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        u = (v or "INFO").upper()
        if u not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return u


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
