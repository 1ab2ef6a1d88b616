#pomegranate\config.py

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class RoutingConfig:
    """Reverse-proxy routing configuration handed to the engine at construction."""

    fqdn: str = "localhost"
    # None disables network attachment
    network_name: Optional[str] = "traefik-fallback-network"


class Settings(BaseSettings):
    """Service configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="POMEGRANATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Routing
    fqdn: str = "localhost"
    docker_network_name: str = "traefik-fallback-network"

    # Server
    host: str = "0.0.0.0"
    port: int = 50051
    log_level: str = "INFO"

    # Data access
    repository_backend: Literal["memory", "postgres"] = "memory"
    # JSON list of deployment records seeding the memory backend, which starts empty without it
    deployments_file: Optional[str] = None

    def routing_config(self) -> RoutingConfig:
        return RoutingConfig(
            fqdn=self.fqdn,
            network_name=self.docker_network_name or None,
        )
