#pomegranate\core\labels.py

from typing import Dict

from pomegranate.config import RoutingConfig
from pomegranate.core.models import Application

# Applications are expected to listen on this port inside their container
APPLICATION_PORT = 80


def build_route_host(app: Application, config: RoutingConfig) -> str:
    return f"{app.container_name}.user-app.{config.fqdn}"


def build_routing_labels(app: Application, config: RoutingConfig) -> Dict[str, str]:
    """
    Build the Traefik labels that route external traffic to an application.

    Args:
        app: Application being started
        config: Routing configuration (fqdn)

    Returns:
        Exactly four labels: enable flag, entrypoint, target port and host rule
    """
    name = app.container_name
    return {
        "traefik.enable": "true",
        f"traefik.http.routers.{name}.entrypoints": "websecure",
        f"traefik.http.services.{name}.loadbalancer.server.port": str(APPLICATION_PORT),
        f"traefik.http.routers.{name}.rule": f"Host(`{build_route_host(app, config)}`)",
    }
