#tests\test_labels.py

"""Test routing label builder."""

import pytest

from pomegranate.config import RoutingConfig
from pomegranate.core.labels import build_route_host, build_routing_labels
from pomegranate.core.models import Application


class TestRoutingLabels:
    """Test Traefik labels built for an application."""

    @pytest.mark.parametrize("name,fqdn", [
        ("webapp", "paastech.cloud"),
        ("uuid_project_nginx", "localhost"),
    ])
    def test_exactly_four_labels(self, name, fqdn):
        """Test label map always has four entries and the expected host."""
        app = Application(container_name=name, image_name="nginx")
        config = RoutingConfig(fqdn=fqdn)

        labels = build_routing_labels(app, config)

        assert len(labels) == 4
        assert build_route_host(app, config) == f"{name}.user-app.{fqdn}"
        assert labels[f"traefik.http.routers.{name}.rule"] == f"Host(`{name}.user-app.{fqdn}`)"

    def test_label_values(self, sample_app, routing_config):
        """Test enable flag, entrypoint and fixed port."""
        labels = build_routing_labels(sample_app, routing_config)

        assert labels["traefik.enable"] == "true"
        assert labels["traefik.http.routers.webapp.entrypoints"] == "websecure"
        assert labels["traefik.http.services.webapp.loadbalancer.server.port"] == "80"

    def test_recomputed_identically(self, sample_app, routing_config):
        """Test labels are a pure function of their inputs."""
        assert build_routing_labels(sample_app, routing_config) == build_routing_labels(
            sample_app, routing_config
        )
