#tests\conftest.py

"""Pytest configuration and fixtures."""

from typing import Dict, Iterator, List, Optional, Set
from unittest.mock import MagicMock

import docker
import pytest
from fastapi.testclient import TestClient

from pomegranate.api.container import get_engine, get_repository
from pomegranate.api.main import app as api_app
from pomegranate.config import RoutingConfig
from pomegranate.core.engine import Engine
from pomegranate.core.errors import (
    ApplicationCannotStart,
    ApplicationCannotStop,
    ApplicationLogsUnavailable,
    ApplicationStatsUnavailable,
)
from pomegranate.core.models import Application, ApplicationStats, ApplicationStatus
from pomegranate.engine.docker_engine import DockerEngine
from pomegranate.infrastructure.memory.repository import (
    DeploymentRecord,
    InMemoryApplicationRepository,
)


def api_error(status_code: int, message: str = "daemon error") -> docker.errors.APIError:
    """APIError carrying an HTTP response with the given status."""
    response = MagicMock(status_code=status_code, url="http+docker://localhost", reason=message)
    return docker.errors.APIError(message, response=response)


class FakeEngine(Engine):
    """In-memory engine with the same not-found semantics as the Docker one."""

    def __init__(self):
        self.containers: Dict[str, Application] = {}
        self.images: Set[str] = set()
        self.logs: Dict[str, List[bytes]] = {}
        self.stats: Dict[str, Optional[ApplicationStats]] = {}
        self.started: List[str] = []

    def start(self, app: Application) -> None:
        if app.container_name in self.containers:
            raise ApplicationCannotStart(
                f"Failed to create the container for application {app.container_name}: Conflict",
                code=409,
            )
        self.images.add(app.image_reference)
        self.containers[app.container_name] = app
        self.started.append(app.container_name)

    def stop(self, container_name: str) -> None:
        if container_name not in self.containers:
            raise ApplicationCannotStop(
                f"Failed to stop the container for application {container_name}: No such container",
                code=404,
            )
        del self.containers[container_name]

    def get_status(self, container_name: str) -> ApplicationStatus:
        if container_name in self.containers:
            return ApplicationStatus.RUNNING
        return ApplicationStatus.STOPPED

    def get_logs(self, container_name: str) -> Iterator[bytes]:
        if container_name not in self.containers:
            raise ApplicationLogsUnavailable(
                f"Failed to get the logs for application {container_name}: No such container",
                code=404,
            )
        yield from self.logs.get(container_name, [])

    def get_stats(self, container_name: str) -> Optional[ApplicationStats]:
        if container_name not in self.containers:
            raise ApplicationStatsUnavailable(
                f"Failed to get the statistics for application {container_name}: No such container",
                code=404,
            )
        return self.stats.get(container_name)

    def remove_image(self, app: Application) -> None:
        in_use = any(
            other.image_reference == app.image_reference for other in self.containers.values()
        )
        if not in_use:
            self.images.discard(app.image_reference)


@pytest.fixture
def routing_config():
    return RoutingConfig(fqdn="paastech.cloud", network_name="traefik-net")


@pytest.fixture
def sample_app():
    return Application(
        container_name="webapp",
        image_name="nginx",
        image_tag="latest",
        env_variables={"VERBOSITY": "5"},
    )


@pytest.fixture
def docker_client():
    """Mock Docker SDK client. The routing network already exists."""
    client = MagicMock()
    network = MagicMock()
    network.name = "traefik-net"
    client.networks.list.return_value = [network]
    client.networks.get.return_value = network

    container = MagicMock()
    container.id = "0123456789abcdef"
    container.attrs = {"State": {"Status": "running"}}
    client.containers.create.return_value = container
    client.containers.get.return_value = container
    return client


@pytest.fixture
def docker_engine(routing_config, docker_client):
    return DockerEngine(routing_config, client=docker_client)


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def repository():
    return InMemoryApplicationRepository([
        DeploymentRecord(
            deployment_id="nginx",
            project_id="uuid_project",
            user_id="user_project",
            image_name="nginx",
        ),
    ])


@pytest.fixture
def api_client(fake_engine, repository):
    """API test client wired to the fake engine and in-memory repository."""
    api_app.dependency_overrides[get_engine] = lambda: fake_engine
    api_app.dependency_overrides[get_repository] = lambda: repository

    yield TestClient(api_app)

    api_app.dependency_overrides.clear()


@pytest.fixture
def make_api_error():
    return api_error
