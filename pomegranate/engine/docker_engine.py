# pomegranate/engine/docker_engine.py
"""
Docker execution engine.
Drives the local Docker daemon to run PaaS applications.
"""

import logging
from typing import Iterator, Optional

import docker
import requests
from docker.models.containers import Container

from pomegranate.config import RoutingConfig
from pomegranate.core.engine import Engine
from pomegranate.core.errors import (
    ApplicationCannotStart,
    ApplicationCannotStop,
    ApplicationLogsUnavailable,
    ApplicationStateUnavailable,
    ApplicationStatsUnavailable,
    ImageRemovalFailed,
    RuntimeConnectionError,
)
from pomegranate.core.labels import build_routing_labels
from pomegranate.core.models import Application, ApplicationStats, ApplicationStatus
from pomegranate.core.stats import stats_from_sample

logger = logging.getLogger(__name__)

# Anything the SDK can raise while talking to the daemon
RUNTIME_ERRORS = (docker.errors.DockerException, requests.exceptions.RequestException)

RAW_STATE_TO_STATUS = {
    "created": ApplicationStatus.STARTING,
    "running": ApplicationStatus.RUNNING,
    "paused": ApplicationStatus.STOPPED,
    "restarting": ApplicationStatus.STARTING,
    "removing": ApplicationStatus.STOPPING,
    "exited": ApplicationStatus.STOPPED,
    "dead": ApplicationStatus.STOPPED,
}


def map_raw_state(raw_state: Optional[str]) -> ApplicationStatus:
    """Map a Docker container state string to an application status."""
    if not raw_state:
        return ApplicationStatus.UNKNOWN
    return RAW_STATE_TO_STATUS.get(raw_state.lower(), ApplicationStatus.UNKNOWN)


class DockerEngine(Engine):
    """
    Execution engine backed by Docker.

    Container names derive from the application's container name, so the
    daemon itself is the only index. No state is cached between calls.
    """

    CONTAINER_PREFIX = "client-app_"
    STOP_GRACE_PERIOD = 10  # seconds before the daemon kills the container

    def __init__(
        self,
        config: RoutingConfig,
        client: Optional[docker.DockerClient] = None,
    ):
        """
        Initialize engine.

        Args:
            config: Routing configuration (fqdn, network name)
            client: Docker client. If None, connects to the local daemon.

        Raises:
            RuntimeConnectionError: If the daemon cannot be reached
        """
        self._config = config
        self._client = client or self._connect()

        if config.network_name:
            self._ensure_network(config.network_name)

    @staticmethod
    def _connect() -> docker.DockerClient:
        logger.info("Creating new Docker engine")
        try:
            client = docker.from_env()
            client.ping()
        except RUNTIME_ERRORS as e:
            raise RuntimeConnectionError(f"Unable to connect to the Docker engine: {e}") from e

        logger.info("✅ Connected to Docker daemon")
        return client

    def _ensure_network(self, network_name: str) -> None:
        """Create the routing network unless it already exists."""
        try:
            # The daemon filters by substring, keep exact matches only
            existing = [
                network for network in self._client.networks.list(names=[network_name])
                if network.name == network_name
            ]
            if existing:
                logger.info(f"Using existing network {network_name}")
                return

            self._client.networks.create(network_name, driver="bridge")
            logger.info(f"✅ Created network {network_name}")
        except RUNTIME_ERRORS as e:
            logger.warning(f"Failed to ensure network {network_name}, routing may not work: {e}")

    @classmethod
    def build_container_name(cls, container_name: str) -> str:
        """Name of the Docker container backing an application."""
        return f"{cls.CONTAINER_PREFIX}{container_name}"

    def _find_container(self, container_name: str) -> Optional[Container]:
        """
        Look up the container of an application.

        Returns:
            The container, or None if it does not exist

        Raises:
            Any runtime error other than not-found
        """
        try:
            return self._client.containers.get(self.build_container_name(container_name))
        except docker.errors.NotFound:
            return None

    def _ensure_image(self, app: Application) -> None:
        try:
            self._client.images.get(app.image_reference)
            logger.debug(f"[{app.container_name}] Using local image {app.image_reference}")
        except docker.errors.ImageNotFound:
            logger.info(f"[{app.container_name}] Pulling image {app.image_reference}")
            self._client.images.pull(app.image_name, tag=app.image_tag)

    # -------------------------
    # LIFECYCLE
    # -------------------------

    def start(self, app: Application) -> None:
        """
        Start an application.

        Steps:
        1. Pull image if not present
        2. Build container config (env list, routing labels)
        3. Create container
        4. Attach it to the routing network
        5. Start container

        A container created before a later step fails is left in place;
        a subsequent stop removes it.
        """
        name = app.container_name

        try:
            self._ensure_image(app)
        except RUNTIME_ERRORS as e:
            raise ApplicationCannotStart.wrap(f"pull the image {app.image_reference}", name, e) from e

        container_config = {
            "image": app.image_reference,
            "name": self.build_container_name(name),
            "environment": app.environment_list(),
            "labels": build_routing_labels(app, self._config),
        }
        logger.debug(f"[{name}] Creating container: {container_config}")

        try:
            container = self._client.containers.create(**container_config)
        except RUNTIME_ERRORS as e:
            raise ApplicationCannotStart.wrap("create the container", name, e) from e
        logger.info(f"[{name}] Container created: {container.id[:12]}")

        network_name = self._config.network_name
        if network_name:
            try:
                self._client.networks.get(network_name).connect(container)
            except RUNTIME_ERRORS as e:
                raise ApplicationCannotStart.wrap(
                    f"attach the container to network {network_name}", name, e
                ) from e

        try:
            container.start()
        except RUNTIME_ERRORS as e:
            raise ApplicationCannotStart.wrap("start the container", name, e) from e

        logger.info(f"[{name}] ✅ Application started")

    def stop(self, container_name: str) -> None:
        """Stop the application's container, then remove it."""
        try:
            container = self._client.containers.get(self.build_container_name(container_name))
            container.stop(timeout=self.STOP_GRACE_PERIOD)
        except RUNTIME_ERRORS as e:
            raise ApplicationCannotStop.wrap("stop the container", container_name, e) from e

        try:
            container.remove()
        except RUNTIME_ERRORS as e:
            raise ApplicationCannotStop.wrap("remove the container", container_name, e) from e

        logger.info(f"[{container_name}] ✅ Application stopped and removed")

    # -------------------------
    # OBSERVATION
    # -------------------------

    def get_status(self, container_name: str) -> ApplicationStatus:
        try:
            container = self._find_container(container_name)
        except RUNTIME_ERRORS as e:
            raise ApplicationStateUnavailable.wrap("get the status", container_name, e) from e

        if container is None:
            return ApplicationStatus.STOPPED

        raw_state = container.attrs.get("State", {}).get("Status")
        return map_raw_state(raw_state)

    def get_logs(self, container_name: str) -> Iterator[bytes]:
        """Yield log chunks until the daemon closes the stream."""
        stream = None
        try:
            container = self._client.containers.get(self.build_container_name(container_name))
            stream = container.logs(stdout=True, stderr=True, stream=True, follow=False)
            for chunk in stream:
                yield chunk
        except RUNTIME_ERRORS as e:
            raise ApplicationLogsUnavailable.wrap("get the logs", container_name, e) from e
        finally:
            if stream is not None and hasattr(stream, "close"):
                stream.close()

    def get_stats(self, container_name: str) -> Optional[ApplicationStats]:
        try:
            container = self._client.containers.get(self.build_container_name(container_name))
            raw = container.stats(stream=False)
        except RUNTIME_ERRORS as e:
            raise ApplicationStatsUnavailable.wrap("get the statistics", container_name, e) from e

        return stats_from_sample(raw)

    # -------------------------
    # IMAGES
    # -------------------------

    def remove_image(self, app: Application) -> None:
        try:
            self._client.images.remove(image=app.image_reference, force=False)
        except docker.errors.APIError as e:
            if e.status_code == 409:
                logger.info(f"[{app.container_name}] Image {app.image_reference} still in use, keeping it")
                return
            raise ImageRemovalFailed.wrap(f"remove the image {app.image_reference}", app.container_name, e) from e
        except RUNTIME_ERRORS as e:
            raise ImageRemovalFailed.wrap(f"remove the image {app.image_reference}", app.container_name, e) from e

        logger.info(f"[{app.container_name}] ✅ Image {app.image_reference} removed")
