# pomegranate/core/engine.py

import logging
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from pomegranate.core.errors import EngineError
from pomegranate.core.models import Application, ApplicationStats, ApplicationStatus

logger = logging.getLogger(__name__)


class Engine(ABC):
    """
    Execution engine contract.

    Any backend able to run applications (a container runtime, a process
    supervisor, a VM provisioner) implements this. Every failure is raised
    as an EngineError subclass; nothing is retried.
    """

    @abstractmethod
    def start(self, app: Application) -> None:
        """
        Make sure the image is present, then create and start the application.
        Raises ApplicationCannotStart.
        """
        raise NotImplementedError

    @abstractmethod
    def stop(self, container_name: str) -> None:
        """
        Stop the application and remove it entirely.
        An application that does not exist is an error (ApplicationCannotStop).
        """
        raise NotImplementedError

    @abstractmethod
    def get_status(self, container_name: str) -> ApplicationStatus:
        """
        Observed status of the application.
        An application that does not exist is STOPPED, not an error.
        """
        raise NotImplementedError

    @abstractmethod
    def get_logs(self, container_name: str) -> Iterator[bytes]:
        """
        Combined stdout/stderr output since the application started.

        Finite, single-use iterator. Failures are raised from the iterator
        as ApplicationLogsUnavailable.
        """
        raise NotImplementedError

    @abstractmethod
    def get_stats(self, container_name: str) -> Optional[ApplicationStats]:
        """
        Single resource usage snapshot.
        None when the application exists but no sample is available.
        """
        raise NotImplementedError

    @abstractmethod
    def remove_image(self, app: Application) -> None:
        """
        Remove the application's image from the local cache.
        The image is kept if another container still uses it.
        """
        raise NotImplementedError

    def restart(self, app: Application) -> None:
        """Stop the application if possible, then start it."""
        try:
            self.stop(app.container_name)
        except EngineError as e:
            # Nothing running is the usual case here
            logger.debug(f"[{app.container_name}] Stop before restart failed: {e}")

        self.start(app)
