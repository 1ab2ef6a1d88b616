#pomegranate\core\models.py
"""Core domain models for applications managed by the execution engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ApplicationStatus(Enum):
    """Application status as observed on the container runtime."""

    UNKNOWN = "UNKNOWN"
    STARTING = "STARTING"
    RUNNING = "RUNNING"
    STOPPING = "STOPPING"
    STOPPED = "STOPPED"

    @property
    def wire_value(self) -> int:
        """Stable integer used by remote callers."""
        return _WIRE_VALUES[self]


_WIRE_VALUES = {
    ApplicationStatus.UNKNOWN: 0,
    ApplicationStatus.STARTING: 1,
    ApplicationStatus.RUNNING: 2,
    ApplicationStatus.STOPPING: 3,
    ApplicationStatus.STOPPED: 4,
}


@dataclass(frozen=True)
class Application:
    """
    Descriptor of a unit of deployment.

    `container_name` is unique system-wide and is the only identity the
    engine relies on. `project_id` and `application_id` are kept for callers
    that resolved the application from a project/deployment pair.
    """

    container_name: str
    image_name: str
    image_tag: str = "latest"
    env_variables: Dict[str, str] = field(default_factory=dict)
    project_id: Optional[str] = None
    application_id: Optional[str] = None

    @classmethod
    def from_ids(
        cls,
        project_id: str,
        application_id: str,
        image_name: str,
        image_tag: str = "latest",
        env_variables: Optional[Dict[str, str]] = None,
    ) -> "Application":
        """Build an application whose container name derives from its project/application pair."""
        return cls(
            container_name=f"{project_id}_{application_id}",
            image_name=image_name,
            image_tag=image_tag,
            env_variables=dict(env_variables or {}),
            project_id=project_id,
            application_id=application_id,
        )

    @property
    def image_reference(self) -> str:
        return f"{self.image_name}:{self.image_tag}"

    def environment_list(self) -> List[str]:
        """Flatten env variables to the runtime's KEY=VALUE form."""
        return [f"{key}={value}" for key, value in sorted(self.env_variables.items())]


@dataclass
class ApplicationStats:
    """Resource usage snapshot. Any field may be missing for a given container."""

    memory_usage: Optional[int] = None
    memory_limit: Optional[int] = None
    cpu_usage: Optional[float] = None
