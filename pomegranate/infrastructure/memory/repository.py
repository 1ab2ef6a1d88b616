# pomegranate/infrastructure/memory/repository.py

import json
from dataclasses import dataclass, field, replace
from threading import Lock
from typing import Dict, Iterable, List, Optional

from pomegranate.core.errors import ApplicationNotFound, InvalidConfigError
from pomegranate.core.models import Application
from pomegranate.core.repository import ApplicationRepository, parse_config


@dataclass
class DeploymentRecord:
    deployment_id: str
    project_id: str
    user_id: str
    config: Dict[str, str] = field(default_factory=dict)
    image_name: Optional[str] = None
    image_tag: str = "latest"


def record_to_application(record: DeploymentRecord, env_variables: Dict[str, str]) -> Application:
    return Application(
        container_name=record.deployment_id,
        image_name=record.image_name or f"{record.user_id}/{record.deployment_id}",
        image_tag=record.image_tag,
        env_variables=dict(env_variables),
        project_id=record.project_id,
        application_id=record.deployment_id,
    )


def load_records(path: str) -> List[DeploymentRecord]:
    """
    Read deployment records from a JSON file.

    The file holds a list of objects with deployment_id, project_id and
    user_id, plus optional config (object of strings), image_name and image_tag.
    """
    with open(path, encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfigError(f"Invalid deployments file {path}: {e}") from e

    if not isinstance(payload, list):
        raise InvalidConfigError(f"Invalid deployments file {path}: expected a list of records")

    records = []
    for entry in payload:
        try:
            records.append(DeploymentRecord(
                deployment_id=entry["deployment_id"],
                project_id=entry["project_id"],
                user_id=entry["user_id"],
                config=parse_config(json.dumps(entry.get("config") or {})),
                image_name=entry.get("image_name"),
                image_tag=entry.get("image_tag") or "latest",
            ))
        except (KeyError, TypeError, AttributeError) as e:
            raise InvalidConfigError(f"Invalid deployment record in {path}: {entry!r}") from e

    return records


class InMemoryApplicationRepository(ApplicationRepository):
    def __init__(self, records: Optional[Iterable[DeploymentRecord]] = None):
        self._store: Dict[str, DeploymentRecord] = {}
        self._lock = Lock()
        for record in records or []:
            self.add(record)

    def add(self, record: DeploymentRecord) -> None:
        with self._lock:
            self._store[record.deployment_id] = record

    def _require(self, deployment_id: str) -> DeploymentRecord:
        record = self._store.get(deployment_id)
        if record is None:
            raise ApplicationNotFound(f"Deployment {deployment_id} not found")
        return record

    def resolve(self, deployment_id: str) -> Application:
        record = self._require(deployment_id)
        return record_to_application(record, record.config)

    def resolve_with_config(self, deployment_id: str, env_variables: Dict[str, str]) -> Application:
        record = self._require(deployment_id)
        return record_to_application(record, env_variables)

    def apply_config(self, deployment_id: str, config: str) -> None:
        env_variables = parse_config(config)
        with self._lock:
            record = self._require(deployment_id)
            self._store[deployment_id] = replace(record, config=env_variables)
