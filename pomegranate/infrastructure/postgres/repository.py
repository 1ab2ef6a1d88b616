#pomegranate\infrastructure\postgres\repository.py

"""PostgreSQL application repository using SQLAlchemy."""

import logging
from datetime import datetime
from typing import Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pomegranate.core.errors import ApplicationNotFound, RepositoryError
from pomegranate.core.models import Application
from pomegranate.core.repository import ApplicationRepository, parse_config
from pomegranate.infrastructure.postgres.database import session_scope
from pomegranate.infrastructure.postgres.models import DeploymentORM

logger = logging.getLogger(__name__)


# ============================================
# Mapping Functions
# ============================================

def orm_to_application(orm: DeploymentORM, env_variables: Dict[str, str]) -> Application:
    """Convert a deployment row (with its project) to an application descriptor."""
    project = orm.project
    return Application(
        container_name=orm.uuid,
        image_name=orm.image_name or f"{project.user_id}/{orm.uuid}",
        image_tag=orm.image_tag or "latest",
        env_variables=dict(env_variables),
        project_id=project.uuid,
        application_id=orm.uuid,
    )


# ============================================
# Repository Implementation
# ============================================

class PostgresApplicationRepository(ApplicationRepository):
    """PostgreSQL implementation using SQLAlchemy with dependency injection."""

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize repository.

        Args:
            session_factory: SQLAlchemy session factory
        """
        self._session_factory = session_factory

    def _require(self, session: Session, deployment_id: str) -> DeploymentORM:
        orm = session.get(DeploymentORM, deployment_id)
        if orm is None:
            logger.debug(f"[postgres] get {deployment_id} -> not found")
            raise ApplicationNotFound(f"Deployment {deployment_id} not found")
        return orm

    # -------------------------
    # READ
    # -------------------------

    def resolve(self, deployment_id: str) -> Application:
        try:
            with session_scope(self._session_factory) as session:
                orm = self._require(session, deployment_id)
                return orm_to_application(orm, parse_config(orm.config))
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to resolve deployment {deployment_id}: {e}") from e

    def resolve_with_config(self, deployment_id: str, env_variables: Dict[str, str]) -> Application:
        try:
            with session_scope(self._session_factory) as session:
                orm = self._require(session, deployment_id)
                return orm_to_application(orm, env_variables)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to resolve deployment {deployment_id}: {e}") from e

    # -------------------------
    # UPDATE
    # -------------------------

    def apply_config(self, deployment_id: str, config: str) -> None:
        # Reject bad payloads before touching the database
        parse_config(config)

        try:
            with session_scope(self._session_factory) as session:
                orm = self._require(session, deployment_id)
                orm.config = config
                orm.updated_at = datetime.utcnow()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to apply config to deployment {deployment_id}: {e}") from e

        logger.info(f"[postgres] apply_config {deployment_id} -> done")
