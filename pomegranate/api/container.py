#pomegranate\api\container.py

"""Dependency injection container - wires the engine and repository together."""

from functools import lru_cache

from pomegranate.config import Settings
from pomegranate.core.engine import Engine
from pomegranate.core.repository import ApplicationRepository


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_engine() -> Engine:
    from pomegranate.engine.docker_engine import DockerEngine

    return DockerEngine(get_settings().routing_config())


@lru_cache
def get_repository() -> ApplicationRepository:
    settings = get_settings()

    if settings.repository_backend == "postgres":
        from pomegranate.infrastructure.postgres.config import DatabaseSettings
        from pomegranate.infrastructure.postgres.database import (
            create_db_engine,
            get_session_factory,
            init_db,
        )
        from pomegranate.infrastructure.postgres.repository import PostgresApplicationRepository

        db_engine = create_db_engine(DatabaseSettings())
        init_db(db_engine)
        return PostgresApplicationRepository(session_factory=get_session_factory(db_engine))

    from pomegranate.infrastructure.memory.repository import (
        InMemoryApplicationRepository,
        load_records,
    )

    if settings.deployments_file:
        return InMemoryApplicationRepository(load_records(settings.deployments_file))
    return InMemoryApplicationRepository()
