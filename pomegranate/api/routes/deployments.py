import logging

from fastapi import APIRouter, Depends

from pomegranate.api.container import get_engine, get_repository
from pomegranate.api.routes.applications import collect_logs, render_stats, render_status
from pomegranate.api.schemas.application import (
    ApplyConfigRequest,
    ContainerStatus,
    LogsResponse,
    MessageResponse,
    StatsResponse,
)
from pomegranate.core.engine import Engine
from pomegranate.core.errors import EngineError
from pomegranate.core.repository import ApplicationRepository, parse_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deployments", tags=["deployments"])


@router.post("/{deployment_id}/start", response_model=MessageResponse)
def start_deployment(
    deployment_id: str,
    engine: Engine = Depends(get_engine),
    repository: ApplicationRepository = Depends(get_repository),
):
    app = repository.resolve(deployment_id)
    engine.start(app)
    return MessageResponse(status="started", container_name=app.container_name)


@router.post("/{deployment_id}/restart", response_model=MessageResponse)
def restart_deployment(
    deployment_id: str,
    engine: Engine = Depends(get_engine),
    repository: ApplicationRepository = Depends(get_repository),
):
    app = repository.resolve(deployment_id)
    engine.restart(app)
    return MessageResponse(status="restarted", container_name=app.container_name)


@router.post("/{deployment_id}/stop", response_model=MessageResponse)
def stop_deployment(
    deployment_id: str,
    engine: Engine = Depends(get_engine),
    repository: ApplicationRepository = Depends(get_repository),
):
    app = repository.resolve(deployment_id)
    engine.stop(app.container_name)
    return MessageResponse(status="stopped", container_name=app.container_name)


@router.get("/{deployment_id}/status", response_model=ContainerStatus)
def deployment_status(
    deployment_id: str,
    engine: Engine = Depends(get_engine),
    repository: ApplicationRepository = Depends(get_repository),
):
    app = repository.resolve(deployment_id)
    return render_status(app.container_name, engine.get_status(app.container_name))


@router.get("/{deployment_id}/logs", response_model=LogsResponse)
def deployment_logs(
    deployment_id: str,
    engine: Engine = Depends(get_engine),
    repository: ApplicationRepository = Depends(get_repository),
):
    app = repository.resolve(deployment_id)
    return LogsResponse(logs=collect_logs(engine, app.container_name))


@router.get("/{deployment_id}/stats", response_model=StatsResponse)
def deployment_stats(
    deployment_id: str,
    engine: Engine = Depends(get_engine),
    repository: ApplicationRepository = Depends(get_repository),
):
    app = repository.resolve(deployment_id)
    return render_stats(engine, app.container_name)


@router.delete("/{deployment_id}", response_model=MessageResponse)
def delete_deployment(
    deployment_id: str,
    engine: Engine = Depends(get_engine),
    repository: ApplicationRepository = Depends(get_repository),
):
    app = repository.resolve(deployment_id)

    try:
        engine.stop(app.container_name)
    except EngineError as e:
        logger.info(f"[{deployment_id}] Could not stop before deletion: {e}")

    engine.remove_image(app)
    return MessageResponse(status="deleted", container_name=app.container_name)


@router.post("/{deployment_id}/config", response_model=MessageResponse)
def apply_config(
    deployment_id: str,
    request: ApplyConfigRequest,
    engine: Engine = Depends(get_engine),
    repository: ApplicationRepository = Depends(get_repository),
):
    """
    Restart a deployment with a new env-variable set.
    The configuration is persisted only once the restart succeeded.
    """
    env_variables = parse_config(request.config)
    app = repository.resolve_with_config(deployment_id, env_variables)

    engine.restart(app)
    repository.apply_config(deployment_id, request.config)

    logger.info(f"[{deployment_id}] ✅ Configuration applied")
    return MessageResponse(status="configured", container_name=app.container_name)
