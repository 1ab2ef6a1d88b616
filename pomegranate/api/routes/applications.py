import logging

from fastapi import APIRouter, Depends, HTTPException

from pomegranate.api.container import get_engine
from pomegranate.api.schemas.application import (
    ContainerStatus,
    DeleteImageRequest,
    DeployRequest,
    LogsResponse,
    MessageResponse,
    StatsResponse,
    StatusRequest,
    StatusResponse,
)
from pomegranate.core.engine import Engine
from pomegranate.core.errors import EngineError
from pomegranate.core.models import Application, ApplicationStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


def collect_logs(engine: Engine, container_name: str) -> str:
    """Drain the log stream of an application into one string."""
    # Frames split at byte boundaries, decode once so multi-byte characters survive
    return b"".join(engine.get_logs(container_name)).decode("utf-8", errors="replace")


def render_stats(engine: Engine, container_name: str) -> StatsResponse:
    stats = engine.get_stats(container_name)
    if stats is None:
        raise HTTPException(
            status_code=404,
            detail=f"Failed to get stats of application {container_name}: Not found",
        )

    return StatsResponse(
        cpu_usage=stats.cpu_usage or 0.0,
        memory_usage=stats.memory_usage or 0,
        memory_limit=stats.memory_limit or 0,
    )


def render_status(container_name: str, status: ApplicationStatus) -> ContainerStatus:
    return ContainerStatus(
        container_name=container_name,
        container_status=status.wire_value,
        status=status.value,
    )


@router.post("/deploy", response_model=MessageResponse)
def deploy(
    request: DeployRequest,
    engine: Engine = Depends(get_engine),
):
    """
    Deploy an application.

    If its status can be read the application is restarted, otherwise
    a plain start is attempted.
    """
    app = Application(
        container_name=request.container_name,
        image_name=request.image_name,
        image_tag=request.image_tag,
        env_variables=request.env_vars,
    )

    try:
        status = engine.get_status(app.container_name)
    except EngineError as e:
        logger.info(f"[{app.container_name}] Status unavailable ({e}), starting it")
        engine.start(app)
    else:
        logger.info(f"[{app.container_name}] Status {status.value}, restarting it")
        engine.restart(app)

    return MessageResponse(status="deployed", container_name=app.container_name)


@router.post("/{container_name}/stop", response_model=MessageResponse)
def stop(
    container_name: str,
    engine: Engine = Depends(get_engine),
):
    engine.stop(container_name)
    return MessageResponse(status="stopped", container_name=container_name)


@router.post("/delete-image", response_model=MessageResponse)
def delete_image(
    request: DeleteImageRequest,
    engine: Engine = Depends(get_engine),
):
    """Stop the application if it runs, then drop its image from the cache."""
    app = Application(
        container_name=request.container_name,
        image_name=request.image_name,
        image_tag=request.image_tag,
    )

    try:
        engine.stop(app.container_name)
    except EngineError as e:
        logger.info(f"[{app.container_name}] Could not stop before image removal: {e}")

    engine.remove_image(app)
    return MessageResponse(status="image_removed", container_name=app.container_name)


@router.get("/{container_name}/logs", response_model=LogsResponse)
def get_logs(
    container_name: str,
    engine: Engine = Depends(get_engine),
):
    return LogsResponse(logs=collect_logs(engine, container_name))


@router.get("/{container_name}/stats", response_model=StatsResponse)
def get_stats(
    container_name: str,
    engine: Engine = Depends(get_engine),
):
    return render_stats(engine, container_name)


@router.post("/status", response_model=StatusResponse)
def get_status(
    request: StatusRequest,
    engine: Engine = Depends(get_engine),
):
    """Status of several applications. Applications whose status cannot be read are left out."""
    output = []
    for container_name in request.container_names:
        try:
            status = engine.get_status(container_name)
        except EngineError as e:
            logger.warning(f"[{container_name}] Failed to get status: {e}")
            continue
        output.append(render_status(container_name, status))

    return StatusResponse(container_statuses=output)
