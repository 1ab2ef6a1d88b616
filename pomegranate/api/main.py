import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pomegranate import __version__
from pomegranate.api.routes.applications import router as applications_router
from pomegranate.api.routes.deployments import router as deployments_router
from pomegranate.core.errors import (
    ApplicationNotFound,
    EngineError,
    InvalidConfigError,
    RepositoryError,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Pomegranate",
    description="Execution engine for PaaS applications",
    version=__version__,
)


@app.exception_handler(EngineError)
def engine_error_handler(request: Request, exc: EngineError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    status_class = exc.status_class
    return JSONResponse(
        status_code=status_class.http_status,
        content={"detail": exc.message, "status": status_class.value},
    )


@app.exception_handler(RepositoryError)
def repository_error_handler(request: Request, exc: RepositoryError):
    if isinstance(exc, ApplicationNotFound):
        status_code = 404
    elif isinstance(exc, InvalidConfigError):
        status_code = 400
    else:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        status_code = 500
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(applications_router)
app.include_router(deployments_router)
