import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.routing import Match

from goal_tracker.api.goals import router as goals_router
from goal_tracker.api.metrics import router as metrics_router
from goal_tracker.core.config import Settings, settings as default_settings
from goal_tracker.core.errors import GoalsApiError
from goal_tracker.core.logging_setup import ACCESS_LOGGER_NAME, combined_log_line, configure_logging
from goal_tracker.core.metrics import GoalsMetrics, get_metrics
from goal_tracker.db import Base, engine
from goal_tracker.models.goal import Goal  # noqa: F401  (import ensures table is registered)


logger = logging.getLogger(__name__)
access_logger = logging.getLogger(ACCESS_LOGGER_NAME)


def _match_template(routes, scope) -> Optional[str]:
    for route in routes:
        path = getattr(route, "path_format", None) or getattr(route, "path", None)
        if path is None:
            # Included routers may show up as wrapper entries; look inside them
            nested = getattr(route, "routes", None)
            if nested is None:
                inner = getattr(route, "original_router", None) or getattr(route, "router", None)
                nested = getattr(inner, "routes", None)
            if nested:
                found = _match_template(nested, scope)
                if found:
                    return found
            continue
        match, _ = route.matches(scope)
        if match == Match.FULL:
            return path
    return None


def route_template(request: Request) -> str:
    """Path template of the route that served the request, else the raw path."""
    route = request.scope.get("route")
    path = getattr(route, "path_format", None) or getattr(route, "path", None)
    if path:
        return path
    return _match_template(request.app.router.routes, request.scope) or request.url.path


def finish_request(request: Request, start: float, status_code: int, content_length: Optional[str]) -> None:
    """One duration observation and one access log line per response."""
    duration_ms = (time.perf_counter() - start) * 1000
    request.app.state.metrics.observe_request(
        request.method, route_template(request), status_code, duration_ms
    )
    path = request.url.path
    if request.url.query:
        path += "?" + request.url.query
    access_logger.info(
        combined_log_line(
            request.client.host if request.client else "-",
            request.method,
            path,
            request.scope.get("http_version", "1.1"),
            status_code,
            content_length,
            request.headers.get("referer"),
            request.headers.get("user-agent"),
        )
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(app.state.settings)
    # Create DB tables on startup
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception("Failed to connect to the database")
        raise
    logger.info("Connected to the database, %s is ready", app.state.settings.service_name)
    yield


def create_app(settings: Optional[Settings] = None, metrics: Optional[GoalsMetrics] = None) -> FastAPI:
    """Build the API.

    ``settings`` drives CORS, logging and the service name. The database
    engine is module-level in ``goal_tracker.db`` and always follows the
    process settings (``DATABASE_URL`` / ``DB_*`` env vars).
    """
    settings = settings or default_settings

    app = FastAPI(title=settings.service_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.metrics = metrics or get_metrics()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def record_request(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            finish_request(request, start, 500, None)
            raise
        finish_request(request, start, response.status_code, response.headers.get("content-length"))
        return response

    @app.exception_handler(GoalsApiError)
    async def goals_api_error_handler(request: Request, exc: GoalsApiError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Invalid request body on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=422, content={"message": "Invalid request body."})

    app.include_router(goals_router)
    app.include_router(metrics_router)

    @app.get("/")
    def root():
        return {"message": "Goal tracker backend is running"}

    return app


app = create_app()
