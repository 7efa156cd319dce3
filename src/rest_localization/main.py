"""FastAPI application entry point."""

from contextlib import asynccontextmanager
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from structlog import contextvars
import uvicorn

from rest_localization.api.main import api_router
from rest_localization.core.config import Settings, get_settings
from rest_localization.core.exceptions import AppException
from rest_localization.core.logging import get_logger, setup_logging
from rest_localization.cultures import CultureCatalog, CultureContext, CultureMiddleware
from rest_localization.i18n import init_translations, translate
from rest_localization.localization import LocalizationMapper, LocalizationResolver

setup_logging()
logger = get_logger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI schema.

    Format: {tag}-{route_name}
    """
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


def build_culture_catalog(settings: Settings) -> CultureCatalog:
    """Build the supported culture catalog from the CULTURE_* settings."""
    if settings.SUPPORTED_CULTURES:
        return CultureCatalog.build(
            settings.SUPPORTED_CULTURES,
            scope=settings.culture_scope,
            default_culture=settings.DEFAULT_CULTURE,
            context_kind=settings.culture_context_kind,
        )
    return CultureCatalog.from_database(
        scope=settings.culture_scope,
        default_culture=settings.DEFAULT_CULTURE,
        context_kind=settings.culture_context_kind,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    catalog: CultureCatalog = app.state.culture_catalog
    logger.info(
        "application_startup",
        cultures=catalog.list_supported_cultures(),
        default_culture=catalog.default_culture,
        culture_context=catalog.context_kind.value,
    )
    yield
    logger.info("application_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The culture catalog is validated here, so a bad culture configuration
    fails application creation instead of the first request.
    """
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )

    catalog = build_culture_catalog(settings)
    context = CultureContext(catalog)
    app.state.culture_catalog = catalog
    app.state.culture_context = context
    app.state.localization_mapper = LocalizationMapper(LocalizationResolver(context))
    init_translations(context)

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        """Handle all AppException subclasses with consistent JSON format.

        Translates error messages into the request culture.
        """
        culture = context.current_ui_culture()

        translated_message = exc.message
        if exc.message_key:
            translated_message = translate(exc.message_key, culture, **exc.params)

        logger.warning(
            "app_exception",
            error_code=exc.error_code,
            message=exc.message,
            translated_message=translated_message,
            culture=culture,
            status_code=exc.status_code,
            details=exc.details,
            path=str(request.url.path),
        )

        content = exc.to_dict()
        content["message"] = translated_message

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers={"Content-Language": culture},
        )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add unique request ID to each request for tracing."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        contextvars.clear_contextvars()
        contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["health"])
    async def root_health():
        """Root health check endpoint."""
        return {"status": "ok", "service": settings.PROJECT_NAME}

    # Outermost layer so the request culture is set before anything runs
    app.add_middleware(CultureMiddleware, context=context)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn (``rest-localization`` script)."""
    settings = get_settings()
    uvicorn.run(
        "rest_localization.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "local" and settings.DEBUG,
        log_config=None,
    )
