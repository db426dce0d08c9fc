import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prompt_portal.api.v1 import auth, enhancements, organizations, prompts
from prompt_portal.core.config import Config
from prompt_portal.core.security import PasswordHasher
from prompt_portal.database.entity_store import EntityStore
from prompt_portal.database.seed import seed_demo_data
from prompt_portal.database.storage import KeyValueStorage, build_storage
from prompt_portal.schemas.common import ErrorResponseModel
from prompt_portal.services.enhancement_service import EnhancementService
from prompt_portal.services.errors import ServiceError, ValidationFailed

logger = logging.getLogger("prompt-portal")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    ))
    logger.addHandler(handler)
logger.propagate = False


def _error_response(status_code: int, error: str) -> JSONResponse:
    body = ErrorResponseModel(error=error)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
    )


def create_app(
    storage: Optional[KeyValueStorage] = None,
    password_hasher: Optional[PasswordHasher] = None,
    enhancement_service: Optional[EnhancementService] = None,
    seed_demo: Optional[bool] = None,
) -> FastAPI:
    """
    Build the API application.

    Without arguments the storage backend, demo seeding and hashing cost come from
    Config; tests pass their own storage and a cheap hasher.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Configuration-dependent level setting
        logger.setLevel(getattr(logging, Config.LOG_LEVEL, logging.INFO))
        app.state.logger = logger

        backend = storage
        if backend is None:
            Config.validate_config()
            backend = build_storage(Config.DATABASE_URL, namespace=Config.STORAGE_NAMESPACE)

        store = await EntityStore.load(backend)
        should_seed = Config.SEED_DEMO_DATA if seed_demo is None else seed_demo
        if should_seed:
            await seed_demo_data(store)

        app.state.store = store
        app.state.password_hasher = password_hasher or PasswordHasher()
        app.state.enhancement_service = enhancement_service or EnhancementService()

        yield

        # Cleanup on shutdown
        try:
            await backend.close()
        except Exception as e:
            logger.error(f"Error while closing storage: {e}", exc_info=True)

    app = FastAPI(
        title=Config.API_TITLE,
        description="Manage, share and enhance prompts within an organization.",
        version=Config.API_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "auth",
                "description": "Login, signup and session operations"
            },
            {
                "name": "prompts",
                "description": "Prompt library operations"
            },
            {
                "name": "organizations",
                "description": "Organization statistics"
            },
            {
                "name": "enhancements",
                "description": "Prompt enhancement, BRD generation and email rewriting"
            }
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        error = ValidationFailed(f"{location}: {message}" if location else message)
        return _error_response(error.status_code, error.message)

    # Public endpoints (without authentication)
    @app.get("/")
    async def root():
        return {
            "message": Config.API_TITLE,
            "version": Config.API_VERSION
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for Docker containers"""
        return {"status": "healthy"}

    # Login and signup are public, the remaining auth routes check the session themselves
    app.include_router(auth.router, prefix="/api/v1")

    # Protected routers with session authentication
    app.include_router(prompts.router, prefix="/api/v1")
    app.include_router(organizations.router, prefix="/api/v1")
    app.include_router(enhancements.router, prefix="/api/v1")

    return app


app = create_app()
