from contextlib import asynccontextmanager
from typing import Callable, Optional
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from pokeproxy.api.dependencies import build_pokemon_service
from pokeproxy.api.error_handlers import register_exception_handlers
from pokeproxy.core.config import Settings, get_settings, load_env_file
from pokeproxy.core.logging import configure_logging, get_logger, set_correlation_id
from pokeproxy.services.pokemon_service import PokemonService


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    pokemon_service: Optional[PokemonService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-derived ones
        pokemon_service: Pre-built service, e.g. one wired to a fake upstream

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    service = pokemon_service or build_pokemon_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting up Pokedex Proxy",
            extra={
                "upstream": settings.POKEAPI_BASE_URL,
                "cache_max_entries": settings.CACHE_MAX_ENTRIES,
                "cache_ttl": settings.CACHE_TTL,
            }
        )
        yield
        logger.info("Shutting down Pokedex Proxy")
        await app.state.pokemon_service.client.aclose()

    # Create FastAPI app with metadata
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=f"{settings.API_PREFIX}/redoc",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pokemon_service = service

    # Register middleware
    configure_middleware(app, settings)

    # Register exception handlers
    register_exception_handlers(app)

    # Register routers
    register_routers(app, settings)

    return app


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracking middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        # Extract or generate correlation ID
        correlation_id = set_correlation_id(request.headers.get("X-Correlation-ID"))

        # Track request timing
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {str(e)}",
                extra={
                    "request_path": request.url.path,
                    "method": request.method,
                    "process_time_ms": round(process_time * 1000, 2),
                }
            )
            raise

        response.headers["X-Correlation-ID"] = correlation_id

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2)
            }
        )

        return response


def register_routers(app: FastAPI, settings: Settings) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # Import routers here to avoid circular imports
    from pokeproxy.api.routes.cache import cache_router
    from pokeproxy.api.routes.health import health_router
    from pokeproxy.api.routes.pokemon import pokemon_router

    app.include_router(
        health_router,
        prefix=f"{settings.API_PREFIX}/health",
        tags=["Health"]
    )

    app.include_router(
        pokemon_router,
        prefix=f"{settings.API_PREFIX}/pokemon",
        tags=["Pokemon"]
    )

    app.include_router(
        cache_router,
        prefix=f"{settings.API_PREFIX}/cache",
        tags=["Cache"]
    )


app = create_application()


def run() -> None:
    """Console entry point: serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Backend running on http://{settings.HOST}:{settings.PORT}")
    uvicorn.run("pokeproxy.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
