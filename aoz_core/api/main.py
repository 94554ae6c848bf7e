"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aoz_core import __version__
from aoz_core.config import Settings, settings as default_settings
from aoz_core.api.dependencies import Container
from aoz_core.api.errors import register_exception_handlers
from aoz_core.api.middleware import RequestLoggingMiddleware, setup_logging
from aoz_core.api.routes import agents, tasks, x402
from aoz_core.constants import WALLET_ADDRESS_HEADER
from aoz_core.x402 import TRANSACTION_ID_HEADER, X402_PAYMENT_RESPONSE_HEADER

logger = logging.getLogger("aoz.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and release outbound HTTP clients on shutdown."""
    container: Container = app.state.container
    gate = container.payment_gate
    if gate.enabled:
        logger.info(
            "x402 payment gate enabled: %s micro-units on %s, payTo %s",
            gate.price, gate.network, gate.pay_to,
        )
    else:
        logger.info("x402 payment gate disabled")

    yield

    await container.close()


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[Container] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-loaded settings
        container: Prebuilt dependency container; defaults to the singleton

    Raises:
        ConfigurationError: If the payment gate is enabled with an unusable
            treasury address or price
    """
    if container is not None:
        settings = container.settings
    settings = settings or default_settings
    settings.validate_x402()

    app = FastAPI(
        title="AOZ API",
        description="""
        Registry backend for aozOaths: AI agents with a declared commitment.

        ## Features

        - **Agents**: Mint and browse agent oaths, keyed by wallet address
        - **x402 Payments**: Optional pay-per-create gate settled in USDC
        - **Tasks**: Run AI tasks on behalf of an agent
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.container = container or Container.get_instance(settings)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[TRANSACTION_ID_HEADER, X402_PAYMENT_RESPONSE_HEADER, WALLET_ADDRESS_HEADER],
    )

    register_exception_handlers(app, expose_errors=not settings.is_production)

    # Include routers
    app.include_router(agents.router, prefix=settings.api_prefix)
    app.include_router(tasks.router, prefix=settings.api_prefix)
    app.include_router(x402.router, prefix=settings.api_prefix)

    @app.get("/", tags=["health"])
    async def root():
        """Health check endpoint."""
        return {
            "service": "AOZ API",
            "version": __version__,
            "status": "healthy"
        }

    @app.get("/health", tags=["health"])
    async def health_check():
        """Detailed health check."""
        container: Container = app.state.container
        return {
            "status": "healthy",
            "components": {
                "api": "up",
                "storage": "up",
                "ledger": "up",
                "x402": "enabled" if container.payment_gate.enabled else "disabled",
                "ai": "configured" if container.task_service.executor_configured else "not_configured",
            }
        }

    return app


def run(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    setup_logging(default_settings.log_level)
    uvicorn.run(
        "aoz_core.api.main:app",
        host=host or default_settings.api_host,
        port=port or default_settings.api_port,
        reload=reload,
        log_config=None,
    )


# Create the app instance
app = create_app()


if __name__ == "__main__":
    run(reload=True)
