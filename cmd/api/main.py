"""
FastAPI Service - Main entry point for the ToDo API.
Implements clean separation of concerns with comprehensive logging and error handling:
- Routes are separated into modules
- Relational database access through a generic repository
- Comprehensive logging for all operations
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.database import Database
from core.logger import logger
from internal.api.routes import create_health_routes, create_todo_routes
from internal.api.utils import error_response


# Lifespan context manager
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown.
    Connects to the database on startup and creates tables outside production.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    logger.info(
        f"========== Starting {settings.app_name} v{settings.app_version} API service =========="
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API: {settings.api_host}:{settings.api_port}")

    try:
        logger.info("Initializing database connection...")
        await database.connect()

        if settings.auto_create_tables and not settings.is_production:
            await database.create_tables()
        else:
            logger.info("Skipping table creation")

        logger.info("Performing database health check...")
        if await database.health_check():
            logger.info("Database health check passed")
        else:
            logger.warning("Database health check failed")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        logger.exception("Database initialization error details:")
        raise

    logger.info(f"========== {settings.app_name} API service started successfully ==========")

    yield

    logger.info("========== Shutting down API service ==========")
    await database.disconnect()
    logger.info("========== API service stopped successfully ==========")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation failures are client errors (400)."""
    details = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    ]
    message = "Invalid request: " + "; ".join(details) if details else "Invalid request"
    logger.warning(f"API: {request.method} {request.url.path} rejected: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response(message=message),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings

    Returns:
        FastAPI: Configured application instance
    """
    try:
        logger.info("Creating FastAPI application...")
        settings = settings or get_settings()

        description = """
## ToDo API

Create, read, update, delete, search and filter to-do items stored in a
relational database.

### Key Features

* **CRUD** - Create, fetch, update and delete ToDo items
* **Search** - Substring search on title and description
* **Incoming** - Items expiring today, tomorrow or within the week
* **Progress** - Set completion percentage or mark items complete
        """

        tags_metadata = [
            {
                "name": "ToDo",
                "description": "ToDo item operations.",
            },
            {
                "name": "Health",
                "description": "Health check endpoints for monitoring API status and the database.",
            },
        ]

        app = FastAPI(
            title=settings.app_name,
            version=settings.app_version,
            description=description,
            lifespan=lifespan,
            openapi_tags=tags_metadata,
            docs_url="/docs",
            redoc_url="/redoc",
            openapi_url="/openapi.json",
        )
        app.state.settings = settings
        app.state.database = Database(settings)
        logger.debug("FastAPI instance configured")

        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],  # Configure appropriately for production
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        app.add_exception_handler(RequestValidationError, validation_exception_handler)

        app.include_router(create_todo_routes())
        logger.info("✅ ToDo routes registered")

        app.include_router(create_health_routes())
        logger.info("✅ Health routes registered")

        logger.info("FastAPI application created successfully")
        return app

    except Exception as e:
        logger.error(f"Failed to create FastAPI application: {e}")
        logger.exception("Application creation error details:")
        raise


# Create application instance
app = create_app()


# Run with: uvicorn cmd.api.main:app --host 0.0.0.0 --port 8080 --reload
if __name__ == "__main__":
    import os
    import sys

    import uvicorn

    settings = get_settings()

    logger.info("========== Starting Uvicorn Server ==========")
    logger.info(f"Host: {settings.api_host}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Reload: {settings.api_reload}")

    # uvicorn's reloader subprocess needs the project root on PYTHONPATH
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)
    current_pythonpath = os.environ.get("PYTHONPATH", "")
    if project_root not in current_pythonpath:
        os.environ["PYTHONPATH"] = (
            f"{project_root}:{current_pythonpath}" if current_pythonpath else project_root
        )

    if settings.api_reload:
        uvicorn.run(
            "cmd.api.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=True,
            log_level="info" if settings.debug else "warning",
        )
    else:
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            reload=False,
            log_level="info" if settings.debug else "warning",
        )
