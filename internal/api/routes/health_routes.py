"""
Health Check API Routes.
"""

from fastapi import APIRouter, Request

from internal.api.schemas import HealthResponse
from internal.api.schemas.common_schemas import StandardResponse
from internal.api.utils import success_response


def create_health_routes() -> APIRouter:
    """
    Factory function to create health routes.

    Returns:
        APIRouter: Configured router with health endpoints
    """
    router = APIRouter(tags=["Health"])

    @router.get(
        "/",
        response_model=StandardResponse,
        summary="Root Endpoint",
        description="Get basic API information",
        operation_id="get_root",
    )
    async def root(request: Request):
        """
        Root endpoint.

        Returns service name, version and current status.
        """
        settings = request.app.state.settings
        return success_response(
            message="API service is running",
            data={
                "service": settings.app_name,
                "version": settings.app_version,
                "status": "running",
            },
        )

    @router.get(
        "/health",
        response_model=StandardResponse,
        summary="Health Check",
        description="Check service and database health",
        operation_id="health_check",
        responses={
            200: {
                "description": "Health status",
                "content": {
                    "application/json": {
                        "examples": {
                            "healthy": {
                                "summary": "Service operational",
                                "value": {
                                    "error_code": 0,
                                    "message": "Service is healthy",
                                    "data": {
                                        "status": "healthy",
                                        "service": "ToDo API",
                                        "version": "1.0.0",
                                        "database": "connected",
                                    },
                                },
                            },
                            "unhealthy": {
                                "summary": "Database unreachable",
                                "value": {
                                    "error_code": 0,
                                    "message": "Service is unhealthy",
                                    "data": {
                                        "status": "unhealthy",
                                        "service": "ToDo API",
                                        "version": "1.0.0",
                                        "database": "disconnected",
                                    },
                                },
                            },
                        }
                    }
                },
            }
        },
    )
    async def health_check(request: Request):
        """
        Health check endpoint.

        **Returns:**
        - Overall status (healthy / unhealthy)
        - Service name and version
        - Database connectivity
        """
        settings = request.app.state.settings
        database = getattr(request.app.state, "database", None)
        db_healthy = database is not None and await database.health_check()

        health_data = HealthResponse(
            status="healthy" if db_healthy else "unhealthy",
            service=settings.app_name,
            version=settings.app_version,
            database="connected" if db_healthy else "disconnected",
        )

        return success_response(
            message="Service is healthy" if db_healthy else "Service is unhealthy",
            data=health_data.model_dump(),
        )

    return router
