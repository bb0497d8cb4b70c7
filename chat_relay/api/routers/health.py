from fastapi import APIRouter, Depends, Request, status
from typing import Dict, Any
from datetime import datetime, timezone

from chat_relay.config import get_settings
from chat_relay.utils.logger import LoggerAdapter
from chat_relay.api.dependencies import get_request_logger_dependency

settings = get_settings()
router = APIRouter(prefix="/health")


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    response_description="Service health status"
)
async def get_health() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        Dict: Basic service health information
    """
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get(
    "/detailed",
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    response_description="Detailed service health status"
)
async def get_detailed_health(
    request: Request,
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> Dict[str, Any]:
    """
    Detailed health check endpoint including model and connection status.

    Args:
        request: Incoming request, used to reach application state
        logger: Request logger

    Returns:
        Dict: Detailed service health information
    """
    logger.info("Performing detailed health check")

    dependencies = {
        "intent_classifier": check_intent_classifier(request),
        "sentiment_lexicon": check_component(request, "sentiment_scorer"),
        "connections": check_connections(request),
    }

    overall_status = "ok"
    if any(dep["status"] != "ok" for dep in dependencies.values()):
        overall_status = "error"

    return {
        "status": overall_status,
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "dependencies": dependencies
    }


def check_intent_classifier(request: Request) -> Dict[str, Any]:
    """
    Check that the intent classifier has been trained.

    Returns:
        Dict: Classifier health status
    """
    classifier = getattr(request.app.state, "intent_classifier", None)
    if classifier is None or not classifier.is_trained:
        return {"status": "error", "message": "Intent classifier not trained"}

    return {
        "status": "ok",
        "labels": classifier.labels,
        "message": "Intent classifier trained"
    }


def check_component(request: Request, name: str) -> Dict[str, Any]:
    if getattr(request.app.state, name, None) is None:
        return {"status": "error", "message": f"{name} not initialized"}
    return {"status": "ok", "message": f"{name} initialized"}


def check_connections(request: Request) -> Dict[str, Any]:
    """
    Report the number of live websocket connections.

    Returns:
        Dict: Connection manager status
    """
    manager = getattr(request.app.state, "connection_manager", None)
    if manager is None:
        return {"status": "error", "message": "Connection manager not initialized"}

    return {
        "status": "ok",
        "active_connections": manager.get_connection_count(),
        "rooms": len(manager.rooms)
    }
