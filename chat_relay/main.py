from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import uuid
from contextlib import asynccontextmanager

from chat_relay.config import get_settings
from chat_relay.utils.logger import configure_logging, get_logger
from chat_relay.utils.exceptions import AppException
from chat_relay.api.routers import health
from chat_relay.api.websocket import server as websocket_server
from chat_relay.api.websocket.connection_manager import ConnectionManager
from chat_relay.domain.services.assistant_responder import AssistantResponder
from chat_relay.domain.services.message_router import MessageRouter
from chat_relay.domain.services.smart_reply_service import SmartReplyService
from chat_relay.domain.services.typing_relay import TypingRelay
from chat_relay.infrastructure.ai.intent.intent_classifier import build_intent_classifier
from chat_relay.infrastructure.ai.sentiment.sentiment_scorer import SentimentScorer


# Configure logging
configure_logging()
logger = get_logger(__name__)
settings = get_settings()


def build_services(app: FastAPI) -> None:
    """
    Build the read-only models and routing services and store them on app state.

    Raises:
        ModelInitializationException: If a model cannot be built
    """
    intent_classifier = build_intent_classifier(settings.ASSISTANT_MODEL_PATH)
    sentiment_scorer = SentimentScorer(emoticons=settings.SENTIMENT_EMOTICONS)
    smart_replies = SmartReplyService()

    app.state.intent_classifier = intent_classifier
    app.state.sentiment_scorer = sentiment_scorer
    app.state.smart_replies = smart_replies
    app.state.message_router = MessageRouter(
        assistant=AssistantResponder(intent_classifier),
        sentiment_scorer=sentiment_scorer,
        smart_replies=smart_replies
    )
    app.state.typing_relay = TypingRelay()
    app.state.connection_manager = ConnectionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events.

    Models are built before the server accepts any connection; a failure here
    aborts startup.

    Args:
        app: FastAPI application instance
    """
    logger.info(f"Starting {settings.SERVICE_NAME} service")

    try:
        build_services(app)
    except AppException as e:
        logger.critical(f"Startup failed: {e.message}", extra={"details": e.details})
        raise

    yield

    logger.info(f"Shutting down {settings.SERVICE_NAME} service")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=f"{settings.SERVICE_NAME.capitalize()} API",
        description="Real-time chat relay with an automated assistant",
        version=settings.VERSION,
        lifespan=lifespan,
        debug=settings.DEBUG
    )

    configure_middleware(app)
    register_routers(app)
    configure_exception_handlers(app)

    return app


def configure_middleware(app: FastAPI) -> None:
    """
    Configure middleware for the application.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Correlation ID middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next):
        correlation_id = request.headers.get(settings.CORRELATION_ID_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[settings.CORRELATION_ID_HEADER] = correlation_id
        return response


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the application.

    Args:
        app: FastAPI application instance
    """
    app.include_router(health.router, tags=["Health"])
    app.include_router(
        websocket_server.router,
        prefix=settings.API_PREFIX,
        tags=["WebSocket"]
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configure global exception handlers.

    Args:
        app: FastAPI application instance
    """
    @app.exception_handler(AppException)
    async def handle_app_exception(request: Request, exc: AppException):
        logger.error(
            f"Application exception: {exc.message}",
            extra={
                "status_code": exc.status_code,
                "details": exc.details,
                "path": request.url.path
            }
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "details": exc.details,
                "status_code": exc.status_code
            }
        )

    @app.exception_handler(Exception)
    async def handle_unhandled_exception(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled exception: {str(exc)}",
            extra={"path": request.url.path}
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "message": str(exc) if settings.DEBUG else "An unexpected error occurred",
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
            }
        )


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "chat_relay.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
