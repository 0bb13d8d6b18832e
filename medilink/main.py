from contextlib import asynccontextmanager
import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables as early as possible
load_dotenv()

from .application.services.push_service import PushService
from .core.config import settings
from .core.logging_config import configure_logging
from .exceptions import GatewayError, gateway_exception_handler, http_exception_handler
from .infrastructure.backend.aiohttp_client import AiohttpBackendClient
from .infrastructure.push.memory_subscription_repo import InMemorySubscriptionRepository
from .infrastructure.push.webpush_sender import WebPushSender
from .middleware import ErrorHandlingMiddleware, LoggingMiddleware, SecurityMiddleware
from .routers import appointments_router, pwa_router, registration_router, schedule_router
from .schemas.common import HealthResponse

configure_logging()
logger = logging.getLogger(__name__)


def build_push_service() -> PushService:
    return PushService(
        repo=InMemorySubscriptionRepository(),
        sender=WebPushSender(),
        vapid_public_key=settings.VAPID_PUBLIC_KEY,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME}...")
    app.state.push_service = build_push_service()
    try:
        app.state.backend = AiohttpBackendClient()
        logger.info(f"Backend API: {app.state.backend.base_url}")
    except ValueError as e:
        # Keep serving local-only routes; backend routes answer 503
        app.state.backend = None
        logger.error(str(e))
    yield
    logger.info(f"Shutting down {settings.APP_NAME}")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DOCS_ENABLED else None,
    redoc_url="/redoc" if settings.DOCS_ENABLED else None,
    lifespan=lifespan,
)

app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(SecurityMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=False,
    allow_methods=settings.allowed_methods_list,
    allow_headers=settings.allowed_headers_list,
)

app.add_exception_handler(GatewayError, gateway_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)

app.include_router(schedule_router.router)
app.include_router(appointments_router.router)
app.include_router(registration_router.router)
app.include_router(pwa_router.router)


@app.get("/health", response_model=HealthResponse)
async def health(request: Request):
    backend = getattr(request.app.state, "backend", None)
    reachable = await backend.health() if backend is not None else False
    return HealthResponse(
        status="healthy" if reachable else "degraded",
        backend_reachable=reachable,
        version=settings.APP_VERSION,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("medilink.main:app", host=settings.HOST, port=settings.PORT)
