"""
SwapStreet - FastAPI Application

프로필, 리스팅, 위시리스트, 채팅 REST API와 실시간 채팅 WebSocket,
리스팅 검색을 제공합니다.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from swapstreet.api import (
    chat_router,
    health_router,
    listings_router,
    profile_router,
    search_router,
    websocket_router,
    wishlist_router,
)
from swapstreet.core.config import settings
from swapstreet.core.logging import get_logger, setup_logging
from swapstreet.database import init_databases, close_databases
from swapstreet.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    create_http_exception_handler,
    create_validation_exception_handler
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    # Startup
    setup_logging()
    logger.info(f"{settings.app_name} starting up...")
    await init_databases()

    yield

    # Shutdown
    logger.info(f"{settings.app_name} shutting down...")
    await close_databases()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    lifespan=lifespan
)

# 미들웨어 (마지막에 추가한 것이 가장 바깥쪽)
app.add_middleware(ErrorHandlerMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 예외 핸들러
app.add_exception_handler(StarletteHTTPException, create_http_exception_handler())
app.add_exception_handler(RequestValidationError, create_validation_exception_handler())

# Include routers
app.include_router(health_router)
app.include_router(profile_router)
app.include_router(listings_router)
app.include_router(wishlist_router)
app.include_router(chat_router)
app.include_router(search_router)
app.include_router(websocket_router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    return {
        "service": settings.app_name,
        "version": settings.version,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "swapstreet.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
