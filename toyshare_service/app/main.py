from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware
from common.mongo.client import close_client, get_client

from .api.health import router as health_router
from .api.v1 import api_router
from .exceptions import ToyShareError


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
    # MongoDB 에 연결할 수 없으면 여기서 기동이 실패한다.
    get_client()
    yield
    close_client()


async def handle_toyshare_error(request: Request, exc: ToyShareError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("unhandled domain error: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app() -> FastAPI:
    setup_logger()
    app = FastAPI(
        title="ToyShare Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    # 공통 Request/Span ID 로그 미들웨어
    app.add_middleware(RequestTraceMiddleware)
    app.add_exception_handler(ToyShareError, handle_toyshare_error)  # type: ignore[arg-type]

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


def main() -> None:
    import uvicorn

    port = int(os.getenv("TOYSHARE_PORT", "8000"))
    uvicorn.run(
        "toyshare_service.app.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
