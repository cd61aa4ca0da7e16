"""FastAPI application entrypoint with knowledge base client lifecycle management."""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kbrelay.config import Settings, get_settings
from kbrelay.exceptions import InvalidInputError, RelayError
from kbrelay.knowledge_base import BedrockKnowledgeBase, KnowledgeBase
from kbrelay.logging_config import setup_logging
from kbrelay.relay import ChatRelay
from kbrelay.routes import chat_router, health_router

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def _format_stack(exc: BaseException) -> str:
    cause = exc.__cause__ or exc
    return "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))


def create_app(
    settings: Optional[Settings] = None,
    knowledge_base: Optional[KnowledgeBase] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        kb = knowledge_base if knowledge_base is not None else BedrockKnowledgeBase(settings)
        app.state.relay = ChatRelay(kb)
        logger.info(f"Server running on port {settings.port}")
        yield
        app.state.relay.close()

    app = FastAPI(title="Knowledge Base Chat Relay", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        body = {"error": exc.message}
        if exc.status_code >= 500 and settings.is_development:
            body["stack"] = _format_stack(exc)
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # bodies that are not a JSON object carry no query
        if request.url.path == "/api/chat":
            return await relay_error_handler(request, InvalidInputError())
        return await request_validation_exception_handler(request, exc)

    app.include_router(health_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")

    return app


def run():
    import uvicorn

    settings = get_settings()
    uvicorn.run("kbrelay.main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
