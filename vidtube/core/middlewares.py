"""中间件"""

import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from vidtube.config import get_settings
from vidtube.core.context import (
    RequestContext,
    TokenSource,
    bind_context,
    current_context,
    reset_context,
)
from vidtube.core.exceptions import UnauthorizedError
from vidtube.core.security import ACCESS_TOKEN_COOKIE, TokenType, get_token_service

settings = get_settings()


def extract_access_token(request: Request) -> tuple[str | None, TokenSource | None]:
    """cookie 优先，其次 Authorization: Bearer"""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token, "cookie"
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials, "bearer"
    return None, None


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    为每个请求建立 RequestContext

    这里解析 access token 只是为了让日志带上访问者，
    token 无效时静默视为匿名，拒绝请求由访问守卫负责。
    """

    async def dispatch(self, request: Request, call_next):
        token, source = extract_access_token(request)
        user_id = None
        if token:
            try:
                user_id = get_token_service().verify(token, TokenType.ACCESS).sub
            except UnauthorizedError:
                source = None

        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID") or uuid4().hex[:12],
            client_ip=client_ip(request),
            user_agent=request.headers.get("User-Agent"),
            user_id=user_id,
            token_source=source if user_id else None,
        )
        reset_token = bind_context(ctx)
        try:
            response = await call_next(request)
        finally:
            reset_context(reset_token)
        response.headers["X-Request-ID"] = ctx.request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """访问日志：请求行、状态码与耗时"""

    async def dispatch(self, request: Request, call_next):
        ctx = current_context()
        started = time.perf_counter()
        with logger.contextualize(
            request_id=ctx.request_id, user_id=str(ctx.user_id or "-")
        ):
            logger.info(
                "--> {} {} ip={} auth={}",
                request.method,
                request.url.path,
                ctx.client_ip,
                ctx.token_source or "anonymous",
            )
            response = await call_next(request)
            elapsed = time.perf_counter() - started
            logger.info("<-- {} {:.1f}ms", response.status_code, elapsed * 1000)

        response.headers["X-Process-Time"] = f"{elapsed:.3f}"
        return response


def setup_middlewares(app: FastAPI) -> None:
    """注册中间件（后注册的先执行）"""
    if settings.cors_origins:
        # cookie 鉴权需要 allow_credentials
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestContextMiddleware)
