"""请求上下文

每个请求一份 RequestContext，存放在 contextvar 中，
供日志与守卫读取当前请求 ID、访问者与 token 来源。
"""

from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from typing import Literal
from uuid import UUID

TokenSource = Literal["cookie", "bearer"]


@dataclass(frozen=True, slots=True)
class RequestContext:
    request_id: str = "-"
    client_ip: str = "unknown"
    user_agent: str | None = None
    # 中间件解析出的访问者（仅供日志使用，鉴权以守卫为准）
    user_id: UUID | None = None
    token_source: TokenSource | None = None


_context: ContextVar[RequestContext] = ContextVar(
    "vidtube_request_context", default=RequestContext()
)


def current_context() -> RequestContext:
    return _context.get()


def bind_context(ctx: RequestContext) -> Token[RequestContext]:
    """绑定当前请求上下文，返回值用于请求结束时 reset"""
    return _context.set(ctx)


def reset_context(token: Token[RequestContext]) -> None:
    _context.reset(token)


def bind_user(user_id: UUID) -> None:
    """守卫确认身份后覆盖上下文中的访问者"""
    _context.set(replace(_context.get(), user_id=user_id))
