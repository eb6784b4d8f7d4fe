"""认证模块 - 依赖注入与访问守卫

访问守卫只校验 access token 的签名与有效期并加载用户，
不查询 refresh token：登出后已签发的 access token 在过期前仍然可用。
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from vidtube.core.context import bind_user
from vidtube.core.error_codes import ErrorCode
from vidtube.core.exceptions import UnauthorizedError
from vidtube.core.security import ACCESS_TOKEN_COOKIE, TokenType
from vidtube.dependencies import MediaStorageDep, PasswordHasherDep, TokenServiceDep
from vidtube.modules.user.dependencies import UserRepositoryDep
from vidtube.modules.user.models import User

from .service import AuthService

access_cookie_scheme = APIKeyCookie(name=ACCESS_TOKEN_COOKIE, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(
    user_repo: UserRepositoryDep,
    hasher: PasswordHasherDep,
    tokens: TokenServiceDep,
    storage: MediaStorageDep,
) -> AuthService:
    return AuthService(user_repo, hasher, tokens, storage)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_access_token(
    cookie_token: Annotated[str | None, Depends(access_cookie_scheme)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """从 cookie 或 Authorization: Bearer 头中提取 access token（cookie 优先）"""
    if cookie_token:
        return cookie_token
    if credentials and credentials.credentials:
        return credentials.credentials
    return None


AccessTokenDep = Annotated[str | None, Depends(get_access_token)]


async def get_current_user(
    token: AccessTokenDep,
    tokens: TokenServiceDep,
    user_repo: UserRepositoryDep,
) -> User:
    """校验 access token 并加载当前用户，失败时拒绝请求"""
    if not token:
        raise UnauthorizedError("Unauthorized request")

    claims = tokens.verify(token, TokenType.ACCESS)
    user = await user_repo.get_by_id(claims.sub)
    if not user:
        raise UnauthorizedError("Invalid access token", code=ErrorCode.TOKEN_INVALID)

    bind_user(user.id)
    return user


async def get_optional_user(
    token: AccessTokenDep,
    tokens: TokenServiceDep,
    user_repo: UserRepositoryDep,
) -> User | None:
    """可选认证：无 token 或 token 无效时视为匿名访问"""
    if not token:
        return None
    try:
        claims = tokens.verify(token, TokenType.ACCESS)
    except UnauthorizedError:
        return None

    user = await user_repo.get_by_id(claims.sub)
    if user:
        bind_user(user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
